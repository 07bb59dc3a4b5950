"""Validation and normalization of structured model output.

The model is asked to follow a schema and to cite only the items it was
given, but neither is guaranteed. Everything is checked here: structure,
enumerations, and that every cited id belongs to the originating request.
Errors carry the dotted field path and the offending value.
"""

import json
import logging
import re
from typing import Any, Iterable, Optional, Type, TypeVar

from feed_briefing.core.entities import (
    CHAT_MODE,
    REPORT_MODE,
    ChannelPreviews,
    ChatResponse,
    ContentItem,
    EmailPreview,
    EmbeddingSummary,
    GeneratedReport,
    ImportantItem,
    ProfileSuggestion,
    ReportMetadata,
    ReportReference,
    ReportSection,
    ReportSource,
    Sentiment,
    SmsPreview,
    SourceReference,
    SourceType,
    TimeWindow,
    VideoReelPreview,
)
from feed_briefing.core.errors import SchemaViolationError, UngroundedSourceError

logger = logging.getLogger(__name__)

E = TypeVar("E", Sentiment, SourceType)

_CODE_FENCE = re.compile(r"```(?:json)?\s*\n(.*?)\n\s*```", re.DOTALL)


def extract_json(text: str) -> str:
    """Return the JSON document, unwrapping a markdown code block if present."""
    match = _CODE_FENCE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_report(raw_text: str, items: Iterable[ContentItem]) -> GeneratedReport:
    """Parse a REPORT_GENERATION response and enforce source fidelity."""
    known_ids = {item.id for item in items}
    data = _load_object(raw_text)
    _check_mode(data, REPORT_MODE)

    meta = _obj(data, "report_metadata", "")
    window = _obj(meta, "time_window", "report_metadata")
    metadata = ReportMetadata(
        title=_text(meta, "title", "report_metadata"),
        subtitle=_text(meta, "subtitle", "report_metadata"),
        report_id_hint=_text(meta, "report_id_hint", "report_metadata"),
        time_window=TimeWindow(
            start=_text(window, "start", "report_metadata.time_window"),
            end=_text(window, "end", "report_metadata.time_window"),
        ),
    )

    emb = _obj(data, "embedding", "")
    embedding = EmbeddingSummary(
        summary=_text(emb, "embedding_summary", "embedding"),
        tags=_text_list(emb, "embedding_tags", "embedding", default=[]),
    )

    sections = [
        _parse_section(raw, path, known_ids)
        for path, raw in _objects(data, "sections", "")
    ]

    sources = []
    for path, raw in _objects(data, "sources", ""):
        rss_item_id = _text(raw, "rss_item_id", path)
        _check_grounded(rss_item_id, known_ids, f"{path}.rss_item_id")
        sources.append(
            ReportSource(
                rss_item_id=rss_item_id,
                source_name=_text(raw, "source_name", path),
                source_url=_text(raw, "source_url", path),
                title=_text(raw, "title", path),
                published_at=_text(raw, "published_at", path),
            )
        )

    chan = _obj(data, "channels", "")
    email = _obj(chan, "email", "channels")
    sms = _obj(chan, "sms", "channels")
    video = _obj(chan, "video_reel", "channels")
    channels = ChannelPreviews(
        email=EmailPreview(
            enabled=_boolean(email, "enabled", "channels.email"),
            subject=_text(email, "subject", "channels.email"),
            body_html=_text(email, "body_html", "channels.email"),
            body_text=_text(email, "body_text", "channels.email"),
        ),
        sms=SmsPreview(
            enabled=_boolean(sms, "enabled", "channels.sms"),
            summary_text=_text(sms, "summary_text", "channels.sms"),
        ),
        video_reel=VideoReelPreview(
            enabled=_boolean(video, "enabled", "channels.video_reel"),
            script=_text(video, "script", "channels.video_reel"),
            approx_duration_sec=_number(video, "approx_duration_sec", "channels.video_reel"),
        ),
    )

    return GeneratedReport(
        metadata=metadata,
        embedding=embedding,
        sections=sections,
        sources=sources,
        channels=channels,
    )


def parse_chat_response(
    raw_text: str,
    items: Iterable[ContentItem],
    known_report_ids: Iterable[str] = (),
) -> ChatResponse:
    """Parse a CHAT_RAG response and enforce source fidelity.

    Args:
        raw_text: Text returned by the model
        items: Content items sent as retrieved snippets
        known_report_ids: Report ids the request exposed to the model

    Returns:
        Normalized chat response
    """
    known_items = {item.id for item in items}
    known_reports = set(known_report_ids)
    data = _load_object(raw_text)
    _check_mode(data, CHAT_MODE)

    reply = _text(data, "assistant_reply_markdown", "")
    if not reply.strip():
        raise SchemaViolationError("assistant_reply_markdown", reply, "reply is empty")

    reports = []
    for path, raw in _objects(data, "referenced_reports", "", default=[]):
        report_id = _text(raw, "report_id", path)
        if report_id not in known_reports:
            raise UngroundedSourceError(
                f"{path}.report_id", report_id, "cites a report that was not provided"
            )
        reports.append(
            ReportReference(
                report_id=report_id,
                title=_text(raw, "title", path),
                timestamp=_text(raw, "timestamp", path),
            )
        )

    sources = []
    for path, raw in _objects(data, "referenced_sources", "", default=[]):
        source_type = _enum(SourceType, raw, "source_type", path)
        source_id = _text(raw, "source_id", path)
        if source_type is SourceType.REPORT:
            if source_id not in known_reports:
                raise UngroundedSourceError(
                    f"{path}.source_id", source_id, "cites a report that was not provided"
                )
        else:
            _check_grounded(source_id, known_items, f"{path}.source_id")
        sources.append(
            SourceReference(
                source_type=source_type,
                source_id=source_id,
                source_name=_text(raw, "source_name", path),
                source_url=_optional_text(raw, "source_url", path),
                justification=_optional_text(raw, "justification", path) or "",
            )
        )

    sugg = _obj(data, "suggested_profile_updates", "")
    suggestion = ProfileSuggestion(
        should_update=_boolean(sugg, "should_update", "suggested_profile_updates"),
        new_primary_topics=_text_list(sugg, "new_primary_topics", "suggested_profile_updates", default=[]),
        new_secondary_topics=_text_list(sugg, "new_secondary_topics", "suggested_profile_updates", default=[]),
        notes=_optional_text(sugg, "notes", "suggested_profile_updates") or "",
    )

    return ChatResponse(
        assistant_reply_markdown=reply,
        referenced_reports=reports,
        referenced_sources=sources,
        suggested_profile_updates=suggestion,
    )


def _parse_section(raw: dict[str, Any], path: str, known_ids: set[str]) -> ReportSection:
    important_items = []
    for item_path, item in _objects(raw, "important_items", path):
        rss_item_id = _text(item, "rss_item_id", item_path)
        _check_grounded(rss_item_id, known_ids, f"{item_path}.rss_item_id")
        important_items.append(
            ImportantItem(
                rss_item_id=rss_item_id,
                headline=_text(item, "headline", item_path),
                key_point=_text(item, "key_point", item_path),
                sentiment=_enum(Sentiment, item, "sentiment", item_path),
                action_item=_optional_text(item, "action_item", item_path),
                source_name=_text(item, "source_name", item_path),
                source_url=_text(item, "source_url", item_path),
            )
        )

    return ReportSection(
        id=_text(raw, "id", path),
        title=_text(raw, "title", path),
        summary=_text(raw, "summary", path),
        body_markdown=_text(raw, "body_markdown", path),
        important_items=important_items,
    )


# --- Field readers -------------------------------------------------------

_MISSING = object()


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _load_object(raw_text: str) -> dict[str, Any]:
    try:
        data = json.loads(extract_json(raw_text))
    except json.JSONDecodeError as e:
        logger.warning("Model returned invalid JSON: %s", e)
        raise SchemaViolationError("$", raw_text, f"response is not valid JSON ({e.msg})") from e
    if not isinstance(data, dict):
        raise SchemaViolationError("$", data, "expected a JSON object")
    return data


def _check_mode(data: dict[str, Any], expected: str) -> None:
    mode = data.get("mode")
    if mode is not None and mode != expected:
        raise SchemaViolationError("mode", mode, f"expected {expected}")


def _check_grounded(item_id: str, known_ids: set[str], field: str) -> None:
    if item_id not in known_ids:
        raise UngroundedSourceError(field, item_id, "cites a content item that was not submitted")


def _obj(data: dict[str, Any], key: str, path: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        raise SchemaViolationError(_join(path, key), value, "required object is missing")
    if not isinstance(value, dict):
        raise SchemaViolationError(_join(path, key), value, "expected an object")
    return value


def _objects(
    data: dict[str, Any], key: str, path: str, default: Any = _MISSING
) -> list[tuple[str, dict[str, Any]]]:
    """Return ``(path, element)`` pairs for a list of objects."""
    field = _join(path, key)
    value = data.get(key)
    if value is None:
        if default is _MISSING:
            raise SchemaViolationError(field, value, "required list is missing")
        value = default
    if not isinstance(value, list):
        raise SchemaViolationError(field, value, "expected a list")

    result = []
    for index, element in enumerate(value):
        element_path = f"{field}[{index}]"
        if not isinstance(element, dict):
            raise SchemaViolationError(element_path, element, "expected an object")
        result.append((element_path, element))
    return result


def _text(data: dict[str, Any], key: str, path: str) -> str:
    value = data.get(key)
    if value is None:
        raise SchemaViolationError(_join(path, key), value, "required field is missing")
    if not isinstance(value, str):
        raise SchemaViolationError(_join(path, key), value, "expected a string")
    return value


def _optional_text(data: dict[str, Any], key: str, path: str) -> Optional[str]:
    """Read a nullable string; absent, null and blank all become ``None``."""
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise SchemaViolationError(_join(path, key), value, "expected a string or null")
    if not value.strip() or value.strip().lower() == "null":
        return None
    return value


def _text_list(data: dict[str, Any], key: str, path: str, default: Any = _MISSING) -> list[str]:
    value = data.get(key)
    if value is None:
        if default is _MISSING:
            raise SchemaViolationError(_join(path, key), value, "required list is missing")
        return list(default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SchemaViolationError(_join(path, key), value, "expected a list of strings")
    return list(value)


def _boolean(data: dict[str, Any], key: str, path: str) -> bool:
    value = data.get(key)
    if not isinstance(value, bool):
        raise SchemaViolationError(_join(path, key), value, "expected a boolean")
    return value


def _number(data: dict[str, Any], key: str, path: str) -> float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise SchemaViolationError(_join(path, key), value, "expected a non-negative number")
    return float(value)


def _enum(enum_cls: Type[E], data: dict[str, Any], key: str, path: str) -> E:
    value = data.get(key)
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        allowed = ", ".join(member.value for member in enum_cls)
        raise SchemaViolationError(_join(path, key), value, f"expected one of: {allowed}") from None
