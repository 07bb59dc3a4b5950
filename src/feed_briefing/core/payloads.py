"""Request payloads sent to the generative model.

Both builders are pure: they take point-in-time copies of application state
and return plain JSON-ready dictionaries. Malformed input fails with
``ValidationError`` so that nothing reaches the network.
"""

import json
from typing import Any, Iterable, Sequence

from feed_briefing.core.entities import (
    ChatMessage,
    ContentItem,
    DeliveryChannels,
    ReportPreferences,
    SourceType,
    UserProfile,
)
from feed_briefing.core.errors import ValidationError


def build_report_payload(
    profile: UserProfile,
    preferences: ReportPreferences,
    channels: DeliveryChannels,
    items: Sequence[ContentItem],
) -> dict[str, Any]:
    """Assemble the REPORT_GENERATION payload."""
    _check_type(profile, UserProfile, "user_profile")
    _check_type(preferences, ReportPreferences, "report_preferences")
    _check_type(channels, DeliveryChannels, "delivery_channels")
    _check_items(items)

    return {
        "user_profile": profile.to_dict(),
        "report_preferences": preferences.to_dict(),
        "delivery_channels": channels.to_dict(),
        "content_items": [item.to_dict() for item in items],
        # No cross-report memory yet
        "history_context": {"recent_reports": []},
    }


def build_chat_payload(
    query: str,
    history: Sequence[ChatMessage],
    profile: UserProfile,
    items: Sequence[ContentItem],
) -> dict[str, Any]:
    """Assemble the CHAT_RAG payload.

    Every available item is passed as a retrieved snippet; there is no
    ranking or filtering step.
    """
    if not isinstance(query, str) or not query.strip():
        raise ValidationError("user_message cannot be empty")
    _check_type(profile, UserProfile, "user_profile")
    for index, message in enumerate(history):
        _check_type(message, ChatMessage, f"conversation_turns[{index}]")
    _check_items(items)

    return {
        "user_profile": profile.to_dict(),
        "chat_context": {
            "conversation_turns": [
                {"role": message.role.value, "content": message.content}
                for message in history
            ],
            "referenced_reports": [],
            "retrieved_snippets": [_snippet(item) for item in items],
        },
        "user_message": query,
    }


def serialize_payload(payload: dict[str, Any]) -> str:
    """Serialize a payload into the request ``contents`` string."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def _snippet(item: ContentItem) -> dict[str, Any]:
    return {
        "source_type": SourceType.CONTENT_ITEM.value,
        "source_id": item.id,
        "snippet": f"{item.title}: {item.summary}",
        "source_url": item.source_url,
    }


def _check_type(value: Any, expected: type, field_name: str) -> None:
    if not isinstance(value, expected):
        raise ValidationError(
            f"{field_name} must be a {expected.__name__} (got {type(value).__name__})"
        )


def _check_items(items: Iterable[ContentItem]) -> None:
    seen: set[str] = set()
    for index, item in enumerate(items):
        _check_type(item, ContentItem, f"content_items[{index}]")
        if item.id in seen:
            raise ValidationError(f"Duplicate content item id: {item.id!r}")
        seen.add(item.id)
