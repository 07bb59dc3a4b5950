"""Core domain entities."""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from feed_briefing.core.errors import ValidationError

REPORT_MODE = "REPORT_GENERATION"
CHAT_MODE = "CHAT_RAG"

E = TypeVar("E", bound=Enum)


class Frequency(str, Enum):
    """How often reports are produced."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class StructureStyle(str, Enum):
    """Layout style requested for a report."""

    BULLET_SUMMARY = "bullet_summary"
    NARRATIVE = "narrative"
    EXECUTIVE_BRIEF = "executive_brief"
    DEEP_DIVE = "deep_dive"


class Tone(str, Enum):
    """Writing tone requested for a report."""

    CONCISE = "concise"
    ANALYTIC = "analytic"
    OPINIONATED = "opinionated"
    NEUTRAL = "neutral"


class Sentiment(str, Enum):
    """Sentiment classification of an important item."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    MIXED = "mixed"
    NONE = "none"


class EmailFormat(str, Enum):
    """Body format for the email channel."""

    HTML = "html"
    PLAINTEXT = "plaintext"


class MessageRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class SourceType(str, Enum):
    """Kind of source cited by a chat reply."""

    REPORT = "report"
    CONTENT_ITEM = "content_item"

    @classmethod
    def _missing_(cls, value: object) -> Optional["SourceType"]:
        # Older prompts call content items "rss_item"
        if value == "rss_item":
            return cls.CONTENT_ITEM
        return None


def coerce_enum(enum_cls: Type[E], value: Any, field_name: str) -> E:
    """Convert a raw value into a member of ``enum_cls`` or fail validation."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"{field_name} must be one of: {allowed} (got {value!r})"
        ) from None


def _require_text(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} cannot be empty")
    return value


def _text_list(value: Any, field_name: str) -> list[str]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValidationError(f"{field_name} must be a list of strings")
    if not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field_name} must be a list of strings")
    return list(value)


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean (got {value!r})")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{field_name} must be a positive integer (got {value!r})")
    return value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any, field_name: str) -> datetime:
    """Parse an ISO-8601 timestamp, assuming UTC when no offset is given.

    A bare date (as YAML loads ``2025-01-10``) means midnight UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"{field_name} is not an ISO-8601 timestamp: {value!r}") from None
    else:
        raise ValidationError(f"{field_name} is not an ISO-8601 timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _from_mapping(cls: Type[Any], data: Any) -> Any:
    if not isinstance(data, dict):
        raise ValidationError(f"{cls.__name__} must be a mapping (got {type(data).__name__})")
    try:
        return cls(**data)
    except TypeError as e:
        raise ValidationError(f"Invalid {cls.__name__} fields: {e}") from None


# --- Application state ---------------------------------------------------


@dataclass
class UserProfile:
    """Who the reports are for and what they care about."""

    name: str
    primary_topics: list[str] = field(default_factory=list)
    secondary_topics: list[str] = field(default_factory=list)
    time_zone: str = "UTC"
    language: str = "en-US"

    def __post_init__(self) -> None:
        _require_text(self.name, "name")
        self.primary_topics = _text_list(self.primary_topics, "primary_topics")
        self.secondary_topics = _text_list(self.secondary_topics, "secondary_topics")
        if len(set(self.primary_topics)) != len(self.primary_topics):
            raise ValidationError("primary_topics must not contain duplicates")
        _require_text(self.time_zone, "time_zone")
        _require_text(self.language, "language")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserProfile":
        return _from_mapping(cls, data)


@dataclass
class ReportPreferences:
    """How reports should be shaped."""

    frequency: Frequency = Frequency.WEEKLY
    max_items: int = 10
    structure_style: StructureStyle = StructureStyle.EXECUTIVE_BRIEF
    sections: list[str] = field(default_factory=list)
    tone: Tone = Tone.ANALYTIC
    include_sentiment: bool = True
    include_action_items: bool = True

    def __post_init__(self) -> None:
        self.frequency = coerce_enum(Frequency, self.frequency, "frequency")
        self.structure_style = coerce_enum(StructureStyle, self.structure_style, "structure_style")
        self.tone = coerce_enum(Tone, self.tone, "tone")
        _require_positive_int(self.max_items, "max_items")
        self.sections = _text_list(self.sections, "sections")
        _require_bool(self.include_sentiment, "include_sentiment")
        _require_bool(self.include_action_items, "include_action_items")

    def to_dict(self) -> dict[str, Any]:
        return {
            "frequency": self.frequency.value,
            "max_items": self.max_items,
            "structure_style": self.structure_style.value,
            "sections": list(self.sections),
            "tone": self.tone.value,
            "include_sentiment": self.include_sentiment,
            "include_action_items": self.include_action_items,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReportPreferences":
        return _from_mapping(cls, data)


@dataclass
class EmailChannel:
    enabled: bool = False
    format: EmailFormat = EmailFormat.HTML

    def __post_init__(self) -> None:
        _require_bool(self.enabled, "email.enabled")
        self.format = coerce_enum(EmailFormat, self.format, "email.format")


@dataclass
class SmsChannel:
    enabled: bool = False
    max_chars: int = 160

    def __post_init__(self) -> None:
        _require_bool(self.enabled, "sms.enabled")
        _require_positive_int(self.max_chars, "sms.max_chars")


@dataclass
class VideoReelChannel:
    enabled: bool = False
    max_duration_sec: int = 60

    def __post_init__(self) -> None:
        _require_bool(self.enabled, "video_reel.enabled")
        _require_positive_int(self.max_duration_sec, "video_reel.max_duration_sec")


@dataclass
class DeliveryChannels:
    """Per-channel output configuration; each channel toggles independently."""

    email: EmailChannel = field(default_factory=EmailChannel)
    sms: SmsChannel = field(default_factory=SmsChannel)
    video_reel: VideoReelChannel = field(default_factory=VideoReelChannel)

    def __post_init__(self) -> None:
        for name, expected in (("email", EmailChannel), ("sms", SmsChannel), ("video_reel", VideoReelChannel)):
            value = getattr(self, name)
            if not isinstance(value, expected):
                raise ValidationError(
                    f"{name} must be a {expected.__name__} (got {type(value).__name__})"
                )

    def enabled_channels(self) -> list[str]:
        """Names of the channels that are switched on."""
        return [
            name
            for name, channel in (("email", self.email), ("sms", self.sms), ("video_reel", self.video_reel))
            if channel.enabled
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "email": {"enabled": self.email.enabled, "format": self.email.format.value},
            "sms": asdict(self.sms),
            "video_reel": asdict(self.video_reel),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeliveryChannels":
        if not isinstance(data, dict):
            raise ValidationError(f"DeliveryChannels must be a mapping (got {type(data).__name__})")
        return cls(
            email=_from_mapping(EmailChannel, data.get("email", {})),
            sms=_from_mapping(SmsChannel, data.get("sms", {})),
            video_reel=_from_mapping(VideoReelChannel, data.get("video_reel", {})),
        )


@dataclass(frozen=True)
class ContentItem:
    """A single syndicated entry as delivered by the feed collector."""

    id: str
    title: str
    summary: str
    published_at: datetime
    source_name: str
    source_url: str
    content: Optional[str] = None
    category_tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValidationError("Item id cannot be empty")
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValidationError("Title cannot be empty")
        if not isinstance(self.source_url, str) or not self.source_url.strip():
            raise ValidationError("URL cannot be empty")
        object.__setattr__(self, "published_at", parse_timestamp(self.published_at, "published_at"))
        object.__setattr__(self, "category_tags", tuple(_text_list(self.category_tags, "category_tags")))
        if not isinstance(self.summary, str):
            raise ValidationError("summary must be a string")
        if self.content is not None:
            if not isinstance(self.content, str):
                raise ValidationError("content must be a string or null")
            if not self.content.strip():
                object.__setattr__(self, "content", None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "content": self.content,
            "published_at": self.published_at.isoformat(),
            "source_name": self.source_name,
            "source_url": self.source_url,
            "category_tags": list(self.category_tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContentItem":
        missing = [key for key in ("id", "title", "published_at", "source_url") if key not in data]
        if missing:
            raise ValidationError(f"Content item is missing fields: {', '.join(missing)}")
        return cls(
            id=str(data["id"]),
            title=data["title"],
            summary=data.get("summary", ""),
            published_at=data["published_at"],
            source_name=data.get("source_name", ""),
            source_url=data["source_url"],
            content=data.get("content"),
            category_tags=tuple(data.get("category_tags") or ()),
        )


# --- Report generation output --------------------------------------------


@dataclass
class ImportantItem:
    rss_item_id: str
    headline: str
    key_point: str
    sentiment: Sentiment
    source_name: str
    source_url: str
    action_item: Optional[str] = None


@dataclass
class ReportSection:
    id: str
    title: str
    summary: str
    body_markdown: str
    important_items: list[ImportantItem] = field(default_factory=list)


@dataclass
class ReportSource:
    """Provenance record linking a report back to a content item."""

    rss_item_id: str
    source_name: str
    source_url: str
    title: str
    published_at: str


@dataclass
class TimeWindow:
    start: str
    end: str


@dataclass
class ReportMetadata:
    title: str
    subtitle: str
    report_id_hint: str
    time_window: TimeWindow


@dataclass
class EmbeddingSummary:
    """Short abstract and tags kept for later similarity lookups."""

    summary: str
    tags: list[str] = field(default_factory=list)


@dataclass
class EmailPreview:
    enabled: bool
    subject: str
    body_html: str
    body_text: str


@dataclass
class SmsPreview:
    enabled: bool
    summary_text: str


@dataclass
class VideoReelPreview:
    enabled: bool
    script: str
    approx_duration_sec: float


@dataclass
class ChannelPreviews:
    email: EmailPreview
    sms: SmsPreview
    video_reel: VideoReelPreview


@dataclass
class GeneratedReport:
    """A structured digest produced by one successful generation request."""

    metadata: ReportMetadata
    embedding: EmbeddingSummary
    sections: list[ReportSection]
    sources: list[ReportSource]
    channels: ChannelPreviews
    mode: str = REPORT_MODE

    @property
    def report_id(self) -> str:
        return self.metadata.report_id_hint

    def cited_item_ids(self) -> set[str]:
        """All content item ids referenced by sections and sources."""
        ids = {source.rss_item_id for source in self.sources}
        for section in self.sections:
            ids.update(item.rss_item_id for item in section.important_items)
        return ids

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the same field names the model returns."""
        return {
            "mode": self.mode,
            "report_metadata": asdict(self.metadata),
            "embedding": {
                "embedding_summary": self.embedding.summary,
                "embedding_tags": list(self.embedding.tags),
            },
            "sections": [
                {
                    **asdict(section),
                    "important_items": [
                        {**asdict(item), "sentiment": item.sentiment.value}
                        for item in section.important_items
                    ],
                }
                for section in self.sections
            ],
            "sources": [asdict(source) for source in self.sources],
            "channels": asdict(self.channels),
        }


# --- Chat ----------------------------------------------------------------


@dataclass
class ReportReference:
    report_id: str
    title: str
    timestamp: str


@dataclass
class SourceReference:
    """Citation attached to a chat reply."""

    source_type: SourceType
    source_id: str
    source_name: str
    source_url: Optional[str] = None
    justification: str = ""


@dataclass
class ProfileSuggestion:
    """Topic changes proposed by the assistant; never applied automatically."""

    should_update: bool = False
    new_primary_topics: list[str] = field(default_factory=list)
    new_secondary_topics: list[str] = field(default_factory=list)
    notes: str = ""


@dataclass
class ChatResponse:
    assistant_reply_markdown: str
    referenced_reports: list[ReportReference] = field(default_factory=list)
    referenced_sources: list[SourceReference] = field(default_factory=list)
    suggested_profile_updates: ProfileSuggestion = field(default_factory=ProfileSuggestion)
    mode: str = CHAT_MODE


@dataclass
class ChatMessage:
    """One entry in the conversation transcript."""

    role: MessageRole
    content: str
    created_at: datetime = field(default_factory=_utcnow)
    referenced_reports: list[ReportReference] = field(default_factory=list)
    referenced_sources: list[SourceReference] = field(default_factory=list)
    is_error: bool = False

    def __post_init__(self) -> None:
        self.role = coerce_enum(MessageRole, self.role, "role")
        if not isinstance(self.content, str):
            raise ValidationError("Message content must be a string")
        if self.role is MessageRole.USER and (self.referenced_reports or self.referenced_sources):
            raise ValidationError("Only assistant messages can carry citations")

    @classmethod
    def from_user(cls, content: str) -> "ChatMessage":
        return cls(role=MessageRole.USER, content=content)

    @classmethod
    def from_response(cls, response: ChatResponse) -> "ChatMessage":
        return cls(
            role=MessageRole.ASSISTANT,
            content=response.assistant_reply_markdown,
            referenced_reports=list(response.referenced_reports),
            referenced_sources=list(response.referenced_sources),
        )

    @classmethod
    def error_notice(cls, content: str) -> "ChatMessage":
        return cls(role=MessageRole.ASSISTANT, content=content, is_error=True)
