"""Core domain layer."""

from feed_briefing.core.entities import (
    ChatMessage,
    ChatResponse,
    ContentItem,
    DeliveryChannels,
    EmailChannel,
    EmailFormat,
    Frequency,
    GeneratedReport,
    ImportantItem,
    MessageRole,
    ProfileSuggestion,
    ReportPreferences,
    ReportSection,
    ReportSource,
    Sentiment,
    SmsChannel,
    SourceReference,
    SourceType,
    StructureStyle,
    Tone,
    UserProfile,
    VideoReelChannel,
)
from feed_briefing.core.errors import (
    EmptyResponseError,
    FeedBriefingError,
    RequestInProgressError,
    ResponseValidationError,
    SchemaViolationError,
    TransportError,
    UngroundedSourceError,
    ValidationError,
)
from feed_briefing.core.interfaces import ContentSource, ModelGateway, ReportRenderer
from feed_briefing.core.state import AppStateStore, StateSnapshot

__all__ = [
    "AppStateStore",
    "ChatMessage",
    "ChatResponse",
    "ContentItem",
    "ContentSource",
    "DeliveryChannels",
    "EmailChannel",
    "EmailFormat",
    "EmptyResponseError",
    "FeedBriefingError",
    "Frequency",
    "GeneratedReport",
    "ImportantItem",
    "MessageRole",
    "ModelGateway",
    "ProfileSuggestion",
    "ReportPreferences",
    "ReportRenderer",
    "ReportSection",
    "ReportSource",
    "RequestInProgressError",
    "ResponseValidationError",
    "SchemaViolationError",
    "Sentiment",
    "SmsChannel",
    "SourceReference",
    "SourceType",
    "StateSnapshot",
    "StructureStyle",
    "Tone",
    "TransportError",
    "UngroundedSourceError",
    "UserProfile",
    "ValidationError",
    "VideoReelChannel",
]
