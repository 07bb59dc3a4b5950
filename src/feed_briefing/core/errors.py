"""Error taxonomy for the briefing core."""

from typing import Any, Optional


class FeedBriefingError(Exception):
    """Base class for all errors raised by the briefing core."""


class ValidationError(FeedBriefingError, ValueError):
    """Malformed input detected before any model call."""


class RequestInProgressError(ValidationError):
    """A request is already in flight for this action."""


class TransportError(FeedBriefingError):
    """The call to the generative service could not complete."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(FeedBriefingError):
    """The generative service returned no text."""


class ResponseValidationError(FeedBriefingError):
    """Model output failed validation.

    Attributes:
        field: Dotted path of the offending field, e.g. ``sections[0].id``
        value: The offending value (truncated when rendered)
    """

    def __init__(self, field: str, value: Any, message: str) -> None:
        self.field = field
        self.value = value
        self.reason = message
        super().__init__(f"{field}: {message} (got {_preview(value)})")


class SchemaViolationError(ResponseValidationError):
    """Returned JSON violates an enumeration or structural constraint."""


class UngroundedSourceError(ResponseValidationError):
    """Returned content cites a source that was not in the request."""


def _preview(value: Any, limit: int = 120) -> str:
    text = repr(value)
    if len(text) > limit:
        return text[:limit] + "..."
    return text
