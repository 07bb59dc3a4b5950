"""Business logic use cases."""

import logging
from typing import Optional

from feed_briefing.core import (
    AppStateStore,
    ChatMessage,
    ChatResponse,
    GeneratedReport,
    ModelGateway,
    ProfileSuggestion,
    RequestInProgressError,
    UserProfile,
    ValidationError,
)

logger = logging.getLogger(__name__)

CHAT_ERROR_MESSAGE = "⚠️ Sorry, I encountered an error connecting to the AI service."


class ReportService:
    """Service for generating reports from the current state."""

    def __init__(self, gateway: ModelGateway, store: AppStateStore) -> None:
        self.gateway = gateway
        self.store = store
        self._in_flight = False

    @property
    def is_generating(self) -> bool:
        return self._in_flight

    async def generate_report(self) -> GeneratedReport:
        """Generate a report and add it to the front of the history.

        On failure the history is left untouched and the error is re-raised.
        """
        if self._in_flight:
            raise RequestInProgressError("A report is already being generated")

        self._in_flight = True
        try:
            snapshot = self.store.snapshot()
            report = await self.gateway.generate_report(
                snapshot.profile,
                snapshot.preferences,
                snapshot.channels,
                list(snapshot.content_items),
            )
        except Exception as e:
            logger.error("Report generation failed: %s: %s", type(e).__name__, e)
            raise
        finally:
            self._in_flight = False

        self.store.prepend_report(report)
        return report


class ChatService:
    """Service for grounded chat over the current content items."""

    def __init__(
        self,
        gateway: ModelGateway,
        store: AppStateStore,
        error_message: str = CHAT_ERROR_MESSAGE,
    ) -> None:
        self.gateway = gateway
        self.store = store
        self.error_message = error_message
        self._in_flight = False
        self._pending_suggestion: Optional[ProfileSuggestion] = None

    @property
    def is_sending(self) -> bool:
        return self._in_flight

    @property
    def pending_suggestion(self) -> Optional[ProfileSuggestion]:
        """Latest profile update proposed by the assistant, if any."""
        return self._pending_suggestion

    async def send_message(self, text: str) -> ChatResponse:
        """Send one chat turn.

        The user message is recorded first. A failed turn records a single
        error message from the assistant and re-raises, so the transcript
        keeps every attempt in send order.
        """
        if self._in_flight:
            raise RequestInProgressError("A chat message is already being sent")
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Message cannot be empty")

        # History sent to the model excludes the message being asked
        snapshot = self.store.snapshot()
        self.store.append_chat_message(ChatMessage.from_user(text))

        self._in_flight = True
        try:
            response = await self.gateway.chat(
                text,
                list(snapshot.chat_history),
                snapshot.profile,
                list(snapshot.content_items),
            )
        except Exception as e:
            logger.error("Chat turn failed: %s: %s", type(e).__name__, e)
            self.store.append_chat_message(ChatMessage.error_notice(self.error_message))
            raise
        finally:
            self._in_flight = False

        self.store.append_chat_message(ChatMessage.from_response(response))

        suggestion = response.suggested_profile_updates
        self._pending_suggestion = suggestion if suggestion.should_update else None
        return response

    def accept_suggestion(self) -> UserProfile:
        """Apply the pending profile suggestion after explicit confirmation."""
        if self._pending_suggestion is None:
            raise ValidationError("No profile suggestion to apply")

        profile = self.store.accept_profile_suggestion(self._pending_suggestion)
        self._pending_suggestion = None
        return profile

    def dismiss_suggestion(self) -> None:
        self._pending_suggestion = None
