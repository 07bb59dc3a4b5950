"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Sequence

from feed_briefing.core.entities import (
    ChatMessage,
    ChatResponse,
    ContentItem,
    DeliveryChannels,
    GeneratedReport,
    ReportPreferences,
    UserProfile,
)


class ModelGateway(ABC):
    """Interface for the generative model service."""

    @abstractmethod
    async def generate_report(
        self,
        profile: UserProfile,
        preferences: ReportPreferences,
        channels: DeliveryChannels,
        items: Sequence[ContentItem],
    ) -> GeneratedReport:
        """Generate a structured report grounded in the given items."""
        pass

    @abstractmethod
    async def chat(
        self,
        query: str,
        history: Sequence[ChatMessage],
        profile: UserProfile,
        items: Sequence[ContentItem],
    ) -> ChatResponse:
        """Answer a chat message grounded in the given items."""
        pass


class ContentSource(ABC):
    """Interface for supplying the content item list."""

    @abstractmethod
    def load_items(self) -> list[ContentItem]:
        """Return the current item set."""
        pass


class ReportRenderer(ABC):
    """Interface for rendering reports for display."""

    @abstractmethod
    def render(self, report: GeneratedReport) -> str:
        """Render a report as text."""
        pass
