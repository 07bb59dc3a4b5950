"""In-memory application state for one session."""

import copy
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from feed_briefing.core.entities import (
    ChatMessage,
    ContentItem,
    DeliveryChannels,
    GeneratedReport,
    ProfileSuggestion,
    ReportPreferences,
    UserProfile,
)
from feed_briefing.core.errors import ValidationError
from feed_briefing.core.seed import (
    default_channels,
    default_content_items,
    default_preferences,
    default_profile,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateSnapshot:
    """Point-in-time copy of the state handed to the model gateway."""

    profile: UserProfile
    preferences: ReportPreferences
    channels: DeliveryChannels
    content_items: tuple[ContentItem, ...]
    reports: tuple[GeneratedReport, ...]
    chat_history: tuple[ChatMessage, ...]


class AppStateStore:
    """Sole owner of the live profile, settings, items and histories.

    All updates are whole-value replacements or list insertions. Readers
    always get copies, so nothing outside the store can mutate live state.
    Nothing is persisted: the store lives for one session.
    """

    def __init__(
        self,
        profile: Optional[UserProfile] = None,
        preferences: Optional[ReportPreferences] = None,
        channels: Optional[DeliveryChannels] = None,
        content_items: Optional[Iterable[ContentItem]] = None,
    ) -> None:
        self._content_items: list[ContentItem] = []
        self._reports: list[GeneratedReport] = []
        self._chat_history: list[ChatMessage] = []
        self.replace_profile(default_profile() if profile is None else profile)
        self.replace_preferences(default_preferences() if preferences is None else preferences)
        self.replace_channels(default_channels() if channels is None else channels)
        self.replace_content_items(
            default_content_items() if content_items is None else content_items
        )

    # Read accessors

    @property
    def profile(self) -> UserProfile:
        return copy.deepcopy(self._profile)

    @property
    def preferences(self) -> ReportPreferences:
        return copy.deepcopy(self._preferences)

    @property
    def channels(self) -> DeliveryChannels:
        return copy.deepcopy(self._channels)

    @property
    def content_items(self) -> list[ContentItem]:
        # Items are frozen, a shallow copy of the list is enough
        return list(self._content_items)

    @property
    def reports(self) -> list[GeneratedReport]:
        """Report history, most recent first."""
        return copy.deepcopy(self._reports)

    @property
    def chat_history(self) -> list[ChatMessage]:
        """Chat transcript in send order."""
        return copy.deepcopy(self._chat_history)

    def report_ids(self) -> list[str]:
        return [report.report_id for report in self._reports]

    def snapshot(self) -> StateSnapshot:
        """Copy everything a request needs."""
        return StateSnapshot(
            profile=self.profile,
            preferences=self.preferences,
            channels=self.channels,
            content_items=tuple(self._content_items),
            reports=tuple(self.reports),
            chat_history=tuple(self.chat_history),
        )

    # Updates

    def replace_profile(self, profile: UserProfile) -> None:
        _require(profile, UserProfile, "profile")
        self._profile = copy.deepcopy(profile)
        logger.debug("Profile replaced for %s", profile.name)

    def replace_preferences(self, preferences: ReportPreferences) -> None:
        _require(preferences, ReportPreferences, "preferences")
        self._preferences = copy.deepcopy(preferences)

    def replace_channels(self, channels: DeliveryChannels) -> None:
        _require(channels, DeliveryChannels, "channels")
        self._channels = copy.deepcopy(channels)

    def replace_content_items(self, items: Iterable[ContentItem]) -> None:
        """Swap in a new item set; ids must be unique within it."""
        new_items = list(items)
        seen: set[str] = set()
        for item in new_items:
            _require(item, ContentItem, "content item")
            if item.id in seen:
                raise ValidationError(f"Duplicate content item id: {item.id!r}")
            seen.add(item.id)
        self._content_items = new_items
        logger.debug("Content items replaced (%d items)", len(new_items))

    def prepend_report(self, report: GeneratedReport) -> None:
        _require(report, GeneratedReport, "report")
        self._reports.insert(0, copy.deepcopy(report))

    def append_chat_message(self, message: ChatMessage) -> None:
        _require(message, ChatMessage, "message")
        self._chat_history.append(copy.deepcopy(message))

    def accept_profile_suggestion(self, suggestion: ProfileSuggestion) -> UserProfile:
        """Apply topics proposed by the assistant after the user confirmed them.

        Empty topic lists in the suggestion keep the current ones.
        """
        if not suggestion.should_update:
            raise ValidationError("Suggestion does not propose a profile update")

        current = self._profile
        updated = UserProfile(
            name=current.name,
            primary_topics=list(suggestion.new_primary_topics or current.primary_topics),
            secondary_topics=list(suggestion.new_secondary_topics or current.secondary_topics),
            time_zone=current.time_zone,
            language=current.language,
        )
        self.replace_profile(updated)
        logger.info("Profile topics updated from assistant suggestion")
        return self.profile


def _require(value: object, expected: type, label: str) -> None:
    if not isinstance(value, expected):
        raise ValidationError(f"Expected {label} of type {expected.__name__}, got {type(value).__name__}")
