"""Tests for the application state store."""

import json
from typing import Any

import pytest

from feed_briefing.core import (
    AppStateStore,
    ChatMessage,
    ContentItem,
    DeliveryChannels,
    EmailChannel,
    Frequency,
    GeneratedReport,
    ProfileSuggestion,
    ReportPreferences,
    SmsChannel,
    ValidationError,
)
from feed_briefing.core.seed import default_profile
from feed_briefing.core.validator import parse_report


def _report(report_data: dict[str, Any], items: list[ContentItem], report_id: str) -> GeneratedReport:
    report_data["report_metadata"]["report_id_hint"] = report_id
    return parse_report(json.dumps(report_data), items)


def test_store_starts_with_seed_state() -> None:
    """Test the store is initialized with default values."""
    store = AppStateStore()

    assert store.profile.name == "Alex Researcher"
    assert store.preferences.max_items == 10
    assert len(store.content_items) == 5
    assert store.reports == []
    assert store.chat_history == []


def test_prepend_report_keeps_prior_order(report_data: dict[str, Any], items: list[ContentItem]) -> None:
    """Test prepending adds at index 0 and keeps the rest unchanged."""
    store = AppStateStore(content_items=items)
    for report_id in ("r1", "r2", "r3"):
        store.prepend_report(_report(report_data, items, report_id))
    before = store.report_ids()

    store.prepend_report(_report(report_data, items, "r4"))

    after = store.report_ids()
    assert len(after) == len(before) + 1
    assert after[0] == "r4"
    assert after[1:] == before == ["r3", "r2", "r1"]


def test_chat_messages_append_in_order(items: list[ContentItem]) -> None:
    """Test the transcript is chronological."""
    store = AppStateStore(content_items=items)

    store.append_chat_message(ChatMessage.from_user("A"))
    store.append_chat_message(ChatMessage(role="assistant", content="reply A"))
    store.append_chat_message(ChatMessage.from_user("B"))

    assert [m.content for m in store.chat_history] == ["A", "reply A", "B"]


def test_readers_get_copies(items: list[ContentItem]) -> None:
    """Test mutating returned values does not touch live state."""
    store = AppStateStore(content_items=items)

    profile = store.profile
    profile.primary_topics.append("Gardening")
    store.content_items.clear()

    assert "Gardening" not in store.profile.primary_topics
    assert len(store.content_items) == len(items)


def test_constructor_copies_initial_state(items: list[ContentItem]) -> None:
    """Test values handed to the constructor are not shared with the caller."""
    profile = default_profile()
    store = AppStateStore(profile=profile, content_items=items)

    profile.primary_topics.append("Gardening")

    assert "Gardening" not in store.profile.primary_topics


def test_constructor_rejects_wrong_types() -> None:
    """Test the constructor applies the same checks as the replace methods."""
    with pytest.raises(ValidationError, match="preferences"):
        AppStateStore(preferences={"frequency": "daily"})  # type: ignore[arg-type]


def test_replace_preferences_and_channels() -> None:
    """Test settings are replaced as whole values and copied in."""
    store = AppStateStore()
    preferences = ReportPreferences(frequency="daily", max_items=3, tone="concise")
    channels = DeliveryChannels(email=EmailChannel(enabled=False), sms=SmsChannel(enabled=True, max_chars=140))

    store.replace_preferences(preferences)
    store.replace_channels(channels)
    preferences.max_items = 99
    channels.sms.max_chars = 1

    assert store.preferences.frequency is Frequency.DAILY
    assert store.preferences.max_items == 3
    assert store.channels.enabled_channels() == ["sms"]
    assert store.channels.sms.max_chars == 140

    with pytest.raises(ValidationError):
        store.replace_channels(preferences)  # type: ignore[arg-type]


def test_snapshot_is_isolated_from_later_updates(items: list[ContentItem]) -> None:
    """Test a snapshot keeps the state at the time it was taken."""
    store = AppStateStore(content_items=items)
    snapshot = store.snapshot()

    store.append_chat_message(ChatMessage.from_user("later"))
    store.replace_content_items(items[:1])

    assert snapshot.chat_history == ()
    assert len(snapshot.content_items) == len(items)


def test_replace_content_items_rejects_duplicates(items: list[ContentItem]) -> None:
    """Test item ids must be unique within the set."""
    store = AppStateStore(content_items=items)

    with pytest.raises(ValidationError, match="Duplicate"):
        store.replace_content_items([items[0], items[0]])

    assert len(store.content_items) == len(items)


def test_replace_profile_requires_profile() -> None:
    """Test whole-value replacement only accepts the right type."""
    store = AppStateStore()

    with pytest.raises(ValidationError):
        store.replace_profile({"name": "x"})  # type: ignore[arg-type]


def test_accept_profile_suggestion() -> None:
    """Test applying a confirmed suggestion updates topic lists only."""
    store = AppStateStore()
    original = store.profile

    updated = store.accept_profile_suggestion(
        ProfileSuggestion(
            should_update=True,
            new_primary_topics=["Space Exploration", "Fusion Energy"],
            notes="You asked about fusion twice.",
        )
    )

    assert updated.primary_topics == ["Space Exploration", "Fusion Energy"]
    assert updated.secondary_topics == original.secondary_topics
    assert updated.name == original.name
    assert store.profile == updated


def test_accept_profile_suggestion_requires_update_flag() -> None:
    """Test a suggestion without should_update is not applied."""
    store = AppStateStore()

    with pytest.raises(ValidationError):
        store.accept_profile_suggestion(ProfileSuggestion(new_primary_topics=["X"]))
