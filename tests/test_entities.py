"""Tests for core entities."""

from datetime import date, datetime, timezone

import pytest

from feed_briefing.core import (
    ChatMessage,
    ContentItem,
    DeliveryChannels,
    Frequency,
    MessageRole,
    ReportPreferences,
    SourceReference,
    SourceType,
    StructureStyle,
    Tone,
    UserProfile,
    ValidationError,
)


def test_preferences_accept_enum_values() -> None:
    """Test preferences coerce plain strings into enums."""
    prefs = ReportPreferences(
        frequency="daily",
        max_items=5,
        structure_style="deep_dive",
        tone="opinionated",
    )

    assert prefs.frequency is Frequency.DAILY
    assert prefs.structure_style is StructureStyle.DEEP_DIVE
    assert prefs.tone is Tone.OPINIONATED
    assert prefs.to_dict()["frequency"] == "daily"


@pytest.mark.parametrize(
    "field, value",
    [
        ("frequency", "hourly"),
        ("frequency", "Weekly"),
        ("tone", "sarcastic"),
        ("structure_style", "tweet_thread"),
        ("tone", None),
    ],
)
def test_preferences_reject_values_outside_enumerations(field: str, value: object) -> None:
    """Test closed enumerations on report preferences."""
    with pytest.raises(ValidationError, match=field):
        ReportPreferences(**{field: value})


@pytest.mark.parametrize("max_items", [0, -3, 2.5, True])
def test_preferences_require_positive_max_items(max_items: object) -> None:
    """Test max_items must be a positive integer."""
    with pytest.raises(ValidationError, match="max_items"):
        ReportPreferences(max_items=max_items)


def test_profile_rejects_duplicate_primary_topics() -> None:
    """Test primary topics are unique."""
    with pytest.raises(ValidationError, match="duplicates"):
        UserProfile(name="A", primary_topics=["AI", "Space", "AI"])


def test_profile_requires_name() -> None:
    """Test profile name cannot be blank."""
    with pytest.raises(ValidationError, match="name"):
        UserProfile(name="  ")


def test_profile_from_dict_rejects_unknown_fields() -> None:
    """Test unknown profile fields surface as validation errors."""
    with pytest.raises(ValidationError, match="UserProfile"):
        UserProfile.from_dict({"name": "A", "nickname": "B"})


def test_channels_from_dict() -> None:
    """Test channel configuration parsing and validation."""
    channels = DeliveryChannels.from_dict({
        "email": {"enabled": True, "format": "plaintext"},
        "sms": {"enabled": True, "max_chars": 140},
    })

    assert channels.email.format.value == "plaintext"
    assert channels.sms.max_chars == 140
    assert channels.video_reel.enabled is False
    assert channels.enabled_channels() == ["email", "sms"]

    with pytest.raises(ValidationError, match="email.format"):
        DeliveryChannels.from_dict({"email": {"enabled": True, "format": "pdf"}})


def test_content_item_creation() -> None:
    """Test creating a valid content item from a dict."""
    item = ContentItem.from_dict({
        "id": "42",
        "title": "Test Item",
        "summary": "Summary",
        "published_at": "2025-03-10T08:00:00Z",
        "source_name": "Example",
        "source_url": "https://example.com/42",
        "category_tags": ["AI"],
        "content": "",
    })

    assert item.published_at == datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc)
    assert item.category_tags == ("AI",)
    assert item.content is None
    assert item.to_dict()["published_at"] == "2025-03-10T08:00:00+00:00"


def test_content_item_validation() -> None:
    """Test content item validation."""
    with pytest.raises(ValidationError, match="Title cannot be empty"):
        ContentItem(
            id="1",
            title="",
            summary="",
            published_at=datetime.now(timezone.utc),
            source_name="x",
            source_url="https://example.com",
        )

    with pytest.raises(ValidationError, match="ISO-8601"):
        ContentItem(
            id="1",
            title="T",
            summary="",
            published_at="yesterday",
            source_name="x",
            source_url="https://example.com",
        )


def test_source_type_accepts_legacy_name() -> None:
    """Test rss_item is normalized to content_item."""
    assert SourceType("rss_item") is SourceType.CONTENT_ITEM
    assert SourceType("report") is SourceType.REPORT


def test_user_message_cannot_carry_citations() -> None:
    """Test citations are only allowed on assistant messages."""
    citation = SourceReference(
        source_type=SourceType.CONTENT_ITEM,
        source_id="1",
        source_name="SpaceNews",
    )

    with pytest.raises(ValidationError, match="assistant"):
        ChatMessage(role="user", content="hi", referenced_sources=[citation])

    message = ChatMessage(role="assistant", content="hi", referenced_sources=[citation])
    assert message.role is MessageRole.ASSISTANT
    assert message.is_error is False


def test_content_item_accepts_date() -> None:
    """Test a plain date is promoted to midnight UTC."""
    item = ContentItem(
        id="1",
        title="T",
        summary="",
        published_at=date(2025, 1, 10),
        source_name="x",
        source_url="https://example.com",
    )

    assert item.published_at == datetime(2025, 1, 10, 0, 0, tzinfo=timezone.utc)


def test_delivery_channels_require_channel_types() -> None:
    """Test raw mappings are not accepted in place of channel entities."""
    with pytest.raises(ValidationError, match="email must be a EmailChannel"):
        DeliveryChannels(email={"enabled": True, "format": "html"})  # type: ignore[arg-type]

    with pytest.raises(ValidationError, match="mapping"):
        DeliveryChannels.from_dict(["email"])  # type: ignore[arg-type]
