"""Shared fixtures."""

from datetime import datetime, timezone
from typing import Any

import pytest

from feed_briefing.core import (
    ContentItem,
    DeliveryChannels,
    ReportPreferences,
    UserProfile,
)
from feed_briefing.core.seed import default_channels, default_content_items

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def items() -> list[ContentItem]:
    """Five sample items published within 72 hours."""
    return default_content_items(now=NOW)


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        name="Test User",
        primary_topics=["Artificial Intelligence", "Space Exploration"],
        secondary_topics=["Venture Capital"],
        time_zone="Europe/Berlin",
        language="en-US",
    )


@pytest.fixture
def preferences() -> ReportPreferences:
    return ReportPreferences(frequency="weekly", max_items=10, tone="analytic")


@pytest.fixture
def channels() -> DeliveryChannels:
    return default_channels()


@pytest.fixture
def report_data() -> dict[str, Any]:
    """A well-formed REPORT_GENERATION response citing items 1 and 2."""
    return {
        "mode": "REPORT_GENERATION",
        "report_metadata": {
            "title": "Weekly Briefing",
            "subtitle": "AI and space",
            "report_id_hint": "weekly-2025-03-10",
            "time_window": {"start": "2025-03-07T12:00:00Z", "end": "2025-03-10T12:00:00Z"},
        },
        "embedding": {
            "embedding_summary": "Starship reaches orbit; new AI model tops benchmarks.",
            "embedding_tags": ["space", "ai"],
        },
        "sections": [
            {
                "id": "top-stories",
                "title": "Top Stories",
                "summary": "Two milestones this week.",
                "body_markdown": "- Starship\n- Gemini",
                "important_items": [
                    {
                        "rss_item_id": "1",
                        "headline": "Starship reaches orbit",
                        "key_point": "First orbital flight.",
                        "sentiment": "positive",
                        "action_item": "Watch the next launch window.",
                        "source_name": "SpaceNews",
                        "source_url": "https://spacenews.example.com/starship-orbit",
                    },
                    {
                        "rss_item_id": "2",
                        "headline": "Gemini shows advanced reasoning",
                        "key_point": "Beats code benchmarks.",
                        "sentiment": "neutral",
                        "action_item": None,
                        "source_name": "TechCrunch",
                        "source_url": "https://techcrunch.example.com/gemini-launch",
                    },
                ],
            }
        ],
        "sources": [
            {
                "rss_item_id": "1",
                "source_name": "SpaceNews",
                "source_url": "https://spacenews.example.com/starship-orbit",
                "title": "SpaceX Starship Successfully Reaches Orbit",
                "published_at": "2025-03-10T10:00:00Z",
            },
            {
                "rss_item_id": "2",
                "source_name": "TechCrunch",
                "source_url": "https://techcrunch.example.com/gemini-launch",
                "title": "New AI Model 'Gemini' Shows Advanced Reasoning",
                "published_at": "2025-03-10T07:00:00Z",
            },
        ],
        "channels": {
            "email": {
                "enabled": True,
                "subject": "Your weekly briefing",
                "body_html": "<p>Starship and Gemini</p>",
                "body_text": "Starship and Gemini",
            },
            "sms": {"enabled": False, "summary_text": ""},
            "video_reel": {"enabled": True, "script": "This week in orbit...", "approx_duration_sec": 45},
        },
    }


@pytest.fixture
def chat_data() -> dict[str, Any]:
    """A well-formed CHAT_RAG response citing item 1."""
    return {
        "mode": "CHAT_RAG",
        "assistant_reply_markdown": "**Starship** reached orbit for the first time.",
        "referenced_reports": [],
        "referenced_sources": [
            {
                "source_type": "content_item",
                "source_id": "1",
                "source_name": "SpaceNews",
                "source_url": "https://spacenews.example.com/starship-orbit",
                "justification": "Reports the orbital flight.",
            }
        ],
        "suggested_profile_updates": {
            "should_update": False,
            "new_primary_topics": [],
            "new_secondary_topics": [],
            "notes": "",
        },
    }
