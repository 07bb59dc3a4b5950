"""Default state the application starts with."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from feed_briefing.core.entities import (
    ContentItem,
    DeliveryChannels,
    EmailChannel,
    EmailFormat,
    Frequency,
    ReportPreferences,
    SmsChannel,
    StructureStyle,
    Tone,
    UserProfile,
    VideoReelChannel,
)


def default_profile() -> UserProfile:
    return UserProfile(
        name="Alex Researcher",
        primary_topics=["Artificial Intelligence", "Space Exploration", "Climate Tech"],
        secondary_topics=["Venture Capital", "React Development"],
        time_zone="America/New_York",
        language="en-US",
    )


def default_preferences() -> ReportPreferences:
    return ReportPreferences(
        frequency=Frequency.WEEKLY,
        max_items=10,
        structure_style=StructureStyle.EXECUTIVE_BRIEF,
        sections=["Top Stories", "Market Analysis", "Emerging Tech"],
        tone=Tone.ANALYTIC,
        include_sentiment=True,
        include_action_items=True,
    )


def default_channels() -> DeliveryChannels:
    return DeliveryChannels(
        email=EmailChannel(enabled=True, format=EmailFormat.HTML),
        sms=SmsChannel(enabled=False, max_chars=160),
        video_reel=VideoReelChannel(enabled=True, max_duration_sec=60),
    )


def default_content_items(now: Optional[datetime] = None) -> list[ContentItem]:
    """Five sample items published within the last 72 hours of ``now``."""
    now = now or datetime.now(timezone.utc)
    return [
        ContentItem(
            id="1",
            title="SpaceX Starship Successfully Reaches Orbit",
            summary=(
                "The massive rocket achieved orbital velocity for the first time, "
                "marking a major milestone for interplanetary travel."
            ),
            published_at=now - timedelta(hours=2),
            source_name="SpaceNews",
            source_url="https://spacenews.example.com/starship-orbit",
            category_tags=("Space", "Tech"),
        ),
        ContentItem(
            id="2",
            title="New AI Model 'Gemini' Shows Advanced Reasoning",
            summary=(
                "Google's latest multimodal model outperforms benchmarks in code "
                "generation and complex reasoning tasks."
            ),
            published_at=now - timedelta(hours=5),
            source_name="TechCrunch",
            source_url="https://techcrunch.example.com/gemini-launch",
            category_tags=("AI", "Machine Learning"),
        ),
        ContentItem(
            id="3",
            title="Global Temperatures Hit Record High in 2024",
            summary=(
                "Climate scientists warn that 2024 has surpassed previous records, "
                "urging immediate policy action."
            ),
            published_at=now - timedelta(hours=24),
            source_name="ClimateDaily",
            source_url="https://climatedaily.example.com/2024-records",
            category_tags=("Climate", "Environment"),
        ),
        ContentItem(
            id="4",
            title="React 19 Alpha Released: What to Expect",
            summary=(
                "The new compiler is the star of the show, promising automatic "
                "memoization and performance boosts."
            ),
            published_at=now - timedelta(hours=48),
            source_name="ReactBlog",
            source_url="https://react.dev/blog/19-alpha",
            category_tags=("Dev", "React"),
        ),
        ContentItem(
            id="5",
            title="VC Funding for Climate Tech Startups Soars",
            summary=(
                "Despite a general market downturn, climate tech remains a hot "
                "sector for venture capital investment."
            ),
            published_at=now - timedelta(hours=72),
            source_name="VentureBeat",
            source_url="https://venturebeat.example.com/climate-vc",
            category_tags=("VC", "Climate"),
        ),
    ]
