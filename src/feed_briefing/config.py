"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from feed_briefing.core.entities import DeliveryChannels, ReportPreferences, UserProfile

DEFAULT_SYSTEM_INSTRUCTION = """\
You are a personal research and reporting assistant for an app that aggregates information from RSS feeds.

## Role & Objectives
1. Understand the user's profile, topics of interest, and report configuration.
2. Take as input: content items, user preferences, and context.
3. Output:
   - For REPORT_GENERATION: a single JSON object describing a structured report.
   - For CHAT_RAG: a single JSON object with a grounded Markdown reply.

## Global Behavior Rules
- No hallucinations: only use the content items and history provided. Never invent facts.
- Always include sources. Every important item and every source must use the `id` of a provided content item as `rss_item_id`.
- Strict schemas: return valid JSON matching the schema for the active mode.
- Mobile and desktop friendly: use short paragraphs and bullets.
- Channel-aware: adapt content to the enabled email, SMS and video channels, respecting their limits.

## Mode Selection
- "REPORT_GENERATION" when the input includes content_items and report_preferences.
- "CHAT_RAG" when the input includes chat_context.
"""


@dataclass
class GeminiConfig:
    """Gemini API settings."""
    model: str = "gemini-3-flash-preview"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    temperature: float = 0.4
    timeout: float = 60.0


@dataclass
class PathsConfig:
    """Path settings."""
    output_dir: Path = Path("reports")
    items_file: Optional[Path] = None


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    json_format: bool = False


@dataclass
class PromptsConfig:
    """Prompts for the model."""
    system_instruction: str = DEFAULT_SYSTEM_INSTRUCTION


@dataclass
class Settings:
    """Application settings."""

    # API key (from environment only)
    gemini_api_key: str = ""

    # Config sections
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    prompts: PromptsConfig = field(default_factory=PromptsConfig)

    # User state; None means the built-in defaults
    profile: Optional[UserProfile] = None
    report_preferences: Optional[ReportPreferences] = None
    delivery_channels: Optional[DeliveryChannels] = None

    @property
    def gemini_model(self) -> str:
        return self.gemini.model

    @property
    def gemini_temperature(self) -> float:
        return self.gemini.temperature

    @property
    def gemini_timeout(self) -> float:
        return self.gemini.timeout

    @property
    def system_instruction(self) -> str:
        return self.prompts.system_instruction

    @property
    def output_dir(self) -> Path:
        return self.paths.output_dir

    @property
    def items_file(self) -> Optional[Path]:
        return self.paths.items_file


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(gemini_api_key=os.getenv("GEMINI_API_KEY", ""))

    if "gemini" in config:
        for key, value in config["gemini"].items():
            setattr(settings.gemini, key, value)

    if "paths" in config:
        for key, value in config["paths"].items():
            setattr(settings.paths, key, Path(value) if value is not None else None)

    if "logging" in config:
        for key, value in config["logging"].items():
            setattr(settings.logging, key, value)

    if "prompts" in config:
        settings.prompts = PromptsConfig(**config["prompts"])

    if config.get("profile") is not None:
        settings.profile = UserProfile.from_dict(config["profile"])

    if config.get("report_preferences") is not None:
        settings.report_preferences = ReportPreferences.from_dict(config["report_preferences"])

    if config.get("delivery_channels") is not None:
        settings.delivery_channels = DeliveryChannels.from_dict(config["delivery_channels"])

    return settings
