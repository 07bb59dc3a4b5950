"""Content item sources."""

from feed_briefing.adapters.sources.static_source import StaticContentSource
from feed_briefing.adapters.sources.yaml_source import YamlContentSource

__all__ = ["StaticContentSource", "YamlContentSource"]
