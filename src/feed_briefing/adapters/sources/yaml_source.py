"""Content items read from a static YAML file."""

import logging
from pathlib import Path

import yaml

from feed_briefing.core import ContentItem, ContentSource, ValidationError

logger = logging.getLogger(__name__)


class YamlContentSource(ContentSource):
    """Load items from a YAML file.

    The file holds either a list of items or a mapping with an ``items``
    key. Each item uses the same field names as the request payload::

        items:
          - id: "1"
            title: SpaceX Starship Successfully Reaches Orbit
            summary: The massive rocket achieved orbital velocity...
            published_at: 2025-01-10T08:00:00Z
            source_name: SpaceNews
            source_url: https://spacenews.example.com/starship-orbit
            category_tags: [Space, Tech]
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.name = path.name

    def load_items(self) -> list[ContentItem]:
        if not self.path.exists():
            raise ValidationError(f"Items file not found: {self.path}")

        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or []
            except yaml.YAMLError as e:
                raise ValidationError(f"Items file is not valid YAML: {e}") from e

        if isinstance(data, dict):
            data = data.get("items") or []
        if not isinstance(data, list):
            raise ValidationError(f"Items file must contain a list of items: {self.path}")

        items = []
        for index, raw in enumerate(data):
            if not isinstance(raw, dict):
                raise ValidationError(f"Item #{index} in {self.path} is not a mapping")
            items.append(ContentItem.from_dict(raw))

        logger.info("Loaded %d content items from %s", len(items), self.path)
        return items
