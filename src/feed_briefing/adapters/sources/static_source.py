"""In-memory content source."""

from typing import Iterable, Optional

from feed_briefing.core import ContentItem, ContentSource
from feed_briefing.core.seed import default_content_items


class StaticContentSource(ContentSource):
    """Serve a fixed list of items, the built-in sample feed by default."""

    name = "Sample feed"

    def __init__(self, items: Optional[Iterable[ContentItem]] = None) -> None:
        self._items = list(items) if items is not None else default_content_items()

    def load_items(self) -> list[ContentItem]:
        return list(self._items)
