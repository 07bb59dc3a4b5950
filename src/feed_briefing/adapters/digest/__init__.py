"""Report renderers."""

from feed_briefing.adapters.digest.markdown_generator import MarkdownReportRenderer

__all__ = ["MarkdownReportRenderer"]
