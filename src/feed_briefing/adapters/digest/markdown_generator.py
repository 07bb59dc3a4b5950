"""Markdown report renderer."""

from feed_briefing.core import GeneratedReport, ReportRenderer, ReportSection, Sentiment

SENTIMENT_LABELS = {
    Sentiment.POSITIVE: "🟢 positive",
    Sentiment.NEUTRAL: "⚪ neutral",
    Sentiment.NEGATIVE: "🔴 negative",
    Sentiment.MIXED: "🟡 mixed",
}


class MarkdownReportRenderer(ReportRenderer):
    """Render a generated report as markdown."""

    def __init__(self, include_channels: bool = True) -> None:
        self.include_channels = include_channels

    def render(self, report: GeneratedReport) -> str:
        """Render markdown report."""
        meta = report.metadata
        lines = [
            f"# {meta.title}",
            "",
            f"*{meta.subtitle}*",
            "",
            f"**Period:** {meta.time_window.start} – {meta.time_window.end}",
            "",
            report.embedding.summary,
            "",
        ]

        if report.embedding.tags:
            lines.append(" ".join(f"`{tag}`" for tag in report.embedding.tags))
            lines.append("")

        if not report.sections:
            lines.extend(["No sections were generated.", ""])

        for section in report.sections:
            lines.extend(self._format_section(section))

        if report.sources:
            lines.extend(["## Sources", ""])
            for source in report.sources:
                lines.append(
                    f"- [{source.title}]({source.source_url}) "
                    f"({source.source_name}, {source.published_at})"
                )
            lines.append("")

        if self.include_channels:
            lines.extend(self._format_channels(report))

        return "\n".join(lines)

    def _format_section(self, section: ReportSection) -> list[str]:
        """Format single report section."""
        lines = [
            f"## {section.title}",
            "",
            f"**{section.summary}**",
            "",
            section.body_markdown,
            "",
        ]

        if section.important_items:
            lines.extend(["**Key items:**", ""])
            for item in section.important_items:
                line = f"- [{item.headline}]({item.source_url}): {item.key_point}"
                label = SENTIMENT_LABELS.get(item.sentiment)
                if label:
                    line += f" _{label}_"
                lines.append(line)
                if item.action_item is not None:
                    lines.append(f"  - Action: {item.action_item}")
            lines.append("")

        lines.append("---")
        lines.append("")
        return lines

    def _format_channels(self, report: GeneratedReport) -> list[str]:
        """Format previews for the enabled delivery channels."""
        channels = report.channels
        lines: list[str] = []

        if channels.email.enabled:
            lines.extend([
                "### Email preview",
                "",
                f"**Subject:** {channels.email.subject}",
                "",
                channels.email.body_text,
                "",
            ])

        if channels.sms.enabled:
            lines.extend([
                "### SMS preview",
                "",
                f"> {channels.sms.summary_text}",
                "",
            ])

        if channels.video_reel.enabled:
            lines.extend([
                f"### Video script (~{channels.video_reel.approx_duration_sec:.0f}s)",
                "",
                channels.video_reel.script,
                "",
            ])

        if lines:
            lines.insert(0, "## Delivery previews")
            lines.insert(1, "")
        return lines
