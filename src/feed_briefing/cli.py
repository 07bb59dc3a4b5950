"""CLI entry point for feed briefing."""

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from feed_briefing.adapters.digest import MarkdownReportRenderer
from feed_briefing.adapters.llm import GeminiClient
from feed_briefing.adapters.sources import StaticContentSource, YamlContentSource
from feed_briefing.config import Settings, get_settings
from feed_briefing.core import AppStateStore, ContentSource, FeedBriefingError
from feed_briefing.logging_config import configure_logging
from feed_briefing.use_cases import ChatService, ReportService

app = typer.Typer(help="Grounded reports and chat over your feeds.", no_args_is_help=True)

EXIT_WORDS = {"exit", "quit", ":q"}


def _setup(config: Path, items: Optional[Path], debug: bool) -> tuple[Settings, AppStateStore, ContentSource]:
    settings = get_settings(config)
    configure_logging(
        level="DEBUG" if debug else settings.logging.level,
        json_format=settings.logging.json_format,
    )

    items_path = items or settings.items_file
    source: ContentSource = YamlContentSource(items_path) if items_path else StaticContentSource()
    store = AppStateStore(
        profile=settings.profile,
        preferences=settings.report_preferences,
        channels=settings.delivery_channels,
        content_items=source.load_items(),
    )
    return settings, store, source


@app.command()
def report(
    config: Path = typer.Option(Path("config.yaml"), help="Path to YAML config"),
    items: Optional[Path] = typer.Option(None, help="YAML file with content items"),
    output: Optional[Path] = typer.Option(None, help="Where to save the report"),
    as_json: bool = typer.Option(False, "--json", help="Output the raw report JSON"),
    debug: bool = False,
) -> None:
    """Generate a report from the current content items."""
    try:
        settings, store, source = _setup(config, items, debug)
    except FeedBriefingError as e:
        print(f"❌ {e}")
        raise typer.Exit(code=1)

    print(f"\n📡 Source: {getattr(source, 'name', source.__class__.__name__)}")
    print(f"  • Items: {len(store.content_items)}")
    print(f"  • Profile: {store.profile.name} ({store.preferences.frequency.value}, {store.preferences.tone.value})")
    print(f"  • Model: {settings.gemini_model}")
    print("\n📝 Generating report...")

    service = ReportService(GeminiClient(settings), store)
    try:
        generated = asyncio.run(service.generate_report())
    except FeedBriefingError as e:
        print(f"\n❌ Failed to generate report: {e}")
        raise typer.Exit(code=1)

    if as_json:
        content = json.dumps(generated.to_dict(), indent=2, ensure_ascii=False)
        suffix = "json"
    else:
        content = MarkdownReportRenderer().render(generated)
        suffix = "md"

    print()
    print(content)

    if output is None:
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        output = settings.output_dir / f"{timestamp}_report.{suffix}"
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    print(f"\n✅ Report saved to {output}")


@app.command()
def chat(
    config: Path = typer.Option(Path("config.yaml"), help="Path to YAML config"),
    items: Optional[Path] = typer.Option(None, help="YAML file with content items"),
    debug: bool = False,
) -> None:
    """Chat about your feeds. Type 'exit' to leave."""
    try:
        settings, store, _ = _setup(config, items, debug)
    except FeedBriefingError as e:
        print(f"❌ {e}")
        raise typer.Exit(code=1)

    asyncio.run(_chat_loop(ChatService(GeminiClient(settings), store)))


async def _chat_loop(service: ChatService) -> None:
    print("\n💬 Ask about your feeds (type 'exit' to quit)\n")

    while True:
        text = typer.prompt("You", default="", show_default=False).strip()
        if not text:
            continue
        if text.lower() in EXIT_WORDS:
            break

        try:
            response = await service.send_message(text)
        except FeedBriefingError as e:
            print(f"\n{service.error_message}\n  └─ {type(e).__name__}: {e}\n")
            continue

        print(f"\n🤖 {response.assistant_reply_markdown}\n")
        if response.referenced_sources:
            print("Sources:")
            for src in response.referenced_sources:
                print(f"  🔗 {src.source_name} {src.source_url or ''}".rstrip())
            print()

        suggestion = service.pending_suggestion
        if suggestion is not None:
            print("💡 Suggested profile update:")
            if suggestion.new_primary_topics:
                print(f"  • Primary: {', '.join(suggestion.new_primary_topics)}")
            if suggestion.new_secondary_topics:
                print(f"  • Secondary: {', '.join(suggestion.new_secondary_topics)}")
            if suggestion.notes:
                print(f"  • {suggestion.notes}")
            if typer.confirm("Apply these topics to your profile?", default=False):
                try:
                    profile = service.accept_suggestion()
                    print(f"✓ Primary topics: {', '.join(profile.primary_topics)}\n")
                except FeedBriefingError as e:
                    print(f"⚠️  Could not apply suggestion: {e}\n")
            else:
                service.dismiss_suggestion()


@app.command()
def feeds(
    config: Path = typer.Option(Path("config.yaml"), help="Path to YAML config"),
    items: Optional[Path] = typer.Option(None, help="YAML file with content items"),
) -> None:
    """List the content items available to reports and chat."""
    try:
        _, store, _ = _setup(config, items, debug=False)
    except FeedBriefingError as e:
        print(f"❌ {e}")
        raise typer.Exit(code=1)

    for item in store.content_items:
        tags = ", ".join(item.category_tags)
        print(f"[{item.id}] {item.title}")
        print(f"  └─ {item.source_name} · {item.published_at:%Y-%m-%d %H:%M} · {tags}")
        print(f"     {item.source_url}")


if __name__ == "__main__":
    app()
