"""CLI entry point for the daily AI news post."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from ai_mews.adapters.digest import MarkdownPostPublisher
from ai_mews.adapters.extract import ReadabilityExtractor
from ai_mews.adapters.llm import OpenAISummarizer
from ai_mews.adapters.notifications import TelegramNotifier
from ai_mews.adapters.search import BraveSearchClient
from ai_mews.config import Settings, get_settings
from ai_mews.core import CurationError, PipelineState, RunResult
from ai_mews.use_cases import CurationPipeline


def main(
    force: bool = typer.Option(False, "--force", help="Regenerate today's post even if it exists"),
    force_run: bool = typer.Option(False, "--force-run", help="Ignore the publish window"),
    posts_dir: Optional[Path] = typer.Option(None, "--posts-dir", help="Where posts are written"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Optional YAML config"),
    no_notify: bool = typer.Option(False, "--no-notify", help="Skip the Telegram digest"),
    debug: bool = False,
) -> None:
    """Pick today's AI news, write the post and send the digest."""
    try:
        settings = get_settings(config)
        if force:
            settings.force_overwrite = True
        if force_run:
            settings.force_run = True
        if posts_dir is not None:
            settings.paths.posts_dir = posts_dir
        settings.validate()

        result = asyncio.run(async_run(settings, no_notify, debug))
    except CurationError as e:
        print(f"\n❌ {type(e).__name__}: {e}")
        raise typer.Exit(code=1)

    report(result)


def app() -> None:
    """CLI entry point."""
    typer.run(main)


def build_pipeline(settings: Settings, no_notify: bool = False, debug: bool = False) -> CurationPipeline:
    """Wire adapters from settings."""
    notifier = None
    if settings.notify.enabled and not no_notify:
        notifier = TelegramNotifier(settings.notify)

    return CurationPipeline(
        search_client=BraveSearchClient(settings.brave_api_key, settings.search),
        extractor=ReadabilityExtractor(settings.extraction),
        summarizer=OpenAISummarizer(settings.openai_api_key, settings.llm),
        publisher=MarkdownPostPublisher(settings.posts_dir),
        notifier=notifier,
        query=settings.search.query,
        selection=settings.selection,
        force_overwrite=settings.force_overwrite,
        force_run=settings.force_run,
        publish_hour=settings.publish_hour,
        debug_dir=settings.debug_dir if debug else None,
    )


async def async_run(settings: Settings, no_notify: bool, debug: bool) -> RunResult:
    """Async implementation of the run."""
    now = settings.now()
    pipeline = build_pipeline(settings, no_notify=no_notify, debug=debug)

    # Today's post exists: the pipeline reports the no-op, nothing else is printed
    if pipeline.publisher.exists(now.date()) and not settings.force_overwrite:
        return await pipeline.run(now)

    print("\n" + "=" * 70)
    print(f"📰 AI MEWS - {now.date().isoformat()} ({settings.timezone})")
    print("=" * 70)
    print(f"  • Model: {settings.llm.model}")
    print(f"  • Posts: {settings.posts_dir}")
    if no_notify:
        print("  ⚠️  Telegram - disabled with --no-notify")
    elif settings.notify.enabled:
        print("  ✓ Telegram - digest will be sent")
    else:
        print("  ⚠️  Telegram - not configured")

    return await pipeline.run(now)


def report(result: RunResult) -> None:
    """Print the final outcome."""
    if result.state == PipelineState.SKIPPED:
        print(f"\n{result.reason}, nothing to do.")
        return

    print("\n" + "=" * 70)
    print("✅ DONE")
    print("=" * 70)
    print(f"📄 Post: {result.path}")
    print(f"  • Items: {len(result.document.items) if result.document else 0}")
    if result.failures:
        print(f"  • Skipped candidates: {len(result.failures)}")
    print(f"  • Digest sent: {'yes' if result.notified else 'no'}")
    print()


if __name__ == "__main__":
    app()
