"""Scrape command for crawling an app and saving the result.

This module provides a CLI command that crawls a single-page application from
its entry URL, persists the CrawlResult as ``scraped_app.json`` in the output
directory, and prints a short summary.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from spacrawl.core.config import Settings
from spacrawl.core.errors import SpacrawlError
from spacrawl.core.logger import configure_logging
from spacrawl.services.crawler import SiteCrawler
from spacrawl.services.models import CrawlResult
from spacrawl.storage.snapshot_store import save_crawl_result

console = Console()
logger = logging.getLogger(__name__)


def build_settings(**overrides: Any) -> Settings:
    """Create Settings, applying only the CLI options that were given."""
    return Settings(
        **{key: value for key, value in overrides.items() if value is not None}
    )


def scrape_command(
    url: Annotated[str, typer.Argument(help="Entry URL of the app")],
    output: Annotated[
        Path | None, typer.Option("-o", "--output", help="Output directory")
    ] = None,
    depth: Annotated[
        int | None,
        typer.Option("-d", "--depth", help="Discovery generations beyond entry"),
    ] = None,
    strict_origin: Annotated[
        bool | None,
        typer.Option(
            "--strict-origin/--prefix-origin",
            help="Compare scheme, host and port instead of a URL prefix",
        ),
    ] = None,
    chrome_path: Annotated[
        str | None, typer.Option("--chrome-path", help="Browser executable")
    ] = None,
    cdp_endpoint: Annotated[
        str | None,
        typer.Option("--cdp-endpoint", help="Attach to a running browser"),
    ] = None,
    headed: Annotated[
        bool, typer.Option("--headed", help="Show the browser window")
    ] = False,
) -> None:
    """Crawl an app and save its structure to scraped_app.json.

    Args:
        url: Entry URL of the app.
        output: Output directory. Defaults to Settings.output_dir.
        depth: Discovery generations beyond the entry page.
        strict_origin: Route admission policy override.
        chrome_path: Browser executable override.
        cdp_endpoint: DevTools endpoint of an already-running browser.
        headed: Run with a visible browser window.
    """
    settings = build_settings(
        output_dir=output,
        max_depth=depth,
        strict_origin=strict_origin,
        chrome_path=chrome_path,
        cdp_endpoint=cdp_endpoint,
        headless=False if headed else None,
    )
    configure_logging(settings)

    async def _run() -> CrawlResult:
        """Execute the crawl with a progress spinner."""
        crawler = SiteCrawler(settings)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            task = progress.add_task(f"Crawling {url}...", total=None)

            async def update_progress(page_url: str, visited: int, total: int) -> None:
                """Update the spinner with the last extracted page."""
                progress.update(
                    task,
                    description=f"[green]{visited}/{total} pages[/green] | "
                    f"{page_url[:60]}",
                )

            return await crawler.crawl(url, progress_callback=update_progress)

    try:
        result = asyncio.run(_run())
        path = save_crawl_result(result, settings.output_dir)
    except SpacrawlError as exc:
        console.print(f"[red]Scraping failed: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    except Exception as exc:
        logger.debug("Unexpected scrape failure", exc_info=True)
        console.print(f"[red]Scraping failed: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    console.print(f"Scraped {len(result.pages)} pages -> {path}")
