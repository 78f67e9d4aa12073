"""Show command for inspecting a saved crawl."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from spacrawl.core.errors import SnapshotStoreError
from spacrawl.services.models import CrawlResult
from spacrawl.storage.snapshot_store import load_crawl_result

console = Console()


def show_command(
    location: Path = typer.Argument(
        Path("./output"), help="Output directory or scraped_app.json path"
    ),
) -> None:
    """Summarize a saved crawl result."""
    try:
        result = load_crawl_result(location)
    except SnapshotStoreError as exc:
        console.print(f"[red]{exc}[/red]")
        console.print("Run 'spacrawl scrape <url>' first.")
        raise typer.Exit(code=1) from exc

    console.print(f"[bold]{result.base_url}[/bold]")
    _print_pages(result)
    _print_navigation(result)
    style_count = len(result.global_styles.splitlines())
    console.print(f"Global style rules: {style_count}")


def _print_pages(result: CrawlResult) -> None:
    table = Table(title="Pages")
    table.add_column("URL")
    table.add_column("Title")
    table.add_column("Nodes", justify="right")
    table.add_column("Routes", justify="right")
    table.add_column("Text", justify="right")
    for page in result.pages:
        table.add_row(
            page.url,
            page.title or "-",
            str(page.node_count()),
            str(len(page.discovered_routes)),
            str(len(page.visible_text)),
        )
    console.print(table)


def _print_navigation(result: CrawlResult) -> None:
    if not result.navigation:
        console.print("No navigation landmark found")
        return
    table = Table(title="Navigation")
    table.add_column("Label")
    table.add_column("Href")
    for item in result.navigation:
        table.add_row(item.label or "-", item.href or "-")
    console.print(table)
