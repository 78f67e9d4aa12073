"""Routes command for route discovery.

This module provides a CLI command that loads an app's entry page in a browser
and lists the same-origin routes it links to, without extracting any page.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console

from spacrawl.cli.commands.scrape import build_settings
from spacrawl.core.errors import SpacrawlError
from spacrawl.core.logger import configure_logging
from spacrawl.services.crawler import SiteCrawler

console = Console()
logger = logging.getLogger(__name__)


def routes_command(
    url: str = typer.Argument(..., help="Entry URL of the app"),
    strict_origin: bool | None = typer.Option(
        None,
        "--strict-origin/--prefix-origin",
        help="Compare scheme, host and port instead of a URL prefix",
    ),
    output: Path | None = typer.Option(None, "-o", "--output"),
) -> None:
    """Discover routes linked from an entry page.

    Args:
        url: Entry URL of the app.
        strict_origin: Route admission policy override.
        output: Optional output file for the routes.
    """
    settings = build_settings(strict_origin=strict_origin)
    configure_logging(settings)

    try:
        routes = asyncio.run(SiteCrawler(settings).discover(url))
    except SpacrawlError as exc:
        console.print(f"[red]Failed: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    except Exception as exc:
        logger.debug("Unexpected route discovery failure", exc_info=True)
        console.print(f"[red]Failed: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    if output is None:
        for route in routes:
            console.print(route)
        console.print(f"Unique routes: {len(routes)}")
        return

    try:
        output.write_text("\n".join(routes) + "\n" if routes else "")
    except OSError as exc:
        console.print(f"[red]Failed: could not write {output}: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"Wrote {len(routes)} routes to {output}")
