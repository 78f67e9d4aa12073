"""Screenshots command for exporting page captures from a saved crawl.

Screenshots are stored base64-encoded inside ``scraped_app.json``; this
command decodes them into PNG files, one per page.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from spacrawl.core.errors import SnapshotStoreError
from spacrawl.storage.snapshot_store import export_screenshots, load_crawl_result

console = Console()


def screenshots_command(
    location: Annotated[
        Path,
        typer.Argument(help="Output directory or scraped_app.json path"),
    ] = Path("./output"),
    dest: Annotated[
        Path | None,
        typer.Option("-d", "--dest", help="Directory for PNG files"),
    ] = None,
) -> None:
    """Export page screenshots from a saved crawl as PNG files.

    Args:
        location: Output directory or path to scraped_app.json.
        dest: Target directory. Defaults to a screenshots/ folder next to
            the saved result.
    """
    try:
        result = load_crawl_result(location)
        if dest is None:
            base = location if location.is_dir() else location.parent
            dest = base / "screenshots"
        paths = export_screenshots(result, dest)
    except SnapshotStoreError as exc:
        console.print(f"[red]Failed: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    for path in paths:
        console.print(str(path))
    console.print(f"Exported {len(paths)} screenshots to {dest}")
