"""Persistence of crawl results for replay.

A crawl is saved as ``scraped_app.json`` in an output directory. Loading it
back yields a CrawlResult identical to the one that was saved, screenshots
included, so downstream steps can rerun without a browser.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import logging
import re
from pathlib import Path

from pydantic import ValidationError

from spacrawl.core.errors import SnapshotStoreError
from spacrawl.services.models import CrawlResult

logger = logging.getLogger(__name__)

RESULT_FILENAME = "scraped_app.json"


def result_path(location: Path) -> Path:
    """Resolve a directory or file path to the result file."""
    return location / RESULT_FILENAME if location.is_dir() else location


def save_crawl_result(result: CrawlResult, output_dir: Path) -> Path:
    """Write a crawl result as JSON.

    Args:
        result: Crawl result to persist.
        output_dir: Directory to write into; created if missing.

    Returns:
        Path of the written file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / RESULT_FILENAME
    path.write_text(result.to_json(), encoding="utf-8")
    logger.info(f"Saved {len(result.pages)} pages to {path}")
    return path


def load_crawl_result(location: Path) -> CrawlResult:
    """Read a persisted crawl result.

    Args:
        location: Output directory or path to the JSON file itself.

    Returns:
        The stored CrawlResult.

    Raises:
        SnapshotStoreError: If the file is missing or not a valid result.
    """
    path = result_path(location)
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SnapshotStoreError(f"No cached crawl result at {path}") from exc
    except OSError as exc:
        raise SnapshotStoreError(f"Could not read {path}: {exc}") from exc

    try:
        return CrawlResult.from_json(data)
    except ValidationError as exc:
        raise SnapshotStoreError(f"Invalid crawl result in {path}: {exc}") from exc


def screenshot_filename(url: str) -> str:
    """Build a filesystem-safe, unique PNG filename for a page URL.

    Args:
        url: Page URL.

    Returns:
        Sanitized name truncated to 50 characters plus an 8-char hash.
    """
    clean_url = re.sub(r"^https?://", "", url)
    sanitized = re.sub(r"[^a-zA-Z0-9]", "_", clean_url)[:50]
    url_hash = hashlib.md5(url.encode()).hexdigest()[:8]  # noqa: S324
    return f"{sanitized}_{url_hash}.png"


def export_screenshots(result: CrawlResult, output_dir: Path) -> list[Path]:
    """Decode every page screenshot into a PNG file.

    Pages without a screenshot are skipped.

    Args:
        result: Crawl result holding base64 screenshots.
        output_dir: Directory to write into; created if missing.

    Returns:
        Paths of the written files, in page order.

    Raises:
        SnapshotStoreError: If a screenshot is not valid base64.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for page in result.pages:
        if not page.screenshot:
            continue
        try:
            image_bytes = base64.b64decode(page.screenshot, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise SnapshotStoreError(
                f"Invalid base64 screenshot for {page.url}"
            ) from exc
        path = output_dir / screenshot_filename(page.url)
        path.write_bytes(image_bytes)
        written.append(path)
    return written
