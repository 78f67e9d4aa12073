"""Same-origin route discovery from a rendered page."""

from __future__ import annotations

from collections.abc import Iterable

from playwright.async_api import Page

from spacrawl.core.origin import is_same_origin, origin_of

# Anchor.href is already resolved against the document base by the browser.
COLLECT_HREFS_JS = """
() => Array.from(document.querySelectorAll("a[href]"), (a) => a.href)
"""


def filter_routes(
    hrefs: Iterable[str], origin: str, strict_origin: bool = False
) -> list[str]:
    """Keep same-origin, fragment-free targets, deduplicated in document order.

    Args:
        hrefs: Absolute link targets in document order.
        origin: Origin string the targets must belong to.
        strict_origin: Use tuple comparison instead of a textual prefix.

    Returns:
        Unique admitted targets, first occurrence order preserved.
    """
    routes: dict[str, None] = {}
    for href in hrefs:
        if not href or "#" in href:
            continue
        if is_same_origin(href, origin, strict=strict_origin):
            routes.setdefault(href, None)
    return list(routes)


async def discover_routes(
    page: Page, base_url: str, strict_origin: bool = False
) -> list[str]:
    """Discover internal routes linked from the currently loaded document.

    This is a single pass over the current DOM; following the routes is up to
    the caller.

    Args:
        page: Page with a document already loaded.
        base_url: Any URL of the crawled app; only its origin is used.
        strict_origin: Use tuple comparison instead of a textual prefix.

    Returns:
        Unique same-origin targets without fragments, in document order.
    """
    hrefs: list[str] = await page.evaluate(COLLECT_HREFS_JS)
    return filter_routes(hrefs, origin_of(base_url), strict_origin=strict_origin)
