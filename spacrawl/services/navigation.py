"""Navigation landmark extraction."""

from __future__ import annotations

from typing import Any

from playwright.async_api import Page

from spacrawl.services.models import NavigationMenuItem

# Returns null when the page has no landmark.
NAVIGATION_LINKS_JS = """
() => {
  const nav =
    document.querySelector("nav") ||
    document.querySelector("[role='navigation']");
  if (!nav) return null;
  return Array.from(nav.querySelectorAll("a"), (a) => ({
    label: a.textContent || "",
    href: a.getAttribute("href") || "",
  }));
}
"""


def build_menu(links: list[dict[str, Any]] | None) -> list[NavigationMenuItem]:
    """Flatten landmark anchors into menu items, in document order."""
    if not links:
        return []
    return [
        NavigationMenuItem(
            label=str(link.get("label") or "").strip(),
            href=str(link.get("href") or ""),
        )
        for link in links
    ]


async def extract_navigation(page: Page) -> list[NavigationMenuItem]:
    """Extract the primary navigation menu from the loaded page.

    The landmark is the first ``nav`` element, or else the first element with
    ``role="navigation"``. A page without either yields an empty list. Nested
    markup is not reconstructed; every anchor becomes a top-level item.

    Args:
        page: Page with a document loaded.

    Returns:
        Menu items in document order.
    """
    return build_menu(await page.evaluate(NAVIGATION_LINKS_JS))
