"""Page extraction into structural snapshots.

The DOM is pulled across the automation boundary once per page as a raw
element tree and pruned here in Python:

1. script, style and noscript elements are dropped with their whole subtree.
2. Only allow-listed attributes are kept (data-*, role, aria-label,
   placeholder, type, href, src, alt).
3. Direct text is built from the element's own text nodes only, so text
   already represented by a descendant node is never duplicated.

Text limits are hard character cutoffs: 200 characters of direct text per
node and 10,000 characters of visible text per page.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from collections.abc import Iterable
from typing import Any

from spacrawl.core.config import Settings
from spacrawl.services.models import ComponentNode, PageSnapshot
from spacrawl.services.navigator import Navigator
from spacrawl.services.routes import discover_routes

logger = logging.getLogger(__name__)

EXCLUDED_TAGS = frozenset({"script", "style", "noscript"})
ALLOWED_ATTRIBUTES = frozenset(
    {"role", "aria-label", "placeholder", "type", "href", "src", "alt"}
)
MAX_DIRECT_TEXT = 200
MAX_VISIBLE_TEXT = 10_000

# Excluded elements are reported by tag only so large inline bundles never
# cross the automation boundary.
DOM_SNAPSHOT_JS = """
() => {
  const skipped = new Set(["SCRIPT", "STYLE", "NOSCRIPT"]);
  const walk = (el) => {
    if (skipped.has(el.tagName)) {
      return { tag: el.tagName, classes: [], attributes: {}, texts: [], children: [] };
    }
    const attributes = {};
    for (const attr of el.attributes) {
      attributes[attr.name] = attr.value;
    }
    const texts = [];
    for (const node of el.childNodes) {
      if (node.nodeType === Node.TEXT_NODE) {
        texts.push(node.textContent || "");
      }
    }
    return {
      tag: el.tagName,
      classes: Array.from(el.classList),
      attributes,
      texts,
      children: Array.from(el.children, walk),
    };
  };
  const body = document.querySelector("body");
  return body ? Array.from(body.children, walk) : [];
}
"""

VISIBLE_TEXT_JS = """
() => (document.body && document.body.innerText) || ""
"""


def is_allowed_attribute(name: str) -> bool:
    """Return True if an attribute survives extraction."""
    return name.startswith("data-") or name in ALLOWED_ATTRIBUTES


def build_component(raw: dict[str, Any]) -> ComponentNode | None:
    """Prune one raw element into a ComponentNode.

    Args:
        raw: Element dict with tag, classes, attributes, texts and children.

    Returns:
        The pruned node, or None when the element is excluded.
    """
    tag = str(raw.get("tag") or "").lower()
    if not tag or tag in EXCLUDED_TAGS:
        return None

    attributes = {
        name: value
        for name, value in (raw.get("attributes") or {}).items()
        if is_allowed_attribute(name)
    }
    direct_text = "".join(text.strip() for text in raw.get("texts") or [])

    return ComponentNode(
        tag=tag,
        classes=list(raw.get("classes") or []),
        direct_text=direct_text[:MAX_DIRECT_TEXT],
        attributes=attributes,
        children=build_component_tree(raw.get("children") or []),
    )


def build_component_tree(raw_nodes: Iterable[dict[str, Any]]) -> list[ComponentNode]:
    """Prune a sequence of sibling elements, skipping excluded ones."""
    nodes: list[ComponentNode] = []
    for raw in raw_nodes:
        node = build_component(raw)
        if node is not None:
            nodes.append(node)
    return nodes


class PageExtractor:
    """Produces PageSnapshots from the navigator's page.

    Attributes:
        navigator: Navigator owning the page to extract from.
        navigation_wait: Settle delay after a re-navigation (seconds).
        strict_origin: Route admission policy for per-page discovery.

    Example:
        >>> extractor = PageExtractor(navigator)
        >>> snapshot = await extractor.extract("https://app.example.com/pricing")
        >>> snapshot.component_tree[0].tag
        'header'
    """

    def __init__(
        self,
        navigator: Navigator,
        navigation_wait: float = 3.0,
        strict_origin: bool = False,
    ) -> None:
        self.navigator = navigator
        self.navigation_wait = navigation_wait
        self.strict_origin = strict_origin

    @classmethod
    def from_settings(cls, navigator: Navigator, settings: Settings) -> PageExtractor:
        """Build an extractor using values from settings."""
        return cls(
            navigator,
            navigation_wait=settings.navigation_wait,
            strict_origin=settings.strict_origin,
        )

    async def extract(self, url: str) -> PageSnapshot:
        """Load a route if needed and snapshot it.

        Errors raised by the browser while extracting are not caught; a
        partial snapshot is never returned.

        Args:
            url: Route to snapshot.

        Returns:
            PageSnapshot for the route.

        Raises:
            NavigationFailure: If re-navigation fails.
        """
        page = self.navigator.page
        if page.url != url:
            await self.navigator.navigate(url)
            await asyncio.sleep(self.navigation_wait)

        logger.info(f"Extracting {url}")

        title = await page.title()
        markup = await page.content()
        screenshot = await page.screenshot(full_page=True, type="png")
        raw_tree = await page.evaluate(DOM_SNAPSHOT_JS)
        visible_text: str = await page.evaluate(VISIBLE_TEXT_JS)
        routes = await discover_routes(page, url, strict_origin=self.strict_origin)

        component_tree = build_component_tree(raw_tree or [])
        logger.debug(
            f"{url}: {len(component_tree)} top-level nodes, {len(routes)} routes"
        )

        return PageSnapshot(
            url=url,
            title=title,
            markup=markup,
            screenshot=base64.b64encode(screenshot).decode("ascii"),
            component_tree=component_tree,
            discovered_routes=routes,
            visible_text=(visible_text or "")[:MAX_VISIBLE_TEXT],
        )
