"""Global stylesheet rule extraction."""

from __future__ import annotations

import logging
from typing import Any

from playwright.async_api import Page

logger = logging.getLogger(__name__)

# Reading cssRules of a cross-origin stylesheet throws; such sheets are
# reported with an error instead of rules.
STYLESHEET_RULES_JS = """
() => Array.from(document.styleSheets, (sheet) => {
  try {
    const rules = [];
    for (const rule of sheet.cssRules) {
      if (rule instanceof CSSStyleRule) {
        rules.push({ selector: rule.selectorText, cssText: rule.cssText });
      }
    }
    return { href: sheet.href, rules };
  } catch (err) {
    return { href: sheet.href, error: String(err) };
  }
})
"""


def is_global_selector(selector: str) -> bool:
    """Return True for ``:root`` and selectors starting with body or html."""
    return selector == ":root" or selector.startswith(("body", "html"))


def collect_global_rules(sheets: list[dict[str, Any]] | None) -> str:
    """Join matching rule text across stylesheets.

    Args:
        sheets: Per-stylesheet dicts with either ``rules`` or ``error``.

    Returns:
        Newline-joined cssText, in stylesheet order then rule order.
    """
    styles: list[str] = []
    for sheet in sheets or []:
        if "error" in sheet:
            logger.debug(
                f"Skipping inaccessible stylesheet {sheet.get('href')}: "
                f"{sheet['error']}"
            )
            continue
        for rule in sheet.get("rules") or []:
            if is_global_selector(rule.get("selector") or ""):
                styles.append(rule.get("cssText") or "")
    return "\n".join(styles)


async def extract_global_styles(page: Page) -> str:
    """Extract :root, html and body rules from every readable stylesheet.

    Args:
        page: Page with a document loaded.

    Returns:
        Newline-joined rule text; empty when nothing matches.
    """
    return collect_global_rules(await page.evaluate(STYLESHEET_RULES_JS))
