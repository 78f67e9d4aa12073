"""Service layer for browser crawling and page extraction."""

from spacrawl.services.browser import BrowserSession, find_chrome_path
from spacrawl.services.crawler import SiteCrawler
from spacrawl.services.extractor import PageExtractor
from spacrawl.services.models import (
    ComponentNode,
    CrawlResult,
    NavigationMenuItem,
    PageSnapshot,
)
from spacrawl.services.navigation import extract_navigation
from spacrawl.services.navigator import Navigator
from spacrawl.services.routes import discover_routes
from spacrawl.services.styles import extract_global_styles

__all__ = [
    "BrowserSession",
    "ComponentNode",
    "CrawlResult",
    "discover_routes",
    "extract_global_styles",
    "extract_navigation",
    "find_chrome_path",
    "NavigationMenuItem",
    "Navigator",
    "PageExtractor",
    "PageSnapshot",
    "SiteCrawler",
]
