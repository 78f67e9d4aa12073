"""Crawl orchestration for single-page applications.

The crawler drives one browser session through a whole crawl:

1. Acquire the session.
2. Load the entry page and wait for it to settle.
3. Seed the frontier with the entry URL followed by the routes it links to.
4. Snapshot every frontier member once, in order.
5. Extract navigation and global styles from the last loaded page.
6. Release the session on every exit path.

By default only the entry page feeds the frontier. Setting ``max_depth``
above zero also follows routes found on discovered pages, breadth-first, with
a visited set guarding against pages that link to each other.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Awaitable, Callable

from playwright.async_api import Page

from spacrawl.core.config import Settings
from spacrawl.core.errors import CrawlFailure, NavigationFailure
from spacrawl.core.origin import is_same_origin, origin_of
from spacrawl.services.browser import BrowserSession
from spacrawl.services.extractor import PageExtractor
from spacrawl.services.models import CrawlResult, PageSnapshot
from spacrawl.services.navigation import extract_navigation
from spacrawl.services.navigator import Navigator
from spacrawl.services.routes import discover_routes
from spacrawl.services.styles import extract_global_styles

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], Awaitable[None]]


class SiteCrawler:
    """Crawls an SPA from its entry URL into a CrawlResult.

    Attributes:
        settings: Crawl configuration (timings, browser, discovery policy).

    Example:
        >>> crawler = SiteCrawler(Settings(page_load_wait=2.0))
        >>> result = await crawler.crawl("https://app.example.com")
        >>> [page.url for page in result.pages]
        ['https://app.example.com', 'https://app.example.com/pricing']
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session_factory: Callable[[Settings], BrowserSession] = BrowserSession,
    ) -> None:
        """Initialize the crawler.

        Args:
            settings: Crawl configuration. Defaults to Settings().
            session_factory: Callable building the browser session.
        """
        self.settings = settings or Settings()
        self._session_factory = session_factory

    async def crawl(
        self,
        entry_url: str,
        progress_callback: ProgressCallback | None = None,
    ) -> CrawlResult:
        """Crawl the app reachable from an entry URL.

        Args:
            entry_url: Absolute URL of the app's entry page.
            progress_callback: Optional async callback(url, visited, total)
                called after each page snapshot.

        Returns:
            CrawlResult covering every frontier member.

        Raises:
            CrawlFailure: If the browser cannot start or the entry page
                cannot be loaded.
            NavigationFailure: If a later route cannot be loaded.
            Exception: Any extraction error, after the session is released.
        """
        logger.info(f"Crawling {entry_url}")
        session = await self._open_session(entry_url)
        try:
            page = session.page
            routes = await self._load_entry(page, entry_url)
            pages = await self._visit_frontier(
                page, entry_url, routes, progress_callback
            )
            navigation = await extract_navigation(page)
            global_styles = await extract_global_styles(page)
        finally:
            await session.close()

        logger.info(f"Crawled {len(pages)} pages from {entry_url}")
        return CrawlResult(
            base_url=entry_url,
            pages=pages,
            navigation=navigation,
            global_styles=global_styles,
        )

    async def discover(self, entry_url: str) -> list[str]:
        """Load the entry page and return the routes it links to.

        Args:
            entry_url: Absolute URL of the app's entry page.

        Returns:
            Unique same-origin routes in document order.

        Raises:
            CrawlFailure: If the browser cannot start or the page cannot load.
        """
        session = await self._open_session(entry_url)
        try:
            return await self._load_entry(session.page, entry_url)
        finally:
            await session.close()

    async def _open_session(self, entry_url: str) -> BrowserSession:
        session = self._session_factory(self.settings)
        try:
            return await session.open()
        except CrawlFailure:
            raise
        except Exception as exc:
            raise CrawlFailure(
                entry_url, f"Could not start browser session: {exc}"
            ) from exc

    async def _load_entry(self, page: Page, entry_url: str) -> list[str]:
        navigator = Navigator.from_settings(page, self.settings)
        try:
            await navigator.navigate(entry_url)
        except NavigationFailure as exc:
            raise CrawlFailure(
                entry_url, f"Could not load entry page {entry_url}: {exc}"
            ) from exc

        await asyncio.sleep(self.settings.page_load_wait)
        routes = await discover_routes(
            page, entry_url, strict_origin=self.settings.strict_origin
        )
        logger.info(f"Discovered {len(routes)} routes on {entry_url}")
        return routes

    async def _visit_frontier(
        self,
        page: Page,
        entry_url: str,
        routes: list[str],
        progress_callback: ProgressCallback | None,
    ) -> list[PageSnapshot]:
        navigator = Navigator.from_settings(page, self.settings)
        extractor = PageExtractor.from_settings(navigator, self.settings)
        origin = origin_of(entry_url)

        # Entry page is depth 0; routes linked from it are depth 1.
        frontier = list(dict.fromkeys([entry_url, *routes]))
        seen = set(frontier)
        queue: deque[tuple[str, int]] = deque(
            (url, 0 if index == 0 else 1) for index, url in enumerate(frontier)
        )

        pages: list[PageSnapshot] = []
        while queue:
            url, depth = queue.popleft()
            snapshot = await extractor.extract(url)
            pages.append(snapshot)

            if 1 <= depth <= self.settings.max_depth:
                for route in snapshot.discovered_routes:
                    if route in seen or not is_same_origin(
                        route, origin, strict=self.settings.strict_origin
                    ):
                        continue
                    seen.add(route)
                    queue.append((route, depth + 1))

            if progress_callback is not None:
                await progress_callback(url, len(pages), len(seen))

        return pages
