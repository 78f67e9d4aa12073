"""Browser session lifecycle.

A BrowserSession owns one Playwright driver, one browser, one context and one
page. It is acquired with ``open()`` (or ``async with``) and always released
with ``close()``, including when opening fails halfway.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx
from playwright.async_api import Browser, BrowserContext, Page, Playwright
from playwright.async_api import async_playwright

from spacrawl.core.config import Settings
from spacrawl.core.errors import BrowserNotFoundError

logger = logging.getLogger(__name__)

CHROME_CANDIDATES = [
    "/usr/bin/google-chrome",
    "/usr/bin/google-chrome-stable",
    "/usr/bin/chromium",
    "/usr/bin/chromium-browser",
    "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
    "C:\\Program Files\\Google\\Chrome\\Application\\chrome.exe",
]


def find_chrome_path(
    chrome_path: str | None = None,
    candidates: list[str] | None = None,
    allow_bundled: bool = True,
) -> str | None:
    """Locate a Chrome/Chromium executable.

    Resolution order:
    1. ``chrome_path`` (from ``CHROME_PATH`` via Settings)
    2. The first candidate path that exists on disk
    3. None, meaning Playwright's bundled Chromium, if allowed

    Args:
        chrome_path: Explicit executable path; returned unchecked.
        candidates: Paths to probe. Defaults to CHROME_CANDIDATES.
        allow_bundled: Return None instead of raising when nothing is found.

    Returns:
        Executable path, or None to use the bundled browser.

    Raises:
        BrowserNotFoundError: If nothing is found and bundled is not allowed.
    """
    if chrome_path:
        return chrome_path

    probe = CHROME_CANDIDATES if candidates is None else candidates
    for candidate in probe:
        if Path(candidate).exists():
            return candidate

    if allow_bundled:
        logger.debug("No system Chrome found, using Playwright's bundled Chromium")
        return None

    raise BrowserNotFoundError(list(probe))


class BrowserSession:
    """Scoped browser session exposing a single page.

    Example:
        >>> async with BrowserSession(Settings()) as session:
        ...     await session.page.goto("https://app.example.com")
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    @property
    def page(self) -> Page:
        """The session's page. Only valid between open() and close()."""
        if self._page is None:
            raise RuntimeError("Browser session is not open")
        return self._page

    async def open(self) -> BrowserSession:
        """Start the browser and create the page.

        Returns:
            This session.

        Raises:
            BrowserNotFoundError: If no executable can be located.
            ValueError: If the configured CDP endpoint is unreachable.
            playwright.async_api.Error: If the browser fails to start.
        """
        try:
            self._playwright = await async_playwright().start()
            if self.settings.cdp_endpoint:
                await self.validate_cdp_endpoint()
                logger.info(f"Connecting to browser at {self.settings.cdp_endpoint}")
                self._browser = await self._playwright.chromium.connect_over_cdp(
                    self.settings.cdp_endpoint
                )
            else:
                executable = find_chrome_path(
                    self.settings.chrome_path,
                    allow_bundled=self.settings.use_bundled_browser,
                )
                logger.info(f"Launching browser {executable or '(bundled chromium)'}")
                self._browser = await self._playwright.chromium.launch(
                    headless=self.settings.headless,
                    executable_path=executable,
                    args=self.settings.browser_args,
                )
            self._context = await self._browser.new_context(
                viewport={
                    "width": self.settings.viewport_width,
                    "height": self.settings.viewport_height,
                }
            )
            self._page = await self._context.new_page()
        except BaseException:
            try:
                await self.close()
            except Exception as close_exc:
                logger.warning(
                    f"Cleanup after failed browser start also failed: {close_exc}"
                )
            raise
        return self

    async def close(self) -> None:
        """Release the page, browser and driver. Safe to call repeatedly."""
        context, browser, playwright = self._context, self._browser, self._playwright
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
        try:
            if context is not None:
                await context.close()
            if browser is not None:
                await browser.close()
        finally:
            if playwright is not None:
                await playwright.stop()

    async def validate_cdp_endpoint(self) -> None:
        """Check that the remote browser's DevTools endpoint answers.

        Raises:
            ValueError: If the health check fails.
        """
        endpoint = (self.settings.cdp_endpoint or "").rstrip("/")
        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(5.0)) as client:
                response = await client.get(f"{endpoint}/json/version")
                response.raise_for_status()
        except (
            httpx.TimeoutException,
            httpx.HTTPStatusError,
            httpx.ConnectError,
            httpx.RequestError,
        ) as exc:
            msg = f"Browser CDP endpoint health check failed: {exc}"
            raise ValueError(msg) from exc

    async def __aenter__(self) -> BrowserSession:
        """Enter async context manager."""
        return await self.open()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager and release the browser."""
        await self.close()

