"""Page navigation with a two-tier wait strategy.

Single-page applications often keep background requests (analytics,
websockets) open long enough that a strict "network idle" signal never fires.
The navigator therefore starts with the strict policy and, on a timeout only,
falls back to waiting for DOM content plus a fixed hydration delay. Any other
navigation error means the target itself is broken and is raised at once.
"""

from __future__ import annotations

import asyncio
import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from spacrawl.core.config import Settings
from spacrawl.core.errors import NavigationFailure, NavigationTimeout

logger = logging.getLogger(__name__)

STRICT_WAIT = "networkidle"
LENIENT_WAIT = "domcontentloaded"


class Navigator:
    """Navigates a single browser page with bounded retries.

    Attributes:
        page: Playwright page owned by this navigator.
        nav_timeout: Per-attempt timeout in seconds.
        nav_retries: Additional attempts allowed after a strict timeout.
        page_load_wait: Hydration delay after a lenient navigation (seconds).

    Example:
        >>> navigator = Navigator(page, nav_timeout=30.0)
        >>> await navigator.navigate("https://app.example.com/settings")
    """

    def __init__(
        self,
        page: Page,
        nav_timeout: float = 60.0,
        nav_retries: int = 2,
        page_load_wait: float = 5.0,
    ) -> None:
        self.page = page
        self.nav_timeout = nav_timeout
        self.nav_retries = nav_retries
        self.page_load_wait = page_load_wait

    @classmethod
    def from_settings(cls, page: Page, settings: Settings) -> Navigator:
        """Build a navigator using the timing values from settings."""
        return cls(
            page,
            nav_timeout=settings.nav_timeout,
            nav_retries=settings.nav_retries,
            page_load_wait=settings.page_load_wait,
        )

    async def navigate(self, url: str) -> None:
        """Load a URL, retrying with a lenient wait policy on timeouts.

        Each attempt first tries the strict policy. If that times out and
        budget remains, the same attempt retries with the lenient policy and
        then waits ``page_load_wait`` for client-side hydration. A lenient
        timeout moves on to the next attempt.

        Args:
            url: Absolute URL to load.

        Raises:
            NavigationFailure: On any non-timeout navigation error (no retry).
            NavigationTimeout: If every attempt timed out.
        """
        last_error: BaseException | None = None
        attempts = self.nav_retries + 1

        for attempt in range(attempts):
            try:
                await self._goto(url, STRICT_WAIT)
                return
            except PlaywrightTimeoutError as exc:
                last_error = exc
            except PlaywrightError as exc:
                raise NavigationFailure(url, exc) from exc

            if attempt == self.nav_retries:
                break

            logger.warning(
                f"Navigation to {url} timed out waiting for {STRICT_WAIT} "
                f"(attempt {attempt + 1}/{attempts}), retrying with {LENIENT_WAIT}"
            )
            try:
                await self._goto(url, LENIENT_WAIT)
            except PlaywrightTimeoutError as exc:
                last_error = exc
                continue
            except PlaywrightError as exc:
                raise NavigationFailure(url, exc) from exc

            await asyncio.sleep(self.page_load_wait)
            return

        logger.error(f"Navigation to {url} failed after {attempts} attempts")
        raise NavigationTimeout(url, attempts=attempts, last_error=last_error)

    async def _goto(self, url: str, wait_until: str) -> None:
        await self.page.goto(
            url, wait_until=wait_until, timeout=self.nav_timeout * 1000
        )
