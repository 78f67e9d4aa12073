"""Exception hierarchy for crawl operations."""

from __future__ import annotations


class SpacrawlError(Exception):
    """Base class for all spacrawl errors."""

    pass


class NavigationFailure(SpacrawlError):
    """Raised when a page navigation fails for a non-transient reason.

    Args:
        url: URL that failed to load
        last_error: Underlying exception reported by the browser
        message: Optional message overriding the default one
    """

    def __init__(
        self,
        url: str,
        last_error: BaseException | None = None,
        message: str | None = None,
    ) -> None:
        self.url = url
        self.last_error = last_error
        if message is None:
            detail = f": {last_error}" if last_error is not None else ""
            message = f"Navigation to {url} failed{detail}"
        super().__init__(message)


class NavigationTimeout(NavigationFailure):
    """Raised when every navigation attempt for a URL timed out."""

    def __init__(
        self, url: str, attempts: int, last_error: BaseException | None = None
    ) -> None:
        self.attempts = attempts
        super().__init__(
            url,
            last_error,
            message=(
                f"Navigation to {url} timed out after {attempts} attempts: "
                f"{last_error}"
            ),
        )


class CrawlFailure(SpacrawlError):
    """Raised when a crawl cannot start or its entry page cannot be loaded."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(message)


class BrowserNotFoundError(CrawlFailure):
    """Raised when no usable browser executable can be located."""

    def __init__(self, candidates: list[str]) -> None:
        self.candidates = candidates
        probed = ", ".join(candidates) if candidates else "(none)"
        super().__init__(
            "",
            "No browser executable found. Set CHROME_PATH or install Chromium. "
            f"Probed: {probed}",
        )


class SnapshotStoreError(SpacrawlError):
    """Raised when a persisted crawl result cannot be read."""

    pass
