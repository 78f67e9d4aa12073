"""Configuration module for the SPA crawler.

Provides Pydantic-based configuration management with environment variable
support and field validation. Every timing constant used by the crawler lives
here so callers can override it through the environment, a ``.env`` file,
CLI flags, or keyword arguments.

Example:
    >>> from spacrawl.core.config import Settings
    >>> settings = Settings(nav_retries=3)
    >>> print(settings.nav_timeout)
    60.0
"""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Crawler configuration.

    Attributes:
        chrome_path: Explicit browser executable (env ``CHROME_PATH``)
        use_bundled_browser: Fall back to Playwright's bundled Chromium when
            no system browser is found
        headless: Run the browser without a visible window
        browser_args: Extra command-line switches passed at launch
        cdp_endpoint: Connect to an already-running browser over CDP instead
            of launching one (e.g. ``http://localhost:9222``)
        viewport_width: Viewport width in pixels
        viewport_height: Viewport height in pixels
        navigation_wait: Settle delay after re-navigating to a route (seconds)
        page_load_wait: Settle delay after the entry page load and after a
            lenient navigation fallback (seconds)
        nav_timeout: Per-attempt navigation timeout (seconds)
        nav_retries: Additional lenient attempts after a strict timeout
        strict_origin: Compare (scheme, host, port) instead of a textual
            origin prefix when admitting routes
        max_depth: Discovery generations beyond the entry page (0 = shallow)
        output_dir: Directory for persisted crawl results
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional rotating log file path

    Raises:
        ValidationError: If values are out of range

    Example:
        >>> settings = Settings(headless=False, page_load_wait=1.0)
        >>> settings.viewport_width
        1440
    """

    # Browser session
    chrome_path: str | None = None
    use_bundled_browser: bool = True
    headless: bool = True
    browser_args: list[str] = ["--no-sandbox", "--disable-setuid-sandbox"]
    cdp_endpoint: str | None = None
    viewport_width: int = 1440
    viewport_height: int = 900

    # Timing (seconds)
    navigation_wait: float = 3.0
    page_load_wait: float = 5.0
    nav_timeout: float = 60.0
    nav_retries: int = 2

    # Discovery
    strict_origin: bool = False
    max_depth: int = 0

    # Output and logging
    output_dir: Path = Path("./output")
    log_level: str = "INFO"
    log_file: Path | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    @field_validator("navigation_wait", "page_load_wait")
    @classmethod
    def validate_delay(cls: type["Settings"], v: float) -> float:
        """Validate settle delays are non-negative.

        Args:
            cls: The Settings class (provided by Pydantic)
            v: Delay in seconds

        Returns:
            Validated delay

        Raises:
            ValueError: If the delay is negative
        """
        if v < 0:
            raise ValueError("settle delays must be non-negative")
        return v

    @field_validator("nav_timeout")
    @classmethod
    def validate_nav_timeout(cls: type["Settings"], v: float) -> float:
        """Validate the navigation timeout is positive."""
        if v <= 0:
            raise ValueError("nav_timeout must be positive")
        return v

    @field_validator("nav_retries", "max_depth")
    @classmethod
    def validate_non_negative(cls: type["Settings"], v: int) -> int:
        """Validate retry budget and crawl depth are non-negative."""
        if v < 0:
            raise ValueError("value must be non-negative")
        return v

    @field_validator("viewport_width", "viewport_height")
    @classmethod
    def validate_viewport(cls: type["Settings"], v: int) -> int:
        """Validate viewport dimensions are positive."""
        if v <= 0:
            raise ValueError("viewport dimensions must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls: type["Settings"], v: str) -> str:
        """Normalize and validate the log level name.

        Args:
            cls: The Settings class (provided by Pydantic)
            v: Log level name in any case

        Returns:
            Upper-cased log level name

        Raises:
            ValueError: If the name is not a standard logging level
        """
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}"
            )
        return level

