"""Shared pytest fixtures for spacrawl tests."""

import logging

import pytest

from spacrawl.core.config import Settings


@pytest.fixture
def fast_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings with all settle delays disabled and no env/.env influence."""
    for name in ("CHROME_PATH", "CDP_ENDPOINT", "STRICT_ORIGIN", "MAX_DEPTH"):
        monkeypatch.delenv(name, raising=False)
    return Settings(
        _env_file=None,
        navigation_wait=0.0,
        page_load_wait=0.0,
        nav_timeout=1.0,
    )


@pytest.fixture(autouse=True)
def reset_spacrawl_logger():
    """Drop handlers CLI commands attach to the package logger.

    CliRunner swaps stderr for each invocation, so a console handler left
    behind would write to a closed stream in later tests.
    """
    yield
    logger = logging.getLogger("spacrawl")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
