"""Unit tests for configuration module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from spacrawl.core.config import Settings


class TestConfigDefaults:
    """Default timing and browser values."""

    def test_defaults_match_crawl_timings(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.navigation_wait == 3.0
        assert settings.page_load_wait == 5.0
        assert settings.nav_timeout == 60.0
        assert settings.nav_retries == 2
        assert settings.viewport_width == 1440
        assert settings.viewport_height == 900
        assert settings.headless is True
        assert settings.strict_origin is False
        assert settings.max_depth == 0
        assert settings.chrome_path is None
        assert settings.cdp_endpoint is None
        assert settings.output_dir == Path("./output")
        assert "--no-sandbox" in settings.browser_args


class TestConfigLoading:
    """Loading configuration from environment variables."""

    def test_config_loads_from_env(self) -> None:
        env_vars = {
            "CHROME_PATH": "/opt/chrome/chrome",
            "NAV_TIMEOUT": "30",
            "NAV_RETRIES": "4",
            "PAGE_LOAD_WAIT": "1.5",
            "NAVIGATION_WAIT": "0.5",
            "STRICT_ORIGIN": "true",
            "MAX_DEPTH": "2",
            "HEADLESS": "false",
            "OUTPUT_DIR": "/tmp/spacrawl-out",
            "LOG_LEVEL": "debug",
        }

        with patch.dict(os.environ, env_vars, clear=True):
            settings = Settings(_env_file=None)

        assert settings.chrome_path == "/opt/chrome/chrome"
        assert settings.nav_timeout == 30.0
        assert settings.nav_retries == 4
        assert settings.page_load_wait == 1.5
        assert settings.navigation_wait == 0.5
        assert settings.strict_origin is True
        assert settings.max_depth == 2
        assert settings.headless is False
        assert settings.output_dir == Path("/tmp/spacrawl-out")
        assert settings.log_level == "DEBUG"

    def test_keyword_arguments_override_env(self) -> None:
        with patch.dict(os.environ, {"NAV_RETRIES": "4"}, clear=True):
            settings = Settings(_env_file=None, nav_retries=1)

        assert settings.nav_retries == 1


class TestConfigValidation:
    """Validation rules."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"navigation_wait": -1},
            {"page_load_wait": -0.1},
            {"nav_timeout": 0},
            {"nav_retries": -1},
            {"max_depth": -2},
            {"viewport_width": 0},
            {"viewport_height": -10},
            {"log_level": "VERBOSE"},
        ],
    )
    def test_invalid_values_rejected(self, overrides: dict) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None, **overrides)

    def test_zero_delays_and_retries_allowed(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(
                _env_file=None, navigation_wait=0, page_load_wait=0, nav_retries=0
            )

        assert settings.nav_retries == 0
        assert settings.page_load_wait == 0.0

