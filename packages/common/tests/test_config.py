"""Tests for configuration management module.

Tests cover:
- Settings defaults
- Environment variable overrides
- Field validators (log_level, log_format)
- Settings caching (lru_cache)
- .env file loading
"""

from __future__ import annotations

import os

import pytest
from pydantic import ValidationError

from asset_sync_common.config import Settings, get_settings

pytestmark = pytest.mark.unit


# =============================================================================
# Fixtures
# =============================================================================


ENV_VARS = [
    "STORYBLOK_OAUTH_TOKEN",
    "STORYBLOK_SPACE_ID",
    "STORYBLOK_REGION",
    "MAPI_REQUESTS_PER_SECOND",
    "MAPI_MAX_RETRIES",
    "MAPI_TIMEOUT",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Provide a clean environment without config-related vars or .env file."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    # An unrelated cwd keeps a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def clear_settings_cache():
    """Clear the settings cache before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Test Default Values
# =============================================================================


class TestSettingsDefaults:
    """Test Settings has correct default values."""

    def test_storyblok_values_default_to_none(self, clean_env):
        """Token, space and region are unset by default."""
        settings = Settings()

        assert settings.storyblok_oauth_token is None
        assert settings.storyblok_space_id is None
        assert settings.storyblok_region is None

    def test_mapi_defaults(self, clean_env):
        """Client tuning has conservative defaults."""
        settings = Settings()

        assert settings.mapi_requests_per_second == 3.0
        assert settings.mapi_max_retries == 5
        assert settings.mapi_timeout == 30.0

    def test_log_defaults(self, clean_env):
        """Logging defaults to INFO on the console."""
        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.log_format == "console"


# =============================================================================
# Test Environment Variable Overrides
# =============================================================================


class TestEnvironmentOverrides:
    """Test Settings can be overridden via environment variables."""

    def test_storyblok_overrides(self, clean_env, monkeypatch):
        """STORYBLOK_* variables populate the Storyblok fields."""
        monkeypatch.setenv("STORYBLOK_OAUTH_TOKEN", "oauth-123")
        monkeypatch.setenv("STORYBLOK_SPACE_ID", "98765")
        monkeypatch.setenv("STORYBLOK_REGION", "us")

        settings = Settings()

        assert settings.storyblok_oauth_token == "oauth-123"
        assert settings.storyblok_space_id == "98765"
        assert settings.storyblok_region == "us"

    def test_mapi_overrides(self, clean_env, monkeypatch):
        """Numeric client settings are coerced from strings."""
        monkeypatch.setenv("MAPI_REQUESTS_PER_SECOND", "6")
        monkeypatch.setenv("MAPI_MAX_RETRIES", "2")

        settings = Settings()

        assert settings.mapi_requests_per_second == 6.0
        assert settings.mapi_max_retries == 2

    def test_case_insensitive_env_vars(self, clean_env, monkeypatch):
        """Environment variables are case insensitive."""
        monkeypatch.setenv("storyblok_space_id", "111")

        settings = Settings()

        assert settings.storyblok_space_id == "111"

    def test_dotenv_file_loaded(self, clean_env, tmp_path):
        """A .env file in the working directory is read."""
        (tmp_path / ".env").write_text("STORYBLOK_OAUTH_TOKEN=from-dotenv\n")

        settings = Settings()

        assert settings.storyblok_oauth_token == "from-dotenv"

    def test_env_beats_dotenv(self, clean_env, tmp_path, monkeypatch):
        """Real environment variables take precedence over .env."""
        (tmp_path / ".env").write_text("STORYBLOK_OAUTH_TOKEN=from-dotenv\n")
        monkeypatch.setenv("STORYBLOK_OAUTH_TOKEN", "from-env")

        settings = Settings()

        assert settings.storyblok_oauth_token == "from-env"


# =============================================================================
# Test Field Validators
# =============================================================================


class TestLogLevelValidator:
    """Test log_level validator."""

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    def test_valid_levels(self, clean_env, level):
        """All standard levels are accepted."""
        assert Settings(log_level=level).log_level == level

    def test_lowercase_converted(self, clean_env):
        """Lowercase log level is converted to uppercase."""
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_raises(self, clean_env):
        """Invalid log level raises validation error."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(log_level="INVALID")

        errors = exc_info.value.errors()
        assert any("log_level" in str(e) for e in errors)

    def test_invalid_via_env(self, clean_env, monkeypatch):
        """Invalid log level via environment variable raises error."""
        monkeypatch.setenv("LOG_LEVEL", "TRACE")

        with pytest.raises(ValidationError):
            Settings()


class TestLogFormatValidator:
    """Test log_format validator."""

    def test_json(self, clean_env):
        assert Settings(log_format="json").log_format == "json"

    def test_uppercase_converted(self, clean_env):
        """Uppercase log format is converted to lowercase."""
        assert Settings(log_format="JSON").log_format == "json"

    def test_invalid_raises(self, clean_env):
        """Invalid log format raises validation error."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(log_format="xml")

        errors = exc_info.value.errors()
        assert any("log_format" in str(e) for e in errors)


# =============================================================================
# Test Settings Caching
# =============================================================================


class TestGetSettings:
    """Test get_settings function and caching."""

    def test_get_settings_returns_settings(self, clean_env, clear_settings_cache):
        """get_settings returns a Settings instance."""
        assert isinstance(get_settings(), Settings)

    def test_get_settings_cached(self, clean_env, clear_settings_cache):
        """get_settings returns cached instance."""
        assert get_settings() is get_settings()

    def test_cache_clear_reloads_settings(self, clean_env, clear_settings_cache, monkeypatch):
        """Clearing the cache picks up environment changes."""
        settings1 = get_settings()

        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert get_settings() is settings1

        get_settings.cache_clear()

        settings3 = get_settings()
        assert settings3 is not settings1
        assert settings3.log_level == "DEBUG"


def test_os_environ_untouched_by_settings(clean_env):
    """Loading settings from .env does not leak into os.environ."""
    Settings()
    assert "STORYBLOK_OAUTH_TOKEN" not in os.environ
