"""Pytest fixtures for CLI tests."""

import pytest
import structlog
from typer.testing import CliRunner

from asset_sync_common import get_settings


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """No Storyblok settings from the environment or a .env file."""
    for var in ("STORYBLOK_OAUTH_TOKEN", "STORYBLOK_SPACE_ID", "STORYBLOK_REGION", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    # Keep the client's throttle out of test timings
    monkeypatch.setenv("MAPI_REQUESTS_PER_SECOND", "1000")
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
