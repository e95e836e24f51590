"""Configuration management for the asset meta-data sync.

Settings are read from environment variables (case-insensitive) and an
optional ``.env`` file in the working directory.

Example:
    >>> from asset_sync_common.config import get_settings
    >>> settings = get_settings()
    >>> settings.storyblok_region
"""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_LOG_FORMATS = {"console", "json"}


class Settings(BaseSettings):
    """Environment-backed settings.

    The three Storyblok values are optional here; whether they are required
    is decided when the CLI flags are merged in (see ``asset_sync.config``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storyblok
    storyblok_oauth_token: Optional[str] = None
    storyblok_space_id: Optional[str] = None
    storyblok_region: Optional[str] = None

    # Management API client
    mapi_requests_per_second: float = 3.0
    mapi_max_retries: int = 5
    mapi_timeout: float = 30.0

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got {v!r}")
        return upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        lower = v.lower()
        if lower not in VALID_LOG_FORMATS:
            raise ValueError(f"log_format must be one of {sorted(VALID_LOG_FORMATS)}, got {v!r}")
        return lower


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance (cached)."""
    return Settings()
