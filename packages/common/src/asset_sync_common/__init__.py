"""Shared configuration, logging, and errors for the asset meta-data sync."""

from asset_sync_common.config import Settings, get_settings
from asset_sync_common.errors import AssetSyncError, ConfigError, ContentTreeError
from asset_sync_common.logging_config import configure_logging, get_logger

__all__ = [
    "AssetSyncError",
    "ConfigError",
    "ContentTreeError",
    "Settings",
    "configure_logging",
    "get_logger",
    "get_settings",
]
