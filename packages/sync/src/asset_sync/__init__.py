"""Sync asset meta-data from a Storyblok asset library into stories."""

from asset_sync.config import SyncConfig, resolve_config, split_csv
from asset_sync.content import (
    LOCALE_MARKER,
    ContentSynchronizer,
    NodeKind,
    SyncStats,
    classify,
    is_asset,
)
from asset_sync.filters import is_selected, select_stories
from asset_sync.library import AssetLibrary
from asset_sync.runner import AssetMetaSync, StoryOutcome, SyncReport

__all__ = [
    "AssetLibrary",
    "AssetMetaSync",
    "ContentSynchronizer",
    "LOCALE_MARKER",
    "NodeKind",
    "StoryOutcome",
    "SyncConfig",
    "SyncReport",
    "SyncStats",
    "classify",
    "is_asset",
    "is_selected",
    "resolve_config",
    "select_stories",
    "split_csv",
]
