"""Custom error types for the asset meta-data sync.

All errors follow the "fail fast" principle with explicit messages.
"""


class AssetSyncError(Exception):
    """Base exception for all asset-sync errors."""

    pass


class ConfigError(AssetSyncError):
    """Required configuration is missing or invalid.

    The message is user-facing: the CLI prints it verbatim and exits with 1.
    """

    pass


class ContentTreeError(AssetSyncError):
    """Error walking a story's content tree (e.g. nesting too deep)."""

    pass
