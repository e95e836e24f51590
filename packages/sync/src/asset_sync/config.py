"""Run configuration: CLI flags merged over environment settings.

``resolve_config`` is the only place that decides whether the run may start.
It performs no I/O beyond reading settings, so an invalid configuration
never reaches the network.
"""

from dataclasses import dataclass, field
from typing import Optional

from asset_sync_common import ConfigError, Settings, get_settings
from storyblok_mapi import META_FIELDS, REGIONS

DEFAULT_REGION = "eu"

MISSING_TOKEN_MESSAGE = (
    "Error: State your oauth token via the --token argument or the environment "
    "variable STORYBLOK_OAUTH_TOKEN. Use --help to find out more."
)
MISSING_SPACE_MESSAGE = (
    "Error: State your space id via the --space argument or the environment "
    "variable STORYBLOK_SPACE_ID. Use --help to find out more."
)
INVALID_REGION_MESSAGE = "Error: Invalid region parameter stated. Use --help to find out more."


@dataclass
class SyncConfig:
    """Everything one sync run needs.

    Attributes:
        oauth_token: Personal access token of a Storyblok user
        space_id: Space to process
        region: Management API region (one of ``storyblok_mapi.REGIONS``)
        fields: Meta-data fields to sync
        content_types: Content types to process (None = all)
        skip_stories: Full slugs never processed
        only_stories: If non-empty, the only full slugs processed
        skip_translations: Ignore ``__i18n__`` translation fields
        overwrite: Replace differing non-empty values
        publish: Publish stories after updating
        dry_run: Report changes without writing
        verbose: Log every asset and field decision
    """

    oauth_token: str
    space_id: str
    region: str = DEFAULT_REGION
    fields: list[str] = field(default_factory=lambda: list(META_FIELDS))
    content_types: Optional[list[str]] = None
    skip_stories: list[str] = field(default_factory=list)
    only_stories: list[str] = field(default_factory=list)
    skip_translations: bool = False
    overwrite: bool = False
    publish: bool = False
    dry_run: bool = False
    verbose: bool = False


def split_csv(value: Optional[str]) -> list[str]:
    """Split a comma separated option, dropping blank items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def resolve_config(
    token: Optional[str] = None,
    space: Optional[str] = None,
    region: Optional[str] = None,
    fields: Optional[str] = None,
    content_types: Optional[str] = None,
    skip_stories: Optional[str] = None,
    only_stories: Optional[str] = None,
    skip_translations: bool = False,
    overwrite: bool = False,
    publish: bool = False,
    dry_run: bool = False,
    verbose: bool = False,
    settings: Optional[Settings] = None,
) -> SyncConfig:
    """Merge CLI values over environment settings and validate.

    CSV arguments are passed through as the raw option strings.

    Raises:
        ConfigError: Token or space id missing, or region not supported.
            The message is meant to be shown to the user as is.
    """
    settings = settings or get_settings()

    oauth_token = token or settings.storyblok_oauth_token
    if not oauth_token:
        raise ConfigError(MISSING_TOKEN_MESSAGE)

    space_id = space or settings.storyblok_space_id
    if not space_id:
        raise ConfigError(MISSING_SPACE_MESSAGE)

    resolved_region = region or settings.storyblok_region or DEFAULT_REGION
    if resolved_region not in REGIONS:
        raise ConfigError(INVALID_REGION_MESSAGE)

    return SyncConfig(
        oauth_token=oauth_token,
        space_id=str(space_id),
        region=resolved_region,
        fields=split_csv(fields) or list(META_FIELDS),
        content_types=split_csv(content_types) or None,
        skip_stories=split_csv(skip_stories),
        only_stories=split_csv(only_stories),
        skip_translations=skip_translations,
        overwrite=overwrite,
        publish=publish,
        dry_run=dry_run,
        verbose=verbose,
    )
