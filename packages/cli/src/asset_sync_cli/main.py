"""Storyblok asset meta-data sync - CLI entry point.

Provides the ``storyblok-sync-asset-meta`` command.

Usage:
    storyblok-sync-asset-meta --token 1234567890abcdef --space 12345
    storyblok-sync-asset-meta --space 12345 --fields "alt,title" --dry-run --verbose
    storyblok-sync-asset-meta --region us --content-types "page,news-article" \\
        --only-stories "home" --overwrite --publish

Token, space and region can also come from STORYBLOK_OAUTH_TOKEN,
STORYBLOK_SPACE_ID and STORYBLOK_REGION (environment or ``.env``).
"""

import asyncio
from typing import Optional

import typer

from asset_sync import AssetMetaSync, SyncConfig, SyncReport, resolve_config
from asset_sync_common import ConfigError, configure_logging, get_settings
from storyblok_mapi import ManagementClient

app = typer.Typer(
    name="storyblok-sync-asset-meta",
    help="Sync asset meta-data (alt, title, copyright, source) from the asset library into stories.",
    add_completion=False,
)


def format_header(config: SyncConfig) -> str:
    """Describe the run before anything is fetched."""
    lines = [
        "",
        f"Performing asset meta-data sync for space {config.space_id}:",
        f"- mode: {'dry-run' if config.dry_run else 'live'}",
        f"- publish: {'yes' if config.publish else 'no'}",
        f"- overwrite: {'yes' if config.overwrite else 'no'}",
        f"- fields: {', '.join(config.fields)}",
        f"- content types: {', '.join(config.content_types) if config.content_types else 'all'}",
        f"- skip-translations: {'yes' if config.skip_translations else 'no'}",
    ]
    if config.skip_stories:
        lines.append(f"- skipped stories: {', '.join(config.skip_stories)}")
    if config.only_stories:
        lines.append(f"- only stories: {', '.join(config.only_stories)}")
    return "\n".join(lines)


def format_report(report: SyncReport, dry_run: bool) -> str:
    """Format run totals as a table."""
    updated_label = "Would update" if dry_run else "Updated"
    updated_count = report.stories_changed if dry_run else report.stories_updated
    rows = [
        ("Library", report.library_assets, "assets in the asset library"),
        ("Stories", report.stories_selected, f"selected of {report.stories_listed} listed"),
        (updated_label, updated_count, "stories with changed asset meta-data"),
        ("Assets", report.assets_seen, "asset fields visited"),
        ("Missing", report.assets_missing, "asset fields not found in the library"),
        ("Fields", report.fields_updated, "meta-data values synced"),
    ]

    lines = ["=" * 60, f"{'Status':12} | {'Count':6} | Details", "-" * 60]
    for label, count, details in rows:
        lines.append(f"{label:12} | {count:6} | {details}")
    lines.append("=" * 60)
    return "\n".join(lines)


async def run_sync(config: SyncConfig) -> SyncReport:
    """Run one sync against the Management API."""
    settings = get_settings()
    async with ManagementClient(
        oauth_token=config.oauth_token,
        region=config.region,
        requests_per_second=settings.mapi_requests_per_second,
        max_retries=settings.mapi_max_retries,
        timeout=settings.mapi_timeout,
    ) as client:
        return await AssetMetaSync(client, config).run(progress=typer.echo)


@app.command()
def sync(
    token: Optional[str] = typer.Option(
        None,
        "--token",
        help="Personal OAuth access token of a Storyblok user (NOT the access token of a space). "
        "Defaults to STORYBLOK_OAUTH_TOKEN.",
    ),
    space: Optional[str] = typer.Option(
        None, "--space", help="ID of the space to process. Defaults to STORYBLOK_SPACE_ID."
    ),
    region: Optional[str] = typer.Option(
        None,
        "--region",
        help="Region of the space: eu (default), us, ap, ca or cn. Defaults to STORYBLOK_REGION.",
    ),
    fields: Optional[str] = typer.Option(
        None,
        "--fields",
        help='Comma separated meta-data fields to sync. Defaults to "alt,title,copyright,source".',
    ),
    content_types: Optional[str] = typer.Option(
        None,
        "--content-types",
        help='Comma separated content types to process, e.g. "page,news-article". Defaults to all.',
    ),
    skip_stories: Optional[str] = typer.Option(
        None, "--skip-stories", help="Comma separated full slugs of stories to skip."
    ),
    only_stories: Optional[str] = typer.Option(
        None,
        "--only-stories",
        help="Comma separated full slugs of the only stories to process.",
    ),
    skip_translations: bool = typer.Option(
        False, "--skip-translations", help="Do not sync translations of asset fields."
    ),
    overwrite: bool = typer.Option(False, "--overwrite", help="Overwrite existing meta-data."),
    publish: bool = typer.Option(
        False,
        "--publish",
        help="Publish stories after updating. WARNING: may publish previously unpublished stories.",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Only report the changes instead of performing them."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Log every processed asset and field."
    ),
):
    """Sync asset meta-data from the asset library into the assets used in stories.

    Examples:

        storyblok-sync-asset-meta --token 1234567890abcdef --space 12345

        storyblok-sync-asset-meta --space 12345 --fields "alt,title" --overwrite --dry-run
    """
    try:
        config = resolve_config(
            token=token,
            space=space,
            region=region,
            fields=fields,
            content_types=content_types,
            skip_stories=skip_stories,
            only_stories=only_stories,
            skip_translations=skip_translations,
            overwrite=overwrite,
            publish=publish,
            dry_run=dry_run,
            verbose=verbose,
        )
    except ConfigError as e:
        typer.echo(str(e))
        raise typer.Exit(1)

    configure_logging(level="DEBUG" if config.verbose else None)

    typer.echo(format_header(config))

    report = asyncio.run(run_sync(config))

    typer.echo("")
    typer.echo(format_report(report, config.dry_run))
    typer.echo("")
    typer.echo(f"Process successfully finished in {round(report.duration_seconds)} seconds.")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
