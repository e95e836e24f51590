"""One sync run: fetch, filter, synchronize, write back.

Everything is sequential: each Management API call is awaited before the
next one starts. A failure aborts the run; stories updated before the
failure stay updated.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

from asset_sync.config import SyncConfig
from asset_sync.content import ContentSynchronizer
from asset_sync.filters import select_stories
from asset_sync.library import AssetLibrary
from asset_sync_common import get_logger
from storyblok_mapi import StorySummary

if TYPE_CHECKING:
    from storyblok_mapi import ManagementClient

logger = get_logger(__name__)


class StoryOutcome(str, Enum):
    """What happened to a story after its content was traversed."""

    UNCHANGED = "unchanged"
    DRY_RUN = "dry_run"
    UPDATED = "updated"


@dataclass
class SyncReport:
    """Totals for one run.

    Attributes:
        library_assets: Assets in the space's library
        stories_listed: Stories (and folders) returned by the list call
        stories_selected: Stories that passed the filter and were fetched
        stories_changed: Stories with at least one modified asset field
        stories_updated: Stories actually written back
        assets_seen: Asset fields visited in selected stories
        assets_missing: Asset fields whose id is not in the library
        fields_updated: Individual meta-data values written
        duration_seconds: Wall time of the run
    """

    library_assets: int = 0
    stories_listed: int = 0
    stories_selected: int = 0
    stories_changed: int = 0
    stories_updated: int = 0
    assets_seen: int = 0
    assets_missing: int = 0
    fields_updated: int = 0
    duration_seconds: float = 0.0


class AssetMetaSync:
    """Drives a run against one space.

    Example:
        >>> async with ManagementClient(config.oauth_token, config.region) as client:
        ...     report = await AssetMetaSync(client, config).run()
    """

    def __init__(self, client: "ManagementClient", config: SyncConfig) -> None:
        self.client = client
        self.config = config
        self.report = SyncReport()
        self._synchronizer: Optional[ContentSynchronizer] = None

    @property
    def space_path(self) -> str:
        return f"spaces/{self.config.space_id}"

    async def fetch_library(self) -> AssetLibrary:
        """Fetch every library asset and build the synchronizer around it."""
        items = await self.client.get_all(f"{self.space_path}/assets")
        library = AssetLibrary.from_api(items)
        self.report.library_assets = len(library)
        self._synchronizer = ContentSynchronizer(
            library,
            fields=self.config.fields,
            overwrite=self.config.overwrite,
            skip_translations=self.config.skip_translations,
        )
        logger.info("library_fetched", assets=len(library))
        return library

    async def fetch_stories(self) -> list[dict[str, Any]]:
        """List stories, filter them, and fetch full payloads of the selection."""
        items = await self.client.get_all(f"{self.space_path}/stories")
        summaries = [StorySummary.model_validate(item) for item in items]
        self.report.stories_listed = len(summaries)

        selected = select_stories(
            summaries,
            content_types=self.config.content_types,
            skip_stories=self.config.skip_stories,
            only_stories=self.config.only_stories,
        )

        stories = []
        for summary in selected:
            data = await self.client.get(f"{self.space_path}/stories/{summary.id}")
            stories.append(data["story"])

        self.report.stories_selected = len(stories)
        logger.info("stories_fetched", listed=len(summaries), selected=len(stories))
        return stories

    async def process_story(self, story: dict[str, Any]) -> StoryOutcome:
        """Synchronize one story and write it back if needed."""
        if self._synchronizer is None:
            raise RuntimeError("fetch_library() must run before stories are processed")

        log = logger.bind(slug=story.get("full_slug"), name=story.get("name"))
        log.debug("story_processing")

        if not self._synchronizer.sync_story(story):
            log.debug("story_no_update_required")
            return StoryOutcome.UNCHANGED

        self.report.stories_changed += 1

        if self.config.dry_run:
            log.info("story_dry_run", detail="no changes performed")
            return StoryOutcome.DRY_RUN

        body: dict[str, Any] = {"story": story}
        if self.config.publish:
            body["publish"] = 1
        await self.client.put(f"{self.space_path}/stories/{story['id']}", body)

        self.report.stories_updated += 1
        log.info("story_updated", published=self.config.publish)
        return StoryOutcome.UPDATED

    async def run(self, progress: Optional[Callable[[str], Any]] = None) -> SyncReport:
        """Run every step in order.

        Args:
            progress: Called with short user-facing progress lines
        """
        echo = progress or (lambda _line: None)
        start = time.monotonic()

        echo("")
        echo("Fetching library-assets...")
        await self.fetch_library()

        echo("")
        echo("Fetching stories...")
        stories = await self.fetch_stories()

        echo("")
        echo("Processing stories...")
        for story in stories:
            await self.process_story(story)

        stats = self._synchronizer.stats
        self.report.assets_seen = stats.assets_seen
        self.report.assets_missing = stats.assets_missing
        self.report.fields_updated = stats.fields_updated
        self.report.duration_seconds = time.monotonic() - start
        return self.report
