"""Asset meta-data sync over a story's content tree.

A story's ``content`` is an arbitrarily nested mapping. Asset fields appear
in it as mappings with ``fieldtype == "asset"`` and a ``filename``; their
meta-data lives both in top-level keys (``alt``, ``title``, ...) and in a
``meta_data`` map. ``ContentSynchronizer`` walks the tree and copies the
library's values onto those embedded copies.

Example:
    >>> synchronizer = ContentSynchronizer(library, fields=["alt", "title"])
    >>> changed = synchronizer.sync_story(story)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from asset_sync.library import AssetLibrary
from asset_sync_common import ContentTreeError, get_logger
from storyblok_mapi import META_FIELDS

logger = get_logger(__name__)

LOCALE_MARKER = "__i18n__"
DEFAULT_MAX_DEPTH = 512


class NodeKind(str, Enum):
    """What a content value is, as far as the sync is concerned."""

    ASSET = "asset"
    ASSET_LIST = "asset_list"
    LIST = "list"
    MAPPING = "mapping"
    SCALAR = "scalar"


def is_asset(value: Any) -> bool:
    """True for a filled asset field (empty asset fields have no filename)."""
    return isinstance(value, dict) and value.get("fieldtype") == "asset" and bool(value.get("filename"))


def classify(value: Any) -> NodeKind:
    """Classify a content value.

    A list counts as a multi-asset field when its first element is an asset.
    """
    if is_asset(value):
        return NodeKind.ASSET
    if isinstance(value, list):
        if value and is_asset(value[0]):
            return NodeKind.ASSET_LIST
        return NodeKind.LIST
    if isinstance(value, dict):
        return NodeKind.MAPPING
    return NodeKind.SCALAR


@dataclass
class SyncStats:
    """Counters accumulated over every story a synchronizer processes."""

    assets_seen: int = 0
    assets_missing: int = 0
    fields_updated: int = 0


class ContentSynchronizer:
    """Copies library meta-data into asset fields of story content."""

    def __init__(
        self,
        library: AssetLibrary,
        fields: Optional[list[str]] = None,
        overwrite: bool = False,
        skip_translations: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """Initialize the synchronizer.

        Args:
            library: Canonical asset meta-data
            fields: Meta-data fields to sync (default: alt, title, copyright, source)
            overwrite: Replace differing non-empty values in the story
            skip_translations: Do not descend into ``__i18n__`` keys
            max_depth: Nesting limit for content trees
        """
        self.library = library
        self.fields = list(fields) if fields else list(META_FIELDS)
        self.overwrite = overwrite
        self.skip_translations = skip_translations
        self.max_depth = max_depth
        self.stats = SyncStats()

    def sync_story(self, story: dict[str, Any]) -> bool:
        """Sync a full story payload in place.

        Returns:
            True if any asset field of the story was modified.
        """
        content = story.get("content")
        if not isinstance(content, dict):
            return False
        return self.sync_node(content)

    def sync_node(self, node: dict[str, Any], depth: int = 0) -> bool:
        """Sync every asset below ``node`` in place.

        Raises:
            ContentTreeError: Nesting deeper than ``max_depth``
        """
        if depth > self.max_depth:
            raise ContentTreeError(f"Content nested deeper than {self.max_depth} levels")

        changed = False
        for key, value in node.items():
            if self.skip_translations and LOCALE_MARKER in key:
                continue

            kind = classify(value)
            if kind is NodeKind.ASSET:
                logger.debug("single_asset_field", key=key)
                changed = self.sync_asset(value) or changed
            elif kind is NodeKind.ASSET_LIST:
                logger.debug("multi_asset_field", key=key, count=len(value))
                # Elements are the story's own dicts, so the list is updated in place
                for item in value:
                    if is_asset(item):
                        changed = self.sync_asset(item) or changed
            elif kind is NodeKind.LIST:
                for item in value:
                    if isinstance(item, dict):
                        changed = self.sync_node(item, depth + 1) or changed
            elif kind is NodeKind.MAPPING:
                changed = self.sync_node(value, depth + 1) or changed

        return changed

    def sync_asset(self, asset: dict[str, Any]) -> bool:
        """Apply library meta-data to one embedded asset.

        Per field: skip when the library has no value, when the story already
        has the same value, or when the story has a different non-empty value
        and ``overwrite`` is off. Otherwise the library value is written to
        both the top-level key and ``meta_data``.

        Returns:
            True if at least one field was written.
        """
        self.stats.assets_seen += 1
        filename = asset.get("filename")
        library_asset = self.library.get(asset.get("id"))

        if library_asset is None:
            self.stats.assets_missing += 1
            logger.debug("asset_not_in_library", filename=filename, asset_id=asset.get("id"))
            return False

        meta_data = asset.get("meta_data")
        if not isinstance(meta_data, dict):
            meta_data = {}

        changed = False
        for field in self.fields:
            library_value = library_asset.value_for(field)
            if not library_value:
                logger.debug("field_not_set_in_library", filename=filename, field=field)
                continue

            current = meta_data.get(field) if field in meta_data else asset.get(field)
            if current == library_value:
                logger.debug("field_identical", filename=filename, field=field)
                continue
            if current and not self.overwrite:
                logger.debug(
                    "field_differs_skipped",
                    filename=filename,
                    field=field,
                    story_value=current,
                    library_value=library_value,
                    hint="use --overwrite to force sync",
                )
                continue

            asset[field] = library_value
            meta_data[field] = library_value
            asset["meta_data"] = meta_data
            self.stats.fields_updated += 1
            changed = True
            logger.debug(
                "field_updated",
                filename=filename,
                field=field,
                old_value=current,
                new_value=library_value,
            )

        return changed
