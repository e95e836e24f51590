"""In-memory index of the space's asset library."""

from typing import Any, Iterable, Optional

from storyblok_mapi import LibraryAsset


class AssetLibrary:
    """Library assets keyed by their numeric id.

    Fetched once per run and read-only afterwards.
    """

    def __init__(self, assets: Iterable[LibraryAsset]) -> None:
        self._by_id: dict[int, LibraryAsset] = {asset.id: asset for asset in assets}

    @classmethod
    def from_api(cls, items: Iterable[dict[str, Any]]) -> "AssetLibrary":
        """Build from raw ``spaces/{id}/assets`` items."""
        return cls(LibraryAsset.model_validate(item) for item in items)

    def get(self, asset_id: Any) -> Optional[LibraryAsset]:
        """Exact id lookup. Non-integer ids never match."""
        if isinstance(asset_id, bool) or not isinstance(asset_id, int):
            return None
        return self._by_id.get(asset_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, asset_id: object) -> bool:
        return self.get(asset_id) is not None
