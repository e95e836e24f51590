"""Pytest fixtures for sync tests."""

from typing import Any, Optional

import pytest

from asset_sync import AssetLibrary
from storyblok_mapi import LibraryAsset


def make_asset(
    asset_id: int = 101,
    filename: str = "https://a.storyblok.com/f/1/hero.jpg",
    **meta: Optional[str],
) -> dict[str, Any]:
    """An embedded asset field as it appears in story content."""
    asset: dict[str, Any] = {
        "id": asset_id,
        "fieldtype": "asset",
        "filename": filename,
        "name": "",
        "focus": "",
        "meta_data": {},
    }
    for field, value in meta.items():
        asset[field] = value
        asset["meta_data"][field] = value
    return asset


@pytest.fixture
def asset_factory():
    return make_asset


@pytest.fixture
def library() -> AssetLibrary:
    """Library with one fully described asset (101) and one bare asset (102)."""
    return AssetLibrary(
        [
            LibraryAsset(
                id=101,
                filename="https://a.storyblok.com/f/1/hero.jpg",
                meta_data={
                    "alt": "Library alt",
                    "title": "Library title",
                    "copyright": "ACME",
                    "source": "Studio",
                },
            ),
            LibraryAsset(
                id=102,
                filename="https://a.storyblok.com/f/1/bare.jpg",
                meta_data={},
            ),
        ]
    )


@pytest.fixture
def story_factory():
    """Full story payloads as returned by the detail endpoint."""

    def _make(story_id: int = 1, full_slug: str = "home", content: Optional[dict] = None):
        return {
            "id": story_id,
            "name": full_slug.title(),
            "full_slug": full_slug,
            "is_folder": False,
            "content": content if content is not None else {"component": "page"},
        }

    return _make
