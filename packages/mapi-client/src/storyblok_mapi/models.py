"""Pydantic models for Management API list responses.

Only the fields the sync reads are declared; everything else the API sends
is ignored. Full story payloads are deliberately NOT modelled: they are
written back verbatim, so they stay plain dicts.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

META_FIELDS = ("alt", "title", "copyright", "source")


class LibraryAsset(BaseModel):
    """An asset in the space's asset library (the canonical meta-data)."""

    model_config = ConfigDict(extra="ignore")

    id: int
    filename: Optional[str] = None
    meta_data: dict[str, Any] = Field(default_factory=dict)
    alt: Optional[str] = None
    title: Optional[str] = None
    copyright: Optional[str] = None
    source: Optional[str] = None

    def value_for(self, field: str) -> Any:
        """Library value of a meta-data field.

        ``meta_data`` wins; the top-level attribute is the fallback for
        spaces whose assets predate the ``meta_data`` map.
        """
        value = self.meta_data.get(field)
        if not value and field in META_FIELDS:
            value = getattr(self, field)
        return value


class StorySummary(BaseModel):
    """A story as returned by the list endpoint (no content)."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str = ""
    full_slug: str = ""
    is_folder: bool = False
    content_type: Optional[str] = None
