"""Async client for the Storyblok Management API."""

from storyblok_mapi.client import REGION_BASE_URLS, REGIONS, ManagementClient
from storyblok_mapi.errors import (
    MapiAPIError,
    MapiConfigError,
    MapiError,
    MapiNotFoundError,
    MapiRateLimitError,
)
from storyblok_mapi.models import META_FIELDS, LibraryAsset, StorySummary
from storyblok_mapi.rate_limiter import RateLimiter

__all__ = [
    "LibraryAsset",
    "META_FIELDS",
    "ManagementClient",
    "MapiAPIError",
    "MapiConfigError",
    "MapiError",
    "MapiNotFoundError",
    "MapiRateLimitError",
    "REGIONS",
    "REGION_BASE_URLS",
    "RateLimiter",
    "StorySummary",
]
