"""Async client for the Storyblok Management API (MAPI).

Provides the three calls the asset sync needs:

- ``get_all(path)``: every item of a paginated collection
- ``get(path)``: a single resource
- ``put(path, body)``: update a resource

Authentication, pagination, client-side rate limiting, and 429 retries are
handled here so callers only deal with resource paths relative to the
regional API root, e.g. ``spaces/12345/stories``.

Example:
    >>> async with ManagementClient(oauth_token="...", region="eu") as client:
    ...     assets = await client.get_all("spaces/12345/assets")
    ...     story = (await client.get("spaces/12345/stories/678"))["story"]
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx

from asset_sync_common import get_logger
from storyblok_mapi.errors import (
    MapiAPIError,
    MapiConfigError,
    MapiNotFoundError,
    MapiRateLimitError,
)
from storyblok_mapi.rate_limiter import RateLimiter

logger = get_logger(__name__)

REGION_BASE_URLS = {
    "eu": "https://mapi.storyblok.com/v1",
    "us": "https://api-us.storyblok.com/v1",
    "ap": "https://api-ap.storyblok.com/v1",
    "ca": "https://api-ca.storyblok.com/v1",
    "cn": "https://app.storyblokchina.cn/v1",
}
REGIONS = tuple(REGION_BASE_URLS)

PER_PAGE = 100  # MAPI maximum
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 5


class ManagementClient:
    """Async HTTP client for one region of the Management API.

    Use as an async context manager, or call ``close()`` when done.
    """

    def __init__(
        self,
        oauth_token: str,
        region: str = "eu",
        *,
        requests_per_second: float = 3.0,
        max_retries: int = DEFAULT_MAX_RETRIES,
        timeout: float = DEFAULT_TIMEOUT,
        backoff_base: float = 1.0,
    ) -> None:
        """Initialize the client.

        Args:
            oauth_token: Personal access token of a Storyblok user
                (not a space's content delivery token)
            region: One of ``REGIONS``
            requests_per_second: Client-side throttle
            max_retries: Retries for 429 responses before giving up
            timeout: Request timeout in seconds
            backoff_base: First backoff delay when no Retry-After is sent

        Raises:
            MapiConfigError: Empty token or unknown region
        """
        if not oauth_token:
            raise MapiConfigError("An OAuth token is required for the Management API")
        if region not in REGION_BASE_URLS:
            raise MapiConfigError(f"Unknown region {region!r}, expected one of {', '.join(REGIONS)}")

        self.region = region
        self.base_url = REGION_BASE_URLS[region]
        self.max_retries = max_retries
        self.timeout = timeout
        self.backoff_base = backoff_base
        self._oauth_token = oauth_token
        self._rate_limiter = RateLimiter(requests_per_second=requests_per_second)
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "ManagementClient":
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the underlying HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Authorization": self._oauth_token,
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def get_all(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
        entity: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """Fetch every item of a paginated collection.

        Args:
            path: Collection path, e.g. ``spaces/12345/assets``
            params: Extra query parameters sent with every page
            entity: Response key holding the items. Defaults to the last
                path segment (``assets``, ``stories``, ...)

        Returns:
            All items across all pages, in API order.
        """
        entity = entity or path.rstrip("/").rsplit("/", 1)[-1]
        items: list[dict[str, Any]] = []
        page = 1

        while True:
            page_params = {**(params or {}), "per_page": PER_PAGE, "page": page}
            response = await self._request("GET", path, params=page_params)
            batch = response.json().get(entity, [])
            items.extend(batch)

            total = _parse_int_header(response, "total")
            logger.debug(
                "mapi_page_fetched",
                path=path,
                page=page,
                items=len(batch),
                total=total,
            )

            if not batch:
                break
            if total is not None:
                if page * PER_PAGE >= total:
                    break
            elif len(batch) < PER_PAGE:
                break
            page += 1

        return items

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Fetch a single resource, e.g. ``spaces/12345/stories/678``."""
        response = await self._request("GET", path, params=params)
        return response.json()

    async def put(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        """Update a resource with a JSON body."""
        response = await self._request("PUT", path, json=body)
        if not response.content:
            return {}
        return response.json()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """Send one request, retrying 429s with Retry-After / exponential backoff.

        Raises:
            MapiRateLimitError: Still throttled after ``max_retries`` retries
            MapiNotFoundError: 404
            MapiAPIError: Any other non-2xx status
            httpx.TransportError: Network failures (not retried)
        """
        client = self._get_client()
        attempt = 0

        while True:
            await self._rate_limiter.acquire()
            response = await client.request(method, path, params=params, json=json)

            if response.status_code == 429:
                retry_after = _parse_float_header(response, "retry-after")
                if attempt >= self.max_retries:
                    raise MapiRateLimitError(retry_after=retry_after, endpoint=path)
                delay = retry_after if retry_after is not None else self.backoff_base * (2**attempt)
                logger.warning(
                    "mapi_rate_limited",
                    method=method,
                    path=path,
                    attempt=attempt + 1,
                    delay=delay,
                )
                await asyncio.sleep(delay)
                attempt += 1
                continue

            if response.status_code == 404:
                raise MapiNotFoundError(endpoint=path)
            if response.is_error:
                raise MapiAPIError(response.status_code, _error_message(response), endpoint=path)
            return response


def _parse_int_header(response: httpx.Response, name: str) -> Optional[int]:
    value = response.headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_float_header(response: httpx.Response, name: str) -> Optional[float]:
    value = response.headers.get(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _error_message(response: httpx.Response) -> str:
    """Best-effort error text from a MAPI error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        for key in ("error", "message", "errors"):
            if key in body:
                return str(body[key])
    return str(body)
