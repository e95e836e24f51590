"""Custom exceptions for the Storyblok Management API client."""

from typing import Optional


class MapiError(Exception):
    """Base exception for all Management API client errors."""

    pass


class MapiConfigError(MapiError):
    """Client was constructed with an invalid region or missing token."""

    pass


class MapiAPIError(MapiError):
    """Non-success HTTP response from the Management API."""

    def __init__(self, status_code: int, message: str, endpoint: str = "") -> None:
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        super().__init__(f"MAPI error {status_code} on {endpoint or '<unknown>'}: {message}")


class MapiRateLimitError(MapiAPIError):
    """429 Too Many Requests, raised once retries are exhausted."""

    def __init__(self, retry_after: Optional[float] = None, endpoint: str = "") -> None:
        self.retry_after = retry_after
        if retry_after is not None:
            message = f"Rate limit exceeded, retry after {retry_after}s"
        else:
            message = "Rate limit exceeded"
        super().__init__(429, message, endpoint)


class MapiNotFoundError(MapiAPIError):
    """404 for a resource path."""

    def __init__(self, endpoint: str) -> None:
        super().__init__(404, "Resource not found", endpoint)
