"""Token bucket rate limiter for Management API requests.

Storyblok throttles the Management API per space (3 requests per second on
the smaller plans), so requests are spaced client-side before they are sent.
"""

import asyncio
import time
from typing import Optional


class RateLimiter:
    """Async token bucket.

    Example:
        >>> limiter = RateLimiter(requests_per_second=3)
        >>> await limiter.acquire()  # returns immediately while tokens remain
    """

    def __init__(self, requests_per_second: float = 3.0, burst_size: Optional[int] = None) -> None:
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        self.requests_per_second = requests_per_second
        self.burst_size = burst_size if burst_size is not None else max(1, int(requests_per_second))
        self._tokens = float(self.burst_size)
        self._last_refill = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last_refill
        self._tokens = min(self.burst_size, self._tokens + elapsed * self.requests_per_second)
        self._last_refill = now

    @property
    def available_tokens(self) -> float:
        """Tokens currently in the bucket (after refill)."""
        self._refill()
        return self._tokens

    async def acquire(self) -> None:
        """Take one token, sleeping until one is available."""
        async with self._lock:
            self._refill()
            if self._tokens < 1:
                wait = (1 - self._tokens) / self.requests_per_second
                await asyncio.sleep(wait)
                self._refill()
            self._tokens -= 1
