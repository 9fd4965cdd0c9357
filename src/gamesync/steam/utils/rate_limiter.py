"""
Rate limiter for API requests.

Enforces a minimum spacing between consecutive outbound requests so a
single client stays within Steam's per-key quota (1 request per second
by default).
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from gamesync.logger import get_logger


@dataclass
class RateLimiterConfig:
    """Configuration for rate limiter."""

    requests_per_second: float = 1.0

    def __post_init__(self) -> None:
        if self.requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")

    @property
    def min_interval(self) -> float:
        """Minimum seconds between two granted requests."""
        return 1.0 / self.requests_per_second


@dataclass
class RateLimiter:
    """
    Minimum-interval rate limiter.

    Callers are granted in arrival order; each grant happens at least
    min_interval seconds after the previous one. There is no queue limit
    and no timeout.

    Example:
        >>> limiter = RateLimiter(RateLimiterConfig(requests_per_second=1))
        >>> async with limiter:
        ...     await make_request()
    """

    config: RateLimiterConfig = field(default_factory=RateLimiterConfig)
    clock: Callable[[], float] = time.monotonic
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    _last_granted: float | None = field(init=False, default=None)
    _lock: asyncio.Lock = field(init=False, default_factory=asyncio.Lock)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        """Initialize rate limiter state."""
        self._logger = get_logger(__name__, component="rate_limiter")

    @property
    def last_granted(self) -> float | None:
        """Clock reading of the most recent grant, if any."""
        return self._last_granted

    async def acquire(self) -> None:
        """
        Wait until the minimum interval since the previous grant has passed.

        The lock serializes waiters, and asyncio.Lock wakes them in FIFO order.
        """
        async with self._lock:
            if self._last_granted is not None:
                elapsed = self.clock() - self._last_granted
                wait_time = self.config.min_interval - elapsed
                if wait_time > 0:
                    self._logger.debug(
                        "Rate limit reached, waiting",
                        wait_seconds=round(wait_time, 3),
                    )
                    await self.sleep(wait_time)

            self._last_granted = self.clock()

    async def __aenter__(self) -> "RateLimiter":
        """Acquire on context entry."""
        await self.acquire()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """No-op on context exit."""
        pass
