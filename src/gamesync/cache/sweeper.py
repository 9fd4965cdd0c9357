"""
Host-owned periodic cache sweeping.

The cache itself never schedules work. A process that keeps a client
alive (a bot, a web worker) starts a CacheSweeper explicitly and stops
it on shutdown.
"""

import asyncio
from typing import Any

from gamesync.cache.ttl_cache import TtlCache
from gamesync.config import CacheConfig
from gamesync.logger import get_logger


class CacheSweeper:
    """
    Runs TtlCache.sweep() on a fixed interval in a background task.

    Example:
        >>> async with CacheSweeper(cache, interval_seconds=1800):
        ...     await serve_forever()
    """

    def __init__(self, cache: TtlCache[Any], *, interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._cache = cache
        self._interval = interval_seconds
        self._task: asyncio.Task[None] | None = None
        self._logger = get_logger(__name__, component="cache_sweeper")

    @classmethod
    def from_config(cls, cache: TtlCache[Any], config: CacheConfig) -> "CacheSweeper":
        """Build a sweeper using the configured sweep interval."""
        return cls(cache, interval_seconds=config.sweep_interval_seconds)

    @property
    def is_running(self) -> bool:
        """Whether the background task is active."""
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            removed = self._cache.sweep()
            self._logger.debug("Periodic sweep complete", removed=removed)

    def start(self) -> None:
        """Start sweeping. Must be called from a running event loop."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        self._logger.info("Cache sweeper started", interval_seconds=self._interval)

    async def stop(self) -> None:
        """Cancel the background task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self._logger.info("Cache sweeper stopped")

    async def __aenter__(self) -> "CacheSweeper":
        self.start()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.stop()
