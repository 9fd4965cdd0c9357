"""Tests for the host-owned cache sweeper."""

import asyncio

import pytest

from gamesync.cache import CacheSweeper, TtlCache
from gamesync.config import CacheConfig


class TestCacheSweeper:
    """Tests for CacheSweeper."""

    @pytest.mark.asyncio
    async def test_sweeps_on_interval(self) -> None:
        """Test that expired entries disappear without any read."""
        cache: TtlCache[int] = TtlCache(ttl_seconds=0.01)
        cache.set("76561198000000001", 1)

        async with CacheSweeper(cache, interval_seconds=0.02) as sweeper:
            assert sweeper.is_running
            await asyncio.sleep(0.1)

        assert len(cache) == 0
        assert sweeper.is_running is False

    @pytest.mark.asyncio
    async def test_not_started_implicitly(self) -> None:
        """Test that constructing a sweeper schedules nothing."""
        cache: TtlCache[int] = TtlCache(ttl_seconds=0)
        cache.set("76561198000000001", 1)

        sweeper = CacheSweeper(cache, interval_seconds=0.01)
        await asyncio.sleep(0.05)

        assert sweeper.is_running is False
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_stop_is_idempotent(self) -> None:
        """Test stopping twice and stopping before start."""
        sweeper = CacheSweeper(TtlCache(ttl_seconds=60), interval_seconds=1)

        await sweeper.stop()
        sweeper.start()
        await sweeper.stop()
        await sweeper.stop()

        assert sweeper.is_running is False

    def test_interval_must_be_positive(self) -> None:
        """Test constructor validation."""
        with pytest.raises(ValueError):
            CacheSweeper(TtlCache(ttl_seconds=60), interval_seconds=0)

    @pytest.mark.asyncio
    async def test_from_config_uses_sweep_interval(self) -> None:
        """Test that the configured sweep interval drives the sweeper."""
        cache: TtlCache[int] = TtlCache(ttl_seconds=0.01)
        cache.set("76561198000000001", 1)

        sweeper = CacheSweeper.from_config(cache, CacheConfig(sweep_interval_seconds=0.02))
        async with sweeper:
            await asyncio.sleep(0.1)

        assert len(cache) == 0
