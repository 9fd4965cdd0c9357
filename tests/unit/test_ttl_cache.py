"""Tests for the in-memory TTL cache."""

import pytest

from gamesync.cache import CacheKind, TtlCache, make_cache_key

STEAM_ID = "76561198001234567"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> TtlCache[dict[str, int]]:
    return TtlCache(ttl_seconds=60, clock=clock)


class TestCacheKeys:
    """Tests for cache key construction."""

    def test_kinds_do_not_collide(self) -> None:
        """Test that games and profile keys differ for the same identifier."""
        assert make_cache_key(STEAM_ID, CacheKind.GAMES) != make_cache_key(
            STEAM_ID, CacheKind.PROFILE
        )

    def test_key_accepts_kind_string(self) -> None:
        """Test that plain strings map to the same key as the enum."""
        assert make_cache_key(STEAM_ID, "profile") == f"steam_profile_{STEAM_ID}"
        assert make_cache_key(STEAM_ID) == f"steam_games_{STEAM_ID}"

    def test_unknown_kind_rejected(self) -> None:
        """Test that kinds outside the enum are refused."""
        with pytest.raises(ValueError):
            make_cache_key(STEAM_ID, "friends")


class TestTtlCache:
    """Tests for TtlCache get/set/expiry."""

    def test_missing_returns_none(self, cache: TtlCache[dict[str, int]]) -> None:
        """Test lookup of an absent key."""
        assert cache.get(STEAM_ID) is None

    def test_returns_same_payload_within_ttl(
        self, cache: TtlCache[dict[str, int]], clock: FakeClock
    ) -> None:
        """Test that a payload is returned unchanged up to and including the TTL."""
        payload = {"game_count": 3}
        cache.set(STEAM_ID, payload)

        clock.advance(60)

        assert cache.get(STEAM_ID) is payload

    def test_expires_after_ttl(self, cache: TtlCache[dict[str, int]], clock: FakeClock) -> None:
        """Test that a stale entry is evicted on read."""
        cache.set(STEAM_ID, {"game_count": 3})

        clock.advance(60.001)

        assert cache.get(STEAM_ID) is None
        assert len(cache) == 0

    def test_kinds_stored_separately(self, cache: TtlCache[dict[str, int]]) -> None:
        """Test that profile and games entries coexist."""
        cache.set(STEAM_ID, {"kind": 1}, CacheKind.GAMES)
        cache.set(STEAM_ID, {"kind": 2}, CacheKind.PROFILE)

        assert cache.get(STEAM_ID, CacheKind.GAMES) == {"kind": 1}
        assert cache.get(STEAM_ID, CacheKind.PROFILE) == {"kind": 2}

    def test_set_overwrites_and_refreshes_timestamp(
        self, cache: TtlCache[dict[str, int]], clock: FakeClock
    ) -> None:
        """Test that a second set replaces the payload and restarts its TTL."""
        cache.set(STEAM_ID, {"version": 1})
        clock.advance(50)
        cache.set(STEAM_ID, {"version": 2})
        clock.advance(50)

        assert cache.get(STEAM_ID) == {"version": 2}

    def test_negative_ttl_rejected(self) -> None:
        """Test constructor validation."""
        with pytest.raises(ValueError):
            TtlCache(ttl_seconds=-1)


class TestSweepAndStats:
    """Tests for sweep, clear and stats."""

    def test_sweep_removes_only_expired(
        self, cache: TtlCache[dict[str, int]], clock: FakeClock
    ) -> None:
        """Test that sweep keeps fresh entries."""
        cache.set("76561198000000001", {"n": 1})
        clock.advance(45)
        cache.set("76561198000000002", {"n": 2})
        clock.advance(30)

        removed = cache.sweep()

        assert removed == 1
        assert cache.get("76561198000000001") is None
        assert cache.get("76561198000000002") == {"n": 2}

    def test_clear_removes_everything(self, cache: TtlCache[dict[str, int]]) -> None:
        """Test unconditional clear."""
        cache.set("76561198000000001", {"n": 1})
        cache.set("76561198000000002", {"n": 2}, CacheKind.PROFILE)

        cache.clear()

        assert len(cache) == 0
        assert cache.stats().total_entries == 0

    def test_stats_is_live_view(self, cache: TtlCache[dict[str, int]], clock: FakeClock) -> None:
        """Test that the valid/expired split follows the clock."""
        cache.set("76561198000000001", {"n": 1})
        cache.set("76561198000000002", {"n": 2})

        fresh = cache.stats()
        assert fresh.total_entries == 2
        assert fresh.valid_entries == 2
        assert fresh.expired_entries == 0
        assert fresh.ttl_seconds == 60

        clock.advance(61)
        stale = cache.stats()

        assert stale.total_entries == 2
        assert stale.valid_entries == 0
        assert stale.expired_entries == 2
