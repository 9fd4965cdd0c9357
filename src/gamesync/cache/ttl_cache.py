"""
In-memory TTL cache for Steam API responses.

Entries expire lazily on read once they are older than the configured
time-to-live. Bulk removal of stale entries is exposed through sweep(),
which the owning process schedules (see CacheSweeper).
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from gamesync.logger import get_logger

T = TypeVar("T")


class CacheKind(str, Enum):
    """Kinds of cached Steam responses."""

    GAMES = "games"
    PROFILE = "profile"


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached payload and the monotonic time it was stored."""

    payload: T
    stored_at: float


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time view of cache contents."""

    total_entries: int
    valid_entries: int
    expired_entries: int
    ttl_seconds: float


def make_cache_key(steam_id: str, kind: CacheKind | str = CacheKind.GAMES) -> str:
    """Build the storage key for an identifier and request kind."""
    return f"steam_{CacheKind(kind).value}_{steam_id}"


class TtlCache(Generic[T]):
    """
    Keyed store with time-based expiry.

    Payloads are returned as stored; callers must treat them as read-only.

    Example:
        >>> cache: TtlCache[LibrarySnapshot] = TtlCache(ttl_seconds=3600)
        >>> cache.set("76561197960287930", snapshot, CacheKind.GAMES)
        >>> cache.get("76561197960287930", CacheKind.GAMES)
    """

    def __init__(
        self,
        ttl_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the cache.

        Args:
            ttl_seconds: Maximum entry age before it is considered stale
            clock: Monotonic time source in seconds (injectable for tests)
        """
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must be non-negative")
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}
        self._logger = get_logger(__name__, component="cache")

    @property
    def ttl_seconds(self) -> float:
        """Configured time-to-live."""
        return self._ttl

    def _is_expired(self, entry: CacheEntry[T], now: float) -> bool:
        return now - entry.stored_at > self._ttl

    def get(self, steam_id: str, kind: CacheKind | str = CacheKind.GAMES) -> T | None:
        """Return the cached payload, or None if missing or expired."""
        key = make_cache_key(steam_id, kind)
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._is_expired(entry, self._clock()):
            del self._entries[key]
            self._logger.debug("Evicted expired entry", key=key)
            return None

        return entry.payload

    def set(self, steam_id: str, payload: T, kind: CacheKind | str = CacheKind.GAMES) -> None:
        """Store a payload, replacing any existing entry for the same key."""
        key = make_cache_key(steam_id, kind)
        self._entries[key] = CacheEntry(payload=payload, stored_at=self._clock())

    def sweep(self) -> int:
        """
        Remove every expired entry.

        Returns:
            int: Number of entries removed
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry, now)]
        for key in expired:
            del self._entries[key]

        if expired:
            self._logger.debug("Swept expired entries", removed=len(expired))
        return len(expired)

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def stats(self) -> CacheStats:
        """Count valid and expired entries as of now."""
        now = self._clock()
        expired = sum(1 for entry in self._entries.values() if self._is_expired(entry, now))
        return CacheStats(
            total_entries=len(self._entries),
            valid_entries=len(self._entries) - expired,
            expired_entries=expired,
            ttl_seconds=self._ttl,
        )

    def __len__(self) -> int:
        return len(self._entries)
