"""
Response caching.

Provides the in-memory TTL cache used by the Steam client and an
explicitly scheduled sweeper for purging stale entries.
"""

from gamesync.cache.sweeper import CacheSweeper
from gamesync.cache.ttl_cache import (
    CacheEntry,
    CacheKind,
    CacheStats,
    TtlCache,
    make_cache_key,
)

__all__ = [
    "CacheEntry",
    "CacheKind",
    "CacheStats",
    "CacheSweeper",
    "TtlCache",
    "make_cache_key",
]
