"""
Utility modules for the Steam client.

Provides request pacing shared by all Steam endpoints.
"""

from gamesync.steam.utils.rate_limiter import RateLimiter, RateLimiterConfig

__all__ = [
    "RateLimiter",
    "RateLimiterConfig",
]
