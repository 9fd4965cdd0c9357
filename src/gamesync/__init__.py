"""
GameSync Steam integration.

Fetches Steam game libraries with caching and rate limiting,
and finds the games a group of players has in common.
"""

from gamesync.config import Settings, get_settings
from gamesync.logger import get_logger, setup_logging

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
