"""
Steam Web API integration.

This module provides the Steam client and everything it returns or
raises: identifier validation, domain models, and the error taxonomy.
"""

from gamesync.steam.client import SteamApiClient, create_client
from gamesync.steam.errors import (
    ApiUnavailableError,
    ErrorCode,
    InsufficientIdentifiersError,
    InvalidSteamIdError,
    NetworkError,
    PrivateProfileError,
    ProfileNotFoundError,
    RateLimitExceededError,
    SteamAPIError,
)
from gamesync.steam.identifiers import validate_steam_id
from gamesync.steam.models import (
    ClientStats,
    LibrarySnapshot,
    NormalizedGame,
    OverlapGame,
    OverlapResult,
    PlayerProfile,
)
from gamesync.steam.overlap import intersect_libraries
from gamesync.steam.transport import Fetch, HttpxTransport, TransportError, TransportResponse

__all__ = [
    # Client
    "SteamApiClient",
    "create_client",
    "validate_steam_id",
    "intersect_libraries",
    # Transport
    "Fetch",
    "HttpxTransport",
    "TransportError",
    "TransportResponse",
    # Models
    "ClientStats",
    "LibrarySnapshot",
    "NormalizedGame",
    "OverlapGame",
    "OverlapResult",
    "PlayerProfile",
    # Errors
    "ApiUnavailableError",
    "ErrorCode",
    "InsufficientIdentifiersError",
    "InvalidSteamIdError",
    "NetworkError",
    "PrivateProfileError",
    "ProfileNotFoundError",
    "RateLimitExceededError",
    "SteamAPIError",
]
