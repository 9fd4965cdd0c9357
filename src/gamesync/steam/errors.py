"""
Error taxonomy for the Steam client.

Every failure the client surfaces is a SteamAPIError subclass carrying
a stable symbolic code, so callers can branch on either the class or
the code string.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar


class ErrorCode(str, Enum):
    """Symbolic error codes exposed to callers."""

    INVALID_STEAM_ID = "INVALID_STEAM_ID"
    PRIVATE_PROFILE = "PRIVATE_PROFILE"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    API_UNAVAILABLE = "API_UNAVAILABLE"
    NETWORK_ERROR = "NETWORK_ERROR"
    INSUFFICIENT_IDENTIFIERS = "INSUFFICIENT_IDENTIFIERS"


class SteamAPIError(Exception):
    """Base exception for Steam client errors."""

    code: ClassVar[ErrorCode]

    def __init__(
        self,
        message: str | None = None,
        *,
        steam_id: str | None = None,
        endpoint: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message or self.code.value)
        self.steam_id = steam_id
        self.endpoint = endpoint
        self.status_code = status_code
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)


class InvalidSteamIdError(SteamAPIError):
    """Raised when an identifier is not a 17-digit SteamID64."""

    code = ErrorCode.INVALID_STEAM_ID


class ProfileNotFoundError(InvalidSteamIdError):
    """
    Raised when Steam returns no player record for a well-formed identifier.

    Shares the INVALID_STEAM_ID code so handlers written against
    InvalidSteamIdError keep catching it.
    """


class PrivateProfileError(SteamAPIError):
    """Raised when a library is hidden (HTTP 403 or no games collection)."""

    code = ErrorCode.PRIVATE_PROFILE


class RateLimitExceededError(SteamAPIError):
    """Raised when Steam answers with HTTP 429."""

    code = ErrorCode.RATE_LIMIT_EXCEEDED


class ApiUnavailableError(SteamAPIError):
    """Raised for any other failing status or an unreadable response body."""

    code = ErrorCode.API_UNAVAILABLE


class NetworkError(SteamAPIError):
    """Raised when the request never produced an HTTP response."""

    code = ErrorCode.NETWORK_ERROR


class InsufficientIdentifiersError(SteamAPIError):
    """Raised when an overlap is requested for fewer than two identifiers."""

    code = ErrorCode.INSUFFICIENT_IDENTIFIERS
