"""
Data contracts for Steam Web API responses.

This module provides Pydantic models that define the expected
structure of data from the Steam endpoints the client consumes.
"""

from gamesync.steam.contracts.owned_games import (
    OwnedGame,
    OwnedGamesAPIResponse,
    OwnedGamesResponse,
)
from gamesync.steam.contracts.player_summaries import (
    PlayerSummariesAPIResponse,
    PlayerSummariesResponse,
    PlayerSummary,
)

__all__ = [
    "OwnedGame",
    "OwnedGamesAPIResponse",
    "OwnedGamesResponse",
    "PlayerSummariesAPIResponse",
    "PlayerSummariesResponse",
    "PlayerSummary",
]
