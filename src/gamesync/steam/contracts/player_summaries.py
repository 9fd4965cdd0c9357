"""
Data contracts for ISteamUser/GetPlayerSummaries responses.
"""

from pydantic import BaseModel, Field


class PlayerSummary(BaseModel):
    """Public profile fields of a single player."""

    steamid: str = Field(..., description="SteamID64 of the player")
    personaname: str = Field(default="", description="Display name")
    profileurl: str = Field(default="", description="Community profile URL")
    avatar: str = Field(default="", description="32x32 avatar URL")
    communityvisibilitystate: int = Field(
        default=1, description="1 = private/friends only, 3 = public"
    )


class PlayerSummariesResponse(BaseModel):
    """Inner payload of GetPlayerSummaries."""

    players: list[PlayerSummary] = Field(default_factory=list)


class PlayerSummariesAPIResponse(BaseModel):
    """Wrapper for player summaries API response."""

    response: PlayerSummariesResponse | None = None
