"""
Data contracts for IPlayerService/GetOwnedGames responses.
"""

from pydantic import BaseModel, ConfigDict, Field


class OwnedGame(BaseModel):
    """
    A single game record as returned by GetOwnedGames.

    Optional fields stay None when Steam omits them; defaults are applied
    during normalization, not here.
    """

    model_config = ConfigDict(frozen=True)

    appid: int = Field(..., description="Steam application ID")
    name: str | None = Field(default=None, description="Display name (needs include_appinfo)")
    playtime_forever: int | None = Field(default=None, ge=0, description="Total playtime (minutes)")
    playtime_2weeks: int | None = Field(
        default=None, ge=0, description="Playtime in last 2 weeks (minutes)"
    )
    img_icon_url: str | None = Field(default=None, description="Icon image hash")
    img_logo_url: str | None = Field(default=None, description="Logo image hash")
    has_community_visible_stats: bool | None = Field(
        default=None, description="Whether the game exposes public stats"
    )


class OwnedGamesResponse(BaseModel):
    """
    Inner payload of GetOwnedGames.

    Private profiles come back as an empty object, so both fields are optional.
    """

    game_count: int | None = Field(default=None, ge=0)
    games: list[OwnedGame] | None = None

    @property
    def is_visible(self) -> bool:
        """False when Steam withheld the games collection."""
        return self.games is not None


class OwnedGamesAPIResponse(BaseModel):
    """Wrapper for owned games API response."""

    response: OwnedGamesResponse | None = None
