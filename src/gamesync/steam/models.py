"""
Domain models returned by the Steam client.

Unlike the wire contracts these are immutable, canonically named and
carry defaults for fields Steam may omit.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import overload

from pydantic import BaseModel, ConfigDict, Field

from gamesync.cache.ttl_cache import CacheStats
from gamesync.steam.contracts import OwnedGame, PlayerSummary
from gamesync.steam.errors import SteamAPIError

STEAM_MEDIA_URL = "https://media.steampowered.com/steamcommunity/public/images/apps"


class NormalizedGame(BaseModel):
    """Canonical view of an owned game."""

    model_config = ConfigDict(frozen=True)

    app_id: int
    name: str | None = None
    playtime_forever: int = Field(default=0, ge=0, description="Total playtime (minutes)")
    playtime_2weeks: int = Field(default=0, ge=0, description="Recent playtime (minutes)")
    img_icon_url: str | None = None
    img_logo_url: str | None = None
    has_public_stats_support: bool = False

    @classmethod
    def from_owned_game(cls, game: OwnedGame) -> "NormalizedGame":
        """Apply defaults to a raw GetOwnedGames record."""
        return cls(
            app_id=game.appid,
            name=game.name,
            playtime_forever=game.playtime_forever or 0,
            playtime_2weeks=game.playtime_2weeks or 0,
            img_icon_url=game.img_icon_url,
            img_logo_url=game.img_logo_url,
            has_public_stats_support=game.has_community_visible_stats or False,
        )

    @property
    def playtime_hours(self) -> float:
        """Convert total playtime from minutes to hours."""
        return self.playtime_forever / 60

    @property
    def icon_url(self) -> str | None:
        """Full URL of the game icon, if Steam supplied its hash."""
        if not self.img_icon_url:
            return None
        return f"{STEAM_MEDIA_URL}/{self.app_id}/{self.img_icon_url}.jpg"


class LibrarySnapshot(BaseModel):
    """A user's owned games as captured at fetch time."""

    model_config = ConfigDict(frozen=True)

    steam_id: str
    game_count: int = Field(default=0, ge=0)
    games: tuple[OwnedGame, ...] = ()
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def app_ids(self) -> frozenset[int]:
        """Application IDs present in this library."""
        return frozenset(game.appid for game in self.games)


class PlayerProfile(BaseModel):
    """Public profile of a Steam user."""

    model_config = ConfigDict(frozen=True)

    steam_id: str
    persona_name: str
    profile_url: str
    avatar: str
    profile_visibility: int

    @classmethod
    def from_summary(cls, summary: PlayerSummary) -> "PlayerProfile":
        """Map a GetPlayerSummaries record onto canonical field names."""
        return cls(
            steam_id=summary.steamid,
            persona_name=summary.personaname,
            profile_url=summary.profileurl,
            avatar=summary.avatar,
            profile_visibility=summary.communityvisibilitystate,
        )

    @property
    def is_public(self) -> bool:
        """Steam reports 3 for fully public profiles."""
        return self.profile_visibility == 3


class OverlapGame(BaseModel):
    """A game owned by every requested user."""

    model_config = ConfigDict(frozen=True)

    app_id: int
    name: str | None = None
    img_icon_url: str | None = None
    owner_count: int = Field(..., ge=2)


@dataclass(frozen=True)
class OverlapResult:
    """
    Games common to all requested libraries.

    Behaves as a read-only sequence of OverlapGame. Identifiers whose
    library could not be fetched are listed in failures with the error
    that caused it; each of them contributed an empty library.
    """

    games: tuple[OverlapGame, ...] = ()
    failures: Mapping[str, SteamAPIError] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "failures", MappingProxyType(dict(self.failures)))

    @property
    def is_complete(self) -> bool:
        """True when every requested library was fetched."""
        return not self.failures

    def __iter__(self) -> Iterator[OverlapGame]:
        return iter(self.games)

    def __len__(self) -> int:
        return len(self.games)

    @overload
    def __getitem__(self, index: int) -> OverlapGame: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[OverlapGame, ...]: ...

    def __getitem__(self, index: int | slice) -> OverlapGame | tuple[OverlapGame, ...]:
        return self.games[index]


@dataclass(frozen=True)
class ClientStats:
    """Usage counters for a client instance."""

    request_count: int
    cache_stats: CacheStats
    last_request_time: datetime | None
