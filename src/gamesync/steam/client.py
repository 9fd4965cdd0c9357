"""
Steam Web API client.

Validates identifiers, serves repeated lookups from an in-memory cache,
paces outbound requests through a rate limiter, and maps every failure
onto the SteamAPIError taxonomy. Instances are constructed explicitly;
there is no shared module-level client.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, TypeVar
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from gamesync.cache.ttl_cache import CacheKind, TtlCache
from gamesync.config import RetryConfig, Settings, SteamAPIConfig, get_settings
from gamesync.logger import get_logger
from gamesync.steam.contracts import (
    OwnedGame,
    OwnedGamesAPIResponse,
    PlayerSummariesAPIResponse,
)
from gamesync.steam.errors import (
    ApiUnavailableError,
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
    OverlapResult,
    PlayerProfile,
)
from gamesync.steam.overlap import intersect_libraries
from gamesync.steam.transport import Fetch, HttpxTransport, TransportError
from gamesync.steam.utils.rate_limiter import RateLimiter, RateLimiterConfig

M = TypeVar("M", bound=BaseModel)

CachedPayload = LibrarySnapshot | PlayerProfile


class SteamApiClient:
    """
    Client for the Steam Web API endpoints GameSync relies on.

    Example:
        >>> async with SteamApiClient(SteamAPIConfig()) as steam:
        ...     library = await steam.get_owned_games("76561197960287930")
        ...     common = await steam.find_overlapping_games([id_a, id_b])
    """

    def __init__(
        self,
        config: SteamAPIConfig,
        *,
        fetch: Fetch | None = None,
        cache: TtlCache[CachedPayload] | None = None,
        rate_limiter: RateLimiter | None = None,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Steam endpoint, key and pacing configuration
            fetch: Transport coroutine (an HttpxTransport is created if None)
            cache: Response cache (a one-hour TtlCache is created if None)
            rate_limiter: Request pacer (built from config if None)
            retry_config: Retry policy for transient failures
        """
        self._config = config
        self._api_key = config.api_key.get_secret_value()
        self._transport: HttpxTransport | None = None
        if fetch is None:
            self._transport = HttpxTransport(timeout=config.timeout_seconds)
            fetch = self._transport
        self._fetch = fetch
        self._cache: TtlCache[CachedPayload] = (
            cache if cache is not None else TtlCache(ttl_seconds=3600)
        )
        self._rate_limiter = rate_limiter or RateLimiter(
            RateLimiterConfig(requests_per_second=config.requests_per_second)
        )
        self._retry_config = retry_config or RetryConfig()
        self._request_count = 0
        self._last_request_time: datetime | None = None
        self._logger = get_logger(__name__, component="steam_api")

    @property
    def cache(self) -> TtlCache[CachedPayload]:
        """Response cache backing this client."""
        return self._cache

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._transport is not None:
            await self._transport.close()

    async def __aenter__(self) -> "SteamApiClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    def _build_url(self, path: str, params: Mapping[str, str]) -> str:
        return f"{self._config.base_url}{path}?{urlencode(params)}"

    def _ensure_valid(self, steam_id: object) -> str:
        if not validate_steam_id(steam_id):
            raise InvalidSteamIdError(f"Invalid Steam ID: {steam_id!r}")
        return str(steam_id)

    def _create_retry_decorator(self) -> Any:
        """Create retry decorator with current configuration."""
        return retry(
            retry=retry_if_exception_type((NetworkError, ApiUnavailableError)),
            stop=stop_after_attempt(self._retry_config.max_attempts),
            wait=wait_exponential(
                multiplier=self._retry_config.base_delay_seconds,
                max=self._retry_config.max_delay_seconds,
                exp_base=self._retry_config.exponential_base,
            ),
            before_sleep=self._log_retry_attempt,
            reraise=True,
        )

    def _log_retry_attempt(self, retry_state: Any) -> None:
        """Log retry attempts for observability."""
        self._logger.warning(
            "Retrying request",
            attempt=retry_state.attempt_number,
            wait_seconds=retry_state.next_action.sleep if retry_state.next_action else 0,
            exception=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    @staticmethod
    def _error_for_status(status: int, **context: Any) -> SteamAPIError:
        if status == 429:
            return RateLimitExceededError("Steam rate limit exceeded", status_code=status, **context)
        if status == 403:
            return PrivateProfileError("Steam profile is private", status_code=status, **context)
        return ApiUnavailableError(f"Steam API error: {status}", status_code=status, **context)

    async def _request(self, url: str, *, endpoint: str, steam_id: str) -> Any:
        """
        Issue one rate-limited GET and return the decoded JSON body.

        Raises:
            NetworkError: If the transport could not produce a response
            RateLimitExceededError: On HTTP 429
            PrivateProfileError: On HTTP 403
            ApiUnavailableError: On any other failing status or a non-JSON body
        """
        context: dict[str, Any] = {"steam_id": steam_id, "endpoint": endpoint}

        @self._create_retry_decorator()
        async def _attempt() -> Any:
            await self._rate_limiter.acquire()
            self._request_count += 1
            self._last_request_time = datetime.now(timezone.utc)
            self._logger.debug("Making request", endpoint=endpoint, steam_id=steam_id)

            try:
                response = await self._fetch(url)
            except (TransportError, httpx.TransportError, OSError) as e:
                raise NetworkError("Network request failed", original_error=e, **context) from e

            if not response.ok:
                raise self._error_for_status(response.status, **context)

            try:
                return await response.json()
            except ValueError as e:
                raise ApiUnavailableError(
                    "Response body is not valid JSON",
                    status_code=response.status,
                    original_error=e,
                    **context,
                ) from e

        try:
            return await _attempt()
        except SteamAPIError as e:
            self._logger.error(
                "Request failed",
                endpoint=endpoint,
                steam_id=steam_id,
                error_code=e.code.value,
                status_code=e.status_code,
            )
            raise

    def _parse(self, model: type[M], raw_data: Any, *, endpoint: str, steam_id: str) -> M:
        try:
            return model.model_validate(raw_data)
        except PydanticValidationError as e:
            self._logger.error(
                "Validation failed",
                endpoint=endpoint,
                steam_id=steam_id,
                errors=e.error_count(),
            )
            raise ApiUnavailableError(
                f"Response validation failed: {e.error_count()} error(s)",
                steam_id=steam_id,
                endpoint=endpoint,
                original_error=e,
            ) from e

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_owned_games(self, steam_id: str, use_cache: bool = True) -> LibrarySnapshot:
        """
        Fetch a user's owned games.

        Args:
            steam_id: SteamID64 of the user
            use_cache: Serve a fresh cached snapshot without touching the network

        Returns:
            LibrarySnapshot: The user's library at fetch time

        Raises:
            InvalidSteamIdError: If steam_id is not a 17-digit SteamID64
            PrivateProfileError: If Steam withholds the library
            RateLimitExceededError: If Steam answers 429
            ApiUnavailableError: For other upstream failures
            NetworkError: If no response was received
        """
        steam_id = self._ensure_valid(steam_id)

        if use_cache:
            cached = self._cache.get(steam_id, CacheKind.GAMES)
            if isinstance(cached, LibrarySnapshot):
                self._logger.debug("Cache hit", steam_id=steam_id, kind=CacheKind.GAMES.value)
                return cached

        endpoint = self._config.owned_games_path
        url = self._build_url(
            endpoint,
            {"key": self._api_key, "steamid": steam_id, **self._config.default_params},
        )
        raw_data = await self._request(url, endpoint=endpoint, steam_id=steam_id)
        parsed = self._parse(OwnedGamesAPIResponse, raw_data, endpoint=endpoint, steam_id=steam_id)

        # Steam answers private profiles with an empty response object
        if parsed.response is None or parsed.response.games is None:
            self._logger.info("Library not visible", steam_id=steam_id)
            raise PrivateProfileError(
                "Steam profile is private", steam_id=steam_id, endpoint=endpoint
            )

        snapshot = LibrarySnapshot(
            steam_id=steam_id,
            game_count=parsed.response.game_count or 0,
            games=tuple(parsed.response.games),
            fetched_at=datetime.now(timezone.utc),
        )
        self._cache.set(steam_id, snapshot, CacheKind.GAMES)

        self._logger.info(
            "Owned games fetched",
            steam_id=steam_id,
            game_count=snapshot.game_count,
        )
        return snapshot

    async def get_player_summary(self, steam_id: str, use_cache: bool = True) -> PlayerProfile:
        """
        Fetch a user's public profile.

        Raises:
            InvalidSteamIdError: If steam_id is malformed
            ProfileNotFoundError: If Steam returns no player for steam_id
        """
        steam_id = self._ensure_valid(steam_id)

        if use_cache:
            cached = self._cache.get(steam_id, CacheKind.PROFILE)
            if isinstance(cached, PlayerProfile):
                self._logger.debug("Cache hit", steam_id=steam_id, kind=CacheKind.PROFILE.value)
                return cached

        endpoint = self._config.player_summaries_path
        url = self._build_url(endpoint, {"key": self._api_key, "steamids": steam_id})
        raw_data = await self._request(url, endpoint=endpoint, steam_id=steam_id)
        parsed = self._parse(
            PlayerSummariesAPIResponse, raw_data, endpoint=endpoint, steam_id=steam_id
        )

        if parsed.response is None or not parsed.response.players:
            raise ProfileNotFoundError(
                f"No Steam profile found for {steam_id}", steam_id=steam_id, endpoint=endpoint
            )

        profile = PlayerProfile.from_summary(parsed.response.players[0])
        self._cache.set(steam_id, profile, CacheKind.PROFILE)

        self._logger.info("Player summary fetched", steam_id=steam_id)
        return profile

    @staticmethod
    def process_games_list(
        raw_games: Iterable[OwnedGame | Mapping[str, Any]],
    ) -> list[NormalizedGame]:
        """Normalize raw game records, defaulting missing playtimes and stats flag."""
        return [
            NormalizedGame.from_owned_game(
                game if isinstance(game, OwnedGame) else OwnedGame.model_validate(game)
            )
            for game in raw_games
        ]

    async def find_overlapping_games(self, steam_ids: Sequence[str]) -> OverlapResult:
        """
        Find games owned by every listed user.

        Libraries are fetched one at a time. A library that fails to load
        is logged, recorded in the result's failures and treated as empty,
        so any failure yields an empty intersection rather than an error.

        Args:
            steam_ids: Two or more SteamID64 values

        Returns:
            OverlapResult: Common games in the first user's library order

        Raises:
            InsufficientIdentifiersError: If fewer than two IDs are given
        """
        steam_ids = list(steam_ids or [])
        if len(steam_ids) < 2:
            raise InsufficientIdentifiersError("At least 2 Steam IDs required to find overlaps")

        self._logger.info("Starting overlap search", total_users=len(steam_ids))

        libraries: list[Sequence[OwnedGame]] = []
        failures: dict[str, SteamAPIError] = {}

        for steam_id in steam_ids:
            try:
                library = await self.get_owned_games(steam_id)
            except SteamAPIError as e:
                self._logger.warning(
                    "Failed to fetch library",
                    steam_id=steam_id,
                    error_code=e.code.value,
                    error=str(e),
                )
                failures[steam_id] = e
                libraries.append(())
            else:
                libraries.append(library.games)

        games = intersect_libraries(libraries, owner_count=len(steam_ids))

        self._logger.info(
            "Overlap search complete",
            total_users=len(steam_ids),
            failed=len(failures),
            common_games=len(games),
        )
        return OverlapResult(games=tuple(games), failures=failures)

    def get_stats(self) -> ClientStats:
        """Return request counters and a live view of the cache."""
        return ClientStats(
            request_count=self._request_count,
            cache_stats=self._cache.stats(),
            last_request_time=self._last_request_time,
        )


def create_client(
    settings: Settings | None = None,
    *,
    fetch: Fetch | None = None,
) -> SteamApiClient:
    """
    Build a client wired from application settings.

    Args:
        settings: Application settings (loaded from the environment if None)
        fetch: Optional transport override

    Returns:
        SteamApiClient: A client with its own cache and rate limiter
    """
    settings = settings or get_settings()
    return SteamApiClient(
        settings.steam,
        fetch=fetch,
        cache=TtlCache(ttl_seconds=settings.cache.ttl_seconds),
        retry_config=settings.retry,
    )
