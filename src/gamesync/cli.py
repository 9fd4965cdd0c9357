"""
Command-line interface for GameSync.

Provides commands to inspect Steam libraries and find shared games.
"""

import asyncio
import json
import sys
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from gamesync.config import get_settings
from gamesync.logger import get_logger, setup_logging
from gamesync.steam import SteamAPIError, create_client

logger = get_logger(__name__, component="cli")


class CLIOutput(BaseModel):
    """Structured output for CLI commands."""

    success: bool
    command: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    data: dict[str, Any] | list[Any] | None = None
    error: str | None = None
    error_code: str | None = None


def print_json(output: CLIOutput) -> None:
    """Print output as formatted JSON."""
    print(json.dumps(output.model_dump(mode="json"), indent=2, default=str))


def error_output(command: str, error: SteamAPIError) -> CLIOutput:
    """Build a failure payload from a client error."""
    return CLIOutput(
        success=False,
        command=command,
        error=str(error),
        error_code=error.code.value,
    )


async def cmd_owned_games(steam_id: str, *, use_cache: bool = True) -> CLIOutput:
    """Fetch and normalize a user's owned games."""
    logger.info("Fetching owned games", steam_id=steam_id)

    async with create_client() as steam:
        try:
            library = await steam.get_owned_games(steam_id, use_cache=use_cache)
        except SteamAPIError as e:
            return error_output("owned-games", e)
        games = steam.process_games_list(library.games)

    return CLIOutput(
        success=True,
        command="owned-games",
        data={
            "steam_id": library.steam_id,
            "game_count": library.game_count,
            "fetched_at": library.fetched_at.isoformat(),
            "games": [game.model_dump() for game in games],
        },
    )


async def cmd_profile(steam_id: str) -> CLIOutput:
    """Fetch a user's public profile."""
    logger.info("Fetching profile", steam_id=steam_id)

    async with create_client() as steam:
        try:
            profile = await steam.get_player_summary(steam_id)
        except SteamAPIError as e:
            return error_output("profile", e)

    return CLIOutput(success=True, command="profile", data=profile.model_dump())


async def cmd_overlap(steam_ids_str: str) -> CLIOutput:
    """Find games shared by every listed user."""
    steam_ids = [s.strip() for s in steam_ids_str.split(",") if s.strip()]
    logger.info("Finding overlapping games", total_users=len(steam_ids))

    async with create_client() as steam:
        try:
            result = await steam.find_overlapping_games(steam_ids)
        except SteamAPIError as e:
            return error_output("overlap", e)
        stats = steam.get_stats()

    return CLIOutput(
        success=True,
        command="overlap",
        data={
            "games": [game.model_dump() for game in result],
            "failures": {
                steam_id: {"code": error.code.value, "message": str(error)}
                for steam_id, error in result.failures.items()
            },
            "requests_made": stats.request_count,
        },
    )


async def cmd_test_config() -> CLIOutput:
    """Test configuration loading."""
    settings = get_settings()

    return CLIOutput(
        success=True,
        command="test-config",
        data={
            "steam_api_key_set": bool(settings.steam.api_key.get_secret_value()),
            "steam_base_url": settings.steam.base_url,
            "requests_per_second": settings.steam.requests_per_second,
            "cache_ttl_seconds": settings.cache.ttl_seconds,
            "retry_max_attempts": settings.retry.max_attempts,
            "log_level": settings.logging.level,
            "log_format": settings.logging.format,
        },
    )


def print_usage() -> None:
    """Print CLI usage information."""
    print(
        """
GameSync CLI

Usage:
    gamesync <command> [options]

Commands:
    test-config                   Test configuration loading
    owned-games <steam_id>        Fetch a user's library (--no-cache to force refresh)
    profile <steam_id>            Fetch a user's public profile
    overlap <id1,id2,...>         Find games owned by every listed user
    help                          Show this help message

Examples:
    gamesync owned-games 76561197960287930
    gamesync overlap 76561197960287930,76561197960435530
"""
    )


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = sys.argv[1:] if argv is None else argv

    if not args:
        print_usage()
        sys.exit(1)

    command = args[0]

    if command in ("help", "--help", "-h"):
        print_usage()
        return

    try:
        setup_logging()

        if command == "test-config":
            output = asyncio.run(cmd_test_config())

        elif command == "owned-games":
            if len(args) < 2:
                print("Error: steam_id required")
                sys.exit(1)
            output = asyncio.run(cmd_owned_games(args[1], use_cache="--no-cache" not in args))

        elif command == "profile":
            if len(args) < 2:
                print("Error: steam_id required")
                sys.exit(1)
            output = asyncio.run(cmd_profile(args[1]))

        elif command == "overlap":
            if len(args) < 2:
                print("Error: steam_ids required (comma-separated)")
                sys.exit(1)
            output = asyncio.run(cmd_overlap(args[1]))

        else:
            print(f"Unknown command: {command}")
            print_usage()
            sys.exit(1)

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception("CLI error", error=str(e))
        print_json(CLIOutput(success=False, command=command, error=str(e)))
        sys.exit(1)

    print_json(output)
    if not output.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
