"""Integration tests for CLI commands with mocked HTTP responses."""

import json
from pathlib import Path
from typing import Any, cast
from unittest.mock import patch

import httpx
import pytest
import respx

from gamesync import cli
from gamesync.config import get_settings

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

OWNED_GAMES_URL = "https://api.steampowered.com/IPlayerService/GetOwnedGames/v0001/"
STEAM_ID = "76561198001234567"
STEAM_ID_2 = "76561198001234568"


def load_fixture(name: str) -> dict[str, Any]:
    """Load a JSON fixture file."""
    with (FIXTURES_DIR / name).open(encoding="utf-8") as f:
        return cast(dict[str, Any], json.load(f))


@pytest.fixture
def mock_env() -> Any:
    """Mock environment variables for tests."""
    with patch.dict(
        "os.environ",
        {
            "STEAM_API_KEY": "test_api_key_123",
            "STEAM_REQUESTS_PER_SECOND": "100",
        },
    ):
        get_settings.cache_clear()
        yield
    get_settings.cache_clear()


class TestCommands:
    """Tests for CLI command coroutines."""

    @pytest.mark.asyncio
    async def test_test_config(self, mock_env: None) -> None:
        """Test configuration summary output."""
        output = await cli.cmd_test_config()

        assert output.success is True
        assert output.data is not None
        assert output.data["steam_api_key_set"] is True
        assert output.data["requests_per_second"] == 100.0

    @respx.mock
    @pytest.mark.asyncio
    async def test_owned_games(self, mock_env: None) -> None:
        """Test normalized library output."""
        respx.get(OWNED_GAMES_URL).mock(
            return_value=httpx.Response(200, json=load_fixture("owned_games_response.json"))
        )

        output = await cli.cmd_owned_games(STEAM_ID)

        assert output.success is True
        assert output.data is not None
        assert output.data["game_count"] == 3
        dota = output.data["games"][1]
        assert dota["app_id"] == 570
        assert dota["playtime_2weeks"] == 0
        assert dota["has_public_stats_support"] is False

    @respx.mock
    @pytest.mark.asyncio
    async def test_owned_games_private(self, mock_env: None) -> None:
        """Test that client errors become failure payloads with a code."""
        respx.get(OWNED_GAMES_URL).mock(return_value=httpx.Response(403))

        output = await cli.cmd_owned_games(STEAM_ID)

        assert output.success is False
        assert output.error_code == "PRIVATE_PROFILE"

    @respx.mock
    @pytest.mark.asyncio
    async def test_overlap(self, mock_env: None) -> None:
        """Test overlap output including per-user failures."""
        respx.get(OWNED_GAMES_URL, params={"steamid": STEAM_ID}).mock(
            return_value=httpx.Response(200, json=load_fixture("owned_games_response.json"))
        )
        respx.get(OWNED_GAMES_URL, params={"steamid": STEAM_ID_2}).mock(
            return_value=httpx.Response(429)
        )

        output = await cli.cmd_overlap(f"{STEAM_ID}, {STEAM_ID_2}")

        assert output.success is True
        assert output.data is not None
        assert output.data["games"] == []
        assert output.data["failures"][STEAM_ID_2]["code"] == "RATE_LIMIT_EXCEEDED"
        assert output.data["requests_made"] == 2

    @pytest.mark.asyncio
    async def test_overlap_needs_two_ids(self, mock_env: None) -> None:
        """Test the precondition through the CLI."""
        output = await cli.cmd_overlap(STEAM_ID)

        assert output.success is False
        assert output.error_code == "INSUFFICIENT_IDENTIFIERS"


class TestMain:
    """Tests for argument dispatch."""

    def test_no_arguments(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that running without a command prints usage and fails."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == 1
        assert "Usage:" in capsys.readouterr().out

    def test_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the help command."""
        cli.main(["help"])

        assert "overlap <id1,id2,...>" in capsys.readouterr().out

    def test_missing_steam_id(self, mock_env: None) -> None:
        """Test that commands needing an ID exit with an error."""
        with patch.object(cli, "setup_logging"), pytest.raises(SystemExit) as exc_info:
            cli.main(["owned-games"])

        assert exc_info.value.code == 1

    def test_unknown_command(self, mock_env: None) -> None:
        """Test that unknown commands exit with an error."""
        with patch.object(cli, "setup_logging"), pytest.raises(SystemExit) as exc_info:
            cli.main(["frobnicate"])

        assert exc_info.value.code == 1
