"""Tests for SteamID64 validation."""

import pytest

from gamesync.steam.identifiers import validate_steam_id


class TestValidateSteamId:
    """Tests for validate_steam_id."""

    @pytest.mark.parametrize("steam_id", ["76561198001234567", "76561197960287930"])
    def test_accepts_seventeen_digits(self, steam_id: str) -> None:
        """Test that well-formed SteamID64 values are accepted."""
        assert validate_steam_id(steam_id) is True

    @pytest.mark.parametrize(
        "steam_id",
        [
            "123456789",  # too short
            "765611980012345678",  # too long
            "7656119800123456a",  # contains letter
            " 76561198001234567",  # leading whitespace
            "76561198001234567\n",  # trailing newline
            "７6561198001234567",  # non-ASCII digit
            "",
        ],
    )
    def test_rejects_malformed_strings(self, steam_id: str) -> None:
        """Test that anything but exactly 17 ASCII digits is rejected."""
        assert validate_steam_id(steam_id) is False

    @pytest.mark.parametrize("value", [None, 76561198001234567, 7.6e16, b"76561198001234567", []])
    def test_rejects_non_strings(self, value: object) -> None:
        """Test that non-string input returns False instead of raising."""
        assert validate_steam_id(value) is False
