"""
SteamID64 validation.

A SteamID64 is the 17-digit decimal form of a Steam account identifier
(e.g. 76561197960287930). It is the only identifier shape accepted
anywhere in the client.
"""

import re

STEAM_ID_PATTERN = re.compile(r"[0-9]{17}")


def validate_steam_id(value: object) -> bool:
    """
    Check that a value is a 17-digit SteamID64 string.

    Non-string input (including None) is rejected rather than raising.
    """
    if not isinstance(value, str):
        return False
    return STEAM_ID_PATTERN.fullmatch(value) is not None
