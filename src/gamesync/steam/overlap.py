"""
N-way library intersection.

Finds the games present in every one of a set of libraries, keyed by
application ID. Libraries that failed to load are passed in as empty
sequences, which makes the intersection empty.
"""

from collections.abc import Sequence

from gamesync.steam.contracts import OwnedGame
from gamesync.steam.models import OverlapGame


def intersect_libraries(
    libraries: Sequence[Sequence[OwnedGame]],
    *,
    owner_count: int,
) -> list[OverlapGame]:
    """
    Intersect libraries by app ID.

    Candidates come from the first library and keep its order. A candidate
    survives only if every library (the first included) contains its app ID.

    Args:
        libraries: Game lists, one per requested user
        owner_count: Value reported as owner_count on every result

    Returns:
        list[OverlapGame]: Common games in first-library order
    """
    if not libraries:
        return []

    id_sets = [{game.appid for game in library} for library in libraries]

    return [
        OverlapGame(
            app_id=game.appid,
            name=game.name,
            img_icon_url=game.img_icon_url,
            owner_count=owner_count,
        )
        for game in libraries[0]
        if all(game.appid in ids for ids in id_sets)
    ]
