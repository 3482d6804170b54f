"""Reference game engines built on the shared state machine."""

from __future__ import annotations

from ..errors import StateError
from ..game_base import GameBase
from .amazons import AmazonsGame
from .cephalopod import CephalopodGame
from .stigmergy import StigmergyGame

__all__ = ["GAMES", "AmazonsGame", "CephalopodGame", "StigmergyGame", "get_game"]

GAMES: dict[str, type[GameBase]] = {
    cls.gameinfo.uid: cls for cls in (AmazonsGame, CephalopodGame, StigmergyGame)
}


def get_game(uid: str) -> type[GameBase]:
    """Look up a game engine class by its uid."""
    try:
        return GAMES[uid]
    except KeyError:
        raise StateError(
            f"Unknown game '{uid}'", context={"known": sorted(GAMES)}
        ) from None
