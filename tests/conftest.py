"""
Shared pytest fixtures for boardcore tests.

Game fixtures are function-scoped so every test starts from a fresh stack.
The ``*_with_board`` factories build games from hand-written records, which
is how contrived positions are set up without replaying moves.
"""

from typing import Callable, Dict, Optional, Tuple

import pytest

from boardcore.games import AmazonsGame, CephalopodGame, StigmergyGame
from boardcore.games.amazons import AmazonsRecord, AmazonsSnapshot
from boardcore.games.cephalopod import CephalopodRecord, CephalopodSnapshot
from boardcore.games.stigmergy import StigmergyRecord, StigmergySnapshot
from boardcore.graphs import (
    BaoGraph,
    HexTriGraph,
    SnubSquareGraph,
    SowingNoEndsGraph,
    SquareDiagGraph,
    SquareFanoronaGraph,
    SquareGraph,
    SquareOrthGraph,
)


# =============================================================================
# TOPOLOGY FIXTURES
# =============================================================================

GRAPH_FACTORIES = {
    "square": lambda: SquareGraph(5, 4),
    "square-orth": lambda: SquareOrthGraph(5, 5),
    "square-diag": lambda: SquareDiagGraph(4, 6),
    "square-fanorona": lambda: SquareFanoronaGraph(9, 5),
    "snubsquare": lambda: SnubSquareGraph(5, 5),
    "hex-of-hex": lambda: HexTriGraph(4, 7),
    "bao": lambda: BaoGraph(8),
    "sowing-no-ends": lambda: SowingNoEndsGraph(6),
}


@pytest.fixture(params=sorted(GRAPH_FACTORIES))
def any_graph(request):
    """One instance of every topology family."""
    return GRAPH_FACTORIES[request.param]()


# =============================================================================
# GAME FIXTURES
# =============================================================================


@pytest.fixture
def ceph() -> CephalopodGame:
    return CephalopodGame()


@pytest.fixture
def amazons() -> AmazonsGame:
    return AmazonsGame()


@pytest.fixture
def stigmergy() -> StigmergyGame:
    return StigmergyGame()


@pytest.fixture
def ceph_with_board() -> Callable[..., CephalopodGame]:
    """Factory for a Cephalopod game whose only snapshot holds ``board``."""

    def _create(board: Dict[str, Tuple[int, int]], currplayer: int = 1, variants=None):
        snapshot = CephalopodSnapshot(
            version=CephalopodGame.gameinfo.version,
            currplayer=currplayer,
            board=board,
        )
        record = CephalopodRecord(
            game="ceph", numplayers=2, variants=variants or [], stack=[snapshot]
        )
        return CephalopodGame(record)

    return _create


@pytest.fixture
def amazons_with_board() -> Callable[..., AmazonsGame]:
    """Factory for an Amazons game whose only snapshot holds ``board``."""

    def _create(board: Dict[str, int], currplayer: int = 1):
        snapshot = AmazonsSnapshot(
            version=AmazonsGame.gameinfo.version,
            currplayer=currplayer,
            board=board,
        )
        record = AmazonsRecord(game="amazons", numplayers=2, stack=[snapshot])
        return AmazonsGame(record)

    return _create


@pytest.fixture
def stigmergy_with_board() -> Callable[..., StigmergyGame]:
    """Factory for a Stigmergy game past its komi and pass plies."""

    def _create(
        board: Dict[str, int],
        currplayer: int = 1,
        komi: int = 0,
        buttontaker: Optional[int] = None,
    ):
        version = StigmergyGame.gameinfo.version
        stack = [
            StigmergySnapshot(version=version, currplayer=1),
            StigmergySnapshot(version=version, currplayer=2, komi=komi, lastmove=str(komi)),
            StigmergySnapshot(
                version=version,
                currplayer=currplayer,
                board=board,
                komi=komi,
                buttontaker=buttontaker,
            ),
        ]
        record = StigmergyRecord(game="stigmergy", numplayers=2, stack=stack)
        return StigmergyGame(record)

    return _create
