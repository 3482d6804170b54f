"""Board topology engine.

Topology selection is a closed choice: :class:`BoardType` enumerates every
supported family and :func:`build_graph` constructs exactly one
implementation for it. Games build their topology once at construction (or
on an explicit rebuild when a board-size variant changes) and never swap it.

Usage:
    from boardcore.graphs import BoardType, build_graph

    graph = build_graph(BoardType.SQUARE_ORTH, width=5, height=5)
    graph.neighbours("a1")      # ['b1', 'a2'] in some order
    graph.ray(0, 4, "N")        # [(0, 3), (0, 2), (0, 1), (0, 0)]
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from ..errors import StructuralError
from .base import COLUMN_LABELS, DIRECTION_OFFSETS, BaseGraph, Coords, labels
from .hextri import HEX_DIRECTIONS, HexTriGraph
from .pits import CYCLE_DIRECTIONS, BaoGraph, PitGraph, SowingNoEndsGraph
from .rect_grid import RectGrid
from .snubsquare import SnubSquareGraph
from .square import (
    ALL_DIRECTIONS,
    DIAG_DIRECTIONS,
    ORTH_DIRECTIONS,
    SquareDiagGraph,
    SquareFanoronaGraph,
    SquareGraph,
    SquareOrthGraph,
)

__all__ = [
    "ALL_DIRECTIONS",
    "BaoGraph",
    "BaseGraph",
    "BoardType",
    "COLUMN_LABELS",
    "CYCLE_DIRECTIONS",
    "Coords",
    "DIAG_DIRECTIONS",
    "DIRECTION_OFFSETS",
    "HEX_DIRECTIONS",
    "HexTriGraph",
    "ORTH_DIRECTIONS",
    "PitGraph",
    "RectGrid",
    "SnubSquareGraph",
    "SowingNoEndsGraph",
    "SquareDiagGraph",
    "SquareFanoronaGraph",
    "SquareGraph",
    "SquareOrthGraph",
    "build_graph",
    "labels",
]


class BoardType(str, Enum):
    """Board topology enumeration"""
    SQUARE = "square"
    SQUARE_ORTH = "square-orth"
    SQUARE_DIAG = "square-diag"
    SQUARE_FANORONA = "square-fanorona"
    SNUB_SQUARE = "snubsquare"
    HEX_TRI = "hex-of-hex"
    BAO = "bao"
    SOWING_NO_ENDS = "sowing-no-ends"


_BUILDERS: dict[BoardType, Callable[..., BaseGraph]] = {
    BoardType.SQUARE: lambda width, height: SquareGraph(width, height),
    BoardType.SQUARE_ORTH: lambda width, height: SquareOrthGraph(width, height),
    BoardType.SQUARE_DIAG: lambda width, height: SquareDiagGraph(width, height),
    BoardType.SQUARE_FANORONA: lambda width, height: SquareFanoronaGraph(width, height),
    BoardType.SNUB_SQUARE: lambda width, height: SnubSquareGraph(width, height),
    BoardType.HEX_TRI: lambda minwidth, maxwidth: HexTriGraph(minwidth, maxwidth),
    BoardType.BAO: lambda width=8: BaoGraph(width),
    BoardType.SOWING_NO_ENDS: lambda width: SowingNoEndsGraph(width),
}


def build_graph(board_type: BoardType | str, **dimensions: Any) -> BaseGraph:
    """Construct the topology for ``board_type`` from declared dimensions."""
    try:
        kind = BoardType(board_type)
    except ValueError:
        raise StructuralError(f"Unsupported board type '{board_type}'") from None
    try:
        return _BUILDERS[kind](**dimensions)
    except TypeError as e:
        raise StructuralError(
            f"Invalid dimensions for {kind.value}: {dimensions}",
            context={"error": str(e)},
        ) from e
