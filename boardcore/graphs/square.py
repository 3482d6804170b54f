"""Rectangular grid topologies.

All four families share the same label grammar and compass stepping; they
differ only in which steps are edges.
"""

from __future__ import annotations

from ..models import Direction
from .base import BaseGraph, Coords

__all__ = [
    "ORTH_DIRECTIONS",
    "DIAG_DIRECTIONS",
    "ALL_DIRECTIONS",
    "SquareGraph",
    "SquareOrthGraph",
    "SquareDiagGraph",
    "SquareFanoronaGraph",
]

ORTH_DIRECTIONS: tuple[str, ...] = (
    Direction.N.value,
    Direction.E.value,
    Direction.S.value,
    Direction.W.value,
)
DIAG_DIRECTIONS: tuple[str, ...] = (
    Direction.NE.value,
    Direction.SE.value,
    Direction.SW.value,
    Direction.NW.value,
)
ALL_DIRECTIONS: tuple[str, ...] = tuple(d.value for d in Direction)


class SquareGraph(BaseGraph):
    """Square cells connected orthogonally and diagonally (up to 8)."""

    directions = ALL_DIRECTIONS


class SquareOrthGraph(BaseGraph):
    """Square cells connected orthogonally only (up to 4)."""

    directions = ORTH_DIRECTIONS


class SquareDiagGraph(BaseGraph):
    """Square cells connected diagonally only (up to 4)."""

    directions = DIAG_DIRECTIONS


class SquareFanoronaGraph(BaseGraph):
    """Alquerque/Fanorona lines: diagonals only run through even points.

    A diagonal step exists where ``x + y`` is even at both ends; diagonal
    rays from an odd point are therefore empty.
    """

    directions = ALL_DIRECTIONS

    def _connects(self, frm: Coords, to: Coords, direction: str) -> bool:
        if direction in ORTH_DIRECTIONS:
            return True
        return (frm[0] + frm[1]) % 2 == 0
