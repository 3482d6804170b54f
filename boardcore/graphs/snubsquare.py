"""Snub square board.

Vertices sit on a square lattice with every orthogonal edge present. Half of
the lattice squares, in a checkerboard, carry one diagonal; the diagonal
slants one way on even rows and the other way on odd rows. Every interior
vertex ends up on exactly one diagonal, giving the 3.3.4.3.4 vertex
configuration (degree 5) of the snub square tiling.
"""

from __future__ import annotations

from .base import BaseGraph, Coords
from .square import ALL_DIRECTIONS, ORTH_DIRECTIONS

__all__ = ["SnubSquareGraph"]


class SnubSquareGraph(BaseGraph):
    directions = ALL_DIRECTIONS

    @staticmethod
    def has_diagonal(frm: Coords, to: Coords) -> bool:
        """Whether the diagonal between two touching lattice points exists."""
        (x1, y1), (x2, y2) = frm, to
        if abs(x1 - x2) != 1 or abs(y1 - y2) != 1:
            return False
        col, row = min(x1, x2), min(y1, y2)
        if (col + row) % 2 != 0:
            return False
        falling = (x1 - x2) * (y1 - y2) > 0
        if row % 2 == 0:
            return falling
        return not falling

    def _connects(self, frm: Coords, to: Coords, direction: str) -> bool:
        if direction in ORTH_DIRECTIONS:
            return True
        return self.has_diagonal(frm, to)
