"""Coordinate-only helper for rectangular boards.

Unlike the graph topologies, ``RectGrid`` knows nothing about pruned cells
or labels; it answers pure geometry questions (bounds, rays, bearings) on a
``width`` x ``height`` rectangle. Games use it where line-of-movement
geometry matters and occupancy is checked separately.
"""

from __future__ import annotations

from ..errors import StructuralError
from ..models import Direction
from .base import DIRECTION_OFFSETS, Coords, _direction_value

__all__ = ["RectGrid"]


class RectGrid:
    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise StructuralError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def ray(self, x: int, y: int, direction: object) -> list[Coords]:
        """Cells from ``(x, y)`` to the edge of the grid, excluding the start."""
        value = _direction_value(direction)
        if value not in DIRECTION_OFFSETS:
            raise StructuralError(f"Unknown direction '{value}'")
        if not self.in_bounds(x, y):
            raise StructuralError(f"The coordinates ({x},{y}) are not on the grid", coords=(x, y))
        dx, dy = DIRECTION_OFFSETS[value]
        cells: list[Coords] = []
        x, y = x + dx, y + dy
        while self.in_bounds(x, y):
            cells.append((x, y))
            x, y = x + dx, y + dy
        return cells

    def adjacencies(self, x: int, y: int, diag: bool = True) -> list[Coords]:
        result: list[Coords] = []
        for direction, (dx, dy) in DIRECTION_OFFSETS.items():
            if not diag and dx != 0 and dy != 0:
                continue
            if self.in_bounds(x + dx, y + dy):
                result.append((x + dx, y + dy))
        return result

    @staticmethod
    def is_orth(x1: int, y1: int, x2: int, y2: int) -> bool:
        return (x1 == x2) != (y1 == y2)

    @staticmethod
    def is_diag(x1: int, y1: int, x2: int, y2: int) -> bool:
        return x1 != x2 and abs(x1 - x2) == abs(y1 - y2)

    @staticmethod
    def distance(x1: int, y1: int, x2: int, y2: int) -> int:
        """King-move (Chebyshev) distance."""
        return max(abs(x1 - x2), abs(y1 - y2))

    @staticmethod
    def bearing(x1: int, y1: int, x2: int, y2: int) -> Direction | None:
        """Compass direction from the first cell towards the second.

        Based only on the signs of the offsets, so the second cell need not
        lie on a straight line. Returns None when the cells coincide.
        """
        dx = (x2 > x1) - (x2 < x1)
        dy = (y2 > y1) - (y2 < y1)
        if dx == 0 and dy == 0:
            return None
        for direction, offset in DIRECTION_OFFSETS.items():
            if offset == (dx, dy):
                return Direction(direction)
        return None
