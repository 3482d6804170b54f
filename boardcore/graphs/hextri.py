"""Hexagon-shaped board of hexagonal cells.

The board is described by the width of its shortest (top and bottom) and
longest (middle) rows. Rows grow by one cell per row down to the middle row
and shrink again below it::

        a b c            <- row 0, minwidth cells
       d e f g
      h i j k l          <- middle row, maxwidth cells
       m n o p
        q r s

Labels are ``row letter + column number``: letters count rows from the
bottom (``a`` is the bottom row), numbers count cells from the left of each
row starting at 1. Each cell touches up to six others, in the directions
NE, E, SE, SW, W, NW.
"""

from __future__ import annotations

from ..errors import StructuralError
from ..models import Direction
from .base import COLUMN_LABELS, BaseGraph, Coords

__all__ = ["HEX_DIRECTIONS", "HexTriGraph"]

HEX_DIRECTIONS: tuple[str, ...] = (
    Direction.NE.value,
    Direction.E.value,
    Direction.SE.value,
    Direction.SW.value,
    Direction.W.value,
    Direction.NW.value,
)


class HexTriGraph(BaseGraph):
    directions = HEX_DIRECTIONS

    def __init__(self, minwidth: int, maxwidth: int):
        if minwidth < 1 or maxwidth < minwidth:
            raise StructuralError(
                f"Invalid hex board widths: minwidth={minwidth}, maxwidth={maxwidth}"
            )
        self.minwidth = minwidth
        self.maxwidth = maxwidth
        self.midrow = maxwidth - minwidth
        super().__init__(maxwidth, (maxwidth - minwidth) * 2 + 1)

    def _check_label_capacity(self) -> None:
        if self.height > len(COLUMN_LABELS):
            raise StructuralError(
                f"At most {len(COLUMN_LABELS)} rows can be labelled, got {self.height}"
            )

    def row_width(self, y: int) -> int:
        if y <= self.midrow:
            return self.minwidth + y
        return self.maxwidth - (y - self.midrow)

    def _row_range(self, y: int) -> range:
        if not 0 <= y < self.height:
            return range(0)
        return range(self.row_width(y))

    def _step(self, x: int, y: int, direction: str) -> Coords | None:
        if direction == "E":
            nxt = (x + 1, y)
        elif direction == "W":
            nxt = (x - 1, y)
        elif direction == "NW":
            nxt = (x - 1, y - 1) if y <= self.midrow else (x, y - 1)
        elif direction == "NE":
            nxt = (x, y - 1) if y <= self.midrow else (x + 1, y - 1)
        elif direction == "SW":
            nxt = (x, y + 1) if y < self.midrow else (x - 1, y + 1)
        elif direction == "SE":
            nxt = (x + 1, y + 1) if y < self.midrow else (x, y + 1)
        else:
            return None
        if not self._in_bounds(*nxt):
            return None
        return nxt

    def coords_to_algebraic(self, x: int, y: int) -> str:
        if not self._in_bounds(x, y):
            raise StructuralError(
                f"The coordinates ({x},{y}) are not on the board", coords=(x, y)
            )
        return COLUMN_LABELS[self.height - y - 1] + str(x + 1)

    def algebraic_to_coords(self, cell: str) -> Coords:
        letter, number = self._parse_label(cell)
        x, y = number - 1, self.height - letter - 1
        if not self._in_bounds(x, y):
            raise StructuralError(f"The cell '{cell}' is not on the board", cell=cell)
        return (x, y)

    def __repr__(self) -> str:
        return f"HexTriGraph(minwidth={self.minwidth}, maxwidth={self.maxwidth})"
