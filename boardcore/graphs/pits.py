"""Pit-and-cycle boards for sowing games.

Pits are laid out in rows like a grid (and use the grid label grammar), but
adjacency is not derived from coordinate offsets: each cycle of pits is a
closed loop, and a pit touches only its predecessor and successor on its
own loop. Cycles are listed counter-clockwise as seen from above; travel
``CCW`` follows that order and ``CW`` reverses it.

A ray walks its loop once and stops before arriving back at its source.
"""

from __future__ import annotations

from ..errors import StructuralError
from ..models import CycleDirection
from .base import BaseGraph, Coords

__all__ = ["CYCLE_DIRECTIONS", "PitGraph", "BaoGraph", "SowingNoEndsGraph"]

CYCLE_DIRECTIONS: tuple[str, ...] = (CycleDirection.CW.value, CycleDirection.CCW.value)


class PitGraph(BaseGraph):
    """Pits joined into one or more closed loops."""

    directions = CYCLE_DIRECTIONS

    def _cycles(self) -> list[list[Coords]]:
        raise NotImplementedError

    def _build(self) -> None:
        self._succ: dict[Coords, Coords] = {}
        self._pred: dict[Coords, Coords] = {}
        for cycle in self._cycles():
            for i, pit in enumerate(cycle):
                nxt = cycle[(i + 1) % len(cycle)]
                self._succ[pit] = nxt
                self._pred[nxt] = pit
        for x, y in self._all_coords():
            self.graph.add_node(self.coords_to_algebraic(x, y))
        for pit, nxt in self._succ.items():
            self.graph.add_edge(self.coords_to_algebraic(*pit), self.coords_to_algebraic(*nxt))

    def _step(self, x: int, y: int, direction: str) -> Coords | None:
        if direction == CycleDirection.CCW.value:
            return self._succ.get((x, y))
        if direction == CycleDirection.CW.value:
            return self._pred.get((x, y))
        return None

    def next_pit(self, cell: str, direction: object = CycleDirection.CCW) -> str:
        """The pit one step from ``cell`` around its loop."""
        value = self._require_direction(direction)
        self._require(cell)
        nxt = self._step(*self.algebraic_to_coords(cell), value)
        if nxt is None:
            raise StructuralError(f"The pit '{cell}' is not on a loop", cell=cell)
        return self.coords_to_algebraic(*nxt)


class BaoGraph(PitGraph):
    """Four rows of pits; each player's two rows form their own loop.

    Rows 2 and 3 (the bottom half) belong to the first player, rows 0 and 1
    to the second. The loops never meet.
    """

    def __init__(self, width: int = 8):
        if width < 2:
            raise StructuralError(f"A Bao board needs at least 2 pits per row, got {width}")
        super().__init__(width, 4)

    def _cycles(self) -> list[list[Coords]]:
        w = self.width
        south = [(x, 3) for x in range(w)] + [(x, 2) for x in reversed(range(w))]
        north = [(x, 0) for x in reversed(range(w))] + [(x, 1) for x in range(w)]
        return [south, north]

    def __repr__(self) -> str:
        return f"BaoGraph(width={self.width})"


class SowingNoEndsGraph(PitGraph):
    """Two rows of pits forming one loop, with no stores at the ends."""

    def __init__(self, width: int):
        if width < 2:
            raise StructuralError(f"A sowing board needs at least 2 pits per row, got {width}")
        super().__init__(width, 2)

    def _cycles(self) -> list[list[Coords]]:
        w = self.width
        return [[(x, 1) for x in range(w)] + [(x, 0) for x in reversed(range(w))]]

    def __repr__(self) -> str:
        return f"SowingNoEndsGraph(width={self.width})"
