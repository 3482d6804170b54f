"""Shared machinery for every board topology.

Each topology is an explicit label-keyed adjacency arena (a
:class:`networkx.Graph` whose nodes are cell labels). Concrete families
supply three things:

- the label grammar (``coords_to_algebraic`` / ``algebraic_to_coords``),
- which coordinates exist (``_row_range``), and
- the direction stepping rule (``_step``) plus which steps are edges
  (``_connects``).

Adjacency and rays are both derived from the same stepping rule, so every
consecutive pair of cells in a ray is an edge of the graph. Pruning a cell
removes the node and all of its incident edges in one operation.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence

import networkx as nx

from ..errors import NotFoundError, StructuralError
from ..models import Direction

logger = logging.getLogger(__name__)

__all__ = [
    "COLUMN_LABELS",
    "Coords",
    "DIRECTION_OFFSETS",
    "BaseGraph",
    "labels",
]

Coords = tuple[int, int]

COLUMN_LABELS = "abcdefghijklmnopqrstuvwxyz"

# Row 0 is the visual top of the board, so north decreases y.
DIRECTION_OFFSETS: dict[str, Coords] = {
    Direction.N.value: (0, -1),
    Direction.NE.value: (1, -1),
    Direction.E.value: (1, 0),
    Direction.SE.value: (1, 1),
    Direction.S.value: (0, 1),
    Direction.SW.value: (-1, 1),
    Direction.W.value: (-1, 0),
    Direction.NW.value: (-1, -1),
}

_LABEL_RE = re.compile(r"^([a-z])([1-9]\d*)$")


def _direction_value(direction: object) -> str:
    if isinstance(direction, Direction):
        return direction.value
    return str(getattr(direction, "value", direction)).upper()


class BaseGraph:
    """Topology built once from declared dimensions.

    The default grammar is letter-for-column, number-for-row counted from the
    bottom (``a1`` is the bottom-left cell). Coordinates are ``(col, row)``
    with row 0 at the top.
    """

    directions: tuple[str, ...] = ()

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise StructuralError(
                f"Board dimensions must be positive, got {width}x{height}"
            )
        self.width = width
        self.height = height
        self._check_label_capacity()
        self.graph = nx.Graph()
        self._build()
        logger.debug(
            "Built %s with %d cells and %d edges",
            type(self).__name__,
            self.graph.number_of_nodes(),
            self.graph.number_of_edges(),
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _check_label_capacity(self) -> None:
        if self.width > len(COLUMN_LABELS):
            raise StructuralError(
                f"At most {len(COLUMN_LABELS)} columns can be labelled, got {self.width}"
            )

    def _row_range(self, y: int) -> range:
        return range(self.width)

    def _all_coords(self) -> Iterator[Coords]:
        for y in range(self.height):
            for x in self._row_range(y):
                yield (x, y)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= y < self.height and x in self._row_range(y)

    def _step(self, x: int, y: int, direction: str) -> Coords | None:
        dx, dy = DIRECTION_OFFSETS[direction]
        nx_, ny_ = x + dx, y + dy
        if not self._in_bounds(nx_, ny_):
            return None
        return (nx_, ny_)

    def _connects(self, frm: Coords, to: Coords, direction: str) -> bool:
        return True

    def _build(self) -> None:
        for x, y in self._all_coords():
            self.graph.add_node(self.coords_to_algebraic(x, y))
        for x, y in self._all_coords():
            for direction in self.directions:
                nxt = self._step(x, y, direction)
                if nxt is None or not self._connects((x, y), nxt, direction):
                    continue
                self.graph.add_edge(
                    self.coords_to_algebraic(x, y), self.coords_to_algebraic(*nxt)
                )

    # ------------------------------------------------------------------
    # Label grammar
    # ------------------------------------------------------------------

    def coords_to_algebraic(self, x: int, y: int) -> str:
        if not self._in_bounds(x, y):
            raise StructuralError(
                f"The coordinates ({x},{y}) are not on the board", coords=(x, y)
            )
        return COLUMN_LABELS[x] + str(self.height - y)

    def _parse_label(self, cell: str) -> tuple[int, int]:
        match = _LABEL_RE.match(cell) if isinstance(cell, str) else None
        if match is None:
            raise StructuralError(f"The label '{cell}' could not be parsed", cell=str(cell))
        return COLUMN_LABELS.index(match.group(1)), int(match.group(2))

    def algebraic_to_coords(self, cell: str) -> Coords:
        letter, number = self._parse_label(cell)
        x, y = letter, self.height - number
        if not self._in_bounds(x, y):
            raise StructuralError(f"The cell '{cell}' is not on the board", cell=cell)
        return (x, y)

    # ------------------------------------------------------------------
    # Graph queries
    # ------------------------------------------------------------------

    def _require(self, cell: str) -> None:
        if not self.graph.has_node(cell):
            # Distinguish a malformed label from a pruned or absent vertex.
            self.algebraic_to_coords(cell)
            raise NotFoundError(f"The cell '{cell}' is not in the graph", cell=cell)

    def _require_direction(self, direction: object) -> str:
        value = _direction_value(direction)
        if value not in self.directions:
            raise StructuralError(
                f"{type(self).__name__} does not support the direction '{value}'",
                context={"supported": list(self.directions)},
            )
        return value

    def has_node(self, cell: str) -> bool:
        return self.graph.has_node(cell)

    def neighbours(self, cell: str) -> list[str]:
        """Cells adjacent to ``cell``; the sole source of truth for adjacency."""
        self._require(cell)
        return list(self.graph.neighbors(cell))

    def degree(self, cell: str) -> int:
        self._require(cell)
        return self.graph.degree(cell)

    def iter_ray(self, x: int, y: int, direction: object) -> Iterator[Coords]:
        """Lazily walk from ``(x, y)`` in ``direction``, excluding the start.

        The walk stops before the first step that leaves the board, lands on
        a pruned cell or is not an edge of the graph.
        """
        value = self._require_direction(direction)
        start = self.coords_to_algebraic(x, y)
        self._require(start)
        return self._walk((x, y), start, value)

    def _walk(self, origin: Coords, start: str, value: str) -> Iterator[Coords]:
        current, label = origin, start
        while True:
            nxt = self._step(current[0], current[1], value)
            if nxt is None:
                return
            nxt_label = self.coords_to_algebraic(*nxt)
            if nxt_label == start or not self.graph.has_edge(label, nxt_label):
                return
            yield nxt
            current, label = nxt, nxt_label

    def ray(self, x: int, y: int, direction: object) -> list[Coords]:
        return list(self.iter_ray(x, y, direction))

    def ray_cells(self, cell: str, direction: object) -> list[str]:
        """Like :meth:`ray`, but from a label and returning labels."""
        x, y = self.algebraic_to_coords(cell)
        return [self.coords_to_algebraic(*pt) for pt in self.iter_ray(x, y, direction)]

    def list_cells(self, ordered: bool = False) -> list[str] | list[list[str]]:
        """Live cells in visual order, flat or as one list per row."""
        rows = [
            [
                label
                for label in (self.coords_to_algebraic(x, y) for x in self._row_range(y))
                if self.graph.has_node(label)
            ]
            for y in range(self.height)
        ]
        if ordered:
            return rows
        return [cell for row in rows for cell in row]

    def cells(self) -> list[str]:
        return self.list_cells()  # type: ignore[return-value]

    def drop_node(self, cell: str) -> None:
        """Permanently remove ``cell`` and every edge touching it."""
        self._require(cell)
        self.graph.remove_node(cell)

    def path(self, source: str, target: str) -> list[str] | None:
        """Shortest path of labels between two live cells, or None."""
        self._require(source)
        self._require(target)
        try:
            return nx.shortest_path(self.graph, source, target)
        except nx.NetworkXNoPath:
            return None

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __contains__(self, cell: object) -> bool:
        return isinstance(cell, str) and self.graph.has_node(cell)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self.width}, height={self.height})"


def labels(graph: BaseGraph, coords: Sequence[Coords]) -> list[str]:
    """Convert a sequence of coordinates to labels."""
    return [graph.coords_to_algebraic(x, y) for x, y in coords]
