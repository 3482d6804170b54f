"""Stateless geometry primitives.

Angles are in degrees unless a function name says otherwise. Bearings use
screen coordinates: ``y`` grows downwards, 0° points up (north) and angles
increase clockwise. The topology engine steps with its own integer offset
tables; these helpers serve layout and rendering collaborators.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np

from .models import Direction

Point = tuple[float, float]
Matrix = list[list[Any]]

__all__ = [
    "Point",
    "OPPOSITE_DIRECTIONS",
    "calc_bearing",
    "circle2poly",
    "deg2rad",
    "dist_from_circle",
    "matrix_rect_rot90",
    "matrix_rect_rot_n90",
    "midpoint",
    "norm_deg",
    "project_point",
    "pt_distance",
    "rad2deg",
    "smallest_degree_diff",
    "toggle_facing",
    "transpose_rect",
]

OPPOSITE_DIRECTIONS: dict[Direction, Direction] = {
    Direction.N: Direction.S,
    Direction.NE: Direction.SW,
    Direction.E: Direction.W,
    Direction.SE: Direction.NW,
    Direction.S: Direction.N,
    Direction.SW: Direction.NE,
    Direction.W: Direction.E,
    Direction.NW: Direction.SE,
}


def pt_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(x2 - x1, y2 - y1)


def deg2rad(deg: float) -> float:
    return deg * math.pi / 180


def rad2deg(rad: float) -> float:
    return rad * 180 / math.pi


def norm_deg(deg: float) -> float:
    """Normalise an angle into ``[0, 360)``."""
    normed = deg % 360
    # -1e-15 % 360 rounds up to 360.0
    return 0.0 if normed >= 360 else normed


def smallest_degree_diff(a: float, b: float) -> float:
    """Signed smallest rotation taking ``b`` onto ``a``, in ``(-180, 180]``."""
    diff = norm_deg(a - b)
    if diff > 180:
        diff -= 360
    return diff


def calc_bearing(x1: float, y1: float, x2: float, y2: float) -> float:
    """Bearing from the first point to the second, in ``[0, 360)``."""
    return norm_deg(rad2deg(math.atan2(x2 - x1, y1 - y2)))


def project_point(x: float, y: float, dist: float, deg: float) -> Point:
    """Point reached by travelling ``dist`` from ``(x, y)`` on bearing ``deg``."""
    rad = deg2rad(deg)
    return (x + dist * math.sin(rad), y - dist * math.cos(rad))


def midpoint(p1: Point, p2: Point) -> Point:
    return ((p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2)


def dist_from_circle(circle: tuple[float, float, float], point: Point) -> float:
    """Distance from ``point`` to the circumference of ``(cx, cy, r)``.

    Negative when the point lies inside the circle.
    """
    cx, cy, r = circle
    return pt_distance(cx, cy, point[0], point[1]) - r


def circle2poly(cx: float, cy: float, r: float, steps: int = 64) -> list[Point]:
    """Approximate a circle by ``steps`` points, clockwise from due north."""
    if steps < 3:
        raise ValueError(f"A polygon needs at least 3 points, got {steps}")
    angles = np.deg2rad(np.linspace(0, 360, steps, endpoint=False))
    xs = cx + r * np.sin(angles)
    ys = cy - r * np.cos(angles)
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


def _as_grid(matrix: Sequence[Sequence[Any]]) -> np.ndarray:
    height = len(matrix)
    width = len(matrix[0])
    if any(len(row) != width for row in matrix):
        raise ValueError("Layout is not rectangular")
    # Filled cell by cell so nested values are never broadcast into new axes.
    grid = np.empty((height, width), dtype=object)
    for y, row in enumerate(matrix):
        for x, value in enumerate(row):
            grid[y, x] = value
    return grid


def matrix_rect_rot90(matrix: Sequence[Sequence[Any]]) -> Matrix:
    """Rotate a rectangular layout 90° clockwise."""
    if len(matrix) == 0:
        return []
    return np.rot90(_as_grid(matrix), k=-1).tolist()


def matrix_rect_rot_n90(matrix: Sequence[Sequence[Any]]) -> Matrix:
    """Rotate a rectangular layout 90° counter-clockwise."""
    if len(matrix) == 0:
        return []
    return np.rot90(_as_grid(matrix), k=1).tolist()


def transpose_rect(matrix: Sequence[Sequence[Any]]) -> Matrix:
    if len(matrix) == 0:
        return []
    return _as_grid(matrix).T.tolist()


def toggle_facing(direction: Direction | str) -> Direction:
    """Return the compass direction opposite ``direction``."""
    return OPPOSITE_DIRECTIONS[Direction(direction)]
