"""Tests for boardcore.graphs.rect_grid - coordinate-only grid helper."""

import pytest

from boardcore.errors import StructuralError
from boardcore.graphs import RectGrid
from boardcore.models import Direction


class TestRectGrid:
    """Test RectGrid geometry queries."""

    def test_in_bounds(self):
        grid = RectGrid(3, 2)
        assert grid.in_bounds(2, 1)
        assert not grid.in_bounds(3, 0)
        assert not grid.in_bounds(0, -1)

    def test_ray(self):
        grid = RectGrid(3, 3)
        assert grid.ray(0, 0, "E") == [(1, 0), (2, 0)]
        assert grid.ray(0, 0, Direction.SE) == [(1, 1), (2, 2)]
        assert grid.ray(0, 0, "N") == []

    def test_ray_rejects_off_grid_start(self):
        grid = RectGrid(3, 3)
        with pytest.raises(StructuralError):
            grid.ray(3, 3, "N")

    def test_ray_rejects_unknown_direction(self):
        grid = RectGrid(3, 3)
        with pytest.raises(StructuralError):
            grid.ray(0, 0, "CW")

    def test_adjacencies(self):
        grid = RectGrid(3, 3)
        assert grid.adjacencies(0, 0, diag=False) == [(1, 0), (0, 1)]
        assert grid.adjacencies(0, 0) == [(1, 0), (1, 1), (0, 1)]
        assert len(grid.adjacencies(1, 1)) == 8

    def test_orth_and_diag(self):
        assert RectGrid.is_orth(0, 0, 0, 5)
        assert not RectGrid.is_orth(0, 0, 0, 0)
        assert RectGrid.is_diag(0, 0, 3, 3)
        assert not RectGrid.is_diag(0, 0, 1, 2)

    def test_distance(self):
        assert RectGrid.distance(0, 0, 3, 1) == 3

    def test_bearing(self):
        assert RectGrid.bearing(0, 0, 2, 2) == Direction.SE
        assert RectGrid.bearing(2, 2, 2, 0) == Direction.N
        assert RectGrid.bearing(2, 2, 0, 1) == Direction.NW
        assert RectGrid.bearing(1, 1, 1, 1) is None

    def test_invalid_dimensions(self):
        with pytest.raises(StructuralError):
            RectGrid(0, 3)
