"""
Per-cell shape metrics for regions of equal characters.

All helpers read a reference grid that is not being modified, so they can be
queried while a flood fill rewrites its own working copy.
"""

from __future__ import annotations

from typing import Iterable

from grid_map import Grid
from grid_types import Corner, Direction

CARDINALS = (Direction.N, Direction.E, Direction.S, Direction.W)


def _neighbour(grid: Grid, x: int, y: int, direction: Direction) -> str | None:
    dx, dy = direction.delta
    return grid.get(x + dx, y + dy)


def perimeter_edges(grid: Grid, x: int, y: int) -> int:
    """
    Count the sides of (x, y) that are region boundary: the grid edge, or a
    neighbour holding a different character. Returns 0-4.
    """
    value = grid.get(x, y)
    return sum(1 for d in CARDINALS if _neighbour(grid, x, y, d) != value)


def is_edge_different(grid: Grid, x: int, y: int, directions: Iterable[Direction]) -> bool:
    """True if every listed neighbour is outside the grid or differs from (x, y)."""
    value = grid.get(x, y)
    return all(_neighbour(grid, x, y, d) != value for d in directions)


def is_edge_same(grid: Grid, x: int, y: int, directions: Iterable[Direction]) -> bool:
    """True if every listed neighbour is inside the grid and equals (x, y)."""
    value = grid.get(x, y)
    for d in directions:
        other = _neighbour(grid, x, y, d)
        if other is None or other != value:
            return False
    return True


def is_diagonal_different(grid: Grid, x: int, y: int, corner: Corner) -> bool:
    """True if the diagonal neighbour exists and differs. Off-grid is False."""
    dx, dy = corner.delta
    other = grid.get(x + dx, y + dy)
    return other is not None and other != grid.get(x, y)


def count_corners(grid: Grid, x: int, y: int) -> int:
    """
    Count the polygon corners contributed by (x, y).

    A quadrant is an outer corner when both bordering sides differ, and an
    inner corner when both sides match but the diagonal differs. Summed over
    a region this equals its number of sides.
    """
    corners = 0
    for corner in Corner:
        if is_edge_different(grid, x, y, corner.sides):
            corners += 1
        elif is_edge_same(grid, x, y, corner.sides) and is_diagonal_different(grid, x, y, corner):
            corners += 1
    return corners
