"""
Scanline flood fill with incremental shape metrics.

The fill rewrites a working grid while area, perimeter and corners are read
from an untouched original, so one pass yields everything needed for
area x perimeter and area x sides pricing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from geometry import count_corners, perimeter_edges
from grid_map import Grid
from grid_types import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionMetrics:
    """Shape metrics of one connected region."""

    area: int = 0
    perimeter: int = 0
    corners: int = 0  # Equals the side count of a rectilinear region

    @property
    def fence_cost(self) -> int:
        return self.area * self.perimeter

    @property
    def side_cost(self) -> int:
        return self.area * self.corners


@dataclass(frozen=True)
class Region:
    """A measured region, identified by its character and first cell."""

    char: str
    seed: Position
    metrics: RegionMetrics


def flood_fill(
    grid: Grid,
    x: int,
    y: int,
    fill_char: str,
    original: Grid,
    visited_marker: str = "-",
) -> RegionMetrics:
    """
    Fill the region of `fill_char` containing (x, y) with `visited_marker`.

    Args:
        grid: Working grid, mutated in place
        x, y: Seed cell
        fill_char: Character of the region to fill
        original: Unmodified grid used for perimeter and corner lookups
        visited_marker: Replacement character for filled cells

    Returns:
        RegionMetrics for the filled cells; all zero if the seed does not
        hold `fill_char` (for example, when the region was already filled)

    Raises:
        ValueError: If `fill_char` equals `visited_marker`
    """
    if fill_char == visited_marker:
        raise ValueError(
            f"Fill character '{fill_char}' is also the visited marker\n"
            f"  Filled cells would still match and be scanned again\n"
            f"  Choose a visited marker that differs from the region character"
        )

    area = 0
    perimeter = 0
    corners = 0
    width = grid.width

    seeds: list[tuple[int, int]] = [(x, y)]
    while seeds:
        sx, sy = seeds.pop()
        if not grid.is_value(sx, sy, fill_char):
            continue

        # Whether the cell above / below the previous column matched, so a
        # contiguous run seeds the adjacent row only once
        seed_above = False
        seed_below = False
        left_above = False
        left_below = False

        def visit(cx: int) -> None:
            nonlocal area, perimeter, corners, seed_above, seed_below
            grid.cells[sy][cx] = visited_marker
            area += 1
            perimeter += perimeter_edges(original, cx, sy)
            corners += count_corners(original, cx, sy)

            above = grid.is_value(cx, sy - 1, fill_char)
            if above and not seed_above:
                seeds.append((cx, sy - 1))
            seed_above = above

            below = grid.is_value(cx, sy + 1, fill_char)
            if below and not seed_below:
                seeds.append((cx, sy + 1))
            seed_below = below

        # Scan right from the seed
        cx = sx
        while cx < width and grid.cells[sy][cx] == fill_char:
            visit(cx)
            if cx == sx:
                left_above, left_below = seed_above, seed_below
            cx += 1

        # Scan left, continuing the runs seen at the seed column
        seed_above, seed_below = left_above, left_below
        cx = sx - 1
        while cx >= 0 and grid.cells[sy][cx] == fill_char:
            visit(cx)
            cx -= 1

    metrics = RegionMetrics(area, perimeter, corners)
    if area:
        logger.debug(
            "flood_fill: '%s' at (%d, %d): area=%d perimeter=%d corners=%d",
            fill_char,
            x,
            y,
            area,
            perimeter,
            corners,
        )
    return metrics


def measure_regions(grid: Grid, visited_marker: str = "-") -> list[Region]:
    """
    Measure every connected region of `grid`, in row-major seed order.

    The grid itself is left untouched; filling happens on a copy.

    Raises:
        ValueError: If `visited_marker` already occurs in the grid
    """
    if grid.count(visited_marker):
        raise ValueError(
            f"Visited marker '{visited_marker}' occurs in the grid\n"
            f"  Found {grid.count(visited_marker)} cell(s)\n"
            f"  Choose a marker that is not a region character"
        )

    working = grid.copy()
    regions: list[Region] = []
    for x, y, ch in grid.iter_cells():
        if working.cells[y][x] == visited_marker:
            continue
        metrics = flood_fill(working, x, y, ch, grid, visited_marker)
        regions.append(Region(ch, Position(x, y), metrics))

    logger.info("measure_regions: %d regions in %dx%d grid", len(regions), grid.width, grid.height)
    return regions
