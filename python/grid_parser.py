"""
Grid parsing utilities for gridwalk.

Provides two entry points:
1. parse_grid: a block of text, one row per line, into a Grid
2. parse_maze: the same, plus start / finish markers turned into Positions
"""

from __future__ import annotations

from dataclasses import dataclass

from grid_map import Grid
from grid_types import Direction, Position

__all__ = ["Maze", "parse_grid", "parse_maze"]


@dataclass
class Maze:
    """A grid with a start (facing its initial direction) and a finish."""

    grid: Grid
    start: Position
    finish: Position


def parse_grid(definition: str) -> Grid:
    """
    Parse a grid from multi-line text.

    Blank lines are skipped and each remaining line is stripped, so grids
    can be written as indented triple-quoted strings.

    Example:
        \"\"\"
        AAAA
        BBCD
        BBCC
        EEEC
        \"\"\"

    Args:
        definition: Text with one grid row per line

    Returns:
        The parsed Grid

    Raises:
        ValueError: If there are no rows or the rows differ in length
    """
    rows = [line.strip() for line in definition.strip().split("\n") if line.strip()]
    if not rows:
        raise ValueError("Empty grid definition: expected at least one non-blank line")

    width = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != width]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in grid\n"
            f"  Expected: {width} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{rows[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ValueError(error_msg)

    return Grid.from_lines(rows)


def parse_maze(
    definition: str,
    start_char: str = "S",
    finish_char: str = "E",
    free_char: str = ".",
    facing: Direction = Direction.E,
) -> Maze:
    """
    Parse a maze and locate its start and finish markers.

    Both markers are replaced with `free_char` so the search can walk over
    them. The start faces `facing`.

    Raises:
        ValueError: If either marker is missing or appears more than once
    """
    grid = parse_grid(definition)

    found: dict[str, Position] = {}
    for label, ch in (("start", start_char), ("finish", finish_char)):
        positions = grid.find_all(ch)
        if len(positions) != 1:
            raise ValueError(
                f"Expected exactly one {label} marker '{ch}', found {len(positions)}\n"
                f"  Grid size: {grid.width}x{grid.height}"
            )
        found[label] = positions[0]
        grid.set_position(positions[0], free_char)

    start = found["start"].with_direction(facing)
    return Maze(grid, start, found["finish"])
