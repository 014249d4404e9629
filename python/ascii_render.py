"""
ASCII rendering for gridwalk structures.

Provides:
1. Path drawing onto a grid (plain character or direction arrows)
2. Coloured rendering of a grid with highlighted cells and per-character colours
3. Feeding rendered lines to a logger
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_map import Grid
from trackers import Tracker

logger = logging.getLogger(__name__)

ColorFn = Callable[[str], str]


# =============================================================================
# Path Drawing
# =============================================================================


def draw_path(
    grid: Grid,
    tracker: Tracker,
    ch: str,
    input_grid: Grid | None = None,
    empty_char: str = ".",
) -> int:
    """
    Mark every cell of the tracker's path with `ch`.

    If `input_grid` is given, only cells that are `empty_char` there are
    written, leaving the puzzle's own markings visible.

    Returns:
        Number of cells written
    """
    written = 0
    for pos in tracker.path:
        if input_grid is not None:
            ok = grid.set_in_bounds_no_overwrite(pos.x, pos.y, ch, input_grid, empty_char)
        else:
            ok = grid.set_position(pos, ch)
        written += ok
    return written


def draw_path_direction(grid: Grid, tracker: Tracker) -> None:
    """Mark the tracker's path with arrows showing how each cell was entered."""
    for pos in tracker.path:
        grid.set_position(pos, pos.direction.arrow)


# =============================================================================
# Coloured Rendering
# =============================================================================


DEFAULT_PALETTE: list[ColorFn] = [
    chalk.red,
    chalk.green,
    chalk.yellow,
    chalk.blue,
    chalk.magenta,
    chalk.cyan,
    chalk.redBright,
    chalk.greenBright,
    chalk.yellowBright,
    chalk.blueBright,
]


def assign_colors(chars: Iterable[str], palette: list[ColorFn] | None = None) -> dict[str, ColorFn]:
    """Assign palette colours to characters in sorted order, cycling as needed."""
    if palette is None:
        palette = DEFAULT_PALETTE
    return {ch: palette[i % len(palette)] for i, ch in enumerate(sorted(set(chars)))}


def render(
    grid: Grid,
    colors: dict[str, ColorFn] | None = None,
    highlight: dict[tuple[int, int], ColorFn] | None = None,
    plain: Iterable[str] = (".", "#"),
) -> str:
    """
    Render a grid to a string with ANSI colours.

    Args:
        grid: The grid to render
        colors: Colour per character; defaults to assign_colors over the grid,
                leaving the `plain` characters uncoloured
        highlight: Colour per (x, y) cell, overriding the character colour

    Returns:
        Rendered string, one line per row
    """
    if colors is None:
        plain_set = set(plain)
        colors = assign_colors(ch for _, _, ch in grid.iter_cells() if ch not in plain_set)
    if highlight is None:
        highlight = {}

    lines: list[str] = []
    for y, row in enumerate(grid.cells):
        parts: list[str] = []
        for x, ch in enumerate(row):
            colorize = highlight.get((x, y)) or colors.get(ch)
            parts.append(colorize(ch) if colorize else ch)
        lines.append("".join(parts))
    return "\n".join(lines)


def render_search(
    grid: Grid,
    active: Iterable[Tracker],
    finished: Iterable[Tracker] = (),
) -> str:
    """
    Render a search in progress: finished paths in green, branch heads as
    arrows in yellow.
    """
    canvas = grid.copy()
    highlight: dict[tuple[int, int], ColorFn] = {}
    for tracker in finished:
        for pos in tracker.path:
            highlight[pos.key] = chalk.greenBright
        draw_path(canvas, tracker, "O")
    for tracker in active:
        canvas.set_position(tracker.position, tracker.position.direction.arrow)
        highlight[tracker.key] = chalk.yellowBright
    return render(canvas, colors={"#": chalk.blue}, highlight=highlight)


# =============================================================================
# Logging
# =============================================================================


def log_grid(grid: Grid, log: logging.Logger | None = None, level: int = logging.INFO) -> None:
    """Send the grid to a logger, one record per row."""
    if log is None:
        log = logger
    for line in grid.render_lines():
        log.log(level, "%s", line)
