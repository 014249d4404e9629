"""Tests for ascii_render module."""

import logging

import pytest
import simple_chalk as chalk  # type: ignore[import-untyped]

from ascii_render import assign_colors, draw_path, draw_path_direction, log_grid, render, render_search
from grid_map import Grid
from grid_parser import Maze, parse_grid, parse_maze
from grid_types import Direction, Position
from path_search import find_paths
from trackers import Tracker

TWO_ROUTES = """
#####
#S..#
#.#.#
#..E#
#####
"""


@pytest.fixture
def maze() -> Maze:
    return parse_maze(TWO_ROUTES)


@pytest.fixture
def upper_route(maze: Maze) -> Tracker:
    """The single cheapest route: east along the top, then south."""
    (tracker,) = find_paths(maze.grid, maze.start, maze.finish)
    return tracker


# =============================================================================
# Test Path Drawing
# =============================================================================


class TestDrawPath:
    """Tests for drawing a tracker's path onto a grid."""

    def test_draw_every_cell(self, maze: Maze, upper_route: Tracker) -> None:
        canvas = maze.grid.copy()
        written = draw_path(canvas, upper_route, "O")
        assert written == len(upper_route.path) == 5
        assert canvas.render_lines() == ["#####", "#OOO#", "#.#O#", "#..O#", "#####"]

    def test_overlay_keeps_markers(self, maze: Maze, upper_route: Tracker) -> None:
        """With an input grid, only its empty cells are drawn over."""
        original = parse_grid(TWO_ROUTES)
        canvas = original.copy()
        written = draw_path(canvas, upper_route, "O", input_grid=original)
        assert written == 3
        assert canvas.render_lines() == ["#####", "#SOO#", "#.#O#", "#..E#", "#####"]

    def test_draw_direction(self, maze: Maze, upper_route: Tracker) -> None:
        canvas = maze.grid.copy()
        draw_path_direction(canvas, upper_route)
        assert canvas.render_lines() == ["#####", "#>>>#", "#.#v#", "#..v#", "#####"]

    def test_draw_length_only_tracker_raises(self) -> None:
        tracker = Tracker.start(Position(0, 0, Direction.E), with_history=False)
        with pytest.raises(ValueError):
            draw_path(Grid.filled(2, 2), tracker, "O")


# =============================================================================
# Test Coloured Rendering
# =============================================================================


class TestRender:
    """Tests for ANSI rendering."""

    def test_no_colors_is_plain_text(self, maze: Maze) -> None:
        assert render(maze.grid, colors={}) == str(maze.grid)

    def test_highlight_overrides_character_colour(self) -> None:
        grid = parse_grid("X.")
        output = render(grid, colors={"X": chalk.blue}, highlight={(0, 0): chalk.red})
        assert output == chalk.red("X") + "."

    def test_default_colors_skip_plain_chars(self) -> None:
        grid = parse_grid("AB.#")
        assert render(grid) == chalk.red("A") + chalk.green("B") + ".#"

    def test_one_line_per_row(self) -> None:
        grid = parse_grid("ab\ncd")
        assert len(render(grid).split("\n")) == 2

    def test_assign_colors_cycles(self) -> None:
        colors = assign_colors("cabc", palette=[str.upper, str.lower])
        assert colors == {"a": str.upper, "b": str.lower, "c": str.upper}

    def test_render_search(self, maze: Maze, upper_route: Tracker) -> None:
        head = Tracker.start(Position(1, 3, Direction.E))
        output = render_search(maze.grid, [head], [upper_route])
        assert chalk.yellowBright(">") in output
        assert chalk.greenBright("O") in output
        assert chalk.blue("#") in output
        # The working grid is not drawn on
        assert "O" not in str(maze.grid)


class TestLogGrid:
    """Tests for sending grids to a logger."""

    def test_default_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        grid = parse_grid("ab\ncd")
        with caplog.at_level(logging.INFO, logger="ascii_render"):
            log_grid(grid)
        assert caplog.messages == ["ab", "cd"]

    def test_custom_logger_and_level(self, caplog: pytest.LogCaptureFixture) -> None:
        log = logging.getLogger("gridwalk.test")
        with caplog.at_level(logging.DEBUG, logger="gridwalk.test"):
            log_grid(parse_grid("xyz"), log=log, level=logging.DEBUG)
        assert [(r.levelno, r.getMessage()) for r in caplog.records] == [(logging.DEBUG, "xyz")]
