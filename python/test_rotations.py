"""
Test rotation framework for systematic directional testing.

This module provides utilities to write search tests once and automatically run
them in all 4 rotations (0°, 90°, 180°, 270°), ensuring comprehensive
directional coverage.
"""

from dataclasses import dataclass, field
from typing import Callable

from grid_map import Grid
from grid_parser import parse_grid
from grid_types import Direction, Position
from trackers import Tracker

PathKeys = list[tuple[int, int]]
SearchOperation = Callable[[Grid, Position, Position], list[Tracker]]


# =============================================================================
# Rotation Utilities
# =============================================================================


def rotate_grid_90(grid: Grid) -> Grid:
    """
    Rotate a Grid 90° clockwise.

    A W×H grid rotated 90° clockwise becomes H×W.
    Cell (x, y) → (H - 1 - y, x)
    """
    height = grid.height
    new_cells = [[""] * height for _ in range(grid.width)]

    for x, y, ch in grid.iter_cells():
        new_x, new_y = rotate_key_90(x, y, height)
        new_cells[new_y][new_x] = ch

    return Grid(new_cells)


def rotate_key_90(x: int, y: int, height: int) -> tuple[int, int]:
    """Rotate a cell 90° clockwise within a grid of the given height."""
    return height - 1 - y, x


def rotate_direction_90(direction: Direction) -> Direction:
    """Rotate a direction 90° clockwise (NONE stays NONE)."""
    return direction.right


def rotate_position_90(position: Position, height: int) -> Position:
    """Rotate a directed position 90° clockwise within its grid."""
    new_x, new_y = rotate_key_90(position.x, position.y, height)
    return Position(new_x, new_y, rotate_direction_90(position.direction))


# =============================================================================
# Test Case Data Structures
# =============================================================================


@dataclass
class TestVariation:
    """A single search with start, finish, and the expected set of paths."""

    start: Position
    finish: Position
    expected: list[PathKeys]  # Cells of every finished path; empty if unreachable
    description: str = ""

    __test__ = False

    def rotate_90(self, grid: Grid) -> "TestVariation":
        """Create a new TestVariation rotated 90° clockwise within `grid`."""
        height = grid.height
        return TestVariation(
            start=rotate_position_90(self.start, height),
            finish=rotate_position_90(self.finish, height),
            expected=[[rotate_key_90(x, y, height) for x, y in path] for path in self.expected],
            description=f"{self.description} [rotated 90°]" if self.description else "[rotated 90°]",
        )


@dataclass
class RotationalTestCase:
    """
    A test case that will be run in all 4 rotations.

    Example usage:
        test = RotationalTestCase(
            name="corridor",
            maze="...",
            variations=[
                TestVariation(
                    start=Position(0, 0, Direction.E),
                    finish=Position(2, 0),
                    expected=[[(0, 0), (1, 0), (2, 0)]],
                    description="straight east",
                )
            ],
        )
    """

    name: str
    maze: str
    variations: list[TestVariation]
    grid: Grid = field(init=False)

    def __post_init__(self) -> None:
        """Parse the maze text on construction."""
        self.grid = parse_grid(self.maze)

    def get_all_rotations(self) -> list[tuple[int, Grid, TestVariation]]:
        """
        Generate all 4 rotations of this test case.

        Returns:
            List of (rotation_degrees, grid, variation) tuples
        """
        results = []

        current_grid = self.grid
        current_variations = self.variations

        for rotation in [0, 90, 180, 270]:
            for variation in current_variations:
                results.append((rotation, current_grid, variation))

            if rotation < 270:  # Don't rotate after the last iteration
                # Variations rotate within the grid as it was BEFORE rotation
                old_grid = current_grid
                current_grid = rotate_grid_90(current_grid)
                current_variations = [v.rotate_90(old_grid) for v in current_variations]

        return results


# =============================================================================
# Test Runner
# =============================================================================


def run_rotational_test(
    test_case: RotationalTestCase,
    operations: list[SearchOperation],
    assert_fn: Callable[[list[Tracker], list[PathKeys]], None] | None = None,
) -> None:
    """
    Run a rotational test case through all 4 rotations.

    Args:
        test_case: The test case to run
        operations: The searches to test (e.g., find_shortest_paths, find_paths)
        assert_fn: Optional custom assertion function. If None, compares paths.
    """
    if assert_fn is None:
        assert_fn = default_assert_paths

    rotations = test_case.get_all_rotations()

    for operation in operations:
        for rotation, grid, variation in rotations:
            result = operation(grid, variation.start, variation.finish)
            try:
                assert_fn(result, variation.expected)
            except AssertionError as e:
                raise AssertionError(
                    f"{test_case.name} at {rotation}° - {variation.description}: {e}"
                ) from e


def default_assert_paths(result: list[Tracker], expected: list[PathKeys]) -> None:
    """
    Default assertion function: the finished paths visit exactly the expected
    cells, and every step was entered in the direction it records.
    """
    actual = sorted([p.key for p in tracker.path] for tracker in result)
    assert actual == sorted(expected), f"Expected paths {sorted(expected)}, got {actual}"

    for tracker in result:
        path = tracker.path
        for prev, cur in zip(path, path[1:]):
            assert cur.direction_from(prev) is cur.direction, (
                f"Step {prev} -> {cur} recorded as {cur.direction.value}"
            )
