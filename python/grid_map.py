"""
Bounds-checked 2D character grid.

Cells are addressed as (x, y) with x the column and y the row. Reads outside
the grid return a sentinel (None / False); writes outside the grid are
rejected and reported through the return value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from grid_types import Bounds, Position


@dataclass
class Grid:
    """A mutable rectangular grid of single characters."""

    cells: list[list[str]]

    @classmethod
    def filled(cls, width: int, height: int, fill: str = ".") -> Grid:
        """Create a width x height grid with every cell set to `fill`."""
        return cls([[fill] * width for _ in range(height)])

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Grid:
        """
        Create a grid from row strings, one row per line.

        The width is taken from the first row; rectangularity is the
        caller's responsibility (see grid_parser.parse_grid for a checked
        variant).
        """
        rows = list(lines)
        width = len(rows[0]) if rows else 0
        return cls([list(row[:width]) for row in rows])

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def bounds(self) -> Bounds:
        return Bounds.of_size(self.width, self.height)

    def copy(self) -> Grid:
        return Grid([list(row) for row in self.cells])

    # =========================================================================
    # Queries
    # =========================================================================

    def is_in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> str | None:
        if not self.is_in_bounds(x, y):
            return None
        return self.cells[y][x]

    def get_position(self, pos: Position) -> str | None:
        return self.get(pos.x, pos.y)

    def is_value(self, x: int, y: int, ch: str) -> bool:
        return self.is_in_bounds(x, y) and self.cells[y][x] == ch

    def is_position_value(self, pos: Position, ch: str) -> bool:
        return self.is_value(pos.x, pos.y, ch)

    def iter_cells(self) -> Iterator[tuple[int, int, str]]:
        """Yield (x, y, ch) in row-major order."""
        for y, row in enumerate(self.cells):
            for x, ch in enumerate(row):
                yield x, y, ch

    def find_first(self, ch: str) -> Position | None:
        for x, y, value in self.iter_cells():
            if value == ch:
                return Position(x, y)
        return None

    def find_all(self, ch: str) -> list[Position]:
        return [Position(x, y) for x, y, value in self.iter_cells() if value == ch]

    def count(self, ch: str) -> int:
        return sum(row.count(ch) for row in self.cells)

    # =========================================================================
    # Mutation
    # =========================================================================

    def set_in_bounds(self, x: int, y: int, ch: str) -> bool:
        if not self.is_in_bounds(x, y):
            return False
        self.cells[y][x] = ch
        return True

    def set_position(self, pos: Position, ch: str) -> bool:
        return self.set_in_bounds(pos.x, pos.y, ch)

    def set_in_bounds_no_overwrite(
        self,
        x: int,
        y: int,
        ch: str,
        input_grid: Grid,
        empty_char: str = ".",
    ) -> bool:
        """
        Write `ch` only where `input_grid` holds `empty_char`.

        Used to overlay drawings on a copy of a puzzle without covering the
        puzzle's own markings.
        """
        if not self.is_in_bounds(x, y):
            return False
        if not input_grid.is_value(x, y, empty_char):
            return False
        self.cells[y][x] = ch
        return True

    def clear(self, default: str = ".") -> None:
        for row in self.cells:
            row[:] = [default] * len(row)

    # =========================================================================
    # Rendering
    # =========================================================================

    def render_lines(self) -> list[str]:
        """Render as `height` lines of `width` characters."""
        return ["".join(row) for row in self.cells]

    def __str__(self) -> str:
        return "\n".join(self.render_lines())
