"""
Shared type definitions for the gridwalk system.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from enum import Enum


class Direction(Enum):
    """Cardinal direction of travel. NONE marks a dead position."""

    NONE = "-"
    N = "N"  # Up (decreasing y)
    E = "E"  # Right (increasing x)
    S = "S"  # Down (increasing y)
    W = "W"  # Left (decreasing x)

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    @property
    def right(self) -> Direction:
        """Direction 90° clockwise."""
        return _RIGHT[self]

    @property
    def left(self) -> Direction:
        """Direction 90° counter-clockwise."""
        return _LEFT[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITE[self]

    @property
    def arrow(self) -> str:
        return _ARROWS[self]

    @staticmethod
    def from_char(ch: str) -> Direction:
        """Convert an arrow character (^ > v <) to a direction, NONE otherwise."""
        for direction, arrow in _ARROWS.items():
            if direction is not Direction.NONE and arrow == ch:
                return direction
        return Direction.NONE


_DELTAS = {
    Direction.NONE: (0, 0),
    Direction.N: (0, -1),
    Direction.E: (1, 0),
    Direction.S: (0, 1),
    Direction.W: (-1, 0),
}

_RIGHT = {
    Direction.NONE: Direction.NONE,
    Direction.N: Direction.E,
    Direction.E: Direction.S,
    Direction.S: Direction.W,
    Direction.W: Direction.N,
}

_LEFT = {value: key for key, value in _RIGHT.items()}

_OPPOSITE = {
    Direction.NONE: Direction.NONE,
    Direction.N: Direction.S,
    Direction.E: Direction.W,
    Direction.S: Direction.N,
    Direction.W: Direction.E,
}

_ARROWS = {
    Direction.NONE: "+",
    Direction.N: "^",
    Direction.E: ">",
    Direction.S: "v",
    Direction.W: "<",
}


class Corner(Enum):
    """Diagonal quadrant of a cell."""

    NE = "NE"
    SE = "SE"
    SW = "SW"
    NW = "NW"

    @property
    def sides(self) -> tuple[Direction, Direction]:
        """The two orthogonal directions bordering this quadrant."""
        return _CORNER_SIDES[self]

    @property
    def delta(self) -> tuple[int, int]:
        (dx1, dy1), (dx2, dy2) = (side.delta for side in self.sides)
        return (dx1 + dx2, dy1 + dy2)


_CORNER_SIDES = {
    Corner.NE: (Direction.N, Direction.E),
    Corner.SE: (Direction.S, Direction.E),
    Corner.SW: (Direction.S, Direction.W),
    Corner.NW: (Direction.N, Direction.W),
}


# =============================================================================
# Bounds
# =============================================================================


@dataclass(frozen=True)
class Bounds:
    """Movement limits: min inclusive, max exclusive."""

    min_x: int = -sys.maxsize
    min_y: int = -sys.maxsize
    max_x: int = sys.maxsize
    max_y: int = sys.maxsize

    @classmethod
    def of_size(cls, width: int, height: int) -> Bounds:
        return cls(0, 0, width, height)

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y


UNBOUNDED = Bounds()


# =============================================================================
# Directed Position
# =============================================================================


@dataclass(frozen=True)
class Position:
    """
    A grid cell plus a facing direction and movement counters.

    Positions are immutable: movement and rotation return new values.
    Dataclass equality compares every field; use `key` when only the
    cell matters (visited sets, occupancy checks).
    """

    x: int
    y: int
    direction: Direction = Direction.NONE
    step: int = 0  # Steps taken in the current direction
    generation: int = 0  # Number of branch splits in this lineage
    lifetime: int = 0  # History length when this position was recorded

    @property
    def key(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def sort_key(self) -> tuple[int, int, int]:
        """Ordering: column, then row, then generation."""
        return (self.x, self.y, self.generation)

    def __lt__(self, other: Position) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.sort_key < other.sort_key

    @property
    def is_dead(self) -> bool:
        return self.direction is Direction.NONE

    def with_direction(self, direction: Direction) -> Position:
        return replace(self, direction=direction)

    def peek(self, direction: Direction | None = None, bounds: Bounds = UNBOUNDED) -> Position | None:
        """
        Return the neighbouring cell in `direction` (default: facing), facing
        that direction. None if the step would leave `bounds` or the
        direction is NONE.
        """
        if direction is None:
            direction = self.direction
        if direction is Direction.NONE:
            return None
        dx, dy = direction.delta
        nx, ny = self.x + dx, self.y + dy
        if not bounds.contains(nx, ny):
            return None
        return Position(nx, ny, direction, generation=self.generation, lifetime=self.lifetime)

    def peek_right(self, bounds: Bounds = UNBOUNDED) -> Position | None:
        return self.peek(self.direction.right, bounds)

    def peek_left(self, bounds: Bounds = UNBOUNDED) -> Position | None:
        return self.peek(self.direction.left, bounds)

    def move(self, direction: Direction | None = None, bounds: Bounds = UNBOUNDED) -> Position:
        """
        Advance one cell. A move that would leave `bounds` returns the same
        cell with direction NONE, which callers read as failure.
        """
        if direction is None:
            direction = self.direction
        target = self.peek(direction, bounds)
        if target is None:
            return replace(self, direction=Direction.NONE)
        step = self.step + 1 if direction is self.direction else 1
        return replace(self, x=target.x, y=target.y, direction=direction, step=step)

    def rotate_right(self) -> Position:
        return replace(self, direction=self.direction.right, step=0)

    def rotate_left(self) -> Position:
        return replace(self, direction=self.direction.left, step=0)

    def direction_from(self, previous: Position) -> Direction:
        """Direction of the axis-aligned move from `previous` to this cell."""
        dx = self.x - previous.x
        dy = self.y - previous.y
        if dx > 0 and dy == 0:
            return Direction.E
        if dx < 0 and dy == 0:
            return Direction.W
        if dx == 0 and dy > 0:
            return Direction.S
        if dx == 0 and dy < 0:
            return Direction.N
        return Direction.NONE

    def __str__(self) -> str:
        if self.generation > 0:
            return f"[{self.x}, {self.y} - {self.direction.value} : {self.generation}]"
        if not self.is_dead:
            return f"[{self.x}, {self.y} - {self.direction.value}]"
        return f"[{self.x}, {self.y}]"
