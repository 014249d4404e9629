"""
Search-branch state for the multi-path search.

A Tracker pairs a directed Position with one of two search states:

* WithHistory: the full path so far, stored as a persistent linked list of
  PathNode so that branches share their common prefix.
* LengthOnly: just the number of steps taken.

Both variants move and split the same way; only the bookkeeping differs.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator

from grid_types import UNBOUNDED, Bounds, Direction, Position

TURN_PENALTY = 1000


def _is_turn(a: Direction, b: Direction) -> bool:
    return a is not Direction.NONE and b is not Direction.NONE and a is not b


@dataclass(frozen=True)
class PathNode:
    """One recorded position plus a link to everything recorded before it."""

    position: Position
    parent: PathNode | None
    size: int  # Number of positions up to and including this one
    turns: int  # Direction changes up to and including this one

    def append(self, position: Position) -> PathNode:
        turns = self.turns + (1 if _is_turn(self.position.direction, position.direction) else 0)
        return PathNode(position, self, self.size + 1, turns)

    def __iter__(self) -> Iterator[Position]:
        """Iterate positions newest first."""
        node: PathNode | None = self
        while node is not None:
            yield node.position
            node = node.parent


@dataclass(frozen=True)
class WithHistory:
    """Search state carrying the full path history."""

    node: PathNode | None = None


@dataclass(frozen=True)
class LengthOnly:
    """Search state carrying only the path length."""

    length: int = 0


SearchState = WithHistory | LengthOnly


@dataclass(frozen=True)
class Tracker:
    """A search branch: where it is, which way it faces, and how it got there."""

    position: Position
    state: SearchState

    @classmethod
    def start(cls, position: Position, with_history: bool = True) -> Tracker:
        state: SearchState = WithHistory() if with_history else LengthOnly()
        return cls(replace(position, step=0, generation=0, lifetime=0), state)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def key(self) -> tuple[int, int]:
        return self.position.key

    @property
    def is_dead(self) -> bool:
        return self.position.is_dead

    @property
    def length(self) -> int:
        """Number of steps taken from the start."""
        match self.state:
            case WithHistory(node=node):
                return node.size if node is not None else 0
            case LengthOnly(length=length):
                return length
        raise ValueError(f"Unknown search state: {self.state}")

    @property
    def turns(self) -> int:
        """Direction changes along the path, including the current facing."""
        match self.state:
            case WithHistory(node=None):
                return 0
            case WithHistory(node=node):
                pending = _is_turn(node.position.direction, self.position.direction)
                return node.turns + (1 if pending else 0)
            case LengthOnly():
                raise ValueError("Length-only trackers do not record turns")
        raise ValueError(f"Unknown search state: {self.state}")

    def cost(self, turn_penalty: int = TURN_PENALTY) -> int:
        """Turn-weighted cost: steps plus `turn_penalty` per direction change."""
        return self.length + turn_penalty * self.turns

    @property
    def distance_sum(self) -> int:
        """Coordinate sum plus 9 per step, less one per branch split."""
        return self.position.x + self.position.y + self.length * 9 - self.position.generation

    @property
    def history(self) -> list[Position]:
        """Recorded positions before the current one, oldest first."""
        match self.state:
            case WithHistory(node=None):
                return []
            case WithHistory(node=node):
                return list(node)[::-1]
            case LengthOnly():
                raise ValueError("Length-only trackers do not record history")
        raise ValueError(f"Unknown search state: {self.state}")

    @property
    def path(self) -> list[Position]:
        """Every position from the start up to the current one."""
        return self.history + [self.position]

    @property
    def extent(self) -> Bounds:
        """Smallest bounds enclosing the whole path."""
        path = self.path
        xs = [p.x for p in path]
        ys = [p.y for p in path]
        return Bounds(min(xs), min(ys), max(xs) + 1, max(ys) + 1)

    def has_visited(self, x: int, y: int) -> bool:
        """True if (x, y) appears in this branch's history."""
        match self.state:
            case WithHistory(node=None):
                return False
            case WithHistory(node=node):
                return any(p.x == x and p.y == y for p in node)
            case LengthOnly():
                raise ValueError("Length-only trackers do not record visited cells")
        raise ValueError(f"Unknown search state: {self.state}")

    # =========================================================================
    # Transitions
    # =========================================================================

    def _recorded(self) -> SearchState:
        """State after the current position has been left behind."""
        match self.state:
            case WithHistory(node=node):
                size = node.size if node is not None else 0
                entry = replace(self.position, lifetime=size)
                if node is None:
                    return WithHistory(PathNode(entry, None, 1, 0))
                return WithHistory(node.append(entry))
            case LengthOnly(length=length):
                return LengthOnly(length + 1)
        raise ValueError(f"Unknown search state: {self.state}")

    def move(self, bounds: Bounds = UNBOUNDED) -> Tracker:
        """Advance one cell in the facing direction; dead if it leaves bounds."""
        moved = self.position.move(bounds=bounds)
        if moved.is_dead:
            return replace(self, position=moved)
        return Tracker(moved, self._recorded())

    def split(self, new_position: Position) -> Tracker:
        """
        Branch into `new_position` (normally a peek_right / peek_left result).

        The child shares this tracker's history, with the current position
        appended, and starts a new generation.
        """
        state = self._recorded()
        lifetime = self.length
        child = replace(
            new_position,
            step=0,
            generation=self.position.generation + 1,
            lifetime=lifetime,
        )
        return Tracker(child, state)

    def terminated(self) -> Tracker:
        """Copy of this tracker marked dead."""
        return replace(self, position=self.position.with_direction(Direction.NONE))

    def __str__(self) -> str:
        match self.state:
            case LengthOnly(length=length):
                return f"{self.position} len={length}"
            case _:
                return f"{self.position} len={self.length} turns={self.turns}"
