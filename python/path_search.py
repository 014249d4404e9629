"""
Round-based multi-path search over a character grid.

Every branch faces a direction and may, each round, split off a branch to its
right and one to its left and then step forward. All branches in flight are
processed together per round, so the search is breadth-first in steps.
Three modes share that skeleton:

* LENGTH_ONLY: shortest path lengths, no history kept.
* SHORTEST: shortest paths with full history.
* ALL_PATHS: turn-weighted cost (steps + penalty per turn), optional slack
  and cost ceiling; branches never re-enter cells they already visited.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from grid_map import Grid
from grid_types import Bounds, Position
from trackers import TURN_PENALTY, Tracker

logger = logging.getLogger(__name__)


class SearchMode(Enum):
    """What the search keeps per branch and how it prices a branch."""

    LENGTH_ONLY = "length_only"  # Step count only
    SHORTEST = "shortest"  # Full history, priced by step count
    ALL_PATHS = "all_paths"  # Full history, priced by turn-weighted cost


@dataclass(frozen=True)
class CostRules:
    """Rules governing branch pricing and pruning."""

    turn_penalty: int = TURN_PENALTY
    slack: int = 0  # Allowed excess over the best cost recorded at a cell
    max_value: int | None = None  # Branches costing more are dropped


@dataclass(frozen=True)
class SearchRound:
    """Snapshot of the search after one round."""

    index: int
    active: tuple[Tracker, ...]  # Branches still in flight
    finished: tuple[Tracker, ...]  # All branches that reached the finish so far


def _price(tracker: Tracker, mode: SearchMode, rules: CostRules) -> int:
    if mode is SearchMode.ALL_PATHS:
        return tracker.cost(rules.turn_penalty)
    return tracker.length


def _run_round(
    grid: Grid,
    trackers: list[Tracker],
    finish: tuple[int, int],
    free_char: str,
    mode: SearchMode,
    rules: CostRules,
    bounds: Bounds,
    best: dict[tuple[int, int], int],
) -> tuple[list[Tracker], list[Tracker]]:
    """
    Advance every tracker by one round.

    Returns:
        (trackers still in flight, trackers that reached the finish)
    """
    worklist: list[Tracker] = []
    finished: list[Tracker] = []
    occupied = {t.key for t in trackers}

    for tracker in trackers:
        # The finish is priced like any other cell, so late arrivals are dropped
        price = _price(tracker, mode, rules)
        best_price = min(best.get(tracker.key, price), price)
        best[tracker.key] = best_price
        if price > best_price + rules.slack or (rules.max_value is not None and price > rules.max_value):
            worklist.append(tracker.terminated())
            continue

        if tracker.key == finish:
            finished.append(tracker)
            worklist.append(tracker.terminated())
            continue

        position = tracker.position
        for candidate in (position.peek_right(bounds), position.peek_left(bounds)):
            if candidate is None or not grid.is_position_value(candidate, free_char):
                continue
            if mode is SearchMode.ALL_PATHS:
                if tracker.has_visited(candidate.x, candidate.y):
                    continue
            elif candidate.key in occupied:
                continue
            occupied.add(candidate.key)
            worklist.append(tracker.split(candidate))

        ahead = position.peek(bounds=bounds)
        if ahead is None or not grid.is_position_value(ahead, free_char):
            worklist.append(tracker.terminated())
            continue
        moved = tracker.move(bounds)
        occupied.add(moved.key)
        worklist.append(moved)

    return [t for t in worklist if not t.is_dead], finished


def iter_search_rounds(
    grid: Grid,
    start: Position,
    finish: Position,
    free_char: str = ".",
    mode: SearchMode = SearchMode.SHORTEST,
    rules: CostRules | None = None,
    bounds: Bounds | None = None,
) -> Iterator[SearchRound]:
    """
    Run the search, yielding a SearchRound after each round.

    Stop iterating to abandon the search early.

    Args:
        grid: Grid to search (read only)
        start: Start cell; its direction is the initial facing
        finish: Goal cell (direction ignored)
        free_char: Character of walkable cells
        mode: Search mode
        rules: Cost rules; defaults to CostRules()
        bounds: Movement bounds; defaults to the grid bounds
    """
    if rules is None:
        rules = CostRules()
    if bounds is None:
        bounds = grid.bounds

    trackers = [Tracker.start(start, with_history=mode is not SearchMode.LENGTH_ONLY)]
    finished: list[Tracker] = []
    best: dict[tuple[int, int], int] = {}
    index = 0

    while trackers:
        trackers, done = _run_round(grid, trackers, finish.key, free_char, mode, rules, bounds, best)
        finished.extend(done)
        logger.debug(
            "%s round %d: %d in flight, %d finished",
            mode.value,
            index,
            len(trackers),
            len(finished),
        )
        yield SearchRound(index, tuple(trackers), tuple(finished))
        index += 1


def _search(
    grid: Grid,
    start: Position,
    finish: Position,
    free_char: str,
    mode: SearchMode,
    rules: CostRules | None,
    bounds: Bounds | None,
) -> list[Tracker]:
    last: SearchRound | None = None
    for last in iter_search_rounds(grid, start, finish, free_char, mode, rules, bounds):
        pass
    finished = list(last.finished) if last is not None else []
    logger.info(
        "%s search %s -> %s: %d path(s) after %d round(s)",
        mode.value,
        start,
        finish,
        len(finished),
        last.index + 1 if last is not None else 0,
    )
    return finished


def find_shortest_path_lengths(
    grid: Grid,
    start: Position,
    finish: Position,
    free_char: str = ".",
    bounds: Bounds | None = None,
) -> list[Tracker]:
    """Find the shortest paths to `finish`, keeping only their lengths."""
    return _search(grid, start, finish, free_char, SearchMode.LENGTH_ONLY, None, bounds)


def find_shortest_paths(
    grid: Grid,
    start: Position,
    finish: Position,
    free_char: str = ".",
    bounds: Bounds | None = None,
) -> list[Tracker]:
    """Find the shortest paths to `finish` with their full history."""
    return _search(grid, start, finish, free_char, SearchMode.SHORTEST, None, bounds)


def find_paths(
    grid: Grid,
    start: Position,
    finish: Position,
    free_char: str = ".",
    rules: CostRules | None = None,
    bounds: Bounds | None = None,
) -> list[Tracker]:
    """
    Find paths to `finish` priced by turn-weighted cost.

    A branch is dropped when its cost exceeds the best cost recorded at its
    cell by more than `rules.slack`, or exceeds `rules.max_value`.
    """
    return _search(grid, start, finish, free_char, SearchMode.ALL_PATHS, rules, bounds)


def find_bounded_paths(
    grid: Grid,
    start: Position,
    finish: Position,
    max_value: int,
    free_char: str = ".",
    bounds: Bounds | None = None,
    turn_penalty: int = TURN_PENALTY,
) -> list[Tracker]:
    """
    Find every path costing at most `max_value`.

    The pruning slack equals one turn penalty, so a branch may trail the best
    known cost at a cell by one extra turn and still reach the finish along
    an equally cheap route.
    """
    rules = CostRules(turn_penalty=turn_penalty, slack=turn_penalty, max_value=max_value)
    return _search(grid, start, finish, free_char, SearchMode.ALL_PATHS, rules, bounds)


def cheapest(trackers: Iterable[Tracker], turn_penalty: int = TURN_PENALTY) -> list[Tracker]:
    """Return the trackers sharing the lowest turn-weighted cost."""
    trackers = list(trackers)
    if not trackers:
        return []
    lowest = min(t.cost(turn_penalty) for t in trackers)
    return [t for t in trackers if t.cost(turn_penalty) == lowest]


def cells_on_paths(trackers: Iterable[Tracker]) -> set[tuple[int, int]]:
    """Every cell visited by any of the given (history-keeping) trackers."""
    return {p.key for t in trackers for p in t.path}
