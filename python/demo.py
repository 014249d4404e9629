"""
Demonstration scripts for the gridwalk toolkit.
"""

import logging

import simple_chalk as chalk  # type: ignore[import-untyped]

from ascii_render import draw_path, log_grid, render, render_search
from flood_fill import flood_fill, measure_regions
from grid_parser import parse_grid, parse_maze
from path_search import (
    cells_on_paths,
    cheapest,
    find_bounded_paths,
    find_paths,
    find_shortest_path_lengths,
    find_shortest_paths,
)

GARDEN = """
RRRRIICCFF
RRRRIICCCF
VVRRRCCFFF
VVRCCCJFFF
VVVVCJJCFE
VVIVCCJJEE
VVIIICJJEE
MIIIIIJJEE
MIIISIJEEE
MMMISSJEEE
"""

MAZE = """
###############
#.......#....E#
#.#.###.#.###.#
#.....#.#...#.#
#.###.#####.#.#
#.#.#.......#.#
#.#.#####.###.#
#...........#.#
###.#.#####.#.#
#...#.....#.#.#
#.#.#.###.#.#.#
#.....#...#.#.#
#.###.#.#.#.#.#
#S..#.....#...#
###############
"""


def demo_regions() -> None:
    """Measure every region of a garden and price its fencing."""
    print("=" * 60)
    print("Regions")
    print("=" * 60)
    grid = parse_grid(GARDEN)
    print(render(grid))
    print()

    regions = measure_regions(grid)
    for region in regions:
        m = region.metrics
        print(
            f"  {region.char} at {region.seed}: area={m.area:3d} "
            f"perimeter={m.perimeter:3d} sides={m.corners:3d}"
        )
    print(f"Total fence cost: {sum(r.metrics.fence_cost for r in regions)}")
    print(f"Total side cost:  {sum(r.metrics.side_cost for r in regions)}")

    # Fill a single region in place to show the working / original split
    working = grid.copy()
    metrics = flood_fill(working, 0, 0, "R", grid)
    print(f"\nRegion R filled from (0, 0): {metrics}")
    print(render(working, highlight={p.key: chalk.white for p in working.find_all("-")}))
    print()


def demo_paths() -> None:
    """Search a maze in every mode."""
    print("=" * 60)
    print("Paths")
    print("=" * 60)
    maze = parse_maze(MAZE)

    lengths = find_shortest_path_lengths(maze.grid, maze.start, maze.finish)
    print(f"Shortest length(s): {sorted({t.length for t in lengths})}")

    shortest = find_shortest_paths(maze.grid, maze.start, maze.finish)
    print(f"Shortest paths: {len(shortest)}")

    best = cheapest(find_paths(maze.grid, maze.start, maze.finish))
    cost = best[0].cost()
    print(f"Cheapest turn-weighted cost: {cost}")

    all_best = cheapest(find_bounded_paths(maze.grid, maze.start, maze.finish, cost))
    print(f"Paths at that cost: {len(all_best)}, covering {len(cells_on_paths(all_best))} cells")

    canvas = maze.grid.copy()
    for tracker in all_best:
        draw_path(canvas, tracker, "O", input_grid=maze.grid)
    print(render_search(maze.grid, [], all_best))
    print()

    log_grid(canvas)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    demo_regions()
    demo_paths()
