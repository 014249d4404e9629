"""
Interactive demo for gridwalk path search.
Display a maze and step through the search one round at a time.
"""

import logging
import sys
from typing import Iterator

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_search
from demo import MAZE
from grid_parser import Maze, parse_maze
from path_search import SearchMode, SearchRound, cheapest, iter_search_rounds

LAYOUTS = dict(
    demo=MAZE,
    small="""
    #######
    #....E#
    #.#.#.#
    #S....#
    #######
    """,
)

MODES = [SearchMode.LENGTH_ONLY, SearchMode.SHORTEST, SearchMode.ALL_PATHS]


class InteractiveDemo:
    """Interactive round-by-round view of a multi-path search."""

    def __init__(self, maze: Maze) -> None:
        self.maze = maze
        self.console = Console()
        self.mode_index = 1
        self.status_message = "Ready"
        self.current: SearchRound | None = None
        self.reset_search()

    @property
    def mode(self) -> SearchMode:
        return MODES[self.mode_index]

    def reset_search(self) -> None:
        """Restart the search from the first round."""
        self.rounds: Iterator[SearchRound] = iter_search_rounds(
            self.maze.grid, self.maze.start, self.maze.finish, mode=self.mode
        )
        self.current = None

    def step(self) -> None:
        """Advance the search by one round."""
        try:
            self.current = next(self.rounds)
        except StopIteration:
            self.status_message = "Search finished"
            return
        self.status_message = (
            f"Round {self.current.index}: {len(self.current.active)} in flight, "
            f"{len(self.current.finished)} finished"
        )

    def run_to_end(self) -> None:
        while True:
            before = self.current
            self.step()
            if self.current is before:
                break

    def generate_display(self) -> Panel:
        """Generate the current display with maze and status."""
        active = self.current.active if self.current else ()
        finished = self.current.finished if self.current else ()
        if self.mode is SearchMode.LENGTH_ONLY:
            grid_text = render_search(self.maze.grid, active)
        elif self.mode is SearchMode.ALL_PATHS:
            grid_text = render_search(self.maze.grid, active, cheapest(finished))
        else:
            grid_text = render_search(self.maze.grid, active, finished)

        status = Text()
        status.append("Mode: ", style="bold")
        status.append(f"{self.mode.value}\n")
        status.append("Start: ", style="bold")
        status.append(f"{self.maze.start}  ")
        status.append("Finish: ", style="bold")
        status.append(f"{self.maze.finish}\n\n")

        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  SPACE - Next round\n")
        status.append("  F     - Run to the end\n")
        status.append("  M     - Switch mode and restart\n")
        status.append("  R     - Restart search\n")
        status.append("  Q     - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="gridwalk Search Stepper", border_style="green", width=80)

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == "q":
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key == " ":
                        self.step()
                    elif key.lower() == "f":
                        self.run_to_end()
                    elif key.lower() == "m":
                        self.mode_index = (self.mode_index + 1) % len(MODES)
                        self.reset_search()
                        self.status_message = f"Switched to {self.mode.value}"
                    elif key.lower() == "r":
                        self.reset_search()
                        self.status_message = "Search restarted"
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "sublime":
        # Running from IDE - just run the search and print the final state
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

        demo = InteractiveDemo(parse_maze(LAYOUTS["demo"]))
        demo.run_to_end()
        demo.console.print(demo.generate_display())
    else:
        layout = LAYOUTS[sys.argv[1] if len(sys.argv) > 1 else "demo"]
        InteractiveDemo(parse_maze(layout)).run()
