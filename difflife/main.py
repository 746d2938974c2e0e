"""
Command-line driver: random grid, Moore kernel, Life rule, terminal output.

Usage:
    python -m difflife
    python -m difflife --rows 24 --columns 48 --probability 0.3 --seed 7
    python -m difflife --step            # wait for a key between generations
    python -m difflife --stats life.csv  # per-generation CSV telemetry

Each generation is painted into the renderer, flushed (only changed
cells reach the terminal), then replaced by its convolution. The run
ends when the grid's total sum is no longer positive.
"""

from __future__ import annotations

import argparse
import curses
import sys
import time
from collections.abc import Callable
from pathlib import Path

from .config import Config
from .convolution import Transform, convolve
from .display import BLANK, DEFAULT_COLOR, DifferentialRenderer, Palette
from .errors import DimensionError
from .grid import CellularGrid
from .rules import ALIVE, life_rule, moore_kernel
from .seeding import random_grid
from .stats import StatsLogger

ALIVE_GLYPH = "\u2588"  # █

QUIT_KEYS = (ord("q"), ord("Q"))


def paint(renderer: DifferentialRenderer, grid: CellularGrid, color: int = DEFAULT_COLOR) -> None:
    """Queue the glyph for every grid cell; unchanged cells are dropped by the renderer."""
    for row in range(grid.rows):
        for column in range(grid.columns):
            glyph = ALIVE_GLYPH if grid[row, column] == ALIVE else BLANK
            renderer.fill_pixel(glyph, color, row, column)


def simulate(
    grid: CellularGrid,
    kernel: CellularGrid,
    transform: Transform | None,
    renderer: DifferentialRenderer,
    *,
    max_generations: int | None = None,
    delay: float = 0.0,
    wait_key: Callable[[], int] | None = None,
    logger: StatsLogger | None = None,
) -> int:
    """
    Draw and advance `grid` until its total sum drops to zero or below.
    Returns the number of generations drawn.

    Args:
        grid: Initial generation
        kernel: Convolution weights
        transform: Rule applied to (current, neighbour sum)
        renderer: Display the generations are painted into
        max_generations: Optional hard stop
        delay: Milliseconds to sleep between generations
        wait_key: Blocking key reader; when given it replaces the delay,
            and a quit key ends the run
        logger: Optional CSV telemetry
    """
    if grid.rows > renderer.rows or grid.columns > renderer.columns:
        raise DimensionError(
            f"grid ({grid.rows}x{grid.columns}) does not fit the renderer "
            f"({renderer.rows}x{renderer.columns})"
        )

    renderer.clear()
    if logger is not None:
        logger.log(0, grid.population(), grid.sum(), 0, "start")

    generation = 0
    while True:
        paint(renderer, grid)
        redrawn = renderer.render()
        generation += 1
        grid = convolve(grid, kernel, transform)

        event = ""
        if grid.sum() <= 0:
            event = "extinct"
        elif max_generations is not None and generation >= max_generations:
            event = "limit"
        elif wait_key is not None and wait_key() in QUIT_KEYS:
            event = "quit"

        if logger is not None and (event or generation % 10 == 0):
            logger.log(generation, grid.population(), grid.sum(), redrawn, event)
        if event:
            return generation

        if wait_key is None and delay > 0:
            time.sleep(delay / 1000.0)


def run(stdscr: curses.window, config: Config) -> int:
    """Curses entry point: set up the terminal and drive one simulation."""
    palette = Palette()
    if curses.has_colors():
        palette.setup()

    renderer = DifferentialRenderer(
        stdscr,
        config.rows,
        config.columns,
        cell_width=config.cell_width,
        cell_height=config.cell_height,
        palette=palette,
    )
    renderer.initialize_window()

    grid = random_grid(config.rows, config.columns, config.probability, config.seed)
    logger = StatsLogger(config.stats_path) if config.stats_path is not None else None
    if logger is not None:
        logger.open()
    try:
        return simulate(
            grid,
            moore_kernel(),
            life_rule,
            renderer,
            max_generations=config.max_generations,
            delay=config.delay,
            wait_key=stdscr.getch if config.step else None,
            logger=logger,
        )
    finally:
        if logger is not None:
            logger.close()


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all options."""
    defaults = Config()
    parser = argparse.ArgumentParser(
        prog="difflife",
        description="Game of Life in the terminal, redrawing only changed cells",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Grid options
    parser.add_argument("--rows", type=int, default=defaults.rows, help="Grid height in cells")
    parser.add_argument(
        "--columns", type=int, default=defaults.columns, help="Grid width in cells"
    )
    parser.add_argument(
        "--cell-width", type=int, default=defaults.cell_width,
        help="Terminal characters per cell"
    )
    parser.add_argument(
        "--cell-height", type=int, default=defaults.cell_height,
        help="Terminal lines per cell"
    )

    # Population options
    parser.add_argument(
        "--probability", type=float, default=defaults.probability,
        help="Chance that a cell starts alive"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")

    # Pacing options
    parser.add_argument(
        "--delay", type=float, default=defaults.delay,
        help="Milliseconds between generations"
    )
    parser.add_argument(
        "--max-generations", type=int, default=None,
        help="Stop after this many generations"
    )
    parser.add_argument(
        "--step", action="store_true",
        help="Wait for a key between generations (q quits)"
    )

    parser.add_argument(
        "--stats", dest="stats_path", type=Path, default=None,
        help="Write per-generation telemetry to this CSV file"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = create_parser().parse_args(argv)
    try:
        config = Config.from_args(args)
    except ValueError as exc:
        print(f"difflife: {exc}", file=sys.stderr)
        return 2

    try:
        generations = curses.wrapper(run, config)
    except KeyboardInterrupt:
        return 0

    print(f"{generations} generations")
    return 0


if __name__ == "__main__":
    sys.exit(main())
