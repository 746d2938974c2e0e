"""Random initial population."""

from __future__ import annotations

import numpy as np

from .grid import CellularGrid
from .rules import ALIVE, DEAD


def random_grid(
    rows: int,
    columns: int,
    probability: float,
    seed: int | None = None,
) -> CellularGrid:
    """
    Build a grid where each cell is alive with the given probability.

    Args:
        rows: Grid height
        columns: Grid width
        probability: Chance in [0, 1] that a cell starts alive
        seed: Random seed for reproducibility

    Returns:
        A fully initialized grid of 0/1 values
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must be in [0, 1], got {probability}")

    grid = CellularGrid(rows, columns)
    rng = np.random.default_rng(seed)
    for draw in rng.random(grid.size):
        grid.append(ALIVE if draw < probability else DEAD)
    return grid
