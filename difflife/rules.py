"""
The standard Life neighbourhood and survive/birth rule.

These are plain parameters for `convolve`; the engine itself knows
nothing about Life.
"""

from __future__ import annotations

from .grid import CellularGrid

ALIVE = 1.0
DEAD = 0.0

# ── Convolution kernel (8-neighbour Moore count) ────────────────────────
MOORE_ROWS: list[list[float]] = [[1, 1, 1], [1, 0, 1], [1, 1, 1]]


def moore_kernel() -> CellularGrid:
    """3x3 all-ones kernel with a zero centre: counts the 8 neighbours."""
    return CellularGrid.from_rows(MOORE_ROWS)


def life_rule(current: float, neighbors: float) -> float:
    """Live cells survive on 2 or 3 neighbours; dead cells are born on 3."""
    if current == ALIVE and neighbors in (2, 3):
        return ALIVE
    if current == DEAD and neighbors == 3:
        return ALIVE
    return DEAD
