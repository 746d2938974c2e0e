"""
difflife - Game of Life in the terminal, redrawing only the cells that change.

A cellular grid with dual (row, column) / linear indexing, a kernel
convolution engine for computing generations, and a differential curses
renderer.
"""

__version__ = "0.1.0"

from .convolution import convolve, neighbor_sums, validate_kernel
from .display import Cell, DifferentialRenderer, Palette
from .errors import (
    DifflifeError,
    DimensionError,
    GridFullError,
    KernelError,
    KernelShapeError,
    KernelSizeError,
    MissingKernelError,
    RowLengthError,
)
from .grid import CellularGrid
from .rules import life_rule, moore_kernel
from .seeding import random_grid

__all__ = [
    "Cell",
    "CellularGrid",
    "DifferentialRenderer",
    "DifflifeError",
    "DimensionError",
    "GridFullError",
    "KernelError",
    "KernelShapeError",
    "KernelSizeError",
    "MissingKernelError",
    "Palette",
    "RowLengthError",
    "convolve",
    "life_rule",
    "moore_kernel",
    "neighbor_sums",
    "random_grid",
    "validate_kernel",
    "__version__",
]
