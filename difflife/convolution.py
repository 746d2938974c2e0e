"""
Kernel convolution over a CellularGrid.

Each output cell is the unnormalized weighted sum of the kernel-aligned
neighbourhood around the matching input cell. Kernel cell (i, j) weights
grid cell (r + i - kernel.rows // 2, c + j - kernel.columns // 2), so the
kernel is applied as-is (cross-correlation, no flip). Positions outside
the grid contribute zero; there is no wrap-around.
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import correlate as _correlate

from .errors import KernelShapeError, KernelSizeError, MissingKernelError
from .grid import CellularGrid

# (current value, raw neighbour sum) -> next value
Transform = Callable[[float, float], float]


def validate_kernel(grid: CellularGrid, kernel: CellularGrid | None) -> CellularGrid:
    """Check the kernel preconditions, returning the kernel when they hold."""
    if kernel is None:
        raise MissingKernelError("kernel must not be None")
    if kernel.rows % 2 == 0 or kernel.columns % 2 == 0:
        raise KernelShapeError(
            f"kernel must have odd dimensions, got {kernel.rows}x{kernel.columns}"
        )
    if kernel.rows > grid.rows or kernel.columns > grid.columns:
        raise KernelSizeError(
            f"kernel ({kernel.rows}x{kernel.columns}) must not be larger than "
            f"the grid ({grid.rows}x{grid.columns})"
        )
    return kernel


def neighbor_sums(grid: CellularGrid, kernel: CellularGrid | None) -> NDArray[np.float64]:
    """Raw weighted neighbour sum for every cell, zero-padded at the edges."""
    kernel = validate_kernel(grid, kernel)
    return _correlate(
        grid.to_array(), kernel.to_array(), mode="constant", cval=0.0
    )


def convolve(
    grid: CellularGrid,
    kernel: CellularGrid | None,
    transform: Transform | None = None,
) -> CellularGrid:
    """
    Compute the next grid from `grid` and `kernel`.

    Args:
        grid: Input grid; never modified
        kernel: Odd-dimensioned weights no larger than `grid`
        transform: Optional rule mapping (current, raw_sum) to the output
            value; called once per cell. Without it the raw sum is used.

    Returns:
        A new, fully initialized grid with the same dimensions as `grid`

    Raises:
        MissingKernelError, KernelShapeError, KernelSizeError: when the
            kernel preconditions fail (all are KernelError / ValueError)
    """
    sums = neighbor_sums(grid, kernel)
    if transform is None:
        return CellularGrid.from_array(sums)

    current = grid.to_array()
    out = np.empty_like(sums)
    for (r, c), raw in np.ndenumerate(sums):
        out[r, c] = transform(float(current[r, c]), float(raw))
    return CellularGrid.from_array(out)
