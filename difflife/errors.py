"""Exceptions raised by grids, kernels and the renderer."""

from __future__ import annotations


class DifflifeError(Exception):
    """Base class for every error raised by difflife."""


class DimensionError(DifflifeError, ValueError):
    """Grid or renderer dimensions outside the supported range."""


class GridFullError(DifflifeError, ValueError):
    """Append on a grid whose cells (or rows) are all initialized."""


class RowLengthError(DifflifeError, ValueError):
    """Appended row does not match the grid's column count."""


class KernelError(DifflifeError, ValueError):
    """Kernel rejected by the convolution engine."""


class MissingKernelError(KernelError):
    pass


class KernelShapeError(KernelError):
    pass


class KernelSizeError(KernelError):
    pass
