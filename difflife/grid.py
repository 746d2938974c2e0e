"""
The cellular grid: a fixed-size 2D numeric container.

Every cell can be reached two ways, by (row, column) and by a row-major
linear index, and both land on the same numpy backing array. Next to the
values the grid keeps an initialization mask, so "explicitly written" and
"currently zero" stay distinguishable; the mask drives the bulk builders
(`append_row`, `append`) and the collection-style queries (`contains`,
`remove`).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableSequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .errors import DimensionError, GridFullError, RowLengthError

# ── Supported dimensions ────────────────────────────────────────────────
MIN_DIMENSION = 1
MAX_DIMENSION = 1024

GridKey = int | tuple[int, int]


class CellularGrid:
    """
    A rows × columns grid of floats with partial-initialization tracking.

    Dimensions are fixed at construction. `rows` and `columns` are the
    dimension counts; `completed_rows` is the separate running count of
    rows whose every cell has been written, used by `append_row`.
    """

    def __init__(self, rows: int, columns: int) -> None:
        for name, value in (("rows", rows), ("columns", columns)):
            if not MIN_DIMENSION <= value <= MAX_DIMENSION:
                raise DimensionError(
                    f"grid {name} must be within {MIN_DIMENSION} to "
                    f"{MAX_DIMENSION}, got {value}"
                )

        self._rows: int = rows
        self._columns: int = columns
        self._values: NDArray[np.float64] = np.zeros((rows, columns), dtype=np.float64)
        self._initialized: NDArray[np.bool_] = np.zeros((rows, columns), dtype=np.bool_)
        self._initialized_count: int = 0
        self._completed_rows: int = 0

    # ── Builders ────────────────────────────────────────────────────

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[float]]) -> CellularGrid:
        """Build a grid from literal rows, appending them one at a time."""
        materialized = [list(row) for row in rows]
        if not materialized:
            raise DimensionError("cannot build a grid from zero rows")
        grid = cls(len(materialized), len(materialized[0]))
        for row in materialized:
            grid.append_row(row)
        return grid

    @classmethod
    def from_array(cls, array: ArrayLike) -> CellularGrid:
        """Wrap a copy of a 2D array as a fully initialized grid."""
        values = np.array(array, dtype=np.float64)
        if values.ndim != 2:
            raise DimensionError(f"expected a 2D array, got {values.ndim} dimensions")
        grid = cls(*values.shape)
        grid._values[...] = values
        grid._initialized[...] = True
        grid._initialized_count = grid.size
        grid._completed_rows = grid.rows
        return grid

    # ── Dimensions and counters ─────────────────────────────────────

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows, self._columns

    @property
    def size(self) -> int:
        return self._rows * self._columns

    @property
    def initialized_count(self) -> int:
        """Number of cells explicitly written since construction or `clear`."""
        return self._initialized_count

    @property
    def completed_rows(self) -> int:
        return self._completed_rows

    @property
    def is_full(self) -> bool:
        return self._initialized_count == self.size

    def is_initialized(self, row: int, column: int) -> bool:
        self._check(row, column)
        return bool(self._initialized[row, column])

    # ── Indexing ────────────────────────────────────────────────────

    def locate(self, index: int) -> tuple[int, int]:
        """Row-major translation of a linear index into (row, column)."""
        return index // self._columns, index % self._columns

    def _check(self, row: int, column: int) -> None:
        if not (0 <= row < self._rows and 0 <= column < self._columns):
            raise IndexError(
                f"cell ({row}, {column}) is outside the "
                f"{self._rows}x{self._columns} grid"
            )

    def get(self, row: int, column: int) -> float:
        self._check(row, column)
        return float(self._values[row, column])

    def set(self, row: int, column: int, value: float) -> None:
        """
        Write one cell and mark it initialized.

        The first write to a cell bumps `initialized_count`; if that write
        fills the last open cell of its row, `completed_rows` goes up too.
        Overwrites only change the value.
        """
        self._check(row, column)
        if not self._initialized[row, column]:
            self._initialized[row, column] = True
            self._initialized_count += 1
            if self._initialized[row].all():
                self._completed_rows += 1
        self._values[row, column] = value

    def get_index(self, index: int) -> float:
        if not 0 <= index < self.size:
            raise IndexError(f"index {index} is outside a grid of {self.size} cells")
        return self.get(*self.locate(index))

    def set_index(self, index: int, value: float) -> None:
        if not 0 <= index < self.size:
            raise IndexError(f"index {index} is outside a grid of {self.size} cells")
        self.set(*self.locate(index), value)

    def __getitem__(self, key: GridKey) -> float:
        if isinstance(key, tuple):
            return self.get(*key)
        return self.get_index(key)

    def __setitem__(self, key: GridKey, value: float) -> None:
        if isinstance(key, tuple):
            self.set(key[0], key[1], value)
        else:
            self.set_index(key, value)

    # ── Appending ───────────────────────────────────────────────────

    def append_row(self, values: Iterable[float]) -> None:
        """Write a whole row into the first row that is not yet complete."""
        row_values = np.asarray(list(values), dtype=np.float64)
        if row_values.shape != (self._columns,):
            raise RowLengthError(
                f"row length must match the number of columns "
                f"({self._columns}), got {row_values.size}"
            )
        if self._completed_rows == self._rows:
            raise GridFullError("every row of the grid is already complete")

        row = int(np.flatnonzero(~self._initialized.all(axis=1))[0])
        for column, value in enumerate(row_values):
            self.set(row, column, float(value))

    def append(self, value: float) -> None:
        """Write a value into the first uninitialized linear slot."""
        open_slots = np.flatnonzero(~self._initialized.reshape(-1))
        if open_slots.size == 0:
            raise GridFullError("every cell of the grid is already initialized")
        self.set_index(int(open_slots[0]), value)

    # ── Collection queries ──────────────────────────────────────────

    def clear(self) -> None:
        self._values.fill(0.0)
        self._initialized.fill(False)
        self._initialized_count = 0
        self._completed_rows = 0

    def _initialized_slots(self) -> NDArray[np.intp]:
        """Linear indices of the initialized cells, in row-major order."""
        return np.flatnonzero(self._initialized.reshape(-1))

    def contains(self, value: float) -> bool:
        """
        Exact match over the initialized cells in linear order. For a grid
        built by appends these are the first `initialized_count` slots.
        """
        slots = self._initialized_slots()
        return bool(np.any(self._values.reshape(-1)[slots] == value))

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, (int, float, np.number)):
            return False
        return self.contains(float(value))

    def remove(self, value: float) -> bool:
        """
        Remove the first occurrence of `value` from the initialized cells.

        Later initialized values shift left by one initialized slot, the
        last initialized slot goes back to zero and uninitialized, and
        `initialized_count` drops by one. Gaps left by direct writes are
        skipped, so the mask and the counter stay in step.
        Returns False (and changes nothing) when the value is absent.
        """
        slots = self._initialized_slots()
        flat = self._values.reshape(-1)
        matches = np.flatnonzero(flat[slots] == value)
        if matches.size == 0:
            return False

        first = int(matches[0])
        flat[slots[first:-1]] = flat[slots[first + 1 :]]
        flat[slots[-1]] = 0.0
        self._initialized.reshape(-1)[slots[-1]] = False
        self._initialized_count -= 1
        self._completed_rows = int(self._initialized.all(axis=1).sum())
        return True

    def sum(self) -> float:
        return float(self._values.sum())

    def population(self) -> int:
        """Number of non-zero cells."""
        return int(np.count_nonzero(self._values))

    def __iter__(self) -> Iterator[float]:
        for index in range(self.size):
            yield self.get_index(index)

    # ── Export ──────────────────────────────────────────────────────

    def to_array(self) -> NDArray[np.float64]:
        return self._values.copy()

    def to_list(self) -> list[list[float]]:
        return self._values.tolist()

    def copy_to(self, target: MutableSequence[float], offset: int = 0) -> None:
        """Copy every value, row-major, into `target` starting at `offset`."""
        if offset < 0 or len(target) - offset < self.size:
            raise ValueError(
                f"target of length {len(target)} cannot hold {self.size} "
                f"values from offset {offset}"
            )
        for k, value in enumerate(self):
            target[offset + k] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CellularGrid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._values, other._values))

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "\n".join(
            "\t".join(f"{value:g}" for value in row) for row in self._values
        )

    def __repr__(self) -> str:
        return (
            f"CellularGrid(rows={self._rows}, columns={self._columns}, "
            f"initialized={self._initialized_count})"
        )
