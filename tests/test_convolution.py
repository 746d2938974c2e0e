"""
Tests for the convolution engine and the Life rule.
"""

import numpy as np
import pytest

from difflife.convolution import convolve, neighbor_sums
from difflife.errors import KernelError, KernelShapeError, KernelSizeError, MissingKernelError
from difflife.grid import CellularGrid
from difflife.rules import life_rule, moore_kernel


def step(grid: CellularGrid, n: int = 1) -> CellularGrid:
    kernel = moore_kernel()
    for _ in range(n):
        grid = convolve(grid, kernel, life_rule)
    return grid


class TestNeighborSums:
    """Tests for the raw weighted sum."""

    def test_moore_counts_with_zero_padding(self, blinker, kernel):
        """Neighbours outside the grid count as zero."""
        sums = neighbor_sums(blinker, kernel)

        expected = np.array([[2, 1, 2], [3, 2, 3], [2, 1, 2]])
        assert np.array_equal(sums, expected)

    def test_raw_sum_without_transform(self, blinker, kernel):
        result = convolve(blinker, kernel)

        assert result.to_list() == [[2, 1, 2], [3, 2, 3], [2, 1, 2]]

    def test_kernel_is_not_flipped(self):
        """Kernel cell (i, j) weights grid cell (r + i - 1, c + j - 1)."""
        grid = CellularGrid(3, 3)
        grid[1, 1] = 1
        # Weight only the neighbour to the right of each cell
        kernel = CellularGrid.from_rows([[0, 0, 0], [0, 0, 1], [0, 0, 0]])

        result = convolve(grid, kernel)

        # Only (1, 0) has the live cell on its right
        assert result.to_list() == [[0, 0, 0], [1, 0, 0], [0, 0, 0]]

    def test_weights_are_applied(self):
        grid = CellularGrid.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        kernel = CellularGrid.from_rows([[2]])

        assert convolve(grid, kernel).to_list() == [[2, 4, 6], [8, 10, 12], [14, 16, 18]]

    def test_rectangular_kernel(self):
        grid = CellularGrid.from_rows([[1, 1, 1, 1]])
        kernel = CellularGrid.from_rows([[1, 1, 1]])

        assert convolve(grid, kernel).to_list() == [[2, 3, 3, 2]]


class TestConvolve:
    """Tests for convolve with a transformation."""

    def test_blinker_turns_horizontal(self, blinker):
        """One Life step flips the vertical blinker."""
        assert step(blinker).to_list() == [[0, 0, 0], [1, 1, 1], [0, 0, 0]]

    def test_blinker_period_two(self):
        grid = CellularGrid(5, 5)
        for r in (1, 2, 3):
            grid[r, 2] = 1

        assert step(grid, 2) == grid

    def test_block_is_still_life(self):
        grid = CellularGrid(4, 4)
        for r, c in ((1, 1), (1, 2), (2, 1), (2, 2)):
            grid[r, c] = 1

        assert step(grid) == grid

    def test_lonely_cell_dies(self):
        grid = CellularGrid(3, 3)
        grid[1, 1] = 1

        assert step(grid).sum() == 0

    def test_glider_moves(self):
        grid = CellularGrid(6, 6)
        for r, c in ((0, 1), (1, 2), (2, 0), (2, 1), (2, 2)):
            grid[r, c] = 1

        moved = step(grid, 4)

        expected = CellularGrid(6, 6)
        for r, c in ((1, 2), (2, 3), (3, 1), (3, 2), (3, 3)):
            expected[r, c] = 1
        assert moved == expected

    def test_transform_receives_current_and_sum(self, blinker, kernel):
        seen = []

        def record(current, raw):
            seen.append((current, raw))
            return current + raw

        result = convolve(blinker, kernel, record)

        assert len(seen) == 9
        assert seen[0] == (0.0, 2.0)
        assert seen[1] == (1.0, 1.0)
        assert result[1, 1] == 3

    def test_input_not_mutated(self, blinker, kernel):
        before = blinker.to_array()
        result = convolve(blinker, kernel, life_rule)

        assert result is not blinker
        assert np.array_equal(blinker.to_array(), before)

    def test_result_is_fully_initialized(self, kernel):
        grid = CellularGrid(4, 4)
        result = convolve(grid, kernel, life_rule)

        assert result.shape == (4, 4)
        assert result.is_full
        assert result.completed_rows == 4


class TestKernelPreconditions:
    """Tests for kernel validation."""

    def test_missing_kernel(self, blinker):
        with pytest.raises(MissingKernelError):
            convolve(blinker, None)

    @pytest.mark.parametrize("rows, columns", [(2, 3), (3, 2), (2, 2)])
    def test_even_kernel(self, rows, columns):
        grid = CellularGrid(5, 5)
        with pytest.raises(KernelShapeError, match="odd"):
            convolve(grid, CellularGrid(rows, columns))

    def test_kernel_larger_than_grid(self):
        grid = CellularGrid(3, 5)
        with pytest.raises(KernelSizeError, match="larger"):
            convolve(grid, CellularGrid(5, 5))

    def test_kernel_errors_are_value_errors(self, blinker):
        with pytest.raises(ValueError):
            convolve(blinker, CellularGrid(2, 3))
        assert issubclass(KernelSizeError, KernelError)

    def test_kernel_same_size_as_grid(self, blinker, kernel):
        assert convolve(blinker, kernel).shape == (3, 3)


class TestLifeRule:
    """Tests for the survive/birth rule."""

    @pytest.mark.parametrize(
        "current, neighbors, expected",
        [
            (1, 2, 1), (1, 3, 1), (0, 3, 1),
            (1, 1, 0), (1, 4, 0), (0, 2, 0), (0, 4, 0), (1, 0, 0), (0, 0, 0),
        ],
    )
    def test_rule(self, current, neighbors, expected):
        assert life_rule(float(current), float(neighbors)) == expected

    def test_moore_kernel(self):
        kernel = moore_kernel()

        assert kernel.shape == (3, 3)
        assert kernel.sum() == 8
        assert kernel[1, 1] == 0
