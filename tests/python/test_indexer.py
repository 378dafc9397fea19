"""
Tests for column-major index arithmetic.
"""

import pytest

from colmat import IndexOutOfRangeError, InvalidArgumentError, SizeOverflowError
from colmat.matrix import (
    MAX_SIZE,
    column_major,
    row_major,
    decompose,
    slice_index,
    compute_linear_index,
)
from colmat.matrix._indexer import check_linear, check_size


class TestLinearIndex:
    """Test column-major and row-major positions."""

    def test_column_major(self):
        """Cell (i, j) lives at i + j * rows."""
        assert column_major(0, 0, 2, 3) == 0
        assert column_major(1, 0, 2, 3) == 1
        assert column_major(0, 1, 2, 3) == 2
        assert column_major(1, 2, 2, 3) == 5

    def test_row_major(self):
        """Row-major position is i * columns + j."""
        assert row_major(0, 1, 2, 3) == 1
        assert row_major(1, 0, 2, 3) == 3
        assert row_major(1, 2, 2, 3) == 5

    def test_column_major_covers_all_positions(self):
        """Every cell maps to a distinct position in [0, size)."""
        rows, columns = 4, 5
        positions = {column_major(i, j, rows, columns) for i in range(rows) for j in range(columns)}
        assert positions == set(range(rows * columns))

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (2, 0), (0, 3)])
    def test_out_of_range(self, row, col):
        """Cells outside the shape raise."""
        with pytest.raises(IndexOutOfRangeError):
            column_major(row, col, 2, 3)
        with pytest.raises(IndexOutOfRangeError):
            row_major(row, col, 2, 3)

    def test_decompose_inverts_column_major(self):
        """decompose(column_major(i, j)) == (i, j)."""
        for i in range(3):
            for j in range(4):
                assert decompose(column_major(i, j, 3, 4), 3) == (i, j)

    def test_check_linear(self):
        """Linear bounds are 0 <= index < size."""
        assert check_linear(0, 1) == 0
        with pytest.raises(IndexOutOfRangeError):
            check_linear(1, 1)
        with pytest.raises(IndexOutOfRangeError):
            check_linear(-1, 5)


class TestSliceIndex:
    """Test strided positions."""

    def test_step(self):
        """Position is start + index * step."""
        assert slice_index(2, 0, 10) == 0
        assert slice_index(2, 3, 10) == 6
        assert slice_index(3, 1, 10, start=1) == 4

    def test_negative_step(self):
        """Descending sequences count down from start."""
        assert slice_index(-1, 0, 5, start=4) == 4
        assert slice_index(-1, 4, 5, start=4) == 0

    def test_outside_extent(self):
        """Positions past the indexed dimension raise."""
        with pytest.raises(IndexOutOfRangeError):
            slice_index(2, 5, 10)
        with pytest.raises(IndexOutOfRangeError):
            slice_index(-1, 2, 5, start=1)


class TestComputeLinearIndex:
    """Test view-to-parent index translation."""

    def test_window_in_square_parent(self):
        """2x2 window at (1, 1) of a 3x3 parent."""
        assert compute_linear_index(0, 2, 1, 1, 3, 3) == 4
        assert compute_linear_index(1, 2, 1, 1, 3, 3) == 5
        assert compute_linear_index(2, 2, 1, 1, 3, 3) == 7
        assert compute_linear_index(3, 2, 1, 1, 3, 3) == 8

    def test_row_window(self):
        """1 x n window walks one parent row."""
        # Row 1 of a 2x3 parent
        assert [compute_linear_index(k, 1, 0, 1, 2, 3) for k in range(3)] == [1, 3, 5]

    def test_window_outside_parent(self):
        """Offsets that leave the parent raise."""
        with pytest.raises(IndexOutOfRangeError):
            compute_linear_index(3, 2, 2, 1, 3, 3)


class TestCheckSize:
    """Test dimension validation."""

    def test_size(self):
        """Size is rows * columns."""
        assert check_size(3, 4) == 12
        assert check_size(0, 7) == 0

    def test_negative(self):
        """Negative dimensions are invalid."""
        with pytest.raises(InvalidArgumentError):
            check_size(-1, 2)

    def test_overflow(self):
        """More than MAX_SIZE elements cannot be addressed."""
        assert check_size(MAX_SIZE, 1) == MAX_SIZE
        with pytest.raises(SizeOverflowError):
            check_size(1 << 16, 1 << 16)
