"""
Index arithmetic shared by every matrix kind.

All matrices are addressed in column-major order: element ``(i, j)`` of a
``rows x columns`` matrix lives at linear position ``i + j * rows``. Views
translate their own linear positions into their parent's through
:func:`compute_linear_index`.
"""

from typing import Tuple

from .._errors import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    SizeOverflowError,
)

__all__ = [
    'MAX_SIZE',
    'column_major',
    'row_major',
    'decompose',
    'slice_index',
    'compute_linear_index',
    'check_linear',
    'check_size',
]


# Largest element count a single matrix may address.
MAX_SIZE = (1 << 31) - 1


def check_linear(index: int, size: int) -> int:
    """Validate ``0 <= index < size`` and return ``index``."""
    if not 0 <= index < size:
        raise IndexOutOfRangeError.linear(index, size)
    return index


def column_major(row: int, col: int, rows: int, columns: int) -> int:
    """
    Linear position of ``(row, col)`` in column-major order.

    Raises:
        IndexOutOfRangeError: If the cell lies outside ``rows x columns``.
    """
    if not (0 <= row < rows and 0 <= col < columns):
        raise IndexOutOfRangeError.cell(row, col, rows, columns)
    return row + col * rows


def row_major(row: int, col: int, rows: int, columns: int) -> int:
    """Linear position of ``(row, col)`` in row-major order."""
    if not (0 <= row < rows and 0 <= col < columns):
        raise IndexOutOfRangeError.cell(row, col, rows, columns)
    return row * columns + col


def decompose(index: int, rows: int) -> Tuple[int, int]:
    """Inverse of :func:`column_major`: ``index -> (row, col)``."""
    return index % rows, index // rows


def slice_index(step: int, index: int, extent: int, start: int = 0) -> int:
    """
    Position of the ``index``-th element of a strided sequence.

    Args:
        step: Distance between consecutive elements.
        index: Position within the sequence.
        extent: Size of the dimension being indexed.
        start: First position of the sequence.

    Returns:
        ``start + index * step``.

    Raises:
        IndexOutOfRangeError: If the result is outside ``[0, extent)``.
    """
    position = start + index * step
    if not 0 <= position < extent:
        raise IndexOutOfRangeError(
            f"slice position {position} out of range for extent {extent}"
        )
    return position


def compute_linear_index(
    index: int,
    rows: int,
    col_offset: int,
    row_offset: int,
    parent_rows: int,
    parent_columns: int,
) -> int:
    """
    Translate a view's linear index into its parent's linear index.

    The view's index is split with the view's own row count, shifted by the
    view offsets and recombined with the parent's row count.

    Example:
        >>> # 2x2 window at (1, 1) of a 3x3 parent; view index 3 is cell (1, 1)
        >>> compute_linear_index(3, 2, 1, 1, 3, 3)
        8
    """
    row, col = decompose(index, rows)
    return column_major(row + row_offset, col + col_offset, parent_rows, parent_columns)


def check_size(rows: int, columns: int) -> int:
    """
    Validate matrix dimensions and return ``rows * columns``.

    Raises:
        InvalidArgumentError: On a negative dimension.
        SizeOverflowError: If the element count exceeds :data:`MAX_SIZE`.
    """
    if rows < 0 or columns < 0:
        raise InvalidArgumentError(f"negative dimension ({rows}, {columns})")
    size = rows * columns
    if size > MAX_SIZE:
        raise SizeOverflowError(f"{rows}x{columns} exceeds {MAX_SIZE} elements")
    return size
