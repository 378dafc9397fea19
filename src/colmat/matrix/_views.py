"""
Matrix Views

Zero-copy matrices that read and write through a parent matrix by an
affine index transform. A view owns no storage: writing through it
mutates the parent, and views of views compose their transforms.

View Types:
    - MatrixView: rectangular window at a row/column offset
    - SliceMatrix: strided rows x strided columns
    - FlatSliceMatrix: strided selection of the parent's linear index
    - DiagonalView: main diagonal of a Diagonal matrix as a column

Copying a view materializes it through the parent's ``new_empty``, so a
view of a dense matrix copies to a dense matrix of the same kind.
"""

from typing import Any

from .._errors import IndexOutOfRangeError, UnsupportedViewOperationError
from ._backend import Backend, Ownership
from ._base import MatrixBase
from ._indexer import compute_linear_index, decompose
from ._matrix import Matrix
from ._range import Range

__all__ = [
    'MatrixView',
    'SliceMatrix',
    'FlatSliceMatrix',
    'DiagonalView',
]


class _View(Matrix):
    """Shared plumbing of the view types."""

    _backend = Backend.VIEW

    def __init__(self, parent: MatrixBase, rows: int, columns: int):
        super().__init__(rows, columns, parent.kind)
        self._parent = parent

    @property
    def parent(self) -> MatrixBase:
        return self._parent

    @property
    def ownership(self) -> Ownership:
        return Ownership.VIEW

    def new_empty(self, rows: int, columns: int) -> MatrixBase:
        return self._parent.new_empty(rows, columns)


class MatrixView(_View):
    """
    Rectangular window into a parent matrix.

    ``view.get(i, j) == parent.get(row_offset + i, col_offset + j)``.

    Raises:
        IndexOutOfRangeError: If the window does not fit in the parent.
    """

    def __init__(
        self,
        parent: MatrixBase,
        row_offset: int,
        col_offset: int,
        rows: int,
        columns: int,
    ):
        if not (0 <= row_offset and rows >= 0 and row_offset + rows <= parent.rows):
            raise IndexOutOfRangeError(
                f"rows {row_offset}:{row_offset + rows} outside parent with {parent.rows} rows"
            )
        if not (0 <= col_offset and columns >= 0 and col_offset + columns <= parent.columns):
            raise IndexOutOfRangeError(
                f"columns {col_offset}:{col_offset + columns} outside parent with "
                f"{parent.columns} columns"
            )
        super().__init__(parent, rows, columns)
        self._row_offset = row_offset
        self._col_offset = col_offset

    @property
    def row_offset(self) -> int:
        return self._row_offset

    @property
    def col_offset(self) -> int:
        return self._col_offset

    def _parent_index(self, index: int) -> int:
        parent = self._parent
        return compute_linear_index(
            index, self._rows, self._col_offset, self._row_offset,
            parent.rows, parent.columns,
        )

    def _get(self, index: int) -> Any:
        return self._parent._get(self._parent_index(index))

    def _set(self, index: int, value: Any) -> None:
        self._parent._set(self._parent_index(index), value)

    def _get_cell(self, row: int, col: int) -> Any:
        return self._parent._get_cell(row + self._row_offset, col + self._col_offset)

    def _set_cell(self, row: int, col: int, value: Any) -> None:
        self._parent._set_cell(row + self._row_offset, col + self._col_offset, value)

    def reshape(self, rows: int, columns: int) -> MatrixBase:
        raise UnsupportedViewOperationError(
            "cannot reshape a matrix view; copy() it first"
        )


class SliceMatrix(_View):
    """
    Strided rows by strided columns of a parent matrix.

    ``slice.get(i, j) == parent.get(row_range[i], col_range[j])``. The
    logical shape may differ from ``len(row_range) x len(col_range)`` after
    :meth:`reshape`; linear order is always preserved.
    """

    def __init__(
        self,
        parent: MatrixBase,
        row_range: Range,
        col_range: Range,
        rows: int = None,
        columns: int = None,
    ):
        if rows is None:
            rows, columns = len(row_range), len(col_range)
        super().__init__(parent, rows, columns)
        self._row_range = row_range
        self._col_range = col_range
        self._range_rows = len(row_range)

    @property
    def row_range(self) -> Range:
        return self._row_range

    @property
    def col_range(self) -> Range:
        return self._col_range

    def _parent_cell(self, index: int):
        row, col = decompose(index, self._range_rows)
        parent = self._parent
        return (
            self._row_range.position(row, parent.rows),
            self._col_range.position(col, parent.columns),
        )

    def _get(self, index: int) -> Any:
        return self._parent._get_cell(*self._parent_cell(index))

    def _set(self, index: int, value: Any) -> None:
        row, col = self._parent_cell(index)
        self._parent._set_cell(row, col, value)

    def reshape(self, rows: int, columns: int) -> "SliceMatrix":
        """New slice over the same ranges with a different logical shape."""
        self._check_reshape(rows, columns)
        return SliceMatrix(self._parent, self._row_range, self._col_range, rows, columns)


class FlatSliceMatrix(_View):
    """
    Strided selection of the parent's column-major linear index, as an
    ``n x 1`` column.
    """

    def __init__(self, parent: MatrixBase, index_range: Range):
        super().__init__(parent, len(index_range), 1)
        self._range = index_range

    @property
    def range(self) -> Range:
        return self._range

    def _get(self, index: int) -> Any:
        return self._parent._get(self._range.position(index, self._parent.size))

    def _set(self, index: int, value: Any) -> None:
        self._parent._set(self._range.position(index, self._parent.size), value)

    def reshape(self, rows: int, columns: int) -> MatrixBase:
        self._check_reshape(rows, columns)
        return self.copy().reshape(rows, columns)


class DiagonalView(_View):
    """Main diagonal of the parent as an ``n x 1`` column, ``n = min(rows, columns)``."""

    def __init__(self, parent: MatrixBase):
        super().__init__(parent, min(parent.rows, parent.columns), 1)

    def _get(self, index: int) -> Any:
        return self._parent._get_cell(index, index)

    def _set(self, index: int, value: Any) -> None:
        self._parent._set_cell(index, index, value)
