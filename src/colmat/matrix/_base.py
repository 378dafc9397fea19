"""
Matrix Base Class

This module defines the contract every colmat matrix satisfies, whatever
its storage strategy. A matrix is a ``rows x columns`` grid of one element
kind, addressed either by ``(row, col)`` or by a column-major linear index.

Type Hierarchy:

    MatrixBase (ABC)         shape, item access, views, adapters, copy
    └── Matrix               arithmetic, reductions, comparisons, mmul
        ├── DenseMatrix      numpy array storage (Backend.ARRAY)
        ├── HashMatrix       dictionary storage (Backend.HASH)
        ├── SparseBitMatrix  bitset storage (Backend.BITSET)
        ├── Diagonal         main diagonal only (Backend.DIAGONAL)
        ├── Range            computed integer sequence (Backend.RANGE)
        ├── MatrixView, SliceMatrix, FlatSliceMatrix, DiagonalView
        └── KindAdapter      parent read as another kind (Backend.ADAPTER)

Subclasses implement two primitives on native values at validated linear
indices, :meth:`MatrixBase._get` and :meth:`MatrixBase._set`. Views also
override the 2-D primitives so that nested views compose their index
transforms instead of recomputing linear positions.

Example:

    >>> m = DenseMatrix.from_rows([[1, 2, 3], [4, 5, 6]])
    >>> list(m)                     # column-major linear order
    [1, 4, 2, 5, 3, 6]
    >>> m[1, 2]
    6
    >>> m.get_row_view(0).to_list()
    [[1, 2, 3]]
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator, List, Optional, Tuple, TYPE_CHECKING

import numpy as np

from .._errors import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    SizeMismatchError,
    UnsupportedOperationError,
)
from ._backend import Axis, Backend, Ownership
from ._dtypes import ElementKind, coerce, convert, kind_ops
from ._indexer import check_linear, check_size

if TYPE_CHECKING:
    from ._range import Range
    from ._storage import Storage

__all__ = [
    'MatrixBase',
]


def _to_range(value) -> "Range":
    from ._range import Range
    if isinstance(value, Range):
        return value
    if isinstance(value, range):
        return Range.of(value)
    raise InvalidArgumentError(f"expected a Range, got {type(value).__name__}")


def _key_to_range(key, extent: int) -> "Range":
    from ._range import Range
    if isinstance(key, slice):
        return Range.of(range(*key.indices(extent)))
    return Range(key, key + 1)


class MatrixBase(ABC):
    """
    Abstract base class for all matrices.

    Attributes:
        rows: Number of rows.
        columns: Number of columns.
        kind: Element kind of the values.
        backend: Storage strategy tag, fixed at construction.
    """

    _backend: Backend = Backend.ARRAY

    def __init__(self, rows: int, columns: int, kind: ElementKind):
        self._size = check_size(rows, columns)
        self._rows = rows
        self._columns = columns
        self._kind = kind
        self._ops = kind_ops(kind)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._rows, self._columns)

    @property
    def size(self) -> int:
        """Number of elements (``rows * columns``)."""
        return self._size

    @property
    def kind(self) -> ElementKind:
        return self._kind

    @property
    def backend(self) -> Backend:
        return self._backend

    @property
    def ownership(self) -> Ownership:
        return Ownership.OWNED

    @property
    def is_view(self) -> bool:
        """True if reads and writes go through another matrix."""
        return self.ownership is Ownership.VIEW

    @property
    def is_array_based(self) -> bool:
        """True if the values live in a flat column-major numpy array."""
        return self._backend is Backend.ARRAY

    @property
    def is_vector(self) -> bool:
        return self._rows == 1 or self._columns == 1

    @property
    def is_square(self) -> bool:
        return self._rows == self._columns

    # -------------------------------------------------------------------------
    # Native Primitives
    # -------------------------------------------------------------------------

    @abstractmethod
    def _get(self, index: int) -> Any:
        """Native value at a validated linear index."""
        ...

    @abstractmethod
    def _set(self, index: int, value: Any) -> None:
        """Store a native value at a validated linear index."""
        ...

    def _get_cell(self, row: int, col: int) -> Any:
        return self._get(row + col * self._rows)

    def _set_cell(self, row: int, col: int, value: Any) -> None:
        self._set(row + col * self._rows, value)

    def _check_cell(self, row: int, col: int) -> None:
        if not (0 <= row < self._rows and 0 <= col < self._columns):
            raise IndexOutOfRangeError.cell(row, col, self._rows, self._columns)

    # -------------------------------------------------------------------------
    # Element Access
    # -------------------------------------------------------------------------

    def get(self, i: int, j: Optional[int] = None) -> Any:
        """
        Value at linear index ``i``, or at cell ``(i, j)``.

        Raises:
            IndexOutOfRangeError: If the index is outside the matrix.
        """
        if j is None:
            return self._get(check_linear(i, self._size))
        self._check_cell(i, j)
        return self._get_cell(i, j)

    def set(self, *args) -> None:
        """
        ``set(index, value)`` or ``set(row, col, value)``.

        The value is converted to this matrix's kind through the coercion
        table, so ``m.set(0, 2.7)`` on an int matrix stores ``2``.
        """
        if len(args) == 2:
            index, value = args
            self._set(check_linear(index, self._size), coerce(value, self._kind))
        elif len(args) == 3:
            row, col, value = args
            self._check_cell(row, col)
            self._set_cell(row, col, coerce(value, self._kind))
        else:
            raise TypeError(f"set() takes 2 or 3 arguments ({len(args)} given)")

    def get_as(self, kind: ElementKind, i: int, j: Optional[int] = None) -> Any:
        """Value at ``i`` (or ``(i, j)``) converted to ``kind``."""
        value = self.get(i, j)
        if kind is self._kind:
            return value
        return convert(value, self._kind, kind)

    def set_as(self, kind: ElementKind, *args) -> None:
        """Like :meth:`set`, with the value given as ``kind``."""
        *where, value = args
        value = convert(value, kind, self._kind)
        if len(where) == 1:
            self._set(check_linear(where[0], self._size), value)
        elif len(where) == 2:
            self._check_cell(*where)
            self._set_cell(where[0], where[1], value)
        else:
            raise TypeError(f"set_as() takes 3 or 4 arguments ({len(args) + 1} given)")

    def __getitem__(self, key):
        """
        ``m[i]``, ``m[i, j]`` or a slice view such as ``m[0:2, :]``.

        Slices return zero-copy :class:`SliceMatrix` views; negative
        indices are not supported.
        """
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexOutOfRangeError(f"expected 2 indices, got {len(key)}")
            row, col = key
            if isinstance(row, slice) or isinstance(col, slice):
                return self.slice(
                    _key_to_range(row, self._rows),
                    _key_to_range(col, self._columns),
                )
            return self.get(row, col)
        if isinstance(key, slice):
            return self.slice(_key_to_range(key, self._size))
        return self.get(key)

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple) and len(key) == 2 and not any(isinstance(k, slice) for k in key):
            self.set(key[0], key[1], value)
        elif isinstance(key, (tuple, slice)):
            self[key].assign(value)
        else:
            self.set(key, value)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        """Values in column-major linear order."""
        for i in range(self._size):
            yield self._get(i)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_list(self) -> List[List[Any]]:
        """Row lists, e.g. ``[[1, 2, 3], [4, 5, 6]]``."""
        return [
            [self._get_cell(i, j) for j in range(self._columns)]
            for i in range(self._rows)
        ]

    def to_numpy(self) -> np.ndarray:
        """2-D numpy array copy of the values."""
        flat = np.fromiter(iter(self), dtype=self._kind.dtype, count=self._size)
        return flat.reshape((self._rows, self._columns), order='F')

    def get_storage(self) -> "Storage":
        """
        Backing storage in column-major order.

        Matrices without their own full-size storage (views, adapters,
        diagonals, ranges) return the storage of a dense copy.
        """
        return self._materialize().get_storage()

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def new_empty(self, rows: int, columns: int) -> "MatrixBase":
        """New zero-filled matrix of the same kind and storage family."""
        from ._dense import DenseMatrix
        return DenseMatrix(rows, columns, self._kind)

    def _fill_from(self, other: "MatrixBase") -> "MatrixBase":
        get = other._get
        if other.kind is self._kind:
            for i in range(self._size):
                self._set(i, get(i))
        else:
            src, dst = other.kind, self._kind
            for i in range(self._size):
                self._set(i, convert(get(i), src, dst))
        return self

    def _materialize(self) -> "MatrixBase":
        from ._dense import DenseMatrix
        return DenseMatrix(self._rows, self._columns, self._kind)._fill_from(self)

    def copy(self) -> "MatrixBase":
        """Independent matrix with equal values."""
        return self.new_empty(self._rows, self._columns)._fill_from(self)

    def reshape(self, rows: int, columns: int) -> "MatrixBase":
        """
        Same values in the same linear order, with a new shape.

        Raises:
            SizeMismatchError: If ``rows * columns != size``.
        """
        self._check_reshape(rows, columns)
        return self.new_empty(rows, columns)._fill_from(self)

    def _check_reshape(self, rows: int, columns: int) -> None:
        if rows * columns != self._size:
            raise SizeMismatchError(
                f"cannot reshape {self._rows}x{self._columns} into {rows}x{columns}"
            )

    def transpose(self) -> "MatrixBase":
        """New ``columns x rows`` matrix with ``out[j, i] == self[i, j]``."""
        out = self.new_empty(self._columns, self._rows)
        for j in range(self._columns):
            for i in range(self._rows):
                out._set_cell(j, i, self._get_cell(i, j))
        return out

    @property
    def T(self) -> "MatrixBase":
        return self.transpose()

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def get_view(self, row_offset: int, col_offset: int, rows: int, columns: int) -> "MatrixBase":
        """Zero-copy rectangular window; writes go to this matrix."""
        from ._views import MatrixView
        return MatrixView(self, row_offset, col_offset, rows, columns)

    def get_row_view(self, i: int) -> "MatrixBase":
        """``1 x columns`` view of row ``i``."""
        return self.get_view(i, 0, 1, self._columns)

    def get_column_view(self, j: int) -> "MatrixBase":
        """``rows x 1`` view of column ``j``."""
        return self.get_view(0, j, self._rows, 1)

    def get_diagonal_view(self) -> "MatrixBase":
        raise UnsupportedOperationError(
            f"{type(self).__name__} has no diagonal view"
        )

    def slice(self, rows, columns=None, axis: Optional[Axis] = None) -> "MatrixBase":
        """
        Zero-copy strided selection.

        Args:
            rows: Range over rows, or over the linear index when neither
                  ``columns`` nor ``axis`` is given.
            columns: Range over columns.
            axis: With a single range, ``Axis.ROW`` selects those rows (all
                  columns) and ``Axis.COLUMN`` selects those columns.

        Returns:
            A :class:`SliceMatrix`, or a :class:`FlatSliceMatrix` (``n x 1``)
            for a linear selection.

        Example:
            >>> m.slice(Range(0, 3, 2), Range(1, 3))    # rows 0, 2 and columns 1, 2
            >>> m.slice(Range(0, 6, 2))                 # every other element
        """
        from ._range import Range
        from ._views import FlatSliceMatrix, SliceMatrix

        first = _to_range(rows)
        if columns is not None:
            return SliceMatrix(self, first, _to_range(columns))
        if axis is Axis.ROW:
            return SliceMatrix(self, first, Range(0, self._columns))
        if axis is Axis.COLUMN:
            return SliceMatrix(self, Range(0, self._rows), first)
        if axis is not None:
            raise InvalidArgumentError(f"invalid axis: {axis!r}")
        return FlatSliceMatrix(self, first)

    # -------------------------------------------------------------------------
    # Copying Selections
    # -------------------------------------------------------------------------

    def take(self, indexes: Iterable[int], axis: Optional[Axis] = None) -> "MatrixBase":
        """
        Copy of the selected elements, rows or columns.

        Args:
            indexes: Linear indexes (``axis=None``), row indexes
                     (``Axis.ROW``) or column indexes (``Axis.COLUMN``).
            axis: Selection axis.

        Returns:
            ``n x 1`` for linear selection, otherwise a matrix with the
            selected rows or columns in the given order.
        """
        indexes = list(indexes)
        if axis is None:
            out = self.new_empty(len(indexes), 1)
            for k, index in enumerate(indexes):
                out._set(k, self._get(check_linear(index, self._size)))
            return out
        if axis is Axis.ROW:
            out = self.new_empty(len(indexes), self._columns)
            for k, row in enumerate(indexes):
                for j in range(self._columns):
                    self._check_cell(row, j)
                    out._set_cell(k, j, self._get_cell(row, j))
            return out
        if axis is Axis.COLUMN:
            out = self.new_empty(self._rows, len(indexes))
            for k, col in enumerate(indexes):
                for i in range(self._rows):
                    self._check_cell(i, col)
                    out._set_cell(i, k, self._get_cell(i, col))
            return out
        raise InvalidArgumentError(f"invalid axis: {axis!r}")

    def compress(self, mask, axis: Optional[Axis] = None) -> "MatrixBase":
        """
        Copy of the elements, rows or columns where ``mask`` is true.

        ``mask`` is a boolean matrix or sequence whose length matches the
        selected dimension (``size``, ``rows`` or ``columns``).
        """
        if isinstance(mask, MatrixBase):
            flags = [convert(v, mask.kind, ElementKind.BOOLEAN) for v in mask]
        else:
            flags = [bool(v) for v in mask]
        expected = {
            None: self._size,
            Axis.ROW: self._rows,
            Axis.COLUMN: self._columns,
        }.get(axis)
        if expected is None:
            raise InvalidArgumentError(f"invalid axis: {axis!r}")
        if len(flags) != expected:
            raise SizeMismatchError(f"mask of length {len(flags)}, expected {expected}")
        return self.take([i for i, flag in enumerate(flags) if flag], axis)

    # -------------------------------------------------------------------------
    # Kind Adapters
    # -------------------------------------------------------------------------

    def as_kind(self, kind: ElementKind) -> "MatrixBase":
        """
        This matrix read and written as ``kind``.

        Returns ``self`` when the kinds match; otherwise a zero-copy
        :class:`KindAdapter` that converts on every access.
        """
        kind = ElementKind(kind)
        if kind is self._kind:
            return self
        from ._adapter import KindAdapter
        return KindAdapter(self, kind)

    def as_boolean_matrix(self) -> "MatrixBase":
        return self.as_kind(ElementKind.BOOLEAN)

    def as_int_matrix(self) -> "MatrixBase":
        return self.as_kind(ElementKind.INT)

    def as_long_matrix(self) -> "MatrixBase":
        return self.as_kind(ElementKind.LONG)

    def as_double_matrix(self) -> "MatrixBase":
        return self.as_kind(ElementKind.DOUBLE)

    def as_complex_matrix(self) -> "MatrixBase":
        return self.as_kind(ElementKind.COMPLEX)

    # -------------------------------------------------------------------------
    # Equality and Representation
    # -------------------------------------------------------------------------

    def equals(self, other: "MatrixBase") -> bool:
        """True if shapes match and every value is equal as this kind."""
        if not isinstance(other, MatrixBase) or other.shape != self.shape:
            return False
        src = other.kind
        for i in range(self._size):
            value = other._get(i)
            if src is not self._kind:
                value = convert(value, src, self._kind)
            if value != self._get(i):
                return False
        return True

    def __eq__(self, other) -> bool:
        if not isinstance(other, MatrixBase):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(shape={self.shape}, kind={self._kind.label}, "
            f"backend={self.backend.value})"
        )
