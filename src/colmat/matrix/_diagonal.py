"""
Diagonal Matrix

Stores only the ``min(rows, columns)`` values of the main diagonal. Every
off-diagonal cell reads as zero and rejects writes, so element-wise pure
operations produce a dense result; multiplication by a diagonal matrix is
a row or column scaling.
"""

from typing import Any, Iterable, List, Optional

import numpy as np

from .._errors import IllegalDiagonalWriteError, NonConformantError, SizeMismatchError
from ._backend import Backend
from ._base import MatrixBase
from ._dtypes import DOUBLE, ElementKind, coerce, convert, kind_ops, resolve_kind
from ._indexer import check_linear, decompose
from ._matrix import Matrix, _is_scalar, _reader
from ._storage import ArrayStorage

__all__ = [
    'Diagonal',
]


class Diagonal(Matrix):
    """
    ``rows x columns`` matrix that is zero outside the main diagonal.

    Args:
        rows: Number of rows.
        columns: Number of columns.
        values: ``min(rows, columns)`` diagonal values; zeros when omitted.
        kind: Element kind.

    Example:
        >>> d = Diagonal.of(3, 3, [1.0, 2.0, 3.0])
        >>> d.get(1, 1), d.get(0, 1)
        (2.0, 0.0)
    """

    _backend = Backend.DIAGONAL

    def __init__(self, rows: int, columns: int, values: Optional[Iterable[Any]] = None, kind=DOUBLE):
        kind = resolve_kind(kind)
        super().__init__(rows, columns, kind)
        n = min(rows, columns)
        self._values = ArrayStorage(kind, n)
        if values is not None:
            values = list(values)
            if len(values) != n:
                raise SizeMismatchError(f"{len(values)} diagonal values for a {rows}x{columns} matrix")
            for i, value in enumerate(values):
                self._values._store(i, coerce(value, kind))

    @classmethod
    def of(cls, rows: int, columns: int, values: Iterable[Any], kind=None) -> "Diagonal":
        values = list(values)
        if kind is None:
            kind = ElementKind.from_dtype(np.asarray(values).dtype) if values else DOUBLE
        return cls(rows, columns, values, kind)

    @classmethod
    def empty(cls, rows: int, columns: int, kind=DOUBLE) -> "Diagonal":
        return cls(rows, columns, kind=kind)

    @classmethod
    def identity(cls, n: int, kind=DOUBLE) -> "Diagonal":
        kind = resolve_kind(kind)
        return cls(n, n, [kind.one] * n, kind)

    @property
    def diagonal_size(self) -> int:
        return self._values.size

    # -------------------------------------------------------------------------
    # Element Access
    # -------------------------------------------------------------------------

    def _get(self, index: int) -> Any:
        row, col = decompose(index, self._rows)
        return self._get_cell(row, col)

    def _set(self, index: int, value: Any) -> None:
        row, col = decompose(index, self._rows)
        self._set_cell(row, col, value)

    def _get_cell(self, row: int, col: int) -> Any:
        if row != col:
            return self._kind.zero
        return self._values._load(row)

    def _set_cell(self, row: int, col: int, value: Any) -> None:
        if row != col:
            raise IllegalDiagonalWriteError(f"cannot write off-diagonal cell ({row}, {col})")
        self._values._store(row, value)

    def get_diagonal(self, i: int) -> Any:
        """``i``-th diagonal value."""
        return self._values._load(check_linear(i, self._values.size))

    def set_diagonal(self, i: int, value: Any) -> None:
        self._values._store(check_linear(i, self._values.size), coerce(value, self._kind))

    def diagonal_values(self) -> List[Any]:
        return list(self._values)

    def get_diagonal_view(self) -> MatrixBase:
        """``min(rows, columns) x 1`` view of the diagonal; writes go here."""
        from ._views import DiagonalView
        return DiagonalView(self)

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def copy(self) -> "Diagonal":
        out = Diagonal(self._rows, self._columns, kind=self._kind)
        out._values = self._values.copy()
        return out

    def _mutable_copy(self) -> Matrix:
        return self._materialize()

    def transpose(self) -> "Diagonal":
        out = Diagonal(self._columns, self._rows, kind=self._kind)
        out._values = self._values.copy()
        return out

    def reshape(self, rows: int, columns: int) -> MatrixBase:
        self._check_reshape(rows, columns)
        return self._materialize().reshape(rows, columns)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def muli(self, other, alpha=None, beta=None, axis=None) -> Matrix:
        """Scale the diagonal in place by a scalar."""
        if _is_scalar(other) and alpha is None and beta is None and axis is None:
            ops = self._ops
            scalar = coerce(other, self._kind)
            for i in range(self._values.size):
                self._values._store(i, ops.mul(self._values._load(i), scalar))
            return self
        return super().muli(other, alpha, beta, axis)

    def mul(self, other, alpha=None, beta=None, axis=None) -> Matrix:
        """Scaling by a scalar stays diagonal; anything else is dense."""
        if _is_scalar(other) and alpha is None and beta is None and axis is None:
            return self.copy().muli(other)
        return super().mul(other, alpha, beta, axis)

    def mmul(self, other: MatrixBase, alpha=None, beta=None, trans_a: bool = False, trans_b: bool = False) -> Matrix:
        """
        ``self @ other`` as a row scaling: ``out[i, j] = d[i] * other[i, j]``.

        Transposed operands fall back to the general product.
        """
        if trans_a or trans_b:
            return super().mmul(other, alpha, beta, trans_a, trans_b)
        if self._columns != other.rows:
            raise NonConformantError.of(self, other)

        from ._dense import DenseMatrix

        acc_kind = self._kind.accumulator
        acc = kind_ops(acc_kind)
        scale = acc.mul(
            acc.one if alpha is None else coerce(alpha, acc_kind),
            acc.one if beta is None else coerce(beta, acc_kind),
        )
        right = _reader(other, acc_kind)
        kind = self._kind
        rows = other.rows

        result = DenseMatrix(self._rows, other.columns, kind)
        for row in range(self._values.size):
            d = acc.mul(scale, convert(self._values._load(row), kind, acc_kind))
            for col in range(other.columns):
                value = acc.mul(d, right(row + col * rows))
                result._set_cell(row, col, convert(value, acc_kind, kind))
        return result
