"""
Matrix Operations

:class:`Matrix` adds the typed operations to the matrix contract:
assignment and broadcasting, element-wise arithmetic, reductions,
comparisons and matrix multiplication. Every operation is written once
against the contract and the element kind's operator table, so it works
unchanged on dense, sparse, diagonal, view and adapter matrices.

Pure operations (``add``, ``mul``, ``map`` ...) return a new matrix and are
exactly a copy followed by the in-place form (``addi``, ``muli``,
``mapi`` ...). In-place operations mutate the receiver (and, for views,
the parent) and return it.
"""

import logging
import numbers
from typing import Any, Callable, Optional, Union

from .._errors import (
    InvalidArgumentError,
    NonConformantError,
    SizeMismatchError,
)
from ._backend import Axis, Backend
from ._base import MatrixBase
from ._dtypes import ElementKind, coerce, convert, kind_ops, resolve_kind
from ._indexer import column_major, row_major

__all__ = [
    'Matrix',
]

logger = logging.getLogger("colmat.matrix")

Scalar = Union[bool, int, float, complex, numbers.Number]
Operand = Union["Matrix", Scalar]


def _reader(matrix: MatrixBase, kind: ElementKind) -> Callable[[int], Any]:
    """Linear-index reader of ``matrix`` returning values of ``kind``."""
    get = matrix._get
    src = matrix.kind
    if src is kind:
        return get
    return lambda index: convert(get(index), src, kind)


def _is_scalar(value) -> bool:
    return isinstance(value, numbers.Number)


class Matrix(MatrixBase):
    """
    Matrix with typed operations.

    Concrete storage strategies subclass this and implement the native
    primitives from :class:`MatrixBase`.
    """

    def _mutable_copy(self) -> "Matrix":
        """Writable copy used as the target of pure operations."""
        return self.copy()

    # -------------------------------------------------------------------------
    # Assignment
    # -------------------------------------------------------------------------

    def assign(
        self,
        value,
        operator: Optional[Callable[[Any], Any]] = None,
        *,
        combine: Optional[Callable[[Any, Any], Any]] = None,
        axis: Optional[Axis] = None,
    ) -> "Matrix":
        """
        Overwrite every element in place.

        Args:
            value: A scalar, a zero-argument supplier, a flat sequence in
                   column-major order, or a matrix of the same shape. With
                   ``axis``, a vector broadcast along that axis.
            operator: Applied to each incoming value before it is stored;
                      matrix values arrive in the source matrix's kind,
                      broadcast vector values in this matrix's kind.
            combine: ``combine(current, incoming)`` computes the stored value.
            axis: ``Axis.COLUMN`` repeats a length-``rows`` vector in every
                  column; ``Axis.ROW`` repeats a length-``columns`` vector in
                  every row.

        Returns:
            self

        Raises:
            NonConformantError: Matrix of a different shape.
            SizeMismatchError: Sequence or vector of the wrong length.
        """
        if axis is not None:
            return self._assign_broadcast(value, axis, operator, combine)

        kind = self._kind
        if isinstance(value, MatrixBase):
            if value.shape != self.shape:
                raise NonConformantError.of(self, value)
            if operator is not None:
                src = value._get
                for i in range(self._size):
                    self._set(i, coerce(operator(src(i)), kind))
            elif combine is not None:
                other = _reader(value, kind)
                for i in range(self._size):
                    self._set(i, coerce(combine(self._get(i), other(i)), kind))
            else:
                self._fill_from(value)
            return self

        if callable(value):
            for i in range(self._size):
                self._set(i, coerce(value(), kind))
            return self

        if _is_scalar(value):
            native = coerce(value, kind)
            for i in range(self._size):
                self._set(i, native)
            return self

        values = list(value)
        if len(values) != self._size:
            raise SizeMismatchError(f"{len(values)} values for {self._size} elements")
        for i, v in enumerate(values):
            self._set(i, coerce(v, kind))
        return self

    def _broadcast_reader(self, vector, axis: Axis) -> Callable[[int], Any]:
        if isinstance(vector, MatrixBase):
            read = _reader(vector, self._kind)
            length = vector.size
        else:
            values = [coerce(v, self._kind) for v in vector]
            read = values.__getitem__
            length = len(values)

        rows = self._rows
        if axis is Axis.COLUMN:
            if length != rows:
                raise SizeMismatchError(f"vector of length {length}, expected {rows} rows")
            return lambda i: read(i % rows)
        if axis is Axis.ROW:
            if length != self._columns:
                raise SizeMismatchError(
                    f"vector of length {length}, expected {self._columns} columns"
                )
            return lambda i: read(i // rows)
        raise InvalidArgumentError(f"invalid axis: {axis!r}")

    def _assign_broadcast(self, vector, axis: Axis, operator, combine) -> "Matrix":
        read = self._broadcast_reader(vector, axis)
        for i in range(self._size):
            incoming = read(i)
            if operator is not None:
                incoming = coerce(operator(incoming), self._kind)
            if combine is not None:
                incoming = coerce(combine(self._get(i), incoming), self._kind)
            self._set(i, incoming)
        return self

    # -------------------------------------------------------------------------
    # Element Updates
    # -------------------------------------------------------------------------

    def update(self, *args) -> None:
        """``update(index, fn)`` or ``update(row, col, fn)``: read-modify-write."""
        *where, fn = args
        self.set(*where, fn(self.get(*where)))

    def add_to(self, *args) -> None:
        """``add_to(index, value)`` or ``add_to(row, col, value)``."""
        *where, value = args
        current = self.get(*where)
        self.set(*where, self._ops.add(current, coerce(value, self._kind)))

    # -------------------------------------------------------------------------
    # Map and Filter
    # -------------------------------------------------------------------------

    def mapi(self, fn: Callable[[Any], Any]) -> "Matrix":
        """Replace every value ``v`` by ``fn(v)``, in place."""
        kind = self._kind
        for i in range(self._size):
            self._set(i, coerce(fn(self._get(i)), kind))
        return self

    def map(self, fn: Callable[[Any], Any], kind=None) -> "Matrix":
        """
        New matrix of ``fn(v)`` for every value ``v``.

        Args:
            fn: Unary function of the native value.
            kind: Element kind of the result; defaults to this kind.
        """
        if kind is None:
            return self._mutable_copy().mapi(fn)
        from ._dense import DenseMatrix
        out = DenseMatrix(self._rows, self._columns, resolve_kind(kind))
        target = out.kind
        for i in range(self._size):
            out._set(i, coerce(fn(self._get(i)), target))
        return out

    def satisfies(self, predicate: Callable[[Any], bool]) -> "Matrix":
        """Boolean matrix of ``predicate(v)``."""
        return self.map(lambda v: bool(predicate(v)), ElementKind.BOOLEAN)

    def filter(self, predicate: Callable[[Any], bool]) -> "Matrix":
        """``n x 1`` copy of the values for which ``predicate`` holds."""
        return self.take([i for i in range(self._size) if predicate(self._get(i))])

    # -------------------------------------------------------------------------
    # Reductions
    # -------------------------------------------------------------------------

    def reduce(
        self,
        identity: Any,
        combine: Callable[[Any, Any], Any],
        map: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        """
        Left fold over the values in linear order.

        Example:
            >>> m.reduce(0, lambda acc, v: acc + v)          # sum
            >>> m.reduce(0, lambda acc, v: acc + v, abs)     # sum of |v|
        """
        acc = identity
        for i in range(self._size):
            value = self._get(i)
            acc = combine(acc, map(value) if map is not None else value)
        return acc

    def reduce_rows(self, fn: Callable[["Matrix"], Any]) -> "Matrix":
        """``rows x 1`` matrix of ``fn(row_view)`` for every row."""
        out = self.new_empty(self._rows, 1)
        for i in range(self._rows):
            out._set(i, coerce(fn(self.get_row_view(i)), out.kind))
        return out

    def reduce_columns(self, fn: Callable[["Matrix"], Any]) -> "Matrix":
        """``1 x columns`` matrix of ``fn(column_view)`` for every column."""
        out = self.new_empty(1, self._columns)
        for j in range(self._columns):
            out._set(j, coerce(fn(self.get_column_view(j)), out.kind))
        return out

    def sum(self) -> Any:
        """Sum of all values, in this kind's arithmetic."""
        return self.reduce(self._ops.zero, self._ops.add)

    # -------------------------------------------------------------------------
    # Element-wise Arithmetic
    # -------------------------------------------------------------------------

    def _apply(self, other, op, alpha, beta, axis, reverse: bool = False) -> "Matrix":
        ops = self._ops
        kind = self._kind
        a = None if alpha is None else coerce(alpha, kind)
        b = None if beta is None else coerce(beta, kind)

        if axis is not None:
            read = self._broadcast_reader(other, axis)
        elif isinstance(other, MatrixBase):
            if other.shape != self.shape:
                raise NonConformantError.of(self, other)
            read = _reader(other, kind)
        elif _is_scalar(other):
            scalar = coerce(other, kind)
            read = lambda index: scalar
        else:
            raise TypeError(f"unsupported operand type {type(other).__name__}")

        for i in range(self._size):
            x = self._get(i)
            y = read(i)
            if a is not None:
                x = ops.mul(a, x)
            if b is not None:
                y = ops.mul(b, y)
            self._set(i, op(y, x) if reverse else op(x, y))
        return self

    def addi(self, other: Operand, alpha=None, beta=None, axis: Optional[Axis] = None) -> "Matrix":
        """In place ``alpha*self + beta*other``."""
        return self._apply(other, self._ops.add, alpha, beta, axis)

    def subi(self, other: Operand, alpha=None, beta=None, axis: Optional[Axis] = None) -> "Matrix":
        """In place ``alpha*self - beta*other``."""
        return self._apply(other, self._ops.sub, alpha, beta, axis)

    def rsubi(self, other: Operand, alpha=None, beta=None, axis: Optional[Axis] = None) -> "Matrix":
        """In place ``beta*other - alpha*self``."""
        return self._apply(other, self._ops.sub, alpha, beta, axis, reverse=True)

    def muli(self, other: Operand, alpha=None, beta=None, axis: Optional[Axis] = None) -> "Matrix":
        """In place element-wise ``alpha*self * beta*other``."""
        return self._apply(other, self._ops.mul, alpha, beta, axis)

    def divi(self, other: Operand, alpha=None, beta=None, axis: Optional[Axis] = None) -> "Matrix":
        """In place element-wise ``alpha*self / beta*other``."""
        return self._apply(other, self._ops.div, alpha, beta, axis)

    def rdivi(self, other: Operand, alpha=None, beta=None, axis: Optional[Axis] = None) -> "Matrix":
        """In place element-wise ``beta*other / alpha*self``."""
        return self._apply(other, self._ops.div, alpha, beta, axis, reverse=True)

    def add(self, other: Operand, alpha=None, beta=None, axis: Optional[Axis] = None) -> "Matrix":
        return self._mutable_copy().addi(other, alpha, beta, axis)

    def sub(self, other: Operand, alpha=None, beta=None, axis: Optional[Axis] = None) -> "Matrix":
        return self._mutable_copy().subi(other, alpha, beta, axis)

    def rsub(self, other: Operand, alpha=None, beta=None, axis: Optional[Axis] = None) -> "Matrix":
        return self._mutable_copy().rsubi(other, alpha, beta, axis)

    def mul(self, other: Operand, alpha=None, beta=None, axis: Optional[Axis] = None) -> "Matrix":
        return self._mutable_copy().muli(other, alpha, beta, axis)

    def div(self, other: Operand, alpha=None, beta=None, axis: Optional[Axis] = None) -> "Matrix":
        return self._mutable_copy().divi(other, alpha, beta, axis)

    def rdiv(self, other: Operand, alpha=None, beta=None, axis: Optional[Axis] = None) -> "Matrix":
        return self._mutable_copy().rdivi(other, alpha, beta, axis)

    def negate(self) -> "Matrix":
        return self._mutable_copy().mapi(self._ops.neg)

    # Operators --------------------------------------------------------------

    def _binary(self, other, method):
        if not isinstance(other, MatrixBase) and not _is_scalar(other):
            return NotImplemented
        return method(other)

    def __add__(self, other):
        return self._binary(other, self.add)

    __radd__ = __add__

    def __sub__(self, other):
        return self._binary(other, self.sub)

    def __rsub__(self, other):
        return self._binary(other, self.rsub)

    def __mul__(self, other):
        return self._binary(other, self.mul)

    __rmul__ = __mul__

    def __truediv__(self, other):
        return self._binary(other, self.div)

    def __rtruediv__(self, other):
        return self._binary(other, self.rdiv)

    def __iadd__(self, other):
        return self._binary(other, self.addi)

    def __isub__(self, other):
        return self._binary(other, self.subi)

    def __imul__(self, other):
        return self._binary(other, self.muli)

    def __itruediv__(self, other):
        return self._binary(other, self.divi)

    def __neg__(self):
        return self.negate()

    def __matmul__(self, other):
        if not isinstance(other, MatrixBase):
            return NotImplemented
        return self.mmul(other)

    # -------------------------------------------------------------------------
    # Comparisons
    # -------------------------------------------------------------------------

    def _compare(self, other, predicate) -> "Matrix":
        from ._dense import DenseMatrix

        kind = self._kind
        if isinstance(other, MatrixBase):
            if other.shape != self.shape:
                raise NonConformantError.of(self, other)
            read = _reader(other, kind)
        else:
            scalar = coerce(other, kind)
            read = lambda index: scalar

        out = DenseMatrix(self._rows, self._columns, ElementKind.BOOLEAN)
        for i in range(self._size):
            out._set(i, predicate(self._get(i), read(i)))
        return out

    def less_than(self, other: Operand) -> "Matrix":
        """Boolean matrix of ``self < other``; unsupported for complex."""
        return self._compare(other, self._ops.lt)

    def less_than_equal(self, other: Operand) -> "Matrix":
        return self._compare(other, self._ops.le)

    def greater_than(self, other: Operand) -> "Matrix":
        return self._compare(other, self._ops.gt)

    def greater_than_equal(self, other: Operand) -> "Matrix":
        return self._compare(other, self._ops.ge)

    def equal_to(self, other: Operand) -> "Matrix":
        """Boolean matrix of ``self == other``."""
        return self._compare(other, self._ops.eq)

    # -------------------------------------------------------------------------
    # Matrix Multiplication
    # -------------------------------------------------------------------------

    def mmul(
        self,
        other: MatrixBase,
        alpha=None,
        beta=None,
        trans_a: bool = False,
        trans_b: bool = False,
    ) -> "Matrix":
        """
        Matrix product ``alpha*op(self) @ beta*op(other)``.

        ``op`` transposes its operand when the matching flag is set, without
        copying it. Array-backed operands of the same kind go to the
        configured native backend; diagonal operands use the diagonal
        product; everything else runs the generic loop. All paths give the
        same result (exactly for integer kinds).

        Args:
            other: Right operand.
            alpha: Scale of the left operand (default 1).
            beta: Scale of the right operand (default 1).
            trans_a: Use ``self`` transposed.
            trans_b: Use ``other`` transposed.

        Returns:
            A new ``op(self).rows x op(other).columns`` matrix of this kind.

        Raises:
            NonConformantError: If ``op(self).columns != op(other).rows``.

        Example:
            >>> a = DenseMatrix.from_rows([[1, 2, 3], [4, 5, 6]])
            >>> b = DenseMatrix.from_rows([[7, 8], [9, 10], [11, 12]])
            >>> a.mmul(b).to_list()
            [[58, 64], [139, 154]]
        """
        this_rows, this_cols = (self._columns, self._rows) if trans_a else (self._rows, self._columns)
        other_rows, other_cols = (other.columns, other.rows) if trans_b else (other.rows, other.columns)
        if this_cols != other_rows:
            raise NonConformantError(this_rows, this_cols, other_rows, other_cols)

        acc_kind = self._kind.accumulator
        acc = kind_ops(acc_kind)
        scale = acc.mul(
            acc.one if alpha is None else coerce(alpha, acc_kind),
            acc.one if beta is None else coerce(beta, acc_kind),
        )

        if not trans_a and not trans_b and other.backend is Backend.DIAGONAL:
            return self._mmul_by_diagonal(other, acc_kind, scale)

        if self.is_array_based and other.is_array_based and other.kind is self._kind:
            result = self._mmul_native(other, trans_a, trans_b, this_rows, other_cols, scale)
            if result is not None:
                return result

        return self._mmul_generic(
            other, trans_a, trans_b, this_rows, this_cols, other_rows, other_cols, acc_kind, scale
        )

    def _mmul_native(self, other, trans_a, trans_b, rows, columns, scale) -> Optional["Matrix"]:
        from .._kernel import blas
        from ._dense import DenseMatrix
        from ._storage import ArrayStorage

        kind = self._kind
        data = blas.gemm(
            kind,
            self.get_storage().as_array(), self._rows, self._columns, trans_a,
            other.get_storage().as_array(), other.rows, other.columns, trans_b,
            convert(scale, kind.accumulator, kind),
        )
        if data is None:
            return None
        return DenseMatrix(rows, columns, kind, storage=ArrayStorage(kind, data=data))

    def _mmul_generic(
        self, other, trans_a, trans_b, this_rows, this_cols, other_rows, other_cols, acc_kind, scale
    ) -> "Matrix":
        logger.debug(
            "generic mmul %s %dx%d * %dx%d", self._kind.label,
            this_rows, this_cols, other_rows, other_cols,
        )
        acc = kind_ops(acc_kind)
        left = _reader(self, acc_kind)
        right = _reader(other, acc_kind)
        kind = self._kind

        result = self.new_empty(this_rows, other_cols)
        for row in range(this_rows):
            for col in range(other_cols):
                total = acc.zero
                for k in range(this_cols):
                    if trans_a:
                        a_index = row_major(row, k, this_rows, this_cols)
                    else:
                        a_index = column_major(row, k, this_rows, this_cols)
                    if trans_b:
                        b_index = row_major(k, col, other_rows, other_cols)
                    else:
                        b_index = column_major(k, col, other_rows, other_cols)
                    total = acc.add(total, acc.mul(left(a_index), right(b_index)))
                result._set_cell(row, col, convert(acc.mul(scale, total), acc_kind, kind))
        return result

    def _mmul_by_diagonal(self, diagonal, acc_kind, scale) -> "Matrix":
        # Column j of the product is column j of self scaled by d[j].
        acc = kind_ops(acc_kind)
        left = _reader(self, acc_kind)
        kind = self._kind
        rows = self._rows

        result = self.new_empty(rows, diagonal.columns)
        src = diagonal.kind
        for col in range(min(diagonal.rows, diagonal.columns)):
            d = acc.mul(scale, convert(diagonal.get_diagonal(col), src, acc_kind))
            for row in range(rows):
                value = acc.mul(left(row + col * rows), d)
                result._set_cell(row, col, convert(value, acc_kind, kind))
        return result
