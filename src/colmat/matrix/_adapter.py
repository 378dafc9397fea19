"""Cross-kind adapters.

A :class:`KindAdapter` presents a matrix as another element kind without
copying it. Reads convert from the wrapped kind, writes convert back, and
adapting an adapter re-adapts the wrapped matrix instead of stacking
conversions.
"""

from typing import Any

from ._backend import Backend, Ownership
from ._base import MatrixBase
from ._dtypes import ElementKind, convert
from ._matrix import Matrix

__all__ = [
    'KindAdapter',
]


class KindAdapter(Matrix):
    """
    ``parent`` read and written as ``kind``.

    Example:
        >>> d = DenseMatrix.from_rows([[1.5, 2.0]])
        >>> d.as_int_matrix().to_list()
        [[1, 2]]
        >>> d.as_int_matrix().as_double_matrix() is d
        True
    """

    _backend = Backend.ADAPTER

    def __init__(self, parent: MatrixBase, kind: ElementKind):
        super().__init__(parent.rows, parent.columns, kind)
        self._parent = parent
        self._source = parent.kind

    @property
    def parent(self) -> MatrixBase:
        return self._parent

    @property
    def ownership(self) -> Ownership:
        return Ownership.VIEW

    def _get(self, index: int) -> Any:
        return convert(self._parent._get(index), self._source, self._kind)

    def _set(self, index: int, value: Any) -> None:
        self._parent._set(index, convert(value, self._kind, self._source))

    def _get_cell(self, row: int, col: int) -> Any:
        return convert(self._parent._get_cell(row, col), self._source, self._kind)

    def _set_cell(self, row: int, col: int, value: Any) -> None:
        self._parent._set_cell(row, col, convert(value, self._kind, self._source))

    def as_kind(self, kind: ElementKind) -> MatrixBase:
        return self._parent.as_kind(kind)

    def reshape(self, rows: int, columns: int) -> MatrixBase:
        """Reshape the wrapped matrix and adapt the result."""
        self._check_reshape(rows, columns)
        return self._parent.reshape(rows, columns).as_kind(self._kind)
