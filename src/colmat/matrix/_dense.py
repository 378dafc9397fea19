"""
Dense Matrix

Array-backed matrix: the values live in one flat numpy array in
column-major order. This is the only backend eligible for native
multiplication, and the default result type of most operations.

Example:
    >>> m = DenseMatrix.from_rows([[1.0, 2.0], [3.0, 4.0]])
    >>> m.get_storage().as_array()
    array([1., 3., 2., 4.])
    >>> DenseMatrix.zeros(2, 3, kind=INT).shape
    (2, 3)
"""

from typing import Any, Iterable, Optional, Sequence

import numpy as np

from .._errors import InvalidArgumentError, SizeMismatchError
from ._backend import Backend, Ownership
from ._dtypes import DOUBLE, ElementKind, coerce, resolve_kind
from ._matrix import Matrix
from ._storage import ArrayStorage, Storage

__all__ = [
    'DenseMatrix',
]


def _infer_kind(array: np.ndarray) -> ElementKind:
    if array.size == 0:
        return DOUBLE
    return ElementKind.from_dtype(array.dtype)


class DenseMatrix(Matrix):
    """
    Matrix stored in a flat column-major numpy array.

    Args:
        rows: Number of rows.
        columns: Number of columns.
        kind: Element kind (``ElementKind``, label or numpy dtype).
        storage: Existing array storage of exactly ``rows * columns``
                 elements; a new zero-filled one is created when omitted.
        ownership: Ownership tag of the storage.

    Raises:
        SizeMismatchError: If ``storage`` has the wrong size.
    """

    _backend = Backend.ARRAY

    def __init__(
        self,
        rows: int,
        columns: int,
        kind=DOUBLE,
        storage: Optional[Storage] = None,
        ownership: Ownership = Ownership.OWNED,
    ):
        kind = resolve_kind(kind)
        super().__init__(rows, columns, kind)
        if storage is None:
            storage = ArrayStorage(kind, self._size)
        else:
            if not storage.is_array_based:
                raise InvalidArgumentError(f"{type(storage).__name__} is not array based")
            if storage.kind is not kind:
                raise InvalidArgumentError(
                    f"storage kind {storage.kind.label} does not match {kind.label}"
                )
            if storage.size != self._size:
                raise SizeMismatchError(
                    f"storage of size {storage.size} for a {rows}x{columns} matrix"
                )
        self._storage = storage
        self._ownership = ownership

    # -------------------------------------------------------------------------
    # Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def zeros(cls, rows: int, columns: int, kind=DOUBLE) -> "DenseMatrix":
        return cls(rows, columns, kind)

    @classmethod
    def filled(cls, rows: int, columns: int, value: Any, kind=None) -> "DenseMatrix":
        """Matrix with every element set to ``value``."""
        if kind is None:
            kind = ElementKind.from_dtype(np.asarray(value).dtype)
        out = cls(rows, columns, kind)
        out._storage.as_array()[:] = coerce(value, out.kind)
        return out

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]], kind=None) -> "DenseMatrix":
        """
        Build from a list of rows.

        Args:
            rows: Nested sequence, one inner sequence per row.
            kind: Element kind; inferred from the values when omitted.
        """
        values = [list(row) for row in rows]
        n_rows = len(values)
        n_cols = len(values[0]) if n_rows else 0
        if any(len(row) != n_cols for row in values):
            raise SizeMismatchError("rows have different lengths")
        if kind is None:
            kind = _infer_kind(np.asarray(values))
        out = cls(n_rows, n_cols, kind)
        for i, row in enumerate(values):
            for j, value in enumerate(row):
                out._set_cell(i, j, coerce(value, out.kind))
        return out

    @classmethod
    def from_column_order(
        cls, rows: int, columns: int, values: Iterable[Any], kind=None
    ) -> "DenseMatrix":
        """Build from values listed in column-major order."""
        values = list(values)
        if kind is None:
            kind = _infer_kind(np.asarray(values))
        out = cls(rows, columns, kind)
        return out.assign(values)

    @classmethod
    def from_numpy(cls, array: np.ndarray, kind=None, copy: bool = True) -> "DenseMatrix":
        """
        Wrap or copy a 1-D or 2-D numpy array.

        Args:
            array: Source array; 1-D arrays become column vectors.
            kind: Element kind; inferred from the dtype when omitted.
            copy: If False and ``array`` is Fortran-contiguous with the
                  kind's exact dtype, share its memory (BORROWED ownership).
        """
        array = np.asarray(array)
        if array.ndim == 1:
            array = array.reshape((-1, 1))
        if array.ndim != 2:
            raise InvalidArgumentError(f"expected a 1-D or 2-D array, got {array.ndim}-D")
        kind = _infer_kind(array) if kind is None else resolve_kind(kind)
        rows, columns = array.shape

        if not copy and array.dtype == kind.dtype and array.flags.f_contiguous:
            flat = array.ravel(order='F')
            return cls(rows, columns, kind, ArrayStorage(kind, data=flat), Ownership.BORROWED)

        out = cls(rows, columns, kind)
        flat = out._storage.as_array()
        for index, value in enumerate(array.ravel(order='F').tolist()):
            flat[index] = coerce(value, kind)
        return out

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def ownership(self) -> Ownership:
        return self._ownership

    @property
    def is_frozen(self) -> bool:
        return self._storage.is_frozen

    # -------------------------------------------------------------------------
    # Native Primitives
    # -------------------------------------------------------------------------

    def _get(self, index: int) -> Any:
        return self._storage._load(index)

    def _set(self, index: int, value: Any) -> None:
        self._storage._store(index, value)

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def get_storage(self) -> Storage:
        return self._storage

    def new_empty(self, rows: int, columns: int) -> "DenseMatrix":
        return DenseMatrix(rows, columns, self._kind)

    def copy(self) -> "DenseMatrix":
        data = self._storage.as_array().copy()
        return DenseMatrix(self._rows, self._columns, self._kind, ArrayStorage(self._kind, data=data))

    def reshape(self, rows: int, columns: int) -> "DenseMatrix":
        """Same storage, new shape; writes through either matrix are shared."""
        self._check_reshape(rows, columns)
        return DenseMatrix(rows, columns, self._kind, self._storage, Ownership.BORROWED)

    def transpose(self) -> "DenseMatrix":
        grid = self._storage.as_array().reshape((self._rows, self._columns), order='F')
        data = np.ascontiguousarray(grid.T.ravel(order='F'))
        return DenseMatrix(self._columns, self._rows, self._kind, ArrayStorage(self._kind, data=data))

    def frozen(self) -> "DenseMatrix":
        """Read-only matrix sharing this storage."""
        return DenseMatrix(
            self._rows, self._columns, self._kind, self._storage.frozen(), Ownership.BORROWED
        )

    def to_numpy(self) -> np.ndarray:
        return self._storage.as_array().reshape((self._rows, self._columns), order='F').copy()

    def __iter__(self):
        return iter(self._storage)
