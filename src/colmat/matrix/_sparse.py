"""
Sparse Matrices

Hash- and bitset-backed matrices. Absent entries read as zero (or false)
and every write upserts, so both types satisfy the dense contract exactly;
only memory use differs. Arithmetic and multiplication go through the
generic loops.

Example:
    >>> m = HashMatrix(1000, 1000)
    >>> m[3, 7] = 2.5
    >>> m.nnz
    1
    >>> m.to_scipy().nnz
    1
"""

from typing import Any, Iterator, Tuple, TYPE_CHECKING

import numpy as np

from .._errors import InvalidArgumentError
from ._backend import Backend
from ._dtypes import BOOLEAN, DOUBLE, ElementKind, coerce, resolve_kind
from ._matrix import Matrix
from ._storage import BitStorage, HashStorage, Storage

if TYPE_CHECKING:
    from scipy.sparse import spmatrix

__all__ = [
    'HashMatrix',
    'SparseBitMatrix',
]


class HashMatrix(Matrix):
    """
    Sparse matrix of any kind over column -> row -> value dictionaries.

    Args:
        rows: Number of rows.
        columns: Number of columns.
        kind: Element kind (default double).
    """

    _backend = Backend.HASH

    def __init__(self, rows: int, columns: int, kind=DOUBLE):
        kind = resolve_kind(kind)
        super().__init__(rows, columns, kind)
        self._storage = HashStorage(kind, rows, columns)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def nnz(self) -> int:
        """Number of stored entries (explicitly written zeros included)."""
        return self._storage.nnz

    def _get(self, index: int) -> Any:
        return self._storage._load(index)

    def _set(self, index: int, value: Any) -> None:
        self._storage._store(index, value)

    def items(self) -> Iterator[Tuple[int, int, Any]]:
        """Stored ``(row, col, value)`` triples in column-major order."""
        return self._storage.items()

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def get_storage(self) -> Storage:
        return self._storage

    def new_empty(self, rows: int, columns: int) -> "HashMatrix":
        return HashMatrix(rows, columns, self._kind)

    def copy(self) -> "HashMatrix":
        out = HashMatrix(self._rows, self._columns, self._kind)
        out._storage = self._storage.copy()
        return out

    def transpose(self) -> "HashMatrix":
        out = HashMatrix(self._columns, self._rows, self._kind)
        for row, col, value in self.items():
            out._set_cell(col, row, value)
        return out

    # -------------------------------------------------------------------------
    # scipy Interop
    # -------------------------------------------------------------------------

    def to_scipy(self) -> "spmatrix":
        """
        Convert to a ``scipy.sparse.csc_matrix`` of the kind's dtype.

        Example:
            >>> m.to_scipy().toarray()
        """
        import scipy.sparse as sp

        triples = list(self.items())
        rows = np.fromiter((t[0] for t in triples), dtype=np.int64, count=len(triples))
        cols = np.fromiter((t[1] for t in triples), dtype=np.int64, count=len(triples))
        data = np.array([t[2] for t in triples], dtype=self._kind.dtype)
        return sp.csc_matrix((data, (rows, cols)), shape=self.shape, dtype=self._kind.dtype)

    @classmethod
    def from_scipy(cls, matrix: "spmatrix", kind=None) -> "HashMatrix":
        """
        Build from any scipy sparse matrix, storing its explicit entries.

        Args:
            matrix: scipy sparse matrix or array.
            kind: Element kind; inferred from the dtype when omitted.
        """
        import scipy.sparse as sp

        if not sp.issparse(matrix):
            raise InvalidArgumentError(f"expected a scipy sparse matrix, got {type(matrix).__name__}")
        coo = matrix.tocoo()
        kind = ElementKind.from_dtype(coo.dtype) if kind is None else resolve_kind(kind)
        out = cls(coo.shape[0], coo.shape[1], kind)
        for row, col, value in zip(coo.row.tolist(), coo.col.tolist(), coo.data.tolist()):
            out._set_cell(row, col, coerce(value, kind))
        return out


class SparseBitMatrix(Matrix):
    """Boolean matrix over a packed bitset."""

    _backend = Backend.BITSET

    def __init__(self, rows: int, columns: int):
        super().__init__(rows, columns, BOOLEAN)
        self._storage = BitStorage(self._size)

    @property
    def nnz(self) -> int:
        """Number of true entries."""
        return self._storage.nnz

    def _get(self, index: int) -> bool:
        return self._storage._load(index)

    def _set(self, index: int, value: Any) -> None:
        self._storage._store(index, value)

    def get_storage(self) -> Storage:
        return self._storage

    def new_empty(self, rows: int, columns: int) -> "SparseBitMatrix":
        return SparseBitMatrix(rows, columns)

    def copy(self) -> "SparseBitMatrix":
        out = SparseBitMatrix(self._rows, self._columns)
        out._storage = self._storage.copy()
        return out
