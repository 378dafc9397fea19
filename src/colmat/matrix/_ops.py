"""
Matrix Constructors

Module-level shortcuts for the common ways to create a matrix.

Example:
    >>> import colmat as cm
    >>> a = cm.from_rows([[1, 2, 3], [4, 5, 6]])
    >>> b = cm.from_rows([[7, 8], [9, 10], [11, 12]])
    >>> (a @ b).to_list()
    [[58, 64], [139, 154]]
    >>> cm.diag([1.0, 2.0, 3.0]).get(1, 1)
    2.0
"""

from typing import Any, Iterable, Optional, Sequence

import numpy as np

from ._dense import DenseMatrix
from ._diagonal import Diagonal
from ._dtypes import DOUBLE
from ._sparse import HashMatrix, SparseBitMatrix

__all__ = [
    'zeros',
    'full',
    'from_rows',
    'from_column_order',
    'from_numpy',
    'diag',
    'eye',
    'sparse',
    'bits',
]


def zeros(rows: int, columns: int, kind=DOUBLE) -> DenseMatrix:
    """Zero-filled dense matrix."""
    return DenseMatrix.zeros(rows, columns, kind)


def full(rows: int, columns: int, value: Any, kind=None) -> DenseMatrix:
    """Dense matrix with every element set to ``value``."""
    return DenseMatrix.filled(rows, columns, value, kind)


def from_rows(rows: Sequence[Sequence[Any]], kind=None) -> DenseMatrix:
    """Dense matrix from a list of rows."""
    return DenseMatrix.from_rows(rows, kind)


def from_column_order(rows: int, columns: int, values: Iterable[Any], kind=None) -> DenseMatrix:
    """Dense matrix from values listed in column-major order."""
    return DenseMatrix.from_column_order(rows, columns, values, kind)


def from_numpy(array: np.ndarray, kind=None, copy: bool = True) -> DenseMatrix:
    """Dense matrix from a 1-D or 2-D numpy array."""
    return DenseMatrix.from_numpy(array, kind, copy)


def diag(values: Iterable[Any], rows: Optional[int] = None, columns: Optional[int] = None, kind=None) -> Diagonal:
    """
    Diagonal matrix; square ``len(values) x len(values)`` unless a shape
    is given.
    """
    values = list(values)
    if rows is None:
        rows = len(values)
    if columns is None:
        columns = rows
    return Diagonal.of(rows, columns, values, kind)


def eye(n: int, kind=DOUBLE) -> Diagonal:
    """``n x n`` identity as a diagonal matrix."""
    return Diagonal.identity(n, kind)


def sparse(rows: int, columns: int, kind=DOUBLE) -> HashMatrix:
    """Empty hash-backed sparse matrix."""
    return HashMatrix(rows, columns, kind)


def bits(rows: int, columns: int) -> SparseBitMatrix:
    """Empty bitset-backed boolean matrix."""
    return SparseBitMatrix(rows, columns)
