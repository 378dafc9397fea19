"""
colmat Matrix Module

Column-major 2-D matrices of five element kinds (boolean, int, long,
double, complex) over interchangeable storage strategies.

Core Types:
    Matrix:           Typed operations shared by every matrix
    DenseMatrix:      Flat numpy array storage
    HashMatrix:       Sparse dictionary storage
    SparseBitMatrix:  Sparse boolean bitset
    Diagonal:         Main diagonal only
    Range:            Strided integer sequence
    KindAdapter:      Zero-copy cross-kind facade

Views:
    MatrixView, SliceMatrix, FlatSliceMatrix, DiagonalView

Example:
    >>> from colmat.matrix import DenseMatrix, Range
    >>> m = DenseMatrix.from_rows([[1, 2, 3], [4, 5, 6]])
    >>> v = m.get_view(0, 1, 2, 2)
    >>> v.set(0, 0, 20)
    >>> m.get(0, 1)
    20
"""

from ._dtypes import (
    ElementKind,
    BOOLEAN, INT, LONG, DOUBLE, COMPLEX,
    KindOps,
    kind_ops,
    convert,
    coerce,
    kind_of,
)

from ._backend import Backend, Ownership, Axis

from ._indexer import (
    MAX_SIZE,
    column_major,
    row_major,
    decompose,
    slice_index,
    compute_linear_index,
)

from ._storage import (
    Storage,
    ArrayStorage,
    HashStorage,
    BitStorage,
    FrozenStorage,
)

from ._base import MatrixBase
from ._matrix import Matrix
from ._dense import DenseMatrix
from ._range import Range
from ._views import MatrixView, SliceMatrix, FlatSliceMatrix, DiagonalView
from ._diagonal import Diagonal
from ._sparse import HashMatrix, SparseBitMatrix
from ._adapter import KindAdapter

from ._ops import (
    zeros,
    full,
    from_rows,
    from_column_order,
    from_numpy,
    diag,
    eye,
    sparse,
    bits,
)

__all__ = [
    # Element kinds
    'ElementKind',
    'BOOLEAN', 'INT', 'LONG', 'DOUBLE', 'COMPLEX',
    'KindOps',
    'kind_ops',
    'convert',
    'coerce',
    'kind_of',

    # Tags
    'Backend',
    'Ownership',
    'Axis',

    # Index arithmetic
    'MAX_SIZE',
    'column_major',
    'row_major',
    'decompose',
    'slice_index',
    'compute_linear_index',

    # Storage
    'Storage',
    'ArrayStorage',
    'HashStorage',
    'BitStorage',
    'FrozenStorage',

    # Matrices
    'MatrixBase',
    'Matrix',
    'DenseMatrix',
    'Range',
    'MatrixView',
    'SliceMatrix',
    'FlatSliceMatrix',
    'DiagonalView',
    'Diagonal',
    'HashMatrix',
    'SparseBitMatrix',
    'KindAdapter',

    # Constructors
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
