"""
colmat - Column-Major Matrix Library

Typed 2-D matrices with:
- Five element kinds: boolean, int, long, double, complex
- Dense, sparse (hash and bitset), diagonal and range storage
- Zero-copy views, strided slices and cross-kind adapters
- Matrix multiplication with transpose flags and native BLAS dispatch

Modules:
- matrix: Matrix types, element kinds and constructors
- config: Runtime configuration (native multiply backend)

Example:
    >>> import colmat as cm
    >>> a = cm.from_rows([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    >>> b = cm.from_rows([[7.0, 8.0], [9.0, 10.0], [11.0, 12.0]])
    >>> (a @ b).to_list()
    [[58.0, 64.0], [139.0, 154.0]]
    >>>
    >>> # Zero-copy window: writes go to the parent
    >>> a.get_view(0, 1, 2, 2).set(0, 0, 20.0)
    >>> a.get(0, 1)
    20.0
    >>>
    >>> # Force the generic loop for one block
    >>> with cm.config.local(blas="none"):
    ...     c = a.mmul(b, trans_a=True, trans_b=True)
"""

__version__ = '0.1.0'

# Import main modules
from . import matrix
from ._config import BlasBackend, BlasConfig, ColmatConfig, config, get_config

# Re-export common types
from .matrix import (
    Matrix,
    MatrixBase,
    DenseMatrix,
    HashMatrix,
    SparseBitMatrix,
    Diagonal,
    Range,
    MatrixView,
    SliceMatrix,
    FlatSliceMatrix,
    DiagonalView,
    KindAdapter,
    # Element kinds
    ElementKind,
    BOOLEAN,
    INT,
    LONG,
    DOUBLE,
    COMPLEX,
    # Tags
    Backend,
    Ownership,
    Axis,
    # Constructors
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

from ._errors import (
    MatrixError,
    InvalidArgumentError,
    NonConformantError,
    SizeMismatchError,
    SizeOverflowError,
    IndexOutOfRangeError,
    UnsupportedViewOperationError,
    IllegalDiagonalWriteError,
    UnsupportedMutationError,
    UnsupportedOperationError,
    DivisionByZeroError,
)

__all__ = [
    # Version
    '__version__',
    # Modules
    'matrix',
    # Configuration
    'BlasBackend',
    'BlasConfig',
    'ColmatConfig',
    'config',
    'get_config',
    # Matrix types
    'Matrix',
    'MatrixBase',
    'DenseMatrix',
    'HashMatrix',
    'SparseBitMatrix',
    'Diagonal',
    'Range',
    'MatrixView',
    'SliceMatrix',
    'FlatSliceMatrix',
    'DiagonalView',
    'KindAdapter',
    # Element kinds
    'ElementKind',
    'BOOLEAN',
    'INT',
    'LONG',
    'DOUBLE',
    'COMPLEX',
    # Tags
    'Backend',
    'Ownership',
    'Axis',
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
    # Errors
    'MatrixError',
    'InvalidArgumentError',
    'NonConformantError',
    'SizeMismatchError',
    'SizeOverflowError',
    'IndexOutOfRangeError',
    'UnsupportedViewOperationError',
    'IllegalDiagonalWriteError',
    'UnsupportedMutationError',
    'UnsupportedOperationError',
    'DivisionByZeroError',
]
