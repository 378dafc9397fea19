"""Backend, ownership and axis tags.

Every matrix carries a :class:`Backend` tag fixed at construction. Fast
paths (native multiplication, diagonal products) dispatch on the tag
instead of on the concrete class, so a new storage strategy only has to
pick a tag to take part in dispatch.

Backend Types:
    - ARRAY: Owns (or borrows) a flat numpy array in column-major order.
    - HASH: Sparse column -> row -> value map.
    - BITSET: Sparse boolean bitset.
    - DIAGONAL: Only the main diagonal is stored.
    - VIEW: Reads and writes through a parent matrix.
    - RANGE: Computed integer sequence, read-only.
    - ADAPTER: Reads and writes a parent matrix as another element kind.
"""

from enum import Enum

__all__ = [
    'Backend',
    'Ownership',
    'Axis',
]


class Backend(Enum):
    """Storage strategy of a matrix."""
    ARRAY = 'array'
    HASH = 'hash'
    BITSET = 'bitset'
    DIAGONAL = 'diagonal'
    VIEW = 'view'
    RANGE = 'range'
    ADAPTER = 'adapter'


class Ownership(Enum):
    """Data ownership model.

    Attributes:
        OWNED: Matrix owns its storage exclusively.
               Created by: constructors, copy(), transpose().

        BORROWED: Matrix wraps a caller's numpy array without copying.
                  Created by: DenseMatrix.from_numpy(..., copy=False).

        VIEW: Matrix owns nothing and forwards to a parent.
              Created by: get_view(), slice(), as_kind().

    Example:
        >>> DenseMatrix.zeros(2, 2).ownership   # Ownership.OWNED
        >>> m.get_row_view(0).ownership          # Ownership.VIEW
    """
    OWNED = 'owned'
    BORROWED = 'borrowed'
    VIEW = 'view'


class Axis(Enum):
    """Direction along which a vector is broadcast or a matrix is sliced.

    ROW: the vector runs along a row (one value per column).
    COLUMN: the vector runs along a column (one value per row).
    """
    ROW = 'row'
    COLUMN = 'column'
