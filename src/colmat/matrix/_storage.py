"""
Storage Abstraction

A storage is a flat, linearly indexed container of one native element
kind. Reads and writes may be requested as any kind; the storage converts
through the coercion table. Matrices own their storage exclusively, views
reach it only through their parent.

Storage Types:
    - ArrayStorage: numpy array, the only array-based storage
    - HashStorage: column -> (row -> value) dictionaries, absent = zero
    - BitStorage: packed boolean bitset over a bytearray
    - FrozenStorage: read-only wrapper around any other storage
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, Optional, Tuple

import numpy as np

from .._errors import InvalidArgumentError, UnsupportedMutationError
from ._dtypes import ElementKind, convert, kind_of
from ._indexer import check_linear, decompose

__all__ = [
    'Storage',
    'ArrayStorage',
    'HashStorage',
    'BitStorage',
    'FrozenStorage',
]


class Storage(ABC):
    """
    Abstract linear storage of one native element kind.

    Subclasses implement :meth:`_load` and :meth:`_store` on native values
    at a validated index; the typed accessors are built on top.
    """

    def __init__(self, kind: ElementKind, size: int):
        self._kind = kind
        self._size = size

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def kind(self) -> ElementKind:
        """Native element kind."""
        return self._kind

    @property
    def size(self) -> int:
        return self._size

    @property
    def is_array_based(self) -> bool:
        """True when :meth:`as_array` exposes a contiguous numpy buffer."""
        return False

    @property
    def is_frozen(self) -> bool:
        return False

    def __len__(self) -> int:
        return self._size

    # -------------------------------------------------------------------------
    # Native Access (implemented by subclasses)
    # -------------------------------------------------------------------------

    @abstractmethod
    def _load(self, index: int) -> Any:
        """Native value at a validated index."""
        ...

    @abstractmethod
    def _store(self, index: int, value: Any) -> None:
        """Store a native value at a validated index."""
        ...

    @abstractmethod
    def copy(self) -> "Storage":
        """Deep copy; the result shares nothing with this storage."""
        ...

    # -------------------------------------------------------------------------
    # Typed Access
    # -------------------------------------------------------------------------

    def get(self, index: int) -> Any:
        """Native value at ``index``."""
        return self._load(check_linear(index, self._size))

    def set(self, index: int, value: Any) -> None:
        """Store ``value``, converting from its inferred kind."""
        self.set_as(kind_of(value), index, value)

    def get_as(self, kind: ElementKind, index: int) -> Any:
        """Value at ``index`` converted to ``kind``."""
        value = self._load(check_linear(index, self._size))
        if kind is self._kind:
            return value
        return convert(value, self._kind, kind)

    def set_as(self, kind: ElementKind, index: int, value: Any) -> None:
        """Store ``value`` given as ``kind``, converting to the native kind."""
        check_linear(index, self._size)
        self._store(index, convert(value, kind, self._kind))

    def get_boolean(self, index: int) -> bool:
        return self.get_as(ElementKind.BOOLEAN, index)

    def get_int(self, index: int) -> int:
        return self.get_as(ElementKind.INT, index)

    def get_long(self, index: int) -> int:
        return self.get_as(ElementKind.LONG, index)

    def get_double(self, index: int) -> float:
        return self.get_as(ElementKind.DOUBLE, index)

    def get_complex(self, index: int) -> complex:
        return self.get_as(ElementKind.COMPLEX, index)

    def set_boolean(self, index: int, value: bool) -> None:
        self.set_as(ElementKind.BOOLEAN, index, value)

    def set_int(self, index: int, value: int) -> None:
        self.set_as(ElementKind.INT, index, value)

    def set_long(self, index: int, value: int) -> None:
        self.set_as(ElementKind.LONG, index, value)

    def set_double(self, index: int, value: float) -> None:
        self.set_as(ElementKind.DOUBLE, index, value)

    def set_complex(self, index: int, value: complex) -> None:
        self.set_as(ElementKind.COMPLEX, index, value)

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def as_array(self) -> np.ndarray:
        """Flat numpy array of the native kind (a copy for non-array storage)."""
        out = np.empty(self._size, dtype=self._kind.dtype)
        for i in range(self._size):
            out[i] = self._load(i)
        return out

    def frozen(self) -> "FrozenStorage":
        """Read-only wrapper sharing this storage."""
        return FrozenStorage(self)

    def __iter__(self) -> Iterator[Any]:
        for i in range(self._size):
            yield self._load(i)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self._kind.label}, size={self._size})"


# =============================================================================
# Array Storage
# =============================================================================

class ArrayStorage(Storage):
    """
    Flat numpy array in column-major order.

    Args:
        kind: Native element kind.
        size: Number of elements, ignored when ``data`` is given.
        data: Existing 1-D array to wrap without copying. Its dtype must
              match ``kind``.
    """

    def __init__(self, kind: ElementKind, size: int = 0, data: Optional[np.ndarray] = None):
        if data is None:
            data = np.zeros(size, dtype=kind.dtype)
        else:
            if data.ndim != 1:
                raise InvalidArgumentError(f"array storage needs a 1-D array, got {data.ndim}-D")
            if data.dtype != kind.dtype:
                raise InvalidArgumentError(
                    f"array dtype {data.dtype} does not match kind {kind.label}"
                )
        super().__init__(kind, data.shape[0])
        self._data = data

    @property
    def is_array_based(self) -> bool:
        return True

    def _load(self, index: int) -> Any:
        return self._data.item(index)

    def _store(self, index: int, value: Any) -> None:
        self._data[index] = value

    def as_array(self) -> np.ndarray:
        return self._data

    def copy(self) -> "ArrayStorage":
        return ArrayStorage(self._kind, data=self._data.copy())

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data.tolist())


# =============================================================================
# Hash Storage
# =============================================================================

class HashStorage(Storage):
    """
    Sparse storage keyed by column, then row.

    Linear indices are decomposed with a fixed row count; absent keys read
    as the kind's zero. Every write upserts.
    """

    def __init__(self, kind: ElementKind, rows: int, columns: int):
        super().__init__(kind, rows * columns)
        self._rows = rows
        self._columns = columns
        self._map: Dict[int, Dict[int, Any]] = {}

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def nnz(self) -> int:
        """Number of stored entries."""
        return sum(len(col) for col in self._map.values())

    def _load(self, index: int) -> Any:
        row, col = decompose(index, self._rows)
        column = self._map.get(col)
        if column is None:
            return self._kind.zero
        return column.get(row, self._kind.zero)

    def _store(self, index: int, value: Any) -> None:
        row, col = decompose(index, self._rows)
        self._map.setdefault(col, {})[row] = value

    def items(self) -> Iterator[Tuple[int, int, Any]]:
        """Stored ``(row, col, value)`` triples, column by column."""
        for col in sorted(self._map):
            column = self._map[col]
            for row in sorted(column):
                yield row, col, column[row]

    def copy(self) -> "HashStorage":
        out = HashStorage(self._kind, self._rows, self._columns)
        out._map = {col: dict(column) for col, column in self._map.items()}
        return out


# =============================================================================
# Bit Storage
# =============================================================================

class BitStorage(Storage):
    """Packed boolean bitset indexed by linear position."""

    def __init__(self, size: int):
        super().__init__(ElementKind.BOOLEAN, size)
        self._bits = bytearray((size + 7) // 8)

    @property
    def nnz(self) -> int:
        """Number of set bits."""
        return sum(bin(byte).count("1") for byte in self._bits)

    def _load(self, index: int) -> bool:
        return bool(self._bits[index >> 3] & (1 << (index & 7)))

    def _store(self, index: int, value: Any) -> None:
        if value:
            self._bits[index >> 3] |= 1 << (index & 7)
        else:
            self._bits[index >> 3] &= ~(1 << (index & 7)) & 0xFF

    def copy(self) -> "BitStorage":
        out = BitStorage(self._size)
        out._bits = bytearray(self._bits)
        return out


# =============================================================================
# Frozen Storage
# =============================================================================

class FrozenStorage(Storage):
    """
    Read-only view of another storage.

    Reads forward to the wrapped storage; every write raises
    :class:`UnsupportedMutationError`. Nothing is copied.
    """

    def __init__(self, storage: Storage):
        if isinstance(storage, FrozenStorage):
            storage = storage._storage
        super().__init__(storage.kind, storage.size)
        self._storage = storage

    @property
    def is_frozen(self) -> bool:
        return True

    @property
    def is_array_based(self) -> bool:
        return self._storage.is_array_based

    def _load(self, index: int) -> Any:
        return self._storage._load(index)

    def _store(self, index: int, value: Any) -> None:
        raise UnsupportedMutationError("cannot write to frozen storage")

    def set_as(self, kind: ElementKind, index: int, value: Any) -> None:
        raise UnsupportedMutationError("cannot write to frozen storage")

    def as_array(self) -> np.ndarray:
        data = self._storage.as_array().view()
        data.flags.writeable = False
        return data

    def frozen(self) -> "FrozenStorage":
        return self

    def copy(self) -> "FrozenStorage":
        return FrozenStorage(self._storage.copy())
