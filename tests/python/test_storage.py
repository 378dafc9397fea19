"""
Tests for linear storages.
"""

import numpy as np
import pytest

from colmat import (
    BOOLEAN, INT, LONG, DOUBLE, COMPLEX,
    IndexOutOfRangeError,
    InvalidArgumentError,
    UnsupportedMutationError,
    UnsupportedViewOperationError,
)
from colmat.matrix import ArrayStorage, HashStorage, BitStorage, FrozenStorage


class TestArrayStorage:
    """Test numpy-backed storage."""

    def test_zero_filled(self):
        storage = ArrayStorage(DOUBLE, 4)
        assert storage.size == 4
        assert list(storage) == [0.0, 0.0, 0.0, 0.0]
        assert storage.is_array_based

    def test_wrap_without_copy(self):
        """Writes through the storage reach the wrapped array."""
        data = np.zeros(3, dtype=np.int64)
        storage = ArrayStorage(LONG, data=data)
        storage.set(1, 9)
        assert data[1] == 9
        assert storage.as_array() is data

    def test_dtype_must_match(self):
        with pytest.raises(InvalidArgumentError):
            ArrayStorage(INT, data=np.zeros(3, dtype=np.float64))

    def test_needs_flat_array(self):
        with pytest.raises(InvalidArgumentError):
            ArrayStorage(DOUBLE, data=np.zeros((2, 2)))

    def test_typed_accessors(self):
        """Accessors convert through the coercion table."""
        storage = ArrayStorage(DOUBLE, 3)
        storage.set_double(0, 2.75)
        storage.set_int(1, 1)
        storage.set_complex(2, 5 + 3j)
        assert storage.get_int(0) == 2
        assert storage.get_boolean(1) is True
        assert storage.get_double(2) == 5.0
        assert storage.get_complex(0) == 2.75 + 0j
        assert storage.get_long(0) == 2

    def test_get_as_native(self):
        storage = ArrayStorage(INT, 2)
        storage.set(0, 7)
        assert storage.get_as(INT, 0) == 7
        assert type(storage.get(0)) is int

    def test_bounds(self):
        storage = ArrayStorage(INT, 2)
        with pytest.raises(IndexOutOfRangeError):
            storage.get(2)
        with pytest.raises(IndexOutOfRangeError):
            storage.set_int(-1, 0)

    def test_copy_is_independent(self):
        storage = ArrayStorage(INT, 2)
        other = storage.copy()
        other.set(0, 5)
        assert storage.get(0) == 0


class TestHashStorage:
    """Test dictionary-backed storage."""

    def test_absent_reads_zero(self):
        storage = HashStorage(COMPLEX, 3, 4)
        assert storage.size == 12
        assert storage.get(7) == 0j
        assert storage.nnz == 0

    def test_upsert(self):
        storage = HashStorage(DOUBLE, 3, 4)
        storage.set(7, 1.5)
        storage.set(7, 2.5)
        assert storage.get(7) == 2.5
        assert storage.nnz == 1

    def test_items_column_major(self):
        storage = HashStorage(INT, 2, 2)
        storage.set(3, 4)
        storage.set(0, 1)
        storage.set(1, 2)
        assert list(storage.items()) == [(0, 0, 1), (1, 0, 2), (1, 1, 4)]

    def test_as_array_materializes(self):
        storage = HashStorage(LONG, 2, 2)
        storage.set(2, 3)
        np.testing.assert_array_equal(storage.as_array(), [0, 0, 3, 0])
        assert not storage.is_array_based


class TestBitStorage:
    """Test bitset storage."""

    def test_set_and_clear(self):
        storage = BitStorage(20)
        storage.set_boolean(0, True)
        storage.set_boolean(9, True)
        storage.set_boolean(19, True)
        assert storage.nnz == 3
        storage.set_boolean(9, False)
        assert storage.get(9) is False
        assert storage.get(19) is True
        assert storage.nnz == 2

    def test_numeric_writes_use_equals_one(self):
        """Numbers are stored as value == 1."""
        storage = BitStorage(3)
        storage.set_int(0, 1)
        storage.set_int(1, 2)
        storage.set_double(2, 1.0)
        assert list(storage) == [True, False, True]
        assert storage.get_int(0) == 1
        assert storage.kind is BOOLEAN


class TestFrozenStorage:
    """Test the read-only wrapper."""

    def test_reads_forward(self):
        base = ArrayStorage(DOUBLE, 3)
        base.set(1, 4.0)
        frozen = base.frozen()
        assert frozen.get(1) == 4.0
        assert frozen.get_int(1) == 4
        assert frozen.is_frozen
        assert frozen.is_array_based

    def test_sees_later_writes(self):
        """Nothing is copied."""
        base = ArrayStorage(INT, 2)
        frozen = FrozenStorage(base)
        base.set(0, 3)
        assert frozen.get(0) == 3

    @pytest.mark.parametrize("write", [
        lambda s: s.set(0, 1.0),
        lambda s: s.set_int(0, 1),
        lambda s: s.set_boolean(0, True),
        lambda s: s.set_as(DOUBLE, 0, 1.0),
        lambda s: s._store(0, 1.0),
    ])
    def test_writes_raise(self, write):
        frozen = ArrayStorage(DOUBLE, 2).frozen()
        with pytest.raises(UnsupportedMutationError):
            write(frozen)

    def test_mutation_error_is_view_error(self):
        with pytest.raises(UnsupportedViewOperationError):
            HashStorage(INT, 1, 1).frozen().set(0, 1)

    def test_array_is_read_only(self):
        frozen = ArrayStorage(DOUBLE, 2).frozen()
        with pytest.raises(ValueError):
            frozen.as_array()[0] = 1.0

    def test_no_double_wrap(self):
        frozen = ArrayStorage(DOUBLE, 2).frozen()
        assert frozen.frozen() is frozen
        assert FrozenStorage(frozen)._storage is not frozen
