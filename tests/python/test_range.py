"""
Tests for Range.
"""

import pytest

from colmat import (
    Range,
    DenseMatrix,
    Backend,
    INT,
    IndexOutOfRangeError,
    InvalidArgumentError,
    UnsupportedMutationError,
)


class TestRange:
    """Test the strided integer sequence."""

    def test_values(self):
        r = Range(2, 11, 3)
        assert list(r) == [2, 5, 8]
        assert r.shape == (1, 3)
        assert r.kind is INT
        assert r.backend is Backend.RANGE

    def test_single_argument(self):
        r = Range(4)
        assert (r.start, r.end, r.step) == (0, 4, 1)
        assert len(r) == 4

    def test_descending(self):
        assert list(Range(5, 0, -2)) == [5, 3, 1]

    def test_empty(self):
        r = Range(3, 3)
        assert r.size == 0
        assert list(r) == []

    def test_zero_step(self):
        with pytest.raises(InvalidArgumentError):
            Range(0, 5, 0)

    def test_of_builtin(self):
        r = Range.of(range(1, 10, 4))
        assert list(r) == [1, 5, 9]

    def test_contains(self):
        r = Range(0, 10, 2)
        assert 4 in r
        assert 5 not in r

    def test_matrix_access(self):
        r = Range(10, 20, 5)
        assert r.get(1) == 15
        assert r.get(0, 1) == 15
        with pytest.raises(IndexOutOfRangeError):
            r.get(2)

    def test_read_only(self):
        with pytest.raises(UnsupportedMutationError):
            Range(3).set(0, 1)

    def test_arithmetic_is_dense(self):
        result = Range(3).add(1)
        assert isinstance(result, DenseMatrix)
        assert list(result) == [1, 2, 3]

    def test_position(self):
        r = Range(1, 7, 2)
        assert r.position(2, 6) == 5
        with pytest.raises(IndexOutOfRangeError):
            r.position(2, 5)
        with pytest.raises(IndexOutOfRangeError):
            r.position(3, 10)

    def test_repr(self):
        assert repr(Range(0, 4, 2)) == "Range(0, 4, 2)"
