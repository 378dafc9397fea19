"""
Tests for element-wise arithmetic, assignment, map/filter, reductions and
comparisons.
"""

import pytest

from colmat import (
    DenseMatrix,
    HashMatrix,
    Axis,
    BOOLEAN, INT, LONG, DOUBLE, COMPLEX,
    DivisionByZeroError,
    NonConformantError,
    SizeMismatchError,
    UnsupportedOperationError,
)


class TestAssign:
    """Test assign and broadcasting."""

    def test_scalar(self, int_2x3):
        int_2x3.assign(9)
        assert list(int_2x3) == [9] * 6

    def test_supplier(self):
        counter = iter(range(4))
        m = DenseMatrix.zeros(2, 2, kind=INT).assign(lambda: next(counter))
        assert list(m) == [0, 1, 2, 3]

    def test_sequence_column_major(self):
        m = DenseMatrix.zeros(2, 2).assign([1.0, 2.0, 3.0, 4.0])
        assert m.to_list() == [[1.0, 3.0], [2.0, 4.0]]

    def test_sequence_wrong_length(self):
        with pytest.raises(SizeMismatchError):
            DenseMatrix.zeros(2, 2).assign([1.0])

    def test_matrix_converts_kind(self):
        source = DenseMatrix.from_rows([[1.9, -2.5]])
        target = DenseMatrix.zeros(1, 2, kind=INT).assign(source)
        assert target.to_list() == [[1, -2]]

    def test_matrix_shape_mismatch(self, int_2x3):
        with pytest.raises(NonConformantError):
            int_2x3.assign(DenseMatrix.zeros(3, 2, kind=INT))

    def test_operator(self, int_2x3):
        target = DenseMatrix.zeros(2, 3, kind=INT).assign(int_2x3, lambda v: v * 10)
        assert target.to_list() == [[10, 20, 30], [40, 50, 60]]

    def test_combine(self, int_2x3):
        target = DenseMatrix.filled(2, 3, 1, kind=INT)
        target.assign(int_2x3, combine=lambda current, incoming: current - incoming)
        assert target.to_list() == [[0, -1, -2], [-3, -4, -5]]

    def test_broadcast_column(self):
        """A column vector is repeated in every column."""
        m = DenseMatrix.zeros(2, 3, kind=INT).assign([1, 2], axis=Axis.COLUMN)
        assert m.to_list() == [[1, 1, 1], [2, 2, 2]]

    def test_broadcast_row(self):
        """A row vector is repeated in every row."""
        row = DenseMatrix.from_rows([[1, 2, 3]], kind=LONG)
        m = DenseMatrix.zeros(2, 3, kind=LONG).assign(row, axis=Axis.ROW)
        assert m.to_list() == [[1, 2, 3], [1, 2, 3]]

    def test_broadcast_wrong_length(self):
        with pytest.raises(SizeMismatchError):
            DenseMatrix.zeros(2, 3).assign([1.0, 2.0], axis=Axis.ROW)

    def test_broadcast_combine(self, int_2x3):
        int_2x3.assign([10, 20, 30], axis=Axis.ROW, combine=lambda a, b: a + b)
        assert int_2x3.to_list() == [[11, 22, 33], [14, 25, 36]]

    def test_broadcast_operator(self):
        m = DenseMatrix.zeros(2, 2, kind=INT).assign([3, 4], lambda v: v * 2, axis=Axis.COLUMN)
        assert m.to_list() == [[6, 6], [8, 8]]


class TestUpdates:
    """Test update and add_to."""

    def test_update(self, int_2x3):
        int_2x3.update(0, 0, lambda v: v + 100)
        int_2x3.update(5, lambda v: -v)
        assert int_2x3.get(0, 0) == 101
        assert int_2x3.get(1, 2) == -6

    def test_add_to(self):
        m = DenseMatrix.zeros(2, 2)
        m.add_to(1, 1, 2.5)
        m.add_to(3, 0.5)
        assert m.get(1, 1) == 3.0


class TestElementwise:
    """Test element-wise arithmetic."""

    def test_add_matrix(self, int_2x3):
        result = int_2x3.add(int_2x3)
        assert result.to_list() == [[2, 4, 6], [8, 10, 12]]
        assert int_2x3.get(0, 0) == 1

    def test_pure_is_copy_then_inplace(self, int_2x3):
        pure = int_2x3.sub(1, alpha=2)
        in_place = int_2x3.copy().subi(1, alpha=2)
        assert pure == in_place

    def test_inplace_returns_self(self, int_2x3):
        assert int_2x3.addi(1) is int_2x3
        assert int_2x3.get(0, 0) == 2

    def test_alpha_beta(self):
        a = DenseMatrix.from_rows([[1.0, 2.0]])
        b = DenseMatrix.from_rows([[10.0, 20.0]])
        assert a.add(b, alpha=2.0, beta=0.5).to_list() == [[7.0, 14.0]]

    def test_reverse(self):
        a = DenseMatrix.from_rows([[2.0, 4.0]])
        assert a.rsub(10.0).to_list() == [[8.0, 6.0]]
        assert a.rdiv(8.0).to_list() == [[4.0, 2.0]]

    def test_operand_kind_converted(self):
        """The right operand is read as the receiver's kind."""
        a = DenseMatrix.from_rows([[1, 2]], kind=INT)
        b = DenseMatrix.from_rows([[0.9, 1.9]], kind=DOUBLE)
        assert a.add(b).to_list() == [[1, 3]]
        assert a.add(b).kind is INT

    def test_broadcast_axis(self, int_2x3):
        result = int_2x3.mul([1, 10], axis=Axis.COLUMN)
        assert result.to_list() == [[1, 2, 3], [40, 50, 60]]

    def test_shape_mismatch(self, int_2x3):
        with pytest.raises(NonConformantError):
            int_2x3.add(DenseMatrix.zeros(3, 2, kind=INT))

    def test_int_wraps(self):
        m = DenseMatrix.filled(1, 1, 2**31 - 1, kind=INT)
        assert m.add(1).get(0) == -2**31

    def test_integer_division(self):
        m = DenseMatrix.from_rows([[7, -7]], kind=INT)
        assert m.div(2).to_list() == [[3, -3]]

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            DenseMatrix.from_rows([[1, 2]], kind=INT).div(0)
        with pytest.raises(DivisionByZeroError):
            DenseMatrix.from_rows([[1.0]]).divi(DenseMatrix.zeros(1, 1))

    def test_negate(self, int_2x3):
        assert int_2x3.negate().to_list() == [[-1, -2, -3], [-4, -5, -6]]
        assert (-int_2x3).get(0) == -1

    def test_complex(self):
        m = DenseMatrix.from_rows([[1 + 1j, 2j]])
        assert m.mul(1j).to_list() == [[-1 + 1j, -2 + 0j]]

    def test_boolean(self):
        m = DenseMatrix.from_rows([[True, True, False]])
        assert m.add(True).to_list() == [[False, False, True]]

    def test_operators(self):
        a = DenseMatrix.from_rows([[1.0, 2.0]])
        assert (a + 1).to_list() == [[2.0, 3.0]]
        assert (1 + a).to_list() == [[2.0, 3.0]]
        assert (5 - a).to_list() == [[4.0, 3.0]]
        assert (a * a).to_list() == [[1.0, 4.0]]
        assert (a / 2).to_list() == [[0.5, 1.0]]
        assert (2 / a).to_list() == [[2.0, 1.0]]

    def test_inplace_operators(self):
        a = DenseMatrix.from_rows([[1.0, 2.0]])
        alias = a
        a += 1
        a *= 2
        assert alias is a
        assert a.to_list() == [[4.0, 6.0]]

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            DenseMatrix.zeros(1, 1) + "x"

    def test_same_result_on_hash_storage(self, int_2x3):
        """Arithmetic does not depend on the storage strategy."""
        sparse = HashMatrix(2, 3, INT).assign(int_2x3)
        assert sparse.mul(3, beta=2).equals(int_2x3.mul(3, beta=2))
        assert isinstance(sparse.mul(3), HashMatrix)


class TestMapFilter:
    """Test map, satisfies and filter."""

    def test_mapi(self, int_2x3):
        int_2x3.mapi(lambda v: v * v)
        assert list(int_2x3) == [1, 16, 4, 25, 9, 36]

    def test_map_other_kind(self, int_2x3):
        halves = int_2x3.map(lambda v: v / 2, kind=DOUBLE)
        assert halves.kind is DOUBLE
        assert halves.get(0, 0) == 0.5
        assert int_2x3.get(0, 0) == 1

    def test_satisfies(self, int_2x3):
        even = int_2x3.satisfies(lambda v: v % 2 == 0)
        assert even.kind is BOOLEAN
        assert even.to_list() == [[False, True, False], [True, False, True]]

    def test_filter(self, int_2x3):
        kept = int_2x3.filter(lambda v: v > 2)
        assert kept.shape == (4, 1)
        assert list(kept) == [4, 5, 3, 6]


class TestReductions:
    """Test reduce and the row/column reducers."""

    def test_reduce(self, int_2x3):
        assert int_2x3.reduce(0, lambda acc, v: acc + v) == 21
        assert int_2x3.reduce(0, max, lambda v: -v) == 0

    def test_sum(self, int_2x3, double_3x3):
        assert int_2x3.sum() == 21
        assert double_3x3.sum() == 36.0

    def test_sum_wraps(self):
        m = DenseMatrix.filled(1, 2, 2**31 - 1, kind=INT)
        assert m.sum() == -2

    def test_reduce_rows(self, int_2x3):
        sums = int_2x3.reduce_rows(lambda row: row.sum())
        assert sums.shape == (2, 1)
        assert list(sums) == [6, 15]

    def test_reduce_columns(self, int_2x3):
        sums = int_2x3.reduce_columns(lambda col: col.sum())
        assert sums.shape == (1, 3)
        assert list(sums) == [5, 7, 9]


class TestComparisons:
    """Test element-wise comparisons."""

    def test_scalar(self, int_2x3):
        assert int_2x3.less_than(3).to_list() == [[True, True, False], [False, False, False]]
        assert int_2x3.greater_than_equal(5).to_list() == [[False, False, False], [False, True, True]]

    def test_matrix(self):
        a = DenseMatrix.from_rows([[1.0, 2.0, 3.0]])
        b = DenseMatrix.from_rows([[3.0, 2.0, 1.0]])
        assert a.less_than_equal(b).to_list() == [[True, True, False]]
        assert a.greater_than(b).to_list() == [[False, False, True]]
        assert a.equal_to(b).to_list() == [[False, True, False]]

    def test_result_kind(self, int_2x3):
        assert int_2x3.equal_to(1).kind is BOOLEAN

    def test_complex_equality_only(self):
        m = DenseMatrix.from_rows([[1j, 2j]])
        assert m.equal_to(1j).to_list() == [[True, False]]
        with pytest.raises(UnsupportedOperationError):
            m.less_than(1j)

    def test_shape_mismatch(self, int_2x3):
        with pytest.raises(NonConformantError):
            int_2x3.less_than(DenseMatrix.zeros(1, 1, kind=INT))
