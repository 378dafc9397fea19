"""
Tests for element kinds, coercion and operator tables.
"""

import math

import numpy as np
import pytest

from colmat import (
    BOOLEAN, INT, LONG, DOUBLE, COMPLEX,
    ElementKind,
    DivisionByZeroError,
    InvalidArgumentError,
    UnsupportedOperationError,
)
from colmat.matrix import convert, coerce, kind_of, kind_ops
from colmat.matrix._dtypes import resolve_kind, wrap_int32, wrap_int64


class TestElementKind:
    """Test kind metadata."""

    def test_dtypes(self):
        """Each kind maps to one numpy dtype."""
        assert BOOLEAN.dtype == np.bool_
        assert INT.dtype == np.int32
        assert LONG.dtype == np.int64
        assert DOUBLE.dtype == np.float64
        assert COMPLEX.dtype == np.complex128

    def test_accumulator(self):
        """Boolean products accumulate as int."""
        assert BOOLEAN.accumulator is INT
        assert DOUBLE.accumulator is DOUBLE

    @pytest.mark.parametrize("name,kind", [
        ("boolean", BOOLEAN), ("bool", BOOLEAN), ("int", INT), ("int32", INT),
        ("long", LONG), ("int64", LONG), ("double", DOUBLE), ("float64", DOUBLE),
        ("complex", COMPLEX), ("COMPLEX", COMPLEX),
    ])
    def test_from_name(self, name, kind):
        """Labels and aliases resolve case-insensitively."""
        assert ElementKind.from_name(name) is kind

    def test_from_name_unknown(self):
        with pytest.raises(InvalidArgumentError):
            ElementKind.from_name("quaternion")

    @pytest.mark.parametrize("dtype,kind", [
        (np.bool_, BOOLEAN), (np.int8, INT), (np.int32, INT), (np.int64, LONG),
        (np.uint32, LONG), (np.float32, DOUBLE), (np.complex64, COMPLEX),
    ])
    def test_from_dtype(self, dtype, kind):
        """Numpy dtypes map to the kind that can hold them."""
        assert ElementKind.from_dtype(dtype) is kind

    def test_resolve_kind(self):
        """Kinds, labels and dtypes are all accepted."""
        assert resolve_kind(LONG) is LONG
        assert resolve_kind("double") is DOUBLE
        assert resolve_kind(np.complex128) is COMPLEX


class TestConversion:
    """Test the coercion table."""

    def test_number_to_boolean(self):
        """Only values equal to one are true."""
        assert convert(1, INT, BOOLEAN) is True
        assert convert(2, INT, BOOLEAN) is False
        assert convert(0, LONG, BOOLEAN) is False
        assert convert(1.0, DOUBLE, BOOLEAN) is True
        assert convert(0.5, DOUBLE, BOOLEAN) is False

    def test_complex_to_boolean_uses_real_part(self):
        assert convert(1 + 2j, COMPLEX, BOOLEAN) is True
        assert convert(2 + 0j, COMPLEX, BOOLEAN) is False

    def test_boolean_to_number(self):
        assert convert(True, BOOLEAN, INT) == 1
        assert convert(False, BOOLEAN, LONG) == 0
        assert convert(True, BOOLEAN, DOUBLE) == 1.0
        assert convert(True, BOOLEAN, COMPLEX) == 1 + 0j

    def test_double_to_int_truncates(self):
        """Truncation is toward zero."""
        assert convert(3.9, DOUBLE, INT) == 3
        assert convert(-3.9, DOUBLE, INT) == -3
        assert convert(-0.5, DOUBLE, LONG) == 0

    def test_double_to_int_saturates(self):
        """Out-of-range doubles clamp; NaN becomes zero."""
        assert convert(1e20, DOUBLE, INT) == 2**31 - 1
        assert convert(-1e20, DOUBLE, INT) == -2**31
        assert convert(1e30, DOUBLE, LONG) == 2**63 - 1
        assert convert(math.inf, DOUBLE, LONG) == 2**63 - 1
        assert convert(math.nan, DOUBLE, INT) == 0

    def test_long_to_int_wraps(self):
        assert convert(2**31, LONG, INT) == -2**31
        assert convert(2**32 + 5, LONG, INT) == 5

    def test_complex_to_real(self):
        """Complex narrows to its real part."""
        assert convert(2.5 + 7j, COMPLEX, DOUBLE) == 2.5
        assert convert(2.5 + 7j, COMPLEX, INT) == 2

    def test_real_to_complex(self):
        """Imaginary part is zero."""
        value = convert(4, INT, COMPLEX)
        assert value == 4 + 0j
        assert isinstance(value, complex)

    def test_plain_python_results(self):
        """Numpy scalars come out as Python scalars."""
        assert type(convert(np.float64(2.0), DOUBLE, DOUBLE)) is float
        assert type(convert(np.int32(2), INT, LONG)) is int
        assert type(convert(np.bool_(True), BOOLEAN, BOOLEAN)) is bool

    def test_wrap(self):
        assert wrap_int32(2**31 - 1 + 1) == -2**31
        assert wrap_int64(2**63) == -2**63
        assert wrap_int64(-1) == -1


class TestKindOf:
    """Test scalar kind inference."""

    def test_python_scalars(self):
        assert kind_of(True) is BOOLEAN
        assert kind_of(3) is LONG
        assert kind_of(3.0) is DOUBLE
        assert kind_of(3j) is COMPLEX

    def test_numpy_scalars(self):
        assert kind_of(np.int32(1)) is INT
        assert kind_of(np.int64(1)) is LONG
        assert kind_of(np.bool_(False)) is BOOLEAN

    def test_not_a_number(self):
        with pytest.raises(InvalidArgumentError):
            kind_of("1")

    def test_coerce(self):
        """coerce infers the source kind."""
        assert coerce(2.7, INT) == 2
        assert coerce(1, BOOLEAN) is True
        assert coerce(True, DOUBLE) == 1.0


class TestKindOps:
    """Test per-kind arithmetic."""

    def test_int_wraps(self):
        ops = kind_ops(INT)
        assert ops.add(2**31 - 1, 1) == -2**31
        assert ops.mul(2**16, 2**16) == 0
        assert ops.neg(-2**31) == -2**31

    def test_long_wraps(self):
        ops = kind_ops(LONG)
        assert ops.add(2**63 - 1, 1) == -2**63

    def test_integer_division_truncates(self):
        ops = kind_ops(INT)
        assert ops.div(7, 2) == 3
        assert ops.div(-7, 2) == -3
        assert ops.div(7, -2) == -3

    @pytest.mark.parametrize("kind,zero", [(INT, 0), (LONG, 0), (DOUBLE, 0.0), (COMPLEX, 0j), (BOOLEAN, False)])
    def test_division_by_zero(self, kind, zero):
        """Division by zero raises for every kind."""
        ops = kind_ops(kind)
        with pytest.raises(DivisionByZeroError):
            ops.div(ops.one, zero)

    def test_division_by_zero_is_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            kind_ops(DOUBLE).div(1.0, 0.0)

    def test_boolean_arithmetic(self):
        """Boolean results follow the == 1 rule on integer arithmetic."""
        ops = kind_ops(BOOLEAN)
        assert ops.add(True, False) is True
        assert ops.add(True, True) is False
        assert ops.sub(True, False) is True
        assert ops.mul(True, True) is True
        assert ops.lt(False, True) is True

    def test_complex_unordered(self):
        ops = kind_ops(COMPLEX)
        assert ops.eq(1 + 1j, 1 + 1j)
        with pytest.raises(UnsupportedOperationError):
            ops.lt(1j, 2j)
        with pytest.raises(NotImplementedError):
            ops.ge(1j, 2j)
