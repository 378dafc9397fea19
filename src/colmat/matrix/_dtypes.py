"""
Element Kinds and Operator Tables

Defines the five element kinds a matrix can hold, the coercion table used
whenever a value is read or written as a different kind, and one operator
table per kind. The generic matrix code never branches on the kind: it
looks up :func:`kind_ops` once and calls through the table.

Coercion rules (native -> requested):

    boolean -> number     1 / 0
    number  -> boolean    value == 1 (complex: real part == 1)
    double  -> int/long   truncate toward zero, saturate, NaN -> 0
    long    -> int        wrap to 32 bits
    complex -> real       real part
    real    -> complex    imaginary part 0

Integer kinds wrap on overflow; integer division truncates toward zero.
"""

from __future__ import annotations

import math
import numbers
from enum import IntEnum
from typing import Any, Callable, Dict

import numpy as np

from .._errors import (
    DivisionByZeroError,
    InvalidArgumentError,
    UnsupportedOperationError,
)

__all__ = [
    'ElementKind',
    'BOOLEAN', 'INT', 'LONG', 'DOUBLE', 'COMPLEX',
    'KindOps',
    'kind_ops',
    'convert',
    'kind_of',
    'coerce',
    'wrap_int32',
    'wrap_int64',
]


# =============================================================================
# Element Kind Enumeration
# =============================================================================

class ElementKind(IntEnum):
    """
    Element kinds supported by colmat matrices.

    Order follows the widening direction used when two kinds meet in an
    operation the caller did not type explicitly.
    """
    BOOLEAN = 0    # stored as numpy bool_
    INT = 1        # 32-bit signed integer
    LONG = 2       # 64-bit signed integer
    DOUBLE = 3     # 64-bit floating point
    COMPLEX = 4    # pair of doubles

    @property
    def dtype(self) -> np.dtype:
        """numpy dtype used by array storage."""
        return _KIND_INFO[self]["dtype"]

    @property
    def label(self) -> str:
        """Human-readable name."""
        return _KIND_INFO[self]["label"]

    @property
    def zero(self) -> Any:
        return _KIND_INFO[self]["zero"]

    @property
    def one(self) -> Any:
        return _KIND_INFO[self]["one"]

    @property
    def is_integral(self) -> bool:
        return self in (ElementKind.INT, ElementKind.LONG)

    @property
    def accumulator(self) -> "ElementKind":
        """Kind used to accumulate sums of products of this kind."""
        return ElementKind.INT if self is ElementKind.BOOLEAN else self

    @classmethod
    def from_name(cls, name: str) -> "ElementKind":
        """Get a kind from its label or a common alias."""
        name_lower = name.lower()
        for kind, info in _KIND_INFO.items():
            if info["label"] == name_lower:
                return kind
        aliases = {
            "bool": cls.BOOLEAN,
            "bit": cls.BOOLEAN,
            "int32": cls.INT,
            "integer": cls.INT,
            "int64": cls.LONG,
            "float": cls.DOUBLE,
            "float64": cls.DOUBLE,
            "real": cls.DOUBLE,
            "complex128": cls.COMPLEX,
        }
        if name_lower in aliases:
            return aliases[name_lower]
        raise InvalidArgumentError(f"Unknown element kind: {name}")

    @classmethod
    def from_dtype(cls, dtype) -> "ElementKind":
        """Map a numpy dtype onto the kind that can hold it."""
        dtype = np.dtype(dtype)
        if dtype == np.bool_:
            return cls.BOOLEAN
        if np.issubdtype(dtype, np.integer):
            return cls.INT if dtype.itemsize <= 4 and np.issubdtype(dtype, np.signedinteger) else cls.LONG
        if np.issubdtype(dtype, np.floating):
            return cls.DOUBLE
        if np.issubdtype(dtype, np.complexfloating):
            return cls.COMPLEX
        raise InvalidArgumentError(f"No element kind for dtype {dtype}")


_KIND_INFO: Dict[ElementKind, Dict[str, Any]] = {
    ElementKind.BOOLEAN: {
        "dtype": np.dtype(np.bool_),
        "label": "boolean",
        "zero": False,
        "one": True,
    },
    ElementKind.INT: {
        "dtype": np.dtype(np.int32),
        "label": "int",
        "zero": 0,
        "one": 1,
    },
    ElementKind.LONG: {
        "dtype": np.dtype(np.int64),
        "label": "long",
        "zero": 0,
        "one": 1,
    },
    ElementKind.DOUBLE: {
        "dtype": np.dtype(np.float64),
        "label": "double",
        "zero": 0.0,
        "one": 1.0,
    },
    ElementKind.COMPLEX: {
        "dtype": np.dtype(np.complex128),
        "label": "complex",
        "zero": 0j,
        "one": 1 + 0j,
    },
}

BOOLEAN = ElementKind.BOOLEAN
INT = ElementKind.INT
LONG = ElementKind.LONG
DOUBLE = ElementKind.DOUBLE
COMPLEX = ElementKind.COMPLEX


# =============================================================================
# Integer Helpers
# =============================================================================

_INT32_MIN, _INT32_MAX = -(1 << 31), (1 << 31) - 1
_INT64_MIN, _INT64_MAX = -(1 << 63), (1 << 63) - 1


def wrap_int32(value: int) -> int:
    """Two's complement wrap of an arbitrary integer to 32 bits."""
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value > _INT32_MAX else value


def wrap_int64(value: int) -> int:
    """Two's complement wrap of an arbitrary integer to 64 bits."""
    value &= 0xFFFFFFFFFFFFFFFF
    return value - (1 << 64) if value > _INT64_MAX else value


def _saturate(value: float, low: int, high: int) -> int:
    if math.isnan(value):
        return 0
    if value >= high:
        return high
    if value <= low:
        return low
    return int(value)


def _truncating_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


# =============================================================================
# Coercion Table
# =============================================================================

def _to_boolean(value: Any, src: ElementKind) -> bool:
    if src is ElementKind.BOOLEAN:
        return bool(value)
    if src is ElementKind.COMPLEX:
        return complex(value).real == 1.0
    return bool(value == 1)


def _to_int(value: Any, src: ElementKind) -> int:
    if src is ElementKind.BOOLEAN:
        return 1 if value else 0
    if src is ElementKind.COMPLEX:
        return _saturate(complex(value).real, _INT32_MIN, _INT32_MAX)
    if src is ElementKind.DOUBLE:
        return _saturate(float(value), _INT32_MIN, _INT32_MAX)
    return wrap_int32(int(value))


def _to_long(value: Any, src: ElementKind) -> int:
    if src is ElementKind.BOOLEAN:
        return 1 if value else 0
    if src is ElementKind.COMPLEX:
        return _saturate(complex(value).real, _INT64_MIN, _INT64_MAX)
    if src is ElementKind.DOUBLE:
        return _saturate(float(value), _INT64_MIN, _INT64_MAX)
    return wrap_int64(int(value))


def _to_double(value: Any, src: ElementKind) -> float:
    if src is ElementKind.BOOLEAN:
        return 1.0 if value else 0.0
    if src is ElementKind.COMPLEX:
        return complex(value).real
    return float(value)


def _to_complex(value: Any, src: ElementKind) -> complex:
    if src is ElementKind.BOOLEAN:
        return complex(1.0, 0.0) if value else complex(0.0, 0.0)
    if src is ElementKind.COMPLEX:
        return complex(value)
    return complex(float(value), 0.0)


_CONVERTERS: Dict[ElementKind, Callable[[Any, ElementKind], Any]] = {
    ElementKind.BOOLEAN: _to_boolean,
    ElementKind.INT: _to_int,
    ElementKind.LONG: _to_long,
    ElementKind.DOUBLE: _to_double,
    ElementKind.COMPLEX: _to_complex,
}


def convert(value: Any, src: ElementKind, dst: ElementKind) -> Any:
    """
    Convert a value of kind ``src`` to kind ``dst``.

    Args:
        value: A value of the source kind (Python or numpy scalar).
        src: Kind the value is stored as.
        dst: Requested kind.

    Returns:
        A plain Python ``bool``, ``int``, ``float`` or ``complex``.

    Example:
        >>> convert(3.9, DOUBLE, INT)
        3
        >>> convert(1 + 2j, COMPLEX, BOOLEAN)
        True
    """
    return _CONVERTERS[dst](value, src)


def kind_of(value: Any) -> ElementKind:
    """Infer the kind of a Python or numpy scalar."""
    if isinstance(value, (bool, np.bool_)):
        return ElementKind.BOOLEAN
    if isinstance(value, np.integer):
        return ElementKind.INT if value.dtype.itemsize <= 4 else ElementKind.LONG
    if isinstance(value, numbers.Integral):
        return ElementKind.LONG
    if isinstance(value, numbers.Real):
        return ElementKind.DOUBLE
    if isinstance(value, numbers.Complex):
        return ElementKind.COMPLEX
    raise InvalidArgumentError(f"Cannot use {type(value).__name__} as a matrix element")


def coerce(value: Any, kind: ElementKind) -> Any:
    """Convert an arbitrary scalar into a native value of ``kind``."""
    return convert(value, kind_of(value), kind)


# =============================================================================
# Operator Tables
# =============================================================================

class KindOps:
    """
    Arithmetic and comparison on native values of one kind.

    All operands are native values of :attr:`kind` and all results are
    native values of the same kind, except comparisons which return
    ``bool``.
    """

    kind: ElementKind

    def __init__(self, kind: ElementKind):
        self.kind = kind
        self.zero = kind.zero
        self.one = kind.one

    def coerce(self, value: Any) -> Any:
        return coerce(value, self.kind)

    def add(self, a, b):
        return a + b

    def sub(self, a, b):
        return a - b

    def mul(self, a, b):
        return a * b

    def div(self, a, b):
        if b == 0:
            raise DivisionByZeroError(f"{self.kind.label} division by zero")
        return a / b

    def neg(self, a):
        return -a

    def lt(self, a, b) -> bool:
        return a < b

    def le(self, a, b) -> bool:
        return a <= b

    def gt(self, a, b) -> bool:
        return a > b

    def ge(self, a, b) -> bool:
        return a >= b

    def eq(self, a, b) -> bool:
        return a == b

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.label})"


class _IntegralOps(KindOps):

    def __init__(self, kind: ElementKind, wrap: Callable[[int], int]):
        super().__init__(kind)
        self._wrap = wrap

    def add(self, a, b):
        return self._wrap(a + b)

    def sub(self, a, b):
        return self._wrap(a - b)

    def mul(self, a, b):
        return self._wrap(a * b)

    def div(self, a, b):
        if b == 0:
            raise DivisionByZeroError(f"{self.kind.label} division by zero")
        return self._wrap(_truncating_div(a, b))

    def neg(self, a):
        return self._wrap(-a)


class _BooleanOps(KindOps):
    # Arithmetic runs on 0/1 integers and converts back with the == 1 rule.

    def add(self, a, b):
        return int(a) + int(b) == 1

    def sub(self, a, b):
        return int(a) - int(b) == 1

    def mul(self, a, b):
        return int(a) * int(b) == 1

    def div(self, a, b):
        if not b:
            raise DivisionByZeroError("boolean division by zero")
        return bool(a)

    def neg(self, a):
        return False

    def lt(self, a, b) -> bool:
        return int(a) < int(b)

    def le(self, a, b) -> bool:
        return int(a) <= int(b)

    def gt(self, a, b) -> bool:
        return int(a) > int(b)

    def ge(self, a, b) -> bool:
        return int(a) >= int(b)


class _ComplexOps(KindOps):

    def _unordered(self, *args):
        raise UnsupportedOperationError("complex values have no ordering")

    lt = le = gt = ge = _unordered


_OPS: Dict[ElementKind, KindOps] = {
    ElementKind.BOOLEAN: _BooleanOps(ElementKind.BOOLEAN),
    ElementKind.INT: _IntegralOps(ElementKind.INT, wrap_int32),
    ElementKind.LONG: _IntegralOps(ElementKind.LONG, wrap_int64),
    ElementKind.DOUBLE: KindOps(ElementKind.DOUBLE),
    ElementKind.COMPLEX: _ComplexOps(ElementKind.COMPLEX),
}


def kind_ops(kind: ElementKind) -> KindOps:
    """Return the operator table for ``kind``."""
    return _OPS[kind]


def resolve_kind(kind) -> ElementKind:
    """Accept an ElementKind, its label, or a numpy dtype."""
    if isinstance(kind, ElementKind):
        return kind
    if isinstance(kind, str):
        return ElementKind.from_name(kind)
    return ElementKind.from_dtype(kind)
