"""
Error handling for colmat.

Every failure raised by the matrix engine is a :class:`MatrixError`. Each
error family carries a numeric code (grouped in decades, like the C-style
codes of the native kernels) and also derives from the closest builtin
exception, so callers can catch ``IndexError`` or ``ZeroDivisionError``
without knowing about colmat.
"""

from __future__ import annotations

from typing import Optional, Tuple


__all__ = [
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
    'error_message',
]


# =============================================================================
# Error Codes
# =============================================================================

COLMAT_OK = 0

# General errors (1-9)
COLMAT_ERROR_UNKNOWN = 1
COLMAT_ERROR_INTERNAL = 2

# Argument errors (10-19)
COLMAT_ERROR_INVALID_ARGUMENT = 10
COLMAT_ERROR_NON_CONFORMANT = 11
COLMAT_ERROR_SIZE_MISMATCH = 12
COLMAT_ERROR_INDEX_OUT_OF_RANGE = 14

# View and mutation errors (20-29)
COLMAT_ERROR_UNSUPPORTED_VIEW_OPERATION = 20
COLMAT_ERROR_ILLEGAL_DIAGONAL_WRITE = 21
COLMAT_ERROR_UNSUPPORTED_MUTATION = 22

# Feature errors (40-49)
COLMAT_ERROR_UNSUPPORTED_OPERATION = 40

# Numerical errors (50-59)
COLMAT_ERROR_DIVISION_BY_ZERO = 51
COLMAT_ERROR_OVERFLOW = 52


_ERROR_MESSAGES = {
    COLMAT_OK: "Success",
    COLMAT_ERROR_UNKNOWN: "Unknown error",
    COLMAT_ERROR_INTERNAL: "Internal error",
    COLMAT_ERROR_INVALID_ARGUMENT: "Invalid argument",
    COLMAT_ERROR_NON_CONFORMANT: "Non-conformant shapes",
    COLMAT_ERROR_SIZE_MISMATCH: "Size mismatch",
    COLMAT_ERROR_INDEX_OUT_OF_RANGE: "Index out of range",
    COLMAT_ERROR_UNSUPPORTED_VIEW_OPERATION: "Unsupported view operation",
    COLMAT_ERROR_ILLEGAL_DIAGONAL_WRITE: "Illegal write outside the diagonal",
    COLMAT_ERROR_UNSUPPORTED_MUTATION: "Storage is read-only",
    COLMAT_ERROR_UNSUPPORTED_OPERATION: "Unsupported operation",
    COLMAT_ERROR_DIVISION_BY_ZERO: "Division by zero",
    COLMAT_ERROR_OVERFLOW: "Overflow",
}


def error_message(code: int) -> str:
    """Return the default message for an error code."""
    return _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")


# =============================================================================
# Exception Classes
# =============================================================================

class MatrixError(Exception):
    """
    Base exception for all colmat errors.

    Subclasses pin ``code``; the base class may be raised with any code.
    """

    code: int = COLMAT_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        if code is not None:
            self.code = code
        if message is None:
            message = error_message(self.code)
        self.message = message
        super().__init__(message)


class InvalidArgumentError(MatrixError, ValueError):
    """An argument is outside its domain (negative dimension, bad step...)."""
    code = COLMAT_ERROR_INVALID_ARGUMENT


class NonConformantError(MatrixError, ValueError):
    """
    Two operands have incompatible shapes.

    Attributes:
        left: ``(rows, columns)`` of the left operand, when known.
        right: ``(rows, columns)`` of the right operand, when known.
    """

    code = COLMAT_ERROR_NON_CONFORMANT

    def __init__(
        self,
        left_rows: Optional[int] = None,
        left_cols: Optional[int] = None,
        right_rows: Optional[int] = None,
        right_cols: Optional[int] = None,
        message: Optional[str] = None,
    ):
        self.left: Optional[Tuple[int, int]] = None
        self.right: Optional[Tuple[int, int]] = None
        if left_rows is not None and right_rows is not None:
            self.left = (left_rows, left_cols)
            self.right = (right_rows, right_cols)
            if message is None:
                message = (
                    f"non-conformant arguments "
                    f"({left_rows}x{left_cols} and {right_rows}x{right_cols})"
                )
        super().__init__(message)

    @classmethod
    def of(cls, left, right) -> "NonConformantError":
        """Build the error from two objects exposing ``rows``/``columns``."""
        return cls(left.rows, left.columns, right.rows, right.columns)


class SizeMismatchError(MatrixError, ValueError):
    """A vector or target shape has the wrong number of elements."""
    code = COLMAT_ERROR_SIZE_MISMATCH


class SizeOverflowError(SizeMismatchError):
    """``rows * columns`` exceeds the addressable element count."""
    code = COLMAT_ERROR_OVERFLOW


class IndexOutOfRangeError(MatrixError, IndexError):
    """A linear or 2-D index falls outside the matrix."""

    code = COLMAT_ERROR_INDEX_OUT_OF_RANGE

    @classmethod
    def linear(cls, index: int, size: int) -> "IndexOutOfRangeError":
        return cls(f"index {index} out of range for size {size}")

    @classmethod
    def cell(cls, row: int, col: int, rows: int, columns: int) -> "IndexOutOfRangeError":
        return cls(f"index ({row}, {col}) out of range for shape ({rows}, {columns})")


class UnsupportedViewOperationError(MatrixError, TypeError):
    """The operation would break the aliasing or layout of a view."""
    code = COLMAT_ERROR_UNSUPPORTED_VIEW_OPERATION


class IllegalDiagonalWriteError(UnsupportedViewOperationError):
    """A write to an off-diagonal cell of a diagonal matrix."""
    code = COLMAT_ERROR_ILLEGAL_DIAGONAL_WRITE


class UnsupportedMutationError(UnsupportedViewOperationError):
    """A write through read-only (frozen) storage."""
    code = COLMAT_ERROR_UNSUPPORTED_MUTATION


class UnsupportedOperationError(MatrixError, NotImplementedError):
    """The operation is not defined for this matrix kind."""
    code = COLMAT_ERROR_UNSUPPORTED_OPERATION


class DivisionByZeroError(MatrixError, ZeroDivisionError):
    """Division by zero in an element-wise operation."""
    code = COLMAT_ERROR_DIVISION_BY_ZERO
