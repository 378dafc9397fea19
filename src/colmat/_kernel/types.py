"""C type definitions for the CBLAS bindings.

Maps Python and numpy values to the ctypes expected by ``cblas_?gemm``.
"""

import ctypes
from typing import Type

import numpy as np


__all__ = [
    'c_blas_int', 'c_double', 'c_complex',
    'CBLAS_COL_MAJOR', 'CBLAS_NO_TRANS', 'CBLAS_TRANS',
    'cblas_trans', 'as_c_ptr', 'complex_scalar',
]


# =============================================================================
# C Type Aliases
# =============================================================================

# LP64 interface: 32-bit integers for dimensions and leading dimensions
c_blas_int = ctypes.c_int
c_double = ctypes.c_double


class c_complex(ctypes.Structure):
    """Double-precision complex as laid out by C99 and Fortran."""
    _fields_ = [("real", ctypes.c_double), ("imag", ctypes.c_double)]


# =============================================================================
# CBLAS Enumerations
# =============================================================================

CBLAS_ROW_MAJOR = 101
CBLAS_COL_MAJOR = 102

CBLAS_NO_TRANS = 111
CBLAS_TRANS = 112
CBLAS_CONJ_TRANS = 113


def cblas_trans(transpose: bool) -> int:
    """CBLAS transpose flag for a boolean."""
    return CBLAS_TRANS if transpose else CBLAS_NO_TRANS


# =============================================================================
# Conversion Helpers
# =============================================================================

def as_c_ptr(array: np.ndarray, ctype: Type) -> ctypes.POINTER:
    """Pointer to the first element of a contiguous numpy array.

    Args:
        array: C-contiguous numpy array. The caller keeps it alive for the
               duration of the native call.
        ctype: Element ctype of the returned pointer.

    Raises:
        ValueError: If the array is not contiguous.
    """
    if not array.flags.c_contiguous:
        raise ValueError("array must be contiguous")
    return array.ctypes.data_as(ctypes.POINTER(ctype))


def complex_scalar(value: complex) -> c_complex:
    """Pack a Python complex for pass-by-pointer scalars."""
    value = complex(value)
    return c_complex(value.real, value.imag)
