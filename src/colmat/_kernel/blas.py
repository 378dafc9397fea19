"""
Dense Matrix Multiply Kernels

GEMM backends used by ``mmul`` when both operands are array backed. Every
backend works on flat column-major numpy buffers and returns a new flat
column-major buffer holding ``alpha * op(A) @ op(B)``, where ``op``
optionally transposes its operand without copying it.

Backends:
    - scipy: ``scipy.linalg.blas.dgemm`` / ``zgemm``, numpy for integers
    - cblas: ``cblas_dgemm`` / ``cblas_zgemm`` from a shared library
    - numpy: ``numpy.matmul`` for every numeric kind

Integer kinds are multiplied in int64 and narrowed afterwards, which wraps
exactly like element-by-element integer arithmetic.
"""

import ctypes
import logging
import warnings
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Optional

import numpy as np

from .._config import BlasBackend, BlasConfig, get_config
from ..matrix._dtypes import ElementKind
from .lib_loader import LibraryNotFoundError, get_lib
from .types import (
    CBLAS_COL_MAJOR,
    as_c_ptr,
    c_blas_int,
    c_double,
    cblas_trans,
    complex_scalar,
)

__all__ = [
    'GemmBackend',
    'ScipyGemm',
    'CBlasGemm',
    'NumpyGemm',
    'get_backend',
    'gemm',
]

logger = logging.getLogger("colmat.kernel")

_FLOATING = frozenset({ElementKind.DOUBLE, ElementKind.COMPLEX})
_INTEGRAL = frozenset({ElementKind.INT, ElementKind.LONG})


# =============================================================================
# Helpers
# =============================================================================

def _as_fortran(data: np.ndarray, rows: int, cols: int) -> np.ndarray:
    # Zero-copy: a flat column-major buffer is a Fortran-ordered 2-D array.
    return data.reshape((rows, cols), order='F')


def _operand(data: np.ndarray, rows: int, cols: int, transpose: bool) -> np.ndarray:
    matrix = _as_fortran(data, rows, cols)
    return matrix.T if transpose else matrix


def _matmul_integral(kind, a, a_rows, a_cols, trans_a, b, b_rows, b_cols, trans_b, alpha):
    lhs = _operand(a, a_rows, a_cols, trans_a).astype(np.int64)
    rhs = _operand(b, b_rows, b_cols, trans_b).astype(np.int64)
    product = np.matmul(lhs, rhs) * np.int64(alpha)
    return product.ravel(order='F').astype(kind.dtype)


# =============================================================================
# Backends
# =============================================================================

class GemmBackend(ABC):
    """
    A native dense-multiply implementation.

    Attributes:
        name: Backend name as used in :class:`BlasConfig`.
        kinds: Element kinds this backend can multiply.
    """

    name: str = ""
    kinds: FrozenSet[ElementKind] = frozenset()

    def supports(self, kind: ElementKind) -> bool:
        return kind in self.kinds

    @abstractmethod
    def gemm(
        self,
        kind: ElementKind,
        a: np.ndarray, a_rows: int, a_cols: int, trans_a: bool,
        b: np.ndarray, b_rows: int, b_cols: int, trans_b: bool,
        alpha,
    ) -> np.ndarray:
        """
        Compute ``alpha * op(A) @ op(B)``.

        Args:
            kind: Element kind of both operands and of the result.
            a: Flat column-major buffer of A as stored (``a_rows x a_cols``).
            trans_a: Use A transposed.
            b: Flat column-major buffer of B as stored (``b_rows x b_cols``).
            trans_b: Use B transposed.
            alpha: Scalar of ``kind``.

        Returns:
            Flat column-major buffer of the ``M x N`` result, dtype ``kind.dtype``.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ScipyGemm(GemmBackend):
    """BLAS gemm through ``scipy.linalg.blas``."""

    name = BlasBackend.SCIPY.value
    kinds = _FLOATING | _INTEGRAL

    def gemm(self, kind, a, a_rows, a_cols, trans_a, b, b_rows, b_cols, trans_b, alpha):
        if kind in _INTEGRAL:
            return _matmul_integral(kind, a, a_rows, a_cols, trans_a, b, b_rows, b_cols, trans_b, alpha)

        from scipy.linalg import blas as scipy_blas

        routine = scipy_blas.dgemm if kind is ElementKind.DOUBLE else scipy_blas.zgemm
        out = routine(
            alpha,
            _as_fortran(a, a_rows, a_cols),
            _as_fortran(b, b_rows, b_cols),
            trans_a=int(trans_a),
            trans_b=int(trans_b),
        )
        return np.asarray(out, dtype=kind.dtype).ravel(order='F')


class NumpyGemm(GemmBackend):
    """``numpy.matmul`` on Fortran-ordered views."""

    name = BlasBackend.NUMPY.value
    kinds = _FLOATING | _INTEGRAL

    def gemm(self, kind, a, a_rows, a_cols, trans_a, b, b_rows, b_cols, trans_b, alpha):
        if kind in _INTEGRAL:
            return _matmul_integral(kind, a, a_rows, a_cols, trans_a, b, b_rows, b_cols, trans_b, alpha)
        product = np.matmul(
            _operand(a, a_rows, a_cols, trans_a),
            _operand(b, b_rows, b_cols, trans_b),
        )
        return (product * alpha).astype(kind.dtype, copy=False).ravel(order='F')


# -----------------------------------------------------------------------------
# CBLAS through ctypes
# -----------------------------------------------------------------------------

def _declare_signatures(lib: ctypes.CDLL) -> None:
    """Declare the gemm signatures on one loaded library."""
    lib.cblas_dgemm.argtypes = [
        ctypes.c_int,                # order
        ctypes.c_int,                # transA
        ctypes.c_int,                # transB
        c_blas_int,                  # M
        c_blas_int,                  # N
        c_blas_int,                  # K
        c_double,                    # alpha
        ctypes.POINTER(c_double),    # A
        c_blas_int,                  # lda
        ctypes.POINTER(c_double),    # B
        c_blas_int,                  # ldb
        c_double,                    # beta
        ctypes.POINTER(c_double),    # C
        c_blas_int,                  # ldc
    ]
    lib.cblas_dgemm.restype = None

    lib.cblas_zgemm.argtypes = [
        ctypes.c_int,                # order
        ctypes.c_int,                # transA
        ctypes.c_int,                # transB
        c_blas_int,                  # M
        c_blas_int,                  # N
        c_blas_int,                  # K
        ctypes.c_void_p,             # alpha (pointer to complex)
        ctypes.c_void_p,             # A
        c_blas_int,                  # lda
        ctypes.c_void_p,             # B
        c_blas_int,                  # ldb
        ctypes.c_void_p,             # beta (pointer to complex)
        ctypes.c_void_p,             # C
        c_blas_int,                  # ldc
    ]
    lib.cblas_zgemm.restype = None


class CBlasGemm(GemmBackend):
    """
    ``cblas_dgemm`` / ``cblas_zgemm`` from a system BLAS library.

    Buffers are passed in column-major order; the leading dimension of each
    operand is its stored row count.
    """

    name = BlasBackend.CBLAS.value
    kinds = _FLOATING

    def __init__(self, library_path: Optional[str] = None):
        # Fail fast so dispatch can fall back when no library is installed.
        self._lib = get_lib(library_path)
        _declare_signatures(self._lib)

    def gemm(self, kind, a, a_rows, a_cols, trans_a, b, b_rows, b_cols, trans_b, alpha):
        m = a_cols if trans_a else a_rows
        k = a_rows if trans_a else a_cols
        n = b_rows if trans_b else b_cols

        a = np.ascontiguousarray(a, dtype=kind.dtype)
        b = np.ascontiguousarray(b, dtype=kind.dtype)
        c = np.zeros(m * n, dtype=kind.dtype)
        lda, ldb, ldc = max(1, a_rows), max(1, b_rows), max(1, m)

        if kind is ElementKind.DOUBLE:
            self._lib.cblas_dgemm(
                CBLAS_COL_MAJOR, cblas_trans(trans_a), cblas_trans(trans_b),
                m, n, k,
                float(alpha),
                as_c_ptr(a, c_double), lda,
                as_c_ptr(b, c_double), ldb,
                0.0,
                as_c_ptr(c, c_double), ldc,
            )
        else:
            c_alpha = complex_scalar(alpha)
            c_beta = complex_scalar(0j)
            self._lib.cblas_zgemm(
                CBLAS_COL_MAJOR, cblas_trans(trans_a), cblas_trans(trans_b),
                m, n, k,
                ctypes.addressof(c_alpha),
                a.ctypes.data, lda,
                b.ctypes.data, ldb,
                ctypes.addressof(c_beta),
                c.ctypes.data, ldc,
            )
        return c


# =============================================================================
# Dispatch
# =============================================================================

_backend_cache: Dict[tuple, Optional[GemmBackend]] = {}


def get_backend(cfg: Optional[BlasConfig] = None) -> Optional[GemmBackend]:
    """
    Resolve the configured backend, or None for the generic loop.

    ``AUTO`` resolves to scipy. A cblas backend whose library cannot be
    loaded resolves to None with a warning, once per library path.
    """
    if cfg is None:
        cfg = get_config().blas

    choice = BlasBackend(cfg.backend)
    if choice is BlasBackend.NONE:
        return None
    if choice is BlasBackend.AUTO:
        choice = BlasBackend.SCIPY

    key = (choice, cfg.library_path)
    if key in _backend_cache:
        return _backend_cache[key]

    if choice is BlasBackend.SCIPY:
        backend = ScipyGemm()
    elif choice is BlasBackend.NUMPY:
        backend = NumpyGemm()
    else:
        try:
            backend = CBlasGemm(cfg.library_path)
        except LibraryNotFoundError as e:
            warnings.warn(f"colmat CBLAS backend not ready: {e}")
            backend = None

    _backend_cache[key] = backend
    return backend


def gemm(
    kind: ElementKind,
    a: np.ndarray, a_rows: int, a_cols: int, trans_a: bool,
    b: np.ndarray, b_rows: int, b_cols: int, trans_b: bool,
    alpha,
) -> Optional[np.ndarray]:
    """
    Multiply two array-backed operands natively if a backend accepts them.

    Returns:
        Flat column-major result buffer, or None when no configured backend
        handles ``kind`` (the caller then runs the generic loop).

    Example:
        >>> a = np.array([1., 4., 2., 5., 3., 6.])          # [[1,2,3],[4,5,6]]
        >>> b = np.array([7., 9., 11., 8., 10., 12.])        # [[7,8],[9,10],[11,12]]
        >>> gemm(ElementKind.DOUBLE, a, 2, 3, False, b, 3, 2, False, 1.0)
        array([ 58., 139.,  64., 154.])
    """
    cfg = get_config().blas
    backend = get_backend(cfg)
    if backend is None or not backend.supports(kind):
        logger.debug("no native gemm for %s (backend=%s)", kind.label, cfg.backend)
        return None

    m = a_cols if trans_a else a_rows
    k = a_rows if trans_a else a_cols
    n = b_rows if trans_b else b_cols
    if m * n < cfg.min_size:
        return None
    if m == 0 or n == 0 or k == 0:
        return np.zeros(m * n, dtype=kind.dtype)

    logger.debug(
        "gemm via %s: %s %dx%d%s * %dx%d%s",
        backend.name, kind.label,
        a_rows, a_cols, "^T" if trans_a else "",
        b_rows, b_cols, "^T" if trans_b else "",
    )
    return backend.gemm(kind, a, a_rows, a_cols, trans_a, b, b_rows, b_cols, trans_b, alpha)
