"""colmat Private Kernel Bindings (_kernel).

Native dense-multiply backends for array-backed matrices.

Modules:
    - lib_loader: CBLAS shared library discovery and loading
    - types: ctypes aliases, CBLAS constants and pointer helpers
    - blas: GEMM backends (scipy, cblas, numpy) and dispatch

Usage (Internal only):
    >>> from colmat._kernel import blas
    >>> out = blas.gemm(kind, a, 2, 3, False, b, 3, 2, False, 1.0)
"""

from . import lib_loader
from . import types
