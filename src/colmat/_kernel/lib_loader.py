"""Dynamic loader for a CBLAS shared library.

Used by the ``cblas`` multiplication backend only. The library is located
once and cached per path.
"""

import ctypes
import ctypes.util
import logging
import os
import sys
from pathlib import Path
from typing import Dict, Optional


__all__ = ['get_lib', 'find_library', 'LibraryNotFoundError']

logger = logging.getLogger("colmat.kernel")


class LibraryNotFoundError(Exception):
    """Raised when a CBLAS library cannot be found or loaded."""
    pass


# Library names tried through ctypes.util.find_library, in order.
_CANDIDATE_NAMES = ('cblas', 'openblas', 'blas', 'mkl_rt', 'satlas', 'tatlas')

# Global library cache
_lib_cache: Dict[str, ctypes.CDLL] = {}


def _shared_suffix() -> str:
    if sys.platform == 'win32':
        return '.dll'
    if sys.platform == 'darwin':
        return '.dylib'
    return '.so'


def _search_directory(directory: Path) -> Optional[Path]:
    suffix = _shared_suffix()
    for name in _CANDIDATE_NAMES:
        for filename in (f'lib{name}{suffix}', f'{name}{suffix}'):
            candidate = directory / filename
            if candidate.exists():
                return candidate
    return None


def find_library(path: Optional[str] = None) -> Optional[str]:
    """Search for a CBLAS shared library.

    Search order:
        1. Explicit ``path`` argument (file or directory)
        2. Environment variable: COLMAT_BLAS_LIBRARY (file or directory)
        3. System library paths via ``ctypes.util.find_library``

    Args:
        path: Optional explicit location.

    Returns:
        Path or soname of the library, or None if not found.
    """
    for location in (path, os.environ.get('COLMAT_BLAS_LIBRARY')):
        if not location:
            continue
        candidate = Path(location)
        if candidate.is_dir():
            found = _search_directory(candidate)
            if found is not None:
                return str(found)
        elif candidate.exists():
            return str(candidate)

    for name in _CANDIDATE_NAMES:
        found = ctypes.util.find_library(name)
        if found:
            return found

    return None


def get_lib(path: Optional[str] = None) -> ctypes.CDLL:
    """Get a CBLAS library handle, loading it on first use.

    Args:
        path: Optional explicit library location; see :func:`find_library`.

    Returns:
        ctypes.CDLL library handle exporting ``cblas_dgemm``.

    Raises:
        LibraryNotFoundError: If no usable library can be found.

    Example:
        >>> lib = get_lib()
        >>> lib.cblas_dgemm
    """
    lib_path = find_library(path)
    if lib_path is None:
        raise LibraryNotFoundError(
            "Cannot find a CBLAS library. "
            "Install OpenBLAS or set COLMAT_BLAS_LIBRARY."
        )

    # Check cache
    if lib_path in _lib_cache:
        return _lib_cache[lib_path]

    try:
        lib = ctypes.CDLL(lib_path)
    except OSError as e:
        raise LibraryNotFoundError(f"Failed to load library from {lib_path}: {e}") from e

    for symbol in ('cblas_dgemm', 'cblas_zgemm'):
        if not hasattr(lib, symbol):
            raise LibraryNotFoundError(f"{lib_path} does not export {symbol}")

    logger.info("loaded CBLAS library %s", lib_path)
    _lib_cache[lib_path] = lib
    return lib
