"""
colmat Config - Runtime Configuration

Controls how matrix multiplication is dispatched to native dense-multiply
backends. Configuration can be set globally or overridden for the current
thread inside a ``with`` block.

Environment:
    COLMAT_BLAS:          initial backend name (auto, scipy, cblas, numpy, none)
    COLMAT_BLAS_LIBRARY:  path of a CBLAS shared library for the cblas backend
"""

from __future__ import annotations

import os
import threading
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

__all__ = [
    'BlasBackend',
    'BlasConfig',
    'ColmatConfig',
    'config',
    'get_config',
]


# =============================================================================
# Strategy Enumerations
# =============================================================================

class BlasBackend(str, Enum):
    """
    Native dense-multiply backend used by ``mmul`` on array-backed operands.
    """
    AUTO = 'auto'      # Resolve to the best available backend
    SCIPY = 'scipy'    # scipy.linalg.blas gemm routines
    CBLAS = 'cblas'    # CBLAS shared library through ctypes
    NUMPY = 'numpy'    # numpy.matmul
    NONE = 'none'      # Always use the generic loop


def _backend_from_env() -> BlasBackend:
    value = os.environ.get('COLMAT_BLAS', 'auto').strip().lower()
    try:
        return BlasBackend(value)
    except ValueError:
        return BlasBackend.AUTO


# =============================================================================
# Configuration Classes
# =============================================================================

@dataclass
class BlasConfig:
    """Configuration for native matrix multiplication."""
    backend: BlasBackend = field(default_factory=_backend_from_env)
    min_size: int = 0              # Smallest result size worth a native call
    library_path: Optional[str] = field(
        default_factory=lambda: os.environ.get('COLMAT_BLAS_LIBRARY')
    )


# =============================================================================
# Global Configuration Manager
# =============================================================================

class ColmatConfig:
    """
    Global configuration manager for colmat.

    Provides thread-local configuration with context manager support.

    Example:
        # Global configuration
        colmat.config.blas = BlasConfig(backend=BlasBackend.NUMPY)

        # Local configuration (context manager)
        with colmat.config.local(blas=BlasConfig(backend=BlasBackend.NONE)):
            c = a.mmul(b)    # generic loop here
        # Back to global config
    """

    _SECTIONS = ("blas",)

    def __init__(self):
        self._global_blas = BlasConfig()

        # Thread-local storage for context overrides
        self._local = threading.local()

        # Callbacks for config changes
        self._callbacks: Dict[str, List[Callable]] = {
            name: [] for name in self._SECTIONS
        }

    # -------------------------------------------------------------------------
    # Property Accessors (with thread-local override support)
    # -------------------------------------------------------------------------

    @property
    def blas(self) -> BlasConfig:
        """Get native multiplication configuration."""
        local = getattr(self._local, "blas", None)
        return local if local is not None else self._global_blas

    @blas.setter
    def blas(self, value: BlasConfig):
        """Set global native multiplication configuration."""
        self._global_blas = value
        self._notify("blas", value)

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    @contextmanager
    def local(self, **overrides: Any):
        """
        Override configuration sections for the current thread.

        Args:
            **overrides: ``blas=BlasConfig(...)``.
                         A plain ``blas="numpy"`` is accepted as a backend name.

        Example:
            >>> with config.local(blas="none"):
            ...     c = a.mmul(b)
        """
        previous = {}
        for name, value in overrides.items():
            if name not in self._SECTIONS:
                raise ValueError(f"Unknown config section: {name}")
            if name == "blas" and isinstance(value, (str, BlasBackend)):
                value = replace(self.blas, backend=BlasBackend(value))
            previous[name] = getattr(self._local, name, None)
            setattr(self._local, name, value)
        try:
            yield self
        finally:
            for name, value in previous.items():
                setattr(self._local, name, value)

    # -------------------------------------------------------------------------
    # Callbacks
    # -------------------------------------------------------------------------

    def on_change(self, section: str, callback: Callable) -> None:
        """Register a callback invoked with the new value of ``section``."""
        if section not in self._callbacks:
            raise ValueError(f"Unknown config section: {section}")
        self._callbacks[section].append(callback)

    def _notify(self, section: str, value: Any) -> None:
        for callback in self._callbacks.get(section, []):
            callback(value)

    # -------------------------------------------------------------------------
    # Utilities
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Reset all global sections to their defaults."""
        self.blas = BlasConfig()

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Current effective configuration as plain dictionaries."""
        out = {name: asdict(getattr(self, name)) for name in self._SECTIONS}
        out["blas"]["backend"] = BlasBackend(self.blas.backend).value
        return out

    def __repr__(self) -> str:
        return f"ColmatConfig({self.to_dict()})"


config = ColmatConfig()


def get_config() -> ColmatConfig:
    """Return the global configuration manager."""
    return config
