"""
Pytest configuration and shared fixtures for colmat tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

import colmat
from colmat import (
    DenseMatrix,
    HashMatrix,
    BlasBackend,
    BlasConfig,
    INT,
    LONG,
    DOUBLE,
    COMPLEX,
    BOOLEAN,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts from the default configuration."""
    colmat.config.blas = BlasConfig(backend=BlasBackend.AUTO, library_path=None)
    yield
    colmat.config.reset()


@pytest.fixture
def requires_cblas():
    """Skip test if no CBLAS library can be loaded."""
    from colmat._kernel.lib_loader import get_lib, LibraryNotFoundError

    try:
        get_lib()
    except LibraryNotFoundError as e:
        pytest.skip(f"CBLAS not available: {e}")


@pytest.fixture
def int_2x3():
    """2x3 int matrix.

    Matrix:
    [[1, 2, 3],
     [4, 5, 6]]
    """
    return DenseMatrix.from_rows([[1, 2, 3], [4, 5, 6]], kind=INT)


@pytest.fixture
def int_3x2():
    """3x2 int matrix.

    Matrix:
    [[ 7,  8],
     [ 9, 10],
     [11, 12]]
    """
    return DenseMatrix.from_rows([[7, 8], [9, 10], [11, 12]], kind=INT)


@pytest.fixture
def double_3x3():
    """3x3 double matrix holding 0..8 in column-major order."""
    return DenseMatrix.from_column_order(3, 3, [float(v) for v in range(9)], kind=DOUBLE)


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture(params=["dense", "hash"])
def storage_factory(request):
    """Factory building an empty matrix of one storage family."""
    def make(rows, columns, kind=DOUBLE):
        if request.param == "hash":
            return HashMatrix(rows, columns, kind)
        return DenseMatrix(rows, columns, kind)
    return make


# =============================================================================
# Helper Functions
# =============================================================================

def random_dense(rng, rows, columns, kind=DOUBLE):
    """Dense matrix with small random values of ``kind``."""
    if kind is COMPLEX:
        values = rng.integers(-5, 6, size=(rows, columns)) + 1j * rng.integers(-5, 6, size=(rows, columns))
    elif kind is BOOLEAN:
        values = rng.integers(0, 2, size=(rows, columns)).astype(bool)
    elif kind in (INT, LONG):
        values = rng.integers(-9, 10, size=(rows, columns))
    else:
        values = rng.standard_normal((rows, columns))
    return DenseMatrix.from_numpy(np.asarray(values), kind=kind)


def fill_like(target, source):
    """Copy every value of ``source`` into ``target`` cell by cell."""
    for i in range(source.rows):
        for j in range(source.columns):
            target.set(i, j, source.get(i, j))
    return target


def assert_matrix_close(actual, expected, rtol=1e-10, atol=1e-12):
    """Assert a matrix equals an array or matrix element-wise."""
    if hasattr(expected, 'to_numpy'):
        expected = expected.to_numpy()
    assert actual.shape == tuple(np.shape(expected))
    np.testing.assert_allclose(actual.to_numpy(), expected, rtol=rtol, atol=atol)
