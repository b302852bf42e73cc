"""
Pytest fixtures for sparse NPZ records and hand-built archives
"""

from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest

from sparse_npz import Bsr, Coo, Csc, Csr, Dia


@pytest.fixture
def make_npz(tmp_path: Path) -> Callable[..., Path]:
    """Write arbitrary arrays to an NPZ file with numpy, bypassing the encoders.

    Arrays are written in keyword order. Fortran-contiguous arrays keep their
    order in the ``.npy`` header.
    """
    counter = iter(range(1_000_000))

    def _make(**arrays: np.ndarray) -> Path:
        path = tmp_path / f"raw_{next(counter)}.npz"
        np.savez(path, **arrays)
        return path

    return _make


@pytest.fixture
def sample_coo() -> Coo:
    """3x4 COO with entries out of row order."""
    return Coo(
        shape=(3, 4),
        data=np.array([1.0, 2.0, 3.0]),
        row=[0, 2, 1],
        col=[3, 0, 1],
    )


@pytest.fixture
def sample_csr() -> Csr:
    """[[0, 1, 0, 2], [3, 0, 0, 0], [0, 0, 4, 0]]"""
    return Csr(
        shape=(3, 4),
        data=np.array([1.0, 2.0, 3.0, 4.0]),
        indices=[1, 3, 0, 2],
        indptr=[0, 2, 3, 4],
    )


@pytest.fixture
def sample_csc() -> Csc:
    """[[0, 0, 2, 0], [0, 0, 0, 3], [1, 0, 0, 0]]"""
    return Csc(
        shape=(3, 4),
        data=np.array([1.0, 2.0, 3.0]),
        indices=[2, 0, 1],
        indptr=[0, 1, 1, 2, 3],
    )


@pytest.fixture
def sample_dia() -> Dia:
    """4x4 with the main diagonal, the first subdiagonal and the second superdiagonal."""
    return Dia(
        shape=(4, 4),
        data=np.arange(12, dtype=np.float64),
        offsets=[0, -1, 2],
    )


@pytest.fixture
def sample_bsr() -> Bsr:
    """4x6 with 2x3 blocks: two blocks in the first superrow, one in the second."""
    return Bsr(
        shape=(4, 6),
        blocksize=(2, 3),
        data=np.arange(18, dtype=np.float64),
        indices=[0, 1, 1],
        indptr=[0, 2, 3],
    )


@pytest.fixture(params=["sample_coo", "sample_csr", "sample_csc", "sample_dia", "sample_bsr"])
def sample_matrix(request: pytest.FixtureRequest) -> Coo | Csr | Csc | Dia | Bsr:
    """Each of the five sample records in turn."""
    return request.getfixturevalue(request.param)


@pytest.fixture
def dense_4x6() -> np.ndarray:
    """A dense matrix whose shape is divisible by 2x3 blocks."""
    dense = np.zeros((4, 6), dtype=np.float64)
    dense[0, 0] = 1.0
    dense[0, 4] = 2.0
    dense[1, 2] = 3.0
    dense[2, 1] = 4.0
    dense[3, 3] = 5.0
    dense[3, 5] = 6.0
    return dense
