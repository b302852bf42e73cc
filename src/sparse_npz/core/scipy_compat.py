"""Conversion between the raw records and ``scipy.sparse`` matrices.

Conversions keep the format: a ``Csr`` becomes a ``csr_matrix`` and a
``bsr_matrix`` becomes a ``Bsr``. Changing formats is left to scipy.

scipy validates some of the structure on construction (for instance the length
of ``indptr``), so ``to_scipy`` can reject a record that this package reads
and writes without complaint.
"""

import numpy as np
from scipy import sparse

from sparse_npz.core.types import Bsr, Coo, Csc, Csr, Dia, SparseMatrix

__all__ = ["to_scipy", "from_scipy"]


def _as_scipy_index(values: np.ndarray) -> np.ndarray:
    return values.astype(np.int64)


def to_scipy(matrix: SparseMatrix) -> sparse.spmatrix:
    """Build the scipy matrix of the same format as ``matrix``.

    Parameters
    ----------
    matrix : SparseMatrix
        A ``Coo``, ``Csr``, ``Csc``, ``Dia`` or ``Bsr`` record.

    Returns
    -------
    sparse.spmatrix
        A ``coo_matrix``, ``csr_matrix``, ``csc_matrix``, ``dia_matrix`` or
        ``bsr_matrix``.
    """
    if isinstance(matrix, Coo):
        return sparse.coo_matrix(
            (matrix.data, (_as_scipy_index(matrix.row), _as_scipy_index(matrix.col))),
            shape=matrix.shape,
        )
    if isinstance(matrix, Csr):
        return sparse.csr_matrix(
            (matrix.data, _as_scipy_index(matrix.indices), _as_scipy_index(matrix.indptr)),
            shape=matrix.shape,
        )
    if isinstance(matrix, Csc):
        return sparse.csc_matrix(
            (matrix.data, _as_scipy_index(matrix.indices), _as_scipy_index(matrix.indptr)),
            shape=matrix.shape,
        )
    if isinstance(matrix, Dia):
        return sparse.dia_matrix((matrix.diagonals, matrix.offsets), shape=matrix.shape)
    if isinstance(matrix, Bsr):
        return sparse.bsr_matrix(
            (matrix.blocks, _as_scipy_index(matrix.indices), _as_scipy_index(matrix.indptr)),
            shape=matrix.shape,
            blocksize=matrix.blocksize,
        )
    raise TypeError(f"Expected a sparse record, got {type(matrix).__name__}")


def from_scipy(matrix: sparse.spmatrix | sparse.sparray) -> SparseMatrix:
    """Build the raw record for a scipy sparse matrix or array.

    Parameters
    ----------
    matrix : sparse.spmatrix | sparse.sparray
        A two-dimensional scipy sparse matrix in ``coo``, ``csr``, ``csc``,
        ``dia`` or ``bsr`` format.

    Returns
    -------
    SparseMatrix
        The record. ``data`` is copied and index arrays are converted to their
        canonical dtypes, so the record does not share memory with ``matrix``
        except for index arrays that already had the canonical dtype.

    Raises
    ------
    TypeError
        If ``matrix`` is not a scipy sparse object, or is in another format
        (``lil``, ``dok``, ...).
    """
    if not sparse.issparse(matrix):
        raise TypeError(f"Expected a scipy sparse matrix, got {type(matrix).__name__}")
    fmt = matrix.format
    if fmt == "coo":
        return Coo(shape=matrix.shape, data=matrix.data.copy(), row=matrix.row, col=matrix.col)
    if fmt == "csr":
        return Csr(shape=matrix.shape, data=matrix.data.copy(), indices=matrix.indices, indptr=matrix.indptr)
    if fmt == "csc":
        return Csc(shape=matrix.shape, data=matrix.data.copy(), indices=matrix.indices, indptr=matrix.indptr)
    if fmt == "dia":
        return Dia(shape=matrix.shape, data=matrix.data.copy(), offsets=matrix.offsets)
    if fmt == "bsr":
        return Bsr(
            shape=matrix.shape,
            blocksize=matrix.blocksize,
            data=matrix.data.copy(),
            indices=matrix.indices,
            indptr=matrix.indptr,
        )
    raise TypeError(f"Unsupported scipy sparse format '{fmt}'. Convert to coo, csr, csc, dia or bsr first")
