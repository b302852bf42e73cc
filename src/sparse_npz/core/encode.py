"""Per-format encoders producing the archive layout of ``scipy.sparse.save_npz``.

Arrays are written in a fixed order: ``format``, ``shape``, the index arrays of
the format, then ``data``. ``format`` is a zero-dimensional ``|S3`` byte
string, ``shape`` is two int64 values, and each index array is int32 when all
of its values fit and int64 otherwise.

The encoders do not validate records beyond what is needed to give ``data`` a
shape. A ``Dia`` whose ``data`` length is not a multiple of ``len(offsets)``,
or a ``Bsr`` whose ``data`` length is not ``len(indices) * R * C``, fails an
``assert``: such a record was built incorrectly by the caller, and writing it
would truncate or misalign the data. Index widths are chosen before anything is
written, so an index that does not fit in int64 leaves the writer empty.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from sparse_npz.core.protocols import ArraySink
from sparse_npz.core.types import Bsr, Coo, Csc, Csr, Dia
from sparse_npz.core.widths import narrow_indices
from sparse_npz.validation.enums import SparseFormat

__all__ = [
    "encode_coo",
    "encode_csr",
    "encode_csc",
    "encode_dia",
    "encode_bsr",
]

SHAPE_DTYPE = np.dtype(np.int64)


def _write_format(writer: ArraySink, fmt: SparseFormat) -> None:
    writer.write_array("format", fmt.tag, shape=(), dtype="|S3")


def _write_shape(writer: ArraySink, shape: tuple[int, int]) -> None:
    assert len(shape) == 2, f"sparse matrix shape must have 2 dimensions, got {shape}"
    writer.write_array("shape", shape, shape=(2,), dtype=SHAPE_DTYPE)


def _narrow_all(**arrays: ArrayLike) -> dict[str, NDArray]:
    # every width check runs before the first write
    return {name: narrow_indices(values, name) for name, values in arrays.items()}


def _write_indices(writer: ArraySink, indices: dict[str, NDArray]) -> None:
    for name, arr in indices.items():
        writer.write_array(name, arr, shape=arr.shape, dtype=arr.dtype)


def _write_data(writer: ArraySink, data: NDArray, shape: tuple[int, ...]) -> None:
    writer.write_array("data", data, shape=shape, dtype=data.dtype)


def encode_coo(matrix: Coo, writer: ArraySink) -> None:
    """Write a ``Coo`` record the way ``scipy.sparse.save_npz`` writes a ``coo_matrix``.

    Parameters
    ----------
    matrix : Coo
        The record to write. It is not modified.
    writer : ArraySink
        Destination container.
    """
    indices = _narrow_all(row=matrix.row, col=matrix.col)
    _write_format(writer, SparseFormat.COO)
    _write_shape(writer, matrix.shape)
    _write_indices(writer, indices)
    _write_data(writer, matrix.data, (matrix.data.size,))


def encode_csr(matrix: Csr, writer: ArraySink) -> None:
    """Write a ``Csr`` record the way ``scipy.sparse.save_npz`` writes a ``csr_matrix``."""
    indices = _narrow_all(indices=matrix.indices, indptr=matrix.indptr)
    _write_format(writer, SparseFormat.CSR)
    _write_shape(writer, matrix.shape)
    _write_indices(writer, indices)
    _write_data(writer, matrix.data, (matrix.data.size,))


def encode_csc(matrix: Csc, writer: ArraySink) -> None:
    """Write a ``Csc`` record the way ``scipy.sparse.save_npz`` writes a ``csc_matrix``."""
    indices = _narrow_all(indices=matrix.indices, indptr=matrix.indptr)
    _write_format(writer, SparseFormat.CSC)
    _write_shape(writer, matrix.shape)
    _write_indices(writer, indices)
    _write_data(writer, matrix.data, (matrix.data.size,))


def encode_dia(matrix: Dia, writer: ArraySink) -> None:
    """Write a ``Dia`` record the way ``scipy.sparse.save_npz`` writes a ``dia_matrix``.

    ``data`` is written with shape ``(len(offsets), length)``, one row per
    diagonal. That is the shape of ``dia_matrix.data`` and the one
    ``scipy.sparse.load_npz`` reads back, rather than the transposed
    ``(length, len(offsets))`` block.

    Raises
    ------
    AssertionError
        If ``len(data)`` is not a multiple of ``len(offsets)``.
    """
    ndiag = matrix.offsets.size
    if ndiag == 0:
        assert matrix.data.size == 0, f"dia data has {matrix.data.size} elements but there are no offsets"
    else:
        assert matrix.data.size % ndiag == 0, (
            f"dia data length {matrix.data.size} is not a multiple of the {ndiag} offsets"
        )
    indices = _narrow_all(offsets=matrix.offsets)
    _write_format(writer, SparseFormat.DIA)
    _write_shape(writer, matrix.shape)
    _write_indices(writer, indices)
    _write_data(writer, matrix.data, (ndiag, matrix.length))


def encode_bsr(matrix: Bsr, writer: ArraySink) -> None:
    """Write a ``Bsr`` record the way ``scipy.sparse.save_npz`` writes a ``bsr_matrix``.

    ``data`` is written with shape ``(len(indices), R, C)``.

    Raises
    ------
    AssertionError
        If ``len(data) != len(indices) * R * C``.
    """
    nrow_block, ncol_block = matrix.blocksize
    expected = matrix.nnzb * nrow_block * ncol_block
    assert matrix.data.size == expected, (
        f"bsr data length {matrix.data.size} does not match {matrix.nnzb} blocks of {nrow_block}x{ncol_block}"
    )
    indices = _narrow_all(indices=matrix.indices, indptr=matrix.indptr)
    _write_format(writer, SparseFormat.BSR)
    _write_shape(writer, matrix.shape)
    _write_indices(writer, indices)
    _write_data(writer, matrix.data, (matrix.nnzb, nrow_block, ncol_block))
