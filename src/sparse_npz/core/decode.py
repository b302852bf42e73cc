"""Per-format decoders for sparse matrices saved by ``scipy.sparse.save_npz``.

Array layout per format
-----------------------
=======  ============================================  =====================
format   arrays (after ``format`` and ``shape``)        ``data`` rank
=======  ============================================  =====================
``coo``  ``row``, ``col``                               1
``csr``  ``indices``, ``indptr``                        1
``csc``  ``indices``, ``indptr``                        1
``dia``  ``offsets``                                    2 ``(ndiag, length)``
``bsr``  ``indices``, ``indptr``                        3 ``(nnzb, R, C)``
=======  ============================================  =====================

Each decoder checks that the archive's ``format`` matches its own format, even
though ``read_sparse`` has already dispatched on it, so that direct calls are
safe.

Validation is deliberately as lenient as scipy's own ``load_npz``: ranks and
index dtypes are checked, but ``indptr`` bounds, index sortedness and the
divisibility of ``shape`` by the block size are not.
"""

from numpy.typing import DTypeLike, NDArray

from sparse_npz.core.errors import (
    FormatMismatchError,
    InvalidDTypeError,
    InvalidFormatError,
    InvalidRankError,
    InvalidShapeError,
    MissingArrayError,
    UnsupportedOrderError,
)
from sparse_npz.core.protocols import ArraySource, TypedArray
from sparse_npz.core.types import Bsr, Coo, Csc, Csr, Dia
from sparse_npz.core.widths import is_index_dtype, widen_indices
from sparse_npz.validation.enums import SparseFormat

__all__ = [
    "read_format",
    "decode_coo",
    "decode_csr",
    "decode_csc",
    "decode_dia",
    "decode_bsr",
]


def read_format(archive: ArraySource) -> bytes:
    """Read the raw ``format`` discriminator.

    Parameters
    ----------
    archive : ArraySource
        Container to read from.

    Returns
    -------
    bytes
        The stored bytes, e.g. ``b"csr"``.

    Raises
    ------
    MissingArrayError
        If there is no ``format`` array.
    InvalidFormatError
        If ``format`` is not zero-dimensional.
    InvalidDTypeError
        If ``format`` is not a byte string.
    """
    npy = archive.by_name("format")
    if npy is None:
        raise MissingArrayError("format")
    if npy.ndim != 0:
        raw = npy.read().tobytes()
        raise InvalidFormatError(raw, detail=f"expected a 0-d array, got ndim {npy.ndim}")
    if npy.dtype.kind != "S":
        raise InvalidDTypeError("format", npy.descr)
    return npy.read().tobytes()


def _expect_format(archive: ArraySource, expected: SparseFormat) -> None:
    raw = read_format(archive)
    if raw != expected.tag:
        raise FormatMismatchError(expected.value, raw)


def _fetch(archive: ArraySource, name: str, ndim: int) -> TypedArray:
    npy = archive.by_name(name)
    if npy is None:
        raise MissingArrayError(name)
    if npy.ndim != ndim:
        raise InvalidRankError(name, ndim, npy.ndim)
    return npy


def _extract_indices(archive: ArraySource, name: str, *, signed: bool = False) -> NDArray:
    """Read a 1-D int32 or int64 array, widened to uint64 (or int64 if ``signed``)."""
    npy = _fetch(archive, name, 1)
    if not is_index_dtype(npy.dtype):
        raise InvalidDTypeError(name, npy.descr)
    return widen_indices(npy.read(), signed=signed)


def _extract_shape(archive: ArraySource) -> tuple[int, int]:
    shape = _extract_indices(archive, "shape")
    if shape.size != 2:
        raise InvalidShapeError("shape", f"expected 2 elements, got {shape.size}")
    return int(shape[0]), int(shape[1])


def _extract_coords(archive: ArraySource) -> tuple[NDArray, NDArray]:
    """Read the ``(2, nnz)`` ``coords`` array newer scipy releases use for COO."""
    npy = _fetch(archive, "coords", 2)
    if not is_index_dtype(npy.dtype):
        raise InvalidDTypeError("coords", npy.descr)
    if npy.shape[0] != 2:
        raise InvalidShapeError("coords", f"expected 2 rows, got {npy.shape[0]}")
    coords = widen_indices(npy.read(), signed=False)
    return coords[0], coords[1]


def _extract_data(
    archive: ArraySource,
    ndim: int,
    dtype: DTypeLike | None,
) -> tuple[NDArray, tuple[int, ...]]:
    """Read ``data`` flattened in C order, along with its declared shape.

    Element conversion errors come from the array layer and are not wrapped.
    """
    npy = _fetch(archive, "data", ndim)
    if ndim > 1 and npy.fortran_order:
        raise UnsupportedOrderError("data")
    return npy.read(dtype).reshape(-1), npy.shape


def decode_coo(archive: ArraySource, dtype: DTypeLike | None = None) -> Coo:
    """Read a ``coo_matrix`` saved by ``scipy.sparse.save_npz``.

    Parameters
    ----------
    archive : ArraySource
        Container holding the matrix.
    dtype : DTypeLike, optional
        Element dtype for ``data``. Defaults to the stored dtype.

    Returns
    -------
    Coo
        The decoded record.
    """
    _expect_format(archive, SparseFormat.COO)
    shape = _extract_shape(archive)
    if "row" not in archive and "coords" in archive:
        row, col = _extract_coords(archive)
    else:
        row = _extract_indices(archive, "row")
        col = _extract_indices(archive, "col")
    data, _ = _extract_data(archive, 1, dtype)
    return Coo(shape=shape, data=data, row=row, col=col)


def decode_csr(archive: ArraySource, dtype: DTypeLike | None = None) -> Csr:
    """Read a ``csr_matrix`` saved by ``scipy.sparse.save_npz``."""
    _expect_format(archive, SparseFormat.CSR)
    shape = _extract_shape(archive)
    indices = _extract_indices(archive, "indices")
    indptr = _extract_indices(archive, "indptr")
    data, _ = _extract_data(archive, 1, dtype)
    return Csr(shape=shape, data=data, indices=indices, indptr=indptr)


def decode_csc(archive: ArraySource, dtype: DTypeLike | None = None) -> Csc:
    """Read a ``csc_matrix`` saved by ``scipy.sparse.save_npz``."""
    _expect_format(archive, SparseFormat.CSC)
    shape = _extract_shape(archive)
    indices = _extract_indices(archive, "indices")
    indptr = _extract_indices(archive, "indptr")
    data, _ = _extract_data(archive, 1, dtype)
    return Csc(shape=shape, data=data, indices=indices, indptr=indptr)


def decode_dia(archive: ArraySource, dtype: DTypeLike | None = None) -> Dia:
    """Read a ``dia_matrix`` saved by ``scipy.sparse.save_npz``.

    The diagonal length is not stored separately; it is the second dimension
    of ``data``. With no offsets the record cannot carry it, and a ``(0, N)``
    block comes back with ``length`` 0.
    """
    _expect_format(archive, SparseFormat.DIA)
    shape = _extract_shape(archive)
    offsets = _extract_indices(archive, "offsets", signed=True)
    data, _ = _extract_data(archive, 2, dtype)
    return Dia(shape=shape, data=data, offsets=offsets)


def decode_bsr(archive: ArraySource, dtype: DTypeLike | None = None) -> Bsr:
    """Read a ``bsr_matrix`` saved by ``scipy.sparse.save_npz``.

    ``blocksize`` is taken from the last two dimensions of ``data``. It is not
    checked against ``shape``.
    """
    _expect_format(archive, SparseFormat.BSR)
    shape = _extract_shape(archive)
    indices = _extract_indices(archive, "indices")
    indptr = _extract_indices(archive, "indptr")
    data, data_shape = _extract_data(archive, 3, dtype)
    return Bsr(
        shape=shape,
        blocksize=(data_shape[1], data_shape[2]),
        data=data,
        indices=indices,
        indptr=indptr,
    )
