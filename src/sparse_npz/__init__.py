"""sparse-npz - scipy sparse matrices in NPZ archives, without scipy in the loop.

Reads and writes the five formats ``scipy.sparse.save_npz`` produces (coo, csr,
csc, dia, bsr) as plain records of numpy arrays, reproducing scipy's on-disk
layout: array names and order, index widths, and its lenient validation.

Primary API
-----------
- ``load_npz``: read a sparse matrix from a path or file object
- ``save_npz``: write a sparse matrix
- ``read_sparse`` / ``write_sparse``: the same against an open archive

Example
-------
>>> from sparse_npz import Csr, load_npz, save_npz
>>> m = Csr(shape=(2, 3), data=[1.0, 2.0], indices=[0, 2], indptr=[0, 1, 2])
>>> save_npz("m.npz", m)
>>> load_npz("m.npz") == m
True
"""

from ._version import __version__
from .core import (
    Bsr,
    Coo,
    Csc,
    Csr,
    Dia,
    FormatMismatchError,
    InvalidDTypeError,
    InvalidFormatError,
    InvalidRankError,
    InvalidShapeError,
    MissingArrayError,
    SparseFormatError,
    SparseMatrix,
    UnsupportedOrderError,
    from_scipy,
    list_formats,
    read_sparse,
    to_scipy,
    write_sparse,
)
from .io import ArchiveError, ElementTypeError, NpzArchive, NpzWriter, load_npz, save_npz
from .validation import CodecConfig, SparseFormat

__all__ = [
    "__version__",
    # Primary API
    "load_npz",
    "save_npz",
    "read_sparse",
    "write_sparse",
    "list_formats",
    # Records
    "Coo",
    "Csr",
    "Csc",
    "Dia",
    "Bsr",
    "SparseMatrix",
    "SparseFormat",
    "to_scipy",
    "from_scipy",
    # Container
    "NpzArchive",
    "NpzWriter",
    "CodecConfig",
    # Errors
    "SparseFormatError",
    "MissingArrayError",
    "InvalidRankError",
    "InvalidDTypeError",
    "InvalidShapeError",
    "InvalidFormatError",
    "FormatMismatchError",
    "UnsupportedOrderError",
    "ArchiveError",
    "ElementTypeError",
]
