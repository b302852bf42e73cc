"""Core codec between raw sparse records and NPZ named arrays.

Primary API
-----------
- ``read_sparse``: decode any format, dispatching on ``format``
- ``write_sparse``: encode any record
- ``decode_coo`` ... ``decode_bsr`` / ``encode_coo`` ... ``encode_bsr``:
  per-format codecs

Records
-------
``Coo``, ``Csr``, ``Csc``, ``Dia`` and ``Bsr`` mirror the arrays scipy stores
for each format. ``to_scipy`` and ``from_scipy`` convert to and from
``scipy.sparse`` without changing the format.
"""

from .decode import decode_bsr, decode_coo, decode_csc, decode_csr, decode_dia, read_format
from .dispatch import get_decoder, get_encoder, list_formats, read_sparse, write_sparse
from .encode import encode_bsr, encode_coo, encode_csc, encode_csr, encode_dia
from .errors import (
    FormatMismatchError,
    InvalidDTypeError,
    InvalidFormatError,
    InvalidRankError,
    InvalidShapeError,
    MissingArrayError,
    SparseFormatError,
    UnsupportedOrderError,
)
from .scipy_compat import from_scipy, to_scipy
from .types import Bsr, Coo, Csc, Csr, Dia, SparseMatrix
from .widths import index_dtype, narrow_indices, widen_indices

__all__ = [
    # Dispatch
    "read_sparse",
    "write_sparse",
    "read_format",
    "get_decoder",
    "get_encoder",
    "list_formats",
    # Per-format codecs
    "decode_coo",
    "decode_csr",
    "decode_csc",
    "decode_dia",
    "decode_bsr",
    "encode_coo",
    "encode_csr",
    "encode_csc",
    "encode_dia",
    "encode_bsr",
    # Records
    "Coo",
    "Csr",
    "Csc",
    "Dia",
    "Bsr",
    "SparseMatrix",
    "to_scipy",
    "from_scipy",
    # Integer widths
    "index_dtype",
    "narrow_indices",
    "widen_indices",
    # Errors
    "SparseFormatError",
    "MissingArrayError",
    "InvalidRankError",
    "InvalidDTypeError",
    "InvalidShapeError",
    "InvalidFormatError",
    "FormatMismatchError",
    "UnsupportedOrderError",
]
