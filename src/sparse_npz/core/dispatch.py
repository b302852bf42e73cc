"""Dispatch on the ``format`` discriminator of a sparse NPZ archive.

``read_sparse`` reads ``format`` and hands the archive to the matching decoder;
``write_sparse`` picks the encoder from the record's type. The set of formats
is closed: it is fixed by what ``scipy.sparse.save_npz`` can write.
"""

from collections.abc import Callable

from numpy.typing import DTypeLike

from sparse_npz.core.decode import (
    decode_bsr,
    decode_coo,
    decode_csc,
    decode_csr,
    decode_dia,
    read_format,
)
from sparse_npz.core.encode import encode_bsr, encode_coo, encode_csc, encode_csr, encode_dia
from sparse_npz.core.errors import InvalidFormatError
from sparse_npz.core.protocols import ArraySink, ArraySource
from sparse_npz.core.types import SparseMatrix
from sparse_npz.validation.enums import SparseFormat

Decoder = Callable[..., SparseMatrix]
Encoder = Callable[[SparseMatrix, ArraySink], None]

_DECODERS: dict[SparseFormat, Decoder] = {
    SparseFormat.COO: decode_coo,
    SparseFormat.CSR: decode_csr,
    SparseFormat.CSC: decode_csc,
    SparseFormat.DIA: decode_dia,
    SparseFormat.BSR: decode_bsr,
}

_ENCODERS: dict[SparseFormat, Encoder] = {
    SparseFormat.COO: encode_coo,
    SparseFormat.CSR: encode_csr,
    SparseFormat.CSC: encode_csc,
    SparseFormat.DIA: encode_dia,
    SparseFormat.BSR: encode_bsr,
}


def _lookup(fmt: str | SparseFormat) -> SparseFormat:
    try:
        return SparseFormat(fmt)
    except ValueError as e:
        available = ", ".join(list_formats())
        raise ValueError(f"Unknown sparse format '{fmt}'. Available: {available}") from e


def get_decoder(fmt: str | SparseFormat) -> Decoder:
    """Get the decoder for a format name.

    Raises
    ------
    ValueError
        If the format is not one of ``list_formats()``.

    Examples
    --------
    >>> get_decoder("csr").__name__
    'decode_csr'
    """
    return _DECODERS[_lookup(fmt)]


def get_encoder(fmt: str | SparseFormat) -> Encoder:
    """Get the encoder for a format name.

    Raises
    ------
    ValueError
        If the format is not one of ``list_formats()``.
    """
    return _ENCODERS[_lookup(fmt)]


def list_formats() -> list[str]:
    """List the supported format names, in discriminator order."""
    return [fmt.value for fmt in SparseFormat]


def read_sparse(archive: ArraySource, dtype: DTypeLike | None = None) -> SparseMatrix:
    """Read a sparse matrix of any format, like ``scipy.sparse.load_npz``.

    Parameters
    ----------
    archive : ArraySource
        Container holding the matrix.
    dtype : DTypeLike, optional
        Element dtype for ``data``. Defaults to the stored dtype.

    Returns
    -------
    SparseMatrix
        A ``Coo``, ``Csr``, ``Csc``, ``Dia`` or ``Bsr`` record.

    Raises
    ------
    InvalidFormatError
        If ``format`` is not one of the five sparse formats.
    SparseFormatError
        For any other malformed content.
    """
    raw = read_format(archive)
    fmt = SparseFormat.from_tag(raw)
    if fmt is None:
        raise InvalidFormatError(raw)
    return _DECODERS[fmt](archive, dtype=dtype)


def write_sparse(matrix: SparseMatrix, writer: ArraySink) -> None:
    """Write a sparse matrix of any format, like ``scipy.sparse.save_npz``.

    Parameters
    ----------
    matrix : SparseMatrix
        The record to write.
    writer : ArraySink
        Destination container. ``format`` is the first array written.
    """
    get_encoder(matrix.format)(matrix, writer)
