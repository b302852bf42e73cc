"""Tests for sparse_npz.core.encode: the on-disk layout of each format."""

import io
import zipfile

import numpy as np
import pytest

from sparse_npz.core.encode import encode_bsr, encode_coo, encode_csc, encode_csr, encode_dia
from sparse_npz.core.types import Bsr, Coo, Csc, Csr, Dia
from sparse_npz.io import NpzArchive, NpzWriter


def _encode(encoder, matrix) -> io.BytesIO:
    buf = io.BytesIO()
    with NpzWriter(buf) as writer:
        encoder(matrix, writer)
    buf.seek(0)
    return buf


class TestLayout:
    """Array order, dtypes and shapes written by each encoder."""

    @pytest.mark.parametrize(
        "encoder, fixture, names",
        [
            (encode_coo, "sample_coo", ["format", "shape", "row", "col", "data"]),
            (encode_csr, "sample_csr", ["format", "shape", "indices", "indptr", "data"]),
            (encode_csc, "sample_csc", ["format", "shape", "indices", "indptr", "data"]),
            (encode_dia, "sample_dia", ["format", "shape", "offsets", "data"]),
            (encode_bsr, "sample_bsr", ["format", "shape", "indices", "indptr", "data"]),
        ],
    )
    def test_member_order(self, request: pytest.FixtureRequest, encoder, fixture: str, names: list[str]) -> None:
        buf = _encode(encoder, request.getfixturevalue(fixture))
        with zipfile.ZipFile(buf) as zf:
            assert zf.namelist() == [f"{name}.npy" for name in names]

    def test_format_and_shape(self, sample_csr: Csr) -> None:
        with NpzArchive(_encode(encode_csr, sample_csr)) as archive:
            fmt = archive.by_name("format")
            shape = archive.by_name("shape")
            assert fmt.shape == ()
            assert fmt.descr == "|S3"
            assert fmt.read()[()] == b"csr"
            assert shape.dtype == np.int64
            assert shape.read().tolist() == [3, 4]

    def test_small_indices_are_int32(self, sample_coo: Coo) -> None:
        with NpzArchive(_encode(encode_coo, sample_coo)) as archive:
            assert archive.by_name("row").dtype == np.int32
            assert archive.by_name("col").dtype == np.int32

    def test_int32_boundary(self) -> None:
        matrix = Coo(shape=(2**31, 2**31 + 1), data=[1.0, 2.0], row=[0, 2**31 - 1], col=[0, 2**31])
        with NpzArchive(_encode(encode_coo, matrix)) as archive:
            assert archive.by_name("row").dtype == np.int32
            assert archive.by_name("col").dtype == np.int64
            assert archive.by_name("col").read().tolist() == [0, 2**31]

    def test_index_overflow(self) -> None:
        matrix = Csr(shape=(1, 1), data=[1.0], indices=[2**63], indptr=[0, 1])
        with pytest.raises(OverflowError, match="indices"):
            _encode(encode_csr, matrix)

    def test_data_dtype_kept(self, sample_csc: Csc) -> None:
        matrix = Csc(
            shape=sample_csc.shape,
            data=sample_csc.data.astype(np.complex64),
            indices=sample_csc.indices,
            indptr=sample_csc.indptr,
        )
        with NpzArchive(_encode(encode_csc, matrix)) as archive:
            assert archive.by_name("data").dtype == np.complex64

    def test_dia_data_shape(self, sample_dia: Dia) -> None:
        with NpzArchive(_encode(encode_dia, sample_dia)) as archive:
            data = archive.by_name("data")
            offsets = archive.by_name("offsets")
            assert data.shape == (3, 4)
            assert not data.fortran_order
            np.testing.assert_array_equal(data.read(), np.arange(12).reshape(3, 4))
            assert offsets.read().tolist() == [0, -1, 2]

    def test_empty_dia(self) -> None:
        matrix = Dia(shape=(3, 3), data=np.array([], dtype=np.float64), offsets=[])
        with NpzArchive(_encode(encode_dia, matrix)) as archive:
            assert archive.by_name("data").shape == (0, 0)
            assert archive.by_name("offsets").dtype == np.int32

    def test_bsr_data_shape(self, sample_bsr: Bsr) -> None:
        with NpzArchive(_encode(encode_bsr, sample_bsr)) as archive:
            data = archive.by_name("data")
            assert data.shape == (3, 2, 3)
            np.testing.assert_array_equal(data.read()[1], [[6, 7, 8], [9, 10, 11]])

    def test_record_not_modified(self, sample_dia: Dia) -> None:
        before = Dia(shape=sample_dia.shape, data=sample_dia.data.copy(), offsets=sample_dia.offsets.copy())
        _encode(encode_dia, sample_dia)
        assert sample_dia == before
        assert sample_dia.data.shape == (12,)


class TestPreconditions:
    """Inconsistent records fail an assert before anything is written."""

    def test_dia_data_not_multiple(self) -> None:
        matrix = Dia(shape=(4, 4), data=np.arange(7.0), offsets=[0, 1])
        writer = NpzWriter(io.BytesIO())
        with pytest.raises(AssertionError):
            encode_dia(matrix, writer)
        assert writer.names == []
        writer.close()

    def test_dia_data_without_offsets(self) -> None:
        matrix = Dia(shape=(4, 4), data=np.arange(4.0), offsets=[])
        with NpzWriter(io.BytesIO()) as writer, pytest.raises(AssertionError):
            encode_dia(matrix, writer)

    def test_bsr_data_length(self) -> None:
        matrix = Bsr(shape=(4, 6), blocksize=(2, 3), data=np.arange(17.0), indices=[0, 1, 1], indptr=[0, 2, 3])
        writer = NpzWriter(io.BytesIO())
        with pytest.raises(AssertionError):
            encode_bsr(matrix, writer)
        assert writer.names == []
        writer.close()

    @pytest.mark.parametrize(
        "encoder, matrix",
        [
            (encode_coo, Coo(shape=(2, 2), data=[1.0], row=[0], col=[2**63])),
            (encode_csr, Csr(shape=(1, 1), data=[1.0], indices=[0], indptr=[0, 2**63])),
            (encode_bsr, Bsr(shape=(2, 2), blocksize=(1, 1), data=[1.0], indices=[0], indptr=[0, 2**64 - 1])),
        ],
    )
    def test_index_overflow_writes_nothing(self, encoder, matrix) -> None:
        writer = NpzWriter(io.BytesIO())
        with pytest.raises(OverflowError):
            encoder(matrix, writer)
        assert writer.names == []
        writer.close()
