"""Tests for sparse_npz.core.scipy_compat: conversion to and from scipy.sparse."""

import numpy as np
import pytest
from scipy import sparse

from sparse_npz.core.scipy_compat import from_scipy, to_scipy
from sparse_npz.core.types import Bsr, Coo, Csc, Csr, Dia, SparseMatrix


class TestToScipy:
    """Tests for to_scipy()."""

    def test_formats_match(self, sample_matrix: SparseMatrix) -> None:
        m = to_scipy(sample_matrix)
        assert m.format == sample_matrix.format
        assert m.shape == sample_matrix.shape

    def test_csr_values(self, sample_csr: Csr) -> None:
        expected = np.array([[0, 1, 0, 2], [3, 0, 0, 0], [0, 0, 4, 0]], dtype=np.float64)
        np.testing.assert_array_equal(to_scipy(sample_csr).toarray(), expected)

    def test_csc_values(self, sample_csc: Csc) -> None:
        expected = np.array([[0, 0, 2, 0], [0, 0, 0, 3], [1, 0, 0, 0]], dtype=np.float64)
        np.testing.assert_array_equal(to_scipy(sample_csc).toarray(), expected)

    def test_coo_values(self, sample_coo: Coo) -> None:
        dense = to_scipy(sample_coo).toarray()
        assert dense[0, 3] == 1.0
        assert dense[2, 0] == 2.0
        assert dense[1, 1] == 3.0

    def test_dia_values(self, sample_dia: Dia) -> None:
        dense = to_scipy(sample_dia).toarray()
        # offset 0 is the first row of the block, column j holds A[j, j]
        np.testing.assert_array_equal(np.diag(dense), [0, 1, 2, 3])
        # offset -1: A[j + 1, j] = data[1, j]
        np.testing.assert_array_equal(np.diag(dense, -1), [4, 5, 6])
        # offset 2: A[j - 2, j] = data[2, j]
        np.testing.assert_array_equal(np.diag(dense, 2), [10, 11])

    def test_bsr_values(self, sample_bsr: Bsr) -> None:
        dense = to_scipy(sample_bsr).toarray()
        np.testing.assert_array_equal(dense[0:2, 0:3], np.arange(6).reshape(2, 3))
        np.testing.assert_array_equal(dense[0:2, 3:6], np.arange(6, 12).reshape(2, 3))
        np.testing.assert_array_equal(dense[2:4, 3:6], np.arange(12, 18).reshape(2, 3))
        np.testing.assert_array_equal(dense[2:4, 0:3], np.zeros((2, 3)))

    def test_not_a_record(self) -> None:
        with pytest.raises(TypeError):
            to_scipy(np.eye(2))


class TestFromScipy:
    """Tests for from_scipy()."""

    @pytest.mark.parametrize("fmt", ["coo", "csr", "csc", "dia", "bsr"])
    def test_dense_preserved(self, dense_4x6: np.ndarray, fmt: str) -> None:
        m = sparse.csr_matrix(dense_4x6).asformat(fmt)
        if fmt == "bsr":
            m = sparse.bsr_matrix(dense_4x6, blocksize=(2, 3))
        record = from_scipy(m)
        assert record.format == fmt
        np.testing.assert_array_equal(to_scipy(record).toarray(), dense_4x6)

    def test_sparse_array(self, dense_4x6: np.ndarray) -> None:
        record = from_scipy(sparse.csr_array(dense_4x6))
        assert isinstance(record, Csr)
        assert record.nnz == 6

    def test_bsr_blocksize(self, dense_4x6: np.ndarray) -> None:
        record = from_scipy(sparse.bsr_matrix(dense_4x6, blocksize=(2, 3)))
        assert isinstance(record, Bsr)
        assert record.blocksize == (2, 3)

    def test_data_copied(self, dense_4x6: np.ndarray) -> None:
        m = sparse.csr_matrix(dense_4x6)
        record = from_scipy(m)
        m.data[0] = 100.0
        assert record.data[0] == 1.0

    def test_unsupported_format(self, dense_4x6: np.ndarray) -> None:
        with pytest.raises(TypeError, match="lil"):
            from_scipy(sparse.lil_matrix(dense_4x6))

    def test_not_sparse(self, dense_4x6: np.ndarray) -> None:
        with pytest.raises(TypeError, match="ndarray"):
            from_scipy(dense_4x6)
