"""Tests for sparse_npz.validation.enums"""

import pytest

from sparse_npz.validation import SparseFormat


class TestSparseFormat:
    """Tests for the SparseFormat discriminator enum."""

    def test_values(self) -> None:
        assert [f.value for f in SparseFormat] == ["coo", "csr", "csc", "dia", "bsr"]

    def test_str_comparison(self) -> None:
        assert SparseFormat.CSR == "csr"

    def test_tag(self) -> None:
        assert SparseFormat.DIA.tag == b"dia"

    @pytest.mark.parametrize("raw", [b"bsr", b"coo"])
    def test_from_tag(self, raw: bytes) -> None:
        assert SparseFormat.from_tag(raw).tag == raw

    @pytest.mark.parametrize("raw", [b"BSR", b"cs", b"csrx", b"", b"\xffsr"])
    def test_from_tag_unknown(self, raw: bytes) -> None:
        assert SparseFormat.from_tag(raw) is None
