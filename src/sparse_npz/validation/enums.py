from enum import Enum


class SparseFormat(str, Enum):
    """The ``format`` discriminator stored in a sparse NPZ archive"""

    COO = "coo"
    CSR = "csr"
    CSC = "csc"
    DIA = "dia"
    BSR = "bsr"

    @property
    def tag(self) -> bytes:
        """The discriminator as it is stored on disk (3 ASCII bytes)."""
        return self.value.encode("ascii")

    @classmethod
    def from_tag(cls, raw: bytes) -> "SparseFormat | None":
        """Match stored discriminator bytes case-sensitively, or return None."""
        for member in cls:
            if member.tag == raw:
                return member
        return None
