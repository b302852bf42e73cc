"""Error types raised while decoding a sparse matrix from an NPZ archive.

Every decode failure is a ``SparseFormatError`` carrying the array name and the
expected versus actual value, so that a malformed or foreign-produced archive
can be diagnosed from the message alone.

Encoding does not use these types. A record whose ``data`` length disagrees with
its ``offsets`` or ``blocksize`` is a caller bug and fails an ``assert``.
"""

__all__ = [
    "SparseFormatError",
    "MissingArrayError",
    "InvalidRankError",
    "InvalidDTypeError",
    "InvalidShapeError",
    "InvalidFormatError",
    "FormatMismatchError",
    "UnsupportedOrderError",
    "show_format",
]


def show_format(raw: bytes) -> str:
    """Render discriminator bytes for an error message.

    Printable ASCII is kept as is and everything else becomes ``\\xNN``.

    Examples
    --------
    >>> show_format(b"csr")
    "'csr'"
    """
    rendered = "".join(chr(b) if 0x20 <= b < 0x7F else f"\\x{b:02X}" for b in raw)
    return f"'{rendered}'"


class SparseFormatError(ValueError):
    """Base class for malformed sparse NPZ content."""


class MissingArrayError(SparseFormatError):
    """A required array is not present in the archive."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"missing array '{name}' from sparse archive")


class InvalidRankError(SparseFormatError):
    """An array has the wrong number of dimensions."""

    def __init__(self, name: str, expected: int, actual: int) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"invalid ndim for '{name}': {actual} (expected {expected})")


class InvalidDTypeError(SparseFormatError):
    """An index, offset or discriminator array has an unsupported dtype."""

    def __init__(self, name: str, descr: str) -> None:
        self.name = name
        self.descr = descr
        super().__init__(f"invalid dtype for '{name}' in sparse archive: {descr}")


class InvalidShapeError(SparseFormatError):
    """An array has the right rank but an unusable length."""

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"invalid shape for '{name}': {detail}")


class InvalidFormatError(SparseFormatError):
    """The ``format`` discriminator is not one of the known sparse formats."""

    def __init__(self, raw: bytes, detail: str | None = None) -> None:
        self.raw = raw
        self.detail = detail
        message = f"bad format: {show_format(raw)}"
        if detail is not None:
            message = f"{message} ({detail})"
        super().__init__(message)


class FormatMismatchError(SparseFormatError):
    """A per-format decoder was handed an archive of another format."""

    def __init__(self, expected: str, actual: bytes) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"wrong format: expected '{expected}', got {show_format(actual)}")


class UnsupportedOrderError(SparseFormatError):
    """A multi-dimensional array is stored in Fortran order."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"fortran order is not supported for array '{name}' in sparse archive")
