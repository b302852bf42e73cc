"""NPZ container access: named ``.npy`` members inside a zip archive.

An NPZ file is a zip archive in which every member ``<name>.npy`` holds one
array in the NumPy ``.npy`` format (see ``numpy.lib.format``). This module
reads and writes members one at a time, exposing the parsed header of each
array (shape, Fortran/C order, dtype) before its elements are materialized.

Arrays
------
- ``NpzArchive``: read side, ``by_name(name) -> NpyArray | None``
- ``NpyArray``: header plus ``read(dtype=None)``
- ``NpzWriter``: write side, ``write_array(name, values, shape=..., dtype=...)``

Both archive classes are context managers and close the underlying zip file on
exit. Members are written in call order, and nothing is pickled in either
direction.
"""

import io
import logging
import math
import os
import zipfile
from pathlib import Path
from typing import IO

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

log = logging.getLogger(__name__)

__all__ = [
    "ArchiveError",
    "ElementTypeError",
    "NpyArray",
    "NpzArchive",
    "NpzWriter",
]

FileLike = str | os.PathLike | IO[bytes]

_SUFFIX = ".npy"


class ArchiveError(ValueError):
    """The archive, or one of its members, is not valid NPZ content."""


class ElementTypeError(TypeError):
    """Stored elements cannot be read as the requested dtype."""

    def __init__(self, name: str, stored: np.dtype, requested: np.dtype) -> None:
        self.name = name
        self.stored = stored
        self.requested = requested
        super().__init__(f"cannot read array '{name}' of dtype {stored.str} as {requested.str}")


class NpyArray:
    """One ``.npy`` member whose header has been parsed.

    Parameters
    ----------
    name : str
        Array name inside the archive (without the ``.npy`` suffix).
    payload : bytes
        The complete ``.npy`` stream.

    Attributes
    ----------
    shape : tuple[int, ...]
        Declared dimensions.
    fortran_order : bool
        True if the elements are stored column-major.
    dtype : np.dtype
        Declared element dtype.
    """

    def __init__(self, name: str, payload: bytes) -> None:
        self.name = name
        self._payload = payload
        fp = io.BytesIO(payload)
        try:
            version = np.lib.format.read_magic(fp)
            if version == (1, 0):
                header = np.lib.format.read_array_header_1_0(fp)
            elif version == (2, 0):
                header = np.lib.format.read_array_header_2_0(fp)
            else:
                raise ArchiveError(f"unsupported .npy format version {version} for array '{name}'")
        except ValueError as e:
            if isinstance(e, ArchiveError):
                raise
            raise ArchiveError(f"array '{name}' is not a valid .npy stream: {e}") from e
        shape, fortran_order, dtype = header
        self.shape: tuple[int, ...] = tuple(int(d) for d in shape)
        self.fortran_order: bool = bool(fortran_order)
        self.dtype: np.dtype = dtype

    def __repr__(self) -> str:
        order = "F" if self.fortran_order else "C"
        return f"NpyArray(name={self.name!r}, shape={self.shape}, dtype={self.descr!r}, order={order!r})"

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        return len(self.shape)

    @property
    def descr(self) -> str:
        """The dtype descriptor string, e.g. ``'<i4'`` or ``'|S3'``."""
        return np.lib.format.dtype_to_descr(self.dtype)

    def read(self, dtype: DTypeLike | None = None) -> NDArray:
        """Materialize the elements.

        Parameters
        ----------
        dtype : DTypeLike, optional
            Element dtype to return. Only casts numpy considers safe are
            allowed. Defaults to the stored dtype in native byte order.

        Returns
        -------
        NDArray
            A C-contiguous array of shape ``self.shape``.

        Raises
        ------
        ElementTypeError
            If the stored dtype cannot be safely cast to ``dtype``.
        ArchiveError
            If the member holds pickled objects or is truncated.
        """
        if dtype is not None:
            requested = np.dtype(dtype)
            if not np.can_cast(self.dtype, requested, casting="safe"):
                raise ElementTypeError(self.name, self.dtype, requested)
        try:
            arr = np.lib.format.read_array(io.BytesIO(self._payload), allow_pickle=False)
        except ValueError as e:
            raise ArchiveError(f"cannot read array '{self.name}': {e}") from e
        if dtype is None:
            requested = arr.dtype.newbyteorder("=")
        return arr.astype(requested, order="C", copy=False)


class NpzArchive:
    """Read access to the arrays of an NPZ file.

    Parameters
    ----------
    file : str | os.PathLike | IO[bytes]
        Path to the archive, or a seekable binary file object.

    Examples
    --------
    >>> with NpzArchive("matrix.npz") as archive:
    ...     npy = archive.by_name("shape")
    ...     npy.read().tolist()
    [3, 4]
    """

    def __init__(self, file: FileLike) -> None:
        self._source = file
        try:
            self._zip = zipfile.ZipFile(file, mode="r")
        except zipfile.BadZipFile as e:
            raise ArchiveError(f"{file} is not an NPZ archive: {e}") from e
        self._members = {_array_name(n): n for n in self._zip.namelist()}

    def __enter__(self) -> "NpzArchive":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __contains__(self, name: object) -> bool:
        return name in self._members

    @property
    def names(self) -> list[str]:
        """Array names in archive order."""
        return list(self._members)

    def by_name(self, name: str) -> NpyArray | None:
        """Fetch an array and parse its header.

        Returns
        -------
        NpyArray | None
            The array, or None if the archive has no member for ``name``.
        """
        member = self._members.get(name)
        if member is None:
            return None
        log.debug(f"Reading array '{name}' from {self._source}")
        return NpyArray(name, self._zip.read(member))

    def close(self) -> None:
        """Close the underlying zip file."""
        self._zip.close()


class NpzWriter:
    """Write access to a new NPZ file.

    Parameters
    ----------
    file : str | os.PathLike | IO[bytes]
        Destination path or writable binary file object. An existing file is
        replaced.
    compressed : bool, optional
        Deflate each member (``numpy.savez_compressed`` behaviour). Defaults to
        stored members (``numpy.savez`` behaviour).
    """

    def __init__(self, file: FileLike, compressed: bool = False) -> None:
        self._source = file
        compression = zipfile.ZIP_DEFLATED if compressed else zipfile.ZIP_STORED
        self._zip = zipfile.ZipFile(file, mode="w", compression=compression, allowZip64=True)
        self._written: set[str] = set()

    def __enter__(self) -> "NpzWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def names(self) -> list[str]:
        """Array names written so far, in write order."""
        return [_array_name(n) for n in self._zip.namelist()]

    def write_array(
        self,
        name: str,
        values: ArrayLike,
        *,
        shape: tuple[int, ...],
        dtype: DTypeLike,
    ) -> None:
        """Append one array as ``<name>.npy``.

        Parameters
        ----------
        name : str
            Array name, unique within the archive.
        values : array_like
            Elements in C order. Converted to ``dtype``.
        shape : tuple[int, ...]
            Declared dimensions; ``()`` for a scalar.
        dtype : DTypeLike
            Declared element dtype.

        Raises
        ------
        ValueError
            If ``name`` was already written, or if the number of values does not
            match ``shape``.
        """
        if name in self._written:
            raise ValueError(f"array '{name}' was already written to {self._source}")
        shape = tuple(int(d) for d in shape)
        arr = np.asarray(values, dtype=dtype)
        if arr.size != math.prod(shape):
            raise ValueError(f"array '{name}' has {arr.size} elements, shape {shape} needs {math.prod(shape)}")
        arr = arr.reshape(shape, order="C")
        with self._zip.open(f"{name}{_SUFFIX}", mode="w", force_zip64=True) as fp:
            np.lib.format.write_array(fp, arr, allow_pickle=False)
        self._written.add(name)
        log.debug(f"Wrote array '{name}' {arr.dtype.str} {shape} to {self._source}")

    def close(self) -> None:
        """Finish the zip directory and close the file."""
        self._zip.close()


def _array_name(member: str) -> str:
    return member[: -len(_SUFFIX)] if member.endswith(_SUFFIX) else member


def as_path(file: FileLike) -> Path | None:
    """Return ``file`` as a Path, or None for a file object."""
    if isinstance(file, str | os.PathLike):
        return Path(file)
    return None
