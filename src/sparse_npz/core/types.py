"""Raw record types for the five scipy sparse formats.

Each record holds exactly the arrays that ``scipy.sparse.save_npz`` stores for
its format, with index arrays widened to a canonical dtype:

- ``Coo``: ``row``, ``col`` as ``uint64``
- ``Csr`` / ``Csc``: ``indices``, ``indptr`` as ``uint64``
- ``Dia``: ``offsets`` as ``int64``
- ``Bsr``: ``indices``, ``indptr`` as ``uint64`` plus ``blocksize``

``data`` is always one-dimensional. For ``Dia`` and ``Bsr`` it is the C-order
flattening of the multi-dimensional block scipy stores; ``Dia.diagonals`` and
``Bsr.blocks`` give the reshaped views.

Round-trip hazards
------------------
scipy does not require ``indptr`` to be sorted, to start at 0, or to end at
``nnz``, and it does not require ``indices`` to be sorted within a row, column
or superrow. These records accept such values as they are, and encoding writes
them back unchanged. Code consuming a decoded record must not assume a
canonical structure.
"""

from dataclasses import dataclass, fields
from typing import ClassVar

import numpy as np
from numpy.typing import ArrayLike, NDArray

__all__ = [
    "Coo",
    "Csr",
    "Csc",
    "Dia",
    "Bsr",
    "SparseMatrix",
]

INDEX_DTYPE = np.dtype(np.uint64)
OFFSET_DTYPE = np.dtype(np.int64)


def _as_shape(shape: ArrayLike) -> tuple[int, int]:
    dims = tuple(int(x) for x in np.asarray(shape).ravel())
    if len(dims) != 2:
        raise ValueError(f"sparse matrix shape must have 2 dimensions, got {dims}")
    if min(dims) < 0:
        raise ValueError(f"sparse matrix shape must be non-negative, got {dims}")
    return dims[0], dims[1]


def _as_array(values: ArrayLike, dtype: np.dtype | None = None) -> NDArray:
    arr = np.asarray(values, dtype=dtype)
    if arr.ndim != 1:
        raise ValueError(f"expected a 1-D array, got shape {arr.shape}")
    return arr


class _SparseRecord:
    """Shared behaviour of the sparse records.

    Subclasses are dataclasses; equality compares every field, with arrays
    compared by dtype and value.
    """

    format: ClassVar[str]

    shape: tuple[int, int]
    data: NDArray

    @property
    def nnz(self) -> int:
        """Number of stored elements, explicit zeros included."""
        return int(self.data.size)

    @property
    def dtype(self) -> np.dtype:
        """Element dtype of ``data``."""
        return self.data.dtype

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        for f in fields(self):  # type: ignore[arg-type]
            mine, theirs = getattr(self, f.name), getattr(other, f.name)
            if isinstance(mine, np.ndarray):
                if mine.dtype != theirs.dtype or not np.array_equal(mine, theirs):
                    return False
            elif mine != theirs:
                return False
        return True

    __hash__ = None  # type: ignore[assignment]


@dataclass(eq=False)
class Coo(_SparseRecord):
    """Raw representation of a ``scipy.sparse.coo_matrix``.

    Parameters
    ----------
    shape : tuple[int, int]
        Dimensions ``(nrow, ncol)``.
    data : array_like
        The ``nnz`` stored elements.
    row : array_like
        Row of each element, length ``nnz``.
    col : array_like
        Column of each element, length ``nnz``.
    """

    format: ClassVar[str] = "coo"

    shape: tuple[int, int]
    data: NDArray
    row: NDArray
    col: NDArray

    def __post_init__(self) -> None:
        self.shape = _as_shape(self.shape)
        self.data = _as_array(self.data)
        self.row = _as_array(self.row, INDEX_DTYPE)
        self.col = _as_array(self.col, INDEX_DTYPE)


@dataclass(eq=False)
class Csr(_SparseRecord):
    """Raw representation of a ``scipy.sparse.csr_matrix``.

    Parameters
    ----------
    shape : tuple[int, int]
        Dimensions ``(nrow, ncol)``.
    data : array_like
        The ``nnz`` stored elements, grouped by row.
    indices : array_like
        Column of each element. scipy does not guarantee these are sorted
        within a row.
    indptr : array_like
        Typically ``nrow + 1`` nondecreasing boundaries from 0 to ``nnz``
        partitioning ``data`` and ``indices`` into rows. None of that is
        enforced.
    """

    format: ClassVar[str] = "csr"

    shape: tuple[int, int]
    data: NDArray
    indices: NDArray
    indptr: NDArray

    def __post_init__(self) -> None:
        self.shape = _as_shape(self.shape)
        self.data = _as_array(self.data)
        self.indices = _as_array(self.indices, INDEX_DTYPE)
        self.indptr = _as_array(self.indptr, INDEX_DTYPE)


@dataclass(eq=False)
class Csc(_SparseRecord):
    """Raw representation of a ``scipy.sparse.csc_matrix``.

    Same layout as ``Csr`` with rows and columns swapped: ``indices`` holds the
    row of each element and ``indptr`` typically has ``ncol + 1`` entries.
    """

    format: ClassVar[str] = "csc"

    shape: tuple[int, int]
    data: NDArray
    indices: NDArray
    indptr: NDArray

    def __post_init__(self) -> None:
        self.shape = _as_shape(self.shape)
        self.data = _as_array(self.data)
        self.indices = _as_array(self.indices, INDEX_DTYPE)
        self.indptr = _as_array(self.indptr, INDEX_DTYPE)


@dataclass(eq=False)
class Dia(_SparseRecord):
    """Raw representation of a ``scipy.sparse.dia_matrix``.

    Parameters
    ----------
    shape : tuple[int, int]
        Dimensions ``(nrow, ncol)``.
    data : array_like
        C-order data of a ``(len(offsets), length)`` block. A 2-D input is
        flattened. scipy stores each diagonal value at the index of its column,
        and ``length`` is usually one more than the rightmost occupied column.
    offsets : array_like
        Diagonal stored in each row of the block. Negative offsets are below
        the main diagonal; any order is allowed.
    """

    format: ClassVar[str] = "dia"

    shape: tuple[int, int]
    data: NDArray
    offsets: NDArray

    def __post_init__(self) -> None:
        self.shape = _as_shape(self.shape)
        self.data = np.ravel(np.asarray(self.data), order="C")
        self.offsets = _as_array(self.offsets, OFFSET_DTYPE)

    @property
    def length(self) -> int:
        """Length of each stored diagonal.

        Derived from ``data`` and ``offsets``, so it is 0 whenever there are no
        offsets. A stored ``(0, N)`` block therefore decodes with length 0 and
        is written back as ``(0, 0)``.
        """
        if self.offsets.size == 0:
            return 0
        return self.data.size // self.offsets.size

    @property
    def diagonals(self) -> NDArray:
        """``data`` viewed as ``(len(offsets), length)``."""
        return self.data.reshape(self.offsets.size, self.length)


@dataclass(eq=False)
class Bsr(_SparseRecord):
    """Raw representation of a ``scipy.sparse.bsr_matrix``.

    Parameters
    ----------
    shape : tuple[int, int]
        Dimensions ``(nrow, ncol)``, expected to be divisible by ``blocksize``.
    blocksize : tuple[int, int]
        Dimensions ``(R, C)`` of each block.
    data : array_like
        C-order data of a ``(len(indices), R, C)`` block array. A 3-D input is
        flattened.
    indices : array_like
        Supercolumn of each block, not necessarily sorted within a superrow.
    indptr : array_like
        Typically ``nrow / R + 1`` boundaries partitioning the blocks into
        superrows. Not enforced.
    """

    format: ClassVar[str] = "bsr"

    shape: tuple[int, int]
    blocksize: tuple[int, int]
    data: NDArray
    indices: NDArray
    indptr: NDArray

    def __post_init__(self) -> None:
        self.shape = _as_shape(self.shape)
        self.blocksize = _as_shape(self.blocksize)
        self.data = np.ravel(np.asarray(self.data), order="C")
        self.indices = _as_array(self.indices, INDEX_DTYPE)
        self.indptr = _as_array(self.indptr, INDEX_DTYPE)

    @property
    def nnzb(self) -> int:
        """Number of stored blocks."""
        return int(self.indices.size)

    @property
    def blocks(self) -> NDArray:
        """``data`` viewed as ``(len(indices), R, C)``."""
        return self.data.reshape(self.nnzb, *self.blocksize)


SparseMatrix = Coo | Csr | Csc | Dia | Bsr
