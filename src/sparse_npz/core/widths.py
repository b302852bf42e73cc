"""Integer width selection for index and offset arrays.

scipy stores ``row``, ``col``, ``indices``, ``indptr`` and ``offsets`` as
either int32 or int64, depending on how large the matrix is. Reading accepts
both widths, whatever width this package would have picked itself. Writing
picks int32 when every value of the array fits, and int64 for the whole array
otherwise.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

__all__ = [
    "SMALL_INDEX_DTYPE",
    "LARGE_INDEX_DTYPE",
    "is_index_dtype",
    "index_dtype",
    "narrow_indices",
    "widen_indices",
]

SMALL_INDEX_DTYPE = np.dtype(np.int32)
LARGE_INDEX_DTYPE = np.dtype(np.int64)

_SMALL = np.iinfo(SMALL_INDEX_DTYPE)
_LARGE = np.iinfo(LARGE_INDEX_DTYPE)


def is_index_dtype(dtype: np.dtype) -> bool:
    """True for 4- or 8-byte signed integers of either byte order."""
    return dtype.kind == "i" and dtype.itemsize in (4, 8)


def index_dtype(values: ArrayLike) -> np.dtype:
    """Choose the on-disk dtype for an index or offset array.

    Parameters
    ----------
    values : array_like
        Integer values, signed or unsigned.

    Returns
    -------
    np.dtype
        ``int32`` if every value lies in the int32 range (empty arrays
        included), else ``int64``.

    Examples
    --------
    >>> index_dtype([0, 2**31 - 1])
    dtype('int32')
    >>> index_dtype([0, 2**31])
    dtype('int64')
    """
    arr = np.asarray(values)
    if arr.size == 0:
        return SMALL_INDEX_DTYPE
    # Python ints so that uint64 and int64 extremes compare exactly
    lo, hi = int(arr.min()), int(arr.max())
    if _SMALL.min <= lo and hi <= _SMALL.max:
        return SMALL_INDEX_DTYPE
    return LARGE_INDEX_DTYPE


def narrow_indices(values: ArrayLike, name: str) -> NDArray:
    """Convert an index or offset array to the dtype chosen by ``index_dtype``.

    Parameters
    ----------
    values : array_like
        Integer values to store.
    name : str
        Array name, used in the error message.

    Returns
    -------
    NDArray
        ``values`` as int32 or int64.

    Raises
    ------
    OverflowError
        If a value does not fit in int64 (only possible for uint64 input).
    """
    arr = np.asarray(values)
    if arr.size and int(arr.max()) > _LARGE.max:
        raise OverflowError(f"value {int(arr.max())} in '{name}' does not fit in a 64-bit signed integer")
    return arr.astype(index_dtype(arr))


def widen_indices(values: NDArray, *, signed: bool) -> NDArray:
    """Widen an int32 or int64 array read from disk to the canonical dtype.

    Offsets are genuinely signed and become int64. Indices are assumed
    non-negative and become uint64; a negative stored index wraps, as a
    C-style cast would.
    """
    return values.astype(np.int64 if signed else np.uint64)
