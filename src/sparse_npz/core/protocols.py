"""Interfaces the codec expects from the named-array container.

``sparse_npz.io.archive`` provides the NPZ implementations. Anything else that
can hand out typed arrays by name (or accept them) can be plugged into the
decoders and encoders the same way.
"""

from typing import Protocol

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray


class TypedArray(Protocol):
    """One stored array: its header, plus a way to materialize the elements."""

    name: str
    shape: tuple[int, ...]
    fortran_order: bool
    dtype: np.dtype

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        ...

    @property
    def descr(self) -> str:
        """The dtype descriptor as written in the header (e.g. ``'<i4'``)."""
        ...

    def read(self, dtype: DTypeLike | None = None) -> NDArray:
        """Return the elements in C order, cast to ``dtype`` when given."""
        ...


class ArraySource(Protocol):
    """Read side of a named-array container."""

    def __contains__(self, name: object) -> bool: ...

    def by_name(self, name: str) -> TypedArray | None:
        """Fetch an array, or None if the container has no array of that name."""
        ...


class ArraySink(Protocol):
    """Write side of a named-array container."""

    def write_array(
        self,
        name: str,
        values: ArrayLike,
        *,
        shape: tuple[int, ...],
        dtype: DTypeLike,
    ) -> None:
        """Append an array of the given shape and dtype, elements in C order."""
        ...
