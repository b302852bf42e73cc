"""Writing sparse matrices to NPZ files"""

import logging
import os
from pathlib import Path

from sparse_npz.core.dispatch import write_sparse
from sparse_npz.core.types import SparseMatrix
from sparse_npz.io.archive import FileLike, NpzWriter, as_path

log = logging.getLogger(__name__)


def npz_path(path: str | os.PathLike) -> Path:
    """Append ``.npz`` to ``path`` unless it already ends with it, as ``numpy.savez`` does."""
    path = Path(path)
    if path.suffix != ".npz":
        path = path.with_name(f"{path.name}.npz")
    return path


def save_npz(file: FileLike, matrix: SparseMatrix, compressed: bool = True) -> None:
    """Save a sparse matrix in the layout of ``scipy.sparse.save_npz``.

    When ``file`` is a path, the archive is written next to it under a
    temporary name and moved into place once complete, so a failed write
    never leaves a partial ``.npz`` behind.

    Parameters
    ----------
    file : str | os.PathLike | IO[bytes]
        Destination path (``.npz`` is appended if missing) or writable binary
        file object.
    matrix : SparseMatrix
        The record to save.
    compressed : bool, optional
        Deflate the archive members. Defaults to True, as in scipy.
    """
    path = as_path(file)
    if path is None:
        with NpzWriter(file, compressed=compressed) as writer:
            write_sparse(matrix, writer)
        log.info(f"Wrote {matrix.format} matrix of shape {matrix.shape} to file object")
        return

    path = npz_path(path)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with NpzWriter(tmp_path, compressed=compressed) as writer:
            write_sparse(matrix, writer)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    log.info(f"Wrote {matrix.format} matrix of shape {matrix.shape} to {path}")
