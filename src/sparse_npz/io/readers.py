"""Reading sparse matrices from NPZ files"""

import logging

from numpy.typing import DTypeLike

from sparse_npz.core.dispatch import read_sparse
from sparse_npz.core.types import SparseMatrix
from sparse_npz.io.archive import FileLike, NpzArchive, as_path

log = logging.getLogger(__name__)


def load_npz(file: FileLike, dtype: DTypeLike | None = None) -> SparseMatrix:
    """Load a sparse matrix saved by ``scipy.sparse.save_npz`` (or ``save_npz``).

    Parameters
    ----------
    file : str | os.PathLike | IO[bytes]
        Path to the ``.npz`` file, or a seekable binary file object.
    dtype : DTypeLike, optional
        Element dtype for ``data``. Defaults to the stored dtype.

    Returns
    -------
    SparseMatrix
        A ``Coo``, ``Csr``, ``Csc``, ``Dia`` or ``Bsr`` record.

    Raises
    ------
    FileNotFoundError
        If ``file`` is a path that does not exist.
    ArchiveError
        If the file is not a zip archive of ``.npy`` members.
    SparseFormatError
        If the arrays do not describe a sparse matrix.
    """
    path = as_path(file)
    if path is not None and not path.exists():
        raise FileNotFoundError(f"Cannot find file: {path}")
    with NpzArchive(file) as archive:
        matrix = read_sparse(archive, dtype=dtype)
    log.info(f"Read {matrix.format} matrix of shape {matrix.shape} with {matrix.nnz} stored elements from {file}")
    return matrix
