"""CLI entrypoint for inspecting and rewriting sparse NPZ files.

Usage:
    python -m sparse_npz info <path> [--dtype DTYPE]
    python -m sparse_npz rewrite <src> <dst> [--no-compress] [--dtype DTYPE]
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .core import SparseFormatError, read_sparse
from .core.types import Bsr, Dia
from .io import ArchiveError, ElementTypeError, NpzArchive, load_npz, save_npz
from .io.writers import npz_path
from .validation import CodecConfig

log = logging.getLogger(__name__)


def _info(path: Path, cfg: CodecConfig) -> None:
    """Print the format, dimensions and stored arrays of an archive"""
    if not path.exists():
        raise FileNotFoundError(f"Cannot find file: {path}")
    with NpzArchive(path) as archive:
        arrays = [archive.by_name(name) for name in archive.names]
        matrix = read_sparse(archive, dtype=cfg.dtype)

    print(f"format: {matrix.format}")
    print(f"shape: {matrix.shape[0]} x {matrix.shape[1]}")
    print(f"nnz: {matrix.nnz}")
    if isinstance(matrix, Dia):
        print(f"diagonals: {matrix.offsets.size} of length {matrix.length}")
    if isinstance(matrix, Bsr):
        print(f"blocksize: {matrix.blocksize[0]} x {matrix.blocksize[1]}")
    print("arrays:")
    width = max(len(npy.name) for npy in arrays if npy is not None)
    for npy in arrays:
        if npy is not None:
            print(f"  {npy.name:<{width}}  {npy.descr:<5}  {npy.shape}")


def _rewrite(src: Path, dst: Path, cfg: CodecConfig) -> None:
    """Decode ``src`` and encode it again to ``dst`` in the same format"""
    matrix = load_npz(src, dtype=cfg.dtype)
    save_npz(dst, matrix, compressed=cfg.compressed)
    print(f"Rewrote {matrix.format} matrix from {src} to {npz_path(dst)}")


def main(argv: list[str] | None = None) -> int:
    """The main function for the sparse NPZ command line"""
    parser = argparse.ArgumentParser(
        prog="sparse_npz",
        description="Inspect and rewrite scipy sparse matrices stored in NPZ files.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...). Defaults to WARNING.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    info = subparsers.add_parser("info", help="Print the format, shape and stored arrays of a file.")
    info.add_argument("path", type=Path, help="Path to the .npz file.")
    info.add_argument("--dtype", default=None, help="Element dtype to read 'data' as.")

    rewrite = subparsers.add_parser("rewrite", help="Re-encode a file in the same format.")
    rewrite.add_argument("src", type=Path, help="Path to the .npz file to read.")
    rewrite.add_argument("dst", type=Path, help="Path to write. '.npz' is appended if missing.")
    rewrite.add_argument(
        "--no-compress",
        action="store_true",
        help="Store archive members without compression.",
    )
    rewrite.add_argument("--dtype", default=None, help="Element dtype to read 'data' as.")

    args = parser.parse_args(argv)

    try:
        cfg = CodecConfig(
            compressed=not getattr(args, "no_compress", False),
            dtype=args.dtype,
            log_level=args.log_level,
        )
    except ValidationError as e:
        print(f"Invalid options:\n{e}", file=sys.stderr)
        return 2

    logging.basicConfig(level=cfg.log_level, format="%(asctime)s %(levelname)s %(message)s")

    try:
        if args.command == "info":
            _info(args.path, cfg)
        else:
            _rewrite(args.src, args.dst, cfg)
    except (SparseFormatError, ArchiveError, ElementTypeError, FileNotFoundError) as e:
        log.debug("Command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
