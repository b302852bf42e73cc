"""NPZ container access and path-level load/save functions."""

from .archive import ArchiveError, ElementTypeError, NpyArray, NpzArchive, NpzWriter
from .readers import load_npz
from .writers import npz_path, save_npz

__all__ = [
    "ArchiveError",
    "ElementTypeError",
    "NpyArray",
    "NpzArchive",
    "NpzWriter",
    "load_npz",
    "npz_path",
    "save_npz",
]
