from .configs import CodecConfig
from .enums import SparseFormat

__all__ = [
    "CodecConfig",
    "SparseFormat",
]
