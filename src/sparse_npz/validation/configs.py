import logging

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CodecConfig(BaseModel):
    """Options for reading and writing sparse NPZ files"""

    model_config = ConfigDict(extra="forbid", validate_assignment=True, str_strip_whitespace=True)

    compressed: bool = Field(
        default=True,
        description="Deflate archive members on write, as scipy.sparse.save_npz does by default",
    )
    dtype: str | None = Field(
        default=None,
        description="Element dtype to read 'data' as (e.g. 'float64'). None keeps the stored dtype",
    )
    log_level: str = Field(default="WARNING", description="Logging level name for the command line")

    @field_validator("dtype")
    @classmethod
    def validate_dtype(cls, v: str | None) -> str | None:
        """Make sure numpy understands the dtype string"""
        if v is None:
            return None
        try:
            np.dtype(v)
        except TypeError as e:
            raise ValueError(f"Invalid dtype '{v}'") from e
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the level name and reject unknown levels"""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level '{v}'")
        return level
