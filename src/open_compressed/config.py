"""Decompressor commands and descriptor limits.

Settings are plain data validated by pydantic. ``load_settings`` reads the
environment fresh on every call, so tests and callers can change
``OPEN_COMPRESSED_*`` variables without clearing any cache.
"""

from __future__ import annotations

import os
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .suffix import SUFFIXES

DECOMPRESS_FLAGS = ["-d", "-c"]

# Suffix -> environment variable naming a replacement program
PROGRAM_ENV = {
    ".gz": "OPEN_COMPRESSED_GZIP",
    ".bz2": "OPEN_COMPRESSED_BZIP2",
    ".xz": "OPEN_COMPRESSED_XZ",
    ".Z": "OPEN_COMPRESSED_GZIP",
}

MAX_FDS_ENV = "OPEN_COMPRESSED_MAX_FDS"


def _default_decompressors() -> Dict[str, List[str]]:
    return {
        ".gz": ["gzip", *DECOMPRESS_FLAGS],
        ".bz2": ["bzip2", *DECOMPRESS_FLAGS],
        ".xz": ["xz", *DECOMPRESS_FLAGS],
        ".Z": ["gzip", *DECOMPRESS_FLAGS],
    }


class Settings(BaseModel):
    """Runtime settings for a registry."""

    decompressors: Dict[str, List[str]] = Field(
        default_factory=_default_decompressors
    )
    max_descriptors: Optional[int] = Field(default=None, ge=1)

    @field_validator("decompressors")
    @classmethod
    def known_suffixes(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """Every suffix must be recognized and have a non-empty command."""

        for suffix, argv in v.items():
            if suffix not in SUFFIXES:
                raise ValueError(f"Unknown compression suffix: {suffix}")
            if not argv or not argv[0].strip():
                raise ValueError(f"Empty decompressor command for {suffix}")
        missing = [s for s in SUFFIXES if s not in v]
        if missing:
            raise ValueError(f"Missing decompressor for: {', '.join(missing)}")
        return v

    def command_for(self, suffix: str, path: str) -> List[str]:
        """Full argv that decompresses ``path`` to stdout."""

        return [*self.decompressors[suffix], path]


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from the environment.

    Resolution:
    1. ``OPEN_COMPRESSED_GZIP`` / ``_BZIP2`` / ``_XZ`` replace the program
       name; the ``-d -c`` flags are kept.
    2. ``OPEN_COMPRESSED_MAX_FDS`` caps the descriptor range.
    3. Anything unset keeps its default.

    Args:
        env: Mapping to read instead of ``os.environ``

    Returns:
        Validated Settings

    Raises:
        pydantic.ValidationError: An override is not usable
    """
    env = os.environ if env is None else env

    decompressors = _default_decompressors()
    for suffix, var in PROGRAM_ENV.items():
        program = env.get(var)
        if program:
            decompressors[suffix] = [program, *DECOMPRESS_FLAGS]

    data: Dict[str, object] = {"decompressors": decompressors}
    max_fds = env.get(MAX_FDS_ENV)
    if max_fds:
        data["max_descriptors"] = max_fds

    return Settings.model_validate(data)


__all__ = ["DECOMPRESS_FLAGS", "MAX_FDS_ENV", "PROGRAM_ENV", "Settings", "load_settings"]
