"""Compression suffix detection and filename resolution.

Names ending in a known suffix are decompressed on open. A missing name
that already ends in a known suffix is retried with each suffix appended,
in the order of ``SUFFIXES``, so ``trace.xz`` finds ``trace.xz.gz`` when
only the recompressed copy is on disk. A missing name without a suffix
is simply not found.
"""

from __future__ import annotations

import errno
import os
import stat
import sys
from typing import Optional, Tuple

from .errors import IsDirectoryError, NotFoundError, StreamIOError

SUFFIXES: Tuple[str, ...] = (".gz", ".bz2", ".xz", ".Z")

PathArg = str | os.PathLike[str]


def classify_suffix(name: PathArg) -> Optional[str]:
    """Return the compression suffix of ``name``, or None.

    A bare suffix (".gz") is not a compressed file name: the suffix must be
    strictly shorter than the name.
    """
    name = os.fspath(name)
    for suffix in SUFFIXES:
        if len(name) > len(suffix) and name.endswith(suffix):
            return suffix
    return None


def _stat(path: str) -> Optional[os.stat_result]:
    """Stat ``path``; None when it does not exist, StreamIOError otherwise."""
    try:
        return os.stat(path)
    except ValueError as e:
        sys.stderr.write(f"Error: stat: {path!r}: {e}\n")
        raise StreamIOError(f"stat {path!r}: {e}") from e
    except OSError as e:
        if e.errno == errno.ENOENT:
            return None
        sys.stderr.write(f"Error: stat: {path}: {e.strerror or e}\n")
        raise StreamIOError(f"stat {path}: {e.strerror or e}") from e


def resolve(name: PathArg) -> Tuple[str, Optional[str]]:
    """Find the file to open for ``name`` and its compression suffix.

    Args:
        name: File name as given by the caller

    Returns:
        ``(effective_name, suffix)``; ``effective_name`` differs from
        ``name`` only when a suffix had to be appended to find the file.

    Raises:
        IsDirectoryError: ``name`` is a directory
        NotFoundError: nothing matching ``name`` exists
        StreamIOError: stat failed for a reason other than ENOENT
    """
    name = os.fspath(name)
    suffix = classify_suffix(name)

    st = _stat(name)
    if st is not None:
        if stat.S_ISDIR(st.st_mode):
            raise IsDirectoryError(f"Is a directory: {name}")
        return name, suffix

    # Only names that already look compressed are retried with a suffix
    if suffix is None:
        raise NotFoundError(f"No such file: {name}")

    for candidate in SUFFIXES:
        probed = name + candidate
        st = _stat(probed)
        if st is not None and not stat.S_ISDIR(st.st_mode):
            return probed, candidate

    raise NotFoundError(f"No such file: {name}")


__all__ = ["SUFFIXES", "classify_suffix", "resolve"]
