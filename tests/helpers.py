"""Shared markers and helpers for tests."""

from __future__ import annotations

import os
import shutil

import pytest

requires_gzip = pytest.mark.skipif(
    shutil.which("gzip") is None, reason="gzip not installed"
)
requires_bzip2 = pytest.mark.skipif(
    shutil.which("bzip2") is None, reason="bzip2 not installed"
)
requires_xz = pytest.mark.skipif(
    shutil.which("xz") is None, reason="xz not installed"
)


def read_all(fd: int) -> bytes:
    """Drain a raw descriptor with os.read."""
    chunks = []
    while True:
        data = os.read(fd, 65536)
        if not data:
            return b"".join(chunks)
        chunks.append(data)


def open_fd_count() -> int:
    """Number of descriptors open in this process (Linux only)."""
    return len(os.listdir("/proc/self/fd"))
