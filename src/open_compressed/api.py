"""Process-wide default registry.

Most programs want a single registry for their whole lifetime. The
functions here keep one and forward to it; ``init()``/``finish()``
bracket its use just like the methods on ``Registry``.
"""

from __future__ import annotations

from typing import Optional

from . import reader
from .config import Settings
from .registry import Registry
from .suffix import PathArg

_REGISTRY: Registry | None = None


def reset() -> None:
    """Finish and forget the default registry (primarily for tests)."""

    global _REGISTRY
    if _REGISTRY is not None:
        _REGISTRY.finish()
    _REGISTRY = None


def get_registry() -> Registry:
    """Return the default registry, creating it uninitialized if needed."""

    global _REGISTRY
    if _REGISTRY is None:
        _REGISTRY = Registry()
    return _REGISTRY


def init(settings: Optional[Settings] = None) -> Registry:
    """Initialize the default registry; a no-op when already initialized."""

    registry = get_registry()
    if settings is not None and not registry.initialized:
        registry.settings = settings
    registry.init()
    return registry


def finish() -> None:
    """Close decompressor pipes and wait for every child."""

    get_registry().finish()


def open(name: PathArg) -> int:
    return get_registry().open(name)


def close(fd: int) -> None:
    get_registry().close(fd)


def read_line(fd: int, capacity: int) -> bytes:
    return reader.read_line(get_registry(), fd, capacity)


def read_exact(fd: int, size: int) -> bytes:
    return reader.read_exact(get_registry(), fd, size)


def read_raw(fd: int, size: int) -> bytes:
    return reader.read_raw(get_registry(), fd, size)


def peek(fd: int, size: int) -> bytes:
    return reader.peek(get_registry(), fd, size)


__all__ = [
    "close",
    "finish",
    "get_registry",
    "init",
    "open",
    "peek",
    "read_exact",
    "read_line",
    "read_raw",
    "reset",
]
