"""Buffered read primitives over registry descriptors.

os.read gives neither buffering nor line framing, so every descriptor
opened through a ``Registry`` gets a 32 KiB buffer and these functions
consume it:

- read_line: up to and including the next newline (fgets-style limit)
- read_exact: a fixed number of bytes
- read_raw: like read_exact but straight from the OS, for comparison
- peek: look ahead without consuming

End of stream and read errors are not exceptions. A read that produced
nothing returns ``b""``; one that produced some bytes before the stream
ended returns those bytes. Read errors are reported on stderr.
"""

from __future__ import annotations

import os
import sys
from typing import Iterator

from .registry import BUFFER_SIZE, Registry, Slot


def _fill(fd: int, size: int) -> bytes:
    """One os.read; an error is reported and treated as end of stream."""
    try:
        return os.read(fd, size)
    except OSError as e:
        sys.stderr.write(f"Error: read({fd}): {e.strerror or e}\n")
        return b""


def _refill(fd: int, slot: Slot) -> bool:
    """Replace the buffer contents with the next chunk from ``fd``.

    Returns:
        False (with the buffer marked empty) at end of stream
    """
    data = _fill(fd, BUFFER_SIZE)
    if not data:
        slot.reset()
        return False
    slot.buffer[: len(data)] = data
    slot.cursor = 0
    slot.length = len(data)
    return True


def read_line(registry: Registry, fd: int, capacity: int) -> bytes:
    """Read one line of at most ``capacity - 1`` bytes.

    As with fgets, ``capacity`` counts room for a terminator, so the
    result holds at most ``capacity - 1`` bytes. The newline is included
    when it fits. A last line without newline is returned as is.

    Args:
        registry: Registry that opened ``fd``
        fd: Descriptor to read
        capacity: Line buffer size including the terminator slot

    Returns:
        The line, or b"" when nothing could be read
    """
    if capacity < 1:
        raise ValueError("capacity must be >= 1")
    slot = registry.slot(fd)
    buf = slot.buffer
    remaining = capacity - 1
    line = bytearray()

    while True:
        end = min(slot.length, slot.cursor + remaining)
        newline = buf.find(b"\n", slot.cursor, end)
        stop = end if newline == -1 else newline + 1
        line += buf[slot.cursor : stop]

        # Stopped short of the buffered data: newline or limit reached
        if newline != -1 or end != slot.length:
            slot.cursor = stop
            return bytes(line)

        remaining -= stop - slot.cursor
        if not _refill(fd, slot):
            return bytes(line)


def read_exact(registry: Registry, fd: int, size: int) -> bytes:
    """Read ``size`` bytes, fewer only if the stream ends first."""
    if size < 0:
        raise ValueError("size must be >= 0")
    slot = registry.slot(fd)
    buf = slot.buffer
    chunks = bytearray()
    remaining = size

    while True:
        available = slot.length - slot.cursor
        if available >= remaining:
            chunks += buf[slot.cursor : slot.cursor + remaining]
            slot.cursor += remaining
            return bytes(chunks)

        chunks += buf[slot.cursor : slot.length]
        remaining -= available
        if not _refill(fd, slot):
            return bytes(chunks)


def read_raw(registry: Registry, fd: int, size: int) -> bytes:
    """Read ``size`` bytes with plain os.read calls, bypassing the buffer.

    Only meant for checking read_exact against; mixing the two on one
    descriptor loses whatever the buffer already holds.
    """
    if size < 0:
        raise ValueError("size must be >= 0")
    registry.check_descriptor(fd)
    chunks = bytearray()
    while len(chunks) < size:
        try:
            data = os.read(fd, size - len(chunks))
        except OSError as e:
            sys.stderr.write(f"Error: read({fd}): {e.strerror or e}\n")
            break
        if not data:
            break
        chunks += data
    return bytes(chunks)


def peek(registry: Registry, fd: int, size: int) -> bytes:
    """Return up to ``size`` upcoming bytes without consuming them.

    ``size`` is clamped to the buffer capacity. Reads happen only when
    fewer than ``size`` bytes are buffered; what they bring in stays in the
    buffer for later reads. At end of stream the bytes still available are
    returned.
    """
    if size < 0:
        raise ValueError("size must be >= 0")
    size = min(size, BUFFER_SIZE)
    slot = registry.slot(fd)
    buf = slot.buffer

    if size > BUFFER_SIZE - slot.cursor:
        # Move the unread region to the front to make room
        unread = slot.length - slot.cursor
        buf[:unread] = buf[slot.cursor : slot.length]
        slot.cursor = 0
        slot.length = unread

    while True:
        available = slot.length - slot.cursor
        if available >= size:
            return bytes(buf[slot.cursor : slot.cursor + size])
        data = _fill(fd, BUFFER_SIZE - slot.length)
        if not data:
            return bytes(buf[slot.cursor : slot.length])
        buf[slot.length : slot.length + len(data)] = data
        slot.length += len(data)


def iter_lines(
    registry: Registry, fd: int, capacity: int = BUFFER_SIZE
) -> Iterator[bytes]:
    """Yield lines from ``fd`` until the stream is exhausted."""
    while True:
        line = read_line(registry, fd, capacity)
        if not line:
            return
        yield line


__all__ = [
    "BUFFER_SIZE",
    "iter_lines",
    "peek",
    "read_exact",
    "read_line",
    "read_raw",
]
