"""Descriptor registry: per-descriptor read buffers and decompressor children.

A ``Registry`` owns one slot per descriptor it has opened. A slot keeps a
fixed 32 KiB read buffer, the cursor/length pair describing its unread
region, and the decompressor process feeding the descriptor, if any.
Buffers outlive close() and are reused when the OS hands out the same
descriptor number again; they are released only by finish().

Example usage:
    with Registry() as reg:
        fd = reg.open("access.log.gz")
        line = read_line(reg, fd, 4096)
        reg.close(fd)
"""

from __future__ import annotations

import os
import subprocess
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

from .config import Settings, load_settings
from .errors import (
    AlreadyClosedError,
    BufferNotAllocatedError,
    InvalidDescriptorError,
    NotInitializedError,
    StreamIOError,
    TooManyOpenFilesError,
)
from .process_utils import open_pipe, spawn_decompressor
from .reaper import Reaper
from .suffix import PathArg, resolve

BUFFER_SIZE = 32768

STDIN_FD = 0


@dataclass
class Slot:
    """Read state of one descriptor.

    Attributes:
        buffer: Fixed-size read buffer, None until first open
        cursor: Offset of the first unread byte
        length: Offset one past the last valid byte
        child: Decompressor writing into this descriptor
    """

    buffer: Optional[bytearray] = None
    cursor: int = 0
    length: int = 0
    child: Optional[subprocess.Popen[Any]] = None

    def allocate(self) -> None:
        if self.buffer is None:
            self.buffer = bytearray(BUFFER_SIZE)

    def reset(self) -> None:
        self.cursor = self.length = 0


def _descriptor_limit() -> int:
    """Per-process descriptor limit reported by the OS."""
    return os.sysconf("SC_OPEN_MAX")


def _too_many_open_files() -> TooManyOpenFilesError:
    sys.stderr.write("Error: open: Too many open files\n")
    return TooManyOpenFilesError("Too many open files")


class Registry:
    """Process-wide table of descriptors opened for buffered reading.

    Nothing works until ``init()``; ``finish()`` closes decompressor pipes,
    waits for every child and drops all buffers. Both are idempotent.
    Standard input stays closed for good once ``close(0)`` ran, even across
    ``finish()``/``init()``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        max_descriptors: Optional[int] = None,
    ):
        """Create an uninitialized registry.

        Args:
            settings: Decompressor commands and limits (default: environment)
            max_descriptors: Slot range override, wins over settings
        """
        self.settings = settings
        self.max_descriptors = 0
        self._max_override = max_descriptors
        self._slots: Optional[Dict[int, Slot]] = None
        self._reaper = Reaper()
        self._stdin_closed = False

    def __enter__(self) -> "Registry":
        self.init()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.finish()

    @property
    def initialized(self) -> bool:
        return self._slots is not None

    @property
    def stdin_closed(self) -> bool:
        return self._stdin_closed

    @property
    def pending_reap(self) -> Tuple[subprocess.Popen[Any], ...]:
        """Closed children not collected yet."""
        return self._reaper.pending

    def init(self) -> None:
        """Size the slot range and start with an empty table."""
        if self._slots is not None:
            return
        if self.settings is None:
            self.settings = load_settings()
        self.max_descriptors = (
            self._max_override
            or self.settings.max_descriptors
            or _descriptor_limit()
        )
        self._slots = {}
        self._reaper = Reaper()

    def finish(self) -> None:
        """Tear down the table and wait for every decompressor."""
        if self._slots is None:
            return

        live = [
            (fd, slot.child)
            for fd, slot in sorted(self._slots.items())
            if slot.child is not None
        ]
        # Close first so children see EOF/SIGPIPE while we free buffers
        for fd, _ in live:
            self._close_fd(fd)

        for slot in self._slots.values():
            slot.buffer = None

        self._reaper.drain()
        for _, child in live:
            child.wait()

        self._slots = None

    def _require_init(self) -> Dict[int, Slot]:
        if self._slots is None:
            raise NotInitializedError("Registry is not initialized; call init() first")
        return self._slots

    def _check(self, fd: int) -> Dict[int, Slot]:
        slots = self._require_init()
        if fd < 0 or fd >= self.max_descriptors:
            raise InvalidDescriptorError(f"fd out of range: {fd}")
        return slots

    def check_descriptor(self, fd: int) -> None:
        """Raise unless ``fd`` is inside the slot range of a live registry."""
        self._check(fd)

    def _slot_for(self, fd: int) -> Slot:
        slots = self._check(fd)
        slot = slots.get(fd)
        if slot is None:
            slot = slots[fd] = Slot()
        return slot

    def slot(self, fd: int) -> Slot:
        """Slot of an opened descriptor.

        Raises:
            NotInitializedError: Registry not initialized
            InvalidDescriptorError: ``fd`` outside ``0 .. max_descriptors-1``
            BufferNotAllocatedError: ``fd`` never opened through this registry
        """
        slot = self._check(fd).get(fd)
        if slot is None or slot.buffer is None:
            raise BufferNotAllocatedError(f"buffer unallocated for fd {fd}")
        return slot

    def child(self, fd: int) -> Optional[subprocess.Popen[Any]]:
        """Decompressor currently feeding ``fd``, if any."""
        slot = self._check(fd).get(fd)
        return None if slot is None else slot.child

    def open(self, name: PathArg) -> int:
        """Open ``name`` for buffered reading.

        ``""`` and ``"-"`` mean standard input. Reopening standard input
        keeps whatever is still buffered for it. Compressed files (by
        suffix, or found by appending one) are read through a decompressor
        pipe; other files are opened directly.

        Returns:
            Descriptor to pass to the read functions and to close()

        Raises:
            AlreadyClosedError: Standard input was closed before
            IsDirectoryError: ``name`` is a directory
            NotFoundError: No matching file exists
            StreamIOError: stat, pipe, exec or open failed
            TooManyOpenFilesError: Descriptor outside the slot range
        """
        self._require_init()
        name = os.fspath(name)

        if name in ("", "-"):
            if self._stdin_closed:
                raise AlreadyClosedError("standard input was already closed")
            self._slot_for(STDIN_FD).allocate()
            return STDIN_FD

        path, suffix = resolve(name)
        if suffix is None:
            fd = self._open_plain(path)
            child = None
        else:
            fd, child = self._open_decompressed(path, suffix)

        slot = self._slot_for(fd)
        if slot.child is not None:
            # Descriptor was closed behind our back; still collect its child
            self._reaper.add(slot.child)
        slot.child = child
        slot.allocate()
        slot.reset()
        return fd

    def _open_plain(self, path: str) -> int:
        try:
            fd = os.open(path, os.O_RDONLY)
        except OSError as e:
            sys.stderr.write(f"Error: open: {e.strerror or e}\n")
            raise StreamIOError(f"open {path}: {e.strerror or e}") from e
        if fd >= self.max_descriptors:
            os.close(fd)
            raise _too_many_open_files()
        return fd

    def _open_decompressed(
        self, path: str, suffix: str
    ) -> Tuple[int, subprocess.Popen[Any]]:
        read_fd, write_fd = open_pipe()
        if read_fd >= self.max_descriptors:
            os.close(read_fd)
            os.close(write_fd)
            raise _too_many_open_files()

        assert self.settings is not None
        try:
            child = spawn_decompressor(path, suffix, write_fd, self.settings)
        except StreamIOError:
            os.close(read_fd)
            raise
        finally:
            os.close(write_fd)
        return read_fd, child

    def _close_fd(self, fd: int) -> None:
        try:
            os.close(fd)
        except OSError as e:
            sys.stderr.write(f"Error: close({fd}): {e.strerror or e}\n")

    def close(self, fd: int) -> None:
        """Close ``fd`` and queue its decompressor, if any, for collection.

        The slot's buffer is kept for the next descriptor with this number.
        Exited children are collected right away without blocking.
        """
        slots = self._check(fd)
        self._close_fd(fd)
        if fd == STDIN_FD:
            self._stdin_closed = True

        slot = slots.get(fd)
        if slot is not None and slot.child is not None:
            self._reaper.add(slot.child)
            slot.child = None

        self._reaper.sweep()

    @contextmanager
    def opened(self, name: PathArg) -> Iterator[int]:
        """Open ``name`` and close the descriptor when the block exits."""
        fd = self.open(name)
        try:
            yield fd
        finally:
            self.close(fd)


__all__ = ["BUFFER_SIZE", "Registry", "STDIN_FD", "Slot"]
