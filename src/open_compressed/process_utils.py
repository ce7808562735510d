"""Subprocess helpers: a validated Popen wrapper and the decompressor spawn.

``spawn_decompressor`` is the only place that creates processes. The
registry receives a pipe read end and a child handle from it and never
touches process-creation primitives itself.
"""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Sequence
from typing import Any, Tuple

from .config import Settings
from .errors import StreamIOError

CommandArg = str | os.PathLike[str]


def _normalize_command(cmd: Sequence[CommandArg]) -> list[str]:
    """Validate and normalize subprocess command arguments."""
    if not cmd:
        msg = "Command must include at least one argument"
        raise ValueError(msg)

    normalized: list[str] = []
    for arg in cmd:
        if isinstance(arg, os.PathLike):
            value = os.fspath(arg)
        elif isinstance(arg, str):
            value = arg
        else:
            msg = "Command arguments must be strings or os.PathLike"
            raise TypeError(msg)

        if not value.strip():
            msg = "Command arguments cannot be empty or whitespace"
            raise ValueError(msg)

        normalized.append(value)

    return normalized


def popen_with_validation(
    cmd: Sequence[CommandArg], **kwargs: Any
) -> subprocess.Popen[Any]:
    """Run subprocess.Popen with validation to satisfy security lint checks."""
    normalized_cmd = _normalize_command(cmd)
    return subprocess.Popen(normalized_cmd, **kwargs)  # noqa: S603


def spawn_decompressor(
    path: str, suffix: str, write_fd: int, settings: Settings
) -> subprocess.Popen[bytes]:
    """Start the decompressor for ``suffix`` writing ``path`` into ``write_fd``.

    The child reads nothing (stdin is /dev/null), writes the decompressed
    stream to ``write_fd`` and inherits no descriptor above stderr. The
    caller still owns ``write_fd`` and must close its copy.

    Raises:
        StreamIOError: The decompressor could not be executed
    """
    cmd = settings.command_for(suffix, path)
    try:
        return popen_with_validation(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=write_fd,
            close_fds=True,
        )
    except OSError as e:
        flags = " ".join(cmd[1:-1])
        sys.stderr.write(f"Error: exec {cmd[0]} {flags}: {e.strerror or e}\n")
        raise StreamIOError(f"exec {cmd[0]}: {e.strerror or e}") from e


def open_pipe() -> Tuple[int, int]:
    """Create a pipe, reporting failure as StreamIOError."""
    try:
        return os.pipe()
    except OSError as e:
        sys.stderr.write(f"Error: pipe: {e.strerror or e}\n")
        raise StreamIOError(f"pipe: {e.strerror or e}") from e


__all__ = ["open_pipe", "popen_with_validation", "spawn_decompressor"]
