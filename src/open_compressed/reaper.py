"""Collection of decompressor processes whose descriptor was closed."""

from __future__ import annotations

import subprocess
from collections import deque
from typing import Any, Deque, Tuple


class Reaper:
    """Queue of closed children that still need to be waited on.

    ``sweep`` is cheap and runs after every close; ``drain`` blocks and is
    only used at registry teardown.
    """

    def __init__(self) -> None:
        self._pending: Deque[subprocess.Popen[Any]] = deque()

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def pending(self) -> Tuple[subprocess.Popen[Any], ...]:
        return tuple(self._pending)

    def add(self, child: subprocess.Popen[Any]) -> None:
        self._pending.append(child)

    def sweep(self) -> int:
        """Wait on every pending child without blocking.

        Exited children are dropped; the rest keep their place in the queue
        for the next sweep.

        Returns:
            Number of children collected
        """
        collected = 0
        for _ in range(len(self._pending)):
            child = self._pending.popleft()
            if child.poll() is None:
                self._pending.append(child)
            else:
                collected += 1
        return collected

    def drain(self) -> None:
        """Block until every pending child has been collected."""
        while self._pending:
            self._pending[0].wait()
            self._pending.popleft()


__all__ = ["Reaper"]
