"""Exclusive advisory locks on open files (POSIX flock).

One blocking attempt per call; OSError from the platform propagates.
"""

from __future__ import annotations

import fcntl
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO


@contextmanager
def exclusive_lock(fh: IO) -> Iterator[IO]:
    """Hold LOCK_EX on ``fh`` for the duration of the block."""
    fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
    try:
        yield fh
    finally:
        fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
