"""Inter-process lock on a file in the data directory.

Every process that opens the store (one per CLI command) takes the same
OS-level lock before reading anything, so commits from separate
processes never interleave.  Uses ``fcntl.flock`` on POSIX and
``msvcrt.locking`` on Windows.
"""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import IO

if os.name == "nt":
    import msvcrt
else:
    import fcntl

POLL_INTERVAL = 0.01


class FileLockTimeout(OSError):
    """The lock was not acquired within the timeout."""


def _try_lock(handle: IO) -> bool:
    try:
        if os.name == "nt":
            handle.seek(0)
            msvcrt.locking(handle.fileno(), msvcrt.LK_NBLCK, 1)
        else:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
    except (BlockingIOError, PermissionError):
        return False
    except OSError:
        if os.name == "nt":
            return False
        raise
    return True


def _unlock(handle: IO) -> None:
    if os.name == "nt":
        handle.seek(0)
        msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, 1)
    else:
        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


class FileLock:
    """Exclusive, non re-entrant lock held through an open lock file."""

    def __init__(self, path: Path, timeout: float = 30.0) -> None:
        self.path = path
        self.timeout = timeout
        self._handle: IO | None = None

    @property
    def held(self) -> bool:
        return self._handle is not None

    def acquire(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(self.path, "a+", encoding="utf-8")
        deadline = time.monotonic() + self.timeout
        try:
            while not _try_lock(handle):
                if time.monotonic() >= deadline:
                    raise FileLockTimeout(
                        f"Timed out after {self.timeout}s waiting for {self.path}"
                    )
                time.sleep(POLL_INTERVAL)
        except BaseException:
            handle.close()
            raise
        self._handle = handle

    def release(self) -> None:
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        try:
            _unlock(handle)
        finally:
            handle.close()
