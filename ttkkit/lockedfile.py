"""A file that can hold an advisory read or write lock."""

from __future__ import annotations

import enum
import errno
import os
import time

try:
    import fcntl
except ImportError:  # Windows
    fcntl = None
    import msvcrt

_RETRY_INTERVAL = 0.05

_MODES = {
    "r": os.O_RDONLY,
    "r+": os.O_RDWR | os.O_CREAT,
    "a": os.O_WRONLY | os.O_APPEND | os.O_CREAT,
    "a+": os.O_RDWR | os.O_APPEND | os.O_CREAT,
}


class LockMode(enum.IntEnum):
    """Kind of lock held on a file."""

    NO_LOCK = 0
    READ_LOCK = 1
    WRITE_LOCK = 2


if fcntl is not None:

    def _acquire(fd: int, mode: LockMode, block: bool) -> bool:
        operation = fcntl.LOCK_SH if mode is LockMode.READ_LOCK else fcntl.LOCK_EX
        if not block:
            operation |= fcntl.LOCK_NB
        try:
            fcntl.flock(fd, operation)
        except (BlockingIOError, InterruptedError):
            return False
        return True

    def _release(fd: int) -> None:
        fcntl.flock(fd, fcntl.LOCK_UN)

else:

    def _acquire(fd: int, mode: LockMode, block: bool) -> bool:
        # Windows byte-range locks are exclusive, so read locks are too.
        while True:
            os.lseek(fd, 0, os.SEEK_SET)
            try:
                msvcrt.locking(fd, msvcrt.LK_NBLCK, 1)
                return True
            except OSError as error:
                if error.errno not in (errno.EACCES, errno.EDEADLK):
                    raise
            if not block:
                return False
            time.sleep(_RETRY_INTERVAL)

    def _release(fd: int) -> None:
        os.lseek(fd, 0, os.SEEK_SET)
        msvcrt.locking(fd, msvcrt.LK_UNLCK, 1)


class LockedFile:
    """A file opened without truncation on which a lock can be taken.

    Locks are advisory and held per open file, so two ``LockedFile``
    objects on the same path contend even within one process.
    """

    def __init__(self, name: str | os.PathLike[str] | None = None) -> None:
        self.name = None if name is None else os.fspath(name)
        self._fd: int | None = None
        self._lock_mode = LockMode.NO_LOCK

    def __enter__(self) -> "LockedFile":
        if not self.is_open():
            self.open()
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            self.close()
        except Exception:
            pass

    def open(self, mode: str = "r+") -> None:
        """Open the file; mode is one of 'r', 'r+', 'a', 'a+'.

        Truncating modes are refused with ValueError; 'r+' creates the file.
        """
        if mode.startswith("w"):
            raise ValueError("truncate mode not allowed")
        if mode not in _MODES:
            raise ValueError(f"unsupported open mode {mode!r}")
        if self.name is None:
            raise ValueError("no file name set")
        if self.is_open():
            raise ValueError("file is already open")
        flags = _MODES[mode] | getattr(os, "O_BINARY", 0)
        self._fd = os.open(self.name, flags, 0o666)

    def close(self) -> None:
        """Release any lock and close the file."""
        if self._fd is None:
            return
        try:
            self.unlock()
        finally:
            os.close(self._fd)
            self._fd = None
            self._lock_mode = LockMode.NO_LOCK

    def is_open(self) -> bool:
        """Tell whether the file is open."""
        return self._fd is not None

    def fileno(self) -> int:
        """The descriptor of the open file."""
        if self._fd is None:
            raise ValueError("file is not opened")
        return self._fd

    def lock(self, mode: LockMode, block: bool = True) -> bool:
        """Take a lock of *mode*; return False if it is held elsewhere.

        Without *block* the call returns at once instead of waiting.
        """
        fd = self.fileno()
        mode = LockMode(mode)
        if mode is LockMode.NO_LOCK:
            return self.unlock()
        if mode is self._lock_mode:
            return True
        if self._lock_mode is not LockMode.NO_LOCK:
            self.unlock()
        if not _acquire(fd, mode, block):
            return False
        self._lock_mode = mode
        return True

    def unlock(self) -> bool:
        """Release the lock held, if any."""
        fd = self.fileno()
        if not self.is_locked():
            return True
        _release(fd)
        self._lock_mode = LockMode.NO_LOCK
        return True

    def is_locked(self) -> bool:
        """Tell whether a lock is held."""
        return self._lock_mode is not LockMode.NO_LOCK

    def lock_mode(self) -> LockMode:
        """The kind of lock held."""
        return self._lock_mode