"""Writes a stack dump file when the process receives a fatal signal."""

from __future__ import annotations

import logging
import os
import signal
import sys
import time
import traceback
from pathlib import Path
from types import FrameType
from typing import Any, Callable

logger = logging.getLogger(__name__)

VERSION = "2.8.0.0"

_SIGNAL_NAMES = ("SIGPIPE", "SIGSEGV", "SIGFPE", "SIGABRT", "SIGBUS", "SIGILL", "SIGINT", "SIGTERM")


def _signals() -> list[int]:
    return [getattr(signal, name) for name in _SIGNAL_NAMES if hasattr(signal, name)]


class Dumper:
    """Installs handlers that dump the stack to a file and then end the process.

    The optional *functor* is called whenever a signal is handled and again
    when the dumper is closed.
    """

    def __init__(
        self,
        functor: Callable[[], None] | None = None,
        name: str = "TTK",
        version: str = VERSION,
        directory: str | os.PathLike[str] = ".",
    ) -> None:
        self.functor = functor
        self.name = name
        self.version = version
        self.directory = Path(directory)
        self._previous: dict[int, Any] = {}

    def __enter__(self) -> "Dumper":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def run(self) -> None:
        """Install the signal handlers; must be called from the main thread."""
        for signum in _signals():
            try:
                previous = signal.signal(signum, self.handle_signal)
            except (OSError, ValueError):
                continue
            self._previous.setdefault(signum, previous)

    def dump_file_name(self, timestamp: float | None = None) -> str:
        """Name of the dump file written at *timestamp* (now by default)."""
        stamp = int(time.time() if timestamp is None else timestamp)
        return f"{self.name}_{self.version}.{stamp}.dmp"

    def write_dump(self, signum: int, frame: FrameType | None) -> Path:
        """Write the stack of *frame* to a new dump file and return its path."""
        path = self.directory / self.dump_file_name()
        lines = [f"signal {signum}\n"]
        lines.extend(traceback.format_stack(frame) if frame is not None else [])
        fd = os.open(path, os.O_CREAT | os.O_WRONLY, 0o666)
        try:
            os.write(fd, "".join(lines).encode("utf-8"))
        finally:
            os.close(fd)
        return path

    def handle_signal(self, signum: int, frame: FrameType | None) -> None:
        """Dump the stack, then let the signal take its default effect."""
        logger.info("Application error occurred, error code %s", signum)
        if self.functor is not None:
            self.functor()
        try:
            self.write_dump(signum, frame)
        except OSError as error:
            logger.error("Failed to write dump file: %s", error)
        signal.signal(signum, signal.SIG_DFL)
        signal.raise_signal(signum)
        sys.exit(0)

    def close(self) -> None:
        """Restore the previous handlers and call the functor."""
        for signum, previous in self._previous.items():
            try:
                signal.signal(signum, previous if previous is not None else signal.SIG_DFL)
            except (OSError, ValueError):
                pass
        self._previous.clear()
        if self.functor is not None:
            self.functor()