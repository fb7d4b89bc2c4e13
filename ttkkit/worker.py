"""A restartable background thread with a cooperative stop flag."""

from __future__ import annotations

import threading


class AbstractThread:
    """Runs :meth:`run` on a background thread.

    Subclasses override :meth:`run` and loop while ``self._running`` is true;
    :meth:`stop` clears the flag and waits for :meth:`run` to return.
    """

    def __init__(self) -> None:
        self._running = True
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    def start(self) -> None:
        """Start the thread; does nothing while it is already running."""
        with self._lock:
            self._running = True
            if self.is_running():
                return
            self._thread = threading.Thread(target=self.run, daemon=True)
            self._thread.start()

    def stop(self) -> None:
        """Ask the thread to finish and wait until it has."""
        self._running = False
        thread = self._thread
        if thread is not None and thread.is_alive() and thread is not threading.current_thread():
            thread.join()

    def run(self) -> None:
        """Work done on the thread; the base does nothing."""

    def is_running(self) -> bool:
        """Tell whether the thread is alive."""
        return self._thread is not None and self._thread.is_alive()