"""Single-instance applications that pass messages to the running instance."""

from __future__ import annotations

import os
from typing import Any, Callable, Protocol, runtime_checkable

from ttkkit.localpeer import LocalPeer


@runtime_checkable
class ActivationWindow(Protocol):
    """A window that can be restored, raised and given focus."""

    minimized: bool

    def raise_(self) -> None: ...

    def activate(self) -> None: ...


class CoreApplication:
    """An application that knows whether another instance is already running.

    The first instance for an id becomes the server; later instances can
    hand it messages with :meth:`send_message`.
    """

    def __init__(self, id: str = "", directory: str | os.PathLike[str] | None = None) -> None:
        self._callbacks: list[Callable[[str], None]] = []
        self._peer = LocalPeer(id, directory)
        self._peer.connect(self._message_received)

    def __enter__(self) -> "CoreApplication":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _message_received(self, message: str) -> None:
        for callback in list(self._callbacks):
            callback(message)

    def is_running(self) -> bool:
        """Tell whether another instance already runs."""
        return self._peer.is_client()

    def id(self) -> str:
        """The application id shared by all instances."""
        return self._peer.application_id()

    def send_message(self, message: str, timeout: float = 5.0) -> bool:
        """Send *message* to the running instance; True once acknowledged."""
        return self._peer.send_message(message, timeout)

    def connect(self, callback: Callable[[str], None]) -> None:
        """Register a listener for messages from other instances."""
        self._callbacks.append(callback)

    def process_messages(self, timeout: float | None = None) -> str | None:
        """Receive one message from another instance, or None.

        Only the instance holding the server role receives messages.
        """
        return self._peer.receive_connection(timeout)

    def close(self) -> None:
        """Stop serving and release the single-instance lock."""
        self._peer.close()


class Application(CoreApplication):
    """A single-instance application with a window to bring forward."""

    def __init__(self, id: str = "", directory: str | os.PathLike[str] | None = None) -> None:
        super().__init__(id, directory)
        self._window: Any = None
        self._activate_on_message = False

    def _message_received(self, message: str) -> None:
        super()._message_received(message)
        if self._activate_on_message:
            self.activate_window()

    def set_activation_window(self, window: Any, activate_on_message: bool = True) -> None:
        """Set the window to activate, and whether messages activate it."""
        self._window = window
        self._activate_on_message = activate_on_message

    def activation_window(self) -> Any:
        """The window set with :meth:`set_activation_window`."""
        return self._window

    def activate_window(self) -> None:
        """Restore, raise and focus the activation window, if one is set."""
        window = self._window
        if window is None:
            return
        window.minimized = False
        window.raise_()
        window.activate()