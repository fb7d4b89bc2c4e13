"""Maps clicks on a set of widgets to the index of the clicked one."""

from __future__ import annotations

from typing import Any, Callable


class ClickedGroup:
    """Keeps widgets in order and reports which one was clicked."""

    def __init__(self) -> None:
        self._container: list[Any] = []
        self._callbacks: list[Callable[[int], None]] = []

    def mapped(self, widget: Any) -> Callable[[], None]:
        """Add *widget*; return a handler to call when it is clicked."""
        self._container.append(widget)
        return lambda: self.update(widget)

    def connect(self, callback: Callable[[int], None]) -> None:
        """Register a listener receiving the index of the clicked widget."""
        self._callbacks.append(callback)

    def update(self, sender: Any) -> None:
        """Report a click from *sender*; unknown senders are ignored."""
        if sender is None:
            return
        index = next((i for i, widget in enumerate(self._container) if widget is sender), None)
        if index is None:
            return
        for callback in list(self._callbacks):
            callback(index)