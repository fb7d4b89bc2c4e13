"""A slider that jumps to wherever it is clicked."""

from __future__ import annotations

import enum
from typing import Callable

Point = tuple[int, int]


class Orientation(enum.Enum):
    """Direction along which the slider runs."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ClickedSlider:
    """Slider model whose value follows the mouse from the first click.

    Horizontal sliders grow to the right; vertical sliders grow upward.
    """

    def __init__(
        self,
        orientation: Orientation = Orientation.HORIZONTAL,
        minimum: int = 0,
        maximum: int = 99,
        width: int = 100,
        height: int = 20,
        value: int = 0,
    ) -> None:
        if minimum > maximum:
            raise ValueError("minimum must not exceed maximum")
        if width <= 0 or height <= 0:
            raise ValueError("slider size must be positive")
        self.orientation = orientation
        self.minimum = minimum
        self.maximum = maximum
        self.width = width
        self.height = height
        self._value = minimum
        self.value = value
        self._pending = self._value
        self._pressed = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        self._value = max(self.minimum, min(self.maximum, int(value)))

    @property
    def pressed(self) -> bool:
        return self._pressed

    def value_at(self, pos: Point) -> int:
        """Value that position *pos* on the slider stands for."""
        span = self.maximum - self.minimum
        if self.orientation is Orientation.HORIZONTAL:
            ratio = pos[0] / self.width
            return int(ratio * span + self.minimum)
        ratio = pos[1] / self.height
        return int(self.maximum - ratio * span)

    def press(self, pos: Point, left_button: bool = True) -> None:
        """Handle a mouse press at *pos*; a left press jumps to that value."""
        if not left_button:
            return
        self._pressed = True
        self._pending = self.value_at(pos)
        self.value = self._pending

    def move(self, pos: Point) -> None:
        """Handle the mouse moving to *pos* while possibly pressed."""
        if not self._pressed:
            return
        self.value = self._pending
        if self.orientation is Orientation.HORIZONTAL:
            coord, extent = pos[0], self.width
            below, above = self.minimum, self.maximum
        else:
            coord, extent = pos[1], self.height
            below, above = self.maximum, self.minimum
        if 0 <= coord <= extent:
            self._pending = self.value_at(pos)
            self.value = self._pending
        elif coord < 0:
            self._pending = below
        else:
            self._pending = above
        for callback in list(self._callbacks):
            callback()

    def release(self) -> None:
        """Handle the mouse button being released."""
        if self._pressed:
            self.value = self._pending
        self._pressed = False

    def connect(self, callback: Callable[[], None]) -> None:
        """Register a listener called on every drag step."""
        self._callbacks.append(callback)