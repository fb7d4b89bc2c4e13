"""Moving and border-resizing logic for a frameless window."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

DISTANCE = 5
WIDGET_SIZE_MAX = 16777215

Point = tuple[int, int]


class Direction(enum.Enum):
    """Edge or corner of a window under the cursor."""

    NO = "no"
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    LEFT_TOP = "left_top"
    RIGHT_TOP = "right_top"
    LEFT_BOTTOM = "left_bottom"
    RIGHT_BOTTOM = "right_bottom"


@dataclass(frozen=True)
class Rect:
    """An integer rectangle; right and bottom are inclusive edges."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.width - 1

    @property
    def bottom(self) -> int:
        return self.y + self.height - 1

    @property
    def pos(self) -> Point:
        return (self.x, self.y)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def is_empty(self) -> bool:
        """Tell whether the rectangle covers no pixel."""
        return self.width <= 0 or self.height <= 0

    def contains(self, px: int, py: int) -> bool:
        """Tell whether the point lies inside the rectangle, edges included."""
        if self.is_empty():
            return False
        return self.left <= px <= self.right and self.top <= py <= self.bottom

    def united(self, other: "Rect") -> "Rect":
        """The smallest rectangle holding both; empty rectangles are ignored."""
        if self.is_empty():
            return other
        if other.is_empty():
            return self
        left = min(self.left, other.left)
        top = min(self.top, other.top)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return Rect(left, top, right - left + 1, bottom - top + 1)


def size_direction(x: int, y: int, width: int, height: int) -> Direction:
    """Direction of the border under local point (x, y) of a width x height window."""
    if x < DISTANCE and DISTANCE < y < height - DISTANCE:
        return Direction.LEFT
    if x > width - DISTANCE and DISTANCE < y < height - DISTANCE:
        return Direction.RIGHT
    if y < DISTANCE and DISTANCE < x < width - DISTANCE:
        return Direction.TOP
    if y > height - DISTANCE and DISTANCE < x < width - DISTANCE:
        return Direction.BOTTOM
    if y < DISTANCE and x < DISTANCE:
        return Direction.LEFT_TOP
    if y < DISTANCE and x > width - DISTANCE:
        return Direction.RIGHT_TOP
    if x < DISTANCE and y > height - DISTANCE:
        return Direction.LEFT_BOTTOM
    if x > DISTANCE and y > height - DISTANCE:
        return Direction.RIGHT_BOTTOM
    return Direction.NO


class MoveResizeTracker:
    """Follows mouse presses and moves, dragging or resizing a window geometry.

    A press inside the window, away from its border, starts a drag; a press
    on the border starts a resize along the direction last detected.
    """

    def __init__(
        self,
        geometry: Rect = Rect(),
        minimum_size: tuple[int, int] = (0, 0),
        maximum_size: tuple[int, int] = (WIDGET_SIZE_MAX, WIDGET_SIZE_MAX),
    ) -> None:
        self.geometry = geometry
        self.minimum_width, self.minimum_height = minimum_size
        self.maximum_width, self.maximum_height = maximum_size
        self.direction = Direction.NO
        self.border_pressed = False
        self.mouse_left_pressed = False
        self.mouse_pos: Point = (0, 0)
        self.window_pos: Point = (0, 0)
        self.pressed_size: tuple[int, int] = (0, 0)

    def press(self, local_pos: Point, global_pos: Point, left_button: bool = True) -> None:
        """Handle a mouse press at *local_pos* (window) / *global_pos* (screen)."""
        self.pressed_size = self.geometry.size
        self.border_pressed = False
        if not left_button:
            return
        self.window_pos = self.geometry.pos
        inner = Rect(
            DISTANCE + 1,
            DISTANCE + 1,
            self.geometry.width - (DISTANCE + 1) * 2,
            self.geometry.height - (DISTANCE + 1) * 2,
        )
        if inner.contains(*local_pos):
            self.mouse_pos = global_pos
            self.mouse_left_pressed = True
        else:
            self.border_pressed = True

    def move(self, cursor_pos: Point) -> Rect:
        """Handle the cursor moving to global *cursor_pos*; return the geometry."""
        if self.border_pressed:
            self.move_direction(cursor_pos)
        else:
            self.size_direction(cursor_pos)
        if self.mouse_left_pressed:
            x = self.window_pos[0] + cursor_pos[0] - self.mouse_pos[0]
            y = self.window_pos[1] + cursor_pos[1] - self.mouse_pos[1]
            self.geometry = replace(self.geometry, x=x, y=y)
        return self.geometry

    def release(self) -> None:
        """Handle the mouse button being released."""
        self.border_pressed = False
        self.mouse_left_pressed = False
        self.direction = Direction.NO

    def size_direction(self, cursor_pos: Point) -> Direction:
        """Detect which border lies under global *cursor_pos* and remember it."""
        local_x = cursor_pos[0] - self.geometry.x
        local_y = cursor_pos[1] - self.geometry.y
        self.direction = size_direction(local_x, local_y, self.geometry.width, self.geometry.height)
        return self.direction

    def _set_geometry(self, x: int, y: int, width: int, height: int) -> None:
        self.geometry = Rect(x, y, width, height)

    def move_direction(self, cursor_pos: Point) -> Rect:
        """Resize along the remembered direction toward *cursor_pos*."""
        px, py = cursor_pos
        g = self.geometry
        wx, wy = self.window_pos
        pw, ph = self.pressed_size
        direction = self.direction

        if direction is Direction.LEFT:
            w = g.x + g.width - px
            if self.minimum_width <= w <= self.maximum_width:
                self._set_geometry(px, g.y, w, g.height)
        elif direction is Direction.RIGHT:
            w = px - g.x
            if self.minimum_width <= w <= self.maximum_width:
                self._set_geometry(g.x, g.y, w, g.height)
        elif direction is Direction.TOP:
            h = g.y - py + g.height
            if self.minimum_height <= h <= self.maximum_height:
                self._set_geometry(g.x, py, g.width, h)
        elif direction is Direction.BOTTOM:
            h = py - g.y
            if self.minimum_height <= h <= self.maximum_height:
                self._set_geometry(g.x, g.y, g.width, h)
        elif direction is Direction.LEFT_TOP:
            x, y = px, py
            w = g.x + g.width - x
            h = g.y + g.height - y
            right = wx + pw
            bottom = wy + ph
            if right - x >= self.maximum_width:
                x, w = right - self.maximum_width, self.maximum_width
            if right - x <= self.minimum_width:
                x, w = right - self.minimum_width, self.minimum_width
            if bottom - y >= self.maximum_height:
                y, h = bottom - self.maximum_height, self.maximum_height
            if bottom - y <= self.minimum_height:
                y, h = bottom - self.minimum_height, self.minimum_height
            self._set_geometry(x, y, w, h)
        elif direction is Direction.RIGHT_TOP:
            h = g.y + g.height - py
            w = px - g.x
            y = py
            if h >= self.maximum_height:
                y, h = wy + ph - g.height, self.maximum_height
            if h <= self.minimum_height:
                y, h = wy + ph - g.height, self.minimum_height
            self._set_geometry(wx, y, w, h)
        elif direction is Direction.LEFT_BOTTOM:
            w = g.x + g.width - px
            h = py - wy
            x = px
            right = wx + pw
            if right - x >= self.maximum_width:
                x, w = right - self.maximum_width, self.maximum_width
            if right - x <= self.minimum_width:
                x, w = right - self.minimum_width, self.minimum_width
            self._set_geometry(x, wy, w, h)
        elif direction is Direction.RIGHT_BOTTOM:
            self._set_geometry(wx, wy, px - g.x, py - g.y)
        return self.geometry