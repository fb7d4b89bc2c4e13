"""Screen geometry helpers: taskbar placement and the virtual desktop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ttkkit.moveresize import Direction, Rect


@dataclass(frozen=True)
class TaskbarInfo:
    """Thickness of a taskbar and the screen edge it sits on."""

    size: int
    direction: Direction


def screen_taskbar(screen: Rect, available: Rect) -> TaskbarInfo:
    """Find the taskbar from a screen's full and available geometry."""
    if screen.left != available.left:
        return TaskbarInfo(abs(screen.left - available.left), Direction.LEFT)
    if screen.right != available.right:
        return TaskbarInfo(abs(screen.right - available.right), Direction.RIGHT)
    if screen.top != available.top:
        return TaskbarInfo(abs(screen.top - available.top), Direction.TOP)
    if screen.bottom != available.bottom:
        return TaskbarInfo(abs(screen.bottom - available.bottom), Direction.BOTTOM)
    return TaskbarInfo(0, Direction.NO)


def bounding_geometry(screens: Sequence[Rect]) -> Rect:
    """The rectangle holding every screen; empty when there are none."""
    result = Rect()
    for screen in screens:
        result = result.united(screen)
    return result


def screen_geometry(screens: Sequence[Rect], index: int = 0) -> Rect:
    """Geometry of screen *index*, or an empty rectangle if there is none."""
    if index < 0 or index >= len(screens):
        return Rect()
    return screens[index]