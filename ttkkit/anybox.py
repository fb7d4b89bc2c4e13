"""A container that holds one value of any type and checks its type on access."""

from __future__ import annotations

import copy
from typing import Any as _Any, Callable, TypeVar

T = TypeVar("T")

_EMPTY = object()


class Any:
    """Holds a single value together with its exact type.

    A default-constructed box holds nothing; its kind is ``None``. Building a
    box from another box copies the held value, so the two are independent.
    """

    __slots__ = ("_value", "_kind")

    def __init__(self, value: _Any = _EMPTY) -> None:
        if isinstance(value, Any):
            self._value = copy.copy(value._value)
            self._kind = value._kind
        elif value is _EMPTY:
            self._value = None
            self._kind = None
        else:
            self._value = value
            self._kind = type(value)

    def __copy__(self) -> "Any":
        return Any(self)

    def __repr__(self) -> str:
        if self.is_null():
            return "Any()"
        return f"Any({self._value!r})"

    def is_null(self) -> bool:
        """Tell whether the box holds nothing."""
        return self._kind is None

    def is_same(self, kind: type | None) -> bool:
        """Tell whether the held value is exactly of type *kind*.

        ``None`` matches an empty box.
        """
        return self._kind is kind

    def cast(self, kind: type[T]) -> T:
        """The held value; raise TypeError unless it is exactly of type *kind*."""
        if not self.is_same(kind):
            held = "nothing" if self._kind is None else self._kind.__name__
            wanted = "nothing" if kind is None else getattr(kind, "__name__", repr(kind))
            raise TypeError(f"bad cast: box holds {held}, not {wanted}")
        return self._value

    def swap(self, other: "Any") -> None:
        """Exchange contents with *other*."""
        self._value, other._value = other._value, self._value
        self._kind, other._kind = other._kind, self._kind


def make_any(kind: Callable[..., T], *args: _Any, **kwargs: _Any) -> Any:
    """Build a value of *kind* from the arguments and box it."""
    return Any(kind(*args, **kwargs))


def any_cast(value: Any, kind: type[T]) -> T:
    """A copy of the held value if it is of type *kind*, else ``kind()``."""
    if value.is_same(kind):
        return copy.copy(value.cast(kind))
    return kind()