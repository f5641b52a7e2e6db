"""Typed, observable property values.

A :class:`Property` carries its :class:`PropertyType` explicitly, so the
codec never has to inspect the runtime class of the value::

    prop = Property("window.width", PropertyType.INTEGER, 800)
    prop.add_listener(lambda old, new: print(old, "->", new))
    prop.value = 1024   # prints "800 -> 1024"
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, Callable, Union

from userprops.exceptions import PropertyTypeError

PropertyValue = Union[str, int, float]
ChangeListener = Callable[[Any, Any], None]

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# Plain decimal text only: no underscores, no surrounding whitespace.
_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")
_DOUBLE_TEXT = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)


class PropertyType(str, Enum):
    """Supported value types; the enum value is the wire tag."""

    STRING = "String"
    INTEGER = "Integer"
    DOUBLE = "Double"

    @property
    def zero(self) -> PropertyValue:
        """Value reported as "previous" when a key is first created."""
        return _ZERO_VALUES[self]

    def coerce(self, value: Any) -> PropertyValue:
        """Return ``value`` as this type, or raise :class:`PropertyTypeError`.

        ``bool`` is rejected for both numeric types. Integers are widened to
        float for ``DOUBLE``.
        """
        if self is PropertyType.STRING:
            if isinstance(value, str):
                return value
        elif isinstance(value, bool):
            pass
        elif self is PropertyType.INTEGER:
            if isinstance(value, int):
                if not _INT64_MIN <= value <= _INT64_MAX:
                    raise ValueError(f"Integer value {value} does not fit in 64 bits")
                return value
        elif isinstance(value, (int, float)):
            return float(value)
        raise PropertyTypeError(
            f"Expected a {self.value} value, got {type(value).__name__}: {value!r}"
        )

    def render(self, value: PropertyValue) -> str:
        """Text form written to the ``value`` field of a wire record."""
        if self is PropertyType.DOUBLE:
            if math.isnan(value):
                return "NaN"
            if math.isinf(value):
                return "Infinity" if value > 0 else "-Infinity"
            return repr(float(value))
        return str(value)

    def parse(self, text: str) -> PropertyValue:
        """Inverse of :meth:`render`. Raises ``ValueError`` on malformed text."""
        if self is PropertyType.INTEGER:
            if not _INTEGER_TEXT.fullmatch(text):
                raise ValueError(f"Invalid Integer text: {text!r}")
            return self.coerce(int(text, 10))
        if self is PropertyType.DOUBLE:
            if not _DOUBLE_TEXT.fullmatch(text):
                raise ValueError(f"Invalid Double text: {text!r}")
            return float(text)
        return text


_ZERO_VALUES: dict[PropertyType, PropertyValue] = {
    PropertyType.STRING: "",
    PropertyType.INTEGER: 0,
    PropertyType.DOUBLE: 0.0,
}


class Property:
    """A named, typed value that notifies listeners when it changes.

    Listeners are called synchronously, in registration order, with
    ``(old, new)`` whenever an assignment changes the value. Assigning an
    equal value is a no-op. A listener must not assign to the property that
    invoked it; doing so recurses.
    """

    def __init__(self, name: str, type_: PropertyType, value: Any) -> None:
        self._name = name
        self._type = type_
        self._value = type_.coerce(value)
        self._listeners: list[ChangeListener] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> PropertyType:
        return self._type

    @property
    def value(self) -> PropertyValue:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        new_value = self._type.coerce(new_value)
        old_value = self._value
        if new_value == old_value:
            return
        self._value = new_value
        for listener in list(self._listeners):
            listener(old_value, new_value)

    def add_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        """Detach ``listener`` (no-op if it was never attached)."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def __repr__(self) -> str:
        return f"Property(name={self._name!r}, type={self._type.value}, value={self._value!r})"
