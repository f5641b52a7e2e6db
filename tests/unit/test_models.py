"""Tests for PropertyType and the observable Property cell."""

from __future__ import annotations

import math

import pytest

from userprops.exceptions import PropertyTypeError
from userprops.models import Property, PropertyType


class TestPropertyType:
    def test_wire_tags(self) -> None:
        assert [t.value for t in PropertyType] == ["String", "Integer", "Double"]

    def test_zero_values(self) -> None:
        assert PropertyType.STRING.zero == ""
        assert PropertyType.INTEGER.zero == 0
        assert PropertyType.DOUBLE.zero == 0.0
        assert isinstance(PropertyType.DOUBLE.zero, float)

    def test_double_widens_int(self) -> None:
        value = PropertyType.DOUBLE.coerce(3)
        assert value == 3.0
        assert isinstance(value, float)

    @pytest.mark.parametrize(
        ("type_", "value"),
        [
            (PropertyType.STRING, 1),
            (PropertyType.INTEGER, "1"),
            (PropertyType.INTEGER, 1.5),
            (PropertyType.INTEGER, True),
            (PropertyType.DOUBLE, "1.0"),
            (PropertyType.DOUBLE, False),
        ],
    )
    def test_coerce_rejects_wrong_type(self, type_: PropertyType, value: object) -> None:
        with pytest.raises(PropertyTypeError):
            type_.coerce(value)

    def test_property_type_error_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            PropertyType.STRING.coerce(42)

    def test_integer_limited_to_64_bits(self) -> None:
        assert PropertyType.INTEGER.coerce(2**63 - 1) == 2**63 - 1
        with pytest.raises(ValueError):
            PropertyType.INTEGER.coerce(2**63)

    def test_render_numbers(self) -> None:
        assert PropertyType.INTEGER.render(200) == "200"
        assert PropertyType.DOUBLE.render(200.0) == "200.0"
        assert PropertyType.DOUBLE.render(0.1) == "0.1"
        assert PropertyType.DOUBLE.render(math.inf) == "Infinity"
        assert PropertyType.DOUBLE.render(-math.inf) == "-Infinity"
        assert PropertyType.DOUBLE.render(math.nan) == "NaN"

    def test_parse_numbers(self) -> None:
        assert PropertyType.INTEGER.parse("-12") == -12
        assert PropertyType.DOUBLE.parse("201.0") == 201.0
        assert PropertyType.DOUBLE.parse("1.0E10") == 1e10
        assert PropertyType.DOUBLE.parse("Infinity") == math.inf
        assert PropertyType.STRING.parse("  spaced  ") == "  spaced  "

    def test_parse_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            PropertyType.INTEGER.parse("12.5")
        with pytest.raises(ValueError):
            PropertyType.DOUBLE.parse("twelve")

    @pytest.mark.parametrize(
        ("type_", "text"),
        [
            (PropertyType.INTEGER, "1_000"),
            (PropertyType.INTEGER, " 12"),
            (PropertyType.INTEGER, "12\n"),
            (PropertyType.DOUBLE, " 2_5.0 "),
            (PropertyType.DOUBLE, "2_5.0"),
            (PropertyType.DOUBLE, " 1.5"),
            (PropertyType.DOUBLE, "inf"),
        ],
    )
    def test_parse_requires_plain_decimal_text(self, type_: PropertyType, text: str) -> None:
        with pytest.raises(ValueError):
            type_.parse(text)


class TestProperty:
    def test_name_and_type_are_read_only(self) -> None:
        prop = Property("a.key", PropertyType.INTEGER, 1)
        with pytest.raises(AttributeError):
            prop.name = "other"  # type: ignore[misc]
        with pytest.raises(AttributeError):
            prop.type = PropertyType.STRING  # type: ignore[misc]

    def test_listener_receives_old_and_new(self) -> None:
        prop = Property("a.key", PropertyType.STRING, "before")
        calls: list[tuple[object, object]] = []
        prop.add_listener(lambda old, new: calls.append((old, new)))

        prop.value = "after"

        assert calls == [("before", "after")]
        assert prop.value == "after"

    def test_listeners_called_in_registration_order(self) -> None:
        prop = Property("a.key", PropertyType.INTEGER, 0)
        order: list[str] = []
        prop.add_listener(lambda old, new: order.append("first"))
        prop.add_listener(lambda old, new: order.append("second"))

        prop.value = 1

        assert order == ["first", "second"]

    def test_equal_assignment_does_not_notify(self) -> None:
        prop = Property("a.key", PropertyType.DOUBLE, 1.0)
        calls: list[tuple[object, object]] = []
        prop.add_listener(lambda old, new: calls.append((old, new)))

        prop.value = 1.0

        assert calls == []

    def test_remove_listener(self) -> None:
        prop = Property("a.key", PropertyType.INTEGER, 0)
        calls: list[tuple[object, object]] = []

        def listener(old: object, new: object) -> None:
            calls.append((old, new))

        prop.add_listener(listener)
        prop.remove_listener(listener)
        prop.remove_listener(listener)  # already gone, no error
        prop.value = 5

        assert calls == []

    def test_wrong_type_assignment_raises_and_keeps_value(self) -> None:
        prop = Property("a.key", PropertyType.INTEGER, 7)
        calls: list[tuple[object, object]] = []
        prop.add_listener(lambda old, new: calls.append((old, new)))

        with pytest.raises(PropertyTypeError):
            prop.value = "seven"

        assert prop.value == 7
        assert calls == []

    def test_constructor_validates_value(self) -> None:
        with pytest.raises(PropertyTypeError):
            Property("a.key", PropertyType.STRING, 3)
