"""JSON codec for property records and whole-store documents.

Each property is written as a self-describing record whose fields are all
strings, so the type survives the round trip::

    {
      "int.example" : {
        "key" : "int.example",
        "type" : "Integer",
        "value" : "200"
      }
    }

Documents are emitted with members sorted by key, so the same mapping always
encodes to the same bytes.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from userprops.exceptions import PropertyLoadError, UnknownPropertyTypeError
from userprops.models import Property, PropertyType


class PropertyRecord(BaseModel):
    """Wire record for one property."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    key: str
    type: str
    value: str

    @classmethod
    def from_property(cls, prop: Property) -> PropertyRecord:
        return cls(key=prop.name, type=prop.type.value, value=prop.type.render(prop.value))

    def to_property(self) -> Property:
        """Build the typed property this record describes.

        Raises:
            UnknownPropertyTypeError: If ``type`` is not a known tag.
            PropertyLoadError: If ``value`` does not parse as that type.
        """
        try:
            type_ = PropertyType(self.type)
        except ValueError:
            raise UnknownPropertyTypeError(self.key, self.type) from None
        try:
            value = type_.parse(self.value)
        except ValueError as exc:
            raise PropertyLoadError(
                f"Invalid {type_.value} value {self.value!r} for property {self.key!r}"
            ) from exc
        return Property(self.key, type_, value)


_DOCUMENT = TypeAdapter(dict[str, PropertyRecord])


def encode_property(prop: Property) -> dict[str, str]:
    """Return the ``{"key", "type", "value"}`` record for ``prop``."""
    return PropertyRecord.from_property(prop).model_dump()


def decode_property(record: Mapping[str, Any]) -> Property:
    """Build a :class:`Property` from a decoded wire record."""
    try:
        parsed = PropertyRecord.model_validate(record)
    except ValidationError as exc:
        raise PropertyLoadError(f"Malformed property record: {exc}") from exc
    return parsed.to_property()


def encode_store(properties: Mapping[str, Property]) -> bytes:
    """Serialize a whole mapping as a pretty-printed UTF-8 JSON document."""
    document = {key: encode_property(properties[key]) for key in sorted(properties)}
    text = json.dumps(document, indent=2, separators=(",", " : "), ensure_ascii=False)
    return text.encode("utf-8")


def decode_store(data: bytes) -> dict[str, Property]:
    """Parse a document produced by :func:`encode_store`.

    The whole document must decode; a single bad record fails the load.

    Raises:
        PropertyLoadError: On malformed JSON, a malformed record, or a member
            whose name differs from its record's ``key``.
        UnknownPropertyTypeError: On an unrecognized ``type`` tag.
    """
    try:
        records = _DOCUMENT.validate_json(data)
    except ValidationError as exc:
        raise PropertyLoadError(f"Error loading user properties, reason: {exc}") from exc

    properties: dict[str, Property] = {}
    for name, record in records.items():
        if record.key != name:
            raise PropertyLoadError(
                f"Member {name!r} holds a record for {record.key!r}"
            )
        properties[name] = record.to_property()
    return properties
