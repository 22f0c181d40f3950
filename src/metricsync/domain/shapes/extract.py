"""Derive structural fingerprints from decoded JSON values."""

from __future__ import annotations

from collections.abc import Mapping

from .model import (
    UNKNOWN_ITEM,
    ArrayShape,
    NullShape,
    ObjectShape,
    PrimitiveShape,
    Shape,
    ShapeValue,
)


class InvalidShapeInputError(ValueError):
    """Raised when a response handed to shape extraction is not a JSON object."""


def json_kind(value: object) -> str:
    """Name the JSON kind of a decoded value."""

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list | tuple):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def extract_shape(response: object) -> Shape:
    """Return the field-by-field fingerprint of a JSON object."""

    if not isinstance(response, Mapping):
        raise InvalidShapeInputError(f"Response must be an object, got {json_kind(response)}")
    return _object_fields(response)


def _object_fields(value: Mapping[object, object]) -> dict[str, ShapeValue]:
    return {str(key): _value_shape(item) for key, item in value.items()}


def _value_shape(value: object) -> ShapeValue:
    if value is None:
        return NullShape()

    if isinstance(value, list | tuple):
        if not value:
            return ArrayShape(item_shape=UNKNOWN_ITEM)
        # only the first element is sampled; mixed arrays go unnoticed
        first = value[0]
        if isinstance(first, Mapping):
            return ArrayShape(item_shape=_object_fields(first))
        return ArrayShape(item_shape=json_kind(first))

    if isinstance(value, Mapping):
        return ObjectShape(shape=_object_fields(value))

    return PrimitiveShape(value_type=json_kind(value))


def shape_to_string(shape: Shape, indent: int = 0) -> str:
    """Render a fingerprint as an indented outline (debug output)."""

    spaces = "  " * indent
    lines: list[str] = []
    for key, value in shape.items():
        match value:
            case PrimitiveShape(value_type=value_type):
                lines.append(f"{spaces}{key}: {value_type}")
            case NullShape():
                lines.append(f"{spaces}{key}: null")
            case ArrayShape(item_shape=str() as item):
                lines.append(f"{spaces}{key}: {item}[]")
            case ArrayShape(item_shape=item):
                lines.extend([f"{spaces}{key}: [", shape_to_string(item, indent + 1), f"{spaces}]"])
            case ObjectShape(shape=fields):
                lines.extend(
                    [f"{spaces}{key}: {{", shape_to_string(fields, indent + 1), f"{spaces}}}"]
                )
    return "\n".join(lines)
