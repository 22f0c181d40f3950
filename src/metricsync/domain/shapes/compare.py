"""Structural comparison of two fingerprints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .model import (
    UNKNOWN_ITEM,
    ArrayShape,
    NullShape,
    ObjectShape,
    PrimitiveShape,
    ShapeChange,
    ShapeChangeType,
)

if TYPE_CHECKING:
    from .model import Shape, ShapeValue


def compare_shapes(
    old_shape: Shape,
    new_shape: Shape,
    base_path: str = "",
) -> list[ShapeChange]:
    """List the differences between two fingerprints.

    Fields are visited in discovery order (old fields first, then new ones);
    callers should treat the result as a set.
    """

    changes: list[ShapeChange] = []
    _compare_into(old_shape, new_shape, base_path, changes)
    return changes


def _compare_into(
    old_shape: Shape,
    new_shape: Shape,
    base_path: str,
    changes: list[ShapeChange],
) -> None:
    keys = dict.fromkeys([*old_shape, *new_shape])
    for key in keys:
        path = f"{base_path}.{key}" if base_path else key
        _compare_values(old_shape.get(key), new_shape.get(key), path, changes)


def _compare_values(
    old: ShapeValue | None,
    new: ShapeValue | None,
    path: str,
    changes: list[ShapeChange],
) -> None:
    if old is None and new is not None:
        changes.append(
            ShapeChange(path, ShapeChangeType.ADDED, new_value=describe_shape_value(new))
        )
        return
    if old is not None and new is None:
        changes.append(
            ShapeChange(path, ShapeChangeType.REMOVED, old_value=describe_shape_value(old))
        )
        return
    if old is None or new is None:
        return

    if old.KIND is not new.KIND:
        changes.append(_type_changed(path, old, new))
        return

    match old, new:
        case PrimitiveShape(value_type=old_type), PrimitiveShape(value_type=new_type):
            if old_type != new_type:
                changes.append(
                    ShapeChange(path, ShapeChangeType.TYPE_CHANGED, old_type, new_type)
                )
        case ArrayShape(item_shape=old_item), ArrayShape(item_shape=new_item):
            _compare_items(old_item, new_item, f"{path}[]", changes)
        case ObjectShape(shape=old_fields), ObjectShape(shape=new_fields):
            _compare_into(old_fields, new_fields, path, changes)
        case _:
            pass


def _compare_items(
    old_item: Shape | str,
    new_item: Shape | str,
    path: str,
    changes: list[ShapeChange],
) -> None:
    # an empty array says nothing about its elements
    if old_item == UNKNOWN_ITEM or new_item == UNKNOWN_ITEM:
        return
    if isinstance(old_item, str) and isinstance(new_item, str):
        if old_item != new_item:
            changes.append(ShapeChange(path, ShapeChangeType.TYPE_CHANGED, old_item, new_item))
        return
    if isinstance(old_item, str) or isinstance(new_item, str):
        changes.append(
            ShapeChange(
                path,
                ShapeChangeType.TYPE_CHANGED,
                _describe_item(old_item),
                _describe_item(new_item),
            )
        )
        return
    _compare_into(old_item, new_item, path, changes)


def _type_changed(path: str, old: ShapeValue, new: ShapeValue) -> ShapeChange:
    return ShapeChange(
        path,
        ShapeChangeType.TYPE_CHANGED,
        describe_shape_value(old),
        describe_shape_value(new),
    )


def _describe_item(item: Shape | str) -> str:
    return item if isinstance(item, str) else "object"


def describe_shape_value(value: ShapeValue) -> str:
    """Human-readable rendering used in drift reports ("string", "number[]", "object")."""

    match value:
        case PrimitiveShape(value_type=value_type):
            return value_type
        case NullShape():
            return "null"
        case ArrayShape(item_shape=str() as item):
            return f"{item}[]"
        case ArrayShape():
            return "object[]"
        case ObjectShape():
            return "object"
    return "unknown"
