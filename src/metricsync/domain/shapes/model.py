"""Structural fingerprints of JSON responses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

UNKNOWN_ITEM = "unknown"


class ShapeKind(StrEnum):
    PRIMITIVE = "primitive"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


class ShapeChangeType(StrEnum):
    ADDED = "added"
    REMOVED = "removed"
    TYPE_CHANGED = "type_changed"


@dataclass(frozen=True, slots=True)
class PrimitiveShape:
    KIND: ClassVar[ShapeKind] = ShapeKind.PRIMITIVE

    value_type: str


@dataclass(frozen=True, slots=True)
class NullShape:
    KIND: ClassVar[ShapeKind] = ShapeKind.NULL


@dataclass(frozen=True, slots=True)
class ArrayShape:
    """Array fingerprint built from the first element only.

    ``item_shape`` is the field mapping when that element is an object,
    otherwise the element's kind name (``"unknown"`` for an empty array).
    """

    KIND: ClassVar[ShapeKind] = ShapeKind.ARRAY

    item_shape: Shape | str


@dataclass(frozen=True, slots=True)
class ObjectShape:
    KIND: ClassVar[ShapeKind] = ShapeKind.OBJECT

    shape: Shape


type ShapeValue = PrimitiveShape | NullShape | ArrayShape | ObjectShape
type Shape = Mapping[str, ShapeValue]


@dataclass(frozen=True, slots=True)
class ShapeChange:
    path: str
    change_type: ShapeChangeType
    old_value: str | None = None
    new_value: str | None = None


@dataclass(frozen=True, slots=True)
class EndpointSnapshot:
    endpoint: str
    params: Mapping[str, str] | None
    shape: Shape
    captured_at: datetime
