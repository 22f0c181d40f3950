"""Translate between domain shape fingerprints and snapshot payloads."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from metricsync.domain.shapes import (
    ArrayShape,
    EndpointSnapshot,
    NullShape,
    ObjectShape,
    PrimitiveShape,
)

from .shape_schema import (
    ArrayShapePayload,
    NullShapePayload,
    ObjectShapePayload,
    PrimitiveShapePayload,
    SnapshotFilePayload,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from metricsync.domain.shapes import Shape, ShapeValue

    from .shape_schema import ShapeValuePayload


def shape_to_payload(shape: Shape) -> dict[str, ShapeValuePayload]:
    return {key: _value_to_payload(value) for key, value in shape.items()}


def _value_to_payload(value: ShapeValue) -> ShapeValuePayload:
    match value:
        case PrimitiveShape(value_type=value_type):
            return PrimitiveShapePayload(value_type=value_type)
        case NullShape():
            return NullShapePayload()
        case ArrayShape(item_shape=str() as item):
            return ArrayShapePayload(item_shape=item)
        case ArrayShape(item_shape=item):
            return ArrayShapePayload(item_shape=shape_to_payload(item))
        case ObjectShape(shape=inner):
            return ObjectShapePayload(shape=shape_to_payload(inner))


def shape_from_payload(payload: Mapping[str, ShapeValuePayload]) -> Shape:
    return {key: _value_from_payload(value) for key, value in payload.items()}


def _value_from_payload(payload: ShapeValuePayload) -> ShapeValue:
    match payload:
        case PrimitiveShapePayload(value_type=value_type):
            return PrimitiveShape(value_type)
        case NullShapePayload():
            return NullShape()
        case ArrayShapePayload(item_shape=str() as item):
            return ArrayShape(item)
        case ArrayShapePayload(item_shape=item):
            return ArrayShape(shape_from_payload(item))
        case ObjectShapePayload(shape=inner):
            return ObjectShape(shape_from_payload(inner))


def snapshot_to_payload(snapshot: EndpointSnapshot) -> SnapshotFilePayload:
    return SnapshotFilePayload(
        endpoint=snapshot.endpoint,
        params=dict(snapshot.params) if snapshot.params else None,
        shape=shape_to_payload(snapshot.shape),
        timestamp=int(snapshot.captured_at.timestamp() * 1000),
    )


def snapshot_from_payload(payload: SnapshotFilePayload) -> EndpointSnapshot:
    return EndpointSnapshot(
        endpoint=payload.endpoint,
        params=payload.params,
        shape=shape_from_payload(payload.shape),
        captured_at=datetime.fromtimestamp(payload.timestamp / 1000, tz=UTC),
    )
