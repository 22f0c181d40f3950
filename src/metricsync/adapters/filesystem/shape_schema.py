"""Pydantic models for persisted shape snapshot files."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class SnapshotBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PrimitiveShapePayload(SnapshotBaseModel):
    type: Literal["primitive"] = "primitive"
    value_type: str = Field(alias="valueType")


class NullShapePayload(SnapshotBaseModel):
    type: Literal["null"] = "null"


class ArrayShapePayload(SnapshotBaseModel):
    type: Literal["array"] = "array"
    item_shape: dict[str, ShapeValuePayload] | str = Field(alias="itemShape")


class ObjectShapePayload(SnapshotBaseModel):
    type: Literal["object"] = "object"
    shape: dict[str, ShapeValuePayload]


ShapeValuePayload = Annotated[
    PrimitiveShapePayload | NullShapePayload | ArrayShapePayload | ObjectShapePayload,
    Field(discriminator="type"),
]


class SnapshotFilePayload(SnapshotBaseModel):
    endpoint: str
    params: dict[str, str] | None = None
    shape: dict[str, ShapeValuePayload]
    timestamp: int = Field(description="Capture time in epoch milliseconds")


ArrayShapePayload.model_rebuild()
ObjectShapePayload.model_rebuild()
SnapshotFilePayload.model_rebuild()
