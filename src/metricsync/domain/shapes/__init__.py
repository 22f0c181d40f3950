"""Response fingerprinting and drift detection."""

from __future__ import annotations

from .checking import (
    EndpointResponse,
    ShapeCheckingResult,
    ShapeCheckResult,
    check_endpoint_shape,
    format_endpoint,
    run_shape_checking,
)
from .compare import compare_shapes, describe_shape_value
from .extract import InvalidShapeInputError, extract_shape, json_kind, shape_to_string
from .model import (
    UNKNOWN_ITEM,
    ArrayShape,
    EndpointSnapshot,
    NullShape,
    ObjectShape,
    PrimitiveShape,
    Shape,
    ShapeChange,
    ShapeChangeType,
    ShapeKind,
    ShapeValue,
)

__all__ = [
    "UNKNOWN_ITEM",
    "ArrayShape",
    "EndpointResponse",
    "EndpointSnapshot",
    "InvalidShapeInputError",
    "NullShape",
    "ObjectShape",
    "PrimitiveShape",
    "Shape",
    "ShapeChange",
    "ShapeChangeType",
    "ShapeCheckResult",
    "ShapeCheckingResult",
    "ShapeKind",
    "ShapeValue",
    "check_endpoint_shape",
    "compare_shapes",
    "describe_shape_value",
    "extract_shape",
    "format_endpoint",
    "json_kind",
    "run_shape_checking",
    "shape_to_string",
]
