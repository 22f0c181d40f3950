"""Catalog API adapter."""

from __future__ import annotations

from .client import CatalogAPIError, CatalogClient, CatalogTransportError
from .schema import ErrorResponse, MetricPayload, MetricsPage

__all__ = [
    "CatalogAPIError",
    "CatalogClient",
    "CatalogTransportError",
    "ErrorResponse",
    "MetricPayload",
    "MetricsPage",
]
