"""Domain ports (I/O seams implemented by adapters)."""

from __future__ import annotations

from .fetching import CatalogFetchError, CatalogPage, CatalogSource
from .snapshots import ComparisonSnapshotStore, RawMetric, ShapeSnapshotStore

__all__ = [
    "CatalogFetchError",
    "CatalogPage",
    "CatalogSource",
    "ComparisonSnapshotStore",
    "RawMetric",
    "ShapeSnapshotStore",
]
