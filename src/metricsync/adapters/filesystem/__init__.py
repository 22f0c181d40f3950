"""Filesystem adapters: output tree, snapshots and reports."""

from __future__ import annotations

from .comparison import ComparisonSnapshotFile
from .lifecycle import CleanupResult, find_metric_pages, prune_empty_directories, reconcile_output
from .reports import write_report
from .scanner import find_pages, page_filename, scan_output
from .shape_store import FileShapeSnapshotStore, snapshot_filename

__all__ = [
    "CleanupResult",
    "ComparisonSnapshotFile",
    "FileShapeSnapshotStore",
    "find_metric_pages",
    "find_pages",
    "page_filename",
    "prune_empty_directories",
    "reconcile_output",
    "scan_output",
    "snapshot_filename",
    "write_report",
]
