"""Metric validation stage."""

from __future__ import annotations

from .cache import SampleDataCache
from .data_point import validate_data_point, validate_metric_data
from .data_type import validate_data_type
from .report import count_issue_kinds, generate_validation_report, group_issues_by_project
from .validator import (
    SampleFetched,
    SampleFetcher,
    SampleFetchFailed,
    SampleOutcome,
    ValidationResult,
    batched,
    validate_metrics,
)

__all__ = [
    "SampleDataCache",
    "SampleFetchFailed",
    "SampleFetched",
    "SampleFetcher",
    "SampleOutcome",
    "ValidationResult",
    "batched",
    "count_issue_kinds",
    "generate_validation_report",
    "group_issues_by_project",
    "validate_data_point",
    "validate_data_type",
    "validate_metric_data",
    "validate_metrics",
]
