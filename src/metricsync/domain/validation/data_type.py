"""Static consistency checks on declared data types (no I/O)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from metricsync.domain.model import IssueKind, ValidationIssue

if TYPE_CHECKING:
    from metricsync.domain.model import Metric

USD_SUFFIX = "-usd"
USD_DATA_TYPE = "timeseries_usd"
USD_ONLY_IDENTIFIERS = frozenset({"market-cap"})


def validate_data_type(metric: Metric) -> list[ValidationIssue]:
    """Check the declared ``data_type`` against the identifier naming convention."""

    identifier = metric.identifier
    data_type = metric.data_type
    fragment = {"identifier": identifier, "data_type": data_type}
    issues: list[ValidationIssue] = []

    if identifier.endswith(USD_SUFFIX) and data_type != USD_DATA_TYPE:
        issues.append(
            ValidationIssue(
                metric=metric,
                kind=IssueKind.DATA_TYPE,
                message=(
                    f'USD metric has wrong data_type: expected "{USD_DATA_TYPE}", '
                    f'got "{data_type}"'
                ),
                data=fragment,
            )
        )

    if identifier in USD_ONLY_IDENTIFIERS and data_type != USD_DATA_TYPE:
        issues.append(
            ValidationIssue(
                metric=metric,
                kind=IssueKind.DATA_TYPE,
                message=(
                    f"Market cap metric has inconsistent data_type: "
                    f'expected "{USD_DATA_TYPE}" for consistency, got "{data_type}"'
                ),
                data=fragment,
            )
        )

    return issues
