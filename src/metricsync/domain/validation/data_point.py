"""Structural checks on a fetched sample payload."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from metricsync.domain.model import IssueKind, ValidationIssue
from metricsync.domain.shapes import json_kind

if TYPE_CHECKING:
    from metricsync.domain.model import Metric

VALUE_FIELD = "value"
DATE_FIELD = "date"
ALLOWED_FIELDS = frozenset({VALUE_FIELD, DATE_FIELD})


def validate_metric_data(metric: Metric, response: object) -> list[ValidationIssue]:
    """Validate ``{<project>: [points] | point}`` for one metric."""

    issues: list[ValidationIssue] = []

    if not isinstance(response, Mapping):
        issues.append(
            ValidationIssue(
                metric,
                IssueKind.INVALID_FORMAT,
                f"Invalid response format (expected object, got {json_kind(response)})",
                response,
            )
        )
        return issues

    wanted = metric.project.lower()
    project_key = next((key for key in response if str(key).lower() == wanted), None)
    if project_key is None:
        issues.append(
            ValidationIssue(
                metric,
                IssueKind.MISSING_PROJECT_KEY,
                "Missing project key in response",
                [str(key) for key in response],
            )
        )
        return issues

    data = response[project_key]
    if isinstance(data, list):
        if not data:
            issues.append(
                ValidationIssue(metric, IssueKind.EMPTY_DATA, "No data returned (empty array)", [])
            )
            return issues
        for point in data:
            issues.extend(validate_data_point(metric, point))
    elif isinstance(data, Mapping):
        issues.extend(validate_data_point(metric, data))
    else:
        issues.append(
            ValidationIssue(
                metric,
                IssueKind.INVALID_FORMAT,
                "Invalid data format (expected array or object)",
                data,
            )
        )

    return issues


def validate_data_point(metric: Metric, point: object) -> list[ValidationIssue]:
    """Check one ``{value, date?}`` point.

    A point carrying ``date`` but no ``value`` is a malformed payload.
    """

    if not isinstance(point, Mapping):
        return [
            ValidationIssue(
                metric, IssueKind.INVALID_POINT, "Invalid data point (not an object)", point
            )
        ]

    keys = [str(key) for key in point]
    issues: list[ValidationIssue] = []

    if VALUE_FIELD not in point:
        if DATE_FIELD in point:
            others = [key for key in keys if key != DATE_FIELD]
            found = ", ".join(others) if others else "none"
            issues.append(
                ValidationIssue(
                    metric,
                    IssueKind.MALFORMED_PAYLOAD,
                    f'Malformed payload structure - found fields "{found}" instead of "value"',
                    dict(point),
                )
            )
        else:
            issues.append(
                ValidationIssue(
                    metric,
                    IssueKind.MISSING_VALUE,
                    'Missing "value" field in data point',
                    dict(point),
                )
            )
        return issues

    value_kind = json_kind(point[VALUE_FIELD])
    if value_kind not in {"null", "string", "number"}:
        issues.append(
            ValidationIssue(
                metric,
                IssueKind.INVALID_VALUE_TYPE,
                f"Invalid value type (expected string, number, or null, got {value_kind})",
                dict(point),
            )
        )

    unexpected = [key for key in keys if key not in ALLOWED_FIELDS]
    if unexpected:
        issues.append(
            ValidationIssue(
                metric,
                IssueKind.UNEXPECTED_FIELDS,
                f"Unexpected fields in data point: {', '.join(unexpected)}",
                dict(point),
            )
        )

    if DATE_FIELD in point and not isinstance(point[DATE_FIELD], str):
        issues.append(
            ValidationIssue(
                metric,
                IssueKind.INVALID_DATE_TYPE,
                f"Invalid date type (expected string, got {json_kind(point[DATE_FIELD])})",
                dict(point),
            )
        )

    return issues
