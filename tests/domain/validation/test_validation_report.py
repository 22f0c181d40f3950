from __future__ import annotations

from metricsync.domain.model import IssueKind, ValidationIssue
from metricsync.domain.validation import (
    ValidationResult,
    count_issue_kinds,
    generate_validation_report,
)
from tests.helpers.catalog import make_metric


def test_no_issues_means_no_report() -> None:
    assert generate_validation_report(ValidationResult(total_checked=3)) == ""


def test_report_groups_by_project_most_issues_first() -> None:
    fees = make_metric("fees", "bitcoin")
    tvl = make_metric("tvl", "aave")
    revenue = make_metric("revenue", "aave")
    result = ValidationResult(
        issues=[
            ValidationIssue(fees, IssueKind.EMPTY_DATA, "No data returned (empty array)"),
            ValidationIssue(tvl, IssueKind.FETCH_ERROR, "Failed to fetch: timed out after 5s"),
            ValidationIssue(revenue, IssueKind.MISSING_VALUE, 'Missing "value" field'),
        ],
        total_checked=10,
    )

    report = generate_validation_report(result)

    assert report.startswith("### 🔍 Validation Issues\n\n")
    assert "Found 3 validation issues across 10 metrics." in report
    assert "<details>" in report
    assert report.index("aave: 2 issues") < report.index("bitcoin: 1 issue\n")
    assert (
        "  - { project: 'bitcoin', identifier: 'fees', issue: 'No data returned (empty array)' }"
        in report
    )


def test_count_issue_kinds() -> None:
    metric = make_metric()
    issues = [
        ValidationIssue(metric, IssueKind.EMPTY_DATA, "a"),
        ValidationIssue(metric, IssueKind.EMPTY_DATA, "b"),
        ValidationIssue(metric, IssueKind.FETCH_ERROR, "c"),
    ]

    assert count_issue_kinds(issues) == {"empty_data": 2, "fetch_error": 1}
