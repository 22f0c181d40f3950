from __future__ import annotations

import pytest

from metricsync.domain.model import IssueKind, ValidationIssue, metric_key
from tests.helpers.catalog import make_metric, make_project


def test_metric_key() -> None:
    metric = make_metric("fees-usd", "ethereum")

    assert metric.key == "ethereum/fees-usd"
    assert metric.key == metric_key("ethereum", "fees-usd")


def test_findings_accumulate_in_order() -> None:
    metric = make_metric()
    first = ValidationIssue(metric, IssueKind.EMPTY_DATA, "No data returned (empty array)")
    second = ValidationIssue(metric, IssueKind.FETCH_ERROR, "Failed to fetch: boom")

    metric.add_finding(first)
    metric.add_finding(second)

    assert metric.findings == (first, second)
    assert metric.has_findings
    assert metric.findings_summary == "No data returned (empty array), Failed to fetch: boom"


def test_finding_for_other_metric_is_rejected() -> None:
    metric = make_metric("fees")
    other = make_metric("txcount")

    with pytest.raises(ValueError, match="different metric"):
        metric.add_finding(ValidationIssue(other, IssueKind.EMPTY_DATA, "empty"))


def test_issue_entry_format() -> None:
    issue = ValidationIssue(make_metric("fees", "bitcoin"), IssueKind.EMPTY_DATA, "empty")

    assert issue.as_entry() == "{ project: 'bitcoin', identifier: 'fees', issue: 'empty' }"


def test_project_membership_keeps_back_reference() -> None:
    metric = make_metric("fees", "bitcoin")
    project = make_project("bitcoin", metric)

    assert metric.parent is project
    assert project.metrics == (metric,)

    project.remove_metric(metric)

    assert metric.parent is None
    assert project.metrics == ()


def test_project_rejects_foreign_metric() -> None:
    project = make_project("bitcoin")

    with pytest.raises(ValueError, match="does not belong"):
        project.add_metric(make_metric("fees", "ethereum"))


def test_adding_twice_does_not_duplicate() -> None:
    metric = make_metric("fees", "bitcoin")
    project = make_project("bitcoin", metric)

    project.add_metric(metric)

    assert project.metrics == (metric,)
