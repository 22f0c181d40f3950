"""Markdown summary of validation issues, grouped by project."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from metricsync.domain.model import ValidationIssue

    from .validator import ValidationResult


def group_issues_by_project(issues: list[ValidationIssue]) -> dict[str, list[ValidationIssue]]:
    """Group issues by project, projects with the most issues first."""

    grouped: dict[str, list[ValidationIssue]] = {}
    for issue in issues:
        grouped.setdefault(issue.metric.project, []).append(issue)
    return dict(sorted(grouped.items(), key=lambda item: len(item[1]), reverse=True))


def count_issue_kinds(issues: list[ValidationIssue]) -> Counter[str]:
    return Counter(str(issue.kind) for issue in issues)


def generate_validation_report(result: ValidationResult) -> str:
    """Render the report body; empty when there is nothing to report."""

    if not result.issues:
        return ""

    lines = [
        "### 🔍 Validation Issues",
        "",
        f"Found {len(result.issues)} validation issues across {result.total_checked} metrics.",
        "",
        "<details>",
        "<summary>Click to expand validation issues</summary>",
        "",
        "```",
    ]

    for project, project_issues in group_issues_by_project(result.issues).items():
        plural = "s" if len(project_issues) > 1 else ""
        lines.append("")
        lines.append(f"{project}: {len(project_issues)} issue{plural}")
        lines.extend(f"  - {issue.as_entry()}" for issue in project_issues)

    lines.extend(["```", "", "</details>", "", ""])
    return "\n".join(lines)
