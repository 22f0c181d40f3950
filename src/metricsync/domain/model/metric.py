"""Catalog metrics and the findings attached to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .enums import IssueKind
    from .project import Project


def metric_key(project: str, identifier: str) -> str:
    """Key shared by the output scanner, the reconciler and the sample cache."""
    return f"{project}/{identifier}"


@dataclass(eq=False, kw_only=True)
class Metric:
    """One catalog entry.

    Descriptive fields are set once at construction. Only the findings list and
    the back-reference to the owning project change afterwards, and both go
    through the methods below.
    """

    identifier: str
    project: str
    name: str
    description: str = ""
    data_type: str = ""
    source: str = ""
    interval: str = ""
    aggregation: str = ""
    category: str = ""
    updated_at: int | None = None

    _findings: list[ValidationIssue] = field(default_factory=list["ValidationIssue"], repr=False)
    _parent: Project | None = field(default=None, repr=False)

    @property
    def key(self) -> str:
        return metric_key(self.project, self.identifier)

    @property
    def parent(self) -> Project | None:
        return self._parent

    @property
    def findings(self) -> tuple[ValidationIssue, ...]:
        return tuple(self._findings)

    @property
    def has_findings(self) -> bool:
        return bool(self._findings)

    @property
    def findings_summary(self) -> str:
        return ", ".join(finding.message for finding in self._findings)

    def add_finding(self, issue: ValidationIssue) -> None:
        if issue.metric is not self:
            raise ValueError("finding belongs to a different metric")
        self._findings.append(issue)

    # Friend primitive (called only by Project)
    def _set_parent(self, project: Project | None) -> None:
        self._parent = project


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    metric: Metric
    kind: IssueKind
    message: str
    data: object = None

    def as_entry(self) -> str:
        return (
            f"{{ project: '{self.metric.project}', identifier: '{self.metric.identifier}', "
            f"issue: '{self.message}' }}"
        )
