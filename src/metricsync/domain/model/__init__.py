"""Domain model for catalog metrics grouped by project."""

from __future__ import annotations

from .enums import IssueKind, ProjectKind
from .metric import Metric, ValidationIssue, metric_key
from .project import Project, categorize_projects, classify_project

__all__ = [
    "IssueKind",
    "Metric",
    "Project",
    "ProjectKind",
    "ValidationIssue",
    "categorize_projects",
    "classify_project",
    "metric_key",
]
