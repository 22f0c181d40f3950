"""Drop metrics whose description says there is nothing to document."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from metricsync.domain.model import Metric, Project

if TYPE_CHECKING:
    from collections.abc import Mapping

BAD_DESCRIPTION_PATTERN = re.compile(r"^There (are|is) no .+ (on|in) .+$", re.IGNORECASE)


@dataclass(slots=True)
class FilteredProjects:
    projects: dict[str, Project] = field(default_factory=dict[str, Project])
    omitted: list[Metric] = field(default_factory=list[Metric])

    @property
    def metrics(self) -> list[Metric]:
        return [metric for project in self.projects.values() for metric in project.metrics]


def has_bad_description(metric: Metric) -> bool:
    return BAD_DESCRIPTION_PATTERN.match(metric.description) is not None


def filter_projects(projects: Mapping[str, Project]) -> FilteredProjects:
    """Move bad-description metrics aside; projects left without metrics are dropped."""

    result = FilteredProjects()
    for slug, project in projects.items():
        for metric in project.metrics:
            if has_bad_description(metric):
                project.remove_metric(metric)
                result.omitted.append(metric)
        if project.metrics:
            result.projects[slug] = project
    return result
