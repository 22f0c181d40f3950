"""Projects group metrics that share an owning subject (chain, protocol, fund)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import ProjectKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .metric import Metric

CHAIN_MARKER_IDENTIFIER = "transactions-failed"
CHAIN_NAMES = frozenset({"bitcoin"})
TREASURY_CATEGORY = "Treasury"
FUND_CATEGORY = "ETF"


@dataclass(eq=False, kw_only=True)
class Project:
    name: str
    slug: str

    _metrics: list[Metric] = field(default_factory=list["Metric"], repr=False)

    @property
    def metrics(self) -> tuple[Metric, ...]:
        return tuple(self._metrics)

    @property
    def kind(self) -> ProjectKind:
        # evaluated on every access so it follows membership changes
        return classify_project(self)

    def add_metric(self, metric: Metric) -> None:
        if metric.project != self.slug:
            raise ValueError(f"metric {metric.key} does not belong to project {self.slug}")
        previous = metric.parent
        if previous is self:
            return
        if previous is not None:
            previous.remove_metric(metric)
        self._metrics.append(metric)
        metric._set_parent(self)  # pyright: ignore[reportPrivateUsage] # noqa: SLF001

    def remove_metric(self, metric: Metric) -> None:
        self._metrics.remove(metric)
        metric._set_parent(None)  # pyright: ignore[reportPrivateUsage] # noqa: SLF001


def classify_project(project: Project) -> ProjectKind:
    """Derive the project kind from its current members.

    Precedence: chain, treasury, fund, generic.
    """

    metrics = project.metrics
    if project.name.lower() in CHAIN_NAMES or any(
        metric.identifier == CHAIN_MARKER_IDENTIFIER for metric in metrics
    ):
        return ProjectKind.CHAIN
    if any(metric.category == TREASURY_CATEGORY for metric in metrics):
        return ProjectKind.TREASURY
    if any(metric.category == FUND_CATEGORY for metric in metrics):
        return ProjectKind.FUND
    return ProjectKind.GENERIC


def categorize_projects(projects: Iterable[Project]) -> dict[ProjectKind, list[Project]]:
    buckets: dict[ProjectKind, list[Project]] = {kind: [] for kind in ProjectKind}
    for project in projects:
        buckets[classify_project(project)].append(project)
    return buckets
