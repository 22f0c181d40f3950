"""Paginated catalog fetch and incremental change detection."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from metricsync.config.sync import DEFAULT_PAGE_SIZE
from metricsync.domain.model import Metric, Project, metric_key
from metricsync.domain.ports.fetching import CatalogFetchError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from metricsync.domain.ports import CatalogSource, ComparisonSnapshotStore, RawMetric

log = getLogger(__name__)

VOLATILE_FIELDS = frozenset({"updated_at"})
COMPARED_FIELDS = (
    "name",
    "description",
    "source",
    "data_type",
    "interval",
    "aggregation",
    "category",
)


@dataclass(slots=True)
class FetchResult:
    projects: dict[str, Project]
    should_continue: bool
    raw_metrics: list[dict[str, object]] = field(default_factory=list[dict[str, object]])
    pages_fetched: int = 0
    complete: bool = True

    @property
    def metrics(self) -> list[Metric]:
        return [metric for project in self.projects.values() for metric in project.metrics]


@dataclass(frozen=True, slots=True)
class FieldChange:
    key: str
    field: str
    old_value: object
    new_value: object


@dataclass(slots=True)
class DetailedComparison:
    added: list[str] = field(default_factory=list[str])
    removed: list[str] = field(default_factory=list[str])
    changed: list[FieldChange] = field(default_factory=list[FieldChange])


async def fetch_all(
    source: CatalogSource,
    *,
    comparison_store: ComparisonSnapshotStore,
    update_only: bool = False,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> FetchResult:
    """Page through the catalog and decide whether downstream work is needed.

    A failed page stops pagination; pages already collected are kept. In
    update-only mode an unchanged catalog yields ``should_continue=False``.
    The comparison snapshot is rewritten on every call.
    """

    log.info("Fetching metrics from API...")
    previous = comparison_store.load() if update_only else None

    raw_metrics: list[dict[str, object]] = []
    page = 1
    complete = True
    while True:
        log.debug("Fetching page %s", page)
        try:
            response = await source.fetch_page(page=page, limit=page_size)
        except CatalogFetchError as exc:
            log.warning("Error fetching metrics page %s: %s", page, exc)
            complete = False
            break
        raw_metrics.extend(response.data)
        if page >= math.ceil(response.total / page_size):
            break
        page += 1

    log.info("Found %s metrics", len(raw_metrics))

    should_continue = True
    if update_only and previous is not None:
        if metrics_equal(previous, raw_metrics):
            log.info("No changes detected, skipping sync process")
            should_continue = False
        else:
            comparison = compare_metrics_detailed(previous, raw_metrics)
            log.info(
                "Changes detected, continuing with sync: added=%s, removed=%s, changed_fields=%s",
                len(comparison.added),
                len(comparison.removed),
                len(comparison.changed),
            )

    _save_for_comparison(comparison_store, raw_metrics)

    return FetchResult(
        projects=group_projects(raw_metrics),
        should_continue=should_continue,
        raw_metrics=raw_metrics,
        pages_fetched=page if complete else page - 1,
        complete=complete,
    )


def _save_for_comparison(store: ComparisonSnapshotStore, raw_metrics: Sequence[RawMetric]) -> None:
    try:
        store.save(strip_volatile_fields(raw_metrics))
    except OSError as exc:
        log.warning("Could not save catalog snapshot for future comparison: %s", exc)


def build_metric(raw: RawMetric) -> Metric:
    updated_at = raw.get("updated_at")
    return Metric(
        identifier=str(raw["identifier"]),
        project=str(raw["project"]),
        name=str(raw.get("name") or ""),
        description=str(raw.get("description") or ""),
        data_type=str(raw.get("data_type") or ""),
        source=str(raw.get("source") or ""),
        interval=str(raw.get("interval") or ""),
        aggregation=str(raw.get("aggregation") or ""),
        category=str(raw.get("category") or ""),
        updated_at=updated_at if isinstance(updated_at, int) else None,
    )


def group_projects(raw_metrics: Iterable[RawMetric]) -> dict[str, Project]:
    """Build projects in first-seen order."""

    projects: dict[str, Project] = {}
    for raw in raw_metrics:
        metric = build_metric(raw)
        project = projects.get(metric.project)
        if project is None:
            project = Project(name=metric.project, slug=metric.project)
            projects[metric.project] = project
        project.add_metric(metric)
    return projects


def strip_volatile_fields(raw_metrics: Iterable[RawMetric]) -> list[dict[str, object]]:
    return [
        {key: value for key, value in raw.items() if key not in VOLATILE_FIELDS}
        for raw in raw_metrics
    ]


def _sort_key(raw: RawMetric) -> tuple[str, str]:
    return str(raw.get("project", "")), str(raw.get("identifier", ""))


def _canonical(raw_metrics: Iterable[RawMetric]) -> str:
    stripped = sorted(strip_volatile_fields(raw_metrics), key=_sort_key)
    return json.dumps(stripped, sort_keys=True, default=str)


def metrics_equal(old: Iterable[RawMetric], new: Iterable[RawMetric]) -> bool:
    """Whole-catalog equality, ignoring volatile fields and ordering."""
    return _canonical(old) == _canonical(new)


def compare_metrics_detailed(
    old: Iterable[RawMetric], new: Iterable[RawMetric]
) -> DetailedComparison:
    old_map = _by_key(strip_volatile_fields(old))
    new_map = _by_key(strip_volatile_fields(new))
    comparison = DetailedComparison()

    for key, new_metric in new_map.items():
        old_metric = old_map.get(key)
        if old_metric is None:
            comparison.added.append(key)
            continue
        comparison.changed.extend(
            FieldChange(key, name, old_metric.get(name), new_metric.get(name))
            for name in COMPARED_FIELDS
            if old_metric.get(name) != new_metric.get(name)
        )

    comparison.removed.extend(key for key in old_map if key not in new_map)
    return comparison


def _by_key(raw_metrics: Iterable[Mapping[str, object]]) -> dict[str, Mapping[str, object]]:
    return {
        metric_key(str(raw.get("project", "")), str(raw.get("identifier", ""))): raw
        for raw in raw_metrics
    }
