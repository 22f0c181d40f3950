"""Shape-drift checks against the stored per-endpoint baselines."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .compare import compare_shapes
from .extract import extract_shape

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from metricsync.domain.ports.snapshots import ShapeSnapshotStore

    from .model import ShapeChange

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EndpointResponse:
    endpoint: str
    response: object
    params: Mapping[str, str] | None = None


@dataclass(frozen=True, slots=True)
class ShapeCheckResult:
    endpoint: str
    params: Mapping[str, str] | None
    changes: list[ShapeChange]
    is_new: bool

    @property
    def label(self) -> str:
        return format_endpoint(self.endpoint, self.params)


@dataclass(slots=True)
class ShapeCheckingResult:
    results: list[ShapeCheckResult] = field(default_factory=list[ShapeCheckResult])

    @property
    def has_changes(self) -> bool:
        return any(result.changes for result in self.results)

    @property
    def total_changes(self) -> int:
        return sum(len(result.changes) for result in self.results)

    @property
    def new_endpoints(self) -> int:
        return sum(1 for result in self.results if result.is_new)


def format_endpoint(endpoint: str, params: Mapping[str, str] | None) -> str:
    if not params:
        return endpoint
    return f"{endpoint}?" + "&".join(f"{key}={value}" for key, value in params.items())


def check_endpoint_shape(
    store: ShapeSnapshotStore,
    endpoint: str,
    response: object,
    params: Mapping[str, str] | None = None,
) -> ShapeCheckResult:
    """Compare a response against its baseline, moving the baseline on drift.

    A first observation records the baseline and is never reported as a change.
    """

    shape = extract_shape(response)
    snapshot = store.load(endpoint, params)

    if snapshot is None:
        store.save(endpoint, shape, params)
        return ShapeCheckResult(endpoint=endpoint, params=params, changes=[], is_new=True)

    changes = compare_shapes(snapshot.shape, shape)
    if changes:
        store.save(endpoint, shape, params)
    return ShapeCheckResult(endpoint=endpoint, params=params, changes=changes, is_new=False)


def run_shape_checking(
    store: ShapeSnapshotStore,
    responses: Iterable[EndpointResponse],
) -> ShapeCheckingResult:
    log.info("Checking endpoint shapes...")
    result = ShapeCheckingResult()

    for response in responses:
        check = check_endpoint_shape(store, response.endpoint, response.response, response.params)
        result.results.append(check)
        if check.is_new:
            log.info("New endpoint baseline: %s", check.label)
        elif check.changes:
            log.warning("Shape changed: %s (%s changes)", check.label, len(check.changes))
            for change in check.changes:
                log.warning(
                    "  %s %s: %s -> %s",
                    change.change_type,
                    change.path,
                    change.old_value,
                    change.new_value,
                )

    if result.new_endpoints:
        log.info("Saved %s new endpoint snapshots", result.new_endpoints)
    if not result.has_changes:
        log.info("No shape changes detected")
    return result
