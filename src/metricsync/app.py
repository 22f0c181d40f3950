"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import date, timedelta
from logging import getLogger
from typing import TYPE_CHECKING, Final

from metricsync.adapters.catalog import CatalogClient
from metricsync.adapters.filesystem import (
    ComparisonSnapshotFile,
    FileShapeSnapshotStore,
    reconcile_output,
    scan_output,
    write_report,
)
from metricsync.config import get_storage_config, get_sync_config
from metricsync.domain.fetching import fetch_all
from metricsync.domain.filtering import filter_projects
from metricsync.domain.model import Metric, categorize_projects
from metricsync.domain.ports.fetching import CatalogFetchError
from metricsync.domain.reconciliation import diff_metric_keys
from metricsync.domain.shapes import (
    EndpointResponse,
    ShapeCheckingResult,
    run_shape_checking,
)
from metricsync.domain.validation import (
    SampleDataCache,
    SampleFetcher,
    ValidationResult,
    generate_validation_report,
    validate_metrics,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from metricsync.config import StorageConfig, SyncConfig
    from metricsync.domain.ports import CatalogSource, ShapeSnapshotStore

Renderer = Callable[[Sequence[Metric], SampleDataCache], None]

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheckEndpoint:
    path: str
    params: Mapping[str, str] | None = None


CHECK_ENDPOINTS: Final[tuple[CheckEndpoint, ...]] = (
    CheckEndpoint("/assets/ethereum"),
    CheckEndpoint("/assets/ethereum", {"expand": "markets"}),
    CheckEndpoint("/assets/ethereum", {"expand": "ohlcv_last_24_h"}),
    CheckEndpoint("/assets/ethereum", {"expand": "price"}),
    CheckEndpoint("/assets/ethereum", {"expand": "sector"}),
    CheckEndpoint("/assets/ethereum", {"expand": "supply"}),
    CheckEndpoint("/market-stats", {"limit": "1"}),
    CheckEndpoint("/transparency", {"limit": "2"}),
    CheckEndpoint("/transparency/10"),
    CheckEndpoint("/transparency/10", {"expand": "asset"}),
)


@dataclass(slots=True)
class SyncResult:
    metrics: list[Metric] = field(default_factory=list[Metric])
    added: list[str] = field(default_factory=list[str])
    removed: list[str] = field(default_factory=list[str])
    omitted: list[Metric] = field(default_factory=list[Metric])
    removed_files: list[str] = field(default_factory=list[str])
    removed_dirs: list[str] = field(default_factory=list[str])
    should_continue: bool = True
    fetch_complete: bool = True
    validation: ValidationResult | None = None

    @property
    def has_changes(self) -> bool:
        return self.should_continue and bool(self.added or self.removed)


@dataclass(slots=True)
class ValidationRunResult:
    metrics: list[Metric] = field(default_factory=list[Metric])
    added: list[str] = field(default_factory=list[str])
    removed: list[str] = field(default_factory=list[str])
    omitted: list[Metric] = field(default_factory=list[Metric])
    fetch_complete: bool = True
    validation: ValidationResult = field(default_factory=ValidationResult)
    shape_check: ShapeCheckingResult = field(default_factory=ShapeCheckingResult)

    @property
    def has_issues(self) -> bool:
        return (
            self.validation.has_issues
            or not self.fetch_complete
            or bool(self.omitted)
            or bool(self.added or self.removed)
            or self.shape_check.has_changes
        )


def run_sync(
    *,
    update_only: bool = False,
    renderer: Renderer | None = None,
    source: CatalogSource | None = None,
    storage: StorageConfig | None = None,
    settings: SyncConfig | None = None,
    today: date | None = None,
) -> SyncResult:
    """Synchronise the generated metric pages with the remote catalog."""

    return asyncio.run(
        sync_catalog(
            update_only=update_only,
            renderer=renderer,
            source=source,
            storage=storage,
            settings=settings,
            today=today,
        )
    )


async def sync_catalog(
    *,
    update_only: bool = False,
    renderer: Renderer | None = None,
    source: CatalogSource | None = None,
    storage: StorageConfig | None = None,
    settings: SyncConfig | None = None,
    today: date | None = None,
) -> SyncResult:
    storage = storage or get_storage_config()
    settings = settings or get_sync_config()
    log.info(
        "Starting metrics sync: update_only=%s, output_dir=%s",
        update_only,
        storage.output_dir,
    )

    async with _open_source(source) as catalog:
        existing_keys = scan_output(storage.output_dir)
        fetched = await fetch_all(
            catalog,
            comparison_store=ComparisonSnapshotFile(storage.comparison_file),
            update_only=update_only,
            page_size=settings.page_size,
        )
        if not fetched.should_continue:
            return SyncResult(
                metrics=fetched.metrics,
                should_continue=False,
                fetch_complete=fetched.complete,
            )

        filtered = filter_projects(fetched.projects)
        metrics = filtered.metrics
        validation = await validate_metrics(
            metrics,
            fetch_sample=sample_fetcher(
                catalog, today=today, lookback_days=settings.sample_lookback_days
            ),
            batch_size=settings.validation_batch_size,
            timeout_seconds=settings.sample_timeout_seconds,
        )

    diff = diff_metric_keys(existing_keys, metrics)
    log.info("Cleaning up obsolete content...")
    cleanup = reconcile_output(existing_keys, metrics, storage.output_dir)

    if renderer is None:
        log.info("No page renderer configured, skipping page generation")
    else:
        log.info("Generating %s metric pages...", len(metrics))
        storage.output_dir.mkdir(parents=True, exist_ok=True)
        renderer(metrics, validation.data_cache)

    if validation.has_issues:
        write_report(storage.report_file, generate_validation_report(validation))

    return SyncResult(
        metrics=metrics,
        added=diff.added,
        removed=diff.removed,
        omitted=filtered.omitted,
        removed_files=cleanup.removed_files,
        removed_dirs=cleanup.removed_dirs,
        should_continue=True,
        fetch_complete=fetched.complete,
        validation=validation,
    )


def run_validation(
    *,
    source: CatalogSource | None = None,
    storage: StorageConfig | None = None,
    settings: SyncConfig | None = None,
    snapshot_store: ShapeSnapshotStore | None = None,
    today: date | None = None,
) -> ValidationRunResult:
    """Validate the catalog and check endpoint shapes without touching generated pages."""

    return asyncio.run(
        validate_catalog(
            source=source,
            storage=storage,
            settings=settings,
            snapshot_store=snapshot_store,
            today=today,
        )
    )


async def validate_catalog(
    *,
    source: CatalogSource | None = None,
    storage: StorageConfig | None = None,
    settings: SyncConfig | None = None,
    snapshot_store: ShapeSnapshotStore | None = None,
    today: date | None = None,
) -> ValidationRunResult:
    storage = storage or get_storage_config()
    settings = settings or get_sync_config()
    store = snapshot_store or FileShapeSnapshotStore(storage.snapshot_dir)
    log.info("Running validation checks...")

    async with _open_source(source) as catalog:
        existing_keys = scan_output(storage.output_dir)
        fetched = await fetch_all(
            catalog,
            comparison_store=ComparisonSnapshotFile(storage.comparison_file),
            update_only=True,
            page_size=settings.page_size,
        )
        filtered = filter_projects(fetched.projects)
        metrics = filtered.metrics
        validation = await validate_metrics(
            metrics,
            fetch_sample=sample_fetcher(
                catalog, today=today, lookback_days=settings.sample_lookback_days
            ),
            batch_size=settings.validation_batch_size,
            timeout_seconds=settings.sample_timeout_seconds,
        )
        diff = diff_metric_keys(existing_keys, metrics)
        shape_check = await check_shapes(catalog, store)

    if validation.has_issues:
        write_report(storage.report_file, generate_validation_report(validation))

    return ValidationRunResult(
        metrics=metrics,
        added=diff.added,
        removed=diff.removed,
        omitted=filtered.omitted,
        fetch_complete=fetched.complete,
        validation=validation,
        shape_check=shape_check,
    )


def run_shape_checks(
    *,
    source: CatalogSource | None = None,
    snapshot_store: ShapeSnapshotStore | None = None,
    endpoints: Sequence[CheckEndpoint] = CHECK_ENDPOINTS,
) -> ShapeCheckingResult:
    async def _run() -> ShapeCheckingResult:
        store = snapshot_store or FileShapeSnapshotStore(get_storage_config().snapshot_dir)
        async with _open_source(source) as catalog:
            return await check_shapes(catalog, store, endpoints)

    return asyncio.run(_run())


async def check_shapes(
    catalog: CatalogSource,
    store: ShapeSnapshotStore,
    endpoints: Sequence[CheckEndpoint] = CHECK_ENDPOINTS,
) -> ShapeCheckingResult:
    """Fetch every check endpoint concurrently; unreachable or non-object responses are skipped."""

    async def fetch_one(endpoint: CheckEndpoint) -> EndpointResponse | None:
        try:
            response = await catalog.fetch_endpoint(endpoint.path, endpoint.params)
        except CatalogFetchError as exc:
            log.warning("Skipping shape check for %s: %s", endpoint.path, exc)
            return None
        if not isinstance(response, Mapping):
            log.warning("Skipping shape check for %s: response is not a JSON object", endpoint.path)
            return None
        return EndpointResponse(endpoint.path, response, endpoint.params)

    fetched = await asyncio.gather(*(fetch_one(endpoint) for endpoint in endpoints))
    return run_shape_checking(store, [response for response in fetched if response is not None])


def sample_fetcher(
    catalog: CatalogSource,
    *,
    today: date | None = None,
    lookback_days: int,
) -> SampleFetcher:
    start_date = (today or date.today()) - timedelta(days=lookback_days)

    async def fetch(metric: Metric) -> object:
        return await catalog.fetch_sample_data(
            identifier=metric.identifier,
            project=metric.project,
            start_date=start_date,
        )

    return fetch


def log_summary(result: SyncResult | ValidationRunResult) -> None:
    """Log what the run did, including partial progress."""

    if isinstance(result, SyncResult) and not result.should_continue:
        log.info("No catalog changes since the last run; nothing to do")
        return

    if not result.fetch_complete:
        log.warning("Catalog fetch stopped early; results are based on a partial catalog")

    parents = dict.fromkeys(metric.parent for metric in result.metrics if metric.parent)
    kinds = categorize_projects(parents)
    log.info(
        "Summary: %s metrics, %s",
        len(result.metrics),
        ", ".join(f"{len(projects)} {kind}" for kind, projects in kinds.items()),
    )

    if result.added:
        log.info("%s new metrics: %s", len(result.added), ", ".join(result.added))
    if result.removed:
        log.warning("%s missing metrics: %s", len(result.removed), ", ".join(result.removed))
    if not result.added and not result.removed:
        log.info("No metric changes detected")

    for metric in result.omitted:
        log.warning("Omitted %s: %s", metric.key, metric.description)

    if isinstance(result, SyncResult):
        if result.removed_files:
            log.info("Removed %s obsolete files", len(result.removed_files))
        if result.removed_dirs:
            log.info("Removed %s empty directories", len(result.removed_dirs))
        validation = result.validation
    else:
        validation = result.validation
        shapes = result.shape_check
        if shapes.has_changes:
            log.warning("%s endpoint shape changes detected", shapes.total_changes)

    if validation is not None and validation.has_issues:
        log.warning(
            "%s validation issues (%s failed fetches)",
            len(validation.issues),
            validation.failed_fetches,
        )


@asynccontextmanager
async def _open_source(source: CatalogSource | None) -> AsyncIterator[CatalogSource]:
    if source is not None:
        yield source
        return
    async with CatalogClient() as client:
        yield client
