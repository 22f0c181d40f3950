"""Two-phase metric validation: static data-type checks, then live samples.

Live samples are fetched in fixed-size batches. Batches run strictly one
after another; the fetches inside a batch run concurrently and each has its
own timeout, so a slow or failing metric only costs its own result.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from metricsync.config.sync import DEFAULT_SAMPLE_TIMEOUT_SECONDS, DEFAULT_VALIDATION_BATCH_SIZE
from metricsync.domain.model import IssueKind, Metric, ValidationIssue
from metricsync.domain.ports.fetching import CatalogFetchError

from .cache import SampleDataCache
from .data_point import validate_metric_data
from .data_type import validate_data_type

if TYPE_CHECKING:
    from collections.abc import Sequence

log = getLogger(__name__)

SampleFetcher = Callable[[Metric], Awaitable[object]]


@dataclass(frozen=True, slots=True)
class SampleFetched:
    metric: Metric
    response: object


@dataclass(frozen=True, slots=True)
class SampleFetchFailed:
    metric: Metric
    error: str


type SampleOutcome = SampleFetched | SampleFetchFailed


@dataclass(slots=True)
class ValidationResult:
    issues: list[ValidationIssue] = field(default_factory=list[ValidationIssue])
    total_checked: int = 0
    failed_fetches: int = 0
    data_cache: SampleDataCache = field(default_factory=SampleDataCache)
    data_type_issue_count: int = 0
    batch_count: int = 0

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)


def batched[T](items: Sequence[T], size: int) -> list[Sequence[T]]:
    if size < 1:
        raise ValueError("batch size must be at least 1")
    return [items[start : start + size] for start in range(0, len(items), size)]


async def validate_metrics(
    metrics: Sequence[Metric],
    *,
    fetch_sample: SampleFetcher,
    batch_size: int = DEFAULT_VALIDATION_BATCH_SIZE,
    timeout_seconds: float = DEFAULT_SAMPLE_TIMEOUT_SECONDS,
    cache: SampleDataCache | None = None,
) -> ValidationResult:
    """Validate every metric and collect the sampled payloads.

    Every finding is also attached to its metric. Successful samples are cached
    under ``project/identifier`` whether or not they pass validation.
    """

    result = ValidationResult(
        total_checked=len(metrics),
        data_cache=cache if cache is not None else SampleDataCache(),
    )

    log.info("Validating metric data feeds...")
    log.info("Checking data_type consistency for %s metrics", len(metrics))
    for metric in metrics:
        data_type_issues = validate_data_type(metric)
        result.data_type_issue_count += len(data_type_issues)
        _record(result, data_type_issues)

    batches = batched(metrics, batch_size)
    result.batch_count = len(batches)
    log.info(
        "Fetching %s metrics in %s batches of up to %s each...",
        len(metrics),
        len(batches),
        batch_size,
    )

    for index, batch in enumerate(batches, start=1):
        outcomes = await asyncio.gather(
            *(_fetch_one(metric, fetch_sample, timeout_seconds) for metric in batch)
        )
        for outcome in outcomes:
            _apply_outcome(result, outcome)
        log.debug("Batch %s/%s done", index, len(batches))

    _log_results(result)
    return result


async def _fetch_one(
    metric: Metric,
    fetch_sample: SampleFetcher,
    timeout_seconds: float,
) -> SampleOutcome:
    try:
        async with asyncio.timeout(timeout_seconds):
            response = await fetch_sample(metric)
    except TimeoutError:
        return SampleFetchFailed(metric, f"timed out after {timeout_seconds:g}s")
    except CatalogFetchError as exc:
        return SampleFetchFailed(metric, str(exc) or type(exc).__name__)
    except Exception as exc:
        log.warning("Unexpected error fetching sample for %s: %s", metric.key, exc)
        return SampleFetchFailed(metric, f"{type(exc).__name__}: {exc}")
    return SampleFetched(metric, response)


def _apply_outcome(result: ValidationResult, outcome: SampleOutcome) -> None:
    match outcome:
        case SampleFetchFailed(metric=metric, error=error):
            result.failed_fetches += 1
            issue = ValidationIssue(metric, IssueKind.FETCH_ERROR, f"Failed to fetch: {error}")
            _record(result, [issue])
        case SampleFetched(metric=metric, response=response):
            result.data_cache.set(metric.project, metric.identifier, response)
            _record(result, validate_metric_data(metric, response))


def _record(result: ValidationResult, issues: list[ValidationIssue]) -> None:
    for issue in issues:
        issue.metric.add_finding(issue)
        result.issues.append(issue)


def _log_results(result: ValidationResult) -> None:
    if result.data_type_issue_count:
        log.warning("Found %s data_type inconsistencies", result.data_type_issue_count)
    else:
        log.info("All metrics have consistent data_type values")

    if result.failed_fetches:
        log.warning("%s sample fetches failed", result.failed_fetches)

    if result.issues:
        log.warning("Found %s validation issues", len(result.issues))
    else:
        log.info("All %s metrics passed validation", result.total_checked)
