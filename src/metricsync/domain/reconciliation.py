"""Set difference between the generated output and the fetched catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Set

    from metricsync.domain.model import Metric


@dataclass(frozen=True, slots=True)
class MetricDiff:
    added: list[str] = field(default_factory=list[str])
    removed: list[str] = field(default_factory=list[str])

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)


def diff_metric_keys(existing: Set[str], incoming: Iterable[Metric]) -> MetricDiff:
    """``added = incoming - existing``, ``removed = existing - incoming``.

    Keys are compared verbatim; the scanner and ``Metric.key`` must produce
    the same ``project/identifier`` spelling.
    """

    incoming_keys = dict.fromkeys(metric.key for metric in incoming)
    added = [key for key in incoming_keys if key not in existing]
    removed = sorted(key for key in existing if key not in incoming_keys)
    return MetricDiff(added=added, removed=removed)
