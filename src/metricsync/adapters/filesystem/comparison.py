"""Flat JSON copy of the last fetched catalog."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from metricsync.domain.ports import RawMetric

log = getLogger(__name__)


class ComparisonSnapshotFile:
    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> list[dict[str, object]] | None:
        if not self.path.exists():
            log.info("No previous metrics snapshot, continuing with sync")
            return None
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log.warning(f"Could not read previous metrics snapshot {self.path}: {exc}")
            return None
        if not isinstance(payload, list):
            log.warning(f"Ignoring metrics snapshot {self.path}: expected a JSON array")
            return None
        items = cast(list[object], payload)
        return [cast(dict[str, object], item) for item in items if isinstance(item, dict)]

    def save(self, metrics: Sequence[RawMetric]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([dict(metric) for metric in metrics], indent=2, default=str),
            encoding="utf-8",
        )
