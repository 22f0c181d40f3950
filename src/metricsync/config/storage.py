"""On-disk locations for generated output and run-to-run snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from .env import env_path

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_OUTPUT_DIR: Final[str] = "./api-reference/metrics"
DEFAULT_COMPARISON_FILE: Final[str] = "./metrics.json"
DEFAULT_SNAPSHOT_DIR: Final[str] = "./snapshots"
DEFAULT_REPORT_FILE: Final[str] = "./validation_report.md"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    output_dir: Path
    comparison_file: Path
    snapshot_dir: Path
    report_file: Path

    def with_output_dir(self, output_dir: Path) -> StorageConfig:
        return StorageConfig(
            output_dir=output_dir,
            comparison_file=self.comparison_file,
            snapshot_dir=self.snapshot_dir,
            report_file=self.report_file,
        )


def get_storage_config() -> StorageConfig:
    return StorageConfig(
        output_dir=env_path("METRICSYNC_OUTPUT_DIR", DEFAULT_OUTPUT_DIR),
        comparison_file=env_path("METRICSYNC_COMPARISON_FILE", DEFAULT_COMPARISON_FILE),
        snapshot_dir=env_path("METRICSYNC_SNAPSHOT_DIR", DEFAULT_SNAPSHOT_DIR),
        report_file=env_path("METRICSYNC_REPORT_FILE", DEFAULT_REPORT_FILE),
    )
