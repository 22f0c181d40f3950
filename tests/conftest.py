from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from metricsync.config import StorageConfig, SyncConfig

if TYPE_CHECKING:
    from pathlib import Path

CATALOG_ENV_VARS = (
    "METRICSYNC_API_KEY",
    "METRICSYNC_API_BASE_URL",
    "METRICSYNC_API_TIMEOUT",
    "METRICSYNC_OUTPUT_DIR",
    "METRICSYNC_COMPARISON_FILE",
    "METRICSYNC_SNAPSHOT_DIR",
    "METRICSYNC_REPORT_FILE",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in CATALOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def storage_config(tmp_path: Path) -> StorageConfig:
    return StorageConfig(
        output_dir=tmp_path / "api-reference" / "metrics",
        comparison_file=tmp_path / "metrics.json",
        snapshot_dir=tmp_path / "snapshots",
        report_file=tmp_path / "validation_report.md",
    )


@pytest.fixture
def fast_sync_config() -> SyncConfig:
    return SyncConfig(page_size=2, validation_batch_size=100, sample_timeout_seconds=1.0)
