"""Synchronization defaults for the fetch and validation stages."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 500
DEFAULT_VALIDATION_BATCH_SIZE = 100
DEFAULT_SAMPLE_TIMEOUT_SECONDS = 5.0
DEFAULT_SAMPLE_LOOKBACK_DAYS = 5


@dataclass(frozen=True, slots=True)
class SyncConfig:
    page_size: int = DEFAULT_PAGE_SIZE
    validation_batch_size: int = DEFAULT_VALIDATION_BATCH_SIZE
    sample_timeout_seconds: float = DEFAULT_SAMPLE_TIMEOUT_SECONDS
    sample_lookback_days: int = DEFAULT_SAMPLE_LOOKBACK_DAYS


def get_sync_config() -> SyncConfig:
    return SyncConfig()
