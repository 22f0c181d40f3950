"""Run-scoped store of sampled metric payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from metricsync.domain.model import metric_key

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(slots=True)
class SampleDataCache:
    """Written by the validator, read by renderers so samples are fetched once per run."""

    _entries: dict[str, object] = field(default_factory=dict[str, object])

    def get(self, project: str, identifier: str) -> object | None:
        return self._entries.get(metric_key(project, identifier))

    def set(self, project: str, identifier: str, data: object) -> None:
        self._entries[metric_key(project, identifier)] = data

    def keys(self) -> list[str]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
