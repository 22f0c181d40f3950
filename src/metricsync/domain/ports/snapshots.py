"""Ports for the run-to-run snapshot files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from metricsync.domain.shapes.model import EndpointSnapshot, Shape

type RawMetric = Mapping[str, object]


@runtime_checkable
class ShapeSnapshotStore(Protocol):
    """One fingerprint per (endpoint, canonical parameter set)."""

    def load(
        self, endpoint: str, params: Mapping[str, str] | None = None
    ) -> EndpointSnapshot | None: ...

    def save(
        self, endpoint: str, shape: Shape, params: Mapping[str, str] | None = None
    ) -> EndpointSnapshot: ...


@runtime_checkable
class ComparisonSnapshotStore(Protocol):
    """Flat copy of the last fetched catalog, volatile fields stripped."""

    def load(self) -> list[dict[str, object]] | None:
        """Return the previous catalog or ``None`` when there is none to compare against."""
        ...

    def save(self, metrics: Sequence[RawMetric]) -> None:
        """Overwrite the stored catalog. Raises ``OSError`` on write failure."""
        ...
