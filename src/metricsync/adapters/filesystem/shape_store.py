"""Shape snapshots stored as one JSON file per endpoint and parameter set."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from metricsync.domain.shapes import EndpointSnapshot

from .shape_schema import SnapshotFilePayload
from .shape_translator import snapshot_from_payload, snapshot_to_payload

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

    from metricsync.domain.shapes import Shape

log = getLogger(__name__)


def snapshot_filename(endpoint: str, params: Mapping[str, str] | None = None) -> str:
    """Deterministic file name; parameter order never changes the result.

    >>> snapshot_filename("/transparency/10", {"expand": "asset"})
    'transparency_10__expand-asset.json'
    """

    sanitized = endpoint.removeprefix("/").replace("/", "_")
    if params:
        joined = "_".join(f"{key}-{value}" for key, value in sorted(params.items()))
        return f"{sanitized}__{joined.replace('/', '_')}.json"
    return f"{sanitized}.json"


class FileShapeSnapshotStore:
    def __init__(
        self,
        directory: Path,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self.directory = directory
        self._clock = clock

    def path_for(self, endpoint: str, params: Mapping[str, str] | None = None) -> Path:
        return self.directory / snapshot_filename(endpoint, params)

    def load(
        self, endpoint: str, params: Mapping[str, str] | None = None
    ) -> EndpointSnapshot | None:
        path = self.path_for(endpoint, params)
        if not path.exists():
            return None
        try:
            payload = SnapshotFilePayload.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as exc:
            log.warning(f"Ignoring unreadable shape snapshot {path}: {exc}")
            return None
        return snapshot_from_payload(payload)

    def save(
        self, endpoint: str, shape: Shape, params: Mapping[str, str] | None = None
    ) -> EndpointSnapshot:
        snapshot = EndpointSnapshot(
            endpoint=endpoint,
            params=dict(params) if params else None,
            shape=shape,
            captured_at=self._clock(),
        )
        path = self.path_for(endpoint, params)
        payload = snapshot_to_payload(snapshot)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(payload.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
        except OSError as exc:
            log.warning(f"Could not write shape snapshot {path}: {exc}")
        return snapshot
