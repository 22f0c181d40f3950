"""Delete pages of metrics that left the catalog and prune empty directories."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from metricsync.domain.reconciliation import diff_metric_keys

from .scanner import page_filename

if TYPE_CHECKING:
    from collections.abc import Iterable, Set
    from pathlib import Path

    from metricsync.domain.model import Metric

log = getLogger(__name__)


@dataclass(slots=True)
class CleanupResult:
    removed_files: list[str] = field(default_factory=list[str])
    removed_dirs: list[str] = field(default_factory=list[str])

    @property
    def has_removals(self) -> bool:
        return bool(self.removed_files or self.removed_dirs)


def reconcile_output(
    existing_keys: Set[str],
    current_metrics: Iterable[Metric],
    root: Path,
) -> CleanupResult:
    """Remove obsolete pages, then collapse any directories left empty.

    Every filesystem failure is logged and skipped. Running this twice on the
    same tree removes nothing the second time.
    """

    result = CleanupResult()
    diff = diff_metric_keys(existing_keys, current_metrics)

    log.info("Removing obsolete metric files...")
    for key in diff.removed:
        project, _, identifier = key.partition("/")
        try:
            pages = find_metric_pages(root / project, identifier)
        except OSError as exc:
            log.warning(f"Failed to remove metric {key}: {exc}")
            continue
        for page in pages:
            try:
                page.unlink(missing_ok=True)
            except OSError as exc:
                log.warning(f"Failed to remove metric {key}: {exc}")
                continue
            relative = page.relative_to(root).as_posix()
            log.info(f"Removed {relative}")
            result.removed_files.append(relative)

    log.info("Cleaning up empty directories...")
    prune_empty_directories(root, result.removed_dirs)
    return result


def find_metric_pages(project_dir: Path, identifier: str) -> list[Path]:
    """Every page for ``identifier``: the direct one first, then one level down."""

    if not project_dir.is_dir():
        return []
    filename = page_filename(identifier)
    pages: list[Path] = []
    direct = project_dir / filename
    if direct.is_file():
        pages.append(direct)
    for child in sorted(project_dir.iterdir()):
        candidate = child / filename
        if child.is_dir() and candidate.is_file():
            pages.append(candidate)
    return pages


def prune_empty_directories(root: Path, removed: list[str], directory: Path | None = None) -> None:
    """Post-order sweep; ``root`` itself is never removed."""

    current = root if directory is None else directory
    try:
        if not current.is_dir():
            return
        for child in sorted(current.iterdir()):
            if child.is_dir() and not child.is_symlink():
                prune_empty_directories(root, removed, child)

        if current != root and not any(current.iterdir()):
            current.rmdir()
            relative = current.relative_to(root).as_posix()
            log.info(f"Removed empty directory {relative}/")
            removed.append(relative)
    except OSError as exc:
        log.warning(f"Failed to clean up directory {current}: {exc}")
