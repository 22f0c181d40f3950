"""Discover which metrics already have a page in the output tree."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from metricsync.domain.model import metric_key

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

PAGE_SUFFIX: Final[str] = ".mdx"
# project/identifier.mdx and the older project/category/identifier.mdx
KEYED_DEPTHS: Final[frozenset[int]] = frozenset({2, 3})


def page_filename(identifier: str) -> str:
    return f"{identifier}{PAGE_SUFFIX}"


def scan_output(root: Path) -> set[str]:
    """Return the ``project/identifier`` keys of every page under ``root``.

    Files directly in ``root`` (catalog pages and the like) are not metrics
    and are ignored. An unreadable or missing tree counts as empty.
    """

    try:
        pages = find_pages(root)
    except OSError as exc:
        log.info(f"No existing metrics found ({exc})")
        return set()

    log.info(f"Found {len(pages)} existing metric files")
    keys: set[str] = set()
    for page in pages:
        parts = page.relative_to(root).parts
        if len(parts) in KEYED_DEPTHS:
            keys.add(metric_key(parts[0], page.stem))
    log.info(f"Cataloged {len(keys)} existing metrics")
    return keys


def find_pages(directory: Path) -> list[Path]:
    """Every page file below ``directory``, depth-first. Raises ``OSError`` on read failure."""

    pages: list[Path] = []
    for entry in sorted(directory.iterdir()):
        if entry.is_dir():
            pages.extend(find_pages(entry))
        elif entry.name.endswith(PAGE_SUFFIX):
            pages.append(entry)
    return pages
