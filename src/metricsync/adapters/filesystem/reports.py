"""Write the validation report next to the generated output."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


def write_report(path: Path, content: str) -> bool:
    """Write ``content`` to ``path``; an empty report removes any stale file."""

    try:
        if not content:
            path.unlink(missing_ok=True)
            return False
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        log.warning(f"Could not write validation report {path}: {exc}")
        return False
    log.info(f"Validation report written to {path}")
    return True
