"""Shared logging helpers for metricsync."""

from __future__ import annotations

import logging


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Initialise the root logger with a terse CLI format.

    ``verbose`` switches to DEBUG so per-file and per-page details show up.
    Pass ``force=True`` to reconfigure from tests.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
