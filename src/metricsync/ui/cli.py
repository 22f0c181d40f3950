from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from metricsync.app import log_summary, run_shape_checks, run_sync, run_validation
from metricsync.common.logging import configure_logging
from metricsync.config import ConfigurationError, get_storage_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CHANGED = 2


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Keep metric documentation in sync with the API")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Sync metric pages with the catalog")
    sync.add_argument(
        "--update-only",
        action="store_true",
        help="Skip the sync when the catalog is unchanged since the last run",
    )
    sync.add_argument(
        "--output-dir",
        type=Path,
        help="Directory holding the generated metric pages (defaults to config)",
    )

    subparsers.add_parser("validate", help="Validate catalog metrics without generating pages")
    subparsers.add_parser("check-shapes", help="Detect response shape drift on fixed endpoints")

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(verbose=parsed_args.verbose)

    try:
        if parsed_args.command == "sync":
            storage = get_storage_config()
            if parsed_args.output_dir is not None:
                storage = storage.with_output_dir(parsed_args.output_dir)
            result = run_sync(update_only=parsed_args.update_only, storage=storage)
            log_summary(result)
            exit_code = EXIT_CHANGED if result.has_changes else EXIT_OK
        elif parsed_args.command == "validate":
            validation = run_validation()
            log_summary(validation)
            if validation.has_issues:
                log.warning("Validation issues detected (see above)")
                exit_code = EXIT_FAILURE
            else:
                log.info("All validation checks passed")
                exit_code = EXIT_OK
        elif parsed_args.command == "check-shapes":
            shapes = run_shape_checks()
            exit_code = EXIT_FAILURE if shapes.has_changes else EXIT_OK
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError as exc:
        log.error("Configuration error: %s", exc)  # noqa: TRY400
        sys.exit(EXIT_FAILURE)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(EXIT_FAILURE)

    sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(EXIT_OK)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
