from __future__ import annotations

from pathlib import Path

import pytest

from metricsync.app import SyncResult, ValidationRunResult
from metricsync.config import MissingConfigurationError, StorageConfig
from metricsync.domain.shapes import (
    ShapeChange,
    ShapeChangeType,
    ShapeCheckingResult,
    ShapeCheckResult,
)
from metricsync.ui import cli as cli_module


def _run(argv: list[str]) -> int | str | None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(argv)
    return excinfo.value.code


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "configure_logging", lambda **_: None)
    monkeypatch.setattr(cli_module, "log_summary", lambda _result: None)


def test_sync_exits_zero_without_changes(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> SyncResult:
        captured.update(kwargs)
        return SyncResult()

    monkeypatch.setattr(cli_module, "run_sync", fake_sync)

    assert _run(["sync"]) == 0
    assert captured["update_only"] is False


def test_sync_exits_two_when_metrics_added(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "run_sync", lambda **_: SyncResult(added=["aave/tvl"]))

    assert _run(["sync", "--update-only"]) == 2


def test_sync_unchanged_update_only_exits_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        cli_module,
        "run_sync",
        lambda **_: SyncResult(added=["aave/tvl"], should_continue=False),
    )

    assert _run(["sync", "--update-only"]) == 0


def test_sync_output_dir_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> SyncResult:
        captured.update(kwargs)
        return SyncResult()

    monkeypatch.setattr(cli_module, "run_sync", fake_sync)

    _run(["sync", "--output-dir", str(tmp_path / "pages")])

    storage = captured["storage"]
    assert isinstance(storage, StorageConfig)
    assert storage.output_dir == tmp_path / "pages"


def test_configuration_error_exits_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_sync(**_: object) -> SyncResult:
        raise MissingConfigurationError("Missing configuration for: METRICSYNC_API_KEY")

    monkeypatch.setattr(cli_module, "run_sync", fake_sync)

    assert _run(["sync"]) == 1


def test_unexpected_error_exits_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_validation() -> ValidationRunResult:
        raise OSError("disk full")

    monkeypatch.setattr(cli_module, "run_validation", fake_validation)

    assert _run(["validate"]) == 1


def test_validate_exit_codes(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "run_validation", lambda: ValidationRunResult())
    assert _run(["validate"]) == 0

    monkeypatch.setattr(
        cli_module, "run_validation", lambda: ValidationRunResult(removed=["aave/tvl"])
    )
    assert _run(["validate"]) == 1


def test_check_shapes_exit_codes(monkeypatch: pytest.MonkeyPatch) -> None:
    drift = ShapeCheckingResult(
        results=[
            ShapeCheckResult(
                endpoint="/market-stats",
                params={"limit": "1"},
                changes=[ShapeChange("total", ShapeChangeType.TYPE_CHANGED, "number", "string")],
                is_new=False,
            )
        ]
    )

    monkeypatch.setattr(cli_module, "run_shape_checks", lambda: ShapeCheckingResult())
    assert _run(["check-shapes"]) == 0

    monkeypatch.setattr(cli_module, "run_shape_checks", lambda: drift)
    assert _run(["check-shapes"]) == 1


def test_unknown_command_is_rejected() -> None:
    assert _run(["publish"]) == 2


def test_sigint_handler_exits_cleanly() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.sigint_handler(2, None)

    assert excinfo.value.code == 0
