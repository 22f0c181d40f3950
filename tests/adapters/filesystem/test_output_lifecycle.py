from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from metricsync.adapters.filesystem import (
    find_metric_pages,
    prune_empty_directories,
    reconcile_output,
    scan_output,
)
from tests.helpers.catalog import make_metric, write_pages

if TYPE_CHECKING:
    from pathlib import Path


def test_removes_legacy_page_and_keeps_non_empty_directory(tmp_path: Path) -> None:
    write_pages(tmp_path, "chains/bitcoin/fees.mdx", "chains/bitcoin/txcount.mdx")
    existing = scan_output(tmp_path)

    result = reconcile_output(existing, [make_metric("txcount", "chains")], tmp_path)

    assert result.removed_files == ["chains/bitcoin/fees.mdx"]
    assert result.removed_dirs == []
    assert (tmp_path / "chains" / "bitcoin" / "txcount.mdx").exists()
    assert not (tmp_path / "chains" / "bitcoin" / "fees.mdx").exists()


def test_finds_direct_page_before_legacy_copies(tmp_path: Path) -> None:
    write_pages(tmp_path, "aave/tvl.mdx", "aave/lending/tvl.mdx")

    assert find_metric_pages(tmp_path / "aave", "tvl") == [
        tmp_path / "aave" / "tvl.mdx",
        tmp_path / "aave" / "lending" / "tvl.mdx",
    ]


def test_direct_and_legacy_copies_are_both_removed(tmp_path: Path) -> None:
    write_pages(tmp_path, "aave/tvl.mdx", "aave/lending/tvl.mdx", "bitcoin/fees.mdx")
    current = [make_metric("fees", "bitcoin")]

    first = reconcile_output(scan_output(tmp_path), current, tmp_path)
    second = reconcile_output(scan_output(tmp_path), current, tmp_path)

    assert first.removed_files == ["aave/tvl.mdx", "aave/lending/tvl.mdx"]
    assert sorted(first.removed_dirs) == ["aave", "aave/lending"]
    assert second.removed_files == []
    assert second.removed_dirs == []


def test_reconcile_is_idempotent(tmp_path: Path) -> None:
    write_pages(tmp_path, "aave/tvl.mdx", "aave/lending/fees.mdx", "bitcoin/fees.mdx")
    existing = scan_output(tmp_path)
    current = [make_metric("fees", "bitcoin")]

    first = reconcile_output(existing, current, tmp_path)
    second = reconcile_output(existing, current, tmp_path)

    assert sorted(first.removed_files) == ["aave/lending/fees.mdx", "aave/tvl.mdx"]
    assert sorted(first.removed_dirs) == ["aave", "aave/lending"]
    assert second.removed_files == []
    assert second.removed_dirs == []


def test_prune_collapses_nested_empty_chains(tmp_path: Path) -> None:
    (tmp_path / "a" / "b" / "c").mkdir(parents=True)
    (tmp_path / "d" / "e").mkdir(parents=True)
    write_pages(tmp_path, "d/keep.mdx")
    removed: list[str] = []

    prune_empty_directories(tmp_path, removed)

    assert removed == ["a/b/c", "a/b", "a", "d/e"]
    assert tmp_path.exists()
    remaining = [path for path in tmp_path.rglob("*") if path.is_dir()]
    assert all(any(path.iterdir()) for path in remaining)


def test_root_is_never_removed(tmp_path: Path) -> None:
    root = tmp_path / "metrics"
    root.mkdir()

    result = reconcile_output(set(), [], root)

    assert result.removed_dirs == []
    assert root.exists()


def test_missing_page_is_skipped(tmp_path: Path) -> None:
    result = reconcile_output({"ghost/fees"}, [], tmp_path)

    assert result.removed_files == []


def test_unremovable_file_is_logged_and_skipped(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    write_pages(tmp_path, "aave/tvl.mdx", "bitcoin/fees.mdx")
    original_unlink = type(tmp_path).unlink

    def flaky_unlink(self: Path, missing_ok: bool = False) -> None:
        if self.name == "tvl.mdx":
            raise PermissionError("locked")
        original_unlink(self, missing_ok=missing_ok)

    monkeypatch.setattr(type(tmp_path), "unlink", flaky_unlink)

    result = reconcile_output({"aave/tvl", "bitcoin/fees"}, [], tmp_path)

    assert result.removed_files == ["bitcoin/fees.mdx"]
    assert "Failed to remove metric aave/tvl" in caplog.text
    assert (tmp_path / "aave" / "tvl.mdx").exists()


def test_unremovable_directory_is_logged_and_siblings_still_pruned(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    for name in ("aave", "bitcoin", "curve"):
        (tmp_path / name).mkdir()
    original_rmdir = type(tmp_path).rmdir

    def flaky_rmdir(self: Path) -> None:
        if self.name == "bitcoin":
            raise PermissionError("locked")
        original_rmdir(self)

    monkeypatch.setattr(type(tmp_path), "rmdir", flaky_rmdir)

    result = reconcile_output(set(), [], tmp_path)

    assert result.removed_dirs == ["aave", "curve"]
    assert "Failed to clean up directory" in caplog.text
    assert (tmp_path / "bitcoin").is_dir()
    assert not (tmp_path / "aave").exists()
    assert not (tmp_path / "curve").exists()
