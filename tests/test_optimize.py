"""Tests for ctxforge.infrastructure.optimize — snapshot archiving."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from ctxforge.infrastructure.config import HealthThresholds
from ctxforge.infrastructure.optimize import archive_old_snapshots, optimize_context

_NOW = 1_700_000_000.0
_DAY = 24 * 60 * 60


def _snapshot(root: Path, name: str, age_days: float) -> Path:
    path = root / "docs" / "context" / "state-snapshots" / name
    path.write_text("# snapshot\n", encoding="utf-8")
    mtime = _NOW - age_days * _DAY
    os.utime(path, (mtime, mtime))
    return path


class TestArchiveOldSnapshots:
    def test_nothing_to_archive(self, tmp_project: Path) -> None:
        assert archive_old_snapshots(tmp_project, max_age_days=30, now=_NOW) == []

    def test_moves_old_snapshots(self, tmp_project: Path) -> None:
        _snapshot(tmp_project, "old.md", 45)
        _snapshot(tmp_project, "new.md", 2)

        archived = archive_old_snapshots(tmp_project, max_age_days=30, now=_NOW)
        assert archived == ["old.md"]
        archive = tmp_project / "docs" / "context" / "archived-snapshots"
        assert (archive / "old.md").is_file()
        assert (tmp_project / "docs" / "context" / "state-snapshots" / "new.md").is_file()

    def test_unmovable_snapshot_skipped(
        self,
        tmp_project: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        _snapshot(tmp_project, "a-locked.md", 45)
        _snapshot(tmp_project, "b-old.md", 45)
        real_rename = Path.rename

        def _rename(self: Path, target: Path) -> Path:
            if self.name == "a-locked.md":
                raise PermissionError("permission denied")
            return real_rename(self, target)

        monkeypatch.setattr(Path, "rename", _rename)
        archived = archive_old_snapshots(tmp_project, max_age_days=30, now=_NOW)
        assert archived == ["b-old.md"]
        assert "Could not archive a-locked.md" in caplog.text
        assert (tmp_project / "docs" / "context" / "state-snapshots" / "a-locked.md").exists()

    def test_missing_snapshots_dir(self, tmp_path: Path) -> None:
        assert archive_old_snapshots(tmp_path, max_age_days=0, now=_NOW) == []


class TestOptimizeContext:
    def test_without_context(self, tmp_project: Path) -> None:
        result = optimize_context(tmp_project, now=_NOW)
        assert result.context_size_kb is None
        assert not result.oversized

    def test_within_target(self, tmp_project: Path) -> None:
        (tmp_project / "CONTEXT.md").write_text("x" * 2048)
        result = optimize_context(tmp_project, now=_NOW)
        assert result.context_size_kb == 2
        assert not result.oversized

    def test_oversized_with_custom_target(self, tmp_project: Path) -> None:
        (tmp_project / "CONTEXT.md").write_text("x" * 4096)
        result = optimize_context(
            tmp_project, thresholds=HealthThresholds(size_target_kb=3), now=_NOW
        )
        assert result.size_target_kb == 3
        assert result.oversized

    def test_archives_with_max_age(self, tmp_project: Path) -> None:
        _snapshot(tmp_project, "week.md", 8)
        result = optimize_context(tmp_project, max_age_days=7, now=_NOW)
        assert result.archived == ["week.md"]
