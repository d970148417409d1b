"""Tests for ctxforge.infrastructure.status — ``collect_status``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ctxforge.infrastructure.status import CORE_FILES, collect_status

if TYPE_CHECKING:
    from pathlib import Path

_PROJECT_MD = """\
# Shop

Some vision text.

## 📸 State Snapshot - 2025-01-01
## 📸 State Snapshot - 2025-01-08

### Learning: keep components small
"""


class TestCollectStatus:
    def test_missing_project_md(self, tmp_project: Path) -> None:
        status = collect_status(tmp_project)
        assert not status.project_md_found

    def test_reads_sections(self, tmp_project: Path) -> None:
        context_dir = tmp_project / "docs" / "context"
        (context_dir / "project.md").write_text(_PROJECT_MD, encoding="utf-8")
        status = collect_status(tmp_project)
        assert status.project_md_found
        assert status.project_name == "Shop"
        assert status.snapshot_sections == 2
        assert status.learning_sections == 1
        assert status.missing_core == CORE_FILES
        assert status.protocols is None

    def test_core_files_and_protocols(self, tmp_project: Path) -> None:
        context_dir = tmp_project / "docs" / "context"
        (context_dir / "project.md").write_text("# Shop\n", encoding="utf-8")
        for name in CORE_FILES:
            (context_dir / name).write_text("# doc\n")
        protocols = context_dir / "protocols"
        protocols.mkdir()
        (protocols / "review.md").write_text("# Review\n")
        (protocols / "notes.txt").write_text("skip\n")

        status = collect_status(tmp_project)
        assert status.missing_core == ()
        assert status.protocols == 1

    def test_name_must_start_line(self, tmp_project: Path) -> None:
        context_dir = tmp_project / "docs" / "context"
        (context_dir / "project.md").write_text("text # not a title\n", encoding="utf-8")
        assert collect_status(tmp_project).project_name is None
