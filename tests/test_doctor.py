"""Tests for ctxforge.infrastructure.doctor — framework compliance checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ctxforge.infrastructure.doctor import CHECKS, Severity, run_checks

if TYPE_CHECKING:
    from pathlib import Path


def _compliant_project(root: Path) -> Path:
    context_dir = root / "docs" / "context"
    (context_dir / "state-snapshots").mkdir(parents=True)
    (context_dir / "PERFORMANCE-DIRECTIVES.md").write_text("# Directives\n")
    (root / "CONTEXT.md").write_text("# Ctx\n\n## 🧠 Project Learnings\n", encoding="utf-8")
    (root / "AGENTS.md").write_text("# Agents\n")
    return root


class TestRunChecks:
    def test_empty_project_fails_everything(self, tmp_path: Path) -> None:
        checks = run_checks(tmp_path)
        assert len(checks) == len(CHECKS) == 5
        assert not any(c.passed for c in checks)

    def test_check_order(self, tmp_path: Path) -> None:
        names = [c.name for c in run_checks(tmp_path)]
        assert names == [
            "CONTEXT.md exists",
            "LLM context files present",
            "Framework structure valid",
            "Project learnings format",
            "Performance directives accessible",
        ]

    def test_compliant_project(self, tmp_path: Path) -> None:
        checks = run_checks(_compliant_project(tmp_path))
        assert all(c.passed for c in checks)
        assert all(c.severity is Severity.OK for c in checks)

    def test_missing_learnings_heading(self, tmp_path: Path) -> None:
        root = _compliant_project(tmp_path)
        (root / "CONTEXT.md").write_text("# Ctx\n", encoding="utf-8")
        failed = [c.name for c in run_checks(root) if not c.passed]
        assert failed == ["Project learnings format"]

    def test_missing_snapshots_dir(self, tmp_path: Path) -> None:
        root = _compliant_project(tmp_path)
        (root / "docs" / "context" / "state-snapshots").rmdir()
        failed = [c.name for c in run_checks(root) if not c.passed]
        assert failed == ["Framework structure valid"]

    def test_lowercase_directives_accepted(self, tmp_path: Path) -> None:
        root = _compliant_project(tmp_path)
        context_dir = root / "docs" / "context"
        (context_dir / "PERFORMANCE-DIRECTIVES.md").unlink()
        (context_dir / "performance-directives.md").write_text("# Directives\n")
        assert all(c.passed for c in run_checks(root))

    def test_any_llm_file_counts(self, tmp_path: Path) -> None:
        root = _compliant_project(tmp_path)
        (root / "AGENTS.md").unlink()
        (root / "GEMINI.md").write_text("# Gemini\n")
        assert all(c.passed for c in run_checks(root))

    def test_undecodable_context_reports_error(self, tmp_path: Path) -> None:
        root = _compliant_project(tmp_path)
        (root / "CONTEXT.md").write_bytes(b"\xff\xfe\xfa")
        by_name = {c.name: c for c in run_checks(root)}
        learnings = by_name["Project learnings format"]
        assert not learnings.passed
        assert learnings.description.startswith("Error:")
        assert by_name["CONTEXT.md exists"].passed
