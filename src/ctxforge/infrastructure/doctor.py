"""Doctor: framework compliance checks for ``ctxforge validate``."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from ctxforge.infrastructure.health import CONTEXT_FILE, SNAPSHOTS_DIR
from ctxforge.onboarding.integration import LLM_FILES

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

LEARNINGS_HEADING = "## 🧠 Project Learnings"

# v2 installs the upper-case name; v1 projects carry the lower-case one.
PERFORMANCE_DIRECTIVES_FILES = ("PERFORMANCE-DIRECTIVES.md", "performance-directives.md")


class Severity(enum.Enum):
    """Outcome of a single check."""

    OK = "ok"
    ERROR = "error"


@dataclass
class Check:
    """Result of a single validation check."""

    name: str
    severity: Severity
    description: str = ""

    @property
    def passed(self) -> bool:
        return self.severity is Severity.OK


def _context_exists(project_root: Path) -> bool:
    return (project_root / CONTEXT_FILE).exists()


def _llm_files_present(project_root: Path) -> bool:
    return any((project_root / name).exists() for name in LLM_FILES)


def _structure_valid(project_root: Path) -> bool:
    required = (project_root / "docs" / "context", project_root.joinpath(*SNAPSHOTS_DIR))
    return all(p.exists() for p in required)


def _learnings_format(project_root: Path) -> bool:
    context = project_root / CONTEXT_FILE
    if not context.exists():
        return False
    return LEARNINGS_HEADING in context.read_text(encoding="utf-8")


def _performance_directives(project_root: Path) -> bool:
    context_dir = project_root / "docs" / "context"
    return any((context_dir / name).exists() for name in PERFORMANCE_DIRECTIVES_FILES)


CHECKS: tuple[tuple[str, Callable[[Path], bool]], ...] = (
    ("CONTEXT.md exists", _context_exists),
    ("LLM context files present", _llm_files_present),
    ("Framework structure valid", _structure_valid),
    ("Project learnings format", _learnings_format),
    ("Performance directives accessible", _performance_directives),
)


def run_checks(project_root: Path) -> list[Check]:
    """Run every compliance check; a check that errors is reported as failed."""
    results: list[Check] = []
    for name, check in CHECKS:
        try:
            ok = check(project_root)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Check %r raised", name, exc_info=True)
            results.append(Check(name, Severity.ERROR, f"Error: {exc}"))
            continue
        results.append(Check(name, Severity.OK if ok else Severity.ERROR))
    return results
