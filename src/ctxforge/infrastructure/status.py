"""Context status: summary of ``project.md`` and installed framework files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ctxforge.infrastructure.health import count_marker, size_kb

if TYPE_CHECKING:
    from pathlib import Path

PROJECT_MD = ("docs", "context", "project.md")
PROTOCOLS_DIR = ("docs", "context", "protocols")
CORE_FILES: tuple[str, ...] = (
    "FRAMEWORK.md",
    "LLM-INSTRUCTIONS.md",
    "PERFORMANCE-DIRECTIVES.md",
)

_NAME_RE = re.compile(r"^# (.+)$", re.MULTILINE)
SNAPSHOT_SECTION_RE = re.compile(r"## 📸 State Snapshot")
LEARNING_SECTION_RE = re.compile(r"### Learning:")


@dataclass(frozen=True)
class ContextStatus:
    """What ``ctxforge status`` reports."""

    project_md_found: bool
    size_kb: int = 0
    project_name: str | None = None
    snapshot_sections: int = 0
    learning_sections: int = 0
    missing_core: tuple[str, ...] = ()
    protocols: int | None = None  # None when the directory is absent


def collect_status(project_root: Path) -> ContextStatus:
    """Inspect ``docs/context/`` under *project_root*."""
    project_md = project_root.joinpath(*PROJECT_MD)
    try:
        raw = project_md.read_bytes()
        text = raw.decode("utf-8")
    except (OSError, UnicodeDecodeError):
        return ContextStatus(project_md_found=False)

    name_match = _NAME_RE.search(text)
    context_dir = project_md.parent
    missing = tuple(name for name in CORE_FILES if not (context_dir / name).exists())

    protocols_dir = project_root.joinpath(*PROTOCOLS_DIR)
    protocols: int | None = None
    if protocols_dir.is_dir():
        protocols = sum(1 for p in protocols_dir.iterdir() if p.name.endswith(".md"))

    return ContextStatus(
        project_md_found=True,
        size_kb=size_kb(len(raw)),
        project_name=name_match.group(1).strip() if name_match else None,
        snapshot_sections=count_marker(text, SNAPSHOT_SECTION_RE),
        learning_sections=count_marker(text, LEARNING_SECTION_RE),
        missing_core=missing,
        protocols=protocols,
    )
