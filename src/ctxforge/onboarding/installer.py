"""Standard initialization: install framework documents into a project."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from ctxforge.infrastructure.health import CONTEXT_FILE, snapshots_dir
from ctxforge.onboarding.detection import (
    ProjectClassification,
    detect_project_name,
    detect_project_type,
)
from ctxforge.onboarding.integration import integrate_llm_files
from ctxforge.onboarding.templates import (
    CONTEXT_TEMPLATE,
    FRAMEWORK_FILES,
    customize_template,
    read_framework_file,
)

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

PROJECT_MD_PLACEHOLDER = """\
---
# [Your Project Name]

**Status:** Awaiting initialization

---

Run your LLM with: docs/context/FRAMEWORK.md

The LLM will ask 3 questions and generate this file automatically.

---
"""


@dataclass
class InitResult:
    """Summary of what ``init_project`` did."""

    classification: ProjectClassification
    project_name: str
    created_dirs: list[str] = field(default_factory=list)
    installed: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    project_md_created: bool = False
    context_created: bool = False
    integrated: list[str] = field(default_factory=list)


def context_dir(project_root: Path) -> Path:
    return project_root / "docs" / "context"


def _write_if_missing(path: Path, content: str) -> bool:
    """Write *content* to *path* only if the file does not yet exist.

    Returns ``True`` when a new file was created, ``False`` when skipped.
    """
    if path.exists():
        return False
    path.write_text(content, encoding="utf-8")
    return True


def init_project(project_root: Path, *, today: date | None = None) -> InitResult:
    """Install the context framework into *project_root*.

    Framework documents are always refreshed; ``project.md`` and
    ``CONTEXT.md`` are created only when missing.
    """
    classification = detect_project_type(project_root)
    project_name = detect_project_name(project_root)
    result = InitResult(classification=classification, project_name=project_name)

    dest = context_dir(project_root)
    for directory in (dest, snapshots_dir(project_root)):
        if not directory.exists():
            directory.mkdir(parents=True)
            result.created_dirs.append(directory.relative_to(project_root).as_posix())

    for name in FRAMEWORK_FILES:
        content = read_framework_file(name)
        if content is None:
            logger.warning("%s not found in framework bundle", name)
            result.missing.append(name)
            continue
        (dest / name).write_text(content, encoding="utf-8")
        result.installed.append(name)

    result.project_md_created = _write_if_missing(dest / "project.md", PROJECT_MD_PLACEHOLDER)

    template = read_framework_file(CONTEXT_TEMPLATE)
    if template is None:
        logger.warning("%s not found in framework bundle", CONTEXT_TEMPLATE)
    else:
        context = customize_template(
            template,
            classification,
            project_name,
            today or date.today(),
        )
        result.context_created = _write_if_missing(project_root / CONTEXT_FILE, context)

    result.integrated = integrate_llm_files(project_root)
    logger.debug("init result: %s", result)
    return result
