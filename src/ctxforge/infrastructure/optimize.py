"""Context optimization: archive stale snapshots, check context size."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ctxforge.infrastructure.config import DEFAULT_THRESHOLDS, HealthThresholds
from ctxforge.infrastructure.health import CONTEXT_FILE, list_snapshots, size_kb

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

ARCHIVE_DIR = ("docs", "context", "archived-snapshots")
_SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class OptimizeResult:
    """Outcome of an optimize run."""

    archived: list[str] = field(default_factory=list)
    context_size_kb: int | None = None  # None when CONTEXT.md is absent
    size_target_kb: int = DEFAULT_THRESHOLDS.size_target_kb

    @property
    def oversized(self) -> bool:
        return self.context_size_kb is not None and self.context_size_kb > self.size_target_kb


def archive_old_snapshots(
    project_root: Path,
    *,
    max_age_days: int,
    now: float | None = None,
) -> list[str]:
    """Move snapshots last modified more than *max_age_days* ago to the archive.

    Returns the archived file names.  Snapshots that cannot be inspected or
    moved are skipped with a warning.
    """
    cutoff = (time.time() if now is None else now) - max_age_days * _SECONDS_PER_DAY
    archive = project_root.joinpath(*ARCHIVE_DIR)
    archived: list[str] = []

    for snapshot in list_snapshots(project_root):
        try:
            if not snapshot.is_file() or snapshot.stat().st_mtime >= cutoff:
                continue
            archive.mkdir(parents=True, exist_ok=True)
            snapshot.rename(archive / snapshot.name)
        except OSError as exc:
            logger.warning("Could not archive %s: %s", snapshot.name, exc)
            continue
        logger.info("Archived snapshot %s", snapshot.name)
        archived.append(snapshot.name)
    return archived


def optimize_context(
    project_root: Path,
    *,
    max_age_days: int = 30,
    thresholds: HealthThresholds = DEFAULT_THRESHOLDS,
    now: float | None = None,
) -> OptimizeResult:
    """Archive old snapshots and measure ``CONTEXT.md``."""
    result = OptimizeResult(size_target_kb=thresholds.size_target_kb)
    result.archived = archive_old_snapshots(project_root, max_age_days=max_age_days, now=now)

    context = project_root / CONTEXT_FILE
    if context.is_file():
        result.context_size_kb = size_kb(context.stat().st_size)
    return result
