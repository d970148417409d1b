"""Context health: marker counting, metrics, score and recommendations.

Counts come from fixed regular expressions over ``CONTEXT.md`` and from the
number of snapshot files; the markdown itself is never parsed.
"""

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from ctxforge.infrastructure.config import DEFAULT_THRESHOLDS, HealthThresholds

if TYPE_CHECKING:
    from pathlib import Path

CONTEXT_FILE = "CONTEXT.md"
SNAPSHOTS_DIR = ("docs", "context", "state-snapshots")

CURRENT_FEATURE_RE = re.compile(r"## 🎭 Current Feature: (.+)")
COMPLETED_FEATURE_RE = re.compile(r"- ✅ \*\*.*?\*\*")
LEARNING_RE = re.compile(r"### PL-\d+:")


@dataclass(frozen=True)
class HealthMetrics:
    """Counts derived from the context document and snapshot directory."""

    size_kb: int = 0
    active_features: int = 0
    completed_features: int = 0
    project_learnings: int = 0
    state_snapshots: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def count_marker(text: str, pattern: re.Pattern[str]) -> int:
    """Number of non-overlapping matches of *pattern* in *text*."""
    return sum(1 for _ in pattern.finditer(text))


def size_kb(num_bytes: int) -> int:
    """Kilobytes, rounded half up."""
    return math.floor(num_bytes / 1024 + 0.5)


def _is_active_feature(text: str) -> bool:
    match = CURRENT_FEATURE_RE.search(text)
    return match is not None and "None" not in match.group(1)


def metrics_from_text(text: str, *, num_bytes: int | None = None) -> HealthMetrics:
    """Compute document metrics for context *text* (snapshots left at zero)."""
    if num_bytes is None:
        num_bytes = len(text.encode("utf-8"))
    return HealthMetrics(
        size_kb=size_kb(num_bytes),
        active_features=1 if _is_active_feature(text) else 0,
        completed_features=count_marker(text, COMPLETED_FEATURE_RE),
        project_learnings=count_marker(text, LEARNING_RE),
    )


def snapshots_dir(project_root: Path) -> Path:
    return project_root.joinpath(*SNAPSHOTS_DIR)


def list_snapshots(project_root: Path) -> list[Path]:
    """Markdown snapshot files, sorted by name.  Empty if the directory is unreadable."""
    directory = snapshots_dir(project_root)
    try:
        return sorted(p for p in directory.iterdir() if p.name.endswith(".md"))
    except OSError:
        return []


def calculate_context_health(project_root: Path) -> HealthMetrics:
    """Compute health metrics for the project at *project_root*.

    A missing or unreadable ``CONTEXT.md`` yields zero document metrics.
    """
    try:
        raw = (project_root / CONTEXT_FILE).read_bytes()
        text = raw.decode("utf-8")
    except (OSError, UnicodeDecodeError):
        document = HealthMetrics()
    else:
        document = metrics_from_text(text, num_bytes=len(raw))

    return HealthMetrics(
        size_kb=document.size_kb,
        active_features=document.active_features,
        completed_features=document.completed_features,
        project_learnings=document.project_learnings,
        state_snapshots=len(list_snapshots(project_root)),
    )


def _tier_penalty(value: int, tiers: tuple[tuple[int, int], ...]) -> int:
    for threshold, penalty in tiers:
        if value > threshold:
            return penalty
    return 0


def calculate_health_score(
    metrics: HealthMetrics,
    thresholds: HealthThresholds = DEFAULT_THRESHOLDS,
) -> int:
    """Score *metrics* from 0 to 100.

    Starts at 100, subtracts one size, one snapshot and one learnings penalty
    tier, adds the activity bonuses, then clamps.
    """
    score = 100
    score -= _tier_penalty(metrics.size_kb, thresholds.size_penalties)
    score -= _tier_penalty(metrics.state_snapshots, thresholds.snapshot_penalties)
    score -= _tier_penalty(metrics.project_learnings, thresholds.learning_penalties)

    if metrics.active_features > 0:
        score += thresholds.active_bonus
    if metrics.completed_features > 0:
        score += thresholds.completed_bonus

    return max(0, min(100, score))


def health_label(score: int, thresholds: HealthThresholds = DEFAULT_THRESHOLDS) -> str:
    """Map a score to ``good`` / ``warning`` / ``critical``."""
    if score >= thresholds.good_score:
        return "good"
    if score >= thresholds.warning_score:
        return "warning"
    return "critical"


def health_recommendations(
    metrics: HealthMetrics,
    score: int,
    thresholds: HealthThresholds = DEFAULT_THRESHOLDS,
) -> list[str]:
    """Suggested actions for an unhealthy context; empty when the score is fine."""
    if score >= thresholds.recommend_below:
        return []

    recommendations: list[str] = []
    if metrics.size_kb > thresholds.size_target_kb:
        recommendations.append('Run "ctxforge optimize" to reduce file size')
    if metrics.state_snapshots > thresholds.snapshot_limit:
        recommendations.append("Archive old state snapshots")
    if metrics.project_learnings > thresholds.learning_limit:
        recommendations.append("Consolidate similar project learnings")
    return recommendations
