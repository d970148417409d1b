"""Tests for ctxforge.infrastructure.health — markers, metrics, score."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import pytest

from ctxforge.infrastructure.config import HealthThresholds
from ctxforge.infrastructure.health import (
    COMPLETED_FEATURE_RE,
    LEARNING_RE,
    HealthMetrics,
    calculate_context_health,
    calculate_health_score,
    count_marker,
    health_label,
    health_recommendations,
    metrics_from_text,
    size_kb,
)

if TYPE_CHECKING:
    from pathlib import Path

_CONTEXT = """\
# Shop - Development Context

## 🎭 Current Feature: Product search

## ✅ Completed Features
- ✅ **Login** - email and password
- ✅ **Cart** - add and remove items

## 🧠 Project Learnings
### PL-001: Debounce search
### PL-002: Cache categories
"""


# ---------------------------------------------------------------------------
# count_marker
# ---------------------------------------------------------------------------


class TestCountMarker:
    def test_no_matches(self) -> None:
        assert count_marker("plain text", LEARNING_RE) == 0

    def test_counts_learnings(self) -> None:
        assert count_marker(_CONTEXT, LEARNING_RE) == 2

    def test_counts_completed(self) -> None:
        assert count_marker(_CONTEXT, COMPLETED_FEATURE_RE) == 2

    def test_learning_needs_digits(self) -> None:
        assert count_marker("### PL-NNN: Title", LEARNING_RE) == 0

    def test_custom_pattern(self) -> None:
        assert count_marker("a-b-c", re.compile("-")) == 2


# ---------------------------------------------------------------------------
# metrics
# ---------------------------------------------------------------------------


class TestSizeKb:
    @pytest.mark.parametrize(
        ("num_bytes", "expected"),
        [(0, 0), (511, 0), (512, 1), (1024, 1), (1535, 1), (1536, 2), (51_200, 50)],
    )
    def test_rounds_half_up(self, num_bytes: int, expected: int) -> None:
        assert size_kb(num_bytes) == expected


class TestMetricsFromText:
    def test_full_document(self) -> None:
        metrics = metrics_from_text(_CONTEXT)
        assert metrics.active_features == 1
        assert metrics.completed_features == 2
        assert metrics.project_learnings == 2
        assert metrics.state_snapshots == 0

    def test_none_feature_is_inactive(self) -> None:
        metrics = metrics_from_text("## 🎭 Current Feature: None\n")
        assert metrics.active_features == 0

    def test_none_substring_is_inactive(self) -> None:
        metrics = metrics_from_text("## 🎭 Current Feature: None yet\n")
        assert metrics.active_features == 0

    def test_missing_heading_is_inactive(self) -> None:
        assert metrics_from_text("# Empty\n").active_features == 0

    def test_size_in_bytes(self) -> None:
        metrics = metrics_from_text("é" * 1024)  # 2 bytes each
        assert metrics.size_kb == 2


class TestCalculateContextHealth:
    def test_empty_project(self, tmp_path: Path) -> None:
        assert calculate_context_health(tmp_path) == HealthMetrics()

    def test_reads_context_and_snapshots(self, tmp_project: Path) -> None:
        (tmp_project / "CONTEXT.md").write_text(_CONTEXT, encoding="utf-8")
        snapshots = tmp_project / "docs" / "context" / "state-snapshots"
        for i in range(3):
            (snapshots / f"2025-01-0{i + 1}.md").write_text("# snap\n")
        (snapshots / "notes.txt").write_text("ignored\n")

        metrics = calculate_context_health(tmp_project)
        assert metrics.completed_features == 2
        assert metrics.project_learnings == 2
        assert metrics.active_features == 1
        assert metrics.state_snapshots == 3

    def test_undecodable_context_counts_as_missing(self, tmp_project: Path) -> None:
        (tmp_project / "CONTEXT.md").write_bytes(b"\xff\xfe\x00garbage")
        metrics = calculate_context_health(tmp_project)
        assert metrics.size_kb == 0
        assert metrics.completed_features == 0

    def test_snapshots_without_context(self, tmp_project: Path) -> None:
        snapshots = tmp_project / "docs" / "context" / "state-snapshots"
        (snapshots / "a.md").write_text("x")
        metrics = calculate_context_health(tmp_project)
        assert metrics.state_snapshots == 1
        assert metrics.size_kb == 0


# ---------------------------------------------------------------------------
# score
# ---------------------------------------------------------------------------


class TestCalculateHealthScore:
    def test_empty_metrics_score_100(self) -> None:
        assert calculate_health_score(HealthMetrics()) == 100

    def test_worst_case_example(self) -> None:
        metrics = HealthMetrics(
            size_kb=100,
            state_snapshots=40,
            project_learnings=25,
            active_features=1,
            completed_features=1,
        )
        assert calculate_health_score(metrics) == 100 - 30 - 20 - 15 + 5 + 5

    def test_all_penalties_without_bonus(self) -> None:
        metrics = HealthMetrics(size_kb=76, state_snapshots=31, project_learnings=21)
        assert calculate_health_score(metrics) == 35

    @pytest.mark.parametrize(
        ("size", "expected"),
        [(50, 100), (51, 85), (75, 85), (76, 70)],
    )
    def test_size_tiers(self, size: int, expected: int) -> None:
        assert calculate_health_score(HealthMetrics(size_kb=size)) == expected

    @pytest.mark.parametrize(
        ("snapshots", "expected"),
        [(20, 100), (21, 90), (30, 90), (31, 80)],
    )
    def test_snapshot_tiers(self, snapshots: int, expected: int) -> None:
        assert calculate_health_score(HealthMetrics(state_snapshots=snapshots)) == expected

    @pytest.mark.parametrize(
        ("learnings", "expected"),
        [(15, 100), (16, 95), (20, 95), (21, 85)],
    )
    def test_learning_tiers(self, learnings: int, expected: int) -> None:
        assert calculate_health_score(HealthMetrics(project_learnings=learnings)) == expected

    def test_bonuses_clamped_at_100(self) -> None:
        metrics = HealthMetrics(active_features=1, completed_features=3)
        assert calculate_health_score(metrics) == 100

    def test_clamped_at_zero(self) -> None:
        harsh = HealthThresholds(size_penalties=((0, 500),))
        assert calculate_health_score(HealthMetrics(size_kb=1), harsh) == 0

    def test_non_increasing_in_size(self) -> None:
        scores = [calculate_health_score(HealthMetrics(size_kb=s)) for s in range(0, 200, 5)]
        assert scores == sorted(scores, reverse=True)

    def test_custom_thresholds(self) -> None:
        strict = HealthThresholds(size_penalties=((10, 40),))
        assert calculate_health_score(HealthMetrics(size_kb=11), strict) == 60


class TestHealthLabel:
    @pytest.mark.parametrize(
        ("score", "label"),
        [(100, "good"), (90, "good"), (89, "warning"), (70, "warning"), (69, "critical"), (0, "critical")],
    )
    def test_thresholds(self, score: int, label: str) -> None:
        assert health_label(score) == label


class TestHealthRecommendations:
    def test_none_when_score_high(self) -> None:
        metrics = HealthMetrics(size_kb=60)
        assert health_recommendations(metrics, 85) == []

    def test_all_recommendations(self) -> None:
        metrics = HealthMetrics(size_kb=80, state_snapshots=25, project_learnings=18)
        recs = health_recommendations(metrics, calculate_health_score(metrics))
        assert len(recs) == 3
        assert any("optimize" in r for r in recs)
        assert any("snapshots" in r for r in recs)
        assert any("learnings" in r for r in recs)
