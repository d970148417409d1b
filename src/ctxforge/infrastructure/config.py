"""Configuration: health thresholds and optimizer settings from ``config.yml``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = ".ctxforge"
CONFIG_FILE = "config.yml"

# A tier is (threshold, penalty); tiers are checked highest threshold first
# and the first one exceeded applies.
PenaltyTiers = tuple[tuple[int, int], ...]


@dataclass(frozen=True)
class HealthThresholds:
    """Penalty tiers, bonuses and label cut-offs for the health score.

    Configurable via ``.ctxforge/config.yml`` ``health`` section.
    """

    size_penalties: PenaltyTiers = ((75, 30), (50, 15))
    snapshot_penalties: PenaltyTiers = ((30, 20), (20, 10))
    learning_penalties: PenaltyTiers = ((20, 15), (15, 5))
    active_bonus: int = 5
    completed_bonus: int = 5
    # Recommendation triggers
    size_target_kb: int = 50
    snapshot_limit: int = 20
    learning_limit: int = 15
    recommend_below: int = 80
    # Labels
    good_score: int = 90
    warning_score: int = 70


@dataclass(frozen=True)
class OptimizeSettings:
    """Settings for ``ctxforge optimize``."""

    max_age_days: int = 30


@dataclass(frozen=True)
class Config:
    """Resolved project configuration."""

    health: HealthThresholds = HealthThresholds()
    optimize: OptimizeSettings = OptimizeSettings()


DEFAULT_THRESHOLDS = HealthThresholds()

_TIER_FIELDS = frozenset({"size_penalties", "snapshot_penalties", "learning_penalties"})


def config_path(project_root: Path) -> Path:
    return project_root / CONFIG_DIR / CONFIG_FILE


def _parse_count(value: Any) -> int:
    """Parse a non-negative integer setting."""
    number = int(value)
    if number < 0:
        raise ValueError(f"negative value: {number}")
    return number


def _parse_tiers(value: Any) -> PenaltyTiers:
    """Parse ``[[threshold, penalty], ...]`` and sort highest threshold first."""
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"expected a list of tiers, got {type(value).__name__}")

    tiers: list[tuple[int, int]] = []
    for pair in value:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise ValueError(f"expected [threshold, penalty], got {pair!r}")
        tiers.append((_parse_count(pair[0]), _parse_count(pair[1])))
    return tuple(sorted(tiers, key=lambda t: t[0], reverse=True))


def _merge_section(cls: type[Any], section: Any) -> Any:
    """Build *cls* from a config *section*, keeping defaults for missing keys."""
    if not isinstance(section, dict):
        return cls()

    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in section:
            continue
        value = section[f.name]
        try:
            kwargs[f.name] = (
                _parse_tiers(value) if f.name in _TIER_FIELDS else _parse_count(value)
            )
        except (TypeError, ValueError, OverflowError):
            logger.warning("Ignoring invalid config value %s=%r", f.name, value)
    return cls(**kwargs)


def load_config(project_root: Path) -> Config:
    """Load ``.ctxforge/config.yml`` for *project_root*.

    Falls back to defaults for missing keys or missing file.
    """
    path = config_path(project_root)
    if not path.is_file():
        return Config()

    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError):
        logger.warning("Failed to read %s, using defaults", path)
        return Config()

    if not isinstance(data, dict):
        return Config()

    return Config(
        health=_merge_section(HealthThresholds, data.get("health")),
        optimize=_merge_section(OptimizeSettings, data.get("optimize")),
    )
