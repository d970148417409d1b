"""Infrastructure domain — configuration, health metrics, and maintenance.

Note: ``ctxforge.infrastructure.doctor`` is intentionally NOT re-exported here
because it depends on the onboarding package, which itself imports health
constants from this package.  Import it directly::

    from ctxforge.infrastructure.doctor import run_checks
"""

from ctxforge.infrastructure.config import (
    DEFAULT_THRESHOLDS,
    Config,
    HealthThresholds,
    load_config,
)
from ctxforge.infrastructure.health import (
    HealthMetrics,
    calculate_context_health,
    calculate_health_score,
    count_marker,
    health_label,
    health_recommendations,
)

__all__ = [
    "DEFAULT_THRESHOLDS",
    "Config",
    "HealthMetrics",
    "HealthThresholds",
    "calculate_context_health",
    "calculate_health_score",
    "count_marker",
    "health_label",
    "health_recommendations",
    "load_config",
]
