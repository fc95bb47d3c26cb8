"""
Prometheus metrics definitions for the wellness engine.

- Streak metrics: recomputations and milestones crossed
- Celebration metrics: events emitted, badges unlocked
- Error metrics: failures by type and component
"""

import logging
from prometheus_client import Counter

logger = logging.getLogger(__name__)

# =============================================================================
# Streak Metrics
# =============================================================================

streak_recomputations_total = Counter(
    "streak_recomputations_total",
    "Total streak recomputations",
    ["activity_kind"],
)

streak_milestones_total = Counter(
    "streak_milestones_total",
    "Total streak milestones crossed",
    ["activity_kind", "milestone"],
)

# =============================================================================
# Celebration Metrics
# =============================================================================

celebrations_emitted_total = Counter(
    "celebrations_emitted_total",
    "Total celebration events emitted",
    ["event_type"],
)

badges_unlocked_total = Counter(
    "badges_unlocked_total",
    "Total badge unlocks",
    ["badge_type", "status"],  # status: unlocked/duplicate
)

# =============================================================================
# Error Metrics
# =============================================================================

engine_errors_total = Counter(
    "engine_errors_total",
    "Total errors by type and component",
    ["error_type", "component"],  # component: streaks/celebrations
)


def track_error(error_type: str, component: str) -> None:
    """Increment the error counter when metrics are enabled"""
    from wellness_engine.config import ENABLE_METRICS

    if ENABLE_METRICS:
        engine_errors_total.labels(error_type=error_type, component=component).inc()
