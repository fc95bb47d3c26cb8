"""
Streak and milestone engine

- Consecutive-day streaks per activity kind
- Milestone detection on exact streak lengths
- Table-driven celebration treatments and badge catalog
"""

from wellness_engine.gamification.streak_system import (
    MILESTONES,
    compute_streak,
    is_milestone,
    milestone_id,
)
from wellness_engine.gamification.celebrations import (
    EVENT_TREATMENTS,
    BADGE_CATALOG,
    build_celebration_event,
    build_achievement_unlock,
    calculate_level_from_points,
)

__all__ = [
    "MILESTONES",
    "compute_streak",
    "is_milestone",
    "milestone_id",
    "EVENT_TREATMENTS",
    "BADGE_CATALOG",
    "build_celebration_event",
    "build_achievement_unlock",
    "calculate_level_from_points",
]
