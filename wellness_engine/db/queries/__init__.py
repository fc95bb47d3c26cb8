"""
Database queries - Re-export all functions.

Module organization:
- sessions.py: Completed meditation/workout session history (read-only)
- streaks.py: Persisted streak snapshots
- celebrations.py: Celebration events and achievement unlocks
"""

# Session history
from wellness_engine.db.queries.sessions import (
    fetch_completion_dates,
    has_completion_since,
)

# Streaks
from wellness_engine.db.queries.streaks import (
    get_streak_records,
    upsert_streak_snapshot,
)

# Celebrations & achievements
from wellness_engine.db.queries.celebrations import (
    insert_celebration_event,
    get_unviewed_celebrations,
    mark_celebration_viewed,
    insert_achievement_unlock,
    get_user_achievements,
    get_total_achievement_points,
)

__all__ = [
    "fetch_completion_dates",
    "has_completion_since",
    "get_streak_records",
    "upsert_streak_snapshot",
    "insert_celebration_event",
    "get_unviewed_celebrations",
    "mark_celebration_viewed",
    "insert_achievement_unlock",
    "get_user_achievements",
    "get_total_achievement_points",
]
