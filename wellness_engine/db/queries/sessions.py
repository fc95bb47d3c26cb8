"""Session history queries"""
import logging
from datetime import datetime
from wellness_engine.db.connection import db
from wellness_engine.models import ActivityKind

logger = logging.getLogger(__name__)

# Table names are fixed per kind, never taken from input
_COMPLETION_DATES_SQL = {
    ActivityKind.MEDITATION: """
        SELECT completed_at
        FROM meditation_sessions
        WHERE user_id = %s AND completed_at IS NOT NULL
        ORDER BY completed_at DESC
    """,
    ActivityKind.WORKOUT: """
        SELECT completed_at
        FROM workout_sessions
        WHERE user_id = %s AND completed_at IS NOT NULL
        ORDER BY completed_at DESC
    """,
}

_COMPLETION_SINCE_SQL = {
    ActivityKind.MEDITATION: """
        SELECT 1
        FROM meditation_sessions
        WHERE user_id = %s AND completed_at IS NOT NULL AND completed_at >= %s
        LIMIT 1
    """,
    ActivityKind.WORKOUT: """
        SELECT 1
        FROM workout_sessions
        WHERE user_id = %s AND completed_at IS NOT NULL AND completed_at >= %s
        LIMIT 1
    """,
}


async def fetch_completion_dates(user_id: str, activity_kind: ActivityKind) -> list[datetime]:
    """
    Get all completion timestamps for one user and activity kind

    Args:
        user_id: User ID
        activity_kind: meditation or workout

    Returns:
        Completion timestamps ordered most recent first
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                _COMPLETION_DATES_SQL[ActivityKind(activity_kind)],
                (user_id,)
            )
            rows = await cur.fetchall()
            return [row['completed_at'] for row in rows]


async def has_completion_since(user_id: str, activity_kind: ActivityKind, since: datetime) -> bool:
    """
    Check whether any session was completed at or after `since`

    Args:
        user_id: User ID
        activity_kind: meditation or workout
        since: Lower bound (timezone-aware)
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                _COMPLETION_SINCE_SQL[ActivityKind(activity_kind)],
                (user_id, since)
            )
            row = await cur.fetchone()
            return row is not None
