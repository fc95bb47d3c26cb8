"""Streak snapshot queries"""
import logging
from wellness_engine.db.connection import db
from wellness_engine.models import ActivityKind, StreakSnapshot

logger = logging.getLogger(__name__)


async def get_streak_records(user_id: str) -> list[dict]:
    """
    Get stored streak snapshots for user

    Returns:
        One row per activity kind that has been computed at least once
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT user_id, activity_kind, current_streak, longest_streak,
                       last_activity_date, is_active_today, updated_at
                FROM user_streaks
                WHERE user_id = %s
                ORDER BY activity_kind
                """,
                (user_id,)
            )
            rows = await cur.fetchall()
            return [dict(row) for row in rows]


async def upsert_streak_snapshot(user_id: str, activity_kind: ActivityKind, snapshot: StreakSnapshot) -> None:
    """
    Store the latest snapshot for one user and activity kind

    Args:
        user_id: User ID
        activity_kind: meditation or workout
        snapshot: Recomputed snapshot (longest already merged with stored best)
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                INSERT INTO user_streaks (user_id, activity_kind, current_streak, longest_streak,
                                          last_activity_date, is_active_today, updated_at)
                VALUES (%s, %s, %s, %s, %s, %s, CURRENT_TIMESTAMP)
                ON CONFLICT (user_id, activity_kind) DO UPDATE
                SET current_streak = EXCLUDED.current_streak,
                    longest_streak = EXCLUDED.longest_streak,
                    last_activity_date = EXCLUDED.last_activity_date,
                    is_active_today = EXCLUDED.is_active_today,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (
                    user_id,
                    ActivityKind(activity_kind).value,
                    snapshot.current,
                    snapshot.longest,
                    snapshot.last_activity_date,
                    snapshot.is_active_today,
                )
            )
            await conn.commit()
