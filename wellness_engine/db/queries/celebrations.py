"""Celebration event and achievement queries"""
import logging
from typing import Optional
from wellness_engine.db.connection import db
from wellness_engine.models import CelebrationEvent, AchievementUnlock

logger = logging.getLogger(__name__)


# ==========================================
# Celebration Events
# ==========================================

async def insert_celebration_event(event: CelebrationEvent) -> Optional[str]:
    """
    Insert a celebration event

    Returns:
        Celebration ID (UUID string)
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                INSERT INTO celebration_events (user_id, event_type, audio_file, animation_type,
                                                score_increment, badge_unlocked, message, viewed, created_at)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING id
                """,
                (
                    event.user_id,
                    event.event_type,
                    event.audio_file,
                    event.animation_type,
                    event.score_increment,
                    event.badge_unlocked,
                    event.message,
                    event.viewed,
                    event.created_at,
                )
            )
            result = await cur.fetchone()
            await conn.commit()
            return str(result['id']) if result else None


async def get_unviewed_celebrations(user_id: str) -> list[dict]:
    """
    Get celebrations the frontend has not shown yet

    Returns:
        Celebrations ordered oldest first
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT id, user_id, event_type, audio_file, animation_type, score_increment,
                       badge_unlocked, message, viewed, viewed_at, created_at
                FROM celebration_events
                WHERE user_id = %s AND viewed = FALSE
                ORDER BY created_at ASC
                """,
                (user_id,)
            )
            rows = await cur.fetchall()
            return [dict(row) for row in rows]


async def mark_celebration_viewed(user_id: str, celebration_id: str) -> Optional[dict]:
    """
    Mark a celebration viewed (idempotent, viewed_at keeps the first value)

    Returns:
        Updated row, or None if the celebration does not exist for this user
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                UPDATE celebration_events
                SET viewed = TRUE,
                    viewed_at = COALESCE(viewed_at, CURRENT_TIMESTAMP),
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = %s AND user_id = %s
                RETURNING id, user_id, event_type, audio_file, animation_type, score_increment,
                          badge_unlocked, message, viewed, viewed_at, created_at
                """,
                (celebration_id, user_id)
            )
            row = await cur.fetchone()
            await conn.commit()
            return dict(row) if row else None


# ==========================================
# Achievements
# ==========================================

async def insert_achievement_unlock(record: AchievementUnlock) -> Optional[str]:
    """
    Insert an achievement unlock

    The (user_id, badge_type) unique index makes a repeated unlock a no-op.

    Returns:
        Achievement ID, or None if the user already had this badge
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                INSERT INTO user_achievements (user_id, badge_type, badge_name, badge_description,
                                               points_awarded, unlocked_at)
                VALUES (%s, %s, %s, %s, %s, %s)
                ON CONFLICT (user_id, badge_type) DO NOTHING
                RETURNING id
                """,
                (
                    record.user_id,
                    record.badge_type,
                    record.badge_name,
                    record.badge_description,
                    record.points_awarded,
                    record.unlocked_at,
                )
            )
            result = await cur.fetchone()
            await conn.commit()
            return str(result['id']) if result else None


async def get_user_achievements(user_id: str) -> list[dict]:
    """
    Get user's unlocked badges

    Returns:
        Achievements ordered by unlocked_at DESC
    """
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT id, user_id, badge_type, badge_name, badge_description, points_awarded, unlocked_at
                FROM user_achievements
                WHERE user_id = %s
                ORDER BY unlocked_at DESC
                """,
                (user_id,)
            )
            rows = await cur.fetchall()
            return [dict(row) for row in rows]


async def get_total_achievement_points(user_id: str) -> int:
    """Sum of points_awarded over all of the user's achievements"""
    async with db.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(
                """
                SELECT COALESCE(SUM(points_awarded), 0) AS total_points
                FROM user_achievements
                WHERE user_id = %s
                """,
                (user_id,)
            )
            row = await cur.fetchone()
            return int(row['total_points']) if row else 0
