"""Celebration and achievement models"""
from enum import Enum
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Celebration event types"""
    MEDITATION_COMPLETE = "meditation_complete"
    WORKOUT_COMPLETE = "workout_complete"
    STREAK_MILESTONE = "streak_milestone"
    BADGE_UNLOCK = "badge_unlock"
    LEVEL_UP = "level_up"


class BadgeType(str, Enum):
    """Named badges that can be unlocked"""
    FIRST_MEDITATION = "first_meditation"
    FIRST_WORKOUT = "first_workout"
    MEDITATION_STREAK_7 = "meditation_streak_7"
    MEDITATION_STREAK_30 = "meditation_streak_30"
    WORKOUT_STREAK_7 = "workout_streak_7"
    WORKOUT_STREAK_30 = "workout_streak_30"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CelebrationEvent(BaseModel):
    """
    A user-dismissible congratulatory moment shown by the frontend.

    Lifecycle: created unviewed, moved to viewed by mark_viewed(). Viewed is
    terminal.
    """
    id: Optional[str] = None
    user_id: str
    event_type: str
    audio_file: str
    animation_type: str
    score_increment: int
    badge_unlocked: Optional[str] = None
    message: str
    viewed: bool = False
    viewed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=_utcnow)

    def mark_viewed(self, at: Optional[datetime] = None) -> None:
        """Move to viewed; repeated calls keep the first viewed_at"""
        if self.viewed:
            return
        self.viewed = True
        self.viewed_at = at or _utcnow()


class AchievementUnlock(BaseModel):
    """Permanent record of an earned badge"""
    id: Optional[str] = None
    user_id: str
    badge_type: str
    badge_name: str
    badge_description: str
    points_awarded: int
    unlocked_at: datetime = Field(default_factory=_utcnow)


class UserLevel(BaseModel):
    """Level derived from total achievement points"""
    current_level: int
    experience_points: int
    current_level_points: int
    next_level_points: int
    progress_percentage: float
