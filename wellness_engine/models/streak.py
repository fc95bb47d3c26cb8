"""Streak models"""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field

from wellness_engine.models.activity import ActivityKind


class StreakSnapshot(BaseModel):
    """Streak state derived from a completion history"""
    current: int = Field(default=0, ge=0)
    longest: int = Field(default=0, ge=0)
    last_activity_date: Optional[date] = None
    is_active_today: bool = False

    @classmethod
    def empty(cls) -> "StreakSnapshot":
        return cls(current=0, longest=0, last_activity_date=None, is_active_today=False)


class StreakRecord(BaseModel):
    """Latest snapshot as persisted in user_streaks"""
    user_id: str
    activity_kind: ActivityKind
    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: Optional[date] = None
    is_active_today: bool = False
    updated_at: Optional[datetime] = None
