"""Data models for the streak and milestone engine"""
from wellness_engine.models.activity import ActivityKind, ActivityCompletion, parse_activity_kind
from wellness_engine.models.streak import StreakSnapshot, StreakRecord
from wellness_engine.models.celebration import (
    EventType,
    BadgeType,
    CelebrationEvent,
    AchievementUnlock,
    UserLevel,
)

__all__ = [
    "ActivityKind",
    "ActivityCompletion",
    "parse_activity_kind",
    "StreakSnapshot",
    "StreakRecord",
    "EventType",
    "BadgeType",
    "CelebrationEvent",
    "AchievementUnlock",
    "UserLevel",
]
