"""
Celebration and Badge Configuration

Static tables that drive celebrations. Adding a new event type or badge is a
change to these tables only.

Event treatments (audio cue, animation, points):
- meditation_complete: 10 points
- workout_complete: 15 points
- streak_milestone: 50 points
- badge_unlock: 100 points
- level_up: 200 points

Levels:
- 100 achievement points per level, starting at level 1
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union
import logging

from wellness_engine.models import (
    EventType,
    BadgeType,
    CelebrationEvent,
    AchievementUnlock,
    UserLevel,
)

logger = logging.getLogger(__name__)

POINTS_PER_LEVEL = 100


@dataclass(frozen=True)
class CelebrationTreatment:
    audio_file: str
    animation_type: str
    points: int


@dataclass(frozen=True)
class BadgeDefinition:
    name: str
    description: str
    points: int


EVENT_TREATMENTS: Dict[EventType, CelebrationTreatment] = {
    EventType.MEDITATION_COMPLETE: CelebrationTreatment("/audio/meditation-complete.mp3", "floating_hearts", 10),
    EventType.WORKOUT_COMPLETE: CelebrationTreatment("/audio/workout-complete.mp3", "confetti", 15),
    EventType.STREAK_MILESTONE: CelebrationTreatment("/audio/streak-milestone.mp3", "fireworks", 50),
    EventType.BADGE_UNLOCK: CelebrationTreatment("/audio/badge-unlock.mp3", "badge_sparkle", 100),
    EventType.LEVEL_UP: CelebrationTreatment("/audio/level-up.mp3", "level_up_effect", 200),
}

DEFAULT_TREATMENT = CelebrationTreatment("/audio/celebration-default.mp3", "celebration_default", 10)

MESSAGE_TEMPLATES: Dict[EventType, str] = {
    EventType.MEDITATION_COMPLETE: "Great job completing your meditation!",
    EventType.WORKOUT_COMPLETE: "Amazing workout! You're getting stronger!",
    EventType.STREAK_MILESTONE: "Incredible {days}-day streak!",
    EventType.BADGE_UNLOCK: "Congratulations! You unlocked the {badge_name} badge!",
    EventType.LEVEL_UP: "Level up! You're now level {level}!",
}

DEFAULT_MESSAGE = "Congratulations on your achievement!"

BADGE_CATALOG: Dict[BadgeType, BadgeDefinition] = {
    BadgeType.FIRST_MEDITATION: BadgeDefinition("First Steps", "Complete your first meditation session", 10),
    BadgeType.FIRST_WORKOUT: BadgeDefinition("First Sweat", "Complete your first workout session", 10),
    BadgeType.MEDITATION_STREAK_7: BadgeDefinition("Week Warrior", "Maintain a 7-day meditation streak", 50),
    BadgeType.MEDITATION_STREAK_30: BadgeDefinition("Month Master", "Maintain a 30-day meditation streak", 200),
    BadgeType.WORKOUT_STREAK_7: BadgeDefinition("Fitness Fighter", "Maintain a 7-day workout streak", 50),
    BadgeType.WORKOUT_STREAK_30: BadgeDefinition("Gym Champion", "Maintain a 30-day workout streak", 200),
}

DEFAULT_BADGE = BadgeDefinition("Achievement", "Achievement unlocked!", 10)


def _as_event_type(event_type: Union[str, EventType]) -> Optional[EventType]:
    try:
        return EventType(event_type)
    except ValueError:
        return None


def _as_badge_type(badge_type: Union[str, BadgeType]) -> Optional[BadgeType]:
    try:
        return BadgeType(badge_type)
    except ValueError:
        return None


def get_treatment(event_type: Union[str, EventType]) -> CelebrationTreatment:
    """Audio, animation and points for an event type (default for unknown types)"""
    known = _as_event_type(event_type)
    if known is None:
        logger.debug(f"No treatment for event type '{event_type}', using default")
        return DEFAULT_TREATMENT
    return EVENT_TREATMENTS.get(known, DEFAULT_TREATMENT)


def get_badge_definition(badge_type: Union[str, BadgeType]) -> BadgeDefinition:
    """Name, description and points for a badge (default for unknown badges)"""
    known = _as_badge_type(badge_type)
    if known is None:
        return DEFAULT_BADGE
    return BADGE_CATALOG.get(known, DEFAULT_BADGE)


def has_badge(badge_type: str) -> bool:
    """True if the catalog defines this badge"""
    return _as_badge_type(badge_type) is not None


def build_celebration_message(
    event_type: Union[str, EventType],
    context_data: Optional[Dict[str, Any]] = None
) -> str:
    """
    Fill the message template for an event type with context values

    Recognised context keys: days, badge_name, badge_unlocked, level
    """
    context_data = context_data or {}
    known = _as_event_type(event_type)
    template = MESSAGE_TEMPLATES.get(known) if known else None
    if template is None:
        return DEFAULT_MESSAGE

    badge_name = context_data.get("badge_name")
    if not badge_name and context_data.get("badge_unlocked"):
        badge_name = get_badge_definition(context_data["badge_unlocked"]).name

    return template.format(
        days=context_data.get("days") or 7,
        badge_name=badge_name or "Achievement",
        level=context_data.get("level") or 2,
    )


def build_celebration_event(
    user_id: str,
    event_type: Union[str, EventType],
    context_data: Optional[Dict[str, Any]] = None
) -> CelebrationEvent:
    """Construct an unviewed CelebrationEvent (not persisted)"""
    context_data = context_data or {}
    treatment = get_treatment(event_type)
    known = _as_event_type(event_type)

    return CelebrationEvent(
        user_id=user_id,
        event_type=known.value if known else str(event_type),
        audio_file=treatment.audio_file,
        animation_type=treatment.animation_type,
        score_increment=treatment.points,
        badge_unlocked=context_data.get("badge_unlocked"),
        message=build_celebration_message(event_type, context_data),
    )


def build_achievement_unlock(user_id: str, badge_type: Union[str, BadgeType]) -> AchievementUnlock:
    """Construct an AchievementUnlock from the badge catalog (not persisted)"""
    definition = get_badge_definition(badge_type)
    known = _as_badge_type(badge_type)

    return AchievementUnlock(
        user_id=user_id,
        badge_type=known.value if known else str(badge_type),
        badge_name=definition.name,
        badge_description=definition.description,
        points_awarded=definition.points,
    )


def calculate_level_from_points(total_points: int) -> UserLevel:
    """
    Calculate level from total achievement points

    Returns:
        UserLevel with current_level, experience_points, current_level_points,
        next_level_points, progress_percentage
    """
    total_points = max(total_points, 0)
    current_level_points = total_points % POINTS_PER_LEVEL

    return UserLevel(
        current_level=total_points // POINTS_PER_LEVEL + 1,
        experience_points=total_points,
        current_level_points=current_level_points,
        next_level_points=POINTS_PER_LEVEL - current_level_points,
        progress_percentage=current_level_points / POINTS_PER_LEVEL * 100,
    )
