"""Unit tests for celebration tables (wellness_engine/gamification/celebrations.py)"""
import pytest

from wellness_engine.gamification.celebrations import (
    BADGE_CATALOG,
    DEFAULT_BADGE,
    DEFAULT_MESSAGE,
    DEFAULT_TREATMENT,
    EVENT_TREATMENTS,
    build_achievement_unlock,
    build_celebration_event,
    build_celebration_message,
    calculate_level_from_points,
    get_badge_definition,
    get_treatment,
    has_badge,
)
from wellness_engine.models import BadgeType, EventType


# ============================================================================
# Treatment Table Tests
# ============================================================================

@pytest.mark.parametrize("event_type,points", [
    ("meditation_complete", 10),
    ("workout_complete", 15),
    ("streak_milestone", 50),
    ("badge_unlock", 100),
    ("level_up", 200),
])
def test_event_points(event_type, points):
    assert get_treatment(event_type).points == points


def test_every_event_type_has_treatment_and_template():
    for event_type in EventType:
        assert event_type in EVENT_TREATMENTS
        assert build_celebration_message(event_type) != DEFAULT_MESSAGE


def test_unknown_event_type_uses_default_treatment():
    treatment = get_treatment("yoga_complete")

    assert treatment == DEFAULT_TREATMENT
    assert treatment.audio_file == "/audio/celebration-default.mp3"
    assert treatment.animation_type == "celebration_default"
    assert treatment.points == 10


# ============================================================================
# Message Template Tests
# ============================================================================

def test_streak_message_uses_days():
    assert build_celebration_message("streak_milestone", {"days": 30}) == "Incredible 30-day streak!"


def test_streak_message_default_days():
    assert build_celebration_message("streak_milestone") == "Incredible 7-day streak!"


def test_badge_message_prefers_explicit_name():
    message = build_celebration_message("badge_unlock", {"badge_name": "Zen Master"})

    assert message == "Congratulations! You unlocked the Zen Master badge!"


def test_badge_message_falls_back_to_catalog_name():
    message = build_celebration_message("badge_unlock", {"badge_unlocked": "first_meditation"})

    assert "First Steps" in message


def test_badge_message_generic_name():
    message = build_celebration_message("badge_unlock")

    assert message == "Congratulations! You unlocked the Achievement badge!"


def test_level_message():
    assert build_celebration_message(EventType.LEVEL_UP, {"level": 5}) == "Level up! You're now level 5!"


def test_unknown_event_message():
    assert build_celebration_message("something_else", {"days": 3}) == DEFAULT_MESSAGE


# ============================================================================
# Event Construction Tests
# ============================================================================

def test_build_celebration_event(test_user_id):
    event = build_celebration_event(
        test_user_id,
        EventType.BADGE_UNLOCK,
        {"badge_unlocked": "first_meditation"},
    )

    assert event.user_id == test_user_id
    assert event.event_type == "badge_unlock"
    assert event.score_increment == 100
    assert event.audio_file == "/audio/badge-unlock.mp3"
    assert event.animation_type == "badge_sparkle"
    assert event.badge_unlocked == "first_meditation"
    assert event.viewed is False
    assert event.id is None


def test_build_celebration_event_without_badge(test_user_id):
    event = build_celebration_event(test_user_id, "workout_complete")

    assert event.badge_unlocked is None
    assert event.animation_type == "confetti"
    assert event.message == "Amazing workout! You're getting stronger!"


# ============================================================================
# Badge Catalog Tests
# ============================================================================

@pytest.mark.parametrize("badge_type,name,points", [
    (BadgeType.FIRST_MEDITATION, "First Steps", 10),
    (BadgeType.MEDITATION_STREAK_7, "Week Warrior", 50),
    (BadgeType.MEDITATION_STREAK_30, "Month Master", 200),
    (BadgeType.WORKOUT_STREAK_7, "Fitness Fighter", 50),
    (BadgeType.WORKOUT_STREAK_30, "Gym Champion", 200),
])
def test_badge_catalog(badge_type, name, points):
    definition = get_badge_definition(badge_type.value)

    assert definition.name == name
    assert definition.points == points


def test_every_badge_type_is_in_catalog():
    assert set(BADGE_CATALOG) == set(BadgeType)


def test_unknown_badge_uses_default():
    assert get_badge_definition("mystery_badge") == DEFAULT_BADGE
    assert has_badge("mystery_badge") is False
    assert has_badge("meditation_streak_7") is True
    assert has_badge("meditation_streak_14") is False


def test_build_achievement_unlock(test_user_id):
    unlock = build_achievement_unlock(test_user_id, "workout_streak_30")

    assert unlock.badge_type == "workout_streak_30"
    assert unlock.badge_name == "Gym Champion"
    assert unlock.badge_description == "Maintain a 30-day workout streak"
    assert unlock.points_awarded == 200


# ============================================================================
# Level Tests
# ============================================================================

def test_level_with_no_points():
    level = calculate_level_from_points(0)

    assert level.current_level == 1
    assert level.next_level_points == 100
    assert level.progress_percentage == 0


def test_level_with_points():
    level = calculate_level_from_points(250)

    assert level.current_level == 3
    assert level.experience_points == 250
    assert level.current_level_points == 50
    assert level.next_level_points == 50
    assert level.progress_percentage == pytest.approx(50.0)


def test_level_boundary():
    assert calculate_level_from_points(100).current_level == 2
    assert calculate_level_from_points(99).current_level == 1
