"""
Consecutive-Day Streak Computation

Derives a StreakSnapshot from the full completion history of one user and one
activity kind. The computation is pure: "today" is passed in, and nothing is
read from or written to storage here (see services.streak_service for that).

Rules:
- Completions are collapsed to calendar days; several sessions on one day
  count once
- The current streak ends today, or yesterday if nothing was done today yet
- Any missed calendar day breaks the streak
- Longest streak is the longest run of consecutive days anywhere in history

Milestones:
- Exact streak lengths {3, 7, 14, 30, 60, 100, 200, 365}
- Re-reaching a threshold after a reset triggers it again
"""

from typing import Iterable, List, Optional, Union
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo
import logging

from wellness_engine.models import ActivityKind, StreakSnapshot
from wellness_engine.utils.datetime_helpers import to_calendar_day, is_consecutive_day

logger = logging.getLogger(__name__)

MILESTONES = (3, 7, 14, 30, 60, 100, 200, 365)


def collapse_to_days(
    completion_dates: Iterable[Union[date, datetime]],
    tz: Optional[ZoneInfo] = None
) -> List[date]:
    """Unique calendar days, most recent first"""
    days = {to_calendar_day(value, tz) for value in completion_dates}
    return sorted(days, reverse=True)


def compute_streak(
    completion_dates: Iterable[Union[date, datetime]],
    today: date,
    tz: Optional[ZoneInfo] = None
) -> StreakSnapshot:
    """
    Compute current and longest streak from a completion history

    Args:
        completion_dates: Completion timestamps or dates, any order, duplicates allowed
        today: The calendar day to evaluate the current streak against
        tz: Timezone used to reduce aware datetimes to days

    Returns:
        StreakSnapshot with current, longest, last_activity_date, is_active_today
    """
    days = collapse_to_days(completion_dates, tz)
    if not days:
        return StreakSnapshot.empty()

    day_set = set(days)
    yesterday = today - timedelta(days=1)
    is_active_today = today in day_set

    # Walk backward from today (or yesterday) until the first gap
    current = 0
    if is_active_today or yesterday in day_set:
        cursor = today if is_active_today else yesterday
        while cursor in day_set:
            current += 1
            cursor -= timedelta(days=1)

    longest = 1
    run = 1
    for previous, day in zip(days, days[1:]):
        if is_consecutive_day(previous, day):
            run += 1
        else:
            run = 1
        longest = max(longest, run)

    return StreakSnapshot(
        current=current,
        longest=longest,
        last_activity_date=days[0],
        is_active_today=is_active_today,
    )


def is_milestone(streak: int) -> bool:
    """Exact membership in the milestone set, not a threshold"""
    return streak in MILESTONES


def milestone_id(activity_kind: ActivityKind, streak: int) -> str:
    """Identifier such as 'meditation_streak_7'"""
    return f"{ActivityKind(activity_kind).value}_streak_{streak}"


def format_streak_display(streaks: dict) -> str:
    """
    Format streak snapshots for a plain-text summary

    Args:
        streaks: Mapping of ActivityKind -> StreakSnapshot

    Returns:
        Multi-line string, one line per activity kind
    """
    if not streaks:
        return "No streaks yet. Complete a session to start one!"

    emoji_map = {
        ActivityKind.MEDITATION: "🧘",
        ActivityKind.WORKOUT: "🏃",
    }

    lines = ["🔥 YOUR STREAKS\n"]
    for kind, snapshot in streaks.items():
        kind = ActivityKind(kind)
        line = f"{emoji_map.get(kind, '🔥')} {kind.value.capitalize()}: {snapshot.current} days"
        if snapshot.longest > snapshot.current:
            line += f" (best: {snapshot.longest})"
        if snapshot.is_active_today:
            line += " ✅"
        lines.append(line)

    return "\n".join(lines)
