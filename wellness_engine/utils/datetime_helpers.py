"""
Calendar-day helpers for streak computation

Streaks count calendar days, not elapsed time. All conversions go through the
engine timezone (ENGINE_TIMEZONE) so a session at 23:30 local time lands on
the same day the user saw on their clock.

RULES:
- Aware datetimes are converted to the engine timezone, then truncated
- Naive datetimes are taken as already local and truncated
- Dates are used as-is
"""

import logging
from datetime import datetime, date, time
from typing import Optional, Union
from zoneinfo import ZoneInfo

from wellness_engine.config import ENGINE_TIMEZONE

logger = logging.getLogger(__name__)


def get_engine_timezone() -> ZoneInfo:
    """Timezone in which calendar days are counted"""
    return ZoneInfo(ENGINE_TIMEZONE)


def to_calendar_day(value: Union[datetime, date], tz: Optional[ZoneInfo] = None) -> date:
    """
    Reduce a timestamp to its local calendar day

    Args:
        value: datetime (aware or naive) or date
        tz: Timezone to count days in (defaults to engine timezone)

    Returns:
        Calendar date with no time component
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz or get_engine_timezone())
        return value.date()
    return value


def is_consecutive_day(first: date, second: date) -> bool:
    """True iff the two dates are exactly one calendar day apart, in either order"""
    return abs((first - second).days) == 1


def today_local(tz: Optional[ZoneInfo] = None) -> date:
    """Today's date in the engine timezone"""
    return datetime.now(tz or get_engine_timezone()).date()


def start_of_day_utc(day: date, tz: Optional[ZoneInfo] = None) -> datetime:
    """
    UTC instant of local midnight at the start of `day`

    Used to query timestamptz columns for "anything since today began".
    """
    local_midnight = datetime.combine(day, time.min, tzinfo=tz or get_engine_timezone())
    return local_midnight.astimezone(ZoneInfo("UTC"))
