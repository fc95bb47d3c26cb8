"""Activity completion models"""
from enum import Enum
from datetime import datetime
from typing import Union
from pydantic import BaseModel, ConfigDict

from wellness_engine.exceptions import ValidationError


class ActivityKind(str, Enum):
    """Tracked session categories, each with an independent streak"""
    MEDITATION = "meditation"
    WORKOUT = "workout"


class ActivityCompletion(BaseModel):
    """One finished session, as written by the session service"""
    model_config = ConfigDict(frozen=True)

    user_id: str
    activity_kind: ActivityKind
    completed_at: datetime


def parse_activity_kind(value: Union[str, ActivityKind]) -> ActivityKind:
    """Coerce a string to ActivityKind, raising ValidationError for unknown kinds"""
    if isinstance(value, ActivityKind):
        return value
    try:
        return ActivityKind(value)
    except ValueError:
        raise ValidationError(
            message=f"Unknown activity kind '{value}'",
            field="activity_kind",
            value=value,
        )
