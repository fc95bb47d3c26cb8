"""
GamificationService - Celebration Business Logic

Handles celebration events, badge unlocks, levels, and the session-completion
hook that ties streak updates to milestone celebrations.
"""

import logging
from datetime import date
from typing import Dict, List, Any, Optional, Union
from uuid import UUID

import psycopg

from wellness_engine.config import ENABLE_METRICS
from wellness_engine.db import queries
from wellness_engine.exceptions import WellnessEngineError, RecordNotFoundError, wrap_external_exception
from wellness_engine.gamification.celebrations import (
    build_celebration_event,
    build_achievement_unlock,
    calculate_level_from_points,
    has_badge,
)
from wellness_engine.models import (
    ActivityKind,
    EventType,
    CelebrationEvent,
    AchievementUnlock,
    UserLevel,
    parse_activity_kind,
)
from wellness_engine.observability.metrics import celebrations_emitted_total, badges_unlocked_total, track_error
from wellness_engine.observability.sentry_config import capture_exception
from wellness_engine.services.streak_service import StreakService

logger = logging.getLogger(__name__)

COMPLETION_EVENTS = {
    ActivityKind.MEDITATION: EventType.MEDITATION_COMPLETE,
    ActivityKind.WORKOUT: EventType.WORKOUT_COMPLETE,
}


def _row_to_model(model, row: dict):
    return model(**{**row, "id": str(row["id"])})


class GamificationService:
    """
    Service for celebrations and badges.

    Responsibilities:
    - Building and storing celebration events from the treatment tables
    - Badge unlocks (at most once per user and badge)
    - Viewed-state transitions requested by the frontend
    - Level calculation from achievement points
    - Best-effort celebrations after a session completes
    """

    def __init__(self, streak_service: StreakService):
        """
        Initialize GamificationService.

        Args:
            streak_service: StreakService used by the completion hook
        """
        self.streak_service = streak_service
        logger.debug("GamificationService initialized")

    async def emit_celebration(
        self,
        user_id: str,
        event_type: Union[str, EventType],
        context_data: Optional[Dict[str, Any]] = None
    ) -> CelebrationEvent:
        """
        Create and store a celebration, plus its badge unlock if any.

        The celebration is committed before the badge is unlocked. If the
        badge write fails the error propagates and the celebration remains.

        Args:
            user_id: User ID
            event_type: meditation_complete, workout_complete, streak_milestone, badge_unlock, level_up
            context_data: Template values (days, badge_name, level) and optional badge_unlocked

        Returns:
            The stored CelebrationEvent (unviewed)
        """
        context_data = context_data or {}
        event = build_celebration_event(user_id, event_type, context_data)

        try:
            event.id = await queries.insert_celebration_event(event)
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="insert_celebration_event",
                user_id=user_id,
                context={"event_type": event.event_type}
            ) from e

        if ENABLE_METRICS:
            celebrations_emitted_total.labels(event_type=event.event_type).inc()

        logger.info(
            f"Celebration emitted: user={user_id}, event_type={event.event_type}, "
            f"score={event.score_increment}, badge={event.badge_unlocked}"
        )

        if event.badge_unlocked:
            await self.unlock_badge(user_id, event.badge_unlocked)

        return event

    async def unlock_badge(self, user_id: str, badge_type: str) -> Optional[AchievementUnlock]:
        """
        Record a badge unlock.

        Returns:
            The new AchievementUnlock, or None if the user already had the badge
        """
        record = build_achievement_unlock(user_id, badge_type)

        try:
            record.id = await queries.insert_achievement_unlock(record)
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="insert_achievement_unlock",
                user_id=user_id,
                context={"badge_type": record.badge_type}
            ) from e

        if record.id is None:
            logger.info(f"Badge already unlocked, skipping: user={user_id}, badge={record.badge_type}")
            if ENABLE_METRICS:
                badges_unlocked_total.labels(badge_type=record.badge_type, status="duplicate").inc()
            return None

        if ENABLE_METRICS:
            badges_unlocked_total.labels(badge_type=record.badge_type, status="unlocked").inc()

        logger.info(
            f"Badge unlocked: user={user_id}, badge={record.badge_type}, "
            f"points={record.points_awarded}"
        )
        return record

    async def mark_celebration_viewed(self, user_id: str, celebration_id: str) -> CelebrationEvent:
        """
        Move a celebration to viewed. Calling it again is harmless.

        Raises:
            RecordNotFoundError: No such celebration for this user
        """
        try:
            UUID(str(celebration_id))
        except ValueError:
            raise self._celebration_not_found(user_id, celebration_id) from None

        try:
            row = await queries.mark_celebration_viewed(user_id, celebration_id)
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="mark_celebration_viewed",
                user_id=user_id,
                context={"celebration_id": celebration_id}
            ) from e

        if row is None:
            raise self._celebration_not_found(user_id, celebration_id)

        return _row_to_model(CelebrationEvent, row)

    def _celebration_not_found(self, user_id: str, celebration_id: str) -> RecordNotFoundError:
        return RecordNotFoundError(
            message=f"Celebration {celebration_id} not found for user {user_id}",
            record_type="Celebration",
            record_id=str(celebration_id),
            user_id=user_id,
            operation="mark_celebration_viewed"
        )

    async def get_unviewed_celebrations(self, user_id: str) -> List[CelebrationEvent]:
        """Celebrations waiting to be shown, oldest first"""
        try:
            rows = await queries.get_unviewed_celebrations(user_id)
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="get_unviewed_celebrations", user_id=user_id) from e

        return [_row_to_model(CelebrationEvent, row) for row in rows]

    async def get_user_badges(self, user_id: str) -> List[AchievementUnlock]:
        """Unlocked badges, newest first"""
        try:
            rows = await queries.get_user_achievements(user_id)
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="get_user_achievements", user_id=user_id) from e

        return [_row_to_model(AchievementUnlock, row) for row in rows]

    async def get_user_level(self, user_id: str) -> UserLevel:
        """Level from the sum of achievement points"""
        try:
            total_points = await queries.get_total_achievement_points(user_id)
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="get_total_achievement_points", user_id=user_id) from e

        return calculate_level_from_points(total_points)

    async def process_session_completion(
        self,
        user_id: str,
        activity_kind: Union[str, ActivityKind],
        today: Optional[date] = None
    ) -> Dict[str, Any]:
        """
        Run gamification after a session has been stored as completed.

        Emits the completion celebration (with the first-session badge on the
        very first completion), recomputes streaks, and emits a streak_milestone
        celebration when this completion moved the streak of the completed kind
        onto a milestone. The stored current streak from before the update is
        the reference: a repeat session on the same day, or a session of the
        other kind, leaves it unchanged and celebrates nothing new.

        Best-effort and at most once: engine errors are logged and reported,
        an empty result is returned, and nothing is retried.

        Args:
            user_id: User ID
            activity_kind: meditation or workout
            today: Evaluation day (defaults to today in the engine timezone)

        Returns:
            {
                'streaks': {kind: StreakSnapshot},
                'milestones': list of milestone identifiers,
                'celebrations': list of CelebrationEvent,
            }
        """
        result = self._empty_result()

        try:
            activity_kind = parse_activity_kind(activity_kind)

            completion_count = await self.streak_service.count_completions(user_id, activity_kind)
            context = {}
            if completion_count == 1:
                context["badge_unlocked"] = f"first_{activity_kind.value}"

            completion_event = await self.emit_celebration(
                user_id, COMPLETION_EVENTS[activity_kind], context
            )
            result["celebrations"].append(completion_event)

            records = await self.streak_service.get_current_streaks(user_id)
            previous = {record.activity_kind: record.current_streak for record in records}

            streaks = await self.streak_service.update_user_streaks(user_id, today, records=records)
            result["streaks"] = streaks

            snapshot = streaks[activity_kind]
            milestones = []
            if snapshot.current != previous.get(activity_kind, 0):
                milestones = await self.streak_service.check_milestones(
                    user_id, streaks={activity_kind: snapshot}
                )
            result["milestones"] = milestones

            for milestone in milestones:
                days = int(milestone.rsplit("_", 1)[1])
                milestone_context = {"days": days}
                if has_badge(milestone):
                    milestone_context["badge_unlocked"] = milestone

                celebration = await self.emit_celebration(
                    user_id, EventType.STREAK_MILESTONE, milestone_context
                )
                result["celebrations"].append(celebration)

            logger.info(
                f"Gamification processed for session completion: user={user_id}, "
                f"kind={activity_kind.value}, milestones={milestones}, "
                f"celebrations={len(result['celebrations'])}"
            )

            return result

        except WellnessEngineError as e:
            logger.error(f"Error in session completion gamification: {e}", exc_info=True)
            track_error(type(e).__name__, "celebrations")
            error = e.to_dict()
            capture_exception(
                e,
                operation="process_session_completion",
                error_type=error["error"],
                request_id=error["request_id"],
            )
            return self._empty_result()

    def _empty_result(self) -> Dict[str, Any]:
        """Result returned when nothing could be celebrated"""
        return {
            "streaks": {},
            "milestones": [],
            "celebrations": [],
        }
