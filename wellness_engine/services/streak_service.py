"""
StreakService - Streak Business Logic

Loads completion history, recomputes streaks, and stores the latest snapshot.
Recomputation is always from full history; no running counters are kept.
"""

import logging
from datetime import date
from typing import Dict, List, Optional

import psycopg

from wellness_engine.config import ENABLE_METRICS
from wellness_engine.db import queries
from wellness_engine.exceptions import wrap_external_exception
from wellness_engine.gamification.streak_system import compute_streak, is_milestone, milestone_id
from wellness_engine.models import ActivityKind, StreakSnapshot, StreakRecord, parse_activity_kind
from wellness_engine.observability.metrics import streak_recomputations_total, streak_milestones_total
from wellness_engine.utils.datetime_helpers import get_engine_timezone, today_local, start_of_day_utc

logger = logging.getLogger(__name__)


class StreakService:
    """
    Service for streak tracking.

    Responsibilities:
    - Streak computation per activity kind from stored completions
    - Persisting the latest snapshot per user and kind
    - Milestone detection on current streaks
    - "Already done today" checks for the session service
    """

    def __init__(self):
        self.tz = get_engine_timezone()
        logger.debug("StreakService initialized")

    def _today(self, today: Optional[date]) -> date:
        return today if today is not None else today_local(self.tz)

    async def calculate_streak(
        self,
        user_id: str,
        activity_kind: ActivityKind,
        today: Optional[date] = None
    ) -> StreakSnapshot:
        """
        Compute the streak for one activity kind from stored history.

        Args:
            user_id: User ID
            activity_kind: meditation or workout
            today: Evaluation day (defaults to today in the engine timezone)

        Returns:
            StreakSnapshot
        """
        activity_kind = parse_activity_kind(activity_kind)
        try:
            completion_dates = await queries.fetch_completion_dates(user_id, activity_kind)
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="fetch_completion_dates",
                user_id=user_id,
                context={"activity_kind": activity_kind.value}
            ) from e

        snapshot = compute_streak(completion_dates, self._today(today), self.tz)

        if ENABLE_METRICS:
            streak_recomputations_total.labels(activity_kind=activity_kind.value).inc()

        return snapshot

    async def count_completions(self, user_id: str, activity_kind: ActivityKind) -> int:
        """Number of completed sessions of this kind, same-day sessions counted separately"""
        activity_kind = parse_activity_kind(activity_kind)
        try:
            completion_dates = await queries.fetch_completion_dates(user_id, activity_kind)
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="fetch_completion_dates",
                user_id=user_id,
                context={"activity_kind": activity_kind.value}
            ) from e
        return len(completion_dates)

    async def calculate_all_streaks(
        self,
        user_id: str,
        today: Optional[date] = None
    ) -> Dict[ActivityKind, StreakSnapshot]:
        """Compute streaks for every activity kind"""
        today = self._today(today)
        return {
            kind: await self.calculate_streak(user_id, kind, today)
            for kind in ActivityKind
        }

    async def update_user_streaks(
        self,
        user_id: str,
        today: Optional[date] = None,
        records: Optional[List[StreakRecord]] = None
    ) -> Dict[ActivityKind, StreakSnapshot]:
        """
        Recompute and store streaks for all activity kinds.

        The stored longest streak is kept when it exceeds the recomputed one,
        so a best streak survives pruned session history.

        Args:
            user_id: User ID
            today: Evaluation day (defaults to today in the engine timezone)
            records: Stored records already loaded by the caller; read when omitted

        Returns:
            Mapping of activity kind to the stored snapshot
        """
        computed = await self.calculate_all_streaks(user_id, today)
        if records is None:
            records = await self.get_current_streaks(user_id)
        stored = {record.activity_kind: record for record in records}

        updated = {}
        for kind, snapshot in computed.items():
            previous_best = stored[kind].longest_streak if kind in stored else 0
            merged = snapshot.model_copy(update={"longest": max(snapshot.longest, previous_best)})

            try:
                await queries.upsert_streak_snapshot(user_id, kind, merged)
            except psycopg.Error as e:
                raise wrap_external_exception(
                    e,
                    operation="upsert_streak_snapshot",
                    user_id=user_id,
                    context={"activity_kind": kind.value}
                ) from e

            updated[kind] = merged

        logger.info(
            f"User streaks updated: user={user_id}, "
            f"meditation={updated[ActivityKind.MEDITATION].current}, "
            f"workout={updated[ActivityKind.WORKOUT].current}"
        )

        return updated

    async def get_current_streaks(self, user_id: str) -> List[StreakRecord]:
        """
        Get stored streak records for display.

        Kinds that were never computed are returned as zero records.
        """
        try:
            rows = await queries.get_streak_records(user_id)
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="get_streak_records", user_id=user_id) from e

        records = {
            ActivityKind(row["activity_kind"]): StreakRecord(**row)
            for row in rows
        }
        return [
            records.get(kind) or StreakRecord(user_id=user_id, activity_kind=kind)
            for kind in ActivityKind
        ]

    async def has_activity_today(
        self,
        user_id: str,
        activity_kind: ActivityKind,
        today: Optional[date] = None
    ) -> bool:
        """
        Check whether a session of this kind was completed today.

        A narrow existence check; does not compute the streak.
        """
        activity_kind = parse_activity_kind(activity_kind)
        since = start_of_day_utc(self._today(today), self.tz)
        try:
            return await queries.has_completion_since(user_id, activity_kind, since)
        except psycopg.Error as e:
            raise wrap_external_exception(
                e,
                operation="has_completion_since",
                user_id=user_id,
                context={"activity_kind": activity_kind.value}
            ) from e

    async def check_milestones(
        self,
        user_id: str,
        today: Optional[date] = None,
        streaks: Optional[Dict[ActivityKind, StreakSnapshot]] = None
    ) -> List[str]:
        """
        Milestone identifiers for every kind whose current streak is exactly a milestone.

        Args:
            user_id: User ID
            today: Evaluation day (defaults to today in the engine timezone)
            streaks: Already computed snapshots; recomputed when omitted

        Returns:
            Identifiers like 'meditation_streak_7' (possibly empty)
        """
        if streaks is None:
            streaks = await self.calculate_all_streaks(user_id, today)

        milestones = []
        for kind, snapshot in streaks.items():
            if is_milestone(snapshot.current):
                milestones.append(milestone_id(kind, snapshot.current))
                if ENABLE_METRICS:
                    streak_milestones_total.labels(
                        activity_kind=ActivityKind(kind).value,
                        milestone=str(snapshot.current)
                    ).inc()

        if milestones:
            logger.info(f"Streak milestones reached: user={user_id}, milestones={milestones}")

        return milestones
