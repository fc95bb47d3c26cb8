"""Unit tests for database queries (wellness_engine/db/queries)"""
from datetime import datetime, timezone
from unittest.mock import patch
from uuid import uuid4

import pytest

from wellness_engine.db import queries
from wellness_engine.gamification.celebrations import build_achievement_unlock, build_celebration_event
from wellness_engine.models import ActivityKind, StreakSnapshot


@pytest.fixture
def patched_db(mock_db_connection):
    """Route db.connection() to the mock connection"""
    with patch("wellness_engine.db.connection.db.connection") as mock_connection:
        mock_connection.return_value.__aenter__.return_value = mock_db_connection
        yield mock_db_connection


# ============================================================================
# Session History
# ============================================================================

@pytest.mark.asyncio
async def test_fetch_completion_dates_meditation(patched_db, mock_db_cursor, test_user_id):
    completed = datetime(2024, 6, 15, 8, 0, tzinfo=timezone.utc)
    mock_db_cursor.fetchall.return_value = [{"completed_at": completed}]

    result = await queries.fetch_completion_dates(test_user_id, ActivityKind.MEDITATION)

    assert result == [completed]
    sql, params = mock_db_cursor.execute.call_args[0]
    assert "FROM meditation_sessions" in sql
    assert "ORDER BY completed_at DESC" in sql
    assert params == (test_user_id,)


@pytest.mark.asyncio
async def test_fetch_completion_dates_workout(patched_db, mock_db_cursor, test_user_id):
    result = await queries.fetch_completion_dates(test_user_id, "workout")

    assert result == []
    assert "FROM workout_sessions" in mock_db_cursor.execute.call_args[0][0]


@pytest.mark.asyncio
async def test_has_completion_since(patched_db, mock_db_cursor, test_user_id):
    since = datetime(2024, 6, 15, tzinfo=timezone.utc)
    mock_db_cursor.fetchone.return_value = {"?column?": 1}

    assert await queries.has_completion_since(test_user_id, ActivityKind.WORKOUT, since) is True
    assert mock_db_cursor.execute.call_args[0][1] == (test_user_id, since)


# ============================================================================
# Streaks
# ============================================================================

@pytest.mark.asyncio
async def test_upsert_streak_snapshot(patched_db, mock_db_cursor, test_user_id):
    snapshot = StreakSnapshot(current=3, longest=5, is_active_today=True)

    await queries.upsert_streak_snapshot(test_user_id, ActivityKind.MEDITATION, snapshot)

    sql, params = mock_db_cursor.execute.call_args[0]
    assert "ON CONFLICT (user_id, activity_kind) DO UPDATE" in sql
    assert params == (test_user_id, "meditation", 3, 5, None, True)
    patched_db.commit.assert_awaited_once()


# ============================================================================
# Celebrations & Achievements
# ============================================================================

@pytest.mark.asyncio
async def test_insert_celebration_event(patched_db, mock_db_cursor, test_user_id):
    celebration_id = uuid4()
    mock_db_cursor.fetchone.return_value = {"id": celebration_id}
    event = build_celebration_event(test_user_id, "workout_complete")

    result = await queries.insert_celebration_event(event)

    assert result == str(celebration_id)
    assert "INSERT INTO celebration_events" in mock_db_cursor.execute.call_args[0][0]
    patched_db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_insert_achievement_unlock_conflict_returns_none(patched_db, mock_db_cursor, test_user_id):
    """ON CONFLICT DO NOTHING returns no row for a badge the user already has"""
    mock_db_cursor.fetchone.return_value = None
    record = build_achievement_unlock(test_user_id, "first_meditation")

    result = await queries.insert_achievement_unlock(record)

    assert result is None
    assert "ON CONFLICT (user_id, badge_type) DO NOTHING" in mock_db_cursor.execute.call_args[0][0]


@pytest.mark.asyncio
async def test_mark_celebration_viewed_keeps_first_viewed_at(patched_db, mock_db_cursor, test_user_id, celebration_row):
    mock_db_cursor.fetchone.return_value = {**celebration_row, "viewed": True}

    row = await queries.mark_celebration_viewed(test_user_id, str(celebration_row["id"]))

    assert row["viewed"] is True
    sql, params = mock_db_cursor.execute.call_args[0]
    assert "COALESCE(viewed_at, CURRENT_TIMESTAMP)" in sql
    assert params == (str(celebration_row["id"]), test_user_id)


@pytest.mark.asyncio
async def test_mark_celebration_viewed_missing(patched_db, mock_db_cursor, test_user_id):
    assert await queries.mark_celebration_viewed(test_user_id, str(uuid4())) is None


@pytest.mark.asyncio
async def test_get_total_achievement_points(patched_db, mock_db_cursor, test_user_id):
    mock_db_cursor.fetchone.return_value = {"total_points": 260}

    assert await queries.get_total_achievement_points(test_user_id) == 260
