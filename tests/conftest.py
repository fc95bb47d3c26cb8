"""Global test fixtures and utilities for wellness engine tests"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from datetime import date, datetime, timedelta, timezone
from uuid import uuid4


# ============================================================================
# User & Date Fixtures
# ============================================================================

@pytest.fixture
def test_user_id():
    """Standard test user ID"""
    return "user-123456"


@pytest.fixture
def today():
    """Fixed evaluation day so streak tests do not depend on the wall clock"""
    return date(2024, 6, 15)


@pytest.fixture
def days_before(today):
    """Build a list of dates: days_before(0, 1, 2) -> [today, today-1, today-2]"""
    def _build(*offsets):
        return [today - timedelta(days=offset) for offset in offsets]
    return _build


@pytest.fixture
def completions_before(today):
    """Build UTC completion timestamps at 08:00 on today-offset for each offset"""
    def _build(*offsets):
        return [
            datetime(today.year, today.month, today.day, 8, 0, tzinfo=timezone.utc) - timedelta(days=offset)
            for offset in offsets
        ]
    return _build


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def mock_db_cursor():
    """Mock async cursor with empty default results"""
    cursor = AsyncMock()
    cursor.execute = AsyncMock()
    cursor.fetchone = AsyncMock(return_value=None)
    cursor.fetchall = AsyncMock(return_value=[])
    return cursor


@pytest.fixture
def mock_db_connection(mock_db_cursor):
    """Mock async connection whose cursor() is an async context manager"""
    conn = MagicMock()
    conn.cursor.return_value.__aenter__.return_value = mock_db_cursor
    conn.commit = AsyncMock()
    return conn


@pytest.fixture
def celebration_row(test_user_id):
    """A celebration_events row as returned by psycopg's dict_row"""
    return {
        "id": uuid4(),
        "user_id": test_user_id,
        "event_type": "streak_milestone",
        "audio_file": "/audio/streak-milestone.mp3",
        "animation_type": "fireworks",
        "score_increment": 50,
        "badge_unlocked": "meditation_streak_7",
        "message": "Incredible 7-day streak!",
        "viewed": False,
        "viewed_at": None,
        "created_at": datetime(2024, 6, 15, 8, 0, tzinfo=timezone.utc),
    }
