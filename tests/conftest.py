"""Shared fixtures."""

from datetime import datetime

import pytest

from lazytrack.config import Settings
from lazytrack.store.database import HabitStore
from lazytrack.store.models import LogEntry

# Wednesday; the week runs Mon 2024-05-13 to Mon 2024-05-20
NOW = datetime(2024, 5, 15, 14, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "lazytrack"


@pytest.fixture
def test_settings(data_dir):
    return Settings(data_dir=data_dir, notifications_disabled=False)


@pytest.fixture
def store(data_dir):
    return HabitStore(data_dir)


@pytest.fixture
def make_log():
    """Build log entries without going through a store."""
    counter = {"id": 0}

    def _make(habit_name, logged_at, duration="", count=0):
        counter["id"] += 1
        return LogEntry(
            id=counter["id"],
            habit_id=1,
            habit_name=habit_name,
            duration=duration,
            count=count,
            logged_at=logged_at,
        )

    return _make
