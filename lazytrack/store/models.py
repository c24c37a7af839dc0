"""Persisted habit and log records."""

from datetime import datetime

from pydantic import BaseModel, Field

GOAL_COUNT = "count"
GOAL_DURATION = "duration"
GOAL_TYPES = (GOAL_COUNT, GOAL_DURATION)


class Habit(BaseModel):
    """Habit record, keyed by name in habits.json."""

    id: int
    name: str
    emoji: str = "📝"
    default_duration: str = ""
    daily_goal: int = Field(default=0, ge=0)
    goal_type: str = GOAL_DURATION
    created_at: datetime = Field(default_factory=datetime.now)


class LogEntry(BaseModel):
    """Single log entry from logs.json."""

    id: int
    habit_id: int
    habit_name: str
    duration: str = ""  # e.g. "30m", "2h"; empty for count entries
    count: int = 0  # for count-based entries
    logged_at: datetime
    notes: str = ""
