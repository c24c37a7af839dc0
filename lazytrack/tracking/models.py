"""Value types for parsed amounts and habit summaries."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union


@dataclass(frozen=True)
class Duration:
    """Elapsed time, normalized so that 0 <= minutes < 60."""
    hours: int
    minutes: int

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    @property
    def total_hours(self) -> float:
        return self.hours + self.minutes / 60


@dataclass(frozen=True)
class Count:
    """Number of repetitions."""
    n: int


ParsedAmount = Union[Duration, Count]


@dataclass
class PeriodSummary:
    """Aggregated progress for one habit over a window."""
    habit_name: str
    emoji: str
    goal_type: str
    total_time: float = 0.0  # hours
    total_count: int = 0
    goal_progress: float = 0.0  # percentage, may exceed 100
    streak: int = 0
    bar_chart: str = ""
    entries: int = 0


@dataclass
class PeriodReport:
    """Summaries for every habit over a daily or weekly window."""
    period: str  # "daily" or "weekly"
    start: datetime
    end: datetime
    habits: list[PeriodSummary] = field(default_factory=list)
    total_time: float = 0.0
    total_count: int = 0
