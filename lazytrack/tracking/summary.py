"""Summary aggregation and progress calculation."""

import logging
from datetime import datetime, timedelta
from typing import Optional

from lazytrack.store.models import GOAL_COUNT, Habit, LogEntry

from .models import Duration, PeriodReport, PeriodSummary
from .parser import ParseError, parse

logger = logging.getLogger(__name__)

BAR_WIDTH = 20
BAR_FILLED = "█"
BAR_TRACK = "░"
DEFAULT_BAR_MAX = 10  # Scale used when a habit has no goal

PERIOD_DAILY = "daily"
PERIOD_WEEKLY = "weekly"

NO_PROGRESS_MESSAGE = "🌟 Every journey starts with a single step! Log your first habit today!"
MOTIVATIONAL_TIERS = [
    (100, "🎉 Amazing! You're crushing your goals this week!"),
    (80, "🚀 Great progress! You're so close to your goals!"),
    (60, "💪 Good work! Keep up the momentum!"),
    (40, "👍 You're making progress! Every bit counts!"),
    (20, "🌱 Getting started is the hardest part. You're doing great!"),
]
FALLBACK_MESSAGE = "🌟 Every small step counts! Keep going!"


def get_day_window(now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """Get start and end of the current day (midnight to midnight)."""
    now = now or datetime.now()
    day_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return day_start, day_start + timedelta(days=1)


def get_week_window(now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """
    Get start and end of the current week (Monday-Sunday).

    Returns:
        Tuple of (week_start, week_end); week_start is Monday 00:00 and
        week_end is the following Monday 00:00
    """
    day_start, _ = get_day_window(now)

    # isoweekday: Monday=1, Sunday=7
    week_start = day_start - timedelta(days=day_start.isoweekday() - 1)
    return week_start, week_start + timedelta(days=7)


def filter_logs(
    logs: list[LogEntry], window_start: datetime, window_end: datetime
) -> list[LogEntry]:
    """Keep logs strictly inside the window; both boundaries are excluded."""
    return [log for log in logs if window_start < log.logged_at < window_end]


def accumulate(habit: Habit, logs: list[LogEntry]) -> float:
    """
    Sum the logged amount for a habit.

    Count habits sum entry counts. Duration habits parse each stored duration
    in whole minutes, returned as hours; entries that do not parse as a
    duration are skipped.
    """
    if habit.goal_type == GOAL_COUNT:
        return float(sum(log.count for log in logs))

    total_minutes = 0
    for log in logs:
        if not log.duration:
            continue
        try:
            amount = parse(log.duration)
        except ParseError:
            logger.debug(f"Skipping unparseable duration {log.duration!r} (log {log.id})")
            continue
        if isinstance(amount, Duration):
            total_minutes += amount.total_minutes
    return total_minutes / 60


def goal_progress(habit: Habit, total: float, window_days: int) -> float:
    """
    Calculate goal progress as a percentage.

    Example:
        daily_goal = 1 (hour), window_days = 7, total = 3.5
        = 3.5 / 7 * 100 = 50.0
    """
    if habit.daily_goal == 0:
        return 0.0
    return total / (habit.daily_goal * window_days) * 100


def render_bar(value: float, max_value: float, width: int = BAR_WIDTH) -> str:
    """Render a fixed-width text progress bar."""
    filled = int((value / max_value) * width)
    filled = max(0, min(filled, width))
    return BAR_FILLED * filled + BAR_TRACK * (width - filled)


def calculate_streak(logs: list[LogEntry]) -> int:
    """Count distinct calendar days with at least one entry."""
    return len({log.logged_at.date() for log in logs})


def summarize_habit(
    habit: Habit,
    logs: list[LogEntry],
    window_start: datetime,
    window_end: datetime,
) -> PeriodSummary:
    """
    Summarize one habit over a window.

    Args:
        habit: Habit configuration
        logs: Log entries for the habit (filtered to the window here)
        window_start: Exclusive window start
        window_end: Exclusive window end

    Returns:
        PeriodSummary with totals, progress, streak and bar chart
    """
    window_logs = filter_logs(logs, window_start, window_end)
    window_days = max(1, round((window_end - window_start) / timedelta(days=1)))

    total = accumulate(habit, window_logs)
    is_count = habit.goal_type == GOAL_COUNT

    max_value = habit.daily_goal * window_days or DEFAULT_BAR_MAX

    return PeriodSummary(
        habit_name=habit.name,
        emoji=habit.emoji,
        goal_type=habit.goal_type,
        total_time=0.0 if is_count else total,
        total_count=int(total) if is_count else 0,
        goal_progress=goal_progress(habit, total, window_days),
        streak=calculate_streak(window_logs),
        bar_chart=render_bar(total, max_value),
        entries=len(window_logs),
    )


def summarize_all(
    habits: list[Habit],
    logs_by_habit: dict[str, list[LogEntry]],
    period: str = PERIOD_WEEKLY,
    now: Optional[datetime] = None,
) -> PeriodReport:
    """
    Summarize every habit over the current day or week.

    Args:
        habits: All habits
        logs_by_habit: Log entries keyed by habit name
        period: "daily" or "weekly"
        now: Reference moment, defaults to the current time

    Returns:
        PeriodReport covering all habits
    """
    if period == PERIOD_DAILY:
        start, end = get_day_window(now)
    elif period == PERIOD_WEEKLY:
        start, end = get_week_window(now)
    else:
        raise ValueError(f"Unknown summary period: {period}")

    logger.info(f"Summarizing {len(habits)} habits ({period}: {start.date()} to {end.date()})")

    report = PeriodReport(period=period, start=start, end=end)
    for habit in habits:
        summary = summarize_habit(habit, logs_by_habit.get(habit.name, []), start, end)
        report.habits.append(summary)
        report.total_time += summary.total_time
        report.total_count += summary.total_count

    return report


def motivational_message(report: PeriodReport) -> str:
    """Pick a message from the mean progress of habits that made any."""
    progresses = [h.goal_progress for h in report.habits if h.goal_progress > 0]
    if not progresses:
        return NO_PROGRESS_MESSAGE

    average = sum(progresses) / len(progresses)
    for threshold, message in MOTIVATIONAL_TIERS:
        if average >= threshold:
            return message
    return FALLBACK_MESSAGE


def daily_progress(habit: Habit, today_logs: list[LogEntry]) -> float:
    """Progress towards today's goal; logs are assumed to be today's already."""
    return goal_progress(habit, accumulate(habit, today_logs), 1)


def is_goal_reached(habit: Habit, today_logs: list[LogEntry]) -> bool:
    """Check if today's goal is reached."""
    return daily_progress(habit, today_logs) >= 100
