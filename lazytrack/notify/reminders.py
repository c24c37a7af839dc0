"""Pending-goal reminders and the reminder daemon."""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from lazytrack.config import Settings
from lazytrack.store.database import HabitStore, StoreError
from lazytrack.store.models import GOAL_COUNT, Habit
from lazytrack.tracking.summary import accumulate, daily_progress, get_day_window

from .notifier import (
    LATE_REMINDER_TITLE,
    REMINDER_TITLE,
    goal_reminder_message,
    join_habits,
    late_reminder_message,
    show_notification,
)

logger = logging.getLogger(__name__)

NOTIFICATIONS_CONFIG_KEY = "notifications"


@dataclass
class PendingHabit:
    """A habit whose daily goal is not reached yet."""
    habit: Habit
    current: float  # count, or hours for duration habits

    @property
    def label(self) -> str:
        """Name with progress, e.g. "water (3/8)" or "code (0.5/2h)"."""
        if self.habit.goal_type == GOAL_COUNT:
            return f"{self.habit.name} ({int(self.current)}/{self.habit.daily_goal})"
        return f"{self.habit.name} ({self.current:.1f}/{self.habit.daily_goal}h)"


def notifications_enabled(settings: Settings, store: HabitStore) -> bool:
    """Check the environment switch and the user's stored preference."""
    if settings.notifications_disabled:
        return False
    return store.config.get(NOTIFICATIONS_CONFIG_KEY, "on") != "off"


def should_show_late_reminder(now: datetime, late_hour: int = 20) -> bool:
    """Late reminders are shown from late_hour onwards."""
    return now.hour >= late_hour


def pending_habits(store: HabitStore, now: Optional[datetime] = None) -> list[PendingHabit]:
    """
    Find habits with a goal that is not reached today.

    Args:
        store: Loaded habit store
        now: Reference moment, defaults to the current time

    Returns:
        Pending habits in store order
    """
    today, tomorrow = get_day_window(now)

    pending = []
    for habit in store.list_habits():
        if habit.daily_goal == 0:
            continue

        logs = store.logs_for_habit(habit.name, today, tomorrow)
        if daily_progress(habit, logs) < 100:
            pending.append(PendingHabit(habit=habit, current=accumulate(habit, logs)))

    return pending


def check_reminders(
    store: HabitStore,
    settings: Settings,
    late_only: bool = False,
    now: Optional[datetime] = None,
) -> list[str]:
    """
    Check pending goals and send reminders.

    Args:
        store: Loaded habit store
        settings: Notification settings
        late_only: Only remind when it is late in the day
        now: Reference moment, defaults to the current time

    Returns:
        Lines to show on the console
    """
    now = now or datetime.now()
    pending = pending_habits(store, now)
    notify = notifications_enabled(settings, store)

    if not pending:
        return [] if late_only else ["✅ All goals completed for today!"]

    names = [p.habit.name for p in pending]

    if late_only:
        if not should_show_late_reminder(now, settings.late_reminder_hour):
            return []
        if notify:
            show_notification(LATE_REMINDER_TITLE, late_reminder_message(names))
        return [f"🌙 Late reminder: You still have pending goals: {join_habits(names)}"]

    if notify:
        for p in pending:
            show_notification(
                REMINDER_TITLE,
                goal_reminder_message(
                    p.habit.name, p.current, p.habit.daily_goal, p.habit.goal_type
                ),
            )
    return [f"📋 Pending goals: {join_habits([p.label for p in pending])}"]


class ReminderDaemon:
    """Checks for pending goals on a fixed interval and sends late reminders."""

    def __init__(
        self,
        settings: Settings,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize with settings; sleep and clock are injectable for tests."""
        self.settings = settings
        self.sleep = sleep
        self.clock = clock

    def check_once(self) -> list[str]:
        """
        Run a single reminder check.

        Returns:
            Names of habits that were reminded about
        """
        now = self.clock()
        if not should_show_late_reminder(now, self.settings.late_reminder_hour):
            logger.debug("Not late enough for reminders")
            return []

        with HabitStore(self.settings.data_dir) as store:
            names = [p.habit.name for p in pending_habits(store, now)]
            if names and notifications_enabled(self.settings, store):
                show_notification(LATE_REMINDER_TITLE, late_reminder_message(names))

        if names:
            logger.info(f"Late reminder sent for: {join_habits(names)}")
        return names

    def run(self, max_ticks: Optional[int] = None):
        """
        Check immediately, then once per interval until stopped.

        Args:
            max_ticks: Stop after this many checks (runs forever when None)
        """
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            if ticks:
                self.sleep(self.settings.daemon_check_interval)

            try:
                self.check_once()
            except (StoreError, OSError) as e:
                logger.error(f"Error checking reminders: {e}")

            ticks += 1
