"""LazyTrack command-line application."""

import logging
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

import typer

from .config import settings
from .dashboard import terminal
from .dashboard.renderer import DashboardRenderer
from .notify.reminders import NOTIFICATIONS_CONFIG_KEY, ReminderDaemon, check_reminders
from .store.database import HabitStore, StoreError
from .store.models import GOAL_TYPES, Habit
from .tracking.models import Count
from .tracking.parser import ParseError, format_count, parse, to_log_fields
from .tracking.summary import (
    PERIOD_DAILY,
    PERIOD_WEEKLY,
    get_day_window,
    get_week_window,
    is_goal_reached,
    summarize_all,
)

VERSION = "1.0.0"

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.WARNING),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="lazytrack",
    help=(
        "LazyTrack - Your personal productivity companion in the terminal!\n\n"
        "Track your habits, view summaries, and stay motivated."
    ),
    add_completion=False,
    no_args_is_help=True,
)

KNOWN_COMMANDS = {"log", "summary", "config", "reminder", "daemon"}


@contextmanager
def open_store() -> Iterator[HabitStore]:
    """Load the store from the configured data directory and save it on exit."""
    try:
        with HabitStore(settings.data_dir) as store:
            yield store
    except (StoreError, OSError) as e:
        fail(str(e))


def fail(message: str):
    """Report an error and exit non-zero."""
    typer.secho(f"Error: {message}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def version_callback(value: bool):
    if value:
        typer.echo(f"lazytrack version {VERSION}")
        raise typer.Exit()


@app.callback()
def root(
    version: bool = typer.Option(
        False, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit.",
    ),
):
    """A fun CLI-based time/habit tracker."""


@app.command("log")
def log_command(
    habit: str = typer.Argument(..., help="Habit name, e.g. code, walk, water"),
    amount: Optional[str] = typer.Argument(None, help="Duration or count, e.g. 2h, 30m, 8x"),
    notes: str = typer.Option("", "--notes", "-n", help="Add notes to the log entry"),
):
    """
    Log a habit with optional duration.

    Examples: lazytrack code 2h, lazytrack water 8x, lazytrack read
    """
    name = habit.strip().lower()

    with open_store() as store:
        record = store.get_or_create_habit(name)

        text = amount if amount is not None else record.default_duration
        try:
            parsed = parse(text)
        except ParseError as e:
            label = "amount" if amount is not None else "default duration"
            fail(f"invalid {label}: {e}")

        duration, count = to_log_fields(parsed)
        store.append_log(record.id, record.name, duration, count, notes)

        today, tomorrow = get_day_window()
        if is_goal_reached(record, store.logs_for_habit(record.name, today, tomorrow)):
            typer.echo(terminal.format_goal_reached(record))

    amount_text = format_count(count) if isinstance(parsed, Count) else duration
    typer.echo(terminal.format_log_success(record, amount_text))


@app.command("summary")
def summary_command(
    daily: bool = typer.Option(
        False, "--daily/--weekly", "-d/-w", help="Show the daily or the weekly (default) summary"
    ),
    image: Optional[Path] = typer.Option(None, "--image", "-i", help="Also render a PNG dashboard"),
):
    """Show a summary of your habits."""
    period = PERIOD_DAILY if daily else PERIOD_WEEKLY
    now = datetime.now()

    with open_store() as store:
        habits = store.list_habits()
        if not habits:
            typer.echo(terminal.format_empty_state())
            return

        start, end = get_day_window(now) if daily else get_week_window(now)
        logs_by_habit = {h.name: store.logs_for_habit(h.name, start, end) for h in habits}

    report = summarize_all(habits, logs_by_habit, period=period, now=now)

    if daily:
        typer.echo(terminal.format_daily_summary(report))
    else:
        typer.echo(terminal.format_weekly_summary(report))

    if image:
        path = DashboardRenderer().render(report, image)
        typer.echo(f"🖼  Dashboard saved to {path}")


def apply_habit_config(
    habit: Habit,
    emoji: Optional[str] = None,
    goal: Optional[str] = None,
    goal_type: Optional[str] = None,
    default_duration: Optional[str] = None,
) -> Habit:
    """
    Return a copy of the habit with the given settings applied.

    Raises:
        typer.BadParameter: On an invalid goal, goal type or default duration
    """
    updates = {}

    if emoji:
        updates["emoji"] = emoji

    if goal:
        if not goal.isdecimal():
            raise typer.BadParameter(f"invalid goal value: {goal}", param_hint="--goal")
        updates["daily_goal"] = int(goal)

    if goal_type:
        if goal_type not in GOAL_TYPES:
            raise typer.BadParameter(
                f"invalid goal type: {goal_type} (must be 'duration' or 'count')",
                param_hint="--type",
            )
        updates["goal_type"] = goal_type

    if default_duration:
        try:
            parse(default_duration)
        except ParseError as e:
            raise typer.BadParameter(str(e), param_hint="--duration")
        updates["default_duration"] = default_duration

    return habit.model_copy(update=updates)


def configure_interactively(store: HabitStore):
    """Prompt for habit settings until the user quits."""
    typer.secho("🔧 LazyTrack Configuration", fg=typer.colors.CYAN, bold=True)
    typer.secho("=" * 50, fg=typer.colors.CYAN, bold=True)

    habits = store.list_habits()
    if not habits:
        typer.secho("No habits found. Create your first habit:", fg=typer.colors.CYAN, bold=True)
        typer.echo("\n  lazytrack code 2h\n  lazytrack walk 30m\n")
        return

    typer.secho("Current Habits:\n", fg=typer.colors.CYAN, bold=True)
    for i, habit in enumerate(habits, start=1):
        typer.echo(f"{i}. {terminal.format_habit_config(habit)}")

    while True:
        choice = typer.prompt("\nEnter habit number to configure (or 'q' to quit)").strip()
        if choice in ("q", "quit"):
            break

        if not choice.isdigit() or not 1 <= int(choice) <= len(habits):
            typer.echo("❌ Invalid selection. Please try again.")
            continue

        habit = habits[int(choice) - 1]
        typer.secho(f"\n🔧 Configuring '{habit.name}'", fg=typer.colors.CYAN, bold=True)

        emoji = typer.prompt("Emoji", default=habit.emoji)
        goal_type = typer.prompt("Goal type (duration/count)", default=habit.goal_type)
        if goal_type not in GOAL_TYPES:
            goal_type = None
        goal = typer.prompt("Daily goal", default=str(habit.daily_goal))
        default_duration = typer.prompt(
            "Default duration (e.g., 30m, 1h)", default=habit.default_duration or "30m"
        )

        try:
            updated = apply_habit_config(habit, emoji, goal, goal_type, default_duration)
        except typer.BadParameter as e:
            typer.echo(f"❌ Error configuring habit: {e}")
            continue

        store.update_habit(updated)
        habits[int(choice) - 1] = updated
        typer.echo(terminal.format_config_updated(updated))
        typer.echo(terminal.format_habit_config(updated))


@app.command("config")
def config_command(
    habit: Optional[str] = typer.Option(None, "--habit", "-a", help="Habit name to configure"),
    emoji: Optional[str] = typer.Option(None, "--emoji", "-e", help="Emoji for the habit"),
    goal: Optional[str] = typer.Option(None, "--goal", "-g", help="Daily goal value"),
    goal_type: Optional[str] = typer.Option(None, "--type", "-t", help="Goal type (duration or count)"),
    duration: Optional[str] = typer.Option(None, "--duration", "-d", help="Default duration"),
    notifications: Optional[str] = typer.Option(
        None, "--notifications", help="Turn popup notifications on or off"
    ),
):
    """Configure habits and settings."""
    if notifications is not None and notifications not in ("on", "off"):
        fail(f"invalid notifications value: {notifications} (must be 'on' or 'off')")

    with open_store() as store:
        if notifications is not None:
            store.set_config(NOTIFICATIONS_CONFIG_KEY, notifications)
            typer.echo(f"🔔 Notifications {notifications}")

        if not habit:
            if notifications is None:
                configure_interactively(store)
            return

        record = store.get_or_create_habit(habit.strip().lower())
        try:
            updated = apply_habit_config(record, emoji, goal, goal_type, duration)
        except typer.BadParameter as e:
            fail(e.format_message())

        if updated != record:
            store.update_habit(updated)
            typer.echo(terminal.format_config_updated(updated))
        typer.echo(terminal.format_habit_config(updated))


@app.command("reminder")
def reminder_command(
    late: bool = typer.Option(False, "--late", "-l", help="Show late reminder only (after 8 PM)"),
):
    """Check for pending goals and show late reminders."""
    with open_store() as store:
        for line in check_reminders(store, settings, late_only=late):
            typer.echo(line)


@app.command("daemon")
def daemon_command(
    background: bool = typer.Option(False, "--background", "-b", help="Run daemon in background"),
):
    """Run the reminder daemon for automatic late reminders."""
    if background:
        # Still runs in the foreground; detaching is left to the service manager
        typer.echo("🔄 Starting LazyTrack daemon...")
        typer.echo(f"📅 Will check for late reminders after {settings.late_reminder_hour}:00")
        typer.echo(f"⏰ Checking every {settings.daemon_check_interval} seconds for pending goals")
        typer.echo("💡 Press Ctrl+C to stop the daemon")

    typer.echo("✅ Daemon started successfully!")
    try:
        ReminderDaemon(settings).run()
    except KeyboardInterrupt:
        typer.echo("\n👋 Daemon stopped")


def expand_default_command(argv: list[str]) -> list[str]:
    """Treat `lazytrack <habit> [amount]` as `lazytrack log <habit> [amount]`."""
    if not argv:
        return argv
    if argv[0] == "help":
        return ["--help", *argv[1:]]
    if argv[0] in KNOWN_COMMANDS or argv[0].startswith("-"):
        return argv
    return ["log", *argv]


def main():
    app(args=expand_default_command(sys.argv[1:]), prog_name="lazytrack")


if __name__ == "__main__":
    main()
