"""Colored terminal output for summaries and command feedback."""

from datetime import timedelta

import typer

from lazytrack.store.models import GOAL_COUNT, Habit
from lazytrack.tracking.models import PeriodReport, PeriodSummary
from lazytrack.tracking.summary import motivational_message


def _header(text: str) -> str:
    return typer.style(text, fg=typer.colors.CYAN, bold=True)


def format_habit_line(summary: PeriodSummary) -> str:
    """One weekly summary line: emoji, name, bar chart, value, progress, streak."""
    parts = [f"{summary.emoji} {summary.habit_name}", summary.bar_chart]

    if summary.total_time > 0:
        parts.append(f"{summary.total_time:.1f}h")
    elif summary.total_count > 0:
        parts.append(f"{summary.total_count}x")
    else:
        parts.append("0")

    line = " ".join(parts)

    if summary.goal_progress > 0:
        line += typer.style(f" ({summary.goal_progress:.0f}% of goal)", fg=typer.colors.YELLOW)

    if summary.streak > 0:
        line += f" 🔥 {summary.streak} day streak"

    return line


def format_weekly_summary(report: PeriodReport) -> str:
    """Render the weekly summary block followed by a motivational message."""
    last_day = report.end - timedelta(days=1)
    lines = [
        _header("📊 Weekly Summary"),
        "=" * 51,
        f"📅 {report.start:%b} {report.start.day} - {last_day:%b} {last_day.day}",
        "",
    ]

    for summary in report.habits:
        lines.append(format_habit_line(summary))

    lines += [
        "",
        "=" * 52,
        f"🎯 Total Time: {report.total_time:.1f} hours",
        "",
        _header(motivational_message(report)),
    ]
    return "\n".join(lines)


def format_daily_line(summary: PeriodSummary) -> str:
    """One daily summary line: emoji, name, value and daily goal progress."""
    line = f"{summary.emoji} {summary.habit_name} "

    if summary.goal_type == GOAL_COUNT:
        value = f"{summary.total_count}x" if summary.total_count > 0 else ""
    else:
        value = f"{summary.total_time:.1f}h" if summary.total_time > 0 else ""
    line += typer.style(value, fg=typer.colors.GREEN) if value else "0"

    if summary.goal_progress > 0:
        line += typer.style(
            f" ({summary.goal_progress:.0f}% of daily goal)", fg=typer.colors.YELLOW
        )
    return line


def format_daily_summary(report: PeriodReport) -> str:
    """Render today's summary; habits without entries today are left out."""
    lines = [
        _header(
            f"📅 Daily Summary - {report.start:%A, %B} {report.start.day}, {report.start.year}"
        ),
        _header("=" * 50),
    ]

    for summary in report.habits:
        if summary.entries:
            lines.append(format_daily_line(summary))

    lines += ["", "=" * 50]
    if report.total_time > 0:
        lines.append(f"🎯 Total Time Today: {report.total_time:.1f} hours")
    if report.total_count > 0:
        lines.append(f"🎯 Total Count Today: {report.total_count}")
    return "\n".join(lines)


def format_habit_config(habit: Habit) -> str:
    """Describe a habit's configuration on one line."""
    line = f"{habit.emoji} {habit.name}"

    if habit.daily_goal > 0:
        unit = "times" if habit.goal_type == GOAL_COUNT else "hours"
        line += f" (Goal: {habit.daily_goal} {unit})"

    if habit.default_duration:
        line += f" [Default: {habit.default_duration}]"

    return line


def format_log_success(habit: Habit, amount_text: str) -> str:
    """Confirmation shown after logging."""
    return (
        typer.style("✅ Logged ", fg=typer.colors.GREEN, bold=True)
        + typer.style(f'"{habit.name}"', fg=typer.colors.CYAN, bold=True)
        + typer.style(f" for {amount_text}", fg=typer.colors.GREEN, bold=True)
        + f"\n{habit.emoji} {habit.name}"
    )


def format_goal_reached(habit: Habit) -> str:
    return typer.style(f"🎉 Goal reached for {habit.name} today!", fg=typer.colors.YELLOW, bold=True)


def format_config_updated(habit: Habit) -> str:
    return typer.style(
        f"✅ Updated configuration for '{habit.name}'", fg=typer.colors.GREEN, bold=True
    )


EMPTY_STATE = """You haven't logged any habits yet. Start by logging your first habit:

  lazytrack code 2h          # Log 2 hours of coding
  lazytrack walk 30m         # Log 30 minutes of walking
  lazytrack water 8x         # Log 8 glasses of water
  lazytrack read             # Log default duration (30m)

Then run 'lazytrack summary' to see your progress!"""


def format_empty_state() -> str:
    """Welcome text shown before any habit exists."""
    return _header("🌟 Welcome to LazyTrack!") + "\n\n" + EMPTY_STATE
