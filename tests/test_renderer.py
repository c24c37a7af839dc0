"""Tests for terminal formatting and the PNG dashboard."""

from datetime import datetime, timedelta

import typer
from PIL import Image

from lazytrack.dashboard import terminal
from lazytrack.dashboard.renderer import DashboardRenderer
from lazytrack.store.models import Habit
from lazytrack.tracking.models import PeriodReport, PeriodSummary


def make_report(period="weekly"):
    start = datetime(2024, 5, 13)
    days = 1 if period == "daily" else 7
    return PeriodReport(
        period=period,
        start=start,
        end=start + timedelta(days=days),
        habits=[
            PeriodSummary(
                habit_name="code", emoji="💻", goal_type="duration", total_time=3.5,
                goal_progress=50.0, streak=2, bar_chart="█" * 10 + "░" * 10, entries=3,
            ),
            PeriodSummary(
                habit_name="water", emoji="💧", goal_type="count", total_count=12,
                goal_progress=21.4, streak=1, bar_chart="█" * 4 + "░" * 16, entries=2,
            ),
            PeriodSummary(
                habit_name="read", emoji="📖", goal_type="duration", bar_chart="░" * 20,
            ),
        ],
        total_time=3.5,
        total_count=12,
    )


def test_weekly_summary_text():
    text = typer.unstyle(terminal.format_weekly_summary(make_report()))

    assert "📅 May 13 - May 19" in text
    assert "💻 code " + "█" * 10 + "░" * 10 + " 3.5h (50% of goal) 🔥 2 day streak" in text
    assert "💧 water " + "█" * 4 + "░" * 16 + " 12x (21% of goal) 🔥 1 day streak" in text
    assert "📖 read " + "░" * 20 + " 0\n" in text
    assert "🎯 Total Time: 3.5 hours" in text
    assert "💪 Good work!" not in text


def test_daily_summary_skips_idle_habits():
    text = typer.unstyle(terminal.format_daily_summary(make_report("daily")))

    assert "Daily Summary - Monday, May 13, 2024" in text
    assert "💻 code 3.5h (50% of daily goal)" in text
    assert "💧 water 12x" in text
    assert "📖 read" not in text
    assert "🎯 Total Time Today: 3.5 hours" in text
    assert "🎯 Total Count Today: 12" in text


def test_habit_config_line():
    habit = Habit(id=1, name="water", emoji="💧", daily_goal=8, goal_type="count", default_duration="1x")
    assert terminal.format_habit_config(habit) == "💧 water (Goal: 8 times) [Default: 1x]"

    no_goal = Habit(id=2, name="read", emoji="📖")
    assert terminal.format_habit_config(no_goal) == "📖 read"


def test_render_png(tmp_path):
    path = DashboardRenderer().render(make_report(), tmp_path / "dash.png")

    with Image.open(path) as image:
        assert image.format == "PNG"
        assert image.mode == "1"
        assert image.size[0] == 800


def test_render_empty_report(tmp_path):
    report = make_report()
    report.habits = []

    path = DashboardRenderer().render(report, tmp_path / "nested" / "empty.png")

    assert path.exists()
