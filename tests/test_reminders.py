"""Tests for notifications, reminders and the daemon."""

import subprocess
from datetime import datetime
from types import SimpleNamespace

import pytest

from lazytrack.config import Settings
from lazytrack.notify import notifier, reminders
from lazytrack.notify.notifier import (
    goal_reminder_message,
    join_habits,
    late_reminder_message,
    show_notification,
)
from lazytrack.notify.reminders import (
    ReminderDaemon,
    check_reminders,
    notifications_enabled,
    pending_habits,
    should_show_late_reminder,
)
from lazytrack.store.database import HabitStore, StoreError

EVENING = datetime(2024, 5, 15, 21, 0)


@pytest.fixture
def sent(monkeypatch):
    """Capture notifications instead of showing them."""
    calls = []

    def fake_show(title, message):
        calls.append((title, message))
        return True

    monkeypatch.setattr(reminders, "show_notification", fake_show)
    return calls


def seed(store, now):
    """water: 3/8 today, code: 2h of a 2h goal, read: no goal."""
    water = store.get_or_create_habit("water")
    code = store.get_or_create_habit("code")
    store.update_habit(code.model_copy(update={"daily_goal": 2}))
    store.get_or_create_habit("read")

    store.append_log(water.id, "water", "", 3, logged_at=now.replace(hour=9))
    store.append_log(code.id, "code", "2h", 0, logged_at=now.replace(hour=10))


class TestJoinHabits:
    def test_phrasing(self):
        assert join_habits([]) == "none"
        assert join_habits(["water"]) == "water"
        assert join_habits(["water", "code"]) == "water and code"
        assert join_habits(["water", "code", "read"]) == "water, code and read"


class TestMessages:
    def test_goal_reminder_count(self):
        message = goal_reminder_message("water", 3, 8, "count")
        assert message == "You've completed 3/8 water today. Don't forget to reach your goal!"

    def test_goal_reminder_duration(self):
        assert "1.5 hours of code" in goal_reminder_message("code", 1.5, 2, "duration")

    def test_late_reminder(self):
        assert late_reminder_message(["water", "code"]).endswith("water and code")


class TestShowNotification:
    @pytest.fixture
    def no_desktop(self, monkeypatch):
        """Make plyer fail so the platform command path runs."""
        def unavailable(**kwargs):
            raise NotImplementedError("no usable implementation found")

        monkeypatch.setattr(notifier, "notification", SimpleNamespace(notify=unavailable))

    def test_desktop_notification_first(self, monkeypatch):
        shown = []
        monkeypatch.setattr(
            notifier, "notification", SimpleNamespace(notify=lambda **kwargs: shown.append(kwargs))
        )
        monkeypatch.setattr(notifier, "system_alert", lambda t, m: pytest.fail("command used"))

        assert show_notification("LazyTrack", "hello") is True
        assert shown[0]["title"] == "LazyTrack"
        assert shown[0]["message"] == "hello"
        assert shown[0]["app_name"] == "LazyTrack"

    def test_failure_is_reported_not_raised(self, monkeypatch, no_desktop):
        monkeypatch.setattr(notifier, "_notification_command", lambda t, m: ["notify-send", t, m])

        def boom(*args, **kwargs):
            raise subprocess.CalledProcessError(1, "notify-send")

        monkeypatch.setattr(subprocess, "run", boom)

        assert show_notification("title", "message") is False

    def test_missing_notifier_prints(self, monkeypatch, capsys, no_desktop):
        monkeypatch.setattr(notifier, "_notification_command", lambda t, m: None)

        assert show_notification("LazyTrack", "hello") is True
        assert "📢 LazyTrack: hello" in capsys.readouterr().out

    def test_linux_prefers_notify_send(self, monkeypatch):
        monkeypatch.setattr(notifier.sys, "platform", "linux")
        monkeypatch.setattr(notifier.shutil, "which", lambda name: f"/usr/bin/{name}")

        command = notifier._notification_command("t", "m")

        assert command == ["notify-send", "t", "m"]

    def test_macos_quotes_are_escaped(self, monkeypatch):
        monkeypatch.setattr(notifier.sys, "platform", "darwin")

        command = notifier._notification_command("LazyTrack", 'my "deep" work \\ done')

        assert command[:2] == ["osascript", "-e"]
        assert command[2] == (
            'display notification "my \\"deep\\" work \\\\ done" with title "LazyTrack"'
        )

    def test_windows_quotes_are_escaped(self, monkeypatch):
        monkeypatch.setattr(notifier.sys, "platform", "win32")

        command = notifier._notification_command("LazyTrack", "don't stop'; Remove-Item x; '")

        assert command[0] == "powershell"
        assert "'don''t stop''; Remove-Item x; '''" in command[2]
        assert "'LazyTrack'" in command[2]


class TestPending:
    def test_pending_habits(self, store, now):
        seed(store, now)

        pending = pending_habits(store, now)

        assert [p.habit.name for p in pending] == ["water"]
        assert pending[0].label == "water (3/8)"

    def test_duration_label(self, store, now):
        code = store.get_or_create_habit("code")
        store.update_habit(code.model_copy(update={"daily_goal": 2}))
        store.append_log(code.id, "code", "30m", logged_at=now.replace(hour=9))

        pending = pending_habits(store, now)

        assert pending[0].label == "code (0.5/2h)"

    def test_yesterday_does_not_count(self, store, now):
        water = store.get_or_create_habit("water")
        store.append_log(water.id, "water", "", 8, logged_at=datetime(2024, 5, 14, 9))

        assert [p.habit.name for p in pending_habits(store, now)] == ["water"]


class TestCheckReminders:
    def test_reminds_each_pending_habit(self, store, test_settings, now, sent):
        seed(store, now)

        lines = check_reminders(store, test_settings, now=now)

        assert lines == ["📋 Pending goals: water (3/8)"]
        assert len(sent) == 1
        assert sent[0][0] == "LazyTrack Reminder"

    def test_all_done(self, store, test_settings, now, sent):
        store.get_or_create_habit("read")
        assert check_reminders(store, test_settings, now=now) == ["✅ All goals completed for today!"]
        assert sent == []

    def test_late_only_before_evening(self, store, test_settings, now, sent):
        seed(store, now)
        assert check_reminders(store, test_settings, late_only=True, now=now) == []
        assert sent == []

    def test_late_only_in_evening(self, store, test_settings, sent):
        seed(store, EVENING)

        lines = check_reminders(store, test_settings, late_only=True, now=EVENING)

        assert lines == ["🌙 Late reminder: You still have pending goals: water"]
        assert sent == [("LazyTrack Late Reminder", late_reminder_message(["water"]))]

    def test_disabled_by_user_config(self, store, test_settings, now, sent):
        seed(store, now)
        store.set_config("notifications", "off")

        assert not notifications_enabled(test_settings, store)
        assert check_reminders(store, test_settings, now=now)
        assert sent == []

    def test_disabled_by_settings(self, store, test_settings):
        test_settings.notifications_disabled = True
        assert not notifications_enabled(test_settings, store)


def test_should_show_late_reminder():
    assert not should_show_late_reminder(datetime(2024, 5, 15, 19, 59))
    assert should_show_late_reminder(datetime(2024, 5, 15, 20, 0))
    assert should_show_late_reminder(datetime(2024, 5, 15, 9), late_hour=8)


class TestDaemon:
    def test_check_once_in_evening(self, data_dir, test_settings, sent):
        with HabitStore(data_dir) as store:
            seed(store, EVENING)

        daemon = ReminderDaemon(test_settings, clock=lambda: EVENING)

        assert daemon.check_once() == ["water"]
        assert len(sent) == 1

    def test_check_once_during_day(self, data_dir, test_settings, now, sent):
        with HabitStore(data_dir) as store:
            seed(store, now)

        assert ReminderDaemon(test_settings, clock=lambda: now).check_once() == []
        assert sent == []

    def test_run_sleeps_between_ticks(self, test_settings, sent):
        sleeps = []
        daemon = ReminderDaemon(test_settings, sleep=sleeps.append, clock=lambda: EVENING)

        daemon.run(max_ticks=3)

        assert sleeps == [3600, 3600]

    def test_run_survives_store_errors(self, test_settings, monkeypatch):
        checks = []

        def failing_check(self):
            checks.append(1)
            raise StoreError("failed to save habits.json")

        monkeypatch.setattr(ReminderDaemon, "check_once", failing_check)

        ReminderDaemon(test_settings, sleep=lambda s: None).run(max_ticks=2)

        assert len(checks) == 2

    def test_run_survives_unusable_data_dir(self, tmp_path, sent):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        settings = Settings(data_dir=blocker, notifications_disabled=False)

        ReminderDaemon(settings, sleep=lambda s: None, clock=lambda: EVENING).run(max_ticks=2)

        assert sent == []
