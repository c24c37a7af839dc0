"""Desktop popup notifications."""

import logging
import shutil
import subprocess
import sys
from typing import Optional

from plyer import notification

logger = logging.getLogger(__name__)

APP_NAME = "LazyTrack"
NOTIFY_TIMEOUT = 10  # seconds
REMINDER_TITLE = "LazyTrack Reminder"
LATE_REMINDER_TITLE = "LazyTrack Late Reminder"

# Tried in order on Linux when plyer has no working backend
LINUX_NOTIFIERS = {
    "notify-send": lambda title, message: ["notify-send", title, message],
    "zenity": lambda title, message: ["zenity", "--info", "--title", title, "--text", message],
    "kdialog": lambda title, message: ["kdialog", "--title", title, "--msgbox", message],
}

# Single-quoted PowerShell literals: only ' needs escaping (as '')
WINDOWS_SCRIPT = """
Add-Type -AssemblyName System.Windows.Forms
$notification = New-Object System.Windows.Forms.NotifyIcon
$notification.Icon = [System.Drawing.SystemIcons]::Information
$notification.Visible = $true
$notification.ShowBalloonTip(5000, '{title}', '{message}', [System.Windows.Forms.ToolTipIcon]::Info)
Start-Sleep -Seconds 6
$notification.Dispose()
"""


def _applescript_quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _powershell_quote(text: str) -> str:
    return text.replace("'", "''")


def _notification_command(title: str, message: str) -> Optional[list[str]]:
    """Build the OS-specific notifier command, or None to print instead."""
    if sys.platform == "darwin":
        script = (
            f'display notification "{_applescript_quote(message)}" '
            f'with title "{_applescript_quote(title)}"'
        )
        return ["osascript", "-e", script]

    if sys.platform.startswith("linux"):
        for notifier, build in LINUX_NOTIFIERS.items():
            if shutil.which(notifier):
                return build(title, message)
        return None

    if sys.platform == "win32":
        script = WINDOWS_SCRIPT.format(
            title=_powershell_quote(title), message=_powershell_quote(message)
        )
        return ["powershell", "-Command", script]

    return None


def desktop_notify(title: str, message: str) -> bool:
    """
    Show a notification through plyer.

    Returns:
        True if successful, False otherwise
    """
    try:
        notification.notify(
            title=title,
            message=message,
            app_name=APP_NAME,
            timeout=NOTIFY_TIMEOUT,
        )
        return True
    except Exception as e:
        # plyer raises backend-specific errors (NotImplementedError, dbus errors)
        logger.warning(f"Desktop notification failed: {e}")
        return False


def system_alert(title: str, message: str) -> Optional[bool]:
    """
    Show a notification through a platform-specific command.

    Returns:
        True if delivered, False if the command failed, None if no command exists
    """
    command = _notification_command(title, message)
    if command is None:
        return None

    try:
        subprocess.run(command, check=True, capture_output=True)
    except (OSError, subprocess.CalledProcessError) as e:
        logger.warning(f"Notification via {command[0]} failed: {e}")
        return False

    logger.info(f"Notification sent via {command[0]}: {title}")
    return True


def show_notification(title: str, message: str) -> bool:
    """
    Show a popup notification.

    Tries plyer first, then the platform command, and prints when neither is
    available. Failures are logged and reported through the return value.

    Returns:
        True if the notification was delivered
    """
    if desktop_notify(title, message):
        return True

    delivered = system_alert(title, message)
    if delivered is None:
        print(f"📢 {title}: {message}")
        return True
    return delivered


def join_habits(names: list[str]) -> str:
    """Join names as natural language: "a", "a and b", "a, b and c"."""
    if not names:
        return "none"
    if len(names) == 1:
        return names[0]
    return ", ".join(names[:-1]) + " and " + names[-1]


def goal_reminder_message(
    habit_name: str, current: float, goal: int, goal_type: str
) -> str:
    """Message for a single pending goal."""
    if goal_type == "count":
        return (
            f"You've completed {int(current)}/{goal} {habit_name} today. "
            "Don't forget to reach your goal!"
        )
    return f"You've logged {current:.1f} hours of {habit_name} today. Keep going!"


def late_reminder_message(pending: list[str]) -> str:
    """Message listing every habit still pending late in the day."""
    return f"It's getting late! You still have pending goals: {join_habits(pending)}"
