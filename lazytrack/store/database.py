"""JSON file storage for habits, logs and user config."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import TypeAdapter, ValidationError

from .defaults import habit_defaults
from .models import Habit, LogEntry

logger = logging.getLogger(__name__)

HABITS_FILE = "habits.json"
LOGS_FILE = "logs.json"
CONFIG_FILE = "config.json"

_habits_adapter = TypeAdapter(dict[str, Habit])
_logs_adapter = TypeAdapter(list[LogEntry])
_config_adapter = TypeAdapter(dict[str, str])


class StoreError(Exception):
    """Raised when data cannot be written back to disk."""


class HabitNotFound(KeyError):
    """Raised when looking up a habit that does not exist."""


class ConfigNotFound(KeyError):
    """Raised when looking up a config key that is not set."""


class HabitStore:
    """
    In-memory habit store backed by three JSON documents.

    Everything is loaded at construction and written back on save(). Use it
    as a context manager to save on exit.
    """

    def __init__(self, data_dir: Union[str, Path]):
        """Initialize store and load existing data."""
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self.habits: dict[str, Habit] = self._load(HABITS_FILE, _habits_adapter, {})
        self.logs: list[LogEntry] = self._load(LOGS_FILE, _logs_adapter, [])
        self.config: dict[str, str] = self._load(CONFIG_FILE, _config_adapter, {})

        logger.info(
            f"Loaded {len(self.habits)} habits and {len(self.logs)} logs from {self.data_dir}"
        )

    def __enter__(self) -> "HabitStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.save()

    def _load(self, filename: str, adapter: TypeAdapter, empty: Any) -> Any:
        """Read one document; missing or unreadable files count as empty."""
        path = self.data_dir / filename
        if not path.exists():
            return empty

        try:
            return adapter.validate_json(path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warning(f"Could not load {path}: {e}, starting empty")
            return empty

    def _write(self, filename: str, adapter: TypeAdapter, value: Any):
        path = self.data_dir / filename
        data = adapter.dump_python(value, mode="json")
        path.write_text(
            json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8"
        )

    def save(self):
        """
        Write habits, logs and config in that order.

        Raises:
            StoreError: On the first file that fails; later files are not written
        """
        for filename, adapter, value in (
            (HABITS_FILE, _habits_adapter, self.habits),
            (LOGS_FILE, _logs_adapter, self.logs),
            (CONFIG_FILE, _config_adapter, self.config),
        ):
            try:
                self._write(filename, adapter, value)
            except (OSError, TypeError, ValueError) as e:
                raise StoreError(f"failed to save {filename}: {e}") from e

        logger.info(f"Saved data to {self.data_dir}")

    def list_habits(self) -> list[Habit]:
        """Get all habits."""
        return list(self.habits.values())

    def get_habit_by_name(self, name: str) -> Habit:
        """Get habit by name."""
        if name not in self.habits:
            raise HabitNotFound(f"habit not found: {name}")
        return self.habits[name]

    def get_or_create_habit(self, name: str) -> Habit:
        """Get an existing habit or create one with smart defaults."""
        if name in self.habits:
            return self.habits[name]

        habit = Habit(id=len(self.habits) + 1, name=name, **habit_defaults(name))
        self.habits[name] = habit
        logger.info(f"Created habit: {name} ({habit.goal_type}, goal {habit.daily_goal})")
        return habit

    def update_habit(self, habit: Habit):
        """Replace a habit's configuration."""
        self.habits[habit.name] = habit

    def append_log(
        self,
        habit_id: int,
        habit_name: str,
        duration: str = "",
        count: int = 0,
        notes: str = "",
        logged_at: Optional[datetime] = None,
    ) -> LogEntry:
        """Append a new log entry."""
        entry = LogEntry(
            id=len(self.logs) + 1,
            habit_id=habit_id,
            habit_name=habit_name,
            duration=duration,
            count=count,
            logged_at=logged_at or datetime.now(),
            notes=notes,
        )
        self.logs.append(entry)
        logger.info(f"Logged {habit_name}: duration={duration!r} count={count}")
        return entry

    def logs_for_habit(
        self, name: str, start: datetime, end: datetime
    ) -> list[LogEntry]:
        """Get logs for a habit strictly between start and end."""
        return [
            log
            for log in self.logs
            if log.habit_name == name and start < log.logged_at < end
        ]

    def get_config(self, key: str) -> str:
        """Get a configuration value."""
        if key not in self.config:
            raise ConfigNotFound(f"config not found: {key}")
        return self.config[key]

    def set_config(self, key: str, value: str):
        """Set a configuration value."""
        self.config[key] = value
