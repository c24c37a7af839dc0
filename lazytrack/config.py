"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LAZYTRACK_",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage
    data_dir: Path = Path.home() / ".lazytrack"

    # Notifications
    notifications_disabled: bool = False
    late_reminder_hour: int = 20  # 8 PM

    # Daemon
    daemon_check_interval: int = 3600  # 1 hour between reminder checks

    # Logging
    log_level: str = "WARNING"


settings = Settings()
