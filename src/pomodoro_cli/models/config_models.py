"""Configuration models.

Durations are stored in minutes, the unit the user edits them in; the timer
core converts them to seconds through ``TimerSettings.from_config``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from pomodoro_cli.models.focus.session import SessionType
from pomodoro_cli.models.focus.settings import DURATION_BOUNDS

_FIELD_SESSION = {
    "work_minutes": SessionType.WORK,
    "short_break_minutes": SessionType.SHORT_BREAK,
    "long_break_minutes": SessionType.LONG_BREAK,
}


class TimerConfig(BaseModel):
    """Timer durations and alert switches."""

    work_minutes: int = Field(default=25, ge=5, le=60)
    short_break_minutes: int = Field(default=5, ge=1, le=15)
    long_break_minutes: int = Field(default=15, ge=10, le=30)
    sound_enabled: bool = Field(default=True)
    notifications_enabled: bool = Field(default=True)

    @field_validator("work_minutes", "short_break_minutes", "long_break_minutes")
    @classmethod
    def validate_step(cls, v: int, info: ValidationInfo) -> int:
        """Durations must sit on the step grid of their range."""
        low, _high, step = DURATION_BOUNDS[_FIELD_SESSION[info.field_name]]
        if (v - low) % step != 0:
            raise ValueError(f"must be {low} plus a multiple of {step}")
        return v


class HistoryConfig(BaseModel):
    """Session history configuration."""

    db_path: str | None = Field(default=None, description="SQLite file; default under user data dir")
    retention_days: int = Field(default=90, ge=1)


class OutputConfig(BaseModel):
    """Output configuration."""

    color: bool = Field(default=True)
    refresh_per_second: int = Field(default=4, ge=1, le=30)


class LoggingConfig(BaseModel):
    """Log file configuration."""

    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level '{v}'")
        return level


class AppConfig(BaseModel):
    """Main Pomodoro CLI configuration"""

    timer: TimerConfig = Field(default_factory=TimerConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
