"""Session value types shared by the timer core, the store and the UI."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SessionType(str, Enum):
    """Kind of interval the timer is counting down."""

    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def label(self) -> str:
        """Human readable name, e.g. 'Short Break'."""
        return _LABELS[self]

    @property
    def default_duration(self) -> int:
        """Default length in seconds."""
        return _DEFAULT_DURATIONS[self]

    @property
    def emoji(self) -> str:
        return _EMOJI[self]

    @property
    def color(self) -> str:
        """Rich color used when rendering this session type."""
        return _COLORS[self]


_LABELS = {
    SessionType.WORK: "Work",
    SessionType.SHORT_BREAK: "Short Break",
    SessionType.LONG_BREAK: "Long Break",
}

_DEFAULT_DURATIONS = {
    SessionType.WORK: 25 * 60,
    SessionType.SHORT_BREAK: 5 * 60,
    SessionType.LONG_BREAK: 15 * 60,
}

_EMOJI = {
    SessionType.WORK: "🍅",
    SessionType.SHORT_BREAK: "☕",
    SessionType.LONG_BREAK: "🌴",
}

_COLORS = {
    SessionType.WORK: "red",
    SessionType.SHORT_BREAK: "green",
    SessionType.LONG_BREAK: "blue",
}


class TimerState(str, Enum):
    """Run state of the countdown."""

    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(frozen=True)
class SessionRecord:
    """A finished (or interrupted) session, handed to the history store."""

    session_type: SessionType
    planned_duration: int  # seconds
    actual_duration: int  # seconds
    started_at: datetime
    completed: bool
    completed_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict) -> SessionRecord:
        """Create from a history database row."""
        completed_at = row.get("completed_at")
        return cls(
            session_type=SessionType(row["session_type"]),
            planned_duration=int(row["planned_duration"]),
            actual_duration=int(row["actual_duration"]),
            started_at=datetime.fromisoformat(row["started_at"]).astimezone(),
            completed=bool(row["completed"]),
            completed_at=(
                datetime.fromisoformat(completed_at).astimezone() if completed_at else None
            ),
        )


@dataclass(frozen=True)
class TimerSnapshot:
    """Observable state of the timer at one point in time."""

    current_session: SessionType
    time_remaining: int
    timer_state: TimerState
    completed_work_sessions: int
    progress: float


@dataclass(frozen=True)
class SessionStats:
    """Aggregate of session records over a trailing window of days."""

    days: int
    total: int = 0
    completed: int = 0
    work_count: int = 0
    work_seconds: int = 0

    @property
    def incomplete(self) -> int:
        return self.total - self.completed

    @property
    def completion_rate(self) -> float:
        """Completed share of all sessions, as a percentage."""
        if self.total == 0:
            return 0.0
        return round(self.completed / self.total * 100, 1)

    @property
    def work_minutes(self) -> int:
        return self.work_seconds // 60
