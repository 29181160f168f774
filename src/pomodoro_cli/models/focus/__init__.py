"""Focus mode - Pomodoro timer core for Pomodoro CLI."""

from .cycling import next_session
from .effects import EffectRunner
from .history import HistoryLogger
from .notifications import ConsoleNotifier, NotificationPort
from .session import (
    SessionRecord,
    SessionStats,
    SessionType,
    TimerSnapshot,
    TimerState,
)
from .settings import TimerSettings
from .tick import ManualTickSource, MonotonicTickSource, TickSource
from .timer import PomodoroTimer, format_time

__all__ = [
    "ConsoleNotifier",
    "EffectRunner",
    "HistoryLogger",
    "ManualTickSource",
    "MonotonicTickSource",
    "NotificationPort",
    "PomodoroTimer",
    "SessionRecord",
    "SessionStats",
    "SessionType",
    "TickSource",
    "TimerSettings",
    "TimerSnapshot",
    "TimerState",
    "format_time",
    "next_session",
]
