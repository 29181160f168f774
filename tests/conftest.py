"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, data and log
directories, plus in-memory collaborators for the timer core.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from pomodoro_cli.models.focus.session import SessionRecord
from pomodoro_cli.models.focus.settings import TimerSettings
from pomodoro_cli.models.focus.tick import ManualTickSource
from pomodoro_cli.models.focus.timer import PomodoroTimer

FIXED_NOW = datetime(2026, 3, 2, 9, 0, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class RecordingStore:
    """SessionRecordStore keeping records in a list."""

    def __init__(self):
        self.records: list[SessionRecord] = []

    def append(self, record: SessionRecord) -> None:
        self.records.append(record)


class FakeNotifier:
    """NotificationPort that remembers what it was asked to do."""

    def __init__(self, granted: bool = True):
        self.granted = granted
        self.permission_requests = 0
        self.sounds = 0
        self.messages: list[tuple[str, str]] = []

    def request_permission(self) -> bool:
        self.permission_requests += 1
        return self.granted

    def play_sound(self) -> None:
        self.sounds += 1

    def notify(self, title: str, body: str) -> None:
        self.messages.append((title, body))


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_logging(tmp_path):
    """Send the application log file to tmp and reset logger state."""
    import pomodoro_cli.utils.logger as logger_mod

    app_logger = logging.getLogger("pomodoro_cli")
    logger_mod._logger = None
    app_logger.handlers.clear()
    app_logger.propagate = True

    with patch(
        "pomodoro_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")
    ):
        yield

    for handler in app_logger.handlers:
        handler.close()
    app_logger.handlers.clear()
    app_logger.propagate = True
    logger_mod._logger = None


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from pomodoro_cli.services.config_service import get_config_service

    tmpdir = str(tmp_path / "config")
    get_config_service.cache_clear()
    with patch("pomodoro_cli.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("pomodoro_cli.services.config_service.user_data_dir", return_value=tmpdir):
            from pomodoro_cli.services.config_service import ConfigService

            svc = ConfigService()
            yield svc
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Timer helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def ticks() -> ManualTickSource:
    return ManualTickSource()


@pytest.fixture()
def make_timer(store, notifier, ticks):
    """Factory building a PomodoroTimer with short durations in seconds."""

    def _make(
        work: int = 5,
        short_break: int = 3,
        long_break: int = 4,
        sound_enabled: bool = True,
        notifications_enabled: bool = True,
        **kwargs,
    ) -> PomodoroTimer:
        settings = TimerSettings(
            work_duration=work,
            short_break_duration=short_break,
            long_break_duration=long_break,
            sound_enabled=sound_enabled,
            notifications_enabled=notifications_enabled,
        )
        kwargs.setdefault("store", store)
        kwargs.setdefault("notifier", notifier)
        kwargs.setdefault("tick_source", ticks)
        kwargs.setdefault("clock", lambda: FIXED_NOW)
        return PomodoroTimer(settings=settings, **kwargs)

    return _make


@pytest.fixture()
def fixed_now() -> datetime:
    """The instant every ``make_timer`` clock returns."""
    return FIXED_NOW


@pytest.fixture()
def make_notifier():
    """Factory for extra FakeNotifier instances."""
    return FakeNotifier
