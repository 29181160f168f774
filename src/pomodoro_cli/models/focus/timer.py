"""Pomodoro timer state machine.

The timer owns the countdown, the work/break rotation and the session
records; it knows nothing about how it is displayed. Everything outside the
state machine is injected:

- a tick source that calls back once per second while running,
- a history store receiving a ``SessionRecord`` for every session that ends,
- a notifier for the end-of-session alert,
- an effect runner deciding whether those two run inline or in background.

Every command is total: commands that make no sense in the current state are
no-ops and return the unchanged snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from .cycling import SESSIONS_BEFORE_LONG_BREAK, next_session
from .effects import EffectRunner
from .notifications import NOTIFICATION_TITLE, NotificationPort, completion_message
from .session import SessionRecord, SessionType, TimerSnapshot, TimerState
from .settings import TimerSettings
from .tick import ManualTickSource, TickSource

logger = logging.getLogger(__name__)

Subscriber = Callable[[TimerSnapshot], None]


class SessionRecordStore(Protocol):
    """Where finished sessions go."""

    def append(self, record: SessionRecord) -> None: ...


def format_time(seconds: int) -> str:
    """Format seconds as zero-padded MM:SS."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def _local_now() -> datetime:
    return datetime.now().astimezone()


class PomodoroTimer:
    """Countdown and session lifecycle for the Pomodoro technique."""

    def __init__(
        self,
        settings: TimerSettings | None = None,
        store: SessionRecordStore | None = None,
        notifier: NotificationPort | None = None,
        tick_source: TickSource | None = None,
        effects: EffectRunner | None = None,
        clock: Callable[[], datetime] = _local_now,
        sessions_before_long_break: int = SESSIONS_BEFORE_LONG_BREAK,
    ):
        self.settings = settings or TimerSettings()
        self._store = store
        self._notifier = notifier
        self._tick_source = tick_source or ManualTickSource()
        self._effects = effects or EffectRunner()
        self._clock = clock
        self._sessions_before_long_break = sessions_before_long_break
        self._subscribers: list[Subscriber] = []

        self.current_session = SessionType.WORK
        self.time_remaining = self.settings.duration_for(self.current_session)
        self.timer_state = TimerState.STOPPED
        self.completed_work_sessions = 0
        self.progress = 0.0
        self.session_start_time: datetime | None = None
        self.session_initial_duration = 0

        if self._notifier is not None and self.settings.notifications_enabled:
            self._request_notification_permission()

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def snapshot(self) -> TimerSnapshot:
        """Current observable state."""
        return TimerSnapshot(
            current_session=self.current_session,
            time_remaining=self.time_remaining,
            timer_state=self.timer_state,
            completed_work_sessions=self.completed_work_sessions,
            progress=self.progress,
        )

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call *callback* with a snapshot after every change. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self) -> TimerSnapshot:
        snapshot = self.snapshot()
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("timer subscriber failed")
        return snapshot

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> TimerSnapshot:
        """Start a new session or resume a paused one."""
        if self.timer_state == TimerState.RUNNING:
            return self.snapshot()

        # Only the first start of a session instance records its origin
        if self.session_start_time is None:
            self.session_start_time = self._clock()
            self.session_initial_duration = self.duration_for(self.current_session)
            self._update_progress()
            logger.info(
                "started %s session (%ss)",
                self.current_session.value,
                self.session_initial_duration,
            )
        else:
            logger.info(
                "resumed %s session at %s",
                self.current_session.value,
                format_time(self.time_remaining),
            )

        self.timer_state = TimerState.RUNNING
        self._tick_source.start(self.tick)
        return self._publish()

    def pause(self) -> TimerSnapshot:
        """Pause a running session."""
        if self.timer_state != TimerState.RUNNING:
            return self.snapshot()

        self._tick_source.stop()
        self.timer_state = TimerState.PAUSED
        logger.info(
            "paused %s session at %s",
            self.current_session.value,
            format_time(self.time_remaining),
        )
        return self._publish()

    def reset(self) -> TimerSnapshot:
        """Abandon the current session and restore its full duration."""
        if self.session_start_time is not None and self.timer_state != TimerState.STOPPED:
            self._record_incomplete()

        self._reset_session()
        return self._publish()

    def skip(self) -> TimerSnapshot:
        """Move to the next session without counting the current one."""
        self._tick_source.stop()

        if self.session_start_time is not None:
            self._record_incomplete()

        skipped = self.current_session
        self.current_session = self._next_session()
        logger.info("skipped %s, next is %s", skipped.value, self.current_session.value)

        self._reset_session()
        return self._publish()

    def tick(self) -> TimerSnapshot:
        """Advance the countdown by one second."""
        if self.timer_state != TimerState.RUNNING:
            return self.snapshot()

        if self.time_remaining <= 0:
            return self._complete_session()

        self.time_remaining -= 1
        self._update_progress()
        snapshot = self._publish()

        if self.time_remaining == 0:
            return self._complete_session()
        return snapshot

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def duration_for(self, session_type: SessionType) -> int:
        return self.settings.duration_for(session_type)

    def set_work_duration(self, minutes: int) -> int:
        return self._set_duration(SessionType.WORK, minutes)

    def set_short_break_duration(self, minutes: int) -> int:
        return self._set_duration(SessionType.SHORT_BREAK, minutes)

    def set_long_break_duration(self, minutes: int) -> int:
        return self._set_duration(SessionType.LONG_BREAK, minutes)

    def set_sound_enabled(self, enabled: bool) -> None:
        self.settings.sound_enabled = enabled

    def set_notifications_enabled(self, enabled: bool) -> None:
        self.settings.notifications_enabled = enabled
        if enabled and self._notifier is not None:
            self._request_notification_permission()

    def _set_duration(self, session_type: SessionType, minutes: int) -> int:
        applied = self.settings.set_duration_minutes(session_type, minutes)

        # A countdown in progress is never resized; an idle one shows the new length
        if (
            session_type == self.current_session
            and self.timer_state == TimerState.STOPPED
            and self.session_start_time is None
        ):
            self.time_remaining = self.duration_for(session_type)
            self._update_progress()
            self._publish()

        return applied

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _complete_session(self) -> TimerSnapshot:
        self._tick_source.stop()
        self.timer_state = TimerState.STOPPED

        completed = self.current_session
        now = self._clock()
        self._save(
            SessionRecord(
                session_type=completed,
                planned_duration=self.session_initial_duration,
                actual_duration=self.session_initial_duration,
                started_at=self.session_start_time or now,
                completed=True,
                completed_at=now,
            )
        )

        if completed == SessionType.WORK:
            self.completed_work_sessions += 1

        upcoming = self._next_session()
        logger.info(
            "completed %s session (%d work sessions), next is %s",
            completed.value,
            self.completed_work_sessions,
            upcoming.value,
        )
        self._alert(completed, upcoming)

        self.current_session = upcoming
        self._reset_session()
        return self._publish()

    def _next_session(self) -> SessionType:
        return next_session(
            self.current_session,
            self.completed_work_sessions,
            self._sessions_before_long_break,
        )

    def _reset_session(self) -> None:
        """Stop and rewind the countdown for the current session type."""
        self._tick_source.stop()
        self.timer_state = TimerState.STOPPED
        self.time_remaining = self.duration_for(self.current_session)
        self.session_start_time = None
        self.session_initial_duration = 0
        self._update_progress()

    def _update_progress(self) -> None:
        total = self.session_initial_duration or self.duration_for(self.current_session)
        if total <= 0:
            self.progress = 0.0
            return

        remaining = min(max(self.time_remaining, 0), total)
        self.progress = (total - remaining) / total

    def _record_incomplete(self) -> None:
        elapsed = self.session_initial_duration - self.time_remaining
        logger.info(
            "interrupted %s session after %ss",
            self.current_session.value,
            elapsed,
        )
        self._save(
            SessionRecord(
                session_type=self.current_session,
                planned_duration=self.session_initial_duration,
                actual_duration=elapsed,
                started_at=self.session_start_time or self._clock(),
                completed=False,
            )
        )

    def _save(self, record: SessionRecord) -> None:
        if self._store is None:
            return
        self._effects.submit("save session", self._store.append, record)

    def _alert(self, completed: SessionType, upcoming: SessionType) -> None:
        if self._notifier is None or not self.settings.notifications_enabled:
            return

        if self.settings.sound_enabled:
            self._effects.submit("play sound", self._notifier.play_sound)
        self._effects.submit(
            "notify",
            self._notifier.notify,
            NOTIFICATION_TITLE,
            completion_message(completed, upcoming),
        )

    def _request_notification_permission(self) -> None:
        try:
            granted = self._notifier.request_permission()
        except Exception:
            logger.exception("notification permission request failed")
            granted = False

        if not granted:
            logger.warning("notifications not permitted; disabling them")
            self.settings.notifications_enabled = False
