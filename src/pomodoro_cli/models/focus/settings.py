"""User adjustable timer settings."""

from __future__ import annotations

from dataclasses import dataclass

from .session import SessionType

# (minimum, maximum, step) in minutes for each adjustable duration
DURATION_BOUNDS: dict[SessionType, tuple[int, int, int]] = {
    SessionType.WORK: (5, 60, 5),
    SessionType.SHORT_BREAK: (1, 15, 1),
    SessionType.LONG_BREAK: (10, 30, 5),
}


def normalize_minutes(session_type: SessionType, minutes: int) -> int:
    """Clamp *minutes* into the allowed range and snap it to the step grid."""
    low, high, step = DURATION_BOUNDS[session_type]
    clamped = min(max(int(minutes), low), high)
    snapped = low + round((clamped - low) / step) * step
    return min(snapped, high)


@dataclass
class TimerSettings:
    """Durations (seconds) and alert switches.

    The constructor accepts raw seconds so that short demo sessions are
    possible; the ``set_*`` methods take minutes and keep the value in range.
    """

    work_duration: int = SessionType.WORK.default_duration
    short_break_duration: int = SessionType.SHORT_BREAK.default_duration
    long_break_duration: int = SessionType.LONG_BREAK.default_duration
    sound_enabled: bool = True
    notifications_enabled: bool = True

    def duration_for(self, session_type: SessionType) -> int:
        """Configured length in seconds for *session_type*."""
        if session_type == SessionType.WORK:
            return self.work_duration
        elif session_type == SessionType.SHORT_BREAK:
            return self.short_break_duration
        else:  # long_break
            return self.long_break_duration

    def set_duration_minutes(self, session_type: SessionType, minutes: int) -> int:
        """Set a duration from minutes. Returns the minutes actually applied."""
        applied = normalize_minutes(session_type, minutes)
        seconds = applied * 60

        if session_type == SessionType.WORK:
            self.work_duration = seconds
        elif session_type == SessionType.SHORT_BREAK:
            self.short_break_duration = seconds
        else:
            self.long_break_duration = seconds

        return applied

    @classmethod
    def from_config(cls, config) -> TimerSettings:
        """Build settings from a ``TimerConfig`` (durations in minutes)."""
        return cls(
            work_duration=config.work_minutes * 60,
            short_break_duration=config.short_break_minutes * 60,
            long_break_duration=config.long_break_minutes * 60,
            sound_enabled=config.sound_enabled,
            notifications_enabled=config.notifications_enabled,
        )
