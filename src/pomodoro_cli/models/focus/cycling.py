"""Pomodoro cycling rules."""

from .session import SessionType

SESSIONS_BEFORE_LONG_BREAK = 4


def next_session(
    current: SessionType,
    completed_work_sessions: int,
    sessions_before_long_break: int = SESSIONS_BEFORE_LONG_BREAK,
) -> SessionType:
    """Determine the session that follows *current*.

    ``completed_work_sessions`` is the counter after any increment for the
    session that just ended. A skipped work session leaves the counter
    untouched, so skipping never moves the long break closer.
    """
    if current == SessionType.WORK:
        if completed_work_sessions % sessions_before_long_break == 0:
            return SessionType.LONG_BREAK
        return SessionType.SHORT_BREAK

    # After either break, always back to work
    return SessionType.WORK


def get_progress_dots(
    completed_work_sessions: int,
    sessions_before_long_break: int = SESSIONS_BEFORE_LONG_BREAK,
) -> str:
    """Dots showing completed work sessions, with '+N' past the cadence."""
    if completed_work_sessions <= 0:
        return ""

    shown = min(completed_work_sessions, sessions_before_long_break)
    dots = " ".join("⬤" for _ in range(shown))
    extra = completed_work_sessions - sessions_before_long_break
    if extra > 0:
        dots += f" +{extra}"
    return dots
