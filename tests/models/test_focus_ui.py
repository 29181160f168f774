"""Comprehensive unit tests for models/focus/ui.py.

Tests TimerDisplay layout creation, key handling, the live loop with a
scripted keyboard, and show_summary.
"""

from __future__ import annotations

from io import StringIO
from unittest.mock import MagicMock

import pytest
from rich.console import Console
from rich.layout import Layout

from pomodoro_cli.models.focus.session import SessionType, TimerSnapshot, TimerState
from pomodoro_cli.models.focus.settings import TimerSettings
from pomodoro_cli.models.focus.tick import MonotonicTickSource
from pomodoro_cli.models.focus.ui import KEY_HINTS, TimerDisplay, show_summary


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _snapshot(
    *,
    session: SessionType = SessionType.WORK,
    remaining: int = 1500,
    state: TimerState = TimerState.STOPPED,
    completed: int = 0,
    progress: float = 0.0,
) -> TimerSnapshot:
    return TimerSnapshot(
        current_session=session,
        time_remaining=remaining,
        timer_state=state,
        completed_work_sessions=completed,
        progress=progress,
    )


def _render(renderable) -> str:
    console = Console(file=StringIO(), width=100, height=30, record=True)
    console.print(renderable)
    return console.export_text()


class ScriptedKeyboard:
    """Keyboard returning a fixed sequence of keys, then 'q'."""

    def __init__(self, keys):
        self.keys = list(keys)
        self.stopped = False

    def get_key(self):
        return self.keys.pop(0) if self.keys else "q"

    def stop(self) -> None:
        self.stopped = True


@pytest.fixture()
def display() -> TimerDisplay:
    return TimerDisplay(console=Console(file=StringIO(), width=100, height=30))


# ---------------------------------------------------------------------------
# create_layout
# ---------------------------------------------------------------------------


class TestCreateLayout:
    """Tests for TimerDisplay.create_layout."""

    def test_returns_layout_with_sections(self, display: TimerDisplay) -> None:
        layout = display.create_layout(_snapshot(), TimerSettings())
        assert isinstance(layout, Layout)
        for name in ("header", "body", "footer"):
            assert layout[name] is not None

    def test_renders_time_and_session(self, display: TimerDisplay) -> None:
        """The countdown, session label and session number are shown."""
        text = _render(
            display.create_layout(
                _snapshot(remaining=125, state=TimerState.RUNNING, completed=2),
                TimerSettings(),
            )
        )
        assert "02:05" in text
        assert "Work" in text
        assert "Session 3" in text

    def test_paused_header(self, display: TimerDisplay) -> None:
        text = _render(display.create_layout(_snapshot(state=TimerState.PAUSED), TimerSettings()))
        assert "PAUSED" in text
        assert "resume" in text

    def test_break_label(self, display: TimerDisplay) -> None:
        text = _render(
            display.create_layout(
                _snapshot(session=SessionType.LONG_BREAK, remaining=900), TimerSettings()
            )
        )
        assert "Long Break" in text
        assert "15:00" in text

    def test_progress_percent(self, display: TimerDisplay) -> None:
        text = _render(
            display.create_layout(
                _snapshot(state=TimerState.RUNNING, progress=0.5), TimerSettings()
            )
        )
        assert "50%" in text

    def test_settings_and_message(self, display: TimerDisplay) -> None:
        text = _render(
            display.create_layout(
                _snapshot(),
                TimerSettings(sound_enabled=False),
                message="Work session completed! Time for short break.",
            )
        )
        assert "Sound: off" in text
        assert "Alerts: on" in text
        assert "Time for short break" in text

    @pytest.mark.parametrize("state", list(TimerState))
    def test_footer_hints_per_state(self, display: TimerDisplay, state: TimerState) -> None:
        text = _render(display.create_layout(_snapshot(state=state), TimerSettings()))
        assert "q quit" in text
        assert KEY_HINTS[state].split("  ")[0] in text


# ---------------------------------------------------------------------------
# handle_key
# ---------------------------------------------------------------------------


class TestHandleKey:
    """Key to command mapping."""

    def test_space_starts_then_pauses(self, display, make_timer) -> None:
        timer = make_timer()
        assert display.handle_key(timer, " ") is True
        assert timer.timer_state == TimerState.RUNNING
        display.handle_key(timer, " ")
        assert timer.timer_state == TimerState.PAUSED
        display.handle_key(timer, " ")
        assert timer.timer_state == TimerState.RUNNING

    def test_r_resets(self, display, make_timer, ticks) -> None:
        timer = make_timer(work=10)
        timer.start()
        ticks.fire(3)
        display.handle_key(timer, "r")
        assert timer.time_remaining == 10
        assert timer.timer_state == TimerState.STOPPED

    def test_n_skips(self, display, make_timer) -> None:
        timer = make_timer()
        display.handle_key(timer, "n")
        assert timer.current_session != SessionType.WORK

    def test_m_toggles_sound_and_reports(self, display, make_timer) -> None:
        timer = make_timer()
        changed = MagicMock()
        display.handle_key(timer, "m", on_settings_changed=changed)
        assert timer.settings.sound_enabled is False
        changed.assert_called_once_with(timer.settings)
        display.handle_key(timer, "m")
        assert timer.settings.sound_enabled is True

    def test_q_quits(self, display, make_timer) -> None:
        assert display.handle_key(make_timer(), "q") is False

    @pytest.mark.parametrize("key", [None, "x", "1"])
    def test_other_keys_are_ignored(self, display, make_timer, key) -> None:
        timer = make_timer()
        before = timer.snapshot()
        assert display.handle_key(timer, key) is True
        assert timer.snapshot() == before


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


class TestRun:
    """The live loop, with a scripted keyboard and a fake clock."""

    def test_quit_records_started_session(self, display, make_timer, store, mocker) -> None:
        mocker.patch("pomodoro_cli.models.focus.ui.time.sleep")
        now = [0.0]
        source = MonotonicTickSource(clock=lambda: now[0])
        timer = make_timer(work=10, tick_source=source)
        keyboard = ScriptedKeyboard([" ", None])

        final = display.run(timer, source, keyboard=keyboard)

        assert keyboard.stopped
        assert final.timer_state == TimerState.STOPPED
        assert final.time_remaining == 10
        assert len(store.records) == 1
        assert store.records[0].completed is False

    def test_ticks_are_polled(self, display, make_timer, store, mocker) -> None:
        now = [0.0]

        def advance(_delay) -> None:
            now[0] += 1.0

        mocker.patch("pomodoro_cli.models.focus.ui.time.sleep", side_effect=advance)
        source = MonotonicTickSource(clock=lambda: now[0])
        timer = make_timer(work=2, tick_source=source)
        keyboard = ScriptedKeyboard([" ", None, None, None])

        display.run(timer, source, keyboard=keyboard)

        assert timer.completed_work_sessions == 1
        assert store.records[0].completed is True

    def test_keyboard_interrupt_still_resets(self, display, make_timer, store, mocker) -> None:
        mocker.patch("pomodoro_cli.models.focus.ui.time.sleep", side_effect=KeyboardInterrupt)
        source = MonotonicTickSource(clock=lambda: 0.0)
        timer = make_timer(work=10, tick_source=source)
        keyboard = ScriptedKeyboard([" "])

        final = display.run(timer, source, keyboard=keyboard)

        assert keyboard.stopped
        assert final.timer_state == TimerState.STOPPED
        assert len(store.records) == 1


# ---------------------------------------------------------------------------
# show_summary
# ---------------------------------------------------------------------------


class TestShowSummary:
    def test_summary_panel(self) -> None:
        console = Console(file=StringIO(), width=80, record=True)
        show_summary(_snapshot(session=SessionType.SHORT_BREAK, remaining=300, completed=3), console)
        text = console.export_text()
        assert "Completed work sessions: 3" in text
        assert "Short Break (05:00)" in text
        assert "Sessions are recorded in history." in text
        assert "saved" not in text
