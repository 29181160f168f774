"""Full-screen timer UI for focus mode."""

import time
from collections.abc import Callable

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from pomodoro_cli.utils.ui.formatters import get_progress_bar

from .cycling import get_progress_dots
from .keyboard import KeyboardHandler
from .session import TimerSnapshot, TimerState
from .settings import TimerSettings
from .tick import MonotonicTickSource
from .timer import PomodoroTimer, format_time

KEY_HINTS = {
    TimerState.STOPPED: "space start  •  n skip  •  m sound  •  q quit",
    TimerState.RUNNING: "space pause  •  r reset  •  n skip  •  m sound  •  q quit",
    TimerState.PAUSED: "space resume  •  r reset  •  n skip  •  m sound  •  q quit",
}


class TimerDisplay:
    """Renders timer snapshots full-screen and forwards keys as commands."""

    def __init__(self, console: Console | None = None, refresh_per_second: int = 4):
        self.console = console or Console()
        self.refresh_per_second = refresh_per_second

    def create_layout(
        self,
        snapshot: TimerSnapshot,
        settings: TimerSettings,
        message: str | None = None,
    ) -> Layout:
        """Create the timer layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        session = snapshot.current_session
        if snapshot.timer_state == TimerState.PAUSED:
            header_text = Text("⏸️  PAUSED", style="bold yellow", justify="center")
        else:
            header_text = Text(
                f"{session.emoji}  {session.label}",
                style=f"bold {session.color}",
                justify="center",
            )
        layout["header"].update(Align.center(header_text, vertical="middle"))

        body_content = self._create_body_content(snapshot, settings, message)
        layout["body"].update(Align.center(body_content, vertical="middle"))

        footer_text = Text(KEY_HINTS[snapshot.timer_state], style="dim", justify="center")
        layout["footer"].update(Align.center(footer_text, vertical="middle"))

        return layout

    def _create_body_content(
        self,
        snapshot: TimerSnapshot,
        settings: TimerSettings,
        message: str | None,
    ) -> Group:
        """Create the main body content."""
        components = []

        components.append(
            Text(
                f"Session {snapshot.completed_work_sessions + 1}",
                style="dim",
                justify="center",
            )
        )
        components.append(Text(""))

        if snapshot.timer_state == TimerState.PAUSED:
            timer_color = "yellow"
        elif snapshot.timer_state == TimerState.STOPPED:
            timer_color = "dim"
        elif snapshot.time_remaining < 60:
            timer_color = "red"
        else:
            timer_color = snapshot.current_session.color

        components.append(
            Text(
                format_time(snapshot.time_remaining),
                style=f"bold {timer_color}",
                justify="center",
            )
        )
        components.append(Text(""))

        percent = int(snapshot.progress * 100)
        components.append(
            Text(
                f"{get_progress_bar(snapshot.progress)}  {percent}%",
                style="dim",
                justify="center",
            )
        )

        dots = get_progress_dots(snapshot.completed_work_sessions)
        if dots:
            components.append(Text(""))
            components.append(Text(dots, style="green", justify="center"))

        components.append(Text(""))
        sound = "on" if settings.sound_enabled else "off"
        alerts = "on" if settings.notifications_enabled else "off"
        components.append(
            Text(f"Sound: {sound}  Alerts: {alerts}", style="dim", justify="center")
        )

        if message:
            components.append(Text(""))
            components.append(Text(message, style="bold green", justify="center"))

        return Group(*components)

    def handle_key(
        self,
        timer: PomodoroTimer,
        key: str | None,
        on_settings_changed: Callable[[TimerSettings], None] | None = None,
    ) -> bool:
        """
        Translate a keypress into a timer command.

        Returns False when the user asked to quit.
        """
        if key is None:
            return True

        if key == " ":
            if timer.timer_state == TimerState.RUNNING:
                timer.pause()
            else:
                timer.start()
        elif key == "r":
            timer.reset()
        elif key == "n":
            timer.skip()
        elif key == "m":
            timer.set_sound_enabled(not timer.settings.sound_enabled)
            if on_settings_changed:
                on_settings_changed(timer.settings)
        elif key == "q":
            return False

        return True

    def run(
        self,
        timer: PomodoroTimer,
        tick_source: MonotonicTickSource,
        keyboard: KeyboardHandler | None = None,
        message_source: Callable[[], str | None] | None = None,
        on_settings_changed: Callable[[TimerSettings], None] | None = None,
    ) -> TimerSnapshot:
        """
        Run the full-screen timer until the user quits.

        Quitting resets the timer, so a session in progress is recorded as
        incomplete. Returns the final snapshot.
        """
        keyboard = keyboard or KeyboardHandler()
        delay = 1 / self.refresh_per_second

        def render() -> Layout:
            message = message_source() if message_source else None
            return self.create_layout(timer.snapshot(), timer.settings, message)

        try:
            with Live(
                render(),
                console=self.console,
                refresh_per_second=self.refresh_per_second,
                screen=True,
            ) as live:
                while True:
                    if not self.handle_key(timer, keyboard.get_key(), on_settings_changed):
                        break

                    tick_source.poll()
                    live.update(render())
                    time.sleep(delay)
        except KeyboardInterrupt:
            pass
        finally:
            keyboard.stop()

        return timer.reset()


def show_summary(snapshot: TimerSnapshot, console: Console | None = None):
    """Show a summary panel after the timer exits."""
    console = console or Console()

    panel = Panel(
        f"""[bold green]Pomodoro session ended[/bold green]

Completed work sessions: {snapshot.completed_work_sessions}
Next up: {snapshot.current_session.label} ({format_time(snapshot.time_remaining)})

Sessions are recorded in history.""",
        border_style="green",
        padding=(1, 2),
    )

    console.print(panel)
