"""Session-complete alerts."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.panel import Panel

from .session import SessionType

NOTIFICATION_TITLE = "Pomodoro Timer"


def completion_message(completed: SessionType, upcoming: SessionType) -> str:
    """Alert body, e.g. 'Work session completed! Time for short break.'"""
    return f"{completed.label} session completed! Time for {upcoming.label.lower()}."


class NotificationPort(Protocol):
    """Host-side alert delivery used by the timer core."""

    def request_permission(self) -> bool: ...

    def play_sound(self) -> None: ...

    def notify(self, title: str, body: str) -> None: ...


class ConsoleNotifier:
    """Delivers alerts on the terminal: a bell and, optionally, a rich panel.

    The latest alert body is kept in ``last_message`` so a full-screen view
    can render it instead of printing over the live display.
    """

    def __init__(self, console: Console | None = None, print_panels: bool = True):
        self.console = console or Console()
        self.print_panels = print_panels
        self.last_message: str | None = None

    def request_permission(self) -> bool:
        # Alerts need an interactive terminal
        return self.console.is_terminal

    def play_sound(self) -> None:
        self.console.bell()

    def notify(self, title: str, body: str) -> None:
        self.last_message = body
        if not self.print_panels:
            return

        self.console.print(
            Panel(
                f"[bold]{body}[/bold]",
                title=title,
                border_style="green",
                padding=(1, 2),
            )
        )
