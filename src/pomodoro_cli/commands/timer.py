"""Pomodoro timer commands for Pomodoro CLI."""

import typer

from pomodoro_cli.models.focus.effects import EffectRunner
from pomodoro_cli.models.focus.history import HistoryLogger
from pomodoro_cli.models.focus.notifications import ConsoleNotifier
from pomodoro_cli.models.focus.tick import MonotonicTickSource
from pomodoro_cli.models.focus.timer import PomodoroTimer
from pomodoro_cli.models.focus.ui import TimerDisplay, show_summary
from pomodoro_cli.services.config_service import get_config_service
from pomodoro_cli.utils.exit_codes import ERROR_NO_TERMINAL
from pomodoro_cli.utils.logger import set_log_level
from pomodoro_cli.utils.ui.console import get_console
from pomodoro_cli.utils.ui.formatters import (
    format_duration,
    format_info,
    format_warning,
    get_completion_color,
    sessions_table,
)

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(help="Pomodoro timer for focus sessions")


def get_history() -> HistoryLogger:
    """History store at the configured location."""
    return HistoryLogger(get_config_service().history_db_path)


@app.command("start")
@command_wrapper
def start_timer(
    work: int | None = typer.Option(
        None, "--work", "-w", help="Work duration in minutes for this run"
    ),
    short_break: int | None = typer.Option(
        None, "--short-break", help="Short break duration in minutes for this run"
    ),
    long_break: int | None = typer.Option(
        None, "--long-break", help="Long break duration in minutes for this run"
    ),
    save: bool = typer.Option(
        False, "--save", help="Also store the given durations as defaults"
    ),
) -> None:
    """Run the full-screen Pomodoro timer."""
    if not console.is_terminal:
        raise AppError("The timer needs an interactive terminal", ERROR_NO_TERMINAL)

    config_service = get_config_service()
    config = config_service.config
    set_log_level(config.logging.level)

    history = HistoryLogger(config_service.history_db_path)
    history.delete_old_sessions(config.history.retention_days)

    notifier = ConsoleNotifier(console, print_panels=False)
    effects = EffectRunner.background()
    tick_source = MonotonicTickSource()
    timer = PomodoroTimer(
        settings=config_service.timer_settings(),
        store=history,
        notifier=notifier,
        tick_source=tick_source,
        effects=effects,
    )

    overrides = (
        (work, timer.set_work_duration, "Work"),
        (short_break, timer.set_short_break_duration, "Short break"),
        (long_break, timer.set_long_break_duration, "Long break"),
    )
    for minutes, setter, name in overrides:
        if minutes is None:
            continue
        applied = setter(minutes)
        if applied != minutes:
            format_warning(f"{name} duration adjusted to {applied} minutes")

    if save:
        config_service.save_timer_settings(timer.settings)
        format_info("Saved timer durations as defaults")

    if not config.output.color:
        console.no_color = True

    display = TimerDisplay(console, refresh_per_second=config.output.refresh_per_second)
    try:
        final = display.run(
            timer,
            tick_source,
            message_source=lambda: notifier.last_message,
            on_settings_changed=lambda settings: config_service.set(
                "timer.sound_enabled", settings.sound_enabled
            ),
        )
    finally:
        effects.shutdown()

    show_summary(final, console)


@app.command("history")
@command_wrapper
def timer_history() -> None:
    """Show today's Pomodoro sessions."""
    sessions = get_history().get_todays_sessions()

    if not sessions:
        console.print("[yellow]No sessions recorded today[/yellow]")
        return

    console.print(sessions_table(sessions, f"Today's Sessions ({len(sessions)})"))


@app.command("stats")
@command_wrapper
def timer_stats(
    days: int = typer.Option(7, "--days", "-d", min=1, help="Number of days to analyze"),
    recent: int = typer.Option(8, "--recent", min=0, help="Recent sessions to list"),
) -> None:
    """Show Pomodoro statistics."""
    history = get_history()
    stats = history.get_stats(days)

    console.print(f"\n[bold]Pomodoro Statistics (Last {days} days)[/bold]\n")

    if stats.total == 0:
        console.print("[yellow]No sessions recorded yet[/yellow]")
        return

    color = get_completion_color(stats.completion_rate)
    console.print(f"Total Sessions: {stats.total}")
    console.print(f"  Completed: [green]{stats.completed}[/green]")
    console.print(f"  Incomplete: [yellow]{stats.incomplete}[/yellow]")
    console.print(f"  Completion Rate: [{color}]{stats.completion_rate}%[/{color}]")
    console.print()
    console.print(f"Work Sessions: {stats.work_count}")
    console.print(f"  Focus Time: {format_duration(stats.work_seconds)}")
    console.print()

    if recent:
        sessions = history.get_recent_sessions(recent)
        if sessions:
            console.print(sessions_table(sessions, "Recent Sessions"))
