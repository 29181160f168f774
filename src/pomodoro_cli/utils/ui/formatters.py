"""Output helpers for messages, durations and session tables."""

from rich.table import Table

from pomodoro_cli.models.focus.session import SessionRecord

from .console import get_console


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    get_console().print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {message}")


def format_duration(seconds: int) -> str:
    """Compact human duration: '45s', '25m', '1h 05m'."""
    if seconds < 60:
        return f"{seconds}s"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes:02d}m"


def get_progress_bar(fraction: float, width: int = 40) -> str:
    """Text progress bar for a fraction in [0, 1]."""
    fraction = min(max(fraction, 0.0), 1.0)
    filled = int(width * fraction)
    return "▓" * filled + "░" * (width - filled)


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"


def sessions_table(sessions: list[SessionRecord], title: str) -> Table:
    """Table of session records, one row per session."""
    table = Table(title=title, show_header=True)
    table.add_column("Time", style="cyan")
    table.add_column("Type")
    table.add_column("Planned", justify="right")
    table.add_column("Actual", justify="right")
    table.add_column("Status", justify="center")

    for session in sessions:
        if session.completed:
            status = "[green]✓[/green]"
        else:
            status = "[yellow]✗[/yellow]"

        table.add_row(
            session.started_at.strftime("%Y-%m-%d %H:%M"),
            f"[{session.session_type.color}]{session.session_type.label}[/{session.session_type.color}]",
            format_duration(session.planned_duration),
            format_duration(session.actual_duration),
            status,
        )

    return table
