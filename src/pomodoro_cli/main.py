"""Main entry point for Pomodoro CLI."""

import typer
from rich.console import Console

from pomodoro_cli import __version__
from pomodoro_cli.commands import config, timer
from pomodoro_cli.utils.logger import get_log_path

app = typer.Typer(
    name="pomodoro",
    help="A terminal Pomodoro timer with session history",
    no_args_is_help=True,
)

console = Console()


# Add subcommands
app.add_typer(timer.app, name="timer", help="Pomodoro timer for focus sessions")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information and file locations."""
    console.print(f"[bold]Pomodoro CLI[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]Log file: {get_log_path()}[/dim]")


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
