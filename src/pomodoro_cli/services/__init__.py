"""Services for Pomodoro CLI."""
