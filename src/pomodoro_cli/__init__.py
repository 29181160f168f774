"""Pomodoro CLI - a terminal Pomodoro timer with session history."""

__version__ = "0.1.0"
