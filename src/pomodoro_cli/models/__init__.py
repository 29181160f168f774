"""Data models for Pomodoro CLI."""
