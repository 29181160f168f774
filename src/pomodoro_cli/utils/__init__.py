"""Utilities for Pomodoro CLI."""
