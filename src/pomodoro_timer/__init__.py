"""Pomodoro timer: timed work/break intervals with a completion log."""

__version__ = "0.1.0"
