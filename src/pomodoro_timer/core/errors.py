"""Exception types shared across the timer."""

from __future__ import annotations


class PomodoroError(Exception):
    """Base class for timer errors."""


class ConfigurationError(PomodoroError, ValueError):
    """Invalid duration, session count or settings.

    Raised before any countdown state is created.
    """


class CompletionLogError(PomodoroError, OSError):
    """The completion log could not be written or read."""
