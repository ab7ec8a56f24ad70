"""Core runtime components."""

from pomodoro_timer.core.config import Config, get_config
from pomodoro_timer.core.errors import CompletionLogError, ConfigurationError, PomodoroError
from pomodoro_timer.core.runtime import CancellationFlag, CancellationView

__all__ = [
    "Config",
    "get_config",
    "CompletionLogError",
    "ConfigurationError",
    "PomodoroError",
    "CancellationFlag",
    "CancellationView",
]
