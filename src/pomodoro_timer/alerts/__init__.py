"""Completion alerts."""

from pomodoro_timer.alerts.notifier import DesktopNotifier, Notifier, NullNotifier, completion_message, find_sound

__all__ = ["DesktopNotifier", "Notifier", "NullNotifier", "completion_message", "find_sound"]
