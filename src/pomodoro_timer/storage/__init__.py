"""Persistence for completed work intervals."""

from pomodoro_timer.storage.completion_log import CompletionLogger, CompletionRecord

__all__ = ["CompletionLogger", "CompletionRecord"]
