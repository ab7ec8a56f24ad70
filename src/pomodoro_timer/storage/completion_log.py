"""Append-only log of completed work intervals."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Callable

from pomodoro_timer.core.errors import CompletionLogError
from pomodoro_timer.focus.intervals import DEFAULT_TASK, Interval, IntervalKind

logger = logging.getLogger(__name__)

DELIMITER = " | "


@dataclass(frozen=True)
class CompletionRecord:
    """One finished work interval."""

    task: str
    kind: IntervalKind
    timestamp: datetime

    def to_line(self) -> str:
        """Serialize as ``task | kind | timestamp``."""
        return DELIMITER.join([_clean_task(self.task), self.kind.value, self.timestamp.isoformat()])

    @classmethod
    def from_line(cls, line: str) -> CompletionRecord:
        """Parse a line written by ``to_line``.

        Raises ValueError for malformed lines.
        """
        task, kind, timestamp = line.rstrip("\n").rsplit(DELIMITER, 2)
        return cls(
            task=task,
            kind=IntervalKind(kind),
            timestamp=datetime.fromisoformat(timestamp),
        )


class CompletionLogger:
    """Writes one line per completed work interval to a plain-text file.

    The file is only ever opened in append mode and is created, with its
    parent directory, on first write.
    """

    def __init__(self, path: Path, clock: Callable[[], datetime] | None = None):
        self.path = Path(path).expanduser()
        self._clock = clock or (lambda: datetime.now().astimezone())

    def record(self, interval: Interval) -> CompletionRecord:
        """Append a record for ``interval``.

        Raises CompletionLogError if the file cannot be written.
        """
        entry = CompletionRecord(
            task=interval.task_display,
            kind=interval.kind,
            timestamp=self._clock(),
        )

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(entry.to_line() + "\n")
        except OSError as e:
            raise CompletionLogError(f"Cannot write to {self.path}: {e}") from e

        logger.info(f"Logged completed task: {entry.task}")
        return entry

    def read(self, day: date | None = None) -> list[CompletionRecord]:
        """Return records in file order, optionally only those from ``day``."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, "rb") as f:
                lines = f.readlines()
        except OSError as e:
            raise CompletionLogError(f"Cannot read {self.path}: {e}") from e

        records = []
        for number, raw in enumerate(lines, start=1):
            if not raw.strip():
                continue
            # UnicodeDecodeError is a ValueError, so undecodable lines are skipped too
            try:
                entry = CompletionRecord.from_line(raw.decode("utf-8"))
            except ValueError:
                logger.debug(f"Skipping malformed line {number} in {self.path}")
                continue
            if day is None or entry.timestamp.date() == day:
                records.append(entry)

        return records


def _clean_task(task: str) -> str:
    """Keep the task on one line and free of the field delimiter."""
    cleaned = " ".join(task.replace("|", "/").split())
    return cleaned or DEFAULT_TASK
