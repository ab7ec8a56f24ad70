"""Completion alerts: desktop notification plus a sound cue.

Everything here is best-effort. A missing sound file, audio player or
notification tool is logged as a warning and never reaches the countdown.
"""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess
import sys
import threading
from pathlib import Path
from typing import Callable, Iterable, Protocol

from pomodoro_timer.focus.intervals import Interval, IntervalKind

logger = logging.getLogger(__name__)

DEFAULT_SOUND_FILE = "alert.wav"

# Players tried in order; the sound path is appended as the last argument
SOUND_PLAYERS: dict[str, list[list[str]]] = {
    "Darwin": [["afplay"]],
    "Linux": [["paplay"], ["aplay", "-q"]],
}

# Upper bound for one playback; the helper thread gives up after this
PLAYBACK_TIMEOUT_SECONDS = 30


class Notifier(Protocol):
    """Announces that an interval finished. Must not raise."""

    def announce(self, interval: Interval) -> None: ...


class NullNotifier:
    """Notifier that does nothing."""

    def announce(self, interval: Interval) -> None:
        pass


def completion_message(interval: Interval) -> tuple[str, str]:
    """Title and body describing which interval finished."""
    if interval.kind is IntervalKind.WORK:
        return (
            "Pomodoro completed!",
            f"You completed a {interval.describe_duration()} pomodoro for: {interval.task_display}",
        )
    kind = "long break" if interval.kind is IntervalKind.LONG_BREAK else "break"
    return "Break ended!", f"Your {interval.describe_duration()} {kind} has ended"


def sound_candidates(file_name: str = DEFAULT_SOUND_FILE, extra_dirs: Iterable[Path] = ()) -> list[Path]:
    """Ordered list of places the sound file may live."""
    candidates = [Path(d).expanduser() / file_name for d in extra_dirs]
    candidates += [
        Path("src/assets") / file_name,
        Path("assets") / file_name,
        Path(sys.argv[0]).resolve().parent / "assets" / file_name,
        Path(__file__).resolve().parent.parent / "assets" / file_name,
        Path(file_name),
    ]
    return candidates


def find_sound(file_name: str = DEFAULT_SOUND_FILE, extra_dirs: Iterable[Path] = ()) -> Path | None:
    """Return the first existing sound file, or None."""
    for path in sound_candidates(file_name, extra_dirs):
        if path.is_file():
            logger.debug(f"Using sound file {path}")
            return path
    return None


class DesktopNotifier:
    """Raises a desktop notification and plays the completion sound.

    Notifications use ``osascript`` on macOS and ``notify-send`` on Linux.
    Sound plays on a short-lived daemon thread so a slow audio backend never
    holds up the countdown.
    """

    def __init__(
        self,
        sound_enabled: bool = True,
        sound_file: str = DEFAULT_SOUND_FILE,
        sound_dirs: Iterable[Path] = (),
        notifications_enabled: bool = True,
        timeout_seconds: float = 2.0,
        fallback: Callable[[str, str], None] | None = None,
        system: str | None = None,
    ):
        self.sound_enabled = sound_enabled
        self.sound_file = sound_file
        self.sound_dirs = list(sound_dirs)
        self.notifications_enabled = notifications_enabled
        self.timeout_seconds = timeout_seconds
        self._fallback = fallback
        self._system = system or platform.system()

    def announce(self, interval: Interval) -> None:
        """Notify and play the sound for a finished interval."""
        title, body = completion_message(interval)

        try:
            if self.notifications_enabled and not self.notify(title, body):
                if self._fallback is not None:
                    self._fallback(title, body)
        except Exception as e:
            logger.warning(f"Notification failed: {e}")

        if self.sound_enabled:
            try:
                self.play_sound()
            except Exception as e:
                logger.warning(f"Could not play completion sound: {e}")

    def notify(self, title: str, body: str) -> bool:
        """Show a desktop notification. Returns whether it was shown."""
        command = self._notification_command(title, body)
        if command is None:
            return False

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning(f"Desktop notification failed: {e}")
            return False

        if result.returncode != 0:
            logger.warning(
                f"Desktop notification failed ({command[0]} exited {result.returncode}): "
                f"{result.stderr.strip()}"
            )
            return False
        return True

    def _notification_command(self, title: str, body: str) -> list[str] | None:
        if self._system == "Darwin":
            script = f'display notification "{_applescript_escape(body)}" with title "{_applescript_escape(title)}"'
            return ["osascript", "-e", script]

        if self._system == "Linux":
            if shutil.which("notify-send") is None:
                logger.warning("Desktop notifications unavailable: notify-send not found")
                return None
            return ["notify-send", title, body]

        logger.warning(f"Desktop notifications are not supported on {self._system}")
        return None

    def play_sound(self) -> threading.Thread | None:
        """Start playing the sound in the background.

        Returns the helper thread, or None when nothing could be played.
        """
        path = find_sound(self.sound_file, self.sound_dirs)
        if path is None:
            logger.warning(f"Sound file {self.sound_file} not found, skipping sound")
            return None

        player = self._find_player()
        if player is None:
            logger.warning(f"No audio player available on {self._system}, skipping sound")
            return None

        thread = threading.Thread(
            target=_play,
            args=(player + [str(path)],),
            name="pomodoro-sound",
            daemon=True,
        )
        thread.start()
        return thread

    def _find_player(self) -> list[str] | None:
        for command in SOUND_PLAYERS.get(self._system, []):
            if shutil.which(command[0]):
                return list(command)
        return None


def _play(command: list[str]) -> None:
    """Run an audio player to completion, logging failures."""
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=PLAYBACK_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning(f"Could not play sound with {command[0]}: {e}")
        return

    if result.returncode != 0:
        logger.warning(f"Could not play sound with {command[0]}: {result.stderr.strip()}")


def _applescript_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')
