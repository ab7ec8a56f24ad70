"""Process-level cancellation flag driven by SIGINT/SIGTERM."""

from __future__ import annotations

import logging
import signal
import threading
from contextlib import contextmanager
from typing import Iterator, Protocol

logger = logging.getLogger(__name__)


class CancellationView(Protocol):
    """Read-only side of the cancellation flag, as seen by the countdown."""

    def is_set(self) -> bool: ...


class CancellationFlag:
    """The single "user asked to stop" flag for the process.

    Signal handlers only set the flag; the countdown loop polls it at every
    tick boundary. While a blocking prompt is open (see ``interruptible``)
    the handler also raises KeyboardInterrupt so the prompt returns.

    Usage:
        flag = CancellationFlag()
        with flag.installed():
            asyncio.run(scheduler.execute(plan))
    """

    def __init__(self):
        self._event = threading.Event()
        self._raise_on_signal = False

    def set(self) -> None:
        """Request cancellation."""
        self._event.set()

    def is_set(self) -> bool:
        """Whether cancellation was requested."""
        return self._event.is_set()

    def clear(self) -> None:
        """Reset the flag."""
        self._event.clear()

    def handle_signal(self, signum: int, frame=None) -> None:
        """Signal handler: set the flag, and break out of an open prompt."""
        try:
            name = signal.Signals(signum).name
        except ValueError:
            name = str(signum)
        logger.info(f"Received signal {name}, cancelling")

        self.set()
        if self._raise_on_signal:
            raise KeyboardInterrupt

    @contextmanager
    def interruptible(self) -> Iterator[None]:
        """Let an interrupt raise KeyboardInterrupt inside this block."""
        previous = self._raise_on_signal
        self._raise_on_signal = True
        try:
            yield
        finally:
            self._raise_on_signal = previous

    @contextmanager
    def installed(
        self,
        signals: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM),
    ) -> Iterator[CancellationFlag]:
        """Install ``handle_signal`` for the given signals, restoring on exit."""
        previous = {}
        for sig in signals:
            try:
                previous[sig] = signal.signal(sig, self.handle_signal)
            except (ValueError, OSError) as e:
                # Not on the main thread, or the platform lacks the signal
                logger.debug(f"Cannot install handler for {sig!r}: {e}")

        try:
            yield self
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)
