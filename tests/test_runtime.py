"""Tests for the cancellation flag and signal wiring."""

import os
import signal
import time

import pytest

from pomodoro_timer.core.runtime import CancellationFlag


def test_set_and_clear(flag):
    assert not flag.is_set()
    flag.set()
    assert flag.is_set()
    flag.clear()
    assert not flag.is_set()


def test_signal_only_sets_flag_outside_prompts(flag):
    flag.handle_signal(signal.SIGINT)

    assert flag.is_set()


def test_signal_interrupts_open_prompt(flag):
    with pytest.raises(KeyboardInterrupt):
        with flag.interruptible():
            flag.handle_signal(signal.SIGINT)

    assert flag.is_set()

    # Back outside the prompt, signals no longer raise
    flag.handle_signal(signal.SIGTERM)


def test_installed_handler_is_restored():
    flag = CancellationFlag()
    before = signal.getsignal(signal.SIGINT)

    with flag.installed():
        assert signal.getsignal(signal.SIGINT) == flag.handle_signal

    assert signal.getsignal(signal.SIGINT) == before


@pytest.mark.skipif(not hasattr(os, "kill") or os.name == "nt", reason="POSIX signals only")
def test_real_sigint_sets_flag():
    flag = CancellationFlag()

    with flag.installed():
        os.kill(os.getpid(), signal.SIGINT)
        for _ in range(100):
            if flag.is_set():
                break
            time.sleep(0.01)

    assert flag.is_set()
