"""Productivity tips shown by ``pomodoro tip``."""

from __future__ import annotations

import random

TIPS = (
    "The Pomodoro Technique works best when you fully commit to the task during work periods.",
    "Keep a list of small tasks to tackle during short breaks to maintain momentum.",
    "Physical activity during breaks, like stretching, can boost your energy for the next Pomodoro.",
    "Try different Pomodoro lengths to find what works for you; not everyone peaks at 25 minutes.",
    "Use Pomodoros to estimate tasks by tracking how many you needed for similar work.",
    "The 'rule of three' suggests focusing on just three main tasks per day.",
    "Noise-cancelling headphones or white noise can help you stay focused during a Pomodoro.",
    "Hydration improves cognitive function, so keep water nearby while you work.",
    "For creative tasks a longer Pomodoro (40-60 minutes) sometimes works better than 25.",
    "Track your completed Pomodoros to see your productivity trends over time.",
)


def random_tip(rng: random.Random | None = None) -> str:
    """Pick one tip."""
    return (rng or random).choice(TIPS)
