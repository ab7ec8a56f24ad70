"""Tests for intervals and plan building."""

import pytest

from pomodoro_timer.core.errors import ConfigurationError
from pomodoro_timer.focus.intervals import (
    Interval,
    IntervalKind,
    Plan,
    build_schedule,
    single_break,
    single_work,
)


@pytest.mark.parametrize("sessions,work,short,long", [(1, 25, 5, 15), (3, 50, 10, 30), (4, 1, 2, 3)])
def test_schedule_alternates_and_ends_with_long_break(sessions, work, short, long):
    plan = build_schedule(sessions, work, short, long)

    assert len(plan) == 2 * sessions
    for i in range(sessions):
        work_interval, break_interval = plan.intervals[2 * i], plan.intervals[2 * i + 1]
        assert work_interval.kind is IntervalKind.WORK
        assert work_interval.duration == work * 60
        if i < sessions - 1:
            assert break_interval.kind is IntervalKind.SHORT_BREAK
            assert break_interval.duration == short * 60
        else:
            assert break_interval.kind is IntervalKind.LONG_BREAK
            assert break_interval.duration == long * 60
    assert plan.work_sessions == sessions


def test_two_session_schedule():
    plan = build_schedule(sessions=2, work_minutes=1, short_break_minutes=1, long_break_minutes=1, task="docs")

    assert [i.kind for i in plan] == [
        IntervalKind.WORK,
        IntervalKind.SHORT_BREAK,
        IntervalKind.WORK,
        IntervalKind.LONG_BREAK,
    ]
    assert all(i.duration == 60 for i in plan)
    assert [i.task for i in plan if i.kind is IntervalKind.WORK] == ["docs", "docs"]
    assert plan.is_schedule


def test_single_plans_have_one_interval():
    work = single_work(25, "write spec")
    short = single_break(5)
    long = single_break(15, long=True)

    assert len(work) == len(short) == len(long) == 1
    assert work[0] == Interval(IntervalKind.WORK, 1500, "write spec")
    assert short[0].kind is IntervalKind.SHORT_BREAK
    assert long[0].kind is IntervalKind.LONG_BREAK
    assert not work.is_schedule


@pytest.mark.parametrize("value", [0, -1, -25])
def test_non_positive_minutes_rejected(value):
    with pytest.raises(ConfigurationError):
        single_work(value)
    with pytest.raises(ConfigurationError):
        single_break(value, long=True)
    with pytest.raises(ConfigurationError):
        build_schedule(value, 25, 5, 15)
    with pytest.raises(ConfigurationError):
        build_schedule(2, 25, value, 15)


@pytest.mark.parametrize("value", [1.5, "25", True, None])
def test_non_integer_durations_rejected(value):
    with pytest.raises(ConfigurationError):
        Interval(IntervalKind.WORK, value)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        Interval(IntervalKind.WORK, 0)


def test_interval_is_immutable():
    interval = Interval.work(25)

    with pytest.raises(AttributeError):
        interval.duration = 10


def test_empty_plan_rejected():
    with pytest.raises(ConfigurationError):
        Plan(())


def test_task_placeholder_and_duration_text():
    assert Interval.work(25).task_display == "no description"
    assert Interval.work(25, "").task_display == "no description"
    assert Interval.work(25, "review").task_display == "review"
    assert Interval.work(25).describe_duration() == "25 minute"
    assert Interval(IntervalKind.SHORT_BREAK, 90).describe_duration() == "90 second"


def test_kind_labels():
    assert IntervalKind.WORK.label == "Pomodoro"
    assert IntervalKind.SHORT_BREAK.label == "Short Break"
    assert IntervalKind.LONG_BREAK.label == "Long Break"
