import math

import pytest

from custom_components.watch_winder.models import UNDEFINED_SCHEDULE, DerivedSchedule, MotorConfig
from custom_components.watch_winder.schedule import (
    ScheduleUndefinedError,
    active_window_seconds,
    compute_schedule,
    cycle_duration_seconds,
    safe_compute_schedule,
    schedules_agree,
)


def test_compute_schedule():
    config = MotorConfig(turns_per_day=120, active_hours=8, rotation_seconds=10, rest_minutes=2)

    assert cycle_duration_seconds(config) == 130
    assert active_window_seconds(config) == 28800

    schedule = compute_schedule(config)
    assert schedule.cycles_per_day == 221
    assert schedule.turns_per_cycle == pytest.approx(0.543, abs=1e-3)


def test_compute_schedule_single_cycle():
    config = MotorConfig(turns_per_day=10, active_hours=1, rotation_seconds=3600, rest_minutes=0)

    assert compute_schedule(config) == DerivedSchedule(cycles_per_day=1, turns_per_cycle=10.0)


def test_compute_schedule_firmware_defaults():
    # 10s rotation + 5min rest over 12 hours
    schedule = compute_schedule(MotorConfig())

    assert schedule.cycles_per_day == 139
    assert schedule.turns_per_cycle == pytest.approx(650 / 139)


def test_compute_schedule_is_idempotent():
    config = MotorConfig(turns_per_day=500, active_hours=10, rotation_seconds=20, rest_minutes=3)

    assert compute_schedule(config) == compute_schedule(config)


@pytest.mark.parametrize(
    "turns_per_day, active_hours, rotation_seconds, rest_minutes",
    [(650, 12, 10, 5), (0, 24, 1, 0), (900, 3, 45, 1), (1, 1, 7, 59)],
)
def test_cycles_fill_the_active_window(turns_per_day, active_hours, rotation_seconds, rest_minutes):
    config = MotorConfig(
        turns_per_day=turns_per_day,
        active_hours=active_hours,
        rotation_seconds=rotation_seconds,
        rest_minutes=rest_minutes,
    )
    duration = rotation_seconds + rest_minutes * 60

    schedule = compute_schedule(config)

    assert schedule.cycles_per_day == math.floor(active_hours * 3600 / duration)
    assert schedule.turns_per_cycle == pytest.approx(turns_per_day / schedule.cycles_per_day)


def test_zero_length_cycle_raises():
    config = MotorConfig(rotation_seconds=0, rest_minutes=0)

    with pytest.raises(ScheduleUndefinedError):
        compute_schedule(config)
    with pytest.raises(ZeroDivisionError):
        compute_schedule(config)


def test_zero_length_cycle_is_undefined_for_display():
    schedule = safe_compute_schedule(MotorConfig(rotation_seconds=0, rest_minutes=0))

    assert schedule == UNDEFINED_SCHEDULE
    assert schedule.turns_per_cycle is None
    assert not schedule.defined


def test_no_cycle_fits_in_window():
    # A two hour rest never fits into one active hour.
    schedule = compute_schedule(MotorConfig(active_hours=1, rotation_seconds=10, rest_minutes=120))

    assert schedule.cycles_per_day == 0
    assert schedule.turns_per_cycle is None


def test_schedules_agree():
    local = compute_schedule(MotorConfig(turns_per_day=120, active_hours=8, rotation_seconds=10, rest_minutes=2))

    assert schedules_agree(local, DerivedSchedule(221, 0.5429864))
    assert not schedules_agree(local, DerivedSchedule(220, 0.5429864))
    assert not schedules_agree(local, DerivedSchedule(221, 0.56))
    assert not schedules_agree(UNDEFINED_SCHEDULE, DerivedSchedule(0, 0.0))
    assert schedules_agree(UNDEFINED_SCHEDULE, UNDEFINED_SCHEDULE)
