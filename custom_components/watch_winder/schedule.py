"""Derive a motor's daily cycle plan from its configuration."""

from __future__ import annotations

from .models import UNDEFINED_SCHEDULE, DerivedSchedule, MotorConfig


class ScheduleUndefinedError(ZeroDivisionError):
    """Raised when a cycle has no duration."""


def cycle_duration_seconds(config: MotorConfig) -> int:
    return config.rotation_seconds + config.rest_minutes * 60


def active_window_seconds(config: MotorConfig) -> int:
    return config.active_hours * 3600


def compute_schedule(config: MotorConfig) -> DerivedSchedule:
    """Split turns_per_day evenly over every cycle that fits in the active window.

    A cycle is one rotation burst followed by the rest period. Raises
    ScheduleUndefinedError for a zero-length cycle. When no cycle fits,
    turns_per_cycle is None.
    """
    duration = cycle_duration_seconds(config)
    if duration <= 0:
        raise ScheduleUndefinedError(
            f"cycle duration is {duration}s (rotation {config.rotation_seconds}s, "
            f"rest {config.rest_minutes}min)"
        )

    cycles_per_day = active_window_seconds(config) // duration
    if cycles_per_day <= 0:
        return DerivedSchedule(cycles_per_day=0, turns_per_cycle=None)

    return DerivedSchedule(
        cycles_per_day=cycles_per_day,
        turns_per_cycle=config.turns_per_day / cycles_per_day,
    )


def safe_compute_schedule(config: MotorConfig) -> DerivedSchedule:
    try:
        return compute_schedule(config)
    except ScheduleUndefinedError:
        return UNDEFINED_SCHEDULE


def schedules_agree(local: DerivedSchedule, device: DerivedSchedule) -> bool:
    # The device reports turns per cycle as a float; compare at display precision.
    if local.cycles_per_day != device.cycles_per_day:
        return False
    if local.turns_per_cycle is None or device.turns_per_cycle is None:
        return local.turns_per_cycle is device.turns_per_cycle
    return round(local.turns_per_cycle, 2) == round(device.turns_per_cycle, 2)
