"""Data models and payload codecs for the Watch Winder integration.

Payload parsing validates against voluptuous schemas and raises ``vol.Invalid``
on malformed input; callers convert that into their own error type.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

import voluptuous as vol

from .const import (
    DEFAULT_ACTIVE_HOURS,
    DEFAULT_REST_MINUTES,
    DEFAULT_ROTATION_SECONDS,
    DEFAULT_TURNS_PER_DAY,
)


# notify(message, kind) with kind NOTIFY_SUCCESS or NOTIFY_ERROR
Notify = Callable[[str, str], None]


class MotorSlot(IntEnum):
    ONE = 1
    TWO = 2

    @property
    def payload_key(self) -> str:
        return f"motor{self.value}"


class Direction(IntEnum):
    CLOCKWISE = 0
    COUNTER_CLOCKWISE = 1


_NON_NEGATIVE_INT = vol.All(vol.Coerce(int), vol.Range(min=0))
_NON_NEGATIVE_FLOAT = vol.All(vol.Coerce(float), vol.Range(min=0))

# Per-field validators for local edits, keyed by MotorConfig attribute.
# Degenerate values (zero rotation and rest) are accepted here; the schedule
# reports them as undefined.
FIELD_VALIDATORS: dict[str, Any] = {
    "enabled": vol.Boolean(),
    "direction": vol.All(vol.Coerce(int), vol.Coerce(Direction)),
    "turns_per_day": _NON_NEGATIVE_INT,
    "active_hours": _NON_NEGATIVE_INT,
    "rotation_seconds": _NON_NEGATIVE_INT,
    "rest_minutes": _NON_NEGATIVE_INT,
}

MOTOR_CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required("enabled"): bool,
        vol.Required("direction"): FIELD_VALIDATORS["direction"],
        vol.Required("tpd"): _NON_NEGATIVE_INT,
        vol.Required("activeHours"): _NON_NEGATIVE_INT,
        vol.Required("rotationTime"): _NON_NEGATIVE_INT,
        vol.Required("restTime"): _NON_NEGATIVE_INT,
        vol.Optional("cyclesPerDay"): _NON_NEGATIVE_INT,
        vol.Optional("turnsPerCycle"): _NON_NEGATIVE_FLOAT,
    },
    extra=vol.ALLOW_EXTRA,
)

SETTINGS_SCHEMA = vol.Schema(
    {vol.Required(slot.payload_key): MOTOR_CONFIG_SCHEMA for slot in MotorSlot},
    extra=vol.ALLOW_EXTRA,
)

MOTOR_STATUS_SCHEMA = vol.Schema(
    {
        vol.Required("running"): bool,
        vol.Required("cycles"): _NON_NEGATIVE_INT,
        vol.Required("totalCycles"): _NON_NEGATIVE_INT,
        vol.Required("turns"): _NON_NEGATIVE_FLOAT,
        vol.Required("nextCycle"): vol.Coerce(int),
        vol.Optional("targetTpd"): _NON_NEGATIVE_INT,
    },
    extra=vol.ALLOW_EXTRA,
)

STATUS_SCHEMA = vol.Schema(
    {
        vol.Required("apMode"): bool,
        vol.Required("ip"): str,
        vol.Required("uptime"): _NON_NEGATIVE_INT,
        **{vol.Required(slot.payload_key): MOTOR_STATUS_SCHEMA for slot in MotorSlot},
    },
    extra=vol.ALLOW_EXTRA,
)

WIFI_SCAN_SCHEMA = vol.Schema(
    {
        vol.Required("networks"): [
            vol.Schema(
                {
                    vol.Required("ssid"): str,
                    vol.Required("rssi"): vol.Coerce(int),
                    vol.Required("secure"): bool,
                },
                extra=vol.ALLOW_EXTRA,
            )
        ]
    },
    extra=vol.ALLOW_EXTRA,
)


@dataclass(frozen=True)
class MotorConfig:
    """Editable configuration of one motor."""

    enabled: bool = True
    direction: Direction = Direction.CLOCKWISE
    turns_per_day: int = DEFAULT_TURNS_PER_DAY
    active_hours: int = DEFAULT_ACTIVE_HOURS
    rotation_seconds: int = DEFAULT_ROTATION_SECONDS
    rest_minutes: int = DEFAULT_REST_MINUTES

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> MotorConfig:
        data = MOTOR_CONFIG_SCHEMA(data)
        return cls(
            enabled=data["enabled"],
            direction=data["direction"],
            turns_per_day=data["tpd"],
            active_hours=data["activeHours"],
            rotation_seconds=data["rotationTime"],
            rest_minutes=data["restTime"],
        )

    def as_payload(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "direction": int(self.direction),
            "tpd": self.turns_per_day,
            "activeHours": self.active_hours,
            "rotationTime": self.rotation_seconds,
            "restTime": self.rest_minutes,
        }


@dataclass(frozen=True)
class DerivedSchedule:
    """Cycle plan derived from a MotorConfig. ``turns_per_cycle`` is None when undefined."""

    cycles_per_day: int
    turns_per_cycle: float | None

    @property
    def defined(self) -> bool:
        return self.turns_per_cycle is not None


UNDEFINED_SCHEDULE = DerivedSchedule(cycles_per_day=0, turns_per_cycle=None)


@dataclass(frozen=True)
class MotorSettings:
    """One motor as reported by ``GET /settings``: config plus the device's own schedule."""

    config: MotorConfig
    device_schedule: DerivedSchedule | None = None


def parse_settings(data: Any) -> dict[MotorSlot, MotorSettings]:
    data = SETTINGS_SCHEMA(data)
    settings: dict[MotorSlot, MotorSettings] = {}
    for slot in MotorSlot:
        motor = data[slot.payload_key]
        device_schedule = None
        if "cyclesPerDay" in motor and "turnsPerCycle" in motor:
            device_schedule = DerivedSchedule(motor["cyclesPerDay"], motor["turnsPerCycle"])
        settings[slot] = MotorSettings(MotorConfig.from_payload(motor), device_schedule)
    return settings


def settings_payload(configs: dict[MotorSlot, MotorConfig]) -> dict[str, Any]:
    return {slot.payload_key: configs[slot].as_payload() for slot in MotorSlot}


@dataclass(frozen=True)
class MotorStatus:
    running: bool
    cycles_completed: int
    cycles_target: int
    turns_completed: float
    seconds_to_next_cycle: int
    target_turns_per_day: int | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> MotorStatus:
        return cls(
            running=data["running"],
            cycles_completed=data["cycles"],
            cycles_target=data["totalCycles"],
            turns_completed=data["turns"],
            seconds_to_next_cycle=data["nextCycle"],
            target_turns_per_day=data.get("targetTpd"),
        )


@dataclass(frozen=True)
class DeviceStatus:
    provisioning_mode: bool
    ip_address: str
    uptime_seconds: int
    motors: dict[MotorSlot, MotorStatus] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: Any) -> DeviceStatus:
        data = STATUS_SCHEMA(data)
        return cls(
            provisioning_mode=data["apMode"],
            ip_address=data["ip"],
            uptime_seconds=data["uptime"],
            motors={slot: MotorStatus.from_payload(data[slot.payload_key]) for slot in MotorSlot},
        )


@dataclass(frozen=True)
class WiFiNetwork:
    ssid: str
    signal_strength_dbm: int
    secured: bool

    @property
    def label(self) -> str:
        label = f"{self.ssid} ({self.signal_strength_dbm} dBm)"
        if self.secured:
            label += " *"
        return label


def parse_networks(data: Any) -> list[WiFiNetwork]:
    data = WIFI_SCAN_SCHEMA(data)
    return [
        WiFiNetwork(ssid=n["ssid"], signal_strength_dbm=n["rssi"], secured=n["secure"])
        for n in data["networks"]
    ]
