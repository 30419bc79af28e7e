"""Connection state and display values derived from the polled device status."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from .models import DeviceStatus, MotorSlot, MotorStatus

_LOGGER = logging.getLogger(__name__)


class ConnectionState(StrEnum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


def format_uptime(seconds: int) -> str:
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_countdown(seconds: int) -> str:
    if seconds <= 0:
        return "Now"

    minutes = seconds // 60
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


@dataclass(frozen=True)
class MotorView:
    running: bool
    state_text: str
    cycles_text: str
    turns: float
    next_cycle_text: str
    target_turns_per_day: int | None

    @classmethod
    def from_status(cls, status: MotorStatus) -> MotorView:
        return cls(
            running=status.running,
            state_text="Running" if status.running else "Stopped",
            cycles_text=f"{status.cycles_completed}/{status.cycles_target}",
            turns=round(status.turns_completed, 1),
            next_cycle_text=(
                format_countdown(status.seconds_to_next_cycle) if status.running else "--"
            ),
            target_turns_per_day=status.target_turns_per_day,
        )


@dataclass(frozen=True)
class StatusView:
    """Display values for one status snapshot, rebuilt from scratch on every poll."""

    status: DeviceStatus
    provisioning_mode: bool
    ip_address: str
    uptime_text: str
    motors: dict[MotorSlot, MotorView]

    @classmethod
    def from_status(cls, status: DeviceStatus) -> StatusView:
        return cls(
            status=status,
            provisioning_mode=status.provisioning_mode,
            ip_address=status.ip_address,
            uptime_text=format_uptime(status.uptime_seconds),
            motors={slot: MotorView.from_status(m) for slot, m in status.motors.items()},
        )


class StatusSynchronizer:
    """Tracks connectivity and provisioning mode across status polls.

    The first provisioning snapshot asks for exactly one WiFi scan. Further
    provisioning snapshots do not, until reset(). With rescan_on_reentry the
    guard is also re-armed by a snapshot in normal mode, so leaving and
    re-entering provisioning scans again.
    """

    def __init__(self, rescan_on_reentry: bool = False) -> None:
        self.rescan_on_reentry = rescan_on_reentry
        self.state = ConnectionState.DISCONNECTED
        self.view: StatusView | None = None
        self.last_error: Exception | None = None
        self.has_scanned_this_provisioning_session = False

    @property
    def connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    @property
    def snapshot(self) -> DeviceStatus | None:
        return self.view.status if self.view else None

    def handle_status(self, status: DeviceStatus) -> bool:
        """Record a successful poll. Returns True when a WiFi scan should start."""
        if self.state is not ConnectionState.CONNECTED:
            _LOGGER.info("Connected to watch winder at %s", status.ip_address)
        self.state = ConnectionState.CONNECTED
        self.last_error = None
        self.view = StatusView.from_status(status)

        if not status.provisioning_mode:
            if self.rescan_on_reentry:
                self.has_scanned_this_provisioning_session = False
            return False

        if self.has_scanned_this_provisioning_session:
            return False
        self.has_scanned_this_provisioning_session = True
        _LOGGER.debug("Device entered provisioning mode, requesting WiFi scan")
        return True

    def handle_failure(self, err: Exception) -> None:
        if self.state is ConnectionState.CONNECTED:
            _LOGGER.info("Lost connection to watch winder: %s", err)
        self.state = ConnectionState.DISCONNECTED
        self.last_error = err

    def reset(self) -> None:
        self.state = ConnectionState.DISCONNECTED
        self.view = None
        self.last_error = None
        self.has_scanned_this_provisioning_session = False
