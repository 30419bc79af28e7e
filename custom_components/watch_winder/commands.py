from __future__ import annotations

import logging

from .api import WatchWinderApi, WatchWinderError, WatchWinderValidationError
from .const import ALL_MOTORS, NOTIFY_ERROR, NOTIFY_SUCCESS, TEST_DURATION_SECONDS
from .models import MotorSlot, Notify
from .store import ConfigStore

_LOGGER = logging.getLogger(__name__)


class CommandDispatcher:
    """Start/stop/test requests, each sent as soon as it is invoked."""

    def __init__(self, api: WatchWinderApi, store: ConfigStore, notify: Notify) -> None:
        self._api = api
        self._store = store
        self._notify = notify

    async def async_start(self, motor: int = ALL_MOTORS) -> bool:
        try:
            motor = _validate_motor(motor)
            await self._api.start(motor)
        except WatchWinderValidationError as e:
            self._reject(e)
            return False
        except WatchWinderError as e:
            _LOGGER.warning("Start motor %s failed: %s", motor, e)
            self._notify(
                "Failed to start motors" if motor == ALL_MOTORS else f"Failed to start motor {motor}",
                NOTIFY_ERROR,
            )
            return False
        self._notify(
            "All motors started" if motor == ALL_MOTORS else f"Motor {motor} started",
            NOTIFY_SUCCESS,
        )
        return True

    async def async_stop(self, motor: int = ALL_MOTORS) -> bool:
        try:
            motor = _validate_motor(motor)
            await self._api.stop(motor)
        except WatchWinderValidationError as e:
            self._reject(e)
            return False
        except WatchWinderError as e:
            _LOGGER.warning("Stop motor %s failed: %s", motor, e)
            self._notify(
                "Failed to stop motors" if motor == ALL_MOTORS else f"Failed to stop motor {motor}",
                NOTIFY_ERROR,
            )
            return False
        self._notify(
            "All motors stopped" if motor == ALL_MOTORS else f"Motor {motor} stopped",
            NOTIFY_SUCCESS,
        )
        return True

    async def async_test(self, slot: int) -> bool:
        """Run one motor for a few seconds; there is no "all motors" test run."""
        try:
            slot = _validate_slot(slot)
        except WatchWinderValidationError as e:
            self._reject(e)
            return False

        # Direction is read now; later edits do not affect this run.
        direction = self._store.get(slot).direction
        self._notify(f"Testing motor {int(slot)}...", NOTIFY_SUCCESS)
        try:
            await self._api.test(slot, direction, TEST_DURATION_SECONDS)
        except WatchWinderError as e:
            _LOGGER.warning("Test run of motor %s failed: %s", int(slot), e)
            self._notify(f"Failed to test motor {int(slot)}", NOTIFY_ERROR)
            return False
        return True

    def _reject(self, err: WatchWinderValidationError) -> None:
        _LOGGER.warning("Command not sent: %s", err)
        self._notify(str(err), NOTIFY_ERROR)


def _validate_slot(slot: int) -> MotorSlot:
    try:
        return MotorSlot(slot)
    except ValueError as e:
        raise WatchWinderValidationError(f"Unknown motor: {slot}") from e


def _validate_motor(motor: int) -> int:
    if motor == ALL_MOTORS:
        return ALL_MOTORS
    return int(_validate_slot(motor))
