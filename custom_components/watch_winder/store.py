from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import fields, replace
from typing import Any

import voluptuous as vol

from .api import (
    WatchWinderApi,
    WatchWinderError,
    WatchWinderMalformedResponse,
    WatchWinderValidationError,
)
from .const import NOTIFY_ERROR, NOTIFY_SUCCESS
from .models import (
    FIELD_VALIDATORS,
    DerivedSchedule,
    MotorConfig,
    MotorSlot,
    Notify,
    parse_settings,
)
from .schedule import safe_compute_schedule, schedules_agree

_LOGGER = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(f.name for f in fields(MotorConfig))


class ConfigStore:
    """Local, editable copy of both motors' configuration.

    Edits stay in memory until async_save pushes them to the device. Every edit
    recomputes the derived schedule of the edited motor only.
    """

    def __init__(
        self,
        notify: Notify,
        calculator: Callable[[MotorConfig], DerivedSchedule] = safe_compute_schedule,
    ) -> None:
        self._notify = notify
        self._calculator = calculator
        self._configs: dict[MotorSlot, MotorConfig] = {slot: MotorConfig() for slot in MotorSlot}
        self._schedules: dict[MotorSlot, DerivedSchedule] = {
            slot: calculator(config) for slot, config in self._configs.items()
        }
        self._device_schedules: dict[MotorSlot, DerivedSchedule | None] = {
            slot: None for slot in MotorSlot
        }
        self._listeners: list[Callable[[], None]] = []
        self.loaded = False

    def get(self, slot: MotorSlot) -> MotorConfig:
        return self._configs[slot]

    def schedule(self, slot: MotorSlot) -> DerivedSchedule:
        return self._schedules[slot]

    def device_schedule(self, slot: MotorSlot) -> DerivedSchedule | None:
        """Schedule the device reported at load time, if any."""
        return self._device_schedules[slot]

    def load(self, payload: Any) -> None:
        """Replace both configs from a ``GET /settings`` payload.

        Nothing changes unless both motors parse.
        """
        try:
            settings = parse_settings(payload)
        except vol.Invalid as e:
            raise WatchWinderMalformedResponse(f"settings payload: {e}") from e

        self._configs = {slot: s.config for slot, s in settings.items()}
        self._device_schedules = {slot: s.device_schedule for slot, s in settings.items()}
        for slot in MotorSlot:
            self._recompute(slot)
            device = self._device_schedules[slot]
            if device is not None and not schedules_agree(self._schedules[slot], device):
                _LOGGER.warning(
                    "Motor %s: device reports %s, computed %s",
                    int(slot),
                    device,
                    self._schedules[slot],
                )
        self.loaded = True
        self._async_update_listeners()

    async def async_load(self, api: WatchWinderApi) -> bool:
        try:
            self.load(await api.settings())
        except WatchWinderError as e:
            _LOGGER.warning("Loading settings from %s failed: %s", api.host, e)
            self._notify("Failed to load settings", NOTIFY_ERROR)
            return False
        _LOGGER.debug("Loaded settings: %s", self._configs)
        return True

    def set(self, slot: MotorSlot, field: str, value: Any) -> None:
        if field not in EDITABLE_FIELDS:
            raise WatchWinderValidationError(f"Unknown motor setting: {field}")
        try:
            value = FIELD_VALIDATORS[field](value)
        except vol.Invalid as e:
            raise WatchWinderValidationError(f"Invalid value for {field}: {value!r}") from e

        self._configs[slot] = replace(self._configs[slot], **{field: value})
        self._recompute(slot)
        self._async_update_listeners()

    async def async_save(self, api: WatchWinderApi) -> bool:
        # Until the device settings are loaded the store holds firmware defaults,
        # which must never overwrite the device's real configuration.
        if not self.loaded:
            _LOGGER.warning("Not saving: settings have not been loaded from %s", api.host)
            self._notify("Settings not loaded from device yet", NOTIFY_ERROR)
            return False

        configs = dict(self._configs)
        try:
            await api.save_settings(configs)
        except WatchWinderError as e:
            _LOGGER.warning("Saving settings failed: %s", e)
            self._notify("Failed to save settings", NOTIFY_ERROR)
            return False
        self._notify("Settings saved", NOTIFY_SUCCESS)
        return True

    def async_add_listener(self, update_callback: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(update_callback)

        def remove_listener() -> None:
            self._listeners.remove(update_callback)

        return remove_listener

    def _recompute(self, slot: MotorSlot) -> None:
        self._schedules[slot] = self._calculator(self._configs[slot])

    def _async_update_listeners(self) -> None:
        for update_callback in list(self._listeners):
            update_callback()
