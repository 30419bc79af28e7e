from __future__ import annotations

from dataclasses import dataclass

from homeassistant.components.number import NumberEntity, NumberMode
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import UnitOfTime
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .api import WatchWinderValidationError
from .const import (
    ACTIVE_HOURS_MAX,
    DOMAIN,
    REST_MINUTES_MAX,
    ROTATION_SECONDS_MAX,
    TURNS_PER_DAY_MAX,
)
from .models import MotorSlot
from .store import ConfigStore


@dataclass(frozen=True)
class MotorField:
    key: str
    label: str
    minimum: int
    maximum: int
    unit: str | None = None


MOTOR_FIELDS = (
    MotorField("turns_per_day", "turns per day", 0, TURNS_PER_DAY_MAX),
    MotorField("active_hours", "active hours", 1, ACTIVE_HOURS_MAX, UnitOfTime.HOURS),
    MotorField("rotation_seconds", "rotation time", 1, ROTATION_SECONDS_MAX, UnitOfTime.SECONDS),
    MotorField("rest_minutes", "rest time", 0, REST_MINUTES_MAX, UnitOfTime.MINUTES),
)


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    store: ConfigStore = hass.data[DOMAIN][entry.entry_id]["store"]
    async_add_entities(
        WatchWinderMotorNumber(store, entry.entry_id, slot, motor_field)
        for slot in MotorSlot
        for motor_field in MOTOR_FIELDS
    )


class WatchWinderMotorNumber(NumberEntity):
    """A motor setting edited locally; "Save settings" pushes it to the device."""

    _attr_has_entity_name = True
    _attr_should_poll = False
    _attr_mode = NumberMode.BOX
    _attr_native_step = 1

    def __init__(
        self, store: ConfigStore, entry_id: str, slot: MotorSlot, motor_field: MotorField
    ) -> None:
        self._store = store
        self._slot = slot
        self._field = motor_field
        self._attr_unique_id = f"{entry_id}_motor_{int(slot)}_{motor_field.key}"
        self._attr_name = f"Motor {int(slot)} {motor_field.label}"
        self._attr_native_min_value = motor_field.minimum
        self._attr_native_max_value = motor_field.maximum
        self._attr_native_unit_of_measurement = motor_field.unit

    async def async_added_to_hass(self) -> None:
        self.async_on_remove(self._store.async_add_listener(self.async_write_ha_state))

    @property
    def native_value(self) -> int:
        return getattr(self._store.get(self._slot), self._field.key)

    async def async_set_native_value(self, value: float) -> None:
        try:
            self._store.set(self._slot, self._field.key, int(value))
        except WatchWinderValidationError as e:
            raise HomeAssistantError(str(e)) from e
