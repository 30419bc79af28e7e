from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity import Entity
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN
from .coordinator import WatchWinderCoordinator
from .models import MotorSlot
from .schedule import cycle_duration_seconds
from .store import ConfigStore


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    data = hass.data[DOMAIN][entry.entry_id]
    coordinator: WatchWinderCoordinator = data["coordinator"]
    store: ConfigStore = data["store"]

    entities: list[Entity] = [
        WatchWinderIpSensor(coordinator, entry.entry_id),
        WatchWinderUptimeSensor(coordinator, entry.entry_id),
    ]
    for slot in MotorSlot:
        entities.extend(
            [
                WatchWinderMotorStatusSensor(coordinator, entry.entry_id, slot),
                WatchWinderCyclesSensor(coordinator, entry.entry_id, slot),
                WatchWinderTurnsSensor(coordinator, entry.entry_id, slot),
                WatchWinderNextCycleSensor(coordinator, entry.entry_id, slot),
                WatchWinderCyclesPerDaySensor(store, entry.entry_id, slot),
                WatchWinderTurnsPerCycleSensor(store, entry.entry_id, slot),
            ]
        )

    async_add_entities(entities)


class WatchWinderIpSensor(CoordinatorEntity[WatchWinderCoordinator], SensorEntity):
    _attr_has_entity_name = True
    _attr_entity_category = EntityCategory.DIAGNOSTIC

    def __init__(self, coordinator: WatchWinderCoordinator, entry_id: str) -> None:
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry_id}_ip"
        self._attr_name = "IP address"

    @property
    def native_value(self) -> str | None:
        view = self.coordinator.data
        return view.ip_address if view else None


class WatchWinderUptimeSensor(CoordinatorEntity[WatchWinderCoordinator], SensorEntity):
    _attr_has_entity_name = True
    _attr_entity_category = EntityCategory.DIAGNOSTIC

    def __init__(self, coordinator: WatchWinderCoordinator, entry_id: str) -> None:
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry_id}_uptime"
        self._attr_name = "Uptime"

    @property
    def native_value(self) -> str | None:
        view = self.coordinator.data
        return view.uptime_text if view else None

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        view = self.coordinator.data
        return {"uptime_seconds": view.status.uptime_seconds if view else None}


class _MotorStatusSensor(CoordinatorEntity[WatchWinderCoordinator], SensorEntity):
    _attr_has_entity_name = True
    _key: str
    _label: str

    def __init__(self, coordinator: WatchWinderCoordinator, entry_id: str, slot: MotorSlot) -> None:
        super().__init__(coordinator)
        self._slot = slot
        self._attr_unique_id = f"{entry_id}_motor_{int(slot)}_{self._key}"
        self._attr_name = f"Motor {int(slot)} {self._label}"

    def _motor(self):
        view = self.coordinator.data
        return view.motors[self._slot] if view else None


class WatchWinderMotorStatusSensor(_MotorStatusSensor):
    _key = "status"
    _label = "status"

    @property
    def native_value(self) -> str | None:
        motor = self._motor()
        return motor.state_text if motor else None


class WatchWinderCyclesSensor(_MotorStatusSensor):
    _key = "cycles"
    _label = "cycles"

    @property
    def native_value(self) -> str | None:
        motor = self._motor()
        return motor.cycles_text if motor else None


class WatchWinderTurnsSensor(_MotorStatusSensor):
    _key = "turns"
    _label = "turns today"
    _attr_state_class = SensorStateClass.MEASUREMENT

    @property
    def native_value(self) -> float | None:
        motor = self._motor()
        return motor.turns if motor else None

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        motor = self._motor()
        return {"target_turns_per_day": motor.target_turns_per_day if motor else None}


class WatchWinderNextCycleSensor(_MotorStatusSensor):
    _key = "next_cycle"
    _label = "next cycle"

    @property
    def native_value(self) -> str | None:
        motor = self._motor()
        return motor.next_cycle_text if motor else None


class _ScheduleSensor(SensorEntity):
    """Derived schedule of the locally edited configuration, updated on every edit."""

    _attr_has_entity_name = True
    _attr_should_poll = False
    _key: str
    _label: str

    def __init__(self, store: ConfigStore, entry_id: str, slot: MotorSlot) -> None:
        self._store = store
        self._slot = slot
        self._attr_unique_id = f"{entry_id}_motor_{int(slot)}_{self._key}"
        self._attr_name = f"Motor {int(slot)} {self._label}"

    async def async_added_to_hass(self) -> None:
        self.async_on_remove(self._store.async_add_listener(self.async_write_ha_state))

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        device = self._store.device_schedule(self._slot)
        return {
            "cycle_duration_seconds": cycle_duration_seconds(self._store.get(self._slot)),
            "device_cycles_per_day": device.cycles_per_day if device else None,
            "device_turns_per_cycle": device.turns_per_cycle if device else None,
        }


class WatchWinderCyclesPerDaySensor(_ScheduleSensor):
    _key = "cycles_per_day"
    _label = "cycles per day"

    @property
    def native_value(self) -> int:
        return self._store.schedule(self._slot).cycles_per_day


class WatchWinderTurnsPerCycleSensor(_ScheduleSensor):
    _key = "turns_per_cycle"
    _label = "turns per cycle"
    _attr_suggested_display_precision = 2

    # None renders as "unknown" when the schedule is undefined.
    @property
    def native_value(self) -> float | None:
        return self._store.schedule(self._slot).turns_per_cycle
