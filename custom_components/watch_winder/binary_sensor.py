from __future__ import annotations

from homeassistant.components.binary_sensor import BinarySensorDeviceClass, BinarySensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN
from .coordinator import WatchWinderCoordinator
from .models import MotorSlot


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    coordinator: WatchWinderCoordinator = hass.data[DOMAIN][entry.entry_id]["coordinator"]

    entities: list[BinarySensorEntity] = [
        WatchWinderConnectedBinarySensor(coordinator, entry.entry_id),
        WatchWinderProvisioningBinarySensor(coordinator, entry.entry_id),
    ]
    for slot in MotorSlot:
        entities.append(WatchWinderRunningBinarySensor(coordinator, entry.entry_id, slot))

    async_add_entities(entities)


class WatchWinderConnectedBinarySensor(
    CoordinatorEntity[WatchWinderCoordinator], BinarySensorEntity
):
    _attr_has_entity_name = True
    _attr_device_class = BinarySensorDeviceClass.CONNECTIVITY

    def __init__(self, coordinator: WatchWinderCoordinator, entry_id: str) -> None:
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry_id}_connected"
        self._attr_name = "Connection"

    # Stays available so a failed poll shows as "disconnected" instead of unavailable.
    @property
    def available(self) -> bool:
        return True

    @property
    def is_on(self) -> bool:
        return self.coordinator.synchronizer.connected

    @property
    def extra_state_attributes(self) -> dict[str, str | None]:
        err = self.coordinator.synchronizer.last_error
        return {
            "state": str(self.coordinator.synchronizer.state),
            "last_error": str(err) if err else None,
        }


class WatchWinderProvisioningBinarySensor(
    CoordinatorEntity[WatchWinderCoordinator], BinarySensorEntity
):
    _attr_has_entity_name = True

    def __init__(self, coordinator: WatchWinderCoordinator, entry_id: str) -> None:
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry_id}_provisioning_mode"
        self._attr_name = "WiFi setup mode"

    @property
    def is_on(self) -> bool | None:
        view = self.coordinator.data
        return view.provisioning_mode if view else None


class WatchWinderRunningBinarySensor(
    CoordinatorEntity[WatchWinderCoordinator], BinarySensorEntity
):
    _attr_has_entity_name = True
    _attr_device_class = BinarySensorDeviceClass.RUNNING

    def __init__(self, coordinator: WatchWinderCoordinator, entry_id: str, slot: MotorSlot) -> None:
        super().__init__(coordinator)
        self._slot = slot
        self._attr_unique_id = f"{entry_id}_motor_{int(slot)}_running"
        self._attr_name = f"Motor {int(slot)} running"

    @property
    def is_on(self) -> bool | None:
        view = self.coordinator.data
        if not view:
            return None
        return view.motors[self._slot].running
