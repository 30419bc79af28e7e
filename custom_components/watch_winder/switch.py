from __future__ import annotations

from typing import Any

from homeassistant.components.switch import SwitchEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN
from .models import MotorSlot
from .store import ConfigStore


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    store: ConfigStore = hass.data[DOMAIN][entry.entry_id]["store"]
    async_add_entities(WatchWinderEnabledSwitch(store, entry.entry_id, slot) for slot in MotorSlot)


class WatchWinderEnabledSwitch(SwitchEntity):
    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(self, store: ConfigStore, entry_id: str, slot: MotorSlot) -> None:
        self._store = store
        self._slot = slot
        self._attr_unique_id = f"{entry_id}_motor_{int(slot)}_enabled"
        self._attr_name = f"Motor {int(slot)} enabled"

    async def async_added_to_hass(self) -> None:
        self.async_on_remove(self._store.async_add_listener(self.async_write_ha_state))

    @property
    def is_on(self) -> bool:
        return self._store.get(self._slot).enabled

    async def async_turn_on(self, **kwargs: Any) -> None:
        self._store.set(self._slot, "enabled", True)

    async def async_turn_off(self, **kwargs: Any) -> None:
        self._store.set(self._slot, "enabled", False)
