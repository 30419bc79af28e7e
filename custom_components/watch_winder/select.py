from __future__ import annotations

from homeassistant.components.select import SelectEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity import Entity
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .api import WatchWinderValidationError
from .const import DOMAIN, OPTION_SELECT_NETWORK
from .models import Direction, MotorSlot
from .provisioning import ProvisioningFlow
from .store import ConfigStore

DIRECTION_OPTIONS = {
    Direction.CLOCKWISE: "Clockwise",
    Direction.COUNTER_CLOCKWISE: "Counter-clockwise",
}


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    data = hass.data[DOMAIN][entry.entry_id]
    store: ConfigStore = data["store"]
    provisioning: ProvisioningFlow = data["provisioning"]

    entities: list[Entity] = [
        WatchWinderDirectionSelect(store, entry.entry_id, slot) for slot in MotorSlot
    ]
    entities.append(WatchWinderNetworkSelect(provisioning, entry.entry_id))
    async_add_entities(entities)


class WatchWinderDirectionSelect(SelectEntity):
    _attr_has_entity_name = True
    _attr_should_poll = False
    _attr_options = list(DIRECTION_OPTIONS.values())

    def __init__(self, store: ConfigStore, entry_id: str, slot: MotorSlot) -> None:
        self._store = store
        self._slot = slot
        self._attr_unique_id = f"{entry_id}_motor_{int(slot)}_direction"
        self._attr_name = f"Motor {int(slot)} direction"

    async def async_added_to_hass(self) -> None:
        self.async_on_remove(self._store.async_add_listener(self.async_write_ha_state))

    @property
    def current_option(self) -> str:
        return DIRECTION_OPTIONS[self._store.get(self._slot).direction]

    async def async_select_option(self, option: str) -> None:
        for direction, label in DIRECTION_OPTIONS.items():
            if label == option:
                self._store.set(self._slot, "direction", direction)
                return
        raise HomeAssistantError(f"Unknown direction: {option}")


class WatchWinderNetworkSelect(SelectEntity):
    """Networks found by the last scan; the disabled "Scanning..." entry while pending."""

    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(self, provisioning: ProvisioningFlow, entry_id: str) -> None:
        self._provisioning = provisioning
        self._attr_unique_id = f"{entry_id}_wifi_network"
        self._attr_name = "WiFi network"

    async def async_added_to_hass(self) -> None:
        self.async_on_remove(self._provisioning.async_add_listener(self.async_write_ha_state))

    @property
    def options(self) -> list[str]:
        # A failed scan leaves no options; keep the placeholder so the entity stays valid.
        return [o.label for o in self._provisioning.options] or [OPTION_SELECT_NETWORK]

    @property
    def current_option(self) -> str | None:
        return self._provisioning.selected_label

    async def async_select_option(self, option: str) -> None:
        try:
            self._provisioning.select(option)
        except WatchWinderValidationError as e:
            raise HomeAssistantError(str(e)) from e
