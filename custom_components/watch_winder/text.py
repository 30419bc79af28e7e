from __future__ import annotations

from homeassistant.components.text import TextEntity, TextMode
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN
from .provisioning import ProvisioningFlow


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    provisioning: ProvisioningFlow = hass.data[DOMAIN][entry.entry_id]["provisioning"]
    async_add_entities([WatchWinderWifiPasswordText(provisioning, entry.entry_id)])


class WatchWinderWifiPasswordText(TextEntity):
    _attr_has_entity_name = True
    _attr_should_poll = False
    _attr_mode = TextMode.PASSWORD
    _attr_native_max = 64

    def __init__(self, provisioning: ProvisioningFlow, entry_id: str) -> None:
        self._provisioning = provisioning
        self._attr_unique_id = f"{entry_id}_wifi_password"
        self._attr_name = "WiFi password"

    async def async_added_to_hass(self) -> None:
        self.async_on_remove(self._provisioning.async_add_listener(self.async_write_ha_state))

    @property
    def native_value(self) -> str:
        return self._provisioning.password

    async def async_set_value(self, value: str) -> None:
        self._provisioning.set_password(value)
