"""The Watch Winder integration."""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import WatchWinderApi
from .commands import CommandDispatcher
from .const import (
    CONF_HOST,
    CONF_RESCAN_ON_REENTRY,
    DOMAIN,
    EVENT_NOTIFICATION,
    NOTIFY_ERROR,
    PLATFORMS,
)
from .coordinator import WatchWinderCoordinator
from .provisioning import ProvisioningFlow
from .store import ConfigStore
from .synchronizer import StatusSynchronizer

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    @callback
    def notify(message: str, kind: str) -> None:
        level = logging.WARNING if kind == NOTIFY_ERROR else logging.INFO
        _LOGGER.log(level, "%s: %s", entry.title, message)
        hass.bus.async_fire(
            EVENT_NOTIFICATION,
            {"entry_id": entry.entry_id, "message": message, "kind": kind},
        )

    api = WatchWinderApi(async_get_clientsession(hass), entry.data[CONF_HOST])
    store = ConfigStore(notify)
    provisioning = ProvisioningFlow(api, notify)
    synchronizer = StatusSynchronizer(
        rescan_on_reentry=entry.options.get(CONF_RESCAN_ON_REENTRY, False)
    )
    coordinator = WatchWinderCoordinator(hass, entry, api, store, synchronizer, provisioning)

    # Neither call raises: a device that is unreachable right now still gets set up
    # and shows as disconnected until a poll succeeds.
    await store.async_load(api)
    await coordinator.async_refresh()

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = {
        "api": api,
        "coordinator": coordinator,
        "store": store,
        "provisioning": provisioning,
        "commands": CommandDispatcher(api, store, notify),
    }

    entry.async_on_unload(entry.add_update_listener(_async_update_listener))
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    unloaded = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unloaded:
        hass.data[DOMAIN].pop(entry.entry_id)
    return unloaded


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    coordinator: WatchWinderCoordinator = hass.data[DOMAIN][entry.entry_id]["coordinator"]
    coordinator.synchronizer.rescan_on_reentry = entry.options.get(CONF_RESCAN_ON_REENTRY, False)
