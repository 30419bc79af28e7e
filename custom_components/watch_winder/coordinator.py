from __future__ import annotations

import logging
from datetime import timedelta

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .api import WatchWinderApi, WatchWinderError
from .const import DOMAIN, UPDATE_INTERVAL_SECONDS
from .provisioning import ProvisioningFlow
from .store import ConfigStore
from .synchronizer import StatusSynchronizer, StatusView

_LOGGER = logging.getLogger(__name__)


class WatchWinderCoordinator(DataUpdateCoordinator[StatusView]):
    def __init__(
        self,
        hass: HomeAssistant,
        entry: ConfigEntry,
        api: WatchWinderApi,
        store: ConfigStore,
        synchronizer: StatusSynchronizer,
        provisioning: ProvisioningFlow,
    ) -> None:
        super().__init__(
            hass,
            logger=_LOGGER,
            name=DOMAIN,
            config_entry=entry,
            update_interval=timedelta(seconds=UPDATE_INTERVAL_SECONDS),
        )
        self.api = api
        self.store = store
        self.synchronizer = synchronizer
        self.provisioning = provisioning

    async def _async_update_data(self) -> StatusView:
        try:
            status = await self.api.status()
        except WatchWinderError as e:
            self.synchronizer.handle_failure(e)
            raise UpdateFailed(str(e)) from e

        reconnected = not self.synchronizer.connected
        scan = self.synchronizer.handle_status(status)

        # Settings that failed to load at setup are fetched again once the device answers.
        if reconnected and not self.store.loaded:
            self.config_entry.async_create_background_task(
                self.hass, self.store.async_load(self.api), f"{DOMAIN}_load_settings"
            )
        if scan:
            self.config_entry.async_create_background_task(
                self.hass, self.provisioning.async_scan(), f"{DOMAIN}_wifi_scan"
            )
        return self.synchronizer.view
