from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from .api import WatchWinderApi, WatchWinderError, WatchWinderValidationError
from .const import NOTIFY_ERROR, NOTIFY_SUCCESS, OPTION_SCANNING, OPTION_SELECT_NETWORK
from .models import Notify, WiFiNetwork

_LOGGER = logging.getLogger(__name__)


class ScanState(StrEnum):
    IDLE = "idle"
    SCANNING = "scanning"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class NetworkOption:
    label: str
    ssid: str
    disabled: bool = False


SCANNING_OPTION = NetworkOption(OPTION_SCANNING, "", disabled=True)
SELECT_NETWORK_OPTION = NetworkOption(OPTION_SELECT_NETWORK, "")


def validate_ssid(ssid: str | None) -> str:
    if not ssid:
        raise WatchWinderValidationError("Please select a network")
    return ssid


class ProvisioningFlow:
    """WiFi network discovery and join while the device runs its setup access point."""

    def __init__(self, api: WatchWinderApi, notify: Notify) -> None:
        self._api = api
        self._notify = notify
        self._listeners: list[Callable[[], None]] = []
        self.state = ScanState.IDLE
        self.networks: list[WiFiNetwork] = []
        self.options: list[NetworkOption] = []
        self.selected_ssid: str = ""
        self.password: str = ""

    async def async_scan(self) -> list[WiFiNetwork]:
        self.state = ScanState.SCANNING
        self.options = [SCANNING_OPTION]
        self.selected_ssid = ""
        self._async_update_listeners()

        try:
            networks = await self._api.wifi_scan()
        except WatchWinderError as e:
            _LOGGER.warning("WiFi scan failed: %s", e)
            self.state = ScanState.FAILED
            self.networks = []
            self.options = []
            self._async_update_listeners()
            self._notify("Failed to scan WiFi networks", NOTIFY_ERROR)
            return []

        # Device order is kept; no sorting or de-duplication.
        self.state = ScanState.READY
        self.networks = networks
        self.options = [SELECT_NETWORK_OPTION] + [
            NetworkOption(n.label, n.ssid) for n in networks
        ]
        _LOGGER.debug("WiFi scan found %d networks", len(networks))
        self._async_update_listeners()
        return networks

    def select(self, label: str) -> None:
        for option in self.options:
            if option.label == label and not option.disabled:
                self.selected_ssid = option.ssid
                self._async_update_listeners()
                return
        raise WatchWinderValidationError(f"Unknown network: {label}")

    @property
    def selected_label(self) -> str | None:
        for option in self.options:
            if option.ssid == self.selected_ssid and not option.disabled:
                return option.label
        return None

    def set_password(self, password: str) -> None:
        self.password = password
        self._async_update_listeners()

    async def async_connect(self, ssid: str, password: str) -> bool:
        try:
            ssid = validate_ssid(ssid)
        except WatchWinderValidationError as e:
            self._notify(str(e), NOTIFY_ERROR)
            return False

        try:
            await self._api.wifi_connect(ssid, password)
        except WatchWinderError as e:
            _LOGGER.warning("Sending WiFi credentials for %s failed: %s", ssid, e)
            self._notify("Failed to save WiFi credentials", NOTIFY_ERROR)
            return False

        # The device reboots into normal mode; the next status poll observes it.
        _LOGGER.info("WiFi credentials for %s accepted, device is rebooting", ssid)
        self._notify("Connecting... Device will reboot", NOTIFY_SUCCESS)
        return True

    async def async_connect_selected(self) -> bool:
        return await self.async_connect(self.selected_ssid, self.password)

    def async_add_listener(self, update_callback: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(update_callback)

        def remove_listener() -> None:
            self._listeners.remove(update_callback)

        return remove_listener

    def _async_update_listeners(self) -> None:
        for update_callback in list(self._listeners):
            update_callback()
