from __future__ import annotations

from collections.abc import Awaitable, Callable

from homeassistant.components.button import ButtonEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .commands import CommandDispatcher
from .const import ALL_MOTORS, DOMAIN
from .coordinator import WatchWinderCoordinator
from .models import MotorSlot
from .provisioning import ProvisioningFlow
from .store import ConfigStore


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    data = hass.data[DOMAIN][entry.entry_id]
    coordinator: WatchWinderCoordinator = data["coordinator"]
    store: ConfigStore = data["store"]
    commands: CommandDispatcher = data["commands"]
    provisioning: ProvisioningFlow = data["provisioning"]

    def button(key: str, name: str, press: Callable[[], Awaitable[object]]) -> WatchWinderButton:
        return WatchWinderButton(coordinator, f"{entry.entry_id}_{key}", name, press)

    entities = [
        button("save_settings", "Save settings", lambda: store.async_save(coordinator.api)),
        button("start_all", "Start all", lambda: commands.async_start(ALL_MOTORS)),
        button("stop_all", "Stop all", lambda: commands.async_stop(ALL_MOTORS)),
        button("wifi_scan", "Scan WiFi networks", provisioning.async_scan),
        button("wifi_connect", "Connect to WiFi", provisioning.async_connect_selected),
    ]
    for slot in MotorSlot:
        n = int(slot)
        entities.extend(
            [
                button(f"motor_{n}_start", f"Motor {n} start", lambda s=slot: commands.async_start(s)),
                button(f"motor_{n}_stop", f"Motor {n} stop", lambda s=slot: commands.async_stop(s)),
                button(f"motor_{n}_test", f"Motor {n} test", lambda s=slot: commands.async_test(s)),
            ]
        )

    async_add_entities(entities)


class WatchWinderButton(ButtonEntity):
    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(
        self,
        coordinator: WatchWinderCoordinator,
        unique_id: str,
        name: str,
        press: Callable[[], Awaitable[object]],
    ) -> None:
        self._coordinator = coordinator
        self._press = press
        self._attr_unique_id = unique_id
        self._attr_name = name

    async def async_press(self) -> None:
        # Failures are reported through the integration's notifications.
        await self._press()
        await self._coordinator.async_request_refresh()
