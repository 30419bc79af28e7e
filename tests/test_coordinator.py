import asyncio
from types import SimpleNamespace

import pytest
from homeassistant.helpers.update_coordinator import UpdateFailed

from custom_components.watch_winder.coordinator import WatchWinderCoordinator
from custom_components.watch_winder.provisioning import ProvisioningFlow, ScanState
from custom_components.watch_winder.store import ConfigStore
from custom_components.watch_winder.synchronizer import ConnectionState, StatusSynchronizer


class FakeEntry:
    """Collects background tasks instead of handing them to an event loop."""

    def __init__(self) -> None:
        self.tasks: list[tuple[str, object]] = []

    def async_create_background_task(self, hass, target, name):
        self.tasks.append((name, target))

    async def run_tasks(self) -> None:
        tasks, self.tasks = self.tasks, []
        for _, target in tasks:
            await target


def make_coordinator(api, notify, store=None):
    if store is None:
        store = ConfigStore(notify)
        store.load(api.settings_data)
    return SimpleNamespace(
        hass=object(),
        config_entry=FakeEntry(),
        api=api,
        store=store,
        synchronizer=StatusSynchronizer(),
        provisioning=ProvisioningFlow(api, notify),
    )


def poll(coordinator):
    return asyncio.run(WatchWinderCoordinator._async_update_data(coordinator))


def test_poll_returns_view(api, notify):
    coordinator = make_coordinator(api, notify)

    view = poll(coordinator)

    assert view is coordinator.synchronizer.view
    assert view.ip_address == "192.168.1.40"
    assert coordinator.synchronizer.state is ConnectionState.CONNECTED
    assert coordinator.config_entry.tasks == []


def test_provisioning_mode_schedules_one_scan(api, notify):
    coordinator = make_coordinator(api, notify)
    api.status_data["apMode"] = True

    poll(coordinator)
    poll(coordinator)
    poll(coordinator)

    assert [name for name, _ in coordinator.config_entry.tasks] == ["watch_winder_wifi_scan"]

    asyncio.run(coordinator.config_entry.run_tasks())
    assert coordinator.provisioning.state is ScanState.READY
    assert [c[0] for c in api.calls].count("wifi_scan") == 1


def test_failed_poll_raises_update_failed(api, notify):
    coordinator = make_coordinator(api, notify)
    poll(coordinator)
    api.fail.add("status")

    with pytest.raises(UpdateFailed, match="status failed"):
        poll(coordinator)

    assert coordinator.synchronizer.state is ConnectionState.DISCONNECTED
    assert coordinator.config_entry.tasks == []


def test_settings_reloaded_once_device_answers(api, notify):
    store = ConfigStore(notify)
    api.fail.update({"settings", "status"})
    asyncio.run(store.async_load(api))
    coordinator = make_coordinator(api, notify, store=store)

    with pytest.raises(UpdateFailed):
        poll(coordinator)
    assert coordinator.config_entry.tasks == []

    api.fail.clear()
    poll(coordinator)
    poll(coordinator)

    assert [name for name, _ in coordinator.config_entry.tasks] == ["watch_winder_load_settings"]
    asyncio.run(coordinator.config_entry.run_tasks())
    assert store.loaded
    assert store.get(1).turns_per_day == 120


def test_loaded_settings_are_not_fetched_again(api, notify):
    coordinator = make_coordinator(api, notify)

    poll(coordinator)
    api.fail.add("status")
    with pytest.raises(UpdateFailed):
        poll(coordinator)
    api.fail.clear()
    poll(coordinator)

    assert coordinator.config_entry.tasks == []
    assert "settings" not in [c[0] for c in api.calls]
