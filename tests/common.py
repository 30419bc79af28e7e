from __future__ import annotations

import copy

from custom_components.watch_winder.api import WatchWinderApiError
from custom_components.watch_winder.models import DeviceStatus, WiFiNetwork

SETTINGS_PAYLOAD = {
    "motor1": {
        "enabled": True,
        "direction": 0,
        "tpd": 120,
        "activeHours": 8,
        "rotationTime": 10,
        "restTime": 2,
        "cyclesPerDay": 221,
        "turnsPerCycle": 0.5429864,
    },
    "motor2": {
        "enabled": False,
        "direction": 1,
        "tpd": 10,
        "activeHours": 1,
        "rotationTime": 3600,
        "restTime": 0,
        "cyclesPerDay": 1,
        "turnsPerCycle": 10.0,
    },
}

STATUS_PAYLOAD = {
    "apMode": False,
    "ip": "192.168.1.40",
    "uptime": 3725,
    "motor1": {
        "running": True,
        "cycles": 12,
        "totalCycles": 221,
        "turns": 6.51,
        "targetTpd": 120,
        "nextCycle": 75,
    },
    "motor2": {
        "running": False,
        "cycles": 0,
        "totalCycles": 1,
        "turns": 0,
        "targetTpd": 10,
        "nextCycle": 0,
    },
}


def settings_payload() -> dict:
    return copy.deepcopy(SETTINGS_PAYLOAD)


def status_payload(**overrides) -> dict:
    payload = copy.deepcopy(STATUS_PAYLOAD)
    payload.update(overrides)
    return payload


def device_status(**overrides) -> DeviceStatus:
    return DeviceStatus.from_payload(status_payload(**overrides))


class FakeApi:
    """Records every call; set ``fail`` to a method name (or "all") to make it raise."""

    host = "fake-winder"

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.fail: set[str] = set()
        self.status_data = status_payload()
        self.settings_data = settings_payload()
        self.networks = [
            WiFiNetwork("Home", -52, True),
            WiFiNetwork("Cafe", -80, False),
            WiFiNetwork("Home", -71, True),
        ]

    def _call(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name in self.fail or "all" in self.fail:
            raise WatchWinderApiError(f"{name} failed: HTTP 500")

    async def status(self) -> DeviceStatus:
        self._call("status")
        return DeviceStatus.from_payload(self.status_data)

    async def settings(self):
        self._call("settings")
        return self.settings_data

    async def save_settings(self, configs) -> None:
        self._call("save_settings", dict(configs))

    async def start(self, motor) -> None:
        self._call("start", motor)

    async def stop(self, motor) -> None:
        self._call("stop", motor)

    async def test(self, motor, direction, duration) -> None:
        self._call("test", motor, direction, duration)

    async def wifi_scan(self):
        self._call("wifi_scan")
        return list(self.networks)

    async def wifi_connect(self, ssid, password) -> None:
        self._call("wifi_connect", ssid, password)


class Notifications(list):
    def __call__(self, message: str, kind: str) -> None:
        self.append((message, kind))
