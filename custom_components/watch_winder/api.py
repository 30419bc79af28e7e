from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp
import voluptuous as vol

from .const import REQUEST_TIMEOUT_SECONDS
from .models import (
    DeviceStatus,
    Direction,
    MotorConfig,
    MotorSlot,
    WiFiNetwork,
    parse_networks,
    settings_payload,
)

_LOGGER = logging.getLogger(__name__)


class WatchWinderError(Exception):
    """Base class for every Watch Winder failure."""


class WatchWinderApiError(WatchWinderError):
    """Raised on any transport error or non-success response."""


class WatchWinderValidationError(WatchWinderError):
    """Raised when input is rejected before a request is sent."""


class WatchWinderMalformedResponse(WatchWinderError):
    """Raised when a response is missing expected fields."""


class WatchWinderApi:
    def __init__(
        self, session: aiohttp.ClientSession, host: str, timeout: float = REQUEST_TIMEOUT_SECONDS
    ) -> None:
        self._session = session
        self._host = host.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    @property
    def host(self) -> str:
        return self._host

    @property
    def base_url(self) -> str:
        if "://" in self._host:
            return f"{self._host}/api"
        return f"http://{self._host}/api"

    async def _request(self, method: str, path: str, data: dict[str, Any] | None = None) -> Any:
        # Requests are not serialized: polls and user actions may overlap.
        url = f"{self.base_url}{path}"
        _LOGGER.debug("%s %s %s", method, path, data)
        try:
            async with self._session.request(
                method, url, json=data, timeout=self._timeout
            ) as resp:
                if resp.status != 200:
                    raise WatchWinderApiError(f"{method} {path} failed: HTTP {resp.status}")
                return await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise WatchWinderApiError(f"{method} {path} failed: {e}") from e
        except ValueError as e:
            raise WatchWinderMalformedResponse(f"{method} {path} returned invalid JSON: {e}") from e

    async def status(self) -> DeviceStatus:
        data = await self._request("GET", "/status")
        try:
            return DeviceStatus.from_payload(data)
        except vol.Invalid as e:
            raise WatchWinderMalformedResponse(f"GET /status: {e}") from e

    async def settings(self) -> Any:
        """Return the raw settings payload; ConfigStore.load validates it."""
        return await self._request("GET", "/settings")

    async def save_settings(self, configs: dict[MotorSlot, MotorConfig]) -> None:
        await self._request("POST", "/settings", settings_payload(configs))

    async def start(self, motor: int) -> None:
        await self._request("POST", "/start", {"motor": int(motor)})

    async def stop(self, motor: int) -> None:
        await self._request("POST", "/stop", {"motor": int(motor)})

    async def test(self, motor: MotorSlot, direction: Direction, duration: int) -> None:
        await self._request(
            "POST",
            "/test",
            {"motor": int(motor), "direction": int(direction), "duration": duration},
        )

    async def wifi_scan(self) -> list[WiFiNetwork]:
        data = await self._request("GET", "/wifi/scan")
        try:
            return parse_networks(data)
        except vol.Invalid as e:
            raise WatchWinderMalformedResponse(f"GET /wifi/scan: {e}") from e

    async def wifi_connect(self, ssid: str, password: str) -> None:
        await self._request("POST", "/wifi/connect", {"ssid": ssid, "password": password})
