from __future__ import annotations

from urllib.parse import urlsplit

import voluptuous as vol

from homeassistant import config_entries
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import WatchWinderApi, WatchWinderError
from .const import (
    CONF_HOST,
    CONF_NAME,
    CONF_RESCAN_ON_REENTRY,
    DEFAULT_HOST,
    DEFAULT_NAME,
    DOMAIN,
)
from .models import DeviceStatus

USER_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST, default=DEFAULT_HOST): str,
        vol.Optional(CONF_NAME, default=""): str,
    }
)


def normalize_host(host: str) -> str:
    """Bare lowercase hostname or address: no scheme, path or trailing dot."""
    host = host.strip()
    if "://" in host:
        host = urlsplit(host).netloc
    host = host.split("/", 1)[0]
    return host.rstrip(".").lower()


def device_unique_id(host: str, status: DeviceStatus) -> str:
    """The address the winder reports on the home network, so one device added by
    name and by IP is one entry. The setup access point address is shared by every
    winder, so in provisioning mode the normalized host is used instead."""
    if status.provisioning_mode or not status.ip_address:
        return normalize_host(host)
    return status.ip_address


async def _async_fetch_status(hass: HomeAssistant, host: str) -> DeviceStatus:
    api = WatchWinderApi(async_get_clientsession(hass), host)
    status = await api.status()
    if not status.ip_address:
        raise WatchWinderError("No IP address reported")
    return status


class WatchWinderConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    VERSION = 1

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: config_entries.ConfigEntry):
        return WatchWinderOptionsFlow()

    async def async_step_user(self, user_input=None):
        if user_input is None:
            return self.async_show_form(step_id="user", data_schema=USER_SCHEMA)

        host = normalize_host(user_input[CONF_HOST])
        try:
            status = await _async_fetch_status(self.hass, host)
        except WatchWinderError:
            return self._async_show_user_error(user_input, "cannot_connect")
        except Exception:
            return self._async_show_user_error(user_input, "unknown")

        await self.async_set_unique_id(device_unique_id(host, status))
        self._abort_if_unique_id_configured(updates={CONF_HOST: host})

        data = {CONF_HOST: host}
        if name := user_input.get(CONF_NAME):
            data[CONF_NAME] = name
        return self.async_create_entry(title=name or DEFAULT_NAME, data=data)

    @callback
    def _async_show_user_error(self, user_input: dict, error: str):
        return self.async_show_form(
            step_id="user",
            data_schema=self.add_suggested_values_to_schema(USER_SCHEMA, user_input),
            errors={"base": error},
        )


class WatchWinderOptionsFlow(config_entries.OptionsFlow):
    async def async_step_init(self, user_input=None):
        if user_input is not None:
            return self.async_create_entry(data=user_input)

        schema = vol.Schema(
            {
                vol.Optional(
                    CONF_RESCAN_ON_REENTRY,
                    default=self.config_entry.options.get(CONF_RESCAN_ON_REENTRY, False),
                ): bool,
            }
        )
        return self.async_show_form(step_id="init", data_schema=schema)
