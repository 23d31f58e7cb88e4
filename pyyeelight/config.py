"""Validated device configuration.

A DeviceConfig describes one resolved device: where it is and what it
supports. It is built either from plain settings or from the capability
mapping a discovery step produces.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import urlparse

import voluptuous as vol

from .const import DEFAULT_PORT, POLL_INTERVAL
from .exceptions import YeelightConfigError
from .methods import Method, parse_supported_methods

CONF_HOST = "host"
CONF_PORT = "port"
CONF_ID = "id"
CONF_MODEL = "model"
CONF_FW_VER = "fw_ver"
CONF_SUPPORT = "support"
CONF_POLL_INTERVAL = "poll_interval"
CONF_REQUEST_TIMEOUT = "request_timeout"

# Discovery capability keys
CAP_LOCATION = "location"
LOCATION_SCHEME = "yeelight"

_positive_float = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))

DEVICE_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST): vol.All(str, vol.Length(min=1)),
        vol.Optional(CONF_PORT, default=DEFAULT_PORT): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=65535)
        ),
        vol.Optional(CONF_ID): vol.Any(None, str),
        vol.Optional(CONF_MODEL): vol.Any(None, str),
        vol.Optional(CONF_FW_VER): vol.Any(None, vol.Coerce(str)),
        vol.Optional(CONF_SUPPORT, default=[]): vol.All(
            vol.Any(None, str, [str]), parse_supported_methods
        ),
        vol.Optional(CONF_POLL_INTERVAL, default=POLL_INTERVAL): _positive_float,
        vol.Optional(CONF_REQUEST_TIMEOUT, default=None): vol.Any(
            None, _positive_float
        ),
    },
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True)
class DeviceConfig:
    """Configuration for one device session."""

    host: str
    port: int = DEFAULT_PORT
    device_id: str | None = None
    model: str | None = None
    firmware_version: str | None = None
    supported_methods: list[Method] = field(default_factory=list)
    poll_interval: float = POLL_INTERVAL
    request_timeout: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeviceConfig":
        """Validate settings and build a config.

        Raises:
            YeelightConfigError: If the settings are invalid
        """
        try:
            conf = DEVICE_SCHEMA(dict(data))
        except vol.Invalid as err:
            raise YeelightConfigError(f"Invalid device configuration: {err}") from err

        return cls(
            host=conf[CONF_HOST],
            port=conf[CONF_PORT],
            device_id=conf.get(CONF_ID),
            model=conf.get(CONF_MODEL),
            firmware_version=conf.get(CONF_FW_VER),
            supported_methods=conf[CONF_SUPPORT],
            poll_interval=conf[CONF_POLL_INTERVAL],
            request_timeout=conf[CONF_REQUEST_TIMEOUT],
        )

    @classmethod
    def from_capabilities(
        cls, capabilities: Mapping[str, Any], **overrides: Any
    ) -> "DeviceConfig":
        """Build a config from a discovery capability mapping.

        Example:
            {"Location": "yeelight://192.168.1.50:55443", "id": "0x0000000002dfb19a",
             "model": "color", "fw_ver": "18", "support": "get_prop set_power ..."}

        Raises:
            YeelightConfigError: If the location is missing or malformed
        """
        caps = {str(key).lower(): value for key, value in capabilities.items()}
        location = caps.get(CAP_LOCATION)
        if not location:
            raise YeelightConfigError("Capabilities have no location")

        parsed = urlparse(str(location))
        if parsed.scheme != LOCATION_SCHEME or not parsed.hostname:
            raise YeelightConfigError(f"Unexpected location: {location}")

        data: dict[str, Any] = {
            CONF_HOST: parsed.hostname,
            CONF_PORT: parsed.port or DEFAULT_PORT,
            CONF_ID: caps.get(CONF_ID),
            CONF_MODEL: caps.get(CONF_MODEL),
            CONF_FW_VER: caps.get(CONF_FW_VER),
            CONF_SUPPORT: caps.get(CONF_SUPPORT),
        }
        data.update(overrides)
        return cls.from_dict(data)
