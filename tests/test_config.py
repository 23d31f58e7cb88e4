"""Tests for device configuration."""

import pytest

from pyyeelight import DeviceConfig, Method, YeelightConfigError
from pyyeelight.const import DEFAULT_PORT, POLL_INTERVAL


class TestFromDict:
    """Tests for settings validation."""

    def test_defaults(self):
        config = DeviceConfig.from_dict({"host": "192.168.1.50"})
        assert config.host == "192.168.1.50"
        assert config.port == DEFAULT_PORT
        assert config.supported_methods == []
        assert config.poll_interval == POLL_INTERVAL
        assert config.request_timeout is None

    def test_coerces_values(self):
        config = DeviceConfig.from_dict(
            {"host": "bulb.local", "port": "1234", "fw_ver": 18, "request_timeout": "5"}
        )
        assert config.port == 1234
        assert config.firmware_version == "18"
        assert config.request_timeout == 5.0

    def test_support_parsed(self):
        config = DeviceConfig.from_dict(
            {"host": "bulb.local", "support": ["get_prop", "set_power", "bogus"]}
        )
        assert config.supported_methods == [Method.GET_PROP, Method.SET_POWER]

    def test_extra_keys_removed(self):
        config = DeviceConfig.from_dict({"host": "bulb.local", "color": "red"})
        assert config.host == "bulb.local"

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"host": ""},
            {"host": "bulb.local", "port": 0},
            {"host": "bulb.local", "port": 70000},
            {"host": "bulb.local", "port": "abc"},
            {"host": "bulb.local", "poll_interval": 0},
            {"host": "bulb.local", "request_timeout": -1},
        ],
    )
    def test_invalid(self, data):
        with pytest.raises(YeelightConfigError):
            DeviceConfig.from_dict(data)


class TestFromCapabilities:
    """Tests for building a config from discovery data."""

    CAPABILITIES = {
        "Location": "yeelight://192.168.1.239:55443",
        "id": "0x000000000015243f",
        "model": "color",
        "fw_ver": "18",
        "support": "get_prop set_default set_power toggle set_bright",
        "power": "on",
    }

    def test_from_capabilities(self):
        config = DeviceConfig.from_capabilities(self.CAPABILITIES)
        assert config.host == "192.168.1.239"
        assert config.port == 55443
        assert config.device_id == "0x000000000015243f"
        assert config.model == "color"
        assert Method.SET_BRIGHTNESS in config.supported_methods
        assert len(config.supported_methods) == 5

    def test_overrides(self):
        config = DeviceConfig.from_capabilities(
            self.CAPABILITIES, request_timeout=2.5
        )
        assert config.request_timeout == 2.5

    def test_location_without_port(self):
        config = DeviceConfig.from_capabilities({"location": "yeelight://10.0.0.3"})
        assert config.port == DEFAULT_PORT

    @pytest.mark.parametrize(
        "location", [None, "", "http://10.0.0.3:55443", "yeelight://"]
    )
    def test_bad_location(self, location):
        with pytest.raises(YeelightConfigError):
            DeviceConfig.from_capabilities({"location": location})
