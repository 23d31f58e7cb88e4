"""Pytest configuration for pyyeelight tests."""

import pytest

from pyyeelight import YeelightDevice

from .fake_bulb import FakeBulb


@pytest.fixture
async def bulb():
    """Create and start a fake bulb."""
    bulb = FakeBulb(port=0)
    await bulb.start()
    yield bulb
    await bulb.stop()


@pytest.fixture
async def device(bulb):
    """Create a session for the fake bulb (not yet connected)."""
    device = YeelightDevice("127.0.0.1", bulb.port, poll_interval=0.01)
    yield device
    await device.disconnect()
