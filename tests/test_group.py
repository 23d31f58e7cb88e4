"""Tests for DeviceGroup fan-out."""

import pytest

from pyyeelight import DeviceGroup, Property, YeelightDevice

from .fake_bulb import FakeBulb


@pytest.fixture
async def bulbs():
    """Two running fake bulbs."""
    first, second = FakeBulb(port=0), FakeBulb(port=0)
    await first.start()
    await second.start()
    yield first, second
    await first.stop()
    await second.stop()


@pytest.fixture
async def group(bulbs):
    """A group with one session per fake bulb."""
    group = DeviceGroup(
        [YeelightDevice("127.0.0.1", bulb.port, poll_interval=0.01) for bulb in bulbs],
        name="living room",
    )
    yield group
    await group.disconnect()


class TestDeviceGroup:
    """Tests for DeviceGroup."""

    @pytest.mark.asyncio
    async def test_connect_and_command_all(self, bulbs, group):
        assert await group.connect()
        assert await group.set_brightness(30)
        for bulb in bulbs:
            assert bulb.received[-1]["method"] == "set_bright"
        assert all(device[Property.BRIGHTNESS] == "30" for device in group)

    @pytest.mark.asyncio
    async def test_one_failure_fails_group(self, bulbs, group):
        bulbs[1].unsupported.add("set_scene")
        assert await group.connect()
        assert not await group.set_scene(["color", 65280, 70])
        assert "set_scene" in bulbs[0].methods_received

    @pytest.mark.asyncio
    async def test_exception_on_one_device_is_contained(self, bulbs, group):
        assert await group.connect()
        await group[1].disconnect()
        # The disconnected device raises YeelightNotConnected
        assert not await group.turn_on()
        assert group[0][Property.POWER] == "on"

    @pytest.mark.asyncio
    async def test_empty_group(self):
        group = DeviceGroup()
        assert await group.toggle()
        assert str(group) == "group (0 devices)"

    @pytest.mark.asyncio
    async def test_str(self, group):
        assert str(group) == "living room (2 devices)"
