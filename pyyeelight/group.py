"""Fan-out helper for controlling several devices at once."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, Sequence

from .device import YeelightDevice
from .methods import (
    AdjustAction,
    AdjustProperty,
    CronType,
    FlowEndAction,
    LightType,
    PowerOnMode,
)

_LOGGER = logging.getLogger(__name__)


class DeviceGroup(list):
    """A list of devices driven together.

    Every command runs on all devices concurrently and succeeds only if
    it succeeded on each of them.
    """

    def __init__(
        self, devices: Iterable[YeelightDevice] = (), name: str | None = None
    ) -> None:
        """Initialize the group."""
        super().__init__(devices)
        self.name = name

    def __str__(self) -> str:
        """Return a readable description."""
        return f"{self.name or 'group'} ({len(self)} devices)"

    async def process(
        self, action: Callable[[YeelightDevice], Awaitable[bool]]
    ) -> bool:
        """Run an action on every device.

        Exceptions raised for one device are logged and count as failure
        for that device only.
        """
        results = await asyncio.gather(
            *(action(device) for device in self), return_exceptions=True
        )
        ok = True
        for device, result in zip(self, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                _LOGGER.warning("Command failed on %s: %s", device, result)
                ok = False
            elif not result:
                ok = False
        return ok

    async def connect(self) -> bool:
        """Connect every device."""
        return await self.process(lambda d: d.connect())

    async def disconnect(self) -> None:
        """Disconnect every device."""
        await asyncio.gather(*(device.disconnect() for device in self))

    async def set_power(
        self,
        state: bool = True,
        smooth: int | None = None,
        mode: PowerOnMode = PowerOnMode.NORMAL,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Switch all lights on or off."""
        return await self.process(lambda d: d.set_power(state, smooth, mode, light_type))

    async def turn_on(
        self,
        smooth: int | None = None,
        mode: PowerOnMode = PowerOnMode.NORMAL,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Switch all lights on."""
        return await self.process(lambda d: d.turn_on(smooth, mode, light_type))

    async def turn_off(
        self, smooth: int | None = None, light_type: LightType = LightType.MAIN
    ) -> bool:
        """Switch all lights off."""
        return await self.process(lambda d: d.turn_off(smooth, light_type))

    async def toggle(self, light_type: LightType = LightType.MAIN) -> bool:
        """Toggle all lights."""
        return await self.process(lambda d: d.toggle(light_type))

    async def dev_toggle(self) -> bool:
        """Toggle main and background lights of every device."""
        return await self.process(lambda d: d.dev_toggle())

    async def set_brightness(
        self,
        value: int,
        smooth: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Set brightness on all lights."""
        return await self.process(lambda d: d.set_brightness(value, smooth, light_type))

    async def set_rgb_color(
        self,
        r: int,
        g: int,
        b: int,
        smooth: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Set an RGB color on all lights."""
        return await self.process(lambda d: d.set_rgb_color(r, g, b, smooth, light_type))

    async def set_hsv_color(
        self,
        hue: int,
        sat: int,
        smooth: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Set an HSV color on all lights."""
        return await self.process(lambda d: d.set_hsv_color(hue, sat, smooth, light_type))

    async def set_color_temperature(
        self,
        temperature: int,
        smooth: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Set the color temperature on all lights."""
        return await self.process(
            lambda d: d.set_color_temperature(temperature, smooth, light_type)
        )

    async def set_default(self, light_type: LightType = LightType.MAIN) -> bool:
        """Save the current state of every light as default."""
        return await self.process(lambda d: d.set_default(light_type))

    async def set_scene(
        self, scene: Sequence[Any], light_type: LightType = LightType.MAIN
    ) -> bool:
        """Apply a scene on all lights."""
        return await self.process(lambda d: d.set_scene(scene, light_type))

    async def start_color_flow(
        self,
        count: int,
        end_action: FlowEndAction,
        expression: str,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Start the same color flow on all lights."""
        return await self.process(
            lambda d: d.start_color_flow(count, end_action, expression, light_type)
        )

    async def stop_color_flow(self, light_type: LightType = LightType.MAIN) -> bool:
        """Stop color flows on all lights."""
        return await self.process(lambda d: d.stop_color_flow(light_type))

    async def set_adjust(
        self,
        action: AdjustAction,
        prop: AdjustProperty,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Step a property on all lights."""
        return await self.process(lambda d: d.set_adjust(action, prop, light_type))

    async def adjust_brightness(
        self,
        percent: int,
        duration: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Change brightness on all lights by a relative percentage."""
        return await self.process(
            lambda d: d.adjust_brightness(percent, duration, light_type)
        )

    async def adjust_color(
        self,
        percent: int,
        duration: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Change color on all lights by a relative percentage."""
        return await self.process(lambda d: d.adjust_color(percent, duration, light_type))

    async def adjust_color_temperature(
        self,
        percent: int,
        duration: int | None = None,
        light_type: LightType = LightType.MAIN,
    ) -> bool:
        """Change color temperature on all lights by a relative percentage."""
        return await self.process(
            lambda d: d.adjust_color_temperature(percent, duration, light_type)
        )

    async def cron_add(
        self, value: int, cron_type: CronType = CronType.POWER_OFF
    ) -> bool:
        """Add the same cron job on every device."""
        return await self.process(lambda d: d.cron_add(value, cron_type))

    async def cron_delete(self, cron_type: CronType = CronType.POWER_OFF) -> bool:
        """Delete a cron job on every device."""
        return await self.process(lambda d: d.cron_delete(cron_type))

    async def set_name(self, name: str) -> bool:
        """Give every device the same name."""
        return await self.process(lambda d: d.set_name(name))

    async def start_music_mode(self, host: str | None = None) -> bool:
        """Enable music mode on every device, each on a free local port."""
        return await self.process(lambda d: d.start_music_mode(host, port=0))

    async def stop_music_mode(self) -> bool:
        """Disable music mode on every device."""
        return await self.process(lambda d: d.stop_music_mode())
