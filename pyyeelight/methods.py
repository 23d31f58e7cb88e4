"""Static name tables for Yeelight methods and properties.

The enum values are the literal names used on the wire. Lookup goes
through the functions at the bottom of this module so callers never
depend on enum member names.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Iterable

from .exceptions import YeelightInvalidOperation


class Method(str, Enum):
    """Remote methods exposed by a device."""

    GET_PROP = "get_prop"
    SET_POWER = "set_power"
    TOGGLE = "toggle"
    DEV_TOGGLE = "dev_toggle"
    SET_DEFAULT = "set_default"
    SET_BRIGHTNESS = "set_bright"
    SET_RGB_COLOR = "set_rgb"
    SET_HSV_COLOR = "set_hsv"
    SET_COLOR_TEMPERATURE = "set_ct_abx"
    SET_SCENE = "set_scene"
    START_COLOR_FLOW = "start_cf"
    STOP_COLOR_FLOW = "stop_cf"
    SET_ADJUST = "set_adjust"
    ADJUST_BRIGHTNESS = "adjust_bright"
    ADJUST_COLOR = "adjust_color"
    ADJUST_COLOR_TEMPERATURE = "adjust_ct"
    ADD_CRON = "cron_add"
    GET_CRON = "cron_get"
    DELETE_CRON = "cron_del"
    SET_MUSIC_MODE = "set_music"
    SET_NAME = "set_name"

    # Background light
    BG_SET_POWER = "bg_set_power"
    BG_TOGGLE = "bg_toggle"
    BG_SET_DEFAULT = "bg_set_default"
    BG_SET_BRIGHTNESS = "bg_set_bright"
    BG_SET_RGB_COLOR = "bg_set_rgb"
    BG_SET_HSV_COLOR = "bg_set_hsv"
    BG_SET_COLOR_TEMPERATURE = "bg_set_ct_abx"
    BG_SET_SCENE = "bg_set_scene"
    BG_START_COLOR_FLOW = "bg_start_cf"
    BG_STOP_COLOR_FLOW = "bg_stop_cf"
    BG_SET_ADJUST = "bg_set_adjust"
    BG_ADJUST_BRIGHTNESS = "bg_adjust_bright"
    BG_ADJUST_COLOR = "bg_adjust_color"
    BG_ADJUST_COLOR_TEMPERATURE = "bg_adjust_ct"


class Property(str, Enum):
    """Device properties readable with get_prop and pushed in notifications."""

    POWER = "power"
    BRIGHTNESS = "bright"
    COLOR_TEMPERATURE = "ct"
    RGB = "rgb"
    HUE = "hue"
    SATURATION = "sat"
    COLOR_MODE = "color_mode"
    FLOWING = "flowing"
    DELAY_OFF = "delayoff"
    FLOW_PARAMS = "flow_params"
    MUSIC_ON = "music_on"
    NAME = "name"
    BG_POWER = "bg_power"
    BG_FLOWING = "bg_flowing"
    BG_FLOW_PARAMS = "bg_flow_params"
    BG_COLOR_TEMPERATURE = "bg_ct"
    BG_COLOR_MODE = "bg_lmode"
    BG_BRIGHTNESS = "bg_bright"
    BG_RGB = "bg_rgb"
    BG_HUE = "bg_hue"
    BG_SATURATION = "bg_sat"
    NIGHT_LIGHT_BRIGHTNESS = "nl_br"
    ACTIVE_MODE = "active_mode"


# Everything the initial sync asks for, in request order
ALL_PROPERTIES: tuple[Property, ...] = tuple(Property)


class LightType(Enum):
    """Which light of the device a command addresses."""

    MAIN = "main"
    BACKGROUND = "background"


class PowerOnMode(IntEnum):
    """Mode the light switches to when powered on."""

    NORMAL = 0
    COLOR_TEMPERATURE = 1
    RGB = 2
    HSV = 3
    COLOR_FLOW = 4
    NIGHT_LIGHT = 5


class CronType(IntEnum):
    """Cron job types. The protocol only defines the power-off timer."""

    POWER_OFF = 0


class MusicAction(IntEnum):
    """Argument of set_music."""

    OFF = 0
    ON = 1


class FlowEndAction(IntEnum):
    """What the light does when a color flow ends."""

    RESTORE = 0
    STAY = 1
    TURN_OFF = 2


class AdjustAction(str, Enum):
    """Action of set_adjust."""

    INCREASE = "increase"
    DECREASE = "decrease"
    CIRCLE = "circle"


class AdjustProperty(str, Enum):
    """Property of set_adjust."""

    BRIGHTNESS = "bright"
    COLOR_TEMPERATURE = "ct"
    COLOR = "color"


def method_name(method: Method | str) -> str:
    """Return the wire name of a method."""
    return parse_method(method).value


def parse_method(name: Method | str) -> Method:
    """Return the Method for a wire name.

    Raises:
        YeelightInvalidOperation: If the name is not a known method
    """
    if isinstance(name, Method):
        return name
    try:
        return Method(name)
    except ValueError as err:
        raise YeelightInvalidOperation(f"Unknown method '{name}'") from err


def property_name(prop: Property | str) -> str:
    """Return the wire name of a property."""
    if isinstance(prop, Property):
        return prop.value
    return prop


def background_method(method: Method) -> Method:
    """Return the background-light variant of a main-light method."""
    try:
        return Method(f"bg_{method.value}")
    except ValueError as err:
        raise YeelightInvalidOperation(
            f"Method '{method.value}' has no background variant"
        ) from err


def method_for_light(method: Method, light_type: LightType) -> Method:
    """Select the method addressing the given light."""
    if light_type == LightType.BACKGROUND:
        return background_method(method)
    return method


def parse_supported_methods(support: str | Iterable[str] | None) -> list[Method]:
    """Parse the 'support' capability into a list of known methods.

    Accepts the space separated string announced by the device or any
    iterable of names. Unknown names are dropped.
    """
    if not support:
        return []
    names = support.split() if isinstance(support, str) else support

    methods = []
    for name in names:
        try:
            methods.append(Method(name))
        except ValueError:
            continue
    return methods
