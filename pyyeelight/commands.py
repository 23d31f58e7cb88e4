"""Command builders for the Yeelight protocol.

Each builder returns the method to call and its ordered parameter list,
ready for YeelightDevice.execute_command_with_response. Builders only
shape parameters; they never touch the network.
"""

from __future__ import annotations

from typing import Any, Sequence

from .color import compute_rgb_color
from .const import (
    EFFECT_SMOOTH,
    EFFECT_SUDDEN,
    MIN_SMOOTH_DURATION,
    POWER_OFF,
    POWER_ON,
)
from .methods import (
    AdjustAction,
    AdjustProperty,
    CronType,
    FlowEndAction,
    LightType,
    Method,
    MusicAction,
    PowerOnMode,
    Property,
    method_for_light,
    property_name,
)

Command = tuple[Method, list[Any]]


def smooth_params(smooth: int | None) -> list[Any]:
    """Build the effect/duration pair.

    No duration means a sudden change. Durations shorter than the
    device minimum are raised to it.
    """
    if smooth is None:
        return [EFFECT_SUDDEN, 0]
    return [EFFECT_SMOOTH, max(int(smooth), MIN_SMOOTH_DURATION)]


def percent_value(percent: int) -> int:
    """Clamp a relative adjustment to -100..100."""
    return max(-100, min(100, int(percent)))


# =============================================================================
# Power
# =============================================================================


def set_power(
    state: bool = True,
    smooth: int | None = None,
    mode: PowerOnMode = PowerOnMode.NORMAL,
    light_type: LightType = LightType.MAIN,
) -> Command:
    """Build set_power.

    Args:
        state: True to switch on
        smooth: Transition duration in milliseconds, None for sudden
        mode: Mode to switch to when powering on
        light_type: Light addressed
    """
    params: list[Any] = [POWER_ON if state else POWER_OFF]
    params += smooth_params(smooth)
    if state:
        params.append(int(mode))
    return method_for_light(Method.SET_POWER, light_type), params


def toggle(light_type: LightType = LightType.MAIN) -> Command:
    """Build toggle."""
    return method_for_light(Method.TOGGLE, light_type), []


def dev_toggle() -> Command:
    """Build dev_toggle (toggles main and background light together)."""
    return Method.DEV_TOGGLE, []


def set_default(light_type: LightType = LightType.MAIN) -> Command:
    """Build set_default (save current state as power-on default)."""
    return method_for_light(Method.SET_DEFAULT, light_type), []


# =============================================================================
# Brightness and color
# =============================================================================


def set_brightness(
    value: int, smooth: int | None = None, light_type: LightType = LightType.MAIN
) -> Command:
    """Build set_bright. Value is 1-100."""
    params: list[Any] = [int(value)] + smooth_params(smooth)
    return method_for_light(Method.SET_BRIGHTNESS, light_type), params


def set_rgb_color(
    r: int,
    g: int,
    b: int,
    smooth: int | None = None,
    light_type: LightType = LightType.MAIN,
) -> Command:
    """Build set_rgb from separate channels."""
    params: list[Any] = [compute_rgb_color(r, g, b)] + smooth_params(smooth)
    return method_for_light(Method.SET_RGB_COLOR, light_type), params


def set_hsv_color(
    hue: int,
    sat: int,
    smooth: int | None = None,
    light_type: LightType = LightType.MAIN,
) -> Command:
    """Build set_hsv. Hue is 0-359, saturation 0-100."""
    params: list[Any] = [int(hue), int(sat)] + smooth_params(smooth)
    return method_for_light(Method.SET_HSV_COLOR, light_type), params


def set_color_temperature(
    temperature: int,
    smooth: int | None = None,
    light_type: LightType = LightType.MAIN,
) -> Command:
    """Build set_ct_abx. Temperature in Kelvin."""
    params: list[Any] = [int(temperature)] + smooth_params(smooth)
    return method_for_light(Method.SET_COLOR_TEMPERATURE, light_type), params


# =============================================================================
# Adjustments
# =============================================================================


def set_adjust(
    action: AdjustAction,
    prop: AdjustProperty,
    light_type: LightType = LightType.MAIN,
) -> Command:
    """Build set_adjust."""
    return method_for_light(Method.SET_ADJUST, light_type), [
        AdjustAction(action).value,
        AdjustProperty(prop).value,
    ]


def _adjust(
    method: Method, percent: int, duration: int | None, light_type: LightType
) -> Command:
    params = [percent_value(percent), max(duration or 0, MIN_SMOOTH_DURATION)]
    return method_for_light(method, light_type), params


def adjust_brightness(
    percent: int, duration: int | None = None, light_type: LightType = LightType.MAIN
) -> Command:
    """Build adjust_bright."""
    return _adjust(Method.ADJUST_BRIGHTNESS, percent, duration, light_type)


def adjust_color(
    percent: int, duration: int | None = None, light_type: LightType = LightType.MAIN
) -> Command:
    """Build adjust_color."""
    return _adjust(Method.ADJUST_COLOR, percent, duration, light_type)


def adjust_color_temperature(
    percent: int, duration: int | None = None, light_type: LightType = LightType.MAIN
) -> Command:
    """Build adjust_ct."""
    return _adjust(Method.ADJUST_COLOR_TEMPERATURE, percent, duration, light_type)


# =============================================================================
# Scenes and flows
# =============================================================================


def set_scene(
    scene: Sequence[Any], light_type: LightType = LightType.MAIN
) -> Command:
    """Build set_scene from a pre-built parameter list.

    Example: ["color", 65280, 70] or ["cf", 0, 0, "500,1,255,100"]
    """
    return method_for_light(Method.SET_SCENE, light_type), list(scene)


def start_color_flow(
    count: int,
    end_action: FlowEndAction,
    expression: str,
    light_type: LightType = LightType.MAIN,
) -> Command:
    """Build start_cf.

    Args:
        count: Number of state changes to run, 0 for infinite
        end_action: What to do when the flow ends
        expression: Flow expression, e.g. "1000,2,2700,100,500,1,255,10"
    """
    params: list[Any] = [int(count), int(end_action), expression]
    return method_for_light(Method.START_COLOR_FLOW, light_type), params


def stop_color_flow(light_type: LightType = LightType.MAIN) -> Command:
    """Build stop_cf."""
    return method_for_light(Method.STOP_COLOR_FLOW, light_type), []


# =============================================================================
# Cron
# =============================================================================


def cron_add(value: int, cron_type: CronType = CronType.POWER_OFF) -> Command:
    """Build cron_add. Value is the delay in minutes."""
    return Method.ADD_CRON, [int(cron_type), int(value)]


def cron_get(cron_type: CronType = CronType.POWER_OFF) -> Command:
    """Build cron_get."""
    return Method.GET_CRON, [int(cron_type)]


def cron_delete(cron_type: CronType = CronType.POWER_OFF) -> Command:
    """Build cron_del."""
    return Method.DELETE_CRON, [int(cron_type)]


# =============================================================================
# Misc
# =============================================================================


def set_music(
    action: MusicAction, host: str | None = None, port: int | None = None
) -> Command:
    """Build set_music. Host and port are required to switch on."""
    params: list[Any] = [int(action)]
    if action == MusicAction.ON:
        if not host or not port:
            raise ValueError("Music mode needs the host and port to dial")
        params += [host, int(port)]
    return Method.SET_MUSIC_MODE, params


def set_name(name: str) -> Command:
    """Build set_name."""
    return Method.SET_NAME, [name]


def get_prop(props: Sequence[Property | str]) -> Command:
    """Build get_prop for the given properties."""
    return Method.GET_PROP, [property_name(p) for p in props]
