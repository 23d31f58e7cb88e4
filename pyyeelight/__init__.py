"""PyYeelight - Async client for Yeelight LAN-controlled lights.

This package provides a typed interface for controlling Yeelight bulbs
over their line-delimited JSON protocol on TCP port 55443.

Main components:
- YeelightDevice: Session with one device (commands, notifications,
  reconnect, music mode)
- DeviceGroup: Run the same command on several devices
- Wire codec: encode_command, decode_line, MessageParser
- DeviceConfig: Validated configuration built from settings or discovery

Example:
    from pyyeelight import YeelightDevice

    def on_notification(msg):
        print(f"Changed: {msg.params}")

    bulb = YeelightDevice("192.168.1.50", notification_callback=on_notification)
    await bulb.connect()
    await bulb.set_rgb_color(255, 0, 0, smooth=500)
    await bulb.disconnect()
"""

from .color import compute_rgb_color, split_rgb_color
from .config import DEVICE_SCHEMA, DeviceConfig
from .device import YeelightDevice
from .exceptions import (
    YeelightConfigError,
    YeelightConnectionFailed,
    YeelightConnectionLost,
    YeelightException,
    YeelightInvalidOperation,
    YeelightMethodNotSupported,
    YeelightNotConnected,
    YeelightProtocolError,
    YeelightRequestTimeout,
)
from .group import DeviceGroup
from .messages import (
    AnyMessage,
    CommandError,
    CommandResult,
    CronResult,
    NotificationMessage,
    ResponseMessage,
)
from .methods import (
    ALL_PROPERTIES,
    AdjustAction,
    AdjustProperty,
    CronType,
    FlowEndAction,
    LightType,
    Method,
    MusicAction,
    PowerOnMode,
    Property,
    method_name,
    parse_method,
    parse_supported_methods,
)
from .models import ConnectionHealth, SessionState
from .protocol import MessageParser, decode_line, encode_command

__all__ = [
    # Session
    "YeelightDevice",
    "DeviceGroup",
    "SessionState",
    "ConnectionHealth",
    # Configuration
    "DEVICE_SCHEMA",
    "DeviceConfig",
    # Messages
    "AnyMessage",
    "CommandError",
    "CommandResult",
    "CronResult",
    "NotificationMessage",
    "ResponseMessage",
    # Name tables
    "ALL_PROPERTIES",
    "AdjustAction",
    "AdjustProperty",
    "CronType",
    "FlowEndAction",
    "LightType",
    "Method",
    "MusicAction",
    "PowerOnMode",
    "Property",
    "method_name",
    "parse_method",
    "parse_supported_methods",
    # Protocol utilities
    "MessageParser",
    "decode_line",
    "encode_command",
    "compute_rgb_color",
    "split_rgb_color",
    # Exceptions
    "YeelightConfigError",
    "YeelightConnectionFailed",
    "YeelightConnectionLost",
    "YeelightException",
    "YeelightInvalidOperation",
    "YeelightMethodNotSupported",
    "YeelightNotConnected",
    "YeelightProtocolError",
    "YeelightRequestTimeout",
]
