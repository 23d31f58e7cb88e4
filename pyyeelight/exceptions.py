"""Exceptions raised by pyyeelight."""

from __future__ import annotations


class YeelightException(Exception):
    """Base exception for all pyyeelight errors."""


class YeelightConnectionFailed(YeelightException):
    """Connecting to the device failed."""


class YeelightConnectionLost(YeelightException):
    """The connection to the device was lost."""


class YeelightProtocolError(YeelightException):
    """A line could not be encoded or decoded."""


class YeelightInvalidOperation(YeelightException):
    """A command was issued that cannot be executed right now."""


class YeelightNotConnected(YeelightInvalidOperation):
    """A command was issued while the session has no connection."""


class YeelightMethodNotSupported(YeelightInvalidOperation):
    """The device does not list the method among its supported operations."""


class YeelightRequestTimeout(YeelightException):
    """No response arrived within the timeout the caller asked for."""


class YeelightConfigError(YeelightException):
    """Invalid device configuration."""
