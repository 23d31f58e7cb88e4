"""State models for a device session."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Iterator, Mapping

from .exceptions import YeelightProtocolError
from .methods import Property, property_name


class SessionState(Enum):
    """Lifecycle state of a device session."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    MUSIC_MODE = "music_mode"


class PropertyStore:
    """Last known property values of a device.

    Values are kept as received (strings, numbers or booleans). Entries
    are only ever overwritten, never removed.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        """Initialize the store."""
        self._lock = threading.Lock()
        self._values: dict[str, Any] = {}
        if initial:
            self.update(initial)

    def get(self, prop: Property | str, default: Any = None) -> Any:
        """Return the value of a property, or default if unknown."""
        with self._lock:
            return self._values.get(property_name(prop), default)

    def set(self, prop: Property | str, value: Any) -> None:
        """Overwrite one property.

        Raises:
            ValueError: If value is None
        """
        if value is None:
            raise ValueError(f"Property '{property_name(prop)}' cannot be None")
        with self._lock:
            self._values[property_name(prop)] = value

    def update(self, values: Mapping[Property | str, Any]) -> None:
        """Overwrite several properties at once. None values are skipped."""
        with self._lock:
            for prop, value in values.items():
                if value is not None:
                    self._values[property_name(prop)] = value

    def snapshot(self) -> dict[str, Any]:
        """Return a copy of all known values."""
        with self._lock:
            return dict(self._values)

    def __contains__(self, prop: object) -> bool:
        """Return True if a value is known for the property."""
        if not isinstance(prop, (Property, str)):
            return False
        with self._lock:
            return property_name(prop) in self._values

    def __iter__(self) -> Iterator[str]:
        """Iterate over known property names."""
        return iter(self.snapshot())

    def __len__(self) -> int:
        """Return the number of known properties."""
        with self._lock:
            return len(self._values)


@dataclass
class ConnectionHealth:
    """Health metrics for a device connection."""

    connected_at: datetime | None = None
    last_message_time: datetime | None = None
    reconnect_count: int = 0
    error_count: int = 0
    parse_error_count: int = 0
    notification_count: int = 0
    last_error: str | None = None

    def record_connect(self) -> None:
        """Record a successful connection."""
        self.connected_at = datetime.now()

    def record_message(self) -> None:
        """Record that a message was received."""
        self.last_message_time = datetime.now()

    def record_notification(self) -> None:
        """Record that a notification was received."""
        self.notification_count += 1
        self.last_message_time = datetime.now()

    def record_reconnect(self) -> None:
        """Record a reconnection event."""
        self.reconnect_count += 1
        self.connected_at = datetime.now()

    def record_error(self, error: Exception) -> None:
        """Record an error reported by the receive loop."""
        self.error_count += 1
        if isinstance(error, YeelightProtocolError):
            self.parse_error_count += 1
        self.last_error = str(error)
