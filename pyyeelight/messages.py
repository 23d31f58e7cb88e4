"""Typed envelopes for the Yeelight protocol.

Inbound lines decode into either a ResponseMessage (carries an id) or a
NotificationMessage (carries a method and a property map). CommandResult
is what callers get back from a request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .const import RESULT_OK
from .methods import CronType


@dataclass(frozen=True)
class CommandError:
    """Error object of a failed response."""

    code: int
    message: str


@dataclass(frozen=True)
class YeelightMessage:
    """Base class for inbound messages."""

    raw: str  # Line as received, without CRLF
    timestamp: datetime


@dataclass(frozen=True)
class ResponseMessage(YeelightMessage):
    """Response to a command.

    Formats:
    - {"id": 1, "result": ["ok"]}
    - {"id": 1, "error": {"code": -1, "message": "unsupported method"}}
    """

    id: int
    result: Any = None
    error: CommandError | None = None


@dataclass(frozen=True)
class NotificationMessage(YeelightMessage):
    """Unsolicited state change.

    Format: {"method": "props", "params": {"power": "on", "bright": "10"}}
    """

    method: str
    params: dict[str, Any] = field(default_factory=dict)


# Type alias for any inbound message
AnyMessage = ResponseMessage | NotificationMessage


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a command sent with execute_command_with_response."""

    id: int
    result: Any = None
    error: CommandError | None = None
    # Set when music mode answered on the device's behalf
    is_music_response: bool = False

    def is_ok(self) -> bool:
        """Return True if the device accepted the command."""
        if self.error is not None:
            return False
        if self.is_music_response:
            return True
        return (
            isinstance(self.result, list)
            and len(self.result) > 0
            and self.result[0] == RESULT_OK
        )


@dataclass(frozen=True)
class CronResult:
    """A cron job as reported by cron_get."""

    type: CronType
    delay: int  # Minutes left
    mix: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CronResult":
        """Build from one entry of a cron_get result."""
        return cls(
            type=CronType(int(data["type"])),
            delay=int(data["delay"]),
            mix=int(data.get("mix", 0)),
        )


def parse_cron_results(result: Any) -> list[CronResult]:
    """Convert a raw cron_get result into CronResult entries."""
    if not isinstance(result, list):
        raise ValueError(f"Unexpected cron_get result: {result!r}")
    return [CronResult.from_dict(entry) for entry in result]
