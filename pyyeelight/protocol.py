"""Wire codec for the Yeelight LAN protocol.

This module handles:
- Encoding commands into CRLF-terminated JSON lines
- Message framing (CRLF-delimited)
- Classifying inbound lines as responses or notifications

All parsing is stateless apart from the partial-line buffer kept by
MessageParser.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Sequence

from .const import CRLF, MAX_LINE_LENGTH
from .exceptions import YeelightProtocolError
from .messages import (
    AnyMessage,
    CommandError,
    NotificationMessage,
    ResponseMessage,
)
from .methods import Method, method_name

_LOGGER = logging.getLogger(__name__)

ErrorCallback = Callable[[Exception], None]

_SCALAR_TYPES = (bool, int, float, str)


def _encode_line(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload, separators=(",", ":")).encode("ascii") + CRLF


def _param_value(value: Any) -> Any:
    if isinstance(value, Enum):
        value = value.value
    if value is None or not isinstance(value, _SCALAR_TYPES):
        raise YeelightProtocolError(f"Unsupported parameter value: {value!r}")
    return value


def encode_command(
    request_id: int, method: Method | str, params: Sequence[Any] = ()
) -> bytes:
    """Encode a command envelope.

    Args:
        request_id: Request id used to correlate the response
        method: Method enum member or wire name
        params: Ordered parameters (int, float, str, bool or enum members)

    Returns:
        ASCII JSON line terminated with CRLF

    Raises:
        YeelightProtocolError: If a parameter is None or not a scalar
    """
    return _encode_line(
        {
            "id": request_id,
            "method": method_name(method),
            "params": [_param_value(p) for p in params],
        }
    )


def encode_response(message: ResponseMessage) -> bytes:
    """Encode a response envelope (device side)."""
    payload: dict[str, Any] = {"id": message.id}
    if message.error is not None:
        payload["error"] = {
            "code": message.error.code,
            "message": message.error.message,
        }
    else:
        payload["result"] = message.result
    return _encode_line(payload)


def encode_notification(message: NotificationMessage) -> bytes:
    """Encode a notification envelope (device side)."""
    return _encode_line({"method": message.method, "params": message.params})


def decode_line(line: str, timestamp: datetime | None = None) -> AnyMessage:
    """Decode one line into a response or notification.

    A non-zero id marks a response. Without one, an envelope carrying a
    method is a notification and an envelope with id 0 is a response for
    the reserved id, which never matches a pending request.

    Raises:
        YeelightProtocolError: If the line is not a valid envelope
    """
    ts = timestamp or datetime.now()
    try:
        data = json.loads(line)
    except ValueError as err:
        raise YeelightProtocolError(f"Invalid JSON: {line!r}") from err

    if not isinstance(data, dict):
        raise YeelightProtocolError(f"Envelope is not an object: {line!r}")

    request_id = data.get("id")
    if request_id is not None and (
        isinstance(request_id, bool) or not isinstance(request_id, int)
    ):
        raise YeelightProtocolError(f"Invalid id in envelope: {line!r}")

    if request_id:
        return _decode_response(line, data, request_id, ts)

    method = data.get("method")
    if method is not None:
        if not isinstance(method, str):
            raise YeelightProtocolError(f"Invalid method in envelope: {line!r}")
        params = data.get("params") or {}
        if not isinstance(params, dict):
            raise YeelightProtocolError(
                f"Notification params must be an object: {line!r}"
            )
        return NotificationMessage(
            raw=line,
            timestamp=ts,
            method=method,
            params=params,
        )

    if request_id == 0:
        return _decode_response(line, data, 0, ts)

    raise YeelightProtocolError(f"Unrecognized envelope: {line!r}")


def _decode_response(
    line: str, data: dict[str, Any], request_id: int, ts: datetime
) -> ResponseMessage:
    error = data.get("error")
    if error is not None:
        if not isinstance(error, dict):
            raise YeelightProtocolError(f"Invalid error object: {line!r}")
        try:
            code = int(error.get("code", 0))
        except (TypeError, ValueError) as err:
            raise YeelightProtocolError(f"Invalid error code: {line!r}") from err
        return ResponseMessage(
            raw=line,
            timestamp=ts,
            id=request_id,
            error=CommandError(code=code, message=str(error.get("message", ""))),
        )

    return ResponseMessage(
        raw=line,
        timestamp=ts,
        id=request_id,
        result=data.get("result"),
    )


class MessageParser:
    """Parser for Yeelight protocol lines.

    This class handles buffering of incoming bytes and decoding
    complete lines into typed messages.
    """

    def __init__(self, error_callback: ErrorCallback | None = None) -> None:
        """Initialize the parser.

        Args:
            error_callback: Called with the error for every line that
                cannot be decoded
        """
        self._buffer = b""
        self._error_callback = error_callback

    def feed(self, data: bytes) -> list[AnyMessage]:
        """Feed bytes to the parser and return any complete messages.

        Args:
            data: Raw bytes from socket

        Returns:
            Decoded messages in arrival order (may be empty)
        """
        self._buffer += data
        messages = []

        while CRLF in self._buffer:
            line, self._buffer = self._buffer.split(CRLF, 1)
            if not line.strip():
                continue
            try:
                messages.append(decode_line(line.decode("utf-8")))
            except UnicodeDecodeError as err:
                _LOGGER.warning("Invalid message encoding: %s", line)
                self._report(YeelightProtocolError(f"Invalid encoding: {line!r}"), err)
            except YeelightProtocolError as err:
                _LOGGER.warning("Failed to parse message: %s - %s", line, err)
                self._report(err)

        if len(self._buffer) > MAX_LINE_LENGTH:
            _LOGGER.warning("Dropping %d bytes without line terminator", len(self._buffer))
            self._buffer = b""
            self._report(
                YeelightProtocolError(
                    f"Line exceeds {MAX_LINE_LENGTH} bytes without terminator"
                )
            )

        return messages

    def reset(self) -> None:
        """Clear the buffer."""
        self._buffer = b""

    def _report(
        self, error: YeelightProtocolError, cause: Exception | None = None
    ) -> None:
        if cause is not None:
            error.__cause__ = cause
        if self._error_callback:
            self._error_callback(error)
