"""Async transport layer for Yeelight communication.

This module handles:
- Async TCP socket connection
- Adopting an inbound connection (music mode)
- Read/write operations
- Connection state tracking

No message parsing here - just bytes in/out.
"""

from __future__ import annotations

import asyncio
import logging

from .const import CONNECT_TIMEOUT, POLL_INTERVAL, READ_CHUNK_SIZE
from .exceptions import YeelightConnectionFailed, YeelightConnectionLost

_LOGGER = logging.getLogger(__name__)


class YeelightTransport:
    """Async transport for one device connection.

    Handles low-level socket operations:
    - Connection establishment
    - Async read/write
    - Connection state tracking

    Does NOT handle:
    - Line decoding (use MessageParser)
    - Command encoding (use encode_command)
    - Reconnection policy (handled by the device session)
    """

    def __init__(self, host: str, port: int) -> None:
        """Initialize transport.

        Args:
            host: Device hostname or IP
            port: Device control port
        """
        self._host = host
        self._port = port

        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None

    @classmethod
    def from_streams(
        cls,
        host: str,
        port: int,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> "YeelightTransport":
        """Wrap an already established connection.

        Used for the connection the device dials back in music mode. A
        later connect() on the result dials the device's control port.
        """
        transport = cls(host, port)
        transport._reader = reader
        transport._writer = writer
        return transport

    @property
    def connected(self) -> bool:
        """Return True if the socket is open.

        This is a cheap local check, not a guarantee that data will flow.
        """
        return self._writer is not None and not self._writer.is_closing()

    @property
    def host(self) -> str:
        """Return host."""
        return self._host

    @property
    def port(self) -> int:
        """Return port."""
        return self._port

    async def connect(self) -> None:
        """Connect to the device, replacing any previous socket.

        Raises:
            YeelightConnectionFailed: If connection fails
        """
        await self.close()
        try:
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(self._host, self._port),
                timeout=CONNECT_TIMEOUT,
            )
        except asyncio.TimeoutError as err:
            raise YeelightConnectionFailed(
                f"Connection to {self._host}:{self._port} timed out"
            ) from err
        except OSError as err:
            raise YeelightConnectionFailed(
                f"Failed to connect to {self._host}:{self._port}: {err}"
            ) from err

        _LOGGER.info("Connected to %s:%s", self._host, self._port)

    async def write(self, data: bytes) -> bool:
        """Write an encoded line to the device.

        Args:
            data: Encoded line including CRLF

        Returns:
            True if write succeeded, False otherwise
        """
        if not self._writer:
            return False

        try:
            self._writer.write(data)
            await self._writer.drain()
            _LOGGER.debug("Sent to %s: %s", self._host, data)
            return True
        except (ConnectionError, OSError) as err:
            _LOGGER.debug("Write to %s failed: %s", self._host, err)
            await self.close()
            return False

    async def read(self, timeout: float = POLL_INTERVAL) -> bytes:
        """Read whatever the device sends within the timeout.

        Args:
            timeout: Read timeout in seconds

        Returns:
            Bytes read (may be empty on timeout)

        Raises:
            YeelightConnectionLost: If connection is lost
        """
        if not self._reader:
            raise YeelightConnectionLost("Not connected")

        try:
            data = await asyncio.wait_for(
                self._reader.read(READ_CHUNK_SIZE),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            return b""
        except (ConnectionError, OSError) as err:
            raise YeelightConnectionLost(f"Read failed: {err}") from err

        if not data:
            raise YeelightConnectionLost("Connection closed by device")
        _LOGGER.debug("Received from %s: %s", self._host, data)
        return data

    async def close(self) -> None:
        """Close the connection."""
        writer = self._writer
        self._writer = None
        self._reader = None
        if writer is None:
            return
        try:
            writer.close()
            await writer.wait_closed()
        except (ConnectionError, OSError) as err:
            _LOGGER.debug("Error while closing connection to %s: %s", self._host, err)
        _LOGGER.debug("Connection to %s closed", self._host)
