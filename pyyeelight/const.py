"""Constants for the Yeelight LAN protocol."""

from __future__ import annotations

from typing import Final

# Connection
DEFAULT_PORT: Final = 55443
DEFAULT_MUSIC_PORT: Final = 12345
CONNECT_TIMEOUT: Final = 10.0

# Framing
CRLF: Final = b"\r\n"
READ_CHUNK_SIZE: Final = 4096
# Longest partial line kept while waiting for CRLF
MAX_LINE_LENGTH: Final = 4 * READ_CHUNK_SIZE

# Receive loop tick
POLL_INTERVAL: Final = 0.1

# Request ids are signed 32-bit on the device side, 0 is reserved
MAX_REQUEST_ID: Final = 2**31 - 1

# get_prop accepts at most this many names per request
MAX_PROPS_PER_REQUEST: Final = 20

# Effects
MIN_SMOOTH_DURATION: Final = 30
EFFECT_SMOOTH: Final = "smooth"
EFFECT_SUDDEN: Final = "sudden"

# Power literals
POWER_ON: Final = "on"
POWER_OFF: Final = "off"

RESULT_OK: Final = "ok"
