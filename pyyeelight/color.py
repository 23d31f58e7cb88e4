"""Color helpers."""

from __future__ import annotations


def _clamp(value: int, minimum: int = 0, maximum: int = 255) -> int:
    return max(minimum, min(maximum, int(value)))


def compute_rgb_color(r: int, g: int, b: int) -> int:
    """Pack RGB channels into the 0x00RRGGBB integer used by set_rgb.

    Channels outside 0-255 are clamped.
    """
    return (_clamp(r) << 16) | (_clamp(g) << 8) | _clamp(b)


def split_rgb_color(value: int | str) -> tuple[int, int, int]:
    """Unpack an rgb property value into (r, g, b)."""
    packed = int(value) & 0xFFFFFF
    return (packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF
