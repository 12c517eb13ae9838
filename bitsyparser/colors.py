"""Color channel helpers for palette records.

Palettes store colors as ``(r, g, b)`` triples. Some save files write a color
as a single integer with the channels packed as ``0xRRGGBB``; these helpers
convert between the two representations.
"""

from __future__ import annotations

from typing import Tuple

RGB = Tuple[int, int, int]


def pack_rgb(rgb: RGB) -> int:
    """Pack an ``(r, g, b)`` triple into one integer."""
    r, g, b = rgb
    return ((r & 255) << 16) | ((g & 255) << 8) | (b & 255)


def unpack_rgb(value: int) -> RGB:
    """Split a packed integer back into its ``(r, g, b)`` channels."""
    return (value >> 16) & 255, (value >> 8) & 255, value & 255


def rgb_to_string(rgb: RGB) -> str:
    return ",".join(str(channel) for channel in rgb)
