"""
Color Math

Hex/RGB conversion, Euclidean RGB distance and color-name lookup.
"""

import math
import re
from typing import Sequence, Union

from ..config.game_settings import NAMED_COLORS
from ..models.color import Color
from ..models.errors import InvalidColorFormat

_HEX_COLOR = re.compile(r'#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})', re.IGNORECASE)

UNKNOWN_COLOR_NAME = "unknown"

ColorLike = Union[Color, str, Sequence[int]]


def clamp(value, lo, hi):
    """Clamp value into [lo, hi]."""
    return min(max(value, lo), hi)


def hex_to_rgb(value: str) -> Color:
    """
    Parse "#rrggbb" (leading '#' optional, any case) into a Color.

    Raises:
        InvalidColorFormat: If value is not exactly six hex digits
    """
    if not isinstance(value, str):
        raise InvalidColorFormat(value)
    match = _HEX_COLOR.fullmatch(value)
    if not match:
        raise InvalidColorFormat(value)
    return Color(*(int(part, 16) for part in match.groups()))


def _channel(value) -> int:
    # Round half up, then clamp into the byte range
    return int(clamp(math.floor(value + 0.5), 0, 255))


def rgb_to_hex(r, g, b) -> str:
    """
    Format channels as lowercase "#rrggbb".

    Channels may be floats; they are rounded and clamped to [0, 255].
    A Color already knows its own form: use Color.hex.
    """
    return '#' + ''.join('{:02x}'.format(_channel(c)) for c in (r, g, b))


def to_color(r, g, b) -> Color:
    """Round and clamp raw channel values into a Color."""
    return Color(_channel(r), _channel(g), _channel(b))


def coerce_color(value: ColorLike) -> Color:
    """Normalise a Color, hex string or RGB sequence into a Color."""
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        return hex_to_rgb(value)
    try:
        r, g, b = value
    except (TypeError, ValueError):
        raise InvalidColorFormat(value)
    if not all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in (r, g, b)):
        raise InvalidColorFormat(value)
    return Color(r, g, b)


def distance(a: Sequence[int], b: Sequence[int]) -> float:
    """Euclidean distance between two colors in RGB space."""
    return math.sqrt(sum((ca - cb) ** 2 for ca, cb in zip(a, b)))


def color_name(color: ColorLike) -> str:
    """Exact name for a color from the palette table, or "unknown"."""
    return NAMED_COLORS.get(coerce_color(color).hex, UNKNOWN_COLOR_NAME)


def nearest_color_name(color: ColorLike) -> str:
    """Name of the closest named color."""
    target = coerce_color(color)
    if not NAMED_COLORS:
        return UNKNOWN_COLOR_NAME
    closest = min(NAMED_COLORS, key=lambda hex_value: distance(target, hex_to_rgb(hex_value)))
    return NAMED_COLORS[closest]


def describe_color(color: ColorLike) -> str:
    """Human readable label used in hint text."""
    parsed = coerce_color(color)
    name = color_name(parsed)
    if name != UNKNOWN_COLOR_NAME:
        return name
    return f"{nearest_color_name(parsed)}-ish {parsed.hex}"
