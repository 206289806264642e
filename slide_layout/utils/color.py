"""
Colour conversions and WCAG luminance math.
"""

import colorsys
import re
from typing import Optional, Tuple

RGB = Tuple[int, int, int]
HSL = Tuple[float, float, float]

_HEX_PATTERN = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')

# sRGB linearisation breakpoint used by WCAG 2.x
LINEAR_THRESHOLD = 0.03928


def hex_to_rgb(hex_color: str) -> Optional[RGB]:
    """Convert #rgb / #rrggbb to an RGB tuple, or None when malformed."""
    if not isinstance(hex_color, str):
        return None
    match = _HEX_PATTERN.match(hex_color.strip())
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def rgb_to_hex(rgb: RGB) -> str:
    r, g, b = (max(0, min(255, int(round(c)))) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def is_valid_color(hex_color: str) -> bool:
    return hex_to_rgb(hex_color) is not None


def channel_to_linear(channel: int) -> float:
    c = channel / 255.0
    return c / 12.92 if c <= LINEAR_THRESHOLD else ((c + 0.055) / 1.055) ** 2.4


def rgb_luminance(rgb: RGB) -> float:
    """Calculate relative luminance of a color according to WCAG."""
    r, g, b = (channel_to_linear(c) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def ratio_from_luminance(lum1: float, lum2: float) -> float:
    lighter, darker = max(lum1, lum2), min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


def hex_to_hsl(hex_color: str) -> Optional[HSL]:
    """Convert hex to (hue 0-360, saturation 0-100, lightness 0-100)."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    r, g, b = (c / 255.0 for c in rgb)
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    return h * 360, s * 100, l * 100


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360, lightness / 100, saturation / 100)
    return rgb_to_hex((r * 255, g * 255, b * 255))
