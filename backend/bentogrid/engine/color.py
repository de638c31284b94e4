"""Color helpers: contrast text color, export fills, palette edits."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bentogrid.models.grid import GridConfig

BLACK = "#000000"
WHITE = "#ffffff"

# Fallback palette when a document has none
DEFAULT_PALETTE = ["#191b32", "#ba8bff", "#d5ec2c", "#f7f6fc", "#2e3250", "#0f1126"]

# YIQ threshold; 150 rather than 128 biases toward black text on the light palette entries
_LUMINANCE_THRESHOLD = 150

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")
_GRADIENT_HEX_RE = re.compile(r"#[0-9a-fA-F]{6}")


def is_valid_hex(value: str) -> bool:
    return bool(value) and _HEX_RE.match(value) is not None


def expand_hex(value: str) -> str | None:
    """Return the 6-digit form of a 3/6-digit hex color, or None if malformed."""
    if not is_valid_hex(value):
        return None
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return "#" + digits


def luminance(value: str) -> float | None:
    """Y = 0.299R + 0.587G + 0.114B over 0-255 channels."""
    full = expand_hex(value)
    if full is None:
        return None
    r = int(full[1:3], 16)
    g = int(full[3:5], 16)
    b = int(full[5:7], 16)
    return (r * 299 + g * 587 + b * 114) / 1000


def resolve_text_color(background: str) -> str:
    """Black or white text for the given background. Malformed input -> white."""
    y = luminance(background)
    if y is None:
        return WHITE
    return BLACK if y >= _LUMINANCE_THRESHOLD else WHITE


def resolve_fill(color: str) -> str:
    """Solid fill usable in a static SVG.

    Gradient descriptors collapse to their first 6-digit hex literal; anything
    that is not a valid hex color falls back to black.
    """
    if not color:
        return BLACK
    if "gradient" in color:
        match = _GRADIENT_HEX_RE.search(color)
        return match.group(0) if match else BLACK
    if is_valid_hex(color):
        return color
    return BLACK


def add_palette_color(config: GridConfig, color: str) -> bool:
    """Append a hex color to the palette. Membership is exact string equality."""
    if not is_valid_hex(color) or color in config.palette:
        return False
    config.palette.append(color)
    return True


def remove_palette_color(config: GridConfig, color: str) -> bool:
    if color not in config.palette:
        return False
    config.palette = [c for c in config.palette if c != color]
    return True
