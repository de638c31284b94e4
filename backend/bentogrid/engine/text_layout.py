"""Deterministic text layout for tile titles and content.

Character-count wrapping rather than font metrics, so the on-screen preview and
the exported SVG agree exactly. Content always starts below the last title
line plus a fixed gap.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from bentogrid.models.grid import Tile, TileKind


class SizeClass(enum.Enum):
    SUB = "sub"
    SMALL = "small"
    LARGE = "large"


@dataclass(frozen=True)
class TextMetrics:
    title_chars: float
    content_chars: float
    max_content_lines: int
    title_size: float
    content_size: float
    title_line_height: float
    content_line_height: float
    # Vertical space between the last title line and the first content line
    block_gap: float
    top_offset: float
    left_inset: float


@dataclass(frozen=True)
class TextLayout:
    x: float
    anchor: str
    title_lines: list[str]
    content_lines: list[str]
    title_y: float
    content_y: float
    metrics: TextMetrics

    @property
    def title_bottom(self) -> float:
        """Baseline box bottom of the last title line."""
        return self.title_y + len(self.title_lines) * self.metrics.title_line_height


def wrap_text(text: str, max_chars: float) -> list[str]:
    """Greedy word wrap: extend the line while len(line) + 1 + len(word) <= max_chars.

    Words longer than the budget get a line of their own rather than being split.
    Whitespace-only text gives no lines at all, so an empty title takes no room
    when a stat or circle block is centered.
    """
    words = text.split()
    if not words:
        return []
    lines: list[str] = []
    current = words[0]
    for word in words[1:]:
        if len(current) + 1 + len(word) <= max_chars:
            current += " " + word
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return lines


def size_class(tile: Tile, nested: bool = False) -> SizeClass:
    if nested:
        return SizeClass.SUB
    if tile.col_span == 1 or tile.row_span == 1:
        return SizeClass.SMALL
    return SizeClass.LARGE


def metrics_for(tile: Tile, cls: SizeClass) -> TextMetrics:
    if cls == SizeClass.SUB:
        return TextMetrics(
            title_chars=10,
            content_chars=15,
            max_content_lines=2,
            title_size=10,
            content_size=8,
            title_line_height=11,
            content_line_height=9,
            block_gap=4,
            top_offset=15,
            left_inset=10,
        )

    small = cls == SizeClass.SMALL
    if tile.kind == TileKind.STAT:
        title_size = 32 if small else 64
    else:
        title_size = 14 if small else 24
    content_size = 10 if small else 14
    title_chars = 12 if small else 25
    return TextMetrics(
        title_chars=title_chars,
        content_chars=title_chars * 1.5,
        max_content_lines=4,
        title_size=title_size,
        content_size=content_size,
        title_line_height=title_size * 1.1,
        content_line_height=content_size * 1.3,
        block_gap=8 if small else 16,
        top_offset=32,
        left_inset=24,
    )


def _centered(tile: Tile, cls: SizeClass) -> bool:
    if cls == SizeClass.SUB:
        return tile.is_circle
    return tile.is_circle or tile.kind == TileKind.STAT


def _title_start(
    tile: Tile,
    cls: SizeClass,
    metrics: TextMetrics,
    height: float,
    title_lines: list[str],
    content_lines: list[str],
) -> float:
    if not _centered(tile, cls):
        return metrics.top_offset
    if cls == SizeClass.SUB:
        return height / 2 - 10
    block = (
        len(title_lines) * metrics.title_size
        + 16
        + len(content_lines) * metrics.content_size * 1.2
    )
    # title_size * 0.2 compensates for cap height
    return height / 2 - block / 2 + metrics.title_size * 0.2


def layout_text(tile: Tile, width: float, height: float, nested: bool = False) -> TextLayout:
    """Lay out title and content inside a tile's visible rectangle (local coords)."""
    cls = size_class(tile, nested)
    metrics = metrics_for(tile, cls)

    title_lines = wrap_text(tile.title, metrics.title_chars)
    content_lines = wrap_text(tile.content, metrics.content_chars)[:metrics.max_content_lines]

    title_y = _title_start(tile, cls, metrics, height, title_lines, content_lines)
    content_y = title_y + len(title_lines) * metrics.title_line_height + metrics.block_gap

    if tile.is_circle:
        x, anchor = width / 2, "middle"
    else:
        x, anchor = metrics.left_inset, "start"

    return TextLayout(
        x=x,
        anchor=anchor,
        title_lines=title_lines,
        content_lines=content_lines,
        title_y=title_y,
        content_y=content_y,
        metrics=metrics,
    )
