"""Randomized packer: greedy stochastic tiling of an empty grid.

Every unvisited cell (row-major) draws one value and tries footprints in
descending-probability tiers. A footprint that does not fit collapses to 1x1,
so the result always covers the grid exactly once.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from bentogrid.engine.color import DEFAULT_PALETTE, resolve_text_color
from bentogrid.engine.occupancy import footprint_fits, mark
from bentogrid.models.grid import Tile, TileKind

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float: ...


# (threshold, width, height), checked top to bottom. A tier is taken when r
# exceeds its threshold and the footprint fits; otherwise the next tier is tried.
_SIZE_TIERS: list[tuple[float, int, int]] = [
    (0.9, 4, 4),
    (0.8, 3, 3),
    (0.6, 4, 2),
    (0.4, 2, 2),
    (0.3, 2, 1),
    (0.2, 1, 2),
]

_IMAGE_THRESHOLD = 0.8
_STAT_THRESHOLD = 0.6

# Image tiles swap to this neutral background on a second draw above 0.5
NEUTRAL_IMAGE_BACKGROUND = "#2e3250"
_NEUTRAL_IMAGE_THRESHOLD = 0.5


def default_rng(seed: int | None = None) -> RandomSource:
    return np.random.default_rng(seed)


def pick_footprint(r: float, mask: NDArray[np.bool_], x: int, y: int) -> tuple[int, int]:
    """Footprint (w, h) at (x, y) for one draw; 1x1 when no eligible tier fits."""
    for threshold, w, h in _SIZE_TIERS:
        if r > threshold and footprint_fits(mask, x, y, w, h):
            return (w, h)
    return (1, 1)


def pick_kind(r: float) -> TileKind:
    if r > _IMAGE_THRESHOLD:
        return TileKind.IMAGE
    if r > _STAT_THRESHOLD:
        return TileKind.STAT
    return TileKind.TEXT


def pick_color(colors: Sequence[str], rng: RandomSource) -> str:
    return colors[min(int(rng.random() * len(colors)), len(colors) - 1)]


def _default_text(kind: TileKind, rng: RandomSource) -> tuple[str, str]:
    if kind == TileKind.IMAGE:
        return "Image", "Visual"
    if kind == TileKind.STAT:
        return "Data", f"{int(rng.random() * 100)}k"
    return "Text Card", "Short description."


def pack(
    rows: int,
    columns: int,
    palette: Sequence[str] | None = None,
    rng: RandomSource | None = None,
) -> list[Tile]:
    """Tile a rows x columns grid completely with non-overlapping tiles.

    Draw order per cell: size tier, kind, palette color, then one extra draw
    for image tiles (neutral background) or stat tiles (the figure shown as
    content).
    """
    rng = rng or default_rng()
    colors = list(palette) if palette else DEFAULT_PALETTE
    mask = np.zeros((rows, columns), dtype=bool)
    tiles: list[Tile] = []

    for y in range(rows):
        for x in range(columns):
            if mask[y, x]:
                continue

            w, h = pick_footprint(rng.random(), mask, x, y)
            mark(mask, x, y, w, h)

            kind = pick_kind(rng.random())
            background = pick_color(colors, rng)
            if kind == TileKind.IMAGE and rng.random() > _NEUTRAL_IMAGE_THRESHOLD:
                background = NEUTRAL_IMAGE_BACKGROUND
            title, content = _default_text(kind, rng)

            tiles.append(Tile(
                column=x,
                row=y,
                col_span=w,
                row_span=h,
                kind=kind,
                title=title,
                content=content,
                background_color=background,
                text_color=resolve_text_color(background),
            ))

    logger.debug("Packed %dx%d grid into %d tiles", columns, rows, len(tiles))
    return tiles
