"""Pointer-drag resize sessions.

Pointer-down captures the starting span and pointer position; each move turns
the pixel delta into a whole-cell span delta and commits it only if
``resize_tile`` accepts it. Sessions only ever touch their own tile.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from bentogrid.engine.errors import PlacementError, TileLockedError
from bentogrid.engine.geometry import GridGeometry, main_geometry
from bentogrid.engine.placement import get_scoped_tile, get_tile, resize_tile
from bentogrid.models.grid import GridConfig

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def span_delta(pixel_delta: float, cell_size: float, gap: float, scale: float = 1.0) -> int:
    """Whole cells moved by a pointer delta measured in (scaled) screen pixels."""
    step = (cell_size + gap) * scale
    if step <= 0:
        return 0
    return round_half_up(pixel_delta / step)


def resize_geometry(config: GridConfig, parent_id: str | None = None) -> GridGeometry:
    """Geometry of the grid whose tiles a session resizes."""
    geometry = main_geometry(config)
    if parent_id is None:
        return geometry
    sub = geometry.sub_geometry(get_tile(config, parent_id))
    if sub is None:
        raise PlacementError(f"Tile {parent_id} has no sub-grid")
    return sub


@dataclass
class ResizeSession:
    tile_id: str
    start_x: float
    start_y: float
    start_col_span: int
    start_row_span: int
    parent_id: str | None = None
    scale: float = 1.0

    @classmethod
    def begin(
        cls,
        config: GridConfig,
        tile_id: str,
        pointer_x: float,
        pointer_y: float,
        parent_id: str | None = None,
        scale: float = 1.0,
    ) -> ResizeSession:
        tile = get_scoped_tile(config, tile_id, parent_id)
        if tile.locked:
            raise TileLockedError(tile_id)
        return cls(
            tile_id=tile_id,
            start_x=pointer_x,
            start_y=pointer_y,
            start_col_span=tile.col_span,
            start_row_span=tile.row_span,
            parent_id=parent_id,
            scale=scale,
        )

    def candidate(self, config: GridConfig, pointer_x: float, pointer_y: float) -> tuple[int, int]:
        """Span the pointer asks for, before clamping and collision checks."""
        geometry = resize_geometry(config, self.parent_id)
        cols = span_delta(pointer_x - self.start_x, geometry.cell_width, geometry.gap, self.scale)
        rows = span_delta(pointer_y - self.start_y, geometry.cell_height, geometry.gap, self.scale)
        return (self.start_col_span + cols, self.start_row_span + rows)

    def move(self, config: GridConfig, pointer_x: float, pointer_y: float) -> bool:
        """Commit the candidate span if it is collision-free. Returns whether it was."""
        col_span, row_span = self.candidate(config, pointer_x, pointer_y)
        applied = resize_tile(config, self.tile_id, col_span, row_span, parent_id=self.parent_id)
        if not applied:
            logger.debug("Resize move for %s to %dx%d rejected", self.tile_id, col_span, row_span)
        return applied
