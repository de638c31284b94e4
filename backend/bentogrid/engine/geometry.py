"""Geometry projector: grid cells to pixel rectangles and back.

The same formulas serve the main grid and, recursively, sub-grids: a sub-grid
uses its parent's content rectangle as the outer box (no padding) and half the
parent gap.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bentogrid.models.grid import GridConfig, Tile


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    def inset(self, amount: float) -> Rect:
        """Shrink symmetrically on all four sides; size never goes negative."""
        return Rect(
            x=self.x + amount,
            y=self.y + amount,
            w=max(0.0, self.w - 2 * amount),
            h=max(0.0, self.h - 2 * amount),
        )


@dataclass(frozen=True)
class GridGeometry:
    """Cell geometry for one grid inside an outer pixel box."""

    columns: int
    rows: int
    gap: float
    width: float
    height: float
    padding: float = 0.0
    origin_x: float = 0.0
    origin_y: float = 0.0

    @property
    def cell_width(self) -> float:
        return (self.width - 2 * self.padding - (self.columns - 1) * self.gap) / self.columns

    @property
    def cell_height(self) -> float:
        return (self.height - 2 * self.padding - (self.rows - 1) * self.gap) / self.rows

    def pixel_x(self, column: int) -> float:
        return self.origin_x + self.padding + column * (self.cell_width + self.gap)

    def pixel_y(self, row: int) -> float:
        return self.origin_y + self.padding + row * (self.cell_height + self.gap)

    def pixel_w(self, span: int) -> float:
        return span * self.cell_width + (span - 1) * self.gap

    def pixel_h(self, span: int) -> float:
        return span * self.cell_height + (span - 1) * self.gap

    def cell_rect(self, tile: Tile) -> Rect:
        """Full rectangle covered by the tile's footprint."""
        return Rect(
            x=self.pixel_x(tile.column),
            y=self.pixel_y(tile.row),
            w=self.pixel_w(tile.col_span),
            h=self.pixel_h(tile.row_span),
        )

    def tile_rect(self, tile: Tile) -> Rect:
        """Visible rectangle: the cell rectangle minus the tile's inner padding."""
        return self.cell_rect(tile).inset(tile.inner_padding)

    def sub_geometry(self, tile: Tile) -> GridGeometry | None:
        """Geometry of the tile's sub-grid, laid over its content rectangle."""
        if tile.sub_grid is None:
            return None
        content = self.tile_rect(tile)
        return GridGeometry(
            columns=tile.sub_grid.sub_columns,
            rows=tile.sub_grid.sub_rows,
            gap=self.gap / 2,
            width=content.w,
            height=content.h,
            origin_x=content.x,
            origin_y=content.y,
        )

    def local(self) -> GridGeometry:
        """Same grid with its origin moved to (0, 0)."""
        return GridGeometry(
            columns=self.columns,
            rows=self.rows,
            gap=self.gap,
            width=self.width,
            height=self.height,
            padding=self.padding,
        )

    def cell_at(self, px: float, py: float) -> tuple[int, int] | None:
        """Cell under a pointer position, or None outside the grid area."""
        gx = px - self.origin_x - self.padding
        gy = py - self.origin_y - self.padding
        if gx < 0 or gy < 0:
            return None
        col = math.floor(gx / (self.cell_width + self.gap))
        row = math.floor(gy / (self.cell_height + self.gap))
        if 0 <= col < self.columns and 0 <= row < self.rows:
            return (col, row)
        return None

    def rect_to_cells(self, rect: Rect) -> tuple[int, int, int, int]:
        """Invert a projected (un-inset) rectangle to (column, row, col_span, row_span)."""
        step_x = self.cell_width + self.gap
        step_y = self.cell_height + self.gap
        column = round((rect.x - self.origin_x - self.padding) / step_x)
        row = round((rect.y - self.origin_y - self.padding) / step_y)
        col_span = round((rect.w + self.gap) / step_x)
        row_span = round((rect.h + self.gap) / step_y)
        return (column, row, col_span, row_span)


def main_geometry(config: GridConfig) -> GridGeometry:
    return GridGeometry(
        columns=config.columns,
        rows=config.rows,
        gap=config.gap,
        width=config.width,
        height=config.height,
        padding=config.padding,
    )


def sub_grid_geometry(config: GridConfig, parent: Tile) -> GridGeometry | None:
    return main_geometry(config).sub_geometry(parent)
