"""Placement operations, the only code that mutates a GridConfig.

Every operation validates first and mutates last: a rejected operation raises
(or returns False for resize) with the model untouched. Main-grid and sub-grid
variants share one implementation through ``_Scope``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from bentogrid.engine.color import DEFAULT_PALETTE, resolve_text_color
from bentogrid.engine.errors import (
    GridFullError,
    MergeError,
    OccupiedCellError,
    PlacementError,
    TileLockedError,
    TileNotFoundError,
)
from bentogrid.engine.occupancy import (
    find_free_space,
    footprint_fits,
    footprint_free,
    is_occupied,
    mark,
)
from bentogrid.engine.packer import RandomSource, default_rng, pack, pick_color
from bentogrid.models.grid import (
    GridConfig,
    LayoutSuggestion,
    Selection,
    SubGrid,
    Tile,
    TileKind,
    TileUpdate,
)

logger = logging.getLogger(__name__)

# Kinds available to a freshly added tile, drawn uniformly
_ADD_KINDS = [TileKind.TEXT, TileKind.STAT, TileKind.IMAGE]

_DEFAULT_SUB_ROWS = 2
_DEFAULT_SUB_COLUMNS = 2


@dataclass
class _Scope:
    """Sibling tiles of one grid (main or sub) plus that grid's dimensions."""

    owner: GridConfig | SubGrid
    columns: int
    rows: int

    @property
    def tiles(self) -> list[Tile]:
        return self.owner.tiles

    def get(self, tile_id: str) -> Tile:
        for tile in self.owner.tiles:
            if tile.id == tile_id:
                return tile
        raise TileNotFoundError(tile_id)


def _main_scope(config: GridConfig) -> _Scope:
    return _Scope(owner=config, columns=config.columns, rows=config.rows)


def _sub_scope(config: GridConfig, parent_id: str) -> _Scope:
    parent = get_tile(config, parent_id)
    if parent.sub_grid is None:
        raise PlacementError(f"Tile {parent_id} has no sub-grid")
    sub = parent.sub_grid
    return _Scope(owner=sub, columns=sub.sub_columns, rows=sub.sub_rows)


def _scope(config: GridConfig, parent_id: str | None) -> _Scope:
    return _sub_scope(config, parent_id) if parent_id else _main_scope(config)


def _colors(config: GridConfig) -> list[str]:
    return config.palette if config.palette else DEFAULT_PALETTE


def get_tile(config: GridConfig, tile_id: str) -> Tile:
    tile = config.find_tile(tile_id)
    if tile is None:
        raise TileNotFoundError(tile_id)
    return tile


def get_scoped_tile(config: GridConfig, tile_id: str, parent_id: str | None = None) -> Tile:
    """A top-level tile, or a tile of ``parent_id``'s sub-grid."""
    return _scope(config, parent_id).get(tile_id)


# ---------------------------------------------------------------------------
# Add
# ---------------------------------------------------------------------------

def add_at_position(
    config: GridConfig,
    x: int,
    y: int,
    rng: RandomSource | None = None,
) -> Tile:
    """Add a tile with its top-left at (x, y).

    Tries 2x2, shrinking an axis to 1 where it would leave the grid; falls back
    to 1x1 on collision. Raises OccupiedCellError if even 1x1 is taken.
    """
    if not (0 <= x < config.columns and 0 <= y < config.rows):
        raise PlacementError(f"Cell ({x}, {y}) is outside the {config.columns}x{config.rows} grid")

    w = 1 if x + 2 > config.columns else 2
    h = 1 if y + 2 > config.rows else 2

    if not footprint_free(x, y, w, h, config.tiles):
        w, h = 1, 1
        if is_occupied(x, y, config.tiles):
            raise OccupiedCellError(x, y)

    rng = rng or default_rng()
    background = pick_color(_colors(config), rng)
    kind = _ADD_KINDS[min(int(rng.random() * len(_ADD_KINDS)), len(_ADD_KINDS) - 1)]

    tile = Tile(
        column=x,
        row=y,
        col_span=w,
        row_span=h,
        kind=kind,
        title="Title",
        content="Content",
        background_color=background,
        text_color=resolve_text_color(background),
    )
    config.tiles.append(tile)
    logger.debug("Added %dx%d tile %s at (%d, %d)", w, h, tile.id, x, y)
    return tile


def add_nearest_free(config: GridConfig, rng: RandomSource | None = None) -> Tile:
    """Add at the first free 2x2 slot (row-major), else the first free cell."""
    for size in (2, 1):
        pos = find_free_space(size, size, config.tiles, config.columns, config.rows)
        if pos is not None:
            return add_at_position(config, pos[0], pos[1], rng=rng)
    raise GridFullError()


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

def delete_tile(
    config: GridConfig,
    tile_id: str,
    selection: Selection | None = None,
) -> Selection:
    """Remove a top-level tile and return the selection with it dropped."""
    tile = get_tile(config, tile_id)
    if tile.locked:
        raise TileLockedError(tile_id)

    config.tiles = [t for t in config.tiles if t.id != tile_id]
    logger.debug("Deleted tile %s", tile_id)

    selection = selection or Selection()
    updated = Selection(
        tile_ids=[tid for tid in selection.tile_ids if tid != tile_id],
        active_parent_id=selection.active_parent_id,
        sub_tile_ids=list(selection.sub_tile_ids),
    )
    if selection.active_parent_id == tile_id:
        updated.active_parent_id = None
        updated.sub_tile_ids = []
    return updated


def delete_sub_tiles(
    config: GridConfig,
    parent_id: str,
    tile_ids: Sequence[str],
    selection: Selection | None = None,
) -> Selection:
    scope = _sub_scope(config, parent_id)
    doomed = {scope.get(tid).id for tid in tile_ids}
    for tile in scope.tiles:
        if tile.id in doomed and tile.locked:
            raise TileLockedError(tile.id)

    scope.owner.tiles = [t for t in scope.tiles if t.id not in doomed]

    selection = selection or Selection()
    return Selection(
        tile_ids=list(selection.tile_ids),
        active_parent_id=selection.active_parent_id,
        sub_tile_ids=[tid for tid in selection.sub_tile_ids if tid not in doomed],
    )


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------

def _merge(scope: _Scope, tile_ids: Sequence[str], title: str, content: str) -> Tile:
    wanted = list(dict.fromkeys(tile_ids))
    if len(wanted) < 2:
        raise MergeError("Select at least two tiles to merge")
    for tid in wanted:
        scope.get(tid)

    # List order, not selection order: the first selected tile in paint order
    # donates its colors.
    selected = [t for t in scope.tiles if t.id in wanted]
    for tile in selected:
        if tile.locked:
            raise TileLockedError(tile.id)

    min_x = min(t.column for t in selected)
    min_y = min(t.row for t in selected)
    max_x = max(t.right for t in selected)
    max_y = max(t.bottom for t in selected)

    merged = Tile(
        column=min_x,
        row=min_y,
        col_span=max_x - min_x,
        row_span=max_y - min_y,
        kind=TileKind.TEXT,
        title=title,
        content=content,
        background_color=selected[0].background_color,
        text_color=selected[0].text_color,
    )

    # Empty cells inside the box are absorbed; an unselected tile is not.
    remaining = [t for t in scope.tiles if t.id not in wanted]
    blockers = [t.id for t in remaining if any(merged.covers(x, y) for x, y in t.cells())]
    if blockers:
        raise MergeError(f"Merged area overlaps unselected tiles: {', '.join(blockers)}")

    scope.owner.tiles = remaining + [merged]
    logger.debug(
        "Merged %d tiles into %s at (%d, %d) span %dx%d",
        len(selected), merged.id, min_x, min_y, merged.col_span, merged.row_span,
    )
    return merged


def merge_tiles(config: GridConfig, tile_ids: Sequence[str]) -> Tile:
    """Replace the selected tiles with one tile spanning their bounding box."""
    return _merge(_main_scope(config), tile_ids, "Merged Item", "Merged content")


def merge_sub_tiles(config: GridConfig, parent_id: str, tile_ids: Sequence[str]) -> Tile:
    return _merge(_sub_scope(config, parent_id), tile_ids, "Merged", "Group")


# ---------------------------------------------------------------------------
# Resize / update
# ---------------------------------------------------------------------------

def resize_tile(
    config: GridConfig,
    tile_id: str,
    col_span: int,
    row_span: int,
    parent_id: str | None = None,
) -> bool:
    """Set a tile's span at its current top-left.

    Spans are clamped to [1, grid dimension]. Returns False, leaving the span
    unchanged, when the tile is locked or the new footprint leaves the grid or
    overlaps a sibling.
    """
    scope = _scope(config, parent_id)
    tile = scope.get(tile_id)
    if tile.locked:
        return False

    col_span = max(1, min(col_span, scope.columns))
    row_span = max(1, min(row_span, scope.rows))
    if (col_span, row_span) == (tile.col_span, tile.row_span):
        return True

    if tile.column + col_span > scope.columns or tile.row + row_span > scope.rows:
        logger.debug("Resize of %s to %dx%d rejected: out of bounds", tile_id, col_span, row_span)
        return False
    if not footprint_free(tile.column, tile.row, col_span, row_span, scope.tiles, exclude_id=tile_id):
        logger.debug("Resize of %s to %dx%d rejected: collision", tile_id, col_span, row_span)
        return False

    tile.col_span = col_span
    tile.row_span = row_span
    return True


def update_tile(
    config: GridConfig,
    tile_id: str,
    updates: TileUpdate,
    parent_id: str | None = None,
) -> Tile:
    """Apply presentation changes. Changing the background re-derives text color."""
    tile = _scope(config, parent_id).get(tile_id)
    changes = updates.model_dump(exclude_unset=True, exclude_none=True)

    if tile.locked and "kind" in changes and changes["kind"] != tile.kind:
        raise TileLockedError(tile_id)

    if "background_color" in changes and "text_color" not in changes:
        changes["text_color"] = resolve_text_color(changes["background_color"])

    for name, value in changes.items():
        setattr(tile, name, value)
    return tile


# ---------------------------------------------------------------------------
# Whole-grid replacement
# ---------------------------------------------------------------------------

def randomize_grid(config: GridConfig, rng: RandomSource | None = None) -> list[Tile]:
    config.tiles = pack(config.rows, config.columns, _colors(config), rng=rng)
    return config.tiles


def place_suggestions(config: GridConfig, suggestions: Sequence[LayoutSuggestion]) -> list[Tile]:
    """Replace the grid's tiles with suggestion records, first-fit row-major.

    Each record is tried at its suggested footprint only; records that fit
    nowhere are skipped. Text color is always derived from the color theme.
    """
    mask = np.zeros((config.rows, config.columns), dtype=bool)
    placed: list[Tile] = []
    skipped = 0

    for item in suggestions:
        pos = _first_fit(mask, item.col_span, item.row_span)
        if pos is None:
            skipped += 1
            continue
        x, y = pos
        mark(mask, x, y, item.col_span, item.row_span)
        placed.append(Tile(
            column=x,
            row=y,
            col_span=item.col_span,
            row_span=item.row_span,
            kind=item.kind,
            title=item.title,
            content=item.content,
            background_color=item.color_theme,
            text_color=resolve_text_color(item.color_theme),
        ))

    if skipped:
        logger.info("Skipped %d suggestion(s) that did not fit", skipped)
    config.tiles = placed
    return placed


def _first_fit(mask, w: int, h: int) -> tuple[int, int] | None:
    rows, columns = mask.shape
    for y in range(rows):
        for x in range(columns):
            if footprint_fits(mask, x, y, w, h):
                return (x, y)
    return None


# ---------------------------------------------------------------------------
# Sub-grid lifecycle
# ---------------------------------------------------------------------------

def create_sub_grid(
    config: GridConfig,
    tile_id: str,
    rng: RandomSource | None = None,
) -> SubGrid:
    """Turn a tile into a 2x2 sub-grid container seeded by the packer."""
    tile = get_tile(config, tile_id)
    tile.sub_grid = SubGrid(
        sub_rows=_DEFAULT_SUB_ROWS,
        sub_columns=_DEFAULT_SUB_COLUMNS,
        tiles=pack(_DEFAULT_SUB_ROWS, _DEFAULT_SUB_COLUMNS, _colors(config), rng=rng),
    )
    return tile.sub_grid


def remove_sub_grid(config: GridConfig, tile_id: str) -> Tile:
    tile = get_tile(config, tile_id)
    tile.sub_grid = None
    return tile


def randomize_sub_grid(
    config: GridConfig,
    tile_id: str,
    rng: RandomSource | None = None,
) -> SubGrid:
    scope = _sub_scope(config, tile_id)
    scope.owner.tiles = pack(scope.rows, scope.columns, _colors(config), rng=rng)
    return scope.owner


def resize_sub_grid(config: GridConfig, tile_id: str, sub_rows: int, sub_columns: int) -> bool:
    """Change sub-grid dimensions; rejected if any child would fall outside."""
    if sub_rows < 1 or sub_columns < 1:
        return False
    scope = _sub_scope(config, tile_id)
    if any(t.right > sub_columns or t.bottom > sub_rows for t in scope.tiles):
        return False
    scope.owner.sub_rows = sub_rows
    scope.owner.sub_columns = sub_columns
    return True


def add_sub_tile_at(
    config: GridConfig,
    parent_id: str,
    x: int,
    y: int,
    rng: RandomSource | None = None,
) -> Tile:
    """Insert a 1x1 sub-tile at (x, y) of the parent's sub-grid."""
    scope = _sub_scope(config, parent_id)
    if not (0 <= x < scope.columns and 0 <= y < scope.rows):
        raise PlacementError(f"Cell ({x}, {y}) is outside the {scope.columns}x{scope.rows} sub-grid")
    if is_occupied(x, y, scope.tiles):
        raise OccupiedCellError(x, y)

    background = pick_color(_colors(config), rng or default_rng())
    tile = Tile(
        column=x,
        row=y,
        title="New",
        content="",
        kind=TileKind.TEXT,
        background_color=background,
        text_color=resolve_text_color(background),
    )
    scope.tiles.append(tile)
    return tile
