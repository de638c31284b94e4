"""/api/grid/*: main-grid placement operations.

The client sends the whole document with every request and renders whatever
comes back; a rejected operation returns the grid unchanged with applied=false.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from bentogrid.api.errors import rejected
from bentogrid.engine.color import add_palette_color, remove_palette_color
from bentogrid.engine.errors import PlacementError, TileLockedError
from bentogrid.engine.packer import default_rng
from bentogrid.engine.placement import (
    add_at_position,
    add_nearest_free,
    delete_sub_tiles,
    delete_tile,
    get_tile,
    merge_sub_tiles,
    merge_tiles,
    randomize_grid,
    resize_tile,
    update_tile,
)
from bentogrid.models.grid import GridConfig, Selection, default_grid_config
from bentogrid.models.requests import (
    AddTileRequest,
    DeleteTilesRequest,
    MergeRequest,
    PaletteRequest,
    RandomizeRequest,
    ResizeRequest,
    UpdateTileRequest,
)
from bentogrid.models.responses import GridResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/grid")


@router.get("/default", response_model=GridConfig)
async def default_grid() -> GridConfig:
    return default_grid_config()


@router.post("/randomize", response_model=GridResponse)
async def randomize(req: RandomizeRequest) -> GridResponse:
    tiles = randomize_grid(req.grid, rng=default_rng(req.seed))
    logger.info("Randomized %dx%d grid into %d tiles", req.grid.columns, req.grid.rows, len(tiles))
    return GridResponse(grid=req.grid)


@router.post("/tiles", response_model=GridResponse)
async def add_tile(req: AddTileRequest) -> GridResponse:
    """Add at (x, y) when both are given, else at the nearest free slot."""
    rng = default_rng(req.seed)
    try:
        if req.x is not None and req.y is not None:
            tile = add_at_position(req.grid, req.x, req.y, rng=rng)
        else:
            tile = add_nearest_free(req.grid, rng=rng)
    except PlacementError as e:
        return rejected(req.grid, e)
    return GridResponse(grid=req.grid, tile_id=tile.id, selection=Selection(tile_ids=[tile.id]))


@router.post("/tiles/delete", response_model=GridResponse)
async def delete_tiles(req: DeleteTilesRequest) -> GridResponse:
    selection = req.selection
    try:
        if req.parent_id:
            selection = delete_sub_tiles(req.grid, req.parent_id, req.tile_ids, selection)
        else:
            ids = list(dict.fromkeys(req.tile_ids))
            # All-or-nothing: check every id before removing any
            for tile_id in ids:
                if get_tile(req.grid, tile_id).locked:
                    raise TileLockedError(tile_id)
            for tile_id in ids:
                selection = delete_tile(req.grid, tile_id, selection)
    except PlacementError as e:
        return rejected(req.grid, e, req.selection)
    return GridResponse(grid=req.grid, selection=selection)


@router.post("/merge", response_model=GridResponse)
async def merge(req: MergeRequest) -> GridResponse:
    try:
        if req.parent_id:
            tile = merge_sub_tiles(req.grid, req.parent_id, req.tile_ids)
            selection = Selection(active_parent_id=req.parent_id, sub_tile_ids=[tile.id])
        else:
            tile = merge_tiles(req.grid, req.tile_ids)
            selection = Selection(tile_ids=[tile.id])
    except PlacementError as e:
        return rejected(req.grid, e)
    return GridResponse(grid=req.grid, tile_id=tile.id, selection=selection)


@router.post("/resize", response_model=GridResponse)
async def resize(req: ResizeRequest) -> GridResponse:
    """A refused resize is routine during a drag: applied=false and no notice."""
    try:
        applied = resize_tile(req.grid, req.tile_id, req.col_span, req.row_span, parent_id=req.parent_id)
    except PlacementError as e:
        return rejected(req.grid, e)
    return GridResponse(grid=req.grid, applied=applied, tile_id=req.tile_id)


@router.post("/update", response_model=GridResponse)
async def update(req: UpdateTileRequest) -> GridResponse:
    try:
        tile = update_tile(req.grid, req.tile_id, req.updates, parent_id=req.parent_id)
    except PlacementError as e:
        return rejected(req.grid, e)
    return GridResponse(grid=req.grid, tile_id=tile.id)


@router.post("/palette/add", response_model=GridResponse)
async def palette_add(req: PaletteRequest) -> GridResponse:
    applied = add_palette_color(req.grid, req.color)
    notice = None if applied else f"{req.color} is not a new hex color"
    return GridResponse(grid=req.grid, applied=applied, notice=notice)


@router.post("/palette/remove", response_model=GridResponse)
async def palette_remove(req: PaletteRequest) -> GridResponse:
    applied = remove_palette_color(req.grid, req.color)
    return GridResponse(grid=req.grid, applied=applied)
