"""/api/subgrid/*: nested grid lifecycle inside a single tile."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from bentogrid.api.errors import rejected
from bentogrid.engine.errors import PlacementError
from bentogrid.engine.packer import default_rng
from bentogrid.engine.placement import (
    add_sub_tile_at,
    create_sub_grid,
    randomize_sub_grid,
    remove_sub_grid,
    resize_sub_grid,
)
from bentogrid.models.grid import Selection
from bentogrid.models.requests import SubGridRequest, SubGridResizeRequest, SubTileAddRequest
from bentogrid.models.responses import GridResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subgrid")


@router.post("/create", response_model=GridResponse)
async def create(req: SubGridRequest) -> GridResponse:
    try:
        sub = create_sub_grid(req.grid, req.tile_id, rng=default_rng(req.seed))
    except PlacementError as e:
        return rejected(req.grid, e)
    logger.info("Created %dx%d sub-grid in tile %s", sub.sub_columns, sub.sub_rows, req.tile_id)
    return GridResponse(
        grid=req.grid,
        tile_id=req.tile_id,
        selection=Selection(tile_ids=[req.tile_id], active_parent_id=req.tile_id),
    )


@router.post("/remove", response_model=GridResponse)
async def remove(req: SubGridRequest) -> GridResponse:
    try:
        remove_sub_grid(req.grid, req.tile_id)
    except PlacementError as e:
        return rejected(req.grid, e)
    return GridResponse(grid=req.grid, tile_id=req.tile_id, selection=Selection(tile_ids=[req.tile_id]))


@router.post("/randomize", response_model=GridResponse)
async def randomize(req: SubGridRequest) -> GridResponse:
    try:
        randomize_sub_grid(req.grid, req.tile_id, rng=default_rng(req.seed))
    except PlacementError as e:
        return rejected(req.grid, e)
    return GridResponse(grid=req.grid, tile_id=req.tile_id)


@router.post("/add", response_model=GridResponse)
async def add(req: SubTileAddRequest) -> GridResponse:
    try:
        tile = add_sub_tile_at(req.grid, req.tile_id, req.x, req.y, rng=default_rng(req.seed))
    except PlacementError as e:
        return rejected(req.grid, e)
    return GridResponse(
        grid=req.grid,
        tile_id=tile.id,
        selection=Selection(active_parent_id=req.tile_id, sub_tile_ids=[tile.id]),
    )


@router.post("/resize", response_model=GridResponse)
async def resize(req: SubGridResizeRequest) -> GridResponse:
    try:
        applied = resize_sub_grid(req.grid, req.tile_id, req.sub_rows, req.sub_columns)
    except PlacementError as e:
        return rejected(req.grid, e)
    notice = None if applied else "Sub-tiles would fall outside the new dimensions"
    return GridResponse(grid=req.grid, applied=applied, notice=notice, tile_id=req.tile_id)
