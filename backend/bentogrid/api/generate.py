"""POST /api/generate: lay out the grid from an LLM's suggestions."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from bentogrid.config import Settings
from bentogrid.dependencies import get_settings
from bentogrid.engine.placement import place_suggestions
from bentogrid.llm.client import get_layout_suggestions
from bentogrid.models.requests import GenerateRequest
from bentogrid.models.responses import GridResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate", response_model=GridResponse)
async def generate(
    req: GenerateRequest,
    settings: Settings = Depends(get_settings),
) -> GridResponse:
    """Ask the model for tile records and place them first-fit.

    Model or network failures never surface as errors: the client gets a single
    explanatory "Error" tile instead.
    """
    logger.info(
        "Generate request: prompt=%r image=%s env=%s",
        req.prompt[:80], req.image_base64 is not None, settings.bentogrid_env,
    )
    suggestions = await get_layout_suggestions(
        req.prompt, req.grid.columns, req.image_base64, rows=req.grid.rows,
    )
    placed = place_suggestions(req.grid, suggestions)
    notice = None
    if len(placed) < len(suggestions):
        notice = f"{len(suggestions) - len(placed)} suggested tile(s) did not fit"
    return GridResponse(grid=req.grid, notice=notice)
