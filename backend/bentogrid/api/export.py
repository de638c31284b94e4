"""POST /api/export/svg: serialize the grid as a standalone SVG document."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response

from bentogrid.models.requests import ExportRequest
from bentogrid.models.responses import ExportResponse
from bentogrid.svg.serializer import render_svg

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export")


@router.post("/svg", response_model=ExportResponse)
async def export_svg(req: ExportRequest) -> ExportResponse:
    svg = render_svg(req.grid, include_header=req.include_header, native_text=req.native_text)
    logger.info("Exported %d tiles (%d chars)", len(req.grid.tiles), len(svg))
    return ExportResponse(svg=svg, width=req.grid.width, height=req.grid.height)


@router.post("/svg/raw")
async def export_svg_raw(req: ExportRequest) -> Response:
    """Same document, served as a downloadable file."""
    svg = render_svg(req.grid, include_header=req.include_header, native_text=req.native_text)
    return Response(
        content=svg,
        media_type="image/svg+xml",
        headers={"Content-Disposition": 'attachment; filename="bento-grid.svg"'},
    )
