"""Translate engine failures into API responses."""

from __future__ import annotations

import logging

from fastapi import HTTPException

from bentogrid.engine.errors import PlacementError, TileNotFoundError
from bentogrid.models.grid import GridConfig, Selection
from bentogrid.models.responses import GridResponse

logger = logging.getLogger(__name__)


def rejected(grid: GridConfig, error: PlacementError, selection: Selection | None = None) -> GridResponse:
    """No-op response carrying a user-visible notice.

    Unknown ids are a client bug rather than a user action, so they become 404s.
    """
    if isinstance(error, TileNotFoundError):
        raise HTTPException(status_code=404, detail=str(error))
    logger.info("Operation rejected (%s): %s", error.code, error)
    return GridResponse(
        grid=grid,
        applied=False,
        notice=str(error),
        selection=selection or Selection(),
    )
