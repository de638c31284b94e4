"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from bentogrid.models.grid import GridConfig, Selection


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"


class GridResponse(BaseModel):
    grid: GridConfig
    applied: bool = True
    # User-visible message when an operation was rejected as a no-op
    notice: str | None = None
    tile_id: str | None = None
    selection: Selection = Field(default_factory=Selection)


class ExportResponse(BaseModel):
    svg: str
    width: float
    height: float
