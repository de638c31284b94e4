"""API request models. Every request carries the full grid document."""

from __future__ import annotations

from pydantic import BaseModel, Field

from bentogrid.models.grid import GridConfig, Selection, TileUpdate


class GridRequest(BaseModel):
    grid: GridConfig = Field(..., description="Current grid document")


class RandomizeRequest(GridRequest):
    seed: int | None = Field(default=None, description="Seed for a reproducible layout")


class AddTileRequest(GridRequest):
    x: int | None = Field(default=None, description="Target column; omit with y for nearest free slot")
    y: int | None = Field(default=None, description="Target row")
    seed: int | None = None


class DeleteTilesRequest(GridRequest):
    tile_ids: list[str] = Field(..., min_length=1)
    parent_id: str | None = Field(default=None, description="Sub-grid parent, for sub-tiles")
    selection: Selection = Field(default_factory=Selection)


class MergeRequest(GridRequest):
    tile_ids: list[str] = Field(..., min_length=2)
    parent_id: str | None = None


class ResizeRequest(GridRequest):
    tile_id: str
    col_span: int
    row_span: int
    parent_id: str | None = None


class UpdateTileRequest(GridRequest):
    tile_id: str
    parent_id: str | None = None
    updates: TileUpdate


class PaletteRequest(GridRequest):
    color: str = Field(..., description="Hex color, e.g. #ba8bff")


class SubGridRequest(GridRequest):
    tile_id: str = Field(..., description="Parent tile")
    seed: int | None = None


class SubTileAddRequest(SubGridRequest):
    x: int
    y: int


class SubGridResizeRequest(GridRequest):
    tile_id: str
    sub_rows: int = Field(..., ge=1)
    sub_columns: int = Field(..., ge=1)


class ExportRequest(GridRequest):
    include_header: bool = Field(default=False, description="Prepend XML prolog and SVG 1.1 doctype")
    native_text: bool = Field(default=True, description="Render titles/content as <text>")


class GenerateRequest(GridRequest):
    prompt: str = Field(..., description="Topic, URL, or extra context for an image")
    image_base64: str | None = Field(default=None, description="Screenshot to clone (data URL or base64)")
