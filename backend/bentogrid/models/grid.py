"""Grid document model: tiles, nested sub-grids and the canvas config."""

from __future__ import annotations

import enum
import uuid

from pydantic import BaseModel, Field, field_validator, model_validator


class TileKind(str, enum.Enum):
    TEXT = "text"
    STAT = "stat"
    IMAGE = "image"


class TileShape(str, enum.Enum):
    SQUARE = "square"
    CIRCLE = "circle"


def new_tile_id() -> str:
    return uuid.uuid4().hex


class Tile(BaseModel):
    """One rectangular, grid-aligned element (main grid or nested)."""

    id: str = Field(default_factory=new_tile_id, frozen=True)
    # Top-left cell, 0-based
    column: int = Field(default=0, ge=0)
    row: int = Field(default=0, ge=0)
    col_span: int = Field(default=1, ge=1)
    row_span: int = Field(default=1, ge=1)

    kind: TileKind = TileKind.TEXT
    title: str = ""
    content: str = ""
    background_color: str = "#191b32"
    text_color: str = "#ffffff"
    shape: TileShape = TileShape.SQUARE
    inner_padding: float = Field(default=0.0, ge=0)
    locked: bool = False

    sub_grid: SubGrid | None = None

    @property
    def right(self) -> int:
        """One past the last occupied column."""
        return self.column + self.col_span

    @property
    def bottom(self) -> int:
        """One past the last occupied row."""
        return self.row + self.row_span

    @property
    def is_circle(self) -> bool:
        return self.shape == TileShape.CIRCLE and self.col_span == self.row_span

    @property
    def has_sub_grid(self) -> bool:
        """True when the tile renders as a container: a sub-grid with at least one tile."""
        return self.sub_grid is not None and len(self.sub_grid.tiles) > 0

    def covers(self, x: int, y: int) -> bool:
        return self.column <= x < self.right and self.row <= y < self.bottom

    def cells(self) -> list[tuple[int, int]]:
        """Footprint as (x, y) pairs in row-major order."""
        return [
            (x, y)
            for y in range(self.row, self.bottom)
            for x in range(self.column, self.right)
        ]


class SubGrid(BaseModel):
    """Independent grid nested inside one tile's content box."""

    sub_rows: int = Field(default=2, ge=1)
    sub_columns: int = Field(default=2, ge=1)
    tiles: list[Tile] = Field(default_factory=list)

    def find_tile(self, tile_id: str) -> Tile | None:
        for tile in self.tiles:
            if tile.id == tile_id:
                return tile
        return None


Tile.model_rebuild()


class GridConfig(BaseModel):
    """The document: canvas, grid dimensions, palette, and top-level tiles."""

    width: float = Field(default=1080.0, gt=0)
    height: float = Field(default=1080.0, gt=0)
    columns: int = Field(default=7, ge=1)
    rows: int = Field(default=7, ge=1)
    gap: float = Field(default=16.0, ge=0)
    padding: float = Field(default=40.0, ge=0)
    border_radius: float = Field(default=24.0, ge=0)
    palette: list[str] = Field(default_factory=list)
    tiles: list[Tile] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_layout(self) -> GridConfig:
        from bentogrid.engine.occupancy import find_layout_violations

        problems = find_layout_violations(self.tiles, self.columns, self.rows)
        if problems:
            raise ValueError("; ".join(problems))
        return self

    def find_tile(self, tile_id: str) -> Tile | None:
        for tile in self.tiles:
            if tile.id == tile_id:
                return tile
        return None


class TileUpdate(BaseModel):
    """Partial presentation update. Placement changes go through resize/merge."""

    title: str | None = None
    content: str | None = None
    background_color: str | None = None
    # Explicit text color; derived from background_color when omitted
    text_color: str | None = None
    kind: TileKind | None = None
    shape: TileShape | None = None
    inner_padding: float | None = Field(default=None, ge=0)
    locked: bool | None = None


class Selection(BaseModel):
    """UI selection state, passed explicitly into operations that affect it."""

    tile_ids: list[str] = Field(default_factory=list)
    active_parent_id: str | None = None
    sub_tile_ids: list[str] = Field(default_factory=list)


class LayoutSuggestion(BaseModel):
    """One record returned by the layout-suggestion model."""

    model_config = {"populate_by_name": True}

    title: str = ""
    content: str = ""
    col_span: int = Field(default=1, alias="colSpan")
    row_span: int = Field(default=1, alias="rowSpan")
    kind: TileKind = Field(default=TileKind.TEXT, alias="type")
    color_theme: str = Field(default="#333", alias="colorTheme")

    @field_validator("kind", mode="before")
    @classmethod
    def _unknown_kind_is_text(cls, value):
        if isinstance(value, str) and value.lower() not in {k.value for k in TileKind}:
            return TileKind.TEXT
        return value.lower() if isinstance(value, str) else value


BRAND_PALETTE = ["#d5ec2c", "#ba8bff", "#f7f6fc", "#191b32", "#2e3250"]


def default_grid_config() -> GridConfig:
    """Seed document the designer opens with."""
    return GridConfig(
        width=1080,
        height=1080,
        columns=7,
        rows=7,
        gap=16,
        padding=40,
        border_radius=24,
        palette=list(BRAND_PALETTE),
        tiles=[
            Tile(
                id="1", column=0, row=0, col_span=4, row_span=4,
                title="Bento Grid", content="The ultimate layout tool for designers.",
                kind=TileKind.TEXT, background_color="#191b32", text_color="#f7f6fc",
            ),
            Tile(
                id="2", column=4, row=0, col_span=3, row_span=4,
                title="Export", content="SVG Ready",
                kind=TileKind.IMAGE, background_color="#2e3250", text_color="#f7f6fc",
            ),
            Tile(
                id="3", column=0, row=4, col_span=2, row_span=3,
                title="Users", content="+12k",
                kind=TileKind.STAT, background_color="#d5ec2c", text_color="#191b32",
            ),
            Tile(
                id="4", column=2, row=4, col_span=2, row_span=3,
                title="Tooling", content="simple to use",
                kind=TileKind.TEXT, background_color="#ba8bff", text_color="#191b32",
            ),
            Tile(
                id="5", column=4, row=4, col_span=3, row_span=3,
                title="Integration", content="Fast layouts.",
                kind=TileKind.TEXT, background_color="#f7f6fc", text_color="#191b32",
            ),
        ],
    )
