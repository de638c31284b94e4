"""Shared test fixtures."""

from __future__ import annotations

import pytest

from bentogrid.models.grid import GridConfig, Tile, TileKind, default_grid_config


# Light and dark members of the brand palette
LIME = "#d5ec2c"
NAVY = "#191b32"
LAVENDER = "#ba8bff"

GRADIENT = "linear-gradient(135deg, #ba8bff 0%, #d5ec2c 100%)"


class ScriptedRandom:
    """RandomSource that replays a fixed sequence of draws, then repeats the last."""

    def __init__(self, *values: float) -> None:
        self.values = list(values) or [0.0]
        self.calls = 0

    def random(self) -> float:
        value = self.values[min(self.calls, len(self.values) - 1)]
        self.calls += 1
        return value


def make_grid(tiles: list[Tile] | None = None, columns: int = 4, rows: int = 4, **kwargs) -> GridConfig:
    """Small square canvas with round-number geometry: 400px, no padding, no gap."""
    params = dict(width=400, height=400, gap=0, padding=0, border_radius=8)
    params.update(kwargs)
    return GridConfig(columns=columns, rows=rows, tiles=tiles or [], **params)


def make_tile(tile_id: str, x: int, y: int, w: int = 1, h: int = 1, **kwargs) -> Tile:
    kwargs.setdefault("title", f"Tile {tile_id}")
    return Tile(id=tile_id, column=x, row=y, col_span=w, row_span=h, **kwargs)


@pytest.fixture
def seed_grid() -> GridConfig:
    return default_grid_config()


@pytest.fixture
def two_tile_grid() -> GridConfig:
    """4x4 grid: A at (0,0) 2x2, B at (2,0) 2x2, bottom half empty."""
    return make_grid([
        make_tile("A", 0, 0, 2, 2, background_color=LIME),
        make_tile("B", 2, 0, 2, 2, background_color=NAVY),
    ])


@pytest.fixture
def nested_grid() -> GridConfig:
    """Seed document whose tile "2" holds a 2x2 sub-grid of four 1x1 tiles."""
    from bentogrid.models.grid import SubGrid

    config = default_grid_config()
    parent = config.find_tile("2")
    parent.sub_grid = SubGrid(
        sub_rows=2,
        sub_columns=2,
        tiles=[
            make_tile("s1", 0, 0, kind=TileKind.STAT),
            make_tile("s2", 1, 0),
            make_tile("s3", 0, 1),
            make_tile("s4", 1, 1),
        ],
    )
    return config
