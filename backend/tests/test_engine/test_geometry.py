"""Tests for the cell <-> pixel projector."""

from __future__ import annotations

import pytest

from bentogrid.engine.geometry import Rect, main_geometry, sub_grid_geometry
from tests.conftest import make_grid, make_tile

# 1080px canvas, 40px padding, 16px gap, 7 columns
SEED_CELL = (1080 - 2 * 40 - 6 * 16) / 7


def test_cell_size(seed_grid):
    geometry = main_geometry(seed_grid)
    assert geometry.cell_width == pytest.approx(SEED_CELL)
    assert geometry.cell_height == pytest.approx(SEED_CELL)


def test_cell_rect(seed_grid):
    rect = main_geometry(seed_grid).cell_rect(seed_grid.find_tile("5"))
    assert rect.x == pytest.approx(40 + 4 * (SEED_CELL + 16))
    assert rect.y == pytest.approx(40 + 4 * (SEED_CELL + 16))
    assert rect.w == pytest.approx(3 * SEED_CELL + 2 * 16)
    assert rect.h == pytest.approx(3 * SEED_CELL + 2 * 16)


GAP_PADDING = [(0, 0), (16, 40), (7.5, 13), (30, 0), (0, 25)]


def _box(tile):
    return (tile.column, tile.row, tile.col_span, tile.row_span)


@pytest.mark.parametrize("gap, padding", GAP_PADDING)
def test_round_trip(seed_grid, gap, padding):
    seed_grid.gap = gap
    seed_grid.padding = padding
    geometry = main_geometry(seed_grid)
    for tile in seed_grid.tiles:
        assert geometry.rect_to_cells(geometry.cell_rect(tile)) == _box(tile)


@pytest.mark.parametrize("gap, padding", GAP_PADDING)
def test_round_trip_in_sub_grid(nested_grid, gap, padding):
    nested_grid.gap = gap
    nested_grid.padding = padding
    parent = nested_grid.find_tile("2")
    parent.inner_padding = 6
    sub = sub_grid_geometry(nested_grid, parent)
    for child in parent.sub_grid.tiles:
        assert sub.rect_to_cells(sub.cell_rect(child)) == _box(child)


def test_inner_padding_insets_visible_rect():
    config = make_grid([make_tile("A", 1, 1, inner_padding=10)])
    geometry = main_geometry(config)
    assert geometry.cell_rect(config.tiles[0]) == Rect(100, 100, 100, 100)
    assert geometry.tile_rect(config.tiles[0]) == Rect(110, 110, 80, 80)


def test_inset_never_negative():
    assert Rect(0, 0, 100, 40).inset(30) == Rect(30, 30, 40, 0)


def test_cell_at():
    geometry = main_geometry(make_grid(gap=20, padding=10))
    assert geometry.cell_at(10, 10) == (0, 0)
    assert geometry.cell_at(5, 50) is None
    assert geometry.cell_at(390, 390) == (3, 3)
    assert geometry.cell_at(400, 500) is None


def test_sub_grid_halves_gap(nested_grid):
    parent = nested_grid.find_tile("2")
    outer = main_geometry(nested_grid).tile_rect(parent)
    sub = sub_grid_geometry(nested_grid, parent)

    assert sub.gap == 8
    assert sub.padding == 0
    assert sub.pixel_x(0) == pytest.approx(outer.x)
    assert sub.pixel_y(0) == pytest.approx(outer.y)
    # Two sub-columns plus one half gap fill the parent exactly
    assert sub.pixel_w(2) == pytest.approx(outer.w)
    assert sub.pixel_x(1) == pytest.approx(outer.x + sub.cell_width + 8)


def test_sub_geometry_none_without_sub_grid(seed_grid):
    assert sub_grid_geometry(seed_grid, seed_grid.find_tile("1")) is None


def test_local_frame(nested_grid):
    sub = sub_grid_geometry(nested_grid, nested_grid.find_tile("2")).local()
    assert (sub.origin_x, sub.origin_y) == (0, 0)
    assert sub.pixel_x(0) == 0
