"""Tests for pointer-drag resize sessions."""

from __future__ import annotations

import pytest

from bentogrid.engine.errors import TileLockedError
from bentogrid.engine.resize import ResizeSession, round_half_up, span_delta


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(1.49) == 1
    assert round_half_up(-0.5) == 0
    assert round_half_up(-1.5) == -1


def test_span_delta_accounts_for_gap_and_scale():
    assert span_delta(150, cell_size=80, gap=20) == 2
    assert span_delta(149, cell_size=80, gap=20) == 1
    assert span_delta(150, cell_size=80, gap=20, scale=2.0) == 1
    assert span_delta(-150, cell_size=100, gap=0) == -1


def test_session_captures_start(two_tile_grid):
    session = ResizeSession.begin(two_tile_grid, "A", 200, 200)
    assert (session.start_col_span, session.start_row_span) == (2, 2)
    assert session.candidate(two_tile_grid, 200, 200) == (2, 2)


def test_session_move_commits_free_span(two_tile_grid):
    session = ResizeSession.begin(two_tile_grid, "A", 200, 200)
    # 100px cells, no gap: one row down
    assert session.move(two_tile_grid, 200, 290) is True
    assert two_tile_grid.find_tile("A").row_span == 3
    # Spans are always measured from the start, not the last move
    assert session.move(two_tile_grid, 200, 360) is True
    assert two_tile_grid.find_tile("A").row_span == 4


def test_session_move_rejects_collision(two_tile_grid):
    session = ResizeSession.begin(two_tile_grid, "A", 200, 200)
    assert session.candidate(two_tile_grid, 250, 200) == (3, 2)
    assert session.move(two_tile_grid, 250, 200) is False
    assert two_tile_grid.find_tile("A").col_span == 2


def test_session_shrink_clamps_to_one(two_tile_grid):
    session = ResizeSession.begin(two_tile_grid, "A", 200, 200)
    assert session.move(two_tile_grid, -400, -400) is True
    assert two_tile_grid.find_tile("A").col_span == 1
    assert two_tile_grid.find_tile("A").row_span == 1


def test_session_respects_canvas_scale(two_tile_grid):
    session = ResizeSession.begin(two_tile_grid, "A", 0, 0, scale=0.5)
    # At half zoom one cell is 50 screen pixels
    assert session.candidate(two_tile_grid, 0, 100) == (2, 4)


def test_locked_tile_cannot_start_session(two_tile_grid):
    two_tile_grid.find_tile("A").locked = True
    with pytest.raises(TileLockedError):
        ResizeSession.begin(two_tile_grid, "A", 0, 0)


def test_sub_tile_session_uses_sub_grid_cells(nested_grid):
    session = ResizeSession.begin(nested_grid, "s1", 0, 0, parent_id="2")
    sub_grid = nested_grid.find_tile("2").sub_grid
    sub_grid.tiles = [t for t in sub_grid.tiles if t.id != "s2"]
    assert session.move(nested_grid, 300, 0) is True
    assert session.move(nested_grid, 300, 400) is False
    s1 = sub_grid.find_tile("s1")
    assert (s1.col_span, s1.row_span) == (2, 1)
