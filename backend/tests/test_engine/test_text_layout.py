"""Tests for deterministic title/content layout."""

from __future__ import annotations

import pytest

from bentogrid.engine.text_layout import SizeClass, layout_text, size_class, wrap_text
from bentogrid.models.grid import TileKind, TileShape
from tests.conftest import make_tile

THREE_LINE_TITLE = "Quarterly revenue grew faster than anyone expected across every"


def test_wrap_text_greedy():
    assert wrap_text("a bb ccc", 4) == ["a bb", "ccc"]
    assert wrap_text("one two", 7) == ["one two"]


def test_wrap_text_long_word_gets_own_line():
    assert wrap_text("supercalifragilistic x", 5) == ["supercalifragilistic", "x"]


@pytest.mark.parametrize("text", ["", "   "])
def test_wrap_text_empty(text):
    assert wrap_text(text, 10) == []


def test_size_class():
    assert size_class(make_tile("A", 0, 0, 1, 3)) == SizeClass.SMALL
    assert size_class(make_tile("A", 0, 0, 3, 1)) == SizeClass.SMALL
    assert size_class(make_tile("A", 0, 0, 2, 2)) == SizeClass.LARGE
    assert size_class(make_tile("A", 0, 0, 2, 2), nested=True) == SizeClass.SUB


def test_content_starts_below_wrapped_title():
    tile = make_tile("A", 0, 0, 4, 4, title=THREE_LINE_TITLE, content="Details")
    layout = layout_text(tile, 400, 400)
    line_height = layout.metrics.title_line_height

    assert layout.title_lines == ["Quarterly revenue grew", "faster than anyone", "expected across every"]
    last_line_y = layout.title_y + 2 * line_height
    assert layout.content_y > last_line_y + line_height
    assert layout.content_y == pytest.approx(32 + 3 * 24 * 1.1 + 16)


def test_content_truncated_to_four_lines():
    tile = make_tile("A", 0, 0, 1, 1, title="T", content=" ".join(["word"] * 40))
    layout = layout_text(tile, 100, 100)
    assert len(layout.content_lines) == 4


def test_small_tile_metrics():
    layout = layout_text(make_tile("A", 0, 0, 1, 2, title="Hi"), 100, 200)
    assert layout.metrics.title_size == 14
    assert layout.metrics.content_size == 10
    assert layout.metrics.title_chars == 12
    assert layout.metrics.block_gap == 8


@pytest.mark.parametrize("w, expected", [(1, 32), (2, 64)])
def test_stat_title_size(w, expected):
    tile = make_tile("A", 0, 0, w, 2, kind=TileKind.STAT, title="99")
    assert layout_text(tile, 200, 200).metrics.title_size == expected


def test_stat_block_is_vertically_centered():
    tile = make_tile("A", 0, 0, 2, 2, kind=TileKind.STAT, title="Users", content="+12k")
    layout = layout_text(tile, 400, 400)
    block = 64 + 16 + 14 * 1.2
    assert layout.title_y == pytest.approx(200 - block / 2 + 64 * 0.2)
    assert layout.anchor == "start"


def test_circle_is_centered_horizontally():
    tile = make_tile("A", 0, 0, 2, 2, shape=TileShape.CIRCLE, title="Round")
    layout = layout_text(tile, 300, 300)
    assert layout.anchor == "middle"
    assert layout.x == 150


def test_non_square_circle_renders_as_rectangle():
    tile = make_tile("A", 0, 0, 2, 1, shape=TileShape.CIRCLE, title="Wide")
    layout = layout_text(tile, 300, 100)
    assert layout.anchor == "start"
    assert layout.x == 24
    assert layout.title_y == 32


def test_sub_tile_layout():
    tile = make_tile("s1", 0, 0, title="Sub", content="child")
    layout = layout_text(tile, 100, 80, nested=True)
    assert layout.metrics.title_size == 10
    assert (layout.x, layout.title_y) == (10, 15)
    assert layout.content_y == pytest.approx(15 + 11 + 4)


def test_sub_tile_circle_centers_on_half_height():
    tile = make_tile("s1", 0, 0, shape=TileShape.CIRCLE, kind=TileKind.STAT, title="7")
    layout = layout_text(tile, 80, 80, nested=True)
    assert layout.title_y == 30
    assert layout.x == 40


def test_sub_tile_stat_is_not_centered():
    tile = make_tile("s1", 0, 0, kind=TileKind.STAT, title="7")
    assert layout_text(tile, 80, 80, nested=True).title_y == 15


def test_empty_title_takes_no_room_in_centered_block():
    tile = make_tile("A", 0, 0, 2, 2, kind=TileKind.STAT, title="", content="+12k")
    layout = layout_text(tile, 400, 400)
    assert layout.title_lines == []
    block = 16 + 14 * 1.2
    assert layout.title_y == pytest.approx(200 - block / 2 + 64 * 0.2)
    assert layout.content_y == pytest.approx(layout.title_y + 16)
