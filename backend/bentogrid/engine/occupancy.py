"""Cell occupancy queries over a flat tile list. Pure; nothing here mutates input."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from bentogrid.models.grid import Tile


def is_occupied(x: int, y: int, tiles: Sequence[Tile], exclude_id: str | None = None) -> bool:
    """True if any tile other than ``exclude_id`` covers cell (x, y)."""
    for tile in tiles:
        if tile.id == exclude_id:
            continue
        if tile.covers(x, y):
            return True
    return False


def collides(tile: Tile, tiles: Sequence[Tile]) -> bool:
    """True if any cell of ``tile``'s footprint is covered by a different tile."""
    return any(is_occupied(x, y, tiles, exclude_id=tile.id) for x, y in tile.cells())


def footprint_free(
    x: int,
    y: int,
    w: int,
    h: int,
    tiles: Sequence[Tile],
    exclude_id: str | None = None,
) -> bool:
    for j in range(h):
        for i in range(w):
            if is_occupied(x + i, y + j, tiles, exclude_id):
                return False
    return True


def find_free_space(
    w: int,
    h: int,
    tiles: Sequence[Tile],
    columns: int,
    rows: int,
) -> tuple[int, int] | None:
    """First top-left (x, y) where a w x h footprint fits, scanning row-major.

    y is the outer loop and x the inner one, both ascending from 0; callers
    depend on this order for where new tiles land.
    """
    for y in range(rows):
        for x in range(columns):
            if x + w > columns or y + h > rows:
                continue
            if footprint_free(x, y, w, h, tiles):
                return (x, y)
    return None


def occupancy_mask(tiles: Sequence[Tile], columns: int, rows: int) -> NDArray[np.bool_]:
    """rows x columns boolean matrix, True where a tile covers the cell."""
    mask = np.zeros((rows, columns), dtype=bool)
    for tile in tiles:
        mask[tile.row:tile.bottom, tile.column:tile.right] = True
    return mask


def footprint_fits(mask: NDArray[np.bool_], x: int, y: int, w: int, h: int) -> bool:
    """True if the w x h footprint at (x, y) is inside the mask and all free."""
    rows, columns = mask.shape
    if w < 1 or h < 1 or x < 0 or y < 0 or x + w > columns or y + h > rows:
        return False
    return not bool(mask[y:y + h, x:x + w].any())


def mark(mask: NDArray[np.bool_], x: int, y: int, w: int, h: int) -> None:
    mask[y:y + h, x:x + w] = True


def find_layout_violations(tiles: Sequence[Tile], columns: int, rows: int) -> list[str]:
    """Bounds and overlap problems in a tile list, recursing into sub-grids."""
    problems: list[str] = []
    counts = np.zeros((rows, columns), dtype=np.int32)
    seen_ids: set[str] = set()

    for tile in tiles:
        if tile.id in seen_ids:
            problems.append(f"duplicate tile id {tile.id}")
        seen_ids.add(tile.id)

        if tile.right > columns or tile.bottom > rows:
            problems.append(
                f"tile {tile.id} at ({tile.column}, {tile.row}) span "
                f"{tile.col_span}x{tile.row_span} exceeds {columns}x{rows} grid"
            )
            continue
        counts[tile.row:tile.bottom, tile.column:tile.right] += 1

        if tile.sub_grid is not None:
            sub = tile.sub_grid
            for problem in find_layout_violations(sub.tiles, sub.sub_columns, sub.sub_rows):
                problems.append(f"sub-grid of {tile.id}: {problem}")

    overlapping = np.argwhere(counts > 1)
    if len(overlapping):
        cells = ", ".join(f"({int(x)}, {int(y)})" for y, x in overlapping[:5])
        problems.append(f"overlapping tiles at {cells}")

    return problems
