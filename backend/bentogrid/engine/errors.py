"""Placement failure conditions. Raised before any field of the model changes."""

from __future__ import annotations


class PlacementError(Exception):
    """Base class for rejected placement operations."""

    code = "placement_error"


class OccupiedCellError(PlacementError):
    code = "occupied"

    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"Cell ({x}, {y}) is occupied")
        self.x = x
        self.y = y


class GridFullError(PlacementError):
    code = "grid_full"

    def __init__(self) -> None:
        super().__init__("Grid is full")


class TileNotFoundError(PlacementError):
    code = "not_found"

    def __init__(self, tile_id: str) -> None:
        super().__init__(f"Unknown tile: {tile_id}")
        self.tile_id = tile_id


class TileLockedError(PlacementError):
    code = "locked"

    def __init__(self, tile_id: str) -> None:
        super().__init__(f"Tile {tile_id} is locked")
        self.tile_id = tile_id


class MergeError(PlacementError):
    code = "merge_rejected"
