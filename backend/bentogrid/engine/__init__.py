"""BentoGrid layout engine."""

from bentogrid.engine.geometry import GridGeometry, Rect, main_geometry
from bentogrid.engine.packer import pack
from bentogrid.engine.placement import (
    add_at_position,
    add_nearest_free,
    delete_tile,
    merge_tiles,
    resize_tile,
)
from bentogrid.engine.resize import ResizeSession

__all__ = [
    "GridGeometry",
    "Rect",
    "main_geometry",
    "pack",
    "add_at_position",
    "add_nearest_free",
    "delete_tile",
    "merge_tiles",
    "resize_tile",
    "ResizeSession",
]
