"""Write a GridConfig out as a standalone SVG document.

Placement comes from the geometry projector and text from ``text_layout``, the
same code the interactive canvas uses, so export matches the screen.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from bentogrid.engine.color import resolve_fill
from bentogrid.engine.geometry import GridGeometry, main_geometry
from bentogrid.engine.text_layout import TextLayout, layout_text
from bentogrid.models.grid import GridConfig, Tile

SVG_NS = "http://www.w3.org/2000/svg"

XML_PROLOG = '<?xml version="1.0" encoding="UTF-8" standalone="no"?>'
SVG_DOCTYPE = (
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">'
)

FONT_FAMILY = "Arial, Helvetica, sans-serif"

# rx/ry large enough that any square tile renders as a circle
CIRCLE_RADIUS = 9999

_ATTR_ENTITIES = {'"': "&quot;"}


def fmt(value: float) -> str:
    """Number as SVG text: 2 decimals max, no trailing zeros."""
    rounded = round(float(value), 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.2f}".rstrip("0").rstrip(".")


def _attr(value: str) -> str:
    return escape(value, _ATTR_ENTITIES)


def corner_radius(tile: Tile, border_radius: float) -> float:
    return CIRCLE_RADIUS if tile.is_circle else border_radius


def _text_block(
    lines: list[str],
    layout: TextLayout,
    y: float,
    size: float,
    line_height: float,
    fill: str,
    extra: str,
) -> str:
    x = fmt(layout.x)
    parts = [
        f'<text x="{x}" y="{fmt(y)}" font-family="{FONT_FAMILY}"{extra} '
        f'font-size="{fmt(size)}px" fill="{_attr(fill)}" text-anchor="{layout.anchor}" '
        f'dominant-baseline="text-before-edge">'
    ]
    for i, line in enumerate(lines):
        dy = 0 if i == 0 else line_height
        parts.append(f'<tspan x="{x}" dy="{fmt(dy)}">{escape(line)}</tspan>')
    parts.append("</text>")
    return "".join(parts)


def render_text(tile: Tile, width: float, height: float, nested: bool = False) -> list[str]:
    layout = layout_text(tile, width, height, nested=nested)
    m = layout.metrics
    out: list[str] = []
    if layout.title_lines:
        out.append(_text_block(
            layout.title_lines, layout, layout.title_y,
            m.title_size, m.title_line_height, tile.text_color,
            ' font-weight="bold"',
        ))
    if layout.content_lines:
        out.append(_text_block(
            layout.content_lines, layout, layout.content_y,
            m.content_size, m.content_line_height, tile.text_color,
            ' opacity="0.9"',
        ))
    return out


def render_tile(
    tile: Tile,
    geometry: GridGeometry,
    border_radius: float,
    nested: bool = False,
    native_text: bool = True,
    indent: str = "  ",
) -> list[str]:
    """One tile as a translated <g>; sub-grids recurse in the tile's local frame.

    An emptied sub-grid does not make a container: the tile keeps its own text.
    """
    rect = geometry.tile_rect(tile)
    radius = fmt(corner_radius(tile, border_radius))

    lines = [
        f'{indent}<g transform="translate({fmt(rect.x)}, {fmt(rect.y)})">',
        f'{indent}  <rect width="{fmt(rect.w)}" height="{fmt(rect.h)}" '
        f'rx="{radius}" ry="{radius}" fill="{_attr(resolve_fill(tile.background_color))}" />',
    ]

    sub = geometry.sub_geometry(tile)
    if sub is not None and tile.has_sub_grid:
        frame = sub.local()
        for child in tile.sub_grid.tiles:
            lines.extend(render_tile(
                child, frame, border_radius / 2,
                nested=True, native_text=native_text, indent=indent + "  ",
            ))
    elif native_text:
        for block in render_text(tile, rect.w, rect.h, nested=nested):
            lines.append(f"{indent}  {block}")

    lines.append(f"{indent}</g>")
    return lines


def render_svg(
    config: GridConfig,
    include_header: bool = False,
    native_text: bool = True,
) -> str:
    """Full document. ``native_text=False`` exports geometry only."""
    geometry = main_geometry(config)
    width = fmt(config.width)
    height = fmt(config.height)

    lines: list[str] = []
    if include_header:
        lines.append(XML_PROLOG)
        lines.append(SVG_DOCTYPE)
    lines.append(
        f'<svg width="{width}px" height="{height}px" '
        f'viewBox="0 0 {width} {height}" xmlns="{SVG_NS}">'
    )
    for tile in config.tiles:
        lines.extend(render_tile(tile, geometry, config.border_radius, native_text=native_text))
    lines.append("</svg>")
    return "\n".join(lines)
