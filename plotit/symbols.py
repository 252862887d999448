from __future__ import annotations

import math

from plotit.colours import RGBA
from plotit.graph import SymbolKind
from plotit.mapper import round_half_away
from plotit.primitives import Circle, DrawPrimitive, FilledShape, Line, OutlinedShape, Point, Polygon, Shape


POINT_RADIUS = 1
_SIN_60 = math.sqrt(3.0) / 2.0


def symbol_primitives(
    kind: SymbolKind,
    center: Point,
    radius: int,
    thickness: int,
    colour: RGBA,
    *,
    filled: bool = False,
) -> list[DrawPrimitive]:
    """Primitives drawing one data symbol centred on ``center``.

    ``thickness`` is the extra stroke width beyond one pixel.
    """
    width = thickness + 1
    cx, cy = center
    if kind is SymbolKind.CROSS:
        return [
            Line(start=(cx - radius, cy), end=(cx + radius, cy), colour=colour, width=width),
            Line(start=(cx, cy - radius), end=(cx, cy + radius), colour=colour, width=width),
        ]
    if kind is SymbolKind.POINT:
        return [FilledShape(shape=Circle(center=center, radius=POINT_RADIUS), fill=colour)]

    shape = _shape_for(kind, center, radius)
    if filled:
        return [FilledShape(shape=shape, fill=colour)]
    return [OutlinedShape(shape=shape, colour=colour, width=width)]


def symbol_extent(kind: SymbolKind, radius: int, thickness: int) -> int:
    """Half-size in pixels of the box a symbol paints into."""
    if kind is SymbolKind.POINT:
        return POINT_RADIUS
    return radius + (thickness + 1) // 2


def _shape_for(kind: SymbolKind, center: Point, radius: int) -> Shape:
    cx, cy = center
    if kind is SymbolKind.CIRCLE:
        return Circle(center=center, radius=radius)
    if kind is SymbolKind.SQUARE:
        return Polygon(
            vertices=(
                (cx - radius, cy - radius),
                (cx + radius, cy - radius),
                (cx + radius, cy + radius),
                (cx - radius, cy + radius),
            )
        )
    if kind is SymbolKind.TRIANGLE:
        dx = round_half_away(radius * _SIN_60)
        dy = round_half_away(radius / 2.0)
        return Polygon(vertices=((cx, cy - radius), (cx + dx, cy + dy), (cx - dx, cy + dy)))
    raise ValueError(f"symbol {kind!r} has no outline shape")
