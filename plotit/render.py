from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from plotit.colours import RGBA
from plotit.primitives import (
    Circle,
    DrawPrimitive,
    FilledShape,
    GlyphRun,
    Line,
    OutlinedShape,
    Polygon,
    Polyline,
    Rect,
    Shape,
)
from plotit.raster import (
    draw_line,
    draw_polyline,
    draw_text,
    fill_circle,
    fill_polygon,
    fill_rect,
    new_canvas,
    stroke_circle,
    stroke_polygon,
    stroke_rect,
)


LOGGER = logging.getLogger(__name__)


def render_primitives(primitives: Iterable[DrawPrimitive], width: int, height: int) -> np.ndarray:
    """Paint ``primitives`` in order onto a fresh transparent ``(height, width, 4)`` canvas."""
    canvas = new_canvas(width, height)
    count = 0
    for primitive in primitives:
        paint(canvas, primitive)
        count += 1
    LOGGER.debug("painted %d primitives onto %dx%d canvas", count, width, height)
    return canvas


def paint(canvas: np.ndarray, primitive: DrawPrimitive) -> None:
    if isinstance(primitive, Line):
        (x0, y0), (x1, y1) = primitive.start, primitive.end
        draw_line(canvas, x0, y0, x1, y1, color=primitive.colour, width=primitive.width)
    elif isinstance(primitive, Polyline):
        draw_polyline(canvas, primitive.points, color=primitive.colour, width=primitive.width)
    elif isinstance(primitive, FilledShape):
        _fill_shape(canvas, primitive.shape, primitive.fill)
        if primitive.outline is not None and primitive.outline_width > 0:
            _stroke_shape(canvas, primitive.shape, primitive.outline, primitive.outline_width)
    elif isinstance(primitive, OutlinedShape):
        _stroke_shape(canvas, primitive.shape, primitive.colour, primitive.width)
    elif isinstance(primitive, GlyphRun):
        x, y = primitive.anchor
        draw_text(
            canvas,
            x,
            y,
            primitive.text,
            primitive.colour,
            font_size_px=primitive.font_size,
            rotate_deg=primitive.rotate_deg,
        )
    else:
        raise TypeError(f"unsupported draw primitive: {type(primitive)!r}")


def _fill_shape(canvas: np.ndarray, shape: Shape, colour: RGBA) -> None:
    if isinstance(shape, Circle):
        fill_circle(canvas, shape.center[0], shape.center[1], shape.radius, colour)
    elif isinstance(shape, Polygon):
        fill_polygon(canvas, shape.vertices, colour)
    elif isinstance(shape, Rect):
        fill_rect(canvas, shape.x0, shape.y0, shape.x1, shape.y1, colour)
    else:
        raise TypeError(f"unsupported shape: {type(shape)!r}")


def _stroke_shape(canvas: np.ndarray, shape: Shape, colour: RGBA, width: int) -> None:
    if isinstance(shape, Circle):
        stroke_circle(canvas, shape.center[0], shape.center[1], shape.radius, colour, width=width)
    elif isinstance(shape, Polygon):
        stroke_polygon(canvas, shape.vertices, colour, width=width)
    elif isinstance(shape, Rect):
        stroke_rect(canvas, shape.x0, shape.y0, shape.x1, shape.y1, colour, width=width)
    else:
        raise TypeError(f"unsupported shape: {type(shape)!r}")
