from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from plotit.colours import RGBA


Point = tuple[int, int]


class Layer(IntEnum):
    """Fixed back-to-front paint order."""

    BACKGROUND = 0
    GRID = 1
    AXES = 2
    LABELS = 3
    BEST_FIT = 4
    DATA = 5
    LEGEND = 6


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: int


@dataclass(frozen=True)
class Polygon:
    vertices: tuple[Point, ...]


@dataclass(frozen=True)
class Rect:
    x0: int
    y0: int
    x1: int
    y1: int


Shape = Union[Circle, Polygon, Rect]


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point
    colour: RGBA
    width: int = 1


@dataclass(frozen=True)
class Polyline:
    points: tuple[Point, ...]
    colour: RGBA
    width: int = 1


@dataclass(frozen=True)
class FilledShape:
    shape: Shape
    fill: RGBA
    outline: RGBA | None = None
    outline_width: int = 0


@dataclass(frozen=True)
class OutlinedShape:
    shape: Shape
    colour: RGBA
    width: int = 1


@dataclass(frozen=True)
class GlyphRun:
    """Text whose rendered bounding box has its top-left corner at ``anchor``."""

    anchor: Point
    text: str
    colour: RGBA
    font_size: float
    rotate_deg: int = 0


DrawPrimitive = Union[Line, Polyline, FilledShape, OutlinedShape, GlyphRun]
