from __future__ import annotations

from enum import Enum


class AxisSide(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    BOTH = "both"


class Quadrants(Enum):
    """Which cartesian quadrants a graph has to draw."""

    TOP_RIGHT = "top_right"
    TOP_LEFT = "top_left"
    BOTTOM_RIGHT = "bottom_right"
    BOTTOM_LEFT = "bottom_left"
    RIGHT_PAIR = "right_pair"
    LEFT_PAIR = "left_pair"
    TOP_PAIR = "top_pair"
    BOTTOM_PAIR = "bottom_pair"
    ALL = "all"

    @property
    def x_side(self) -> AxisSide:
        return _SIDES[self][0]

    @property
    def y_side(self) -> AxisSide:
        return _SIDES[self][1]


class LegendCorner(Enum):
    TOP_RIGHT = "top_right"
    TOP_LEFT = "top_left"
    BOTTOM_RIGHT = "bottom_right"
    BOTTOM_LEFT = "bottom_left"

    @property
    def is_left(self) -> bool:
        return self in (LegendCorner.TOP_LEFT, LegendCorner.BOTTOM_LEFT)

    @property
    def is_bottom(self) -> bool:
        return self in (LegendCorner.BOTTOM_LEFT, LegendCorner.BOTTOM_RIGHT)


# (x side, y side) -> quadrants
_LOOKUP: dict[tuple[AxisSide, AxisSide], Quadrants] = {
    (AxisSide.POSITIVE, AxisSide.POSITIVE): Quadrants.TOP_RIGHT,
    (AxisSide.NEGATIVE, AxisSide.POSITIVE): Quadrants.TOP_LEFT,
    (AxisSide.POSITIVE, AxisSide.NEGATIVE): Quadrants.BOTTOM_RIGHT,
    (AxisSide.NEGATIVE, AxisSide.NEGATIVE): Quadrants.BOTTOM_LEFT,
    (AxisSide.POSITIVE, AxisSide.BOTH): Quadrants.RIGHT_PAIR,
    (AxisSide.NEGATIVE, AxisSide.BOTH): Quadrants.LEFT_PAIR,
    (AxisSide.BOTH, AxisSide.POSITIVE): Quadrants.TOP_PAIR,
    (AxisSide.BOTH, AxisSide.NEGATIVE): Quadrants.BOTTOM_PAIR,
    (AxisSide.BOTH, AxisSide.BOTH): Quadrants.ALL,
}
_SIDES: dict[Quadrants, tuple[AxisSide, AxisSide]] = {q: sides for sides, q in _LOOKUP.items()}


def axis_side(vmin: float, vmax: float) -> AxisSide:
    # Zero counts as positive so an axis touching the origin stays single sided.
    if vmin >= 0.0:
        return AxisSide.POSITIVE
    if vmax <= 0.0:
        return AxisSide.NEGATIVE
    return AxisSide.BOTH


def get_quadrants(x_min: float, x_max: float, y_min: float, y_max: float) -> Quadrants:
    return quadrants_for(axis_side(x_min, x_max), axis_side(y_min, y_max))


def quadrants_for(x_side: AxisSide, y_side: AxisSide) -> Quadrants:
    return _LOOKUP[(x_side, y_side)]


def legend_corner(quadrants: Quadrants) -> LegendCorner:
    """Corner of the canvas whose gutter holds the legend.

    The gutter sits on the side away from the y-axis and at the end away from
    the x-axis, so it never shares space with the axis labels.
    """
    left = quadrants.x_side is AxisSide.NEGATIVE
    bottom = quadrants.y_side is AxisSide.NEGATIVE
    if left:
        return LegendCorner.BOTTOM_LEFT if bottom else LegendCorner.TOP_LEFT
    return LegendCorner.BOTTOM_RIGHT if bottom else LegendCorner.TOP_RIGHT
