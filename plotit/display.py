from __future__ import annotations

import logging
import math
from dataclasses import dataclass


LOGGER = logging.getLogger(__name__)

CANVAS_BORDER_PIXELS = 10
MIN_FONT_SIZE_PX = 6.0
GOLDEN_RATIO = (1.0 + math.sqrt(5.0)) / 2.0
# Empirical scale applied on top of the golden-ratio line height.
TITLE_SCALE = 1.5


@dataclass(frozen=True)
class FontSizes:
    title: float
    axis: float
    axis_unit: float
    legend: float

    @classmethod
    def for_canvas(cls, width: int, height: int) -> "FontSizes":
        """Golden-ratio typography keyed off the canvas width.

        The line height is the square root of the width and the title size is
        that line height divided by phi. Axis labels are half the title size;
        scale markers and legend rows share the axis size.
        """
        del height
        line_height = math.sqrt(max(0, width))
        title = max(MIN_FONT_SIZE_PX, TITLE_SCALE * line_height / GOLDEN_RATIO)
        axis = max(MIN_FONT_SIZE_PX, title / 2.0)
        sizes = cls(title=title, axis=axis, axis_unit=axis, legend=axis)
        LOGGER.debug("font sizes for %dpx wide canvas: %s", width, sizes)
        return sizes
