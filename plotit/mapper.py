from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from plotit.errors import PlotDataError
from plotit.scales import AxisLayout


# Pixel coordinates are clamped to this magnitude before integer conversion.
PIXEL_LIMIT = 2**30


def round_half_away(value: float) -> int:
    rounded = math.copysign(math.floor(abs(value) + 0.5), value)
    return int(max(-PIXEL_LIMIT, min(PIXEL_LIMIT, rounded)))


def round_half_away_array(values: np.ndarray) -> np.ndarray:
    rounded = np.copysign(np.floor(np.abs(values) + 0.5), values)
    np.clip(rounded, -PIXEL_LIMIT, PIXEL_LIMIT, out=rounded)
    return rounded.astype(np.int64)


@dataclass(frozen=True)
class CoordinateMapper:
    """Affine data <-> pixel transform for one resolved axis layout.

    ``scale_y`` is negative: data y grows upward while pixel rows grow
    downward. Nothing is clipped here; off-canvas pixels are the renderer's
    problem.
    """

    layout: AxisLayout

    def to_pixel(self, x: float, y: float) -> tuple[int, int]:
        if not (math.isfinite(x) and math.isfinite(y)):
            raise PlotDataError(f"cannot map non-finite point ({x}, {y})")
        ox, oy = self.layout.origin
        return (
            round_half_away(ox + x * self.layout.scale_x),
            round_half_away(oy + y * self.layout.scale_y),
        )

    def to_pixels(self, xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
            raise PlotDataError("cannot map non-finite points")
        ox, oy = self.layout.origin
        px = round_half_away_array(ox + xs * self.layout.scale_x)
        py = round_half_away_array(oy + ys * self.layout.scale_y)
        return px, py

    def to_data(self, px: float, py: float) -> tuple[float, float]:
        ox, oy = self.layout.origin
        return (
            (px - ox) / self.layout.scale_x,
            (py - oy) / self.layout.scale_y,
        )
