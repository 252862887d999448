from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from plotit.colours import RGBA
from plotit.raster.canvas import fill_rect


def draw_line(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int = 1) -> None:
    if width < 1:
        return
    clipped = _clip_segment(dst, x0, y0, x1, y1, pad=width)
    if clipped is None:
        return
    _draw_line_segment(dst, *clipped, color=color, width=width)


def draw_polyline(dst: np.ndarray, points: Sequence[tuple[int, int]], color: RGBA, width: int = 1) -> None:
    if len(points) < 2:
        return
    for (x0, y0), (x1, y1) in zip(points[:-1], points[1:]):
        draw_line(dst, int(x0), int(y0), int(x1), int(y1), color=color, width=width)


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    # Covers exactly ``width`` pixels per axis; even widths lean right/down.
    lo = -((width - 1) // 2)
    hi = width // 2
    fill_rect(dst, x + lo, y + lo, x + hi, y + hi, color)


def _clip_segment(
    dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, *, pad: int
) -> tuple[int, int, int, int] | None:
    """Liang-Barsky clip against the canvas grown by ``pad`` pixels.

    Keeps Bresenham's walk bounded when endpoints sit far off canvas.
    """
    xmin, ymin = -pad, -pad
    xmax, ymax = dst.shape[1] - 1 + pad, dst.shape[0] - 1 + pad
    if xmin <= x0 <= xmax and xmin <= x1 <= xmax and ymin <= y0 <= ymax and ymin <= y1 <= ymax:
        return (x0, y0, x1, y1)

    dx = float(x1 - x0)
    dy = float(y1 - y0)
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - xmin), (dx, xmax - x0), (-dy, y0 - ymin), (dy, ymax - y0)):
        if p == 0.0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (
        int(round(x0 + t0 * dx)),
        int(round(y0 + t0 * dy)),
        int(round(x0 + t1 * dx)),
        int(round(y0 + t1 * dy)),
    )
