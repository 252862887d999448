from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from PIL import Image, ImageDraw

from plotit.colours import RGBA
from plotit.raster.canvas import draw_hline, draw_vline, fill_mask
from plotit.raster.draw_lines import draw_polyline


def fill_circle(dst: np.ndarray, cx: int, cy: int, radius: int, color: RGBA) -> None:
    if radius < 0:
        return
    window = _circle_window(dst, cx, cy, radius)
    if window is None:
        return
    x0, y0, d2 = window
    fill_mask(dst, x0, y0, d2 <= (radius + 0.5) ** 2, color)


def stroke_circle(dst: np.ndarray, cx: int, cy: int, radius: int, color: RGBA, width: int = 1) -> None:
    if radius < 0 or width < 1:
        return
    window = _circle_window(dst, cx, cy, radius)
    if window is None:
        return
    x0, y0, d2 = window
    ring = d2 <= (radius + 0.5) ** 2
    inner = radius - width + 0.5
    if inner > 0:
        ring &= d2 > inner * inner
    fill_mask(dst, x0, y0, ring, color)


def fill_polygon(dst: np.ndarray, vertices: Sequence[tuple[int, int]], color: RGBA) -> None:
    if len(vertices) < 3:
        return
    xs = [int(v[0]) for v in vertices]
    ys = [int(v[1]) for v in vertices]
    x0 = max(0, min(xs))
    y0 = max(0, min(ys))
    x1 = min(dst.shape[1] - 1, max(xs))
    y1 = min(dst.shape[0] - 1, max(ys))
    if x0 > x1 or y0 > y1:
        return
    image = Image.new("1", (x1 - x0 + 1, y1 - y0 + 1), 0)
    ImageDraw.Draw(image).polygon([(x - x0, y - y0) for x, y in zip(xs, ys)], fill=1, outline=1)
    fill_mask(dst, x0, y0, np.asarray(image, dtype=bool), color)


def stroke_polygon(dst: np.ndarray, vertices: Sequence[tuple[int, int]], color: RGBA, width: int = 1) -> None:
    if len(vertices) < 2:
        return
    closed = list(vertices) + [vertices[0]]
    draw_polyline(dst, closed, color=color, width=width)


def stroke_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int = 1) -> None:
    """Outline drawn inside the inclusive rectangle."""
    if width < 1:
        return
    left, right = min(x0, x1), max(x0, x1)
    top, bottom = min(y0, y1), max(y0, y1)
    for i in range(min(width, (bottom - top) // 2 + 1)):
        draw_hline(dst, left, right, top + i, color)
        draw_hline(dst, left, right, bottom - i, color)
    for i in range(min(width, (right - left) // 2 + 1)):
        draw_vline(dst, left + i, top, bottom, color)
        draw_vline(dst, right - i, top, bottom, color)


def _circle_window(dst: np.ndarray, cx: int, cy: int, radius: int) -> tuple[int, int, np.ndarray] | None:
    x0 = max(0, cx - radius)
    y0 = max(0, cy - radius)
    x1 = min(dst.shape[1] - 1, cx + radius)
    y1 = min(dst.shape[0] - 1, cy + radius)
    if x0 > x1 or y0 > y1:
        return None
    yy, xx = np.mgrid[y0 : y1 + 1, x0 : x1 + 1]
    d2 = (xx - cx).astype(np.float64) ** 2 + (yy - cy).astype(np.float64) ** 2
    return x0, y0, d2
