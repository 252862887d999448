from __future__ import annotations

import numpy as np

from plotit.colours import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 0)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    fill_rect(dst, x0, y, x1, y, color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    fill_rect(dst, x, y0, x, y1, color)


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Fill the inclusive rectangle spanned by the two corners, clipped to ``dst``."""
    left = max(0, min(x0, x1))
    right = min(dst.shape[1] - 1, max(x0, x1))
    top = max(0, min(y0, y1))
    bottom = min(dst.shape[0] - 1, max(y0, y1))
    if left > right or top > bottom:
        return
    _blend_region(dst[top : bottom + 1, left : right + 1], color)


def fill_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    """Paint ``color`` wherever the boolean ``mask`` (placed at ``x``, ``y``) is set."""
    coverage = mask.astype(np.uint8) * 255
    blend_mask(dst, x, y, coverage, color)


def blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    """Composite ``color`` through an 8-bit coverage ``mask`` whose top-left sits at ``x``, ``y``."""
    h, w = mask.shape
    if h <= 0 or w <= 0:
        return

    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    sx0 = x0 - x
    sy0 = y0 - y
    cov = mask[sy0 : sy0 + (y1 - y0), sx0 : sx0 + (x1 - x0)].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    painted = src_alpha > 0
    patch[:, :, :3] = np.where(painted[:, :, None], np.clip(np.rint(out_rgb), 0, 255), patch[:, :, :3]).astype(np.uint8)
    patch[:, :, 3] = np.where(painted, np.clip(np.rint(out_alpha * 255.0), 0, 255), patch[:, :, 3]).astype(np.uint8)


def _blend_region(region: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    if a >= 1.0:
        region[:, :, 0] = color[0]
        region[:, :, 1] = color[1]
        region[:, :, 2] = color[2]
        region[:, :, 3] = 255
        return
    inv = 1.0 - a
    current = region[:, :, :3].astype(np.float32)
    region[:, :, :3] = np.rint(np.asarray(color[0:3], dtype=np.float32) * a + current * inv).astype(np.uint8)
    region[:, :, 3] = 255
