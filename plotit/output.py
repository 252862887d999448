from __future__ import annotations

import logging
import re
from pathlib import Path

import numpy as np
from PIL import Image

from plotit.errors import PlotError


LOGGER = logging.getLogger(__name__)

_UNSAFE_FILE_CHARS = re.compile(r"\s|\W")


def output_file_name(title: str) -> str:
    """``"My Graph!"`` -> ``"my_graph_.png"``."""
    return _UNSAFE_FILE_CHARS.sub("_", title).lower() + ".png"


def save_png(frame: np.ndarray, output_dir: str | Path, title: str) -> Path:
    if frame.ndim != 3 or frame.shape[2] != 4 or frame.dtype != np.uint8:
        raise ValueError(f"expected an (H, W, 4) uint8 frame, got {frame.shape} {frame.dtype}")
    out_dir = Path(output_dir)
    path = out_dir / output_file_name(title)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        Image.fromarray(np.ascontiguousarray(frame)).save(path, format="PNG")
    except OSError as exc:
        raise PlotError(f"unable to write {path}: {exc}") from exc
    LOGGER.info("saved graph to %s", path)
    return path
