from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import numpy as np

from plotit.config import load_graph_spec
from plotit.data import load_all_samples
from plotit.graph import GraphSpec
from plotit.render import render_primitives
from plotit.samples import SampleSet
from plotit.scene import SceneStyle, compose_scene


LOGGER = logging.getLogger(__name__)


def render_graph(spec: GraphSpec, sample_sets: Sequence[SampleSet], style: SceneStyle = SceneStyle()) -> np.ndarray:
    """Compose and paint one scatter graph; returns an ``(H, W, 4)`` uint8 RGBA buffer."""
    scene = compose_scene(spec, sample_sets, style)
    return render_primitives(scene.primitives, scene.width, scene.height)


def build_graph(config_path: str | Path, csv_delimiter: str = ",") -> tuple[GraphSpec, np.ndarray]:
    LOGGER.info("building scatter chart from %s", config_path)
    spec = load_graph_spec(config_path)
    sample_sets = load_all_samples(spec, csv_delimiter)
    return spec, render_graph(spec, sample_sets)
