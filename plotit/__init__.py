from plotit.api import build_graph, render_graph
from plotit.best_fit import (
    Cosine,
    Cubic,
    Exponential,
    Gaussian,
    GenericPolynomial,
    Linear,
    Quadratic,
    Sine,
    sample_curve,
)
from plotit.colours import Colour
from plotit.errors import ConfigError, DataSourceError, LayoutPreconditionError, PlotDataError, PlotError
from plotit.graph import DataSetSpec, GraphSpec, SymbolKind
from plotit.mapper import CoordinateMapper
from plotit.quadrants import Quadrants, get_quadrants
from plotit.samples import SampleSet
from plotit.scales import resolve_axis_layout
from plotit.scene import Scene, SceneStyle, compose_scene

__all__ = [
    "Colour",
    "ConfigError",
    "CoordinateMapper",
    "Cosine",
    "Cubic",
    "DataSetSpec",
    "DataSourceError",
    "Exponential",
    "Gaussian",
    "GenericPolynomial",
    "GraphSpec",
    "LayoutPreconditionError",
    "Linear",
    "PlotDataError",
    "PlotError",
    "Quadratic",
    "Quadrants",
    "SampleSet",
    "Scene",
    "SceneStyle",
    "Sine",
    "SymbolKind",
    "build_graph",
    "compose_scene",
    "get_quadrants",
    "render_graph",
    "resolve_axis_layout",
    "sample_curve",
]
