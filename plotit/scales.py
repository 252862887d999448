from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

import numpy as np

from plotit.errors import LayoutPreconditionError, PlotDataError
from plotit.graph import GraphSpec
from plotit.quadrants import AxisSide, Quadrants, axis_side, quadrants_for
from plotit.samples import SampleSet


LOGGER = logging.getLogger(__name__)

EXTENT_MARGIN = 0.1
FALLBACK_EXTENT = 1.0


@dataclass(frozen=True)
class DataBounds:
    x_min: float
    x_max: float
    y_min: float
    y_max: float


@dataclass(frozen=True)
class AxisRange:
    side: AxisSide
    step: float
    negative_divisions: int
    positive_divisions: int
    resolution: int

    @property
    def divisions(self) -> int:
        return self.negative_divisions + self.positive_divisions

    @property
    def data_min(self) -> float:
        return -self.negative_divisions * self.step

    @property
    def data_max(self) -> float:
        return self.positive_divisions * self.step

    @property
    def extent(self) -> float:
        return max(-self.data_min, self.data_max)

    def marker_indices(self) -> list[int]:
        return [k for k in range(-self.negative_divisions, self.positive_divisions + 1) if k != 0]

    def marker_values(self) -> list[float]:
        return [k * self.step for k in self.marker_indices()]


@dataclass(frozen=True)
class AxisExtents:
    bounds: DataBounds
    quadrants: Quadrants
    x: AxisRange
    y: AxisRange


@dataclass(frozen=True)
class PlotArea:
    """Pixel rectangle available to the axes; ``right``/``bottom`` are inclusive."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top


@dataclass(frozen=True)
class ScaleMarker:
    index: int
    value: float
    pixel: int


@dataclass(frozen=True)
class AxisLayout:
    quadrants: Quadrants
    x: AxisRange
    y: AxisRange
    origin: tuple[int, int]
    scale_x: float
    scale_y: float
    x_pixel_bounds: tuple[int, int]
    y_pixel_bounds: tuple[int, int]
    x_step_px: int
    y_step_px: int

    @property
    def x_pixel_length(self) -> int:
        return self.x_pixel_bounds[1] - self.x_pixel_bounds[0]

    @property
    def y_pixel_length(self) -> int:
        return self.y_pixel_bounds[1] - self.y_pixel_bounds[0]

    def x_markers(self) -> list[ScaleMarker]:
        ox = self.origin[0]
        return [
            ScaleMarker(index=k, value=k * self.x.step, pixel=ox + k * self.x_step_px)
            for k in self.x.marker_indices()
        ]

    def y_markers(self) -> list[ScaleMarker]:
        oy = self.origin[1]
        return [
            ScaleMarker(index=k, value=k * self.y.step, pixel=oy - k * self.y_step_px)
            for k in self.y.marker_indices()
        ]


def validate_graph_inputs(spec: GraphSpec, sample_sets: Sequence[SampleSet]) -> None:
    if spec.width <= 0 or spec.height <= 0:
        raise LayoutPreconditionError(
            f"canvas must have a positive area, got {spec.width}x{spec.height}",
            field="canvas_size",
        )
    for field_name in ("x_axis_resolution", "y_axis_resolution"):
        value = getattr(spec, field_name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise LayoutPreconditionError(f"must be a positive integer, got {value!r}", field=field_name)
    if not spec.data_sets:
        raise LayoutPreconditionError("at least one data set is required", field="data_sets")
    if len(sample_sets) != len(spec.data_sets):
        raise LayoutPreconditionError(
            f"{len(spec.data_sets)} data sets declared but {len(sample_sets)} sample sets supplied",
            field="data_sets",
        )
    for data_set, samples in zip(spec.data_sets, sample_sets, strict=True):
        if len(samples) == 0:
            raise LayoutPreconditionError("sample set is empty", field="samples", data_set=data_set.name)


def data_bounds(sample_sets: Sequence[SampleSet]) -> DataBounds:
    xs = [s.x for s in sample_sets if len(s) > 0]
    ys = [s.y for s in sample_sets if len(s) > 0]
    if not xs:
        raise PlotDataError("no samples to derive axis bounds from")
    x_all = np.concatenate(xs)
    y_all = np.concatenate(ys)
    return DataBounds(
        x_min=float(np.min(x_all)),
        x_max=float(np.max(x_all)),
        y_min=float(np.min(y_all)),
        y_max=float(np.max(y_all)),
    )


def resolve_axis_range(vmin: float, vmax: float, resolution: int) -> AxisRange:
    if resolution < 1:
        raise LayoutPreconditionError(f"must be >= 1, got {resolution}", field="resolution")
    side = axis_side(vmin, vmax)
    degenerate = vmin == vmax
    if side is AxisSide.POSITIVE:
        extent = _extent(vmax, degenerate=degenerate)
        return AxisRange(side, extent / resolution, 0, resolution, resolution)
    if side is AxisSide.NEGATIVE:
        extent = _extent(vmin, degenerate=degenerate)
        return AxisRange(side, extent / resolution, resolution, 0, resolution)

    positive = _extent(vmax, degenerate=False)
    negative = _extent(vmin, degenerate=False)
    step = max(positive, negative) / resolution
    # Both wings share one step so the origin lands on the true zero crossing.
    positive_divisions = resolution if positive >= negative else _divisions_for(positive, step)
    negative_divisions = resolution if negative >= positive else _divisions_for(negative, step)
    return AxisRange(side, step, negative_divisions, positive_divisions, resolution)


def resolve_extents(sample_sets: Sequence[SampleSet], x_resolution: int, y_resolution: int) -> AxisExtents:
    bounds = data_bounds(sample_sets)
    LOGGER.debug("data bounds %s", bounds)
    x = resolve_axis_range(bounds.x_min, bounds.x_max, x_resolution)
    y = resolve_axis_range(bounds.y_min, bounds.y_max, y_resolution)
    quadrants = quadrants_for(x.side, y.side)
    LOGGER.info("quadrants to draw based on data: %s", quadrants.name)
    return AxisExtents(bounds=bounds, quadrants=quadrants, x=x, y=y)


def resolve_layout(extents: AxisExtents, plot_area: PlotArea) -> AxisLayout:
    x, y = extents.x, extents.y
    x_step_px = _pixel_step(plot_area.width, x.divisions, field="x_axis_resolution")
    y_step_px = _pixel_step(plot_area.height, y.divisions, field="y_axis_resolution")

    if x.side is AxisSide.NEGATIVE:
        x_end = plot_area.right
        x_start = x_end - x.divisions * x_step_px
    else:
        x_start = plot_area.left
        x_end = x_start + x.divisions * x_step_px
    origin_x = x_start + x.negative_divisions * x_step_px

    if y.side is AxisSide.NEGATIVE:
        y_top = plot_area.top
        y_bottom = y_top + y.divisions * y_step_px
    else:
        y_bottom = plot_area.bottom
        y_top = y_bottom - y.divisions * y_step_px
    origin_y = y_bottom - y.negative_divisions * y_step_px

    layout = AxisLayout(
        quadrants=extents.quadrants,
        x=x,
        y=y,
        origin=(origin_x, origin_y),
        scale_x=x_step_px / x.step,
        scale_y=-(y_step_px / y.step),
        x_pixel_bounds=(x_start, x_end),
        y_pixel_bounds=(y_top, y_bottom),
        x_step_px=x_step_px,
        y_step_px=y_step_px,
    )
    LOGGER.debug(
        "axis layout origin=%s x_bounds=%s y_bounds=%s scale=(%.6g, %.6g)",
        layout.origin,
        layout.x_pixel_bounds,
        layout.y_pixel_bounds,
        layout.scale_x,
        layout.scale_y,
    )
    return layout


def resolve_axis_layout(
    sample_sets: Sequence[SampleSet],
    x_resolution: int,
    y_resolution: int,
    plot_area: PlotArea,
) -> AxisLayout:
    return resolve_layout(resolve_extents(sample_sets, x_resolution, y_resolution), plot_area)


def format_marker(value: float, step: float) -> str:
    if not math.isfinite(value):
        return str(value)
    if step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    if abs_v != 0 and (abs_v >= 1e6 or abs_v < 1e-4 or step < 1e-4):
        return f"{value:.2e}"

    decimals = _decimals_from_step(step)
    d = Decimal(repr(value))
    try:
        q = d.quantize(Decimal("1").scaleb(-decimals))
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_markers(markers: Sequence[ScaleMarker], step: float) -> list[str]:
    return [format_marker(m.value, step) for m in markers]


def _extent(bound: float, *, degenerate: bool) -> float:
    extent = abs(bound) * (1.0 + EXTENT_MARGIN)
    if math.isfinite(bound) and not math.isfinite(extent):
        raise PlotDataError(f"axis bound {bound!r} is too large to leave a margin around")
    if degenerate:
        extent = max(extent, FALLBACK_EXTENT)
    if not math.isfinite(extent) or extent <= 0.0:
        extent = FALLBACK_EXTENT
    return extent


def _divisions_for(extent: float, step: float) -> int:
    # Tolerate float noise so an exact multiple does not gain an extra division.
    return max(1, math.ceil(extent / step - 1e-9))


def _pixel_step(span: int, divisions: int, *, field: str) -> int:
    step = span // divisions if span > 0 else 0
    if step < 1:
        raise LayoutPreconditionError(
            f"{divisions} divisions do not fit in {max(span, 0)} px; enlarge the canvas or lower the resolution",
            field=field,
        )
    return int(step)


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not math.isfinite(step):
        return 6
    exp = math.floor(math.log10(step))
    return max(0, min(12, 2 - exp))
