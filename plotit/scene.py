from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from plotit.best_fit import BestFitSpec, clip_run, sample_curve
from plotit.colours import RGBA, Colour
from plotit.display import CANVAS_BORDER_PIXELS, FontSizes
from plotit.errors import LayoutPreconditionError
from plotit.graph import DataSetSpec, GraphSpec
from plotit.legend import build_legend_layout, legend_primitives
from plotit.mapper import CoordinateMapper
from plotit.primitives import DrawPrimitive, FilledShape, GlyphRun, Layer, Line, Point, Polyline, Rect
from plotit.quadrants import AxisSide, legend_corner
from plotit.raster import text_size
from plotit.samples import SampleSet
from plotit.scales import (
    AxisLayout,
    PlotArea,
    format_marker,
    resolve_extents,
    resolve_layout,
    validate_graph_inputs,
)
from plotit.symbols import symbol_primitives


LOGGER = logging.getLogger(__name__)

# Minor tick counts tried between two scale markers, densest first.
MINOR_TICK_COUNTS = (9, 4, 3, 2, 1)
MIN_MINOR_SPACING_PX = 4


@dataclass(frozen=True)
class SceneStyle:
    background: RGBA = Colour.WHITE.rgba
    axis: RGBA = Colour.BLACK.rgba
    grid: RGBA = Colour.GREY.rgba
    text: RGBA = Colour.BLACK.rgba
    legend_box: RGBA = Colour.WHITE.rgba
    legend_outline: RGBA = Colour.BLACK.rgba
    border_px: int = CANVAS_BORDER_PIXELS
    curve_width: int = 1
    axis_width: int = 1
    # Minor ticks are one unit long; major ticks alternate three and two units.
    tick_unit_px: int = 5


@dataclass(frozen=True)
class Scene:
    width: int
    height: int
    plot_area: PlotArea
    layout: AxisLayout
    legend_bounds: tuple[int, int, int, int] | None
    primitives: tuple[DrawPrimitive, ...]


@dataclass(frozen=True)
class _Text:
    text: str
    width: int
    height: int


def compose_scene(
    spec: GraphSpec,
    sample_sets: Sequence[SampleSet],
    style: SceneStyle = SceneStyle(),
) -> Scene:
    """Turn a graph description plus its samples into an ordered list of draw primitives.

    Margins are measured from the glyphs actually drawn at the canvas-derived
    font sizes, so the layout scales with the canvas. Primitives come out
    grouped by ``Layer`` and, inside the per-data-set layers, in data set order.
    """
    validate_graph_inputs(spec, sample_sets)
    extents = resolve_extents(sample_sets, spec.x_axis_resolution, spec.y_axis_resolution)
    fonts = FontSizes.for_canvas(spec.width, spec.height)
    border = style.border_px
    unit = style.tick_unit_px
    tick_len = 3 * unit
    gap = max(2, int(round(fonts.axis_unit * 0.3)))

    x_texts = [_measure(format_marker(v, extents.x.step), fonts.axis_unit) for v in extents.x.marker_values()]
    y_texts = [_measure(format_marker(v, extents.y.step), fonts.axis_unit) for v in extents.y.marker_values()]
    xm_h = max((t.height for t in x_texts), default=0)
    xm_w = max((t.width for t in x_texts), default=0)
    ym_h = max((t.height for t in y_texts), default=0)
    ym_w = max((t.width for t in y_texts), default=0)
    title = _measure(spec.title, fonts.title)
    x_label = _measure(spec.x_axis_label, fonts.axis)
    y_label = _measure(spec.y_axis_label, fonts.axis, rotate_deg=90)

    # Scale marker labels go on the outward side of each axis.
    x_labels_top = extents.y.side is AxisSide.NEGATIVE
    y_labels_right = extents.x.side is AxisSide.NEGATIVE
    x_block = tick_len + gap + xm_h + (gap + x_label.height if x_label.text else 0)
    y_block = tick_len + gap + ym_w + (gap + y_label.width if y_label.text else 0)
    overhang_x = (xm_w + 1) // 2
    overhang_y = (ym_h + 1) // 2
    title_block = title.height + border if title.text else 0

    left = border + max(0 if y_labels_right else y_block, overhang_x)
    right = border + max(y_block if y_labels_right else 0, overhang_x)
    top = border + title_block + max(x_block if x_labels_top else 0, overhang_y)
    bottom = border + max(0 if x_labels_top else x_block, overhang_y)

    legend = build_legend_layout(spec.data_sets, fonts.legend) if spec.has_legend else None
    corner = legend_corner(extents.quadrants)
    if legend is not None:
        if corner.is_left:
            left += legend.box_w + border
        else:
            right += legend.box_w + border

    plot_area = PlotArea(left=left, top=top, right=spec.width - 1 - right, bottom=spec.height - 1 - bottom)
    LOGGER.debug("plot area %s", plot_area)
    layout = resolve_layout(extents, plot_area)
    plot_h = layout.y_pixel_bounds[1] - layout.y_pixel_bounds[0] + 1
    if legend is not None and legend.box_h > plot_h:
        raise LayoutPreconditionError(
            f"legend needs {legend.box_h} px but the plot is {plot_h} px tall; enlarge the canvas or drop the legend",
            field="has_legend",
        )
    mapper = CoordinateMapper(layout)

    layers: dict[Layer, list[DrawPrimitive]] = {layer: [] for layer in Layer}
    layers[Layer.BACKGROUND].append(
        FilledShape(shape=Rect(0, 0, spec.width - 1, spec.height - 1), fill=style.background)
    )
    if spec.has_grid:
        layers[Layer.GRID].extend(_grid_primitives(layout, style.grid))
    layers[Layer.AXES].extend(_axis_primitives(layout, style, tick_len))

    labels = layers[Layer.LABELS]
    labels.extend(_marker_label_primitives(layout, x_texts, y_texts, tick_len + gap, style.text, fonts.axis_unit))
    if title.text:
        labels.append(
            GlyphRun(
                anchor=((spec.width - title.width) // 2, border),
                text=title.text,
                colour=style.text,
                font_size=fonts.title,
            )
        )
    x0, x1 = layout.x_pixel_bounds
    y0, y1 = layout.y_pixel_bounds
    label_offset = tick_len + gap + xm_h + gap
    if x_label.text:
        label_top = y0 - label_offset - x_label.height if x_labels_top else y1 + label_offset
        labels.append(
            GlyphRun(
                anchor=((x0 + x1) // 2 - x_label.width // 2, label_top),
                text=x_label.text,
                colour=style.text,
                font_size=fonts.axis,
            )
        )
    label_offset = tick_len + gap + ym_w + gap
    if y_label.text:
        label_left = x1 + label_offset if y_labels_right else x0 - label_offset - y_label.width
        labels.append(
            GlyphRun(
                anchor=(label_left, (y0 + y1) // 2 - y_label.height // 2),
                text=y_label.text,
                colour=style.text,
                font_size=fonts.axis,
                rotate_deg=90,
            )
        )

    for data_set, samples in zip(spec.data_sets, sample_sets, strict=True):
        if data_set.best_fit is not None:
            layers[Layer.BEST_FIT].extend(_best_fit_primitives(data_set.best_fit, layout, mapper, style.curve_width))
        layers[Layer.DATA].extend(_data_set_primitives(data_set, samples, mapper))

    legend_bounds = None
    if legend is not None:
        lx = border if corner.is_left else spec.width - border - legend.box_w
        ly = y1 - legend.box_h + 1 if corner.is_bottom else y0
        legend_bounds = (lx, ly, legend.box_w, legend.box_h)
        layers[Layer.LEGEND].extend(
            legend_primitives(
                legend,
                lx,
                ly,
                box_colour=style.legend_box,
                outline_colour=style.legend_outline,
                text_colour=style.text,
            )
        )

    primitives = tuple(p for layer in Layer for p in layers[layer])
    LOGGER.info("composed %d draw primitives for %r", len(primitives), spec.title)
    return Scene(
        width=spec.width,
        height=spec.height,
        plot_area=plot_area,
        layout=layout,
        legend_bounds=legend_bounds,
        primitives=primitives,
    )


def minor_tick_count(step_px: int) -> int:
    """How many minor ticks fit evenly between two scale markers ``step_px`` apart."""
    for count in MINOR_TICK_COUNTS:
        if step_px % (count + 1) == 0 and step_px // (count + 1) >= MIN_MINOR_SPACING_PX:
            return count
    return 0


def _measure(text: str, font_size: float, *, rotate_deg: int = 0) -> _Text:
    if not text:
        return _Text(text="", width=0, height=0)
    w, h = text_size(text, font_size_px=font_size, rotate_deg=rotate_deg)
    return _Text(text=text, width=w, height=h)


def _grid_primitives(layout: AxisLayout, colour: RGBA) -> list[DrawPrimitive]:
    x0, x1 = layout.x_pixel_bounds
    y0, y1 = layout.y_pixel_bounds
    out: list[DrawPrimitive] = []
    for px in range(x0, x1 + 1, layout.x_step_px):
        out.append(Line(start=(px, y0), end=(px, y1), colour=colour))
    for py in range(y0, y1 + 1, layout.y_step_px):
        out.append(Line(start=(x0, py), end=(x1, py), colour=colour))
    return out


def _axis_primitives(layout: AxisLayout, style: SceneStyle, tick_len: int) -> list[DrawPrimitive]:
    ox, oy = layout.origin
    x0, x1 = layout.x_pixel_bounds
    y0, y1 = layout.y_pixel_bounds
    colour = style.axis
    out: list[DrawPrimitive] = [
        Line(start=(x0, oy), end=(x1, oy), colour=colour, width=style.axis_width),
        Line(start=(ox, y0), end=(ox, y1), colour=colour, width=style.axis_width),
    ]
    short = 2 * style.tick_unit_px
    minor_len = style.tick_unit_px
    x_dir = _x_tick_direction(layout)
    y_dir = _y_tick_direction(layout)

    for marker in layout.x_markers():
        length = short if marker.index % 2 else tick_len
        out.append(Line(start=(marker.pixel, oy), end=(marker.pixel, oy + x_dir * length), colour=colour))
    for marker in layout.y_markers():
        length = short if marker.index % 2 else tick_len
        out.append(Line(start=(ox, marker.pixel), end=(ox + y_dir * length, marker.pixel), colour=colour))

    minors = minor_tick_count(layout.x_step_px)
    if minors:
        spacing = layout.x_step_px // (minors + 1)
        for start in range(x0, x1, layout.x_step_px):
            for j in range(1, minors + 1):
                px = start + j * spacing
                out.append(Line(start=(px, oy), end=(px, oy + x_dir * minor_len), colour=colour))
    minors = minor_tick_count(layout.y_step_px)
    if minors:
        spacing = layout.y_step_px // (minors + 1)
        for start in range(y0, y1, layout.y_step_px):
            for j in range(1, minors + 1):
                py = start + j * spacing
                out.append(Line(start=(ox, py), end=(ox + y_dir * minor_len, py), colour=colour))
    return out


def _marker_label_primitives(
    layout: AxisLayout,
    x_texts: Sequence[_Text],
    y_texts: Sequence[_Text],
    offset: int,
    colour: RGBA,
    font_size: float,
) -> list[DrawPrimitive]:
    ox, oy = layout.origin
    x_dir = _x_tick_direction(layout)
    y_dir = _y_tick_direction(layout)
    out: list[DrawPrimitive] = []
    for marker, label in zip(layout.x_markers(), x_texts, strict=True):
        top = oy + offset if x_dir > 0 else oy - offset - label.height
        out.append(
            GlyphRun(anchor=(marker.pixel - label.width // 2, top), text=label.text, colour=colour, font_size=font_size)
        )
    for marker, label in zip(layout.y_markers(), y_texts, strict=True):
        left = ox + offset if y_dir > 0 else ox - offset - label.width
        out.append(
            GlyphRun(anchor=(left, marker.pixel - label.height // 2), text=label.text, colour=colour, font_size=font_size)
        )
    return out


def _x_tick_direction(layout: AxisLayout) -> int:
    # Pixel rows grow downward: +1 points below the x-axis.
    return -1 if layout.y.side is AxisSide.NEGATIVE else 1


def _y_tick_direction(layout: AxisLayout) -> int:
    return 1 if layout.x.side is AxisSide.NEGATIVE else -1


def _best_fit_primitives(
    best_fit: BestFitSpec,
    layout: AxisLayout,
    mapper: CoordinateMapper,
    width: int,
) -> list[DrawPrimitive]:
    """One polyline per stretch of the curve that stays finite and inside the y range.

    Stretches leaving the range are cut where they cross its edge.
    """
    count = max(2, layout.x_pixel_length + 1)
    y_lo, y_hi = layout.y.data_min, layout.y.data_max
    colour = best_fit.colour.rgba
    out: list[DrawPrimitive] = []
    for run in sample_curve(best_fit, layout.x.data_min, layout.x.data_max, count):
        for piece in clip_run(run, y_lo, y_hi):
            px, py = mapper.to_pixels(piece.xs, piece.ys)
            points = _dedupe_points(px, py)
            if len(points) >= 2:
                out.append(Polyline(points=points, colour=colour, width=width))
    return out


def _dedupe_points(px: np.ndarray, py: np.ndarray) -> tuple[Point, ...]:
    points: list[Point] = []
    for x, y in zip(px.tolist(), py.tolist()):
        if points and points[-1] == (x, y):
            continue
        points.append((x, y))
    return tuple(points)


def _data_set_primitives(
    data_set: DataSetSpec,
    samples: SampleSet,
    mapper: CoordinateMapper,
) -> list[DrawPrimitive]:
    colour = data_set.colour.rgba
    width = data_set.symbol_thickness + 1
    cap = max(2, data_set.symbol_radius)
    out: list[DrawPrimitive] = []
    for x, y, x_err, y_err in samples.points():
        center = mapper.to_pixel(x, y)
        if x_err:
            lo = mapper.to_pixel(x - x_err, y)
            hi = mapper.to_pixel(x + x_err, y)
            out.append(Line(start=lo, end=hi, colour=colour, width=width))
            for ex, ey in (lo, hi):
                out.append(Line(start=(ex, ey - cap), end=(ex, ey + cap), colour=colour, width=width))
        if y_err:
            lo = mapper.to_pixel(x, y - y_err)
            hi = mapper.to_pixel(x, y + y_err)
            out.append(Line(start=lo, end=hi, colour=colour, width=width))
            for ex, ey in (lo, hi):
                out.append(Line(start=(ex - cap, ey), end=(ex + cap, ey), colour=colour, width=width))
        out.extend(
            symbol_primitives(
                data_set.symbol,
                center,
                data_set.symbol_radius,
                data_set.symbol_thickness,
                colour,
                filled=data_set.symbol_filled,
            )
        )
    LOGGER.debug("data set %r: %d primitives", data_set.name, len(out))
    return out
