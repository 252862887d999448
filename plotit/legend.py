from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from plotit.colours import RGBA
from plotit.graph import DataSetSpec
from plotit.primitives import DrawPrimitive, FilledShape, GlyphRun, Rect
from plotit.raster import text_size
from plotit.symbols import symbol_extent, symbol_primitives


@dataclass(frozen=True)
class LegendLayout:
    entries: tuple[DataSetSpec, ...]
    text_sizes: tuple[tuple[int, int], ...]
    font_size: float
    pad: int
    gap: int
    symbol_half: int
    row_h: int
    box_w: int
    box_h: int

    @property
    def symbol_slot(self) -> int:
        return 2 * self.symbol_half + 1


def build_legend_layout(data_sets: Sequence[DataSetSpec], font_size: float) -> LegendLayout:
    """Size the legend box; rows keep data set order."""
    entries = tuple(data_sets)
    sizes = tuple(text_size(ds.name, font_size_px=font_size) for ds in entries)
    pad = int(max(4, font_size * 0.5))
    gap = int(max(3, font_size * 0.4))
    symbol_half = max((symbol_extent(ds.symbol, ds.symbol_radius, ds.symbol_thickness) for ds in entries), default=1)
    text_h = max((h for _, h in sizes), default=1)
    text_w = max((w for w, _ in sizes), default=0)
    row_h = max(text_h, 2 * symbol_half + 1)
    box_w = 2 * pad + (2 * symbol_half + 1) + gap + text_w
    box_h = 2 * pad + len(entries) * row_h + max(0, len(entries) - 1) * gap
    return LegendLayout(
        entries=entries,
        text_sizes=sizes,
        font_size=font_size,
        pad=pad,
        gap=gap,
        symbol_half=symbol_half,
        row_h=row_h,
        box_w=box_w,
        box_h=box_h,
    )


def legend_primitives(
    layout: LegendLayout,
    x: int,
    y: int,
    *,
    box_colour: RGBA,
    outline_colour: RGBA,
    text_colour: RGBA,
) -> list[DrawPrimitive]:
    out: list[DrawPrimitive] = [
        FilledShape(
            shape=Rect(x, y, x + layout.box_w - 1, y + layout.box_h - 1),
            fill=box_colour,
            outline=outline_colour,
            outline_width=1,
        )
    ]
    for i, (ds, (_, text_h)) in enumerate(zip(layout.entries, layout.text_sizes)):
        row_top = y + layout.pad + i * (layout.row_h + layout.gap)
        center = (x + layout.pad + layout.symbol_half, row_top + layout.row_h // 2)
        out.extend(
            symbol_primitives(
                ds.symbol,
                center,
                ds.symbol_radius,
                ds.symbol_thickness,
                ds.colour.rgba,
                filled=ds.symbol_filled,
            )
        )
        out.append(
            GlyphRun(
                anchor=(x + layout.pad + layout.symbol_slot + layout.gap, row_top + (layout.row_h - text_h) // 2),
                text=ds.name,
                colour=text_colour,
                font_size=layout.font_size,
            )
        )
    return out
