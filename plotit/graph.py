from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from plotit.best_fit import BestFitSpec
from plotit.colours import Colour
from plotit.errors import LayoutPreconditionError


class SymbolKind(Enum):
    CROSS = "cross"
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    SQUARE = "square"
    POINT = "point"

    @classmethod
    def parse(cls, name: str) -> "SymbolKind":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(member.name.title() for member in cls)
            raise ValueError(f"unknown symbol {name!r}, expected one of: {valid}") from None


@dataclass(frozen=True)
class DataSetSpec:
    name: str
    colour: Colour = Colour.BLACK
    symbol: SymbolKind = SymbolKind.CROSS
    symbol_radius: int = 2
    symbol_thickness: int = 0
    best_fit: BestFitSpec | None = None
    symbol_filled: bool = False
    source: object | None = None

    def __post_init__(self) -> None:
        if self.symbol_radius < 1:
            raise LayoutPreconditionError(
                f"must be >= 1, got {self.symbol_radius}", field="symbol_radius", data_set=self.name
            )
        if self.symbol_thickness < 0:
            raise LayoutPreconditionError(
                f"must be >= 0, got {self.symbol_thickness}", field="symbol_thickness", data_set=self.name
            )


@dataclass(frozen=True)
class GraphSpec:
    title: str
    canvas_size: tuple[int, int]
    x_axis_label: str = ""
    y_axis_label: str = ""
    x_axis_resolution: int = 10
    y_axis_resolution: int = 10
    has_grid: bool = False
    has_legend: bool = False
    data_sets: tuple[DataSetSpec, ...] = ()

    @property
    def width(self) -> int:
        return int(self.canvas_size[0])

    @property
    def height(self) -> int:
        return int(self.canvas_size[1])
