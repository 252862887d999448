from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Mapping, Union

import numpy as np

from plotit.colours import Colour


@dataclass(frozen=True)
class Linear:
    """``y = gradient * x + y_intercept``"""

    gradient: float
    y_intercept: float
    colour: Colour = Colour.BLACK

    def evaluate(self, x: np.ndarray) -> np.ndarray:
        return self.gradient * x + self.y_intercept


@dataclass(frozen=True)
class Quadratic:
    intercept: float
    linear_coeff: float
    quadratic_coeff: float
    colour: Colour = Colour.BLACK

    def evaluate(self, x: np.ndarray) -> np.ndarray:
        return self.intercept + self.linear_coeff * x + self.quadratic_coeff * x**2


@dataclass(frozen=True)
class Cubic:
    intercept: float
    linear_coeff: float
    quadratic_coeff: float
    cubic_coeff: float
    colour: Colour = Colour.BLACK

    def evaluate(self, x: np.ndarray) -> np.ndarray:
        return self.intercept + self.linear_coeff * x + self.quadratic_coeff * x**2 + self.cubic_coeff * x**3


@dataclass(frozen=True)
class GenericPolynomial:
    """Sum of ``coefficients[k] * x**k`` over arbitrary non-negative powers."""

    coefficients: Mapping[int, float] = field(default_factory=dict)
    colour: Colour = Colour.BLACK

    def __post_init__(self) -> None:
        for power in self.coefficients:
            if isinstance(power, bool) or not isinstance(power, int) or power < 0:
                raise ValueError(f"polynomial powers must be non-negative integers, got {power!r}")

    def evaluate(self, x: np.ndarray) -> np.ndarray:
        out = np.zeros_like(x, dtype=np.float64)
        for power, coeff in sorted(self.coefficients.items()):
            out = out + float(coeff) * x**power
        return out


@dataclass(frozen=True)
class Exponential:
    """``y = constant * base ** (power * x) + vertical_shift``"""

    constant: float
    base: float
    power: float
    vertical_shift: float = 0.0
    colour: Colour = Colour.BLACK

    def evaluate(self, x: np.ndarray) -> np.ndarray:
        return self.constant * np.power(self.base, self.power * x) + self.vertical_shift


@dataclass(frozen=True)
class Gaussian:
    """Normal distribution density; ``variance`` is used as the spread term of the curve."""

    variance: float
    expected_value: float
    colour: Colour = Colour.BLACK

    def evaluate(self, x: np.ndarray) -> np.ndarray:
        scale = 1.0 / (np.float64(self.variance) * math.sqrt(2.0 * math.pi))
        return scale * np.exp(-((x - self.expected_value) ** 2) / (2.0 * self.variance**2))


@dataclass(frozen=True)
class Sine:
    amplitude: float
    period: float
    phase_shift: float = 0.0
    vertical_shift: float = 0.0
    colour: Colour = Colour.BLACK

    def evaluate(self, x: np.ndarray) -> np.ndarray:
        return self.amplitude * np.sin(self.period * x + self.phase_shift) + self.vertical_shift


@dataclass(frozen=True)
class Cosine:
    amplitude: float
    period: float
    phase_shift: float = 0.0
    vertical_shift: float = 0.0
    colour: Colour = Colour.BLACK

    def evaluate(self, x: np.ndarray) -> np.ndarray:
        return self.amplitude * np.cos(self.period * x + self.phase_shift) + self.vertical_shift


BestFitSpec = Union[Linear, Quadratic, Cubic, GenericPolynomial, Exponential, Gaussian, Sine, Cosine]

BEST_FIT_KINDS: dict[str, type] = {
    "Linear": Linear,
    "Quadratic": Quadratic,
    "Cubic": Cubic,
    "Polynomial": GenericPolynomial,
    "Exponential": Exponential,
    "Gaussian": Gaussian,
    "Sine": Sine,
    "Cosine": Cosine,
}


@dataclass(frozen=True)
class CurveRun:
    xs: np.ndarray
    ys: np.ndarray

    def __len__(self) -> int:
        return int(self.xs.size)


def evaluate_curve(best_fit: BestFitSpec, x: np.ndarray) -> np.ndarray:
    with np.errstate(all="ignore"):
        return np.asarray(best_fit.evaluate(np.asarray(x, dtype=np.float64)), dtype=np.float64)


def sample_curve(best_fit: BestFitSpec, x_start: float, x_end: float, count: int) -> list[CurveRun]:
    """Evaluate ``best_fit`` at ``count`` evenly spaced x values.

    Returns one run per maximal stretch of finite output, so a curve with a
    singularity or an overflow breaks into separate pieces instead of jumping
    across the gap. Runs of a single point are dropped.
    """
    if count < 2:
        raise ValueError("count must be >= 2")
    xs = np.linspace(float(x_start), float(x_end), int(count), dtype=np.float64)
    ys = evaluate_curve(best_fit, xs)
    return split_runs(xs, ys, np.isfinite(ys))


def split_runs(xs: np.ndarray, ys: np.ndarray, keep: np.ndarray) -> list[CurveRun]:
    runs: list[CurveRun] = []
    start: int | None = None
    for i, flag in enumerate(keep.tolist()):
        if flag and start is None:
            start = i
        elif not flag and start is not None:
            if i - start >= 2:
                runs.append(CurveRun(xs=xs[start:i], ys=ys[start:i]))
            start = None
    if start is not None and keep.size - start >= 2:
        runs.append(CurveRun(xs=xs[start:], ys=ys[start:]))
    return runs


def clip_run(run: CurveRun, y_lo: float, y_hi: float) -> list[CurveRun]:
    """Cut a polyline to the band ``y_lo <= y <= y_hi``.

    Segments that cross a band edge are cut at the interpolated crossing, so a
    steep curve still reaches the edge even when none of its samples land
    inside the band.
    """
    xs = run.xs.tolist()
    ys = run.ys.tolist()
    pieces: list[tuple[list[float], list[float]]] = []
    cur_x: list[float] = []
    cur_y: list[float] = []

    def flush() -> None:
        if len(cur_x) >= 2:
            pieces.append((list(cur_x), list(cur_y)))
        cur_x.clear()
        cur_y.clear()

    for i in range(len(xs) - 1):
        x0, y0, x1, y1 = xs[i], ys[i], xs[i + 1], ys[i + 1]
        dy = y1 - y0
        if dy == 0.0:
            if not (y_lo <= y0 <= y_hi):
                flush()
                continue
            t0, t1 = 0.0, 1.0
        else:
            ta = (y_lo - y0) / dy
            tb = (y_hi - y0) / dy
            t0 = max(0.0, min(ta, tb))
            t1 = min(1.0, max(ta, tb))
            if t0 > t1:
                flush()
                continue
        start = (x0 + t0 * (x1 - x0), min(y_hi, max(y_lo, y0 + t0 * dy)))
        end = (x0 + t1 * (x1 - x0), min(y_hi, max(y_lo, y0 + t1 * dy)))
        if t0 > 0.0 or not cur_x:
            flush()
            cur_x.append(start[0])
            cur_y.append(start[1])
        cur_x.append(end[0])
        cur_y.append(end[1])
        if t1 < 1.0:
            flush()
    flush()
    return [CurveRun(xs=np.asarray(px, dtype=np.float64), ys=np.asarray(py, dtype=np.float64)) for px, py in pieces]
