from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import numpy as np
import pandas as pd

from plotit.errors import PlotDataError


@dataclass(frozen=True)
class SampleSet:
    x: np.ndarray
    y: np.ndarray
    x_err: np.ndarray | None = None
    y_err: np.ndarray | None = None
    source_name: str | None = None

    def __post_init__(self) -> None:
        label = self.source_name or "sample set"
        if self.x.ndim != 1 or self.y.ndim != 1:
            raise PlotDataError(f"{label}: x and y must be 1-D")
        if self.x.shape != self.y.shape:
            raise PlotDataError(f"{label}: x and y length mismatch: {self.x.size} != {self.y.size}")
        if not np.all(np.isfinite(self.x)):
            raise PlotDataError(f"{label}: x contains non-finite values at {_bad_indices(self.x)}")
        if not np.all(np.isfinite(self.y)):
            raise PlotDataError(f"{label}: y contains non-finite values at {_bad_indices(self.y)}")
        for name, err in (("x_err", self.x_err), ("y_err", self.y_err)):
            if err is None:
                continue
            if err.shape != self.x.shape:
                raise PlotDataError(f"{label}: {name} length mismatch: {err.size} != {self.x.size}")
            if not np.all(np.isfinite(err)) or np.any(err < 0):
                raise PlotDataError(f"{label}: {name} must be finite and non-negative")

    @classmethod
    def from_columns(
        cls,
        x: Any,
        y: Any,
        x_err: Any = None,
        y_err: Any = None,
        *,
        source_name: str | None = None,
    ) -> "SampleSet":
        return cls(
            x=_coerce_1d_numeric(x, label="x"),
            y=_coerce_1d_numeric(y, label="y"),
            x_err=None if x_err is None else _coerce_1d_numeric(x_err, label="x_err"),
            y_err=None if y_err is None else _coerce_1d_numeric(y_err, label="y_err"),
            source_name=source_name,
        )

    def __len__(self) -> int:
        return int(self.x.size)

    def points(self) -> Iterator[tuple[float, float, float | None, float | None]]:
        for i in range(self.x.size):
            yield (
                float(self.x[i]),
                float(self.y[i]),
                None if self.x_err is None else float(self.x_err[i]),
                None if self.y_err is None else float(self.y_err[i]),
            )


def _bad_indices(values: np.ndarray) -> list[int]:
    return np.flatnonzero(~np.isfinite(values))[:5].tolist()


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object).reshape(-1), label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
