from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd

from plotit.errors import ConfigError, DataSourceError
from plotit.graph import GraphSpec
from plotit.samples import SampleSet


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CsvSource:
    """Where one data set's samples live; columns are zero-based."""

    path: Path
    has_headers: bool = False
    x_column: int = 0
    y_column: int = 1
    x_error_column: int | None = None
    y_error_column: int | None = None


def load_samples(source: CsvSource, delimiter: str = ",", *, name: str | None = None) -> SampleSet:
    path = str(source.path)
    if len(delimiter) != 1:
        raise DataSourceError(f"delimiter must be a single character, got {delimiter!r}", path=path)
    if not Path(source.path).is_file():
        raise DataSourceError("data file not found", path=path)

    try:
        frame = pd.read_csv(
            source.path,
            sep=delimiter,
            header=0 if source.has_headers else None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        frame = pd.DataFrame()
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise DataSourceError(f"unable to parse CSV: {exc}", path=path) from exc
    except OSError as exc:
        raise DataSourceError(f"unable to read CSV: {exc}", path=path) from exc

    # File line of the first data row, for error messages.
    first_row = 2 if source.has_headers else 1
    x = _numeric_column(frame, source.x_column, path=path, first_row=first_row)
    y = _numeric_column(frame, source.y_column, path=path, first_row=first_row)
    x_err = None
    y_err = None
    if source.x_error_column is not None:
        x_err = _numeric_column(frame, source.x_error_column, path=path, first_row=first_row)
    if source.y_error_column is not None:
        y_err = _numeric_column(frame, source.y_error_column, path=path, first_row=first_row)

    samples = SampleSet.from_columns(x, y, x_err, y_err, source_name=name or Path(source.path).name)
    LOGGER.info("loaded %d samples from %s", len(samples), path)
    return samples


def load_all_samples(spec: GraphSpec, delimiter: str = ",") -> list[SampleSet]:
    out: list[SampleSet] = []
    for i, data_set in enumerate(spec.data_sets):
        if not isinstance(data_set.source, CsvSource):
            raise ConfigError(f"data set {data_set.name!r} has no CSV source", field=f"data_sets[{i}].data_path")
        out.append(load_samples(data_set.source, delimiter, name=data_set.name))
    return out


def _numeric_column(frame: pd.DataFrame, column: int, *, path: str, first_row: int) -> np.ndarray:
    if frame.shape[1] == 0 and frame.shape[0] == 0:
        return np.empty(0, dtype=np.float64)
    if column >= frame.shape[1]:
        raise DataSourceError(f"column out of range, file has {frame.shape[1]} columns", path=path, column=column)
    raw = frame.iloc[:, column].astype(str).str.strip()
    values = pd.to_numeric(raw, errors="coerce").to_numpy(dtype=np.float64)
    bad = np.flatnonzero(~np.isfinite(values))
    if bad.size:
        i = int(bad[0])
        raise DataSourceError(
            f"could not parse {raw.iloc[i]!r} as a finite number",
            path=path,
            row=first_row + i,
            column=column,
        )
    return values
