from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from plotit.best_fit import BEST_FIT_KINDS, BestFitSpec
from plotit.colours import Colour
from plotit.data import CsvSource
from plotit.errors import ConfigError
from plotit.graph import DataSetSpec, GraphSpec, SymbolKind


LOGGER = logging.getLogger(__name__)


def load_graph_spec(path: str | Path) -> GraphSpec:
    """Read a scatter graph description from a JSON file.

    Relative ``data_path`` entries resolve against the file's directory.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigError(f"config file not found: {config_path}")
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"unable to read {config_path}: {exc}") from exc
    LOGGER.info("loaded graph config %s", config_path)
    return parse_graph_spec(raw, base_dir=config_path.parent)


def parse_graph_spec(document: Any, base_dir: str | Path | None = None) -> GraphSpec:
    root = _require_mapping(document, "$")
    base = Path(base_dir) if base_dir is not None else Path.cwd()

    size = _require(root, "canvas_pixel_size", "$")
    if not isinstance(size, (list, tuple)) or len(size) != 2:
        raise ConfigError("must be a [width, height] pair", field="canvas_pixel_size")
    width = _coerce_int(size[0], "canvas_pixel_size[0]", minimum=1)
    height = _coerce_int(size[1], "canvas_pixel_size[1]", minimum=1)

    raw_sets = _require(root, "data_sets", "$")
    if not isinstance(raw_sets, list) or not raw_sets:
        raise ConfigError("must be a non-empty list", field="data_sets")
    data_sets = tuple(_parse_data_set(raw, f"data_sets[{i}]", base) for i, raw in enumerate(raw_sets))

    spec = GraphSpec(
        title=_coerce_str(_require(root, "title", "$"), "title"),
        canvas_size=(width, height),
        x_axis_label=_coerce_str(root.get("x_axis_label", ""), "x_axis_label"),
        y_axis_label=_coerce_str(root.get("y_axis_label", ""), "y_axis_label"),
        x_axis_resolution=_coerce_int(_require(root, "x_axis_resolution", "$"), "x_axis_resolution", minimum=1),
        y_axis_resolution=_coerce_int(_require(root, "y_axis_resolution", "$"), "y_axis_resolution", minimum=1),
        has_grid=_coerce_bool(root.get("has_grid", False), "has_grid"),
        has_legend=_coerce_bool(root.get("has_legend", False), "has_legend"),
        data_sets=data_sets,
    )
    LOGGER.debug("parsed graph %r with %d data sets", spec.title, len(spec.data_sets))
    return spec


def _parse_data_set(raw: Any, path: str, base: Path) -> DataSetSpec:
    obj = _require_mapping(raw, path)
    data_path = Path(_coerce_str(_require(obj, "data_path", path), f"{path}.data_path"))
    if not data_path.is_absolute():
        data_path = base / data_path
    source = CsvSource(
        path=data_path,
        has_headers=_coerce_bool(obj.get("has_headers", False), f"{path}.has_headers"),
        x_column=_coerce_int(_require(obj, "x_axis_csv_column", path), f"{path}.x_axis_csv_column", minimum=0),
        y_column=_coerce_int(_require(obj, "y_axis_csv_column", path), f"{path}.y_axis_csv_column", minimum=0),
        x_error_column=_coerce_optional_int(obj.get("x_axis_error_bar_csv_column"), f"{path}.x_axis_error_bar_csv_column"),
        y_error_column=_coerce_optional_int(obj.get("y_axis_error_bar_csv_column"), f"{path}.y_axis_error_bar_csv_column"),
    )
    best_fit = obj.get("best_fit")
    return DataSetSpec(
        name=_coerce_str(_require(obj, "name", path), f"{path}.name"),
        colour=_coerce_colour(obj.get("colour", "Black"), f"{path}.colour"),
        symbol=_coerce_symbol(obj.get("symbol", "Cross"), f"{path}.symbol"),
        symbol_radius=_coerce_int(obj.get("symbol_radius", 2), f"{path}.symbol_radius", minimum=1),
        symbol_thickness=_coerce_int(obj.get("symbol_thickness", 0), f"{path}.symbol_thickness", minimum=0),
        symbol_filled=_coerce_bool(obj.get("symbol_filled", False), f"{path}.symbol_filled"),
        best_fit=None if best_fit is None else _parse_best_fit(best_fit, f"{path}.best_fit"),
        source=source,
    )


def _parse_best_fit(raw: Any, path: str) -> BestFitSpec:
    """Externally tagged: ``{"Linear": {"gradient": 1, "y_intercept": 0}}``."""
    obj = _require_mapping(raw, path)
    if len(obj) != 1:
        raise ConfigError("must hold exactly one best fit kind", field=path)
    kind, body = next(iter(obj.items()))
    cls = BEST_FIT_KINDS.get(kind)
    if cls is None:
        raise ConfigError(f"unknown best fit {kind!r}, expected one of: {', '.join(BEST_FIT_KINDS)}", field=path)
    path = f"{path}.{kind}"
    params = dict(_require_mapping(body, path))

    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        field_path = f"{path}.{f.name}"
        if f.name not in params:
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                raise ConfigError("missing required field", field=field_path)
            continue
        value = params.pop(f.name)
        if f.name == "colour":
            kwargs[f.name] = _coerce_colour(value, field_path)
        elif f.name == "coefficients":
            kwargs[f.name] = _coerce_coefficients(value, field_path)
        else:
            kwargs[f.name] = _coerce_float(value, field_path)
    if params:
        raise ConfigError(f"unknown fields: {', '.join(sorted(params))}", field=path)
    try:
        return cls(**kwargs)
    except ValueError as exc:
        raise ConfigError(str(exc), field=path) from exc


def _coerce_coefficients(value: Any, path: str) -> dict[int, float]:
    obj = _require_mapping(value, path)
    out: dict[int, float] = {}
    for key, coeff in obj.items():
        try:
            power = int(key)
        except (TypeError, ValueError):
            raise ConfigError(f"power {key!r} is not an integer", field=path) from None
        if power < 0:
            raise ConfigError(f"power {power} must be >= 0", field=path)
        if power in out:
            raise ConfigError(f"power {power} given twice", field=path)
        out[power] = _coerce_float(coeff, f"{path}.{key}")
    return out


def _require_mapping(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigError("must be an object", field=path)
    return value


def _require(obj: Mapping[str, Any], key: str, path: str) -> Any:
    if key not in obj:
        field_path = key if path == "$" else f"{path}.{key}"
        raise ConfigError("missing required field", field=field_path)
    return obj[key]


def _coerce_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise ConfigError("must be a string", field=path)
    return value


def _coerce_bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError("must be true or false", field=path)
    return value


def _coerce_int(value: Any, path: str, *, minimum: int | None = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError("must be an integer", field=path)
    if minimum is not None and value < minimum:
        raise ConfigError(f"must be >= {minimum}, got {value}", field=path)
    return value


def _coerce_optional_int(value: Any, path: str) -> int | None:
    if value is None:
        return None
    return _coerce_int(value, path, minimum=0)


def _coerce_float(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError("must be a number", field=path)
    return float(value)


def _coerce_colour(value: Any, path: str) -> Colour:
    try:
        return Colour.parse(_coerce_str(value, path))
    except ValueError as exc:
        raise ConfigError(str(exc), field=path) from exc


def _coerce_symbol(value: Any, path: str) -> SymbolKind:
    try:
        return SymbolKind.parse(_coerce_str(value, path))
    except ValueError as exc:
        raise ConfigError(str(exc), field=path) from exc
