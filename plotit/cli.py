from __future__ import annotations

import argparse
import logging
from pathlib import Path

from plotit.api import build_graph
from plotit.errors import PlotError
from plotit.output import save_png


LOGGER = logging.getLogger(__name__)

GRAPH_TYPES = ("scatter",)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="plotit", description="Plot CSV data sets onto a PNG graph.")
    parser.add_argument("-g", "--graph", required=True, help="Graph type to generate, accepted values: scatter")
    parser.add_argument("-c", "--config", type=Path, required=True, help="Path to a JSON graph config file.")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("."),
        help="Directory for the PNG; the file is named after the graph title.",
    )
    parser.add_argument("--csv-delimiter", default=",", help='Override the default CSV delimiter ",", e.g. ";".')
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging; repeat for more.")
    parser.add_argument("-q", "--quiet", action="count", default=0, help="Less logging; repeat for less.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=_log_level(args.verbose, args.quiet), format="%(levelname)s %(name)s: %(message)s")

    if len(args.csv_delimiter) != 1:
        LOGGER.error("CSV delimiter must be a single character, got %r", args.csv_delimiter)
        return 1
    graph = args.graph.lower()
    if graph not in GRAPH_TYPES:
        LOGGER.error("invalid graph type %r, valid graphs are: %s", args.graph, ", ".join(GRAPH_TYPES))
        return 1

    try:
        spec, frame = build_graph(args.config, csv_delimiter=args.csv_delimiter)
        path = save_png(frame, args.output, spec.title)
    except PlotError as exc:
        LOGGER.error("%s", exc)
        return 1
    LOGGER.info("wrote %s", path)
    return 0


def _log_level(verbose: int, quiet: int) -> int:
    levels = (logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG)
    index = max(0, min(len(levels) - 1, 2 + verbose - quiet))
    return levels[index]
