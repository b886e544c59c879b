from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence
import re
import sys

import logging

from cellplot.display import DEFAULT_SVG_HEIGHT, DEFAULT_SVG_WIDTH, resolve_default_text_size
from cellplot.errors import PlotDataError, PlotError
from cellplot.histogram import DEFAULT_BIN_COUNT, Histogram
from cellplot.page import Page
from cellplot.series import Plot
from cellplot.style import LineStyle, PointStyle
from cellplot.view import ContinuousView


LOGGER = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\s,;]+")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="cellplot", description="Plot numbers from a file as text or SVG.")
    sub = parser.add_subparsers(dest="command", required=True)

    hist = sub.add_parser("hist", help="Histogram of every number in FILE.")
    _add_common_arguments(hist)
    hist.add_argument("--bins", type=int, default=DEFAULT_BIN_COUNT)
    hist.add_argument("--density", action="store_true", help="Plot count / bin width instead of counts.")

    scatter = sub.add_parser("scatter", help="Scatter plot of 'x y' pairs, one per line.")
    _add_common_arguments(scatter)
    scatter.add_argument("--marker", choices=["circle", "square", "cross"], default="circle")

    line = sub.add_parser("line", help="Line plot of 'x y' pairs, one per line.")
    _add_common_arguments(line)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        lines = _read_input(args.file).splitlines()
        view = _build_view(args, lines)
        if args.svg is not None:
            page = Page.single(view).dimensions(args.svg_width, args.svg_height)
            out = page.save(args.svg)
            print(f"wrote {out}")
            return 0
        width, height = _resolve_face_size(args.width, args.height)
        print(view.to_text(width, height))
    except (PlotError, ValueError, OSError) as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="Input file; '-' reads standard input.")
    parser.add_argument("--width", type=int, default=None, help="Text face width. Default: fits the terminal.")
    parser.add_argument("--height", type=int, default=None, help="Text face height. Default: fits the terminal.")
    parser.add_argument("--x-label", default="")
    parser.add_argument("--y-label", default="")
    parser.add_argument("--svg", type=Path, default=None, help="Write an SVG page here instead of printing text.")
    parser.add_argument("--svg-width", type=float, default=DEFAULT_SVG_WIDTH)
    parser.add_argument("--svg-height", type=float, default=DEFAULT_SVG_HEIGHT)
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")


def _build_view(args: argparse.Namespace, lines: list[str]) -> ContinuousView:
    view = ContinuousView(x_label=args.x_label, y_label=args.y_label)
    if args.command == "hist":
        values = [v for row in parse_rows(lines) for v in row]
        return view.add(Histogram.from_samples(values, args.bins, density=args.density))
    if args.command == "scatter":
        return view.add(Plot.new(parse_pairs(lines), point_style=PointStyle(marker=args.marker)))
    if args.command == "line":
        return view.add(Plot.new(parse_pairs(lines), line_style=LineStyle()))
    raise RuntimeError(f"unsupported command: {args.command}")


def parse_rows(lines: Sequence[str]) -> list[list[float]]:
    """Numbers on each non-blank line; ``#`` starts a comment."""
    rows: list[list[float]] = []
    for lineno, raw in enumerate(lines, start=1):
        text = raw.split("#", 1)[0].strip()
        if not text:
            continue
        try:
            rows.append([float(tok) for tok in _SEPARATORS.split(text) if tok])
        except ValueError as exc:
            raise PlotDataError(f"line {lineno}: {exc}") from exc
    return rows


def parse_pairs(lines: Sequence[str]) -> list[tuple[float, float]]:
    pairs: list[tuple[float, float]] = []
    for i, row in enumerate(parse_rows(lines), start=1):
        if len(row) != 2:
            raise PlotDataError(f"row {i}: expected 2 numbers, got {len(row)}")
        pairs.append((row[0], row[1]))
    return pairs


def _resolve_face_size(width: int | None, height: int | None) -> tuple[int, int]:
    if width is not None and width <= 0:
        raise ValueError("width must be > 0")
    if height is not None and height <= 0:
        raise ValueError("height must be > 0")
    if width is not None and height is not None:
        return width, height
    default_w, default_h = resolve_default_text_size()
    return (width if width is not None else default_w, height if height is not None else default_h)


def _read_input(name: str) -> str:
    if name == "-":
        return sys.stdin.read()
    return Path(name).read_text(encoding="utf-8")


if __name__ == "__main__":
    raise SystemExit(main())
