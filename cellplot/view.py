from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Sequence, TypeAlias
import xml.etree.ElementTree as ET

import logging
import math
import sys

from cellplot.axis import CategoricalAxis, ContinuousAxis, Range, validate_range
from cellplot.display import DEFAULT_MAX_TICKS
from cellplot.errors import InvalidRangeError, UnsupportedRenderError
from cellplot.grid import Grid
from cellplot.histogram import Histogram
from cellplot.scales import pad_range_to_zero
from cellplot.series import BarChart, BoxPlot, CategoricalRepr, ContinuousRepr, Plot, continuous_range
from cellplot.svg_render import (
    draw_categorical_x_axis,
    draw_grid,
    draw_legend,
    draw_x_axis,
    draw_y_axis,
    render_svg,
    svg_group,
)
from cellplot.text.render import render_view_text


LOGGER = logging.getLogger(__name__)

DEGENERATE_RANGE_PAD = 0.5
CATEGORICAL_HEADROOM = 0.1

__all__ = [
    "CategoricalView",
    "ContinuousView",
    "Grid",
    "View",
]


def _explicit_range(lower: float, upper: float, name: str) -> Range:
    lower = float(lower)
    upper = float(upper)
    if not validate_range(lower, upper):
        raise InvalidRangeError(f"invalid {name} range [{lower!r}, {upper!r}]: need finite lower < upper")
    return Range(lower, upper)


def _union(ranges: Iterable[tuple[float, float]]) -> tuple[float, float]:
    lower = math.inf
    upper = -math.inf
    for lo, hi in ranges:
        lower = min(lower, lo)
        upper = max(upper, hi)
    return (lower, upper)


def _fit_range(lower: float, upper: float, name: str) -> Range:
    if not (math.isfinite(lower) and math.isfinite(upper)):
        raise InvalidRangeError(f"no data to derive the {name} range from; supply an explicit range")
    if abs(upper - lower) < sys.float_info.epsilon:
        padded = pad_range_to_zero(lower, upper)
        if abs(padded[1] - padded[0]) < sys.float_info.epsilon:
            padded = (lower - DEGENERATE_RANGE_PAD, upper + DEGENERATE_RANGE_PAD)
        LOGGER.warning("%s range [%r, %r] has no extent; padded to [%r, %r]", name, lower, upper, padded[0], padded[1])
        lower, upper = padded
    return Range(lower, upper)


def _check_face(face_width: float, face_height: float) -> None:
    if face_width <= 0 or face_height <= 0:
        raise ValueError("face width/height must be > 0")


@dataclass(frozen=True)
class ContinuousView:
    """Representations sharing one pair of numeric axes."""

    representations: tuple[ContinuousRepr, ...] = ()
    x_range: Range | None = None
    y_range: Range | None = None
    x_label: str = ""
    y_label: str = ""
    x_max_ticks: int = DEFAULT_MAX_TICKS
    y_max_ticks: int = DEFAULT_MAX_TICKS
    grid: Grid | None = None

    def add(self, representation: ContinuousRepr) -> "ContinuousView":
        if not isinstance(representation, (Plot, Histogram)):
            raise TypeError(f"ContinuousView cannot hold {type(representation).__name__}")
        return replace(self, representations=self.representations + (representation,))

    def with_x_range(self, lower: float, upper: float) -> "ContinuousView":
        return replace(self, x_range=_explicit_range(lower, upper, "x"))

    def with_y_range(self, lower: float, upper: float) -> "ContinuousView":
        return replace(self, y_range=_explicit_range(lower, upper, "y"))

    def with_x_label(self, label: str) -> "ContinuousView":
        return replace(self, x_label=label)

    def with_y_label(self, label: str) -> "ContinuousView":
        return replace(self, y_label=label)

    def with_grid(self, grid: Grid | None = None) -> "ContinuousView":
        return replace(self, grid=grid if grid is not None else Grid())

    def default_x_range(self) -> Range:
        return _fit_range(*_union(continuous_range(r, 0) for r in self.representations), "x")

    def default_y_range(self) -> Range:
        return _fit_range(*_union(continuous_range(r, 1) for r in self.representations), "y")

    def create_axes(self) -> tuple[ContinuousAxis, ContinuousAxis]:
        x_range = self.x_range if self.x_range is not None else self.default_x_range()
        y_range = self.y_range if self.y_range is not None else self.default_y_range()
        x_axis = ContinuousAxis.new(x_range.lower, x_range.upper, self.x_max_ticks, label=self.x_label)
        y_axis = ContinuousAxis.new(y_range.lower, y_range.upper, self.y_max_ticks, label=self.y_label)
        return x_axis, y_axis

    def to_text(self, face_width: int, face_height: int) -> str:
        _check_face(face_width, face_height)
        x_axis, y_axis = self.create_axes()
        return render_view_text(self.representations, x_axis, y_axis, face_width, face_height)

    def to_svg(self, face_width: float, face_height: float) -> ET.Element:
        _check_face(face_width, face_height)
        x_axis, y_axis = self.create_axes()
        group = svg_group(**{"class": "view"})
        if self.grid is not None:
            group.append(draw_grid(self.grid, face_width, face_height))
        for representation in self.representations:
            group.append(render_svg(representation, x_axis, y_axis, face_width, face_height))
        group.append(draw_x_axis(x_axis, face_width))
        group.append(draw_y_axis(y_axis, face_height))
        legend = draw_legend(self.representations, face_width, face_height)
        if legend is not None:
            group.append(legend)
        return group


@dataclass(frozen=True)
class CategoricalView:
    """Bar charts and box plots over named categories; vector output only."""

    representations: tuple[CategoricalRepr, ...] = ()
    x_ticks: tuple[str, ...] | None = None
    y_range: Range | None = None
    x_label: str = ""
    y_label: str = ""
    y_max_ticks: int = DEFAULT_MAX_TICKS
    grid: Grid | None = None

    def add(self, representation: CategoricalRepr) -> "CategoricalView":
        if not isinstance(representation, (BarChart, BoxPlot)):
            raise TypeError(f"CategoricalView cannot hold {type(representation).__name__}")
        return replace(self, representations=self.representations + (representation,))

    def with_x_ticks(self, ticks: Sequence[str]) -> "CategoricalView":
        return replace(self, x_ticks=tuple(str(t) for t in ticks))

    def with_y_range(self, lower: float, upper: float) -> "CategoricalView":
        return replace(self, y_range=_explicit_range(lower, upper, "y"))

    def with_x_label(self, label: str) -> "CategoricalView":
        return replace(self, x_label=label)

    def with_y_label(self, label: str) -> "CategoricalView":
        return replace(self, y_label=label)

    def with_grid(self, grid: Grid | None = None) -> "CategoricalView":
        return replace(self, grid=grid if grid is not None else Grid())

    def default_x_ticks(self) -> tuple[str, ...]:
        ticks: list[str] = []
        for representation in self.representations:
            for tick in representation.ticks():
                if tick not in ticks:
                    ticks.append(tick)
        return tuple(ticks)

    def default_y_range(self) -> Range:
        lower, upper = _union(r.value_range() for r in self.representations)
        if math.isfinite(lower) and math.isfinite(upper):
            headroom = (upper - lower) * CATEGORICAL_HEADROOM
            lower, upper = lower - headroom, upper + headroom
        return _fit_range(lower, upper, "y")

    def create_axes(self) -> tuple[CategoricalAxis, ContinuousAxis]:
        ticks = self.x_ticks if self.x_ticks is not None else self.default_x_ticks()
        y_range = self.y_range if self.y_range is not None else self.default_y_range()
        x_axis = CategoricalAxis.new(ticks, label=self.x_label)
        y_axis = ContinuousAxis.new(y_range.lower, y_range.upper, self.y_max_ticks, label=self.y_label)
        return x_axis, y_axis

    def to_text(self, face_width: int, face_height: int) -> str:
        raise UnsupportedRenderError("categorical views have no text rendering")

    def to_svg(self, face_width: float, face_height: float) -> ET.Element:
        _check_face(face_width, face_height)
        x_axis, y_axis = self.create_axes()
        group = svg_group(**{"class": "view"})
        if self.grid is not None:
            group.append(draw_grid(self.grid, face_width, face_height, horizontal_only=True))
        for representation in self.representations:
            group.append(render_svg(representation, x_axis, y_axis, face_width, face_height))
        group.append(draw_categorical_x_axis(x_axis, face_width))
        group.append(draw_y_axis(y_axis, face_height))
        return group


View: TypeAlias = ContinuousView | CategoricalView
