from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, TypeAlias

import numpy as np

from cellplot.adapters.normalize import normalize_points, normalize_values
from cellplot.errors import InvalidRangeError, PlotDataError
from cellplot.histogram import Histogram
from cellplot.stats import data_range, quartiles
from cellplot.style import BoxStyle, LineStyle, PointStyle, merge_style


FUNCTION_SAMPLES = 200


@dataclass(frozen=True)
class Plot:
    """XY data drawn as points, a connecting line, or both."""

    data: tuple[tuple[float, float], ...]
    line_style: LineStyle | None = None
    point_style: PointStyle | None = None
    legend: str | None = None

    @classmethod
    def new(
        cls,
        data: Any,
        *,
        line_style: LineStyle | None = None,
        point_style: PointStyle | None = None,
        legend: str | None = None,
    ) -> "Plot":
        return cls(
            data=tuple(normalize_points(data)),
            line_style=line_style,
            point_style=point_style,
            legend=legend,
        )

    @classmethod
    def from_xy(cls, y: Any, *, x: Any = None, **kwargs: Any) -> "Plot":
        y_arr = normalize_values(y, label="y")
        x_arr = np.arange(y_arr.size, dtype=np.float64) if x is None else normalize_values(x, label="x")
        if x_arr.shape != y_arr.shape:
            raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
        return cls.new(np.column_stack([x_arr, y_arr]), **kwargs)

    @classmethod
    def from_function(cls, f: Callable[[float], float], lower: float, upper: float, **kwargs: Any) -> "Plot":
        """Sample ``f`` every ``(upper - lower) / 200`` from ``lower`` up to ``upper``."""
        lower = float(lower)
        upper = float(upper)
        if not lower < upper:
            raise InvalidRangeError(f"function range lower must be < upper, got [{lower!r}, {upper!r}]")
        sampling = (upper - lower) / FUNCTION_SAMPLES
        xs = lower + np.arange(FUNCTION_SAMPLES + 1, dtype=np.float64) * sampling
        xs = xs[xs <= upper]
        return cls.new([(x, float(f(x))) for x in xs.tolist()], **kwargs)

    def with_line_style(self, style: LineStyle) -> "Plot":
        base = self.line_style if self.line_style is not None else LineStyle()
        return replace(self, line_style=merge_style(base, style))

    def with_point_style(self, style: PointStyle) -> "Plot":
        base = self.point_style if self.point_style is not None else PointStyle()
        return replace(self, point_style=merge_style(base, style))

    def with_legend(self, legend: str) -> "Plot":
        return replace(self, legend=legend)

    def x_range(self) -> tuple[float, float]:
        return data_range([x for x, _ in self.data])

    def y_range(self) -> tuple[float, float]:
        return data_range([y for _, y in self.data])


@dataclass(frozen=True)
class BarChart:
    value: float
    label: str = ""
    style: BoxStyle = field(default_factory=BoxStyle)

    def __post_init__(self) -> None:
        normalize_values([self.value], label="bar value")

    def with_style(self, style: BoxStyle) -> "BarChart":
        return replace(self, style=merge_style(self.style, style))

    def with_label(self, label: str) -> "BarChart":
        return replace(self, label=label)

    def value_range(self) -> tuple[float, float]:
        return (0.0, float(self.value))

    def ticks(self) -> list[str]:
        return [self.label]


@dataclass(frozen=True)
class BoxPlot:
    data: tuple[float, ...]
    label: str = ""
    style: BoxStyle = field(default_factory=BoxStyle)

    @classmethod
    def new(cls, data: Any, *, label: str = "", style: BoxStyle | None = None) -> "BoxPlot":
        values = normalize_values(data, label="box plot data", allow_empty=False)
        return cls(data=tuple(values.tolist()), label=label, style=merge_style(BoxStyle(), style))

    def with_style(self, style: BoxStyle) -> "BoxPlot":
        return replace(self, style=merge_style(self.style, style))

    def with_label(self, label: str) -> "BoxPlot":
        return replace(self, label=label)

    def quartiles(self) -> tuple[float, float, float]:
        return quartiles(self.data)

    def value_range(self) -> tuple[float, float]:
        return data_range(self.data)

    def ticks(self) -> list[str]:
        return [self.label]


ContinuousRepr: TypeAlias = Plot | Histogram
CategoricalRepr: TypeAlias = BarChart | BoxPlot
Representation: TypeAlias = ContinuousRepr | CategoricalRepr


def continuous_range(representation: ContinuousRepr, dim: int) -> tuple[float, float]:
    if dim not in (0, 1):
        raise ValueError(f"dim must be 0 (x) or 1 (y), got {dim!r}")
    if isinstance(representation, (Plot, Histogram)):
        return representation.x_range() if dim == 0 else representation.y_range()
    raise TypeError(f"not a continuous representation: {type(representation)!r}")

