from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence

import math

from cellplot.display import DEFAULT_MAX_TICKS
from cellplot.errors import InvalidRangeError
from cellplot.scales import plan_ticks


@dataclass(frozen=True)
class Range:
    lower: float
    upper: float

    def is_valid(self) -> bool:
        return validate_range(self.lower, self.upper)


def validate_range(lower: float, upper: float) -> bool:
    return math.isfinite(lower) and math.isfinite(upper) and lower < upper


@dataclass(frozen=True)
class ContinuousAxis:
    """A numeric axis whose ticks are planned once, at construction."""

    range: Range
    ticks: tuple[float, ...]
    label: str = ""

    @classmethod
    def new(cls, lower: float, upper: float, max_ticks: int = DEFAULT_MAX_TICKS, *, label: str = "") -> "ContinuousAxis":
        lower = float(lower)
        upper = float(upper)
        if not validate_range(lower, upper):
            raise InvalidRangeError(f"invalid axis range [{lower!r}, {upper!r}]; supply an explicit range")
        return cls(range=Range(lower, upper), ticks=tuple(plan_ticks(lower, upper, max_ticks)), label=label)

    @property
    def min(self) -> float:
        return self.range.lower

    @property
    def max(self) -> float:
        return self.range.upper

    @property
    def span(self) -> float:
        return self.range.upper - self.range.lower

    def with_label(self, label: str) -> "ContinuousAxis":
        return replace(self, label=label)


@dataclass(frozen=True)
class CategoricalAxis:
    ticks: tuple[str, ...] = field(default_factory=tuple)
    label: str = ""

    @classmethod
    def new(cls, ticks: Sequence[str], *, label: str = "") -> "CategoricalAxis":
        return cls(ticks=tuple(str(t) for t in ticks), label=label)

    def with_label(self, label: str) -> "CategoricalAxis":
        return replace(self, label=label)

    def index_of(self, tick: str) -> int:
        try:
            return self.ticks.index(tick)
        except ValueError:
            raise InvalidRangeError(f"category not on axis: {tick!r}") from None
