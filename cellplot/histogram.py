from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Sequence, TypeAlias

import logging
import sys

import numpy as np

from cellplot.adapters.normalize import normalize_values
from cellplot.errors import BinLookupError, PlotDataError
from cellplot.style import BoxStyle, merge_style


LOGGER = logging.getLogger(__name__)

HistogramBins: TypeAlias = int | Sequence[float]

DEFAULT_BIN_COUNT = 30
# Half-width added either side when every sample has the same value.
DEGENERATE_RANGE_PAD = 0.5


def uniform_bounds(lower: float, upper: float, num_bins: int) -> list[float]:
    span = upper - lower
    bounds = [(n / num_bins) * span + lower for n in range(num_bins)]
    bounds.append(upper)
    return bounds


def _strictly_increasing(bounds: Sequence[float]) -> bool:
    return all(b > a for a, b in zip(bounds, bounds[1:]))


def assign_bins(values: np.ndarray, bin_bounds: Sequence[float]) -> np.ndarray:
    """Bin index for every value.

    A value on a boundary shared by two bins goes to the lower bin; the first
    bound is inclusive. Values outside ``[bounds[0], bounds[-1]]`` raise
    :class:`BinLookupError`.
    """
    edges = np.asarray(bin_bounds, dtype=np.float64)
    values = np.asarray(values, dtype=np.float64)
    outside = (values < edges[0]) | (values > edges[-1]) | ~np.isfinite(values)
    if np.any(outside):
        bad = float(values[int(np.argmax(outside))])
        raise BinLookupError(bad, float(edges[0]), float(edges[-1]))
    idx = np.searchsorted(edges, values, side="left")
    return np.maximum(idx - 1, 0)


def find_bin(value: float, bin_bounds: Sequence[float]) -> int:
    return int(assign_bins(np.asarray([value], dtype=np.float64), bin_bounds)[0])


@dataclass(frozen=True)
class Histogram:
    bin_bounds: tuple[float, ...]
    bin_counts: tuple[float, ...]
    bin_densities: tuple[float, ...]
    density: bool = False
    style: BoxStyle = field(default_factory=BoxStyle)
    legend: str | None = None

    def __post_init__(self) -> None:
        if len(self.bin_bounds) < 2:
            raise PlotDataError("a histogram needs at least two bin bounds")
        n = len(self.bin_bounds) - 1
        if len(self.bin_counts) != n or len(self.bin_densities) != n:
            raise PlotDataError(
                f"bin counts/densities must have {n} entries, got {len(self.bin_counts)}/{len(self.bin_densities)}"
            )
        if any(b <= a for a, b in zip(self.bin_bounds, self.bin_bounds[1:])):
            raise PlotDataError("bin bounds must be strictly increasing")
        if any(c < 0 for c in self.bin_counts):
            raise PlotDataError("bin counts must be non-negative")

    @classmethod
    def from_samples(
        cls,
        samples: Any,
        bins: HistogramBins = DEFAULT_BIN_COUNT,
        *,
        density: bool = False,
        style: BoxStyle | None = None,
        legend: str | None = None,
    ) -> "Histogram":
        values = normalize_values(samples, label="samples")
        bounds = _resolve_bounds(values, bins)
        counts = np.bincount(assign_bins(values, bounds), minlength=len(bounds) - 1).astype(np.float64)
        widths = np.diff(np.asarray(bounds, dtype=np.float64))
        return cls(
            bin_bounds=tuple(float(b) for b in bounds),
            bin_counts=tuple(counts.tolist()),
            bin_densities=tuple((counts / widths).tolist()),
            density=density,
            style=merge_style(BoxStyle(), style),
            legend=legend,
        )

    @property
    def num_bins(self) -> int:
        return len(self.bin_counts)

    @property
    def values(self) -> tuple[float, ...]:
        return self.bin_densities if self.density else self.bin_counts

    def as_density(self, density: bool = True) -> "Histogram":
        return replace(self, density=density)

    def with_style(self, style: BoxStyle) -> "Histogram":
        return replace(self, style=merge_style(self.style, style))

    def with_legend(self, legend: str) -> "Histogram":
        return replace(self, legend=legend)

    def x_range(self) -> tuple[float, float]:
        return (self.bin_bounds[0], self.bin_bounds[-1])

    def y_range(self) -> tuple[float, float]:
        return (0.0, max(self.values))


def _resolve_bounds(values: np.ndarray, bins: HistogramBins) -> list[float]:
    if isinstance(bins, bool):
        raise PlotDataError("bins must be a bin count or a sequence of bounds")
    if isinstance(bins, (int, np.integer)):
        num_bins = int(bins)
        if num_bins < 1:
            raise PlotDataError("bin count must be >= 1")
        if values.size == 0:
            raise PlotDataError("cannot derive bin bounds from empty samples; pass explicit bounds")
        lower = float(np.min(values))
        upper = float(np.max(values))
        degenerate = abs(lower - upper) < sys.float_info.epsilon
        # Too narrow to split into num_bins distinct floats at this magnitude.
        narrow = not degenerate and not _strictly_increasing(uniform_bounds(lower, upper, num_bins))
        if degenerate or narrow:
            lower -= DEGENERATE_RANGE_PAD
            upper += DEGENERATE_RANGE_PAD
        bounds = uniform_bounds(lower, upper, num_bins)
        if not _strictly_increasing(bounds):
            raise PlotDataError(
                f"cannot split [{lower!r}, {upper!r}] into {num_bins} distinct bins at this magnitude; "
                "use fewer bins or explicit bounds"
            )
        if narrow:
            LOGGER.warning("sample range is too narrow for %d bins; padded to [%r, %r]", num_bins, lower, upper)
        return bounds

    bounds = normalize_values(bins, label="bin bounds")
    if bounds.size < 2:
        raise PlotDataError("explicit bin bounds need at least two entries")
    if np.any(np.diff(bounds) <= 0):
        raise PlotDataError("explicit bin bounds must be strictly increasing")
    return bounds.tolist()
