from __future__ import annotations

from typing import Sequence

import math

import numpy as np

from cellplot.errors import PlotDataError


def _sorted(values: Sequence[float]) -> np.ndarray:
    arr = np.sort(np.asarray(values, dtype=np.float64))
    if arr.size == 0:
        raise PlotDataError("statistics need at least one value")
    if not np.all(np.isfinite(arr)):
        raise PlotDataError("statistics need finite values")
    return arr


def median(values: Sequence[float]) -> float:
    s = _sorted(values)
    n = s.size
    if n % 2 == 0:
        return float(s[n // 2 - 1] / 2.0 + s[n // 2] / 2.0)
    return float(s[n // 2])


def quartiles(values: Sequence[float]) -> tuple[float, float, float]:
    """Lower quartile, median and upper quartile; odd counts leave the median out of both halves."""
    s = _sorted(values)
    n = s.size
    if n == 1:
        v = float(s[0])
        return (v, v, v)
    half = n // 2
    if n % 2 == 0:
        lower, upper = s[:half], s[half:]
    else:
        lower, upper = s[:half], s[half + 1 :]
    return (median(lower), median(s), median(upper))


def data_range(values: Sequence[float]) -> tuple[float, float]:
    """``(min, max)`` of the values, or ``(inf, -inf)`` when there are none."""
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return (math.inf, -math.inf)
    return (float(np.min(arr)), float(np.max(arr)))
