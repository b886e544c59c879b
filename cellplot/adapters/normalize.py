from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from cellplot.errors import PlotDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_values(values: Any, *, label: str = "values", allow_empty: bool = True) -> np.ndarray:
    """Coerce a 1-D input into a finite ``float64`` array."""
    arr = _coerce_1d_numeric(values, label=label)
    if arr.size == 0 and not allow_empty:
        raise PlotDataError(f"{label} must not be empty")
    _reject_non_finite(arr, label=label)
    return arr


def normalize_xy(y: Any, *, x: Any = None) -> list[tuple[float, float]]:
    y_arr = normalize_values(y, label="y")
    if x is None:
        x_arr = np.arange(y_arr.size, dtype=np.float64)
    else:
        x_arr = normalize_values(x, label="x")
    if x_arr.shape != y_arr.shape:
        raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    return list(zip(x_arr.tolist(), y_arr.tolist()))


def normalize_points(points: Any) -> list[tuple[float, float]]:
    """Coerce ``(x, y)`` pairs, an ``(N, 2)`` array/tensor or a two-column DataFrame."""
    if pd is not None and isinstance(points, pd.DataFrame):
        numeric_cols = [c for c in points.columns if _is_numeric_dtype(points[c])]
        if len(numeric_cols) != 2:
            raise PlotDataError("DataFrame input must contain exactly two numeric columns")
        return normalize_xy(points[numeric_cols[1]], x=points[numeric_cols[0]])

    if torch is not None and isinstance(points, torch.Tensor):
        points = points.detach().cpu().to(torch.float64).numpy()

    if isinstance(points, np.ndarray):
        arr = points
    elif isinstance(points, Sequence) and not isinstance(points, (str, bytes, bytearray)):
        if len(points) == 0:
            return []
        try:
            arr = np.asarray([tuple(p) for p in points], dtype=object)
        except TypeError as exc:
            raise PlotDataError("points must be (x, y) pairs") from exc
    else:
        raise PlotDataError(f"unsupported points input type: {type(points)!r}")

    if arr.size == 0:
        return []
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise PlotDataError(f"points must have shape (N, 2), got {arr.shape}")
    return normalize_xy(arr[:, 1], x=arr[:, 0])


def _reject_non_finite(arr: np.ndarray, *, label: str) -> None:
    bad = np.flatnonzero(~np.isfinite(arr))
    if bad.size:
        i = int(bad[0])
        raise PlotDataError(f"{label} contains a non-finite value at index {i}: {arr[i]!r}")


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    try:
        return bool(pd.api.types.is_numeric_dtype(series))
    except Exception:
        return False


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(list(value), dtype=object)
        if arr.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(arr, label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            raise PlotDataError(f"{label} contains a missing value at index {i}")
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
