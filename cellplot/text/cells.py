from __future__ import annotations

from typing import Sequence

from cellplot.axis import ContinuousAxis
from cellplot.scales import round_half_away


def value_to_cell_offset(value: float, axis: ContinuousAxis, face_cells: int) -> int:
    """Cell offset of ``value`` from the axis origin, rounded half away from zero."""
    if face_cells <= 0:
        raise ValueError("face_cells must be > 0")
    data_per_cell = axis.span / float(face_cells)
    return round_half_away((value - axis.min) / data_per_cell)


def tick_offset_map(axis: ContinuousAxis, face_cells: int) -> dict[int, float]:
    # Ticks sharing a cell collapse onto the last one.
    return {value_to_cell_offset(tick, axis, face_cells): tick for tick in axis.ticks}


def bound_cell_offsets(bin_bounds: Sequence[float], x_axis: ContinuousAxis, face_width: int) -> list[int]:
    return [value_to_cell_offset(bound, x_axis, face_width) for bound in bin_bounds]


def bins_for_cells(bound_offsets: Sequence[int], face_width: int) -> list[int | None]:
    """Map every x cell to the bin it shows.

    The result has ``face_width + 2`` entries: an underflow slot, one per face
    column, and an overflow slot. Cells outside every bin hold ``None``.
    """
    if not bound_offsets:
        raise ValueError("bound_offsets must not be empty")
    size = face_width + 2

    cell_bins: list[int | None] = [None]
    for b, (left, right) in enumerate(zip(bound_offsets, bound_offsets[1:])):
        cell_bins.extend([b] * (right - left))
    cell_bins.append(None)

    first = bound_offsets[0]
    if first < 0:
        cell_bins = cell_bins[-first:]
    elif first > 0:
        cell_bins = [None] * first + cell_bins

    if len(cell_bins) < size:
        cell_bins.extend([None] * (size - len(cell_bins)))
    return cell_bins[:size]
