from __future__ import annotations

from typing import Sequence

from cellplot.axis import ContinuousAxis
from cellplot.errors import PlotDataError, UnsupportedRenderError
from cellplot.style import PointStyle
from cellplot.text.canvas import BLANK, join_grid, new_grid
from cellplot.text.cells import bins_for_cells, bound_cell_offsets, value_to_cell_offset


MARKER_GLYPHS: dict[str, str] = {
    "circle": "●",
    "square": "■",
    "cross": "×",
}
BAR_CAP = "-"
BAR_SIDE = "|"


def empty_face(face_width: int, face_height: int) -> str:
    return new_grid(face_width, face_height)


def _cmp(a: int, b: int) -> int:
    return (a > b) - (a < b)


# (left vs row, right vs row) -> glyph at a bin boundary column
_BOUNDARY_GLYPHS: dict[tuple[int, int], str] = {
    (-1, -1): BLANK,
    (-1, 0): BAR_CAP,
    (-1, 1): BAR_SIDE,
    (0, -1): BAR_CAP,
    (0, 0): BAR_CAP,
    (0, 1): BAR_SIDE,
    (1, -1): BAR_SIDE,
    (1, 0): BAR_SIDE,
    (1, 1): BAR_SIDE,
}


def render_face_bars(
    bin_bounds: Sequence[float],
    bin_values: Sequence[float],
    x_axis: ContinuousAxis,
    y_axis: ContinuousAxis,
    face_width: int,
    face_height: int,
) -> str:
    _check_face(face_width, face_height)
    if len(bin_bounds) < 2:
        raise PlotDataError("bin_bounds needs at least two entries")
    if len(bin_values) != len(bin_bounds) - 1:
        raise PlotDataError(f"expected {len(bin_bounds) - 1} bin values, got {len(bin_values)}")

    bound_cells = bound_cell_offsets(bin_bounds, x_axis, face_width)
    boundary_columns = set(bound_cells)
    cell_bins = bins_for_cells(bound_cells, face_width)
    cell_heights = [
        0 if b is None else value_to_cell_offset(float(bin_values[b]), y_axis, face_height) for b in cell_bins
    ]

    lines: list[str] = []
    for line in range(1, face_height + 1):
        cells = []
        for column in range(1, face_width + 1):
            if column in boundary_columns:
                key = (_cmp(cell_heights[column - 1], line), _cmp(cell_heights[column + 1], line))
                cells.append(_BOUNDARY_GLYPHS[key])
            elif cell_heights[column] == line:
                cells.append(BAR_CAP)
            else:
                cells.append(BLANK)
        lines.append("".join(cells))
    return join_grid(reversed(lines))


def render_face_points(
    data: Sequence[tuple[float, float]],
    x_axis: ContinuousAxis,
    y_axis: ContinuousAxis,
    face_width: int,
    face_height: int,
    style: PointStyle | None = None,
) -> str:
    _check_face(face_width, face_height)
    glyph = marker_glyph(style or PointStyle())
    cells = _blank_cells(face_width, face_height)
    for x, y in data:
        column = value_to_cell_offset(x, x_axis, face_width)
        line = value_to_cell_offset(y, y_axis, face_height)
        _put(cells, column, line, glyph)
    return _cells_to_grid(cells)


def render_face_line(
    data: Sequence[tuple[float, float]],
    x_axis: ContinuousAxis,
    y_axis: ContinuousAxis,
    face_width: int,
    face_height: int,
) -> str:
    _check_face(face_width, face_height)
    cells = _blank_cells(face_width, face_height)
    points = [
        (value_to_cell_offset(x, x_axis, face_width), value_to_cell_offset(y, y_axis, face_height)) for x, y in data
    ]
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        clipped = _clip_segment(x0, y0, x1, y1, face_width + 1, face_height + 1)
        if clipped is None:
            continue
        glyph = segment_glyph(x1 - x0, y1 - y0)
        for column, line in _segment_cells(*clipped):
            _put(cells, column, line, glyph)
    return _cells_to_grid(cells)


def marker_glyph(style: PointStyle) -> str:
    marker = style.resolved_marker()
    try:
        return MARKER_GLYPHS[marker]
    except KeyError:
        raise UnsupportedRenderError(f"no text glyph for point marker {marker!r}") from None


def segment_glyph(dx: int, dy: int) -> str:
    if abs(dy) * 2 <= abs(dx):
        return "-"
    if abs(dx) * 2 < abs(dy):
        return "|"
    return "/" if (dx > 0) == (dy > 0) else "\\"


def _segment_cells(x0: int, y0: int, x1: int, y1: int) -> list[tuple[int, int]]:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    out: list[tuple[int, int]] = []
    while True:
        out.append((x0, y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
    return out


def _clip_segment(x0: int, y0: int, x1: int, y1: int, xmax: int, ymax: int) -> tuple[int, int, int, int] | None:
    """Liang-Barsky clip to ``[0, xmax] x [0, ymax]``; endpoints inside are returned untouched."""
    if 0 <= x0 <= xmax and 0 <= x1 <= xmax and 0 <= y0 <= ymax and 0 <= y1 <= ymax:
        return (x0, y0, x1, y1)
    dx = float(x1 - x0)
    dy = float(y1 - y0)
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0), (dx, xmax - x0), (-dy, y0), (dy, ymax - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (
        int(round(x0 + t0 * dx)),
        int(round(y0 + t0 * dy)),
        int(round(x0 + t1 * dx)),
        int(round(y0 + t1 * dy)),
    )


def _check_face(face_width: int, face_height: int) -> None:
    if face_width <= 0 or face_height <= 0:
        raise ValueError("face width/height must be > 0")


def _blank_cells(face_width: int, face_height: int) -> list[list[str]]:
    return [[BLANK] * face_width for _ in range(face_height)]


def _put(cells: list[list[str]], column: int, line: int, glyph: str) -> None:
    # Columns and lines are 1-based; line 1 is the bottom row of the face.
    if 1 <= line <= len(cells) and 1 <= column <= len(cells[0]):
        cells[line - 1][column - 1] = glyph


def _cells_to_grid(cells: list[list[str]]) -> str:
    return join_grid("".join(row) for row in reversed(cells))
