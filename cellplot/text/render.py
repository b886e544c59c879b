from __future__ import annotations

from typing import Sequence

import logging

from cellplot.axis import ContinuousAxis
from cellplot.errors import UnsupportedRenderError
from cellplot.histogram import Histogram
from cellplot.series import BarChart, BoxPlot, Plot, Representation
from cellplot.text.axes import render_x_axis_strings, render_y_axis_strings
from cellplot.text.canvas import BLANK, grid_size, join_grid, new_grid, overlay
from cellplot.text.glyphs import (
    BAR_SIDE,
    empty_face,
    marker_glyph,
    render_face_bars,
    render_face_line,
    render_face_points,
)


LOGGER = logging.getLogger(__name__)

LINE_LEGEND_GLYPH = "-"
# Rows under the face: axis line, tick marks, tick labels, axis title.
X_AXIS_ROWS = 4


def render_text(
    representation: Representation,
    x_axis: ContinuousAxis,
    y_axis: ContinuousAxis,
    face_width: int,
    face_height: int,
) -> str:
    """Draw one representation as a ``face_width`` x ``face_height`` character face."""
    if isinstance(representation, Plot):
        return _render_plot(representation, x_axis, y_axis, face_width, face_height)
    if isinstance(representation, Histogram):
        return render_face_bars(
            representation.bin_bounds,
            representation.values,
            x_axis,
            y_axis,
            face_width,
            face_height,
        )
    if isinstance(representation, (BarChart, BoxPlot)):
        raise UnsupportedRenderError(f"{type(representation).__name__} has no text rendering")
    raise UnsupportedRenderError(f"unsupported representation: {type(representation)!r}")


def _render_plot(plot: Plot, x_axis: ContinuousAxis, y_axis: ContinuousAxis, face_width: int, face_height: int) -> str:
    if plot.line_style is None and plot.point_style is None:
        raise UnsupportedRenderError("plot has neither a line style nor a point style to draw with")
    if plot.line_style is not None:
        face_lines = render_face_line(plot.data, x_axis, y_axis, face_width, face_height)
    else:
        face_lines = empty_face(face_width, face_height)
    if plot.point_style is not None:
        face_points = render_face_points(plot.data, x_axis, y_axis, face_width, face_height, plot.point_style)
    else:
        face_points = empty_face(face_width, face_height)
    return overlay(face_lines, face_points)


def legend_glyph(representation: Representation) -> str:
    if isinstance(representation, Plot):
        if representation.point_style is not None:
            return marker_glyph(representation.point_style)
        return LINE_LEGEND_GLYPH
    if isinstance(representation, Histogram):
        return BAR_SIDE
    raise UnsupportedRenderError(f"{type(representation).__name__} has no text legend glyph")


def render_legend(representations: Sequence[Representation]) -> str | None:
    entries = [f"{legend_glyph(r)} {r.legend}" for r in representations if getattr(r, "legend", None)]
    if not entries:
        return None
    width = max(len(entry) for entry in entries)
    return join_grid(entry.ljust(width, BLANK) for entry in entries)


def render_view_text(
    representations: Sequence[Representation],
    x_axis: ContinuousAxis,
    y_axis: ContinuousAxis,
    face_width: int,
    face_height: int,
) -> str:
    """Compose faces, both axes and the legend into one character grid.

    The result has ``face_height + 4`` rows. The axis corner sits in the left
    gutter column; cell offset ``k`` of the x axis lands ``k`` columns to its
    right and line ``l`` of the y axis lands ``l`` rows above it.
    """
    y_block, widest = render_y_axis_strings(y_axis, face_height)
    x_block, start_offset = render_x_axis_strings(x_axis, face_width)

    corner = max(widest + 3, -start_offset)
    x_dx = corner - max(0, -start_offset)
    view_width = max(corner + 1 + face_width + 1, x_dx + grid_size(x_block)[0])
    view = new_grid(view_width, face_height + X_AXIS_ROWS)

    for representation in representations:
        face = render_text(representation, x_axis, y_axis, face_width, face_height)
        view = overlay(view, face, corner + 1, 0)

    view = overlay(view, y_block, corner - widest - 3, 0)
    view = overlay(view, x_block, x_dx, face_height)

    legend = render_legend(representations)
    if legend is not None:
        legend_width, legend_height = grid_size(legend)
        if legend_width > face_width or legend_height > face_height:
            LOGGER.warning("legend (%dx%d) does not fit the %dx%d face; clipping", legend_width, legend_height, face_width, face_height)
        view = overlay(view, legend, max(corner + 1, corner + 1 + face_width - legend_width), 0)
    return view
