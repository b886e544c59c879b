from __future__ import annotations

from typing import Sequence
import xml.etree.ElementTree as ET

import logging

from cellplot.axis import CategoricalAxis, ContinuousAxis
from cellplot.errors import UnsupportedRenderError
from cellplot.grid import Grid
from cellplot.histogram import Histogram
from cellplot.scales import format_tick
from cellplot.series import BarChart, BoxPlot, Plot, Representation
from cellplot.stats import data_range, quartiles
from cellplot.style import BoxStyle, LineStyle, PointStyle


LOGGER = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
AXIS_COLOUR = "black"
FONT_SIZE = 12
TICK_LENGTH = 10
LABEL_GAP = 20
TITLE_GAP = 40
LEGEND_ROW_HEIGHT = 18
LEGEND_WIDTH = 120
BAR_WIDTH_FRACTION = 0.5

DEFAULT_POINT_COLOUR = "black"
DEFAULT_POINT_SIZE = 5.0
DEFAULT_LINE_COLOUR = "black"
DEFAULT_LINE_WIDTH = 2.0
DEFAULT_BOX_FILL = "burlywood"


def value_to_face_offset(value: float, axis: ContinuousAxis, face_size: float) -> float:
    return (face_size * (value - axis.min)) / axis.span


def category_to_face_offset(tick: str, axis: CategoricalAxis, face_size: float) -> float:
    """Centre of the slot ``tick`` occupies; slots split the face evenly."""
    if not axis.ticks:
        raise UnsupportedRenderError("categorical axis has no categories")
    space_per_tick = face_size / len(axis.ticks)
    return space_per_tick * (axis.index_of(tick) + 0.5)


def _bar_extent(top: float, bottom: float, face_height: float) -> tuple[float, float]:
    """Face ``y`` and ``height`` of a bar between two offsets, clipped to the face."""
    low, high = sorted((min(max(top, 0.0), face_height), min(max(bottom, 0.0), face_height)))
    return -high, high - low


def _num(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.4f}".rstrip("0").rstrip(".")


def _element(tag: str, **attrs: object) -> ET.Element:
    # Keyword names use underscores where SVG attributes use hyphens.
    elem = ET.Element(tag)
    for key, value in attrs.items():
        if value is None:
            continue
        text = _num(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else str(value)
        elem.set(key.replace("_", "-"), text)
    return elem


def svg_group(*children: ET.Element, **attrs: object) -> ET.Element:
    group = _element("g", **attrs)
    group.extend(children)
    return group


def _text(content: str, **attrs: object) -> ET.Element:
    elem = _element("text", font_size=FONT_SIZE, **attrs)
    elem.text = content
    return elem


def draw_x_axis(axis: ContinuousAxis, face_width: float) -> ET.Element:
    axis_line = _element("line", x1=0, y1=0, x2=face_width, y2=0, stroke=AXIS_COLOUR, stroke_width=1)
    ticks = svg_group()
    labels = svg_group()
    for tick in axis.ticks:
        pos = value_to_face_offset(tick, axis, face_width)
        ticks.append(_element("line", x1=pos, y1=0, x2=pos, y2=TICK_LENGTH, stroke=AXIS_COLOUR, stroke_width=1))
        labels.append(_text(format_tick(tick), x=pos, y=LABEL_GAP, text_anchor="middle", dominant_baseline="middle"))
    title = _text(axis.label, x=face_width / 2.0, y=TITLE_GAP, text_anchor="middle")
    return svg_group(ticks, axis_line, labels, title, **{"class": "x-axis"})


def draw_y_axis(axis: ContinuousAxis, face_height: float) -> ET.Element:
    axis_line = _element("line", x1=0, y1=0, x2=0, y2=-face_height, stroke=AXIS_COLOUR, stroke_width=1)
    ticks = svg_group()
    labels = svg_group()
    for tick in axis.ticks:
        pos = value_to_face_offset(tick, axis, face_height)
        ticks.append(_element("line", x1=0, y1=-pos, x2=-TICK_LENGTH, y2=-pos, stroke=AXIS_COLOUR, stroke_width=1))
        labels.append(_text(format_tick(tick), x=-LABEL_GAP + 5, y=-pos, text_anchor="end", dominant_baseline="middle"))
    title_y = -face_height / 2.0
    title = _text(
        axis.label,
        x=-TITLE_GAP,
        y=title_y,
        text_anchor="middle",
        transform=f"rotate(-90 {_num(-TITLE_GAP)} {_num(title_y)})",
    )
    return svg_group(ticks, axis_line, labels, title, **{"class": "y-axis"})


def draw_categorical_x_axis(axis: CategoricalAxis, face_width: float) -> ET.Element:
    axis_line = _element("line", x1=0, y1=0, x2=face_width, y2=0, stroke=AXIS_COLOUR, stroke_width=1)
    ticks = svg_group()
    labels = svg_group()
    for tick in axis.ticks:
        pos = category_to_face_offset(tick, axis, face_width)
        ticks.append(_element("line", x1=pos, y1=0, x2=pos, y2=TICK_LENGTH, stroke=AXIS_COLOUR, stroke_width=1))
        labels.append(_text(tick, x=pos, y=LABEL_GAP, text_anchor="middle", dominant_baseline="middle"))
    title = _text(axis.label, x=face_width / 2.0, y=TITLE_GAP, text_anchor="middle")
    return svg_group(ticks, axis_line, labels, title, **{"class": "x-axis"})


def draw_marker(x: float, y: float, style: PointStyle) -> ET.Element:
    size = style.size if style.size is not None else DEFAULT_POINT_SIZE
    colour = style.colour if style.colour is not None else DEFAULT_POINT_COLOUR
    marker = style.resolved_marker()
    if marker == "circle":
        return _element("circle", cx=x, cy=y, r=size, fill=colour)
    if marker == "square":
        return _element("rect", x=x - size, y=y - size, width=2 * size, height=2 * size, fill=colour)
    if marker == "cross":
        path = (
            f"M {_num(x - size)} {_num(y - size)} L {_num(x + size)} {_num(y + size)} "
            f"M {_num(x + size)} {_num(y - size)} L {_num(x - size)} {_num(y + size)}"
        )
        return _element("path", d=path, fill="none", stroke=colour, stroke_width=2)
    raise UnsupportedRenderError(f"no svg shape for point marker {marker!r}")


def draw_face_points(
    data: Sequence[tuple[float, float]],
    x_axis: ContinuousAxis,
    y_axis: ContinuousAxis,
    face_width: float,
    face_height: float,
    style: PointStyle,
) -> ET.Element:
    group = svg_group()
    for x, y in data:
        x_pos = value_to_face_offset(x, x_axis, face_width)
        y_pos = -value_to_face_offset(y, y_axis, face_height)
        group.append(draw_marker(x_pos, y_pos, style))
    return group


def draw_face_line(
    data: Sequence[tuple[float, float]],
    x_axis: ContinuousAxis,
    y_axis: ContinuousAxis,
    face_width: float,
    face_height: float,
    style: LineStyle,
) -> ET.Element:
    points = " ".join(
        f"{_num(value_to_face_offset(x, x_axis, face_width))},{_num(-value_to_face_offset(y, y_axis, face_height))}"
        for x, y in data
    )
    polyline = _element(
        "polyline",
        points=points,
        fill="none",
        stroke=style.colour if style.colour is not None else DEFAULT_LINE_COLOUR,
        stroke_width=style.width if style.width is not None else DEFAULT_LINE_WIDTH,
        stroke_linejoin="round",
    )
    return svg_group(polyline)


def draw_face_bars(
    bin_bounds: Sequence[float],
    bin_values: Sequence[float],
    x_axis: ContinuousAxis,
    y_axis: ContinuousAxis,
    face_width: float,
    face_height: float,
    style: BoxStyle,
) -> ET.Element:
    fill = style.fill if style.fill is not None else DEFAULT_BOX_FILL
    group = svg_group()
    for lower, upper, value in zip(bin_bounds, bin_bounds[1:], bin_values):
        l_pos = value_to_face_offset(lower, x_axis, face_width)
        u_pos = value_to_face_offset(upper, x_axis, face_width)
        y, height = _bar_extent(value_to_face_offset(value, y_axis, face_height), 0.0, face_height)
        group.append(_element("rect", x=l_pos, y=y, width=u_pos - l_pos, height=height, fill=fill, stroke=AXIS_COLOUR))
    return group


def draw_face_barchart(
    value: float,
    label: str,
    x_axis: CategoricalAxis,
    y_axis: ContinuousAxis,
    face_width: float,
    face_height: float,
    style: BoxStyle,
) -> ET.Element:
    bar_width = face_width / len(x_axis.ticks) * BAR_WIDTH_FRACTION
    centre = category_to_face_offset(label, x_axis, face_width)
    top = value_to_face_offset(value, y_axis, face_height)
    bottom = value_to_face_offset(max(0.0, y_axis.min), y_axis, face_height)
    y, height = _bar_extent(top, bottom, face_height)
    bar = _element(
        "rect",
        x=centre - bar_width / 2.0,
        y=y,
        width=bar_width,
        height=height,
        fill=style.fill if style.fill is not None else DEFAULT_BOX_FILL,
        stroke=AXIS_COLOUR,
    )
    return svg_group(bar)


def draw_face_boxplot(
    data: Sequence[float],
    label: str,
    x_axis: CategoricalAxis,
    y_axis: ContinuousAxis,
    face_width: float,
    face_height: float,
    style: BoxStyle,
) -> ET.Element:
    q1, median, q3 = quartiles(data)
    low, high = data_range(data)
    box_width = face_width / len(x_axis.ticks) * BAR_WIDTH_FRACTION
    centre = category_to_face_offset(label, x_axis, face_width)
    left = centre - box_width / 2.0
    right = centre + box_width / 2.0

    def y(value: float) -> float:
        return -value_to_face_offset(value, y_axis, face_height)

    box = _element(
        "rect",
        x=left,
        y=y(q3),
        width=box_width,
        height=y(q1) - y(q3),
        fill=style.fill if style.fill is not None else DEFAULT_BOX_FILL,
        stroke=AXIS_COLOUR,
    )
    median_line = _element("line", x1=left, y1=y(median), x2=right, y2=y(median), stroke=AXIS_COLOUR, stroke_width=2)
    lower_whisker = _element("line", x1=centre, y1=y(q1), x2=centre, y2=y(low), stroke=AXIS_COLOUR, stroke_width=1)
    upper_whisker = _element("line", x1=centre, y1=y(q3), x2=centre, y2=y(high), stroke=AXIS_COLOUR, stroke_width=1)
    return svg_group(lower_whisker, upper_whisker, box, median_line)


def draw_grid(grid: Grid, face_width: float, face_height: float, *, horizontal_only: bool = False) -> ET.Element:
    group = svg_group(**{"class": "grid"})
    if not horizontal_only and grid.nx > 0:
        step = face_width / grid.nx
        for i in range(grid.nx + 1):
            x = i * step
            group.append(_element("line", x1=x, y1=0, x2=x, y2=-face_height, stroke=grid.colour, stroke_width=1))
    if grid.ny > 0:
        step = face_height / grid.ny
        for i in range(grid.ny + 1):
            y = -i * step
            group.append(_element("line", x1=0, y1=y, x2=face_width, y2=y, stroke=grid.colour, stroke_width=1))
    return group


def render_svg(
    representation: Representation,
    x_axis: ContinuousAxis | CategoricalAxis,
    y_axis: ContinuousAxis,
    face_width: float,
    face_height: float,
) -> ET.Element:
    if isinstance(representation, Plot):
        if not isinstance(x_axis, ContinuousAxis):
            raise UnsupportedRenderError("plots need a continuous x axis")
        group = svg_group()
        if representation.line_style is not None:
            group.append(
                draw_face_line(representation.data, x_axis, y_axis, face_width, face_height, representation.line_style)
            )
        if representation.point_style is not None:
            group.append(
                draw_face_points(representation.data, x_axis, y_axis, face_width, face_height, representation.point_style)
            )
        if representation.line_style is None and representation.point_style is None:
            LOGGER.warning("plot has no line or point style; nothing drawn")
        return group
    if isinstance(representation, Histogram):
        if not isinstance(x_axis, ContinuousAxis):
            raise UnsupportedRenderError("histograms need a continuous x axis")
        return draw_face_bars(
            representation.bin_bounds,
            representation.values,
            x_axis,
            y_axis,
            face_width,
            face_height,
            representation.style,
        )
    if isinstance(representation, BarChart):
        if not isinstance(x_axis, CategoricalAxis):
            raise UnsupportedRenderError("bar charts need a categorical x axis")
        return draw_face_barchart(
            representation.value, representation.label, x_axis, y_axis, face_width, face_height, representation.style
        )
    if isinstance(representation, BoxPlot):
        if not isinstance(x_axis, CategoricalAxis):
            raise UnsupportedRenderError("box plots need a categorical x axis")
        return draw_face_boxplot(
            representation.data, representation.label, x_axis, y_axis, face_width, face_height, representation.style
        )
    raise UnsupportedRenderError(f"unsupported representation: {type(representation)!r}")


def _legend_key(representation: Representation, y: float) -> list[ET.Element]:
    mid = y - FONT_SIZE / 2.0 + 2.0
    if isinstance(representation, Plot):
        key: list[ET.Element] = []
        if representation.line_style is not None:
            style = representation.line_style
            key.append(
                _element(
                    "line",
                    x1=-23,
                    y1=mid,
                    x2=-3,
                    y2=mid,
                    stroke=style.colour if style.colour is not None else DEFAULT_LINE_COLOUR,
                    stroke_width=style.width if style.width is not None else DEFAULT_LINE_WIDTH,
                )
            )
        if representation.point_style is not None:
            key.append(draw_marker(-13.0, mid, representation.point_style))
        return key
    if isinstance(representation, Histogram):
        fill = representation.style.fill if representation.style.fill is not None else DEFAULT_BOX_FILL
        return [_element("rect", x=-18, y=mid - 5, width=10, height=10, fill=fill, stroke=AXIS_COLOUR)]
    return []


def draw_legend(representations: Sequence[Representation], face_width: float, face_height: float) -> ET.Element | None:
    entries = [r for r in representations if getattr(r, "legend", None)]
    if not entries:
        return None
    group = svg_group(transform=f"translate({_num(face_width - LEGEND_WIDTH)}, {_num(-face_height)})", **{"class": "legend"})
    for i, representation in enumerate(entries):
        y = (i + 1) * LEGEND_ROW_HEIGHT
        group.extend(_legend_key(representation, y))
        group.append(_text(str(representation.legend), x=0, y=y, text_anchor="start"))
    return group


def svg_document(width: float, height: float, *children: ET.Element) -> ET.Element:
    root = _element("svg", xmlns=SVG_NAMESPACE, viewBox=f"0 0 {_num(width)} {_num(height)}")
    root.extend(children)
    return root


def to_markup(root: ET.Element) -> str:
    return ET.tostring(root, encoding="unicode")
