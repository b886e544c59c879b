from __future__ import annotations

from dataclasses import dataclass

from cellplot.axis import ContinuousAxis
from cellplot.errors import InvalidRangeError
from cellplot.scales import format_tick
from cellplot.text.canvas import BLANK, join_grid
from cellplot.text.cells import tick_offset_map


AXIS_CORNER = "+"
X_AXIS_LINE = "-"
Y_AXIS_LINE = "|"
X_TICK_MARK = "|"
Y_TICK_MARK = "-"


def center(text: str, width: int) -> str:
    """Centre ``text`` in ``width`` cells; odd padding puts the extra space on the right."""
    pad = width - len(text)
    if pad <= 0:
        return text
    left = pad // 2
    return BLANK * left + text + BLANK * (pad - left)


@dataclass(frozen=True)
class XAxisLabel:
    text: str
    offset: int

    @property
    def footprint(self) -> int:
        # Always odd so the label has a centre cell to sit on its tick.
        n = len(self.text)
        return n if n % 2 == 1 else n + 1

    @property
    def start_offset(self) -> int:
        return self.offset - self.footprint // 2


def create_x_axis_labels(tick_map: dict[int, float]) -> list[XAxisLabel]:
    labels = [XAxisLabel(text=format_tick(tick), offset=offset) for offset, tick in tick_map.items()]
    labels.sort(key=lambda label: label.offset)
    return labels


def layout_x_labels(labels: list[XAxisLabel]) -> tuple[str, int]:
    """Lay labels out on one line; overlapping labels trim what was written before them."""
    if not labels:
        raise InvalidRangeError("x-axis has no ticks to label")
    start_offset = min(label.start_offset for label in labels)
    out = ""
    for label in labels:
        spaces_to_append = label.start_offset - start_offset - len(out)
        if spaces_to_append > 0:
            out += BLANK * spaces_to_append
        elif spaces_to_append < 0:
            out = out[: max(0, len(out) + spaces_to_append)]
        out += center(label.text, label.footprint)
    return out, start_offset


def render_x_axis_strings(x_axis: ContinuousAxis, face_width: int) -> tuple[str, int]:
    """Return the x-axis block (line, ticks, labels, title) and the label start offset.

    Column 0 of the block is the axis corner when the offset is >= 0; otherwise
    the corner sits ``-start_offset`` columns in.
    """
    tick_map = tick_offset_map(x_axis, face_width)
    tick_line = "".join(X_TICK_MARK if cell in tick_map else BLANK for cell in range(face_width + 1))
    label_line, start_offset = layout_x_labels(create_x_axis_labels(tick_map))
    axis_line = AXIS_CORNER + X_AXIS_LINE * face_width
    title = center(x_axis.label, face_width)

    if start_offset >= 0:
        padding = BLANK * start_offset
        rows = [axis_line, tick_line, padding + label_line, title]
    else:
        padding = BLANK * -start_offset
        rows = [padding + axis_line, padding + tick_line, label_line, padding + title]
    return join_grid(rows), start_offset


def render_y_axis_strings(y_axis: ContinuousAxis, face_height: int) -> tuple[str, int]:
    """Return the y-axis block and the width of its widest tick label.

    The block has ``face_height + 1`` rows; its last row is the axis corner.
    Each row reads ``<title char> <label><tick><axis line>``.
    """
    tick_map = tick_offset_map(y_axis, face_height)
    if not tick_map:
        raise InvalidRangeError("y-axis has no ticks to label")
    widest = max(len(format_tick(tick)) for tick in tick_map.values())

    rows_total = face_height + 1
    # A title longer than the axis keeps its last rows_total characters.
    title = center(y_axis.label, rows_total)[-rows_total:]

    rows: list[str] = []
    for r in range(rows_total):
        line = face_height - r
        tick = tick_map.get(line)
        label = format_tick(tick) if tick is not None else ""
        mark = Y_TICK_MARK if tick is not None else BLANK
        axis_char = AXIS_CORNER if line == 0 else Y_AXIS_LINE
        rows.append(f"{title[r]} {label:>{widest}}{mark}{axis_char}")
    return join_grid(rows), widest
