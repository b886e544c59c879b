from __future__ import annotations

import os
import shutil

import logging


LOGGER = logging.getLogger(__name__)

DEFAULT_TEXT_WIDTH = 90
DEFAULT_TEXT_HEIGHT = 30
DEFAULT_MAX_TICKS = 6
DEFAULT_SVG_WIDTH = 600
DEFAULT_SVG_HEIGHT = 400
# Left, top, right and bottom space around the SVG face.
DEFAULT_SVG_INSET = (50, 20, 50, 40)
# Columns/rows a text view needs beyond its face: y gutter, axis rows, slack.
TEXT_CHROME_COLUMNS = 12
TEXT_CHROME_ROWS = 5
MIN_TEXT_FACE = 4

WIDTH_ENV = "CELLPLOT_WIDTH"
HEIGHT_ENV = "CELLPLOT_HEIGHT"


def resolve_default_text_size(
    *,
    default_width: int = DEFAULT_TEXT_WIDTH,
    default_height: int = DEFAULT_TEXT_HEIGHT,
) -> tuple[int, int]:
    """Face size for text output: env overrides, else the defaults capped to the terminal."""
    if default_width <= 0 or default_height <= 0:
        raise ValueError("default_width/default_height must be > 0")

    width = _env_dimension(WIDTH_ENV)
    height = _env_dimension(HEIGHT_ENV)

    terminal = _detect_terminal_size()
    if terminal is not None:
        cols, rows = terminal
        fit_w = max(MIN_TEXT_FACE, min(default_width, cols - TEXT_CHROME_COLUMNS))
        fit_h = max(MIN_TEXT_FACE, min(default_height, rows - TEXT_CHROME_ROWS))
    else:
        fit_w, fit_h = default_width, default_height

    return (width if width is not None else fit_w, height if height is not None else fit_h)


def svg_face_box(width: float, height: float) -> tuple[float, float, float, float]:
    """Return ``(face_width, face_height, origin_x, origin_y)``; the origin is the face's bottom-left corner."""
    if width <= 0 or height <= 0:
        raise ValueError("width/height must be > 0")
    left, top, right, bottom = DEFAULT_SVG_INSET
    face_width = max(1.0, width - left - right)
    face_height = max(1.0, height - top - bottom)
    return (face_width, face_height, float(left), height - bottom)


def _env_dimension(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError:
        LOGGER.warning("ignoring %s=%r: not an integer", name, raw)
        return None
    if value <= 0:
        LOGGER.warning("ignoring %s=%r: must be > 0", name, raw)
        return None
    return value


def _detect_terminal_size() -> tuple[int, int] | None:
    size = shutil.get_terminal_size(fallback=(0, 0))
    if size.columns > 0 and size.lines > 0:
        return (size.columns, size.lines)
    return None
