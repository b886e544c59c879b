from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

import logging

from cellplot.display import DEFAULT_SVG_HEIGHT, DEFAULT_SVG_WIDTH, DEFAULT_TEXT_HEIGHT, DEFAULT_TEXT_WIDTH, svg_face_box
from cellplot.errors import UnsupportedRenderError
from cellplot.svg_render import svg_document, to_markup
from cellplot.view import View


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Page:
    """One or more views laid out top to bottom.

    ``size`` is the SVG size of each view in user units; pages with several
    views grow downwards.
    """

    views: tuple[View, ...]
    size: tuple[float, float] = (DEFAULT_SVG_WIDTH, DEFAULT_SVG_HEIGHT)

    def __post_init__(self) -> None:
        if not self.views:
            raise ValueError("a page needs at least one view")
        if self.size[0] <= 0 or self.size[1] <= 0:
            raise ValueError("page width/height must be > 0")

    @classmethod
    def single(cls, view: View) -> "Page":
        return cls(views=(view,))

    def add(self, view: View) -> "Page":
        return replace(self, views=self.views + (view,))

    def dimensions(self, width: float, height: float) -> "Page":
        return replace(self, size=(float(width), float(height)))

    def to_text(self, face_width: int = DEFAULT_TEXT_WIDTH, face_height: int = DEFAULT_TEXT_HEIGHT) -> str:
        return "\n\n".join(view.to_text(face_width, face_height) for view in self.views)

    def to_svg(self) -> str:
        width, height = self.size
        face_width, face_height, origin_x, origin_y = svg_face_box(width, height)
        groups = []
        for i, view in enumerate(self.views):
            group = view.to_svg(face_width, face_height)
            group.set("transform", f"translate({origin_x:g}, {origin_y + i * height:g})")
            groups.append(group)
        return to_markup(svg_document(width, height * len(self.views), *groups))

    def save(self, path: str | Path) -> Path:
        """Write the page; the suffix picks the format (``.svg`` or ``.txt``)."""
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix == ".svg":
            content = self.to_svg()
        elif suffix == ".txt":
            content = self.to_text() + "\n"
        else:
            raise UnsupportedRenderError(f"cannot save a page as {suffix or 'a file without a suffix'!r}; use .svg or .txt")
        path.write_text(content, encoding="utf-8")
        LOGGER.debug("saved page with %d view(s) to %s", len(self.views), path)
        return path
