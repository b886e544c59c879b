from cellplot.text.canvas import overlay
from cellplot.text.render import render_text, render_view_text

__all__ = [
    "overlay",
    "render_text",
    "render_view_text",
]
