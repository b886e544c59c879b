from cellplot.axis import CategoricalAxis, ContinuousAxis, Range
from cellplot.errors import BinLookupError, InvalidRangeError, PlotDataError, PlotError, UnsupportedRenderError
from cellplot.grid import Grid
from cellplot.histogram import Histogram
from cellplot.page import Page
from cellplot.scales import plan_ticks
from cellplot.series import BarChart, BoxPlot, Plot
from cellplot.style import BoxStyle, LineStyle, PointStyle
from cellplot.view import CategoricalView, ContinuousView

__all__ = [
    "BarChart",
    "BinLookupError",
    "BoxPlot",
    "BoxStyle",
    "CategoricalAxis",
    "CategoricalView",
    "ContinuousAxis",
    "ContinuousView",
    "Grid",
    "Histogram",
    "InvalidRangeError",
    "LineStyle",
    "Page",
    "Plot",
    "PlotDataError",
    "PlotError",
    "PointStyle",
    "Range",
    "UnsupportedRenderError",
    "plan_ticks",
]
