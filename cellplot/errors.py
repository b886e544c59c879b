from __future__ import annotations


class PlotError(Exception):
    """Base class for every error raised by cellplot."""


class PlotDataError(PlotError, ValueError):
    pass


class InvalidRangeError(PlotError, ValueError):
    pass


class BinLookupError(PlotDataError):
    def __init__(self, value: float, lower: float, upper: float) -> None:
        super().__init__(f"value {value!r} does not fall in any bin of [{lower!r}, {upper!r}]")
        self.value = value
        self.lower = lower
        self.upper = upper


class UnsupportedRenderError(PlotError, NotImplementedError):
    pass
