from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Literal, TypeVar


PointMarker = Literal["circle", "square", "cross"]
POINT_MARKERS: tuple[str, ...] = ("circle", "square", "cross")
DEFAULT_MARKER: PointMarker = "circle"


@dataclass(frozen=True)
class PointStyle:
    marker: PointMarker | None = None
    colour: str | None = None
    size: float | None = None

    def __post_init__(self) -> None:
        if self.marker is not None and self.marker not in POINT_MARKERS:
            raise ValueError(f"unknown point marker: {self.marker!r}")
        if self.size is not None and self.size <= 0:
            raise ValueError("point size must be > 0")

    def resolved_marker(self) -> PointMarker:
        return self.marker if self.marker is not None else DEFAULT_MARKER


@dataclass(frozen=True)
class LineStyle:
    colour: str | None = None
    width: float | None = None

    def __post_init__(self) -> None:
        if self.width is not None and self.width <= 0:
            raise ValueError("line width must be > 0")


@dataclass(frozen=True)
class BoxStyle:
    fill: str | None = None


StyleT = TypeVar("StyleT", PointStyle, LineStyle, BoxStyle)


def merge_style(base: StyleT, override: StyleT | None) -> StyleT:
    """Return ``base`` with every field that ``override`` sets taken from ``override``."""
    if override is None:
        return base
    if type(base) is not type(override):
        raise TypeError(f"cannot merge {type(override).__name__} into {type(base).__name__}")
    changes = {f.name: getattr(override, f.name) for f in fields(override) if getattr(override, f.name) is not None}
    return replace(base, **changes)
