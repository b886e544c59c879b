from __future__ import annotations

from dataclasses import dataclass


DEFAULT_GRID_COLOUR = "darkgrey"


@dataclass(frozen=True)
class Grid:
    """Grid lines drawn underneath the data of an SVG face.

    ``nx`` vertical and ``ny`` horizontal lines are spread evenly across the
    face. Categorical views only draw the horizontal ones.
    """

    nx: int = 3
    ny: int = 3
    colour: str = DEFAULT_GRID_COLOUR

    def __post_init__(self) -> None:
        if self.nx < 0 or self.ny < 0:
            raise ValueError("grid line counts must be >= 0")
