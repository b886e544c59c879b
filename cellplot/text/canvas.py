from __future__ import annotations

from typing import Iterable


BLANK = " "


def new_grid(width: int, height: int, fill: str = BLANK) -> str:
    if width < 0 or height <= 0:
        raise ValueError("grid width must be >= 0 and height > 0")
    if len(fill) != 1:
        raise ValueError("fill must be a single character")
    return "\n".join(fill * width for _ in range(height))


def split_grid(grid: str) -> list[str]:
    return grid.split("\n")


def join_grid(rows: Iterable[str]) -> str:
    return "\n".join(rows)


def grid_size(grid: str) -> tuple[int, int]:
    """Return ``(width, height)`` of a text block; width is its longest row."""
    rows = split_grid(grid)
    return (max(len(row) for row in rows), len(rows))


def overlay(under: str, over: str, dx: int = 0, dy: int = 0) -> str:
    """Composite ``over`` on top of ``under`` shifted by ``(dx, dy)``.

    Non-space characters of ``over`` replace the cell beneath them. The result
    always has exactly the rows and columns of ``under``; anything of ``over``
    that falls outside is clipped.
    """
    under_rows = split_grid(under)
    over_rows = split_grid(over)
    over_width = max(len(row) for row in over_rows)

    if dy < 0:
        over_rows = over_rows[-dy:]
    elif dy > 0:
        over_rows = [BLANK * over_width for _ in range(dy)] + over_rows

    if dx < 0:
        over_rows = [row[-dx:] for row in over_rows]
    elif dx > 0:
        over_rows = [BLANK * dx + row for row in over_rows]

    out: list[str] = []
    for y, row in enumerate(under_rows):
        top = over_rows[y] if y < len(over_rows) else ""
        cells = []
        for x, cell in enumerate(row):
            if x < len(top) and top[x] != BLANK:
                cells.append(top[x])
            else:
                cells.append(cell)
        out.append("".join(cells))
    return join_grid(out)
