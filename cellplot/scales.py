from __future__ import annotations

from decimal import Decimal
from itertools import dropwhile, takewhile
from typing import Iterator

import math
import sys

from cellplot.errors import InvalidRangeError


# Nice step multipliers within one order of magnitude, i.e. [1, 10).
BASE_STEPS: tuple[int, ...] = (1, 2, 4, 5)
TICK_DECIMALS = 15
# Smallest step whose rounded multiples stay distinct whole multiples.
TICK_RESOLUTION = 10.0 ** -TICK_DECIMALS


def round_half_away(value: float) -> int:
    whole = math.trunc(value)
    if abs(value - whole) >= 0.5:
        whole += 1 if value > 0 else -1
    return int(whole)


def round_tick(value: float) -> float:
    """Snap a generated tick to 15 decimal places so 0.1 * 3 prints as 0.3."""
    return round(value, TICK_DECIMALS)


def _scaled_steps(value: float) -> list[float]:
    scale = 10.0 ** math.floor(math.log10(value))
    return [float(step) * scale for step in BASE_STEPS]


def nice_steps(start: float) -> Iterator[float]:
    """Yield the ascending nice step sizes, beginning with the first one >= ``start``."""
    if not math.isfinite(start) or start <= 0:
        raise ValueError("start must be a finite value > 0")
    options = _scaled_steps(start)
    current = next((s for s in options if s >= start), options[0] * 10.0)
    while True:
        yield current
        options = _scaled_steps(current)
        current = next((s for s in options if s > current), options[0] * 10.0)


def _multiples(step: float, start: int, sign: int) -> Iterator[float]:
    n = start
    while True:
        yield round_tick(sign * n * step)
        n += 1


def generate_ticks(lower: float, upper: float, step: float) -> list[float]:
    ticks = _rounded_multiples(lower, upper, step)
    # Neighbouring multiples can round to the same value when the step is near the tick resolution.
    return sorted(set(ticks))


def _rounded_multiples(lower: float, upper: float, step: float) -> list[float]:
    ticks: list[float] = []
    if lower <= 0.0:
        if upper >= 0.0:
            # spanning axis: always includes an exact zero
            negatives = list(takewhile(lambda v: v >= lower, _multiples(step, 1, -1)))
            ticks.extend(reversed(negatives))
            ticks.append(0.0)
            ticks.extend(takewhile(lambda v: v <= upper, _multiples(step, 1, 1)))
        else:
            first = max(1, math.floor(-upper / step) - 1)
            candidates = dropwhile(lambda v: v > upper, _multiples(step, first, -1))
            negatives = list(takewhile(lambda v: v >= lower, candidates))
            ticks.extend(reversed(negatives))
    else:
        first = max(1, math.floor(lower / step) - 1)
        candidates = dropwhile(lambda v: v < lower, _multiples(step, first, 1))
        ticks.extend(takewhile(lambda v: v <= upper, candidates))
    return ticks


def tick_count(lower: float, upper: float, step: float) -> int:
    """Number of ticks ``step`` yields; ``sys.maxsize`` when rounding would merge or shift them."""
    if step < TICK_RESOLUTION * (1.0 - 1e-9):
        return sys.maxsize
    ticks = _rounded_multiples(lower, upper, step)
    if any(b <= a for a, b in zip(ticks, ticks[1:])):
        return sys.maxsize
    return len(ticks)


def tick_step_for_range(lower: float, upper: float, max_ticks: int) -> float:
    _check_tick_request(lower, upper, max_ticks)
    min_tick_step = (upper - lower) / max_ticks
    smallest = next(s for s in nice_steps(min_tick_step) if tick_count(lower, upper, s) <= max_ticks)
    wanted = tick_count(lower, upper, smallest)

    # Beyond this step every larger step yields the same ticks (only zero, or none).
    saturation = max(abs(lower), abs(upper))
    best = smallest
    for step in nice_steps(smallest):
        if tick_count(lower, upper, step) != wanted:
            break
        best = max(best, step)
        if step > saturation:
            break
    return best


def plan_ticks(lower: float, upper: float, max_ticks: int) -> list[float]:
    step = tick_step_for_range(lower, upper, max_ticks)
    return generate_ticks(lower, upper, step)


def _check_tick_request(lower: float, upper: float, max_ticks: int) -> None:
    if isinstance(max_ticks, bool) or not isinstance(max_ticks, int) or max_ticks < 1:
        raise InvalidRangeError(f"max_ticks must be an int >= 1, got {max_ticks!r}")
    if not (math.isfinite(lower) and math.isfinite(upper)):
        raise InvalidRangeError(f"range bounds must be finite, got [{lower!r}, {upper!r}]")
    if not lower < upper:
        raise InvalidRangeError(f"range lower must be < upper, got [{lower!r}, {upper!r}]")


def format_tick(value: float) -> str:
    if not math.isfinite(value):
        return str(value)
    if value == 0:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    out = format(Decimal(repr(float(value))), "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    return out


def pad_range_to_zero(lower: float, upper: float) -> tuple[float, float]:
    """Stretch a zero-width range to touch zero so it has some extent."""
    if abs(lower - upper) < sys.float_info.epsilon:
        return (0.0 if lower > 0 else lower, 0.0 if upper < 0 else upper)
    return (lower, upper)
