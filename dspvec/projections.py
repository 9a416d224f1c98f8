"""Projections: functions mapping floats to floats, usually on [0, 1]."""

from __future__ import annotations

import math
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TextIO

from .scalar_math import clamp as _clamp
from .scalar_math import lerp as _lerp

Projection = Callable[[float], float]


@dataclass(frozen=True)
class Interval:
    """An interval from x1 to x2."""

    x1: float
    x2: float

    def contains(self, x: float) -> bool:
        """Return whether x lies in the half-open interval [x1, x2)."""
        return self.x1 <= x < self.x2

    def __str__(self) -> str:
        return f"[{self.x1:g}\u2013{self.x2:g}]"


def compose(a: Projection, b: Projection) -> Projection:
    """Return the projection x -> a(b(x))."""
    return lambda x: a(b(x))


def zero(x: float) -> float:
    return 0.0


def unity(x: float) -> float:
    return x


def squared(x: float) -> float:
    return x * x


def flip(x: float) -> float:
    return 1 - x


def clip(x: float) -> float:
    return _clamp(x, 0.0, 1.0)


def smoothstep(x: float) -> float:
    return 3 * x * x - 2 * x * x * x


def flatcenter(x: float) -> float:
    c = x - 0.5
    return 4 * c * c * c + 0.5


def bell(x: float) -> float:
    px = x * 2 - 1
    return 2.0 ** (-(10.0 * px * px))


def ease_out(x: float) -> float:
    m = x - 1
    return 1 - m * m


def ease_in(x: float) -> float:
    return x * x


def ease_in_out(x: float) -> float:
    if x < 0.5:
        return ease_in(x * 2.0) * 0.5
    return ease_out(x * 2.0 - 1.0) * 0.5 + 0.5


def ease_out_cubic(x: float) -> float:
    n = 1 - x
    return 1 - n * n * n


def ease_in_cubic(x: float) -> float:
    return x * x * x


def ease_in_out_cubic(x: float) -> float:
    if x < 0.5:
        return ease_in_cubic(x * 2.0) * 0.5
    return ease_out_cubic(x * 2.0 - 1.0) * 0.5 + 0.5


def ease_out_quartic(x: float) -> float:
    m = x - 1
    return 1 - m * m * m * m


def ease_in_quartic(x: float) -> float:
    return x * x * x * x


def ease_in_out_quartic(x: float) -> float:
    if x < 0.5:
        return ease_in_quartic(x * 2.0) * 0.5
    return ease_out_quartic(x * 2.0 - 1.0) * 0.5 + 0.5


def constant(k: float) -> Projection:
    """Return a projection that always yields k."""
    return lambda x: k


def log(m: Interval) -> Projection:
    """Map [0, 1] onto a logarithmic curve on [a, b], scaled back to [0, 1].

    Valid for positive a < b only.
    """
    a, b = m.x1, m.x2
    return lambda x: a * ((b / a) ** x - 1) / (b - a)


def exp(m: Interval) -> Projection:
    """The inverse of :func:`log`. Valid for positive a < b only."""
    a, b = m.x1, m.x2
    return lambda x: math.log((x * (b - a) + a) / a) / math.log(b / a)


def linear(a: Interval, b: Interval) -> Projection:
    """Linearly map interval a onto interval b."""
    slope = (b.x2 - b.x1) / (a.x2 - a.x1)
    return lambda x: slope * (x - a.x1) + b.x1


def interval_map(a: Interval, b: Interval, c: Projection) -> Projection:
    """Map interval a to [0, 1], shape with c, then map onto interval b."""
    scale_a = 1 / (a.x2 - a.x1)
    offset_a = -a.x1 / (a.x2 - a.x1)
    scale_b = b.x2 - b.x1
    offset_b = b.x1
    return lambda x: c(x * scale_a + offset_a) * scale_b + offset_b


def _segmented(table: list[float], shapes: list[Projection] | None) -> Projection:
    if not table:
        return zero
    if len(table) == 1:
        only = table[0]
        return lambda x: only
    last = len(table) - 1

    def project(x: float) -> float:
        if x >= 1.0:
            return table[last]
        xf = last * _clamp(x, 0.0, 1.0)
        xi = int(xf)
        xr = xf - xi
        if shapes is not None:
            xr = shapes[xi](xr)
        return _lerp(table[xi], table[xi + 1], xr)

    return project


def piecewise_linear(values: Sequence[float]) -> Projection:
    """Interpolate linearly between equally spaced values over [0, 1]."""
    return _segmented(list(values), None)


def piecewise(values: Sequence[float], shapes: Sequence[Projection]) -> Projection:
    """Like :func:`piecewise_linear`, with a shaping projection per segment."""
    table = list(values)
    shape_table = list(shapes)
    if len(table) > 1 and len(shape_table) < len(table) - 1:
        raise ValueError("piecewise needs one shape for each segment")
    return _segmented(table, shape_table)


def print_table(
    p: Projection,
    name: str,
    domain: Interval,
    points: int,
    file: TextIO | None = None,
) -> None:
    """Print p sampled at evenly spaced points over domain."""
    out = sys.stdout if file is None else file
    point_to_x = linear(Interval(0.0, points - 1.0), domain)
    out.write("\n----------------\n")
    out.write(f"{name}: \n")
    for i in range(points):
        x = point_to_x(i)
        out.write(f"{i}: ({x:g}, {p(x):g})\n")