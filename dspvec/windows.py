"""Window shapes and helpers for filling tables from projections."""

from __future__ import annotations

import math

import numpy as np

from .projections import Interval, Projection, compose, linear
from .scalar_math import TWO_PI


def map_indices(size: int, p: Projection) -> np.ndarray:
    """Return a float32 array whose element i is p(i)."""
    if size < 0:
        raise ValueError("size must not be negative")
    return np.array([p(float(i)) for i in range(size)], dtype=np.float32)


def make_window(size: int, window_shape: Projection) -> np.ndarray:
    """Sample window_shape on [0, 1] at ``size`` evenly spaced points, ends included."""
    if size == 1:
        raise ValueError("a window needs at least two points")
    if size == 0:
        return np.zeros(0, dtype=np.float32)
    domain_to_unity = linear(Interval(0.0, size - 1.0), Interval(0.0, 1.0))
    return map_indices(size, compose(window_shape, domain_to_unity))


def rectangle(x: float) -> float:
    return 0.0 if x > 0.75 else (0.0 if x < 0.25 else 1.0)


def triangle(x: float) -> float:
    return 2.0 - 2.0 * x if x > 0.5 else 2.0 * x


def raised_cosine(x: float) -> float:
    return 0.5 - 0.5 * math.cos(TWO_PI * x)


def hamming(x: float) -> float:
    return 0.54 - 0.46 * math.cos(TWO_PI * x)


def blackman(x: float) -> float:
    return 0.42 - 0.5 * math.cos(TWO_PI * x) + 0.08 * math.cos(2.0 * TWO_PI * x)


def flat_top(x: float) -> float:
    a0 = 0.21557895
    a1 = 0.41663158
    a2 = 0.277263158
    a3 = 0.083578947
    a4 = 0.006947368
    return (
        a0
        - a1 * math.cos(TWO_PI * x)
        + a2 * math.cos(2.0 * TWO_PI * x)
        - a3 * math.cos(3.0 * TWO_PI * x)
        + a4 * math.cos(4.0 * TWO_PI * x)
    )