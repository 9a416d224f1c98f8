"""Ways to combine signal vectors: mixers, multiplexers and demultiplexers."""

from __future__ import annotations

from numbers import Real

import numpy as np

from .rows import repeat_rows
from .vector import FLOATS_PER_DSP_VECTOR, DSPVectorArray


def _selector_fractions(selector: DSPVectorArray | float) -> np.ndarray:
    """Return the fractional part of each selector element as float32."""
    if isinstance(selector, Real):
        selector = DSPVectorArray(float(selector))
    if not isinstance(selector, DSPVectorArray):
        raise TypeError("selector must be a DSPVectorArray or a number")
    if selector.rows != 1:
        raise ValueError(f"selector must be a one-row vector, got {selector.rows} rows")
    s = selector._data
    with np.errstate(invalid="ignore"):
        u = (s - np.trunc(s)).astype(np.float32)
        bad = ~(u >= 0)
    if np.any(bad):
        raise ValueError("selector values must be finite and not negative")
    return u


def _stack_inputs(args: tuple[DSPVectorArray, ...]) -> tuple[np.ndarray, int]:
    if not args:
        raise TypeError("at least one input is needed")
    for a in args:
        if not isinstance(a, DSPVectorArray):
            raise TypeError("inputs must be DSPVectorArray instances")
    rows = args[0].rows
    if any(a.rows != rows for a in args):
        raise ValueError("all inputs must have the same number of rows")
    return np.stack([a._data for a in args]), rows


def _check_count(outputs: int) -> int:
    if outputs < 1:
        raise ValueError("at least one output is needed")
    return outputs


def mix(gains: DSPVectorArray, *args: DSPVectorArray) -> DSPVectorArray:
    """Sum of each input multiplied by the corresponding row of gains."""
    if not args:
        raise TypeError("mix needs at least one input")
    _, rows = _stack_inputs(args)
    if gains.rows < len(args):
        raise ValueError(
            f"gains has {gains.rows} rows but {len(args)} inputs were given"
        )
    terms = [x * repeat_rows(gains.row(i), rows) for i, x in enumerate(args)]
    total = terms[-1]
    for term in reversed(terms[:-1]):
        total = term + total
    return total


def multiplex(selector: DSPVectorArray | float, *args: DSPVectorArray) -> DSPVectorArray:
    """Pick, at each sample, the input chosen by the selector.

    The selector's fractional part on [0, 1) is divided equally among the inputs.
    """
    stacked, rows = _stack_inputs(args)
    n = len(args)
    u = _selector_fractions(selector)
    idx = np.minimum((u * np.float32(n)).astype(np.int64), n - 1)
    picks = np.tile(idx, rows)
    cols = np.arange(rows * FLOATS_PER_DSP_VECTOR)
    return DSPVectorArray._wrap(stacked[picks, cols].astype(np.float32), rows)


def multiplex_linear(selector: DSPVectorArray | float, *args: DSPVectorArray) -> DSPVectorArray:
    """Like :func:`multiplex`, interpolating linearly between neighbouring inputs.

    Selector values approaching 1 blend from the last input back to the first.
    """
    stacked, rows = _stack_inputs(args)
    n = len(args)
    u = _selector_fractions(selector)
    real = (u * np.float32(n)).astype(np.float32)
    whole = np.trunc(real)
    frac = (real - whole).astype(np.float32)
    i1 = whole.astype(np.int64) % n
    i2 = (i1 + 1) % n
    cols = np.arange(rows * FLOATS_PER_DSP_VECTOR)
    a = stacked[np.tile(i1, rows), cols]
    b = stacked[np.tile(i2, rows), cols]
    f = np.tile(frac, rows)
    y = a + f * (b - a)
    return DSPVectorArray._wrap(y.astype(np.float32), rows)


def demultiplex(
    selector: DSPVectorArray | float, signal: DSPVectorArray, outputs: int
) -> list[DSPVectorArray]:
    """Route the signal, sample by sample, to one of ``outputs`` outputs.

    Outputs not selected at a sample get zero there.
    """
    n = _check_count(outputs)
    (sig,), rows = _stack_inputs((signal,))
    u = _selector_fractions(selector)
    idx = np.tile(np.minimum((u * np.float32(n)).astype(np.int64), n - 1), rows)
    return [
        DSPVectorArray._wrap(np.where(idx == j, sig, np.float32(0)).astype(np.float32), rows)
        for j in range(n)
    ]


def demultiplex_linear(
    selector: DSPVectorArray | float, signal: DSPVectorArray, outputs: int
) -> list[DSPVectorArray]:
    """Like :func:`demultiplex`, splitting each sample linearly between two neighbouring outputs."""
    n = _check_count(outputs)
    (sig,), rows = _stack_inputs((signal,))
    u = _selector_fractions(selector)
    real = (u * np.float32(n)).astype(np.float32)
    whole = np.trunc(real)
    mix_amount = np.tile((real - whole).astype(np.float32), rows)
    i1 = np.tile(whole.astype(np.int64) % n, rows)
    i2 = (i1 + 1) % n
    first = sig * (np.float32(1) - mix_amount)
    second = sig * mix_amount
    result = []
    for j in range(n):
        y = np.where(i1 == j, first, np.where(i2 == j, second, np.float32(0)))
        result.append(DSPVectorArray._wrap(y.astype(np.float32), rows))
    return result