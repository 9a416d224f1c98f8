"""Stateless element-wise operations on signal vectors.

Float operations take :class:`DSPVectorArray` operands; a plain number is
accepted in place of any vector and fills every element. Operands given
together must have the same number of rows.

Comparisons produce :class:`DSPVectorArrayInt` masks. Each element of a mask
is -1 (all bits set) where the condition holds and 0 where it does not.
:func:`select` uses such a mask to choose between two vectors bit by bit.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import reduce
from numbers import Integral, Real

import numpy as np

from .vector import (
    FLOATS_PER_DSP_VECTOR,
    INTS_PER_DSP_VECTOR,
    DSPVectorArray,
    DSPVectorArrayInt,
)

_LOG_TWO = np.float32(0.69314718055994529)
_LOG_TWO_R = np.float32(1.4426950408889634)
_INT32_MIN = -(1 << 31)
_INT32_LIMIT = float(1 << 31)


def _rows(*operands: object) -> int:
    rows = {
        x.rows for x in operands if isinstance(x, (DSPVectorArray, DSPVectorArrayInt))
    }
    if len(rows) > 1:
        raise ValueError(f"row count mismatch: {sorted(rows)}")
    return rows.pop() if rows else 1


def _floats(x: object, rows: int) -> np.ndarray:
    if isinstance(x, DSPVectorArray):
        return x._data
    if isinstance(x, Real):
        return np.full(rows * FLOATS_PER_DSP_VECTOR, x, dtype=np.float32)
    raise TypeError(f"expected a DSPVectorArray or a number, got {type(x).__name__}")


def _ints(x: object, rows: int) -> np.ndarray:
    if isinstance(x, DSPVectorArrayInt):
        return x._data
    if isinstance(x, Integral):
        return DSPVectorArrayInt(int(x), rows)._data
    raise TypeError(f"expected a DSPVectorArrayInt or an int, got {type(x).__name__}")


def _float_result(values: np.ndarray, rows: int) -> DSPVectorArray:
    return DSPVectorArray._wrap(np.asarray(values, dtype=np.float32), rows)


def _int_result(values: np.ndarray, rows: int) -> DSPVectorArrayInt:
    return DSPVectorArrayInt._wrap(np.asarray(values, dtype=np.int32), rows)


def _map1(x, fn: Callable[[np.ndarray], np.ndarray]) -> DSPVectorArray:
    rows = _rows(x)
    with np.errstate(all="ignore"):
        return _float_result(fn(_floats(x, rows)), rows)


def _map2(x1, x2, fn: Callable[[np.ndarray, np.ndarray], np.ndarray]) -> DSPVectorArray:
    rows = _rows(x1, x2)
    with np.errstate(all="ignore"):
        return _float_result(fn(_floats(x1, rows), _floats(x2, rows)), rows)


def _map3(x1, x2, x3, fn) -> DSPVectorArray:
    rows = _rows(x1, x2, x3)
    with np.errstate(all="ignore"):
        values = fn(_floats(x1, rows), _floats(x2, rows), _floats(x3, rows))
    return _float_result(values, rows)


def _compare(x1, x2, fn) -> DSPVectorArrayInt:
    rows = _rows(x1, x2)
    with np.errstate(invalid="ignore"):
        cond = fn(_floats(x1, rows), _floats(x2, rows))
    return _int_result(np.where(cond, -1, 0), rows)


def _vmin(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.where(a < b, a, b)


def _vmax(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.where(a > b, a, b)


def _to_int32(values: np.ndarray) -> np.ndarray:
    """Convert integral-valued floats to int32; out-of-range values become INT32_MIN."""
    with np.errstate(invalid="ignore"):
        ok = np.isfinite(values) & (values >= -_INT32_LIMIT) & (values < _INT32_LIMIT)
    out = np.full(values.shape, _INT32_MIN, dtype=np.int32)
    out[ok] = values[ok].astype(np.int32)
    return out


# ----------------------------------------------------------------
# unary operators


def sqrt(x):
    return _map1(x, np.sqrt)


def sqrt_approx(x):
    return _map1(x, np.sqrt)


def absolute(x):
    return _map1(x, np.abs)


def sign(x):
    """-1, 0 or 1 for each element."""
    return _map1(x, np.sign)


def sign_bit(x):
    """-1 where the sign bit is set, 1 elsewhere."""
    return _map1(x, lambda v: np.where(np.signbit(v), -1.0, 1.0))


def sin(x):
    return _map1(x, np.sin)


def cos(x):
    return _map1(x, np.cos)


def log(x):
    return _map1(x, np.log)


def exp(x):
    return _map1(x, np.exp)


def log2(x):
    return _map1(x, lambda v: np.log(v) * _LOG_TWO_R)


def exp2(x):
    return _map1(x, lambda v: np.exp(_LOG_TWO * v))


def sin_approx(x):
    return _map1(x, np.sin)


def cos_approx(x):
    return _map1(x, np.cos)


def exp_approx(x):
    return _map1(x, np.exp)


def log_approx(x):
    return _map1(x, np.log)


def log2_approx(x):
    return _map1(x, lambda v: np.log(v) * _LOG_TWO_R)


def exp2_approx(x):
    return _map1(x, lambda v: np.exp(_LOG_TWO * v))


# ----------------------------------------------------------------
# binary operators


def add(first, *args):
    """Sum of one or more vectors, added as first + (second + (third + ...))."""
    operands = (first, *args)
    rows = _rows(*operands)
    arrays = [_floats(x, rows) for x in operands]
    with np.errstate(all="ignore"):
        total = reduce(lambda acc, a: np.add(a, acc), reversed(arrays[:-1]), arrays[-1].copy())
    return _float_result(total, rows)


def subtract(x1, x2):
    return _map2(x1, x2, np.subtract)


def multiply(x1, x2):
    return _map2(x1, x2, np.multiply)


def divide(x1, x2):
    return _map2(x1, x2, np.divide)


def divide_approx(x1, x2):
    return _map2(x1, x2, np.divide)


def power(x1, x2):
    """x1 raised to x2, computed as exp(log(x1) * x2)."""
    return _map2(x1, x2, lambda a, b: np.exp(np.log(a) * b))


def power_approx(x1, x2):
    return _map2(x1, x2, lambda a, b: np.exp(np.log(a) * b))


def minimum(x1, x2):
    return _map2(x1, x2, _vmin)


def maximum(x1, x2):
    return _map2(x1, x2, _vmax)


def add_int32(x1, x2):
    """Element-wise int32 sum, wrapping on overflow."""
    rows = _rows(x1, x2)
    with np.errstate(over="ignore"):
        values = np.add(_ints(x1, rows), _ints(x2, rows), dtype=np.int32)
    return _int_result(values, rows)


def subtract_int32(x1, x2):
    """Element-wise int32 difference, wrapping on overflow."""
    rows = _rows(x1, x2)
    with np.errstate(over="ignore"):
        values = np.subtract(_ints(x1, rows), _ints(x2, rows), dtype=np.int32)
    return _int_result(values, rows)


# ----------------------------------------------------------------
# ternary operators


def lerp(x1, x2, m):
    """x1 + m * (x2 - x1); m may be a vector or a number."""
    return _map3(x1, x2, m, lambda a, b, c: a + c * (b - a))


def inverse_lerp(x1, x2, x3):
    """The mix m for which lerp(x1, x2, m) gives x3."""
    return _map3(x1, x2, x3, lambda a, b, c: (c - a) / (b - a))


def clamp(x, lo, hi):
    """Clamp each element to the closed interval [lo, hi]."""
    return _map3(x, lo, hi, lambda a, b, c: _vmin(_vmax(a, b), c))


def within(x, lo, hi):
    """Mask of the elements of x that lie in the half-open interval [lo, hi)."""
    rows = _rows(x, lo, hi)
    v, a, b = _floats(x, rows), _floats(lo, rows), _floats(hi, rows)
    with np.errstate(invalid="ignore"):
        cond = (v >= a) & (v < b)
    return _int_result(np.where(cond, -1, 0), rows)


# ----------------------------------------------------------------
# conversions


def round_float_to_int(x):
    """Round to the nearest integer, ties to even."""
    rows = _rows(x)
    with np.errstate(invalid="ignore"):
        return _int_result(_to_int32(np.rint(_floats(x, rows))), rows)


def truncate_float_to_int(x):
    """Round toward zero."""
    rows = _rows(x)
    with np.errstate(invalid="ignore"):
        return _int_result(_to_int32(np.trunc(_floats(x, rows))), rows)


def int_to_float(x):
    rows = _rows(x)
    return _float_result(_ints(x, rows).astype(np.float32), rows)


def fractional_part(x):
    """x minus its truncation toward zero."""

    def frac(v: np.ndarray) -> np.ndarray:
        return v - _to_int32(np.trunc(v)).astype(np.float32)

    return _map1(x, frac)


# ----------------------------------------------------------------
# comparisons


def equal(x1, x2):
    return _compare(x1, x2, np.equal)


def not_equal(x1, x2):
    return _compare(x1, x2, np.not_equal)


def greater_than(x1, x2):
    return _compare(x1, x2, np.greater)


def greater_than_or_equal(x1, x2):
    return _compare(x1, x2, np.greater_equal)


def less_than(x1, x2):
    return _compare(x1, x2, np.less)


def less_than_or_equal(x1, x2):
    return _compare(x1, x2, np.less_equal)


def select(if_true, if_false, mask):
    """Bitwise select: bits of if_true where mask bits are set, of if_false elsewhere.

    If either choice is a DSPVectorArrayInt the result is one too; otherwise
    the result is a DSPVectorArray.
    """
    rows = _rows(if_true, if_false, mask)
    m = _ints(mask, rows)
    if isinstance(if_true, DSPVectorArrayInt) or isinstance(if_false, DSPVectorArrayInt):
        t, f = _ints(if_true, rows), _ints(if_false, rows)
        return _int_result((t & m) | (f & ~m), rows)
    t = _floats(if_true, rows).view(np.int32)
    f = _floats(if_false, rows).view(np.int32)
    bits = (t & m) | (f & ~m)
    return _float_result(bits.view(np.float32), rows)


__all__ = [
    "INTS_PER_DSP_VECTOR",
    "absolute",
    "add",
    "add_int32",
    "clamp",
    "cos",
    "cos_approx",
    "divide",
    "divide_approx",
    "equal",
    "exp",
    "exp2",
    "exp2_approx",
    "exp_approx",
    "fractional_part",
    "greater_than",
    "greater_than_or_equal",
    "int_to_float",
    "inverse_lerp",
    "less_than",
    "less_than_or_equal",
    "lerp",
    "log",
    "log2",
    "log2_approx",
    "log_approx",
    "maximum",
    "minimum",
    "multiply",
    "not_equal",
    "power",
    "power_approx",
    "round_float_to_int",
    "select",
    "sign",
    "sign_bit",
    "sin",
    "sin_approx",
    "sqrt",
    "sqrt_approx",
    "subtract",
    "subtract_int32",
    "truncate_float_to_int",
    "within",
]