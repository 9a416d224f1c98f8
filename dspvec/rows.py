"""Index generators, horizontal reductions and row-wise reshaping of vector arrays."""

from __future__ import annotations

import math
import sys

import numpy as np

from .scalar_math import modulo
from .vector import (
    FLOATS_PER_DSP_VECTOR,
    INTS_PER_DSP_VECTOR,
    DSPVectorArray,
    DSPVectorArrayInt,
)

_FLT_MIN = float(np.finfo(np.float32).tiny)
_FLT_MAX = float(np.finfo(np.float32).max)
_MAX_USEFUL_VALUE = 1e8


def _matrix(x: DSPVectorArray) -> np.ndarray:
    return x._data.reshape(x.rows, FLOATS_PER_DSP_VECTOR)


def _from_matrix(m: np.ndarray) -> DSPVectorArray:
    rows = m.shape[0]
    if rows < 1:
        raise ValueError("a vector array needs at least one row")
    data = np.ascontiguousarray(m, dtype=np.float32).reshape(rows * FLOATS_PER_DSP_VECTOR)
    return DSPVectorArray._wrap(data.copy(), rows)


def _single(x: DSPVectorArray, name: str) -> np.ndarray:
    if x.rows != 1:
        raise ValueError(f"{name} needs a one-row vector, got {x.rows} rows")
    return x._data


# ----------------------------------------------------------------
# index and sequence generators


def column_index(rows: int = 1) -> DSPVectorArray:
    """Each row holds 0, 1, ..., 63."""
    if rows < 1:
        raise ValueError("a vector array needs at least one row")
    base = np.arange(FLOATS_PER_DSP_VECTOR, dtype=np.float32)
    return _from_matrix(np.tile(base, (rows, 1)))


def column_index_int() -> DSPVectorArrayInt:
    """A one-row int vector holding 0, 1, ..., 63."""
    return DSPVectorArrayInt._wrap(np.arange(INTS_PER_DSP_VECTOR, dtype=np.int32), 1)


def row_index(rows: int) -> DSPVectorArray:
    """Each row filled with its own row index."""
    if rows < 1:
        raise ValueError("a vector array needs at least one row")
    values = np.arange(rows, dtype=np.float32)[:, None]
    return _from_matrix(np.broadcast_to(values, (rows, FLOATS_PER_DSP_VECTOR)))


def _ramp(start: np.float32, interval: np.float32) -> DSPVectorArray:
    data = column_index()._data * interval + start
    return DSPVectorArray._wrap(data.astype(np.float32), 1)


def range_open(start: float, end: float) -> DSPVectorArray:
    """Linear sequence from start toward end; end falls on the next vector's first index."""
    s, e = np.float32(start), np.float32(end)
    interval = (e - s) / np.float32(FLOATS_PER_DSP_VECTOR)
    return _ramp(s, interval)


def range_closed(start: float, end: float) -> DSPVectorArray:
    """Linear sequence from start to end; end falls on the last index."""
    s, e = np.float32(start), np.float32(end)
    interval = (e - s) / np.float32(FLOATS_PER_DSP_VECTOR - 1)
    return _ramp(s, interval)


def interpolate_linear(start: float, end: float) -> DSPVectorArray:
    """Linear sequence where start falls one sample before the vector and end on its last index."""
    s, e = np.float32(start), np.float32(end)
    interval = (e - s) / np.float32(FLOATS_PER_DSP_VECTOR)
    return _ramp(np.float32(s + interval), interval)


# ----------------------------------------------------------------
# horizontal reductions on one-row vectors


def hsum(x: DSPVectorArray) -> float:
    """Sum of all elements of a one-row vector."""
    return float(np.sum(_single(x, "hsum"), dtype=np.float32))


def hmean(x: DSPVectorArray) -> float:
    """Mean of all elements of a one-row vector."""
    gain = np.float32(1.0) / np.float32(FLOATS_PER_DSP_VECTOR)
    return float(np.float32(hsum(x)) * gain)


def hmax(x: DSPVectorArray) -> float:
    """Largest element, but never less than the smallest positive normal float."""
    return max(_FLT_MIN, float(np.max(_single(x, "hmax"))))


def hmin(x: DSPVectorArray) -> float:
    """Smallest element, but never more than the largest finite float."""
    return min(_FLT_MAX, float(np.min(_single(x, "hmin"))))


# ----------------------------------------------------------------
# row-wise operations


def normalize(x: DSPVectorArray) -> DSPVectorArray:
    """Divide each row by the sum of its elements."""
    m = _matrix(x)
    with np.errstate(all="ignore"):
        sums = np.sum(m, axis=1, dtype=np.float32)[:, None]
        return _from_matrix(m / sums)


def repeat_rows(x: DSPVectorArray, times: int) -> DSPVectorArray:
    """Repeat all the rows of x, in order, ``times`` times."""
    if times < 1:
        raise ValueError("times must be at least 1")
    return _from_matrix(np.tile(_matrix(x), (times, 1)))


def stretch_rows(x: DSPVectorArray, rows: int) -> DSPVectorArray:
    """Make an array of ``rows`` rows by repeating rows of x evenly."""
    if rows < 1:
        raise ValueError("a vector array needs at least one row")
    m = _matrix(x)
    n = x.rows
    picks = []
    for j in range(rows):
        if rows == 1:
            picks.append(0)
            continue
        q = np.float32(j) * np.float32(n - 1) / np.float32(rows - 1)
        picks.append(int(math.floor(float(q) + 0.5)))
    return _from_matrix(m[picks])


def zero_pad_rows(x: DSPVectorArray, rows: int) -> DSPVectorArray:
    """Copy the rows of x into an array of ``rows`` rows, padding with zeros or truncating."""
    if rows < 1:
        raise ValueError("a vector array needs at least one row")
    out = np.zeros((rows, FLOATS_PER_DSP_VECTOR), dtype=np.float32)
    count = min(rows, x.rows)
    out[:count] = _matrix(x)[:count]
    return _from_matrix(out)


def shift_rows(x: DSPVectorArray, rows_to_shift: int) -> DSPVectorArray:
    """Shift rows down by rows_to_shift (negative shifts up); vacated rows are zero."""
    m = _matrix(x)
    n = x.rows
    out = np.zeros_like(m)
    for j in range(n):
        k = j - rows_to_shift
        if 0 <= k < n:
            out[j] = m[k]
    return _from_matrix(out)


def rotate_rows(x: DSPVectorArray, rows_to_rotate: int) -> DSPVectorArray:
    """Rotate rows down by rows_to_rotate (negative rotates up), wrapping around."""
    n = x.rows
    start = modulo(-rows_to_rotate, n)
    order = [(start + j) % n for j in range(n)]
    return _from_matrix(_matrix(x)[order])


def concat_rows(*args: DSPVectorArray) -> DSPVectorArray:
    """Append the rows of each argument after those of the one before."""
    if not args:
        raise TypeError("concat_rows needs at least one array")
    return _from_matrix(np.concatenate([_matrix(a) for a in args], axis=0))


def rotate_left(x: DSPVectorArray) -> DSPVectorArray:
    """Rotate the elements of each row one place left; the first moves to the end."""
    return _from_matrix(np.roll(_matrix(x), -1, axis=1))


def rotate_right(x: DSPVectorArray) -> DSPVectorArray:
    """Rotate the elements of each row one place right; the last moves to the start."""
    return _from_matrix(np.roll(_matrix(x), 1, axis=1))


def shuffle_rows(x1: DSPVectorArray, x2: DSPVectorArray) -> DSPVectorArray:
    """Interleave rows of x1 and x2, x1 first; leftover rows are appended."""
    a, b = _matrix(x1), _matrix(x2)
    picked = []
    for j in range(max(x1.rows, x2.rows)):
        if j < x1.rows:
            picked.append(a[j])
        if j < x2.rows:
            picked.append(b[j])
    return _from_matrix(np.stack(picked))


def even_rows(x: DSPVectorArray) -> DSPVectorArray:
    """Rows 0, 2, 4, ... of x."""
    return _from_matrix(_matrix(x)[0::2])


def odd_rows(x: DSPVectorArray) -> DSPVectorArray:
    """Rows 1, 3, 5, ... of x."""
    if x.rows < 2:
        raise ValueError("odd_rows needs at least two rows")
    return _from_matrix(_matrix(x)[1::2])


def separate_rows(x: DSPVectorArray, start: int, end: int) -> DSPVectorArray:
    """Rows [start, end) of x."""
    if not (0 <= start < x.rows and start < end <= x.rows):
        raise ValueError(f"separate_rows: range [{start}, {end}) out of bounds for {x.rows} rows")
    return _from_matrix(_matrix(x)[start:end])


def add_rows(x: DSPVectorArray) -> DSPVectorArray:
    """Element-wise sum of all the rows of x, as one row."""
    total = np.zeros(FLOATS_PER_DSP_VECTOR, dtype=np.float32)
    with np.errstate(all="ignore"):
        for r in _matrix(x):
            total = total + r
    return DSPVectorArray._wrap(total.astype(np.float32), 1)


def validate(x: DSPVectorArray) -> bool:
    """Return False, reporting the first bad element, if any value is NaN or larger than 1e8."""
    data = _single(x, "validate")
    for n, v in enumerate(data):
        value = float(v)
        if math.isnan(value) or abs(value) > _MAX_USEFUL_VALUE:
            sys.stdout.write(f"error: {value:g} at index {n}\n")
            sys.stdout.write(f"{x}\n")
            return False
    return True