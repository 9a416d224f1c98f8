"""Fixed-size float and int32 signal vectors, stacked in rows."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from numbers import Integral, Real

import numpy as np

FLOATS_PER_DSP_VECTOR = 64
INTS_PER_DSP_VECTOR = FLOATS_PER_DSP_VECTOR

_INT32_MASK = 0xFFFFFFFF


def _wrap_int32(k: int) -> int:
    k &= _INT32_MASK
    return k - (1 << 32) if k & 0x80000000 else k


def _rows_for(size: int, per_row: int) -> int:
    if size == 0 or size % per_row:
        raise ValueError(
            f"expected a positive multiple of {per_row} values, got {size}"
        )
    return size // per_row


def _check_rows(rows: int) -> int:
    if rows < 1:
        raise ValueError("a vector array needs at least one row")
    return rows


def _format_rows(flat: np.ndarray, rows: int, per_row: int, fmt: Callable) -> str:
    parts = []
    for v in range(rows):
        if rows > 1:
            parts.append(f"\n    v{v}: ")
        items = "".join(f"{fmt(e)} " for e in flat[v * per_row:(v + 1) * per_row])
        parts.append(f"[{items}] ")
    return "".join(parts)


class DSPVectorArray:
    """A block of single-precision samples: ``rows`` rows of 64 floats each.

    A scalar fills every element; a sequence supplies the elements in order.
    """

    __slots__ = ("_data", "_rows")

    def __init__(self, value: float | Iterable[float] = 0.0, rows: int | None = None) -> None:
        if isinstance(value, DSPVectorArray):
            data = value._data.copy()
            if rows is not None and rows != value._rows:
                raise ValueError("row count does not match the source array")
            self._data, self._rows = data, value._rows
            return
        if isinstance(value, Real):
            n = _check_rows(1 if rows is None else rows)
            self._data = np.full(n * FLOATS_PER_DSP_VECTOR, value, dtype=np.float32)
            self._rows = n
            return
        data = np.array(list(value), dtype=np.float32)
        n = _rows_for(data.size, FLOATS_PER_DSP_VECTOR)
        if rows is not None and rows != n:
            raise ValueError(f"expected {rows * FLOATS_PER_DSP_VECTOR} values, got {data.size}")
        self._data, self._rows = data, n

    @classmethod
    def _wrap(cls, data: np.ndarray, rows: int) -> DSPVectorArray:
        obj = cls.__new__(cls)
        obj._data = data
        obj._rows = rows
        return obj

    @classmethod
    def from_function(cls, fn: Callable[[int], float], rows: int = 1) -> DSPVectorArray:
        """Build an array whose element i is fn(i)."""
        n = _check_rows(rows)
        data = np.fromiter(
            (fn(i) for i in range(n * FLOATS_PER_DSP_VECTOR)),
            dtype=np.float32,
            count=n * FLOATS_PER_DSP_VECTOR,
        )
        return cls._wrap(data, n)

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    def __getitem__(self, i: int) -> float:
        return float(self._data[i])

    def __setitem__(self, i: int, value: float) -> None:
        self._data[i] = value

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self._data)

    def __len__(self) -> int:
        return self._data.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DSPVectorArray):
            return NotImplemented
        return self._rows == other._rows and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def _row_slice(self, j: int) -> slice:
        if not 0 <= j < self._rows:
            raise IndexError(f"row {j} out of range for {self._rows} rows")
        return slice(j * FLOATS_PER_DSP_VECTOR, (j + 1) * FLOATS_PER_DSP_VECTOR)

    def row(self, j: int) -> DSPVectorArray:
        """Return row j as a one-row array sharing this array's storage."""
        return DSPVectorArray._wrap(self._data[self._row_slice(j)], 1)

    def set_row(self, j: int, x: DSPVectorArray | float) -> None:
        """Copy a one-row array (or fill with a scalar) into row j."""
        s = self._row_slice(j)
        if isinstance(x, DSPVectorArray):
            if x._rows != 1:
                raise ValueError("set_row needs a one-row array")
            self._data[s] = x._data
        elif isinstance(x, Real):
            self._data[s] = x
        else:
            raise TypeError("set_row needs a DSPVectorArray or a number")

    def _operand(self, other: object) -> np.ndarray | np.float32 | None:
        if isinstance(other, DSPVectorArray):
            if other._rows != self._rows:
                raise ValueError(
                    f"row count mismatch: {self._rows} and {other._rows}"
                )
            return other._data
        if isinstance(other, Real):
            return np.float32(other)
        return None

    def _binary(self, other: object, op: Callable, reflected: bool = False):
        y = self._operand(other)
        if y is None:
            return NotImplemented
        with np.errstate(all="ignore"):
            result = op(y, self._data) if reflected else op(self._data, y)
        return DSPVectorArray._wrap(np.asarray(result, dtype=np.float32), self._rows)

    def __add__(self, other):
        return self._binary(other, np.add)

    def __radd__(self, other):
        return self._binary(other, np.add, reflected=True)

    def __sub__(self, other):
        return self._binary(other, np.subtract)

    def __rsub__(self, other):
        return self._binary(other, np.subtract, reflected=True)

    def __mul__(self, other):
        return self._binary(other, np.multiply)

    def __rmul__(self, other):
        return self._binary(other, np.multiply, reflected=True)

    def __truediv__(self, other):
        return self._binary(other, np.divide)

    def __rtruediv__(self, other):
        return self._binary(other, np.divide, reflected=True)

    def __str__(self) -> str:
        return _format_rows(self._data, self._rows, FLOATS_PER_DSP_VECTOR, lambda e: f"{float(e):g}")

    def __repr__(self) -> str:
        return f"DSPVectorArray(rows={self._rows})"


DSPVector = DSPVectorArray


class DSPVectorArrayInt:
    """A block of 32-bit integers: ``rows`` rows of 64 ints each.

    Arithmetic wraps around like 32-bit two's-complement integers.
    """

    __slots__ = ("_data", "_rows")

    def __init__(self, value: int | Iterable[int] = 0, rows: int | None = None) -> None:
        if isinstance(value, DSPVectorArrayInt):
            if rows is not None and rows != value._rows:
                raise ValueError("row count does not match the source array")
            self._data, self._rows = value._data.copy(), value._rows
            return
        if isinstance(value, Integral):
            n = _check_rows(1 if rows is None else rows)
            self._data = np.full(n * INTS_PER_DSP_VECTOR, _wrap_int32(int(value)), dtype=np.int32)
            self._rows = n
            return
        data = np.array([_wrap_int32(int(v)) for v in value], dtype=np.int32)
        n = _rows_for(data.size, INTS_PER_DSP_VECTOR)
        if rows is not None and rows != n:
            raise ValueError(f"expected {rows * INTS_PER_DSP_VECTOR} values, got {data.size}")
        self._data, self._rows = data, n

    @classmethod
    def _wrap(cls, data: np.ndarray, rows: int) -> DSPVectorArrayInt:
        obj = cls.__new__(cls)
        obj._data = data
        obj._rows = rows
        return obj

    @classmethod
    def from_function(cls, fn: Callable[[int], int], rows: int = 1) -> DSPVectorArrayInt:
        """Build an array whose element i is fn(i)."""
        n = _check_rows(rows)
        data = np.array(
            [_wrap_int32(int(fn(i))) for i in range(n * INTS_PER_DSP_VECTOR)],
            dtype=np.int32,
        )
        return cls._wrap(data, n)

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    def __getitem__(self, i: int) -> int:
        return int(self._data[i])

    def __setitem__(self, i: int, value: int) -> None:
        self._data[i] = _wrap_int32(int(value))

    def __iter__(self) -> Iterator[int]:
        return (int(v) for v in self._data)

    def __len__(self) -> int:
        return self._data.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DSPVectorArrayInt):
            return NotImplemented
        return self._rows == other._rows and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def row(self, j: int) -> DSPVectorArrayInt:
        """Return row j as a one-row array sharing this array's storage."""
        if not 0 <= j < self._rows:
            raise IndexError(f"row {j} out of range for {self._rows} rows")
        s = slice(j * INTS_PER_DSP_VECTOR, (j + 1) * INTS_PER_DSP_VECTOR)
        return DSPVectorArrayInt._wrap(self._data[s], 1)

    def _binary(self, other: object, op: Callable):
        if not isinstance(other, DSPVectorArrayInt):
            return NotImplemented
        if other._rows != self._rows:
            raise ValueError(f"row count mismatch: {self._rows} and {other._rows}")
        with np.errstate(over="ignore"):
            result = op(self._data, other._data, dtype=np.int32)
        return DSPVectorArrayInt._wrap(result, self._rows)

    def __add__(self, other):
        return self._binary(other, np.add)

    def __sub__(self, other):
        return self._binary(other, np.subtract)

    def __str__(self) -> str:
        return _format_rows(self._data, self._rows, INTS_PER_DSP_VECTOR, lambda e: str(int(e)))

    def __repr__(self) -> str:
        return f"DSPVectorArrayInt(rows={self._rows})"


DSPVectorInt = DSPVectorArrayInt


def load(values: Sequence[float] | np.ndarray, rows: int | None = None) -> DSPVectorArray:
    """Copy values into a new array.

    With ``rows`` given, the first ``64 * rows`` values are used; otherwise the
    number of values must be a positive multiple of 64.
    """
    data = np.asarray(values, dtype=np.float32).ravel()
    if rows is None:
        n = _rows_for(data.size, FLOATS_PER_DSP_VECTOR)
    else:
        n = _check_rows(rows)
        if data.size < n * FLOATS_PER_DSP_VECTOR:
            raise ValueError(
                f"need {n * FLOATS_PER_DSP_VECTOR} values, got {data.size}"
            )
    return DSPVectorArray._wrap(data[: n * FLOATS_PER_DSP_VECTOR].copy(), n)


def store(x: DSPVectorArray) -> np.ndarray:
    """Return a copy of the array's elements as a flat float32 numpy array."""
    return x._data.copy()