"""Scalar math helpers: clamping, interpolation, bit tricks and a tiny RNG."""

from __future__ import annotations

import math
import struct
from collections.abc import Sequence

TWO_PI = 6.2831853071795864769252867
PI = 3.1415926535897932384626433
ONE_OVER_TWO_PI = 1.0 / TWO_PI
E = 2.718281828459045
TWELFTH_ROOT_OF_TWO = 1.05946309436
MIN_GAIN = 0.00001  # -120 dB

_MASK32 = 0xFFFFFFFF
_ONE_BITS = 0x3F800000
_SIGN_MASK = 0x80000000


def _bits_to_float(bits: int) -> float:
    return struct.unpack("<f", struct.pack("<I", bits & _MASK32))[0]


def _float_to_bits(f: float) -> int:
    return struct.unpack("<I", struct.pack("<f", f))[0]


def bits_to_contain(x: int) -> int:
    """Return the exponent of the smallest power of two that is >= x."""
    exp = 0
    while (1 << exp) < x:
        exp += 1
    return exp


def chunk_size_to_contain(chunk_size_exponent: int, x: int) -> int:
    """Return the smallest multiple of 2**chunk_size_exponent that is >= x."""
    chunk_size = 1 << chunk_size_exponent
    return (x + chunk_size - 1) & ~(chunk_size - 1)


def _truncated_remainder(a: int, b: int) -> int:
    r = abs(a) % abs(b)
    return -r if a < 0 else r


def modulo(a: int | float, b: int | float) -> int | float:
    """Modulo that wraps negative values into range.

    Integers use the wrapping rule for signed integers; floats use
    ``a - b * floor(a / b)``.
    """
    if isinstance(a, int) and isinstance(b, int):
        if a >= 0:
            return _truncated_remainder(a, b)
        return _truncated_remainder(b - abs(_truncated_remainder(a, b)), b)
    return a - b * math.floor(a / b)


def clamp(x, lo, hi):
    """Clamp x to the closed interval [lo, hi]."""
    if x < lo:
        return lo
    return hi if x > hi else x


def lerp(a, b, m):
    """Linear interpolation from a to b by m."""
    return a + m * (b - a)


def within(x, lo, hi) -> bool:
    """Return whether x lies in the half-open interval [lo, hi)."""
    return lo <= x < hi


def within_closed_interval(x, lo, hi) -> bool:
    """Return whether x lies in the closed interval [lo, hi]."""
    return lo <= x <= hi


def sign(x) -> int:
    """Return -1, 0 or 1 according to the sign of x."""
    if x == 0:
        return 0
    return 1 if x > 0 else -1


def ilog2(x: int) -> int:
    """Integer base-2 logarithm, rounded down; 0 for x < 2."""
    if x < 1:
        return 0
    return x.bit_length() - 1


def is_nan(x: float) -> bool:
    return math.isnan(x)


def is_infinite(x: float) -> bool:
    return math.isinf(x)


def smoothstep(a: float, b: float, x: float) -> float:
    """Hermite smoothstep of x between edges a and b."""
    x = clamp((x - a) / (b - a), 0.0, 1.0)
    return x * x * (3 - 2 * x)


def bool_to_float(b) -> float:
    """Return 1.0 for a true value, 0.0 otherwise, built from the float's bits."""
    not_b = 0 if b else 1
    mask = (not_b - 1) & _MASK32
    return _bits_to_float(_ONE_BITS & mask)


def f_sign_bit(f: float) -> float:
    """Return 1.0 if the sign bit of f is clear, 0.0 if it is set."""
    bits = _float_to_bits(f)
    mask = (((bits & _SIGN_MASK) >> 31) - 1) & _MASK32
    return _bits_to_float(mask & _ONE_BITS)


def lerp_bipolar(a: float, b: float, c: float, m: float) -> float:
    """Interpolate from b toward a for negative m, toward c for positive m."""
    absm = abs(m)
    pos = 1.0 if m > 0 else 0.0
    neg = 1.0 if m < 0 else 0.0
    q = pos * c + neg * a
    return b + (q - b) * absm


def herp(t: Sequence[float], phase: float) -> float:
    """4-point, 3rd-order Hermite interpolation between t[1] and t[2]."""
    if len(t) < 4:
        raise ValueError("herp needs four points")
    c = (t[2] - t[0]) * 0.5
    v = t[1] - t[2]
    w = c + v
    a = w + v + (t[3] - t[1]) * 0.5
    b = w + a
    return (((a * phase) - b) * phase + c) * phase + t[1]


def amp_to_db(a: float) -> float:
    """Convert an amplitude ratio to decibels."""
    if a == 0:
        return -math.inf
    if a < 0 or math.isnan(a):
        return math.nan
    return 20.0 * math.log10(a)


def db_to_amp(db: float) -> float:
    """Convert decibels to an amplitude ratio."""
    return 10.0 ** (db / 20.0)


class RandomScalarSource:
    """A tiny linear congruential random generator."""

    def __init__(self, seed: int = 0) -> None:
        self.seed = seed & _MASK32

    def step(self) -> None:
        self.seed = (self.seed * 0x0019660D + 0x3C6EF35F) & _MASK32

    def get_float(self) -> float:
        """Return a pseudorandom float on [-1, 1)."""
        self.step()
        bits = ((self.seed >> 9) & 0x007FFFFF) | _ONE_BITS
        return _bits_to_float(bits) * 2.0 - 3.0

    def get_uint32(self) -> int:
        """Return 32 pseudorandom bits."""
        self.step()
        return self.seed