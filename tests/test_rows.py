import math

import numpy as np
import pytest

from dspvec.rows import (
    add_rows,
    column_index,
    column_index_int,
    concat_rows,
    even_rows,
    hmax,
    hmean,
    hmin,
    hsum,
    interpolate_linear,
    normalize,
    odd_rows,
    range_closed,
    range_open,
    repeat_rows,
    rotate_left,
    rotate_right,
    rotate_rows,
    row_index,
    separate_rows,
    shift_rows,
    shuffle_rows,
    stretch_rows,
    validate,
    zero_pad_rows,
)
from dspvec.vector import FLOATS_PER_DSP_VECTOR, DSPVectorArray

N = FLOATS_PER_DSP_VECTOR


def distinct(rows):
    return DSPVectorArray.from_function(lambda i: i * 0.5 + 1.0, rows=rows)


def test_column_index_rows():
    c = column_index(3)
    assert c.rows == 3
    for i in range(3 * N):
        assert c[i] == i % N


def test_column_index_int():
    c = column_index_int()
    assert [c[i] for i in range(N)] == list(range(N))


def test_row_index():
    r = row_index(4)
    assert r.rows == 4
    for i in range(4 * N):
        assert r[i] == i // N


def test_ranges_match_column_index():
    assert range_open(0.0, float(N)) == column_index()
    assert range_closed(0.0, float(N - 1)) == column_index()
    assert interpolate_linear(0.0, float(N)) == column_index() + 1.0


def test_range_closed_endpoints():
    r = range_closed(2.0, 10.0)
    assert r[0] == 2.0
    assert r[N - 1] == pytest.approx(10.0, rel=1e-6)


def test_horizontal_reductions():
    assert hsum(DSPVectorArray(1.0)) == N
    assert hmean(DSPVectorArray(3.5)) == 3.5
    assert hmax(column_index()) == N - 1
    assert hmin(column_index()) == 0.0


def test_hmax_floor_is_smallest_normal():
    assert hmax(DSPVectorArray(-5.0)) == float(np.finfo(np.float32).tiny)


def test_reductions_need_one_row():
    with pytest.raises(ValueError):
        hsum(distinct(2))


def test_normalize_rows_sum_to_one():
    y = normalize(distinct(3))
    for j in range(3):
        assert hsum(y.row(j)) == pytest.approx(1.0, rel=1e-5)


def test_repeat_rows():
    x = distinct(2)
    y = repeat_rows(x, 3)
    assert y.rows == 6
    for j in range(6):
        assert y.row(j) == x.row(j % 2)


def test_stretch_rows():
    x = distinct(2)
    y = stretch_rows(x, 3)
    assert y.rows == 3
    assert y.row(0) == x.row(0)
    assert y.row(1) == x.row(1)
    assert y.row(2) == x.row(1)


def test_zero_pad_rows():
    x = distinct(2)
    y = zero_pad_rows(x, 4)
    assert y.row(1) == x.row(1)
    assert y.row(3) == DSPVectorArray(0.0)
    z = zero_pad_rows(distinct(3), 2)
    assert z == separate_rows(distinct(3), 0, 2)


def test_shift_rows():
    x = distinct(3)
    down = shift_rows(x, 1)
    assert down.row(0) == DSPVectorArray(0.0)
    assert down.row(1) == x.row(0)
    up = shift_rows(x, -1)
    assert up.row(0) == x.row(1)
    assert up.row(2) == DSPVectorArray(0.0)


def test_rotate_rows():
    x = distinct(3)
    y = rotate_rows(x, 1)
    assert y.row(0) == x.row(2)
    assert y.row(1) == x.row(0)
    assert rotate_rows(rotate_rows(x, 2), -2) == x
    assert rotate_rows(x, 3) == x


def test_concat_rows():
    a, b, c = distinct(1), distinct(2), DSPVectorArray(7.0)
    y = concat_rows(a, b, c)
    assert y.rows == 4
    assert y.row(0) == a.row(0)
    assert y.row(2) == b.row(1)
    assert y.row(3) == c
    with pytest.raises(TypeError):
        concat_rows()


def test_rotate_left_and_right():
    x = distinct(2)
    left = rotate_left(x)
    assert left[N - 1] == x[0]
    assert left[0] == x[1]
    assert rotate_right(left) == x
    right = rotate_right(x)
    assert right[N] == x[2 * N - 1]


def test_shuffle_rows_uneven():
    a, b = distinct(3), DSPVectorArray(-1.0)
    y = shuffle_rows(a, b)
    assert y.rows == 4
    assert y.row(0) == a.row(0)
    assert y.row(1) == b
    assert y.row(2) == a.row(1)
    assert y.row(3) == a.row(2)


def test_even_odd_round_trip():
    x = distinct(4)
    assert even_rows(x).rows == 2
    assert shuffle_rows(even_rows(x), odd_rows(x)) == x
    assert even_rows(distinct(3)).rows == 2


def test_odd_rows_of_single_row_raises():
    with pytest.raises(ValueError):
        odd_rows(distinct(1))


def test_separate_rows():
    x = distinct(4)
    y = separate_rows(x, 1, 3)
    assert y.rows == 2
    assert y.row(0) == x.row(1)
    with pytest.raises(ValueError):
        separate_rows(x, 2, 5)
    with pytest.raises(ValueError):
        separate_rows(x, 2, 2)


def test_add_rows():
    x = distinct(3)
    assert add_rows(x) == x.row(0) + x.row(1) + x.row(2)
    assert add_rows(DSPVectorArray(2.0)) == DSPVectorArray(2.0)


def test_validate(capsys):
    assert validate(column_index()) is True
    bad = column_index()
    bad[5] = math.nan
    assert validate(bad) is False
    assert "at index 5" in capsys.readouterr().out
    huge = DSPVectorArray(1e9)
    assert validate(huge) is False