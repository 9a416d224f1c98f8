import numpy as np
import pytest

from dspvec.routing import (
    demultiplex,
    demultiplex_linear,
    mix,
    multiplex,
    multiplex_linear,
)
from dspvec.rows import concat_rows
from dspvec.vector import DSPVectorArray


def _ramp(offset=0.0, rows=1):
    return DSPVectorArray.from_function(lambda i: i + offset, rows)


def _selector():
    return DSPVectorArray.from_function(lambda i: (i % 4) / 4.0)


def test_mix_with_unit_and_zero_gains_selects_input():
    a = _ramp(0.0)
    b = _ramp(100.0)
    gains = concat_rows(DSPVectorArray(1.0), DSPVectorArray(0.0))
    assert mix(gains, a, b) == a


def test_mix_with_unit_gains_is_sum():
    a = _ramp(0.0, rows=2)
    b = _ramp(7.0, rows=2)
    gains = concat_rows(DSPVectorArray(1.0), DSPVectorArray(1.0))
    assert mix(gains, a, b) == a + b


def test_mix_too_few_gain_rows():
    a = _ramp()
    with pytest.raises(ValueError):
        mix(DSPVectorArray(1.0), a, a)


def test_multiplex_zero_selector_picks_first():
    a, b, c = _ramp(0.0), _ramp(1000.0), _ramp(2000.0)
    assert multiplex(DSPVectorArray(0.0), a, b, c) == a


def test_multiplex_selects_per_sample():
    a, b = DSPVectorArray(2.0, rows=2), DSPVectorArray(4.0, rows=2)
    sel = DSPVectorArray.from_function(lambda i: 0.5 if i % 2 else 0.0)
    y = multiplex(sel, a, b)
    for i in range(len(y)):
        expected = b[i] if (i % 64) % 2 else a[i]
        assert y[i] == expected


def test_multiplex_wraps_integer_part():
    a, b = _ramp(0.0), _ramp(50.0)
    assert multiplex(DSPVectorArray(3.5), a, b) == multiplex(DSPVectorArray(0.5), a, b)


def test_multiplex_rejects_negative_selector():
    with pytest.raises(ValueError):
        multiplex(DSPVectorArray(-0.5), _ramp(), _ramp())


def test_multiplex_rejects_mismatched_rows():
    with pytest.raises(ValueError):
        multiplex(DSPVectorArray(0.0), _ramp(rows=1), _ramp(rows=2))


def test_multiplex_linear_halfway():
    a, b = DSPVectorArray(2.0), DSPVectorArray(4.0)
    y = multiplex_linear(DSPVectorArray(0.25), a, b)
    assert all(v == pytest.approx(3.0) for v in y)
    z = multiplex_linear(DSPVectorArray(0.75), a, b)
    assert z == y


def test_multiplex_linear_at_input_points_matches_multiplex():
    a, b = _ramp(0.0), _ramp(10.0)
    sel = DSPVectorArray(0.5)
    assert multiplex_linear(sel, a, b) == multiplex(sel, a, b)


def test_demultiplex_outputs_sum_to_signal():
    signal = _ramp(1.0, rows=2)
    outs = demultiplex(_selector(), signal, 4)
    assert len(outs) == 4
    total = outs[0] + outs[1] + outs[2] + outs[3]
    assert total == signal


def test_demultiplex_routes_each_sample_once():
    signal = _ramp(1.0)
    outs = demultiplex(_selector(), signal, 4)
    for i in range(64):
        nonzero = [j for j, o in enumerate(outs) if o[i] != 0]
        assert nonzero == [i % 4]


def test_demultiplex_needs_an_output():
    with pytest.raises(ValueError):
        demultiplex(DSPVectorArray(0.0), _ramp(), 0)


def test_demultiplex_linear_outputs_sum_to_signal():
    signal = _ramp(1.0)
    sel = DSPVectorArray.from_function(lambda i: (i % 8) / 8.0)
    outs = demultiplex_linear(sel, signal, 3)
    total = np.zeros(64)
    for o in outs:
        total += np.array(list(o))
    assert total == pytest.approx(np.array(list(signal)), rel=1e-5)


def test_demultiplex_linear_zero_selector_goes_to_first():
    signal = _ramp(1.0)
    outs = demultiplex_linear(DSPVectorArray(0.0), signal, 3)
    assert outs[0] == signal
    assert outs[1] == DSPVectorArray(0.0)
    assert outs[2] == DSPVectorArray(0.0)