# dspvec

Building blocks for audio signal processing in fixed-size blocks. A signal
travels as a `DSPVectorArray`. This is one or more rows of 64 single-precision
samples. A processing graph is built by passing these blocks through plain
functions.

## Installation

```
pip install dspvec
```

To install the test dependencies as well:

```
pip install "dspvec[test]"
```

## Modules

### `dspvec.scalar_math`

Small helpers that work on single numbers:

- `clamp`, `lerp`, `within` (half-open interval), `within_closed_interval` and
  `sign`.
- `modulo`, which wraps negative values into range. It works on both ints and
  floats.
- `bits_to_contain`, `chunk_size_to_contain` and `ilog2`.
- `smoothstep`, `lerp_bipolar`, and `herp`, which does 4-point Hermite
  interpolation and raises `ValueError` when given fewer than four points.
- `bool_to_float` and `f_sign_bit`, built from the bits of 32-bit floats.
- `amp_to_db` and `db_to_amp`.
- `RandomScalarSource`, a small deterministic linear congruential generator:
  - `get_float()` returns a float on [-1, 1).
  - `get_uint32()` returns 32 bits.

### `dspvec.projections`

Functions from float to float, used to map and shape control values:

- Ready-made curves: `zero`, `unity`, `squared`, `flip`, `clip`, `smoothstep`,
  `flatcenter`, `bell`, and the `ease_in` / `ease_out` / `ease_in_out` families
  in quadratic, cubic and quartic forms.
- Factories:
  - `constant`.
  - `linear`, `log`, `exp` and `interval_map`, which take `Interval` values.
  - `piecewise_linear`, and `piecewise`, which takes one shape per segment and
    raises `ValueError` if shapes are missing.
- `Interval(x1, x2)` has a `contains` method that tests the half-open interval.
- `compose(a, b)` returns the projection `x -> a(b(x))`.
- `print_table` writes sampled values of a projection to stdout, or to a file
  you pass in.

### `dspvec.vector`

- `DSPVectorArray` is a block of float32 samples, 64 per row.
  - Build one from a scalar, which fills every element, from a sequence, or
    with `from_function`.
  - It supports indexing, `len`, iteration and value equality.
  - `row(j)` returns a row view that shares storage with the block;
    `set_row(j, x)` writes a row.
  - It supports `+ - * /`. Plain numbers broadcast, so `v + 1.0` works.
  - Row counts must match, or the operation raises `ValueError`.
- `DSPVectorArrayInt` is a block of int32 values. Its `+` and `-` wrap on
  overflow.
- `load(values, rows=None)` copies a flat sequence into a block.
  `store(x)` returns a flat float32 numpy array.
- `DSPVector` and `DSPVectorInt` are aliases of the two classes.

### `dspvec.ops`

Element-wise operations. Anywhere a float vector is expected, a plain number
may be passed instead.

- Math:
  - `sqrt`, `absolute`, `sign`, `sign_bit`, `sin`, `cos`, `log`, `exp`, `log2`
    and `exp2`.
  - `add` takes any number of operands. Also `subtract`, `multiply`, `divide`,
    `power`, `minimum` and `maximum`.
  - `lerp`, `inverse_lerp` and `clamp`.
- The `*_approx` variants (`sqrt_approx`, `sin_approx`, `divide_approx`,
  `power_approx` and others) compute the same values as their exact
  counterparts.
- Integer blocks: `add_int32` and `subtract_int32`.
- Conversions: `round_float_to_int` (ties to even), `truncate_float_to_int`,
  `int_to_float` and `fractional_part`.
- Comparisons return `DSPVectorArrayInt` masks, with -1 where the condition
  holds and 0 elsewhere:
  - `equal`, `not_equal`, `greater_than`, `greater_than_or_equal`, `less_than`
    and `less_than_or_equal`.
  - `within`, for the half-open interval.
- `select(if_true, if_false, mask)` picks bits under the mask.

### `dspvec.rows`

- Generators: `column_index`, `column_index_int`, `row_index`, `range_open`,
  `range_closed` and `interpolate_linear`.
- Reductions over a one-row vector:
  - `hsum` and `hmean`.
  - `hmax`, which never returns less than the smallest positive normal float.
  - `hmin`, which never returns more than the largest finite float.
- Row rearrangement: `repeat_rows`, `stretch_rows`, `zero_pad_rows`,
  `shift_rows`, `rotate_rows`, `concat_rows`, `shuffle_rows`, `even_rows`,
  `odd_rows` and `separate_rows`.
- Other row operations:
  - `add_rows` sums all rows into one.
  - `normalize` divides each row by its sum.
  - `rotate_left` and `rotate_right` rotate the elements within each row.
- `validate` returns `False` if a one-row vector holds a NaN or a value larger
  than 1e8. It prints the first bad element and the vector to stdout.

### `dspvec.routing`

- `mix(gains, *inputs)` sums the inputs, each multiplied by its row of `gains`.
- `multiplex` and `multiplex_linear` choose among inputs sample by sample. The
  choice comes from the fractional part of a selector vector.
- `demultiplex` and `demultiplex_linear` split one signal into a list of
  outputs.
- A selector value that is negative or not finite raises `ValueError`.

### `dspvec.windows`

- Window shapes on [0, 1]: `rectangle`, `triangle`, `raised_cosine`, `hamming`,
  `blackman` and `flat_top`.
- `make_window(size, shape)` samples a shape into a float32 numpy array, with
  both ends included.
- `map_indices(size, p)` returns the values `p(i)` for each index.

## Example

```python
from dspvec.vector import DSPVectorArray
from dspvec import ops, rows, projections, windows

ramp = rows.range_closed(0.0, 1.0)          # one row, 0 .. 1
shaped = DSPVectorArray.from_function(lambda i: projections.ease_in_out(ramp[i]))
louder = shaped * 2.0 + 0.5
peak = rows.hmax(louder)

stereo = rows.concat_rows(ramp, ops.sqrt(ramp))   # two rows
summed = rows.add_rows(stereo)

hann = windows.make_window(64, windows.raised_cosine)
```

## What it does not do

- It is a library only. There is no command-line tool and no audio input or
  output.
- It has no buffering layer that turns host callbacks of arbitrary size into
  64-sample blocks. Your code has to gather samples into full blocks itself.
- Stateful processors such as filters, oscillators and delays are not
  included. Neither is any control of the floating-point denormal mode.

## Running the tests

```
pytest
```