# numlabs

A small, dependency-free toolkit of classic numerical methods written in
plain Python.

## What is inside

- `numlabs.matrix`: `Matrix` and `Vector` with 1-based indexing
  (`m[i, j]`, `v[i]`; out-of-range indices raise `IndexError`),
  element-wise and matrix arithmetic (`+`, `-`, `a @ b`, `a @ v`,
  `hadamard`, `transpose`, `dot`), text rendering (`format`,
  `format_scalar`), Gaussian elimination with partial pivoting (`solve`,
  which leaves its inputs unchanged and raises `SingularMatrixError` on a
  singular system), `unit_lower_triangular`, and
  `generate_matrix_for_solve`, which returns `L @ Lᵀ` for a random 6x6
  unit lower-triangular `L`. Both random helpers accept a
  `random.Random` for reproducible results.
- `numlabs.trimatrix`: `TriMatrix` and `PentaMatrix` banded storage
  (entries off the band read as zero; writes to them are discarded),
  `TriMatrix.submatrix`, `merge_trimatrices`, `matrix_mult_to_trimatrix`,
  tridiagonal-times-vector with `@`, and the banded solver `trisolve`
  (raises `SingularMatrixError`).
- `numlabs.eigen`: Householder reduction of a symmetric matrix to
  tridiagonal form (`hessenberg`), `householder` and `qr_decompose`
  (returns `(q, upper)`), `find_zero`, `wilkinson_shift`, and the shifted,
  deflating `qr_algorithm`, which returns a new `TriMatrix` whose diagonal
  holds the eigenvalues and raises `ArithmeticError` if it does not
  converge.
- `numlabs.simpson`: composite Simpson's rule for `e^x` (`simpson`), the
  per-worker share (`local_simpson`), and two threaded variants
  (`critical_simpson`, `reduction_simpson`) that also print their timings.
- `numlabs.adaptive`: adaptive Simpson quadrature of
  `exp(-(10x)^2) + sin(x)`, serial (`adaptive_integrate_serial`) and with
  nested threads (`adaptive_integrate`), optionally writing every visited
  interval to a text stream.
- `numlabs.trapezoid`: composite trapezoid rule for `e^x`
  (`composite_trapezoid`) and an even split across threads
  (`parallel_trapezoid`, which requires `N` divisible by the number of
  workers).
- `numlabs.normalize`: max-norm and two-norm normalisation of a test
  vector with fine- and coarse-grained thread splitting, each returning a
  `NormalizationResult` (norm, normalised values, elapsed time). In the
  coarse variants each thread owns `n // num_threads` entries, so any
  remainder is left undivided.
- `numlabs.power_sums`: `fill_random_vector`, `power_sums` (the sums
  `sum(x**j for j in 0..k)` split over threads) and `make_output_vector`,
  which times them.
- `numlabs.records`: fixed-layout little-endian binary records
  `StatAggregate` and `PlayerPer` with `pack` / `unpack`. The
  `StatAggregate` record does not carry `player_id`; it reads back as zero.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Library use

```python
import random

from numlabs.matrix import generate_matrix_for_solve
from numlabs.eigen import hessenberg, qr_algorithm

a = generate_matrix_for_solve(random.Random(1))
t = hessenberg(a)
eigen = qr_algorithm(t)
print([eigen[i, i] for i in range(1, 7)])
```

```python
from numlabs.simpson import simpson

print(simpson(0.0, 1.0, 1000))   # close to e - 1
```

## Command-line tools

```
numlabs-eigen                    # tridiagonalise a random 6x6 SPD matrix and find its eigenvalues
numlabs-power-sums 4 100000 10   # threads, vector size, degree
numlabs-simpson 4 1000           # threads, number of points; integrates e^x over [0, 1]
numlabs-normalize 1000 4         # vector size, threads
numlabs-adaptive 4 1e-8          # threads, tolerance; writes quadrature.data in the current directory
numlabs-trapezoid 0 1 1000 4     # a, b, number of intervals, optional worker count (default 1)
numlabs-records                  # pack and unpack sample records between two threads
```

Invalid arguments produce an error message and a non-zero exit status.

## What it does not do

All parallel work runs on threads within one Python process. There is no
multi-process or distributed execution, and the records in
`numlabs.records` are only passed between threads of the same process.
Because of the interpreter lock, the threaded variants are for comparing
work-splitting schemes, not for speed.