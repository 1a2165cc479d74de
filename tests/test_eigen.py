import math
import random

import pytest

from numlabs.eigen import (
    find_zero,
    hessenberg,
    householder,
    main,
    qr_algorithm,
    qr_decompose,
    wilkinson_shift,
)
from numlabs.matrix import Matrix, generate_matrix_for_solve
from numlabs.trimatrix import TriMatrix


def _symmetric(seed):
    return generate_matrix_for_solve(random.Random(seed))


def _trace(m):
    return sum(m[i, i] for i in range(1, m.rows + 1))


def _frobenius_sq(m):
    return sum(v * v for v in m.values)


def _tri_det(t, shift=0.0):
    prev, cur = 1.0, t.diag[0] - shift
    for k in range(1, t.rows):
        prev, cur = cur, (t.diag[k] - shift) * cur - t.lower[k - 1] * t.upper[k - 1] * prev
    return cur


def test_hessenberg_preserves_trace_and_norm():
    a = _symmetric(7)
    t = hessenberg(a)
    assert sum(t.diag) == pytest.approx(_trace(a), rel=1e-12)
    band = sum(v * v for v in t.diag + t.lower + t.upper)
    assert band == pytest.approx(_frobenius_sq(a), rel=1e-10)


def test_hessenberg_of_symmetric_is_symmetric():
    t = hessenberg(_symmetric(11))
    for lo, up in zip(t.lower, t.upper):
        assert lo == pytest.approx(up, abs=1e-10)


def test_hessenberg_rejects_non_square():
    with pytest.raises(ValueError):
        hessenberg(Matrix.zeros(2, 3))


def test_householder_gives_upper_triangle_and_unit_reflectors():
    a = _symmetric(3)
    reflectors, upper = householder(a)
    n = a.rows
    for i in range(1, n + 1):
        for j in range(1, i):
            assert abs(upper[i, j]) < 1e-12
    for k in range(1, n + 1):
        norm = sum(reflectors[i, k] ** 2 for i in range(1, n + 1))
        assert norm == pytest.approx(1.0)


def test_qr_decompose_reconstructs_input():
    a = _symmetric(5)
    q, r = qr_decompose(a)
    product = q @ r
    for got, want in zip(product.values, a.values):
        assert got == pytest.approx(want, abs=1e-12)


def test_qr_decompose_q_is_orthogonal():
    q, _ = qr_decompose(_symmetric(9))
    identity = q.transpose() @ q
    n = q.rows
    for i in range(1, n + 1):
        for j in range(1, n + 1):
            assert identity[i, j] == pytest.approx(1.0 if i == j else 0.0, abs=1e-12)


def test_qr_decompose_rejects_one_by_one():
    with pytest.raises(ValueError):
        qr_decompose(Matrix.zeros(1, 1))


def test_find_zero_locates_negligible_superdiagonal():
    t = TriMatrix([1.0, 1.0, 1.0], [2.0, 2.0, 2.0, 2.0], [1.0, 1e-16, 1.0])
    assert find_zero(t) == 2


def test_find_zero_returns_size_when_nothing_deflates():
    t = TriMatrix([1.0, 1.0], [2.0, 3.0, 4.0], [1.0, 1.0])
    assert find_zero(t) == t.rows


def test_wilkinson_shift_is_eigenvalue_of_two_by_two():
    t = TriMatrix([1.5], [2.0, -1.0], [1.5])
    mu = wilkinson_shift(t)
    det = (t[1, 1] - mu) * (t[2, 2] - mu) - t[1, 2] * t[2, 1]
    assert det == pytest.approx(0.0, abs=1e-12)


def test_wilkinson_shift_needs_two_rows():
    with pytest.raises(ValueError):
        wilkinson_shift(TriMatrix.zeros(1))


def test_qr_algorithm_diagonalises_and_keeps_eigenvalues():
    t = TriMatrix([1.0, 1.0, 1.0], [4.0, 3.0, 2.0, 1.0], [1.0, 1.0, 1.0])
    result = qr_algorithm(t)
    assert all(abs(v) < 1e-15 for v in result.upper)
    assert sum(result.diag) == pytest.approx(sum(t.diag))
    for eig in result.diag:
        assert _tri_det(t, eig) == pytest.approx(0.0, abs=1e-9)


def test_qr_algorithm_leaves_input_unchanged():
    t = TriMatrix([1.0, 1.0], [2.0, 2.0, 2.0], [1.0, 1.0])
    before = (list(t.lower), list(t.diag), list(t.upper))
    qr_algorithm(t)
    assert (t.lower, t.diag, t.upper) == before


def test_qr_algorithm_on_decoupled_blocks_keeps_diagonal():
    t = TriMatrix([0.0, 0.0], [1.0, 5.0, 3.0], [0.0, 0.0])
    assert qr_algorithm(t).diag == [1.0, 5.0, 3.0]


def test_full_pipeline_eigenvalue_product_equals_determinant():
    a = _symmetric(21)
    eigenvalues = qr_algorithm(hessenberg(a)).diag
    assert all(v > 0.0 for v in eigenvalues)
    assert math.prod(eigenvalues) == pytest.approx(1.0, rel=1e-8)
    assert sum(eigenvalues) == pytest.approx(_trace(a), rel=1e-10)