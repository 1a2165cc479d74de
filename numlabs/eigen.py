"""Eigenvalues of symmetric matrices via tridiagonal reduction and shifted QR."""

from __future__ import annotations

import math
import sys
from typing import Optional, Sequence

from .matrix import Matrix, generate_matrix_for_solve
from .trimatrix import TriMatrix, matrix_mult_to_trimatrix, merge_trimatrices

DEFLATION_TOLERANCE = 1.0e-15
MAX_QR_STEPS = 10_000


def _sign(x: float) -> float:
    return -1.0 if x < 0.0 else 1.0


def _require_square(m: Matrix) -> None:
    if m.rows != m.cols:
        raise ValueError("matrix must be square")
    if m.rows < 2:
        raise ValueError("matrix must be at least 2x2")


def _rows(m: Matrix) -> list:
    return [m.values[r * m.cols:(r + 1) * m.cols] for r in range(m.rows)]


def _flatten(rows: list) -> list:
    return [value for row in rows for value in row]


def _reflector(x: list) -> list:
    """Return the unit Householder vector that maps x onto its first axis."""
    norm_x2 = sum(t * t for t in x)
    x1 = x[0]
    v = list(x)
    v[0] += _sign(x1) * math.sqrt(norm_x2)
    norm_v = math.sqrt(max(0.0, norm_x2 - x1 * x1 + v[0] * v[0]))
    if norm_v == 0.0:
        return [0.0] * len(x)
    return [t / norm_v for t in v]


def hessenberg(a: Matrix) -> TriMatrix:
    """Reduce a symmetric matrix to tridiagonal form by Householder similarity."""
    _require_square(a)
    n = a.rows
    m = _rows(a)
    for k in range(n - 2):
        v = _reflector([m[i][k] for i in range(k + 1, n)])

        # Apply the reflector from the left to rows k+1.. and columns k..
        vth = [
            sum(vj * m[k + 1 + j][c] for j, vj in enumerate(v)) for c in range(k, n)
        ]
        for i, vi in enumerate(v):
            row = m[k + 1 + i]
            for c in range(k, n):
                row[c] -= 2.0 * vi * vth[c - k]

        # Apply the reflector from the right to columns k+1..
        for row in m:
            hv = sum(row[k + 1 + j] * vj for j, vj in enumerate(v))
            for j, vj in enumerate(v):
                row[k + 1 + j] -= 2.0 * hv * vj

    return TriMatrix(
        [m[i + 1][i] for i in range(n - 1)],
        [m[i][i] for i in range(n)],
        [m[i][i + 1] for i in range(n - 1)],
    )


def householder(r: Matrix) -> tuple:
    """Triangularise r with Householder reflections.

    Returns ``(reflectors, upper)``: column k of ``reflectors`` holds the
    k-th unit reflector in its first n-k+1 rows, and ``upper`` is the
    resulting upper-triangular factor. The input is left unchanged.
    """
    _require_square(r)
    n = r.rows
    upper = _rows(r)
    reflectors = [[0.0] * n for _ in range(n)]
    for k in range(n):
        v = _reflector([upper[i][k] for i in range(k, n)])
        for i, vi in enumerate(v):
            reflectors[i][k] = vi
        vtr = [
            sum(vi * upper[k + i][c] for i, vi in enumerate(v)) for c in range(k, n)
        ]
        for i, vi in enumerate(v):
            row = upper[k + i]
            for c in range(k, n):
                row[c] -= 2.0 * vi * vtr[c - k]
    return Matrix(n, n, _flatten(reflectors)), Matrix(n, n, _flatten(upper))


def qr_decompose(r: Matrix) -> tuple:
    """Return ``(q, upper)`` with q orthogonal and q @ upper equal to r."""
    reflectors, upper = householder(r)
    n = r.rows
    q = [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]
    for k in reversed(range(n)):
        v = [reflectors[ell + 1, k + 1] for ell in range(n - k)]
        for i in range(n):
            dot = sum(vl * q[k + ell][i] for ell, vl in enumerate(v))
            for ell, vl in enumerate(v):
                q[k + ell][i] -= 2.0 * vl * dot
    return Matrix(n, n, _flatten(q)), upper


def find_zero(t: TriMatrix) -> int:
    """Return the first k whose super-diagonal entry (k, k+1) is negligible.

    Returns the matrix size when no such entry exists.
    """
    for k, value in enumerate(t.upper, start=1):
        if abs(value) < DEFLATION_TOLERANCE:
            return k
    return t.rows


def wilkinson_shift(t: TriMatrix) -> float:
    """Return the Wilkinson shift taken from the trailing 2x2 block."""
    n = t.rows
    if n < 2:
        raise ValueError("shift needs at least a 2x2 matrix")
    d = (t[n - 1, n - 1] - t[n, n]) / 2.0
    b = t[n - 1, n]
    denominator = abs(d) + math.sqrt(d * d + b * b)
    if denominator == 0.0:
        return t[n, n]
    return t[n, n] - _sign(d) * b * b / denominator


def _shifted_qr_step(t: TriMatrix) -> TriMatrix:
    n = t.rows
    mu = wilkinson_shift(t)
    full = Matrix.zeros(n, n)
    for i in range(1, n + 1):
        for j in range(max(1, i - 1), min(n, i + 1) + 1):
            full[i, j] = t[i, j]
        full[i, i] -= mu
    q, upper = qr_decompose(full)
    result = matrix_mult_to_trimatrix(upper, q)
    result.diag = [value + mu for value in result.diag]
    return result


def qr_algorithm(t: TriMatrix) -> TriMatrix:
    """Run the shifted QR algorithm with deflation.

    Returns a new tridiagonal matrix whose diagonal holds the eigenvalues
    of t. The input is left unchanged.
    """
    current = TriMatrix(list(t.lower), list(t.diag), list(t.upper))
    n = current.rows
    if n == 1:
        return current
    for _ in range(MAX_QR_STEPS):
        k = find_zero(current)
        if k < n:
            return merge_trimatrices(
                qr_algorithm(current.submatrix(1, k)),
                qr_algorithm(current.submatrix(k + 1, n)),
            )
        current = _shifted_qr_step(current)
    raise ArithmeticError("QR algorithm did not converge")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Reduce a random symmetric 6x6 matrix and print its eigenvalues."""
    a = generate_matrix_for_solve()
    t = hessenberg(a)
    parts = [
        "\n",
        " Original Matrix :\n",
        a.format("A"),
        " Reduction to Tridiagonal Form :\n",
        t.format("T"),
    ]
    t = qr_algorithm(t)
    parts += [" After QR Algorithm :\n", t.format("T")]
    sys.stdout.write("".join(parts))
    return 0