"""Tridiagonal and pentadiagonal matrices with 1-based indexing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .matrix import (
    NAME_WIDTH,
    PIVOT_TOLERANCE,
    Matrix,
    SingularMatrixError,
    Vector,
    _check_index,
    _display,
)


def _floats(values) -> list:
    return [float(v) for v in values]


@dataclass
class TriMatrix:
    """A square tridiagonal matrix stored as its three diagonals.

    ``lower[k]`` holds entry (k+2, k+1), ``diag[k]`` entry (k+1, k+1) and
    ``upper[k]`` entry (k+1, k+2). Entries off the three diagonals read as
    zero; writes to them are discarded.
    """

    lower: list
    diag: list
    upper: list

    def __post_init__(self) -> None:
        self.lower = _floats(self.lower)
        self.diag = _floats(self.diag)
        self.upper = _floats(self.upper)
        n = len(self.diag)
        if n == 0:
            raise ValueError("matrix size must be positive")
        if len(self.lower) != n - 1 or len(self.upper) != n - 1:
            raise ValueError("off-diagonals must be one shorter than the diagonal")

    @classmethod
    def zeros(cls, rows: int) -> "TriMatrix":
        """Return a rows x rows tridiagonal matrix of zeros."""
        if rows <= 0:
            raise ValueError("matrix size must be positive")
        return cls([0.0] * (rows - 1), [0.0] * rows, [0.0] * (rows - 1))

    @property
    def rows(self) -> int:
        return len(self.diag)

    @property
    def cols(self) -> int:
        return len(self.diag)

    def _slot(self, index: tuple) -> Optional[tuple]:
        i, j = index
        _check_index(i, self.rows, "row")
        _check_index(j, self.cols, "column")
        if i == j:
            return self.diag, i - 1
        if i == j + 1:
            return self.lower, j - 1
        if i == j - 1:
            return self.upper, i - 1
        return None

    def __getitem__(self, index: tuple) -> float:
        slot = self._slot(index)
        if slot is None:
            return 0.0
        band, k = slot
        return band[k]

    def __setitem__(self, index: tuple, value: float) -> None:
        slot = self._slot(index)
        if slot is not None:
            band, k = slot
            band[k] = float(value)

    def _combine(self, other: "TriMatrix", op: Callable) -> "TriMatrix":
        if self.rows != other.rows:
            raise ValueError(f"size mismatch: {self.rows} vs {other.rows}")
        return TriMatrix(
            [op(a, b) for a, b in zip(self.lower, other.lower)],
            [op(a, b) for a, b in zip(self.diag, other.diag)],
            [op(a, b) for a, b in zip(self.upper, other.upper)],
        )

    def __add__(self, other: "TriMatrix") -> "TriMatrix":
        if not isinstance(other, TriMatrix):
            return NotImplemented
        return self._combine(other, lambda a, b: a + b)

    def __sub__(self, other: "TriMatrix") -> "TriMatrix":
        if not isinstance(other, TriMatrix):
            return NotImplemented
        return self._combine(other, lambda a, b: a - b)

    def hadamard(self, other: "TriMatrix") -> "TriMatrix":
        """Return the element-wise product."""
        return self._combine(other, lambda a, b: a * b)

    def __matmul__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        n = self.rows
        if len(other) != n:
            raise ValueError("vector size must match the matrix")
        x = other.values
        out = []
        for r in range(n):
            total = 0.0
            if r > 0:
                total += self.lower[r - 1] * x[r - 1]
            total += self.diag[r] * x[r]
            if r < n - 1:
                total += self.upper[r] * x[r + 1]
            out.append(total)
        return Vector(out)

    def submatrix(self, k1: int, k2: int) -> "TriMatrix":
        """Return the diagonal block spanning rows and columns k1..k2."""
        if not 1 <= k1 <= k2 <= self.rows:
            raise IndexError(f"invalid block {k1}..{k2} for size {self.rows}")
        return TriMatrix(
            self.lower[k1 - 1:k2 - 1],
            self.diag[k1 - 1:k2],
            self.upper[k1 - 1:k2 - 1],
        )

    def format(self, name: str) -> str:
        """Render the matrix as a labelled block of text."""
        n = self.rows
        lines = [f"\n {name[:NAME_WIDTH]} ="]
        for i in range(1, n + 1):
            cells = ", ".join(
                f"{_display(self[i, j]):13.6e}" for j in range(1, n + 1)
            )
            lines.append(f"  |  {cells} |")
        return "\n".join(lines) + "\n\n"


@dataclass
class PentaMatrix:
    """A square pentadiagonal matrix stored as its five diagonals.

    Entries off the five diagonals read as zero; writes to them are discarded.
    """

    lower2: list
    lower: list
    diag: list
    upper: list
    upper2: list

    def __post_init__(self) -> None:
        self.lower2 = _floats(self.lower2)
        self.lower = _floats(self.lower)
        self.diag = _floats(self.diag)
        self.upper = _floats(self.upper)
        self.upper2 = _floats(self.upper2)
        n = len(self.diag)
        if n == 0:
            raise ValueError("matrix size must be positive")
        if len(self.lower) != n - 1 or len(self.upper) != n - 1:
            raise ValueError("first off-diagonals must have length size-1")
        if len(self.lower2) != max(0, n - 2) or len(self.upper2) != max(0, n - 2):
            raise ValueError("second off-diagonals must have length size-2")

    @classmethod
    def zeros(cls, rows: int) -> "PentaMatrix":
        """Return a rows x rows pentadiagonal matrix of zeros."""
        if rows <= 0:
            raise ValueError("matrix size must be positive")
        outer = max(0, rows - 2)
        return cls(
            [0.0] * outer,
            [0.0] * (rows - 1),
            [0.0] * rows,
            [0.0] * (rows - 1),
            [0.0] * outer,
        )

    @property
    def rows(self) -> int:
        return len(self.diag)

    @property
    def cols(self) -> int:
        return len(self.diag)

    def _slot(self, index: tuple) -> Optional[tuple]:
        i, j = index
        _check_index(i, self.rows, "row")
        _check_index(j, self.cols, "column")
        if i == j:
            return self.diag, i - 1
        if i == j + 1:
            return self.lower, j - 1
        if i == j - 1:
            return self.upper, i - 1
        if i == j + 2:
            return self.lower2, j - 1
        if i == j - 2:
            return self.upper2, i - 1
        return None

    def __getitem__(self, index: tuple) -> float:
        slot = self._slot(index)
        if slot is None:
            return 0.0
        band, k = slot
        return band[k]

    def __setitem__(self, index: tuple, value: float) -> None:
        slot = self._slot(index)
        if slot is not None:
            band, k = slot
            band[k] = float(value)

    def format(self, name: str) -> str:
        """Render the matrix as a labelled block of text."""
        n = self.rows
        lines = [f"\n {name[:NAME_WIDTH]} ="]
        for i in range(1, n + 1):
            cells = ", ".join(f"{self[i, j]:10.3e}" for j in range(1, n + 1))
            lines.append(f"  |  {cells} |")
        return "\n".join(lines) + "\n\n"


def merge_trimatrices(first: TriMatrix, second: TriMatrix) -> TriMatrix:
    """Place two tridiagonal blocks on the diagonal of a larger one."""
    return TriMatrix(
        first.lower + [0.0] + second.lower,
        first.diag + second.diag,
        first.upper + [0.0] + second.upper,
    )


def matrix_mult_to_trimatrix(a: Matrix, b: Matrix) -> TriMatrix:
    """Multiply two square matrices, keeping only the tridiagonal band."""
    n = a.rows
    if a.cols != n or b.rows != n or b.cols != n:
        raise ValueError("both matrices must be square and of the same size")
    result = TriMatrix.zeros(n)
    for i in range(1, n + 1):
        for j in range(max(1, i - 1), min(n, i + 1) + 1):
            total = 0.0
            for k in range(1, n + 1):
                total += a[i, k] * b[k, j]
            result[i, j] = total
    return result


def trisolve(a: TriMatrix, b: Vector) -> Vector:
    """Solve a x = b for tridiagonal a by banded elimination with pivoting.

    The inputs are left unchanged.
    """
    n = a.rows
    if len(b) != n:
        raise ValueError("right-hand side size must match the matrix")

    work = PentaMatrix.zeros(n)
    for i in range(1, n + 1):
        for j in range(max(1, i - 1), min(n, i + 1) + 1):
            work[i, j] = a[i, j]
    rhs = [0.0] + list(b.values)

    for i in range(1, n):
        pivot = max(range(i, i + 2), key=lambda r: abs(work[r, i]))
        if abs(work[pivot, i]) <= PIVOT_TOLERANCE:
            raise SingularMatrixError("cannot invert system")
        if pivot != i:
            for j in range(max(1, i - 2), min(n, i + 2) + 1):
                upper_value = work[i, j]
                work[i, j] = work[pivot, j]
                work[pivot, j] = upper_value
            rhs[i], rhs[pivot] = rhs[pivot], rhs[i]
        for j in range(i + 1, min(n, i + 2) + 1):
            dm = work[j, i] / work[i, i]
            for k in range(i + 1, min(n, i + 2) + 1):
                work[j, k] = work[j, k] - dm * work[i, k]
            rhs[j] -= dm * rhs[i]

    x = [0.0] * (n + 1)
    for row in range(n, 0, -1):
        if work[row, row] == 0.0:
            raise SingularMatrixError("cannot invert system")
        partial = 0.0
        for k in range(row + 1, min(n, row + 2) + 1):
            partial += work[row, k] * x[k]
        x[row] = (rhs[row] - partial) / work[row, row]
    return Vector(x[1:])