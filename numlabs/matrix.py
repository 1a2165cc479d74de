"""Dense matrices and vectors with 1-based (mathematical) indexing."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

PIVOT_TOLERANCE = 1.0e-14
DISPLAY_ZERO = 1.0e-14
NAME_WIDTH = 100


class SingularMatrixError(ArithmeticError):
    """Raised when a linear system cannot be inverted."""


def _check_index(index: int, size: int, what: str) -> None:
    if not isinstance(index, int) or not 1 <= index <= size:
        raise IndexError(f"{what} index {index!r} out of range 1..{size}")


def _display(value: float) -> float:
    return 0.0 if abs(value) < DISPLAY_ZERO else value


@dataclass
class Matrix:
    """A rows x cols matrix of floats stored row by row, indexed from 1."""

    rows: int
    cols: int
    values: Optional[list] = field(default=None)

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError("matrix dimensions must be positive")
        if self.values is None:
            self.values = [0.0] * (self.rows * self.cols)
        else:
            self.values = [float(v) for v in self.values]
        if len(self.values) != self.rows * self.cols:
            raise ValueError(
                f"expected {self.rows * self.cols} values, got {len(self.values)}"
            )

    @classmethod
    def zeros(cls, rows: int, cols: int) -> "Matrix":
        """Return a matrix of the given shape filled with zeros."""
        return cls(rows, cols)

    def _offset(self, index: tuple) -> int:
        i, j = index
        _check_index(i, self.rows, "row")
        _check_index(j, self.cols, "column")
        return (i - 1) * self.cols + (j - 1)

    def __getitem__(self, index: tuple) -> float:
        return self.values[self._offset(index)]

    def __setitem__(self, index: tuple, value: float) -> None:
        self.values[self._offset(index)] = float(value)

    def _row_lists(self) -> list:
        return [
            self.values[r * self.cols:(r + 1) * self.cols] for r in range(self.rows)
        ]

    def _same_shape(self, other: "Matrix") -> None:
        if (self.rows, self.cols) != (other.rows, other.cols):
            raise ValueError(
                f"shape mismatch: {self.rows}x{self.cols} vs {other.rows}x{other.cols}"
            )

    def _elementwise(self, other: "Matrix", op: Callable) -> "Matrix":
        self._same_shape(other)
        return Matrix(
            self.rows, self.cols, [op(a, b) for a, b in zip(self.values, other.values)]
        )

    def __add__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._elementwise(other, lambda a, b: a + b)

    def __sub__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._elementwise(other, lambda a, b: a - b)

    def __matmul__(self, other):
        if isinstance(other, Vector):
            if self.cols != len(other):
                raise ValueError("matrix columns must match vector size")
            return Vector(
                [
                    sum(a * x for a, x in zip(row, other.values))
                    for row in self._row_lists()
                ]
            )
        if isinstance(other, Matrix):
            if self.cols != other.rows:
                raise ValueError("inner dimensions do not agree")
            columns = other.transpose()._row_lists()
            return Matrix(
                self.rows,
                other.cols,
                [
                    sum(a * b for a, b in zip(row, col))
                    for row in self._row_lists()
                    for col in columns
                ],
            )
        return NotImplemented

    def hadamard(self, other: "Matrix") -> "Matrix":
        """Return the element-wise product."""
        return self._elementwise(other, lambda a, b: a * b)

    def transpose(self) -> "Matrix":
        """Return the transposed matrix."""
        return Matrix(
            self.cols,
            self.rows,
            [
                self.values[r * self.cols + c]
                for c in range(self.cols)
                for r in range(self.rows)
            ],
        )

    def format(self, name: str) -> str:
        """Render the matrix as a labelled block of text."""
        lines = [f"\n {name[:NAME_WIDTH]} ="]
        for row in self._row_lists():
            cells = ", ".join(f"{_display(v):13.6e}" for v in row)
            lines.append(f"  |  {cells} |")
        return "\n".join(lines) + "\n\n"


@dataclass
class Vector:
    """A column vector of floats, indexed from 1."""

    values: list

    def __post_init__(self) -> None:
        self.values = [float(v) for v in self.values]
        if not self.values:
            raise ValueError("vector size must be positive")

    @classmethod
    def zeros(cls, size: int) -> "Vector":
        """Return a vector of the given size filled with zeros."""
        if size <= 0:
            raise ValueError("vector size must be positive")
        return cls([0.0] * size)

    @property
    def size(self) -> int:
        return len(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def __getitem__(self, index: int) -> float:
        _check_index(index, len(self.values), "vector")
        return self.values[index - 1]

    def __setitem__(self, index: int, value: float) -> None:
        _check_index(index, len(self.values), "vector")
        self.values[index - 1] = float(value)

    def _same_size(self, other: "Vector") -> None:
        if len(self) != len(other):
            raise ValueError(f"size mismatch: {len(self)} vs {len(other)}")

    def __add__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        self._same_size(other)
        return Vector([a + b for a, b in zip(self.values, other.values)])

    def __sub__(self, other: "Vector") -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        self._same_size(other)
        return Vector([a - b for a, b in zip(self.values, other.values)])

    def dot(self, other: "Vector") -> float:
        """Return the inner product with another vector."""
        self._same_size(other)
        total = 0.0
        for a, b in zip(self.values, other.values):
            total += a * b
        return total

    def format(self, name: str) -> str:
        """Render the vector as a labelled transposed row."""
        cells = ", ".join(f"{v:10.3e}" for v in self.values)
        return f"\n {name[:NAME_WIDTH]} =\n  |  {cells} |^T\n\n"


def format_scalar(value: float, name: str) -> str:
    """Render a scalar with a label."""
    return f"\n {name[:NAME_WIDTH]} =\n    {value:10.3e} \n\n"


def solve(a: Matrix, b: Vector) -> Vector:
    """Solve a x = b by Gaussian elimination with partial pivoting.

    The inputs are left unchanged.
    """
    n = a.rows
    if a.cols != n:
        raise ValueError("matrix must be square")
    if len(b) != n:
        raise ValueError("right-hand side size must match the matrix")

    m = a._row_lists()
    rhs = list(b.values)

    for i in range(n - 1):
        pivot = max(range(i, n), key=lambda r: abs(m[r][i]))
        if abs(m[pivot][i]) <= PIVOT_TOLERANCE:
            raise SingularMatrixError("cannot invert system")
        if pivot != i:
            m[i], m[pivot] = m[pivot], m[i]
            rhs[i], rhs[pivot] = rhs[pivot], rhs[i]
        for j in range(i + 1, n):
            dm = m[j][i] / m[i][i]
            for k in range(i + 1, n):
                m[j][k] -= dm * m[i][k]
            rhs[j] -= dm * rhs[i]

    x = [0.0] * n
    for row in reversed(range(n)):
        if m[row][row] == 0.0:
            raise SingularMatrixError("cannot invert system")
        partial = 0.0
        for k in range(row + 1, n):
            partial += m[row][k] * x[k]
        x[row] = (rhs[row] - partial) / m[row][row]
    return Vector(x)


def _open_unit(rng: random.Random) -> float:
    while True:
        value = rng.random()
        if value > 0.0:
            return value


def unit_lower_triangular(size: int, rng: Optional[random.Random] = None) -> Matrix:
    """Return a lower-triangular matrix with ones on the diagonal.

    Entries below the diagonal are random values strictly between 0 and 1.
    """
    rng = rng if rng is not None else random.Random()
    mat = Matrix.zeros(size, size)
    for i in range(1, size + 1):
        mat[i, i] = 1.0
    for i in range(1, size + 1):
        for j in range(1, i):
            mat[i, j] = _open_unit(rng)
    return mat


def generate_matrix_for_solve(rng: Optional[random.Random] = None) -> Matrix:
    """Return L @ L^T for a random 6x6 unit lower-triangular L."""
    lower = unit_lower_triangular(6, rng)
    return lower @ lower.transpose()