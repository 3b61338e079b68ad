"""
Fixed-size matrices for affine transforms.

Matrices are immutable values backed by a numpy float64 grid. Square-only
operations (determinant, cofactor, inverse) are computed by recursive
cofactor expansion along the first column, with a closed form at 2x2.
"""

from __future__ import annotations
from typing import Sequence, Union
import numpy as np

from .vec3 import EPSILON, Point, Vector


class SingularMatrixError(ArithmeticError):
    """Raised when inverting a matrix whose determinant is (nearly) zero."""
    pass


class Matrix:
    """An immutable rows x cols matrix."""

    __slots__ = ('_data', '_inverse')

    # numpy scalars defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, grid: Union[Sequence[Sequence[float]], np.ndarray]):
        """Create a matrix from a nested sequence of rows.

        Args:
            grid: Rows of numbers; every row must have the same length
        """
        data = np.array(grid, dtype=np.float64)
        if data.ndim != 2 or data.size == 0:
            raise ValueError(f"Matrix needs a non-empty 2D grid, got shape {data.shape}")
        data.flags.writeable = False
        self._data = data
        self._inverse = None

    @classmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        return cls(np.zeros((rows, cols)))

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        return cls(np.identity(size))

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape

    @property
    def is_square(self) -> bool:
        rows, cols = self._data.shape
        return rows == cols

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self._data[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None

    def __repr__(self) -> str:
        rows = ", ".join(
            "[" + ", ".join(f"{v:.5f}" for v in row) + "]" for row in self._data
        )
        return f"Matrix([{rows}])"

    def __getstate__(self):
        # Keep the cached inverse so worker processes do not recompute it
        inverse = self._inverse.to_array().tolist() if self._inverse is not None else None
        return self._data.tolist(), inverse

    def __setstate__(self, state):
        grid, inverse = state
        data = np.array(grid, dtype=np.float64)
        data.flags.writeable = False
        self._data = data
        self._inverse = Matrix(inverse) if inverse is not None else None

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the underlying grid."""
        return self._data.copy()

    def __matmul__(self, other):
        """Multiply by a matrix, or apply a 4x4 transform to a Point or Vector."""
        if isinstance(other, Matrix):
            if self.shape[1] != other.shape[0]:
                raise ValueError(
                    f"Cannot multiply {self.shape} matrix by {other.shape} matrix"
                )
            return Matrix(self._data @ other._data)
        if isinstance(other, (Point, Vector)):
            if self.shape != (4, 4):
                raise ValueError(f"Only 4x4 matrices transform tuples, got {self.shape}")
            tup = np.append(other._data, other.w)
            return type(other).from_array((self._data @ tup)[:3])
        return NotImplemented

    def __mul__(self, scalar: float) -> Matrix:
        if isinstance(scalar, (Matrix, Point, Vector)):
            return NotImplemented
        return Matrix(self._data * scalar)

    __rmul__ = __mul__

    def __rshift__(self, other: Matrix) -> Matrix:
        """Compose transforms in application order: ``a >> b`` applies a, then b."""
        if not isinstance(other, Matrix):
            return NotImplemented
        return other @ self

    def transpose(self) -> Matrix:
        return Matrix(self._data.T)

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        rows, cols = self.shape
        if rows < 2 or cols < 2:
            raise ValueError(f"Cannot take a submatrix of a {self.shape} matrix")
        reduced = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix(reduced)

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return minor if (row + col) % 2 == 0 else -minor

    def determinant(self) -> float:
        self._require_square("determinant")
        size = self.shape[0]
        d = self._data
        if size == 1:
            return float(d[0, 0])
        if size == 2:
            return float(d[0, 0] * d[1, 1] - d[0, 1] * d[1, 0])
        return sum(float(d[row, 0]) * self.cofactor(row, 0) for row in range(size))

    def is_invertible(self) -> bool:
        return abs(self.determinant()) >= EPSILON

    def inverse(self) -> Matrix:
        """Return the inverse matrix. The result is cached on this instance.

        Raises:
            SingularMatrixError: if the determinant is within EPSILON of zero
        """
        if self._inverse is not None:
            return self._inverse

        self._require_square("inverse")
        determinant = self.determinant()
        if abs(determinant) < EPSILON:
            raise SingularMatrixError(
                f"Cannot invert matrix with determinant {determinant!r}: {self!r}"
            )

        size = self.shape[0]
        if size == 1:
            cofactors = np.array([[1.0]])
        else:
            cofactors = np.array([
                [self.cofactor(r, c) for c in range(size)]
                for r in range(size)
            ])
        self._inverse = Matrix(cofactors.T / determinant)
        return self._inverse

    def _require_square(self, operation: str) -> None:
        if not self.is_square:
            raise ValueError(f"{operation} requires a square matrix, got {self.shape}")
