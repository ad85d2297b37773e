"""Rectangular matrix over a scalar field.

Storage is a flat row-major list of ``rows * cols`` scalars. Every
arithmetic or transform operation returns a new matrix with its own list;
the only in-place operations are element assignment and the three
elementary row operations, which the engines apply to private copies.
"""

from __future__ import annotations

import logging
from typing import Any
from typing import Iterable
from typing import Sequence

from .field import FLOAT_FIELD
from .field import ScalarField
from .field import get_field
from .types import DivisionByZeroError
from .types import FieldMismatchError
from .types import IndexOutOfRangeError
from .types import InvalidDimensionsError

logger = logging.getLogger(__name__)


class Matrix:
    """A ``rows x cols`` matrix whose entries belong to ``field``.

    Args:
        rows: Number of rows
        cols: Number of columns
        fill: Initial value of every entry (defaults to the field's zero)
        field: ``FLOAT_FIELD``, ``FRACTION_FIELD`` or their names

    Example:
        >>> A = Matrix.from_rows([[1, 2], [3, 4]])
        >>> (A * A)[0, 1]
        10.0
    """

    __slots__ = ("_rows", "_cols", "_data", "_field")
    __hash__ = None  # mutable

    def __init__(
        self,
        rows: int,
        cols: int,
        fill: Any = None,
        field: ScalarField | str = FLOAT_FIELD,
    ) -> None:
        if not isinstance(rows, int) or not isinstance(cols, int) or rows < 0 or cols < 0:
            raise InvalidDimensionsError(
                f"Matrix dimensions must be non-negative integers, got {rows!r}x{cols!r}"
            )
        self._field = get_field(field)
        value = self._field.zero if fill is None else self._field.coerce(fill)
        self._rows = rows
        self._cols = cols
        self._data = [value] * (rows * cols)

    @classmethod
    def _wrap(
        cls, rows: int, cols: int, data: list[Any], field: ScalarField
    ) -> Matrix:
        """Adopt an already coerced storage list without copying it."""
        m = cls.__new__(cls)
        m._rows = rows
        m._cols = cols
        m._data = data
        m._field = field
        return m

    @classmethod
    def from_rows(
        cls, data: Sequence[Sequence[Any]], field: ScalarField | str = FLOAT_FIELD
    ) -> Matrix:
        """Build a matrix from a rectangular sequence of rows.

        Raises:
            InvalidDimensionsError: if ``data`` is empty, its first row is
                empty, or any row's length differs from the first row's.
        """
        f = get_field(field)
        rows = [list(r) for r in data]
        if not rows or not rows[0]:
            raise InvalidDimensionsError("Matrix cannot be empty")
        cols = len(rows[0])
        for i, r in enumerate(rows):
            if len(r) != cols:
                raise InvalidDimensionsError(
                    f"All rows must have the same number of columns "
                    f"(row {i} has {len(r)}, expected {cols})"
                )
        flat = [f.coerce(v) for r in rows for v in r]
        return cls._wrap(len(rows), cols, flat, f)

    @classmethod
    def identity(cls, size: int, field: ScalarField | str = FLOAT_FIELD) -> Matrix:
        m = cls(size, size, field=field)
        one = m._field.one
        for i in range(size):
            m._data[i * size + i] = one
        return m

    # Shape and access

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def field(self) -> ScalarField:
        return self._field

    def is_square(self) -> bool:
        return self._rows == self._cols

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexOutOfRangeError(
                f"Matrix index out of bounds: ({row}, {col}) for matrix of size "
                f"{self._rows}x{self._cols}"
            )
        return row * self._cols + col

    def get(self, row: int, col: int) -> Any:
        return self._data[self._index(row, col)]

    def set(self, row: int, col: int, value: Any) -> None:
        self._data[self._index(row, col)] = self._field.coerce(value)

    def __getitem__(self, key: tuple[int, int]) -> Any:
        row, col = key
        return self.get(row, col)

    def __setitem__(self, key: tuple[int, int], value: Any) -> None:
        row, col = key
        self.set(row, col, value)

    def row(self, i: int) -> list[Any]:
        self._index(i, 0)
        return self._data[i * self._cols : (i + 1) * self._cols]

    def to_rows(self) -> list[list[Any]]:
        return [
            self._data[i * self._cols : (i + 1) * self._cols] for i in range(self._rows)
        ]

    def copy(self) -> Matrix:
        return Matrix._wrap(self._rows, self._cols, list(self._data), self._field)

    def with_field(self, field: ScalarField | str) -> Matrix:
        """Return a copy whose entries are converted into ``field``."""
        f = get_field(field)
        return Matrix._wrap(
            self._rows, self._cols, [f.coerce(v) for v in self._data], f
        )

    # Elementary row operations (in place)

    def swap_rows(self, i: int, j: int) -> None:
        self._index(i, 0)
        self._index(j, 0)
        if i == j:
            return
        c = self._cols
        d = self._data
        d[i * c : (i + 1) * c], d[j * c : (j + 1) * c] = (
            d[j * c : (j + 1) * c],
            d[i * c : (i + 1) * c],
        )

    def scale_row(self, row: int, scalar: Any) -> None:
        self._index(row, 0)
        s = self._field.coerce(scalar)
        c = self._cols
        for k in range(row * c, (row + 1) * c):
            self._data[k] = self._data[k] * s

    def add_row_multiple(self, target_row: int, source_row: int, multiple: Any) -> None:
        """``row[target] += multiple * row[source]``."""
        self._index(target_row, 0)
        self._index(source_row, 0)
        m = self._field.coerce(multiple)
        c = self._cols
        t0 = target_row * c
        s0 = source_row * c
        for k in range(c):
            self._data[t0 + k] = self._data[t0 + k] + m * self._data[s0 + k]

    # Arithmetic

    def _check_field(self, other: Matrix, op: str) -> None:
        if other._field is not self._field:
            raise FieldMismatchError(
                f"Matrix {op}: cannot mix {self._field.name} and "
                f"{other._field.name} matrices"
            )

    def _check_same_shape(self, other: Matrix, op: str) -> None:
        self._check_field(other, op)
        if self.shape != other.shape:
            raise InvalidDimensionsError(
                f"Matrix {op}: dimension mismatch ({self._rows}x{self._cols}) vs "
                f"({other._rows}x{other._cols})"
            )

    def __add__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "addition")
        data = [a + b for a, b in zip(self._data, other._data)]
        return Matrix._wrap(self._rows, self._cols, data, self._field)

    def __sub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "subtraction")
        data = [a - b for a, b in zip(self._data, other._data)]
        return Matrix._wrap(self._rows, self._cols, data, self._field)

    def __neg__(self) -> Matrix:
        return Matrix._wrap(
            self._rows, self._cols, [-v for v in self._data], self._field
        )

    def matmul(self, other: Matrix) -> Matrix:
        self._check_field(other, "multiplication")
        if self._cols != other._rows:
            raise InvalidDimensionsError(
                f"Matrix multiplication: dimension mismatch ({self._rows}x{self._cols})"
                f" * ({other._rows}x{other._cols})"
            )
        n, inner, m = self._rows, self._cols, other._cols
        zero = self._field.zero
        a = self._data
        b = other._data
        data = []
        for i in range(n):
            for j in range(m):
                total = zero
                for k in range(inner):
                    total = total + a[i * inner + k] * b[k * m + j]
                data.append(total)
        return Matrix._wrap(n, m, data, self._field)

    def scale(self, scalar: Any) -> Matrix:
        s = self._field.coerce(scalar)
        return Matrix._wrap(
            self._rows, self._cols, [v * s for v in self._data], self._field
        )

    def __mul__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.matmul(other)
        try:
            return self.scale(other)
        except TypeError:
            return NotImplemented

    def __rmul__(self, other: Any) -> Matrix:
        # Only reached for scalar * Matrix
        try:
            return self.scale(other)
        except TypeError:
            return NotImplemented

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.matmul(other)

    def __truediv__(self, scalar: Any) -> Matrix:
        if isinstance(scalar, Matrix):
            return NotImplemented
        try:
            s = self._field.coerce(scalar)
        except TypeError:
            return NotImplemented
        if self._field.is_negligible(s):
            raise DivisionByZeroError(
                "Matrix division by scalar: scalar is zero (or too small)."
            )
        return Matrix._wrap(
            self._rows, self._cols, [v / s for v in self._data], self._field
        )

    def transpose(self) -> Matrix:
        r, c = self._rows, self._cols
        data = [self._data[i * c + j] for j in range(c) for i in range(r)]
        return Matrix._wrap(c, r, data, self._field)

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def minor(self, row: int, col: int) -> Matrix:
        """Matrix with ``row`` and ``col`` removed."""
        self._index(row, col)
        data = [
            self._data[i * self._cols + j]
            for i in range(self._rows)
            if i != row
            for j in range(self._cols)
            if j != col
        ]
        return Matrix._wrap(self._rows - 1, self._cols - 1, data, self._field)

    # Engines

    def determinant(self) -> Any:
        from .linalg.cofactor import determinant

        return determinant(self)

    def cofactor(self) -> Matrix:
        from .linalg.cofactor import cofactor

        return cofactor(self)

    def adjugate_inverse(self) -> Matrix:
        from .linalg.cofactor import adjugate_inverse

        return adjugate_inverse(self)

    def rref(self) -> Matrix:
        from .linalg.elimination import rref

        return rref(self)

    def inverse(self) -> Matrix:
        from .linalg.elimination import inverse

        return inverse(self)

    def rank(self) -> int:
        from .linalg.elimination import rank

        return rank(self)

    @staticmethod
    def approx_equal(a: Matrix, b: Matrix, tolerance: float | None = None) -> bool:
        from .linalg.elimination import approx_equal

        return approx_equal(a, b, tolerance)

    # Comparison and display

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self._field is other._field
            and self.shape == other.shape
            and self._data == other._data
        )

    def __iter__(self) -> Iterable[list[Any]]:
        return iter(self.to_rows())

    def __repr__(self) -> str:
        return (
            f"Matrix.from_rows({self.to_rows()!r}, field={self._field.name!r})"
        )

    def __str__(self) -> str:
        from .utils.formatting import format_matrix

        return format_matrix(self)
