"""Error hierarchy and result containers shared by the kernel and the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any


class MatrixError(Exception):
    """Base class for every error raised by the matkalk kernel."""


class InvalidDimensionsError(MatrixError, ValueError):
    """Ragged or empty construction data, or operands with incompatible shapes."""


class FieldMismatchError(InvalidDimensionsError):
    """Operands live over different scalar fields (exact vs floating point)."""


class IndexOutOfRangeError(MatrixError, IndexError):
    """Element access outside the declared rows/cols."""


class DivisionByZeroError(MatrixError, ZeroDivisionError):
    """Division by an exact zero, or by a float below the negligible threshold."""


class NotSquareError(MatrixError, ValueError):
    """Determinant, cofactor or inverse requested on a non-square matrix."""


class SingularMatrixError(MatrixError, ArithmeticError):
    """Inverse or solve requested on a matrix without a full set of pivots."""


class ParseError(MatrixError, ValueError):
    """Matrix text entered in the console could not be read."""


@dataclass
class GuidedStep:
    """One narrated step of the guided solver.

    Attributes:
        description: Human readable account of the row operation
        matrix: Snapshot of the augmented matrix after the step
    """

    description: str
    matrix: Any


@dataclass
class GuidedSolution:
    """Outcome of :func:`matkalk_pkg.linalg.guided.solve_guided`.

    ``ok`` is False (and ``solution`` None) when the system has no unique
    solution; the solver reports that instead of raising.
    """

    ok: bool
    solution: tuple[Any, Any, Any] | None = None
    reason: str | None = None
    steps: list[GuidedStep] = field(default_factory=list)
