"""Laplace-expansion determinant, cofactor matrix and adjugate inverse.

This is the reference path: the recursive expansion costs O(n!) and is only
meant for the small matrices typed into the calculator. Elimination in
:mod:`matkalk_pkg.linalg.elimination` is the primary inverse.
"""

from __future__ import annotations

import logging
from typing import Any

from ..matrix import Matrix
from ..types import InvalidDimensionsError
from ..types import NotSquareError
from ..types import SingularMatrixError

logger = logging.getLogger(__name__)


def _require_square(m: Matrix, what: str) -> None:
    if not m.is_square():
        raise NotSquareError(
            f"{what} can only be calculated for square matrices (got {m.rows}x{m.cols})"
        )
    if m.rows == 0:
        raise InvalidDimensionsError(f"{what} of an empty matrix is undefined")


def _det(m: Matrix) -> Any:
    n = m.rows
    if n == 1:
        return m.get(0, 0)
    if n == 2:
        return m.get(0, 0) * m.get(1, 1) - m.get(0, 1) * m.get(1, 0)
    total = m.field.zero
    for j in range(n):
        term = m.get(0, j) * _det(m.minor(0, j))
        total = total + term if j % 2 == 0 else total - term
    return total


def determinant(m: Matrix) -> Any:
    """Determinant by cofactor expansion along the first row."""
    _require_square(m, "Determinant")
    return _det(m)


def cofactor(m: Matrix) -> Matrix:
    """Matrix of signed minors: ``C[i][j] = (-1)^(i+j) * det(minor(i, j))``."""
    _require_square(m, "Cofactor matrix")
    n = m.rows
    f = m.field
    result = Matrix(n, n, field=f)
    if n == 1:
        result.set(0, 0, f.one)
        return result
    for i in range(n):
        for j in range(n):
            d = _det(m.minor(i, j))
            result.set(i, j, d if (i + j) % 2 == 0 else -d)
    return result


def adjugate_inverse(m: Matrix) -> Matrix:
    """Inverse as ``adj(A) / det(A)``.

    Raises:
        NotSquareError: if ``m`` is not square
        SingularMatrixError: if the determinant is negligible for the field
    """
    _require_square(m, "Inverse")
    det = _det(m)
    if m.field.is_negligible(det):
        logger.debug("Determinant %s is negligible, no adjugate inverse", det)
        raise SingularMatrixError(
            "Matrix is singular (determinant is zero), cannot compute inverse"
        )
    return cofactor(m).transpose() * (m.field.one / det)
