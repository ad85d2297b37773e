"""Gauss-Jordan elimination: reduced row-echelon form and matrix inverse.

The same pivoting loop serves both scalar fields. Pivots are chosen by
partial pivoting (largest magnitude in the active column, first maximum in
scan order on ties); a column whose best candidate is negligible for the
field has no pivot and is skipped.
"""

from __future__ import annotations

import logging

import numpy as np

from .. import config
from ..matrix import Matrix
from ..types import NotSquareError
from ..types import SingularMatrixError

logger = logging.getLogger(__name__)


def _select_pivot(work: Matrix, start_row: int, col: int) -> int:
    f = work.field
    pivot_row = start_row
    pivot_mag = f.magnitude(work.get(start_row, col))
    for i in range(start_row + 1, work.rows):
        mag = f.magnitude(work.get(i, col))
        if mag > pivot_mag:
            pivot_mag = mag
            pivot_row = i
    return pivot_row


def _gauss_jordan(work: Matrix, pivot_cols: int, require_pivots: bool) -> None:
    """Reduce ``work`` in place, looking for pivots in its first ``pivot_cols`` columns.

    With ``require_pivots`` a column without a usable pivot raises
    :class:`SingularMatrixError` instead of being skipped.
    """
    f = work.field
    r = 0
    lead = 0
    while r < work.rows and lead < pivot_cols:
        pivot_row = _select_pivot(work, r, lead)
        pivot = work.get(pivot_row, lead)
        if f.is_negligible(pivot):
            if require_pivots:
                logger.debug("No pivot in column %d, matrix is singular", lead + 1)
                raise SingularMatrixError(
                    f"Matrix is singular (no pivot in column {lead + 1})."
                )
            logger.debug("Column %d has no pivot below row %d, skipping", lead, r)
            lead += 1
            continue

        if pivot_row != r:
            logger.debug("Swapping rows %d and %d for pivot %s", r, pivot_row, pivot)
            work.swap_rows(r, pivot_row)

        for c in range(work.cols):
            work.set(r, c, work.get(r, c) / pivot)
        work.set(r, lead, f.one)

        for i in range(work.rows):
            if i == r:
                continue
            factor = work.get(i, lead)
            if factor == f.zero:
                continue
            work.add_row_multiple(i, r, -factor)
            work.set(i, lead, f.zero)

        r += 1
        lead += 1


def rref(m: Matrix) -> Matrix:
    """Return the reduced row-echelon form of ``m``.

    Every nonzero row of the result starts with the field's one, leading
    columns strictly increase downwards, and each leading column is zero in
    every other row.
    """
    work = m.copy()
    _gauss_jordan(work, work.cols, require_pivots=False)
    return work


def rank(m: Matrix) -> int:
    """Number of nonzero rows in the RREF of ``m``."""
    reduced = rref(m)
    f = reduced.field
    return sum(
        1
        for row in reduced.to_rows()
        if any(not f.is_negligible(v) for v in row)
    )


def inverse(m: Matrix) -> Matrix:
    """Invert a square matrix by reducing ``[A | I]``.

    Raises:
        NotSquareError: if ``m`` is not square
        SingularMatrixError: if some column has no usable pivot
    """
    if not m.is_square():
        raise NotSquareError(
            f"Matrix inverse: matrix must be square (got {m.rows}x{m.cols})."
        )
    n = m.rows
    f = m.field
    aug = Matrix(n, 2 * n, field=f)
    for i in range(n):
        for j in range(n):
            aug.set(i, j, m.get(i, j))
        aug.set(i, n + i, f.one)

    _gauss_jordan(aug, n, require_pivots=True)

    inv = Matrix(n, n, field=f)
    for i in range(n):
        for j in range(n):
            inv.set(i, j, aug.get(i, n + j))
    return inv


def approx_equal(a: Matrix, b: Matrix, tolerance: float | None = None) -> bool:
    """Compare two matrices entry by entry.

    Float matrices match when every pair differs by at most ``tolerance``
    (default ``config.APPROX_TOLERANCE``). Fraction matrices must match
    exactly and take no tolerance.
    """
    if a.field is not b.field or a.shape != b.shape:
        return False
    if a.field.exact:
        if tolerance is not None:
            raise TypeError("Exact matrices are compared without a tolerance")
        return a == b
    tol = config.APPROX_TOLERANCE if tolerance is None else tolerance
    diff = np.abs(
        np.asarray(a.to_rows(), dtype=float) - np.asarray(b.to_rows(), dtype=float)
    )
    return bool(np.all(diff <= tol))
