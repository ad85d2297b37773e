"""Conversion between matkalk matrices and NumPy / SymPy matrices.

Used to cross-check kernel results (``--health-check`` and the test suite)
and to hand results to numeric code.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import sympy as sp

from .field import FLOAT_FIELD
from .field import ScalarField
from .field import get_field
from .fraction import Fraction
from .matrix import Matrix


def to_numpy(m: Matrix, exact: bool = False) -> np.ndarray:
    """Return ``m`` as a 2-D array.

    Fraction matrices become float arrays unless ``exact`` is set, in which
    case an object array of :class:`Fraction` is returned.
    """
    if exact and m.field.exact:
        arr = np.empty(m.shape, dtype=object)
        for i, row in enumerate(m.to_rows()):
            for j, v in enumerate(row):
                arr[i, j] = v
        return arr
    return np.array(
        [[float(v) for v in row] for row in m.to_rows()], dtype=float
    ).reshape(m.shape)


def from_numpy(arr: Any, field: ScalarField | str = FLOAT_FIELD) -> Matrix:
    a = np.asarray(arr)
    if a.ndim == 1:
        a = a.reshape(1, -1)
    if a.ndim != 2:
        raise ValueError(f"Expected a 2-D array, got {a.ndim} dimensions")
    return Matrix.from_rows(a.tolist(), field=field)


def _to_sympy_scalar(value: Any) -> sp.Expr:
    if isinstance(value, Fraction):
        return sp.Rational(value.numerator, value.denominator)
    return sp.Float(value)


def to_sympy(m: Matrix) -> sp.Matrix:
    """Return ``m`` as a SymPy matrix (exact Rationals for the fraction field)."""
    return sp.Matrix(
        m.rows, m.cols, [_to_sympy_scalar(v) for row in m.to_rows() for v in row]
    )


def from_sympy(M: sp.MatrixBase, field: ScalarField | str = FLOAT_FIELD) -> Matrix:
    f = get_field(field)
    rows = []
    for i in range(M.rows):
        row = []
        for j in range(M.cols):
            entry = sp.sympify(M[i, j])
            if f.exact and entry.is_Rational:
                row.append(Fraction(int(entry.p), int(entry.q)))
            elif entry.is_number and entry.is_real:
                row.append(f.coerce(float(entry)))
            else:
                raise ValueError(f"Entry ({i}, {j}) = {entry} is not a real number")
        rows.append(row)
    return Matrix.from_rows(rows, field=f)
