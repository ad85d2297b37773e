"""Step-by-step solver for three linear equations in x, y, z.

``solve_guided`` walks through forward elimination and back substitution on
the 3x4 augmented matrix and records every row operation, so a front end
can show the working. A system without a unique solution is reported in the
returned :class:`GuidedSolution` rather than raised.

``solve_system`` is the general n-equation counterpart built on the
elimination engine, without narration.
"""

from __future__ import annotations

import logging
from typing import Any
from typing import Sequence

from ..field import FLOAT_FIELD
from ..field import ScalarField
from ..field import get_field
from ..matrix import Matrix
from ..types import GuidedSolution
from ..types import GuidedStep
from ..types import InvalidDimensionsError
from ..types import NotSquareError
from ..utils.formatting import format_compact
from .elimination import _gauss_jordan

logger = logging.getLogger(__name__)

NO_UNIQUE_SOLUTION = "no unique solution"


def _augmented(
    equations: Matrix | Sequence[Sequence[Any]], field: ScalarField
) -> Matrix:
    if isinstance(equations, Matrix):
        aug = equations.copy()
    else:
        aug = Matrix.from_rows(equations, field=field)
    if aug.shape != (3, 4):
        raise InvalidDimensionsError(
            f"Guided solver expects 3 equations of the form a*x + b*y + c*z = d "
            f"(a 3x4 augmented matrix), got {aug.rows}x{aug.cols}"
        )
    return aug


def solve_guided(
    equations: Matrix | Sequence[Sequence[Any]],
    field: ScalarField | str = FLOAT_FIELD,
) -> GuidedSolution:
    """Solve ``a*x + b*y + c*z = d`` for three equations.

    Args:
        equations: Three ``(a, b, c, d)`` rows, or a 3x4 augmented Matrix
            (whose own field is then used)
        field: Scalar field for row input

    Returns:
        GuidedSolution with ``ok`` False when the system is singular
    """
    aug = _augmented(equations, get_field(field))
    f = aug.field
    steps: list[GuidedStep] = []

    def record(description: str) -> None:
        steps.append(GuidedStep(description, aug.copy()))

    def fail(description: str) -> GuidedSolution:
        logger.debug("Guided solve stopped: %s", description)
        record(description)
        return GuidedSolution(ok=False, reason=NO_UNIQUE_SOLUTION, steps=steps)

    record("Augmented matrix [A|b]")

    if f.is_negligible(aug.get(0, 0)):
        if not f.is_negligible(aug.get(1, 0)):
            aug.swap_rows(0, 1)
            record("Pivot in R1 is zero: swap R1 and R2")
        elif not f.is_negligible(aug.get(2, 0)):
            aug.swap_rows(0, 2)
            record("Pivot in R1 is zero: swap R1 and R3")
        else:
            return fail("Column 1 has no nonzero entry")

    for row in (1, 2):
        m = aug.get(row, 0) / aug.get(0, 0)
        if m == f.zero:
            continue
        aug.add_row_multiple(row, 0, -m)
        aug.set(row, 0, f.zero)
        record(f"R{row + 1} = R{row + 1} - ({format_compact(m)}) * R1")

    if f.is_negligible(aug.get(1, 1)):
        aug.swap_rows(1, 2)
        record("Pivot in R2 is zero: swap R2 and R3")
        if f.is_negligible(aug.get(1, 1)):
            return fail("Column 2 has no nonzero entry below R1")

    m = aug.get(2, 1) / aug.get(1, 1)
    if m != f.zero:
        aug.add_row_multiple(2, 1, -m)
        aug.set(2, 1, f.zero)
        record(f"R3 = R3 - ({format_compact(m)}) * R2")

    if f.is_negligible(aug.get(2, 2)):
        return fail("Pivot in R3 is zero: the system is singular")

    a = aug.to_rows()
    z = a[2][3] / a[2][2]
    y = (a[1][3] - a[1][2] * z) / a[1][1]
    x = (a[0][3] - a[0][1] * y - a[0][2] * z) / a[0][0]
    record(
        f"Back substitution: z = {format_compact(z)}, y = {format_compact(y)}, "
        f"x = {format_compact(x)}"
    )
    return GuidedSolution(ok=True, solution=(x, y, z), steps=steps)


def solve_system(
    coefficients: Matrix | Sequence[Sequence[Any]],
    rhs: Sequence[Any],
    field: ScalarField | str = FLOAT_FIELD,
) -> tuple[Any, ...]:
    """Solve ``A x = b`` for square ``A`` by reducing ``[A | b]``.

    Raises:
        NotSquareError: if ``A`` is not square
        InvalidDimensionsError: if ``b`` does not have one entry per row
        SingularMatrixError: if ``A`` has no unique solution
    """
    if isinstance(coefficients, Matrix):
        A = coefficients
    else:
        A = Matrix.from_rows(coefficients, field=get_field(field))
    if not A.is_square():
        raise NotSquareError(
            f"Linear system needs a square coefficient matrix (got {A.rows}x{A.cols})"
        )
    b = list(rhs)
    if len(b) != A.rows:
        raise InvalidDimensionsError(
            f"Right-hand side has {len(b)} entries, expected {A.rows}"
        )
    aug = Matrix.from_rows(
        [row + [v] for row, v in zip(A.to_rows(), b)], field=A.field
    )
    _gauss_jordan(aug, A.cols, require_pivots=True)
    return tuple(aug.get(i, A.cols) for i in range(A.rows))
