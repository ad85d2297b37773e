"""Elimination, cofactor and guided-solver engines over :class:`~matkalk_pkg.matrix.Matrix`."""

from .cofactor import adjugate_inverse
from .cofactor import cofactor
from .cofactor import determinant
from .elimination import approx_equal
from .elimination import inverse
from .elimination import rank
from .elimination import rref
from .guided import solve_guided
from .guided import solve_system

__all__ = [
    "rref",
    "rank",
    "inverse",
    "approx_equal",
    "determinant",
    "cofactor",
    "adjugate_inverse",
    "solve_guided",
    "solve_system",
]
