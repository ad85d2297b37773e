"""matkalk package: exact and floating-point matrix kernel with a console front end."""

__version__ = "1.0.0"

from . import cli, config, interop, linalg, logging_config, types
from .field import FLOAT_FIELD
from .field import FRACTION_FIELD
from .field import get_field
from .fraction import Fraction
from .linalg import adjugate_inverse
from .linalg import approx_equal
from .linalg import cofactor
from .linalg import determinant
from .linalg import inverse
from .linalg import rank
from .linalg import rref
from .linalg import solve_guided
from .linalg import solve_system
from .matrix import Matrix
from .types import DivisionByZeroError
from .types import FieldMismatchError
from .types import IndexOutOfRangeError
from .types import InvalidDimensionsError
from .types import MatrixError
from .types import NotSquareError
from .types import ParseError
from .types import SingularMatrixError

__all__ = [
    "cli",
    "config",
    "interop",
    "linalg",
    "logging_config",
    "types",
    "Fraction",
    "Matrix",
    "FLOAT_FIELD",
    "FRACTION_FIELD",
    "get_field",
    "rref",
    "rank",
    "inverse",
    "approx_equal",
    "determinant",
    "cofactor",
    "adjugate_inverse",
    "solve_guided",
    "solve_system",
    "MatrixError",
    "InvalidDimensionsError",
    "FieldMismatchError",
    "IndexOutOfRangeError",
    "DivisionByZeroError",
    "NotSquareError",
    "SingularMatrixError",
    "ParseError",
]
