"""Scalar fields a :class:`~matkalk_pkg.matrix.Matrix` can be built over.

Both fields expose the same small surface (zero, one, coercion, a
negligible-value test and a magnitude used for pivot ordering), so the
matrix and elimination code is written once and runs over either domain.
Only the negligible test differs: the fraction field is exact, the float
field treats anything below ``config.EPSILON`` as zero.
"""

from __future__ import annotations

import numbers
from decimal import Decimal
from decimal import InvalidOperation
from typing import Any

from . import config
from .fraction import Fraction


class ScalarField:
    """Interface shared by :data:`FLOAT_FIELD` and :data:`FRACTION_FIELD`."""

    name: str = ""
    exact: bool = False

    @property
    def zero(self) -> Any:
        raise NotImplementedError

    @property
    def one(self) -> Any:
        raise NotImplementedError

    def coerce(self, value: Any) -> Any:
        """Convert a Python number into this field's scalar type."""
        raise NotImplementedError

    def parse(self, text: str) -> Any:
        """Convert cell text into this field's scalar type."""
        raise NotImplementedError

    def is_negligible(self, value: Any) -> bool:
        raise NotImplementedError

    def magnitude(self, value: Any) -> Any:
        return abs(value)

    def format(self, value: Any) -> str:
        return str(value)

    def __repr__(self) -> str:
        return f"<{self.name} field>"


class FloatField(ScalarField):
    name = "float"
    exact = False

    @property
    def zero(self) -> float:
        return 0.0

    @property
    def one(self) -> float:
        return 1.0

    def coerce(self, value: Any) -> float:
        if isinstance(value, Fraction):
            return value.to_float()
        if isinstance(value, numbers.Real) and not isinstance(value, bool):
            return float(value)
        raise TypeError(f"Cannot use {type(value).__name__} as a float entry")

    def parse(self, text: str) -> float:
        # Strict: a typo in a float cell is an error, not a silent zero.
        return float(str(text).strip())

    def is_negligible(self, value: float) -> bool:
        return abs(value) < config.EPSILON


class FractionField(ScalarField):
    name = "fraction"
    exact = True

    @property
    def zero(self) -> Fraction:
        return Fraction(0)

    @property
    def one(self) -> Fraction:
        return Fraction(1)

    def coerce(self, value: Any) -> Fraction:
        if isinstance(value, Fraction):
            return value
        if isinstance(value, bool):
            raise TypeError("Cannot use bool as a fraction entry")
        if isinstance(value, numbers.Integral):
            return Fraction(int(value))
        if isinstance(value, numbers.Rational):
            return Fraction(int(value.numerator), int(value.denominator))
        if isinstance(value, numbers.Real):
            # Use the shortest decimal repr so 0.1 becomes 1/10, not the binary expansion.
            try:
                num, den = Decimal(repr(float(value))).as_integer_ratio()
            except (InvalidOperation, OverflowError, ValueError):
                raise ValueError(f"Cannot represent {value!r} as a fraction") from None
            return Fraction(num, den)
        raise TypeError(f"Cannot use {type(value).__name__} as a fraction entry")

    def parse(self, text: str) -> Fraction:
        return Fraction.parse(text)

    def is_negligible(self, value: Fraction) -> bool:
        return value.is_zero()

    def format(self, value: Fraction) -> str:
        return value.format()


FLOAT_FIELD = FloatField()
FRACTION_FIELD = FractionField()

_FIELDS = {
    "float": FLOAT_FIELD,
    "fraction": FRACTION_FIELD,
}


def get_field(name: str | ScalarField) -> ScalarField:
    """Look up a field by name ("float" or "fraction")."""
    if isinstance(name, ScalarField):
        return name
    try:
        return _FIELDS[str(name).lower()]
    except KeyError:
        raise ValueError(
            f"Unknown scalar field '{name}' (expected one of: {', '.join(_FIELDS)})"
        ) from None
