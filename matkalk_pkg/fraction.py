"""Exact rational numbers for the fraction calculator.

A :class:`Fraction` is always stored in lowest terms with a positive
denominator, and zero is always ``0/1``. Instances are immutable: every
operator returns a fresh, normalised value.

The text parser is deliberately lenient. Cell text that cannot be read
becomes zero instead of raising, so an empty or half-typed grid cell never
aborts a whole computation::

    >>> Fraction.parse("4/8")
    Fraction(1, 2)
    >>> Fraction.parse("1.25")
    Fraction(5, 4)
    >>> Fraction.parse("abc")
    Fraction(0, 1)

The sign of a negative decimal covers its fractional digits too, so
``"-1.5"`` reads as ``-3/2`` (not ``-1 + 5/10``)::

    >>> Fraction.parse("-1.5")
    Fraction(-3, 2)
"""

from __future__ import annotations

from math import gcd

from .types import DivisionByZeroError


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Fraction:
    """Exact rational value ``numerator/denominator``."""

    __slots__ = ("_num", "_den")

    def __init__(self, numerator: int = 0, denominator: int = 1) -> None:
        if not (_is_int(numerator) and _is_int(denominator)):
            raise TypeError(
                f"Fraction needs integer parts, got {type(numerator).__name__}"
                f" and {type(denominator).__name__}"
            )
        if denominator == 0:
            raise DivisionByZeroError("Fraction: denominator is zero.")
        if denominator < 0:
            numerator = -numerator
            denominator = -denominator
        g = gcd(numerator, denominator)
        if g > 1:
            numerator //= g
            denominator //= g
        self._num = numerator
        self._den = denominator

    @property
    def numerator(self) -> int:
        return self._num

    @property
    def denominator(self) -> int:
        return self._den

    @staticmethod
    def _coerce(value: object) -> Fraction | None:
        if isinstance(value, Fraction):
            return value
        if _is_int(value):
            return Fraction(value)
        return None

    # Arithmetic

    def __add__(self, other: object) -> Fraction:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Fraction(self._num * o._den + o._num * self._den, self._den * o._den)

    __radd__ = __add__

    def __sub__(self, other: object) -> Fraction:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Fraction(self._num * o._den - o._num * self._den, self._den * o._den)

    def __rsub__(self, other: object) -> Fraction:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o - self

    def __mul__(self, other: object) -> Fraction:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Fraction(self._num * o._num, self._den * o._den)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Fraction:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        if o._num == 0:
            raise DivisionByZeroError("Fraction: division by zero.")
        return Fraction(self._num * o._den, self._den * o._num)

    def __rtruediv__(self, other: object) -> Fraction:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o / self

    def __neg__(self) -> Fraction:
        return Fraction(-self._num, self._den)

    def __pos__(self) -> Fraction:
        return self

    def __abs__(self) -> Fraction:
        return Fraction(abs(self._num), self._den)

    def abs(self) -> Fraction:
        return abs(self)

    # Comparison: denominators are positive, so the sign of the
    # difference's numerator orders the operands.

    def __eq__(self, other: object) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._num == o._num and self._den == o._den

    def __hash__(self) -> int:
        # Integral values hash like the int they compare equal to
        if self._den == 1:
            return hash(self._num)
        return hash((self._num, self._den))

    def __gt__(self, other: object) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return (self - o)._num > 0

    def __lt__(self, other: object) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o > self

    def __ge__(self, other: object) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return not o > self

    def __le__(self, other: object) -> bool:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return not self > o

    def is_zero(self) -> bool:
        return self._num == 0

    def __bool__(self) -> bool:
        return self._num != 0

    # Conversion

    def to_float(self) -> float:
        return self._num / self._den

    def __float__(self) -> float:
        return self.to_float()

    @classmethod
    def parse(cls, text: str) -> Fraction:
        """Read ``"a"``, ``"a/b"`` or ``"a.b"`` into a Fraction.

        Spaces and tabs anywhere in the text are ignored. Malformed text
        yields zero rather than an error. A well-formed ``"a/0"`` still
        raises :class:`DivisionByZeroError` because the value itself is
        undefined.
        """
        t = "".join(ch for ch in str(text) if ch not in " \t")
        if not t:
            return cls(0)

        if "/" in t:
            num_text, den_text = t.split("/", 1)
            try:
                num = int(num_text)
                den = int(den_text)
            except ValueError:
                return cls(0)
            return cls(num, den)

        if "." in t:
            int_part, frac_part = t.split(".", 1)
            try:
                whole = int(int_part)
            except ValueError:
                whole = 0
            frac = cls(0)
            if frac_part.isascii() and frac_part.isdigit():
                frac = cls(int(frac_part), 10 ** len(frac_part))
            if int_part.startswith("-"):
                return cls(whole) - frac
            return cls(whole) + frac

        try:
            return cls(int(t))
        except ValueError:
            return cls(0)

    def format(self) -> str:
        if self._den == 1:
            return str(self._num)
        return f"{self._num}/{self._den}"

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Fraction({self._num}, {self._den})"
