###############################################################################
# Copyright (C) 2023 Oliver Michael Kamperis
# Email: olliekampo@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License along with
# this program. If not, see <https://www.gnu.org/licenses/>.

"""
Module defining an exact fraction type over the extended reals.

A fraction is a reduced numerator and denominator, both unsigned 32-bit
integers, and a sign. Besides the finite rationals it can hold NaN, positive
and negative infinity. Arithmetic is total; undefined operations such as
`0 * inf` or `inf - inf` give NaN instead of raising. Comparisons are
tri-valued, any comparison involving NaN, or between two infinities of the
same sign, is `Truth.UNKNOWN`.
"""

import enum
import fractions
import math
import sys
from typing import Union

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "Sign",
    "Truth",
    "Ordering",
    "Fraction",
    "UINT32_MAX",
    "NAN",
    "POS_INF",
    "NEG_INF",
    "ZERO",
    "ONE"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


UINT32_MAX: int = (1 << 32) - 1


@enum.unique
class Sign(enum.Enum):
    """The sign of a fraction, NaN fractions have their own sign."""

    PLUS = "+"
    MINUS = "-"
    NAN = "nan"

    def flipped(self) -> "Sign":
        """Return the opposite sign, NaN stays NaN."""
        if self is Sign.PLUS:
            return Sign.MINUS
        if self is Sign.MINUS:
            return Sign.PLUS
        return self


@enum.unique
class Truth(enum.Enum):
    """Result of a tri-valued comparison."""

    TRUE = "true"
    FALSE = "false"
    UNKNOWN = "unknown"

    def __bool__(self) -> bool:
        return self is Truth.TRUE

    def negated(self) -> "Truth":
        """Return the logical negation, unknown stays unknown."""
        if self is Truth.TRUE:
            return Truth.FALSE
        if self is Truth.FALSE:
            return Truth.TRUE
        return self


@enum.unique
class Ordering(enum.Enum):
    """Result of a three-way comparison under a partial order."""

    LESS = -1
    EQUAL = 0
    GREATER = 1
    INCOMPARABLE = None


def _check_component(name: str, value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"The {name} must be an integer, got {value!r}.")
    if not 0 <= value <= UINT32_MAX:
        raise ValueError(f"The {name} must be in [0, {UINT32_MAX}], "
                         f"got {value}.")
    return value


class Fraction:
    """
    An exact, reduced fraction with NaN and signed infinity sentinels.

    Fractions are immutable. Construction normalises in this order:
    a NaN sign gives NaN; a zero denominator gives infinity of the given
    sign; a zero numerator gives the canonical zero (positive, with both
    components zero); anything else is reduced by the greatest common
    divisor of its components.

    Python equality (`==`) compares the canonical components, so it is
    consistent with hashing and NaN equals itself. The tri-valued methods
    `eq`, `lt` and so on follow the extended-real order instead, and the
    rich comparisons `<`, `<=`, `>`, `>=` are False whenever that order
    cannot decide (as for floating point NaN).

    Results that do not fit in 32 bits are rounded. A magnitude above
    `UINT32_MAX` gives a signed infinity, one below `1 / UINT32_MAX` gives
    zero, and anything between becomes the closest 32-bit fraction.

    Example Usage
    -------------
    ```
    >>> Fraction(6, 24)
    Fraction(1, 4, Sign.PLUS)
    >>> Fraction(1, 3) + Fraction(7, 4)
    Fraction(25, 12, Sign.PLUS)
    >>> Fraction(1, 3) / ZERO
    Fraction(1, 0, Sign.PLUS)
    >>> NAN.lt(ONE)
    <Truth.UNKNOWN: 'unknown'>
    ```
    """

    __slots__ = {
        "__numerator": "The reduced numerator.",
        "__denominator": "The reduced denominator, zero for sentinels.",
        "__sign": "The sign of the fraction."
    }

    def __init__(
        self,
        numerator: int = 0,
        denominator: int = 1,
        sign: Sign = Sign.PLUS
    ) -> None:
        """
        Create a new fraction.

        Parameters
        ----------
        `numerator: int = 0` - Unsigned 32-bit numerator.

        `denominator: int = 1` - Unsigned 32-bit denominator, zero makes an
        infinity.

        `sign: Sign = Sign.PLUS` - The sign, `Sign.NAN` makes NaN.

        Raises
        ------
        `ValueError` - If a component is not an integer in the unsigned
        32-bit range, or the sign is not a `Sign`.
        """
        numerator = _check_component("numerator", numerator)
        denominator = _check_component("denominator", denominator)
        if not isinstance(sign, Sign):
            raise ValueError(f"Expected a Sign, got {sign!r}.")
        if sign is Sign.NAN:
            numerator, denominator = 0, 0
        elif denominator == 0:
            numerator = 1
        elif numerator == 0:
            denominator, sign = 0, Sign.PLUS
        else:
            divisor = math.gcd(numerator, denominator)
            numerator //= divisor
            denominator //= divisor
        self.__numerator: int = numerator
        self.__denominator: int = denominator
        self.__sign: Sign = sign

    @classmethod
    def make(
        cls,
        numerator: int,
        denominator: int,
        sign: Sign = Sign.PLUS
    ) -> "Fraction":
        """Create a normalised fraction, see the constructor."""
        return cls(numerator, denominator, sign)

    @classmethod
    def from_int(cls, value: int) -> "Fraction":
        """
        Create a fraction equal to an integer.

        Raises
        ------
        `ValueError` - If the magnitude does not fit in 32 bits.
        """
        return cls(abs(value), 1, Sign.MINUS if value < 0 else Sign.PLUS)

    @classmethod
    def _saturated(cls, numerator: int, denominator: int,
                   sign: Sign) -> "Fraction":
        """Create a fraction from unbounded non-negative components."""
        if numerator == 0:
            return ZERO
        divisor = math.gcd(numerator, denominator)
        numerator //= divisor
        denominator //= divisor
        if numerator <= UINT32_MAX and denominator <= UINT32_MAX:
            return cls(numerator, denominator, sign)
        if numerator > UINT32_MAX * denominator:
            return cls(1, 0, sign)
        if numerator * UINT32_MAX < denominator:
            return ZERO
        # In range but not representable, take the closest 32-bit fraction.
        # Bounding the denominator of a value at most one bounds both parts.
        if numerator < denominator:
            nearest = fractions.Fraction(
                numerator, denominator).limit_denominator(UINT32_MAX)
            numerator, denominator = nearest.numerator, nearest.denominator
        else:
            nearest = fractions.Fraction(
                denominator, numerator).limit_denominator(UINT32_MAX)
            numerator, denominator = nearest.denominator, nearest.numerator
        if numerator == 0:
            return ZERO
        if denominator == 0:
            return cls(1, 0, sign)
        return cls(numerator, denominator, sign)

    @property
    def numerator(self) -> int:
        """The reduced numerator."""
        return self.__numerator

    @property
    def denominator(self) -> int:
        """The reduced denominator, zero for zero, infinities and NaN."""
        return self.__denominator

    @property
    def sign(self) -> Sign:
        """The sign of the fraction."""
        return self.__sign

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}({self.__numerator}, "
                f"{self.__denominator}, {self.__sign})")

    def __str__(self) -> str:
        if self.is_nan():
            return "NaN"
        if self.is_zero():
            return "0"
        prefix = "-" if self.__sign is Sign.MINUS else ""
        if self.is_inf():
            return f"{prefix or '+'}inf"
        if self.__denominator == 1:
            return f"{prefix}{self.__numerator}"
        return f"{prefix}{self.__numerator}/{self.__denominator}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fraction):
            return NotImplemented
        return (self.__numerator == other.__numerator
                and self.__denominator == other.__denominator
                and self.__sign is other.__sign)

    def __hash__(self) -> int:
        return hash((self.__numerator, self.__denominator, self.__sign))

    def is_nan(self) -> bool:
        """Return whether the fraction is NaN."""
        return self.__sign is Sign.NAN

    def is_zero(self) -> bool:
        """Return whether the fraction is zero."""
        return self.__sign is not Sign.NAN and self.__numerator == 0

    def is_inf(self) -> bool:
        """Return whether the fraction is an infinity of either sign."""
        return (self.__sign is not Sign.NAN and self.__denominator == 0
                and self.__numerator != 0)

    def is_pos_inf(self) -> bool:
        """Return whether the fraction is positive infinity."""
        return self.is_inf() and self.__sign is Sign.PLUS

    def is_neg_inf(self) -> bool:
        """Return whether the fraction is negative infinity."""
        return self.is_inf() and self.__sign is Sign.MINUS

    def is_finite(self) -> bool:
        """Return whether the fraction is zero or a finite non-zero value."""
        return not self.is_nan() and not self.is_inf()

    def is_one(self) -> bool:
        """Return whether the fraction is positive one."""
        return (self.__numerator == 1 and self.__denominator == 1
                and self.__sign is Sign.PLUS)

    def is_positive(self) -> bool:
        """Return whether the fraction is greater than zero."""
        return self.__sign is Sign.PLUS and not self.is_zero()

    def to_double(self) -> float:
        """
        Return the nearest float.

        NaN and negative infinity map to the most negative finite float and
        positive infinity to the most positive.
        """
        if self.is_nan() or self.is_neg_inf():
            return -sys.float_info.max
        if self.is_pos_inf():
            return sys.float_info.max
        if self.is_zero():
            return 0.0
        if self.is_one():
            return 1.0
        value = self.__numerator / self.__denominator
        return -value if self.__sign is Sign.MINUS else value

    def __float__(self) -> float:
        return self.to_double()

    def _signed_numerator(self) -> int:
        return -self.__numerator if self.__sign is Sign.MINUS else self.__numerator

    @staticmethod
    def _product_sign(first: "Fraction", second: "Fraction") -> Sign:
        if first.__sign is second.__sign:
            return Sign.PLUS
        return Sign.MINUS

    def neg(self) -> "Fraction":
        """Return the negation, NaN and zero are their own negation."""
        if self.is_nan() or self.is_zero():
            return self
        return Fraction(self.__numerator, self.__denominator,
                        self.__sign.flipped())

    def inv(self) -> "Fraction":
        """
        Return the reciprocal.

        The reciprocal of zero is positive infinity and the reciprocal of an
        infinity is zero.
        """
        if self.is_nan():
            return self
        if self.is_zero():
            return POS_INF
        if self.is_inf():
            return ZERO
        return Fraction(self.__denominator, self.__numerator, self.__sign)

    def add(self, other: "Fraction") -> "Fraction":
        """
        Return the sum of two fractions.

        Infinities of opposite signs sum to NaN, otherwise an infinity
        absorbs any finite value.
        """
        if self.is_nan() or other.is_nan():
            return NAN
        if self.is_inf() and other.is_inf():
            return self if self.__sign is other.__sign else NAN
        if self.is_inf():
            return self
        if other.is_inf():
            return other
        if self.is_zero():
            return other
        if other.is_zero():
            return self
        common = math.gcd(self.__denominator, other.__denominator)
        numerator = (self._signed_numerator() * (other.__denominator // common)
                     + other._signed_numerator() * (self.__denominator // common))
        denominator = (self.__denominator // common) * other.__denominator
        sign = Sign.MINUS if numerator < 0 else Sign.PLUS
        return Fraction._saturated(abs(numerator), denominator, sign)

    def sub(self, other: "Fraction") -> "Fraction":
        """Return the difference of two fractions."""
        return self.add(other.neg())

    def mul(self, other: "Fraction") -> "Fraction":
        """
        Return the product of two fractions.

        Zero times an infinity is NaN.
        """
        if self.is_nan() or other.is_nan():
            return NAN
        if ((self.is_zero() and other.is_inf())
                or (self.is_inf() and other.is_zero())):
            return NAN
        if self.is_zero() or other.is_zero():
            return ZERO
        sign = self._product_sign(self, other)
        if self.is_inf() or other.is_inf():
            return Fraction(1, 0, sign)
        # Cross-reduce first so the products stay as small as possible.
        first_divisor = math.gcd(self.__numerator, other.__denominator)
        second_divisor = math.gcd(other.__numerator, self.__denominator)
        numerator = ((self.__numerator // first_divisor)
                     * (other.__numerator // second_divisor))
        denominator = ((self.__denominator // second_divisor)
                       * (other.__denominator // first_divisor))
        return Fraction._saturated(numerator, denominator, sign)

    def div(self, other: "Fraction") -> "Fraction":
        """
        Return the quotient of two fractions.

        A non-zero value over zero is an infinity of the dividend's sign,
        zero over zero and infinity over infinity are NaN, and any finite
        value over an infinity is zero.
        """
        if self.is_nan() or other.is_nan():
            return NAN
        if other.is_zero():
            if self.is_zero():
                return NAN
            return Fraction(1, 0, self.__sign)
        if self.is_inf() and other.is_inf():
            return NAN
        if other.is_inf():
            return ZERO
        return self.mul(other.inv())

    def scale_by_int(self, factor: int) -> "Fraction":
        """
        Return the fraction multiplied by an integer.

        Scaling an infinity by zero is NaN.
        """
        if self.is_nan():
            return NAN
        if factor == 0:
            return NAN if self.is_inf() else ZERO
        sign = self.__sign if factor > 0 else self.__sign.flipped()
        if self.is_zero():
            return ZERO
        if self.is_inf():
            return Fraction(1, 0, sign)
        return Fraction._saturated(self.__numerator * abs(factor),
                                   self.__denominator, sign)

    def compare(self, other: "Fraction") -> Ordering:
        """
        Compare two fractions under the extended-real order.

        Returns `Ordering.INCOMPARABLE` if either is NaN or both are
        infinities of the same sign.
        """
        if self.is_nan() or other.is_nan():
            return Ordering.INCOMPARABLE
        if self.is_inf() and other.is_inf():
            if self.__sign is other.__sign:
                return Ordering.INCOMPARABLE
            return (Ordering.GREATER if self.__sign is Sign.PLUS
                    else Ordering.LESS)
        if self.is_inf():
            return Ordering.GREATER if self.__sign is Sign.PLUS else Ordering.LESS
        if other.is_inf():
            return Ordering.LESS if other.__sign is Sign.PLUS else Ordering.GREATER
        # Zero is stored with a zero denominator, compare it as 0/1.
        self_denominator = self.__denominator or 1
        other_denominator = other.__denominator or 1
        common = math.gcd(self_denominator, other_denominator)
        left = self._signed_numerator() * (other_denominator // common)
        right = other._signed_numerator() * (self_denominator // common)
        if left < right:
            return Ordering.LESS
        if left > right:
            return Ordering.GREATER
        return Ordering.EQUAL

    def eq(self, other: "Fraction") -> Truth:
        """Return whether two fractions are equal, or unknown."""
        order = self.compare(other)
        if order is Ordering.INCOMPARABLE:
            return Truth.UNKNOWN
        return Truth.TRUE if order is Ordering.EQUAL else Truth.FALSE

    def ne(self, other: "Fraction") -> Truth:
        """Return whether two fractions differ, or unknown."""
        return self.eq(other).negated()

    def lt(self, other: "Fraction") -> Truth:
        """Return whether this fraction is less than the other, or unknown."""
        order = self.compare(other)
        if order is Ordering.INCOMPARABLE:
            return Truth.UNKNOWN
        return Truth.TRUE if order is Ordering.LESS else Truth.FALSE

    def gt(self, other: "Fraction") -> Truth:
        """Return whether this fraction is greater than the other, or unknown."""
        return other.lt(self)

    def le(self, other: "Fraction") -> Truth:
        """Return whether this fraction is at most the other, or unknown."""
        return self.gt(other).negated()

    def ge(self, other: "Fraction") -> Truth:
        """Return whether this fraction is at least the other, or unknown."""
        return self.lt(other).negated()

    @staticmethod
    def _coerce(value: object) -> Union["Fraction", None]:
        if isinstance(value, Fraction):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return Fraction.from_int(value)
        return None

    def __add__(self, other: object) -> "Fraction":
        other_ = self._coerce(other)
        return NotImplemented if other_ is None else self.add(other_)

    def __radd__(self, other: object) -> "Fraction":
        other_ = self._coerce(other)
        return NotImplemented if other_ is None else other_.add(self)

    def __sub__(self, other: object) -> "Fraction":
        other_ = self._coerce(other)
        return NotImplemented if other_ is None else self.sub(other_)

    def __rsub__(self, other: object) -> "Fraction":
        other_ = self._coerce(other)
        return NotImplemented if other_ is None else other_.sub(self)

    def __mul__(self, other: object) -> "Fraction":
        other_ = self._coerce(other)
        return NotImplemented if other_ is None else self.mul(other_)

    def __rmul__(self, other: object) -> "Fraction":
        other_ = self._coerce(other)
        return NotImplemented if other_ is None else other_.mul(self)

    def __truediv__(self, other: object) -> "Fraction":
        other_ = self._coerce(other)
        return NotImplemented if other_ is None else self.div(other_)

    def __rtruediv__(self, other: object) -> "Fraction":
        other_ = self._coerce(other)
        return NotImplemented if other_ is None else other_.div(self)

    def __neg__(self) -> "Fraction":
        return self.neg()

    def __pos__(self) -> "Fraction":
        return self

    def __lt__(self, other: object) -> bool:
        other_ = self._coerce(other)
        return NotImplemented if other_ is None else bool(self.lt(other_))

    def __le__(self, other: object) -> bool:
        other_ = self._coerce(other)
        return NotImplemented if other_ is None else bool(self.le(other_))

    def __gt__(self, other: object) -> bool:
        other_ = self._coerce(other)
        return NotImplemented if other_ is None else bool(self.gt(other_))

    def __ge__(self, other: object) -> bool:
        other_ = self._coerce(other)
        return NotImplemented if other_ is None else bool(self.ge(other_))


NAN = Fraction(0, 0, Sign.NAN)
POS_INF = Fraction(1, 0, Sign.PLUS)
NEG_INF = Fraction(1, 0, Sign.MINUS)
ZERO = Fraction(0, 1, Sign.PLUS)
ONE = Fraction(1, 1, Sign.PLUS)
