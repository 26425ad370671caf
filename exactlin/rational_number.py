#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
#
"""
Exact fractions over signed 64-bit integers.

RationalNumber keeps numerator and denominator as two integers within the range
of numpy.int64. Unlike fractions.Fraction, the arithmetic methods do NOT reduce
their results: numerator and denominator are combined by cross-multiplication
and the caller decides when to call reduce(). Every integer operation is range
checked and raises ArithmeticOverflow instead of wrapping around.

A zero denominator encodes an undefined value. Text and float conversion treat
any zero denominator as NaN.

Example:
    >>> a = RationalNumber(1, 3)
    >>> str(a.add(a))
    '6/9'
    >>> str(a.add(a).reduce())
    '2/3'
"""

import math
import numbers
import operator
from fractions import Fraction
from typing import Union

import numpy as np

from .exceptions import ArithmeticOverflow

INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)


def _checked(value: int) -> int:
    if value < INT64_MIN or value > INT64_MAX:
        raise ArithmeticOverflow(f"Integer result {value} exceeds the signed 64-bit range")
    return value


def _mul(a: int, b: int) -> int:
    return _checked(a * b)


def _add(a: int, b: int) -> int:
    return _checked(a + b)


class RationalNumber:
    """
    Fraction of two signed 64-bit integers.

    Instances are immutable values. The constructor applies a single
    canonicalization rule: a negative denominator moves its sign into the
    numerator, and a zero numerator over a non-zero denominator becomes 0/1.
    Common factors are only removed by reduce().
    """

    __slots__ = ('_numerator', '_denominator')

    def __init__(self, numerator: int = 0, denominator: int = 1):
        """
        Args:
            numerator (int): Numerator, must fit into 64 bits.
            denominator (int): Denominator, must fit into 64 bits. 0 encodes an undefined value.
        """
        numerator = _checked(operator.index(numerator))
        denominator = _checked(operator.index(denominator))
        if denominator < 0:
            numerator = _checked(-numerator)
            denominator = _checked(-denominator)
        if numerator == 0 and denominator != 0:
            denominator = 1
        self._numerator = numerator
        self._denominator = denominator

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_float(cls, value: float) -> 'RationalNumber':
        """Approximate a floating point value by a decimal fraction.

        The value is scaled by 10**k, where k is derived from the length of
        its positional decimal text (e.g. "0.00001", never "1e-05"), rounded
        to an integer and reduced. This conversion is lossy: it is exact for
        short decimals like 0.25 but gives no precision guarantee for
        arbitrary floats.

        Args:
            value (float): The value to convert. NaN maps to 0/0, +-inf to +-1/0.

        Returns:
            (RationalNumber): The reduced approximation.

        Raises:
            ArithmeticOverflow: If the scale or the scaled value exceeds 64 bits.
        """
        value = float(value)
        if math.isnan(value):
            return cls(0, 0)
        if math.isinf(value):
            return cls(1 if value > 0 else -1, 0)

        # positional text, str() switches to exponent notation below 1e-4
        scale = 10**(len(np.format_float_positional(value, trim='0')) - 1)
        if scale > INT64_MAX:
            raise ArithmeticOverflow(f"Too many decimals to convert {value} into a 64-bit fraction")
        scaled = value * scale
        if not math.isfinite(scaled) or abs(scaled) > INT64_MAX:
            raise ArithmeticOverflow(f"{value} cannot be represented as a 64-bit fraction")
        return cls(round(scaled), scale).reduce()

    @classmethod
    def value_of(cls, value: Union['RationalNumber', Fraction, int, float, str]) -> 'RationalNumber':
        """
        Factory method to create a RationalNumber from various types.

        Integers and fractions convert exactly, floats go through from_float,
        strings may be "num/den", an integer or a decimal.
        """
        if isinstance(value, RationalNumber):
            return value
        if isinstance(value, Fraction):
            return cls(value.numerator, value.denominator)
        if isinstance(value, numbers.Integral):
            return cls(int(value))
        if isinstance(value, numbers.Real):
            return cls.from_float(float(value))
        if isinstance(value, str):
            text = value.strip()
            if '/' in text:
                parts = text.split('/')
                if len(parts) != 2:
                    raise ValueError(f"Invalid fraction format: {value}")
                return cls(int(parts[0]), int(parts[1]))
            try:
                return cls(int(text))
            except ValueError:
                return cls.from_float(float(text))
        raise TypeError(f"Cannot convert {type(value)} to RationalNumber")

    # ------------------------------------------------------------------
    # Arithmetic, results are not reduced
    # ------------------------------------------------------------------

    def add(self, other) -> 'RationalNumber':
        """Add by cross-multiplication. The result is not reduced."""
        other = RationalNumber.value_of(other)
        return RationalNumber(
            _add(_mul(self._numerator, other._denominator), _mul(self._denominator, other._numerator)),
            _mul(self._denominator, other._denominator))

    def subtract(self, other) -> 'RationalNumber':
        """Subtract by cross-multiplication. The result is not reduced."""
        other = RationalNumber.value_of(other)
        return RationalNumber(
            _add(_mul(self._numerator, other._denominator), -_mul(self._denominator, other._numerator)),
            _mul(self._denominator, other._denominator))

    def multiply(self, other) -> 'RationalNumber':
        """Multiply by a fraction or an integer scalar. The result is not reduced."""
        other = RationalNumber.value_of(other)
        return RationalNumber(_mul(self._numerator, other._numerator), _mul(self._denominator, other._denominator))

    def divide(self, other) -> 'RationalNumber':
        """Divide by a fraction or an integer scalar. The result is not reduced.

        Dividing by zero does not raise: the result carries a zero
        denominator and reads as NaN.
        """
        other = RationalNumber.value_of(other)
        return RationalNumber(_mul(self._numerator, other._denominator), _mul(self._denominator, other._numerator))

    def negate(self) -> 'RationalNumber':
        return RationalNumber(_checked(-self._numerator), self._denominator)

    def inverse(self) -> 'RationalNumber':
        """Swap numerator and denominator. The inverse of zero has denominator 0."""
        return RationalNumber(self._denominator, self._numerator)

    def reduce(self) -> 'RationalNumber':
        """
        Get the fraction in lowest terms.

        Numerator and denominator are divided by the greatest common divisor
        of their absolute values. Any zero numerator gives 0/1, also for 0/0.
        For example, 10/5 reduces to 2/1 and 4/-10 to -2/5.

        Returns:
            (RationalNumber): A new, reduced fraction.
        """
        if self._numerator == 0:
            return RationalNumber(0, 1)
        divisor = math.gcd(self._numerator, self._denominator)
        return RationalNumber(self._numerator // divisor, self._denominator // divisor)

    # ------------------------------------------------------------------
    # Queries and conversion
    # ------------------------------------------------------------------

    def is_nan(self) -> bool:
        return self._denominator == 0

    def is_zero(self) -> bool:
        """True if the reduced value is 0/1."""
        return self == RationalNumber.ZERO

    def to_float(self) -> float:
        if self._denominator == 0:
            return math.nan
        return self._numerator / self._denominator

    def to_text(self) -> str:
        """Render without reducing: "NaN", "n" or "n/d"."""
        if self._denominator == 0:
            return "NaN"
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"RationalNumber({self._numerator}, {self._denominator})"

    def __eq__(self, other) -> bool:
        """Equality of the reduced forms, so 2/4 == 1/2 == -1/-2."""
        if not isinstance(other, (RationalNumber, Fraction, numbers.Integral)):
            return NotImplemented
        other = RationalNumber.value_of(other).reduce()
        mine = self.reduce()
        return mine._numerator == other._numerator and mine._denominator == other._denominator

    def __hash__(self) -> int:
        reduced = self.reduce()
        if reduced._denominator == 0:
            return hash((reduced._numerator, 0))
        return hash(Fraction(reduced._numerator, reduced._denominator))

    # Python operator overloading for convenience
    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        return RationalNumber.value_of(other).add(self)

    def __sub__(self, other):
        return self.subtract(other)

    def __rsub__(self, other):
        return RationalNumber.value_of(other).subtract(self)

    def __mul__(self, other):
        return self.multiply(other)

    def __rmul__(self, other):
        return RationalNumber.value_of(other).multiply(self)

    def __truediv__(self, other):
        return self.divide(other)

    def __rtruediv__(self, other):
        return RationalNumber.value_of(other).divide(self)

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return self.negate() if self._numerator < 0 else self


RationalNumber.ZERO = RationalNumber(0, 1)
RationalNumber.ONE = RationalNumber(1, 1)
