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
"""Exact polynomial interpolation through sample points

The coefficients of the polynomial of degree n-1 through n points are found by
solving the Vandermonde system V c = y with exact rational elimination.
"""

import logging
from collections.abc import Sized
from typing import List, Optional, Sequence

from .rational_matrix import RationalMatrix
from .rational_number import RationalNumber

LOG = logging.getLogger(__name__)


def find_polynomial(samples: Sequence[Sequence], strict: bool = False) -> Optional[List[RationalNumber]]:
    """Find the polynomial through a series of points

    Builds the Vandermonde matrix V[i][j] = x_i^j and solves it against the
    column of y values. All x values must be pairwise distinct for a unique
    solution. This is not checked: repeated x values make the system singular,
    which yields undefined coefficients (zero denominators), or raises
    SingularMatrix if strict is set.

    Example:
        coefficients = find_polynomial([(0, 1), (1, 2), (2, 5)])  # [1, 0, 1], i.e. x^2 + 1

    Args:
        samples (list of pairs):
            Points [(x0, y0), (x1, y1), ...]. Values may be RationalNumber, int,
            fractions.Fraction or anything else RationalNumber.value_of accepts.

        strict (bool):
            Raise SingularMatrix for singular systems instead of returning undefined
            coefficients.

    Returns:
        (list of RationalNumber):
        Reduced coefficients, index k holding the coefficient of x^k. None if
        a sample is not a pair or no samples were given.
    """
    samples = list(samples)
    if not _valid_samples(samples):
        return None
    size = len(samples)
    vandermonde = RationalMatrix.zeros(size, size)
    y_values = RationalMatrix.zeros(size, 1)
    for i, (x, y) in enumerate(samples):
        base = RationalNumber.value_of(x).reduce()
        y_values.set(i, 0, y)
        for j in range(size):
            vandermonde.set(i, j, _power(base, j))
    return _solve(vandermonde, y_values, strict)


def find_polynomial_from_floats(samples: Sequence[Sequence[float]],
                                strict: bool = False) -> Optional[List[RationalNumber]]:
    """Find the polynomial through a series of floating point samples

    Same as find_polynomial, but the powers x^j are computed in floating point
    and each matrix cell is converted with RationalNumber.from_float. The
    result is therefore only as exact as that conversion.
    """
    samples = list(samples)
    if not _valid_samples(samples):
        return None
    size = len(samples)
    vandermonde = RationalMatrix.zeros(size, size)
    y_values = RationalMatrix.zeros(size, 1)
    for i, (x, y) in enumerate(samples):
        y_values.set(i, 0, RationalNumber.from_float(y))
        for j in range(size):
            cell = RationalNumber.ONE if j == 0 else RationalNumber.from_float(float(x)**j)
            vandermonde.set(i, j, cell)
    return _solve(vandermonde, y_values, strict)


def evaluate_polynomial(coefficients: Sequence, x) -> RationalNumber:
    """Evaluate sum(c_k * x^k) exactly with Horner's scheme, reducing after each step."""
    x = RationalNumber.value_of(x)
    result = RationalNumber.ZERO
    for coefficient in reversed(list(coefficients)):
        result = result.multiply(x).add(coefficient).reduce()
    return result


def _valid_samples(samples) -> bool:
    if not samples:
        LOG.warning("No samples given, cannot fit a polynomial.")
        return False
    for i, sample in enumerate(samples):
        if not isinstance(sample, Sized):
            LOG.warning(f"Sample {i} is not a pair but {type(sample).__name__}, cannot fit a polynomial.")
            return False
        if len(sample) != 2:
            LOG.warning(f"Sample {i} has {len(sample)} components instead of 2, cannot fit a polynomial.")
            return False
    return True


def _power(base: RationalNumber, exponent: int) -> RationalNumber:
    # x^0 is exactly 1, also for x = 0
    result = RationalNumber.ONE
    for _ in range(exponent):
        result = result.multiply(base)
    return result


def _solve(vandermonde: RationalMatrix, y_values: RationalMatrix, strict: bool) -> List[RationalNumber]:
    LOG.debug(f"Solving {vandermonde.rows}x{vandermonde.columns} Vandermonde system")
    _, solution = vandermonde.reduced_row_echelon_form(y_values, strict=strict)
    return [solution.get(i, 0) for i in range(solution.rows)]
