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
"""Render polynomial coefficients as Desmos-style LaTeX"""

from typing import Sequence

from .exceptions import InvalidOperation
from .rational_number import RationalNumber


def to_desmos_latex(coefficients: Sequence, var_name: str = "x", func_name: str = "f") -> str:
    """Render a polynomial as a LaTeX function definition

    Terms are written in ascending powers. Zero coefficients are skipped,
    coefficient 1 and exponent 1 are left out, and non-integer coefficients
    become \\frac{n}{d}.

    Example:
        to_desmos_latex([1, 0, RationalNumber(-1, 2)], "x", "g")  # g\\left(x\\right)=1-\\frac{1}{2}x^2

    Args:
        coefficients (list):
            Coefficients, index k belonging to var_name^k.

        var_name (str):
            Name of the variable. Longer names are rendered with a subscript, e.g. x_{1}.

        func_name (str):
            Name of the function, rendered like var_name.

    Returns:
        (str):
        The LaTeX string.
    """
    terms = []
    for power, value in enumerate(coefficients):
        coefficient = RationalNumber.value_of(value)
        # checked before reduce(), which maps 0/0 to 0/1
        if coefficient.is_nan():
            raise InvalidOperation(f"Cannot render undefined coefficient of power {power}")
        coefficient = coefficient.reduce()
        if coefficient.is_zero():
            continue
        sign = "-" if coefficient.numerator < 0 else "+"
        magnitude = _format_magnitude(abs(coefficient.numerator), coefficient.denominator)
        if power == 0:
            body = magnitude
        else:
            body = "" if magnitude == "1" else magnitude
            body += _format_with_subscript(var_name)
            if power > 1:
                body += f"^{power}"
        if not terms:
            terms.append(body if sign == "+" else sign + body)
        else:
            terms.append(sign + body)

    head = f"{_format_with_subscript(func_name)}\\left({_format_with_subscript(var_name)}\\right)="
    return head + ("".join(terms) if terms else "0")


def _format_magnitude(numerator: int, denominator: int) -> str:
    if denominator == 1:
        return str(numerator)
    return f"\\frac{{{numerator}}}{{{denominator}}}"


def _format_with_subscript(name: str) -> str:
    # "x1" -> "x_{1}"
    if len(name) <= 1:
        return name
    return f"{name[0]}_{{{name[1:]}}}"
