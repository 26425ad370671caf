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
Contains exceptions raised by exact rational arithmetic and matrix operations.

Each exception also derives from the closest builtin, so callers may catch
either the specific class or e.g. ValueError.
"""


class ExactLinError(Exception):
    """Base class of all errors raised by exactlin."""
    pass


class ShapeMismatch(ExactLinError, ValueError):
    """
    Raised when the row or column counts of matrices are incompatible with
    the requested operation, or when a grid has ragged rows.
    """
    pass


class IndexOutOfRange(ExactLinError, IndexError):
    """Raised when a row or column index lies outside of the matrix."""
    pass


class InvalidOperation(ExactLinError, ValueError):
    """
    Raised for operations that are not allowed, e.g. multiplying a row by
    zero.
    """
    pass


class ArithmeticOverflow(ExactLinError, OverflowError):
    """Raised when an integer result leaves the signed 64-bit range."""
    pass


class SingularMatrix(ExactLinError, ArithmeticError):
    """Raised in strict mode when elimination finds no non-zero pivot."""
    pass
