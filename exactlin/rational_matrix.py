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
Dense matrices of exact fractions.

RationalMatrix stores RationalNumber values in a numpy object array. Elementary
row operations mutate the matrix they are called on, all other operations
return new matrices. Elimination algorithms (reduce, reduced_row_echelon_form,
determinant, inverse) work on private copies and never touch their inputs.

Because RationalNumber arithmetic does not reduce, the elimination loops
reduce every entry after each row update. This keeps numerators and
denominators small enough for 64-bit integers.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy import sparse

from .exceptions import IndexOutOfRange, InvalidOperation, ShapeMismatch, SingularMatrix
from .rational_number import RationalNumber

LOG = logging.getLogger(__name__)


class RationalMatrix:
    """
    Matrix with RationalNumber entries.

    Values handed to the constructor, set() or the arithmetic methods are
    converted with RationalNumber.value_of, so integers and fractions.Fraction
    are taken exactly and floats are approximated.

    Example:
        >>> a = RationalMatrix([[2, 1], [1, 1]])
        >>> print(a.inverse())
        [ 1, -1]
        [-1,  2]
    """

    def __init__(self, grid: Sequence[Sequence]):
        """
        Create a matrix from a 2-D grid (copied).

        Args:
            grid (list of lists):
                Rows of RationalNumber, int, Fraction or float values. All rows must have
                the same length.

        Raises:
            ShapeMismatch: If the grid is empty or ragged.
        """
        rows = [list(row) for row in grid]
        if not rows or not rows[0]:
            raise ShapeMismatch("A matrix needs at least one row and one column")
        width = len(rows[0])
        data = np.empty((len(rows), width), dtype=object)
        for i, row in enumerate(rows):
            if len(row) != width:
                raise ShapeMismatch("All rows must have the same length")
            for j, value in enumerate(row):
                data[i, j] = RationalNumber.value_of(value)
        self._data = data

    @classmethod
    def _from_array(cls, data: np.ndarray) -> 'RationalMatrix':
        matrix = cls.__new__(cls)
        matrix._data = data
        return matrix

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_floats(cls, grid: Sequence[Sequence[float]]) -> 'RationalMatrix':
        """Create a matrix from floating point values, converting each cell with
        the lossy RationalNumber.from_float."""
        return cls([[RationalNumber.from_float(value) for value in row] for row in grid])

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> 'RationalMatrix':
        """
        Create a RationalMatrix from a numpy array.

        Integer arrays are taken exactly, float arrays go through
        RationalNumber.from_float.

        Args:
            array: Two-dimensional numpy array

        Returns:
            RationalMatrix with the same values
        """
        array = np.asarray(array)
        if array.ndim != 2:
            raise ShapeMismatch(f"Expected a two-dimensional array, got {array.ndim} dimension(s)")
        return cls(array.tolist())

    @classmethod
    def from_sparse(cls, sparse_matrix: sparse.spmatrix) -> 'RationalMatrix':
        """Create a (dense) RationalMatrix from a scipy sparse matrix."""
        if not sparse.issparse(sparse_matrix):
            raise TypeError(f"Expected a scipy sparse matrix, got {type(sparse_matrix)}")
        return cls.from_numpy(sparse_matrix.toarray())

    @classmethod
    def zeros(cls, rows: int, columns: int) -> 'RationalMatrix':
        """Create a matrix of the given size filled with 0/1."""
        return cls.filled(rows, columns, RationalNumber.ZERO)

    @classmethod
    def filled(cls, rows: int, columns: int, value) -> 'RationalMatrix':
        if rows < 1 or columns < 1:
            raise ShapeMismatch(f"Invalid matrix size {rows}x{columns}")
        return cls._from_array(np.full((rows, columns), RationalNumber.value_of(value), dtype=object))

    @classmethod
    def identity(cls, size: int) -> 'RationalMatrix':
        """Create the size x size identity matrix."""
        matrix = cls.zeros(size, size)
        for i in range(size):
            matrix._data[i, i] = RationalNumber.ONE
        return matrix

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def columns(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    def get(self, row: int, col: int) -> RationalNumber:
        """Return the reduced value at (row, col). Stored values stay as they are."""
        return self._data[row, col].reduce()

    def set(self, row: int, col: int, value) -> None:
        self._data[row, col] = RationalNumber.value_of(value)

    def get_row(self, row: int) -> List[RationalNumber]:
        return [self.get(row, col) for col in range(self.columns)]

    def get_column(self, col: int) -> List[RationalNumber]:
        return [self.get(row, col) for row in range(self.rows)]

    def is_square(self) -> bool:
        return self.rows == self.columns

    def is_symmetric(self) -> bool:
        """True if the matrix equals its transpose."""
        if not self.is_square():
            return False
        return self.transpose() == self

    def is_skew_symmetric(self) -> bool:
        """True if the negated transpose equals the matrix."""
        if not self.is_square():
            return False
        return self.transpose().scale(-1) == self

    def copy(self) -> 'RationalMatrix':
        # entries are immutable, a shallow copy of the array is enough
        return RationalMatrix._from_array(self._data.copy())

    def to_numpy(self, as_float: bool = False) -> np.ndarray:
        """
        Convert to numpy array.

        Args:
            as_float: If True, convert to float array (NaN for undefined entries);
                if False, return an object array with reduced RationalNumbers

        Returns:
            Numpy array representation
        """
        if as_float:
            result = np.zeros(self.shape, dtype=float)
            for i in range(self.rows):
                for j in range(self.columns):
                    result[i, j] = self._data[i, j].to_float()
        else:
            result = np.empty(self.shape, dtype=object)
            for i in range(self.rows):
                for j in range(self.columns):
                    result[i, j] = self.get(i, j)
        return result

    # ------------------------------------------------------------------
    # Elementary row operations (in place)
    # ------------------------------------------------------------------

    def swap_rows(self, row1: int, row2: int) -> None:
        self._data[[row1, row2]] = self._data[[row2, row1]]

    def multiply_row(self, row: int, value) -> None:
        """
        Multiply a row by a value. The value must not be 0.

        Raises:
            InvalidOperation: If value equals zero.
        """
        value = RationalNumber.value_of(value)
        if value.is_zero():
            raise InvalidOperation("Cannot multiply row by 0")
        for col in range(self.columns):
            self._data[row, col] = self._data[row, col].multiply(value)

    def add_rows(self, target: int, source: int, value) -> None:
        """Add value times the source row to the target row. A value of 0 does nothing."""
        value = RationalNumber.value_of(value)
        for col in range(self.columns):
            self._data[target, col] = self._data[target, col].add(self._data[source, col].multiply(value))

    def simplify(self) -> None:
        """Reduce every entry in place."""
        for i in range(self.rows):
            self._reduce_row(i)

    def _reduce_row(self, row: int) -> None:
        for col in range(self.columns):
            self._data[row, col] = self._data[row, col].reduce()

    # ------------------------------------------------------------------
    # Matrix arithmetic
    # ------------------------------------------------------------------

    def scale(self, value) -> 'RationalMatrix':
        """Multiply every entry by value, returning a new matrix."""
        value = RationalNumber.value_of(value)
        result = self.copy()
        for i in range(self.rows):
            for j in range(self.columns):
                result._data[i, j] = self._data[i, j].multiply(value)
        return result

    def add(self, other: 'RationalMatrix') -> 'RationalMatrix':
        """
        Adds two matrices, and returns a new matrix.
        Matrices must be of the same size
        """
        if self.shape != other.shape:
            raise ShapeMismatch(f"Cannot add matrices of different sizes: {self.shape} and {other.shape}")
        result = self.copy()
        for i in range(self.rows):
            for j in range(self.columns):
                result._data[i, j] = self._data[i, j].add(other._data[i, j])
        return result

    def subtract(self, other: 'RationalMatrix') -> 'RationalMatrix':
        """
        Subtracts two matrices, and returns a new matrix.
        Matrices must be of the same size
        """
        if self.shape != other.shape:
            raise ShapeMismatch(f"Cannot subtract matrices of different sizes: {self.shape} and {other.shape}")
        result = self.copy()
        for i in range(self.rows):
            for j in range(self.columns):
                result._data[i, j] = self._data[i, j].subtract(other._data[i, j])
        return result

    def multiply(self, other: 'RationalMatrix') -> 'RationalMatrix':
        """
        Multiply this matrix by another matrix: self * other

        The running sum of each entry is reduced after every term.

        Args:
            other: Matrix to multiply by, must have as many rows as self has columns

        Returns:
            Result of matrix multiplication
        """
        if self.columns != other.rows:
            raise ShapeMismatch(f"Cannot multiply matrices of non compatible sizes: "
                                f"{self.rows}x{self.columns} * {other.rows}x{other.columns}")
        result = RationalMatrix.zeros(self.rows, other.columns)
        for i in range(self.rows):
            for j in range(other.columns):
                value = RationalNumber.ZERO
                for k in range(self.columns):
                    value = value.add(self._data[i, k].multiply(other._data[k, j])).reduce()
                result._data[i, j] = value
        return result

    def transpose(self) -> 'RationalMatrix':
        return RationalMatrix._from_array(self._data.T.copy())

    def remove_row(self, row: int) -> 'RationalMatrix':
        """
        Return a new matrix without the given row.

        Raises:
            IndexOutOfRange: If row is not a valid row index.
        """
        if row < 0 or row >= self.rows:
            raise IndexOutOfRange(f"Invalid row number {row} for a matrix with {self.rows} rows")
        return RationalMatrix._from_array(np.delete(self._data, row, axis=0))

    def remove_column(self, col: int) -> 'RationalMatrix':
        """Return a new matrix without the given column (via remove_row on the transpose)."""
        if col < 0 or col >= self.columns:
            raise IndexOutOfRange(f"Invalid column number {col} for a matrix with {self.columns} columns")
        return self.transpose().remove_row(col).transpose()

    def exchange_column(self, col: int, column_vector: 'RationalMatrix') -> 'RationalMatrix':
        """
        Return a copy in which one column is replaced by a column vector.

        Args:
            col (int):
                Index of the column to replace.

            column_vector (RationalMatrix):
                Single-column matrix with as many rows as this matrix.

        Returns:
            (RationalMatrix):
            The new matrix.
        """
        if col < 0 or col >= self.columns:
            raise IndexOutOfRange(f"Invalid column number {col} for a matrix with {self.columns} columns")
        if column_vector is None:
            raise InvalidOperation("No column vector provided")
        if column_vector.columns != 1 or column_vector.rows != self.rows:
            raise ShapeMismatch(f"Expected a {self.rows}x1 column vector, got {column_vector.rows}x{column_vector.columns}")
        result = self.copy()
        result._data[:, col] = column_vector._data[:, 0]
        return result

    # ------------------------------------------------------------------
    # Elimination
    # ------------------------------------------------------------------

    def reduce(self,
               augmented: Optional['RationalMatrix'] = None,
               strict: bool = False) -> Tuple['RationalMatrix', Optional['RationalMatrix']]:
        """Reduce the matrix to row echelon form with unit pivots.

        The same row operations are applied to the augmented matrix. Zero
        pivots are first replaced by swapping in the first lower row with a
        non-zero entry in the pivot column. Entries below each pivot are then
        eliminated column by column, and finally every pivot row is divided
        by its pivot.

        If a pivot is still zero, the default behaviour is to carry on: the
        result then contains undefined entries (zero denominators). An
        undefined pivot such as -1/0 has the normalization factor 0, so this
        path raises InvalidOperation, even for some invertible matrices. With
        strict=True, the pivot search is repeated before each column is
        eliminated and SingularMatrix is raised when no pivot exists.

        Neither this matrix nor the augmented matrix are modified.

        Args:
            augmented (RationalMatrix):
                Optional matrix with the same number of rows, e.g. a right hand side.
                Defaults to a zero column.

            strict (bool):
                Raise SingularMatrix instead of producing undefined entries.

        Returns:
            (tuple):
            The reduced matrix and the transformed augmented matrix, or None as
            second element if no augmented matrix was given.
        """
        matrix = self.copy()
        other = augmented.copy() if augmented is not None else RationalMatrix.zeros(self.rows, 1)
        if matrix.rows != other.rows:
            raise ShapeMismatch(f"Cannot reduce matrices of different row sizes: {matrix.rows} and {other.rows}")

        diagonal = min(matrix.rows, matrix.columns)
        for i in range(diagonal):
            if matrix._data[i, i].is_zero():
                for j in range(i + 1, matrix.rows):
                    if not matrix._data[j, i].is_zero():
                        LOG.debug(f"Swapping rows {i} and {j} to get a non-zero pivot")
                        matrix.swap_rows(i, j)
                        other.swap_rows(i, j)
                        break

        for pivot in range(diagonal):
            if strict:
                _ensure_pivot(matrix, other, pivot)
            for row in range(pivot + 1, matrix.rows):
                factor = matrix._data[row, pivot].divide(matrix._data[pivot, pivot]).multiply(-1).reduce()
                matrix.add_rows(row, pivot, factor)
                other.add_rows(row, pivot, factor)
                matrix.simplify()
                other.simplify()

        for i in range(diagonal):
            if matrix._data[i, i].is_zero():
                LOG.warning(f"Zero pivot in row {i}, the reduced matrix contains undefined entries")
            factor = RationalNumber.ONE.divide(matrix._data[i, i])
            matrix.multiply_row(i, factor)
            other.multiply_row(i, factor)
            matrix.simplify()
            other.simplify()

        return matrix, (other if augmented is not None else None)

    def reduced_row_echelon_form(self,
                                 augmented: Optional['RationalMatrix'] = None,
                                 strict: bool = False) -> Tuple['RationalMatrix', Optional['RationalMatrix']]:
        """
        Reduce the matrix to reduced row echelon form.

        Runs reduce() and then eliminates the entries above each pivot, from
        the last pivot row upwards. Same arguments and return value as reduce().
        """
        other = augmented if augmented is not None else RationalMatrix.zeros(self.rows, 1)
        matrix, other = self.reduce(other, strict=strict)

        for pivot in reversed(range(min(matrix.rows, matrix.columns))):
            for row in range(pivot):
                factor = matrix._data[row, pivot].multiply(-1).reduce()
                matrix.add_rows(row, pivot, factor)
                other.add_rows(row, pivot, factor)
                matrix.simplify()
                other.simplify()

        matrix.simplify()
        other.simplify()
        return matrix, (other if augmented is not None else None)

    def solve(self, rhs: 'RationalMatrix', strict: bool = False) -> 'RationalMatrix':
        """Solve self * x = rhs, returning x (the transformed right hand side)."""
        return self.reduced_row_echelon_form(rhs, strict=strict)[1]

    def determinant(self) -> RationalNumber:
        """
        Returns the determinant of the matrix

        Computed by its own elimination to upper triangular form. If a column
        has no non-zero pivot, the determinant is 0.

        Returns:
            (RationalNumber): The reduced determinant
        """
        if not self.is_square():
            raise ShapeMismatch("Determinant is only defined for square matrices")

        matrix = self.copy()
        swaps = 0
        for i in range(matrix.rows):
            if matrix._data[i, i].is_zero():
                swapped = False
                for j in range(i + 1, matrix.rows):
                    if not matrix._data[j, i].is_zero():
                        matrix.swap_rows(i, j)
                        swaps += 1
                        swapped = True
                        break
                if not swapped:
                    return RationalNumber.ZERO

            for j in range(i + 1, matrix.rows):
                if not matrix._data[j, i].is_zero():
                    factor = matrix._data[j, i].divide(matrix._data[i, i]).reduce()
                    matrix.add_rows(j, i, factor.negate())
                    matrix._reduce_row(j)

        det = RationalNumber.ONE
        for i in range(matrix.rows):
            det = det.multiply(matrix._data[i, i]).reduce()
        # each swap flips the sign
        if swaps % 2 != 0:
            det = det.negate()
        return det

    def minor(self, row: int, col: int) -> RationalNumber:
        """M(row, col) = determinant(matrix.remove_row(row).remove_column(col))"""
        return self.remove_row(row).remove_column(col).determinant()

    def cofactor(self, row: int, col: int) -> RationalNumber:
        """C(row, col) = (-1)^(row + col) * M(row, col)"""
        return self.minor(row, col).multiply(1 if (row + col) % 2 == 0 else -1)

    def cofactor_matrix(self) -> 'RationalMatrix':
        result = self.copy()
        for i in range(self.rows):
            for j in range(self.columns):
                result._data[i, j] = self.cofactor(i, j)
        return result

    def adjugate(self) -> 'RationalMatrix':
        """Transpose of the cofactor matrix."""
        return self.cofactor_matrix().transpose()

    def inverse(self, strict: bool = False) -> 'RationalMatrix':
        """
        Invert the matrix by reducing [A | I] to [I | A^-1].

        A singular matrix gives undefined entries, or raises SingularMatrix
        with strict=True.
        """
        if not self.is_square():
            raise ShapeMismatch(f"Only square matrices can be inverted, got {self.rows}x{self.columns}")
        return self.reduced_row_echelon_form(RationalMatrix.identity(self.rows), strict=strict)[1]

    # ------------------------------------------------------------------
    # Utility methods
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        cells = [[str(self._data[i, j]) for j in range(self.columns)] for i in range(self.rows)]
        widths = [max((len(row[j]) for row in cells), default=0) for j in range(self.columns)]
        lines = []
        for row in cells:
            padded = [cell.rjust(widths[j]) for j, cell in enumerate(row)]
            lines.append("[" + ", ".join(padded) + "]\n")
        return "".join(lines)

    def __repr__(self) -> str:
        return f"RationalMatrix({[[str(value) for value in row] for row in self._data.tolist()]})"

    def __eq__(self, other) -> bool:
        """Element-wise equality of the reduced values."""
        if not isinstance(other, RationalMatrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return all(a == b for a, b in zip(self._data.flat, other._data.flat))

    __hash__ = None

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __matmul__(self, other):
        return self.multiply(other)


def _ensure_pivot(matrix: RationalMatrix, other: RationalMatrix, pivot: int) -> None:
    """Swap a non-zero entry into the pivot position or raise SingularMatrix."""
    if not matrix._data[pivot, pivot].is_zero():
        return
    for row in range(pivot + 1, matrix.rows):
        if not matrix._data[row, pivot].is_zero():
            LOG.debug(f"Swapping rows {pivot} and {row} to get a non-zero pivot")
            matrix.swap_rows(pivot, row)
            other.swap_rows(pivot, row)
            return
    raise SingularMatrix(f"No non-zero pivot in column {pivot}")
