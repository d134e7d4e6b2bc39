"""Dense real matrices: element access, determinant, Gauss form and arithmetic."""
from __future__ import annotations

import logging
import math
from functools import cmp_to_key
from numbers import Real
from typing import AbstractSet, Iterator, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

_DETERMINANT_METHODS = ("laplace", "elimination")


class MatrixError(ValueError):
    """Raised when an index, dimension or row length does not fit the matrix shape."""


def zero_line(line: Sequence[float]) -> bool:
    """Return ``True`` if every entry of ``line`` is exactly zero."""

    return all(value == 0 for value in line)


def _compare_lines(first: Sequence[float], second: Sequence[float]) -> int:
    # Zero lines go last, otherwise the lexicographically greater line comes first.
    first_zero = zero_line(first)
    second_zero = zero_line(second)
    if first_zero and second_zero:
        return 0
    if first_zero:
        return 1
    if second_zero:
        return -1
    for a, b in zip(first, second):
        if a > b:
            return -1
        if a < b:
            return 1
    return 0


def _rounded_entries(matrix: Matrix) -> Tuple[float, ...]:
    return tuple(round(value, 9) for line in matrix._matrix for value in line)


class Matrix:
    """A rectangular grid of floats.

    The grid is never empty and all rows always have the same length.  Indices
    are 0-based: ``0 <= i < row_count`` and ``0 <= j < column_count``.

    Every transform that changes shape or content returns a new matrix, except
    :meth:`transpose`, :meth:`sort` and the elementary row operations, which
    mutate the receiver in place.
    """

    __hash__ = None  # mutable

    def __init__(self, matrix: Sequence[Sequence[float]]):
        rows = [[float(value) for value in row] for row in matrix]
        if not rows or not rows[0]:
            raise MatrixError("Matrix must contain at least one row and one column")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise MatrixError("All rows must have the same length")
        self._matrix: List[List[float]] = rows

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def zeros(cls, size: int, columns: Optional[int] = None) -> "Matrix":
        """Return an all-zero ``size x size`` (or ``size x columns``) matrix.

        Non-positive dimensions collapse to the 1x1 zero matrix.
        """

        lines = size
        cols = size if columns is None else columns
        if lines <= 0 or cols <= 0:
            return cls([[0.0]])
        return cls([[0.0] * cols for _ in range(lines)])

    @classmethod
    def identity(cls, size: int) -> "Matrix":
        result = cls.zeros(size)
        for k in range(result.row_count):
            result._matrix[k][k] = 1.0
        return result

    def copy(self) -> "Matrix":
        return Matrix(self._matrix)

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------
    @property
    def row_count(self) -> int:
        return len(self._matrix)

    @property
    def column_count(self) -> int:
        return len(self._matrix[0])

    @property
    def size(self) -> Tuple[int, int]:
        """``(lines, columns)`` of the matrix."""

        return self.row_count, self.column_count

    @property
    def is_square(self) -> bool:
        return self.row_count == self.column_count

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------
    def _check_index(self, i: int, j: int) -> None:
        if not (0 <= i < self.row_count and 0 <= j < self.column_count):
            raise MatrixError(
                f"Index ({i}, {j}) is out of bounds for a {self.row_count}x{self.column_count} matrix"
            )

    def get(self, i: int, j: int) -> float:
        """Return the entry at row ``i`` and column ``j``.

        ``MatrixError`` is raised when either index is out of bounds.
        """

        self._check_index(i, j)
        return self._matrix[i][j]

    def get_unsafe(self, i: int, j: int) -> float:
        """Return the entry at ``(i, j)`` without bounds checking.

        Only meant for loops whose indices are already known to be valid; the
        result for out-of-range indices is undefined.
        """

        return self._matrix[i][j]

    def set(self, i: int, j: int, value: float) -> None:
        """Store ``value`` at ``(i, j)``; raises ``MatrixError`` when out of bounds."""

        self._check_index(i, j)
        self._matrix[i][j] = float(value)

    def set_unsafe(self, i: int, j: int, value: float) -> None:
        """Store ``value`` at ``(i, j)`` without bounds checking (see :meth:`get_unsafe`)."""

        self._matrix[i][j] = value

    def __getitem__(self, index: Tuple[int, int]) -> float:
        i, j = index
        return self.get(i, j)

    def set_line(self, i: int, line: Sequence[float]) -> None:
        """Replace row ``i`` with a copy of ``line``.

        The matrix is left untouched when ``line`` does not have exactly
        ``column_count`` entries or ``i`` is out of bounds.
        """

        if len(line) != self.column_count:
            raise MatrixError(
                f"Line has {len(line)} entries, expected {self.column_count}"
            )
        if not 0 <= i < self.row_count:
            raise MatrixError(f"Line index {i} is out of bounds for {self.row_count} lines")
        self._matrix[i] = [float(value) for value in line]

    def row(self, i: int) -> List[float]:
        if not 0 <= i < self.row_count:
            raise MatrixError(f"Line index {i} is out of bounds for {self.row_count} lines")
        return list(self._matrix[i])

    def column(self, j: int) -> List[float]:
        if not 0 <= j < self.column_count:
            raise MatrixError(f"Column index {j} is out of bounds for {self.column_count} columns")
        return [line[j] for line in self._matrix]

    def rows(self) -> List[List[float]]:
        """Return a copy of the grid as a list of rows."""

        return [list(line) for line in self._matrix]

    def remove_line_and_column(self, i: int, j: int) -> "Matrix":
        """Return the minor obtained by deleting row ``i`` and column ``j``."""

        self._check_index(i, j)
        if self.row_count == 1 or self.column_count == 1:
            raise MatrixError("Cannot remove a line and a column from a matrix with a single line or column")
        return Matrix(
            [
                [value for col, value in enumerate(line) if col != j]
                for row, line in enumerate(self._matrix)
                if row != i
            ]
        )

    # ------------------------------------------------------------------
    # Determinant
    # ------------------------------------------------------------------
    def determinant(self, column: Optional[int] = None, method: str = "laplace") -> float:
        """Return the determinant of a square matrix.

        The default ``"laplace"`` method performs a recursive cofactor expansion
        along ``column`` (the last column when omitted).  ``"elimination"``
        reduces a copy to upper triangular form instead, which is much faster
        for larger matrices and agrees with the expansion up to rounding.
        """

        if method not in _DETERMINANT_METHODS:
            raise MatrixError(
                f"Unknown determinant method '{method}' (expected one of {', '.join(_DETERMINANT_METHODS)})"
            )
        if not self.is_square:
            raise MatrixError(
                f"Determinant requires a square matrix (got {self.row_count}x{self.column_count})"
            )
        if column is not None and not 0 <= column < self.column_count:
            raise MatrixError(f"Column index {column} is out of bounds for {self.column_count} columns")
        if method == "elimination":
            return self._elimination_determinant()
        return self._laplace_determinant(column)

    def _laplace_determinant(self, column: Optional[int] = None) -> float:
        n = self.row_count
        if n == 1:
            return self._matrix[0][0]
        if n == 2:
            return self._matrix[0][0] * self._matrix[1][1] - self._matrix[1][0] * self._matrix[0][1]

        j = n - 1 if column is None else column
        determinant = 0.0
        for i in range(n):
            entry = self._matrix[i][j]
            if entry == 0:
                continue
            sign = 1.0 if (i + j) % 2 == 0 else -1.0
            determinant += sign * entry * self.remove_line_and_column(i, j)._laplace_determinant()
        return determinant

    def _elimination_determinant(self) -> float:
        work = self.rows()
        n = len(work)
        determinant = 1.0
        for pivot_index in range(n):
            pivot_row = next((r for r in range(pivot_index, n) if work[r][pivot_index] != 0), None)
            if pivot_row is None:
                return 0.0
            if pivot_row != pivot_index:
                work[pivot_index], work[pivot_row] = work[pivot_row], work[pivot_index]
                determinant = -determinant
            pivot_value = work[pivot_index][pivot_index]
            determinant *= pivot_value
            for row in range(pivot_index + 1, n):
                factor = work[row][pivot_index] / pivot_value
                if factor == 0:
                    continue
                for col in range(pivot_index, n):
                    work[row][col] -= factor * work[pivot_index][col]
        return determinant

    # ------------------------------------------------------------------
    # Gauss form
    # ------------------------------------------------------------------
    def gauss(self) -> "Matrix":
        """Return the Gauss form of the matrix; the receiver is not modified.

        A single reduction pass eliminates every column around a pivot row,
        normalizes non-zero diagonal entries to one and sorts the columns.
        Sorting can move pivots off the diagonal, so passes are repeated until
        a form comes back. Some matrices end up alternating between several
        forms; the greatest of them (row-major, rounded entries) is returned,
        which makes the Gauss form of a Gauss form the same matrix.
        """

        visited = [self._gauss_pass()]
        limit = 4 * (self.row_count + self.column_count)
        for _ in range(limit):
            following = visited[-1]._gauss_pass()
            for index, earlier in enumerate(visited):
                if following.is_close(earlier):
                    cycle = visited[index:]
                    if len(cycle) > 1:
                        logger.debug("Gauss passes alternate between %d forms", len(cycle))
                    return max(cycle, key=_rounded_entries)
            visited.append(following)
        logger.warning("Gauss form of a %dx%d matrix did not stabilize after %d passes",
                       self.row_count, self.column_count, len(visited))
        return visited[-1]

    def _gauss_pass(self) -> "Matrix":
        matrix = self.copy()
        illegal_bases: AbstractSet[int] = frozenset()
        for column in range(matrix.column_count):
            if matrix.is_null_column(column):
                continue
            base, illegal_bases = matrix.base_line(column, illegal_bases)
            if base == -1:
                continue
            pivot = matrix._matrix[base][column]
            for line in range(matrix.row_count):
                entry = matrix._matrix[line][column]
                if line != base and entry != 0:
                    matrix.add_line_to_other_line(base, -(entry / pivot), line)
                    matrix._matrix[line][column] = 0.0
        for diagonal in range(min(matrix.row_count, matrix.column_count)):
            entry = matrix._matrix[diagonal][diagonal]
            if entry != 0:
                matrix.multiply_line(diagonal, 1.0 / entry)
        matrix.sort()
        return matrix

    def base_line(self, column: int, illegal_bases: AbstractSet[int]) -> Tuple[int, AbstractSet[int]]:
        """Select the pivot row for ``column``.

        Returns the first row with a non-zero entry in ``column`` that is not in
        ``illegal_bases`` together with the extended set of used rows, or
        ``-1`` and the unchanged set when no row qualifies.
        """

        for line in range(self.row_count):
            if self._matrix[line][column] != 0 and line not in illegal_bases:
                return line, frozenset(illegal_bases) | {line}
        return -1, frozenset(illegal_bases)

    def is_null_column(self, column: int) -> bool:
        return all(line[column] == 0 for line in self._matrix)

    def transpose(self) -> None:
        """Swap lines and columns in place."""

        self._matrix = [list(column) for column in zip(*self._matrix)]

    def transposed(self) -> "Matrix":
        result = self.copy()
        result.transpose()
        return result

    def sort(self) -> None:
        """Order the columns in place: greater columns first, zero columns last."""

        self.transpose()
        self._matrix.sort(key=cmp_to_key(_compare_lines))
        self.transpose()

    def swap_lines(self, first: int, second: int) -> None:
        self._matrix[first], self._matrix[second] = self._matrix[second], self._matrix[first]

    def add_line_to_other_line(self, first_line: int, factor: float, second_line: int) -> None:
        """Add ``factor`` times ``first_line`` to ``second_line``."""

        source = self._matrix[first_line]
        target = self._matrix[second_line]
        for col in range(self.column_count):
            target[col] += factor * source[col]

    def multiply_line(self, line: int, factor: float) -> None:
        target = self._matrix[line]
        for col in range(self.column_count):
            target[col] *= factor

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def _check_same_size(self, other: "Matrix", operation: str) -> None:
        if self.size != other.size:
            raise MatrixError(
                f"Cannot {operation} a {self.row_count}x{self.column_count} matrix "
                f"and a {other.row_count}x{other.column_count} matrix"
            )

    def __add__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_size(other, "add")
        return Matrix(
            [[a + b for a, b in zip(left, right)] for left, right in zip(self._matrix, other._matrix)]
        )

    def __sub__(self, other: object) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_size(other, "subtract")
        return Matrix(
            [[a - b for a, b in zip(left, right)] for left, right in zip(self._matrix, other._matrix)]
        )

    def __neg__(self) -> "Matrix":
        return self._scaled(-1.0)

    def _scaled(self, factor: float) -> "Matrix":
        return Matrix([[factor * value for value in line] for line in self._matrix])

    def __mul__(self, other: object) -> "Matrix":
        if isinstance(other, Matrix):
            return self._multiply(other)
        if isinstance(other, Real) and not isinstance(other, bool):
            return self._scaled(float(other))
        return NotImplemented

    def __rmul__(self, other: object) -> "Matrix":
        if isinstance(other, Real) and not isinstance(other, bool):
            return self._scaled(float(other))
        return NotImplemented

    def _multiply(self, other: "Matrix") -> "Matrix":
        if self.column_count != other.row_count:
            raise MatrixError(
                f"Cannot multiply a {self.row_count}x{self.column_count} matrix "
                f"by a {other.row_count}x{other.column_count} matrix"
            )
        columns = list(zip(*other._matrix))
        return Matrix(
            [[sum(a * b for a, b in zip(line, column)) for column in columns] for line in self._matrix]
        )

    def is_symmetrical(self) -> bool:
        if not self.is_square:
            return False
        n = self.row_count
        return all(self._matrix[i][j] == self._matrix[j][i] for i in range(n) for j in range(i + 1, n))

    # ------------------------------------------------------------------
    # Comparison & rendering
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._matrix == other._matrix

    def is_close(self, other: "Matrix", rel_tol: float = 1e-9, abs_tol: float = 1e-12) -> bool:
        """Compare shape and entries with a floating-point tolerance."""

        if self.size != other.size:
            return False
        return all(
            math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
            for left, right in zip(self._matrix, other._matrix)
            for a, b in zip(left, right)
        )

    def __iter__(self) -> Iterator[List[float]]:
        return iter(self.rows())

    @property
    def description(self) -> str:
        """The matrix as column-aligned text, one line per row."""

        output = ""
        for line in self._matrix:
            rendered = ""
            for value in line:
                entry = ""
                if value >= 0:
                    entry += " "
                if abs(value) < 10:
                    entry += " "
                entry += f"{value}  "
                rendered += entry
            output += rendered[:-1] + "\n"
        return output

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"Matrix({self._matrix!r})"


__all__ = ["Matrix", "MatrixError", "zero_line"]
