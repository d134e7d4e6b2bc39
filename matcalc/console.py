"""Interactive console: read a matrix, print its determinant, Gauss form and symmetry."""
from __future__ import annotations

import logging
import math
import sys
from typing import Callable, List, Optional, TextIO

from .formula import FormulaError, matrix_from_formula
from .matrix import Matrix, MatrixError

logger = logging.getLogger(__name__)

_QUIT_COMMANDS = ("quit", "exit")


class InputError(ValueError):
    """Raised when console input cannot be turned into a matrix line."""


class NumberInputError(InputError):
    """A token that should be a number is something else."""


class LineLengthError(InputError):
    """A line has a different number of entries than the matrix has columns."""


class _EndOfInput(Exception):
    pass


def parse_line(line: str, size: int) -> List[float]:
    """Parse ``size`` whitespace separated numbers.

    ``LineLengthError`` is raised when the number of tokens differs from
    ``size`` and ``NumberInputError`` names the first token that is not a
    number. Non-finite values such as ``nan`` or ``inf`` count as invalid.
    """

    components = line.split()
    if len(components) != size:
        raise LineLengthError(f"Please enter exactly {size} elements for this row!")
    values: List[float] = []
    for component in components:
        try:
            value = float(component)
        except ValueError:
            raise NumberInputError(f"Wrong input: '{component}' is not a number.") from None
        if not math.isfinite(value):
            raise NumberInputError(f"Wrong input: '{component}' is not a finite number.")
        values.append(value)
    return values


def report(matrix: Matrix, method: str = "laplace") -> str:
    """Return the text block describing ``matrix`` and its properties."""

    lines = ["The matrix", matrix.description.rstrip("\n")]
    if matrix.is_square:
        lines.append(f"has the determinant {matrix.determinant(method=method)}")
    else:
        lines.append(f"is {matrix.row_count}x{matrix.column_count} and has no determinant")
    lines.append("and the Gauss form")
    lines.append(matrix.gauss().description.rstrip("\n"))
    lines.append("It is symmetrical." if matrix.is_symmetrical() else "It is not symmetrical.")
    return "\n".join(lines)


class Console:
    """The read-eval loop.

    ``input_func`` is called with a prompt and returns one line of input; it
    raises ``EOFError`` at the end of input, exactly like :func:`input`.
    """

    def __init__(self, input_func: Optional[Callable[[str], str]] = None, stdout: Optional[TextIO] = None,
                 method: str = "laplace"):
        self.input_func = input_func if input_func is not None else input
        self.stdout = stdout if stdout is not None else sys.stdout
        self.method = method

    def _print(self, message: str = "") -> None:
        print(message, file=self.stdout)

    def _error(self, message: str) -> None:
        self._print(f"[ERROR] {message}")

    def _read(self, prompt: str = "") -> str:
        try:
            line = self.input_func(prompt)
        except EOFError:
            raise _EndOfInput() from None
        if line.strip().lower() in _QUIT_COMMANDS:
            raise _EndOfInput()
        return line

    def run(self) -> int:
        """Run until ``quit``/``exit`` or end of input; return the number of matrices evaluated."""

        evaluated = 0
        try:
            while True:
                method = self._read(
                    "Please select the type of matrix you want to enter (literal/formula): "
                ).strip().lower()
                if method == "literal":
                    matrix = self.read_literal_matrix()
                elif method == "formula":
                    matrix = self.read_formula_matrix()
                else:
                    self._error("Please enter 'literal' or 'formula'")
                    continue

                if matrix is None:
                    continue
                self._print("")
                self._print(report(matrix, self.method))
                self._print("")
                evaluated += 1
        except _EndOfInput:
            logger.debug("Console finished after %d matrices", evaluated)
        return evaluated

    def read_literal_matrix(self) -> Optional[Matrix]:
        """Read a square matrix line by line; the first line defines its size.

        Returns ``None`` after printing an error when any line is invalid.
        """

        self._print(
            "Please enter the first line of the matrix separated by spaces. "
            "This line defines the size of the nxn matrix."
        )
        first = self._read()
        size = len(first.split())
        if size == 0:
            self._error("The first line must contain at least one number")
            return None
        matrix = Matrix.zeros(size)
        for i in range(size):
            line = first if i == 0 else self._read()
            try:
                matrix.set_line(i, parse_line(line, size))
            except InputError as exc:
                self._error(str(exc))
                return None
            except MatrixError:
                self._error(f"The entered line has to be of length {size}")
                return None
        return matrix

    def read_formula_matrix(self) -> Optional[Matrix]:
        """Read a formula in ``i``, ``j`` and ``n`` and the matrix size."""

        expression = self._read("Please enter the formula for the element in line i and column j: ")
        raw_size = self._read("Please enter the size n of the nxn matrix: ").strip()
        try:
            size = int(raw_size)
        except ValueError:
            self._error(f"Wrong input: '{raw_size}' is not a whole number.")
            return None
        if size <= 0:
            self._error("The size has to be at least 1")
            return None
        try:
            return matrix_from_formula(expression, size)
        except FormulaError as exc:
            self._error(str(exc))
            return None


def start(input_func: Optional[Callable[[str], str]] = None, stdout: Optional[TextIO] = None) -> int:
    return Console(input_func, stdout).run()


__all__ = [
    "Console",
    "InputError",
    "LineLengthError",
    "NumberInputError",
    "parse_line",
    "report",
    "start",
]
