"""Per-cell formulas such as ``1/(i+j-1)`` evaluated with SymPy.

A formula may use the symbols ``i`` and ``j`` (the 1-based row and column of
the cell) and ``n`` (the size of the matrix), numbers, the usual arithmetic
operators (``^`` is accepted for powers) and a fixed set of SymPy functions
such as ``sin`` or ``sqrt``.  Products may be written implicitly (``2 i`` or
``2(i + j)``).
"""
from __future__ import annotations

import io
import keyword
import logging
import math
import tokenize
from tokenize import TokenError

import sympy
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

from .generator import MatrixGenerator
from .matrix import Matrix

logger = logging.getLogger(__name__)

_TRANSFORMATIONS = standard_transformations + (implicit_multiplication_application, convert_xor)
_SYMBOLS = {name: sympy.Symbol(name) for name in ("i", "j", "n")}
_FUNCTIONS = (
    "Abs", "E", "KroneckerDelta", "Max", "Min", "Mod", "acos", "asin", "atan", "binomial",
    "ceiling", "cos", "cosh", "exp", "factorial", "floor", "gamma", "log", "pi", "sign",
    "sin", "sinh", "sqrt", "tan", "tanh",
)
_OPERATORS = frozenset({"+", "-", "*", "**", "/", "^", "(", ")", ","})
_LAYOUT_TOKENS = frozenset({tokenize.NEWLINE, tokenize.NL, tokenize.ENDMARKER})
# parse_expr evaluates the transformed text, so only these names are reachable from it.
_GLOBALS = {
    name: getattr(sympy, name)
    for name in _FUNCTIONS + ("Float", "Function", "Integer", "Rational", "Symbol")
}
_GLOBALS["__builtins__"] = {}


class FormulaError(ValueError):
    """Raised when a formula cannot be parsed or evaluated to a real number."""


class FormulaFunction:
    """A compiled formula bound to a matrix size, callable as ``(row, column) -> value``."""

    def __init__(self, expression: sympy.Expr, size: int, source: str = ""):
        self.expression = expression
        self.size = size
        self.source = source or str(expression)

    def __call__(self, row: int, column: int) -> float:
        substitutions = {
            _SYMBOLS["i"]: row + 1,
            _SYMBOLS["j"]: column + 1,
            _SYMBOLS["n"]: self.size,
        }
        value = sympy.N(self.expression.subs(substitutions))
        if value.has(sympy.zoo, sympy.nan, sympy.oo, -sympy.oo):
            raise FormulaError(f"'{self.source}' is undefined at cell ({row + 1}, {column + 1})")
        try:
            result = float(value)
        except TypeError as exc:
            raise FormulaError(f"'{self.source}' is not a real number at cell ({row + 1}, {column + 1})") from exc
        if not math.isfinite(result):
            raise FormulaError(f"'{self.source}' is not finite at cell ({row + 1}, {column + 1})")
        return result


def _check_tokens(text: str) -> None:
    """Reject anything but numbers, ``i``/``j``/``n``, known functions and arithmetic."""

    try:
        tokens = list(tokenize.generate_tokens(io.StringIO(text).readline))
    except (TokenError, SyntaxError) as exc:
        raise FormulaError(f"Cannot parse formula '{text}': {exc}") from exc
    unknown = set()
    for token in tokens:
        if token.type in _LAYOUT_TOKENS or token.type == tokenize.NUMBER:
            continue
        if token.type == tokenize.NAME:
            if token.string in _SYMBOLS or token.string in _FUNCTIONS:
                continue
            if not keyword.iskeyword(token.string) and not token.string.startswith("_"):
                unknown.add(token.string)
                continue
        elif token.type == tokenize.OP and token.string in _OPERATORS:
            continue
        raise FormulaError(f"'{token.string}' is not allowed in formula '{text}'")
    if unknown:
        raise FormulaError(
            f"Unknown symbol(s) {', '.join(sorted(unknown))} in '{text}' (only i, j and n are allowed)"
        )


class Formula:
    """A parsed per-cell formula."""

    def __init__(self, source: str):
        text = (source or "").strip()
        if not text:
            raise FormulaError("Formula must not be empty")
        _check_tokens(text)
        try:
            expression = parse_expr(
                text, local_dict=dict(_SYMBOLS), global_dict=dict(_GLOBALS), transformations=_TRANSFORMATIONS
            )
        except (SyntaxError, TokenError, TypeError, ValueError, AttributeError, sympy.SympifyError) as exc:
            raise FormulaError(f"Cannot parse formula '{text}': {exc}") from exc
        if not isinstance(expression, sympy.Expr):
            raise FormulaError(f"'{text}' is not an arithmetic expression")
        unknown = sorted(str(symbol) for symbol in expression.free_symbols if str(symbol) not in _SYMBOLS)
        if unknown:
            raise FormulaError(
                f"Unknown symbol(s) {', '.join(unknown)} in '{text}' (only i, j and n are allowed)"
            )
        self.source = text
        self.expression = expression

    def bind(self, size: int) -> FormulaFunction:
        return FormulaFunction(self.expression, size, self.source)

    def __repr__(self) -> str:
        return f"Formula({self.source!r})"


def compile_formula(source: str) -> Formula:
    return Formula(source)


def matrix_from_formula(source: str, size: int) -> Matrix:
    """Build the ``size x size`` matrix whose entry ``(i, j)`` is ``source`` evaluated there."""

    formula = compile_formula(source)
    logger.debug("Evaluating formula %r for a %dx%d matrix", formula.source, size, size)
    return MatrixGenerator.generate(size, formula.bind(size))


__all__ = ["Formula", "FormulaError", "FormulaFunction", "compile_formula", "matrix_from_formula"]
