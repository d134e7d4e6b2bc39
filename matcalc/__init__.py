"""Core interfaces for the matcalc matrix calculator."""

from .matrix import Matrix, MatrixError, zero_line
from .generator import MatrixGenerator
from .formula import Formula, FormulaError, compile_formula, matrix_from_formula
from .config import ConfigurationError, MatrixConfiguration, load_matrix_from_json
from .examples import (
    hilbert_example,
    identity_example,
    rectangular_example,
    singular_example,
    symmetric_example,
)

__all__ = [
    "Matrix",
    "MatrixError",
    "zero_line",
    "MatrixGenerator",
    "Formula",
    "FormulaError",
    "compile_formula",
    "matrix_from_formula",
    "ConfigurationError",
    "MatrixConfiguration",
    "load_matrix_from_json",
    "hilbert_example",
    "identity_example",
    "rectangular_example",
    "singular_example",
    "symmetric_example",
]
