"""Build matrices from a per-cell function."""
from __future__ import annotations

from typing import Callable

from .matrix import Matrix

CellOperation = Callable[[int, int], float]


class MatrixGenerator:
    """Produces square matrices whose entries are given by ``operation(row, column)``."""

    def __init__(self, operation: CellOperation):
        self.operation = operation

    def get_matrix(self, n: int) -> Matrix:
        """Return the ``n x n`` matrix described by this generator's operation."""

        return MatrixGenerator.generate(n, self.operation)

    @classmethod
    def generate(cls, n: int, operation: CellOperation) -> Matrix:
        """Evaluate ``operation`` at every 0-based ``(row, column)`` of an ``n x n`` grid.

        Cells are visited in row-major order.  A non-positive ``n`` yields the
        1x1 zero matrix.
        """

        if n <= 0:
            return Matrix.zeros(1)
        return Matrix([[float(operation(i, j)) for j in range(n)] for i in range(n)])


__all__ = ["CellOperation", "MatrixGenerator"]
