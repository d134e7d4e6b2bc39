"""Reference matrix configurations."""
from __future__ import annotations

from typing import Callable, Dict

from .config import MatrixConfiguration


def identity_example(n: int = 3) -> MatrixConfiguration:
    """Return the ``n x n`` identity matrix."""

    return MatrixConfiguration(
        formula="KroneckerDelta(i, j)",
        size=n,
        label=f"Identity {n}x{n}",
        description="Already in Gauss form, determinant 1 and symmetrical.",
    )


def singular_example() -> MatrixConfiguration:
    return MatrixConfiguration(
        entries=[[1.0, 2.0], [2.0, 4.0]],
        label="Singular 2x2",
        description="Proportional rows: determinant 0, one zero row in Gauss form.",
    )


def hilbert_example(n: int = 4) -> MatrixConfiguration:
    """Return the Hilbert matrix ``1 / (i + j - 1)``, a classic ill-conditioned case."""

    return MatrixConfiguration(
        formula="1/(i+j-1)",
        size=n,
        label=f"Hilbert {n}x{n}",
        description="Symmetrical with a very small determinant.",
    )


def rectangular_example() -> MatrixConfiguration:
    return MatrixConfiguration(
        entries=[[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]],
        label="Rectangular 2x3",
        description="Gauss form and products are defined, the determinant is not.",
    )


def symmetric_example() -> MatrixConfiguration:
    return MatrixConfiguration(
        entries=[[2.0, -1.0, 0.0], [-1.0, 2.0, -1.0], [0.0, -1.0, 2.0]],
        label="Symmetric 3x3",
        description="Second-difference matrix, determinant 4.",
    )


EXAMPLES: Dict[str, Callable[[], MatrixConfiguration]] = {
    "identity": identity_example,
    "singular": singular_example,
    "hilbert": hilbert_example,
    "rectangular": rectangular_example,
    "symmetric": symmetric_example,
}


def get_example(name: str) -> MatrixConfiguration:
    key = name.strip().lower()
    if key not in EXAMPLES:
        raise KeyError(f"Unknown example '{name}' (available: {', '.join(sorted(EXAMPLES))})")
    return EXAMPLES[key]()


__all__ = [
    "EXAMPLES",
    "get_example",
    "hilbert_example",
    "identity_example",
    "rectangular_example",
    "singular_example",
    "symmetric_example",
]
