"""Serialization helpers for matrix definitions."""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, IO, Iterable, List, Optional, Tuple, Union

from .formula import matrix_from_formula
from .matrix import Matrix

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
_JSONSource = Union[str, Path, IO[str]]


class ConfigurationError(ValueError):
    """Raised when a matrix document is malformed."""


def _to_float_rows(rows: Iterable[Any]) -> List[List[float]]:
    resolved: List[List[float]] = []
    for row in rows:
        if not isinstance(row, (list, tuple)):
            raise ConfigurationError("'entries' must be a list of rows")
        try:
            line = [float(value) for value in row]
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Matrix entries must be numbers: {exc}") from exc
        if not all(math.isfinite(value) for value in line):
            raise ConfigurationError("Matrix entries must be finite numbers")
        resolved.append(line)
    return resolved


def matrix_to_dict(matrix: Matrix) -> Dict[str, Any]:
    """Serialize a :class:`Matrix` to a JSON-compatible dictionary."""

    lines, columns = matrix.size
    return {"lines": lines, "columns": columns, "entries": matrix.rows()}


def matrix_from_dict(data: Dict[str, Any]) -> Matrix:
    """Create a :class:`Matrix` from ``{"entries": [[...], ...]}``."""

    entries = data.get("entries")
    if not isinstance(entries, (list, tuple)):
        raise ConfigurationError("Matrix data requires an 'entries' list")
    return Matrix(_to_float_rows(entries))


@dataclass
class MatrixConfiguration:
    """A matrix defined either by its literal entries or by a formula and a size."""

    entries: Optional[List[List[float]]] = None
    formula: Optional[str] = None
    size: Optional[int] = None
    label: str = ""
    description: str = ""
    schema_version: int = SCHEMA_VERSION

    def __post_init__(self) -> None:
        has_entries = self.entries is not None
        has_formula = bool(self.formula)
        if has_entries == has_formula:
            raise ConfigurationError("A matrix document needs exactly one of 'entries' or 'formula'")
        if has_formula and (self.size is None or self.size <= 0):
            raise ConfigurationError("A formula matrix requires a positive 'size'")

    @classmethod
    def from_matrix(cls, matrix: Matrix, *, label: str = "", description: str = "") -> "MatrixConfiguration":
        return cls(entries=matrix.rows(), label=label, description=description)

    def build_matrix(self) -> Matrix:
        """Create the :class:`Matrix` described by this configuration."""

        if self.formula:
            return matrix_from_formula(self.formula, int(self.size))
        return Matrix(self.entries)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representing the configuration."""

        payload: Dict[str, Any] = {
            "schema_version": self.schema_version,
            "label": self.label,
            "description": self.description,
        }
        if self.formula:
            payload["formula"] = self.formula
            payload["size"] = self.size
        else:
            payload["entries"] = [list(row) for row in self.entries]
        return payload

    def to_json(self, *, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatrixConfiguration":
        """Create a configuration from a dictionary."""

        entries_raw = data.get("entries")
        entries = _to_float_rows(entries_raw) if entries_raw is not None else None
        formula = data.get("formula")
        size_raw = data.get("size")
        try:
            size = int(size_raw) if size_raw is not None else None
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"'size' must be an integer (got {size_raw!r})") from exc
        return cls(
            entries=entries,
            formula=str(formula) if formula is not None else None,
            size=size,
            label=str(data.get("label", "")),
            description=str(data.get("description", "")),
            schema_version=int(data.get("schema_version", SCHEMA_VERSION)),
        )

    @classmethod
    def from_json(cls, source: _JSONSource) -> "MatrixConfiguration":
        """Load a configuration from a JSON file path or file-like object."""

        if hasattr(source, "read"):
            data = json.load(source)  # type: ignore[arg-type]
        else:
            path = Path(source)
            logger.debug("Loading matrix document from %s", path)
            with path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        if not isinstance(data, dict):
            raise ConfigurationError("Matrix JSON must contain an object at the top level")
        return cls.from_dict(data)

    def save(self, target: Union[str, Path, IO[str]], *, indent: Optional[int] = 2) -> None:
        """Write the configuration to disk or a file-like object."""

        payload = self.to_json(indent=indent)
        if hasattr(target, "write"):
            target.write(payload)  # type: ignore[arg-type]
        else:
            path = Path(target)
            path.write_text(payload, encoding="utf-8")
            logger.info("Saved matrix document to %s", path)


def load_matrix_from_json(source: _JSONSource) -> Tuple[Matrix, MatrixConfiguration]:
    """Load a :class:`Matrix` and its configuration from JSON."""

    config = MatrixConfiguration.from_json(source)
    return config.build_matrix(), config


__all__ = [
    "ConfigurationError",
    "MatrixConfiguration",
    "SCHEMA_VERSION",
    "load_matrix_from_json",
    "matrix_from_dict",
    "matrix_to_dict",
]
