"""State management for the matcalc UI."""
import math
from typing import Any, List, Optional, Sequence

import pandas as pd
import streamlit as st

from matcalc.config import MatrixConfiguration

SUPPORTED_INPUT_MODES = ("Literal", "Formula", "Example")
DEFAULT_INPUT_MODE = "Literal"
DEFAULT_METHOD = "elimination"
DEFAULT_GRID = [[1.0, 2.0], [3.0, 4.0]]


def normalize_input_mode(value: Any) -> str:
    """Return a supported input mode, falling back to ``Literal``."""

    if isinstance(value, str):
        candidate = value.strip().capitalize()
        if candidate in SUPPORTED_INPUT_MODES:
            return candidate
    return DEFAULT_INPUT_MODE


def resize_grid(grid: Sequence[Sequence[float]], lines: int, columns: int) -> List[List[float]]:
    """Return ``grid`` cut or zero-padded to ``lines x columns`` (at least 1x1)."""

    lines = max(1, int(lines))
    columns = max(1, int(columns))
    resized: List[List[float]] = []
    for i in range(lines):
        source = list(grid[i]) if i < len(grid) else []
        row = [float(source[j]) if j < len(source) else 0.0 for j in range(columns)]
        resized.append(row)
    return resized


def grid_from_frame(frame: pd.DataFrame) -> List[List[float]]:
    """Convert an edited DataFrame to a grid; empty or invalid cells become 0."""

    grid: List[List[float]] = []
    for _, record in frame.iterrows():
        row: List[float] = []
        for value in record.tolist():
            try:
                number = float(value)
            except (TypeError, ValueError):
                number = 0.0
            row.append(0.0 if math.isnan(number) else number)
        grid.append(row)
    return grid


def frame_from_grid(grid: Sequence[Sequence[float]]) -> pd.DataFrame:
    columns = [f"Col {j + 1}" for j in range(len(grid[0]))] if grid else []
    return pd.DataFrame([list(row) for row in grid], columns=columns)


def initialize_session_state() -> None:
    defaults = {
        "input_mode": DEFAULT_INPUT_MODE,
        "grid": [list(row) for row in DEFAULT_GRID],
        "formula": "1/(i+j-1)",
        "formula_size": 3,
        "example_name": "identity",
        "saved_matrices": [],
        "method": DEFAULT_METHOD,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def apply_configuration(configuration: MatrixConfiguration) -> None:
    """Load ``configuration`` into the session so the sidebar shows it."""

    if configuration.formula:
        st.session_state["input_mode"] = "Formula"
        st.session_state["formula"] = configuration.formula
        st.session_state["formula_size"] = int(configuration.size)
    else:
        st.session_state["input_mode"] = "Literal"
        st.session_state["grid"] = [list(row) for row in configuration.entries]
    st.session_state.pop("grid_editor", None)


def current_configuration() -> Optional[MatrixConfiguration]:
    mode = normalize_input_mode(st.session_state.get("input_mode"))
    if mode == "Formula":
        return MatrixConfiguration(
            formula=st.session_state.get("formula", ""),
            size=int(st.session_state.get("formula_size", 1)),
            label="Formula",
        )
    if mode == "Example":
        from matcalc.examples import get_example

        return get_example(st.session_state.get("example_name", "identity"))
    grid = st.session_state.get("grid")
    if not grid:
        return None
    return MatrixConfiguration(entries=[list(row) for row in grid], label="Literal")
