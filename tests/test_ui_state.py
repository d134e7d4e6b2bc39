import math

import pandas as pd
import pytest

from matcalc.ui import state


def test_supported_modes():
    assert state.SUPPORTED_INPUT_MODES == ("Literal", "Formula", "Example")


@pytest.mark.parametrize("raw_value", ["legacy", None, 123, ""])
def test_normalize_input_mode_fallbacks(raw_value):
    assert state.normalize_input_mode(raw_value) == "Literal"


def test_normalize_input_mode_accepts_any_case():
    assert state.normalize_input_mode("formula") == "Formula"
    assert state.normalize_input_mode(" EXAMPLE ") == "Example"
    for mode in state.SUPPORTED_INPUT_MODES:
        assert state.normalize_input_mode(mode) == mode


def test_resize_grid_pads_and_cuts():
    grid = [[1.0, 2.0], [3.0, 4.0]]

    assert state.resize_grid(grid, 3, 3) == [[1.0, 2.0, 0.0], [3.0, 4.0, 0.0], [0.0, 0.0, 0.0]]
    assert state.resize_grid(grid, 1, 1) == [[1.0]]
    assert state.resize_grid(grid, 0, -2) == [[1.0]]


def test_grid_from_frame_replaces_missing_and_invalid_cells():
    frame = pd.DataFrame([[1.0, math.nan], ["x", 4]], columns=["Col 1", "Col 2"])

    assert state.grid_from_frame(frame) == [[1.0, 0.0], [0.0, 4.0]]


def test_frame_round_trip():
    grid = [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]
    frame = state.frame_from_grid(grid)

    assert list(frame.columns) == ["Col 1", "Col 2", "Col 3"]
    assert state.grid_from_frame(frame) == grid


def test_session_defaults_use_elimination_determinant(monkeypatch):
    monkeypatch.setattr(state.st, "session_state", {})

    state.initialize_session_state()

    assert state.st.session_state["method"] == "elimination"
    assert state.st.session_state["input_mode"] == "Literal"


def test_session_defaults_keep_existing_values(monkeypatch):
    monkeypatch.setattr(state.st, "session_state", {"method": "laplace"})

    state.initialize_session_state()

    assert state.st.session_state["method"] == "laplace"
