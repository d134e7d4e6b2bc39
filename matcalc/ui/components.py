"""UI components for the matcalc application."""
import json
from typing import Optional

import pandas as pd
import streamlit as st

from matcalc.config import ConfigurationError, MatrixConfiguration
from matcalc.examples import EXAMPLES
from matcalc.export import MatrixExcelExporter, matrix_frame, summary_frame
from matcalc.formula import FormulaError
from matcalc.matrix import Matrix, MatrixError
from matcalc.visualization_plotly import render_matrix_heatmap

from .state import (
    DEFAULT_METHOD,
    SUPPORTED_INPUT_MODES,
    apply_configuration,
    current_configuration,
    frame_from_grid,
    grid_from_frame,
    normalize_input_mode,
    resize_grid,
)


def render_sidebar() -> Optional[MatrixConfiguration]:
    with st.sidebar:
        st.header("Matrix")

        mode = st.radio(
            "Input Mode",
            SUPPORTED_INPUT_MODES,
            index=SUPPORTED_INPUT_MODES.index(normalize_input_mode(st.session_state.get("input_mode"))),
            horizontal=True,
        )
        st.session_state["input_mode"] = mode

        if mode == "Literal":
            grid = st.session_state["grid"]
            c1, c2 = st.columns(2)
            lines = c1.number_input("Lines", min_value=1, max_value=10, value=len(grid), step=1)
            columns = c2.number_input("Columns", min_value=1, max_value=10, value=len(grid[0]), step=1)
            if (lines, columns) != (len(grid), len(grid[0])):
                st.session_state["grid"] = resize_grid(grid, lines, columns)
                st.session_state.pop("grid_editor", None)
            edited = st.data_editor(
                frame_from_grid(st.session_state["grid"]),
                key="grid_editor",
                hide_index=True,
                use_container_width=True,
            )
            st.session_state["grid"] = grid_from_frame(edited)
        elif mode == "Formula":
            st.text_input("Formula in i, j and n", key="formula", help="Rows and columns start at 1, e.g. 1/(i+j-1)")
            st.number_input("Size n", min_value=1, max_value=10, step=1, key="formula_size")
        else:
            st.selectbox(
                "Example",
                sorted(EXAMPLES),
                key="example_name",
                format_func=lambda name: EXAMPLES[name]().label,
            )

        st.radio("Determinant Method", ["elimination", "laplace"], key="method", horizontal=True)

        st.markdown("---")
        render_load_section()

    try:
        return current_configuration()
    except (ConfigurationError, KeyError) as exc:
        st.sidebar.error(str(exc))
        return None


def render_load_section() -> None:
    uploaded = st.file_uploader("Load Matrix (JSON)", type=["json"], key="matrix_upload")
    if uploaded is None:
        return
    digest = f"{uploaded.name}:{uploaded.size}"
    if st.session_state.get("_upload_digest") == digest:
        return
    try:
        configuration = MatrixConfiguration.from_dict(json.loads(uploaded.getvalue().decode("utf-8")))
    except (ValueError, UnicodeDecodeError) as exc:
        st.error(f"Could not load matrix: {exc}")
        return
    st.session_state["_upload_digest"] = digest
    apply_configuration(configuration)
    st.rerun()


def render_results(configuration: MatrixConfiguration) -> Optional[Matrix]:
    try:
        matrix = configuration.build_matrix()
    except (MatrixError, FormulaError) as exc:
        st.error(f"Invalid matrix: {exc}")
        return None

    method = st.session_state.get("method", DEFAULT_METHOD)
    gauss = matrix.gauss()

    c_summary, c_text = st.columns([1, 2])
    with c_summary:
        st.subheader("Summary")
        st.dataframe(summary_frame(matrix, method).astype(str), hide_index=True, use_container_width=True)
    with c_text:
        st.subheader("Text")
        st.code(matrix.description, language=None)

    tab_matrix, tab_gauss, tab_transpose = st.tabs(["Matrix", "Gauss Form", "Transpose"])
    with tab_matrix:
        st.dataframe(matrix_frame(matrix), use_container_width=True)
        st.plotly_chart(render_matrix_heatmap(matrix, "Matrix"), use_container_width=True)
    with tab_gauss:
        st.dataframe(matrix_frame(gauss), use_container_width=True)
        st.plotly_chart(render_matrix_heatmap(gauss, "Gauss Form"), use_container_width=True)
    with tab_transpose:
        st.dataframe(matrix_frame(matrix.transposed()), use_container_width=True)
    return matrix


def render_save_section(configuration: MatrixConfiguration) -> None:
    st.subheader("Save")
    label = st.text_input("Label", value=configuration.label, key="save_label")
    description = st.text_input("Description", value=configuration.description, key="save_description")
    configuration.label = label
    configuration.description = description

    c_json, c_keep = st.columns(2)
    with c_json:
        st.download_button(
            "Download JSON",
            data=configuration.to_json(),
            file_name=f"{label or 'matrix'}.json",
            mime="application/json",
        )
    with c_keep:
        if st.button("Add to Report"):
            st.session_state["saved_matrices"].append(MatrixConfiguration.from_dict(configuration.to_dict()))
            st.success(f"Added '{label or 'matrix'}' to the report.")


def render_export_tab() -> None:
    st.header("Excel Report")
    saved = st.session_state.get("saved_matrices", [])
    if not saved:
        st.warning("No matrices added yet. Use 'Add to Report' on the calculator tab.")
        return

    st.dataframe(
        pd.DataFrame(
            [{"Label": c.label, "Source": c.formula or "literal", "Description": c.description} for c in saved]
        ),
        hide_index=True,
        use_container_width=True,
    )
    if st.button("Clear Report"):
        st.session_state["saved_matrices"] = []
        st.rerun()

    try:
        workbook = MatrixExcelExporter(saved, method=st.session_state.get("method", DEFAULT_METHOD)).export()
    except (MatrixError, FormulaError) as exc:
        st.error(f"Report failed: {exc}")
        return
    st.download_button(
        "Download Excel Report",
        data=workbook,
        file_name="matcalc_report.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        type="primary",
    )
