"""Streamlit application for matcalc."""
from __future__ import annotations

import streamlit as st

from matcalc.ui import (
    initialize_session_state,
    render_export_tab,
    render_results,
    render_save_section,
    render_sidebar,
)


st.set_page_config(page_title="matcalc", layout="wide")

initialize_session_state()

configuration = render_sidebar()

st.title("matcalc: Determinant, Gauss Form, Symmetry")

tab1, tab2 = st.tabs(["Calculator", "Export / Reports"])

with tab1:
    if configuration is None:
        st.info("Define a matrix in the sidebar.")
    else:
        matrix = render_results(configuration)
        if matrix is not None:
            st.markdown("---")
            render_save_section(configuration)

with tab2:
    render_export_tab()
