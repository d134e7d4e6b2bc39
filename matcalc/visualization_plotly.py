"""Plotly heatmaps of matrix entries."""
from __future__ import annotations

import plotly.graph_objects as go

from matcalc.matrix import Matrix


def _format_entry(value: float) -> str:
    return f"{value:.4g}"


def render_matrix_heatmap(matrix: Matrix, title: str = "", font_size: int = 12) -> go.Figure:
    """Return a heatmap of ``matrix`` with every cell annotated; row 1 is drawn at the top."""

    rows = matrix.rows()
    x_labels = [f"Col {j + 1}" for j in range(matrix.column_count)]
    y_labels = [f"Row {i + 1}" for i in range(matrix.row_count)]
    text = [[_format_entry(value) for value in line] for line in rows]

    fig = go.Figure(
        data=go.Heatmap(
            z=rows,
            x=x_labels,
            y=y_labels,
            text=text,
            texttemplate="%{text}",
            textfont={"size": font_size},
            colorscale="RdBu",
            zmid=0.0,
            hovertemplate="%{y}, %{x}: %{z}<extra></extra>",
        )
    )
    fig.update_yaxes(autorange="reversed")
    fig.update_layout(
        title=title or None,
        font={"size": font_size},
        margin={"l": 40, "r": 20, "t": 50 if title else 20, "b": 40},
        height=max(250, 60 * matrix.row_count + 100),
    )
    return fig


__all__ = ["render_matrix_heatmap"]
