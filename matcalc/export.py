"""
Excel reports for matcalc.
Writes one worksheet per matrix with its entries, Gauss form and summary.
"""
import io
import logging
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd
import xlsxwriter

from matcalc.config import MatrixConfiguration
from matcalc.matrix import Matrix

logger = logging.getLogger(__name__)

_MAX_SHEET_NAME = 31


def matrix_frame(matrix: Matrix) -> pd.DataFrame:
    """Return the matrix as a DataFrame with 1-based row and column labels."""

    return pd.DataFrame(
        matrix.rows(),
        index=[f"Row {i + 1}" for i in range(matrix.row_count)],
        columns=[f"Col {j + 1}" for j in range(matrix.column_count)],
    )


def summary_frame(matrix: Matrix, method: str = "laplace") -> pd.DataFrame:
    """Return the size, determinant and symmetry of ``matrix`` as a two-column table."""

    determinant: Union[float, str] = matrix.determinant(method=method) if matrix.is_square else "n/a"
    data = [
        {"Property": "Lines", "Value": matrix.row_count},
        {"Property": "Columns", "Value": matrix.column_count},
        {"Property": "Determinant", "Value": determinant},
        {"Property": "Symmetrical", "Value": "Yes" if matrix.is_symmetrical() else "No"},
    ]
    return pd.DataFrame(data)


class MatrixExcelExporter:
    def __init__(self, configurations: Sequence[MatrixConfiguration], method: str = "laplace"):
        self.configurations = list(configurations)
        self.method = method
        self.output = io.BytesIO()
        self.workbook = xlsxwriter.Workbook(self.output, {'in_memory': True})
        self._sheet_names: List[str] = []

        self.fmt_header = self.workbook.add_format({
            'bold': True, 'bg_color': '#D9E1F2', 'border': 1,
            'align': 'center', 'valign': 'vcenter'
        })
        self.fmt_header_main = self.workbook.add_format({
            'bold': True, 'font_size': 12, 'bg_color': '#4472C4',
            'font_color': 'white', 'border': 1
        })
        self.fmt_num = self.workbook.add_format({'num_format': '0.000000', 'border': 1})
        self.fmt_sci = self.workbook.add_format({'num_format': '0.00E+00', 'border': 1})
        self.fmt_text = self.workbook.add_format({'border': 1, 'align': 'left'})

    def _sheet_name(self, label: str) -> str:
        base = (label.strip() or f"Matrix {len(self._sheet_names) + 1}")
        for char in '[]:*?/\\':
            base = base.replace(char, "-")
        base = base[:_MAX_SHEET_NAME]
        name = base
        suffix = 2
        while name.lower() in (existing.lower() for existing in self._sheet_names):
            tail = f" ({suffix})"
            name = base[:_MAX_SHEET_NAME - len(tail)] + tail
            suffix += 1
        self._sheet_names.append(name)
        return name

    def _number_format(self, value: float):
        magnitude = abs(value)
        if magnitude != 0 and (magnitude < 1e-4 or magnitude >= 1e7):
            return self.fmt_sci
        return self.fmt_num

    def _write_table(self, worksheet, start_row: int, title: str, df: pd.DataFrame, index: bool = True) -> int:
        """Write ``df`` below a title row and return the next free row."""

        columns = list(df.columns)
        width = len(columns) + (1 if index else 0)
        if width > 1:
            worksheet.merge_range(start_row, 0, start_row, width - 1, title, self.fmt_header_main)
        else:
            worksheet.write(start_row, 0, title, self.fmt_header_main)
        row = start_row + 1

        offset = 1 if index else 0
        if index:
            worksheet.write(row, 0, "", self.fmt_header)
        for col_num, name in enumerate(columns):
            worksheet.write(row, col_num + offset, name, self.fmt_header)
        row += 1

        for label, record in df.iterrows():
            if index:
                worksheet.write(row, 0, str(label), self.fmt_header)
            for col_num, name in enumerate(columns):
                value = record[name]
                if isinstance(value, (int, float)) and not isinstance(value, bool):
                    worksheet.write_number(row, col_num + offset, float(value), self._number_format(float(value)))
                else:
                    worksheet.write(row, col_num + offset, str(value), self.fmt_text)
            row += 1
        return row + 1

    def export_configuration(self, configuration: MatrixConfiguration) -> None:
        matrix = configuration.build_matrix()
        ws = self.workbook.add_worksheet(self._sheet_name(configuration.label))

        ws.write(0, 0, "matcalc Report", self.fmt_header_main)
        ws.write(1, 0, f"Matrix: {configuration.label or 'unnamed'}")
        if configuration.formula:
            ws.write(2, 0, f"Formula: {configuration.formula} (n = {configuration.size})")
        else:
            ws.write(2, 0, "Entered literally")
        ws.write(3, 0, f"Desc: {configuration.description}")
        ws.write(4, 0, f"Date: {pd.Timestamp.now().strftime('%Y-%m-%d %H:%M')}")
        ws.set_column(0, 0, 14)
        ws.set_column(1, max(1, matrix.column_count), 14)

        curr_row = 6
        curr_row = self._write_table(ws, curr_row, "Matrix", matrix_frame(matrix))
        curr_row = self._write_table(ws, curr_row, "Gauss Form", matrix_frame(matrix.gauss()))
        self._write_table(ws, curr_row, "Summary", summary_frame(matrix, self.method), index=False)

    def export(self) -> io.BytesIO:
        """Write every configuration and return the finished workbook."""

        for configuration in self.configurations:
            self.export_configuration(configuration)
        return self.close()

    def close(self) -> io.BytesIO:
        self.workbook.close()
        self.output.seek(0)
        return self.output

    def save(self, path: Union[str, Path]) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.export().getvalue())
        logger.info("Wrote Excel report with %d sheet(s) to %s", len(self.configurations), target)
        return target


__all__ = ["MatrixExcelExporter", "matrix_frame", "summary_frame"]
