import zipfile

import pytest

from matcalc import Matrix, MatrixConfiguration
from matcalc.examples import identity_example, rectangular_example
from matcalc.export import MatrixExcelExporter, matrix_frame, summary_frame


def _read_member(workbook, name):
    with zipfile.ZipFile(workbook) as archive:
        return archive.read(name).decode("utf-8")


def test_matrix_frame_labels():
    frame = matrix_frame(Matrix([[1, 2, 3], [4, 5, 6]]))

    assert list(frame.columns) == ["Col 1", "Col 2", "Col 3"]
    assert list(frame.index) == ["Row 1", "Row 2"]
    assert frame.loc["Row 2", "Col 3"] == 6.0


def test_summary_frame_square_and_rectangular():
    square = summary_frame(Matrix([[1, 2], [3, 4]])).set_index("Property")["Value"]
    assert square["Determinant"] == pytest.approx(-2.0)
    assert square["Symmetrical"] == "No"

    rectangular = summary_frame(Matrix([[1, 2, 3]])).set_index("Property")["Value"]
    assert rectangular["Determinant"] == "n/a"
    assert rectangular["Columns"] == 3


def test_export_writes_one_sheet_per_configuration():
    configs = [identity_example(3), rectangular_example(), MatrixConfiguration(entries=[[1.0]])]
    workbook = MatrixExcelExporter(configs).export()

    sheets = _read_member(workbook, "xl/workbook.xml")
    assert "Identity 3x3" in sheets
    assert "Rectangular 2x3" in sheets
    assert "Matrix 3" in sheets

    strings = _read_member(workbook, "xl/sharedStrings.xml")
    assert "Gauss Form" in strings
    assert "n/a" in strings
    assert "KroneckerDelta" in strings


def test_duplicate_and_invalid_sheet_names_are_made_unique():
    configs = [
        MatrixConfiguration(entries=[[1.0]], label="A/B"),
        MatrixConfiguration(entries=[[2.0]], label="A/B"),
    ]
    workbook = MatrixExcelExporter(configs).export()

    sheets = _read_member(workbook, "xl/workbook.xml")
    assert 'name="A-B"' in sheets
    assert 'name="A-B (2)"' in sheets


def test_save_creates_parent_directories(tmp_path):
    target = MatrixExcelExporter([identity_example(2)]).save(tmp_path / "out" / "report.xlsx")

    assert target.exists()
    assert zipfile.is_zipfile(target)
