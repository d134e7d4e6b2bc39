import io
import json

import pytest

from matcalc import ConfigurationError, FormulaError, Matrix, MatrixConfiguration, load_matrix_from_json
from matcalc.config import SCHEMA_VERSION, matrix_from_dict, matrix_to_dict


def test_literal_configuration_round_trip():
    config = MatrixConfiguration(entries=[[1.0, 2.0], [3.0, 4.0]], label="A", description="test")

    data = config.to_dict()
    assert data["entries"] == [[1.0, 2.0], [3.0, 4.0]]
    assert data["schema_version"] == SCHEMA_VERSION
    assert "formula" not in data

    rehydrated = MatrixConfiguration.from_dict(data)
    assert rehydrated == config
    assert rehydrated.build_matrix() == Matrix([[1, 2], [3, 4]])


def test_formula_configuration_builds_matrix():
    config = MatrixConfiguration(formula="KroneckerDelta(i, j)", size=3, label="I3")

    data = config.to_dict()
    assert data["formula"] == "KroneckerDelta(i, j)"
    assert data["size"] == 3
    assert "entries" not in data
    assert MatrixConfiguration.from_dict(data).build_matrix() == Matrix.identity(3)


def test_from_matrix_copies_entries():
    matrix = Matrix([[1, 2]])
    config = MatrixConfiguration.from_matrix(matrix, label="row")
    matrix.set(0, 0, 5)

    assert config.entries == [[1.0, 2.0]]
    assert config.label == "row"


def test_json_string_and_file_round_trip(tmp_path):
    config = MatrixConfiguration(entries=[[2.0, -1.0], [-1.0, 2.0]], label="K")

    path = tmp_path / "matrix.json"
    config.save(path)
    matrix, loaded = load_matrix_from_json(path)
    assert loaded == config
    assert matrix.determinant() == pytest.approx(3.0)

    buffer = io.StringIO()
    config.save(buffer)
    buffer.seek(0)
    assert MatrixConfiguration.from_json(buffer) == config


def test_legacy_document_without_schema_version():
    config = MatrixConfiguration.from_dict({"entries": [[1, 0], [0, 1]]})

    assert config.schema_version == SCHEMA_VERSION
    assert config.label == ""
    assert config.build_matrix() == Matrix.identity(2)


def test_top_level_must_be_object():
    with pytest.raises(ConfigurationError):
        MatrixConfiguration.from_json(io.StringIO(json.dumps([[1, 2], [3, 4]])))


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"entries": [[1]], "formula": "i", "size": 1},
        {"formula": "i"},
        {"formula": "i", "size": 0},
        {"formula": "i", "size": "many"},
        {"entries": [[1, "x"]]},
        {"entries": [1, 2]},
        {"entries": [[1, float("nan")], [0, 1]]},
        {"entries": [[float("inf")]]},
    ],
)
def test_invalid_documents_are_rejected(data):
    with pytest.raises(ConfigurationError):
        MatrixConfiguration.from_dict(data)


def test_matrix_dict_helpers():
    matrix = Matrix([[1, 2, 3], [4, 5, 6]])
    data = matrix_to_dict(matrix)

    assert data == {"lines": 2, "columns": 3, "entries": [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]}
    assert matrix_from_dict(data) == matrix
    with pytest.raises(ConfigurationError):
        matrix_from_dict({"lines": 2})


def test_loaded_formula_cannot_run_code(tmp_path):
    marker = tmp_path / "marker.txt"
    config = MatrixConfiguration.from_dict(
        {"formula": f"__import__('pathlib').Path({str(marker)!r}).write_text('x')", "size": 1}
    )

    with pytest.raises(FormulaError):
        config.build_matrix()
    assert not marker.exists()
