from matcalc import Matrix, MatrixGenerator


def test_generate_evaluates_operation_at_every_cell():
    matrix = MatrixGenerator.generate(3, lambda i, j: 10 * i + j)

    assert matrix.size == (3, 3)
    assert matrix.rows() == [[0.0, 1.0, 2.0], [10.0, 11.0, 12.0], [20.0, 21.0, 22.0]]


def test_get_matrix_uses_stored_operation():
    generator = MatrixGenerator(lambda i, j: 1.0 if i == j else 0.0)

    assert generator.get_matrix(4) == Matrix.identity(4)
    assert generator.get_matrix(2) == Matrix.identity(2)


def test_operation_is_called_once_per_cell_in_row_major_order():
    calls = []

    def record(i, j):
        calls.append((i, j))
        return 0

    MatrixGenerator.generate(2, record)
    assert calls == [(0, 0), (0, 1), (1, 0), (1, 1)]


def test_non_positive_size_gives_one_by_one_zero_matrix():
    assert MatrixGenerator.generate(0, lambda i, j: 5).rows() == [[0.0]]
    assert MatrixGenerator(lambda i, j: 5).get_matrix(-3).rows() == [[0.0]]
