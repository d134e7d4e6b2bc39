import pytest

from matcalc import Matrix, zero_line


def test_identity_is_already_in_gauss_form():
    identity = Matrix.identity(3)
    assert identity.gauss() == identity


def test_regular_matrix_reduces_to_identity():
    assert Matrix([[1, 2], [3, 4]]).gauss().is_close(Matrix.identity(2))
    assert Matrix([[6, 1, 1], [4, -2, 5], [2, 8, 7]]).gauss().is_close(Matrix.identity(3))


def test_singular_matrix_sorts_zero_row_to_the_bottom():
    result = Matrix([[1, 2], [2, 4]]).gauss()

    assert zero_line(result.row(1))
    assert not zero_line(result.row(0))
    assert result.is_close(Matrix([[1.0, 0.5], [0.0, 0.0]]))


def test_permuted_pivots_end_up_on_the_diagonal():
    assert Matrix([[0, 2], [3, 0]]).gauss().is_close(Matrix.identity(2))


def test_rectangular_matrix():
    result = Matrix([[1, 2, 3], [4, 5, 6]]).gauss()
    assert result.is_close(Matrix([[1.0, 0.0, -1.0], [0.0, 1.0, 2.0]]))


def test_zero_matrix_is_unchanged():
    assert Matrix.zeros(3).gauss() == Matrix.zeros(3)


@pytest.mark.parametrize(
    "grid",
    [
        [[1, 2], [2, 4]],
        [[0, 2], [3, 0]],
        [[1, 2, 3], [4, 5, 6]],
        [[6, 1, 1], [4, -2, 5], [2, 8, 7]],
        [[1, 2, 3], [2, 4, 6], [1, 0, 1]],
        [[0, 0, 1], [0, 0, 0], [1, 1, 0]],
        [[0.5, 0.5, 2], [2, -1, 0]],
        [[1, 0, 0], [0, 0, 0], [0, 1, -0.5]],
        [[1, 0.375, 0], [0, -0.5, 1]],
        [[1, 0.75, 0], [0, -2, 1]],
    ],
)
def test_gauss_is_idempotent(grid):
    once = Matrix(grid).gauss()
    assert once.gauss().is_close(once)
    assert once.gauss().gauss().is_close(once)


def test_alternating_passes_settle_on_the_greater_form():
    first = Matrix([[1, 0.375, 0], [0, -0.5, 1]])
    second = Matrix([[1, 0.75, 0], [0, -2, 1]])
    assert first._gauss_pass().is_close(second)
    assert second._gauss_pass().is_close(first)

    expected = Matrix([[1.0, 0.75, 0.0], [0.0, -2.0, 1.0]])
    assert Matrix([[0.5, 0.5, 2], [2, -1, 0]]).gauss().is_close(expected)
    assert first.gauss().is_close(expected)
    assert second.gauss().is_close(expected)


def test_gauss_does_not_mutate_its_input():
    matrix = Matrix([[1, 2, 3], [2, 4, 6], [1, 0, 1]])
    before = matrix.rows()
    matrix.gauss()

    assert matrix.rows() == before


def test_is_null_column():
    matrix = Matrix([[1, 0], [2, 0]])
    assert matrix.is_null_column(1)
    assert not matrix.is_null_column(0)


def test_base_line_skips_illegal_rows():
    matrix = Matrix([[1, 0], [2, 0], [0, 0]])

    base, illegal = matrix.base_line(0, frozenset())
    assert base == 0
    assert illegal == {0}

    base, illegal = matrix.base_line(0, illegal)
    assert base == 1
    assert illegal == {0, 1}

    base, illegal_after = matrix.base_line(0, illegal)
    assert base == -1
    assert illegal_after == illegal


def test_base_line_does_not_modify_the_given_set():
    used = {1}
    Matrix([[1], [1]]).base_line(0, used)
    assert used == {1}


def test_elementary_row_operations():
    matrix = Matrix([[1, 2, 3], [4, 5, 6]])

    matrix.swap_lines(0, 1)
    assert matrix.rows() == [[4.0, 5.0, 6.0], [1.0, 2.0, 3.0]]

    matrix.add_line_to_other_line(1, -4.0, 0)
    assert matrix.rows() == [[0.0, -3.0, -6.0], [1.0, 2.0, 3.0]]

    matrix.multiply_line(0, -1 / 3)
    assert matrix.row(0) == pytest.approx([0.0, 1.0, 2.0])


def test_sort_orders_columns_descending_with_zero_columns_last():
    matrix = Matrix([[0, 1, 0, 3], [0, 5, 0, -1]])
    matrix.sort()

    assert matrix.rows() == [[3.0, 1.0, 0.0, 0.0], [-1.0, 5.0, 0.0, 0.0]]


def test_sort_compares_later_entries_on_ties_and_is_stable():
    matrix = Matrix([[1, 1, 1], [0, 2, 0]])
    matrix.sort()

    assert matrix.rows() == [[1.0, 1.0, 1.0], [2.0, 0.0, 0.0]]


def test_zero_line():
    assert zero_line([0.0, -0.0, 0])
    assert not zero_line([0.0, 1e-300])
