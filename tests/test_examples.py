import pytest

from matcalc import Matrix
from matcalc.examples import EXAMPLES, get_example


@pytest.mark.parametrize("name", sorted(EXAMPLES))
def test_every_example_builds(name):
    config = get_example(name)
    matrix = config.build_matrix()

    assert config.label
    assert matrix.row_count >= 1


def test_example_properties():
    assert get_example("identity").build_matrix() == Matrix.identity(3)
    assert get_example("singular").build_matrix().determinant() == 0.0
    assert get_example("symmetric").build_matrix().determinant() == pytest.approx(4.0)
    assert get_example("hilbert").build_matrix().is_symmetrical()
    assert not get_example("Rectangular").build_matrix().is_square


def test_unknown_example():
    with pytest.raises(KeyError):
        get_example("nope")
