import pytest

from matkalk_pkg.fraction import Fraction
from matkalk_pkg.linalg import approx_equal
from matkalk_pkg.linalg import inverse
from matkalk_pkg.linalg import rank
from matkalk_pkg.linalg import rref
from matkalk_pkg.matrix import Matrix
from matkalk_pkg.types import NotSquareError
from matkalk_pkg.types import SingularMatrixError


def F(rows):
    return Matrix.from_rows(rows, field="fraction")


def assert_rref_shape(m):
    """Leading ones, increasing leading columns, cleared pivot columns."""
    f = m.field
    last_lead = -1
    seen_zero_row = False
    for i, row in enumerate(m.to_rows()):
        nonzero = [j for j, v in enumerate(row) if not f.is_negligible(v)]
        if not nonzero:
            seen_zero_row = True
            continue
        assert not seen_zero_row, "zero rows must be at the bottom"
        lead = nonzero[0]
        assert row[lead] == f.one
        assert lead > last_lead
        last_lead = lead
        for k in range(m.rows):
            if k != i:
                assert f.is_negligible(m.get(k, lead))


def test_rref_invertible_is_identity():
    assert rref(F([[1, 2], [3, 4]])) == Matrix.identity(2, "fraction")
    assert approx_equal(rref(Matrix.from_rows([[1, 2], [3, 4]])), Matrix.identity(2))


def test_rref_rank_deficient():
    r = rref(F([[1, 2, 3], [2, 4, 6]]))
    assert r.to_rows() == [[1, 2, 3], [0, 0, 0]]
    assert_rref_shape(r)


@pytest.mark.parametrize(
    "rows",
    [
        [[0, 2, 4, 2], [1, 1, 1, 6], [2, 5, -1, 27]],
        [[1, 2, 3], [4, 5, 6], [7, 8, 9]],
        [[0, 0, 1], [0, 3, 0], [0, 0, 0]],
        [[2, -1, 0, 1], [-1, 2, -1, 0], [0, -1, 2, 1]],
    ],
)
def test_rref_properties(rows):
    assert_rref_shape(rref(F(rows)))
    assert_rref_shape(rref(Matrix.from_rows(rows)))


def test_rref_does_not_modify_input():
    m = F([[0, 1], [1, 0]])
    rref(m)
    assert m.to_rows() == [[0, 1], [1, 0]]


def test_rank():
    assert rank(Matrix.identity(3)) == 3
    assert rank(Matrix(2, 3)) == 0
    assert rank(F([[1, 2, 3], [2, 4, 6]])) == 1
    assert F([[1, 2, 3], [4, 5, 6], [7, 8, 9]]).rank() == 2


def test_inverse_exact():
    C = F([[1, 0, 1], [0, 2, 0], [1, 0, 2]])
    expected = F([[2, 0, -1], [0, Fraction(1, 2), 0], [-1, 0, 1]])
    assert inverse(C) == expected
    assert C * C.inverse() == Matrix.identity(3, "fraction")


def test_inverse_float():
    A = Matrix.from_rows([[4, 7], [2, 6]])
    assert approx_equal(A * A.inverse(), Matrix.identity(2))
    assert approx_equal(A.inverse(), Matrix.from_rows([[0.6, -0.7], [-0.2, 0.4]]))


def test_inverse_needs_row_swap():
    A = F([[0, 1], [1, 0]])
    assert A.inverse() == A


def test_inverse_singular_names_column():
    with pytest.raises(SingularMatrixError, match="column 2"):
        inverse(F([[1, 2], [2, 4]]))
    with pytest.raises(SingularMatrixError):
        inverse(Matrix.from_rows([[1, 2], [2, 4]]))


def test_inverse_not_square():
    with pytest.raises(NotSquareError):
        inverse(Matrix(2, 3))


def test_approx_equal():
    a = Matrix.from_rows([[1.0, 2.0]])
    b = Matrix.from_rows([[1.0 + 1e-12, 2.0]])
    assert approx_equal(a, b)
    assert not approx_equal(a, Matrix.from_rows([[1.1, 2.0]]))
    assert approx_equal(a, Matrix.from_rows([[1.1, 2.0]]), tolerance=0.2)
    assert Matrix.approx_equal(a, b)


def test_approx_equal_mismatches():
    a = Matrix.from_rows([[1, 2]])
    assert not approx_equal(a, Matrix.from_rows([[1], [2]]))
    assert not approx_equal(a, a.with_field("fraction"))


def test_approx_equal_exact_field():
    a = F([[1, 2]])
    assert approx_equal(a, F([[1, 2]]))
    assert not approx_equal(a, F([[1, 3]]))
    with pytest.raises(TypeError):
        approx_equal(a, a, tolerance=0.1)


def test_float_pivot_below_epsilon_is_treated_as_zero():
    tiny = Matrix.from_rows([[1e-11, 0], [0, 1]])
    # column 1 has no usable pivot, so only one leading one remains
    assert rank(tiny) == 1
    assert rref(tiny).get(0, 1) == 1.0
    with pytest.raises(SingularMatrixError, match="column 1"):
        inverse(tiny)
    with pytest.raises(SingularMatrixError):
        tiny.adjugate_inverse()


def test_fraction_small_pivot_is_exact():
    tiny = F([[Fraction(1, 10**11), 0], [0, 1]])
    assert rank(tiny) == 2
    assert inverse(tiny) == F([[10**11, 0], [0, 1]])
