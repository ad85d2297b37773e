import unittest

from matkalk_pkg.field import FLOAT_FIELD
from matkalk_pkg.field import FRACTION_FIELD
from matkalk_pkg.fraction import Fraction
from matkalk_pkg.matrix import Matrix
from matkalk_pkg.types import DivisionByZeroError
from matkalk_pkg.types import FieldMismatchError
from matkalk_pkg.types import IndexOutOfRangeError
from matkalk_pkg.types import InvalidDimensionsError


class TestConstruction(unittest.TestCase):
    def test_zero_filled(self):
        m = Matrix(2, 3)
        self.assertEqual(m.shape, (2, 3))
        self.assertIs(m.field, FLOAT_FIELD)
        self.assertEqual(m.to_rows(), [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]])

    def test_fill_value(self):
        m = Matrix(2, 2, fill=Fraction(1, 2), field="fraction")
        self.assertIs(m.field, FRACTION_FIELD)
        self.assertEqual(m[1, 1], Fraction(1, 2))

    def test_negative_dimensions(self):
        with self.assertRaises(InvalidDimensionsError):
            Matrix(-1, 2)

    def test_from_rows_ragged(self):
        with self.assertRaises(InvalidDimensionsError):
            Matrix.from_rows([[1, 2], [3]])

    def test_from_rows_empty(self):
        with self.assertRaises(InvalidDimensionsError):
            Matrix.from_rows([])
        with self.assertRaises(InvalidDimensionsError):
            Matrix.from_rows([[]])

    def test_from_rows_coerces(self):
        m = Matrix.from_rows([[1, 2]], field="fraction")
        self.assertEqual(m[0, 1], Fraction(2))
        f = Matrix.from_rows([[1, Fraction(1, 4)]])
        self.assertEqual(f[0, 1], 0.25)

    def test_identity(self):
        eye = Matrix.identity(3)
        self.assertEqual(eye[1, 1], 1.0)
        self.assertEqual(eye[0, 2], 0.0)


class TestAccess(unittest.TestCase):
    def test_out_of_range(self):
        m = Matrix(2, 2)
        with self.assertRaises(IndexOutOfRangeError):
            m.get(2, 0)
        with self.assertRaises(IndexError):
            m[0, -1]
        with self.assertRaises(IndexOutOfRangeError):
            m.set(0, 5, 1)

    def test_set_coerces_to_field(self):
        m = Matrix(1, 1, field="fraction")
        m[0, 0] = 0.1
        self.assertEqual(m[0, 0], Fraction(1, 10))

    def test_copy_does_not_alias(self):
        a = Matrix.from_rows([[1, 2], [3, 4]])
        b = a.copy()
        b[0, 0] = 9
        self.assertEqual(a[0, 0], 1.0)

    def test_results_do_not_alias_operands(self):
        a = Matrix.from_rows([[1, 2], [3, 4]])
        t = a.transpose()
        t[0, 1] = 100
        self.assertEqual(a[1, 0], 3.0)
        self.assertEqual(a[0, 1], 2.0)

    def test_unhashable(self):
        with self.assertRaises(TypeError):
            hash(Matrix(1, 1))


class TestArithmetic(unittest.TestCase):
    def setUp(self):
        self.A = Matrix.from_rows([[1, 2], [3, 4]])
        self.B = Matrix.from_rows([[5, 6], [7, 8]])

    def test_add_sub_mul(self):
        self.assertEqual((self.A + self.B).to_rows(), [[6, 8], [10, 12]])
        self.assertEqual((self.A - self.B).to_rows(), [[-4, -4], [-4, -4]])
        self.assertEqual((self.A * self.B).to_rows(), [[19, 22], [43, 50]])
        self.assertEqual((self.A @ self.B).to_rows(), [[19, 22], [43, 50]])

    def test_dimension_mismatch(self):
        C = Matrix(2, 3)
        with self.assertRaises(InvalidDimensionsError):
            self.A + C
        with self.assertRaises(InvalidDimensionsError):
            C * C

    def test_field_mismatch(self):
        F = Matrix.from_rows([[1, 2], [3, 4]], field="fraction")
        with self.assertRaises(FieldMismatchError):
            self.A + F
        with self.assertRaises(InvalidDimensionsError):
            self.A * F

    def test_scalar_ops(self):
        self.assertEqual((self.A * 2).to_rows(), [[2, 4], [6, 8]])
        self.assertEqual((2 * self.A).to_rows(), [[2, 4], [6, 8]])
        self.assertEqual((self.A / 2).to_rows(), [[0.5, 1.0], [1.5, 2.0]])
        self.assertEqual((-self.A)[1, 1], -4.0)

    def test_scalar_division_by_zero(self):
        with self.assertRaises(DivisionByZeroError):
            self.A / 0
        with self.assertRaises(DivisionByZeroError):
            self.A / 1e-12
        F = self.A.with_field("fraction")
        with self.assertRaises(DivisionByZeroError):
            F / Fraction(0)

    def test_fraction_division_is_exact(self):
        F = Matrix.from_rows([[1, 2]], field="fraction")
        self.assertEqual((F / 3).to_rows(), [[Fraction(1, 3), Fraction(2, 3)]])

    def test_transpose(self):
        m = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        t = m.transpose()
        self.assertEqual(t.shape, (3, 2))
        self.assertEqual(t.to_rows(), [[1, 4], [2, 5], [3, 6]])
        self.assertEqual(m.T.T, m)

    def test_minor(self):
        m = Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        self.assertEqual(m.minor(1, 1).to_rows(), [[1, 3], [7, 9]])


class TestRowOperations(unittest.TestCase):
    def test_row_operations(self):
        m = Matrix.from_rows([[1, 2], [3, 4]], field="fraction")
        m.swap_rows(0, 1)
        self.assertEqual(m.row(0), [Fraction(3), Fraction(4)])
        m.scale_row(0, Fraction(1, 3))
        self.assertEqual(m.row(0), [Fraction(1), Fraction(4, 3)])
        m.add_row_multiple(1, 0, -1)
        self.assertEqual(m.row(1), [Fraction(0), Fraction(2, 3)])

    def test_row_operation_bounds(self):
        m = Matrix(2, 2)
        with self.assertRaises(IndexOutOfRangeError):
            m.swap_rows(0, 2)


class TestFieldConversion(unittest.TestCase):
    def test_with_field_uses_shortest_decimal(self):
        m = Matrix.from_rows([[0.1, 0.25]]).with_field("fraction")
        self.assertEqual(m.to_rows(), [[Fraction(1, 10), Fraction(1, 4)]])

    def test_back_to_float(self):
        m = Matrix.from_rows([[Fraction(1, 4)]], field="fraction").with_field(FLOAT_FIELD)
        self.assertEqual(m[0, 0], 0.25)


class TestAddSubRoundTrip(unittest.TestCase):
    def test_fraction_exact(self):
        A = Matrix.from_rows(
            [[Fraction(1, 3), Fraction(-2, 7)], [5, Fraction(9, 4)]], field="fraction"
        )
        B = Matrix.from_rows(
            [[Fraction(5, 6), 3], [Fraction(-1, 9), Fraction(1, 11)]], field="fraction"
        )
        self.assertEqual((A + B) - B, A)

    def test_float_within_tolerance(self):
        A = Matrix.from_rows([[0.1, 0.2, -0.3], [0.7, 1e-3, 2.5]])
        B = Matrix.from_rows([[1.3, -2.9, 1e3], [0.05, 123.456, -7.77]])
        self.assertTrue(Matrix.approx_equal((A + B) - B, A))
        self.assertTrue(Matrix.approx_equal((A + B) - B, A, tolerance=1e-9))


if __name__ == "__main__":
    unittest.main()
