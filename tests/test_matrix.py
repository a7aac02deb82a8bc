import unittest

import numpy as np

from varith.kinds import Kind
from varith import scalars
from varith.matrix import MatrixBoolean, MatrixInteger, MatrixReal, MatrixComplex, matrix_from_array
from varith.ranges import Range
from varith.tuples import Tuple
from varith.failures import (
	InvalidRow, InvalidColumn, InvalidIndex, IncompatibleMatrixDimensions, InvalidMatrixDimensions,
	InvalidRuntimeConversion, InvalidParameterValue, InvalidNumericValue, TypeDoesNotSupportSubscripts,
)

def grid(cls, rows):
	return cls.from_rows(rows)

class ConstructionTests(unittest.TestCase):

	def test_column_major_coefficients(self):
		m = MatrixInteger.build(2, 3, 1, 2, 3, 4, 5, 6)
		self.assertEqual(grid(MatrixInteger, [[1, 3, 5], [2, 4, 6]]), m)
		self.assertEqual([1, 2, 3, 4, 5, 6], m.data().tolist())

	def test_zero_filled(self):
		m = MatrixReal(2, 3)
		self.assertEqual((2, 3, 6), (m.number_rows(), m.number_columns(), m.size()))
		self.assertTrue(all(x == 0.0 for x in m))
		self.assertTrue(MatrixReal().is_empty())

	def test_bad_construction(self):
		with self.assertRaises(InvalidMatrixDimensions): MatrixInteger(-1, 2)
		with self.assertRaises(InvalidMatrixDimensions): MatrixInteger.build(2, 2, 1, 2, 3)
		with self.assertRaises(InvalidMatrixDimensions): grid(MatrixInteger, [[1, 2], [3]])
		with self.assertRaises(InvalidRuntimeConversion): MatrixInteger.build(1, 1, 2.5)
		with self.assertRaises(InvalidRuntimeConversion): MatrixReal.build(1, 1, 1j)

	def test_factories(self):
		self.assertEqual(grid(MatrixReal, [[1, 0], [0, 1]]), MatrixReal.identity(2))
		self.assertEqual(grid(MatrixInteger, [[1, 1, 1]]), MatrixInteger.ones(1, 3))
		self.assertEqual(MatrixComplex(3, 3), MatrixComplex.zero(3))

	def test_conversion(self):
		r = grid(MatrixReal, [[1.0, 2.0]])
		i, ok = r.to_kind(Kind.MATRIX_INTEGER)
		self.assertTrue(ok)
		self.assertIsInstance(i, MatrixInteger)
		_, ok = grid(MatrixReal, [[1.5]]).to_kind(Kind.MATRIX_INTEGER)
		self.assertFalse(ok)
		self.assertEqual(MatrixComplex(r), r)
		with self.assertRaises(InvalidRuntimeConversion): MatrixInteger(grid(MatrixReal, [[0.5]]))
		b, ok = grid(MatrixReal, [[0.0, -2.0]]).to_kind(Kind.MATRIX_BOOLEAN)
		self.assertEqual([False, True], list(b))

	def test_from_array(self):
		self.assertIsInstance(matrix_from_array(np.array([[1, 2]])), MatrixInteger)
		self.assertIsInstance(matrix_from_array(np.array([[True]])), MatrixBoolean)
		self.assertIsInstance(matrix_from_array(np.array([[1j]])), MatrixComplex)
		with self.assertRaises(InvalidParameterValue): matrix_from_array(np.zeros(3))

class IndexingTests(unittest.TestCase):

	def setUp(self):
		self.m = grid(MatrixInteger, [[1, 2, 3], [4, 5, 6]])

	def test_row_and_column(self):
		self.assertEqual(6, self.m.at(2, 3))
		self.assertEqual(4, self.m(2, 1))
		with self.assertRaises(InvalidRow): self.m.at(3, 1)
		with self.assertRaises(InvalidColumn): self.m.at(1, 0)
		with self.assertRaises(InvalidRow): self.m.at(1.5, 1)

	def test_single_index_is_row_major(self):
		self.assertEqual([1, 2, 3, 4, 5, 6], [self.m.at(i) for i in range(1, 7)])
		self.assertEqual([1, 2, 3, 4, 5, 6], list(self.m))
		with self.assertRaises(InvalidIndex): self.m.at(7)

	def test_selections(self):
		self.assertEqual(grid(MatrixInteger, [[2, 3], [5, 6]]), self.m.at(Range(1, 2), Range(2, 3)))
		self.assertEqual(grid(MatrixInteger, [[4, 6]]), self.m.at(2, [1, 3]))
		self.assertEqual(grid(MatrixInteger, [[6, 1]]), self.m.at(Tuple.build(6, 1)))

	def test_too_many_subscripts(self):
		with self.assertRaises(TypeDoesNotSupportSubscripts): self.m.at(1, 1, 1)

class MutationTests(unittest.TestCase):

	def test_clone_is_independent(self):
		a = grid(MatrixReal, [[1, 2], [3, 4]])
		b = a.clone()
		b.update(1, 1, 100)
		self.assertEqual(1.0, a.at(1, 1))
		self.assertEqual(100.0, b.at(1, 1))

	def test_update_converts_first(self):
		m = MatrixInteger(2, 2)
		with self.assertRaises(InvalidRuntimeConversion): m.update(1, 1, 0.5)
		m.update(1, 1, 3.0)
		self.assertEqual(3, m.at(1, 1))
		self.assertFalse(m.set_value(0, 1, 1))
		self.assertTrue(m.set_value(4, 7))
		self.assertEqual(7, m.at(2, 2))

	def test_update_grows(self):
		m = MatrixInteger(2, 2)
		m.update(3, 4, 9)
		self.assertEqual((3, 4), (m.number_rows(), m.number_columns()))
		self.assertEqual(9, m.at(3, 4))
		row = MatrixInteger()
		row.update(3, 5)
		self.assertEqual(grid(MatrixInteger, [[0, 0, 5]]), row)
		column = MatrixInteger(2, 1)
		column.update(4, 1)
		self.assertEqual((4, 1), (column.number_rows(), column.number_columns()))
		with self.assertRaises(InvalidIndex): m.update(13, 1)

	def test_resize(self):
		m = grid(MatrixInteger, [[1, 2], [3, 4]])
		m.resize(1, 3)
		self.assertEqual(grid(MatrixInteger, [[1, 2, 0]]), m)

class StructureTests(unittest.TestCase):

	def setUp(self):
		self.a = grid(MatrixInteger, [[1, 2, 3], [4, 5, 6]])

	def test_transpose_is_an_involution(self):
		self.assertEqual(grid(MatrixInteger, [[1, 4], [2, 5], [3, 6]]), self.a.transpose())
		self.assertEqual(self.a, self.a.transpose().transpose())

	def test_adjoint(self):
		c = grid(MatrixComplex, [[1+2j, 3], [0, 1j]])
		self.assertEqual(c.transpose().conj(), c.adjoint())
		self.assertEqual(1-2j, c.adjoint().at(1, 1))

	def test_reversals(self):
		self.assertEqual(grid(MatrixInteger, [[4, 5, 6], [1, 2, 3]]), self.a.row_reverse())
		self.assertEqual(grid(MatrixInteger, [[3, 2, 1], [6, 5, 4]]), self.a.column_reverse())

	def test_diagonals(self):
		self.assertEqual(grid(MatrixInteger, [[1], [5]]), self.a.diagonal_entries())
		self.assertEqual(grid(MatrixInteger, [[1, 0], [0, 2]]), grid(MatrixInteger, [[1, 2]]).diagonal())
		with self.assertRaises(InvalidMatrixDimensions): self.a.diagonal()

	def test_combine(self):
		b = grid(MatrixReal, [[7.5], [8]])
		joined = self.a.combine_left_to_right(b)
		self.assertIsInstance(joined, MatrixReal)
		self.assertEqual((2, 4), (joined.number_rows(), joined.number_columns()))
		self.assertEqual(self.a, MatrixInteger().combine_top_to_bottom(self.a))
		with self.assertRaises(IncompatibleMatrixDimensions): self.a.combine_top_to_bottom(b)

	def test_kronecker_shape(self):
		k = self.a.kronecker(MatrixInteger.ones(4, 5))
		self.assertEqual((8, 15), (k.number_rows(), k.number_columns()))

	def test_hadamard(self):
		self.assertEqual(grid(MatrixInteger, [[1, 4, 9], [16, 25, 36]]), self.a.hadamard(self.a))
		with self.assertRaises(IncompatibleMatrixDimensions): self.a.hadamard(self.a.transpose())

	def test_logic(self):
		p = grid(MatrixBoolean, [[True, False]])
		q = grid(MatrixInteger, [[3, 3]])
		self.assertEqual(grid(MatrixBoolean, [[True, False]]), p.logical_and(q))
		self.assertEqual(grid(MatrixBoolean, [[True, True]]), p.logical_or(q))
		self.assertEqual(grid(MatrixBoolean, [[False, True]]), p.logical_not())

class ArithmeticTests(unittest.TestCase):

	def test_sums_promote(self):
		a = grid(MatrixInteger, [[1, 2]])
		b = grid(MatrixReal, [[0.5, 0.5]])
		self.assertEqual(grid(MatrixReal, [[1.5, 2.5]]), a + b)
		self.assertIsInstance(a - a, MatrixInteger)
		with self.assertRaises(IncompatibleMatrixDimensions): a + a.transpose()
		with self.assertRaises(InvalidParameterValue): a + 1
		with self.assertRaises(InvalidParameterValue): 1 - a

	def test_booleans_count_as_integers(self):
		p = grid(MatrixBoolean, [[True, True]])
		self.assertEqual(grid(MatrixInteger, [[2, 2]]), p + p)
		self.assertIsInstance(True * p, MatrixInteger)
		self.assertIsInstance(-p, MatrixInteger)

	def test_products(self):
		a = grid(MatrixInteger, [[1, 2], [3, 4]])
		self.assertEqual(grid(MatrixInteger, [[7, 10], [15, 22]]), a * a)
		self.assertEqual(grid(MatrixReal, [[0.5, 1], [1.5, 2]]), a * 0.5)
		self.assertEqual(grid(MatrixComplex, [[1j, 2j], [3j, 4j]]), 1j * a)
		with self.assertRaises(IncompatibleMatrixDimensions): a * grid(MatrixInteger, [[1, 2, 3]])

	def test_numpy_scalars_do_not_broadcast(self):
		a = grid(MatrixInteger, [[1, 2]])
		self.assertEqual(grid(MatrixInteger, [[2, 4]]), np.int64(2) * a)

	def test_division(self):
		a = grid(MatrixInteger, [[7, -7]])
		self.assertEqual(grid(MatrixInteger, [[2, -2]]), a / 3)
		self.assertEqual(grid(MatrixReal, [[3.5, -3.5]]), a / 2.0)
		with self.assertRaises(InvalidNumericValue): a / 0
		with self.assertRaises(InvalidParameterValue): a / a
		with self.assertRaises(InvalidParameterValue): 1 / a

	def test_division_agrees_with_scalars_at_the_extremes(self):
		low, high = scalars.INTEGER_MIN, scalars.INTEGER_MAX
		m = grid(MatrixInteger, [[low, high, -5, 5, low + 1]])
		for divisor in (2, -2, 3, -1, low, high):
			with self.subTest(divisor=divisor):
				expect = [scalars.integer_divide(x, divisor) for x in m]
				self.assertEqual(expect, list(m / divisor))
		self.assertEqual(-2**62, (MatrixInteger.build(1, 1, low) / 2).at(1))

	def test_in_place_keeps_clones_apart(self):
		a = grid(MatrixInteger, [[1, 2]])
		b = a.clone()
		a += b
		self.assertEqual(grid(MatrixInteger, [[2, 4]]), a)
		self.assertEqual(grid(MatrixInteger, [[1, 2]]), b)
		a *= 3
		self.assertEqual(grid(MatrixInteger, [[6, 12]]), a)

	def test_equality_across_kinds(self):
		self.assertEqual(grid(MatrixInteger, [[1, 0]]), grid(MatrixBoolean, [[True, False]]))
		self.assertEqual(grid(MatrixReal, [[2.0]]), grid(MatrixComplex, [[2+0j]]))
		self.assertNotEqual(grid(MatrixInteger, [[1, 0]]), grid(MatrixInteger, [[1], [0]]))
		self.assertEqual(hash(grid(MatrixInteger, [[1, 2]])), hash(grid(MatrixReal, [[1.0, 2.0]])))

if __name__ == '__main__':
	unittest.main()
