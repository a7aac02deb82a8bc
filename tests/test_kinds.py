import unittest
from itertools import product

from varith.kinds import Kind, join, join_all, coefficient_kind, matrix_kind, is_scalar, is_matrix

class PromotionTableTests(unittest.TestCase):
	""" The join table is the one source of truth for mixed operations, so it had better be a lattice. """

	def test_symmetric(self):
		for a, b in product(Kind, Kind):
			with self.subTest(a=a, b=b):
				self.assertEqual(join(a, b), join(b, a))

	def test_associative(self):
		for a, b, c in product(Kind, Kind, Kind):
			with self.subTest(a=a, b=b, c=c):
				self.assertEqual(join(join(a, b), c), join(a, join(b, c)))

	def test_idempotent_except_variant(self):
		for k in Kind:
			if k is Kind.VARIANT: self.assertIsNone(join(k, k))
			else: self.assertIs(k, join(k, k))

	def test_scalar_chain(self):
		self.assertIs(Kind.INTEGER, join(Kind.BOOLEAN, Kind.INTEGER))
		self.assertIs(Kind.REAL, join(Kind.INTEGER, Kind.REAL))
		self.assertIs(Kind.COMPLEX, join(Kind.BOOLEAN, Kind.COMPLEX))

	def test_matrix_chain(self):
		self.assertIs(Kind.MATRIX_REAL, join(Kind.MATRIX_BOOLEAN, Kind.MATRIX_REAL))
		self.assertIs(Kind.MATRIX_COMPLEX, join(Kind.MATRIX_COMPLEX, Kind.MATRIX_INTEGER))

	def test_none_is_bottom(self):
		for k in Kind:
			if k is not Kind.VARIANT: self.assertIs(k, join(Kind.NONE, k))

	def test_undefined_pairs(self):
		self.assertIsNone(join(Kind.SET, Kind.TUPLE))
		self.assertIsNone(join(Kind.INTEGER, Kind.MATRIX_INTEGER))
		self.assertIsNone(join(Kind.SET, Kind.REAL))
		self.assertIsNone(join(None, Kind.BOOLEAN))
		self.assertIsNone(join_all(Kind.INTEGER, Kind.TUPLE, Kind.REAL))

	def test_fixed_numbering(self):
		self.assertEqual(list(range(12)), [k.value for k in Kind])
		self.assertEqual(10, Kind.MATRIX_REAL)

	def test_coefficients(self):
		self.assertIs(Kind.REAL, coefficient_kind(Kind.MATRIX_REAL))
		self.assertIs(Kind.MATRIX_BOOLEAN, matrix_kind(Kind.BOOLEAN))
		self.assertTrue(is_scalar(Kind.COMPLEX))
		self.assertFalse(is_scalar(Kind.NONE))
		self.assertTrue(is_matrix(Kind.MATRIX_INTEGER))
		self.assertFalse(is_matrix(Kind.TUPLE))

if __name__ == '__main__':
	unittest.main()
