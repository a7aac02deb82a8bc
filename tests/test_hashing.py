import unittest

from varith import hashing
from varith.variant import Variant
from varith.tuples import Tuple
from varith.sets import Set
from varith.matrix import MatrixInteger, MatrixReal, MatrixComplex

class FnvTests(unittest.TestCase):
	""" Published FNV-1a 64-bit test vectors. """

	def test_vectors(self):
		self.assertEqual(0xcbf29ce484222325, hashing.fnv1a(b""))
		self.assertEqual(0xaf63dc4c8601ec8c, hashing.fnv1a(b"a"))
		self.assertEqual(0x85944171f73967e8, hashing.fnv1a(b"foobar"))

	def test_chunks_are_little_endian(self):
		self.assertEqual(hashing.fnv1a(b"\x01\x00\x00\x00"), hashing.fnv1a32(1))
		self.assertEqual(hashing.fnv1a(b"\x02\x01"), hashing.fnv1a16(0x0102))
		self.assertEqual(hashing.fnv1a(b"\xff"*8), hashing.fnv1a64(-1))

class ConsistencyTests(unittest.TestCase):
	""" Whatever compares equal must hash equal. """

	def assertSameHash(self, a, b):
		self.assertEqual(a, b)
		self.assertEqual(hashing.hash_of(a), hashing.hash_of(b))

	def test_scalars_across_kinds(self):
		self.assertSameHash(Variant(1), Variant(1.0))
		self.assertSameHash(Variant(1), Variant(True))
		self.assertSameHash(Variant(2.5), Variant(2.5+0j))
		self.assertSameHash(Variant(7), Variant(7+0j))
		self.assertEqual(hashing.hash_of(3), hashing.hash_of(Variant(3.0)))

	def test_signed_zero(self):
		self.assertSameHash(Variant(0.0), Variant(-0.0))
		self.assertEqual(hashing.hash_real(0.0), hashing.hash_real(-0.0))

	def test_matrices_across_kinds(self):
		self.assertSameHash(Variant(MatrixInteger.build(1, 2, 1, 2)), Variant(MatrixReal.build(1, 2, 1.0, 2.0)))
		self.assertSameHash(MatrixReal.build(1, 1, -0.0), MatrixComplex.build(1, 1, 0j))

	def test_integers_beyond_double_precision(self):
		big = 2**53 + 1
		self.assertSameHash(Variant(big), Variant(2.0**53))
		self.assertSameHash(Variant(2**63 - 1), Variant(2.0**63))
		self.assertSameHash(MatrixInteger.build(1, 2, big, 3), MatrixReal.build(1, 2, 2.0**53, 3.0))
		self.assertEqual(1, len(Set.build(big, 2.0**53)))
		self.assertEqual(2, len(Set.build(2**53, big)))

	def test_shape_matters(self):
		row = MatrixInteger.build(1, 2, 5, 6)
		column = MatrixInteger.build(2, 1, 5, 6)
		self.assertNotEqual(hashing.hash_of(row), hashing.hash_of(column))

	def test_tuple_order_matters(self):
		self.assertNotEqual(hashing.hash_of(Tuple.build(1, 2)), hashing.hash_of(Tuple.build(2, 1)))

	def test_set_order_does_not(self):
		self.assertSameHash(Set.build(1, 2, 3), Set.build(3, 1, 2))

	def test_seed_matters(self):
		self.assertNotEqual(hashing.hash_of(Variant(5), 0), hashing.hash_of(Variant(5), 1))
		self.assertNotEqual(hashing.hash_integer(5, 0), hashing.hash_integer(5, 1))

	def test_variant_hash_matches_hash_of(self):
		v = Variant(Tuple.build(1, 2.5, "x"))
		self.assertEqual(hash(v), hash(Variant(v)))

if __name__ == '__main__':
	unittest.main()
