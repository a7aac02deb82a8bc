import copy
import unittest

from varith.storage import Shared, CopyOnWrite

class Box(CopyOnWrite):
	""" The smallest possible copy-on-write container: a list. """
	def __init__(self, *items): self._attach(list(items))
	def _duplicate(self, payload): return list(payload)
	def items(self): return list(self._read())
	def push(self, item): self._write().append(item)

class SharedCellTests(unittest.TestCase):

	def test_counting(self):
		cell = Shared([])
		self.assertFalse(cell.is_shared())
		self.assertIs(cell, cell.share())
		self.assertTrue(cell.is_shared())
		cell.release()
		self.assertFalse(cell.is_shared())

class CopyOnWriteTests(unittest.TestCase):

	def test_clone_shares_until_written(self):
		a = Box(1, 2)
		b = a.clone()
		self.assertTrue(a.is_shared())
		self.assertIs(a._read(), b._read())
		b.push(3)
		self.assertEqual([1, 2], a.items())
		self.assertEqual([1, 2, 3], b.items())
		self.assertFalse(a.is_shared())
		self.assertFalse(b.is_shared())

	def test_private_storage_is_written_in_place(self):
		a = Box(1)
		payload = a._read()
		a.push(2)
		self.assertIs(payload, a._read())

	def test_dropping_a_clone_releases_the_cell(self):
		a = Box(1)
		b = a.clone()
		del b
		self.assertFalse(a.is_shared())

	def test_copy_module(self):
		a = Box(1)
		for twin in (copy.copy(a), copy.deepcopy(a)):
			with self.subTest(twin=twin):
				self.assertIsInstance(twin, Box)
				twin.push(9)
				self.assertEqual([1], a.items())

	def test_replace_leaves_sharers_alone(self):
		a = Box(1)
		b = a.clone()
		b._replace([7])
		self.assertEqual([1], a.items())
		self.assertEqual([7], b.items())
		self.assertFalse(a.is_shared())

if __name__ == '__main__':
	unittest.main()
