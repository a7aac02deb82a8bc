"""
Unordered collections of distinct Variants.

Storage is an open-addressed hash table with linear probing. The slots index
into an entry list kept in insertion order, so iteration is deterministic.
Removal leaves a tombstone in the slot and a hole in the entry list;
both are swept out the next time the table is rebuilt.
"""
from typing import Iterable

from .storage import CopyOnWrite
from .failures import InvalidContainerContents
from .hashing import hash_of
from .tuples import element
from . import settings

EMPTY = -1
DELETED = -2

class _Table:
	def __init__(self, capacity:int):
		self.slots = [EMPTY] * capacity
		self.entries = []  # (hash, item) pairs, or None where an item was removed.
		self.live = 0
		self.occupied = 0  # Slots which are not EMPTY, tombstones included.
		self.version = 0

	def copy(self) -> "_Table":
		twin = _Table(len(self.slots))
		twin.slots = list(self.slots)
		twin.entries = list(self.entries)
		twin.live, twin.occupied = self.live, self.occupied
		return twin

	def _probe(self, code:int):
		mask = len(self.slots) - 1
		i = code & mask
		while True:
			yield i
			i = (i + 1) & mask

	def find(self, code:int, item) -> int:
		""" Index into entries of an item equal to this one, or -1. """
		for i in self._probe(code):
			slot = self.slots[i]
			if slot == EMPTY: return -1
			if slot >= 0:
				stored_code, stored = self.entries[slot]
				if stored_code == code and stored == item: return slot

	def insert(self, code:int, item) -> bool:
		if self.find(code, item) >= 0: return False
		if (self.occupied + 1) * 3 > len(self.slots) * 2: self._rebuild()
		for i in self._probe(code):
			if self.slots[i] < 0:
				if self.slots[i] == EMPTY: self.occupied += 1
				self.slots[i] = len(self.entries)
				break
		self.entries.append((code, item))
		self.live += 1
		self.version += 1
		return True

	def remove(self, code:int, item) -> bool:
		for i in self._probe(code):
			slot = self.slots[i]
			if slot == EMPTY: return False
			if slot >= 0:
				stored_code, stored = self.entries[slot]
				if stored_code == code and stored == item:
					self.slots[i] = DELETED
					self.entries[slot] = None
					self.live -= 1
					self.version += 1
					return True

	def _rebuild(self):
		# Mostly live entries: grow. Mostly tombstones: sweep at the same size.
		capacity = len(self.slots)
		if self.live * 2 >= capacity: capacity *= 2
		survivors = [e for e in self.entries if e is not None]
		self.slots = [EMPTY] * capacity
		self.entries = []
		for code, item in survivors:
			for i in self._probe(code):
				if self.slots[i] == EMPTY:
					self.slots[i] = len(self.entries)
					break
			self.entries.append((code, item))
		self.occupied = self.live = len(self.entries)

	def clear(self):
		self.slots = [EMPTY] * settings.TABLE_MINIMUM_CAPACITY
		self.entries = []
		self.live = self.occupied = 0
		self.version += 1

	def items(self):
		""" Live items in insertion order. The table must not change meanwhile. """
		version = self.version
		for entry in self.entries:
			if self.version != version: raise InvalidContainerContents("set changed during iteration")
			if entry is not None: yield entry[1]
		if self.version != version: raise InvalidContainerContents("set changed during iteration")


class Set(CopyOnWrite):
	def __init__(self, items:Iterable=()):
		self._attach(_Table(settings.TABLE_MINIMUM_CAPACITY))
		for x in items: self.insert(x)

	@classmethod
	def build(cls, *items) -> "Set": return cls(items)

	def _duplicate(self, payload:_Table): return payload.copy()

	def insert(self, value) -> bool:
		""" True if the value was not already a member. """
		item = element(value)
		code = hash_of(item)
		if self._read().find(code, item) >= 0: return False
		return self._write().insert(code, item)

	def remove(self, value) -> bool:
		""" True if the value was a member. """
		item = element(value)
		code = hash_of(item)
		if self._read().find(code, item) < 0: return False
		return self._write().remove(code, item)

	def contains(self, value) -> bool:
		item = element(value)
		return self._read().find(hash_of(item), item) >= 0

	__contains__ = contains

	def size(self) -> int: return self._read().live
	def __len__(self): return self._read().live
	def is_empty(self) -> bool: return not self._read().live

	def clear(self):
		if self._read().live: self._write().clear()

	def __iter__(self):
		for item in self._read().items(): yield item.clone()

	def __eq__(self, other):
		if not isinstance(other, Set): return NotImplemented
		if len(self) != len(other): return False
		table = other._read()
		return all(table.find(hash_of(item), item) >= 0 for item in self._read().items())

	def __hash__(self): return hash_of(self)

	def __repr__(self):
		return "Set(%s)"%", ".join(map(repr, self._read().items()))
