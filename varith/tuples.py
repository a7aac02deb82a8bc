"""
Ordered, heterogeneous sequences of Variants, indexed from 1.
"""
from typing import Iterable

from .storage import CopyOnWrite
from .failures import InvalidIndex, InvalidParameterValue, CanNotConvertToString
from .kinds import Kind

def element(item):
	""" A Variant holding (a value-copy of) item. """
	from .variant import Variant
	return Variant(item)

class Tuple(CopyOnWrite):
	def __init__(self, items:Iterable=()):
		self._attach([element(x) for x in items])

	@classmethod
	def build(cls, *items) -> "Tuple": return cls(items)

	@classmethod
	def from_string(cls, text:str) -> "Tuple":
		""" One integer element per character: its code point. """
		return cls(ord(c) for c in text)

	def _duplicate(self, payload): return list(payload)

	def size(self) -> int: return len(self._read())
	def __len__(self): return len(self._read())
	def is_empty(self) -> bool: return not self._read()

	def _check(self, index, limit):
		if not isinstance(index, int) or isinstance(index, bool) or not 1 <= index <= limit:
			raise InvalidIndex(index, limit)

	def at(self, index:int):
		self._check(index, len(self._read()))
		return self._read()[index-1].clone()

	def update(self, index:int, value) -> "Tuple":
		"""
		Replace the element at a 1-based index. Updating at size+1 appends.
		Any other index outside the tuple is an error.
		"""
		items = self._read()
		self._check(index, len(items)+1)
		value = element(value)
		items = self._write()
		if index == len(items)+1: items.append(value)
		else: items[index-1] = value
		return self

	def append(self, value) -> "Tuple":
		self._write().append(element(value))
		return self

	def clear(self):
		if self._read(): self._replace([])

	def __iter__(self):
		for item in list(self._read()): yield item.clone()

	def __mul__(self, other):
		""" Concatenation. """
		if not isinstance(other, Tuple): return NotImplemented
		result = object.__new__(Tuple)
		result._attach(self._read() + other._read())
		return result

	def __truediv__(self, other):
		"""
		Strip a suffix: (a * b) / b == a. Dividing by anything other
		than a suffix of this tuple is an error.
		"""
		if not isinstance(other, Tuple): return NotImplemented
		mine, theirs = self._read(), other._read()
		keep = len(mine) - len(theirs)
		if keep < 0 or mine[keep:] != theirs:
			raise InvalidParameterValue("%r does not end with %r"%(self, other))
		result = object.__new__(Tuple)
		result._attach(mine[:keep])
		return result

	def __eq__(self, other):
		if not isinstance(other, Tuple): return NotImplemented
		return self._read() == other._read()

	def __hash__(self):
		from .hashing import hash_of
		return hash_of(self)

	def to_string(self) -> str:
		""" The inverse of from_string. Every element must be an integer code point. """
		chars = []
		for item in self._read():
			value, ok = item.to(Kind.INTEGER)
			if not ok or not 0 <= value <= 0x10FFFF: raise CanNotConvertToString(repr(item))
			chars.append(chr(value))
		return "".join(chars)

	def __repr__(self):
		return "Tuple(%s)"%", ".join(map(repr, self._read()))
