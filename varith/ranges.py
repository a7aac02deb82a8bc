"""
Arithmetic progressions, written first..last or first,second..last.

The bounds must be integer or real. Booleans are tolerated alongside an integer,
but a range made only of booleans is refused, as is anything complex, a set,
a tuple, a matrix, or none.
"""
import math

from .kinds import Kind, join_all
from .failures import InvalidRangeParameter, RangePosition, InvalidIndex, InvalidParameterValue
from .tuples import Tuple
from .variant import Variant
from . import settings

_NUMERIC_BOUND = (Kind.BOOLEAN, Kind.INTEGER, Kind.REAL)

class Range:
	def __init__(self, first, *rest):
		if len(rest) == 1: positions = (RangePosition.FIRST, RangePosition.LAST)
		elif len(rest) == 2: positions = (RangePosition.FIRST, RangePosition.SECOND, RangePosition.LAST)
		else: raise InvalidParameterValue("Range takes first and last, or first, second and last")
		bounds = [Variant(b) for b in (first, *rest)]
		for position, bound in zip(positions, bounds):
			if bound.kind() not in _NUMERIC_BOUND: raise InvalidRangeParameter(position, bound.kind())
		kind = join_all(*(b.kind() for b in bounds))
		if kind is Kind.BOOLEAN: raise InvalidRangeParameter(RangePosition.FIRST, kind)
		self.kind = kind
		values = [b.as_(kind) for b in bounds]
		if not all(map(math.isfinite, values)): raise InvalidParameterValue("Range bounds must be finite", values)
		self._first, self._last = values[0], values[-1]
		if len(values) == 3: self._step = values[1] - values[0]
		else: self._step = 1 if self._last >= self._first else -1

	def first(self): return self._first
	def second(self): return self._first + self._step
	def last(self): return self._last
	def step(self): return self._step

	def size(self) -> int:
		if self._step == 0: return 1
		span = self._last - self._first
		if span and (span < 0) != (self._step < 0): return 0
		if self.kind is Kind.INTEGER: return span // self._step + 1
		return math.floor(span / self._step + settings.RANGE_TOLERANCE) + 1

	def __len__(self): return self.size()
	def is_empty(self) -> bool: return self.size() == 0

	def _value(self, offset):
		return self._first + offset * self._step

	def at(self, index:int) -> Variant:
		""" The element at a 1-based position. """
		size = self.size()
		if not isinstance(index, int) or not 1 <= index <= size: raise InvalidIndex(index, size)
		return Variant(self._value(index - 1))

	def __iter__(self):
		for offset in range(self.size()): yield Variant(self._value(offset))

	def contains(self, value) -> bool:
		""" True if value is one of the elements of this range. """
		value, ok = Variant(value).to(Kind.REAL)
		if not ok or not math.isfinite(value): return False
		if self._step == 0: return value == self._first
		offset = (value - self._first) / self._step
		tolerance = settings.RANGE_TOLERANCE
		if offset < -tolerance or offset > self.size() - 1 + tolerance: return False
		return abs(offset - round(offset)) <= tolerance * max(1.0, abs(offset))

	__contains__ = contains

	def to_tuple(self) -> Tuple: return Tuple(self)

	def __repr__(self):
		return "Range(%r, %r, %r)"%(self._first, self.second(), self._last)
