"""
The Variant: one value of any kind, with value semantics.

Scalars are held directly. Containers (Set, Tuple, and the matrices) are
held by a handle of the Variant's own, which may share storage copy-on-write
with handles elsewhere. So copying a Variant is cheap, and mutating one never
shows through another.
"""
from typing import Any

import numpy as np

from .kinds import Kind, is_matrix
from .tuples import Tuple
from .sets import Set
from .matrix import Matrix, matrix_from_array
from .failures import InvalidRuntimeConversion, TypeDoesNotSupportSubscripts, InvalidNumericValue, InvalidParameterValue
from . import conversion, dispatch, hashing, scalars

def _adopt(value) -> tuple[Kind, Any]:
	""" The (kind, payload) pair for a Python value, with containers freshly handled. """
	value = scalars.native(value)
	if value is None: return Kind.NONE, None
	if isinstance(value, Variant): return value._kind, conversion.private(value._kind, value._payload)
	kind = scalars.kind_of(value)
	if kind is Kind.INTEGER and not scalars.INTEGER_MIN <= value <= scalars.INTEGER_MAX:
		raise InvalidNumericValue("integer out of 64-bit range", value)
	if kind is not None: return kind, value
	if isinstance(value, Tuple): return Kind.TUPLE, value.clone()
	if isinstance(value, Set): return Kind.SET, value.clone()
	if isinstance(value, Matrix): return value.KIND, value.clone()
	if isinstance(value, str): return Kind.TUPLE, Tuple.from_string(value)
	if isinstance(value, (tuple, list)): return Kind.TUPLE, Tuple(value)
	if isinstance(value, (set, frozenset)): return Kind.SET, Set(value)
	if isinstance(value, np.ndarray):
		m = matrix_from_array(value)
		return m.KIND, m
	if hasattr(value, "to_tuple"): return Kind.TUPLE, value.to_tuple()
	raise InvalidParameterValue("no kind of value holds %r"%(value,))

def _wrap_operand(other):
	""" other as a Variant, or None if it cannot be one. """
	if isinstance(other, Variant): return other
	try: return Variant(other)
	except InvalidParameterValue: return None

class Variant:
	def __init__(self, value=None):
		self._kind, self._payload = _adopt(value)

	@classmethod
	def _of(cls, kind:Kind, payload) -> "Variant":
		""" Wrap a pair which nothing else holds. """
		v = object.__new__(cls)
		v._kind, v._payload = kind, payload
		return v

	def kind(self) -> Kind: return self._kind

	def pair(self) -> tuple[Kind, Any]:
		""" The kind and payload, without copying. Treat the payload as read-only. """
		return self._kind, self._payload

	def value(self):
		""" The payload as a plain Python value or a private container handle. """
		return conversion.private(self._kind, self._payload)

	def clone(self) -> "Variant": return Variant._of(self._kind, conversion.private(self._kind, self._payload))
	def __copy__(self): return self.clone()
	def __deepcopy__(self, memo): return self.clone()

	def assign(self, other) -> "Variant":
		""" Whole-value assignment. """
		self._kind, self._payload = _adopt(other)
		return self

	###########################################################################
	# Conversion

	def can_translate_to(self, target:Kind) -> bool:
		return conversion.can_translate(self._kind, self._payload, target)

	def to(self, target:Kind) -> tuple[Any, bool]:
		""" (converted value, ok). Never raises; on failure the value is the target kind's empty value. """
		return conversion.convert(self._kind, self._payload, target)

	def as_(self, target:Kind):
		value, ok = self.to(target)
		if not ok: raise InvalidRuntimeConversion(self._kind, target)
		return value

	def to_boolean(self): return self.to(Kind.BOOLEAN)
	def to_integer(self): return self.to(Kind.INTEGER)
	def to_real(self): return self.to(Kind.REAL)
	def to_complex(self): return self.to(Kind.COMPLEX)
	def to_set(self): return self.to(Kind.SET)
	def to_tuple(self): return self.to(Kind.TUPLE)
	def to_matrix_boolean(self): return self.to(Kind.MATRIX_BOOLEAN)
	def to_matrix_integer(self): return self.to(Kind.MATRIX_INTEGER)
	def to_matrix_real(self): return self.to(Kind.MATRIX_REAL)
	def to_matrix_complex(self): return self.to(Kind.MATRIX_COMPLEX)

	def as_boolean(self) -> bool: return self.as_(Kind.BOOLEAN)
	def as_integer(self) -> int: return self.as_(Kind.INTEGER)
	def as_real(self) -> float: return self.as_(Kind.REAL)
	def as_complex(self) -> complex: return self.as_(Kind.COMPLEX)
	def as_set(self) -> Set: return self.as_(Kind.SET)
	def as_tuple(self) -> Tuple: return self.as_(Kind.TUPLE)
	def as_matrix_boolean(self): return self.as_(Kind.MATRIX_BOOLEAN)
	def as_matrix_integer(self): return self.as_(Kind.MATRIX_INTEGER)
	def as_matrix_real(self): return self.as_(Kind.MATRIX_REAL)
	def as_matrix_complex(self): return self.as_(Kind.MATRIX_COMPLEX)

	###########################################################################
	# Elements

	def at(self, *subscripts) -> "Variant":
		subscripts = [s._payload if isinstance(s, Variant) and s._kind in (Kind.TUPLE, Kind.SET) else s for s in subscripts]
		if is_matrix(self._kind):
			found = self._payload.at(*subscripts)
			return Variant(found)
		if self._kind is Kind.TUPLE and len(subscripts) == 1: return self._payload.at(_subscript(subscripts[0]))
		raise TypeDoesNotSupportSubscripts(self._kind)

	def update(self, *args) -> "Variant":
		"""
		update(row, column, value) for matrices, or update(index, value) for matrices and tuples.
		The value is converted to the coefficient kind before anything is written.
		"""
		if len(args) not in (2, 3): raise TypeDoesNotSupportSubscripts(self._kind)
		*where, value = args
		if is_matrix(self._kind): self._payload.update(*where, value)
		elif self._kind is Kind.TUPLE and len(where) == 1:
			self._payload.update(_subscript(where[0]), value)
		else: raise TypeDoesNotSupportSubscripts(self._kind)
		return self

	###########################################################################
	# Operators

	def _binary(self, op, other, reflected=False):
		other = _wrap_operand(other)
		if other is None: return NotImplemented
		lhs, rhs = (other, self) if reflected else (self, other)
		return Variant._of(*dispatch.binary(op, lhs.pair(), rhs.pair()))

	def __add__(self, other): return self._binary("+", other)
	def __sub__(self, other): return self._binary("-", other)
	def __mul__(self, other): return self._binary("*", other)
	def __truediv__(self, other): return self._binary("/", other)
	def __pow__(self, other): return self._binary("^", other)
	def __radd__(self, other): return self._binary("+", other, True)
	def __rsub__(self, other): return self._binary("-", other, True)
	def __rmul__(self, other): return self._binary("*", other, True)
	def __rtruediv__(self, other): return self._binary("/", other, True)
	def __rpow__(self, other): return self._binary("^", other, True)

	def __and__(self, other): return self._binary("&&", other)
	def __or__(self, other): return self._binary("||", other)
	def __rand__(self, other): return self._binary("&&", other, True)
	def __ror__(self, other): return self._binary("||", other, True)

	def __neg__(self): return Variant._of(*dispatch.unary("-", self.pair()))
	def __pos__(self): return Variant._of(*dispatch.unary("+", self.pair()))
	def __invert__(self): return Variant._of(*dispatch.unary("!", self.pair()))

	def logical_and(self, other) -> "Variant": return self & other
	def logical_or(self, other) -> "Variant": return self | other
	def logical_not(self) -> "Variant": return ~self

	def __eq__(self, other):
		other = _wrap_operand(other)
		if other is None: return NotImplemented
		return dispatch.equal(self.pair(), other.pair())

	def __ne__(self, other):
		result = self.__eq__(other)
		if result is NotImplemented: return result
		return not result

	def _order(self, op, other):
		other = _wrap_operand(other)
		if other is None: return NotImplemented
		return dispatch.order(op, self.pair(), other.pair())

	def __lt__(self, other): return self._order("<", other)
	def __gt__(self, other): return self._order(">", other)
	def __le__(self, other): return self._order("<=", other)
	def __ge__(self, other): return self._order(">=", other)

	def __bool__(self): return self.as_boolean()
	def __hash__(self): return hashing.hash_of(self)

	###########################################################################
	# Named numeric functions

	def apply(self, name:str) -> "Variant":
		""" Apply the named numeric function (ln, sin, floor, ...) to a scalar. """
		return Variant._of(*dispatch.numeric(name, self.pair()))

	def ln(self): return self.apply("ln")
	def log10(self): return self.apply("log10")
	def sqrt(self): return self.apply("sqrt")
	def exp(self): return self.apply("exp")

	def abs(self): return self.apply("abs")
	def conj(self): return self.apply("conj")
	def floor(self): return self.apply("floor")
	def ceil(self): return self.apply("ceil")
	def nint(self): return self.apply("nint")

	def sin(self): return self.apply("sin")
	def cos(self): return self.apply("cos")
	def tan(self): return self.apply("tan")
	def asin(self): return self.apply("asin")
	def acos(self): return self.apply("acos")
	def atan(self): return self.apply("atan")
	def sinh(self): return self.apply("sinh")
	def cosh(self): return self.apply("cosh")
	def tanh(self): return self.apply("tanh")
	def asinh(self): return self.apply("asinh")
	def acosh(self): return self.apply("acosh")
	def atanh(self): return self.apply("atanh")

	__abs__ = abs

	def __repr__(self):
		if self._kind is Kind.NONE: return "Variant(None)"
		return "Variant(%s: %r)"%(self._kind, self._payload)

def _subscript(index):
	if isinstance(index, Variant): return index.as_integer()
	return index
