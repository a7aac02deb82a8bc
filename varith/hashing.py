"""
FNV-1a hashing of values, seeded, and consistent with equality under promotion.

Values which compare equal must hash equal, even across kinds: integer 1,
real 1.0, complex 1+0i, and boolean true are all "the same". So before hashing,
every scalar is narrowed to the narrowest kind which represents it exactly,
and that canonical kind is stirred into the hash. Matrices narrow the same way,
as a whole. Real zero is normalized, so -0.0 and +0.0 hash alike.
"""
import struct

import numpy as np
from boozetools.support.foundation import Visitor

from .kinds import Kind
from . import scalars, settings

FNV_OFFSET_BASIS = 14695981039346656037
FNV_PRIME = 1099511628211
_MASK = (1 << 64) - 1

def fnv1a(data:bytes, state:int=FNV_OFFSET_BASIS) -> int:
	for byte in data: state = ((state ^ byte) * FNV_PRIME) & _MASK
	return state

def fnv1a8(value:int, state:int=FNV_OFFSET_BASIS) -> int: return fnv1a(struct.pack("<B", value & 0xFF), state)
def fnv1a16(value:int, state:int=FNV_OFFSET_BASIS) -> int: return fnv1a(struct.pack("<H", value & 0xFFFF), state)
def fnv1a32(value:int, state:int=FNV_OFFSET_BASIS) -> int: return fnv1a(struct.pack("<I", value & 0xFFFFFFFF), state)
def fnv1a64(value:int, state:int=FNV_OFFSET_BASIS) -> int: return fnv1a(struct.pack("<Q", value & _MASK), state)

def _start(seed:int) -> int: return fnv1a32(seed)

def _real_bits(x:float) -> int:
	return struct.unpack("<Q", struct.pack("<d", x + 0.0))[0]

###############################################################################
# Canonical forms

_EXACT = 2 ** 53

def narrow_scalar(value) -> tuple[Kind, object]:
	"""
	The narrowest scalar kind (and value) that represents `value` exactly.
	Integers too large for a double to hold exactly go by way of the double
	they compare equal to, so 2**53+1 narrows like 2.0**53.
	"""
	value = scalars.native(value)
	kind = scalars.kind_of(value)
	if kind is Kind.INTEGER and abs(value) > _EXACT: kind, value = Kind.REAL, float(value)
	if kind is Kind.COMPLEX and value.imag == 0: kind, value = Kind.REAL, value.real
	if kind is Kind.REAL:
		as_integer, ok = scalars.real_to_integer(value)
		if ok: kind, value = Kind.INTEGER, as_integer
	if kind is Kind.INTEGER and value in (0, 1): kind, value = Kind.BOOLEAN, bool(value)
	return kind, value

def narrow_array(array:np.ndarray) -> tuple[Kind, np.ndarray]:
	""" The narrowest coefficient kind (and array) that represents every entry exactly. """
	source = scalars.kind_of_dtype(array.dtype)
	if source is Kind.INTEGER and np.any((array > _EXACT) | (array < -_EXACT)):
		source, array = Kind.REAL, array.astype(np.float64)
	for kind in (Kind.BOOLEAN, Kind.INTEGER, Kind.REAL):
		if kind >= source: break
		if kind is Kind.BOOLEAN:
			if np.all((array == 0) | (array == 1)): return kind, array != 0
			continue
		narrowed, ok = scalars.convert_array(array, kind)
		if ok: return kind, narrowed
	return source, array

###############################################################################

class _Hasher(Visitor):
	"""
	Per-kind hash functions. Each starts from the offset basis stirred with the seed.
	Scalars arrive here already narrowed.
	"""
	@staticmethod
	def visit_NoneType(_, seed): return _start(seed)
	@staticmethod
	def visit_bool(value, seed): return fnv1a8(int(value), _start(seed))
	@staticmethod
	def visit_int(value, seed): return fnv1a64(value, _start(seed))
	@staticmethod
	def visit_float(value, seed): return fnv1a64(_real_bits(value), _start(seed))
	@staticmethod
	def visit_complex(value, seed): return fnv1a64(_real_bits(value.imag), fnv1a64(_real_bits(value.real), _start(seed)))

	def visit_Tuple(self, value, seed):
		state = fnv1a64(len(value), _start(seed))
		for position, item in enumerate(value, 1):
			state = fnv1a64(state ^ self.visit(item, seed + position))
		return state

	def visit_Set(self, value, seed):
		# XOR is commutative, so the hash does not depend on the order of insertion.
		mix = 0
		for item in value: mix ^= self.visit(item, seed + 1)
		return fnv1a64(mix, fnv1a64(len(value), _start(seed)))

	def visit_Matrix(self, value, seed):
		kind, array = narrow_array(value.data())
		state = fnv1a8(kind, fnv1a64(value.number_columns(), fnv1a64(value.number_rows(), _start(seed))))
		if kind is Kind.BOOLEAN: body = array.astype("u1")
		elif kind is Kind.INTEGER: body = array.astype("<i8")
		elif kind is Kind.REAL: body = array.astype("<f8") + 0.0
		else: body = array.astype("<c16") + 0.0
		return fnv1a(body.tobytes(order="F"), state)

	def visit_Variant(self, value, seed):
		return _typed(*value.pair(), seed)

_HASHER = _Hasher()

def _typed(kind:Kind, payload, seed:int) -> int:
	if kind.value <= Kind.COMPLEX:
		# Scalars and none carry their canonical kind; containers carry theirs in their own hash.
		if kind is not Kind.NONE: kind, payload = narrow_scalar(payload)
		return fnv1a64(_HASHER.visit(payload, seed), fnv1a8(kind, _start(seed)))
	return _HASHER.visit(payload, seed)

def hash_of(value, seed:int=None) -> int:
	"""
	A 64-bit hash of a Variant, a container, or a bare scalar.
	Bare scalars hash as a Variant holding them would, so hash_of(1) == hash_of(Variant(1)).
	"""
	seed = _seed(seed)
	value = scalars.native(value)
	if value is None: return _typed(Kind.NONE, None, seed)
	kind = scalars.kind_of(value)
	if kind is not None: return _typed(kind, value, seed)
	return _HASHER.visit(value, seed)

###############################################################################
# Per-kind hashes, for callers which already know what they hold. These do no narrowing.

def _seed(seed): return settings.DEFAULT_SEED if seed is None else seed

def hash_boolean(value:bool, seed:int=None) -> int: return _HASHER.visit_bool(bool(value), _seed(seed))
def hash_integer(value:int, seed:int=None) -> int: return _HASHER.visit_int(int(value), _seed(seed))
def hash_real(value:float, seed:int=None) -> int: return _HASHER.visit_float(float(value), _seed(seed))
def hash_complex(value:complex, seed:int=None) -> int: return _HASHER.visit_complex(complex(value), _seed(seed))
def hash_tuple(value, seed:int=None) -> int: return _HASHER.visit_Tuple(value, _seed(seed))
def hash_set(value, seed:int=None) -> int: return _HASHER.visit_Set(value, _seed(seed))
def hash_matrix(value, seed:int=None) -> int: return _HASHER.visit_Matrix(value, _seed(seed))
