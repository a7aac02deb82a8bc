"""
Set algebra.

Operands may be Sets, Variants holding sets, or plain Python sets.
Anything else is refused with InvalidRuntimeConversion.
"""
from .kinds import Kind, is_matrix
from .sets import Set
from .tuples import Tuple
from .variant import Variant
from .failures import InvalidRuntimeConversion

def _set(operand) -> Set:
	if isinstance(operand, Set): return operand
	if isinstance(operand, (set, frozenset)): return Set(operand)
	return Variant(operand).as_set()

def union_of(*operands) -> Set:
	result = Set()
	for operand in operands:
		for item in _set(operand): result.insert(item)
	return result

def intersection_of(first, *others) -> Set:
	first, others = _set(first), [_set(x) for x in others]
	return Set(item for item in first if all(item in other for other in others))

def relative_complement_of(a, b) -> Set:
	""" The elements of a which are not in b. """
	a, b = _set(a), _set(b)
	return Set(item for item in a if item not in b)

def symmetric_difference_of(a, b) -> Set:
	a, b = _set(a), _set(b)
	return union_of(relative_complement_of(a, b), relative_complement_of(b, a))

def disjoint_union_of(*operands) -> Set:
	""" Each element tagged with the (1-based) position of the operand it came from, as (element, origin). """
	result = Set()
	for origin, operand in enumerate(operands, 1):
		for item in _set(operand): result.insert(Tuple.build(item, origin))
	return result

def cartesian_product_of(a, b) -> Set:
	""" All the 2-tuples (x, y) with x from a and y from b. """
	a, b = _set(a), _set(b)
	return Set(Tuple.build(x, y) for x in a for y in b)

def is_subset_of(a, b) -> bool:
	a, b = _set(a), _set(b)
	return all(item in b for item in a)

def is_proper_subset_of(a, b) -> bool:
	return is_subset_of(a, b) and len(_set(a)) < len(_set(b))

def is_superset_of(a, b) -> bool: return is_subset_of(b, a)
def is_proper_superset_of(a, b) -> bool: return is_proper_subset_of(b, a)

def alphabet(operand) -> Set:
	""" The set of distinct elements of a tuple (or string), or of the coefficients of a matrix. """
	v = Variant(operand)
	kind = v.kind()
	if kind is Kind.TUPLE or kind is Kind.SET or is_matrix(kind): return Set(v.value())
	raise InvalidRuntimeConversion(kind, Kind.SET)
