"""
The closed set of kinds a Variant may hold, and the promotion lattice over them.

The scalar kinds form a chain (boolean < integer < real < complex), and so do
the matrix kinds. Sets and tuples join only with themselves. The kind "none"
sits below everything, and "undefined" (spelled None here) sits above
everything: it absorbs any further join, which keeps the table associative.

The table is the single source of truth for mixed-kind operations.
"""
from enum import IntEnum
from typing import Optional

class Kind(IntEnum):
	# The numbering is part of the binary matrix file format. Do not renumber.
	NONE = 0
	VARIANT = 1  # Placeholder for "not known until run-time". Never the kind of a stored value.
	BOOLEAN = 2
	INTEGER = 3
	REAL = 4
	COMPLEX = 5
	SET = 6
	TUPLE = 7
	MATRIX_BOOLEAN = 8
	MATRIX_INTEGER = 9
	MATRIX_REAL = 10
	MATRIX_COMPLEX = 11

	def __str__(self): return self.name.lower()

SCALAR_KINDS = (Kind.BOOLEAN, Kind.INTEGER, Kind.REAL, Kind.COMPLEX)
MATRIX_KINDS = (Kind.MATRIX_BOOLEAN, Kind.MATRIX_INTEGER, Kind.MATRIX_REAL, Kind.MATRIX_COMPLEX)

def is_scalar(kind:Kind) -> bool: return kind in SCALAR_KINDS
def is_matrix(kind:Kind) -> bool: return kind in MATRIX_KINDS

def coefficient_kind(kind:Kind) -> Kind:
	""" The scalar kind of one coefficient of a matrix kind. """
	return SCALAR_KINDS[MATRIX_KINDS.index(kind)]

def matrix_kind(kind:Kind) -> Kind:
	""" The matrix kind whose coefficients have the given scalar kind. """
	return MATRIX_KINDS[SCALAR_KINDS.index(kind)]

def at_least(kind:Kind, floor:Kind) -> Kind:
	""" Raise a kind to a floor within its own chain. """
	return max(kind, floor)

###############################################################################

def _build_table() -> tuple[tuple[Optional[Kind], ...], ...]:
	def cell(a:Kind, b:Kind) -> Optional[Kind]:
		if Kind.VARIANT in (a, b): return None
		if a is Kind.NONE: return b
		if b is Kind.NONE: return a
		if is_scalar(a) and is_scalar(b): return max(a, b)
		if is_matrix(a) and is_matrix(b): return max(a, b)
		if a is b: return a
		return None
	return tuple(tuple(cell(a, b) for b in Kind) for a in Kind)

JOIN = _build_table()

def join(a:Optional[Kind], b:Optional[Kind]) -> Optional[Kind]:
	"""
	The least upper bound of two kinds, or None where the pair has no join.
	Undefined is absorbing, so this composes: join(join(a, b), c) == join(a, join(b, c)).
	"""
	if a is None or b is None: return None
	return JOIN[a][b]

def join_all(*kinds:Kind) -> Optional[Kind]:
	result = Kind.NONE
	for k in kinds: result = join(result, k)
	return result
