"""
Kind-to-kind conversion of (kind, payload) pairs.

Every route answers (value, ok) and never raises. A failed conversion
answers the target kind's empty value, freshly made.
"""
from typing import Any

from .kinds import Kind, is_scalar, is_matrix
from .tuples import Tuple
from .sets import Set
from .matrix import MATRIX_CLASSES
from . import scalars

def empty(kind:Kind):
	""" The zero or empty value of a kind. """
	if is_scalar(kind): return scalars.ZERO[kind]
	if is_matrix(kind): return MATRIX_CLASSES[kind]()
	if kind is Kind.SET: return Set()
	if kind is Kind.TUPLE: return Tuple()
	return None

def private(kind:Kind, payload):
	""" A value-copy of a payload: containers get a new handle, scalars are immutable anyway. """
	if kind in (Kind.SET, Kind.TUPLE) or is_matrix(kind): return payload.clone()
	return payload

def convert(kind:Kind, payload, target:Kind) -> tuple[Any, bool]:
	if target is kind: return private(kind, payload), True
	if is_scalar(kind) and is_scalar(target): return scalars.convert(payload, target)
	if is_matrix(kind) and is_matrix(target): return payload.to_kind(target)
	if kind in (Kind.SET, Kind.TUPLE) and target is Kind.BOOLEAN: return not payload.is_empty(), True
	return empty(target), False

def can_translate(kind:Kind, payload, target:Kind) -> bool:
	return convert(kind, payload, target)[1]
