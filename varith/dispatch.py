"""
Operator dispatch over (kind, payload) pairs.

Each operator finds the join of its operands' kinds, coerces both operands
to that kind, and runs the implementation for it. Results come back as a
fresh (kind, payload) pair for the caller to wrap.
"""
import operator
from typing import Any

from .kinds import Kind, join, is_scalar, is_matrix
from .failures import InvalidParameterValue, InvalidRuntimeConversion
from . import conversion, scalars

TYPED = tuple[Kind, Any]

def coerce(pair:TYPED, target:Kind):
	kind, payload = pair
	value, ok = conversion.convert(kind, payload, target)
	if not ok: raise InvalidRuntimeConversion(kind, target)
	return value

def _undefined(op, *pairs):
	return InvalidParameterValue("%s is not defined on %s"%(op, ", ".join(str(k) for k, _ in pairs)))

###############################################################################
# Arithmetic

MATRIX_ARITHMETIC = {
	"+": operator.add,
	"-": operator.sub,
	"*": operator.mul,
}

def _matrix_by_scalar(op, lhs:TYPED, rhs:TYPED) -> TYPED:
	matrix_on_left = is_matrix(lhs[0])
	m, s = (lhs, rhs) if matrix_on_left else (rhs, lhs)
	if op == "*": result = m[1] * s[1]
	elif op == "/" and matrix_on_left: result = m[1] / s[1]
	else: raise _undefined(op, lhs, rhs)
	return result.KIND, result

def arithmetic(op:str, lhs:TYPED, rhs:TYPED) -> TYPED:
	if is_matrix(lhs[0]) and is_matrix(rhs[0]):
		if op not in MATRIX_ARITHMETIC: raise _undefined(op, lhs, rhs)
		result = MATRIX_ARITHMETIC[op](lhs[1], rhs[1])
		return result.KIND, result
	if is_matrix(lhs[0]) and is_scalar(rhs[0]) or is_scalar(lhs[0]) and is_matrix(rhs[0]):
		return _matrix_by_scalar(op, lhs, rhs)
	kind = join(lhs[0], rhs[0])
	if kind is None: raise _undefined(op, lhs, rhs)
	if Kind.NONE in (lhs[0], rhs[0]):
		raise InvalidRuntimeConversion(Kind.NONE, kind if kind > Kind.COMPLEX else max(kind, Kind.INTEGER))
	if is_scalar(kind):
		kind = max(kind, Kind.INTEGER)
		a, b = coerce(lhs, kind), coerce(rhs, kind)
		if op == "^": return _power(a, b)
		return kind, scalars.ARITHMETIC[op][kind](a, b)
	if kind is Kind.TUPLE and op in ("*", "/"):
		return kind, (lhs[1] * rhs[1] if op == "*" else lhs[1] / rhs[1])
	raise _undefined(op, lhs, rhs)

def _power(a, b) -> TYPED:
	result = scalars.power(a, b)
	return scalars.kind_of(result), result

###############################################################################
# Logic

LOGIC = {"&&": operator.and_, "||": operator.or_}

def logical(op:str, lhs:TYPED, rhs:TYPED) -> TYPED:
	if is_matrix(lhs[0]) and is_matrix(rhs[0]):
		result = lhs[1].logical_and(rhs[1]) if op == "&&" else lhs[1].logical_or(rhs[1])
		return result.KIND, result
	if is_matrix(lhs[0]) or is_matrix(rhs[0]): raise _undefined(op, lhs, rhs)
	return Kind.BOOLEAN, LOGIC[op](coerce(lhs, Kind.BOOLEAN), coerce(rhs, Kind.BOOLEAN))

###############################################################################

BINARY = {
	"+": arithmetic, "-": arithmetic, "*": arithmetic, "/": arithmetic, "^": arithmetic,
	"&&": logical, "||": logical,
}

def binary(op:str, lhs:TYPED, rhs:TYPED) -> TYPED:
	try: handler = BINARY[op]
	except KeyError: raise InvalidParameterValue("no such operator: %r"%op)
	return handler(op, lhs, rhs)

def unary(op:str, operand:TYPED) -> TYPED:
	kind, payload = operand
	if op == "!":
		if is_matrix(kind):
			result = payload.logical_not()
			return result.KIND, result
		return Kind.BOOLEAN, not coerce(operand, Kind.BOOLEAN)
	if op not in ("+", "-"): raise InvalidParameterValue("no such operator: %r"%op)
	if is_matrix(kind):
		result = -payload if op == "-" else +payload
		return result.KIND, result
	if is_scalar(kind) or kind is Kind.NONE:
		kind = max(kind, Kind.INTEGER)
		value = coerce(operand, kind)
		return kind, scalars.NEGATE[kind](value) if op == "-" else value
	raise _undefined(op, operand)

def numeric(name:str, operand:TYPED) -> TYPED:
	"""
	A named function of one scalar, from scalars.NAMED. The argument is brought
	within the kinds the function accepts first, so floor of a complex number
	with an imaginary part is a conversion failure.
	"""
	try: function, narrowest, widest = scalars.NAMED[name]
	except KeyError: raise InvalidParameterValue("no such function: %r"%name)
	kind = operand[0]
	if not is_scalar(kind): raise _undefined(name, operand)
	value = coerce(operand, min(max(kind, narrowest), widest))
	result = function(value)
	return scalars.kind_of(result), result

###############################################################################
# Comparison

def equal(lhs:TYPED, rhs:TYPED) -> bool:
	""" Equality after promotion to the join. No join means not equal. """
	kind = join(lhs[0], rhs[0])
	if kind is None: return False
	if kind is Kind.NONE: return True
	a, ok_a = conversion.convert(*lhs, kind)
	b, ok_b = conversion.convert(*rhs, kind)
	return ok_a and ok_b and bool(a == b)

RELATIONS = {"<": operator.lt, ">": operator.gt, "<=": operator.le, ">=": operator.ge}

def order(op:str, lhs:TYPED, rhs:TYPED) -> bool:
	""" Ordering, for scalars only. Complex numbers must have no imaginary part. """
	if not (is_scalar(lhs[0]) and is_scalar(rhs[0])): raise _undefined(op, lhs, rhs)
	kind = join(lhs[0], rhs[0])
	a, b = coerce(lhs, kind), coerce(rhs, kind)
	if kind is Kind.COMPLEX:
		if a.imag or b.imag: raise InvalidParameterValue("complex numbers with an imaginary part have no order")
		a, b = a.real, b.real
	return RELATIONS[op](a, b)
