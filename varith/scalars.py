"""
Scalar coefficients: boolean, 64-bit integer, IEEE double, and complex double.

Scalars travel as plain Python bool/int/float/complex. Integers are kept inside
the signed 64-bit range by wrapping after every arithmetic step.
Conversions answer (value, ok) and never raise; the caller decides whether
a failed conversion is an error.
"""
import cmath
import math
import operator
import re
from typing import Any

import numpy as np
from boozetools.support.foundation import Visitor

from .kinds import Kind
from .failures import InvalidNumericValue, ResultIsNaN, ResultIsInfinite, MalformedString

INTEGER_MIN = -(1 << 63)
INTEGER_MAX = (1 << 63) - 1
_MASK = (1 << 64) - 1
_TWO_63 = 2.0 ** 63

DTYPES = {
	Kind.BOOLEAN: np.dtype(np.bool_),
	Kind.INTEGER: np.dtype(np.int64),
	Kind.REAL: np.dtype(np.float64),
	Kind.COMPLEX: np.dtype(np.complex128),
}
_DTYPE_KIND = {'b': Kind.BOOLEAN, 'i': Kind.INTEGER, 'u': Kind.INTEGER, 'f': Kind.REAL, 'c': Kind.COMPLEX}

def wrap(value:int) -> int:
	""" Two's-complement wrap into the signed 64-bit range. """
	return ((value - INTEGER_MIN) & _MASK) + INTEGER_MIN

def native(value):
	""" Unwrap a numpy scalar into the corresponding Python scalar. """
	if isinstance(value, np.generic): return value.item()
	return value

def kind_of(value) -> Kind|None:
	""" The scalar kind of a Python (or numpy) number, or None if it is not one. """
	value = native(value)
	if isinstance(value, bool): return Kind.BOOLEAN
	if isinstance(value, int): return Kind.INTEGER
	if isinstance(value, float): return Kind.REAL
	if isinstance(value, complex): return Kind.COMPLEX
	return None

def kind_of_dtype(dtype) -> Kind:
	return _DTYPE_KIND[np.dtype(dtype).kind]

ZERO = {Kind.BOOLEAN: False, Kind.INTEGER: 0, Kind.REAL: 0.0, Kind.COMPLEX: 0j}

###############################################################################
# Conversion between scalar kinds

def real_to_integer(x:float) -> tuple[int, bool]:
	if math.isfinite(x) and x == math.floor(x) and -_TWO_63 <= x < _TWO_63: return int(x), True
	return 0, False

def _to_boolean(v): return bool(v != 0), True
def _to_integer(v):
	if isinstance(v, complex):
		if v.imag != 0: return 0, False
		v = v.real
	if isinstance(v, float): return real_to_integer(v)
	return int(v), True
def _to_real(v):
	if isinstance(v, complex):
		if v.imag != 0: return 0.0, False
		return v.real, True
	return float(v), True
def _to_complex(v): return complex(v), True

_CONVERTERS = {
	Kind.BOOLEAN: _to_boolean,
	Kind.INTEGER: _to_integer,
	Kind.REAL: _to_real,
	Kind.COMPLEX: _to_complex,
}

def convert(value, target:Kind) -> tuple[Any, bool]:
	"""
	Convert a scalar to the scalar kind `target`, answering (result, ok).
	Anything which knows how to convert itself (i.e. a Variant) is asked to.
	"""
	value = native(value)
	if kind_of(value) is None:
		if hasattr(value, "to"): return value.to(target)
		return ZERO.get(target), False
	try: converter = _CONVERTERS[target]
	except KeyError: return None, False
	return converter(value)

def convert_array(array:np.ndarray, target:Kind) -> tuple[np.ndarray, bool]:
	""" Element-wise `convert` over a whole array. A single lossy element spoils the lot. """
	source = kind_of_dtype(array.dtype)
	dtype = DTYPES[target]
	if target is Kind.BOOLEAN: return np.asfortranarray(array != 0), True
	if source <= target: return np.asfortranarray(array, dtype=dtype), True
	if source is Kind.COMPLEX:
		if np.any(array.imag != 0): return np.zeros(array.shape, dtype, order='F'), False
		array = array.real
		if target is Kind.REAL: return np.asfortranarray(array, dtype=dtype), True
	with np.errstate(invalid='ignore'):
		integral = np.isfinite(array) & (array == np.floor(array)) & (array >= -_TWO_63) & (array < _TWO_63)
	if not np.all(integral): return np.zeros(array.shape, dtype, order='F'), False
	return np.asfortranarray(array, dtype=dtype), True

###############################################################################
# Arithmetic

def _wrapped(fn): return lambda a, b: wrap(fn(a, b))

def integer_divide(a:int, b:int) -> int:
	""" Quotient truncated toward zero, as in C. """
	if b == 0: raise InvalidNumericValue("integer division by zero")
	q = abs(a) // abs(b)
	return wrap(-q if (a < 0) != (b < 0) else q)

def real_divide(a:float, b:float) -> float:
	""" IEEE division: x/0 is a signed infinity, and 0/0 is NaN. """
	if b == 0.0:
		if a == 0.0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)
	return a / b

def complex_divide(a:complex, b:complex) -> complex:
	""" The textbook formula, so 0/0 is NaN in both parts. """
	den = b.real * b.real + b.imag * b.imag
	re_part = real_divide(a.real * b.real + a.imag * b.imag, den)
	im_part = real_divide(a.imag * b.real - a.real * b.imag, den)
	return complex(re_part, im_part)

ARITHMETIC = {
	"+": {Kind.INTEGER: _wrapped(operator.add), Kind.REAL: operator.add, Kind.COMPLEX: operator.add},
	"-": {Kind.INTEGER: _wrapped(operator.sub), Kind.REAL: operator.sub, Kind.COMPLEX: operator.sub},
	"*": {Kind.INTEGER: _wrapped(operator.mul), Kind.REAL: operator.mul, Kind.COMPLEX: operator.mul},
	"/": {Kind.INTEGER: integer_divide, Kind.REAL: real_divide, Kind.COMPLEX: complex_divide},
}

NEGATE = {Kind.INTEGER: lambda a: wrap(-a), Kind.REAL: operator.neg, Kind.COMPLEX: operator.neg}

###############################################################################
# Named numeric functions. These check their results, where the operators do not.

def _checked(name, result, *operands):
	result = native(result)
	if any(cmath.isnan(complex(x)) for x in operands): return result
	if cmath.isnan(complex(result)): raise ResultIsNaN(name, *operands)
	if cmath.isinf(complex(result)) and all(cmath.isfinite(complex(x)) for x in operands):
		raise ResultIsInfinite(name, *operands)
	return result

def _numpy_scalar(value):
	value = native(value)
	if isinstance(value, complex): return np.complex128(value)
	return np.float64(value)

def _unary(name, ufunc, real_domain=None):
	"""
	real_domain, if given, is the test a real argument must pass to give a real
	result. A real argument which fails it is taken as complex instead, so
	sqrt(-4) is 2i and ln(-1) is i*pi.
	"""
	def apply(value):
		value = native(value)
		if kind_of(value) is None: raise InvalidNumericValue(name, value)
		if real_domain and kind_of(value) is not Kind.COMPLEX and not real_domain(value): value = complex(value)
		with np.errstate(all='ignore'):
			result = ufunc(_numpy_scalar(value))
		return _checked(name, result, value)
	apply.__name__ = name
	return apply

def _at_least(bound): return lambda x: not x < bound
def _within(bound): return lambda x: not abs(x) > bound

ln = _unary("ln", np.log, _at_least(0))
log10 = _unary("log10", np.log10, _at_least(0))
sqrt = _unary("sqrt", np.sqrt, _at_least(0))
exp = _unary("exp", np.exp)

sin = _unary("sin", np.sin)
cos = _unary("cos", np.cos)
tan = _unary("tan", np.tan)
asin = _unary("asin", np.arcsin, _within(1))
acos = _unary("acos", np.arccos, _within(1))
atan = _unary("atan", np.arctan)

sinh = _unary("sinh", np.sinh)
cosh = _unary("cosh", np.cosh)
tanh = _unary("tanh", np.tanh)
asinh = _unary("asinh", np.arcsinh)
acosh = _unary("acosh", np.arccosh, _at_least(1))
atanh = _unary("atanh", np.arctanh, _within(1))

def absolute(value):
	""" Magnitude. Integers stay (wrapped) integers; anything else is real. """
	value = native(value)
	if kind_of(value) is None: raise InvalidNumericValue("abs", value)
	if isinstance(value, int): return wrap(abs(int(value)))
	return float(abs(value))

def conj(value):
	value = native(value)
	if kind_of(value) is None: raise InvalidNumericValue("conj", value)
	if isinstance(value, complex): return value.conjugate()
	if isinstance(value, int): return int(value)
	return value

def _rounding(name, ufunc):
	""" Integers are already whole. Reals round to whole reals; infinity and NaN pass through. """
	def apply(value):
		value = native(value)
		if kind_of(value) is None or isinstance(value, complex): raise InvalidNumericValue(name, value)
		if isinstance(value, int): return int(value)
		return float(ufunc(value))
	apply.__name__ = name
	return apply

floor = _rounding("floor", np.floor)
ceil = _rounding("ceil", np.ceil)
nint = _rounding("nint", np.rint)

# name -> (function, narrowest argument kind, widest argument kind)
NAMED = {
	"abs": (absolute, Kind.INTEGER, Kind.COMPLEX),
	"conj": (conj, Kind.INTEGER, Kind.COMPLEX),
	"floor": (floor, Kind.INTEGER, Kind.REAL),
	"ceil": (ceil, Kind.INTEGER, Kind.REAL),
	"nint": (nint, Kind.INTEGER, Kind.REAL),
}
for _fn in (ln, log10, sqrt, exp, sin, cos, tan, asin, acos, atan, sinh, cosh, tanh, asinh, acosh, atanh):
	NAMED[_fn.__name__] = (_fn, Kind.REAL, Kind.COMPLEX)
del _fn

def power(base, exponent):
	"""
	base raised to exponent. Two integers with a non-negative exponent
	give a (wrapped) integer; otherwise the result is real or complex.
	"""
	base, exponent = native(base), native(exponent)
	if kind_of(base) is None or kind_of(exponent) is None: raise InvalidNumericValue("power", base, exponent)
	if kind_of(base) <= Kind.INTEGER and kind_of(exponent) <= Kind.INTEGER and exponent >= 0:
		return wrap(pow(int(base), int(exponent), 1 << 64))
	with np.errstate(all='ignore'):
		result = np.power(_numpy_scalar(base), _numpy_scalar(exponent))
	return _checked("power", result, base, exponent)

###############################################################################
# Text

_DIGITS = r"(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|nan)"
_INTEGER = re.compile(r"[+-]?\d+\Z")
_REAL = re.compile(r"[+-]?%s\Z"%_DIGITS, re.IGNORECASE)
_COMPLEX = re.compile(r"([+-]?%s)([+-]%s)i\Z"%(_DIGITS, _DIGITS), re.IGNORECASE)
_IMAGINARY = re.compile(r"([+-]?%s)i\Z"%_DIGITS, re.IGNORECASE)

def parse_scalar(text:str):
	"""
	Read an integer, a real, or a complex number written as `r+ii`, `r-ii`, or `ii`.
	Booleans are written as integers, so they come back as 0 or 1.
	"""
	s = text.strip()
	if _INTEGER.match(s):
		value = int(s)
		if INTEGER_MIN <= value <= INTEGER_MAX: return value
		raise MalformedString(text)
	if _REAL.match(s): return float(s)
	m = _COMPLEX.match(s)
	if m: return complex(float(m.group(1)), float(m.group(2)))
	m = _IMAGINARY.match(s)
	if m: return complex(0.0, float(m.group(1)))
	raise MalformedString(text)

class _Formatter(Visitor):
	""" Text which parse_scalar reads back to the same value. """
	@staticmethod
	def visit_bool(value): return "1" if value else "0"
	@staticmethod
	def visit_int(value): return str(value)
	@staticmethod
	def visit_float(value): return repr(value)
	@staticmethod
	def visit_complex(value):
		imag = repr(value.imag)
		if imag[0] not in "+-": imag = "+" + imag
		return "%r%si"%(value.real, imag)

_FORMATTER = _Formatter()

def format_scalar(value) -> str:
	return _FORMATTER.visit(native(value))

