"""
Dense matrices of boolean, integer, real, or complex coefficients.

Coefficients live in a Fortran-ordered (column-major) numpy array, shared
copy-on-write among handles. Subscripts are 1-based. A single subscript
walks the matrix row by row, so index 2 of a matrix with several columns
is the element at row 1, column 2.

Every mutator validates its arguments before it touches the storage, and
detaches the storage from any other handle before writing.
"""
import logging
from enum import Enum
from typing import Iterable

import numpy as np

from .kinds import Kind, matrix_kind
from .storage import CopyOnWrite
from .factorization import LinearAlgebra, RealTransforms, ComplexAnalysis
from .failures import (
	InvalidRow, InvalidColumn, InvalidIndex, IncompatibleMatrixDimensions, InvalidMatrixDimensions,
	InvalidRuntimeConversion, InvalidParameterValue, InvalidNumericValue, TypeDoesNotSupportSubscripts,
	ValueLayerFailure,
)
from . import scalars

log = logging.getLogger(__name__)

class Storage(Enum):
	DENSE = "dense"
	SPARSE = "sparse"  # Reserved. Nothing produces it yet.

def _dimension(value, rows, columns):
	if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 0:
		raise InvalidMatrixDimensions(rows, columns)
	return int(value)

def _is_selection(subscript) -> bool:
	return hasattr(subscript, "__iter__") and not isinstance(subscript, (str, bytes))

def _source_kind(value) -> Kind:
	kind = scalars.kind_of(value)
	if kind is not None: return kind
	if hasattr(value, "kind"): return value.kind()
	raise InvalidParameterValue("not a value: %r"%(value,))

def _subscript(value, failure, limit):
	""" A 1-based subscript as a Python int. Raises the given failure for anything that is not an integer. """
	index, ok = scalars.convert(value, Kind.INTEGER)
	if not ok: raise failure(value, limit)
	return index

class Matrix(CopyOnWrite):
	KIND: Kind
	COEFFICIENT: Kind
	DTYPE: np.dtype

	# Make numpy scalars defer to our reflected operators instead of broadcasting over us.
	__array_ufunc__ = None

	def __init__(self, rows=0, columns=0, coefficients:Iterable=None, storage:Storage=Storage.DENSE):
		"""
		Matrix(R, C) is zero-filled. Matrix(R, C, coefficients) takes R*C coefficients in column-major order.
		Matrix(other_matrix) converts, and fails if the conversion would lose information.
		"""
		if storage is not Storage.DENSE: raise InvalidParameterValue("only dense storage is supported")
		if isinstance(rows, Matrix):
			converted, ok = rows.to_kind(self.KIND)
			if not ok: raise InvalidRuntimeConversion(rows.KIND, self.KIND)
			self._share_from(converted)
			return
		rows, columns = _dimension(rows, rows, columns), _dimension(columns, rows, columns)
		if coefficients is None:
			self._attach(np.zeros((rows, columns), self.DTYPE, order='F'))
			return
		values = [self._coefficient(x) for x in coefficients]
		if len(values) != rows * columns:
			raise InvalidMatrixDimensions(rows, columns, "expected %d coefficients, got %d"%(rows * columns, len(values)))
		self._attach(np.array(values, dtype=self.DTYPE).reshape((rows, columns), order='F'))

	@classmethod
	def _wrap(cls, array:np.ndarray) -> "Matrix":
		""" A handle on a private copy of array. """
		m = object.__new__(cls)
		m._attach(np.array(array, dtype=cls.DTYPE, order='F'))
		return m

	@classmethod
	def _convert(cls, array:np.ndarray) -> np.ndarray:
		""" Widen an array to this class's coefficients. """
		converted, ok = scalars.convert_array(array, cls.COEFFICIENT)
		assert ok, (array.dtype, cls)
		return converted

	@staticmethod
	def _class_for(kind:Kind) -> type["Matrix"]: return MATRIX_CLASSES[kind]

	def _like(self, array:np.ndarray) -> "Matrix": return type(self)._wrap(array)

	def _duplicate(self, payload): return payload.copy(order='F')

	def _coefficient(self, value):
		value = scalars.native(value)
		coefficient, ok = scalars.convert(value, self.COEFFICIENT)
		if not ok: raise InvalidRuntimeConversion(_source_kind(value), self.COEFFICIENT)
		return coefficient

	###########################################################################
	# Factories

	@classmethod
	def zero(cls, rows:int, columns:int=None) -> "Matrix":
		if columns is None: columns = rows
		return cls(rows, columns)

	@classmethod
	def identity(cls, rows:int, columns:int=None) -> "Matrix":
		if columns is None: columns = rows
		return cls._wrap(np.eye(_dimension(rows, rows, columns), _dimension(columns, rows, columns)))

	@classmethod
	def ones(cls, rows:int, columns:int=None) -> "Matrix":
		if columns is None: columns = rows
		return cls._wrap(np.ones((_dimension(rows, rows, columns), _dimension(columns, rows, columns))))

	@classmethod
	def build(cls, rows:int, columns:int, *coefficients) -> "Matrix":
		""" Coefficients in column-major order. """
		return cls(rows, columns, coefficients)

	@classmethod
	def from_rows(cls, rows:Iterable[Iterable]) -> "Matrix":
		""" From a list of rows, each a list of coefficients. """
		rows = [list(r) for r in rows]
		columns = len(rows[0]) if rows else 0
		if any(len(r) != columns for r in rows): raise InvalidMatrixDimensions(len(rows), columns, "ragged rows")
		coefficients = [rows[i][j] for j in range(columns) for i in range(len(rows))]
		return cls(len(rows), columns, coefficients)

	@classmethod
	def from_file(cls, filename) -> "Matrix":
		from .matrix_io import read_matrix
		found = read_matrix(filename)
		if type(found) is cls: return found
		return cls(found)

	def to_file(self, filename, fmt=None):
		from .matrix_io import write_matrix, FileFormat
		write_matrix(self, filename, FileFormat.BINARY if fmt is None else fmt)

	###########################################################################
	# Shape

	def number_rows(self) -> int: return self._read().shape[0]
	def number_columns(self) -> int: return self._read().shape[1]
	def size(self) -> int: return self._read().size
	def is_empty(self) -> bool: return self._read().size == 0
	def is_square(self) -> bool: return self.number_rows() == self.number_columns()
	def storage(self) -> Storage: return Storage.DENSE
	def kind(self) -> Kind: return self.KIND
	def coefficient_kind(self) -> Kind: return self.COEFFICIENT

	def data(self) -> np.ndarray:
		""" A read-only column-major view of the coefficients. """
		view = self._read().ravel(order='F').view()
		view.flags.writeable = False
		return view

	def to_kind(self, target:Kind) -> tuple["Matrix", bool]:
		""" Conversion to another matrix kind, answering (matrix, ok). """
		cls = MATRIX_CLASSES[target]
		if cls is type(self): return self.clone(), True
		array, ok = scalars.convert_array(self._read(), cls.COEFFICIENT)
		if not ok: return cls(), False
		return cls._wrap(array), True

	###########################################################################
	# Reading

	def _split(self, index) -> tuple[int, int]:
		rows, columns = self._read().shape
		i = _subscript(index, InvalidIndex, rows * columns)
		if not 1 <= i <= rows * columns: raise InvalidIndex(index, rows * columns)
		return divmod(i - 1, columns)

	def _row(self, row) -> int:
		limit = self.number_rows()
		r = _subscript(row, InvalidRow, limit)
		if not 1 <= r <= limit: raise InvalidRow(row, limit)
		return r - 1

	def _column(self, column) -> int:
		limit = self.number_columns()
		c = _subscript(column, InvalidColumn, limit)
		if not 1 <= c <= limit: raise InvalidColumn(column, limit)
		return c - 1

	def _rows(self, subscript) -> list[int]:
		if _is_selection(subscript): return [self._row(r) for r in subscript]
		return [self._row(subscript)]

	def _columns(self, subscript) -> list[int]:
		if _is_selection(subscript): return [self._column(c) for c in subscript]
		return [self._column(subscript)]

	def at(self, *subscripts):
		"""
		at(row, column) or at(index) reads one coefficient.
		Give a Range, Tuple, Set, or other iterable of subscripts to get a submatrix instead.
		"""
		array = self._read()
		if len(subscripts) == 1:
			(index,) = subscripts
			if _is_selection(index):
				picked = [array[self._split(i)] for i in index]
				return self._like(np.array(picked, dtype=self.DTYPE).reshape((1, len(picked))))
			return array[self._split(index)].item()
		if len(subscripts) == 2:
			row, column = subscripts
			if _is_selection(row) or _is_selection(column):
				return self._like(array[np.ix_(self._rows(row), self._columns(column))])
			return array[self._row(row), self._column(column)].item()
		raise TypeDoesNotSupportSubscripts(self.KIND)

	__call__ = at

	def __iter__(self):
		""" Coefficients in row-major order. """
		for row in self._read().tolist(): yield from row

	###########################################################################
	# Writing

	def update(self, *args) -> "Matrix":
		"""
		update(row, column, value) or update(index, value).
		Writing past the edge grows the matrix to fit, filling with zero.
		A single index grows an empty or one-row matrix along the row,
		and a one-column matrix down the column. Any other matrix will not grow on a single index.
		"""
		if len(args) not in (2, 3): raise TypeDoesNotSupportSubscripts(self.KIND)
		*where, value = args
		coefficient = self._coefficient(value)
		rows, columns = self._read().shape
		if len(where) == 1:
			size = rows * columns
			i = _subscript(where[0], InvalidIndex, size)
			if i < 1: raise InvalidIndex(where[0], size)
			if i <= size: r, c = divmod(i - 1, columns)
			elif rows <= 1: r, c = 0, i - 1
			elif columns == 1: r, c = i - 1, 0
			else: raise InvalidIndex(where[0], size)
		else:
			r = _subscript(where[0], InvalidRow, rows) - 1
			if r < 0: raise InvalidRow(where[0], rows)
			c = _subscript(where[1], InvalidColumn, columns) - 1
			if c < 0: raise InvalidColumn(where[1], columns)
		if r >= rows or c >= columns: self.resize(max(rows, r + 1), max(columns, c + 1))
		self._write()[r, c] = coefficient
		return self

	def set_value(self, *args) -> bool:
		""" As update, but answers False instead of raising. """
		try: self.update(*args)
		except ValueLayerFailure: return False
		return True

	def resize(self, rows:int, columns:int) -> "Matrix":
		""" Keep the overlap and fill the rest with zero. """
		rows, columns = _dimension(rows, rows, columns), _dimension(columns, rows, columns)
		old = self._read()
		if old.shape == (rows, columns): return self
		new = np.zeros((rows, columns), self.DTYPE, order='F')
		r, c = min(rows, old.shape[0]), min(columns, old.shape[1])
		new[:r, :c] = old[:r, :c]
		log.debug("resize %s from %s to %s", type(self).__name__, old.shape, new.shape)
		self._replace(new)
		return self

	###########################################################################
	# Structure

	def diagonal_entries(self) -> "Matrix":
		""" The main diagonal as a column. """
		return self._like(np.diagonal(self._read()).reshape((-1, 1)))

	def diagonal(self) -> "Matrix":
		""" A square matrix with this row or column vector on its diagonal. """
		a = self._read()
		if 1 not in a.shape: raise InvalidMatrixDimensions(*a.shape, "diagonal requires a vector")
		return self._like(np.diag(a.ravel()))

	def _joined(self, other:"Matrix"):
		cls = MATRIX_CLASSES[max(self.KIND, other.KIND)]
		return cls, cls._convert(self._read()), cls._convert(other._read())

	def combine_left_to_right(self, other:"Matrix") -> "Matrix":
		cls, a, b = self._joined(other)
		if not a.size: return cls._wrap(b)
		if not b.size: return cls._wrap(a)
		if a.shape[0] != b.shape[0]: raise IncompatibleMatrixDimensions(*a.shape, *b.shape)
		return cls._wrap(np.hstack((a, b)))

	def combine_top_to_bottom(self, other:"Matrix") -> "Matrix":
		cls, a, b = self._joined(other)
		if not a.size: return cls._wrap(b)
		if not b.size: return cls._wrap(a)
		if a.shape[1] != b.shape[1]: raise IncompatibleMatrixDimensions(*a.shape, *b.shape)
		return cls._wrap(np.vstack((a, b)))

	def row_reverse(self) -> "Matrix": return self._like(self._read()[::-1, :])
	def column_reverse(self) -> "Matrix": return self._like(self._read()[:, ::-1])
	def transpose(self) -> "Matrix": return self._like(self._read().T)

	def conj(self) -> "Matrix":
		a = self._read()
		return self._like(a.conj() if a.dtype.kind == 'c' else a)

	def adjoint(self) -> "Matrix": return self.conj().transpose()

	def hadamard(self, other:"Matrix") -> "Matrix":
		""" Element-wise product. """
		cls, a, b = self._joined(other)
		if a.shape != b.shape: raise IncompatibleMatrixDimensions(*a.shape, *b.shape)
		with np.errstate(all='ignore'): return cls._wrap(a * b)

	def kronecker(self, other:"Matrix") -> "Matrix":
		cls, a, b = self._joined(other)
		with np.errstate(all='ignore'): return cls._wrap(np.kron(a, b))

	###########################################################################
	# Logic, element by element

	def _booleans(self, other:"Matrix"):
		a = scalars.convert_array(self._read(), Kind.BOOLEAN)[0]
		b = scalars.convert_array(other._read(), Kind.BOOLEAN)[0]
		if a.shape != b.shape: raise IncompatibleMatrixDimensions(*a.shape, *b.shape)
		return a, b

	def logical_and(self, other:"Matrix") -> "Matrix": return MatrixBoolean._wrap(np.logical_and(*self._booleans(other)))
	def logical_or(self, other:"Matrix") -> "Matrix": return MatrixBoolean._wrap(np.logical_or(*self._booleans(other)))
	def logical_not(self) -> "Matrix": return MatrixBoolean._wrap(np.logical_not(scalars.convert_array(self._read(), Kind.BOOLEAN)[0]))

	###########################################################################
	# Arithmetic. Booleans count as integers here.

	def _arithmetic_operands(self, other):
		""" (class, my array, other array or scalar) promoted for arithmetic, or None if other is no number. """
		if isinstance(other, Matrix):
			cls = MATRIX_CLASSES[max(self.KIND, other.KIND, Kind.MATRIX_INTEGER)]
			return cls, cls._convert(self._read()), cls._convert(other._read())
		other = scalars.native(other)
		kind = scalars.kind_of(other)
		if kind is None: return None
		cls = MATRIX_CLASSES[max(self.KIND, matrix_kind(kind), Kind.MATRIX_INTEGER)]
		return cls, cls._convert(self._read()), scalars.convert(other, cls.COEFFICIENT)[0]

	def _sum(self, other, sign):
		operands = self._arithmetic_operands(other)
		if operands is None: return NotImplemented
		cls, a, b = operands
		if not isinstance(b, np.ndarray): raise InvalidParameterValue("cannot add a scalar to a matrix")
		if a.shape != b.shape: raise IncompatibleMatrixDimensions(*a.shape, *b.shape)
		with np.errstate(all='ignore'): return cls._wrap(a + b if sign > 0 else a - b)

	def __add__(self, other): return self._sum(other, 1)
	def __sub__(self, other): return self._sum(other, -1)

	def __mul__(self, other):
		""" Matrix product, or scaling by a scalar. """
		operands = self._arithmetic_operands(other)
		if operands is None: return NotImplemented
		cls, a, b = operands
		with np.errstate(all='ignore'):
			if not isinstance(b, np.ndarray): return cls._wrap(a * b)
			if a.shape[1] != b.shape[0]: raise IncompatibleMatrixDimensions(*a.shape, *b.shape)
			return cls._wrap(a @ b)

	def __rmul__(self, other):
		if isinstance(other, Matrix): return NotImplemented
		return self.__mul__(other)

	def __truediv__(self, other):
		""" Division by a scalar. Integer matrices truncate toward zero. """
		operands = self._arithmetic_operands(other)
		if operands is None: return NotImplemented
		cls, a, b = operands
		if isinstance(b, np.ndarray): raise InvalidParameterValue("cannot divide by a matrix")
		if cls.COEFFICIENT is Kind.INTEGER:
			if b == 0: raise InvalidNumericValue("integer division by zero")
			b = np.int64(b)
			with np.errstate(all='ignore'):
				q = np.floor_divide(a, b)
				q += ((a < 0) != (b < 0)) & (np.remainder(a, b) != 0)
			return cls._wrap(q)
		with np.errstate(all='ignore'): return cls._wrap(a / b)

	def _reflected(self, other):
		if scalars.kind_of(other) is None: return NotImplemented
		raise InvalidParameterValue("a scalar cannot be combined with a matrix that way")

	__radd__ = __rsub__ = __rtruediv__ = _reflected

	def __neg__(self):
		cls = MATRIX_CLASSES[max(self.KIND, Kind.MATRIX_INTEGER)]
		with np.errstate(all='ignore'): return cls._wrap(-cls._convert(self._read()))

	def __pos__(self):
		cls = MATRIX_CLASSES[max(self.KIND, Kind.MATRIX_INTEGER)]
		return cls._wrap(cls._convert(self._read()))

	def _in_place(self, result):
		if result is NotImplemented or type(result) is not type(self): return result
		self._adopt(result)
		return self

	def __iadd__(self, other): return self._in_place(self.__add__(other))
	def __isub__(self, other): return self._in_place(self.__sub__(other))
	def __imul__(self, other): return self._in_place(self.__mul__(other))

	###########################################################################

	def __eq__(self, other):
		if not isinstance(other, Matrix): return NotImplemented
		if self._read().shape != other._read().shape: return False
		cls, a, b = self._joined(other)
		return bool(np.array_equal(a, b))

	def __hash__(self):
		from .hashing import hash_of
		return hash_of(self)

	def __repr__(self):
		rows, columns = self._read().shape
		return "%s(%d, %d, %r)"%(type(self).__name__, rows, columns, self._read().tolist())


class MatrixBoolean(Matrix):
	KIND, COEFFICIENT, DTYPE = Kind.MATRIX_BOOLEAN, Kind.BOOLEAN, np.dtype(np.bool_)

class MatrixInteger(Matrix):
	KIND, COEFFICIENT, DTYPE = Kind.MATRIX_INTEGER, Kind.INTEGER, np.dtype(np.int64)

class MatrixReal(Matrix, LinearAlgebra, RealTransforms):
	KIND, COEFFICIENT, DTYPE = Kind.MATRIX_REAL, Kind.REAL, np.dtype(np.float64)

class MatrixComplex(Matrix, LinearAlgebra, ComplexAnalysis):
	KIND, COEFFICIENT, DTYPE = Kind.MATRIX_COMPLEX, Kind.COMPLEX, np.dtype(np.complex128)

MATRIX_CLASSES = {cls.KIND: cls for cls in (MatrixBoolean, MatrixInteger, MatrixReal, MatrixComplex)}

def matrix_from_array(array:np.ndarray) -> Matrix:
	""" The matrix kind matching a 2-D array's dtype. """
	array = np.asarray(array)
	if array.ndim != 2: raise InvalidParameterValue("need a 2-D array, not shape %r"%(array.shape,))
	kind = matrix_kind(scalars.kind_of_dtype(array.dtype))
	return MATRIX_CLASSES[kind]._wrap(array)
