"""
The ways an operation in the value layer can fail.

Every failure terminates the operation that raised it.
Each carries enough context (row, column, kinds, dimensions, file name)
to make a reasonable message for a person.
"""
from enum import Enum
from .kinds import Kind

class ValueLayerFailure(Exception):
	""" Root of the taxonomy. Catch this to catch anything the value layer means to raise. """
	pass

class InvalidParameterValue(ValueLayerFailure):
	""" An operator or method got operands it is not defined for. """
	pass

###############################################################################
# Shape and index failures

class ShapeFailure(ValueLayerFailure): pass

class InvalidRow(ShapeFailure):
	def __init__(self, row, number_rows):
		self.row, self.number_rows = row, number_rows
		super().__init__("Row %s is outside 1..%d"%(row, number_rows))

class InvalidColumn(ShapeFailure):
	def __init__(self, column, number_columns):
		self.column, self.number_columns = column, number_columns
		super().__init__("Column %s is outside 1..%d"%(column, number_columns))

class InvalidIndex(ShapeFailure):
	def __init__(self, index, size):
		self.index, self.size = index, size
		super().__init__("Index %s is outside 1..%d"%(index, size))

class IncompatibleMatrixDimensions(ShapeFailure):
	def __init__(self, lhs_rows, lhs_columns, rhs_rows, rhs_columns):
		self.lhs = lhs_rows, lhs_columns
		self.rhs = rhs_rows, rhs_columns
		super().__init__("Cannot combine a %dx%d matrix with a %dx%d matrix"%(self.lhs+self.rhs))

class InvalidMatrixDimensions(ShapeFailure):
	def __init__(self, rows, columns, why="invalid dimensions"):
		self.rows, self.columns = rows, columns
		super().__init__("%sx%s: %s"%(rows, columns, why))

class TypeDoesNotSupportSubscripts(ShapeFailure):
	def __init__(self, kind:Kind):
		self.kind = kind
		super().__init__("Values of kind %s do not take subscripts like that"%kind)

class InvalidContainerContents(ShapeFailure):
	pass

###############################################################################
# Conversion failures

class ConversionFailure(ValueLayerFailure): pass

class InvalidRuntimeConversion(ConversionFailure):
	def __init__(self, source:Kind, target:Kind):
		self.source, self.target = source, target
		super().__init__("Cannot convert %s to %s"%(source, target))

class RangePosition(Enum):
	FIRST = "first"
	SECOND = "second"
	LAST = "last"

class InvalidRangeParameter(ConversionFailure):
	def __init__(self, position:RangePosition, kind:Kind):
		self.position, self.kind = position, kind
		super().__init__("The %s bound of a range cannot be of kind %s"%(position.value, kind))

class CanNotConvertToString(ConversionFailure):
	pass

class MalformedString(ConversionFailure):
	def __init__(self, text:str):
		self.text = text
		super().__init__("Cannot make sense of %r"%text)

###############################################################################
# Numeric failures

class NumericFailure(ValueLayerFailure): pass
class InvalidNumericValue(NumericFailure): pass
class ResultIsNaN(NumericFailure): pass
class ResultIsInfinite(NumericFailure): pass
class CanNotConverge(NumericFailure): pass
class MatrixIsSingular(NumericFailure): pass

###############################################################################
# File failures

class FileFailure(ValueLayerFailure):
	def __init__(self, filename, detail=""):
		self.filename = str(filename)
		self.detail = detail
		message = "%s: %s"%(type(self).__name__, self.filename)
		if detail: message += " (%s)"%detail
		super().__init__(message)

class FileOpenError(FileFailure): pass
class FileReadError(FileFailure): pass
class FileWriteError(FileFailure): pass
class FileSeekError(FileFailure): pass
class FileCloseError(FileFailure): pass
class InvalidFileNumber(FileFailure): pass
class UnknownFileType(FileFailure): pass

###############################################################################
# Resource and fatal failures

class ResourceFailure(ValueLayerFailure): pass
class InsufficientMemory(ResourceFailure): pass
class MemoryAllocationError(ResourceFailure): pass
class InternalError(ResourceFailure): pass
class SystemFailure(ResourceFailure): pass
