"""
Reading and writing matrices: a compact binary form, and CSV.

Binary layout, all little-endian:
	8 bytes   magic, b"VARITHMX"
	1 byte    kind tag (8..11, the Kind numbering)
	8 bytes   number of rows
	8 bytes   number of columns
	R*C coefficients in column-major order: booleans as one byte,
	integers as 8-byte two's complement, reals as binary64,
	complex as a binary64 real part then a binary64 imaginary part.

CSV carries one matrix row per line, written with format_scalar and read back with parse_scalar.
The kind of a CSV matrix is the widest kind among its entries.
"""
import csv
import io
import logging
import struct
from enum import Enum
from pathlib import Path

import numpy as np

from .kinds import Kind, MATRIX_KINDS, matrix_kind
from .failures import (
	FileOpenError, FileReadError, FileWriteError, FileCloseError, UnknownFileType, MalformedString,
)
from .matrix import Matrix, MATRIX_CLASSES
from . import scalars, settings

log = logging.getLogger(__name__)

MAGIC = b"VARITHMX"
HEADER = struct.Struct("<8sBQQ")

LAYOUT = {
	Kind.MATRIX_BOOLEAN: np.dtype("u1"),
	Kind.MATRIX_INTEGER: np.dtype("<i8"),
	Kind.MATRIX_REAL: np.dtype("<f8"),
	Kind.MATRIX_COMPLEX: np.dtype("<c16"),
}

class FileFormat(Enum):
	CSV = "csv"
	BINARY = "binary"

def _file_format(fmt, filename) -> FileFormat:
	if isinstance(fmt, FileFormat): return fmt
	try: return FileFormat(str(fmt).lower())
	except ValueError: raise UnknownFileType(filename, "no format called %r"%(fmt,))

def _open(filename, mode):
	try: return open(filename, mode)
	except OSError as ex: raise FileOpenError(filename, ex.strerror) from ex

def _close(handle, filename):
	try: handle.close()
	except OSError as ex: raise FileCloseError(filename, ex.strerror) from ex

###############################################################################
# Writing

def _binary_image(matrix:Matrix) -> bytes:
	body = matrix.data().astype(LAYOUT[matrix.KIND]).tobytes()
	return HEADER.pack(MAGIC, matrix.KIND, matrix.number_rows(), matrix.number_columns()) + body

def _csv_image(matrix:Matrix) -> bytes:
	text = io.StringIO()
	writer = csv.writer(text, delimiter=settings.CSV_DELIMITER, lineterminator="\n")
	array = matrix.data().reshape((matrix.number_rows(), matrix.number_columns()), order='F')
	for row in array.tolist(): writer.writerow([scalars.format_scalar(x) for x in row])
	return text.getvalue().encode("utf-8")

def write_matrix(matrix:Matrix, filename, fmt=FileFormat.BINARY):
	fmt = _file_format(fmt, filename)
	image = _binary_image(matrix) if fmt is FileFormat.BINARY else _csv_image(matrix)
	handle = _open(filename, "wb")
	try: handle.write(image)
	except OSError as ex:
		handle.close()
		raise FileWriteError(filename, ex.strerror) from ex
	_close(handle, filename)
	log.debug("wrote %s %dx%d to %s as %s", matrix.KIND, matrix.number_rows(), matrix.number_columns(), filename, fmt.value)

###############################################################################
# Reading

def _from_binary(image:bytes, filename) -> Matrix:
	if len(image) < HEADER.size: raise FileReadError(filename, "truncated header")
	magic, tag, rows, columns = HEADER.unpack_from(image)
	if magic != MAGIC: raise UnknownFileType(filename, "bad magic number")
	if tag not in MATRIX_KINDS: raise UnknownFileType(filename, "no matrix kind has tag %d"%tag)
	kind = Kind(tag)
	layout = LAYOUT[kind]
	body = image[HEADER.size:]
	if len(body) != rows * columns * layout.itemsize:
		raise FileReadError(filename, "expected %d bytes of coefficients, found %d"%(rows * columns * layout.itemsize, len(body)))
	array = np.frombuffer(body, dtype=layout).reshape((rows, columns), order='F')
	if kind is Kind.MATRIX_BOOLEAN: array = array != 0
	return MATRIX_CLASSES[kind]._wrap(array)

def _from_csv(image:bytes, filename) -> Matrix:
	try: text = image.decode("utf-8")
	except UnicodeDecodeError as ex: raise FileReadError(filename, "not UTF-8 text") from ex
	try: rows = [[scalars.parse_scalar(field) for field in line] for line in csv.reader(io.StringIO(text), delimiter=settings.CSV_DELIMITER)]
	except MalformedString as ex: raise FileReadError(filename, str(ex)) from ex
	except csv.Error as ex: raise FileReadError(filename, str(ex)) from ex
	columns = max(map(len, rows), default=0)
	kind = max((scalars.kind_of(x) for row in rows for x in row), default=Kind.REAL)
	cls = MATRIX_CLASSES[matrix_kind(max(kind, Kind.INTEGER))]
	# Short rows are padded with zeros.
	padded = [row + [0] * (columns - len(row)) for row in rows]
	return cls.from_rows(padded) if columns else cls(len(rows), 0)

def read_matrix(filename) -> Matrix:
	""" Read a matrix in either format, telling them apart by the magic number. """
	handle = _open(filename, "rb")
	try: image = handle.read()
	except OSError as ex:
		handle.close()
		raise FileReadError(filename, ex.strerror) from ex
	_close(handle, filename)
	if image.startswith(MAGIC): matrix = _from_binary(image, filename)
	else: matrix = _from_csv(image, filename)
	log.debug("read %s %dx%d from %s", matrix.KIND, matrix.number_rows(), matrix.number_columns(), Path(filename).name)
	return matrix
