import os
import tempfile
import unittest

from varith.matrix import MatrixBoolean, MatrixInteger, MatrixReal, MatrixComplex
from varith.matrix_io import read_matrix, write_matrix, FileFormat, MAGIC, HEADER
from varith.failures import FileOpenError, FileReadError, UnknownFileType, InvalidRuntimeConversion

class FileTests(unittest.TestCase):

	def setUp(self):
		self.folder = tempfile.TemporaryDirectory()

	def tearDown(self):
		self.folder.cleanup()

	def path(self, name):
		return os.path.join(self.folder.name, name)

	def test_binary_round_trip_is_bit_identical(self):
		samples = [
			MatrixBoolean.from_rows([[True, False], [False, True]]),
			MatrixInteger.from_rows([[-2**63, 2**63-1, 0]]),
			MatrixReal.from_rows([[-0.0, float("nan")], [1e-310, float("inf")]]),
			MatrixComplex.from_rows([[1+2j], [complex(-0.0, 3)]]),
			MatrixReal(0, 3),
		]
		for i, m in enumerate(samples):
			with self.subTest(kind=m.KIND):
				name = self.path("m%d.bin"%i)
				m.to_file(name)
				back = read_matrix(name)
				self.assertIs(type(m), type(back))
				self.assertEqual(m.data().tobytes(), back.data().tobytes())
				self.assertEqual((m.number_rows(), m.number_columns()), (back.number_rows(), back.number_columns()))

	def test_binary_header(self):
		name = self.path("header.bin")
		write_matrix(MatrixInteger.from_rows([[1, 2, 3]]), name)
		with open(name, "rb") as handle: image = handle.read()
		self.assertEqual((MAGIC, 9, 1, 3), HEADER.unpack_from(image))
		self.assertEqual(HEADER.size + 3 * 8, len(image))

	def test_csv_round_trip(self):
		name = self.path("m.csv")
		m = MatrixComplex.from_rows([[1.5, -2j], [3, 0.1+0.2j]])
		write_matrix(m, name, FileFormat.CSV)
		self.assertEqual(m, read_matrix(name))
		write_matrix(MatrixInteger.from_rows([[1, 2], [3, 4]]), name, "csv")
		self.assertIsInstance(read_matrix(name), MatrixInteger)

	def test_csv_reading(self):
		name = self.path("ragged.csv")
		with open(name, "w") as handle: handle.write("1,2.5\n3\n")
		self.assertEqual(MatrixReal.from_rows([[1, 2.5], [3, 0]]), read_matrix(name))
		with open(name, "w") as handle: handle.write("1,one\n")
		with self.assertRaises(FileReadError): read_matrix(name)

	def test_from_file_converts(self):
		name = self.path("int.bin")
		MatrixInteger.from_rows([[1, 2]]).to_file(name)
		self.assertIsInstance(MatrixReal.from_file(name), MatrixReal)
		MatrixReal.from_rows([[0.5]]).to_file(name)
		with self.assertRaises(InvalidRuntimeConversion): MatrixInteger.from_file(name)

	def test_failures(self):
		with self.assertRaises(FileOpenError): read_matrix(self.path("missing.bin"))
		with self.assertRaises(UnknownFileType): write_matrix(MatrixReal(1, 1), self.path("x"), "xml")
		name = self.path("short.bin")
		with open(name, "wb") as handle: handle.write(HEADER.pack(MAGIC, 10, 2, 2) + b"\0" * 8)
		with self.assertRaises(FileReadError): read_matrix(name)
		with open(name, "wb") as handle: handle.write(HEADER.pack(MAGIC, 5, 1, 1) + b"\0" * 8)
		with self.assertRaises(UnknownFileType): read_matrix(name)

if __name__ == '__main__':
	unittest.main()
