"""
Linear algebra for real and complex matrices.

These are mixins: they rely on the host matrix class for _read(), _like(),
_class_for(), and the shape queries. The arithmetic itself is in kernels.
"""
import numpy as np

from .kinds import Kind
from .failures import InvalidMatrixDimensions, IncompatibleMatrixDimensions, MatrixIsSingular
from . import kernels, settings

class LinearAlgebra:
	""" Common to MatrixReal and MatrixComplex. """

	def _require_square(self, operation:str):
		if not self.is_square():
			raise InvalidMatrixDimensions(self.number_rows(), self.number_columns(), operation+" requires a square matrix")

	def _scalar(self, value):
		return complex(value) if self.KIND is Kind.MATRIX_COMPLEX else float(np.real(value))

	def determinant(self):
		self._require_square("determinant")
		with np.errstate(all='ignore'):
			return self._scalar(np.linalg.det(self._read()))

	def inverse(self):
		self._require_square("inverse")
		a = self._read()
		if not a.size: return self._like(a)
		x = kernels.solve(a, np.eye(a.shape[0], dtype=a.dtype))
		if not x.size: raise MatrixIsSingular(self.number_rows(), self.number_columns())
		return self._like(x)

	def plu(self):
		""" (P, L, U, singular) with this == P * L * U. """
		p, l, u, singular = kernels.lu_decompose(self._read())
		return self._like(p), self._like(l), self._like(u), singular

	def svd(self):
		""" (U, S, V*, ok) with this == U * S * V*. """
		u, s, vh, ok = kernels.svd(self._read())
		return self._like(u), self._like(s), self._like(vh), ok

	def qr(self):
		q, r, ok = kernels.qr(self._read())
		return self._like(q), self._like(r), ok

	def lq(self):
		l, q, ok = kernels.lq(self._read())
		return self._like(l), self._like(q), ok

	def cholesky(self):
		""" Lower-triangular L with this == L * L*, or an empty matrix if there is none. """
		return self._like(kernels.cholesky(self._read(), lower=True))

	def upper_cholesky(self):
		""" Upper-triangular U with this == U* * U, or an empty matrix if there is none. """
		return self._like(kernels.cholesky(self._read(), lower=False))

	def hessenberg(self):
		""" (Q, H) with this == Q * H * Q* """
		self._require_square("hessenberg")
		q, h = kernels.hessenberg(self._read())
		return self._like(q), self._like(h)

	def rank(self, epsilon=None) -> int:
		if epsilon is None: epsilon = settings.RANK_EPSILON
		return kernels.rank(self._read(), epsilon)

	def condition_number(self) -> float: return kernels.condition_number(self._read())
	def p_norm(self, p) -> float: return kernels.p_norm(self._read(), p)
	def euclidean_norm(self) -> float: return kernels.euclidean_norm(self._read())
	def one_norm(self) -> float: return kernels.one_norm(self._read())
	def infinity_norm(self) -> float: return kernels.infinity_norm(self._read())

	def equilibrate(self):
		""" (R, C, ok): diagonal matrices such that R * this * C is well scaled. """
		r, c, ok = kernels.equilibrate(self._read())
		return self._like(r), self._like(c), ok

	def _right_hand_side(self, y):
		if y.number_rows() != self.number_rows():
			raise IncompatibleMatrixDimensions(self.number_rows(), self.number_columns(), y.number_rows(), y.number_columns())
		cls = self._class_for(max(self.KIND, y.KIND))
		return cls, cls._convert(self._read()), cls._convert(y._read())

	def solve(self, y):
		""" X such that this * X == y, or an empty matrix if this is singular. """
		cls, a, b = self._right_hand_side(y)
		return cls._wrap(kernels.solve(a, b))

	def least_squares(self, b):
		""" X minimizing |this * X - b|, or an empty matrix if this is rank-deficient. """
		cls, a, b = self._right_hand_side(b)
		return cls._wrap(kernels.least_squares(a, b))

	def _small(self, residual, scale, tolerance) -> bool:
		if tolerance is None: tolerance = settings.RELATIVE_TOLERANCE
		return bool(np.linalg.norm(residual) <= tolerance * scale)

	def _symmetry(self, sign, conjugate, tolerance) -> bool:
		if not self.is_square(): return False
		a = self._read()
		other = a.conj().T if conjugate else a.T
		return self._small(a - sign * other, np.linalg.norm(a), tolerance)

	def is_symmetric(self, tolerance=None) -> bool: return self._symmetry(1, False, tolerance)
	def is_hermitian(self, tolerance=None) -> bool: return self._symmetry(1, True, tolerance)
	def is_skew_symmetric(self, tolerance=None) -> bool: return self._symmetry(-1, False, tolerance)
	def is_skew_hermitian(self, tolerance=None) -> bool: return self._symmetry(-1, True, tolerance)

	def is_normal(self, tolerance=None) -> bool:
		""" True if this commutes with its adjoint. """
		if not self.is_square(): return False
		a = self._read()
		h = a.conj().T
		return self._small(a @ h - h @ a, np.linalg.norm(a) ** 2, tolerance)


class RealTransforms:
	def dct(self): return self._like(kernels.dct(self._read()))
	def idct(self): return self._like(kernels.idct(self._read()))

	def hilbert_transform(self):
		""" The analytic signal of a real row or column vector. """
		a = self._read()
		if 1 not in a.shape: raise InvalidMatrixDimensions(*a.shape, "hilbert transform requires a vector")
		return self._class_for(Kind.MATRIX_COMPLEX)._wrap(kernels.hilbert(a))


class ComplexAnalysis:
	def schur(self):
		""" (Q, U, eigenvalues, ok) with this == Q * U * Q* and U upper triangular. """
		self._require_square("schur")
		q, u, values, ok = kernels.schur(self._read())
		return self._like(q), self._like(u), self._like(values), ok

	def eigenvectors(self):
		""" (eigenvalues, Q, U, eigenvectors, ok). Eigenvector i is column i; its eigenvalue is row i. """
		self._require_square("eigenvectors")
		values, q, u, vectors, ok = kernels.eigen(self._read())
		return self._like(values), self._like(q), self._like(u), self._like(vectors), ok

	def kernel(self):
		""" An orthonormal basis, as columns, of the vectors this maps to zero. """
		return self._like(kernels.null_space(self._read()))

	def dft(self): return self._like(kernels.dft(self._read()))
	def idft(self): return self._like(kernels.idft(self._read()))
