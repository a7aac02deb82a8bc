"""
Dense linear-algebra kernels over numpy arrays.

Everything here takes and returns plain 2-D arrays; the matrix classes wrap
the results. Failures inside numpy or scipy do not escape as such:
they come back as ok=False (with empty results) or, where a caller
cannot proceed without an answer, as CanNotConverge.
"""
import logging

import numpy as np
import scipy.fft
import scipy.linalg
import scipy.signal

from .failures import CanNotConverge
from . import settings

log = logging.getLogger(__name__)

_KERNEL_FAILURES = (np.linalg.LinAlgError, ValueError)

def _empty(like:np.ndarray) -> np.ndarray:
	return np.zeros((0, 0), dtype=like.dtype, order='F')

def _f(array) -> np.ndarray: return np.asfortranarray(array)

def is_singular_triangle(u:np.ndarray) -> bool:
	""" True if some pivot on the diagonal is negligible next to the largest. """
	pivots = np.abs(np.diagonal(u))
	if not pivots.size: return False
	largest = pivots.max()
	return bool(largest == 0 or np.any(pivots <= settings.SINGULAR_EPSILON * largest))

###############################################################################
# Decompositions

def lu_decompose(a:np.ndarray):
	""" (P, L, U, singular) with A = P L U. A failed factorization is empty and singular. """
	try: p, l, u = scipy.linalg.lu(a)
	except _KERNEL_FAILURES as ex:
		log.debug("lu of %s failed: %s", a.shape, ex)
		return _empty(a), _empty(a), _empty(a), True
	singular = a.shape[0] != a.shape[1] or is_singular_triangle(u)
	log.debug("lu of %s: singular=%s", a.shape, singular)
	return _f(p.astype(a.dtype)), _f(l), _f(u), singular

def svd(a:np.ndarray):
	""" (U, Sigma, V*, ok) with A = U Sigma V*, where Sigma has the shape of A. """
	try: u, s, vh = scipy.linalg.svd(a, full_matrices=True)
	except _KERNEL_FAILURES as ex:
		log.debug("svd of %s failed: %s", a.shape, ex)
		return _empty(a), _empty(a), _empty(a), False
	sigma = np.zeros(a.shape, dtype=a.dtype, order='F')
	sigma[np.diag_indices(min(a.shape))] = s
	return _f(u), sigma, _f(vh), True

def singular_values(a:np.ndarray) -> np.ndarray:
	try: return scipy.linalg.svdvals(a)
	except _KERNEL_FAILURES as ex: raise CanNotConverge("singular values", a.shape) from ex

def qr(a:np.ndarray):
	""" (Q, R, ok) with A = Q R. """
	try: q, r = scipy.linalg.qr(a)
	except _KERNEL_FAILURES: return _empty(a), _empty(a), False
	return _f(q), _f(r), True

def lq(a:np.ndarray):
	""" (L, Q, ok) with A = L Q, by way of the QR decomposition of A* """
	q, r, ok = qr(a.conj().T)
	if not ok: return q, r, ok
	return _f(r.conj().T), _f(q.conj().T), True

def cholesky(a:np.ndarray, lower:bool):
	""" The Cholesky factor of a Hermitian positive-definite matrix, or an empty matrix. """
	if a.shape[0] != a.shape[1] or not np.allclose(a, a.conj().T): return _empty(a)
	try: return _f(scipy.linalg.cholesky(a, lower=lower))
	except _KERNEL_FAILURES as ex:
		log.debug("cholesky of %s failed: %s", a.shape, ex)
		return _empty(a)

def hessenberg(a:np.ndarray):
	""" (Q, H) with A = Q H Q* and H upper Hessenberg. """
	try: h, q = scipy.linalg.hessenberg(a, calc_q=True)
	except _KERNEL_FAILURES as ex: raise CanNotConverge("hessenberg", a.shape) from ex
	return _f(q), _f(h)

def schur(a:np.ndarray):
	""" (Q, U, eigenvalues, ok) with A = Q U Q* and U upper triangular. """
	try: u, q = scipy.linalg.schur(a, output='complex')
	except _KERNEL_FAILURES as ex:
		log.debug("schur of %s failed: %s", a.shape, ex)
		return _empty(a), _empty(a), _empty(a), False
	return _f(q), _f(u), _f(np.diagonal(u).reshape(-1, 1)), True

def eigen(a:np.ndarray):
	"""
	(eigenvalues, Q, U, eigenvectors, ok): the Schur form, plus unit right eigenvectors as columns.
	The i-th eigenvalue belongs to the i-th eigenvector column.
	"""
	q, u, _, ok = schur(a)
	if not ok: return _empty(a), q, u, _empty(a), False
	try: values, vectors = scipy.linalg.eig(a)
	except _KERNEL_FAILURES as ex:
		log.debug("eig of %s failed: %s", a.shape, ex)
		return _empty(a), q, u, _empty(a), False
	return _f(values.reshape(-1, 1).astype(a.dtype)), q, u, _f(vectors.astype(a.dtype)), True

def null_space(a:np.ndarray) -> np.ndarray:
	""" An orthonormal basis of the kernel of A, as columns. """
	try: return _f(scipy.linalg.null_space(a))
	except _KERNEL_FAILURES as ex: raise CanNotConverge("null space", a.shape) from ex

###############################################################################
# Norms and measures

def rank(a:np.ndarray, epsilon=None) -> int:
	""" The number of singular values above epsilon. """
	if not a.size: return 0
	values = singular_values(a)
	if epsilon is None: epsilon = values.max() * max(a.shape) * np.finfo(values.dtype).eps
	return int(np.count_nonzero(values > epsilon))

def p_norm(a:np.ndarray, p:float) -> float:
	""" Entry-wise p-norm. """
	return float(np.sum(np.abs(a) ** p) ** (1.0 / p))

def euclidean_norm(a:np.ndarray) -> float: return float(np.linalg.norm(a, 'fro'))
def one_norm(a:np.ndarray) -> float: return float(np.linalg.norm(a, 1)) if a.size else 0.0
def infinity_norm(a:np.ndarray) -> float: return float(np.linalg.norm(a, np.inf)) if a.size else 0.0

def condition_number(a:np.ndarray) -> float:
	""" The 2-norm condition number; infinite for a singular matrix. """
	values = singular_values(a)
	if not values.size: return 1.0
	if values[-1] == 0: return float(np.inf)
	return float(values[0] / values[-1])

def equilibrate(a:np.ndarray):
	"""
	(R, C, ok): diagonal scalings so that every row and column of R A C has
	largest magnitude 1. A zero row or column cannot be scaled; ok is then False.
	"""
	magnitude = np.abs(a)
	rows, columns = a.shape
	real = magnitude.dtype
	with np.errstate(divide='ignore'):
		row_max = magnitude.max(axis=1) if columns else np.zeros(rows, real)
		r = np.where(row_max > 0, 1.0 / np.where(row_max > 0, row_max, 1.0), 1.0)
		scaled = magnitude * r[:, None]
		col_max = scaled.max(axis=0) if rows else np.zeros(columns, real)
		c = np.where(col_max > 0, 1.0 / np.where(col_max > 0, col_max, 1.0), 1.0)
	ok = bool(np.all(row_max > 0) and np.all(col_max > 0))
	return _f(np.diag(r).astype(a.dtype)), _f(np.diag(c).astype(a.dtype)), ok

###############################################################################
# Solvers

def solve(a:np.ndarray, y:np.ndarray) -> np.ndarray:
	""" X with A X = Y, or an empty matrix if A is singular. """
	if a.shape[0] != a.shape[1]: return _empty(a)
	try: lu, pivots = scipy.linalg.lu_factor(a, check_finite=False)
	except _KERNEL_FAILURES: return _empty(a)
	if is_singular_triangle(lu): return _empty(a)
	return _f(scipy.linalg.lu_solve((lu, pivots), y, check_finite=False))

def least_squares(a:np.ndarray, b:np.ndarray) -> np.ndarray:
	""" The X minimizing |A X - B|, or an empty matrix if A is rank-deficient. """
	try:
		if rank(a) < min(a.shape): return _empty(a)
		x, *_ = scipy.linalg.lstsq(a, b)
	except (CanNotConverge, *_KERNEL_FAILURES): return _empty(a)
	return _f(x)

###############################################################################
# Transforms. A row or column vector is transformed as one sequence; anything else in two dimensions.

def _is_vector(a:np.ndarray) -> bool: return 1 in a.shape

def _nothing(a:np.ndarray, dtype) -> np.ndarray:
	return np.zeros(a.shape, dtype=dtype, order='F')

def dft(a:np.ndarray) -> np.ndarray:
	if not a.size: return _nothing(a, np.complex128)
	if _is_vector(a): return _f(np.fft.fft(a.ravel()).reshape(a.shape))
	return _f(np.fft.fft2(a))

def idft(a:np.ndarray) -> np.ndarray:
	if not a.size: return _nothing(a, np.complex128)
	if _is_vector(a): return _f(np.fft.ifft(a.ravel()).reshape(a.shape))
	return _f(np.fft.ifft2(a))

def dct(a:np.ndarray) -> np.ndarray:
	if not a.size: return _nothing(a, np.float64)
	if _is_vector(a): return _f(scipy.fft.dct(a.ravel(), type=2, norm='ortho').reshape(a.shape))
	return _f(scipy.fft.dctn(a, type=2, norm='ortho'))

def idct(a:np.ndarray) -> np.ndarray:
	if not a.size: return _nothing(a, np.float64)
	if _is_vector(a): return _f(scipy.fft.idct(a.ravel(), type=2, norm='ortho').reshape(a.shape))
	return _f(scipy.fft.idctn(a, type=2, norm='ortho'))

def hilbert(a:np.ndarray) -> np.ndarray:
	""" The analytic signal of a real vector: a + i * H(a). """
	if not a.size: return _nothing(a, np.complex128)
	return _f(scipy.signal.hilbert(a.ravel()).reshape(a.shape))
