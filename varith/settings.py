"""
Process-wide tunables for the value layer.

These are plain module constants. Other modules read them through the module
(as `settings.NAME`) at the moment of use, so rebinding one takes effect at once.
"""
import numpy as np

# Seed for hashing when the caller does not supply one.
DEFAULT_SEED = 0

# Default relative tolerance for the symmetry / normality tests on matrices.
RELATIVE_TOLERANCE = 1e-8

# A pivot of U smaller than this, relative to the largest pivot, marks the matrix singular.
SINGULAR_EPSILON = 64 * float(np.finfo(np.float64).eps)

# Slack when counting the steps of a real-valued range, to forgive rounding in (last-first)/step.
RANGE_TOLERANCE = 1e-9

CSV_DELIMITER = ","

# Smallest number of slots in a set's hash table. Must be a power of two.
TABLE_MINIMUM_CAPACITY = 8

# Singular values at or below this count as zero in Matrix.rank(). None picks
# numpy's usual max(R, C) * eps * largest singular value.
RANK_EPSILON = None
