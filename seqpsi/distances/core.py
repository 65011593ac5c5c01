"""
Pointwise distances, distance matrices and autosums.

The four metrics are compiled with numba. Kernels receive the integer code of
a :class:`~seqpsi.config.DistanceMethod`; method names are resolved by the
public wrappers before any kernel is called.
"""

from typing import Union

import numpy as np
from numba import njit
from numpy.typing import NDArray

from ..config import DistanceMethod
from ..exceptions import DimensionMismatch, InvalidInput
from ..sequences import Sequence

SequenceLike = Union[Sequence, NDArray[np.float64]]

MANHATTAN = 0
EUCLIDEAN = 1
CHI = 2
HELLINGER = 3

# Metrics defined only for non-negative values (abundances, proportions)
NON_NEGATIVE_CODES = (CHI, HELLINGER)


# ============================================================================
# Compiled kernels
# ============================================================================

@njit(cache=True, nogil=True)
def _manhattan(a, b):
    total = 0.0
    for k in range(a.shape[0]):
        total += abs(a[k] - b[k])
    return total


@njit(cache=True, nogil=True)
def _euclidean(a, b):
    total = 0.0
    for k in range(a.shape[0]):
        diff = a[k] - b[k]
        total += diff * diff
    return np.sqrt(total)


@njit(cache=True, nogil=True)
def _chi(a, b):
    total = 0.0
    for k in range(a.shape[0]):
        # 0/0 contributes nothing
        if a[k] == 0.0 and b[k] == 0.0:
            continue
        diff = a[k] - b[k]
        total += diff * diff / (a[k] + b[k])
    return total


@njit(cache=True, nogil=True)
def _hellinger(a, b):
    total = 0.0
    for k in range(a.shape[0]):
        diff = np.sqrt(a[k]) - np.sqrt(b[k])
        total += diff * diff
    return np.sqrt(total)


@njit(cache=True, nogil=True)
def _pointwise(a, b, code):
    if code == MANHATTAN:
        return _manhattan(a, b)
    elif code == EUCLIDEAN:
        return _euclidean(a, b)
    elif code == CHI:
        return _chi(a, b)
    return _hellinger(a, b)


@njit(cache=True, nogil=True)
def _distance_matrix(A, B, code):
    n_rows = A.shape[0]
    n_cols = B.shape[0]
    D = np.empty((n_rows, n_cols))
    for i in range(n_rows):
        for j in range(n_cols):
            D[i, j] = _pointwise(A[i], B[j], code)
    return D


@njit(cache=True, nogil=True)
def _auto_sum(A, code):
    total = 0.0
    for k in range(A.shape[0] - 1):
        total += _pointwise(A[k], A[k + 1], code)
    return total


# ============================================================================
# Public API
# ============================================================================

def _as_samples(x: SequenceLike) -> NDArray[np.float64]:
    """Return a C-contiguous (n_samples, n_variables) float64 view of ``x``."""
    if isinstance(x, Sequence):
        return x.values
    arr = np.ascontiguousarray(x, dtype=np.float64)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise ValueError(f"Sequence must be 2D (n_samples, n_variables), got shape {arr.shape}")
    return arr


def check_domain(values, method: Union[DistanceMethod, str], name: str = "sequence") -> None:
    """
    Reject negative values for metrics that are only defined on abundances.

    Chi divides by ``a + b`` and Hellinger takes square roots, so centered or
    scaled data would yield negative distances, a division by zero or NaN.

    Raises:
        InvalidInput: ``method`` is chi or hellinger and ``values`` has a
            negative entry
    """
    method = DistanceMethod.parse(method)
    if method.code not in NON_NEGATIVE_CODES:
        return
    arr = np.asarray(values, dtype=np.float64)
    if arr.size and arr.min() < 0.0:
        raise InvalidInput(
            f"The {method.value} distance requires non-negative values, but {name} "
            f"has a minimum of {arr.min():g}; use manhattan or euclidean for "
            f"centered or scaled data"
        )


def distance(a, b, method: Union[DistanceMethod, str] = "manhattan") -> float:
    """
    Distance between two samples.

    Args:
        a, b: 1-D sample vectors of equal length (>= 1)
        method: 'manhattan', 'euclidean', 'chi' or 'hellinger'

    Returns:
        Non-negative distance

    Raises:
        InvalidMethod: unknown metric name
        DimensionMismatch: vectors differ in length or are empty
        InvalidInput: negative values with chi or hellinger
    """
    code = DistanceMethod.parse(method).code
    a = np.ascontiguousarray(a, dtype=np.float64).reshape(-1)
    b = np.ascontiguousarray(b, dtype=np.float64).reshape(-1)
    if a.shape[0] != b.shape[0]:
        raise DimensionMismatch(f"Cannot compare samples of length {a.shape[0]} and {b.shape[0]}")
    if a.shape[0] == 0:
        raise DimensionMismatch("Cannot compare empty samples")
    check_domain(a, method, "sample a")
    check_domain(b, method, "sample b")
    return float(_pointwise(a, b, code))


def distance_matrix(seq_a: SequenceLike, seq_b: SequenceLike,
                    method: Union[DistanceMethod, str] = "manhattan") -> NDArray[np.float64]:
    """
    Distance between every sample of ``seq_a`` and every sample of ``seq_b``.

    The sequences may have different numbers of samples; they must have the
    same number of variables.

    Returns:
        Array of shape (len(seq_a), len(seq_b))
    """
    code = DistanceMethod.parse(method).code
    A = _as_samples(seq_a)
    B = _as_samples(seq_b)
    if A.shape[1] != B.shape[1]:
        raise DimensionMismatch(
            f"Sequences have {A.shape[1]} and {B.shape[1]} variables"
        )
    if A.shape[0] == 0 or B.shape[0] == 0:
        raise ValueError("Sequences must contain at least one sample")
    check_domain(A, method, "seq_a")
    check_domain(B, method, "seq_b")
    return _distance_matrix(A, B, code)


def auto_sum(seq: SequenceLike, method: Union[DistanceMethod, str] = "manhattan") -> float:
    """
    Sum of distances between consecutive samples of one sequence.

    A single-sample sequence has an autosum of 0.
    """
    code = DistanceMethod.parse(method).code
    A = _as_samples(seq)
    check_domain(A, method, getattr(seq, "name", "sequence"))
    return float(_auto_sum(A, code))
