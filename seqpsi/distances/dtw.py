"""
Least-cost alignment between two sequences.

The cumulative cost matrix is the classical monotonic-alignment recurrence.
Without the diagonal step only "right" and "down" moves are allowed, which is
the path topology of Birks & Gordon (1985); enabling the diagonal lets one
sample of each sequence advance together.
"""

import numpy as np
from numba import njit
from numpy.typing import NDArray


@njit(cache=True, nogil=True)
def _least_cost_matrix(D, diagonal):
    n_rows, n_cols = D.shape
    cost = np.empty((n_rows, n_cols))
    cost[0, 0] = D[0, 0]

    for j in range(1, n_cols):
        cost[0, j] = cost[0, j - 1] + D[0, j]

    for i in range(1, n_rows):
        cost[i, 0] = cost[i - 1, 0] + D[i, 0]
        for j in range(1, n_cols):
            best = min(cost[i - 1, j], cost[i, j - 1])
            if diagonal and cost[i - 1, j - 1] < best:
                best = cost[i - 1, j - 1]
            cost[i, j] = D[i, j] + best

    return cost


def least_cost_matrix(distance_matrix: NDArray[np.float64],
                      diagonal: bool = False) -> NDArray[np.float64]:
    """
    Cumulative cost matrix of the least-cost monotonic path.

    Parameters
    ----------
    distance_matrix : array (n_rows, n_cols)
        Pairwise sample distances, as returned by
        :func:`seqpsi.distances.distance_matrix`
    diagonal : bool
        Allow the diagonal step (i-1, j-1) -> (i, j)

    Returns
    -------
    cost : array (n_rows, n_cols)
        ``cost[i, j]`` is the minimal cumulative distance of any monotonic
        path from (0, 0) to (i, j)

    Examples
    --------
    >>> least_cost_matrix(np.array([[1.0, 2.0, 3.0]]))
    array([[1., 3., 6.]])
    """
    D = np.ascontiguousarray(distance_matrix, dtype=np.float64)
    if D.ndim != 2:
        raise ValueError(f"Distance matrix must be 2D, got shape {D.shape}")
    if D.shape[0] == 0 or D.shape[1] == 0:
        raise ValueError("Distance matrix must not be empty")
    return _least_cost_matrix(D, bool(diagonal))


def least_cost(cost_matrix: NDArray[np.float64]) -> float:
    """Total alignment cost: the bottom-right cell of the cumulative matrix."""
    cost_matrix = np.asarray(cost_matrix)
    if cost_matrix.ndim != 2 or cost_matrix.size == 0:
        raise ValueError(f"Cost matrix must be a non-empty 2D array, got shape {cost_matrix.shape}")
    return float(cost_matrix[-1, -1])
