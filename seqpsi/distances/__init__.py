"""
Distance primitives for sequence comparison.

This module provides the pointwise metrics, the sample-by-sample distance
matrix, the per-sequence autosum and the least-cost alignment kernel.
"""

from .core import (
    distance,
    distance_matrix,
    auto_sum,
    check_domain,
)
from .dtw import (
    least_cost_matrix,
    least_cost,
)

__all__ = [
    "distance",
    "distance_matrix",
    "auto_sum",
    "check_domain",
    "least_cost_matrix",
    "least_cost",
]
