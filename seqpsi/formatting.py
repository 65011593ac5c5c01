"""
Reshape a :class:`~seqpsi.scoring.PsiResultSet` into a table or a matrix.
"""

from typing import Union

import numpy as np
import pandas as pd
from scipy.spatial.distance import squareform

from .config import OutputFormat
from .scoring import PsiResultSet


def psi_table(result_set: PsiResultSet) -> pd.DataFrame:
    """One row per pair with columns ``A``, ``B`` and ``psi``."""
    rows = [(r.a, r.b, r.psi) for r in result_set.results]
    return pd.DataFrame(rows, columns=["A", "B", "psi"])


def psi_matrix(result_set: PsiResultSet) -> pd.DataFrame:
    """
    Symmetric sequence-by-sequence psi matrix.

    The diagonal is NaN: a sequence is never compared with itself.
    """
    ids = list(result_set.ids)
    n = len(ids)
    position = {name: i for i, name in enumerate(ids)}

    # condensed vector in (0,1), (0,2), ..., (n-2,n-1) order
    condensed = np.full(n * (n - 1) // 2, np.nan)
    for r in result_set.results:
        i, j = sorted((position[r.a], position[r.b]))
        condensed[n * i - i * (i + 1) // 2 + (j - i - 1)] = r.psi

    M = squareform(condensed, checks=False) if n > 1 else np.zeros((n, n))
    M = np.array(M, dtype=np.float64)
    np.fill_diagonal(M, np.nan)
    return pd.DataFrame(M, index=pd.Index(ids, name="sequence"), columns=ids)


def format_psi(result_set: PsiResultSet,
               to: Union[OutputFormat, str] = "table") -> Union[PsiResultSet, pd.DataFrame]:
    """
    Reshape psi results.

    Args:
        result_set: Output of :func:`seqpsi.pairwise.compute_all_pairs`
        to: 'list' (returns ``result_set`` unchanged), 'table' or 'matrix'

    Returns:
        The result set, a long table or a square matrix
    """
    fmt = OutputFormat.parse(to)
    if fmt is OutputFormat.LIST:
        return result_set
    if fmt is OutputFormat.TABLE:
        return psi_table(result_set)
    return psi_matrix(result_set)
