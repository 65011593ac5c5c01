"""
Psi for every pair of sequences in a set.

Each pair is an independent job that only reads the shared sequences and the
autosum cache, so pairs can be spread over a worker pool. Workers return their
own :class:`~seqpsi.scoring.PairResult` and the results are merged afterwards.
"""

import logging
import warnings
from itertools import combinations
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple, Union

import numpy as np
from joblib import Parallel, cpu_count, delayed, effective_n_jobs

from .config import DistanceMethod
from .distances.core import auto_sum, check_domain, distance_matrix
from .distances.dtw import least_cost, least_cost_matrix
from .exceptions import (
    DegenerateAutosum,
    DimensionMismatch,
    InsufficientGroups,
    RaggedSequenceWarning,
)
from .scoring import PairResult, PsiResultSet, psi
from .sequences import NamedSequenceSet, Sequence

logger = logging.getLogger(__name__)


def compute_autosums(sequences: NamedSequenceSet,
                     method: Union[DistanceMethod, str] = "manhattan") -> Mapping[str, float]:
    """
    Autosum of every sequence, computed once.

    Returns
    -------
    Mapping[str, float]
        Read-only mapping from sequence id to autosum
    """
    method = DistanceMethod.parse(method)
    sums = {name: auto_sum(seq, method) for name, seq in sequences.items()}
    logger.debug(f"Computed {len(sums)} autosums ({method.value})")
    return MappingProxyType(sums)


def compute_pair(seq_a: Sequence, seq_b: Sequence, autosums: Mapping[str, float],
                 method: Union[DistanceMethod, str] = "manhattan",
                 diagonal: bool = False, strict: bool = True) -> PairResult:
    """
    Psi of one pair, with ``seq_a`` as the rows of the distance matrix.

    With ``strict=False`` a degenerate autosum is recorded on the returned
    result (psi is NaN) instead of being raised.
    """
    D = distance_matrix(seq_a, seq_b, method)
    lc = least_cost(least_cost_matrix(D, diagonal=diagonal))
    sum_a = autosums[seq_a.name]
    sum_b = autosums[seq_b.name]
    try:
        value = psi(lc, sum_a, sum_b)
    except DegenerateAutosum as e:
        message = f"{seq_a.name} vs {seq_b.name}: {e}"
        if strict:
            raise DegenerateAutosum(message, pair=(seq_a.name, seq_b.name)) from e
        return PairResult(seq_a.name, seq_b.name, np.nan, lc, sum_a, sum_b, error=message)
    return PairResult(seq_a.name, seq_b.name, value, lc, sum_a, sum_b)


def enumerate_pairs(sequences: NamedSequenceSet) -> List[Tuple[str, str]]:
    """Unordered pairs of ids, each oriented by position in the set."""
    return list(combinations(sequences.ids, 2))


def _n_workers(n_jobs: Optional[int], n_tasks: int) -> int:
    available = cpu_count()
    if n_jobs is None:
        n_jobs = available
    elif n_jobs < 0:
        # joblib convention: -1 is every core, -2 all but one, ...
        n_jobs = effective_n_jobs(n_jobs)
    return max(1, min(n_jobs, available, n_tasks))


def _warn_ragged(sequences: NamedSequenceSet, pairs: List[Tuple[str, str]],
                 ragged_ratio: Optional[float]) -> None:
    if ragged_ratio is None:
        return
    for a, b in pairs:
        la, lb = len(sequences[a]), len(sequences[b])
        if max(la, lb) > ragged_ratio * min(la, lb):
            warnings.warn(
                f"Sequences {a!r} ({la} samples) and {b!r} ({lb} samples) differ "
                f"in length by more than a factor of {ragged_ratio:g}",
                RaggedSequenceWarning,
                stacklevel=3,
            )


def compute_all_pairs(sequences: NamedSequenceSet,
                      method: Union[DistanceMethod, str] = "manhattan",
                      diagonal: bool = False,
                      parallel: bool = False,
                      n_jobs: Optional[int] = None,
                      strict: bool = True,
                      ragged_ratio: Optional[float] = 2.0) -> PsiResultSet:
    """
    Psi for all unordered pairs of sequences.

    Parameters
    ----------
    sequences : NamedSequenceSet
        Two or more prepared sequences
    method : str
        'manhattan', 'euclidean', 'chi' or 'hellinger'
    diagonal : bool
        Allow diagonal steps in the least-cost path
    parallel : bool
        Distribute pairs over a thread pool
    n_jobs : int, optional
        Upper bound on the pool size (None or -1 = all cores, -2 = all but
        one, as in joblib); never more than the available cores
    strict : bool
        Abort on the first degenerate pair (True) or record it and go on
    ragged_ratio : float, optional
        Warn when one sequence of a pair is more than this many times longer
        than the other (None disables the check)

    Returns
    -------
    PsiResultSet
        C(n, 2) results, identical whatever the execution mode

    Raises
    ------
    InvalidMethod
        Unknown metric, raised before any computation
    InsufficientGroups
        Fewer than two sequences
    InvalidInput
        Negative values with the chi or hellinger metric
    DegenerateAutosum
        In strict mode, for the first pair with a zero combined autosum
    """
    method = DistanceMethod.parse(method)
    if not isinstance(sequences, NamedSequenceSet):
        sequences = NamedSequenceSet(sequences)
    if len(sequences) < 2:
        raise InsufficientGroups(
            f"At least two sequences are required, got {len(sequences)}"
        )
    if sequences.n_variables is None:
        dims = {name: seq.n_variables for name, seq in sequences.items()}
        raise DimensionMismatch(f"Sequences do not share the same number of variables: {dims}")
    for name, seq in sequences.items():
        check_domain(seq.values, method, f"sequence {name!r}")

    pairs = enumerate_pairs(sequences)
    _warn_ragged(sequences, pairs, ragged_ratio)
    autosums = compute_autosums(sequences, method)

    workers = _n_workers(n_jobs, len(pairs)) if parallel else 1
    logger.info(
        f"Computing psi ({method.value}, diagonal={diagonal}) for {len(pairs)} pairs "
        f"of {len(sequences)} sequences on {workers} worker(s)"
    )

    if workers == 1:
        results = [
            compute_pair(sequences[a], sequences[b], autosums, method, diagonal, strict)
            for a, b in pairs
        ]
    else:
        # numba kernels release the GIL, so threads run the pairs concurrently
        results = Parallel(n_jobs=workers, backend='threading')(
            delayed(compute_pair)(sequences[a], sequences[b], autosums, method, diagonal, strict)
            for a, b in pairs
        )

    result_set = PsiResultSet(results, ids=sequences.ids)
    for (a, b), message in result_set.errors.items():
        logger.warning(f"psi undefined for {a} vs {b}: {message}")
    return result_set
