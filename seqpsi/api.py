"""
One-call psi workflow.

Runs autosum, distance matrix, least-cost matrix, least cost and psi for
every pair of sequences, then shapes the output.
"""

from typing import Iterable, Optional, Union

import pandas as pd

from .config import DistanceMethod, OutputFormat, PsiConfig
from .formatting import format_psi
from .io_adapters import from_pandas
from .pairwise import compute_all_pairs
from .scoring import PsiResultSet
from .sequences import NamedSequenceSet


def workflow_psi(
    sequences: Union[pd.DataFrame, NamedSequenceSet],
    group_col: Optional[str] = None,
    time_col: Optional[str] = None,
    exclude_columns: Optional[Union[str, Iterable[str]]] = None,
    method: Union[DistanceMethod, str] = "manhattan",
    diagonal: bool = False,
    output: Union[OutputFormat, str, None] = "table",
    parallel: bool = True,
    n_jobs: Optional[int] = None,
    strict: bool = True,
    ragged_ratio: Optional[float] = 2.0,
) -> Union[PsiResultSet, pd.DataFrame]:
    """
    Compute psi for two or more sequences.

    Parameters
    ----------
    sequences : DataFrame or NamedSequenceSet
        Prepared sequences. A DataFrame is split on ``group_col``
    group_col : str
        Grouping column (required with a DataFrame)
    time_col : str, optional
        Time/depth/rank column, excluded from the comparison
    exclude_columns : str or list of str, optional
        Other columns excluded from the comparison
    method : str
        'manhattan' (default), 'euclidean', 'chi' or 'hellinger'
    diagonal : bool
        Include diagonal steps in the least-cost path. Defaults to False,
        the topology of the original algorithm
    output : str
        'table' (default), 'matrix' or 'list' (the raw result set)
    parallel : bool
        Spread pairs over a worker pool
    n_jobs : int, optional
        Upper bound on the pool size
    strict : bool
        Abort on the first pair with a zero combined autosum
    ragged_ratio : float, optional
        Length ratio above which a pair triggers RaggedSequenceWarning

    Returns
    -------
    PsiResultSet or pd.DataFrame

    Examples
    --------
    >>> df = pd.DataFrame({'id': ['A'] * 3 + ['B'] * 2,
    ...                    'x': [1, 0, 1, 1, 1], 'y': [0, 1, 1, 0, 1]})
    >>> workflow_psi(df, group_col='id', parallel=False)
       A  B   psi
    0  A  B -0.25
    """
    config = PsiConfig(method=method, diagonal=diagonal, output=output,
                       parallel=parallel, n_jobs=n_jobs, strict=strict,
                       ragged_ratio=ragged_ratio)

    if isinstance(sequences, pd.DataFrame):
        if group_col is None:
            raise ValueError("group_col is required when sequences is a DataFrame")
        sequences = from_pandas(sequences, group_col=group_col, time_col=time_col,
                                exclude_columns=exclude_columns)

    return run_psi(sequences, config)


def run_psi(sequences: NamedSequenceSet,
            config: PsiConfig) -> Union[PsiResultSet, pd.DataFrame]:
    """Run the pairwise workflow with the options held by ``config``."""
    result_set = compute_all_pairs(
        sequences,
        method=config.method,
        diagonal=config.diagonal,
        parallel=config.parallel,
        n_jobs=config.n_jobs,
        strict=config.strict,
        ragged_ratio=config.ragged_ratio,
    )
    return format_psi(result_set, to=config.output)
