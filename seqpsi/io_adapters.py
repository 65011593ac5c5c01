"""
Columnar data adapters for seqpsi.

Turn a prepared long table (one grouping column, an optional time column and
numeric variable columns) into a :class:`~seqpsi.sequences.NamedSequenceSet`.
The core algorithms only ever see NumPy arrays.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from .exceptions import InsufficientGroups
from .sequences import NamedSequenceSet, Sequence

logger = logging.getLogger(__name__)


def _as_list(columns: Optional[Union[str, Iterable[str]]]) -> List[str]:
    if columns is None:
        return []
    if isinstance(columns, str):
        return [columns]
    return list(columns)


def variable_columns(
    df: pd.DataFrame,
    group_col: str,
    time_col: Optional[str] = None,
    exclude_columns: Optional[Union[str, Iterable[str]]] = None,
) -> List[str]:
    """Columns that hold the compared variables, in table order."""
    skip = {group_col, *_as_list(exclude_columns)}
    if time_col is not None:
        skip.add(time_col)
    return [c for c in df.columns if c not in skip]


def from_pandas(
    df: pd.DataFrame,
    group_col: str,
    time_col: Optional[str] = None,
    exclude_columns: Optional[Union[str, Iterable[str]]] = None,
) -> NamedSequenceSet:
    """
    Split a prepared DataFrame into named sequences.

    Parameters
    ----------
    df : pd.DataFrame
        Prepared sequences, one row per sample
    group_col : str
        Column identifying the sequence of each row; values are cast to str
    time_col : str, optional
        Time/depth/rank column. Kept as each sample's order key; rows are
        NOT sorted by it, table order is sample order
    exclude_columns : str or list of str, optional
        Columns ignored by the analysis

    Returns
    -------
    NamedSequenceSet
        Sequences in order of first appearance of their id

    Raises
    ------
    ValueError
        Missing columns, non-numeric variables, missing values, missing
        group ids or distinct ids that coincide once cast to str
    InsufficientGroups
        Fewer than two distinct ids

    Examples
    --------
    >>> df = pd.DataFrame({'core': ['A', 'A', 'B', 'B'],
    ...                    'depth': [0.0, 1.0, 0.0, 2.0],
    ...                    'pinus': [0.2, 0.4, 0.1, 0.3],
    ...                    'quercus': [0.8, 0.6, 0.9, 0.7]})
    >>> seqs = from_pandas(df, group_col='core', time_col='depth')
    >>> list(seqs)
    ['A', 'B']
    """
    if group_col not in df.columns:
        raise ValueError(f"Grouping column {group_col!r} not found in the table")
    if time_col is not None and time_col not in df.columns:
        raise ValueError(f"Time column {time_col!r} not found in the table")
    missing = [c for c in _as_list(exclude_columns) if c not in df.columns]
    if missing:
        logger.warning(f"Excluded columns not present in the table: {missing}")

    columns = variable_columns(df, group_col, time_col, exclude_columns)
    if not columns:
        raise ValueError("No variable columns left after removing group, time and excluded columns")

    non_numeric = [c for c in columns if not pd.api.types.is_numeric_dtype(df[c])]
    if non_numeric:
        raise ValueError(f"Variable columns must be numeric, got non-numeric: {non_numeric}")

    if df[columns].isna().to_numpy().any():
        raise ValueError("Variable columns contain missing values; handle them before computing psi")

    raw_keys = df[group_col]
    if raw_keys.isna().any():
        raise ValueError(f"Grouping column {group_col!r} contains missing ids")
    keys = raw_keys.astype(str)
    n_groups = keys.nunique()
    if n_groups != raw_keys.nunique():
        raise ValueError(
            f"Grouping column {group_col!r} ids do not map one-to-one onto text "
            f"ids (e.g. 1 and '1' both become '1'); use one type for all ids"
        )
    if n_groups < 2:
        raise InsufficientGroups(
            f"Only {n_groups} sequence(s) found in column {group_col!r}; at least two are required"
        )

    sequences = []
    for group_val, group_df in df.groupby(keys, sort=False):
        order = None
        if time_col is not None:
            order = group_df[time_col].to_numpy(dtype=np.float64)
        sequences.append(Sequence(
            name=str(group_val),
            values=group_df[columns].to_numpy(dtype=np.float64),
            order=order,
            columns=tuple(str(c) for c in columns),
        ))

    logger.info(f"Loaded {len(sequences)} sequences with {len(columns)} variables")
    return NamedSequenceSet(sequences)


def read_sequences(
    path: Union[str, Path],
    group_col: str,
    time_col: Optional[str] = None,
    exclude_columns: Optional[Union[str, Iterable[str]]] = None,
    sep: str = ",",
) -> NamedSequenceSet:
    """Read a delimited text file and split it with :func:`from_pandas`."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")
    logger.info(f"Reading sequences from {path}")
    df = pd.read_csv(path, sep=sep, dtype={group_col: str})
    return from_pandas(df, group_col=group_col, time_col=time_col,
                       exclude_columns=exclude_columns)
