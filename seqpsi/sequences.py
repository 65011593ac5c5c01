"""
Sequence containers.

A :class:`Sequence` is one multivariate record (for example a pollen core)
and a :class:`NamedSequenceSet` holds every record of a run, keyed by the
value of the grouping column.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .exceptions import DimensionMismatch


def _frozen(values) -> NDArray[np.float64]:
    arr = np.array(values, dtype=np.float64, copy=True)
    arr = np.ascontiguousarray(arr)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Sequence:
    """
    Ordered multivariate samples of one record.

    Row ``k`` of ``values`` is sample ``k``. The row order *is* the sample
    order: nothing in seqpsi sorts samples, so a caller holding an order key
    (depth, age, rank) must sort before building the sequence. ``order`` is
    kept for reference only and never enters the distance computations.

    Parameters
    ----------
    name : str
        Sequence identifier (grouping key value)
    values : array (n_samples, n_variables)
        Finite sample values; a 1-D array is read as one variable
    order : array (n_samples,), optional
        Time/depth/rank of each sample
    columns : tuple of str, optional
        Variable names, one per column of ``values``
    """

    name: str
    values: NDArray[np.float64]
    order: Optional[NDArray[np.float64]] = None
    columns: Optional[Tuple[str, ...]] = None

    def __post_init__(self):
        values = _frozen(self.values)
        if values.ndim == 1:
            values = _frozen(values.reshape(-1, 1))
        if values.ndim != 2:
            raise ValueError(f"Sequence {self.name!r}: values must be 2D, got shape {values.shape}")
        if values.shape[0] == 0:
            raise ValueError(f"Sequence {self.name!r} has no samples")
        if values.shape[1] == 0:
            raise ValueError(f"Sequence {self.name!r} has no numeric variables")
        if not np.all(np.isfinite(values)):
            raise ValueError(f"Sequence {self.name!r} contains missing or non-finite values")
        object.__setattr__(self, "values", values)

        if self.order is not None:
            order = _frozen(self.order).reshape(-1)
            if order.shape[0] != values.shape[0]:
                raise ValueError(
                    f"Sequence {self.name!r}: {order.shape[0]} order values "
                    f"for {values.shape[0]} samples"
                )
            object.__setattr__(self, "order", order)

        if self.columns is not None:
            columns = tuple(str(c) for c in self.columns)
            if len(columns) != values.shape[1]:
                raise DimensionMismatch(
                    f"Sequence {self.name!r}: {len(columns)} column names "
                    f"for {values.shape[1]} variables"
                )
            object.__setattr__(self, "columns", columns)

    def __len__(self) -> int:
        return self.values.shape[0]

    @property
    def n_samples(self) -> int:
        return self.values.shape[0]

    @property
    def n_variables(self) -> int:
        return self.values.shape[1]

    def __repr__(self) -> str:
        return (f"Sequence(name={self.name!r}, n_samples={self.n_samples}, "
                f"n_variables={self.n_variables})")


class NamedSequenceSet(Mapping):
    """
    Read-only, ordered mapping from sequence id to :class:`Sequence`.

    Iteration follows insertion order, which is the order used to orient
    pairs (the positionally first id always provides the rows of the
    distance matrix).
    """

    def __init__(self, sequences: Iterable[Sequence] | Mapping[str, object]):
        items: Dict[str, Sequence] = {}
        if isinstance(sequences, Mapping):
            pairs = sequences.items()
        else:
            pairs = ((seq.name, seq) for seq in sequences)

        for name, seq in pairs:
            name = str(name)
            if not isinstance(seq, Sequence):
                seq = Sequence(name=name, values=seq)
            elif seq.name != name:
                seq = Sequence(name=name, values=seq.values, order=seq.order, columns=seq.columns)
            if name in items:
                raise ValueError(f"Duplicate sequence id: {name!r}")
            items[name] = seq
        self._items = items

    def __getitem__(self, key: str) -> Sequence:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(self._items)

    @property
    def n_variables(self) -> Optional[int]:
        """Number of variables shared by all sequences, None if they differ."""
        dims = {seq.n_variables for seq in self._items.values()}
        return dims.pop() if len(dims) == 1 else None

    def position(self, key: str) -> int:
        """Index of ``key`` in the set ordering."""
        for i, name in enumerate(self._items):
            if name == key:
                return i
        raise KeyError(key)

    def __repr__(self) -> str:
        return f"NamedSequenceSet({list(self._items)})"
