"""
The psi dissimilarity and its result containers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .exceptions import DegenerateAutosum

PairKey = Tuple[str, str]


def psi(least_cost: float, autosum_a: float, autosum_b: float) -> float:
    """
    Normalized alignment cost of two sequences.

    ``psi = (least_cost - (autosum_a + autosum_b)) / (autosum_a + autosum_b)``

    0 means the pair is traversed as cheaply together as each sequence is on
    its own. The value is not clamped and can be negative.

    Raises
    ------
    DegenerateAutosum
        If ``autosum_a + autosum_b`` is zero.
    """
    total = float(autosum_a) + float(autosum_b)
    if total == 0.0:
        raise DegenerateAutosum(
            "Combined autosum is zero (single-sample or constant sequences); psi is undefined"
        )
    return (float(least_cost) - total) / total


@dataclass(frozen=True)
class PairResult:
    """Outcome of one pairwise comparison."""
    a: str
    b: str
    psi: float
    least_cost: float
    autosum_a: float
    autosum_b: float
    error: Optional[str] = None

    @property
    def key(self) -> PairKey:
        return (self.a, self.b)

    @property
    def ok(self) -> bool:
        return self.error is None


class PsiResultSet(Mapping):
    """
    Psi values keyed by unordered sequence pair.

    Keys are ``(a, b)`` tuples oriented by the position of the ids in the
    input set; ``result[b, a]`` returns the same value as ``result[a, b]``.
    Pairs whose computation failed in non-strict mode map to NaN and their
    message is available from :attr:`errors`.
    """

    def __init__(self, results: Iterable[PairResult], ids: Optional[Iterable[str]] = None):
        self._results: Dict[PairKey, PairResult] = {}
        for res in results:
            if res.key in self._results or (res.b, res.a) in self._results:
                raise ValueError(f"Duplicate result for pair {res.key}")
            self._results[res.key] = res

        if ids is None:
            seen: Dict[str, None] = {}
            for a, b in self._results:
                seen.setdefault(a)
                seen.setdefault(b)
            ids = seen
        self._ids = tuple(ids)

    def _resolve(self, key: PairKey) -> PairKey:
        a, b = key
        if (a, b) in self._results:
            return (a, b)
        if (b, a) in self._results:
            return (b, a)
        raise KeyError(key)

    def __getitem__(self, key: PairKey) -> float:
        return self._results[self._resolve(key)].psi

    def __iter__(self) -> Iterator[PairKey]:
        return iter(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, key) -> bool:
        try:
            self._resolve(key)
        except (KeyError, TypeError, ValueError):
            return False
        return True

    def result(self, a: str, b: str) -> PairResult:
        """Full :class:`PairResult` for the pair, in either orientation."""
        return self._results[self._resolve((a, b))]

    @property
    def ids(self) -> Tuple[str, ...]:
        return self._ids

    @property
    def results(self) -> List[PairResult]:
        return list(self._results.values())

    @property
    def errors(self) -> Dict[PairKey, str]:
        return {k: r.error for k, r in self._results.items() if r.error is not None}

    def to_dict(self) -> Dict[str, Optional[float]]:
        """Plain ``{"a|b": psi}`` dictionary, convenient for JSON output."""
        return {f"{a}|{b}": (None if np.isnan(r.psi) else r.psi)
                for (a, b), r in self._results.items()}

    def __repr__(self) -> str:
        return f"PsiResultSet(n_sequences={len(self._ids)}, n_pairs={len(self)}, n_errors={len(self.errors)})"
