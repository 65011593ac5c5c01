"""
Test configuration and fixtures for pytest.

This file contains fixtures and configuration that will be available to all tests.
"""
import numpy as np
import pandas as pd
import pytest

from seqpsi.sequences import NamedSequenceSet, Sequence


@pytest.fixture
def seq_a():
    """Three two-variable samples (worked example, rows)."""
    return Sequence("A", np.array([[1, 0], [0, 1], [1, 1]], dtype=float))


@pytest.fixture
def seq_b():
    """Two two-variable samples (worked example, columns)."""
    return Sequence("B", np.array([[1, 0], [1, 1]], dtype=float))


@pytest.fixture
def worked_example(seq_a, seq_b):
    return NamedSequenceSet([seq_a, seq_b])


@pytest.fixture
def pollen_table():
    """Prepared long table: 4 cores of proportions with ragged lengths."""
    rng = np.random.default_rng(42)
    rows = []
    for core, n_samples in [("core1", 12), ("core2", 9), ("core3", 15), ("core4", 10)]:
        props = rng.dirichlet(np.ones(5), size=n_samples)
        for k in range(n_samples):
            row = {"core": core, "depth": float(k * 5), "site_code": 100 + k}
            row.update({f"taxon{j}": props[k, j] for j in range(5)})
            rows.append(row)
    return pd.DataFrame(rows)


@pytest.fixture
def pollen_sequences(pollen_table):
    from seqpsi.io_adapters import from_pandas
    return from_pandas(pollen_table, group_col="core", time_col="depth",
                       exclude_columns=["site_code"])
