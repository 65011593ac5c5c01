"""
Tests for table-to-sequence adapters.
"""

import numpy as np
import pandas as pd
import pytest

from seqpsi.exceptions import InsufficientGroups
from seqpsi.io_adapters import from_pandas, read_sequences, variable_columns


def test_split_by_group(pollen_table):
    seqs = from_pandas(pollen_table, group_col="core", time_col="depth",
                       exclude_columns=["site_code"])
    assert seqs.ids == ("core1", "core2", "core3", "core4")
    assert [len(seqs[k]) for k in seqs] == [12, 9, 15, 10]
    assert seqs["core1"].columns == tuple(f"taxon{j}" for j in range(5))
    assert seqs["core2"].order.tolist() == [float(k * 5) for k in range(9)]


def test_row_order_is_sample_order():
    df = pd.DataFrame({
        "id": ["b", "a", "b", "a", "b"],
        "age": [30.0, 5.0, 10.0, 1.0, 20.0],
        "x": [3.0, 0.5, 1.0, 0.1, 2.0],
    })
    seqs = from_pandas(df, group_col="id", time_col="age")
    assert seqs.ids == ("b", "a")
    assert seqs["b"].values[:, 0].tolist() == [3.0, 1.0, 2.0]
    assert seqs["b"].order.tolist() == [30.0, 10.0, 20.0]


def test_numeric_group_ids_become_strings():
    df = pd.DataFrame({"g": [1, 1, 2, 2], "x": [0.0, 1.0, 2.0, 3.0]})
    seqs = from_pandas(df, group_col="g")
    assert seqs.ids == ("1", "2")


def test_exclude_single_string(pollen_table):
    cols = variable_columns(pollen_table, "core", "depth", "site_code")
    assert cols == [f"taxon{j}" for j in range(5)]


def test_non_numeric_variable():
    df = pd.DataFrame({"g": ["a", "a", "b"], "x": [1.0, 2.0, 3.0], "note": ["p", "q", "r"]})
    with pytest.raises(ValueError, match="note"):
        from_pandas(df, group_col="g")
    assert len(from_pandas(df, group_col="g", exclude_columns="note")) == 2


def test_missing_values():
    df = pd.DataFrame({"g": ["a", "a", "b"], "x": [1.0, np.nan, 3.0]})
    with pytest.raises(ValueError, match="missing"):
        from_pandas(df, group_col="g")


def test_single_group():
    df = pd.DataFrame({"g": ["a", "a"], "x": [1.0, 2.0]})
    with pytest.raises(InsufficientGroups):
        from_pandas(df, group_col="g")


def test_unknown_columns():
    df = pd.DataFrame({"g": ["a", "b"], "x": [1.0, 2.0]})
    with pytest.raises(ValueError):
        from_pandas(df, group_col="missing")
    with pytest.raises(ValueError):
        from_pandas(df, group_col="g", time_col="missing")


def test_no_variables_left():
    df = pd.DataFrame({"g": ["a", "b"], "t": [1.0, 2.0]})
    with pytest.raises(ValueError, match="No variable columns"):
        from_pandas(df, group_col="g", time_col="t")


def test_read_sequences(tmp_path, pollen_table):
    path = tmp_path / "cores.tsv"
    pollen_table.to_csv(path, sep="\t", index=False)
    seqs = read_sequences(path, group_col="core", time_col="depth",
                          exclude_columns=["site_code"], sep="\t")
    assert len(seqs) == 4
    assert np.allclose(seqs["core3"].values,
                       pollen_table.loc[pollen_table.core == "core3",
                                        [f"taxon{j}" for j in range(5)]].to_numpy())


def test_read_sequences_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_sequences(tmp_path / "absent.csv", group_col="core")


def test_mixed_type_ids_are_not_merged():
    df = pd.DataFrame({"g": [1, 1, "1", "1", 2], "x": [0.0, 1.0, 2.0, 3.0, 4.0]})
    with pytest.raises(ValueError, match="one-to-one"):
        from_pandas(df, group_col="g")


def test_missing_group_id():
    df = pd.DataFrame({"g": ["a", "a", None, "b"], "x": [0.0, 1.0, 2.0, 3.0]})
    with pytest.raises(ValueError, match="missing ids"):
        from_pandas(df, group_col="g")
    df["g"] = [1.0, 1.0, np.nan, 2.0]
    with pytest.raises(ValueError, match="missing ids"):
        from_pandas(df, group_col="g")
