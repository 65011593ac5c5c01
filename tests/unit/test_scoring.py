"""Unit tests for psi and the result containers."""
import numpy as np
import pytest

from seqpsi.exceptions import DegenerateAutosum
from seqpsi.scoring import PairResult, PsiResultSet, psi


class TestPsi:

    def test_worked_example_is_negative(self):
        assert psi(3.0, 3.0, 1.0) == pytest.approx(-0.25)

    def test_zero_when_cost_equals_autosums(self):
        assert psi(5.0, 2.0, 3.0) == 0.0

    def test_positive(self):
        assert psi(12.0, 2.0, 2.0) == pytest.approx(2.0)

    def test_degenerate_autosum(self):
        with pytest.raises(DegenerateAutosum):
            psi(1.0, 0.0, 0.0)

    def test_degenerate_is_zero_division(self):
        with pytest.raises(ZeroDivisionError):
            psi(0.0, 0.0, 0.0)


@pytest.fixture
def result_set():
    return PsiResultSet(
        [
            PairResult("A", "B", 0.5, 6.0, 2.0, 2.0),
            PairResult("A", "C", 1.5, 10.0, 2.0, 2.0),
            PairResult("B", "C", np.nan, 3.0, 2.0, 0.0, error="B vs C: zero"),
        ],
        ids=["A", "B", "C"],
    )


class TestPsiResultSet:

    def test_symmetric_lookup(self, result_set):
        assert result_set["A", "B"] == 0.5
        assert result_set["B", "A"] == 0.5
        assert ("C", "A") in result_set
        assert ("A", "D") not in result_set

    def test_keys_keep_orientation(self, result_set):
        assert list(result_set) == [("A", "B"), ("A", "C"), ("B", "C")]
        assert len(result_set) == 3

    def test_errors(self, result_set):
        assert result_set.errors == {("B", "C"): "B vs C: zero"}
        assert np.isnan(result_set["C", "B"])
        assert not result_set.result("C", "B").ok

    def test_ids(self, result_set):
        assert result_set.ids == ("A", "B", "C")

    def test_ids_inferred(self):
        rs = PsiResultSet([PairResult("x", "y", 0.1, 1.0, 1.0, 1.0)])
        assert rs.ids == ("x", "y")

    def test_duplicate_pair_rejected(self):
        with pytest.raises(ValueError):
            PsiResultSet([
                PairResult("A", "B", 0.5, 6.0, 2.0, 2.0),
                PairResult("B", "A", 0.5, 6.0, 2.0, 2.0),
            ])

    def test_to_dict(self, result_set):
        assert result_set.to_dict() == {"A|B": 0.5, "A|C": 1.5, "B|C": None}

    def test_missing_key(self, result_set):
        with pytest.raises(KeyError):
            result_set["A", "Z"]
