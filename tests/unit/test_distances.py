"""Unit tests for pointwise distances, distance matrices and autosums."""
import numpy as np
import pytest

from seqpsi.distances.core import auto_sum, distance, distance_matrix
from seqpsi.exceptions import DimensionMismatch, InvalidInput, InvalidMethod

METHODS = ["manhattan", "euclidean", "chi", "hellinger"]


class TestPointwiseDistance:
    """Formulas of the four metrics."""

    def test_manhattan(self):
        assert distance([1, 2, 3], [2, 0, 3], "manhattan") == pytest.approx(3.0)

    def test_euclidean(self):
        assert distance([0, 0], [3, 4], "euclidean") == pytest.approx(5.0)

    def test_chi(self):
        # (0.2-0.4)^2/0.6 + (0.8-0.6)^2/1.4
        expected = 0.04 / 0.6 + 0.04 / 1.4
        assert distance([0.2, 0.8], [0.4, 0.6], "chi") == pytest.approx(expected)

    def test_chi_skips_double_zeros(self):
        assert distance([0.0, 0.5, 0.5], [0.0, 0.25, 0.75], "chi") == pytest.approx(
            0.0625 / 0.75 + 0.0625 / 1.25
        )

    def test_hellinger(self):
        a = np.array([0.25, 0.75])
        b = np.array([0.64, 0.36])
        expected = np.sqrt(np.sum((np.sqrt(a) - np.sqrt(b)) ** 2))
        assert distance(a, b, "hellinger") == pytest.approx(expected)

    @pytest.mark.parametrize("method", METHODS)
    def test_identity(self, method):
        v = np.array([0.1, 0.0, 0.6, 0.3])
        assert distance(v, v, method) == 0.0

    @pytest.mark.parametrize("method", ["manhattan", "euclidean"])
    def test_symmetry(self, method):
        rng = np.random.default_rng(0)
        a, b = rng.random(6), rng.random(6)
        assert distance(a, b, method) == pytest.approx(distance(b, a, method))

    @pytest.mark.parametrize("name", ["Manhattan", "MANHATTAN", "Euclidean", "CHI", "Hellinger"])
    def test_method_names_case_insensitive(self, name):
        assert distance([1.0, 0.0], [1.0, 0.0], name) == 0.0

    def test_invalid_method(self):
        with pytest.raises(InvalidMethod):
            distance([1.0], [2.0], "cosine")

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatch):
            distance([1.0, 2.0], [1.0, 2.0, 3.0])

    def test_empty_vectors(self):
        with pytest.raises(DimensionMismatch):
            distance([], [])


class TestDistanceMatrix:
    """Sample-by-sample distance matrix."""

    def test_worked_example(self, seq_a, seq_b):
        D = distance_matrix(seq_a, seq_b, "manhattan")
        assert np.allclose(D, [[0, 2], [2, 0], [1, 1]])

    def test_ragged_shape(self):
        rng = np.random.default_rng(1)
        D = distance_matrix(rng.random((7, 3)), rng.random((4, 3)), "euclidean")
        assert D.shape == (7, 4)
        assert np.all(D >= 0)

    def test_transpose(self):
        rng = np.random.default_rng(2)
        A, B = rng.random((5, 3)), rng.random((8, 3))
        assert np.allclose(distance_matrix(A, B), distance_matrix(B, A).T)

    def test_matches_pointwise(self):
        rng = np.random.default_rng(3)
        A, B = rng.random((4, 3)), rng.random((3, 3))
        D = distance_matrix(A, B, "chi")
        for i in range(4):
            for j in range(3):
                assert D[i, j] == pytest.approx(distance(A[i], B[j], "chi"))

    def test_variable_mismatch(self):
        with pytest.raises(DimensionMismatch):
            distance_matrix(np.ones((3, 2)), np.ones((3, 4)))

    def test_invalid_method(self):
        with pytest.raises(InvalidMethod):
            distance_matrix(np.ones((3, 2)), np.ones((3, 2)), "bray")


class TestAutoSum:
    """Sum of consecutive-sample distances."""

    def test_worked_example(self, seq_a, seq_b):
        assert auto_sum(seq_a, "manhattan") == pytest.approx(3.0)
        assert auto_sum(seq_b, "manhattan") == pytest.approx(1.0)

    @pytest.mark.parametrize("method", METHODS)
    def test_single_sample_is_zero(self, method):
        assert auto_sum(np.array([[0.3, 0.7]]), method) == 0.0

    def test_superdiagonal_of_self_matrix(self):
        rng = np.random.default_rng(4)
        A = rng.random((6, 4))
        D = distance_matrix(A, A, "euclidean")
        assert auto_sum(A, "euclidean") == pytest.approx(np.trace(D, offset=1))

    def test_constant_sequence_is_zero(self):
        assert auto_sum(np.tile([0.5, 0.5], (4, 1))) == 0.0


class TestNonNegativeDomain:
    """Chi and Hellinger are only defined on non-negative abundances."""

    @pytest.mark.parametrize("method", ["chi", "hellinger"])
    def test_negative_sample_rejected(self, method):
        with pytest.raises(InvalidInput):
            distance([-1.0, 0.2], [0.5, 0.2], method)

    def test_opposite_signs_summing_to_zero(self):
        with pytest.raises(InvalidInput):
            distance([1.0], [-1.0], "chi")

    @pytest.mark.parametrize("method", ["chi", "hellinger"])
    def test_scaled_sequences_rejected(self, method):
        rng = np.random.default_rng(6)
        A = rng.random((5, 3))
        scaled = (A - A.mean(axis=0)) / A.std(axis=0)
        with pytest.raises(InvalidInput):
            distance_matrix(scaled, A, method)
        with pytest.raises(InvalidInput):
            auto_sum(scaled, method)

    @pytest.mark.parametrize("method", ["manhattan", "euclidean"])
    def test_negative_values_allowed(self, method):
        assert distance([-1.0, 0.2], [0.5, 0.2], method) == pytest.approx(1.5)

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            distance([-0.5], [0.5], "hellinger")
