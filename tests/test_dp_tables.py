import numpy as np
import pytest

from optimal_kmeans_1d import compute_prefix_state, reconstruct_partition, segment_cost
from optimal_kmeans_1d.linear import solve_linear
from optimal_kmeans_1d.quadratic import solve_quadratic

solvers = {
    "linear": solve_linear,
    "quadratic": solve_quadratic,
}


class TestPrefixState:
    def test_prefix_sums(self):
        prefix = compute_prefix_state(np.array([1, 2, 3, 10, 11, 12], dtype=float))
        np.testing.assert_array_equal(prefix.sum_prefix, [0, 1, 3, 6, 16, 27, 39])
        np.testing.assert_array_equal(
            prefix.sum_sq_prefix, [0, 1, 5, 14, 114, 235, 379]
        )

    def test_single_value(self):
        prefix = compute_prefix_state(np.array([-3.0]))
        np.testing.assert_array_equal(prefix.sum_prefix, [0, -3])
        np.testing.assert_array_equal(prefix.sum_sq_prefix, [0, 9])


class TestSegmentCost:
    def test_small_ranges(self):
        prefix = compute_prefix_state(np.array([1, 2, 3, 4, 5], dtype=float))
        assert segment_cost(prefix, 1, 1) == 0.0
        assert segment_cost(prefix, 1, 2) == pytest.approx(0.5)
        assert segment_cost(prefix, 2, 4) == pytest.approx(2.0)
        assert segment_cost(prefix, 1, 5) == pytest.approx(10.0)

    def test_matches_direct_computation(self):
        rng = np.random.default_rng(0)
        x = np.sort(rng.normal(0, 3, 25))
        prefix = compute_prefix_state(x)
        for j in range(1, 26):
            for i in range(j, 26):
                segment = x[j - 1 : i]
                expected = np.sum((segment - segment.mean()) ** 2)
                assert segment_cost(prefix, j, i) == pytest.approx(
                    expected, rel=1e-9, abs=1e-9
                )


class TestSolvers:
    @pytest.mark.parametrize("name", solvers)
    def test_single_cluster(self, name: str):
        prefix = compute_prefix_state(np.array([1, 2, 3, 4, 5], dtype=float))
        solution = solvers[name](prefix, 1)

        assert solution.total_cost == pytest.approx(10.0)
        assert solution.best_split.shape == (6, 2)

    @pytest.mark.parametrize("name", solvers)
    def test_two_clusters(self, name: str):
        prefix = compute_prefix_state(np.array([1, 2, 8, 9], dtype=float))
        solution = solvers[name](prefix, 2)

        assert solution.total_cost == pytest.approx(1.0)
        assert solution.best_split.shape == (5, 3)
        # best_split[i, 2] for the first i = 2, 3, 4 points
        assert list(solution.best_split[2:, 2]) == [1, 2, 2]

    @pytest.mark.parametrize("name", solvers)
    def test_three_clusters(self, name: str):
        prefix = compute_prefix_state(np.array([1, 2, 8, 9, 20, 21], dtype=float))
        solution = solvers[name](prefix, 3)

        assert solution.total_cost == pytest.approx(1.5)
        assert solution.best_split[6, 3] == 4
        assert solution.best_split[4, 2] == 2

    @pytest.mark.parametrize("name", solvers)
    def test_ties_prefer_smaller_split(self, name: str):
        prefix = compute_prefix_state(np.full(6, 2.5))
        solution = solvers[name](prefix, 3)

        assert solution.total_cost == 0.0
        for q in (2, 3):
            for i in range(q, 7):
                assert solution.best_split[i, q] == q - 1

    def test_split_tables_agree(self):
        rng = np.random.default_rng(21)
        x = np.sort(rng.uniform(0, 50, 60))
        prefix = compute_prefix_state(x)
        linear = solve_linear(prefix, 6)
        quadratic = solve_quadratic(prefix, 6)

        np.testing.assert_array_equal(linear.best_split, quadratic.best_split)
        assert linear.total_cost == pytest.approx(quadratic.total_cost, rel=1e-12)

    def test_split_index_non_decreasing(self):
        rng = np.random.default_rng(4)
        x = np.sort(rng.gamma(2.0, 2.0, 80))
        solution = solve_linear(compute_prefix_state(x), 5)
        for q in range(2, 6):
            column = solution.best_split[q:, q]
            assert np.all(np.diff(column) >= 0)
            assert np.all(column >= q - 1)
            assert np.all(column < np.arange(q, 81))


class TestReconstruction:
    def test_hand_built_table(self):
        best_split = np.zeros((7, 4), dtype=np.int64)
        best_split[6, 3] = 4
        best_split[4, 2] = 2
        assert reconstruct_partition(best_split, 6, 3) == [(1, 2), (3, 4), (5, 6)]

    def test_single_cluster(self):
        best_split = np.zeros((5, 2), dtype=np.int64)
        assert reconstruct_partition(best_split, 4, 1) == [(1, 4)]

    @pytest.mark.parametrize("k", [1, 2, 3, 7, 15])
    def test_ranges_cover_all_points(self, k: int):
        rng = np.random.default_rng(k)
        x = np.sort(rng.normal(0, 1, 15))
        solution = solve_linear(compute_prefix_state(x), k)
        ranges = reconstruct_partition(solution.best_split, 15, k)

        assert len(ranges) == k
        assert ranges[0][0] == 1
        assert ranges[-1][1] == 15
        for start, end in ranges:
            assert start <= end
        for (_, end), (start, _) in zip(ranges[:-1], ranges[1:]):
            assert start == end + 1
