import numba as nb
import numpy as np

from optimal_kmeans_1d.utils import (
    PartitionSolution,
    PrefixState,
    fill_base_row,
    ssq,
)


@nb.njit(cache=True)
def _fill_row_quadratic(
    q: int,
    cost_prev: np.ndarray,
    cost_curr: np.ndarray,
    split_col: np.ndarray,
    c_x: np.ndarray,
    c_x_sq: np.ndarray,
) -> None:
    """
    Fill DP row q for i in [q, n], scanning every split:

    cost_curr[i] := optimal cost of partitioning x[1..i] into q clusters.
    split_col[i] := number of points in the first q-1 clusters (j in [q-1, i-1]).
    """
    N = c_x.shape[0] - 1
    for i in range(q):
        cost_curr[i] = np.inf
    for i in range(q, N + 1):
        best_cost = np.inf
        best_j = q - 1
        for j in range(q - 1, i):
            # cost up to point j plus cost of cluster [j+1, i]
            cost = cost_prev[j] + ssq(j + 1, i, c_x, c_x_sq)
            if cost < best_cost:
                best_cost = cost
                best_j = j
        cost_curr[i] = best_cost
        split_col[i] = best_j


def solve_quadratic(prefix: PrefixState, K: int) -> PartitionSolution:
    """
    O(k * n^2) reference solver. Same tables and tie-break as
    solve_linear, without any search space reduction.
    """
    c_x, c_x_sq = prefix
    N = c_x.shape[0] - 1

    row_odd = np.full(N + 1, np.inf, dtype=np.float64)
    row_even = np.full(N + 1, np.inf, dtype=np.float64)
    best_split = np.zeros((N + 1, K + 1), dtype=np.int64)

    fill_base_row(row_odd, c_x, c_x_sq)

    for q in range(2, K + 1):
        if q % 2 == 0:
            cost_prev, cost_curr = row_odd, row_even
        else:
            cost_prev, cost_curr = row_even, row_odd
        _fill_row_quadratic(q, cost_prev, cost_curr, best_split[:, q], c_x, c_x_sq)

    final_row = row_even if K % 2 == 0 else row_odd
    return PartitionSolution(float(final_row[N]), best_split)
