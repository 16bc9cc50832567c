import numba as nb
import numpy as np

from optimal_kmeans_1d.utils import (
    PartitionSolution,
    PrefixState,
    fill_base_row,
    ssq,
)


@nb.njit(cache=True, inline="always")
def A(i: int, j: int, cost_prev: np.ndarray, c_x: np.ndarray, c_x_sq: np.ndarray) -> float:
    """
    Cost of the first i points when the previous clusters cover points 1..j and
    the last cluster is j+1..i. Infeasible (empty last cluster) when j >= i.
    """
    if j >= i:
        return np.inf
    return cost_prev[j] + ssq(j + 1, i, c_x, c_x_sq)


@nb.njit(cache=True)
def reduce_columns(
    rows: np.ndarray,
    cols: np.ndarray,
    cost_prev: np.ndarray,
    c_x: np.ndarray,
    c_x_sq: np.ndarray,
) -> np.ndarray:
    """
    REDUCE phase.
    Keeps a stack of 'alive' columns. For each new column c:
      - While stack nonempty and A(test_row, c) < A(test_row, top),
        pop top (it is strictly dominated from its feasible interval onward).
      - If stack size < number of rows, push c.
    Using *strict* '<' keeps the smaller split index on ties.
    """
    n_rows = rows.shape[0]
    alive = np.empty(n_rows, dtype=np.int64)
    top = 0
    for c in cols:
        while top > 0:
            tr = rows[top - 1]
            if A(tr, c, cost_prev, c_x, c_x_sq) < A(tr, alive[top - 1], cost_prev, c_x, c_x_sq):
                top -= 1
            else:
                break
        if top < n_rows:
            alive[top] = c
            top += 1
    return alive[:top].copy()


@nb.njit(cache=True)
def interpolate(
    rows: np.ndarray,
    cols: np.ndarray,
    cost_prev: np.ndarray,
    split_out: np.ndarray,
    cost_out: np.ndarray,
    c_x: np.ndarray,
    c_x_sq: np.ndarray,
) -> None:
    """
    Fill even-position rows. Odd-position rows are already solved, and the
    argmin of an even row lies between the argmins of its two odd neighbours,
    so every column is scanned a bounded number of times.
    """
    n_rows = rows.shape[0]
    n_cols = cols.shape[0]
    start = 0
    for pos in range(0, n_rows, 2):
        i = rows[pos]
        if pos + 1 < n_rows:
            stop = split_out[rows[pos + 1]]
        else:
            stop = cols[n_cols - 1]

        best_j = -1
        best_v = np.inf
        t = start
        while t < n_cols and cols[t] <= stop:
            v = A(i, cols[t], cost_prev, c_x, c_x_sq)
            if v < best_v:
                best_v = v
                best_j = cols[t]
            t += 1
        split_out[i] = best_j
        cost_out[i] = best_v

        # the next even row starts where this row's right neighbour settled
        while start < n_cols and cols[start] < stop:
            start += 1


@nb.njit(cache=True)
def base_case(
    rows: np.ndarray,
    cols: np.ndarray,
    cost_prev: np.ndarray,
    split_out: np.ndarray,
    cost_out: np.ndarray,
    c_x: np.ndarray,
    c_x_sq: np.ndarray,
) -> None:
    i = rows[0]
    best_j = cols[0]
    best_v = A(i, best_j, cost_prev, c_x, c_x_sq)
    for t in range(1, cols.shape[0]):
        v = A(i, cols[t], cost_prev, c_x, c_x_sq)
        # strict => smallest split index on ties
        if v < best_v:
            best_v = v
            best_j = cols[t]
    split_out[i] = best_j
    cost_out[i] = best_v


def smawk(
    rows: np.ndarray,
    cols: np.ndarray,
    cost_prev: np.ndarray,
    split_out: np.ndarray,
    cost_out: np.ndarray,
    c_x: np.ndarray,
    c_x_sq: np.ndarray,
) -> None:
    """
    Leftmost row minima of the totally monotone matrix A[rows, cols].
    Writes split_out[i] (argmin column) and cost_out[i] (minimum) for every i
    in rows. rows and cols must be strictly increasing.
    """
    if rows.shape[0] == 0:
        return
    if rows.shape[0] == 1:
        base_case(rows, cols, cost_prev, split_out, cost_out, c_x, c_x_sq)
        return

    # 1. REDUCE
    reduced = reduce_columns(rows, cols, cost_prev, c_x, c_x_sq)

    # 2. RECURSE on odd-position rows (indices 1,3,5,...)
    smawk(rows[1::2], reduced, cost_prev, split_out, cost_out, c_x, c_x_sq)

    # 3. INTERPOLATE even-position rows (indices 0,2,4,...)
    interpolate(rows, reduced, cost_prev, split_out, cost_out, c_x, c_x_sq)


def fill_row_linear(
    q: int,
    cost_prev: np.ndarray,
    cost_curr: np.ndarray,
    split_col: np.ndarray,
    c_x: np.ndarray,
    c_x_sq: np.ndarray,
) -> None:
    """
    Fill DP row q (q >= 2 clusters) for i in [q, n]:
        cost_curr[i] = min_{j in [q-1, i-1]} cost_prev[j] + ssq(j+1, i)
        split_col[i] = smallest minimising j
    """
    n = c_x.shape[0] - 1
    rows = np.arange(q, n + 1, dtype=np.int64)
    cols = np.arange(q - 1, n, dtype=np.int64)
    # fewer than q points cannot form q clusters
    cost_curr[:q] = np.inf
    smawk(rows, cols, cost_prev, split_col, cost_curr, c_x, c_x_sq)


def solve_linear(prefix: PrefixState, K: int) -> PartitionSolution:
    """
    O(k * n) optimal contiguous clustering of pre-sorted data.

    Only the rows for the current and previous cluster counts are kept, in two
    buffers picked by parity. best_split[i, q] is the number of points covered
    by the first q-1 clusters in the optimal q-clustering of the first i points.
    """
    c_x, c_x_sq = prefix
    N = c_x.shape[0] - 1

    row_odd = np.full(N + 1, np.inf, dtype=np.float64)
    row_even = np.full(N + 1, np.inf, dtype=np.float64)
    best_split = np.zeros((N + 1, K + 1), dtype=np.int64)

    # one cluster
    fill_base_row(row_odd, c_x, c_x_sq)

    for q in range(2, K + 1):
        if q % 2 == 0:
            cost_prev, cost_curr = row_odd, row_even
        else:
            cost_prev, cost_curr = row_even, row_odd
        fill_row_linear(q, cost_prev, cost_curr, best_split[:, q], c_x, c_x_sq)

    final_row = row_even if K % 2 == 0 else row_odd
    return PartitionSolution(float(final_row[N]), best_split)
