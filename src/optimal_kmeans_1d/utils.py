from typing import NamedTuple

import numba as nb
import numpy as np


class PrefixState(NamedTuple):
    """Running sums of the sorted values and of their squares (length n + 1)."""

    sum_prefix: np.ndarray
    sum_sq_prefix: np.ndarray


class PartitionSolution(NamedTuple):
    total_cost: float
    best_split: np.ndarray


@nb.njit(cache=True, inline="always")
def wiggle_left(x: float) -> float:
    return -0.1 if x == 0.0 else x - abs(x / 10.0)


@nb.njit(cache=True, inline="always")
def wiggle_right(x: float) -> float:
    return 0.1 if x == 0.0 else x + abs(x / 10.0)


@nb.njit(cache=True, inline="always")
def ssq(j: int, i: int, c_x: np.ndarray, c_x_sq: np.ndarray) -> float:
    """
    Within-cluster SSE of values[j..i], 1-indexed and inclusive.
    prefix_* arrays have length n+1 with prefix_*[0] = 0.
    """
    w = i - j + 1
    s = c_x[i] - c_x[j - 1]
    sq = c_x_sq[i] - c_x_sq[j - 1]
    return sq - (s * s) / w


@nb.njit(cache=True)
def calculate_cumulative_ssq(
    x: np.ndarray, c_x: np.ndarray, c_x_sq: np.ndarray
) -> None:
    """
    Compute cumulative sums and squares for the sorted array x
    c_x and c_x_sq must be preallocated with length N + 1.
    """
    N = x.shape[0]
    c_x[0] = 0.0
    c_x_sq[0] = 0.0
    for i in range(N):
        v = x[i]
        c_x[i + 1] = c_x[i] + v
        c_x_sq[i + 1] = c_x_sq[i] + v * v


@nb.njit(cache=True)
def fill_base_row(row: np.ndarray, c_x: np.ndarray, c_x_sq: np.ndarray) -> None:
    """row[i] = cost of the first i points as a single cluster."""
    N = c_x.shape[0] - 1
    row[0] = 0.0
    for i in range(1, N + 1):
        row[i] = ssq(1, i, c_x, c_x_sq)


def compute_prefix_state(x_sorted: np.ndarray) -> PrefixState:
    """
    Build the prefix sums used for O(1) segment costs.

    Parameters
    ----------
    x_sorted : np.ndarray
        1D float64 array, sorted ascending

    Returns
    -------
    PrefixState
        Two arrays of length len(x_sorted) + 1, both starting at 0
    """
    n = x_sorted.shape[0]
    c_x = np.empty(n + 1, dtype=np.float64)
    c_x_sq = np.empty(n + 1, dtype=np.float64)
    calculate_cumulative_ssq(x_sorted, c_x, c_x_sq)
    return PrefixState(c_x, c_x_sq)


def segment_cost(prefix: PrefixState, j: int, i: int) -> float:
    """Sum of squared deviations of sorted values j..i (1-indexed, inclusive)."""
    return float(ssq(j, i, prefix.sum_prefix, prefix.sum_sq_prefix))


def reconstruct_partition(
    best_split: np.ndarray, n: int, k: int
) -> list[tuple[int, int]]:
    """
    Backtrack through the split table from (n, k) down to one cluster.

    Returns k (start, end) pairs, 1-indexed and inclusive, ordered by position
    in the sorted input.
    """
    ranges = []
    end = n
    for q in range(k, 0, -1):
        # the first cluster always starts at point 1
        start = 0 if q == 1 else int(best_split[end, q])
        ranges.append((start + 1, end))
        end = start
    ranges.reverse()
    return ranges
