import logging
import warnings
from typing import Callable, Sequence

import numpy as np

from optimal_kmeans_1d import linear, quadratic
from optimal_kmeans_1d.exceptions import (
    InvalidArgumentError,
    NullInputError,
    OptimalKMeansError,
)
from optimal_kmeans_1d.results import ClusteringOutcome, Group
from optimal_kmeans_1d.utils import (
    PartitionSolution,
    PrefixState,
    compute_prefix_state,
    reconstruct_partition,
    segment_cost,
)

__all__ = [
    "ClusteringOutcome",
    "Group",
    "InvalidArgumentError",
    "NullInputError",
    "OptimalKMeansError",
    "PartitionSolution",
    "PrefixState",
    "compute_prefix_state",
    "fit",
    "fit_quadratic",
    "reconstruct_partition",
    "segment_cost",
]

logger = logging.getLogger(__name__)


def _validate(values: Sequence[float] | np.ndarray | None, k: int) -> np.ndarray:
    """Check the preconditions of fit in order and return a private float64 copy."""
    if values is None:
        raise NullInputError("values must not be None")

    data = np.array(values, dtype=np.float64)
    if data.ndim != 1:
        raise InvalidArgumentError("optimal_kmeans_1d requires a 1D array")
    if data.shape[0] == 0:
        raise InvalidArgumentError("empty input")
    if k <= 0:
        raise InvalidArgumentError("k must be positive")
    if k > data.shape[0]:
        raise InvalidArgumentError(
            f"k exceeds number of points (k={k}, n={data.shape[0]})"
        )
    if not np.isfinite(data).all():
        raise InvalidArgumentError("non-finite value in input")
    return data


def _fit(
    values: Sequence[float] | np.ndarray | None,
    k: int,
    assume_sorted: bool,
    solver: Callable[[PrefixState, int], PartitionSolution],
) -> ClusteringOutcome:
    data = _validate(values, k)

    if not assume_sorted:
        data.sort()

    n = data.shape[0]
    logger.debug("clustering n=%d points into k=%d groups with %s", n, k, solver.__name__)

    if k == 1:
        centroid = float(data.mean())
        total_cost = float(np.sum((data - centroid) ** 2))
        return ClusteringOutcome((Group(data, centroid),), total_cost)

    n_unique = np.unique(data).shape[0]
    if n_unique < k:
        warnings.warn(
            f"Requested {k} clusters but there are only {n_unique} unique values; "
            f"some clusters will split runs of identical values.",
            UserWarning,
        )

    prefix = compute_prefix_state(data)
    solution = solver(prefix, k)

    groups = []
    for start, end in reconstruct_partition(solution.best_split, n, k):
        points = data[start - 1 : end]
        groups.append(Group(points, float(points.mean())))

    logger.debug("total within-cluster cost %.6g", solution.total_cost)
    return ClusteringOutcome(tuple(groups), solution.total_cost)


def fit(
    values: Sequence[float] | np.ndarray | None,
    k: int,
    assume_sorted: bool = False,
) -> ClusteringOutcome:
    """
    Optimal 1D k-means: split values into k contiguous groups with minimal
    total within-group sum of squares.

    The values are copied and sorted; the search for each cluster count uses
    the monotonicity of the optimal split (O(k * n) after sorting).

    Parameters
    ----------
    values : sequence of float or np.ndarray
        1D data to cluster, any order
    k : int
        Number of groups, 1 <= k <= len(values)
    assume_sorted : bool
        Skip sorting when values are already ascending

    Returns
    -------
    ClusteringOutcome
        k groups in ascending order and the total cost

    Raises
    ------
    NullInputError
        values is None
    InvalidArgumentError
        values is empty or not 1D, k is out of range, or values holds NaN/inf
    """
    return _fit(values, k, assume_sorted, linear.solve_linear)


def fit_quadratic(
    values: Sequence[float] | np.ndarray | None,
    k: int,
    assume_sorted: bool = False,
) -> ClusteringOutcome:
    """
    Same contract as fit, using the O(k * n^2) full-scan dynamic program.
    """
    return _fit(values, k, assume_sorted, quadratic.solve_quadratic)
