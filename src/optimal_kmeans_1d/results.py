from dataclasses import dataclass

import numpy as np

from optimal_kmeans_1d.utils import wiggle_left, wiggle_right


@dataclass(frozen=True, eq=False)
class Group:
    """A contiguous run of the sorted values and its centroid."""

    points: np.ndarray
    centroid: float

    @property
    def point_count(self) -> int:
        return int(self.points.shape[0])


@dataclass(frozen=True, eq=False)
class ClusteringOutcome:
    """
    Optimal clustering of a 1D sample.

    Attributes
    ----------
    groups : tuple[Group, ...]
        Groups ordered by position in the sorted input
    total_cost : float
        Total within-group sum of squared deviations
    """

    groups: tuple[Group, ...]
    total_cost: float

    @property
    def cluster_count(self) -> int:
        return len(self.groups)

    @property
    def centroids(self) -> np.ndarray:
        return np.array([g.centroid for g in self.groups], dtype=np.float64)

    @property
    def bounds(self) -> np.ndarray:
        """Split points in [0, n]: group g holds sorted values bounds[g]..bounds[g+1]-1."""
        sizes = [g.point_count for g in self.groups]
        bounds = np.zeros(len(sizes) + 1, dtype=np.int64)
        bounds[1:] = np.cumsum(sizes)
        return bounds

    def bin_edges(self) -> np.ndarray:
        """
        Histogram edges (length k + 1) that separate the groups.

        Interior edges are midpoints between the last value of a group and the
        first value of the next one; the outer edges are pushed slightly past
        the data range.
        """
        k = self.cluster_count
        edges = np.empty(k + 1, dtype=np.float64)
        edges[0] = wiggle_left(float(self.groups[0].points[0]))
        for g in range(1, k):
            edges[g] = 0.5 * (self.groups[g - 1].points[-1] + self.groups[g].points[0])
        edges[k] = wiggle_right(float(self.groups[-1].points[-1]))
        return edges
