import numpy as np

from geometry import INF_SLOPE, PointSet, Slope


class NaiveSlopeCounter:
    """
    Brute-force statistics over all n*(n-1)/2 pairs of points.
    Used as a reference for the O(n*log(n)) routines.
    """

    @staticmethod
    def pairwise_slopes(points: PointSet) -> np.ndarray:
        """
        Finite slopes of all unordered pairs, vertical pairs left out.
        """
        coords = points.to_array()
        i, j = np.triu_indices(len(coords), k=1)
        dx = coords[j, 0] - coords[i, 0]
        dy = coords[j, 1] - coords[i, 1]
        finite = dx != 0
        return dy[finite] / dx[finite]

    def min_slope(self, points: PointSet) -> Slope:
        slopes = self.pairwise_slopes(points)
        if len(slopes) == 0:
            return INF_SLOPE
        return float(slopes.min())

    def count_slopes(self, points: PointSet, alpha: float, beta: float) -> int:
        slopes = self.pairwise_slopes(points)
        return int(np.count_nonzero((slopes >= alpha) & (slopes <= beta)))

    def select_slope(self, points: PointSet, k: int) -> float | None:
        slopes = self.pairwise_slopes(points)
        if k < 1 or k > len(slopes):
            return None
        return float(np.sort(slopes)[k - 1])
