import math
import numpy as np

from functools import cmp_to_key

from geometry import (
    INF_SLOPE, X_TIE_EPS, Point, PointOrder, PointSet, Slope,
    compare_points_x, compute_slope, is_infinite_slope, sweep_sort,
)
from inversions import count_inversions, report_inversions, sample_inversions


class InvalidIntervalError(ValueError):
    pass


def check_interval(alpha: float, beta: float):
    if not (math.isfinite(alpha) and math.isfinite(beta)):
        raise InvalidIntervalError(f'Interval bounds must be finite, got [{alpha}, {beta}]')
    if alpha > beta:
        raise InvalidIntervalError(f'Interval is reversed: alpha={alpha} > beta={beta}')


def min_slope(points: PointSet, eps: float = X_TIE_EPS) -> Slope:
    """
    Minimum slope over all pairs of points, INF_SLOPE for less than two points.

    After sorting by x, the minimum is always reached on a pair of neighbours:
    any point lying between the two ends of a pair in x order
    makes an equal or smaller slope with one of them.
    Reorders `points` in place. Time complexity: O(n*log(n)).
    """
    if len(points) < 2:
        return INF_SLOPE

    points.sort(key=cmp_to_key(lambda p1, p2: compare_points_x(p1, p2, eps)))

    result = INF_SLOPE
    for i in range(len(points) - 1):
        s = compute_slope(points[i], points[i + 1])
        if s < result:
            result = s
    return result


def max_slope(points: PointSet) -> Slope:
    """
    Maximum finite slope over all pairs of points, INF_SLOPE if there is none.
    Reorders `points` in place.
    """
    # lowest point of an x-column goes last, next to the highest of the next column
    points.sort(key=lambda p: (p.x, -p.y))

    result = None
    for i in range(len(points) - 1):
        s = compute_slope(points[i], points[i + 1])
        if is_infinite_slope(s):
            continue
        if result is None or s > result:
            result = s
    return INF_SLOPE if result is None else result


def _inverted_order(points: PointSet, alpha: float, beta: float) -> list[int]:
    """
    Ranks of points in f_alpha order, listed in f_beta order.
    Leaves `points` sorted by f_alpha.
    """
    sweep_sort(points.points, alpha)
    point_order = [PointOrder(p, i + 1) for i, p in enumerate(points)]
    sweep_sort(point_order, beta, upper=True, point_of=lambda o: o.point)
    return [o.order for o in point_order]


def count_slopes(points: PointSet, alpha: float, beta: float) -> int:
    """
    Count pairs of points with slope in [alpha, beta].

    Two points swap their relative order between sorting by f_alpha and
    sorting by f_beta exactly when the slope of their line lies in [alpha, beta],
    so the count is the number of inversions between these two orders.
    Vertical pairs never swap and are never counted. Near the end points
    membership follows compute_slope, so a pair with compute_slope(p, q) == alpha
    is counted even when x * alpha - y does not tie in floating point.
    Reorders `points` in place. Time complexity: O(n*log(n)).
    """
    check_interval(alpha, beta)
    if len(points) < 2:
        return 0
    return count_inversions(_inverted_order(points, alpha, beta))


def slopes_in_range(points: PointSet, alpha: float, beta: float) -> list[tuple[Point, Point]]:
    """
    Report pairs of points with slope in [alpha, beta], each pair ordered by x.
    Time complexity: O(n*log(n) + K) for K reported pairs.
    """
    check_interval(alpha, beta)
    if len(points) < 2:
        return []

    inverted = _inverted_order(points, alpha, beta)
    pairs = []
    for larger, smaller in report_inversions(inverted):
        p, q = points[smaller - 1], points[larger - 1]
        pairs.append((p, q) if p.x < q.x else (q, p))
    return pairs


def sample_slopes(points: PointSet, alpha: float, beta: float, size: int, rng: np.random.Generator) -> list[float]:
    """
    `size` slopes drawn uniformly with replacement from the pairs with slope in [alpha, beta].
    Empty if there is no such pair. Time complexity: O((n + size)*log(n)).
    """
    check_interval(alpha, beta)
    if len(points) < 2:
        return []

    inverted = _inverted_order(points, alpha, beta)
    return [
        compute_slope(points[smaller - 1], points[larger - 1])
        for larger, smaller in sample_inversions(inverted, size, rng)
    ]
