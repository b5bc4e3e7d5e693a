import math
import sys
import numpy as np

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, Iterator


X_TIE_EPS = 1e-4

# Rounding bound of x * theta - y relative to |x * theta| + |y|.
# Within it the order of two points along a sweep line is taken from
# compute_slope, which makes interval counts agree with computed slopes.
# Left open: compute_slope rounds the coordinate differences, so for three
# almost collinear points with inexact differences that order is not
# guaranteed to be transitive.
FUNCTIONAL_ROUNDING = 8 * sys.float_info.epsilon


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    @property
    def coord(self) -> tuple[float, float]:
        return self.x, self.y


@dataclass(frozen=True)
class PointOrder:
    """
    Point paired with its rank (1..n) under one ordering,
    carried while the pairs are re-sorted under another ordering.
    """
    point: Point
    order: int


class InfiniteSlope:
    """
    Slope of a vertical pair of points.

    Compares greater than every number and is equal only to itself,
    so it never collides with a finite result or with float('inf').
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __eq__(self, other):
        return other is self

    def __hash__(self):
        return hash(InfiniteSlope)

    def __lt__(self, other):
        return False

    def __le__(self, other):
        return other is self

    def __gt__(self, other):
        return other is not self

    def __ge__(self, other):
        return True

    def __repr__(self):
        return 'INF_SLOPE'


INF_SLOPE = InfiniteSlope()

Slope = float | InfiniteSlope


def is_infinite_slope(value) -> bool:
    return value is INF_SLOPE


class PointSet:
    """
    Ordered, mutable sequence of points.

    The order has no meaning outside the routine currently working on it:
    every slope routine is free to reorder the set in place.
    Pass `copy()` if the order has to survive a call.
    """

    def __init__(self, points: Iterable[Point | tuple[float, float]] = ()):
        self.points: list[Point] = [self._as_point(p) for p in points]

    @staticmethod
    def _as_point(p) -> Point:
        if isinstance(p, Point):
            return p
        if p is None:
            raise TypeError('PointSet cannot hold None entries')
        try:
            x, y = p
        except (TypeError, ValueError):
            raise TypeError(f'Expected a Point or an (x, y) pair, got {p!r}') from None
        return Point(float(x), float(y))

    @classmethod
    def from_array(cls, coords: np.ndarray) -> 'PointSet':
        coords = np.asarray(coords, dtype=float)
        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError(f'Expected an array of shape (n, 2), got {coords.shape}')
        return cls(Point(float(x), float(y)) for x, y in coords)

    def to_array(self) -> np.ndarray:
        return np.array([p.coord for p in self.points], dtype=float).reshape(-1, 2)

    def copy(self) -> 'PointSet':
        return PointSet(self.points)

    def sort(self, key=None, reverse: bool = False):
        self.points.sort(key=key, reverse=reverse)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, idx):
        return self.points[idx]

    def __repr__(self):
        return f'PointSet({self.points!r})'


def compute_slope(p1: Point, p2: Point) -> Slope:
    """
    Slope of the line through p1 and p2, INF_SLOPE if the line is vertical.
    """
    if p2.x == p1.x:
        return INF_SLOPE
    return (p2.y - p1.y) / (p2.x - p1.x)


def compare_points_x(p1: Point, p2: Point, eps: float = X_TIE_EPS) -> int:
    """
    Three-way comparison by x, then by y for points with equal x or closer than eps in x.
    The tolerance is an approximation: near-vertical pairs are taken as vertical.
    With eps=0 the comparison is exact.
    """
    if p1.x == p2.x or abs(p1.x - p2.x) < eps:
        return (p1.y > p2.y) - (p1.y < p2.y)
    return (p1.x > p2.x) - (p1.x < p2.x)


def functional(p: Point, theta: float) -> float:
    """
    f_theta(p) = x * theta - y.

    For x(p) < x(q), slope(p, q) > theta iff f_theta(q) < f_theta(p),
    so sorting by f_theta orders points along a sweep line of slope theta.
    """
    return p.x * theta - p.y


def compare_points_alpha(p1: Point, p2: Point, theta: float) -> int:
    f1, f2 = functional(p1, theta), functional(p2, theta)
    return (f1 > f2) - (f1 < f2)


def compare_points_beta(o1: PointOrder, o2: PointOrder, beta: float) -> int:
    return compare_points_alpha(o1.point, o2.point, beta)


def compare_points_sweep(p1: Point, p2: Point, theta: float, upper: bool = False) -> int:
    """
    Three-way comparison along the sweep line of slope theta, decided by compute_slope.

    A pair with slope equal to theta keeps the order it has just below theta,
    or takes the order it has just above theta if `upper` is set.
    Points on a vertical line go from the highest to the lowest.
    """
    if p1.x == p2.x:
        return (p1.y < p2.y) - (p1.y > p2.y)
    slope = compute_slope(p1, p2)
    left_first = slope <= theta if upper else slope < theta
    if p1.x < p2.x:
        return -1 if left_first else 1
    return 1 if left_first else -1


def alpha_key(theta: float):
    # pairs with slope == theta keep the order they have just below theta
    return lambda p: (functional(p, theta), -p.x)


def beta_key(theta: float):
    # pairs with slope == theta take the order they have just above theta
    return lambda p: (functional(p, theta), p.x)


def _same(item):
    return item


def sweep_sort(items: list, theta: float, upper: bool = False, point_of=_same):
    """
    Sort items in place by f_theta of their points, alpha_key order,
    or beta_key order if `upper` is set.

    Runs of neighbours whose computed functionals are within rounding error
    of each other are re-sorted with compare_points_sweep, so that a pair
    is taken as crossing theta exactly when compute_slope says so.
    Sorting is stable. Time complexity: O(n*log(n)).
    """
    key = beta_key(theta) if upper else alpha_key(theta)
    items.sort(key=lambda item: key(point_of(item)))
    if len(items) < 2:
        return

    points = [point_of(item) for item in items]
    values = [functional(p, theta) for p in points]
    tol = 2 * FUNCTIONAL_ROUNDING * max(abs(p.x * theta) + abs(p.y) for p in points)
    compare = cmp_to_key(lambda a, b: compare_points_sweep(point_of(a), point_of(b), theta, upper))

    start = 0
    for i in range(1, len(items) + 1):
        if i == len(items) or values[i] - values[i - 1] > tol:
            if i - start > 1:
                items[start:i] = sorted(items[start:i], key=compare)
            start = i


def dual_vertex(p: Point, theta: float) -> Point:
    """
    Point (theta, f_theta(p)) on the dual line of p.
    """
    assert math.isfinite(theta)
    return Point(theta, functional(p, theta))
