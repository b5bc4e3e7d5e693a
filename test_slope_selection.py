import logging

import pytest
import numpy as np

import slope_selection

from geometry import Point, PointSet, functional
from point_io import generate_random_points
from slope_selection import breakpoint, breakpoint_one_round, select_slope
from slopes import InvalidIntervalError, count_slopes
from slopes_naive import NaiveSlopeCounter


def random_points(n_points: int, integer: bool) -> PointSet:
    if integer:
        coords = np.random.randint(-30, 30, size=(n_points, 2))
    else:
        coords = np.random.randn(n_points, 2) * 100
    return PointSet.from_array(coords.astype(float))


def test_select_slope_small():
    points = PointSet([(0, 0), (1, 1), (2, 0), (3, 3)])
    # sorted slopes: -1, 0, 1, 1, 1, 3
    assert [select_slope(points, k) for k in range(1, 7)] == [-1, 0, 1, 1, 1, 3]
    assert select_slope(points, 7) is None


def test_select_slope_degenerate():
    assert select_slope(PointSet([(1, 1)]), 1) is None
    assert select_slope(PointSet([(1, 1), (1, 2)]), 1) is None
    assert select_slope(PointSet([(1, 1), (1, 2), (3, 2)]), 2) == 0.5

    with pytest.raises(ValueError):
        select_slope(PointSet([(0, 0), (1, 1)]), 0)
    with pytest.raises(ValueError):
        breakpoint(PointSet([(0, 0), (1, 1)]), None, 1, -1)
    for start in [float("-inf"), float("inf"), float("nan")]:
        with pytest.raises(ValueError):
            breakpoint(PointSet([(0, 0), (1, 1), (2, 3)]), Point(start, 0), 1, 4)


def test_breakpoint_returns_dual_vertex():
    points = PointSet([(0, 0), (1, 1), (2, 0), (3, 3)])
    vertex = breakpoint(points, None, 6, max_round=4)
    # slope 3 is made by (2, 0) and (3, 3)
    assert vertex == Point(3.0, functional(Point(2, 0), 3.0))
    assert vertex.y == functional(Point(3, 3), 3.0)


def test_breakpoint_after_start():
    points = PointSet([(0, 0), (1, 1), (2, 0), (3, 3)])
    assert breakpoint(points, Point(0.5, 0), 1, 10).x == 1
    assert breakpoint(points, Point(0.5, 0), 4, 10).x == 3
    assert breakpoint(points, Point(1.5, 0), 2, 10) is None
    assert breakpoint(points, Point(5, 0), 1, 10) is None


def test_one_round_stays_inside_interval():
    np.random.seed(1)
    points = random_points(100, integer=False)
    alpha, beta = -2.0, 2.0
    for s in [1, 10, 100, 1000]:
        theta = breakpoint_one_round(points, s, alpha, beta)
        assert alpha <= theta <= beta

    assert breakpoint_one_round(points, 1, 0.5, 0.5) == 0.5
    with pytest.raises(InvalidIntervalError):
        breakpoint_one_round(points, 1, 2.0, 1.0)
    with pytest.raises(ValueError):
        breakpoint_one_round(points, 0, 1.0, 2.0)


def test_one_round_splits_interval():
    np.random.seed(2)
    points = random_points(60, integer=True)
    alpha, beta = -1.0, 1.0
    total = count_slopes(points, alpha, beta)

    for s in [1, total // 2, total]:
        theta = breakpoint_one_round(points, s, alpha, beta)
        assert alpha < theta < beta
        assert count_slopes(points, alpha, theta) <= total

    # no breakpoint strictly inside: midpoint
    assert breakpoint_one_round(PointSet([(0, 0), (1, 1)]), 1, 2.0, 4.0) == 3.0


def test_rounds_are_logged(caplog):
    np.random.seed(4)
    points = random_points(200, integer=False)
    with caplog.at_level(logging.DEBUG, logger="slope_selection"):
        select_slope(points, 5000, max_round=3)
    assert 0 < len([r for r in caplog.records if r.getMessage().startswith("Round")]) <= 3


@pytest.mark.parametrize("n_points", [5, 30, 150])
@pytest.mark.parametrize("integer", [True, False])
@pytest.mark.parametrize("max_round", [0, 2, 32])
def test_select_slope_against_naive(n_points, integer, max_round):
    np.random.seed(n_points)
    naive = NaiveSlopeCounter()

    for _ in range(5):
        points = random_points(n_points, integer)
        n_slopes = len(naive.pairwise_slopes(points))
        for k in {1, 2, n_slopes // 3, n_slopes // 2, n_slopes}:
            if k < 1:
                continue
            expected = naive.select_slope(points, k)
            assert select_slope(points.copy(), k, max_round) == expected


def spy_on(monkeypatch, name):
    calls = []
    func = getattr(slope_selection, name)

    def spy(points, alpha, beta, *args):
        result = func(points, alpha, beta, *args)
        calls.append((alpha, beta, result))
        return result

    monkeypatch.setattr(slope_selection, name, spy)
    return calls


def test_rounds_shrink_bracket(monkeypatch, caplog):
    np.random.seed(12)
    points = random_points(300, integer=False)
    n_slopes = len(NaiveSlopeCounter.pairwise_slopes(points))
    k = n_slopes // 2
    expected = NaiveSlopeCounter().select_slope(points, k)
    oracle_calls = spy_on(monkeypatch, "count_slopes")

    with caplog.at_level(logging.DEBUG, logger="slope_selection"):
        assert select_slope(points.copy(), k) == expected

    assert all(alpha <= beta for alpha, beta, _ in oracle_calls)
    sizes = [r.args[3] for r in caplog.records if r.getMessage().startswith("Round")]
    assert len(sizes) >= 2
    assert sizes == sorted(sizes, reverse=True)
    assert sizes[0] < n_slopes
    assert sizes[-1] <= len(points)


@pytest.mark.parametrize("max_round", [0, 32])
def test_listed_bracket_size(monkeypatch, max_round):
    points = generate_random_points(1000, "uniform", seed=3)
    n = len(points)
    k = n * (n - 1) // 4
    expected = NaiveSlopeCounter().select_slope(points, k)
    listed = spy_on(monkeypatch, "slopes_in_range")

    assert select_slope(points.copy(), k, max_round) == expected
    assert len(listed) == 1
    if max_round == 0:
        assert len(listed[0][2]) == n * (n - 1) // 2
    else:
        assert len(listed[0][2]) <= 10 * n
