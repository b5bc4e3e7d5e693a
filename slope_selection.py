import logging
import math
import numpy as np

from geometry import Point, PointSet, compute_slope, dual_vertex, is_infinite_slope
from slopes import check_interval, count_slopes, max_slope, min_slope, sample_slopes, slopes_in_range

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUND = 32
COLLAPSE_TOL = 1e-12
BOUND_MARGIN = 1e-6
SAMPLE_SEED = 0
MIN_SAMPLE_SIZE = 64


def breakpoint_one_round(
    points: PointSet,
    s: int,
    alpha: float,
    beta: float,
    rng: np.random.Generator | None = None,
) -> float:
    """
    Split coordinate for the s-th breakpoint at or after alpha, strictly inside
    (alpha, beta) unless the interval is too narrow to split.

    The oracle tells how many breakpoints the interval holds, and a uniform
    sample of them estimates the quantile of rank s. The split is placed past
    that estimate, away from the nearer end of the interval, so that whichever
    side the target falls on, the part kept next is small.
    Falls back to the midpoint if no sampled slope lies strictly inside.
    Reorders `points` in place.
    """
    check_interval(alpha, beta)
    if s < 1:
        raise ValueError(f'Rank must be positive, got {s}')
    if rng is None:
        rng = np.random.default_rng(SAMPLE_SEED)

    midpoint = alpha + (beta - alpha) / 2
    total = count_slopes(points, alpha, beta)
    if total == 0:
        return midpoint

    size = max(len(points), MIN_SAMPLE_SIZE)
    sample = sorted(v for v in sample_slopes(points, alpha, beta, size, rng) if alpha < v < beta)
    if not sample:
        return midpoint

    # a few standard deviations of the sample quantile
    margin = 2 * total / math.sqrt(size)
    target = s + margin if 2 * s <= total else s - margin
    idx = math.ceil(target / total * len(sample)) - 1
    return sample[min(max(idx, 0), len(sample) - 1)]


def breakpoint(
    points: PointSet,
    u: Point | None,
    s: int,
    max_round: int,
    tol: float = COLLAPSE_TOL,
    seed: int = SAMPLE_SEED,
) -> Point | None:
    """
    Find the s-th vertex (1-based, with multiplicity) of the dual arrangement
    of `points` whose theta coordinate is not less than u.x.
    Sweep starts at the minimum slope if u is None.

    Each point p is the line theta -> x(p) * theta - y(p); two lines cross
    at theta = slope(p, q). The target is kept in a bracket (lo, hi] which
    shrinks every round, for at most `max_round` rounds or until it collapses
    or holds no more breakpoints than points. The breakpoints left inside
    are then listed and ranked. Splits are drawn from a sample seeded with
    `seed`, so the rounds are reproducible.

    Returns the vertex (theta, f_theta(p)) or None if there are less than
    s breakpoints after the start. Raises ValueError for a non-positive rank,
    a negative round limit or a non-finite u.x. Reorders `points` in place.
    """
    if s < 1:
        raise ValueError(f'Rank must be positive, got {s}')
    if max_round < 0:
        raise ValueError(f'Round limit must be non-negative, got {max_round}')
    if u is not None and not math.isfinite(u.x):
        raise ValueError(f'Start must be finite, got {u.x}')
    if len(points) < 2:
        return None

    # exact minimum: a tolerance in x could skip the lowest slopes
    start = min_slope(points, eps=0.0) if u is None else u.x
    hi = max_slope(points)
    if is_infinite_slope(start) or is_infinite_slope(hi) or start > hi:
        return None
    # no slope lies outside [min, max], widen it so rounding in f_theta
    # cannot push the extreme pairs out
    if u is None:
        start -= BOUND_MARGIN * (1 + abs(start))
    hi += BOUND_MARGIN * (1 + abs(hi))

    # breakpoints in [start, hi] and in [start, lo]
    count_hi = count_slopes(points, start, hi)
    count_lo = 0
    if count_hi < s:
        return None

    rng = np.random.default_rng(seed)
    lo = start
    for i in range(max_round):
        if hi - lo <= tol or count_hi - count_lo <= len(points):
            break
        theta = breakpoint_one_round(points, s - count_lo, lo, hi, rng)
        if not lo < theta < hi:
            break

        count = count_slopes(points, start, theta)
        if count >= s:
            hi, count_hi = theta, count
        else:
            lo, count_lo = theta, count
        logger.debug('Round %d: (%r, %r] holds %d slopes, target rank %d', i, lo, hi, count_hi - count_lo, s - count_lo)

    pairs = sorted(slopes_in_range(points, lo, hi), key=lambda pair: compute_slope(*pair))
    # pairs[-1] has rank count_hi counted from start
    idx = s - (count_hi - len(pairs)) - 1
    if not 0 <= idx < len(pairs):
        logger.warning('Bracket [%r, %r] lost the target: %d slopes, rank %d of %d', lo, hi, len(pairs), s, count_hi)
        return None

    p, q = pairs[idx]
    return dual_vertex(p, compute_slope(p, q))


def select_slope(points: PointSet, k: int, max_round: int = DEFAULT_MAX_ROUND) -> float | None:
    """
    k-th smallest finite pairwise slope (1-based), None if there are less than k.
    """
    vertex = breakpoint(points, None, k, max_round)
    return None if vertex is None else vertex.x
