import argparse
import logging
import sys
import time

from geometry import PointSet, is_infinite_slope
from point_io import DISTRIBUTIONS, PointFileError, generate_random_points, read_points
from slope_selection import DEFAULT_MAX_ROUND, select_slope
from slopes import count_slopes, min_slope
from slopes_naive import NaiveSlopeCounter

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Pairwise slope statistics of a planar point set"
    )
    parser.add_argument("filename", nargs="?", help="Point file: count on the first line, then 'x y' lines")
    parser.add_argument("--generate", type=int, metavar="N", help="Generate N random points instead of reading a file")
    parser.add_argument("--distribution", choices=DISTRIBUTIONS, default="uniform")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--alpha", type=float, default=-1.0, help="Lower end of the slope interval")
    parser.add_argument("--beta", type=float, default=0.0, help="Upper end of the slope interval")
    parser.add_argument("--rank", type=int, help="Also select the k-th smallest slope")
    parser.add_argument("--max-round", type=int, default=DEFAULT_MAX_ROUND)
    parser.add_argument("--no-naive", action="store_true", help="Skip the brute-force comparison")
    parser.add_argument("--plot", metavar="OUT", help="Save a plot of the points and threshold lines")
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)
    if (args.filename is None) == (args.generate is None):
        parser.error("pass either a point file or --generate N")
    return args


def timed(func, *args):
    start = time.time()
    result = func(*args)
    return result, time.time() - start


def format_value(value) -> str:
    if value is None:
        return "none"
    if is_infinite_slope(value):
        return "inf"
    return str(value) if isinstance(value, int) else f"{value:.10g}"


def compare(points: PointSet, args) -> bool:
    """
    Run fast and brute-force routines on independent copies
    and report values and timings. Returns True when they agree.
    """
    naive = NaiveSlopeCounter()
    tasks = {
        "min slope": (
            lambda: min_slope(points.copy()),
            lambda: naive.min_slope(points),
        ),
        f"slopes in [{args.alpha:g}, {args.beta:g}]": (
            lambda: count_slopes(points.copy(), args.alpha, args.beta),
            lambda: naive.count_slopes(points, args.alpha, args.beta),
        ),
    }
    if args.rank is not None:
        tasks[f"slope of rank {args.rank}"] = (
            lambda: select_slope(points.copy(), args.rank, args.max_round),
            lambda: naive.select_slope(points, args.rank),
        )

    agree = True
    for name, (fast, brute) in tasks.items():
        value, exec_time = timed(fast)
        line = f"{name}: {format_value(value)} ({exec_time:.6f}s)"
        if not args.no_naive:
            expected, naive_time = timed(brute)
            line += f", brute force: {format_value(expected)} ({naive_time:.6f}s)"
            if value != expected:
                agree = False
                logger.error("%s: fast result %s differs from brute force %s", name, value, expected)
        print(line)
    return agree


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        if args.filename is not None:
            points = read_points(args.filename)
        else:
            points = generate_random_points(args.generate, args.distribution, args.seed)
            logger.info("Generated %d points (%s)", len(points), args.distribution)
    except (OSError, PointFileError) as e:
        logger.error("Could not load points: %s", e)
        return 2

    try:
        agree = compare(points, args)
    except ValueError as e:
        logger.error("%s", e)
        return 2

    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from visualization import display_points

        fig, ax = plt.subplots(figsize=(8, 8))
        display_points(points.copy(), min(len(points), 10), args.alpha, args.beta, 0, ax=ax)
        fig.savefig(args.plot, dpi=150, bbox_inches="tight")
        logger.info("Plot saved to %s", args.plot)

    return 0 if agree else 1


if __name__ == "__main__":
    sys.exit(main())
