import matplotlib.pyplot as plt
from matplotlib.axes import Axes

from geometry import Point, PointSet, alpha_key


def plot_points(points: PointSet | list[Point], ax: Axes | None = None):
    x = [p.x for p in points]
    y = [p.y for p in points]
    if ax is None:
        plt.scatter(x, y)
    else:
        ax.scatter(x, y)


def plot_line(p: Point, slope: float, x_range: tuple[float, float], ax: Axes, **kwargs):
    """
    Draw the line of a given slope through p over x_range.
    """
    x0, x1 = x_range
    ax.plot([x0, x1], [p.y + slope * (x0 - p.x), p.y + slope * (x1 - p.x)], **kwargs)


def display_points(
    points: PointSet,
    s: int,
    alpha: float,
    beta: float,
    num_iterations: int,
    ax: Axes | None = None,
) -> list[Point]:
    """
    Plot points with threshold lines of slopes alpha and beta
    through the first s points in f_alpha order.
    Returns these sample points. Reorders `points` in place.
    """
    if ax is None:
        ax = plt.gca()

    points.sort(key=alpha_key(alpha))
    sample = list(points[:s])

    plot_points(points, ax=ax)
    if len(points) > 0:
        xs = [p.x for p in points]
        x_range = (min(xs), max(xs))
        for p in sample:
            plot_line(p, alpha, x_range, ax, c='g', linewidth=0.5)
            plot_line(p, beta, x_range, ax, c='r', linewidth=0.5)
        ax.scatter([p.x for p in sample], [p.y for p in sample], c='k', s=8)

    ax.set_title(f'alpha={alpha:g}, beta={beta:g}, iteration {num_iterations}')
    ax.grid(True, alpha=0.3)
    return sample
