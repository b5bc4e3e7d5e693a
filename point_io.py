import logging
import os
import numpy as np

from geometry import Point, PointSet

logger = logging.getLogger(__name__)

DISTRIBUTIONS = ("uniform", "uniform_int", "gaussian", "circle", "clusters")


class PointFileError(ValueError):
    pass


def read_points(filename: str) -> PointSet:
    """
    Read a point file: the number of points n on the first line,
    then n lines with x and y separated by whitespace.
    Blank lines are skipped, columns after the second are ignored.
    """
    with open(filename, 'r', encoding='utf-8') as f:
        lines = [(i, line.split()) for i, line in enumerate(f, start=1)]
    lines = [(i, fields) for i, fields in lines if fields]

    if not lines:
        raise PointFileError(f'{filename}: file is empty')

    header_line, header = lines[0]
    try:
        n = int(header[0])
    except ValueError:
        raise PointFileError(f'{filename}:{header_line}: expected point count, got {header[0]!r}') from None

    if n < 0:
        raise PointFileError(f'{filename}:{header_line}: point count must not be negative, got {n}')

    rows = lines[1:]
    if len(rows) < n:
        raise PointFileError(f'{filename}: expected {n} points, found {len(rows)}')

    points = []
    for line_no, fields in rows[:n]:
        try:
            x, y = float(fields[0]), float(fields[1])
        except (ValueError, IndexError):
            raise PointFileError(f'{filename}:{line_no}: expected "x y", got {" ".join(fields)!r}') from None
        points.append(Point(x, y))

    logger.info('Loaded %d points from %s', len(points), os.path.basename(filename))
    return PointSet(points)


def write_points(filename: str, points: PointSet):
    with open(filename, 'w', encoding='utf-8') as f:
        f.write(f'{len(points)}\n')
        for p in points:
            f.write(f'{p.x!r} {p.y!r}\n')


def generate_random_points(n: int, distribution: str = "uniform", seed: int = 42) -> PointSet:
    np.random.seed(seed)

    if distribution == "uniform":
        coords = np.random.uniform(0, 1000, size=(n, 2))
    elif distribution == "uniform_int":
        coords = np.random.randint(0, 1000, size=(n, 2)).astype(float)
    elif distribution == "gaussian":
        coords = np.random.normal(500, 150, size=(n, 2))
    elif distribution == "circle":
        angle = np.random.uniform(0, 2 * np.pi, size=n)
        r = np.random.uniform(0, 500, size=n) ** 0.5
        coords = np.column_stack((500 + r * np.cos(angle), 500 + r * np.sin(angle)))
    elif distribution == "clusters":
        n_clusters = 5
        centers = np.random.uniform(100, 900, size=(n_clusters, 2))
        labels = np.arange(n) % n_clusters
        coords = np.random.normal(centers[labels], 50)
    else:
        raise ValueError(f'Unknown distribution {distribution!r}, expected one of {DISTRIBUTIONS}')

    return PointSet.from_array(coords)
