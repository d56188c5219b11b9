"""Planar geometry on (lat, lng) paths.

Latitude/longitude deltas are treated as plane coordinates. That is accurate
enough for drawing the outline of a run; no geodesic correction is applied.
"""

import math
from typing import Tuple

from .constants import POLYLINE_TOLERANCE_DEGREES
from .exceptions import ConfigurationError, InvalidPathError

__all__ = [
    "perpendicular_distance",
    "simplify_path",
    "path_bounds",
    "path_center",
]


def perpendicular_distance(point, line_start, line_end):
    """
    Distance from point to the line through line_start and line_end.

    The point is projected onto the chord direction (the projection is not
    clamped to the segment). A zero-length chord degenerates to the plain
    Euclidean distance to that single point.
    """
    x, y = point[0], point[1]
    x1, y1 = line_start[0], line_start[1]
    x2, y2 = line_end[0], line_end[1]

    dx = x2 - x1
    dy = y2 - y1
    if dx == 0 and dy == 0:
        return math.sqrt((x - x1) ** 2 + (y - y1) ** 2)

    t = ((x - x1) * dx + (y - y1) * dy) / (dx * dx + dy * dy)
    nearest_x = x1 + t * dx
    nearest_y = y1 + t * dy
    return math.sqrt((x - nearest_x) ** 2 + (y - nearest_y) ** 2)


def simplify_path(path, tolerance=POLYLINE_TOLERANCE_DEGREES):
    """
    Simplify a path using the Ramer-Douglas-Peucker algorithm (iterative).

    Each range is split at the point farthest from the chord joining its
    endpoints while that distance exceeds the tolerance; otherwise the range
    collapses to its two endpoints. Split points appear exactly once in the
    result and the first and last points are always kept.

    Args:
        path: List of [lat, lng] points
        tolerance: Maximum perpendicular deviation in degrees; negative
            values behave like 0

    Returns:
        Simplified path made of the original point objects, or the input
        itself when it has fewer than 3 points

    Raises:
        ConfigurationError: If the tolerance is NaN
    """
    if math.isnan(tolerance):
        raise ConfigurationError("tolerance must be a number, got nan", config_key="tolerance")

    if len(path) < 3:
        return path

    tolerance = max(tolerance, 0.0)

    # Explicit stack instead of recursion so long tracks cannot hit the recursion limit
    stack = [(0, len(path) - 1)]
    keep_indices = {0, len(path) - 1}

    while stack:
        start_idx, end_idx = stack.pop()

        dmax = 0.0
        max_idx = start_idx
        for i in range(start_idx + 1, end_idx):
            d = perpendicular_distance(path[i], path[start_idx], path[end_idx])
            if d > dmax:
                max_idx = i
                dmax = d

        if dmax > tolerance:
            keep_indices.add(max_idx)
            stack.append((start_idx, max_idx))
            stack.append((max_idx, end_idx))

    return [path[i] for i in sorted(keep_indices)]


def path_bounds(path) -> Tuple[float, float, float, float]:
    """
    Bounding box of a path.

    Returns:
        Tuple of (min_lat, max_lat, min_lng, max_lng)

    Raises:
        InvalidPathError: If the path is empty
    """
    if len(path) == 0:
        raise InvalidPathError("Cannot compute bounds of an empty path")

    lats = [p[0] for p in path]
    lngs = [p[1] for p in path]
    return min(lats), max(lats), min(lngs), max(lngs)


def path_center(path) -> Tuple[float, float]:
    """Midpoint of the path's bounding box as (lat, lng)."""
    min_lat, max_lat, min_lng, max_lng = path_bounds(path)
    return (min_lat + max_lat) / 2, (min_lng + max_lng) / 2
