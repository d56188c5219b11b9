"""Projection of (lat, lng) paths onto fixed-size drawing canvases.

The projector simplifies the path, pads its bounding box by a small margin
in degrees and maps it linearly onto a pixel canvas whose origin is the
top-left corner. Longitude grows to the right; latitude grows upwards, so
the y axis is flipped.
"""

from typing import List, Sequence, Tuple

import numpy as np

from .constants import (
    BOUNDS_MARGIN_DEGREES,
    CONSTELLATION_TOLERANCE_DEGREES,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_CANVAS_HEIGHT,
    SVG_POINT_PRECISION,
    STAR_INDEX_STEP,
)
from .decorators import timed
from .geometry import simplify_path
from .logger import logger
from .validation import (
    validate_non_negative,
    validate_path,
    validate_positive,
    validate_tolerance,
)

DrawablePoint = Tuple[float, float]

__all__ = [
    "DrawablePoint",
    "project_path",
    "format_svg_points",
    "select_star_indices",
]


def _scale_axis(values: np.ndarray, low: float, high: float, size: float) -> np.ndarray:
    """Map values from [low, high] onto [0, size]; a zero-width range maps to size / 2."""
    span = high - low
    if not span > 0:
        return np.full(values.shape, size / 2.0)
    return np.clip((values - low) / span * size, 0.0, size)


@timed
def project_path(
    path,
    width: float = DEFAULT_CANVAS_WIDTH,
    height: float = DEFAULT_CANVAS_HEIGHT,
    tolerance: float = CONSTELLATION_TOLERANCE_DEGREES,
    margin: float = BOUNDS_MARGIN_DEGREES,
) -> List[DrawablePoint]:
    """
    Simplify a path and project it onto a width x height canvas.

    Args:
        path: List of [lat, lng] points
        width: Canvas width in pixels
        height: Canvas height in pixels
        tolerance: Simplification tolerance in degrees
        margin: Padding added around the bounding box, in degrees

    Returns:
        One (x, y) pixel coordinate per point of the simplified path, in the
        same order. Every point lies within [0, width] x [0, height].
    """
    validate_path(path)
    validate_positive(width, "width")
    validate_positive(height, "height")
    validate_tolerance(tolerance)
    validate_non_negative(margin, "margin")

    simplified = simplify_path(path, tolerance)
    if len(simplified) == 0:
        return []

    coords = np.asarray([(p[0], p[1]) for p in simplified], dtype=float)
    lats = coords[:, 0]
    lngs = coords[:, 1]

    min_lat = lats.min() - margin
    max_lat = lats.max() + margin
    min_lng = lngs.min() - margin
    max_lng = lngs.max() + margin

    xs = _scale_axis(lngs, min_lng, max_lng, width)
    ys = height - _scale_axis(lats, min_lat, max_lat, height)

    logger.debug(
        f"Projected {len(path)} points ({len(simplified)} after simplification) "
        f"onto {width}x{height} canvas"
    )

    return [(float(x), float(y)) for x, y in zip(xs, ys)]


def format_svg_points(
    points: Sequence[DrawablePoint], precision: int = SVG_POINT_PRECISION
) -> str:
    """
    Format drawable points as an SVG ``points`` attribute.

    Example:
        >>> format_svg_points([(0.0, 250.0), (125.5, 10.25)])
        '0.00,250.00 125.50,10.25'
    """
    return " ".join(f"{x:.{precision}f},{y:.{precision}f}" for x, y in points)


def select_star_indices(count: int, step: int = STAR_INDEX_STEP) -> List[int]:
    """Indices of the points drawn as stars: every ``step``-th point from 0."""
    if step < 1:
        raise ValueError(f"step must be >= 1, got {step}")
    return list(range(0, count, step))
