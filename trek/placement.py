"""Placement of constellations in the shared virtual galaxy canvas.

Every constellation occupies a fixed nominal footprint. New items are placed
one at a time against all previously accepted boxes:

1. Draw a random top-left position inside the padded canvas, with a random
   rotation in [0, 360) and scale in [0.7, 1.3].
2. Accept it when its centre is at least ``hypot(width, height) + padding``
   away from every existing centre. Rotation and scale are ignored by this
   bounding-circle test.
3. Retry up to 100 times. If no candidate fits, score 30 further random
   positions by their distance to the nearest existing centre, keep the best
   one and give it a freshly sampled rotation and scale. Such boxes are
   flagged with ``fallback=True``.

The fallback guarantees termination, not separation: crowded canvases get
overlapping boxes rather than an error.

Each call depends on the full result of all earlier calls, so placements for
one canvas must run sequentially (see layout_constellations).
"""

import math
import random
from dataclasses import asdict, dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .constants import (
    GALAXY_WIDTH,
    GALAXY_HEIGHT,
    GALAXY_PADDING,
    CONSTELLATION_ITEM_WIDTH,
    CONSTELLATION_ITEM_HEIGHT,
    PLACEMENT_MAX_ATTEMPTS,
    PLACEMENT_FALLBACK_SAMPLES,
    ROTATION_RANGE_DEGREES,
    SCALE_MIN,
    SCALE_MAX,
)
from .decorators import timed
from .exceptions import ConfigurationError
from .logger import logger
from .types import PlacementRecord
from .validation import validate_positive

__all__ = [
    "VirtualCanvas",
    "PlacementBox",
    "would_overlap",
    "place_next",
    "layout_constellations",
]


@dataclass(frozen=True)
class VirtualCanvas:
    """Bounded region the constellations are arranged in."""

    width: float = GALAXY_WIDTH
    height: float = GALAXY_HEIGHT
    padding: float = GALAXY_PADDING


@dataclass(frozen=True)
class PlacementBox:
    """Position, orientation and nominal footprint of one placed item."""

    x: float
    y: float
    rotation: float
    scale: float
    width: float
    height: float
    fallback: bool = False

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def to_dict(self) -> PlacementRecord:
        return asdict(self)


def _placement_spans(
    canvas: VirtualCanvas, item_width: float, item_height: float
) -> Tuple[float, float]:
    """Width and height of the range of valid top-left positions."""
    x_span = canvas.width - item_width - 2 * canvas.padding
    y_span = canvas.height - item_height - 2 * canvas.padding
    if x_span < 0 or y_span < 0:
        raise ConfigurationError(
            f"Canvas {canvas.width}x{canvas.height} with padding {canvas.padding} "
            f"cannot hold a {item_width}x{item_height} item",
            config_key="canvas",
        )
    return x_span, y_span


def _min_separation(item_width: float, item_height: float, padding: float) -> float:
    return math.hypot(item_width, item_height) + padding


def _box_centers(boxes: Sequence[PlacementBox]) -> np.ndarray:
    if not boxes:
        return np.empty((0, 2), dtype=float)
    return np.asarray([box.center for box in boxes], dtype=float)


def _nearest_distances(
    positions: np.ndarray, centers: np.ndarray, item_width: float, item_height: float
) -> np.ndarray:
    """Distance from each candidate's centre to the closest existing centre."""
    if len(centers) == 0:
        return np.full(len(positions), np.inf)
    candidate_centers = positions + np.array([item_width / 2, item_height / 2])
    deltas = candidate_centers[:, np.newaxis, :] - centers[np.newaxis, :, :]
    return np.hypot(deltas[..., 0], deltas[..., 1]).min(axis=1)


def _sample_position(
    rng: random.Random, canvas: VirtualCanvas, x_span: float, y_span: float
) -> Tuple[float, float]:
    x = rng.random() * x_span + canvas.padding
    y = rng.random() * y_span + canvas.padding
    return x, y


def _sample_orientation(rng: random.Random) -> Tuple[float, float]:
    rotation = rng.random() * ROTATION_RANGE_DEGREES
    scale = SCALE_MIN + rng.random() * (SCALE_MAX - SCALE_MIN)
    return rotation, scale


def would_overlap(
    position: Tuple[float, float],
    existing: Sequence[PlacementBox],
    item_width: float,
    item_height: float,
    padding: float,
) -> bool:
    """
    Bounding-circle collision test for an item placed at ``position``.

    Args:
        position: Candidate (x, y) top-left corner
        existing: Previously accepted boxes
        item_width: Nominal width of the new item
        item_height: Nominal height of the new item
        padding: Extra gap required between items

    Returns:
        True if the candidate centre is closer than
        ``hypot(item_width, item_height) + padding`` to any existing centre
    """
    distances = _nearest_distances(
        np.asarray([position], dtype=float), _box_centers(existing), item_width, item_height
    )
    return bool(distances[0] < _min_separation(item_width, item_height, padding))


def place_next(
    existing: Sequence[PlacementBox],
    canvas: VirtualCanvas,
    item_width: float,
    item_height: float,
    rng: Optional[random.Random] = None,
) -> PlacementBox:
    """
    Compute a position for one more item on the canvas.

    Args:
        existing: Boxes already placed on this canvas; read, never modified
        canvas: Virtual canvas bounds and padding
        item_width: Nominal width of the new item
        item_height: Nominal height of the new item
        rng: Random source with a ``random()`` method; an unseeded
            ``random.Random`` is used when omitted

    Returns:
        A new PlacementBox whose top-left corner lies within
        [padding, dimension - item size - padding] on both axes

    Raises:
        ConfigurationError: If the item cannot fit inside the padded canvas
    """
    validate_positive(item_width, "item_width")
    validate_positive(item_height, "item_height")
    x_span, y_span = _placement_spans(canvas, item_width, item_height)
    if rng is None:
        rng = random.Random()

    centers = _box_centers(existing)
    min_separation = _min_separation(item_width, item_height, canvas.padding)

    position = None
    for _ in range(PLACEMENT_MAX_ATTEMPTS):
        position = _sample_position(rng, canvas, x_span, y_span)
        rotation, scale = _sample_orientation(rng)
        nearest = _nearest_distances(
            np.asarray([position], dtype=float), centers, item_width, item_height
        )[0]
        if nearest >= min_separation:
            return PlacementBox(position[0], position[1], rotation, scale, item_width, item_height)

    logger.debug(
        f"No free slot after {PLACEMENT_MAX_ATTEMPTS} attempts among {len(existing)} "
        f"boxes, picking the best of {PLACEMENT_FALLBACK_SAMPLES} samples"
    )

    samples = np.asarray(
        [_sample_position(rng, canvas, x_span, y_span) for _ in range(PLACEMENT_FALLBACK_SAMPLES)],
        dtype=float,
    )
    nearest = _nearest_distances(samples, centers, item_width, item_height)
    best = int(np.argmax(nearest))
    if nearest[best] > 0:
        position = (float(samples[best, 0]), float(samples[best, 1]))

    rotation, scale = _sample_orientation(rng)
    return PlacementBox(
        position[0], position[1], rotation, scale, item_width, item_height, fallback=True
    )


@timed
def layout_constellations(
    count: int,
    canvas: Optional[VirtualCanvas] = None,
    item_width: float = CONSTELLATION_ITEM_WIDTH,
    item_height: float = CONSTELLATION_ITEM_HEIGHT,
    rng: Optional[random.Random] = None,
) -> List[PlacementBox]:
    """
    Place ``count`` items one after another on a shared canvas.

    Each placement is checked against every box accepted before it.

    Args:
        count: Number of items to place
        canvas: Virtual canvas (defaults to the 1000x1000 galaxy)
        item_width: Nominal width of every item
        item_height: Nominal height of every item
        rng: Random source shared by all placements

    Returns:
        Boxes in placement order
    """
    if count < 0:
        raise ConfigurationError(f"count must be >= 0, got {count}", config_key="count")
    if canvas is None:
        canvas = VirtualCanvas()
    if rng is None:
        rng = random.Random()

    boxes: List[PlacementBox] = []
    for _ in range(count):
        boxes.append(place_next(boxes, canvas, item_width, item_height, rng))

    fallbacks = sum(1 for box in boxes if box.fallback)
    if fallbacks:
        logger.warning(
            f"{fallbacks} of {count} constellations could not be separated "
            f"on the {canvas.width}x{canvas.height} canvas"
        )
    else:
        logger.debug(f"Placed {count} constellations without overlap")

    return boxes
