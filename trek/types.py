"""Type definitions for trek.

TypedDicts describing the JSON-shaped records exchanged with the rendering
and sharing collaborators.

Example:
    >>> from trek.types import RunData
    >>> run: RunData = {
    ...     "name": "Morning loop",
    ...     "distance": 5.2,
    ...     "coordinates": [(38.5, -120.2), (38.51, -120.21)],
    ... }
"""

from typing import List, Tuple, TypedDict
from typing_extensions import NotRequired


class RunData(TypedDict):
    """A named run with its decoded track."""

    name: str
    distance: float  # miles
    coordinates: List[Tuple[float, float]]  # [(lat, lng), ...]


class SharedRun(TypedDict):
    """Wire form of a shared run: the track travels as an encoded polyline."""

    name: str
    distance: float
    coordinates: str


class PlacementRecord(TypedDict):
    """A placed constellation in the virtual galaxy canvas."""

    x: float
    y: float
    rotation: float  # degrees
    scale: float
    width: float
    height: float
    fallback: NotRequired[bool]


class ProjectionResult(TypedDict):
    """Drawable output for one track."""

    points: List[Tuple[float, float]]
    width: float
    height: float
    original_points: int
    simplified_points: int
    stars: NotRequired[List[int]]
    svg_points: NotRequired[str]


__all__ = [
    "RunData",
    "SharedRun",
    "PlacementRecord",
    "ProjectionResult",
]
