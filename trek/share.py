"""Shared run payloads.

A run travels between views as a small JSON object whose track is an
encoded polyline:

    {"coordinates": "_p~iF~ps|U_ulLnnqC_mqNvxq`@", "distance": 3.1, "name": "Loop"}

Percent-encoding the payload into a link is left to the caller.
"""

import json
import math
from numbers import Real
from typing import List

from .constants import MOON_DISTANCE_MILES
from .decorators import log_calls
from .exceptions import PolylineDecodeError, SharePayloadError
from .polyline import decode_polyline, encode_polyline
from .types import RunData, SharedRun

__all__ = [
    "build_share_payload",
    "parse_share_payload",
    "moon_progress_percent",
    "format_run_summary",
]


def _check_distance(distance) -> None:
    if not isinstance(distance, Real) or isinstance(distance, bool):
        raise SharePayloadError("Distance must be a number", field="distance")
    if not math.isfinite(distance):
        raise SharePayloadError(f"Distance must be finite, got {distance}", field="distance")


def build_share_payload(name: str, distance: float, coordinates) -> str:
    """
    Serialize a run for sharing.

    Args:
        name: Display name of the run
        distance: Run distance in miles
        coordinates: Track as a list of [lat, lng] points

    Returns:
        Compact JSON string with the track encoded as a polyline

    Raises:
        SharePayloadError: If the distance is not a finite number
    """
    _check_distance(distance)
    shared: SharedRun = {
        "coordinates": encode_polyline(coordinates),
        "name": name,
        "distance": distance,
    }
    return json.dumps(shared, separators=(",", ":"), sort_keys=True, allow_nan=False)


def parse_share_payload(text: str) -> RunData:
    """
    Parse a shared run payload and decode its track.

    Raises:
        SharePayloadError: If the payload is not valid JSON, misses a field,
            or carries a malformed polyline
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise SharePayloadError(f"Payload is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SharePayloadError("Payload must be a JSON object")

    for field in ("coordinates", "name", "distance"):
        if field not in data:
            raise SharePayloadError("Missing field", field=field)

    distance = data["distance"]
    _check_distance(distance)

    try:
        coordinates: List = decode_polyline(data["coordinates"])
    except PolylineDecodeError as e:
        raise SharePayloadError(f"Invalid track: {e}", field="coordinates") from e

    return {
        "name": str(data["name"]),
        "distance": float(distance),
        "coordinates": coordinates,
    }


@log_calls
def moon_progress_percent(distance_miles: float) -> float:
    """Share of the Earth-Moon distance covered by a run, in percent."""
    return distance_miles / MOON_DISTANCE_MILES * 100


def format_run_summary(run: RunData) -> List[str]:
    """
    Human-readable summary lines for a run.

    Example:
        >>> format_run_summary({"name": "Loop", "distance": 26.2, "coordinates": []})
        ['Loop', 'Distance: 26.20 miles', '0.010969% of the way to the moon']
    """
    progress = moon_progress_percent(run["distance"])
    return [
        run["name"],
        f"Distance: {run['distance']:.2f} miles",
        f"{progress:.6f}% of the way to the moon",
    ]
