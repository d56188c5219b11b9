"""
Trek Constellations

Turns GPS run tracks into constellations: simplified outlines projected onto
drawing canvases, compact encoded polylines for sharing, and a non-overlapping
layout of many constellations in a shared galaxy canvas.
"""

__version__ = "1.0.0"

# Export key functions
from .geometry import simplify_path, perpendicular_distance, path_bounds, path_center
from .polyline import encode_polyline, decode_polyline
from .projection import project_path, format_svg_points, select_star_indices
from .placement import (
    VirtualCanvas,
    PlacementBox,
    would_overlap,
    place_next,
    layout_constellations,
)
from .share import (
    build_share_payload,
    parse_share_payload,
    moon_progress_percent,
    format_run_summary,
)
from .exceptions import (
    TrekError,
    PolylineDecodeError,
    InvalidPathError,
    SharePayloadError,
    ConfigurationError,
)

# Short names used by the rendering collaborators
simplify = simplify_path
project = project_path

__all__ = [
    # Geometry
    "simplify_path",
    "simplify",
    "perpendicular_distance",
    "path_bounds",
    "path_center",
    # Polyline
    "encode_polyline",
    "decode_polyline",
    # Projection
    "project_path",
    "project",
    "format_svg_points",
    "select_star_indices",
    # Placement
    "VirtualCanvas",
    "PlacementBox",
    "would_overlap",
    "place_next",
    "layout_constellations",
    # Sharing
    "build_share_payload",
    "parse_share_payload",
    "moon_progress_percent",
    "format_run_summary",
    # Exceptions
    "TrekError",
    "PolylineDecodeError",
    "InvalidPathError",
    "SharePayloadError",
    "ConfigurationError",
]
