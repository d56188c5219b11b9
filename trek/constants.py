"""Constants used throughout trek.

This module centralizes the magic numbers of the constellation pipeline so
that thresholds, budgets and default sizes live in one place.

Categories:
- Polyline Codec: Precision and character range of the encoded format
- Simplification: Tolerances used for the different drawing styles
- Projection: Geographic margin and default canvas sizes
- Galaxy Placement: Virtual canvas, item footprint and search budgets
- Run Statistics: Reference distances shown alongside a run
"""

# === Polyline Codec ===
POLYLINE_PRECISION = 5  # Decimal digits kept per coordinate
POLYLINE_CHAR_OFFSET = 63  # '?' - first character of the encoding alphabet
POLYLINE_CHAR_MAX = 126  # '~' - last character of the encoding alphabet
POLYLINE_CHUNK_BITS = 5
POLYLINE_CONTINUATION_BIT = 0x20
POLYLINE_CHUNK_MASK = 0x1F
POLYLINE_MAX_CHUNKS = 7  # 7 x 5 bits covers a 32-bit value

# === Simplification ===
CONSTELLATION_TOLERANCE_DEGREES = 0.000215  # Sparse outline for constellations
POLYLINE_TOLERANCE_DEGREES = 0.0  # Plain polyline keeps every point

# === Projection ===
BOUNDS_MARGIN_DEGREES = 0.002  # Keeps points off the canvas edges
DEFAULT_CANVAS_WIDTH = 250
DEFAULT_CANVAS_HEIGHT = 250
SVG_POINT_PRECISION = 2
STAR_INDEX_STEP = 2  # Every second point is drawn as a star

# === Galaxy Placement ===
GALAXY_WIDTH = 1000
GALAXY_HEIGHT = 1000
GALAXY_PADDING = 50  # Minimum gap between constellations and to the edge
CONSTELLATION_ITEM_WIDTH = 130
CONSTELLATION_ITEM_HEIGHT = 130
PLACEMENT_MAX_ATTEMPTS = 100
PLACEMENT_FALLBACK_SAMPLES = 30
ROTATION_RANGE_DEGREES = 360.0
SCALE_MIN = 0.7
SCALE_MAX = 1.3

# === Run Statistics ===
MOON_DISTANCE_MILES = 238_855  # Mean Earth-Moon distance
