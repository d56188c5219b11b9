"""Encoded polyline codec.

Paths are shared between views as compact strings in the widely used
"encoded polyline" format:

1. Each coordinate is quantized to ``precision`` decimal digits
   (multiplied by 10**precision and rounded half up to an integer).
2. Latitude and longitude are delta-encoded independently against the
   previous point (the first point against 0).
3. Each signed delta is zig-zag mapped to an unsigned value (shift left by
   one, invert all bits when negative).
4. The value is emitted as 5-bit groups, least significant first. Every
   group except the last carries the continuation bit 0x20, and each group
   is offset by 63 to land in the printable range '?'..'~'.

Example:
    >>> encode_polyline([(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)])
    '_p~iF~ps|U_ulLnnqC_mqNvxq`@'
    >>> decode_polyline('_p~iF~ps|U_ulLnnqC_mqNvxq`@')
    [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]

Values are limited to 7 chunks in both directions, so anything the encoder
accepts decodes again. Decoding is strict: a string that ends inside a
value, contains characters outside the alphabet, or carries a latitude
without its longitude raises PolylineDecodeError instead of returning a
partial path.
"""

import math
from typing import List, Tuple

from .constants import (
    POLYLINE_PRECISION,
    POLYLINE_CHAR_OFFSET,
    POLYLINE_CHAR_MAX,
    POLYLINE_CHUNK_BITS,
    POLYLINE_CONTINUATION_BIT,
    POLYLINE_CHUNK_MASK,
    POLYLINE_MAX_CHUNKS,
)
from .exceptions import InvalidPathError, PolylineDecodeError
from .validation import validate_path

__all__ = [
    "encode_polyline",
    "decode_polyline",
]


def _quantize(value: float, factor: int) -> int:
    return math.floor(value * factor + 0.5)


def _encode_value(value: int) -> str:
    """Zig-zag encode a signed integer and emit its 5-bit groups."""
    value = ~(value << 1) if value < 0 else value << 1

    chunks = []
    while value >= POLYLINE_CONTINUATION_BIT:
        chunks.append(
            chr((POLYLINE_CONTINUATION_BIT | (value & POLYLINE_CHUNK_MASK)) + POLYLINE_CHAR_OFFSET)
        )
        value >>= POLYLINE_CHUNK_BITS
    chunks.append(chr(value + POLYLINE_CHAR_OFFSET))
    return "".join(chunks)


def encode_polyline(path, precision: int = POLYLINE_PRECISION) -> str:
    """
    Encode a path of (lat, lng) points as a polyline string.

    Args:
        path: Sequence of [lat, lng] points
        precision: Decimal digits kept per coordinate

    Returns:
        Encoded polyline; an empty path encodes to ""

    Raises:
        InvalidPathError: If the path is not a sequence of numeric pairs, or
            a coordinate delta needs more than 7 chunks to encode
    """
    validate_path(path)
    factor = 10 ** precision

    parts = []
    prev_lat = prev_lng = 0
    for index, (lat, lng) in enumerate(path):
        lat_q = _quantize(lat, factor)
        lng_q = _quantize(lng, factor)
        for delta in (lat_q - prev_lat, lng_q - prev_lng):
            encoded = _encode_value(delta)
            if len(encoded) > POLYLINE_MAX_CHUNKS:
                raise InvalidPathError(
                    f"Coordinate delta {delta} is too large to encode", index=index
                )
            parts.append(encoded)
        prev_lat, prev_lng = lat_q, lng_q

    return "".join(parts)


def _decode_value(text: str, index: int) -> Tuple[int, int]:
    """
    Read one zig-zag encoded value starting at index.

    Returns:
        Tuple of (signed value, index of the next unread character)
    """
    result = 0
    shift = 0
    start = index

    while True:
        if index >= len(text):
            raise PolylineDecodeError("Polyline ends in the middle of a value", position=start)

        code = ord(text[index]) - POLYLINE_CHAR_OFFSET
        if code < 0 or code > POLYLINE_CHAR_MAX - POLYLINE_CHAR_OFFSET:
            raise PolylineDecodeError(
                f"Invalid polyline character {text[index]!r}", position=index
            )
        index += 1

        result |= (code & POLYLINE_CHUNK_MASK) << shift
        shift += POLYLINE_CHUNK_BITS
        if not code & POLYLINE_CONTINUATION_BIT:
            break
        if shift >= POLYLINE_CHUNK_BITS * POLYLINE_MAX_CHUNKS:
            raise PolylineDecodeError(
                f"Polyline value is longer than {POLYLINE_MAX_CHUNKS} chunks", position=start
            )

    value = ~(result >> 1) if result & 1 else result >> 1
    return value, index


def decode_polyline(text: str, precision: int = POLYLINE_PRECISION) -> List[Tuple[float, float]]:
    """
    Decode a polyline string back into (lat, lng) points.

    Args:
        text: Encoded polyline
        precision: Decimal digits the string was encoded with

    Returns:
        List of (lat, lng) tuples in encoding order

    Raises:
        PolylineDecodeError: If the string is truncated or malformed
    """
    if not isinstance(text, str):
        raise PolylineDecodeError(f"Polyline must be a string, got {type(text).__name__}")

    factor = 10 ** precision
    points = []
    index = 0
    lat = lng = 0

    while index < len(text):
        lat_delta, index = _decode_value(text, index)
        if index >= len(text):
            raise PolylineDecodeError("Polyline has a latitude without a longitude", position=index)
        lng_delta, index = _decode_value(text, index)

        lat += lat_delta
        lng += lng_delta
        points.append((lat / factor, lng / factor))

    return points
