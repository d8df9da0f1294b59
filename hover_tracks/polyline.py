"""Compact polyline encoding and decoding.

Implements the standard encoded polyline algorithm: each coordinate is scaled
to fixed point (5 decimals by default), stored as a signed delta from the
previous point, zig-zag encoded and emitted as 5-bit chunks offset by 63.
The output is bit-compatible with the Google and mapbox implementations, so
paths stored by the data API decode to the same points here.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

from .config import InvalidConfiguration

_OFFSET = 63
_CHUNK_BITS = 5
_CHUNK_MASK = 0x1F
_CONTINUATION = 0x20


class DecodeError(ValueError):
    """Raised when an encoded polyline cannot be decoded completely."""

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


def _factor(precision: int) -> int:
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise InvalidConfiguration(f"precision must be a non-negative integer, got {precision!r}")
    return 10**precision


def _round_half_away(value: float) -> int:
    """Round like the reference implementations (half away from zero)."""

    return int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


def _encode_value(value: int) -> str:
    value = ~(value << 1) if value < 0 else value << 1
    chunks: List[str] = []
    while value >= _CONTINUATION:
        chunks.append(chr((_CONTINUATION | (value & _CHUNK_MASK)) + _OFFSET))
        value >>= _CHUNK_BITS
    chunks.append(chr(value + _OFFSET))
    return "".join(chunks)


def encode(points: Iterable[Sequence[float]], precision: int = 5) -> str:
    """Encode ``(lat, lon)`` pairs into a compact polyline string."""

    factor = _factor(precision)
    parts: List[str] = []
    prev_lat = prev_lon = 0
    for point in points:
        lat = _round_half_away(float(point[0]) * factor)
        lon = _round_half_away(float(point[1]) * factor)
        parts.append(_encode_value(lat - prev_lat))
        parts.append(_encode_value(lon - prev_lon))
        prev_lat, prev_lon = lat, lon
    return "".join(parts)


def _decode_value(encoded: str, index: int) -> Tuple[int, int]:
    """Read one zig-zag varint starting at ``index``; return (value, next index)."""

    result = 0
    shift = 0
    while True:
        if index >= len(encoded):
            raise DecodeError(f"Truncated value at offset {index}", position=index)
        chunk = ord(encoded[index]) - _OFFSET
        if chunk < 0 or chunk > 0x3F:
            raise DecodeError(f"Invalid character {encoded[index]!r} at offset {index}", position=index)
        result |= (chunk & _CHUNK_MASK) << shift
        shift += _CHUNK_BITS
        index += 1
        if chunk < _CONTINUATION:
            break
    value = ~(result >> 1) if result & 1 else result >> 1
    return value, index


def decode(encoded: str, precision: int = 5) -> List[Tuple[float, float]]:
    """Decode a compact polyline string into ``(lat, lon)`` pairs.

    Raises :class:`DecodeError` rather than returning a partial path when the
    string is cut short or contains characters outside the encoding alphabet.
    """

    factor = _factor(precision)
    if not isinstance(encoded, str):
        raise DecodeError(f"Encoded path must be a string, got {type(encoded).__name__}")

    points: List[Tuple[float, float]] = []
    index = 0
    lat = lon = 0
    while index < len(encoded):
        delta_lat, index = _decode_value(encoded, index)
        if index >= len(encoded):
            raise DecodeError(f"Missing longitude after latitude at offset {index}", position=index)
        delta_lon, index = _decode_value(encoded, index)
        lat += delta_lat
        lon += delta_lon
        points.append((lat / factor, lon / factor))
    return points
