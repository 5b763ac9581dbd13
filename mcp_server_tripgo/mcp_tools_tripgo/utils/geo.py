from __future__ import annotations

from decimal import Decimal
from typing import List, Sequence, Tuple

from ..core.errors import DecodeError

LatLng = Tuple[float, float]


def decode_polyline(encoded: str, precision: int = 5) -> List[LatLng]:
    """Decode a Google Encoded Polyline into (lat, lng) pairs.

    See https://developers.google.com/maps/documentation/utilities/polylinealgorithm
    """
    factor = 10 ** precision
    values: List[int] = []
    result = 0
    shift = 0

    for offset, ch in enumerate(encoded):
        chunk = ord(ch) - 63
        if chunk < 0 or chunk > 63:
            raise DecodeError(f"Invalid polyline character {ch!r} at offset {offset}")
        result |= (chunk & 0x1F) << shift
        shift += 5
        if chunk < 0x20:
            values.append(~(result >> 1) if result & 1 else result >> 1)
            result = 0
            shift = 0

    if shift:
        raise DecodeError("Polyline ends in the middle of a value")
    if len(values) % 2:
        raise DecodeError("Polyline has a latitude without a longitude")

    points: List[LatLng] = []
    lat = 0
    lng = 0
    for dlat, dlng in zip(values[0::2], values[1::2]):
        lat += dlat
        lng += dlng
        points.append((lat / factor, lng / factor))
    return points


def close_ring(vertices: Sequence[LatLng]) -> List[LatLng]:
    """Return the ring with its first vertex repeated at the end (if not already)."""
    ring = list(vertices)
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    return ring


def point_in_polygon(lat: float, lng: float, vertices: Sequence[LatLng]) -> bool:
    """Even-odd ray casting in a planar (lng, lat) frame.

    Rings with fewer than three vertices contain nothing. Points on an edge
    may land on either side, but always the same side for the same input.
    """
    ring = close_ring(vertices)
    if len(ring) < 4:
        return False

    inside = False
    for (lat1, lng1), (lat2, lng2) in zip(ring, ring[1:]):
        if (lat1 > lat) != (lat2 > lat):
            lng_cross = lng1 + (lat - lat1) * (lng2 - lng1) / (lat2 - lat1)
            if lng < lng_cross:
                inside = not inside
    return inside


def coordinate_in_encoded_polygon(lat: float, lng: float, encoded_polygon: str) -> bool:
    return point_in_polygon(lat, lng, decode_polyline(encoded_polygon))


def format_degrees(value: float) -> str:
    """Plain decimal text for a coordinate, never scientific notation (1e-05 -> "0.00001")."""
    return format(Decimal(repr(float(value))), "f")
