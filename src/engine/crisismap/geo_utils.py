"""Shared geospatial utility functions."""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any

# Mean Earth radius (IUGG), the same value web mapping libraries use for
# great-circle distances shown to users.
EARTH_RADIUS_KM = 6371.0088


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not (_is_number(self.lat) and _is_number(self.lng)):
            raise ValueError(f"Coordinate values must be finite numbers, got lat={self.lat!r} lng={self.lng!r}")
        if not -90 <= self.lat <= 90:
            raise ValueError(f"Latitude {self.lat} outside [-90, 90]")
        if not -180 <= self.lng <= 180:
            raise ValueError(f"Longitude {self.lng} outside [-180, 180]")
        object.__setattr__(self, "lat", float(self.lat))
        object.__setattr__(self, "lng", float(self.lng))

    @classmethod
    def from_lng_lat(cls, position: Sequence[float]) -> "Coordinate":
        """Build a Coordinate from a GeoJSON [lng, lat] position."""
        return cls(lat=position[1], lng=position[0])

    @property
    def is_unset(self) -> bool:
        """True for (0, 0), which the map client uses as "no fix yet"."""
        return self.lat == 0 and self.lng == 0


def as_coordinate(location: Coordinate | Sequence[float]) -> Coordinate:
    """Accept a Coordinate or a (lat, lng) pair.

    Raises:
        ValueError: If the pair has the wrong length or invalid values.
    """
    if isinstance(location, Coordinate):
        return location
    lat, lng = location
    return Coordinate(lat=lat, lng=lng)


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Compute the great-circle distance in kilometers between two coordinates.

    Uses the haversine formula on a sphere of radius ``EARTH_RADIUS_KM``.

    Args:
        a: First coordinate.
        b: Second coordinate.

    Returns:
        Distance in kilometers (unrounded).
    """
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))


def round_half_up(value: float, digits: int = 2) -> float:
    """Round a value to ``digits`` decimals, with halves rounded up."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def point_position(geometry: Any) -> tuple[float, float] | None:
    """Extract a validated (lng, lat) pair from a GeoJSON Point geometry.

    Args:
        geometry: A GeoJSON geometry mapping.

    Returns:
        The (lng, lat) position, or None if the geometry is not a usable
        WGS84 Point (wrong type, missing or short coordinates, non-numeric
        or out-of-range values). A third altitude element is ignored.
    """
    if not isinstance(geometry, Mapping) or geometry.get("type") != "Point":
        return None

    coords = geometry.get("coordinates")
    if isinstance(coords, (str, bytes)) or not isinstance(coords, Sequence):
        return None
    if len(coords) not in (2, 3):
        return None

    lng, lat = coords[0], coords[1]
    if not (_is_number(lng) and _is_number(lat)):
        return None
    if not (-180 <= lng <= 180 and -90 <= lat <= 90):
        return None

    return (float(lng), float(lat))
