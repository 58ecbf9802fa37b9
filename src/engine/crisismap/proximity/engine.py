"""Danger-point proximity evaluation for a user location."""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from numbers import Real
from types import MappingProxyType
from typing import Any

import structlog

from crisismap.categories import category_tag, ordered_keys
from crisismap.geo_utils import Coordinate, as_coordinate, haversine_km, point_position, round_half_up

logger = structlog.get_logger()

DEFAULT_RADIUS_KM = 3.0

_EMPTY_PROPERTIES: Mapping[str, Any] = MappingProxyType({})


class InvalidRadiusError(ValueError):
    """Raised when a danger radius is negative, non-finite or not a number."""


@dataclass(frozen=True)
class NearbyPoint:
    """A danger point within the radius of the user location."""

    category: str
    distance_km: float  # rounded to 2 decimals, for display
    properties: Mapping[str, Any]
    coordinates: tuple[float, float]  # (lng, lat)
    # Unrounded distance, the value compared against the radius
    raw_distance_km: float = field(compare=False)


@dataclass(frozen=True)
class ProximityResult:
    """Verdict of one proximity evaluation."""

    is_in_danger: bool
    nearby_points: tuple[NearbyPoint, ...] = ()
    radius_km: float = DEFAULT_RADIUS_KM

    @property
    def closest(self) -> NearbyPoint | None:
        return self.nearby_points[0] if self.nearby_points else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "is_in_danger": self.is_in_danger,
            "radius_km": self.radius_km,
            "nearby_points": [
                {
                    "type": p.category,
                    "distance": p.distance_km,
                    "properties": dict(p.properties),
                    "coordinates": list(p.coordinates),
                }
                for p in self.nearby_points
            ],
        }


def validate_radius(radius_km: Any) -> float:
    """Validate a danger radius in kilometers.

    Raises:
        InvalidRadiusError: If the radius is not a finite, non-negative number.
    """
    if isinstance(radius_km, bool) or not isinstance(radius_km, Real):
        raise InvalidRadiusError(f"Radius must be a number, got {radius_km!r}")
    if not math.isfinite(radius_km) or radius_km < 0:
        raise InvalidRadiusError(f"Radius must be a finite, non-negative number of km, got {radius_km!r}")
    return float(radius_km)


def _iter_features(collection: Any) -> Sequence[Any]:
    if not isinstance(collection, Mapping):
        return ()
    features = collection.get("features")
    if isinstance(features, (str, bytes)) or not isinstance(features, Sequence):
        return ()
    return features


def evaluate(
    user_location: Coordinate | Sequence[float],
    collections: Mapping[str, Mapping[str, Any] | None],
    radius_km: float = DEFAULT_RADIUS_KM,
) -> ProximityResult:
    """Find danger points within a radius of the user location.

    Distances are haversine great-circle distances. The radius check uses the
    raw distance (inclusive); the stored distance is rounded half-up to 2
    decimals. Non-Point and malformed features are skipped.

    The user location must be a real fix. (0, 0) is the "unset" sentinel of
    the map client and should be filtered out by the caller.

    Args:
        user_location: Coordinate, or a (lat, lng) pair.
        collections: Mapping of category tag to GeoJSON FeatureCollection.
            Absent or None collections contribute nothing.
        radius_km: Inclusive danger radius in kilometers.

    Returns:
        ProximityResult with nearby points ordered nearest first.

    Raises:
        InvalidRadiusError: If the radius is negative or not a finite number.
        ValueError: If the user location is not a valid coordinate.
    """
    radius_km = validate_radius(radius_km)
    user = as_coordinate(user_location)

    candidates: list[NearbyPoint] = []
    skipped = 0

    for key in ordered_keys(collections.keys()):
        tag = category_tag(key)
        for feature in _iter_features(collections[key]):
            if not isinstance(feature, Mapping):
                skipped += 1
                continue

            geometry = feature.get("geometry")
            if isinstance(geometry, Mapping) and geometry.get("type") not in (None, "Point"):
                # Areas are handled by the evacuation area check
                continue

            position = point_position(geometry)
            if position is None:
                logger.debug("Skipping malformed feature", category=tag, geometry=geometry)
                skipped += 1
                continue

            distance_km = haversine_km(user, Coordinate.from_lng_lat(position))
            if distance_km > radius_km:
                continue

            properties = feature.get("properties")
            candidates.append(NearbyPoint(
                category=tag,
                distance_km=round_half_up(distance_km, 2),
                properties=MappingProxyType(properties) if isinstance(properties, Mapping) else _EMPTY_PROPERTIES,
                coordinates=position,
                raw_distance_km=distance_km,
            ))

    # Stable sort keeps category order, then feature order, for ties
    candidates.sort(key=lambda p: p.raw_distance_km)
    nearby = tuple(candidates)

    logger.debug(
        "Proximity evaluation complete",
        num_nearby_points=len(nearby),
        num_skipped=skipped,
        radius_km=radius_km,
    )

    return ProximityResult(is_in_danger=bool(nearby), nearby_points=nearby, radius_km=radius_km)
