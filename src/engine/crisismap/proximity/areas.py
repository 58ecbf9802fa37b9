"""Evacuation areas: containment of a user location and dated area listing."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from numbers import Real
from typing import Any

import structlog
from shapely.geometry import Point, shape

from crisismap.categories import AREA_CATEGORIES, Category, category_tag
from crisismap.geo_utils import Coordinate, as_coordinate

logger = structlog.get_logger()

AREA_GEOMETRY_TYPES = {"Polygon", "MultiPolygon"}

# Property keys of the evacuation order export
DATE_PROPERTY = "Date"
AREA_PROPERTY = "Shape__Area"


@dataclass(frozen=True)
class AreaMatch:
    """An area polygon that contains the user location."""

    category: str
    properties: Mapping[str, Any]


@dataclass(frozen=True)
class EvacArea:
    """A dated evacuation area, with the extent to zoom a map to."""

    index: int  # position in the source collection
    date: datetime
    area_m2: float
    properties: Mapping[str, Any]
    bounds: tuple[float, float, float, float]  # (min_lng, min_lat, max_lng, max_lat)


def _features(collection: Any) -> Sequence[Any]:
    if not isinstance(collection, Mapping):
        return ()
    features = collection.get("features")
    if isinstance(features, (str, bytes)) or not isinstance(features, Sequence):
        return ()
    return features


def parse_area_date(value: Any) -> datetime | None:
    """Parse an evacuation order date.

    Exports carry either epoch milliseconds or an ISO 8601 string. Naive
    values are taken as UTC.

    Returns:
        Timezone-aware datetime, or None if the value is missing or unparseable.
    """
    if isinstance(value, bool) or value in (None, "", 0):
        return None

    try:
        if isinstance(value, Real):
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        if isinstance(value, str):
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
    except (ValueError, OverflowError, OSError):
        return None

    return None


def find_containing_areas(
    user_location: Coordinate | Sequence[float],
    collections: Mapping[str, Mapping[str, Any] | None],
    categories: Iterable[str] = AREA_CATEGORIES,
) -> list[AreaMatch]:
    """Find the area polygons that contain the user location.

    A location on the polygon boundary counts as inside. Point features and
    malformed polygons are skipped. This check is independent of the
    point-proximity verdict.

    Args:
        user_location: The user's coordinate, or a (lat, lng) pair.
        collections: Mapping of category tag to GeoJSON FeatureCollection.
        categories: Which categories hold area polygons.

    Returns:
        List of AreaMatch objects, in collection order.
    """
    user = as_coordinate(user_location)
    wanted = {category_tag(c) for c in categories}
    user_point = Point(user.lng, user.lat)
    matches = []

    for key, collection in collections.items():
        tag = category_tag(key)
        if tag not in wanted:
            continue

        for feature in _features(collection):
            try:
                geometry = feature.get("geometry")
                if not geometry or geometry.get("type") not in AREA_GEOMETRY_TYPES:
                    continue

                area = shape(geometry)
                if area.is_empty:
                    continue

                if area.covers(user_point):
                    properties = feature.get("properties")
                    matches.append(AreaMatch(
                        category=tag,
                        properties=properties if isinstance(properties, Mapping) else {},
                    ))

            except Exception as e:
                logger.warning("Failed to process area feature", category=tag, error=str(e))
                continue

    logger.debug("Area containment check complete", num_areas=len(matches))

    return matches


def list_evacuation_areas(
    collections: Mapping[str, Mapping[str, Any] | None],
    category: str = Category.EVAC,
) -> list[EvacArea]:
    """List dated evacuation areas, newest first.

    Only features with both a ``Date`` and a ``Shape__Area`` property and a
    Polygon/MultiPolygon geometry are listed. Areas with the same date keep
    their collection order.

    Args:
        collections: Mapping of category tag to GeoJSON FeatureCollection.
        category: The category holding evacuation polygons.

    Returns:
        List of EvacArea objects, newest first.
    """
    tag = category_tag(category)
    collection = next((c for k, c in collections.items() if category_tag(k) == tag), None)
    areas = []

    for index, feature in enumerate(_features(collection)):
        try:
            properties = feature.get("properties") or {}
            date = parse_area_date(properties.get(DATE_PROPERTY))
            area_m2 = properties.get(AREA_PROPERTY)
            if date is None or not area_m2:
                logger.debug("Skipping evacuation area without date or size", index=index)
                continue

            geometry = feature.get("geometry")
            if not geometry or geometry.get("type") not in AREA_GEOMETRY_TYPES:
                continue

            polygon = shape(geometry)
            if polygon.is_empty:
                continue

            areas.append(EvacArea(
                index=index,
                date=date,
                area_m2=float(area_m2),
                properties=properties,
                bounds=tuple(polygon.bounds),
            ))

        except Exception as e:
            logger.warning("Failed to process evacuation area", index=index, error=str(e))
            continue

    areas.sort(key=lambda a: a.date, reverse=True)

    return areas
