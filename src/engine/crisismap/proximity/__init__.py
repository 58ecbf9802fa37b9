"""Proximity evaluation, area containment and warning messages."""

from crisismap.proximity.areas import AreaMatch, EvacArea, find_containing_areas, list_evacuation_areas
from crisismap.proximity.engine import (
    DEFAULT_RADIUS_KM,
    InvalidRadiusError,
    NearbyPoint,
    ProximityResult,
    evaluate,
)
from crisismap.proximity.messages import (
    category_label,
    describe,
    describe_areas,
    headline,
    point_name,
    summarize,
)

__all__ = [
    "evaluate",
    "ProximityResult",
    "NearbyPoint",
    "InvalidRadiusError",
    "DEFAULT_RADIUS_KM",
    # Evacuation areas
    "find_containing_areas",
    "list_evacuation_areas",
    "AreaMatch",
    "EvacArea",
    # Messages
    "describe",
    "describe_areas",
    "headline",
    "summarize",
    "category_label",
    "point_name",
]
