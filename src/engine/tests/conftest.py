"""Shared test fixtures for crisismap tests."""

import math

import pytest

from crisismap.geo_utils import EARTH_RADIUS_KM, Coordinate


@pytest.fixture
def user_location():
    """A user fix in central Tehran."""
    return Coordinate(lat=35.7, lng=51.4)


@pytest.fixture
def point_feature():
    """Factory for GeoJSON Point features given (lng, lat)."""

    def _make(lng, lat, **properties):
        return {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [lng, lat]},
            "properties": properties,
        }

    return _make


@pytest.fixture
def north_of():
    """Factory for a Point feature due north of a coordinate by a distance in km.

    Along a meridian the great-circle distance is exactly R * dlat.
    """

    def _make(origin, km, **properties):
        lat = origin.lat + math.degrees(km / EARTH_RADIUS_KM)
        return {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [origin.lng, lat]},
            "properties": properties,
        }

    return _make


@pytest.fixture
def collection():
    """Factory wrapping features into a FeatureCollection."""

    def _make(*features):
        return {"type": "FeatureCollection", "features": list(features)}

    return _make


@pytest.fixture
def evac_polygon():
    """A square evacuation area around the default user location."""
    return {
        "type": "Feature",
        "geometry": {
            "type": "Polygon",
            "coordinates": [[
                [51.39, 35.69], [51.41, 35.69],
                [51.41, 35.71], [51.39, 35.71], [51.39, 35.69],
            ]],
        },
        "properties": {"name": "District 6"},
    }
