"""Danger categories and the map layer metadata attached to each."""

from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    """Danger categories, in evaluation order."""

    STRIKES = "strikes"
    SITES = "sites"
    NUCLEAR = "nuclear"
    EVAC = "evac"


@dataclass(frozen=True)
class Layer:
    """Static metadata for one category's map layer."""

    category: Category
    name: str
    color: str
    data_file: str
    symbol: str | None = None


LAYERS: tuple[Layer, ...] = (
    Layer(Category.STRIKES, "Confirmed strikes", "#b81102", "strikes.geojson", "explosion"),
    Layer(Category.SITES, "Missile bases", "#ff9100", "missile-bases.geojson", "missile"),
    Layer(Category.NUCLEAR, "Nuclear facilities", "#ff9100", "nuclear-facilities.geojson", "nuclear"),
    # Evacuation areas are polygons and render as fill + outline, no marker.
    Layer(Category.EVAC, "Evacuation areas", "#ff0000", "evac-areas.geojson"),
)

AREA_CATEGORIES: tuple[Category, ...] = (Category.EVAC,)


def category_tag(key: str) -> str:
    """Plain string tag for a collection key (Category members included)."""
    return key.value if isinstance(key, Category) else str(key)


_RANK = {c.value: i for i, c in enumerate(Category)}


def ordered_keys(keys) -> list:
    """Order collection keys: known categories first, then the rest as given."""
    return sorted(keys, key=lambda k: _RANK.get(category_tag(k), len(_RANK)))
