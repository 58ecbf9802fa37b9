"""Local GeoJSON sources for the danger categories."""

from crisismap.geodata.loader import GeodataError, GeodataSnapshot, load_collection, load_snapshot

__all__ = [
    "load_snapshot",
    "load_collection",
    "GeodataSnapshot",
    "GeodataError",
]
