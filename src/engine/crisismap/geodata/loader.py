"""Load GeoJSON feature collections from local files into snapshots."""

import json
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import structlog

from crisismap.categories import LAYERS

logger = structlog.get_logger()


class GeodataError(Exception):
    """Raised when a GeoJSON source cannot be read or is not a FeatureCollection."""


class GeodataSnapshot(Mapping):
    """Read-only mapping of category tag to FeatureCollection (or None).

    A refresh builds a new snapshot; an existing one is never modified, so
    the proximity engine can be handed the current reference at any time.
    """

    def __init__(self, collections: Mapping[str, dict[str, Any] | None]):
        self._collections = MappingProxyType(dict(collections))

    def __getitem__(self, key: str) -> dict[str, Any] | None:
        return self._collections[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._collections)

    def __len__(self) -> int:
        return len(self._collections)

    def feature_count(self, category: str) -> int:
        """Number of features loaded for a category (0 when absent)."""
        collection = self._collections.get(category)
        if not collection:
            return 0
        return len(collection.get("features") or [])

    def __repr__(self) -> str:
        counts = ", ".join(f"{k}={self.feature_count(k)}" for k in self._collections)
        return f"GeodataSnapshot({counts})"


def load_collection(path: str | Path) -> dict[str, Any] | None:
    """Load one GeoJSON FeatureCollection from disk.

    Args:
        path: Path to a .geojson file.

    Returns:
        The decoded FeatureCollection, or None if the file does not exist.

    Raises:
        GeodataError: If the file cannot be read or decoded, or its root is
            not a FeatureCollection.
    """
    path = Path(path)
    if not path.exists():
        logger.info("GeoJSON source not found", path=str(path))
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise GeodataError(f"Failed to read {path}: {e}") from e

    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        raise GeodataError(f"{path} is not a GeoJSON FeatureCollection")
    if not isinstance(data.get("features"), list):
        raise GeodataError(f"{path} has no features list")

    logger.debug("Loaded GeoJSON source", path=str(path), num_features=len(data["features"]))

    return data


def load_snapshot(data_dir: Path, files: Mapping[str, str] | None = None) -> GeodataSnapshot:
    """Load every category's GeoJSON file from a directory.

    Args:
        data_dir: Directory holding the GeoJSON files.
        files: Mapping of category tag to file name. Defaults to the file
            names of the category layers.

    Returns:
        GeodataSnapshot; categories whose file is missing map to None.

    Raises:
        GeodataError: If an existing file is unreadable or invalid.
    """
    if files is None:
        files = {layer.category.value: layer.data_file for layer in LAYERS}

    snapshot = GeodataSnapshot({
        category: load_collection(Path(data_dir) / filename)
        for category, filename in files.items()
    })

    logger.info("Geodata snapshot loaded", data_dir=str(data_dir), sources=repr(snapshot))

    return snapshot
