"""Configuration management for the crisis map tools."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from crisismap.categories import LAYERS


@dataclass
class ProximityConfig:
    """Proximity warning configuration."""

    radius_km: float = 3.0
    locale: str = "en"
    max_listed_points: int = 5


@dataclass
class GeodataConfig:
    """Local GeoJSON source configuration."""

    data_dir: Path = Path("data")
    files: dict[str, str] = field(
        default_factory=lambda: {layer.category.value: layer.data_file for layer in LAYERS}
    )


@dataclass
class Config:
    """Main configuration container."""

    proximity: ProximityConfig = field(default_factory=ProximityConfig)
    geodata: GeodataConfig = field(default_factory=GeodataConfig)

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "Config":
        """Load configuration from files and environment variables."""
        # Load .env file if present
        env_file = Path(__file__).parent.parent / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        config = cls()

        if config_dir and config_dir.exists():
            proximity_file = config_dir / "proximity.yaml"
            if proximity_file.exists():
                config._load_yaml(proximity_file)

        # Override with environment variables
        config._load_from_env()

        return config

    def _load_yaml(self, path: Path) -> None:
        """Load configuration from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            if data:
                self._apply_yaml_config(data)

    def _apply_yaml_config(self, data: dict[str, Any]) -> None:
        """Apply YAML configuration data."""
        if "proximity" in data:
            prox = data["proximity"] or {}
            if "radius_km" in prox:
                self.proximity.radius_km = float(prox["radius_km"])
            if "locale" in prox:
                self.proximity.locale = str(prox["locale"])
            if "max_listed_points" in prox:
                self.proximity.max_listed_points = int(prox["max_listed_points"])

        if "geodata" in data:
            geo = data["geodata"] or {}
            if "data_dir" in geo:
                self.geodata.data_dir = Path(geo["data_dir"])
            if "files" in geo:
                self.geodata.files.update({str(k): str(v) for k, v in (geo["files"] or {}).items()})

    def _load_from_env(self) -> None:
        """Override configuration from environment variables."""
        if radius := os.getenv("CRISISMAP_RADIUS_KM"):
            self.proximity.radius_km = float(radius)
        if locale := os.getenv("CRISISMAP_LOCALE"):
            self.proximity.locale = locale
        if max_listed := os.getenv("CRISISMAP_MAX_LISTED_POINTS"):
            self.proximity.max_listed_points = int(max_listed)
        if data_dir := os.getenv("CRISISMAP_DATA_DIR"):
            self.geodata.data_dir = Path(data_dir)


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        config_dir = Path(__file__).parent.parent / "config"
        _config = Config.load(config_dir)
    return _config


def reload_config(config_dir: Path | None = None) -> Config:
    """Reload configuration (useful for testing)."""
    global _config
    _config = Config.load(config_dir)
    return _config
