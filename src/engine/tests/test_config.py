"""Tests for configuration loading."""

from pathlib import Path

import pytest

from crisismap.config import Config, get_config, reload_config

ENV_VARS = [
    "CRISISMAP_RADIUS_KM",
    "CRISISMAP_LOCALE",
    "CRISISMAP_MAX_LISTED_POINTS",
    "CRISISMAP_DATA_DIR",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    """Tests for Config.load."""

    def test_defaults(self):
        config = Config.load()

        assert config.proximity.radius_km == 3.0
        assert config.proximity.locale == "en"
        assert config.proximity.max_listed_points == 5
        assert config.geodata.data_dir == Path("data")
        assert config.geodata.files["sites"] == "missile-bases.geojson"

    def test_yaml_overrides(self, tmp_path):
        (tmp_path / "proximity.yaml").write_text(
            "proximity:\n"
            "  radius_km: 5\n"
            "  locale: fa\n"
            "geodata:\n"
            "  data_dir: /srv/geojson\n"
            "  files:\n"
            "    evac: evac-area-jun-16.geojson\n",
            encoding="utf-8",
        )
        config = Config.load(tmp_path)

        assert config.proximity.radius_km == 5.0
        assert config.proximity.locale == "fa"
        assert config.geodata.data_dir == Path("/srv/geojson")
        assert config.geodata.files["evac"] == "evac-area-jun-16.geojson"
        assert config.geodata.files["strikes"] == "strikes.geojson"

    def test_empty_yaml_keeps_defaults(self, tmp_path):
        (tmp_path / "proximity.yaml").write_text("", encoding="utf-8")
        assert Config.load(tmp_path).proximity.radius_km == 3.0

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        (tmp_path / "proximity.yaml").write_text("proximity:\n  radius_km: 5\n", encoding="utf-8")
        monkeypatch.setenv("CRISISMAP_RADIUS_KM", "1.5")
        monkeypatch.setenv("CRISISMAP_MAX_LISTED_POINTS", "10")
        monkeypatch.setenv("CRISISMAP_DATA_DIR", str(tmp_path))

        config = Config.load(tmp_path)

        assert config.proximity.radius_km == 1.5
        assert config.proximity.max_listed_points == 10
        assert config.geodata.data_dir == tmp_path

    def test_default_instances_do_not_share_files(self):
        a = Config()
        a.geodata.files["strikes"] = "changed.geojson"
        assert Config().geodata.files["strikes"] == "strikes.geojson"

    def test_reload_replaces_global(self, tmp_path):
        (tmp_path / "proximity.yaml").write_text("proximity:\n  locale: fa\n", encoding="utf-8")

        assert reload_config(tmp_path).proximity.locale == "fa"
        assert get_config().proximity.locale == "fa"

        reload_config()
        assert get_config().proximity.locale == "en"
