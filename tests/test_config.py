"""Tests for config loading and typed accessors."""

from pathlib import Path

import pytest
import yaml

from weatherwidget.config import Config, load_config
from weatherwidget.models import Unit


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    data = {
        "default_city": "Vienna",
        "unit": "f",
        "storage": {"path": str(tmp_path / "store.json")},
        "geocoding": {"api_key": "${WW_TEST_KEY}"},
        "location": {"provider": "ZIP", "zip_code": "10001"},
        "resolution": "1024x600",
        "renderer": {"kind": "pillow"},
    }
    p = tmp_path / "config.yaml"
    p.write_text(yaml.dump(data), encoding="utf-8")
    return p


class TestLoadConfig:
    def test_values(self, config_yaml_path: Path, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("WW_TEST_KEY", "abc123")
        cfg = load_config(config_yaml_path)
        assert cfg.default_city == "Vienna"
        assert cfg.unit is Unit.FAHRENHEIT
        assert cfg.storage_path == tmp_path / "store.json"
        assert cfg.geocoding_api_key == "abc123"
        assert cfg.location["provider"] == "zip"
        assert cfg.resolution == (1024, 600)
        assert cfg.renderer_kind == "pillow"

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        cfg = load_config(tmp_path / "absent.yaml")
        assert cfg.raw == {}
        assert cfg.default_city == "London"

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        p = tmp_path / "config.yaml"
        p.write_text("", encoding="utf-8")
        assert load_config(p).raw == {}

    def test_non_mapping(self, tmp_path: Path):
        p = tmp_path / "config.yaml"
        p.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(p)


class TestDefaults:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
        cfg = Config()
        assert cfg.default_city == "London"
        assert cfg.unit is Unit.CELSIUS
        assert cfg.http_timeout == 10.0
        assert cfg.weather_base_url == "https://wttr.in"
        assert cfg.geocoding_base_url == "https://api.openweathermap.org"
        assert cfg.geocoding_api_key == ""
        assert cfg.location == {"provider": "none"}
        assert cfg.renderer_kind == "text"
        assert cfg.resolution == (800, 480)
        assert cfg.storage_path.name == "storage.json"

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("OPENWEATHER_API_KEY", "env-key")
        assert Config().geocoding_api_key == "env-key"

    def test_unexpanded_placeholder_falls_back_to_environment(self, monkeypatch):
        monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
        cfg = Config(raw={"geocoding": {"api_key": "${OPENWEATHER_API_KEY}"}})
        assert cfg.geocoding_api_key == ""

    def test_placeholder_expanded_from_environment(self, monkeypatch):
        monkeypatch.setenv("OPENWEATHER_API_KEY", "env-key")
        cfg = Config(raw={"geocoding": {"api_key": "${OPENWEATHER_API_KEY}"}})
        assert cfg.geocoding_api_key == "env-key"

    def test_unset_custom_placeholder_uses_default_variable(self, monkeypatch):
        monkeypatch.delenv("WW_UNSET_KEY", raising=False)
        monkeypatch.setenv("OPENWEATHER_API_KEY", "env-key")
        cfg = Config(raw={"geocoding": {"api_key": "$WW_UNSET_KEY"}})
        assert cfg.geocoding_api_key == "env-key"

    def test_blank_default_city(self):
        assert Config(raw={"default_city": "  "}).default_city == "London"


class TestValidation:
    def test_bad_unit(self):
        with pytest.raises(ValueError, match="unit"):
            _ = Config(raw={"unit": "K"}).unit

    def test_bad_resolution(self):
        with pytest.raises(ValueError, match="resolution"):
            _ = Config(raw={"resolution": "640x480"}).resolution

    def test_bad_provider(self):
        with pytest.raises(ValueError, match="provider"):
            _ = Config(raw={"location": {"provider": "gps"}}).location
