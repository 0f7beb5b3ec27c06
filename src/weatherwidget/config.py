from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import os
import re
import yaml

from .models import Unit

SUPPORTED_RESOLUTIONS = {
    "800x480": (800, 480),
    "1024x600": (1024, 600),
    "1280x720": (1280, 720),
    "1920x1080": (1920, 1080),
}

LOCATION_PROVIDERS = ("none", "coords", "zip")

_UNEXPANDED = re.compile(r"\$\{?\w+\}?")

def _expand(path: str) -> str:
    return os.path.expanduser(os.path.expandvars(path))

@dataclass(frozen=True)
class Config:
    raw: dict = field(default_factory=dict)

    @property
    def default_city(self) -> str:
        return str(self.raw.get("default_city", "London")).strip() or "London"

    @property
    def unit(self) -> Unit:
        value = str(self.raw.get("unit", "C")).upper()
        try:
            return Unit(value)
        except ValueError:
            raise ValueError(f"Unsupported unit {value!r}. Supported: {[u.value for u in Unit]}") from None

    @property
    def storage_path(self) -> Path:
        out = self.raw.get("storage", {}).get("path", "~/.cache/weatherwidget/storage.json")
        return Path(_expand(out))

    @property
    def http_timeout(self) -> float:
        return float(self.raw.get("http", {}).get("timeout", 10))

    @property
    def weather_base_url(self) -> str:
        return str(self.raw.get("weather", {}).get("base_url", "https://wttr.in")).rstrip("/")

    @property
    def geocoding_base_url(self) -> str:
        return str(self.raw.get("geocoding", {}).get("base_url", "https://api.openweathermap.org")).rstrip("/")

    @property
    def geocoding_api_key(self) -> str:
        key = os.path.expandvars(str(self.raw.get("geocoding", {}).get("api_key", ""))).strip()
        if _UNEXPANDED.search(key):
            key = ""
        return key or os.environ.get("OPENWEATHER_API_KEY", "")

    @property
    def location(self) -> dict:
        lcfg = dict(self.raw.get("location", {}))
        provider = str(lcfg.get("provider", "none")).lower()
        if provider not in LOCATION_PROVIDERS:
            raise ValueError(f"Unknown location.provider {provider!r}. Supported: {list(LOCATION_PROVIDERS)}")
        lcfg["provider"] = provider
        return lcfg

    @property
    def resolution(self) -> tuple[int, int]:
        res = self.raw.get("resolution", "800x480")
        if res not in SUPPORTED_RESOLUTIONS:
            raise ValueError(f"Unsupported resolution {res!r}. Supported: {list(SUPPORTED_RESOLUTIONS)}")
        return SUPPORTED_RESOLUTIONS[res]

    @property
    def columns(self) -> int:
        return int(self.raw.get("columns", 4))

    @property
    def output_path(self) -> Path:
        out = self.raw.get("output", {}).get("path", "~/.cache/weatherwidget/weather.png")
        return Path(_expand(out))

    @property
    def renderer_kind(self) -> str:
        return str(self.raw.get("renderer", {}).get("kind", "text"))

    @property
    def theme(self) -> dict:
        return dict(self.raw.get("theme", {}))

    @property
    def web_renderer(self) -> dict:
        return dict(self.raw.get("web_renderer", {}))

def load_config(path: str | Path) -> Config:
    p = Path(_expand(str(path)))
    if not p.exists():
        return Config(raw={})
    raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    if raw is None:
        return Config(raw={})
    if not isinstance(raw, dict):
        raise ValueError("config.yaml must contain a YAML mapping at top level.")
    return Config(raw=raw)
