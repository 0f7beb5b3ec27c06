from __future__ import annotations

from .config import Config
from .geocode import ReverseGeocoder
from .location import build_locator
from .storage import CityStore
from .widgets.weather import WeatherWidget
from .wttr import WttrClient

def build_widget(cfg: Config) -> WeatherWidget:
    """Wire a WeatherWidget to the collaborators named in ``cfg``."""
    timeout = cfg.http_timeout
    return WeatherWidget(
        client=WttrClient(base_url=cfg.weather_base_url, timeout=timeout),
        store=CityStore(cfg.storage_path),
        geocoder=ReverseGeocoder(
            api_key=cfg.geocoding_api_key,
            base_url=cfg.geocoding_base_url,
            timeout=timeout,
        ),
        locator=build_locator(cfg.location, timeout=timeout),
        default_city=cfg.default_city,
        unit=cfg.unit,
    )
