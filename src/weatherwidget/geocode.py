from __future__ import annotations

import logging

import requests

from .errors import GeocodeEmpty, GeocodeFailed

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"

class ReverseGeocoder:
    """OpenWeatherMap reverse geocoding: coordinates to a city name."""

    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = 10.0,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def city_for(self, latitude: float, longitude: float) -> str:
        """Return the first candidate's name for the given coordinates.

        The response body is inspected whatever the status code: an error
        payload (e.g. a dict for a bad key) counts as "nothing usable" and
        raises GeocodeEmpty. Transport errors and undecodable bodies raise
        GeocodeFailed; their messages never carry the request URL, which
        holds the API key.
        """
        params = {"lat": latitude, "lon": longitude, "appid": self.api_key}
        try:
            resp = requests.get(
                f"{self.base_url}/geo/1.0/reverse", params=params, timeout=self.timeout
            )
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise GeocodeFailed(f"Reverse geocoding failed: {type(e).__name__}") from e
        if isinstance(data, list) and data and isinstance(data[0], dict):
            name = str(data[0].get("name") or "").strip()
            if name:
                return name
        logger.warning(
            "Reverse geocoding %.4f,%.4f returned no usable city (HTTP %d)",
            latitude, longitude, resp.status_code,
        )
        raise GeocodeEmpty("Could not detect city from location.")
