from __future__ import annotations

from urllib.parse import quote
import logging
import math

import requests

from .errors import FetchFailed, ParseFailed
from .models import ForecastDay, WeatherSnapshot

logger = logging.getLogger(__name__)

WTTR_BASE_URL = "https://wttr.in"
DEFAULT_USER_AGENT = "weatherwidget/0.1.0"

def _number(value, field: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ParseFailed(f"Malformed weather response: {field}={value!r}") from None
    if not math.isfinite(number):
        raise ParseFailed(f"Malformed weather response: {field}={value!r}")
    return number

def _first(seq, field: str) -> dict:
    if not isinstance(seq, list) or not seq or not isinstance(seq[0], dict):
        raise ParseFailed(f"Malformed weather response: missing {field}")
    return seq[0]

def parse_snapshot(city: str, payload: dict) -> WeatherSnapshot:
    """Build a WeatherSnapshot from a ``format=j1`` payload.

    Every forecast day is kept in API order; the view shows the first few.
    """
    if not isinstance(payload, dict):
        raise ParseFailed("Malformed weather response: expected an object")

    current = _first(payload.get("current_condition"), "current_condition")
    desc = current.get("weatherDesc")
    description = ""
    if isinstance(desc, list) and desc and isinstance(desc[0], dict):
        description = str(desc[0].get("value", ""))

    weather = payload.get("weather")
    if weather is None:
        weather = []
    if not isinstance(weather, list):
        raise ParseFailed("Malformed weather response: weather")

    days = []
    for day in weather:
        if not isinstance(day, dict):
            raise ParseFailed("Malformed weather response: forecast day is not an object")
        astronomy = day.get("astronomy")
        sunrise = None
        if isinstance(astronomy, list) and astronomy and isinstance(astronomy[0], dict):
            raw_sunrise = astronomy[0].get("sunrise")
            sunrise = str(raw_sunrise) if raw_sunrise is not None else None
        days.append(ForecastDay(
            date=str(day.get("date", "")),
            avg_temp_c=_number(day.get("avgtempC"), "avgtempC"),
            sunrise=sunrise,
        ))

    return WeatherSnapshot(
        city=city,
        temp_c=_number(current.get("temp_C"), "temp_C"),
        humidity=str(current.get("humidity", "")),
        description=description,
        forecast=tuple(days),
    )

class WttrClient:
    def __init__(
        self,
        base_url: str = WTTR_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout

    def get_weather(self, city: str) -> WeatherSnapshot:
        """Fetch and parse weather for ``city``. No retries."""
        url = f"{self.base_url}/{quote(city, safe='')}"
        try:
            resp = requests.get(
                url,
                params={"format": "j1"},
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise FetchFailed(str(e)) from e
        if not resp.ok:
            logger.warning("wttr.in %s returned %d", url, resp.status_code)
            raise FetchFailed("Failed to fetch", status_code=resp.status_code)
        try:
            payload = resp.json()
        except ValueError as e:
            raise ParseFailed(f"Malformed weather response: {e}") from e
        return parse_snapshot(city, payload)
