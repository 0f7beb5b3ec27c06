from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
import logging

import requests

from .errors import LocationDenied

logger = logging.getLogger(__name__)

ZIPPOPOTAM_URL = "https://api.zippopotam.us/us"

@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

class Locator(Protocol):
    def current_position(self) -> Coordinates:
        ...

class StaticLocator:
    """Fixed coordinates taken from configuration."""

    def __init__(self, latitude: float, longitude: float, allow: bool = True):
        self.coords = Coordinates(float(latitude), float(longitude))
        self.allow = allow

    def current_position(self) -> Coordinates:
        if not self.allow:
            raise LocationDenied("location access blocked by configuration")
        return self.coords

class ZipLocator:
    """US ZIP code to coordinates via zippopotam.us (no key needed)."""

    def __init__(self, zip_code: str, allow: bool = True, timeout: float = 8):
        self.zip_code = zip_code
        self.allow = allow
        self.timeout = timeout

    def current_position(self) -> Coordinates:
        if not self.allow:
            raise LocationDenied("location access blocked by configuration")
        logger.debug("Resolving ZIP %s to coordinates", self.zip_code)
        try:
            r = requests.get(f"{ZIPPOPOTAM_URL}/{self.zip_code}", timeout=self.timeout)
            r.raise_for_status()
            js = r.json()
            place = js["places"][0]
            return Coordinates(float(place["latitude"]), float(place["longitude"]))
        except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as e:
            raise LocationDenied(f"could not resolve ZIP {self.zip_code}: {e}") from e

def build_locator(lcfg: dict, timeout: float = 8) -> Locator | None:
    """Return the configured location capability, or None when there is none."""
    provider = str(lcfg.get("provider", "none")).lower()
    allow = bool(lcfg.get("allow", True))
    if provider == "coords":
        if lcfg.get("latitude") is None or lcfg.get("longitude") is None:
            raise ValueError("location.provider is 'coords' but latitude/longitude are missing")
        return StaticLocator(lcfg["latitude"], lcfg["longitude"], allow=allow)
    if provider == "zip":
        zip_code = str(lcfg.get("zip_code", "")).strip()
        if not zip_code:
            raise ValueError("location.provider is 'zip' but location.zip_code is not set")
        return ZipLocator(zip_code, allow=allow, timeout=timeout)
    if provider == "none":
        return None
    raise ValueError(f"Unknown location.provider: {provider}")
