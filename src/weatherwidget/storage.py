from __future__ import annotations

from pathlib import Path
import json
import logging

logger = logging.getLogger(__name__)

CITY_KEY = "current_city"

class CityStore:
    """Single-key persisted "last city", kept in a small JSON file.

    The file holds a mapping of key to JSON-encoded string, so the stored
    value for ``current_city`` is e.g. ``"\\"Paris\\""``.
    """

    def __init__(self, path: Path, key: str = CITY_KEY):
        self.path = path
        self.key = key

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get_city(self) -> str | None:
        encoded = self._read_all().get(self.key)
        if not encoded:
            return None
        try:
            city = json.loads(encoded)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed %s value in %s", self.key, self.path)
            return None
        if not isinstance(city, str) or not city.strip():
            return None
        return city

    def set_city(self, city: str) -> None:
        data = self._read_all()
        data[self.key] = json.dumps(city)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
