from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
import logging

from ..errors import GeocodeEmpty, GeocodeFailed, LocationDenied, LocationUnavailable, WeatherWidgetError
from ..geocode import ReverseGeocoder
from ..location import Coordinates, Locator
from ..models import Permission, Unit, WeatherSnapshot, format_temp
from ..storage import CityStore
from .base import Card, WidgetView

logger = logging.getLogger(__name__)

HEADING = "Weather Dashboard"
CAPABILITY_MISSING = "Location detection is not available. Please enter city manually."
LOCATION_BLOCKED = (
    "Location is blocked. Please enable location access in your settings "
    "to detect automatically."
)
GEOCODE_EMPTY = "Could not detect city from location."

class WeatherSource(Protocol):
    def get_weather(self, city: str) -> WeatherSnapshot:
        ...

@dataclass
class WidgetState:
    city: str = ""
    snapshot: WeatherSnapshot | None = None
    loading: bool = False
    error: str | None = None
    error_kind: str | None = None
    unit: Unit = Unit.CELSIUS
    permission: Permission = Permission.UNKNOWN
    requesting_location: bool = False

    @property
    def primary(self) -> str:
        """What the user mainly sees right now."""
        if self.loading:
            return "loading"
        if self.error:
            return "error"
        if self.snapshot is not None:
            return "snapshot"
        return "empty"

class WeatherWidget:
    """City weather lookup with a unit toggle and optional location detection.

    Each public method is the handler for one UI event. Handlers never
    raise for collaborator failures; they record a message in
    ``state.error`` instead. Changing the search city schedules a fetch
    that runs on the next ``flush_effects()``.
    """

    def __init__(
        self,
        client: WeatherSource,
        store: CityStore,
        geocoder: ReverseGeocoder | None = None,
        locator: Locator | None = None,
        default_city: str = "London",
        unit: Unit = Unit.CELSIUS,
    ):
        self.client = client
        self.store = store
        self.geocoder = geocoder
        self.locator = locator
        self.default_city = default_city
        self.state = WidgetState(unit=unit)
        self._seq = 0
        self._city_changed = False

    # -- state helpers

    def _set_city(self, city: str) -> None:
        if city == self.state.city:
            return
        self.state.city = city
        self._city_changed = bool(city.strip())

    def _fail(self, exc: Exception) -> None:
        self.state.error = str(exc)
        self.state.error_kind = type(exc).__name__

    def _clear_error(self) -> None:
        self.state.error = None
        self.state.error_kind = None

    def _fall_back(self, exc: Exception) -> None:
        self.state.permission = Permission.DENIED
        self._fail(exc)
        self._set_city(self.default_city)

    # -- handlers

    def initialize(self) -> None:
        stored = self.store.get_city()
        if stored:
            self.state.permission = Permission.GRANTED
            self._set_city(stored)
        elif self.locator is not None:
            self.request_location()
        else:
            self._fall_back(LocationUnavailable(CAPABILITY_MISSING))

    @property
    def can_request_location(self) -> bool:
        return not self.state.requesting_location

    def request_location(self) -> bool:
        """Detect the city from the current position.

        Returns False when refused because a request is already pending.
        """
        if self.state.requesting_location:
            logger.debug("Location request already pending, ignoring")
            return False
        if self.locator is None:
            self._fall_back(LocationUnavailable(CAPABILITY_MISSING))
            return True

        self.state.requesting_location = True
        try:
            try:
                coords = self.locator.current_position()
            except LocationDenied as e:
                logger.warning("Location request failed: %s", e)
                self._fall_back(LocationDenied(LOCATION_BLOCKED))
                return True
            self._resolve_city(coords)
        finally:
            self.state.requesting_location = False
        return True

    def _resolve_city(self, coords: Coordinates) -> None:
        try:
            if self.geocoder is None:
                raise GeocodeEmpty(GEOCODE_EMPTY)
            name = self.geocoder.city_for(coords.latitude, coords.longitude)
        except GeocodeEmpty as e:
            self._fall_back(e)
            return
        except GeocodeFailed as e:
            logger.warning("%s", e)
            self._fall_back(e)
            return

        self._set_city(name)
        self._clear_error()
        self.state.permission = Permission.GRANTED
        try:
            self.store.set_city(name)
        except OSError as e:
            logger.warning("Could not persist city %r: %s", name, e)

    def fetch_weather(self, city: str | None = None) -> bool:
        """Fetch weather for ``city`` (default: the search city).

        Only the most recently started fetch may touch the state; an
        older one finishing late is dropped. A failure keeps the previous
        snapshot on display.
        """
        city = (self.state.city if city is None else city).strip()
        if not city:
            return False

        self._seq += 1
        seq = self._seq
        self._clear_error()
        self.state.loading = True
        try:
            snapshot = self.client.get_weather(city)
        except WeatherWidgetError as e:
            if seq != self._seq:
                logger.debug("Dropping failed response for %r, superseded", city)
                return False
            logger.warning("Weather fetch for %r failed: %s", city, e)
            self._fail(e)
            return False
        finally:
            if seq == self._seq:
                self.state.loading = False

        if seq != self._seq:
            logger.debug("Dropping response for %r, superseded", city)
            return False
        self.state.snapshot = snapshot
        return True

    def update_search_text(self, text: str) -> None:
        self._set_city(text)

    def manual_submit(self, text: str | None = None) -> bool:
        if self.state.requesting_location:
            return False
        if text is not None:
            self.state.city = text
        self._city_changed = False
        return self.fetch_weather(self.state.city)

    def toggle_unit(self) -> Unit:
        self.state.unit = self.state.unit.other
        return self.state.unit

    def flush_effects(self) -> int:
        """Run fetches scheduled by search-city changes. Returns how many ran."""
        ran = 0
        while self._city_changed:
            self._city_changed = False
            self.fetch_weather(self.state.city)
            ran += 1
        return ran

    # -- presentation

    def location_label(self) -> str:
        requesting = self.state.requesting_location
        if self.state.permission is Permission.GRANTED:
            return "Updating..." if requesting else "Update location"
        return "Detecting..." if requesting else "Detect my location"

    def view(self) -> WidgetView:
        st = self.state
        current = None
        forecast: list[Card] = []
        snap = st.snapshot
        if snap is not None:
            current = Card(
                title=f"Current in {snap.city}",
                lines=[
                    f"Temperature: {format_temp(snap.temp_c, st.unit)}",
                    f"Humidity: {snap.humidity}%",
                    f"Desc: {snap.description}",
                ],
            )
            forecast = [
                Card(
                    title=day.date,
                    lines=[
                        f"Avg Temp: {format_temp(day.avg_temp_c, st.unit)}",
                        f"Sunrise: {day.sunrise or 'n/a'}",
                    ],
                )
                for day in snap.upcoming
            ]
        return WidgetView(
            heading=HEADING,
            search_text=st.city,
            location_label=self.location_label(),
            controls_disabled=st.requesting_location,
            unit_label=f"Switch to °{st.unit.other.value}",
            loading=st.loading,
            error=st.error,
            current=current,
            forecast=forecast,
        )
